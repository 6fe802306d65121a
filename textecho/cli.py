"""CLI entry point for textecho."""

from __future__ import annotations

import asyncio
import json
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, TextIO

import click

from textecho import __version__
from textecho.analytics.tracker import AnalyticsSink, LoggingAnalyticsSink, NullAnalyticsSink
from textecho.config.settings import TextEchoConfig, load_config
from textecho.models import ErrorKind, ValidationOutcome
from textecho.resources.strings import TextResources
from textecho.session.machine import SessionMachine
from textecho.session.states import SessionState, SessionStatus
from textecho.utils.logging import configure_logging, get_logger
from textecho.utils.result import ExitCode
from textecho.validator.orchestrator import build_orchestrator
from textecho.validator.rules import RuleEngine

# Default paths
DEFAULT_CONFIG = "./config"

RULE_KINDS = {ErrorKind.EMPTY_INPUT, ErrorKind.TOO_SHORT}

SCRIPT_COMMANDS = {"type", "submit", "wait", "sleep", "clear", "reset"}


class Context:
    """CLI context for sharing state between commands."""

    def __init__(
        self,
        config_dir: Path,
        config: TextEchoConfig,
        resources: TextResources,
    ) -> None:
        self.config_dir = config_dir
        self.config = config
        self.resources = resources
        self.logger = get_logger("cli")

    def build_analytics(self) -> AnalyticsSink:
        """Create the analytics sink configured for this run."""
        if not self.config.analytics.enabled:
            return NullAnalyticsSink()
        return LoggingAnalyticsSink(buffer_size=self.config.analytics.buffer_size)

    def build_session(self, config: Optional[TextEchoConfig] = None) -> SessionMachine:
        """Wire a session machine from configuration."""
        config = config or self.config
        return SessionMachine(
            orchestrator=build_orchestrator(config),
            analytics=self.build_analytics(),
            config=config.session,
        )


pass_context = click.make_pass_decorator(Context)


def output_json(data: dict) -> None:
    """Output JSON to stdout."""
    click.echo(json.dumps(data, indent=2, default=str))


def exit_code_for(state: SessionState) -> int:
    """Map a final session state to a process exit code."""
    if state.error is None:
        return ExitCode.SUCCESS
    if state.error.kind in RULE_KINDS:
        return ExitCode.RULE_FAILED
    return ExitCode.REMOTE_FAILED


def render_state(resources: TextResources, state: SessionState) -> Optional[str]:
    """Render the message shown for a state, if any."""
    outcome: Optional[ValidationOutcome] = None
    if state.status == SessionStatus.ERROR:
        outcome = state.error
    if outcome is None:
        return state.output_text or None
    return resources.render(outcome)


@click.group()
@click.option(
    "--config",
    type=click.Path(exists=False, path_type=Path),
    default=DEFAULT_CONFIG,
    help="Path to config directory",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warn", "error"], case_sensitive=False),
    default=None,
    help="Logging level (overrides config)",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "text"], case_sensitive=False),
    default=None,
    help="Log format (overrides config)",
)
@click.version_option(version=__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path,
    log_level: Optional[str],
    log_format: Optional[str],
) -> None:
    """
    textecho - validate text against a simulated remote service.

    Runs the local business rules, then a latency-injecting backend that
    may reject the input, and reports the resulting session state.
    """
    result = load_config(config)
    if result.is_err():
        error = result.unwrap_err()
        configure_logging(level=log_level or "info", format_type=log_format or "json")
        get_logger("cli").error("config_invalid", field=error.field, message=error.message)
        output_json({
            "status": "error",
            "message": str(error),
        })
        sys.exit(ExitCode.CONFIG_INVALID)

    app_config = result.unwrap()
    configure_logging(
        level=log_level or app_config.logging.level,
        format_type=log_format or app_config.logging.format,
    )

    resources = TextResources()
    if app_config.resources_file:
        resources_result = TextResources.from_yaml(app_config.resources_file)
        if resources_result.is_err():
            error = resources_result.unwrap_err()
            output_json({
                "status": "error",
                "message": str(error),
            })
            sys.exit(ExitCode.CONFIG_INVALID)
        resources = resources_result.unwrap()

    ctx.obj = Context(
        config_dir=config,
        config=app_config,
        resources=resources,
    )


@cli.command()
@click.argument("text")
@pass_context
def check(ctx: Context, text: str) -> None:
    """Run only the local business rules against TEXT."""
    engine = RuleEngine(min_length=ctx.config.rules.min_length)
    result = engine.check(text)

    if result.is_ok():
        output_json({
            "status": "passed",
            "trimmed_text": result.unwrap(),
        })
        return

    error = result.unwrap_err()
    output_json({
        "status": "rejected",
        "error": error.to_dict(),
        "message": ctx.resources.render(error),
    })
    sys.exit(ExitCode.RULE_FAILED)


@cli.command()
@click.argument("text")
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for the simulated backend",
)
@click.option(
    "--rejection-probability",
    type=click.FloatRange(0.0, 1.0),
    default=None,
    help="Probability the backend rejects the input",
)
@click.option(
    "--no-delay",
    is_flag=True,
    default=False,
    help="Skip the simulated latency",
)
@pass_context
def validate(
    ctx: Context,
    text: str,
    seed: Optional[int],
    rejection_probability: Optional[float],
    no_delay: bool,
) -> None:
    """Submit TEXT through a full validation session."""
    remote = ctx.config.remote
    if seed is not None:
        remote = replace(remote, seed=seed)
    if rejection_probability is not None:
        remote = replace(remote, rejection_probability=rejection_probability)
    if no_delay:
        remote = replace(remote, min_delay_ms=0, max_delay_ms=0)

    run_config = replace(ctx.config, remote=remote)
    check_result = run_config.validate()
    if check_result.is_err():
        output_json({
            "status": "error",
            "message": str(check_result.unwrap_err()),
        })
        sys.exit(ExitCode.CONFIG_INVALID)

    async def run() -> SessionState:
        machine = ctx.build_session(run_config)
        machine.on_text_changed(text)
        await machine.on_submit()
        if isinstance(machine.analytics, LoggingAnalyticsSink):
            machine.analytics.flush()
        return machine.state

    state = asyncio.run(run())
    ctx.logger.info("validate_completed", status=state.status.name)

    output_json({
        "status": state.status.name.lower(),
        "state": state.to_dict(),
        "message": render_state(ctx.resources, state),
    })
    sys.exit(exit_code_for(state))


@dataclass
class ScriptStep:
    """One parsed line of a replay script."""

    line: int
    command: str
    argument: str = ""


def parse_script(stream: TextIO) -> list[ScriptStep]:
    """
    Parse a replay script.

    One command per line; blank lines and lines starting with '#' are
    skipped. 'type' takes the rest of the line verbatim, 'sleep' takes
    milliseconds.

    Raises:
        click.BadParameter: On an unknown command or bad argument
    """
    steps = []
    for number, raw_line in enumerate(stream, start=1):
        line = raw_line.rstrip("\n")
        if not line.strip() or line.lstrip().startswith("#"):
            continue

        command, _, argument = line.lstrip().partition(" ")
        command = command.lower()
        if command not in SCRIPT_COMMANDS:
            raise click.BadParameter(f"line {number}: unknown command '{command}'")

        if command == "sleep":
            try:
                if int(argument) < 0:
                    raise ValueError(argument)
            except ValueError:
                raise click.BadParameter(
                    f"line {number}: sleep needs a non-negative integer, got '{argument}'"
                )

        steps.append(ScriptStep(line=number, command=command, argument=argument))
    return steps


async def run_script(machine: SessionMachine, steps: list[ScriptStep]) -> list[dict]:
    """Drive a session through the script and record every state."""
    recorded: list[dict] = []
    unsubscribe = machine.subscribe(lambda state: recorded.append(state.to_dict()))

    try:
        for step in steps:
            if step.command == "type":
                machine.on_text_changed(step.argument)
            elif step.command == "submit":
                machine.on_submit()
            elif step.command == "wait":
                await machine.wait()
            elif step.command == "sleep":
                await asyncio.sleep(int(step.argument) / 1000.0)
            elif step.command == "clear":
                machine.on_clear()
            elif step.command == "reset":
                machine.on_reset()
            # Let freshly started attempts reach their first suspension point
            await asyncio.sleep(0)

        await machine.wait()
    finally:
        unsubscribe()
        await machine.aclose()

    return recorded


@cli.command()
@click.argument("script", type=click.File("r"))
@pass_context
def replay(ctx: Context, script: TextIO) -> None:
    """Replay a SCRIPT of session commands ('-' for stdin)."""
    try:
        steps = parse_script(script)
    except click.BadParameter as e:
        output_json({
            "status": "error",
            "message": f"Invalid script: {e.message}",
        })
        sys.exit(ExitCode.SCRIPT_INVALID)

    ctx.logger.info("replay_started", steps=len(steps))

    async def run() -> tuple[list[dict], SessionState]:
        machine = ctx.build_session()
        states = await run_script(machine, steps)
        if isinstance(machine.analytics, LoggingAnalyticsSink):
            machine.analytics.flush()
        return states, machine.state

    states, final = asyncio.run(run())

    output_json({
        "status": "success",
        "steps": len(steps),
        "states": states,
        "final": final.to_dict(),
        "message": render_state(ctx.resources, final),
    })


@cli.command(name="config")
@pass_context
def show_config(ctx: Context) -> None:
    """Show the effective configuration."""
    output_json({
        "config_dir": str(ctx.config_dir),
        **ctx.config.to_dict(),
    })


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        logger = get_logger("cli")
        logger.error("cli_error", error=str(e))
        sys.exit(ExitCode.GENERAL_ERROR)


if __name__ == "__main__":
    main()
