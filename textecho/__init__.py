"""textecho - asynchronous text validation with an observable session state."""

__version__ = "0.1.0"
