"""General game playing gamer: state machines, match records and players."""

__version__ = "0.1.0"
