"""Family trees: people, families, SQLite and JSON storage, layout and a command line."""

__version__ = "0.1.0"