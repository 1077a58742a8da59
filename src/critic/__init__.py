"""critic - dead simple testing framework for bash with statement coverage."""

__version__ = "0.1.0"
