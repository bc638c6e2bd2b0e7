"""express-scaffold: generate an Express + MongoDB backend skeleton."""

__version__ = "1.0.0"
