"""PopView: Flet greeting screen plus the LogCat logging utility."""

__version__ = "0.1.0"
