"""Training platform backend: accounts, bearer tokens and course progress."""

__version__ = "0.1.0"
