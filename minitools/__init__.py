"""Small command-line tools: a version store, an interactive shell and a laundry simulation."""

__version__ = "0.1.0"