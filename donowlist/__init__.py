"""Find ready items and group their urgent actions into a prioritised do-now list."""

__version__ = "0.1.0"