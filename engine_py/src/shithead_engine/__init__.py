"""Rule engine and session orchestration for the Shithead card game."""

__version__ = "1.0.0"
