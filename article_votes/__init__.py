"""Article Votes - Reddit-style article voting and ranking over a key-value store."""

__version__ = "0.1.0"
