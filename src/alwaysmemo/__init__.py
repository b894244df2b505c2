"""Always Memo — durable local storage for a single memo and its images."""

__version__ = "0.1.0"
