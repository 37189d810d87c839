"""ThemeComposer: percentage-based text overlay theme editing engine."""

__version__ = "0.3.0"
