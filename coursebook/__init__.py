"""Course structure, schedules, preprocessing and exercise extraction for Markdown course books."""

__version__ = "0.1.0"