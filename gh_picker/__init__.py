"""Interactive GitHub issue, pull request and notification pickers."""

__version__ = "0.1.0"
