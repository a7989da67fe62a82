"""Centralized exit codes for the featcheck CLI."""


class ExitCodes:
    """Standard exit codes for featcheck commands."""

    SUCCESS = 0

    HIDDEN_FEATURES = 1

    RUN_FAILED = 2
