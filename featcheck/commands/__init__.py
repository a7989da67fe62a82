"""featcheck CLI commands."""
