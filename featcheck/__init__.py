"""featcheck - hidden Cargo feature detection for multi-crate source trees."""

__version__ = "0.3.0"
