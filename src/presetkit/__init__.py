"""Named property presets for pluggable components."""

__version__ = "0.3.0"
