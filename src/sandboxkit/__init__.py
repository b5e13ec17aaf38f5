"""sandboxkit - build details stamping and sandbox prerequisite checks."""

__version__ = "0.1.0"
