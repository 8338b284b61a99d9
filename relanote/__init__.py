"""Type checking and module resolution for the relanote music language."""

__version__ = "0.1.0"

__all__ = ["checker", "context", "errors", "inference", "resolver", "syntax", "types"]