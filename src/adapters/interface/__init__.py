"""User-facing adapters for payment entry."""

__all__ = []
