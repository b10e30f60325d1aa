"""Exceptions."""


class ConfigurationError(ValueError):
    """Invalid loader configuration or channel selection."""


class OutOfBoundsRead(IndexError):
    """Requested coordinates fall outside of the array."""


class StoreError(RuntimeError):
    """Store failed to read the requested data."""
