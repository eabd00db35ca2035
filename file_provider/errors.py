"""
File provider errors.

Filesystem failures are not wrapped: ``OSError`` and its subclasses
propagate to the caller exactly as the OS reported them.
"""


class FileProviderError(Exception):
    """Base exception for all file provider errors."""
    pass


class PreconditionFailedError(FileProviderError):
    """Target path already exists and force is not set."""
    pass


class ShortWriteError(FileProviderError):
    """Fewer bytes were written than the content holds."""

    def __init__(self, written: int, expected: int):
        self.written = written
        self.expected = expected
        super().__init__(f"wrote {written}/{expected} bytes")


class ValidationFailedError(FileProviderError):
    """Inputs did not pass Check."""

    def __init__(self, failures):
        self.failures = list(failures)
        reasons = "; ".join(f"{f.property}: {f.reason}" for f in self.failures)
        super().__init__(f"invalid inputs: {reasons}")


class UnknownResourceError(FileProviderError):
    """No resource is registered under the requested token."""
    pass


class StateStoreError(FileProviderError):
    """Errors reading or writing the local state file."""
    pass


class ConfigurationError(FileProviderError):
    """Errors in configuration."""
    pass
