"""Errors raised to callers of the clear signing library."""


class ClearSigningError(Exception):
    """Base class for all library errors."""


class DescriptorUnavailableError(ClearSigningError):
    """An ERC-7730 descriptor could not be fetched, read or parsed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load ERC-7730 descriptor from {source}: {reason}")


class CalldataDecodingError(ClearSigningError):
    """Calldata is malformed or does not match the contract ABI."""
