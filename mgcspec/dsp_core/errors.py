"""
Exceptions raised by the cepstrum and spectrum routines.

Everything derives from ValueError, so callers that already guard against
bad arguments keep working.
"""


class MGCError(ValueError):
    """Base class for mel-generalized cepstrum errors."""


class InvalidFFTLengthError(MGCError):
    """FFT length is not a power of two of the required minimum size."""

    def __init__(self, length: int, minimum: int = 4):
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"FFT length must be a power of 2 >= {minimum}, got {length}"
        )


class ContractViolationError(MGCError):
    """Caller supplied an order, vector or parameter outside the contract."""


class GainDomainError(ContractViolationError):
    """Gain term cannot be (de)normalized for the given gamma."""
