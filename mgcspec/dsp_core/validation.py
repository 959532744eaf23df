"""
Argument checks shared by the public cepstrum and spectrum functions.

Only the calling contract is checked (shapes, orders, parameter ranges).
Coefficient values themselves are trusted.
"""

from typing import Optional

import numpy as np

from .errors import ContractViolationError, InvalidFFTLengthError


def as_cepstrum(c, name: str = 'c') -> np.ndarray:
    """Convert to a contiguous 1-D float64 array of length order+1."""
    arr = np.ascontiguousarray(c, dtype=np.float64)
    if arr.ndim != 1:
        raise ContractViolationError(f"{name} must be 1-D, got shape {arr.shape}")
    if arr.size == 0:
        raise ContractViolationError(f"{name} must hold at least one coefficient")
    return arr


def check_order(order, name: str = 'order') -> int:
    if isinstance(order, (bool, np.bool_)) or not isinstance(order, (int, np.integer)):
        raise ContractViolationError(f"{name} must be an integer, got {order!r}")
    if order < 0:
        raise ContractViolationError(f"{name} must be non-negative, got {order}")
    return int(order)


def check_alpha(alpha: float, name: str = 'alpha') -> float:
    alpha = float(alpha)
    if not -1.0 < alpha < 1.0:
        raise ContractViolationError(f"{name} must lie in (-1, 1), got {alpha}")
    return alpha


def check_gamma(gamma: float, name: str = 'gamma') -> float:
    """MGC family range: -1 <= gamma <= 0."""
    gamma = float(gamma)
    if not -1.0 <= gamma <= 0.0:
        raise ContractViolationError(f"{name} must lie in [-1, 0], got {gamma}")
    return gamma


def check_fft_length(n, minimum: int = 4) -> int:
    """Accept powers of two >= minimum, raise InvalidFFTLengthError otherwise."""
    if isinstance(n, (bool, np.bool_)) or not isinstance(n, (int, np.integer)):
        raise InvalidFFTLengthError(n, minimum)
    n = int(n)
    if n < minimum or n & (n - 1) != 0:
        raise InvalidFFTLengthError(n, minimum)
    return n


def check_out(out: Optional[np.ndarray], size: int, name: str = 'out') -> np.ndarray:
    """Allocate the result array, or check a caller-supplied one."""
    if out is None:
        return np.zeros(size, dtype=np.float64)
    if not isinstance(out, np.ndarray) or out.dtype != np.float64:
        raise ContractViolationError(f"{name} must be a float64 ndarray")
    if out.shape != (size,):
        raise ContractViolationError(
            f"{name} must have shape ({size},), got {out.shape}"
        )
    if not out.flags.c_contiguous or not out.flags.writeable:
        raise ContractViolationError(f"{name} must be contiguous and writeable")
    return out
