"""
Gain normalization of generalized cepstra.

normalize_gain maps c[0] to the gain K = (1 + g c0)^(1/g) and divides the
remaining coefficients by 1 + g c0; denormalize_gain is its exact inverse.
gamma = 0 is the logarithmic limit (K = exp(c0)) and is handled as its own
branch rather than through the power formula.
"""

import math
from typing import Optional

import numpy as np

from .errors import GainDomainError
from .validation import as_cepstrum, check_out


def _gain(func, *args) -> float:
    try:
        return func(*args)
    except OverflowError:
        raise GainDomainError(f"Gain overflows float64: {func.__name__}{args}") from None


def normalize_gain(c: np.ndarray, g: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Normalize a generalized cepstrum under exponent g.

    Args:
        c: Generalized cepstrum c[0..m]
        g: Generalization exponent
        out: Destination of the same length; may be `c` itself

    Returns:
        Normalized cepstrum with the gain in element 0

    Raises:
        GainDomainError: if g != 0 and 1 + g*c[0] <= 0, or the gain
            overflows float64
    """
    c1 = as_cepstrum(c)
    out = check_out(out, len(c1))
    g = float(g)

    # gain first: nothing is written to out if it cannot be represented
    if g != 0.0:
        k = 1.0 + g * c1[0]
        if k <= 0.0:
            raise GainDomainError(f"1 + g*c0 must be positive, got {k} (g={g})")
        gain = _gain(math.pow, k, 1.0 / g)
        out[1:] = c1[1:] / k
    else:
        gain = _gain(math.exp, c1[0])
        out[1:] = c1[1:]
    out[0] = gain

    return out


def denormalize_gain(c: np.ndarray, g: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Undo normalize_gain for exponent g.

    Raises:
        GainDomainError: if the gain c[0] is not positive, or c[0]**g
            overflows float64
    """
    c1 = as_cepstrum(c)
    out = check_out(out, len(c1))
    g = float(g)

    if c1[0] <= 0.0:
        raise GainDomainError(f"Gain must be positive, got {c1[0]}")

    k = _gain(math.pow, c1[0], g)
    if g != 0.0:
        c0 = (k - 1.0) / g
        out[1:] = k * c1[1:]
    else:
        c0 = math.log(c1[0])
        out[1:] = c1[1:]
    out[0] = c0

    return out
