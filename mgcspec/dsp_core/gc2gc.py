"""
Generalized cepstrum order / exponent conversion.

Converts a (normalized) generalized cepstrum of order m1 under exponent g1
into order m2 under exponent g2 with the recursion

    c2[i] = c1[i] + (1/i) * sum_{k=1}^{min(m1, i-1)} (g2*k - g1*(i-k)) c1[k] c2[i-k]

where c1[i] is taken as zero past m1. With g1 = g2 = 0 this reduces to a
truncation or zero-padding of the input.
"""

from typing import Optional

import numpy as np
from numba import jit

from .validation import as_cepstrum, check_order, check_out
from .workspace import Workspace, resolve_workspace


@jit(nopython=True, cache=True)
def _gc2gc_kernel(ca: np.ndarray, g1: float, c2: np.ndarray, g2: float):
    m1 = len(ca) - 1
    m2 = len(c2) - 1

    c2[0] = ca[0]
    for i in range(1, m2 + 1):
        ss1 = 0.0
        ss2 = 0.0
        kmax = m1 if m1 < i else i - 1
        for k in range(1, kmax + 1):
            mk = i - k
            cc = ca[k] * c2[mk]
            ss2 += k * cc
            ss1 += mk * cc

        if i <= m1:
            c2[i] = ca[i] + (g2 * ss2 - g1 * ss1) / i
        else:
            c2[i] = (g2 * ss2 - g1 * ss1) / i


def convert_generalized_cepstrum(
    source: np.ndarray,
    g1: float,
    target_order: int,
    g2: float,
    workspace: Optional[Workspace] = None,
    out: Optional[np.ndarray] = None
) -> np.ndarray:
    """
    Re-express a generalized cepstrum at order `target_order` and exponent `g2`.

    Args:
        source: Generalized cepstrum c1[0..m1] under exponent g1
        g1: Source exponent
        target_order: Output order m2
        g2: Target exponent
        workspace: Scratch cache to reuse across calls
        out: Destination of length m2+1; may be `source` itself

    Returns:
        Generalized cepstrum c2[0..m2]
    """
    c1 = as_cepstrum(source, 'source')
    m2 = check_order(target_order, 'target_order')
    ws = resolve_workspace(workspace)
    out = check_out(out, m2 + 1)

    # private copy: the recursion reads c1 while writing out
    ca = ws.scratch('gc2gc.source', len(c1))
    ca[:] = c1
    _gc2gc_kernel(ca, float(g1), out, float(g2))
    return out
