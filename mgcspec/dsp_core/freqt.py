"""
Frequency Warping of Cepstral Sequences

Re-expands a minimum-phase cepstral sequence after the all-pass (bilinear)
substitution of z^-1 by (z^-1 + a) / (1 + a z^-1). Warping with `a` and
then with `-a` returns the original sequence.

Two recurrences are provided:
    - frequency_warp: the full transform (with the (1 - a^2) term at index 1)
    - frequency_warp_unscaled: the coefficient-calculation variant, without
      that term, used ahead of a separate gain normalization
"""

import logging
from typing import Optional

import numpy as np
from numba import jit

from .validation import as_cepstrum, check_order, check_alpha, check_out
from .workspace import Workspace, resolve_workspace

logger = logging.getLogger(__name__)


@jit(nopython=True, cache=True)
def _freqt_kernel(c1: np.ndarray, m2: int, a: float, d: np.ndarray, g: np.ndarray):
    m1 = len(c1) - 1
    b = 1.0 - a * a
    g[:m2 + 1] = 0.0

    for i in range(m1, -1, -1):
        d[0] = g[0]
        g[0] = c1[i] + a * d[0]
        if m2 >= 1:
            d[1] = g[1]
            g[1] = b * d[0] + a * d[1]
        for j in range(2, m2 + 1):
            d[j] = g[j]
            g[j] = d[j - 1] + a * (d[j] - g[j - 1])


@jit(nopython=True, cache=True)
def _frqtr_kernel(c1: np.ndarray, m2: int, a: float, d: np.ndarray, g: np.ndarray):
    m1 = len(c1) - 1
    g[:m2 + 1] = 0.0

    for i in range(m1, -1, -1):
        d[0] = g[0]
        g[0] = c1[i]
        for j in range(1, m2 + 1):
            d[j] = g[j]
            g[j] = d[j - 1] + a * (d[j] - g[j - 1])


def _warp(kernel, source, target_order, alpha, workspace, out):
    c1 = as_cepstrum(source, 'source')
    m2 = check_order(target_order, 'target_order')
    a = check_alpha(alpha)
    ws = resolve_workspace(workspace)
    out = check_out(out, m2 + 1)

    d = ws.scratch('freqt.d', m2 + 1)
    g = ws.scratch('freqt.g', m2 + 1)
    kernel(c1, m2, a, d, g)

    # c1 is fully consumed before this point, so out may alias source
    out[:] = g
    return out


def frequency_warp(
    source: np.ndarray,
    target_order: int,
    alpha: float,
    workspace: Optional[Workspace] = None,
    out: Optional[np.ndarray] = None
) -> np.ndarray:
    """
    Warp a cepstrum to order `target_order` with all-pass constant `alpha`.

    Parameters
    ----------
    source : np.ndarray
        Cepstrum c[0..m1]
    target_order : int
        Order m2 of the warped sequence
    alpha : float
        All-pass constant, |alpha| < 1
    workspace : Workspace, optional
        Scratch cache to reuse across calls
    out : np.ndarray, optional
        Destination of length m2+1; may be `source` itself

    Returns
    -------
    np.ndarray
        Warped cepstrum c'[0..m2]

    Examples
    --------
    >>> frequency_warp([0.0, 1.0], 3, 0.5)
    array([ 0.5   ,  0.75  , -0.375 ,  0.1875])
    """
    return _warp(_freqt_kernel, source, target_order, alpha, workspace, out)


def frequency_warp_unscaled(
    source: np.ndarray,
    target_order: int,
    alpha: float,
    workspace: Optional[Workspace] = None,
    out: Optional[np.ndarray] = None
) -> np.ndarray:
    """
    Warp without the (1 - alpha^2) correction at index 1.

    Same arguments as frequency_warp. The coefficient injected at index 0 is
    the raw source coefficient, so the result is left unnormalized.
    """
    return _warp(_frqtr_kernel, source, target_order, alpha, workspace, out)
