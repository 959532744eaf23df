"""
Mel-generalized cepstrum conversion.

Re-expresses a mel-generalized cepstrum (m1, a1, g1) as (m2, a2, g2) by
chaining frequency warping, gain normalization and generalized cepstrum
conversion.
"""

import logging
from typing import Optional

import numpy as np

from .freqt import frequency_warp
from .gc2gc import convert_generalized_cepstrum
from .gnorm import normalize_gain, denormalize_gain
from .validation import as_cepstrum, check_order, check_alpha, check_gamma, check_out
from .workspace import Workspace, resolve_workspace

logger = logging.getLogger(__name__)


def warp_shift(a1: float, a2: float) -> float:
    """Net all-pass constant taking warping a1 to warping a2."""
    return (a2 - a1) / (1 - a1 * a2)


def convert_mgc(
    source: np.ndarray,
    a1: float,
    g1: float,
    target_order: int,
    a2: float,
    g2: float,
    workspace: Optional[Workspace] = None,
    out: Optional[np.ndarray] = None
) -> np.ndarray:
    """
    Convert a mel-generalized cepstrum to another order, warping and exponent.

    When the net warping shift is zero the input is normalized, converted
    and denormalized directly. Otherwise it is warped first (still
    unnormalized) to the target order, so that the gain term already
    reflects the warped sequence when it is normalized.

    Parameters
    ----------
    source : np.ndarray
        Mel-generalized cepstrum c1[0..m1]
    a1, g1 : float
        All-pass constant and exponent of the source
    target_order : int
        Output order m2
    a2, g2 : float
        All-pass constant and exponent of the result
    workspace : Workspace, optional
        Scratch cache to reuse across calls
    out : np.ndarray, optional
        Destination of length m2+1; may be `source` itself

    Returns
    -------
    np.ndarray
        Mel-generalized cepstrum c2[0..m2]
    """
    c1 = as_cepstrum(source, 'source')
    m1 = len(c1) - 1
    m2 = check_order(target_order, 'target_order')
    a1 = check_alpha(a1, 'a1')
    a2 = check_alpha(a2, 'a2')
    g1 = check_gamma(g1, 'g1')
    g2 = check_gamma(g2, 'g2')
    ws = resolve_workspace(workspace)
    out = check_out(out, m2 + 1)

    a = warp_shift(a1, a2)
    # out is only written once every step has succeeded
    target = ws.scratch('mgc2mgc.target', m2 + 1)

    if a == 0:
        ca = ws.scratch('mgc2mgc.source', m1 + 1)
        ca[:] = c1
        normalize_gain(ca, g1, out=ca)
        convert_generalized_cepstrum(ca, g1, m2, g2, workspace=ws, out=target)
    else:
        frequency_warp(c1, m2, a, workspace=ws, out=target)
        normalize_gain(target, g1, out=target)
        convert_generalized_cepstrum(target, g1, m2, g2, workspace=ws, out=target)
    denormalize_gain(target, g2, out=target)

    out[:] = target
    return out
