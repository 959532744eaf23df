"""
Spectral envelope reconstruction from (mel-generalized) cepstra.

The cepstrum is converted to a plain cepstrum (alpha = 0, gamma = 0) of
order fft_length/2, zero-padded, and transformed with the real-input FFT.
The real part of the result is the log amplitude spectrum, so the power
spectrum |H(e^jw)|^2 is exp(2 * Re).
"""

import logging
from typing import Callable, Optional, Tuple

import numpy as np

from .errors import ContractViolationError
from .fft import fftr
from .mgc2mgc import convert_mgc
from .validation import as_cepstrum, check_alpha, check_gamma, check_fft_length
from .workspace import Workspace, resolve_workspace

logger = logging.getLogger(__name__)


def cepstrum_to_spectrum(
    c: np.ndarray,
    fft_length: int,
    workspace: Optional[Workspace] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Complex log spectrum of a cepstrum.

    Args:
        c: Cepstrum c[0..m], with m + 1 <= fft_length
        fft_length: FFT length (power of 2, >= 4)
        workspace: Scratch cache to reuse across calls

    Returns:
        (real, imag): both of length fft_length
    """
    c = as_cepstrum(c)
    n = check_fft_length(fft_length)
    if len(c) > n:
        raise ContractViolationError(
            f"Cepstrum of order {len(c) - 1} does not fit in FFT length {n}"
        )

    x = np.zeros(n, dtype=np.float64)
    y = np.zeros(n, dtype=np.float64)
    x[:len(c)] = c
    fftr(x, y, workspace=workspace)
    return x, y


def mgc_to_spectrum(
    mgc: np.ndarray,
    alpha: float,
    gamma: float,
    fft_length: int,
    workspace: Optional[Workspace] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Complex log spectrum of a mel-generalized cepstrum.

    Args:
        mgc: Mel-generalized cepstrum c[0..m]
        alpha: All-pass constant
        gamma: Generalization exponent, -1 <= gamma <= 0
        fft_length: FFT length (power of 2, >= 4)
        workspace: Scratch cache to reuse across calls

    Returns:
        (real, imag): both of length fft_length
    """
    mgc = as_cepstrum(mgc, 'mgc')
    alpha = check_alpha(alpha)
    gamma = check_gamma(gamma)
    n = check_fft_length(fft_length)
    ws = resolve_workspace(workspace)

    half = n // 2
    c = ws.scratch('mgc2sp.cepstrum', half + 1)
    convert_mgc(mgc, alpha, gamma, half, 0.0, 0.0, workspace=ws, out=c)
    return cepstrum_to_spectrum(c, n, workspace=ws)


def power_spectrum(
    mgc: np.ndarray,
    alpha: float,
    gamma: float,
    fft_length: int,
    workspace: Optional[Workspace] = None
) -> np.ndarray:
    """
    Power spectrum |H(e^jw)|^2 of a mel-generalized cepstrum.

    Parameters
    ----------
    mgc : np.ndarray
        Mel-generalized cepstrum c[0..m]
    alpha : float
        All-pass constant, |alpha| < 1
    gamma : float
        Generalization exponent, -1 <= gamma <= 0
    fft_length : int
        FFT length (power of 2, >= 4)
    workspace : Workspace, optional
        Scratch cache to reuse across calls

    Returns
    -------
    np.ndarray
        fft_length // 2 + 1 power values from DC to Nyquist

    Examples
    --------
    >>> power_spectrum(np.zeros(5), 0.42, 0.0, 16)
    array([1., 1., 1., 1., 1., 1., 1., 1., 1.])
    """
    x, _ = mgc_to_spectrum(mgc, alpha, gamma, fft_length, workspace=workspace)
    return np.exp(2 * x[:fft_length // 2 + 1])


def mcep_to_spectrum(
    mc: np.ndarray,
    alpha: float,
    n_freq: int,
    workspace: Optional[Workspace] = None
) -> np.ndarray:
    """
    Power spectrum of a mel-cepstrum (gamma = 0) sampled at n_freq points.

    The FFT length is 2 * (n_freq - 1), so n_freq must be 2^k + 1 with
    k >= 1 (3, 5, 9, 17, ..., 257, 513, ...).
    """
    if isinstance(n_freq, (bool, np.bool_)) or not isinstance(n_freq, (int, np.integer)):
        raise ContractViolationError(f"n_freq must be an integer, got {n_freq!r}")
    return power_spectrum(mc, alpha, 0.0, 2 * (int(n_freq) - 1), workspace=workspace)


def power_spectrogram(
    frames: np.ndarray,
    alpha: float,
    gamma: float,
    fft_length: int,
    workspace: Optional[Workspace] = None,
    callback: Optional[Callable[[int], None]] = None
) -> np.ndarray:
    """
    Power spectra of a matrix of mel-generalized cepstra, one frame per row.

    All frames share one workspace, so scratch buffers and the sine table
    are allocated once. If given, `callback(i)` is called after row i is
    done.

    Returns:
        Array of shape (n_frames, fft_length // 2 + 1)
    """
    frames = np.asarray(frames, dtype=np.float64)
    if frames.ndim != 2:
        raise ContractViolationError(f"frames must be 2-D, got shape {frames.shape}")
    n = check_fft_length(fft_length)
    ws = resolve_workspace(workspace)

    result = np.empty((frames.shape[0], n // 2 + 1), dtype=np.float64)
    for i in range(frames.shape[0]):
        result[i] = power_spectrum(frames[i], alpha, gamma, n, workspace=ws)
        if callback is not None:
            callback(i)

    logger.debug(f"Computed {frames.shape[0]} spectra (fft_length={n}, {ws!r})")
    return result
