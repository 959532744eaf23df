"""
In-place radix-2 FFT using Numba JIT

This module implements the split real/imaginary radix-2 FFT used for
spectral envelope reconstruction:

1. fft: decimation-in-frequency complex FFT, power-of-2 length >= 4,
   twiddles read from a cached sine table, bit-reversal pass at the end
2. ifft: inverse transform via the conjugate trick
3. fftr: real-input FFT of length l computed from an l/2-point complex FFT

All transforms work in place on a pair of float64 arrays (x = real part,
y = imaginary part). The sine table lives in a Workspace and is rebuilt
whenever a longer transform is requested.
"""

from typing import Optional

import numpy as np
from numba import jit

from .errors import ContractViolationError
from .validation import check_fft_length
from .workspace import Workspace, resolve_workspace


@jit(nopython=True, cache=True)
def _fft_kernel(x: np.ndarray, y: np.ndarray, m: int, sintbl: np.ndarray, table_n: int):
    """Radix-2 DIF butterflies followed by bit reversal (m >= 2)."""
    lf = table_n // m
    lmx = m

    while True:
        lix = lmx
        lmx //= 2
        if lmx <= 1:
            break
        sinp = 0
        cosp = table_n // 4
        for j in range(lmx):
            p = j
            li = lix
            while li <= m:
                q = p + lmx
                t1 = x[p] - x[q]
                t2 = y[p] - y[q]
                x[p] += x[q]
                y[p] += y[q]
                x[q] = sintbl[cosp] * t1 + sintbl[sinp] * t2
                y[q] = sintbl[cosp] * t2 - sintbl[sinp] * t1
                p += lix
                li += lix
            sinp += lf
            cosp += lf
        lf += lf

    # last stage: twiddle is 1
    for p in range(0, m, 2):
        t1 = x[p] - x[p + 1]
        t2 = y[p] - y[p + 1]
        x[p] += x[p + 1]
        y[p] += y[p + 1]
        x[p + 1] = t1
        y[p + 1] = t2

    # bit reversal
    j = 0
    mv2 = m // 2
    for i in range(m - 1):
        if i < j:
            t1 = x[j]
            t2 = y[j]
            x[j] = x[i]
            y[j] = y[i]
            x[i] = t1
            y[i] = t2
        k = mv2
        while k <= j:
            j -= k
            k //= 2
        j += k


@jit(nopython=True, cache=True)
def _split_even_odd(x: np.ndarray, y: np.ndarray, m: int):
    """Pack x[2i] into x[i] and x[2i+1] into y[i]; forward order is safe in place."""
    for i in range(m // 2):
        x[i] = x[2 * i]
        y[i] = x[2 * i + 1]


@jit(nopython=True, cache=True)
def _fftr_combine(x: np.ndarray, y: np.ndarray, m: int, sintbl: np.ndarray, table_n: int):
    """Rebuild the m-point spectrum from the m/2-point transform of the packed input."""
    mv2 = m // 2
    n = table_n // m
    sinp = 0
    cosp = table_n // 4

    x[mv2] = x[0] - y[0]
    x[0] = x[0] + y[0]
    y[0] = 0.0
    y[mv2] = 0.0

    # upper half, written from the top down
    p = 0
    q = m
    j = mv2 - 2
    for _ in range(mv2 - 1):
        p += 1
        q -= 1
        sinp += n
        cosp += n
        yt = y[p] + y[p + j]
        xt = x[p] - x[p + j]
        x[q] = (x[p] + x[p + j] + sintbl[cosp] * yt - sintbl[sinp] * xt) * 0.5
        y[q] = (y[p + j] - y[p] + sintbl[sinp] * yt + sintbl[cosp] * xt) * 0.5
        j -= 2

    # lower half is the complex conjugate mirror
    q = m
    for p in range(1, mv2):
        q -= 1
        x[p] = x[q]
        y[p] = -y[q]


def _check_pair(x: np.ndarray, y: np.ndarray) -> int:
    for name, arr in (('x', x), ('y', y)):
        if not isinstance(arr, np.ndarray) or arr.dtype != np.float64 or arr.ndim != 1:
            raise ContractViolationError(f"{name} must be a 1-D float64 ndarray")
        if not arr.flags.c_contiguous or not arr.flags.writeable:
            raise ContractViolationError(f"{name} must be contiguous and writeable")
    if len(x) != len(y):
        raise ContractViolationError(
            f"x and y must have equal length, got {len(x)} and {len(y)}"
        )
    return len(x)


def _fft_inplace(x: np.ndarray, y: np.ndarray, m: int, ws: Workspace) -> None:
    sintbl, table_n = ws.sine_table(m)
    _fft_kernel(x, y, m, sintbl, table_n)


def fft(x: np.ndarray, y: np.ndarray, workspace: Optional[Workspace] = None) -> None:
    """
    In-place complex FFT of the sequence x + iy.

    Computes X[k] = sum_n (x[n] + i y[n]) exp(-2 pi i n k / N).

    Parameters
    ----------
    x : np.ndarray
        Real part, float64, length N (power of 2, N >= 4); overwritten
    y : np.ndarray
        Imaginary part, same length; overwritten
    workspace : Workspace, optional
        Holds the sine table across calls

    Raises
    ------
    InvalidFFTLengthError
        If N is not a power of 2 >= 4. The inputs are left untouched.

    Examples
    --------
    >>> x = np.array([1.0, 2.0, 3.0, 4.0]); y = np.zeros(4)
    >>> fft(x, y)
    >>> x, y
    (array([10., -2., -2., -2.]), array([ 0.,  2.,  0., -2.]))
    """
    m = check_fft_length(_check_pair(x, y))
    _fft_inplace(x, y, m, resolve_workspace(workspace))


def ifft(x: np.ndarray, y: np.ndarray, workspace: Optional[Workspace] = None) -> None:
    """
    In-place inverse FFT: IFFT(X) = conj(FFT(conj(X))) / N
    """
    m = check_fft_length(_check_pair(x, y))
    np.negative(y, out=y)
    _fft_inplace(x, y, m, resolve_workspace(workspace))
    x /= m
    y /= -m


def fftr(x: np.ndarray, y: np.ndarray, workspace: Optional[Workspace] = None) -> None:
    """
    In-place FFT of the real sequence x.

    The input is read from x only; y is used as scratch. On return x and y
    hold the real and imaginary parts of the full N-point spectrum, with
    X[N-k] = conj(X[k]).

    Parameters
    ----------
    x : np.ndarray
        Real input, length N (power of 2, N >= 4); overwritten
    y : np.ndarray
        Imaginary output, same length; overwritten
    workspace : Workspace, optional
        Holds the sine table across calls
    """
    m = check_fft_length(_check_pair(x, y))
    ws = resolve_workspace(workspace)
    mv2 = m // 2

    _split_even_odd(x, y, m)
    _fft_inplace(x, y, mv2, ws)

    sintbl, table_n = ws.sine_table(m)
    _fftr_combine(x, y, m, sintbl, table_n)
