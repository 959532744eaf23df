"""
Reusable scratch memory for the cepstrum and FFT routines.

A Workspace owns every intermediate buffer the transforms need, plus the
sine table shared by the FFT routines. Buffers are sized lazily and only
ever grow (high-water mark), so repeated calls with the same problem size
do not reallocate.

A Workspace is not thread-safe. Give each thread or task its own instance;
public functions create a call-local one when none is passed.
"""

import logging
import math
from typing import Dict, Optional, Tuple

import numpy as np
from numba import jit

logger = logging.getLogger(__name__)


@jit(nopython=True, cache=True)
def _build_sine_table(n: int) -> np.ndarray:
    """
    Sine table for FFT length n.

    Holds sin(2*pi*j/n) for j = 0 .. n - n/4, so the cosine can be read at
    offset n/4. Entry n/2 is forced to exactly zero.
    """
    size = n - n // 4 + 1
    arg = math.pi / n * 2
    table = np.empty(size, dtype=np.float64)
    table[0] = 0.0
    for j in range(1, size):
        table[j] = math.sin(arg * j)
    table[n // 2] = 0.0
    return table


class Workspace:
    """
    Caller-owned cache of scratch buffers and the FFT sine table.

    Examples
    --------
    >>> ws = Workspace()
    >>> buf = ws.scratch('freqt.g', 25)
    >>> len(buf)
    25
    """

    def __init__(self):
        self._buffers: Dict[str, np.ndarray] = {}
        self._sin_table: Optional[np.ndarray] = None
        self._max_fft_size = 0

    def scratch(self, name: str, size: int) -> np.ndarray:
        """
        Return a float64 buffer of at least `size` elements, viewed to `size`.

        The underlying storage is reallocated (zero-filled) only when `size`
        exceeds the largest size requested so far under `name`; smaller
        requests reuse it without clearing.
        """
        buf = self._buffers.get(name)
        if buf is None or size > len(buf):
            old = 0 if buf is None else len(buf)
            logger.debug(f"Growing scratch '{name}': {old} -> {size}")
            buf = np.zeros(size, dtype=np.float64)
            self._buffers[name] = buf
        return buf[:size]

    def capacity(self, name: str) -> int:
        """Allocated length of the named buffer (0 if never requested)."""
        buf = self._buffers.get(name)
        return 0 if buf is None else len(buf)

    def sine_table(self, n: int) -> Tuple[np.ndarray, int]:
        """
        Return (table, table_fft_size) valid for any FFT length <= n.

        The table is rebuilt from scratch, never extended, when `n` exceeds
        the largest length seen so far.
        """
        if self._sin_table is None or self._max_fft_size < n:
            logger.debug(f"Rebuilding sine table: {self._max_fft_size} -> {n}")
            self._sin_table = _build_sine_table(n)
            self._max_fft_size = n
        return self._sin_table, self._max_fft_size

    @property
    def max_fft_size(self) -> int:
        return self._max_fft_size

    def __repr__(self) -> str:
        sizes = ', '.join(f'{k}={len(v)}' for k, v in sorted(self._buffers.items()))
        return f"Workspace(max_fft_size={self._max_fft_size}, buffers=[{sizes}])"


def resolve_workspace(workspace: Optional[Workspace]) -> Workspace:
    """Use the caller's workspace, or a fresh call-local one."""
    return Workspace() if workspace is None else workspace
