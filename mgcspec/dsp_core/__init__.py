"""
DSP Core Module - Mel-Generalized Cepstrum to Spectrum

This module converts mel-generalized cepstra into spectral envelopes using
hand-written implementations of the classical recurrences and a radix-2 FFT,
numerically identical to the SPTK routines they follow.

Modules:
    - freqt: Frequency warping of cepstral sequences
    - gc2gc: Generalized cepstrum order / exponent conversion
    - gnorm: Gain normalization and its inverse
    - mgc2mgc: Mel-generalized cepstrum conversion
    - fft: In-place radix-2 complex and real-input FFT
    - spectrum: Cepstrum to (power) spectrum
    - workspace: Reusable scratch buffers and sine table
"""

from .errors import MGCError, InvalidFFTLengthError, ContractViolationError, GainDomainError
from .workspace import Workspace
from .freqt import frequency_warp, frequency_warp_unscaled
from .gc2gc import convert_generalized_cepstrum
from .gnorm import normalize_gain, denormalize_gain
from .mgc2mgc import convert_mgc, warp_shift
from .fft import fft, ifft, fftr
from .spectrum import (
    cepstrum_to_spectrum,
    mgc_to_spectrum,
    power_spectrum,
    mcep_to_spectrum,
    power_spectrogram,
)

__all__ = [
    # Errors
    'MGCError',
    'InvalidFFTLengthError',
    'ContractViolationError',
    'GainDomainError',
    # Scratch cache
    'Workspace',
    # Cepstrum conversions
    'frequency_warp',
    'frequency_warp_unscaled',
    'convert_generalized_cepstrum',
    'normalize_gain',
    'denormalize_gain',
    'convert_mgc',
    'warp_shift',
    # FFT functions
    'fft',
    'ifft',
    'fftr',
    # Spectrum functions
    'cepstrum_to_spectrum',
    'mgc_to_spectrum',
    'power_spectrum',
    'mcep_to_spectrum',
    'power_spectrogram',
]
