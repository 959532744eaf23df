"""
mgcspec - spectral envelopes from mel-generalized cepstra.
"""

from .dsp_core import *  # noqa: F401,F403
from .dsp_core import __all__

__version__ = '1.0.0'
