"""
Utility modules.
"""

from .logging import setup_logging
from .config import SpectrumConfig, load_config

__all__ = ['setup_logging', 'SpectrumConfig', 'load_config']
