"""
YAML configuration for spectrum computation.
"""

import logging
from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).parent.parent
DEFAULT_CONFIG = PACKAGE_ROOT / 'configs' / 'default.yaml'

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class SpectrumConfig:
    """Analysis parameters for mel-generalized cepstrum to spectrum conversion."""
    alpha: float = 0.42
    gamma: float = 0.0
    fft_length: int = 512
    n_freq: Optional[int] = None  # overrides fft_length when set
    log_level: str = 'INFO'

    def __post_init__(self):
        self.alpha = float(self.alpha)
        self.gamma = float(self.gamma)
        self.fft_length = int(self.fft_length)
        if self.n_freq is not None:
            self.n_freq = int(self.n_freq)
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log_level '{self.log_level}', expected one of {_LOG_LEVELS}")

    @property
    def effective_fft_length(self) -> int:
        if self.n_freq is not None:
            return 2 * (self.n_freq - 1)
        return self.fft_length

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'SpectrumConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**config)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(config_path: Optional[Union[str, Path]] = None) -> SpectrumConfig:
    """Load configuration from YAML file (the packaged default if None)."""
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, 'r') as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    # accept the settings either at top level or under a 'spectrum' section
    section = raw.get('spectrum', raw)
    logger.debug(f"Loaded config from {path}: {section}")
    return SpectrumConfig.from_dict(section)
