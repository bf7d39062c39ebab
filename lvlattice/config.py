# -*- coding: utf-8 -*-
"""Run parameters for the predator–prey lattice.

Parameters are grouped the way they are consumed: the reaction constants, the
cold-start ranges, the run layout and the animation. All groups are frozen once
built; a YAML file with one section per group is the usual source.
"""
from __future__ import annotations
import numbers
import os
from dataclasses import dataclass, field, fields, asdict
from typing import Any, Dict, Optional, Tuple
import yaml
from .errors import ConfigurationError

DIVERGENCE_POLICIES = ('warn', 'raise', 'ignore')
# Characters that may appear inside a decimal number written by %.17g.
NUMERIC_CHARS = set('0123456789.+-')
# np.loadtxt treats these as comment or line markers.
RESERVED_CHARS = set('#\r\n')


@dataclass(frozen=True)
class ReactionParams:
    mu: float = 4.0
    beta: float = 5.0
    d1: float = 0.001
    d2: float = 0.2
    on_divergence: str = 'warn'

    def __post_init__(self):
        if self.on_divergence not in DIVERGENCE_POLICIES:
            raise ConfigurationError(f'on_divergence must be one of {DIVERGENCE_POLICIES}, got {self.on_divergence!r}')


@dataclass(frozen=True)
class InitConfig:
    x_min: float = 0.0
    x_max: float = 1.0
    y_min: float = 0.3
    y_max: float = 0.4
    noise_amplitude: Optional[float] = None

    def __post_init__(self):
        if self.x_min > self.x_max: raise ConfigurationError('init.x_min must not exceed init.x_max')
        if self.y_min > self.y_max: raise ConfigurationError('init.y_min must not exceed init.y_max')
        if self.noise_amplitude is not None and self.noise_amplitude < 0:
            raise ConfigurationError('init.noise_amplitude must be non-negative')

    @property
    def noise(self) -> float:
        return self.x_max if self.noise_amplitude is None else self.noise_amplitude


@dataclass(frozen=True)
class RunConfig:
    grid_size: int = 512
    horizon: int = 24
    anim_start: int = 0
    warm_start: bool = False
    shake_up: bool = False
    update_interval: int = 10
    keep_history: bool = True
    seed: Optional[int] = None
    prey_file: str = 'LastX.txt'
    predator_file: str = 'LastY.txt'
    delimiter: str = '|'

    def __post_init__(self):
        for name in ('grid_size', 'horizon', 'anim_start', 'update_interval'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f'run.{name} must be an integer, got {value!r}')
        if self.grid_size <= 0: raise ConfigurationError(f'run.grid_size must be positive, got {self.grid_size}')
        if self.horizon <= 0: raise ConfigurationError(f'run.horizon must be positive, got {self.horizon}')
        if not 0 <= self.anim_start < self.horizon:
            raise ConfigurationError(f'run.anim_start={self.anim_start} outside [0, horizon={self.horizon})')
        if self.update_interval < 0: raise ConfigurationError('run.update_interval must be >= 0')
        check_delimiter(self.delimiter)


@dataclass(frozen=True)
class AnimConfig:
    enabled: bool = True
    outfile: str = 'Dynamics.gif'
    fps: float = 7
    figsize: Tuple[float, float] = (12.0, 6.0)
    dpi: int = 80
    cmap: str = 'viridis'

    def __post_init__(self):
        if self.fps <= 0: raise ConfigurationError(f'anim.fps must be positive, got {self.fps}')
        object.__setattr__(self, 'figsize', tuple(self.figsize))


def check_delimiter(delim: str):
    if not isinstance(delim, str) or len(delim) != 1:
        raise ConfigurationError(f'delimiter must be a single character, got {delim!r}')
    if delim in NUMERIC_CHARS or delim.isalpha():
        raise ConfigurationError(f'delimiter {delim!r} collides with numeric content')
    if delim in RESERVED_CHARS or (not delim.isprintable() and delim != '\t'):
        raise ConfigurationError(f'delimiter {delim!r} collides with comment or line markers')


def _section(cls, data: Optional[Dict[str, Any]], name: str):
    data = data or {}
    known = {f.name for f in fields(cls)}
    extra = set(data) - known
    if extra:
        raise ConfigurationError(f'unknown key(s) in [{name}]: {", ".join(sorted(extra))}')
    try:
        return cls(**data)
    except TypeError as exc:
        raise ConfigurationError(f'[{name}]: {exc}') from exc


def load_yaml(path: os.PathLike | str) -> Dict[str, Any]:
    """Raw section mapping of a YAML config file, before validation."""
    try:
        with open(path, 'r', encoding='utf-8') as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigurationError(f'cannot read config {path}: {exc}') from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f'invalid YAML in {path}: {exc}') from exc
    if data is not None and not isinstance(data, dict):
        raise ConfigurationError(f'{path}: top level must be a mapping')
    return data or {}


@dataclass(frozen=True)
class SimConfig:
    reaction: ReactionParams = field(default_factory=ReactionParams)
    init: InitConfig = field(default_factory=InitConfig)
    run: RunConfig = field(default_factory=RunConfig)
    anim: AnimConfig = field(default_factory=AnimConfig)

    def __post_init__(self):
        if self.anim.enabled and not self.run.keep_history:
            raise ConfigurationError('animation needs run.keep_history; disable anim or keep the full history')

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SimConfig":
        data = dict(data or {})
        extra = set(data) - {'reaction', 'init', 'run', 'anim'}
        if extra:
            raise ConfigurationError(f'unknown config section(s): {", ".join(sorted(extra))}')
        return cls(reaction=_section(ReactionParams, data.get('reaction'), 'reaction'),
                   init=_section(InitConfig, data.get('init'), 'init'),
                   run=_section(RunConfig, data.get('run'), 'run'),
                   anim=_section(AnimConfig, data.get('anim'), 'anim'))

    @classmethod
    def from_yaml(cls, path: os.PathLike | str) -> "SimConfig":
        """Load a configuration from a YAML file."""
        return cls.from_dict(load_yaml(path))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
