# -*- coding: utf-8 -*-
"""Padded lattice storage for the prey and predator fields.

Arrays are stored time-first, ``values[t, row, col]``, so one snapshot is a
contiguous 2D block. Every padding/interior offset goes through
``GridIndexing``; nothing else in the package does ``+1``/``-1`` arithmetic on
lattice coordinates.
"""
from __future__ import annotations
import numpy as np
from dataclasses import dataclass
from .errors import ConfigurationError

FIELDS = ('prey', 'predator')


@dataclass(frozen=True)
class GridIndexing:
    size: int
    pad: int = 1

    @property
    def padded(self) -> int: return self.size + 2 * self.pad

    @property
    def shape(self): return (self.padded, self.padded)

    @property
    def first(self) -> int: return self.pad

    @property
    def last(self) -> int: return self.pad + self.size - 1

    @property
    def interior(self) -> slice: return slice(self.first, self.last + 1)

    @property
    def inner(self):
        """Index tuple selecting the true domain of a 2D slice."""
        return (self.interior, self.interior)

    def check(self, arr, what='array'):
        if arr.shape != self.shape:
            raise ValueError(f'{what} has shape {arr.shape}, expected {self.shape}')


class LatticeState:
    """Owns both fields across the time axis.

    With ``keep_history=False`` only two slots are allocated and slice ``t``
    lives in slot ``t % 2``; reading a slice that has been overwritten is an
    IndexError.
    """

    def __init__(self, indexing: GridIndexing, horizon: int, keep_history: bool = True):
        if horizon <= 0: raise ConfigurationError(f'horizon must be positive, got {horizon}')
        self.indexing = indexing
        self.horizon = horizon
        self.keep_history = keep_history
        self.depth = horizon if keep_history else min(2, horizon)
        self.prey = np.zeros((self.depth,) + indexing.shape)
        self.predator = np.zeros((self.depth,) + indexing.shape)
        self.latest = -1

    def _slot(self, t: int) -> int:
        if not 0 <= t < self.horizon:
            raise IndexError(f'time index {t} outside [0, {self.horizon})')
        if not self.keep_history and self.latest >= 0 and t <= self.latest - self.depth:
            raise IndexError(f'time index {t} has been dropped from the rolling window')
        return t % self.depth

    def field(self, name: str) -> np.ndarray:
        if name not in FIELDS: raise KeyError(name)
        return getattr(self, name)

    def slice(self, name: str, t: int) -> np.ndarray:
        return self.field(name)[self._slot(t)]

    def readonly(self, name: str, t: int) -> np.ndarray:
        view = self.slice(name, t).view()
        view.flags.writeable = False
        return view

    def snapshot(self, name: str, t: int) -> np.ndarray:
        return self.slice(name, t).copy()

    def frames(self, name: str, start: int = 0) -> np.ndarray:
        if not self.keep_history:
            raise ConfigurationError('frames need the full history (keep_history=True)')
        return self.field(name)[start:]

    def begin(self, t: int):
        """Mark slice ``t`` as the one being written and clear it."""
        if t != self.latest + 1:
            raise IndexError(f'slices are written in order; expected t={self.latest + 1}, got {t}')
        slot = self._slot(t)
        self.prey[slot] = 0.0; self.predator[slot] = 0.0
        self.latest = t
        return slot

    def install(self, t: int, prey: np.ndarray, predator: np.ndarray):
        self.indexing.check(prey, 'prey'); self.indexing.check(predator, 'predator')
        slot = self.begin(t)
        self.prey[slot] = prey; self.predator[slot] = predator
