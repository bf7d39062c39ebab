# -*- coding: utf-8 -*-
"""Initial slice of the lattice: cold start, warm start from disk, shake up.

Snapshot files hold the full padded slice as a delimiter-separated table, one
lattice row per line.
"""
from __future__ import annotations
import logging
import os
import numpy as np
from .config import InitConfig, RunConfig, check_delimiter
from .errors import PersistenceShapeError, SnapshotLoadError, SnapshotSaveError
from .grid import GridIndexing, LatticeState

logger = logging.getLogger(__name__)

SNAPSHOT_FMT = '%.17g'


def cold_start(ix: GridIndexing, cfg: InitConfig):
    prey = np.random.rand(*ix.shape) * (cfg.x_max - cfg.x_min) + cfg.x_min
    predator = np.random.rand(*ix.shape) * (cfg.y_max - cfg.y_min) + cfg.y_min
    return prey, predator


def load_snapshot(path, ix: GridIndexing, delimiter: str = '|') -> np.ndarray:
    check_delimiter(delimiter)
    try:
        arr = np.loadtxt(path, delimiter=delimiter, ndmin=2, dtype=float)
    except OSError as exc:
        raise SnapshotLoadError(f'cannot read warm-start file {path}: {exc}') from exc
    except (ValueError, TypeError) as exc:
        raise SnapshotLoadError(f'malformed warm-start file {path}: {exc}') from exc
    if arr.shape != ix.shape:
        raise PersistenceShapeError(path, ix.shape, arr.shape)
    return arr


def save_snapshot(path, frame: np.ndarray, delimiter: str = '|'):
    check_delimiter(delimiter)
    try:
        np.savetxt(path, frame, delimiter=delimiter, fmt=SNAPSHOT_FMT)
    except OSError as exc:
        raise SnapshotSaveError(f'cannot write warm-start file {path}: {exc}') from exc


def warm_start(ix: GridIndexing, cfg: RunConfig):
    # Both files are read before anything is installed.
    prey = load_snapshot(cfg.prey_file, ix, cfg.delimiter)
    predator = load_snapshot(cfg.predator_file, ix, cfg.delimiter)
    logger.info('Warm start from %s and %s', cfg.prey_file, cfg.predator_file)
    return prey, predator


def shake_up(prey: np.ndarray, amplitude: float) -> np.ndarray:
    """Zero-centred uniform noise of half-width ``amplitude``, then clip to [0, 1]."""
    noisy = prey + 2 * (np.random.rand(*prey.shape) - 0.5) * amplitude
    return np.clip(noisy, 0.0, 1.0)


def initialize(state: LatticeState, init: InitConfig, run: RunConfig):
    ix = state.indexing
    if run.warm_start:
        prey, predator = warm_start(ix, run)
    else:
        prey, predator = cold_start(ix, init)
    if run.shake_up:
        prey = shake_up(prey, init.noise)
    state.install(0, prey, predator)
    return state


def save_final(state: LatticeState, run: RunConfig):
    """Write both final slices, replacing the old pair only once both are on disk.

    Each snapshot is staged next to its destination; a failure leaves the
    previous prey/predator files untouched.
    """
    t = state.horizon - 1
    staged = []
    try:
        for name, path in (('prey', run.prey_file), ('predator', run.predator_file)):
            tmp = os.fspath(path) + '.tmp'
            save_snapshot(tmp, state.slice(name, t), run.delimiter)
            staged.append((tmp, path))
        for tmp, path in staged:
            try:
                os.replace(tmp, path)
            except OSError as exc:
                raise SnapshotSaveError(f'cannot write warm-start file {path}: {exc}') from exc
    finally:
        for tmp, _ in staged:
            if os.path.exists(tmp): os.remove(tmp)
    logger.info('Saved final snapshot to %s and %s', run.prey_file, run.predator_file)
