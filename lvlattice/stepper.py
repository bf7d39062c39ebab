# -*- coding: utf-8 -*-
from __future__ import annotations
import logging
import numpy as np
from .boundary import synchronize_state
from .config import ReactionParams
from .coupling import coupling
from .grid import LatticeState
from .reaction import prey_update, predator_update, DivergenceGuard

logger = logging.getLogger(__name__)


def progress_checkpoints(n: int, total: int):
    """Counts in 1..total at which ``n`` evenly spaced progress messages fire."""
    if n <= 0 or total <= 0: return set()
    return {int(np.floor(i / n * total)) for i in range(1, n + 1)} - {0}


def step(state: LatticeState, t: int, pars: ReactionParams):
    """Advance from slice ``t-1`` to slice ``t``.

    Writes the padding of ``t-1`` (synchronization) and the interior of ``t``;
    every read of ``t-1`` after synchronization goes through read-only views.
    """
    ix = state.indexing; inner = ix.inner
    synchronize_state(state, t - 1)
    x = state.readonly('prey', t - 1); y = state.readonly('predator', t - 1)
    lap_x = coupling(x, ix); lap_y = coupling(y, ix)
    xi, yi = x[inner], y[inner]
    x_new = prey_update(xi, yi, lap_x[inner], pars)
    y_new = predator_update(xi, yi, lap_y[inner], pars)
    state.begin(t)
    state.slice('prey', t)[inner] = x_new
    state.slice('predator', t)[inner] = y_new
    return x_new, y_new


def run(state: LatticeState, pars: ReactionParams, update_interval: int = 10):
    """Step ``t = 1 .. horizon-1`` from an installed slice 0, then sync the last slice."""
    if state.latest != 0:
        raise IndexError('run() expects exactly slice 0 to be installed')
    guard = DivergenceGuard(pars.on_divergence)
    marks = progress_checkpoints(update_interval, state.horizon)
    logger.info('Starting simulation...')
    for t in range(1, state.horizon):
        x_new, y_new = step(state, t, pars)
        guard(t, x_new, y_new)
        if t + 1 in marks:
            logger.info('Simulation progress: %d%%', int(np.floor(100 * (t + 1) / state.horizon)))
    synchronize_state(state, state.horizon - 1)
    logger.info('Done simulation!')
    return state
