# -*- coding: utf-8 -*-
"""Local update rules of the coupled map lattice.

Prey:      X' = mu*X*(1-X)*exp(-beta*Y) + d1*lap(X)
Predator:  Y' = X*(1-exp(-beta*Y)) + d2*lap(Y)

Both are floored at 0 with no ceiling. NaN passes through the floor.
"""
from __future__ import annotations
import logging
import numpy as np
from .config import ReactionParams
from .errors import NumericDivergence

logger = logging.getLogger(__name__)


def prey_update(x, y, lap_x, pars: ReactionParams):
    x_new = pars.mu * x * (1 - x) * np.exp(-pars.beta * y) + pars.d1 * lap_x
    return np.maximum(x_new, 0.0)


def predator_update(x, y, lap_y, pars: ReactionParams):
    y_new = x * (1 - np.exp(-pars.beta * y)) + pars.d2 * lap_y
    return np.maximum(y_new, 0.0)


class DivergenceGuard:
    """Applies the configured policy to non-finite values after each step.

    ``warn`` logs the first offending time index once and lets values
    propagate, ``raise`` aborts with NumericDivergence, ``ignore`` does nothing.
    """

    def __init__(self, policy: str = 'warn'):
        self.policy = policy
        self.first_bad = None

    def __call__(self, t: int, prey: np.ndarray, predator: np.ndarray):
        if self.policy == 'ignore' or self.first_bad is not None:
            return
        for name, arr in (('prey', prey), ('predator', predator)):
            if np.isfinite(arr).all():
                continue
            if self.policy == 'raise':
                raise NumericDivergence(t, name)
            self.first_bad = t
            logger.warning('Non-finite %s values first appeared at t=%d; they will propagate', name, t)
            return
