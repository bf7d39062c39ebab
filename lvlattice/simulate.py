# -*- coding: utf-8 -*-
from __future__ import annotations
import logging
import numpy as np
from typing import Dict, Any
from .config import SimConfig
from .errors import SnapshotSaveError
from .grid import GridIndexing, LatticeState
from .stepper import run
from .warmstart import initialize, save_final

logger = logging.getLogger(__name__)


def run_lattice(cfg: SimConfig = None, save: bool = True) -> Dict[str, Any]:
    """Seed, initialize, step the full horizon and persist the last slice.

    A failed save raises SnapshotSaveError carrying the finished result in
    ``err.result``.
    """
    if cfg is None: cfg = SimConfig()
    rc = cfg.run
    if rc.seed is not None: np.random.seed(rc.seed)
    ix = GridIndexing(rc.grid_size)
    state = LatticeState(ix, rc.horizon, keep_history=rc.keep_history)
    initialize(state, cfg.init, rc)
    run(state, cfg.reaction, update_interval=rc.update_interval)
    res = {'state': state, 'indexing': ix,
           'prey_hist': state.frames('prey') if rc.keep_history else None,
           'pred_hist': state.frames('predator') if rc.keep_history else None}
    if save:
        try:
            save_final(state, rc)
        except SnapshotSaveError as exc:
            exc.result = res
            raise
    return res
