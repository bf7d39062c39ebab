# -*- coding: utf-8 -*-
from __future__ import annotations
import numpy as np
from .grid import GridIndexing, FIELDS


def synchronize(frame: np.ndarray, ix: GridIndexing) -> np.ndarray:
    """Periodic wrap: copy each interior edge into the opposite padding ring.

    Only the padding of interior rows/columns is written; corners are left
    alone since the 4-neighbour stencil never reads them.
    """
    inner, lo, hi = ix.interior, ix.first, ix.last
    frame[inner, lo - 1] = frame[inner, hi]; frame[inner, hi + 1] = frame[inner, lo]
    frame[lo - 1, inner] = frame[hi, inner]; frame[hi + 1, inner] = frame[lo, inner]
    return frame


def synchronize_state(state, t: int):
    for name in FIELDS:
        synchronize(state.slice(name, t), state.indexing)
