# -*- coding: utf-8 -*-
from __future__ import annotations
import numpy as np
from .grid import GridIndexing


def coupling(frame: np.ndarray, ix: GridIndexing, out: np.ndarray = None) -> np.ndarray:
    """Discrete 5-point Laplacian over the interior of a synchronized slice.

    Padding cells of the result are zero. ``frame`` must have had its padding
    synchronized for the same time index.
    """
    if out is None: out = np.zeros_like(frame, dtype=float)
    else: out[...] = 0.0
    lo, hi = ix.first, ix.last + 1
    out[lo:hi, lo:hi] = (
        frame[lo - 1:hi - 1, lo:hi] + frame[lo + 1:hi + 1, lo:hi] +
        frame[lo:hi, lo - 1:hi - 1] + frame[lo:hi, lo + 1:hi + 1] -
        4 * frame[lo:hi, lo:hi]
    )
    return out
