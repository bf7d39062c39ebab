# -*- coding: utf-8 -*-
from __future__ import annotations


class LatticeError(Exception):
    """Base class for every failure raised by lvlattice."""


class ConfigurationError(LatticeError, ValueError):
    pass


class SnapshotLoadError(LatticeError):
    """A warm-start file is missing or cannot be parsed."""


class PersistenceShapeError(SnapshotLoadError):
    def __init__(self, path, expected, found):
        self.path, self.expected, self.found = path, expected, found
        super().__init__(f'{path}: expected a {expected[0]}x{expected[1]} table, found {found[0]}x{found[1]}')


class SnapshotSaveError(LatticeError):
    """The final snapshot could not be written; the trajectory itself is valid."""

    def __init__(self, message, result=None):
        super().__init__(message)
        self.result = result


class NumericDivergence(LatticeError, FloatingPointError):
    def __init__(self, t, field):
        self.t, self.field = t, field
        super().__init__(f'non-finite {field} values at t={t}')
