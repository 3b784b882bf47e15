#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exceptions raised by CorrGen.

Every error is fatal to the generation request that raised it; no partial results are returned.

Classes
-------
- CorrGenError:
    Base class of all CorrGen errors.
- ArgumentError:
    Invalid input (dimension mismatch between point and basis, point outside bounds, malformed basis, bad parameter).
- DimensionMismatchError:
    Matrix operands with incompatible shapes.
- IndexOutOfRangeError:
    Row or column index outside a matrix.
- DegenerateBasisError:
    Zero-norm column or linearly dependent basis.
- SingularSystemError:
    No pivot above the threshold while eliminating a linear system.
- SolverMismatchError:
    The two elimination strategies disagree on the same system.
- GenerationUnreachableError:
    Rejection sampling exceeded its attempt budget.
"""


class CorrGenError(Exception):
    pass


class ArgumentError(CorrGenError, ValueError):
    pass


class DimensionMismatchError(ArgumentError):
    pass


class IndexOutOfRangeError(CorrGenError, IndexError):
    pass


class DegenerateBasisError(CorrGenError, ValueError):
    pass


class SingularSystemError(CorrGenError, ArithmeticError):
    pass


class SolverMismatchError(CorrGenError, RuntimeError):
    pass


class GenerationUnreachableError(CorrGenError, RuntimeError):
    pass
