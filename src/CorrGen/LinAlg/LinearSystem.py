#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
This module provides dense elimination solvers for linear systems A * x = b, where A may have fewer rows than
columns (full row rank). The reduced augmented matrix [A' | b'] produced by the elimination is the equation system
used to describe a subspace.

Classes
-------
- LinearSystemSolver:
    Base class holding the system, the pivot threshold and the reduced equation matrix.
- TotalPivotSolver:
    Elimination with total pivot search over the whole remaining sub-matrix (row and column exchanges).
- GaussJordanSolver:
    Gauss-Jordan elimination to reduced row-echelon form with partial pivoting per column.

Functions
---------
- solve_linear_system(A, b, method='gauss_jordan', cross_check=False, epsilon=1e-12, tolerance=1e-9, echo=False):
    Solve with the canonical strategy and optionally cross-check it against the other one.
- systems_agree(first, second, tolerance=1e-9):
    Check that two solvers describe the same constraint set and both solve the original system.

Notes
-----
- Free variables (columns without a pivot) are set to zero in the returned solution.
- The equation matrix is always reported in the original column order; its row order depends on the pivoting
  strategy and is not meaningful.
"""

from ..Deps import *
from ..Errors import ArgumentError, DimensionMismatchError, SingularSystemError, SolverMismatchError
from .Matrix import Matrix
from .Utils import format_values


#%%
class LinearSystemSolver:
    """
    Base class for elimination solvers of A * x = b.

    Subclasses implement `_eliminate`, which reduces the augmented system and records the pivot columns.

    Parameters
    ----------
    A : array_like or Matrix
        Coefficient matrix of shape (m, n), m <= n.
    b : array_like or Matrix
        Right-hand side of shape (m,) or (m, p).
    epsilon : float, optional
        Relative pivot threshold; a pivot must exceed epsilon * max(1, max|A|). Default is 1e-12.
    echo : bool, optional
        Print the system and the reduced equations. Default is False.

    Attributes
    ----------
    shape : tuple
        Shape of A.
    threshold : float
        Absolute pivot threshold.
    pivots : list of int
        Pivot column of each reduced equation (original column indices).
    stype : str
        Name of the elimination strategy.
    """
    stype = ''

    def __init__(self, A, b, epsilon=1e-12, echo=False):
        self.coefficients = self._check_mtx(A)
        self.shape = self.coefficients.shape
        self.rhs = self._check_rhs(b)
        self.epsilon = epsilon
        self.echo = echo
        scale = np.abs(self.coefficients).max() if self.coefficients.size else 0.0
        self.threshold = epsilon * max(1.0, scale)
        self.pivots = []
        self._reduced = None
        self._solution = None

    def _check_mtx(self, A):
        """
        Validate the coefficient matrix.

        Raises
        ------
        ArgumentError
            If A is not 2D, is empty, or has more rows than columns.
        """
        A = np.array(Matrix(A).array, dtype=np.float64)
        if A.shape[0] == 0 or A.shape[1] == 0:
            raise ArgumentError(f'Empty coefficient matrix of shape {A.shape}')
        if A.shape[0] > A.shape[1]:
            raise ArgumentError(
                f'Overdetermined system of shape {A.shape} is not supported; expected rows <= columns')
        if not np.all(np.isfinite(A)):
            raise ArgumentError('Coefficient matrix contains non-finite values')
        return A

    def _check_rhs(self, b):
        """
        Validate the right-hand side and return it as an (m, p) array.

        Raises
        ------
        DimensionMismatchError
            If the row count of b differs from that of A.
        """
        b = np.array(b.array if isinstance(b, Matrix) else b, dtype=np.float64)
        self._vector_rhs = b.ndim == 1
        if b.ndim == 1:
            b = b.reshape(-1, 1)
        if b.ndim != 2 or b.shape[0] != self.shape[0]:
            raise DimensionMismatchError(
                f'Right-hand side of shape {b.shape} does not match coefficient matrix {self.shape}')
        return b

    def _eliminate(self):
        raise NotImplementedError("Subclasses should implement this!")

    def _reduce(self):
        if self._reduced is None:
            if self.echo:
                print(f'[{self.stype}] a\n' + Matrix(self.coefficients).to_string())
                print(f'[{self.stype}] b ' + format_values(self.rhs, ','))
            self._reduced = self._eliminate()
            if self.echo:
                print(f'[{self.stype}] solution\n' + self.equation_matrix.to_string())

    def _singular(self, rank):
        m = self.shape[0]
        return SingularSystemError(
            f'{self.stype}: no pivot above {self.threshold:.3e} after {rank} of {m} equations '
            f'(coefficient matrix {self.shape} is rank deficient)')

    @property
    def equation_matrix(self):
        """
        The reduced augmented matrix [A' | b'] (m x (n + p)) in the original column order.
        """
        self._reduce()
        return Matrix(self._reduced)

    @property
    def rank(self):
        self._reduce()
        return len(self.pivots)

    def solve(self):
        """
        Solve the system.

        Returns
        -------
        numpy.ndarray
            Solution of shape (n,) for a vector right-hand side, (n, p) otherwise. Free variables are zero.

        Raises
        ------
        SingularSystemError
            If A does not have full row rank.
        """
        self._reduce()
        if self._solution is None:
            n = self.shape[1]
            x = np.zeros((n, self.rhs.shape[1]))
            x[self.pivots, :] = self._reduced[:, n:]
            self._solution = x
        return self._solution[:, 0].copy() if self._vector_rhs else self._solution.copy()

    def residual(self, x=None):
        """
        Return max |A x - b| for the given (or computed) solution.
        """
        x = self.solve() if x is None else np.asarray(x, dtype=np.float64)
        x = x.reshape(self.shape[1], -1)
        return float(np.abs(self.coefficients @ x - self.rhs).max())

    def equations_to_string(self, digits=4):
        """
        Render each reduced equation as 'a_1*x_1 + ... = c'.
        """
        n = self.shape[1]
        lines = []
        for row in self.equation_matrix.array:
            terms = [f'{a:.{digits}f}*x_{j + 1}' for j, a in enumerate(row[:n]) if abs(a) > self.threshold]
            lhs = ' + '.join(terms) if terms else '0'
            lines.append(f'{lhs} = ' + format_values(row[n:], ', ', digits))
        return '\n'.join(lines)


class TotalPivotSolver(LinearSystemSolver):
    """
    Elimination with total pivot search.

    At step k the entry of largest magnitude in the remaining sub-matrix A[k:, k:] becomes the pivot; rows and
    columns are exchanged so it lands on the diagonal, the column exchange is recorded, and the pivot column is
    cleared above and below the pivot.

    Examples
    --------
        solver = TotalPivotSolver(A, b)
        x = solver.solve()
    """
    stype = 'total_pivot'

    def _eliminate(self):
        m, n = self.shape
        coeff = self.coefficients.copy()
        rhs = self.rhs.copy()
        col = np.arange(n)

        for k in range(m):
            sub = np.abs(coeff[k:, k:])
            i, j = np.unravel_index(np.argmax(sub), sub.shape)
            if sub[i, j] <= self.threshold:
                raise self._singular(k)
            i += k
            j += k
            if i != k:
                coeff[[k, i], :] = coeff[[i, k], :]
                rhs[[k, i], :] = rhs[[i, k], :]
            if j != k:
                coeff[:, [k, j]] = coeff[:, [j, k]]
                col[[k, j]] = col[[j, k]]

            pivot = coeff[k, k]
            coeff[k, :] /= pivot
            rhs[k, :] /= pivot
            for r in range(m):
                if r != k and coeff[r, k] != 0.0:
                    factor = coeff[r, k]
                    coeff[r, :] -= factor * coeff[k, :]
                    rhs[r, :] -= factor * rhs[k, :]
            coeff[:, k] = 0.0
            coeff[k, k] = 1.0

        self.pivots = col[:m].tolist()
        reduced = np.zeros((m, n + rhs.shape[1]))
        reduced[:, col] = coeff  # undo the column exchanges
        reduced[:, n:] = rhs
        return reduced


class GaussJordanSolver(LinearSystemSolver):
    """
    Gauss-Jordan elimination of the augmented matrix to reduced row-echelon form.

    Columns are processed left to right; in each column the remaining row with the largest magnitude is used as
    pivot. Columns without an adequate pivot are free and skipped.

    Examples
    --------
        solver = GaussJordanSolver(A, b)
        x = solver.solve()
        E = solver.equation_matrix
    """
    stype = 'gauss_jordan'

    def _eliminate(self):
        m, n = self.shape
        aug = np.hstack((self.coefficients, self.rhs))
        pivots = []
        r = 0
        for c in range(n):
            if r == m:
                break
            i = r + int(np.argmax(np.abs(aug[r:, c])))
            if abs(aug[i, c]) <= self.threshold:
                continue
            if i != r:
                aug[[r, i], :] = aug[[i, r], :]
            aug[r, :] /= aug[r, c]
            for k in range(m):
                if k != r and aug[k, c] != 0.0:
                    aug[k, :] -= aug[k, c] * aug[r, :]
            aug[:, c] = 0.0
            aug[r, c] = 1.0
            pivots.append(c)
            r += 1

        if r < m:
            raise self._singular(r)
        self.pivots = pivots
        return aug


_solver_map = {'total_pivot': TotalPivotSolver,
               'gauss_jordan': GaussJordanSolver}


#%%
def systems_agree(first, second, tolerance=1e-9):
    """
    Check that two solvers describe the same system of constraints.

    The reduced equation matrices may differ in row order and in the choice of pivot columns. The systems agree if
    (1) both solutions satisfy the original system and (2) the rows of each equation matrix lie in the row space of
    the other.

    Parameters
    ----------
    first, second : LinearSystemSolver
        Solvers that have been applied to the same system.
    tolerance : float, optional
        Relative tolerance. Default is 1e-9.

    Returns
    -------
    bool
        True if the systems agree within tolerance.
    """
    scale = max(1.0, float(np.abs(first.coefficients).max()), float(np.abs(first.rhs).max()))
    for solver in (first, second):
        if solver.residual() > tolerance * scale:
            return False

    e1 = first.equation_matrix.array
    e2 = second.equation_matrix.array
    if e1.shape != e2.shape:
        return False
    for a, b in ((e1, e2), (e2, e1)):
        q = sla.orth(a.T)
        remainder = b.T - q @ (q.T @ b.T)
        if np.abs(remainder).max() > tolerance * max(1.0, float(np.abs(b).max())):
            return False
    return True


def solve_linear_system(A, b, method='gauss_jordan', cross_check=False, epsilon=1e-12, tolerance=1e-9, echo=False):
    """
    Solve A * x = b with the canonical elimination strategy.

    Parameters
    ----------
    A : array_like or Matrix
        Coefficient matrix (m x n, m <= n, full row rank).
    b : array_like or Matrix
        Right-hand side (m,) or (m, p).
    method : str, optional
        'gauss_jordan' (default) or 'total_pivot'.
    cross_check : bool, optional
        Also solve with the other strategy and verify both agree. Default is False.
    epsilon : float, optional
        Relative pivot threshold. Default is 1e-12.
    tolerance : float, optional
        Tolerance of the cross-check. Default is 1e-9.
    echo : bool, optional
        Print the system and the reduced equations. Default is False.

    Returns
    -------
    LinearSystemSolver
        The canonical solver, already reduced.

    Raises
    ------
    ArgumentError
        If the method is unknown.
    SingularSystemError
        If A is rank deficient.
    SolverMismatchError
        If cross_check is enabled and the strategies disagree.

    Examples
    --------
        solver = solve_linear_system(N.T, N.T @ point, cross_check=True)
        dependency = solver.equation_matrix
    """
    if method not in _solver_map:
        raise ArgumentError(f'Unknown linear system method: {method}. Use one of {list(_solver_map)}.')

    solver = _solver_map[method](A, b, epsilon=epsilon, echo=echo)
    solver.solve()

    if cross_check:
        other_method = 'total_pivot' if method == 'gauss_jordan' else 'gauss_jordan'
        other = _solver_map[other_method](A, b, epsilon=epsilon, echo=echo)
        other.solve()
        if not systems_agree(solver, other, tolerance):
            raise SolverMismatchError(
                f'{method} and {other_method} disagree on system of shape {solver.shape}:\n'
                f'{solver.equation_matrix.to_string(8)}\nvs\n{other.equation_matrix.to_string(8)}')
    return solver
