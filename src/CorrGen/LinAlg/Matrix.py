#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
This module provides the dense matrix type used by the dependency deriver and the point generator.

Points and directions are represented as R x 1 matrices. All operations return new matrices except the explicitly
named in-place mutators `set`, `set_column`, `set_matrix` and `normalize_columns`.

Classes
-------
- Matrix:
    Dense double precision matrix with column/row extraction, arithmetic, norms, projections and rank tests.
- DoubleVector:
    An independent copy of a point with readable fixed-digit formatting.

Examples
--------
    basis = Matrix([[1], [-0.5], [1]])
    basis.normalize_columns()
    e = Matrix.unit_matrix(3)
    basis.linearly_independent(e.column(0))
"""

from ..Deps import *
from ..Errors import DimensionMismatchError, IndexOutOfRangeError, DegenerateBasisError, ArgumentError
from .Utils import format_values, as_column


#%%
class Matrix:
    """
    Dense two-dimensional matrix of float64 values.

    Parameters
    ----------
    values : array_like or Matrix
        Matrix entries. A 1D input is interpreted as a column vector. The values are copied.

    Attributes
    ----------
    array : numpy.ndarray
        The underlying (rows, cols) array. Treat as read-only; use the in-place mutators to modify.
    """

    def __init__(self, values):
        if isinstance(values, Matrix):
            values = values.array
        arr = np.array(values, dtype=np.float64)
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        if arr.ndim != 2:
            raise ArgumentError(f'Matrix requires 2D values, got {arr.ndim}D')
        self.array = arr

    @classmethod
    def zeros(cls, rows, cols):
        return cls(np.zeros((rows, cols)))

    @classmethod
    def unit_matrix(cls, n):
        """
        Return the n x n identity matrix.
        """
        return cls(np.eye(n))

    #%% shape and element access
    @property
    def shape(self):
        return self.array.shape

    @property
    def rows(self):
        return self.array.shape[0]

    @property
    def cols(self):
        return self.array.shape[1]

    def copy(self):
        return Matrix(self.array)

    def to_array(self):
        return self.array.copy()

    def __array__(self, dtype=None, copy=None):
        return self.array.copy() if dtype is None else self.array.astype(dtype)

    def _check_row(self, i):
        if not 0 <= i < self.rows:
            raise IndexOutOfRangeError(f'Row index {i} out of range for matrix of shape {self.shape}')

    def _check_col(self, j):
        if not 0 <= j < self.cols:
            raise IndexOutOfRangeError(f'Column index {j} out of range for matrix of shape {self.shape}')

    def get(self, i, j):
        self._check_row(i)
        self._check_col(j)
        return float(self.array[i, j])

    def set(self, i, j, value):
        """
        Set a single element (in-place).
        """
        self._check_row(i)
        self._check_col(j)
        self.array[i, j] = value

    def column(self, j):
        """
        Return a fresh R x 1 copy of column j.
        """
        self._check_col(j)
        return Matrix(self.array[:, j:j + 1])

    def row(self, i):
        """
        Return a fresh 1 x C copy of row i.
        """
        self._check_row(i)
        return Matrix(self.array[i:i + 1, :])

    def set_column(self, j, vector):
        """
        Overwrite column j with an R x 1 vector (in-place).

        Raises
        ------
        DimensionMismatchError
            If the vector is not R x 1.
        """
        self._check_col(j)
        vector = Matrix(vector)
        if vector.shape != (self.rows, 1):
            raise DimensionMismatchError(
                f'set_column expects a ({self.rows}, 1) vector, got {vector.shape}')
        self.array[:, j] = vector.array[:, 0]

    def get_matrix(self, r0, r1, c0, c1):
        """
        Return a copy of the sub-block with rows r0..r1 and columns c0..c1 (inclusive bounds).
        """
        for i in (r0, r1):
            self._check_row(i)
        for j in (c0, c1):
            self._check_col(j)
        return Matrix(self.array[r0:r1 + 1, c0:c1 + 1])

    def set_matrix(self, r0, c0, block):
        """
        Write a block into this matrix starting at (r0, c0) (in-place).

        Raises
        ------
        IndexOutOfRangeError
            If the block does not fit.
        """
        block = Matrix(block)
        self._check_row(r0)
        self._check_col(c0)
        self._check_row(r0 + block.rows - 1)
        self._check_col(c0 + block.cols - 1)
        self.array[r0:r0 + block.rows, c0:c0 + block.cols] = block.array

    #%% arithmetic
    def _check_same_shape(self, other, op):
        if self.shape != other.shape:
            raise DimensionMismatchError(f'Cannot {op} matrices of shape {self.shape} and {other.shape}')

    def add(self, other):
        other = Matrix(other)
        self._check_same_shape(other, 'add')
        return Matrix(self.array + other.array)

    def subtract(self, other):
        other = Matrix(other)
        self._check_same_shape(other, 'subtract')
        return Matrix(self.array - other.array)

    def multiply(self, other):
        """
        Matrix product with another matrix, or scaling by a scalar.

        Raises
        ------
        DimensionMismatchError
            If the inner dimensions do not agree.
        """
        if np.isscalar(other):
            return Matrix(self.array * float(other))
        other = Matrix(other)
        if self.cols != other.rows:
            raise DimensionMismatchError(f'Cannot multiply matrices of shape {self.shape} and {other.shape}')
        return Matrix(self.array @ other.array)

    def transpose(self):
        return Matrix(self.array.T)

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __matmul__(self, other):
        return self.multiply(other)

    def __mul__(self, scalar):
        if not np.isscalar(scalar):
            return NotImplemented
        return self.multiply(scalar)

    __rmul__ = __mul__

    def __neg__(self):
        return Matrix(-self.array)

    #%% norms and geometry
    def scalar_product(self, col, other, other_col):
        """
        Dot product of column `col` of this matrix with column `other_col` of `other`.
        """
        self._check_col(col)
        other = Matrix(other)
        other._check_col(other_col)
        if self.rows != other.rows:
            raise DimensionMismatchError(f'Row dimensions differ: {self.rows} vs {other.rows}')
        return float(self.array[:, col] @ other.array[:, other_col])

    def euclidean_norm(self, col=0):
        self._check_col(col)
        return float(np.linalg.norm(self.array[:, col]))

    def normalize_columns(self):
        """
        Divide each column by its Euclidean norm (in-place).

        Raises
        ------
        DegenerateBasisError
            If a column has zero norm.
        """
        norms = np.linalg.norm(self.array, axis=0)
        zero = np.flatnonzero(norms == 0.0)
        if zero.size:
            raise DegenerateBasisError(f'Cannot normalize zero-norm column(s) {zero.tolist()} of matrix {self.shape}')
        self.array /= norms

    def append_columns(self, other):
        """
        Return a new matrix with the columns of `other` appended.
        """
        other = Matrix(other)
        if self.rows != other.rows:
            raise DimensionMismatchError(f'Cannot append columns of shape {other.shape} to matrix {self.shape}')
        return Matrix(np.hstack((self.array, other.array)))

    def rank(self, tol=None):
        """
        Numerical rank from the singular values.

        Parameters
        ----------
        tol : float, optional
            Singular values below tol are treated as zero. Default is the numpy threshold
            max(rows, cols) * eps * largest singular value.
        """
        if self.array.size == 0:
            return 0
        return int(np.linalg.matrix_rank(self.array, tol=tol))

    def linearly_independent(self, candidate, tol=None):
        """
        Check whether appending `candidate` to the columns of this matrix yields full column rank.

        Parameters
        ----------
        candidate : array_like or Matrix
            Column vector(s) with the same row dimension as this matrix.
        tol : float, optional
            Rank tolerance, see `rank`.

        Returns
        -------
        bool
            True if the columns of [self | candidate] are linearly independent. The inputs are not modified.
        """
        extended = self.append_columns(candidate)
        return extended.rank(tol) == extended.cols

    def projection(self, basis):
        """
        Orthogonal projection of this vector onto the column space of `basis`.

        The basis columns are assumed (not verified) to be orthonormal.

        Parameters
        ----------
        basis : Matrix
            R x k matrix with orthonormal columns.

        Returns
        -------
        Matrix
            The projected R x 1 vector.
        """
        basis = Matrix(basis)
        if basis.rows != self.rows:
            raise DimensionMismatchError(f'Cannot project vector of shape {self.shape} onto basis {basis.shape}')
        b = basis.array
        return Matrix(b @ (b.T @ self.array))

    #%% formatting
    def to_string(self, digits=4, pre=''):
        return '\n'.join(pre + format_values(row, ' ', digits) for row in self.array)

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f'Matrix(shape={self.shape})\n{self.to_string()}'


#%%
class DoubleVector:
    """
    A generated point. Holds its own copy of the coordinates so stored points never alias each other.

    Parameters
    ----------
    values : array_like or Matrix
        Coordinates as a 1D sequence or an R x 1 matrix.
    """

    def __init__(self, values):
        if isinstance(values, Matrix):
            values = values.array
        self.values = as_column(values, 'DoubleVector').ravel().copy()

    @property
    def dimensionality(self):
        return self.values.size

    def __len__(self):
        return self.values.size

    def __getitem__(self, i):
        return float(self.values[i])

    def column_vector(self):
        """
        Return the point as a fresh R x 1 matrix.
        """
        return Matrix(self.values.reshape(-1, 1))

    def to_string(self, digits=4):
        return format_values(self.values, ' ', digits)

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f'DoubleVector({self.to_string()})'
