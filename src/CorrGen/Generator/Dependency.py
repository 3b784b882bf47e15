#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
This module derives the linear dependency (the system of linear equations) that characterizes an affine subspace
given by a point and a basis, and defines the value objects passed between the deriver and the generator.

Classes
-------
- Dependency:
    Orthonormal subspace basis, orthonormal normal vectors and the equation matrix.
- GeneratorResult:
    Generated points together with the dependency that produced them.

Functions
---------
- orthonormalize(u, tol=1e-10):
    Gram-Schmidt orthonormalization of the columns of u in the given order.
- complete_basis(basis):
    Standard basis vectors that complete basis to a basis of the full space.
- in_bounds(vector, min_value, max_value):
    Check that every coordinate lies in [min_value, max_value].
- check_subspace(point, basis, min_value, max_value):
    Validate a point/basis pair.
- determine_dependency(point, basis, min_value=0.0, max_value=1.0, param=None):
    Derive the Dependency of the affine subspace point + span(basis).

Notes
-----
The normal vectors N are the last R - k columns of the orthonormalized [U | completion]. Every point x of the
subspace satisfies N^T x = N^T point, which is the system solved here; the reduced augmented matrix of that system is
the equation matrix.
"""

from ..Deps import *
from ..Errors import ArgumentError, DegenerateBasisError
from ..LinAlg.Matrix import Matrix
from ..LinAlg.LinearSystem import solve_linear_system
from ..Params.Params import DefaultParameters


#%%
class Dependency:
    """
    Linear dependency of an affine subspace.

    Parameters
    ----------
    basis_vectors : Matrix
        R x k orthonormal basis of the subspace.
    normal_vectors : Matrix
        R x (R - k) orthonormal basis of the orthogonal complement.
    dependency : Matrix
        (R - k) x (R + 1) equation matrix; row [a | c] is the constraint a . x = c.

    Notes
    -----
    The matrices are copied on construction and on access, so a Dependency is read-only.
    """

    def __init__(self, basis_vectors, normal_vectors, dependency):
        self._basis_vectors = Matrix(basis_vectors)
        self._normal_vectors = Matrix(normal_vectors)
        self._dependency = Matrix(dependency)

    @property
    def basis_vectors(self):
        return self._basis_vectors.copy()

    @property
    def normal_vectors(self):
        return self._normal_vectors.copy()

    @property
    def dependency(self):
        return self._dependency.copy()

    @property
    def dimensionality(self):
        return self._basis_vectors.rows

    @property
    def correlation_dimensionality(self):
        return self._basis_vectors.cols

    def coefficients(self):
        """
        Return the constraint coefficients (left block of the equation matrix) as an array.
        """
        return self._dependency.array[:, :self.dimensionality].copy()

    def constants(self):
        """
        Return the constraint constants (last column of the equation matrix) as an array.
        """
        return self._dependency.array[:, self.dimensionality].copy()

    def violation(self, vector):
        """
        Largest absolute violation max |A x - c| of the constraints by a point.
        """
        x = np.asarray(vector, dtype=np.float64).reshape(-1)
        if x.size != self.dimensionality:
            raise ArgumentError(f'Point of dimensionality {x.size} does not match dependency of '
                                f'dimensionality {self.dimensionality}')
        return float(np.abs(self.coefficients() @ x - self.constants()).max())

    def to_string(self, digits=4):
        return ('basisVectors : \n' + self._basis_vectors.to_string(digits) +
                '\nnormalVectors: \n' + self._normal_vectors.to_string(digits) +
                '\ndependency   : \n' + self._dependency.to_string(digits))

    def __str__(self):
        return self.to_string()


class GeneratorResult:
    """
    Points generated for one request and the dependency that produced them.

    Attributes
    ----------
    points : list of DoubleVector
        Generated points in insertion order.
    dependency : Dependency
        The dependency of the subspace.
    std : float
        Measured standard deviation of the orthogonal distances to the subspace.
    jitter : bool
        Whether the points were jittered.
    jitter_pct : float
        Configured jitter percentage.
    jitter_std : float
        Nominal jitter standard deviation.
    label : str or None
        Optional label written after every point.
    """

    def __init__(self, points, dependency, std, jitter=False, jitter_pct=0.0, jitter_std=0.0, label=None):
        self.points = list(points)
        self.dependency = dependency
        self.std = std
        self.jitter = jitter
        self.jitter_pct = jitter_pct
        self.jitter_std = jitter_std
        self.label = label

    def __len__(self):
        return len(self.points)

    def to_array(self):
        """
        Return the points as an (n, R) array.
        """
        if not self.points:
            return np.zeros((0, self.dependency.dimensionality))
        return np.vstack([p.values for p in self.points])


#%%
def orthonormalize(u, tol=1e-10):
    """
    Gram-Schmidt orthonormalization of the columns of u, in column order.

    Each column is orthogonalized against the previous (already orthonormal) columns twice, which keeps the result
    orthonormal to machine precision also for larger dimensionalities.

    Parameters
    ----------
    u : Matrix or array_like
        R x k matrix with linearly independent columns.
    tol : float, optional
        A column whose remaining norm falls below tol times its original norm is considered linearly dependent.
        Default is 1e-10.

    Returns
    -------
    Matrix
        R x k matrix with orthonormal columns spanning the same space; column i spans the same flag as u[:, :i+1].

    Raises
    ------
    DegenerateBasisError
        If a column is zero or linearly dependent on the previous columns.
    """
    u = Matrix(u)
    v = u.to_array()
    for i in range(u.cols):
        norm_i = np.linalg.norm(v[:, i])
        if norm_i == 0.0:
            raise DegenerateBasisError(f'Column {i} of the basis {u.shape} is zero')
        w = v[:, i].copy()
        for _ in range(2):
            w -= v[:, :i] @ (v[:, :i].T @ w)
        norm_w = np.linalg.norm(w)
        if norm_w <= tol * norm_i:
            raise DegenerateBasisError(
                f'Column {i} ({u.column(i).transpose().to_string()}) of the basis {u.shape} is linearly '
                f'dependent on the previous columns')
        v[:, i] = w / norm_w

    result = Matrix(v)
    result.normalize_columns()
    return result


def complete_basis(basis):
    """
    Complete a basis of a subspace to a basis of the full space with standard basis vectors.

    The standard basis vectors e_1, ..., e_R are tried in ascending index order; a vector is accepted if it is
    linearly independent of the basis and the vectors accepted so far. The search stops when R - k vectors have
    been accepted.

    Parameters
    ----------
    basis : Matrix
        R x k matrix with linearly independent columns, k < R.

    Returns
    -------
    Matrix
        R x (R - k) matrix of the accepted standard basis vectors.
    """
    basis = Matrix(basis)
    dim, k = basis.shape
    e = Matrix.unit_matrix(dim)

    accumulated = basis.copy()
    accepted = []
    for i in range(dim):
        if len(accepted) == dim - k:
            break
        e_i = e.column(i)
        if accumulated.linearly_independent(e_i):
            accepted.append(i)
            accumulated = accumulated.append_columns(e_i)

    if len(accepted) != dim - k:
        raise DegenerateBasisError(
            f'Could only complete {len(accepted)} of {dim - k} directions for basis of shape {basis.shape}')
    return Matrix(e.array[:, accepted])


def in_bounds(vector, min_value, max_value):
    """
    Check that every coordinate of a vector lies in [min_value, max_value].
    """
    values = np.asarray(vector, dtype=np.float64)
    return bool(np.all(values >= min_value) and np.all(values <= max_value))


def check_subspace(point, basis, min_value, max_value):
    """
    Validate a point/basis pair describing an affine subspace.

    Parameters
    ----------
    point : Matrix
        R x 1 point in the subspace.
    basis : Matrix
        R x k basis of the subspace.
    min_value, max_value : float
        Bounds of the data space.

    Raises
    ------
    ArgumentError
        If the point is not a column vector, the row dimensions differ, the basis does not have 1 <= k < R
        columns, the basis contains non-finite values, or the point lies outside the bounds.
    """
    if point.cols != 1:
        raise ArgumentError(f'point must be a column vector, got shape {point.shape}')
    if point.rows != basis.rows:
        raise ArgumentError(f'Row dimension of point ({point.rows}) != row dimension of basis ({basis.rows})')
    if basis.cols < 1 or basis.cols >= basis.rows:
        raise ArgumentError(
            f'basis must have between 1 and {basis.rows - 1} columns for dimensionality {basis.rows}, '
            f'got shape {basis.shape}')
    if not (np.all(np.isfinite(basis.array)) and np.all(np.isfinite(point.array))):
        raise ArgumentError('point and basis must contain finite values')
    if min_value >= max_value:
        raise ArgumentError(f'min ({min_value}) must be smaller than max ({max_value})')
    if not in_bounds(point.array, min_value, max_value):
        raise ArgumentError(
            f'point {point.transpose().to_string()} not in [{min_value}, {max_value}]')


def determine_dependency(point, basis, min_value=0.0, max_value=1.0, param=None):
    """
    Derive the linear dependency of the affine subspace point + span(basis).

    Parameters
    ----------
    point : Matrix or array_like
        R x 1 point inside [min_value, max_value]^R.
    basis : Matrix or array_like
        R x k matrix whose columns span the subspace, k < R.
    min_value, max_value : float, optional
        Bounds of the data space. Default is [0, 1].
    param : dict, optional
        Linear system parameters (see DefaultParameters 'linear_system'). Default is None (defaults).

    Returns
    -------
    Dependency
        basis_vectors U (orthonormalized basis), normal_vectors N and the equation matrix.

    Raises
    ------
    ArgumentError
        If the inputs are malformed or the point lies outside the bounds.
    DegenerateBasisError
        If the basis columns are linearly dependent.
    SingularSystemError, SolverMismatchError
        If the equation system cannot be solved (consistently).

    Examples
    --------
        dependency = determine_dependency([0.5, 0.5, 0.5], [[1], [-0.5], [1]])
        dependency.dependency  # 2 x 4 equation matrix
    """
    point = Matrix(point)
    basis = Matrix(basis)
    check_subspace(point, basis, min_value, max_value)

    if param is None:
        param = DefaultParameters().parameters['linear_system']

    # orthonormal basis of the subspace U
    basis_u = orthonormalize(basis)
    completion = complete_basis(basis_u)

    # orthonormal basis of the whole space V, its last R - k columns are normal to U
    basis_v = orthonormalize(basis_u.append_columns(completion))
    normal_vectors = basis_v.get_matrix(0, basis_v.rows - 1, basis.cols, basis_v.cols - 1)

    transposed_normals = normal_vectors.transpose()
    rhs = transposed_normals.multiply(point)
    solver = solve_linear_system(transposed_normals, rhs,
                                 method=param.get('method', 'gauss_jordan'),
                                 cross_check=param.get('cross_check', False),
                                 epsilon=param.get('epsilon', 1e-12),
                                 tolerance=param.get('tolerance', 1e-9),
                                 echo=param.get('echo', False))

    return Dependency(basis_u, normal_vectors, solver.equation_matrix)
