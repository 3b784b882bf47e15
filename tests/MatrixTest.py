#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests of the dense matrix kernel.
"""

from context import *
import pytest

A = Matrix([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
B = Matrix([[0.5, -1.0], [2.0, 0.0], [1.0, 1.0]])


def test_arithmetic():
    print("Testing add/subtract/multiply...")
    assert np.allclose((A + B).array, A.array + B.array)
    assert np.allclose(A.subtract(B).array, A.array - B.array)
    assert np.allclose(A.multiply(B.transpose()).array, A.array @ B.array.T)
    assert np.allclose((2.0 * A).array, 2.0 * A.array)
    assert np.allclose((A * 3).array, 3.0 * A.array)
    # pure operations leave the operands untouched
    assert np.array_equal(A.array, [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])


def test_dimension_mismatch():
    print("Testing dimension mismatch...")
    with pytest.raises(DimensionMismatchError):
        A.add(Matrix.unit_matrix(3))
    with pytest.raises(DimensionMismatchError):
        A.subtract(A.transpose())
    with pytest.raises(DimensionMismatchError):
        A.multiply(A)
    with pytest.raises(DimensionMismatchError):
        A.copy().set_column(0, Matrix([1.0, 2.0]))
    # dimension mismatch is also an argument error
    with pytest.raises(ArgumentError):
        A @ B


def test_column_access():
    print("Testing column/row extraction...")
    m = A.copy()
    c = m.column(1)
    assert c.shape == (3, 1)
    c.set(0, 0, 100.0)
    assert m.get(0, 1) == 2.0, "column() must return a copy"
    assert m.row(2).shape == (1, 2)

    m.set_column(0, Matrix([7.0, 8.0, 9.0]))
    assert np.array_equal(m.array[:, 0], [7.0, 8.0, 9.0])

    with pytest.raises(IndexOutOfRangeError):
        m.column(2)
    with pytest.raises(IndexOutOfRangeError):
        m.column(-1)
    with pytest.raises(IndexError):
        m.row(3)


def test_sub_blocks():
    print("Testing get_matrix/set_matrix/append_columns...")
    e = Matrix.unit_matrix(4)
    block = e.get_matrix(0, 3, 2, 3)
    assert np.array_equal(block.array, np.eye(4)[:, 2:])

    m = Matrix.zeros(3, 4)
    m.set_matrix(0, 1, A)
    assert np.array_equal(m.array[:, 1:3], A.array)
    with pytest.raises(IndexOutOfRangeError):
        m.set_matrix(1, 3, A)

    appended = A.append_columns(B)
    assert appended.shape == (3, 4)
    assert A.shape == (3, 2)


def test_norms_and_normalization():
    print("Testing norms and normalize_columns...")
    v = Matrix([3.0, 4.0])
    assert v.euclidean_norm() == 5.0
    assert v.scalar_product(0, Matrix([1.0, 1.0]), 0) == 7.0

    m = A.copy()
    m.normalize_columns()
    assert np.allclose(np.linalg.norm(m.array, axis=0), 1.0, atol=TOL)

    with pytest.raises(DegenerateBasisError):
        Matrix([[1.0, 0.0], [2.0, 0.0]]).normalize_columns()


def test_linear_independence():
    print("Testing linearly_independent...")
    basis = Matrix([[1.0], [-0.5], [1.0]])
    e = Matrix.unit_matrix(3)
    assert basis.linearly_independent(e.column(0))
    assert not basis.linearly_independent(Matrix([2.0, -1.0, 2.0]))
    two = basis.append_columns(e.column(0))
    assert two.linearly_independent(e.column(1))
    assert not two.linearly_independent(Matrix([1.0, -0.5, 1.0]) + e.column(0))
    assert basis.shape == (3, 1), "inputs must not be modified"


def test_projection():
    print("Testing projection onto an orthonormal basis...")
    basis = Matrix([[1.0, 0.0], [0.0, 1.0], [0.0, 0.0]])
    p = Matrix([0.3, -0.2, 0.9])
    proj = p.projection(basis)
    assert np.allclose(proj.array.ravel(), [0.3, -0.2, 0.0])

    u = Matrix([1.0, 1.0, 1.0])
    u.normalize_columns()
    proj = Matrix([1.0, 2.0, 3.0]).projection(u)
    assert np.allclose(proj.array.ravel(), [2.0, 2.0, 2.0])
    with pytest.raises(DimensionMismatchError):
        Matrix([1.0, 2.0]).projection(u)


def test_double_vector():
    print("Testing DoubleVector...")
    m = Matrix([0.12346, -0.00001, 1.0])
    v = DoubleVector(m)
    m.set(0, 0, 9.0)
    assert v[0] == 0.12346, "DoubleVector must own its values"
    assert str(v) == '0.1235 0.0000 1.0000'
    assert len(v) == 3
    assert v.column_vector().shape == (3, 1)
    assert Matrix.unit_matrix(2).to_string() == '1.0000 0.0000\n0.0000 1.0000'


if __name__ == "__main__":
    test_arithmetic()
    test_dimension_mismatch()
    test_column_access()
    test_sub_blocks()
    test_norms_and_normalization()
    test_linear_independence()
    test_projection()
    test_double_vector()
    print("All matrix tests passed.")
