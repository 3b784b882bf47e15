#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Distance of points to an affine subspace and the realized standard deviation of generated points.
"""

from ..Deps import *
from ..Errors import ArgumentError
from ..LinAlg.Matrix import Matrix, DoubleVector
from ..LinAlg.Utils import rmse


def distance(p, point, basis):
    """
    Orthogonal distance of p to the affine subspace point + span(basis).

    Parameters
    ----------
    p : Matrix, DoubleVector or array_like
        The point to measure.
    point : Matrix or array_like
        R x 1 point of the subspace.
    basis : Matrix
        R x k orthonormal basis of the subspace.

    Returns
    -------
    float
        Euclidean norm of (p - point) minus its projection onto the basis.
    """
    if isinstance(p, DoubleVector):
        p = p.column_vector()
    p_minus_a = Matrix(p).subtract(point)
    proj = p_minus_a.projection(basis)
    return p_minus_a.subtract(proj).euclidean_norm(0)


def standard_deviation(points, point, basis):
    """
    Root-mean-square orthogonal distance of points to the affine subspace point + span(basis).

    Parameters
    ----------
    points : sequence of DoubleVector or array_like
        The points.
    point : Matrix or array_like
        R x 1 point of the subspace.
    basis : Matrix
        R x k orthonormal basis of the subspace.

    Returns
    -------
    float
        sqrt(mean(distance^2)).

    Raises
    ------
    ArgumentError
        If no points are given.
    """
    if len(points) == 0:
        raise ArgumentError('Cannot compute the standard deviation of an empty point set')

    point = Matrix(point)
    basis = Matrix(basis)
    distances = [distance(p, point, basis) for p in points]
    return rmse(distances, 0.0)
