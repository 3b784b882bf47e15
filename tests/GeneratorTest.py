#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests of the correlation generator: rejection sampling, jitter, re-jittering, helpers and batch generation.
"""

from context import *
from CorrGen.Generator import (CorrelationGenerator, GeneratorResult, generate_batch, write_batch, distance,
                               standard_deviation)
import contextlib
import pytest

point3 = [0.5, 0.5, 0.5]
line3 = [[1.0], [-0.5], [1.0]]


def test_points_on_line(number_of_points=1000):
    print("Testing points on the line (1, -0.5, 1) through the centroid...")
    generator = CorrelationGenerator({'seed': 1})
    result = generator.generate(number_of_points, point3, line3, label='g1')
    data = result.to_array()

    assert isinstance(result, GeneratorResult)
    assert len(result) == number_of_points
    assert data.shape == (number_of_points, 3)
    assert np.all(data >= 0.0) and np.all(data <= 1.0)
    assert result.std < TOL
    assert not result.jitter and result.jitter_std == 0.0
    assert result.label == 'g1'

    a = result.dependency.coefficients()
    c = result.dependency.constants()
    assert np.abs(data @ a.T - c).max() < TOL
    # the points spread along the line in both directions
    u = result.dependency.basis_vectors.array[:, 0]
    offsets = (data - np.array(point3)) @ u
    assert offsets.min() < -0.5 and offsets.max() > 0.5


def test_jitter_standard_deviation(number_of_points=2000):
    print("Testing the measured standard deviation with 1% jitter...")
    generator = CorrelationGenerator({'jitter': True, 'jitter_pct': 1.0, 'seed': 2})
    result = generator.generate(number_of_points, point3, line3)
    nominal = 0.01 * np.sqrt(3.0)
    print("nominal std:", nominal, "measured std:", result.std)
    assert result.jitter and result.jitter_pct == 1.0
    assert np.isclose(result.jitter_std, nominal)
    assert abs(result.std - nominal) < 0.1 * nominal
    data = result.to_array()
    assert np.all(data >= 0.0) and np.all(data <= 1.0)


def test_jitter_per_direction(number_of_points=2000):
    print("Testing the full standard deviation along every normal vector...")
    generator = CorrelationGenerator({'jitter': True, 'jitter_pct': 1.0, 'jitter_per_direction': True,
                                      'seed': 3})
    result = generator.generate(number_of_points, point3, line3)
    expected = 0.01 * np.sqrt(3.0) * np.sqrt(2.0)
    print("expected std:", expected, "measured std:", result.std)
    assert abs(result.std - expected) < 0.1 * expected


def test_jitter_keeps_type():
    print("Testing jitter of a single point...")
    generator = CorrelationGenerator({'seed': 4})
    dependency = generator.determine_dependency(point3, line3)
    normals = dependency.normal_vectors
    moved = generator.jitter(DoubleVector(point3), normals, 0.01)
    assert isinstance(moved, DoubleVector)
    # the displacement is orthogonal to the line
    assert abs(np.dot(moved.values - np.array(point3), dependency.basis_vectors.array[:, 0])) < TOL
    moved = generator.jitter(Matrix(point3), normals, 0.0)
    assert isinstance(moved, Matrix)
    assert np.allclose(moved.array.ravel(), point3)


def test_reproducibility():
    print("Testing that a seed reproduces the points...")
    param = {'jitter': True, 'jitter_pct': 0.5, 'seed': 12345}
    first = CorrelationGenerator(param).generate(200, point3, line3).to_array()
    second = CorrelationGenerator(param).generate(200, point3, line3).to_array()
    other = CorrelationGenerator(dict(param, seed=54321)).generate(200, point3, line3).to_array()
    assert np.array_equal(first, second)
    assert not np.array_equal(first, other)


def test_generation_unreachable():
    print("Testing the attempt budget...")
    generator = CorrelationGenerator({'max_attempts': 10, 'seed': 5})
    with pytest.raises(GenerationUnreachableError):
        generator.generate(100, point3, line3)
    # a point on the corner of the box leaves little room for the points
    generator = CorrelationGenerator({'max_attempts': 50, 'seed': 5})
    with pytest.raises(GenerationUnreachableError):
        generator.generate(1000, [0.0, 0.0, 0.0], [[1.0], [1.0], [1.0]])


def test_invalid_requests():
    print("Testing invalid generation requests...")
    generator = CorrelationGenerator()
    with pytest.raises(ArgumentError):
        generator.generate(0, point3, line3)
    with pytest.raises(ArgumentError):
        generator.generate(10, [0.5, 0.5], line3)
    with pytest.raises(ArgumentError):
        generator.generate(10, [0.5, 1.5, 0.5], line3)
    with pytest.raises(DegenerateBasisError):
        generator.generate(10, point3, [[1.0, -2.0], [-0.5, 1.0], [1.0, -2.0]])
    with pytest.raises(ArgumentError):
        CorrelationGenerator({'min': 1.0, 'max': 1.0})
    with pytest.raises(ArgumentError):
        CorrelationGenerator({'jitter_pct': -1.0})


def test_custom_bounds():
    print("Testing generation in [-1, 3]^2...")
    generator = CorrelationGenerator({'min': -1.0, 'max': 3.0, 'seed': 6})
    centroid = generator.centroid(2)
    assert np.allclose(centroid.array.ravel(), [1.0, 1.0])
    assert np.isclose(generator.max_distance(2), 4.0 * np.sqrt(2.0))
    result = generator.generate(300, centroid, [[1.0], [2.0]])
    data = result.to_array()
    assert np.all(data >= -1.0) and np.all(data <= 3.0)
    assert generator.in_min_max(result.points[0])
    assert not generator.in_min_max(DoubleVector([3.5, 0.0]))


def test_random_basis_helpers(dim=6):
    print("Testing random correlation dimensionality and basis...")
    generator = CorrelationGenerator({'seed': 7})
    for _ in range(50):
        k = generator.random_correlation_dimensionality(dim)
        assert 1 <= k < dim
    basis = generator.correlation_basis(dim, 2).array
    assert basis.shape == (dim, 2)
    assert np.array_equal(basis[:2, :], np.eye(2))
    assert np.all(basis[2:, :] >= 0) and np.all(basis[2:, :] <= 9)
    assert np.array_equal(basis, np.round(basis))
    with pytest.raises(ArgumentError):
        generator.random_correlation_dimensionality(1)
    with pytest.raises(ArgumentError):
        generator.correlation_basis(dim, dim)

    # a random basis through the centroid yields a valid subspace
    point = generator.centroid(dim)
    result = generator.generate(100, point, generator.correlation_basis(dim, 3))
    assert result.dependency.dependency.shape == (dim - 3, dim + 1)
    assert max(result.dependency.violation(p.values) for p in result.points) < 1e-9


def test_rejitter(number_of_points=2000):
    print("Testing re-jittering of an existing result...")
    generator = CorrelationGenerator({'seed': 8})
    result = generator.generate(number_of_points, point3, line3, label='g1')
    jittered = generator.rejitter(result, point3, jitter_pct=1.0)
    nominal = 0.01 * np.sqrt(3.0)
    print("nominal std:", nominal, "measured std:", jittered.std)
    assert jittered.jitter and jittered.jitter_pct == 1.0
    assert jittered.label == 'g1'
    assert len(jittered) == number_of_points
    assert jittered.dependency is result.dependency
    assert abs(jittered.std - nominal) < 0.1 * nominal
    # the original result is unchanged
    assert result.std < TOL
    with pytest.raises(ArgumentError):
        generator.rejitter(result, [0.5, 0.5])


def test_diagnostics():
    print("Testing distance and standard deviation...")
    generator = CorrelationGenerator()
    dependency = generator.determine_dependency(point3, line3)
    u = dependency.basis_vectors
    n = dependency.normal_vectors.array
    p = np.array(point3) + 0.1 * n[:, 0] + 0.3 * u.array[:, 0]
    assert np.isclose(distance(DoubleVector(p), point3, u), 0.1)
    assert np.isclose(generator.distance(Matrix(p), point3, u), 0.1)
    q = np.array(point3) - 0.2 * n[:, 1]
    std = standard_deviation([DoubleVector(p), DoubleVector(q)], point3, u)
    assert np.isclose(std, np.sqrt((0.1 ** 2 + 0.2 ** 2) / 2))
    with pytest.raises(ArgumentError):
        standard_deviation([], point3, u)


def test_verbose_and_output():
    print("Testing verbose printing and the output sink...")
    generator = CorrelationGenerator({'verbose': True, 'seed': 9})
    printed = io.StringIO()
    written = io.StringIO()
    with contextlib.redirect_stdout(printed):
        generator.generate(20, point3, line3, out=written, label='g1')
    assert 'Generated dependency' in printed.getvalue()
    assert 'standard deviation' in printed.getvalue()

    lines = written.getvalue().splitlines()
    assert lines[0] == '#' * 56
    assert lines[1] == '### 1.0000 0.0000 -1.0000 0.0000'
    assert lines[2] == '### 0.0000 1.0000 0.5000 0.7500'
    assert lines[3] == '#' * 56
    assert len(lines) == 24
    assert all(line.endswith(' g1') for line in lines[4:])


def test_generate_batch():
    print("Testing parallel batch generation...")
    requests = [{'number_of_points': 100, 'point': [0.5, 0.5], 'basis': [1.0, 1.0], 'label': 'g1'},
                {'number_of_points': 150, 'point': [0.5, 0.25], 'basis': [[1.0], [2.0]], 'label': 'g2'},
                {'number_of_points': 50, 'point': point3, 'basis': line3, 'jitter': True}]
    param = {'backend': 'threading', 'correlation_generator': {'seed': 10, 'jitter_pct': 1.0}}
    serial = generate_batch(requests, param, n_jobs=1)
    parallel = generate_batch(requests, param, n_jobs=2)

    assert [len(r) for r in serial] == [100, 150, 50]
    assert [r.label for r in serial] == ['g1', 'g2', None]
    assert serial[2].jitter and not serial[0].jitter
    for a, b in zip(serial, parallel):
        assert np.array_equal(a.to_array(), b.to_array())
    # independent streams per request
    assert not np.array_equal(serial[0].to_array()[:10], serial[1].to_array()[:10])

    # joblib convention: -1 means every physical core
    every_core = generate_batch(requests, param, n_jobs=-1)
    for a, b in zip(serial, every_core):
        assert np.array_equal(a.to_array(), b.to_array())
    with pytest.raises(ArgumentError):
        generate_batch(requests, param, n_jobs=0)

    assert generate_batch([], param) == []
    with pytest.raises(ArgumentError):
        generate_batch([{'number_of_points': 10, 'point': point3}], param, n_jobs=1)

    out = io.StringIO()
    write_batch(out, serial)
    text = out.getvalue()
    assert text.count('#' * 56) == 6
    assert text.count(' g2\n') == 150


if __name__ == "__main__":
    test_points_on_line()
    test_jitter_standard_deviation()
    test_jitter_per_direction()
    test_jitter_keeps_type()
    test_reproducibility()
    test_generation_unreachable()
    test_invalid_requests()
    test_custom_bounds()
    test_random_basis_helpers()
    test_rejitter()
    test_diagnostics()
    test_verbose_and_output()
    test_generate_batch()
    print("All generator tests passed.")
