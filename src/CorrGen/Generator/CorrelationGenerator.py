#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
This module provides the correlation generator, which produces points on (or, with jitter, near) an affine
subspace inside the data space hypercube [min, max]^R, together with the equation system of the subspace.

Classes
-------
- CorrelationGenerator:
    Generates correlated points for one subspace per request, with its own random stream.

Functions
---------
- generate_batch(requests, param=None, n_jobs=None):
    Run independent generation requests in parallel, each with an independently seeded random stream.
- write_batch(out, results, param=None):
    Write several results into one text sink, in order.

Examples
--------
```python
import numpy as np
from CorrGen.Generator import CorrelationGenerator

generator = CorrelationGenerator({'jitter': True, 'jitter_pct': 1.0})
point = generator.centroid(3)
basis = np.array([[1.0], [-0.5], [1.0]])
result = generator.generate(1000, point, basis, out='g1.txt')
print(result.std, result.jitter_std)
```

Notes
-----
- Points are drawn by rejection sampling: candidates leaving the hypercube are discarded and redrawn. The number of
  draws of one request is capped by the 'max_attempts' parameter.
- A generator owns its random stream; a fixed seed reproduces the same points in the same order.
"""

from ..Deps import *
from ..Errors import ArgumentError, GenerationUnreachableError
from ..LinAlg.Matrix import Matrix, DoubleVector
from ..LinAlg.Utils import dict_deep_update, distribute_numbers, convert_to_2d
from ..Params.Params import DefaultParameters
from ..Interface.Output import write_output, check_label
from .Dependency import GeneratorResult, determine_dependency, check_subspace, in_bounds
from .Diagnostics import distance, standard_deviation


#%%
class CorrelationGenerator:
    """
    Generator of points on an affine subspace of the data space [min, max]^R.

    Parameters
    ----------
    param : dict, optional
        Updates of the default 'correlation_generator' parameters (see DefaultParameters). Default is None.
    rng : numpy.random.Generator, optional
        Random stream to use instead of one seeded from param['seed']. Default is None.

    Attributes
    ----------
    param : dict
        The generator parameters; may be modified between requests.
    rng : numpy.random.Generator
        The random stream of this generator.
    """

    def __init__(self, param=None, rng=None):
        self.param = DefaultParameters().parameters['correlation_generator']
        if param is not None:
            dict_deep_update(self.param, copy.deepcopy(param))
        self._check_param()
        self.rng = np.random.default_rng(self.param['seed']) if rng is None else rng

    def _check_param(self):
        if self.param['min'] >= self.param['max']:
            raise ArgumentError(f"min ({self.param['min']}) must be smaller than max ({self.param['max']})")
        if self.param['jitter_pct'] < 0:
            raise ArgumentError(f"jitter_pct must be non-negative, got {self.param['jitter_pct']}")
        if self.param['max_attempts'] < 1:
            raise ArgumentError(f"max_attempts must be positive, got {self.param['max_attempts']}")

    #%% bounds and jitter level
    @property
    def min(self):
        return self.param['min']

    @property
    def max(self):
        return self.param['max']

    def in_min_max(self, vector):
        """
        Check that every coordinate of a point lies in [min, max].
        """
        if isinstance(vector, DoubleVector):
            vector = vector.values
        elif isinstance(vector, Matrix):
            vector = vector.array
        return in_bounds(vector, self.min, self.max)

    def max_distance(self, dim):
        """
        Length of the diagonal of the data space hypercube of dimensionality dim.
        """
        return (self.max - self.min) * math.sqrt(dim)

    def jitter_standard_deviation(self, dim, jitter_pct=None):
        """
        Nominal jitter standard deviation: jitter_pct percent of the hypercube diagonal.

        Parameters
        ----------
        dim : int
            Dimensionality of the data space.
        jitter_pct : float, optional
            Jitter percentage. Default is param['jitter_pct'].
        """
        jitter_pct = self.param['jitter_pct'] if jitter_pct is None else jitter_pct
        return jitter_pct / 100.0 * self.max_distance(dim)

    #%% geometry helpers
    def centroid(self, dim):
        """
        Center of the data space hypercube as a dim x 1 matrix.
        """
        return Matrix(np.full((dim, 1), (self.max - self.min) / 2 + self.min))

    def random_correlation_dimensionality(self, dim):
        """
        Draw a correlation dimensionality uniformly from 1 .. dim - 1.
        """
        if dim < 2:
            raise ArgumentError(f'Correlations need a dimensionality of at least 2, got {dim}')
        return int(self.rng.integers(1, dim))

    def correlation_basis(self, dim, correlation_dimensionality):
        """
        Random basis of a correlation_dimensionality-dimensional subspace.

        The first correlation_dimensionality rows form the identity, the remaining rows hold random integers in
        [0, 10), so the columns are always linearly independent.

        Returns
        -------
        Matrix
            dim x correlation_dimensionality basis.
        """
        if not 1 <= correlation_dimensionality < dim:
            raise ArgumentError(
                f'Correlation dimensionality must be in [1, {dim - 1}], got {correlation_dimensionality}')
        b = np.zeros((dim, correlation_dimensionality))
        b[:correlation_dimensionality, :] = np.eye(correlation_dimensionality)
        b[correlation_dimensionality:, :] = self.rng.integers(0, 10, size=(dim - correlation_dimensionality,
                                                                           correlation_dimensionality))
        return Matrix(b)

    #%% generation
    def determine_dependency(self, point, basis):
        """
        Derive the dependency of point + span(basis) with this generator's bounds and solver parameters.
        """
        return determine_dependency(point, basis, self.min, self.max, self.param['linear_system'])

    def draw_point(self, point, basis):
        """
        Draw one candidate point + sum_i lambda_i * basis_i with lambda_i uniform in [0, 1) and a random sign.

        Parameters
        ----------
        point : Matrix
            R x 1 point of the subspace.
        basis : Matrix
            R x k orthonormal basis.

        Returns
        -------
        Matrix
            The R x 1 candidate; not checked against the bounds.
        """
        feature_vector = point.copy()
        for i in range(basis.cols):
            lambda_i = self.rng.random()
            if self.rng.random() < 0.5:
                lambda_i *= -1
            feature_vector = feature_vector.add(basis.column(i).multiply(lambda_i))
        return feature_vector

    def jitter(self, feature_vector, normal_vectors, std=None):
        """
        Perturb a point along each normal vector by a Gaussian displacement.

        Parameters
        ----------
        feature_vector : Matrix or DoubleVector
            The point.
        normal_vectors : Matrix
            R x (R - k) orthonormal normal vectors.
        std : float, optional
            Standard deviation of the total orthogonal displacement. Default is the nominal jitter standard
            deviation of the point's dimensionality.

        Returns
        -------
        Matrix or DoubleVector
            A new, perturbed point of the same type as feature_vector.

        Notes
        -----
        With param['jitter_per_direction'] the full std is applied along every normal vector; otherwise each of the
        R - k displacements has deviation std / sqrt(R - k), so the root-mean-square orthogonal distance equals std.
        """
        as_vector = isinstance(feature_vector, DoubleVector)
        if as_vector:
            feature_vector = feature_vector.column_vector()
        normal_vectors = Matrix(normal_vectors)
        if std is None:
            std = self.jitter_standard_deviation(feature_vector.rows)
        if not self.param['jitter_per_direction'] and normal_vectors.cols:
            std = std / math.sqrt(normal_vectors.cols)

        for i in range(normal_vectors.cols):
            n_i = normal_vectors.column(i)
            n_i.normalize_columns()
            shift = self.rng.normal(0.0, std)
            feature_vector = n_i.multiply(shift).add(feature_vector)
        return DoubleVector(feature_vector) if as_vector else feature_vector

    def generate(self, number_of_points, point, basis, jitter=None, out=None, label=None):
        """
        Generate points of the affine subspace point + span(basis) inside [min, max]^R.

        Parameters
        ----------
        number_of_points : int
            Number of points to generate.
        point : Matrix or array_like
            R x 1 point of the subspace, inside the bounds.
        basis : Matrix or array_like
            R x k basis of the subspace, k < R.
        jitter : bool, optional
            Perturb the points along the normal vectors. Default is param['jitter'].
        out : file-like or path, optional
            Text sink the result is written to (see Interface.Output); a file name is overwritten. Default is None
            (not written).
        label : str, optional
            Label appended to every written point. Default is None.

        Returns
        -------
        GeneratorResult
            The points, the dependency and the measured standard deviation.

        Raises
        ------
        ArgumentError
            If the inputs are malformed or the point lies outside the bounds.
        DegenerateBasisError
            If the basis columns are linearly dependent.
        GenerationUnreachableError
            If the attempt budget is exhausted before enough points lie inside the bounds.
        """
        point = Matrix(point)
        basis = Matrix(basis)
        check_subspace(point, basis, self.min, self.max)
        if int(number_of_points) != number_of_points or number_of_points < 1:
            raise ArgumentError(f'number_of_points must be a positive integer, got {number_of_points}')
        check_label(label)
        jitter = self.param['jitter'] if jitter is None else jitter
        verbose = self.param['verbose']

        dependency = self.determine_dependency(point, basis)
        if verbose:
            print('Generated dependency')
            print(dependency)

        b = dependency.basis_vectors
        normal_vectors = dependency.normal_vectors
        jitter_std = self.jitter_standard_deviation(point.rows) if jitter else 0.0

        feature_vectors = []
        attempts = 0
        max_attempts = self.param['max_attempts']
        while len(feature_vectors) != number_of_points:
            if attempts == max_attempts:
                raise GenerationUnreachableError(
                    f'Only {len(feature_vectors)} of {number_of_points} points inside [{self.min}, {self.max}] '
                    f'after {attempts} attempts (dimensionality {point.rows}, correlation dimensionality '
                    f'{basis.cols}); increase max_attempts or move the point away from the boundary')
            attempts += 1
            feature_vector = self.draw_point(point, b)
            if jitter:
                feature_vector = self.jitter(feature_vector, normal_vectors, jitter_std)
            if self.in_min_max(feature_vector):
                feature_vectors.append(DoubleVector(feature_vector))

        std = standard_deviation(feature_vectors, point, b)
        if verbose:
            print(f'standard deviation {std}')
            print(f'accepted {number_of_points} of {attempts} candidates')

        result = GeneratorResult(feature_vectors, dependency, std, jitter=jitter,
                                 jitter_pct=self.param['jitter_pct'] if jitter else 0.0,
                                 jitter_std=jitter_std, label=label)
        if out is not None:
            write_output(out, result, digits=self.param['output']['digits'],
                         banner_width=self.param['output']['banner_width'], mode='w')
        return result

    def rejitter(self, result, point, jitter_pct=None, out=None, label=None):
        """
        Jitter the points of an existing result with a (new) jitter percentage.

        The points are perturbed along the normal vectors of the result's dependency; they are not checked against
        the bounds again.

        Parameters
        ----------
        result : GeneratorResult
            Result to perturb, usually generated without jitter.
        point : Matrix or array_like
            R x 1 point of the subspace the result was generated for.
        jitter_pct : float, optional
            Jitter percentage. Default is param['jitter_pct'].
        out : file-like or path, optional
            Text sink the new result is written to; a file name is overwritten. Default is None.
        label : str, optional
            Label of the new result. Default is the label of the given result.

        Returns
        -------
        GeneratorResult
            New result with the same dependency and the measured standard deviation of the perturbed points.
        """
        point = Matrix(point)
        dependency = result.dependency
        if point.shape != (dependency.dimensionality, 1):
            raise ArgumentError(f'point of shape {point.shape} does not match dependency of dimensionality '
                                f'{dependency.dimensionality}')
        jitter_pct = self.param['jitter_pct'] if jitter_pct is None else jitter_pct
        if jitter_pct < 0:
            raise ArgumentError(f'jitter_pct must be non-negative, got {jitter_pct}')
        check_label(label)
        jitter_std = self.jitter_standard_deviation(point.rows, jitter_pct)
        normal_vectors = dependency.normal_vectors

        vectors = [self.jitter(vector, normal_vectors, jitter_std) for vector in result.points]
        std = standard_deviation(vectors, point, dependency.basis_vectors)
        if self.param['verbose']:
            print(f'standard deviation {std}')

        new_result = GeneratorResult(vectors, dependency, std, jitter=True, jitter_pct=jitter_pct,
                                     jitter_std=jitter_std, label=result.label if label is None else label)
        if out is not None:
            write_output(out, new_result, digits=self.param['output']['digits'],
                         banner_width=self.param['output']['banner_width'], mode='w')
        return new_result

    def distance(self, feature_vector, point, basis):
        """
        Orthogonal distance of a point to point + span(basis), basis orthonormal.
        """
        return distance(feature_vector, point, basis)


#%%
def _generate_request(request, param, seed):
    generator = CorrelationGenerator(param, rng=np.random.default_rng(seed))
    # a 1D basis is a single direction
    basis = convert_to_2d(request['basis'], axis=1)
    return generator.generate(request['number_of_points'], request['point'], basis,
                              jitter=request.get('jitter'), label=request.get('label'))


def generate_batch(requests, param=None, n_jobs=None):
    """
    Run independent generation requests in parallel.

    Every request gets its own random stream spawned from the configured seed, so the results depend only on the
    seed and the order of the requests, not on n_jobs.

    Parameters
    ----------
    requests : list of dict
        Requests with keys 'number_of_points', 'point', 'basis' (R x k, or a 1D direction) and optionally 'jitter'
        and 'label'.
    param : dict, optional
        Updates of the default 'batch_generation' parameters. Default is None.
    n_jobs : int, optional
        Number of workers; negative values count back from the physical cores as in joblib (-1: all cores).
        Default is param['n_jobs'], falling back to the number of physical cores.

    Returns
    -------
    list of GeneratorResult
        Results in request order.

    Raises
    ------
    ArgumentError
        If a request lacks a required key or n_jobs is 0.

    Examples
    --------
        requests = [{'number_of_points': 100, 'point': [0.5, 0.5], 'basis': [[1], [1]], 'label': 'g1'},
                    {'number_of_points': 100, 'point': [0.5, 0.5], 'basis': [[-1], [2]], 'label': 'g2'}]
        results = generate_batch(requests, n_jobs=2)
    """
    batch_param = DefaultParameters().parameters['batch_generation']
    if param is not None:
        dict_deep_update(batch_param, copy.deepcopy(param))
    generator_param = batch_param['correlation_generator']

    for i, request in enumerate(requests):
        missing = {'number_of_points', 'point', 'basis'} - set(request)
        if missing:
            raise ArgumentError(f'Request {i} lacks {sorted(missing)}')
    if not requests:
        return []

    n_jobs = batch_param['n_jobs'] if n_jobs is None else n_jobs
    cores = psutil.cpu_count(logical=False) or 1
    if n_jobs is None:
        n_jobs = cores
    elif n_jobs == 0:
        raise ArgumentError('n_jobs == 0 has no meaning; use a positive count or -1 for all cores')
    elif n_jobs < 0:
        # joblib convention: -1 all cores, -2 all but one, ...
        n_jobs = cores + 1 + n_jobs
    n_jobs = max(1, min(n_jobs, len(requests)))

    seeds = np.random.SeedSequence(generator_param['seed']).spawn(len(requests))
    if generator_param['verbose']:
        per_worker = distribute_numbers(len(requests), n_jobs)
        print(f'Generating {len(requests)} requests on {n_jobs} workers ({per_worker})')

    return jb.Parallel(n_jobs=n_jobs, backend=batch_param['backend'])(
        jb.delayed(_generate_request)(request, generator_param, seed) for request, seed in zip(requests, seeds))


def write_batch(out, results, param=None):
    """
    Write several generation results into one text sink, each with its own header and label.

    Parameters
    ----------
    out : file-like or path
        Text stream or file name (appended to).
    results : list of GeneratorResult
        Results in output order.
    param : dict, optional
        Output parameters {'digits': ..., 'banner_width': ...}. Default is the generator defaults.
    """
    output_param = DefaultParameters().parameters['correlation_generator']['output']
    if param is not None:
        output_param.update(param)
    for result in results:
        write_output(out, result, digits=output_param['digits'], banner_width=output_param['banner_width'])
