#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
This module provides small helpers shared by the matrix kernel, the generator and the parameter manager.

Functions
---------
- as_column(values, name='vector'):
    Convert a 1D sequence or an (n, 1) array into a float64 column array.
- convert_to_2d(arr, axis=1):
    Convert a 1D array to a 2D array.
- rmse(predictions, targets):
    Compute the root-mean-square error between two arrays.
- distribute_numbers(n, k):
    Distribute n numbers into k groups as evenly as possible.
- dict_deep_update(original, updates):
    Recursively update a dictionary with another dictionary.
- format_values(values, sep=' ', digits=4):
    Format numbers with a fixed number of decimal digits.
"""

from ..Deps import *
from ..Errors import ArgumentError


def as_column(values, name='vector'):
    """
    Convert a 1D sequence or an (n, 1) array into a float64 column array of shape (n, 1).

    Parameters
    ----------
    values : array_like
        Values of the vector.
    name : str, optional
        Name used in error messages. Default is 'vector'.

    Raises
    ------
    ArgumentError
        If the input is neither 1D nor a single column.

    Returns
    -------
    numpy.ndarray
        Column array of shape (n, 1).
    """
    arr = np.array(values, dtype=np.float64)
    if arr.ndim == 1:
        return arr.reshape(-1, 1)
    if arr.ndim == 2 and arr.shape[1] == 1:
        return arr
    raise ArgumentError(f'{name} must be a column vector, got shape {arr.shape}')


def convert_to_2d(arr, axis=1):
    """
    Convert a 1D array to a 2D array.

    Parameters
    ----------
    arr : array_like
        Input array to check and potentially convert.
    axis : int, optional
        The axis along which to expand the dimensions. Default is 1 (column vector).

    Returns
    -------
    numpy.ndarray
        A 2D version of the input array.

    Examples
    --------
        basis = convert_to_2d([1, -0.5, 1])  # shape (3, 1)
    """
    arr = np.asarray(arr, dtype=np.float64)

    if arr.ndim == 1:
        arr = np.expand_dims(arr, axis=axis)

    return arr


def rmse(predictions, targets):
    """
    Compute the root-mean-square error between two arrays.

    Parameters
    ----------
    predictions : array_like
        Predicted values.
    targets : array_like
        True values.

    Returns
    -------
    float
        The root-mean-square error.

    Examples
    --------
        std = rmse(distances, 0.0)
    """
    predictions = np.asarray(predictions, dtype=np.float64)
    return float(np.sqrt(((predictions - targets) ** 2).mean()))


def distribute_numbers(n, k):
    """
    Distribute n numbers into k groups as evenly as possible.

    Parameters
    ----------
    n : int
        The total number of elements to distribute.
    k : int
        The number of groups.

    Returns
    -------
    list of int
        A list where each element represents the number of elements in that group.

    Examples
    --------
        distribution = distribute_numbers(10, 3)  # [4, 3, 3]
    """
    base_size = n // k
    remainder = n % k

    return [base_size + 1 if i < remainder else base_size for i in range(k)]


def dict_deep_update(original, updates):
    """
    Recursively update the original dictionary with the updates dictionary.

    Parameters
    ----------
    original : dict
        The original dictionary to be updated.
    updates : dict
        The updates to apply.

    Returns
    -------
    dict
        The updated dictionary.

    Examples
    --------
        param = dict_deep_update(param, {'linear_system': {'cross_check': True}})
    """
    for key, value in updates.items():
        if isinstance(value, dict) and key in original and isinstance(original[key], dict):
            dict_deep_update(original[key], value)
        else:
            original[key] = value
    return original


def format_values(values, sep=' ', digits=4):
    """
    Format numbers with a fixed number of decimal digits and '.' as decimal point.

    Parameters
    ----------
    values : array_like
        Numbers to format (flattened).
    sep : str, optional
        Separator between numbers. Default is ' '.
    digits : int, optional
        Number of decimal digits. Default is 4.

    Returns
    -------
    str
        The formatted numbers.
    """
    # -0.0000 reads badly in dataset files
    return sep.join(f'{v:.{digits}f}' if round(v, digits) != 0 else f'{0.0:.{digits}f}'
                    for v in np.asarray(values, dtype=np.float64).ravel())
