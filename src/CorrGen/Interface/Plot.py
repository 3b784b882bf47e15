#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Scatter plots of generated points (2D and 3D data spaces). Requires matplotlib.
"""

from ..Deps import *
from ..Errors import ArgumentError


def plot_points(results, ax=None, show=False):
    """
    Scatter the points of one or more generation results, one color per result.

    Parameters
    ----------
    results : GeneratorResult or list of GeneratorResult
        Results of dimensionality 2 or 3.
    ax : matplotlib Axes, optional
        Axes to draw into (a 3D axes for 3D data). Default is None (new figure).
    show : bool, optional
        Call plt.show() at the end. Default is False.

    Returns
    -------
    matplotlib Axes
        The axes drawn into.

    Raises
    ------
    ImportError
        If matplotlib is not installed.
    ArgumentError
        If the dimensionality is not 2 or 3 or the results have different dimensionalities.
    """
    if not has_mpl:
        raise ImportError('plot_points requires matplotlib')
    if not isinstance(results, (list, tuple)):
        results = [results]

    dims = {r.dependency.dimensionality for r in results}
    if len(dims) != 1 or dims.pop() not in (2, 3):
        raise ArgumentError('plot_points supports results of one common dimensionality 2 or 3')
    dim = results[0].dependency.dimensionality

    if ax is None:
        fig = plt.figure(figsize=(6, 6))
        ax = fig.add_subplot(111, projection='3d' if dim == 3 else None)

    for i, result in enumerate(results):
        data = result.to_array()
        name = result.label if result.label is not None else f'c{i + 1}'
        ax.scatter(*data.T, s=4, label=name)

    ax.set_xlabel('x_1')
    ax.set_ylabel('x_2')
    if dim == 3:
        ax.set_zlabel('x_3')
    ax.legend()
    if show:
        plt.show()
    return ax
