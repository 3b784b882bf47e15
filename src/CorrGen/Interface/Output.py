#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
This module writes generated points with their equation system to a line-oriented text sink, and reads such
files back.

File layout
-----------
    ########################################################
    ### max Jitter 1.0%                               (only with jitter)
    ### Randomized standard deviation 0.0173...       (only with jitter)
    ### Real       standard deviation 0.0171...       (only with jitter)
    ###                                               (only with jitter)
    ### a_11 a_12 ... a_1R c_1                        (one line per equation)
    ########################################################
    x_1 x_2 ... x_R [label]                           (one line per point)

Functions
---------
- check_label(label):
    Reject labels that would not read back as a single label token.
- write_output(out, result, label=None, digits=4, banner_width=56, mode='a'):
    Write a GeneratorResult to a stream or file.
- read_output(source):
    Parse one or more such blocks into points, labels and equation rows. The dimensionality of a block is taken
    from its equation rows; a token after the coordinates is the label.

Notes
-----
Numbers are written with a fixed number of decimal digits and '.' as decimal point, independent of the locale.
"""

from ..Deps import *
from ..Errors import ArgumentError
from ..LinAlg.Utils import format_values
import re

_FLOAT = re.compile(r'[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?|[-+]?(nan|inf)')


def _open_sink(out, mode):
    if isinstance(out, (str, bytes)) or hasattr(out, '__fspath__'):
        return open(out, mode, encoding='utf-8'), True
    return out, False


def _leading_floats(tokens):
    values = []
    for token in tokens:
        if _FLOAT.fullmatch(token) is None:
            break
        values.append(float(token))
    return values


def check_label(label):
    """
    Validate a point label: a single token that cannot be mistaken for a coordinate.

    Raises
    ------
    ArgumentError
        If the label is empty, contains whitespace or reads as a number.
    """
    if label is None:
        return
    text = str(label)
    if not text or any(c.isspace() for c in text) or _FLOAT.fullmatch(text) is not None:
        raise ArgumentError(f'Label {label!r} must be a single non-numeric token')


def write_output(out, result, label=None, digits=4, banner_width=56, mode='a'):
    """
    Write the points of a generation result, preceded by the commented equation system.

    Parameters
    ----------
    out : file-like or path
        Text stream (anything with `write`) or a file name.
    result : GeneratorResult
        The result to write.
    label : str, optional
        Label appended to every point line. Default is the label stored in the result (None: no label).
    digits : int, optional
        Decimal digits of the dependency rows and the points. Default is 4.
    banner_width : int, optional
        Width of the '#' banner lines. Default is 56.
    mode : str, optional
        Mode a file name is opened with: 'a' (default) collects several results in one file, 'w' replaces it.

    Raises
    ------
    ArgumentError
        If the label contains whitespace or reads as a number.

    Examples
    --------
        with open('g1.txt', 'w') as f:
            write_output(f, result)
    """
    label = result.label if label is None else label
    check_label(label)
    stream, owned = _open_sink(out, mode)
    try:
        banner = '#' * banner_width
        stream.write(banner + '\n')
        if result.jitter:
            stream.write(f'### max Jitter {result.jitter_pct}%\n')
            stream.write(f'### Randomized standard deviation {result.jitter_std}\n')
            stream.write(f'### Real       standard deviation {result.std}\n')
            stream.write('###\n')
        for row in result.dependency.dependency.array:
            stream.write('### ' + format_values(row, ' ', digits) + '\n')
        stream.write(banner + '\n')

        suffix = '' if label is None else f' {label}'
        for vector in result.points:
            stream.write(vector.to_string(digits) + suffix + '\n')
    finally:
        if owned:
            stream.close()


def read_output(source):
    """
    Parse a file written by `write_output`.

    Parameters
    ----------
    source : file-like or path
        Text stream or file name.

    Returns
    -------
    points : numpy.ndarray
        (n, R) array of all points in file order.
    labels : list
        Label of each point (None for unlabeled points).
    dependencies : list of numpy.ndarray
        Equation rows of each comment header, one (m, R + 1) array per block.

    Raises
    ------
    ArgumentError
        If a line cannot be parsed or the point dimensionalities differ.
    """
    stream, owned = _open_sink(source, 'r')
    try:
        lines = stream.read().splitlines()
    finally:
        if owned:
            stream.close()

    points, labels, dependencies = [], [], []
    in_header = False
    rows = []
    dim = None
    for number, line in enumerate(lines, 1):
        text = line.strip()
        if not text:
            continue
        if text.startswith('#'):
            if set(text) == {'#'} and len(text) > 3:
                if in_header:
                    dependencies.append(np.array(rows) if rows else np.zeros((0, 0)))
                    # equation rows are [a_1 ... a_R | c]
                    dim = len(rows[0]) - 1 if rows else None
                    rows = []
                in_header = not in_header
                continue
            tokens = text.lstrip('#').split()
            values = _leading_floats(tokens)
            # jitter statistics lines start with text
            if in_header and values and len(values) == len(tokens):
                rows.append(values)
            continue

        tokens = text.split()
        values = _leading_floats(tokens if dim is None else tokens[:dim])
        rest = tokens[len(values):]
        if not values or len(rest) > 1 or (dim is not None and len(values) != dim):
            raise ArgumentError(f'Cannot parse point on line {number}: {line!r}')
        points.append(values)
        labels.append(rest[0] if rest else None)

    if points and len({len(p) for p in points}) != 1:
        raise ArgumentError('Points of different dimensionality in one file')
    return np.array(points, dtype=np.float64), labels, dependencies
