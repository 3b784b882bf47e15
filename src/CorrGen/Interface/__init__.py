# CorrGen/Interface/__init__.py
"""
The `Interface` subpackage connects generated data to the outside world.

- **Output**: `write_output` and `read_output` for the commented text format consumed by clustering evaluations.
- **Plot**: `plot_points` scatter plots of 2D/3D results (matplotlib).
"""

from .Output import *
from .Plot import *
