# CorrGen/__init__.py
"""
CorrGen: synthetic correlation data with known linear dependencies.

Generates points on (or near) affine subspaces of the data space [min, max]^R together with the system of linear
equations describing each subspace, as ground truth for correlation clustering benchmarks.
"""

from .Errors import *
from .LinAlg import *
from .Generator import *
from .Interface import *
from .Params import *
