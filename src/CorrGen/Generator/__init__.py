# CorrGen/Generator/__init__.py
"""
The `Generator` subpackage derives the equation system of an affine subspace and generates (optionally jittered)
points on it inside the data space hypercube.

Modules and Classes
-------------------

- **Dependency**:
    - `Dependency`: Orthonormal basis, normal vectors and equation matrix of a subspace.
    - `GeneratorResult`: Generated points with their dependency and measured standard deviation.
    - `orthonormalize`, `complete_basis`, `determine_dependency`.

- **CorrelationGenerator**:
    - `CorrelationGenerator`: Rejection sampling of points, jitter along the normal vectors, re-jittering of
      existing results, centroid and random basis helpers.
    - `generate_batch`: Parallel generation of independent requests (joblib).
    - `write_batch`: Write several results into one file.

- **Diagnostics**:
    - `distance`: Orthogonal distance of a point to a subspace.
    - `standard_deviation`: Root-mean-square distance of a point set to a subspace.

Examples
--------

```python
from CorrGen.Generator import CorrelationGenerator

generator = CorrelationGenerator()
result = generator.generate(1000, [0.5, 0.5, 0.5], [[1.0], [-0.5], [1.0]])
result.dependency.dependency  # 2 x 4 equation matrix
```
"""

from .Dependency import *
from .Diagnostics import *
from .CorrelationGenerator import *
