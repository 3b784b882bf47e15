# CorrGen/LinAlg/__init__.py
"""
The `LinAlg` subpackage provides the dense matrix kernel and the elimination solvers used to derive the equation
system of a subspace.

Modules and Classes
-------------------

- **Matrix**:
    - `Matrix`: Dense float64 matrix with column/row extraction, arithmetic, norms, unit matrix, linear independence
      test, in-place column normalization and projection.
    - `DoubleVector`: Independent copy of a generated point with fixed-digit formatting.

- **LinearSystem**:
    - `LinearSystemSolver`: Base class of the elimination solvers.
    - `TotalPivotSolver`: Elimination with total pivot search.
    - `GaussJordanSolver`: Gauss-Jordan elimination with partial pivoting.
    - `solve_linear_system`: Canonical solve with optional cross-check.
    - `systems_agree`: Compare the constraint sets of two solvers.

- **Utils**:
    - `as_column`, `convert_to_2d`, `rmse`, `distribute_numbers`, `dict_deep_update`, `format_values`.

Examples
--------

```python
from CorrGen.LinAlg import Matrix, solve_linear_system

A = Matrix([[1.0, 2.0, 0.0], [0.0, 1.0, 1.0]])
solver = solve_linear_system(A, [1.0, 2.0], cross_check=True)
x = solver.solve()
print(solver.equations_to_string())
```
"""

from .Matrix import *
from .LinearSystem import *
from .Utils import *
