# CorrGen/Params/__init__.py
"""
The `Params` subpackage provides a centralized management system for default parameters used throughout CorrGen.

Modules and Classes
-------------------

- **Params**:
    - `DefaultParameters`: Manages default parameters of the linear system solvers ('linear_system'), the point
      generator ('correlation_generator') and the parallel batch generation ('batch_generation').

Examples
--------

```python
from CorrGen.Params import DefaultParameters

params_manager = DefaultParameters()
params_manager.update_defaults('correlation_generator', {'min': -1.0, 'max': 1.0})
generator_param = params_manager.get_defaults('correlation_generator')
```
"""

from .Params import DefaultParameters
