#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
This module provides the `DefaultParameters` class, which serves as a centralized manager for default parameters of
the linear system solvers, the correlation generator and the batch generation.

Bounds, jitter settings and random seeds are not process-wide state: each generator receives a copy of these
defaults (optionally deep-updated) and keeps it in its own `param` attribute.

Classes
-------
- DefaultParameters:
    Manages default parameters for different modules, classes, or functions.

Examples
--------
```python
from CorrGen.Params import DefaultParameters

params_manager = DefaultParameters()
defaults = params_manager.get_defaults('correlation_generator')
params_manager.update_defaults('correlation_generator', {'jitter': True, 'jitter_pct': 1.0})
params_manager.reset_defaults('correlation_generator')
```
"""

from ..Deps import *
from ..LinAlg.Utils import dict_deep_update


class DefaultParameters:
    """
    Manages default parameters for different modules, classes, or functions.

    Attributes
    ----------
    parameters : dict
        A dictionary containing default parameters keyed by module name.

    Methods
    -------
    get_defaults(module)
        Retrieve the default parameters for a specified module.
    update_defaults(module, updates)
        Deep-update the default parameters for a specified module.
    reset_defaults(module)
        Reset the default parameters for a specified module to their initial values.
    """
    def __init__(self):
        self.parameters = {}
        self._initialize_parameters()

    def _initialize_parameters(self):
        """
        Initialize default parameters for all supported modules, in dependency order.
        """
        self._initializer_map = {'linear_system':          self._initialize_linear_system_defaults,
                                 'correlation_generator':  self._initialize_generator_defaults,
                                 'batch_generation':       self._initialize_batch_defaults,
                                 }

        for key in self._initializer_map:
            self._initializer_map[key]()

    def _initialize_linear_system_defaults(self):
        """
        Initialize default parameters for the linear system solvers.

        Parameters initialized include:
            - method: str, canonical elimination strategy ('gauss_jordan' or 'total_pivot')
            - cross_check: bool, also run the other strategy and verify agreement (default False)
            - epsilon: float, relative pivot threshold (default 1e-12)
            - tolerance: float, tolerance of the cross-check (default 1e-9)
            - echo: bool, print the system and the reduced equations (default False)
        """
        self.parameters['linear_system'] = {'method': 'gauss_jordan',
                                            'cross_check': False,
                                            'epsilon': 1e-12,
                                            'tolerance': 1e-9,
                                            'echo': False,
                                            }

    def _initialize_generator_defaults(self):
        """
        Initialize default parameters for the correlation generator.

        Parameters initialized include:
            - min, max: float, bounds of the data space hypercube (default 0.0, 1.0)
            - seed: int or None, seed of the random stream (default 210571)
            - jitter: bool, perturb generated points along the normal vectors (default False)
            - jitter_pct: float, jitter standard deviation in percent of the hypercube diagonal (default 0.1)
            - jitter_per_direction: bool, apply the full standard deviation along every normal vector instead of
              splitting it so the total orthogonal displacement has that standard deviation (default False)
            - max_attempts: int, cap on the number of draws of one generation request (default 1000000)
            - verbose: bool, print the derived dependency and the measured standard deviation (default False)
            - linear_system: dict, see linear_system defaults
            - output: dict, digits and banner width of the text output
        """
        self.parameters['correlation_generator'] = {'min': 0.0,
                                                    'max': 1.0,
                                                    'seed': 210571,
                                                    'jitter': False,
                                                    'jitter_pct': 0.1,
                                                    'jitter_per_direction': False,
                                                    'max_attempts': 1000000,
                                                    'verbose': False,
                                                    'linear_system': copy.deepcopy(self.parameters['linear_system']),
                                                    'output': {'digits': 4,
                                                               'banner_width': 56},
                                                    }

    def _initialize_batch_defaults(self):
        """
        Initialize default parameters for parallel batch generation.

        Parameters initialized include:
            - n_jobs: int or None, number of workers; None uses the physical core count (default None)
            - backend: str, joblib backend (default 'loky')
            - correlation_generator: dict, see correlation_generator defaults
        """
        self.parameters['batch_generation'] = {'n_jobs': None,
                                               'backend': 'loky',
                                               'correlation_generator':
                                                   copy.deepcopy(self.parameters['correlation_generator']),
                                               }

    def get_defaults(self, module):
        """
        Retrieve the default parameters for a specified module.

        Parameters
        ----------
        module : str
            The name of the module to retrieve defaults for.

        Returns
        -------
        dict
            The default parameters for the module (empty if unknown).
        """
        return self.parameters.get(module, {})

    def update_defaults(self, module, updates):
        """
        Update the default parameters for a specified module with provided values.

        Parameters
        ----------
        module : str
            The name of the module to update defaults for.
        updates : dict
            A dictionary containing parameter updates; nested dictionaries are merged.
        """
        if module in self.parameters:
            self.parameters[module] = dict_deep_update(self.parameters[module], updates)
        else:
            self.parameters[module] = updates

    def reset_defaults(self, module):
        """
        Reset the default parameters for a specified module to their initial values.

        Parameters
        ----------
        module : str
            The name of the module to reset defaults for.
        """
        if module in self._initializer_map:
            self._initializer_map[module]()
        else:
            self.parameters.pop(module, None)
