#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Common imports shared by the CorrGen subpackages.
"""

import numpy as np
import scipy.linalg as sla
import copy
import math
import joblib as jb
import psutil

try:
    import matplotlib.pyplot as plt
    has_mpl = True
except ImportError:
    has_mpl = False
