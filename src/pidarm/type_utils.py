from typing import TypeAlias

import numpy as np
import sympy as sp
from numpy.typing import NDArray

Num: TypeAlias = int | float | sp.Expr

Vector3 = NDArray[np.float64]
Quat = NDArray[np.float64]  # [w, x, y, z]
