"""
PyDecomp Constants.

This module defines constants shared by the geometry, configuration
and registry modules.
"""

from typing import Final

import numpy as np

# ============================================================================
# Numeric Representation
# ============================================================================
REAL = np.float64

# ============================================================================
# Dimensions
# ============================================================================
DIM_2D: Final[int] = 2
DIM_3D: Final[int] = 3
SUPPORTED_DIMS = frozenset({DIM_2D, DIM_3D})

# ============================================================================
# Defaults
# ============================================================================
DEFAULT_SINGULAR_TOLERANCE: Final[float] = 1e-12
DEFAULT_SAMPLE_POINTS: Final[int] = 100
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
