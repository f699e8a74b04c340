"""
pydecomp - Ellipsoid kernel for convex free-space decomposition.

This package provides the ellipsoid primitive used by iterative
safe-corridor decomposition in motion planning:
- Ellipsoid2D / Ellipsoid3D: metric distance, containment, closest
  obstacle point and tangent hyperplane queries
- Hyperplane: point + unit normal half-space boundary
- make_ellipsoid: build the right ellipsoid type from a shape matrix

Basic Usage:
    import numpy as np
    from pydecomp import Ellipsoid2D

    ellipsoid = Ellipsoid2D(np.diag([2.0, 1.0]), np.zeros(2))
    obstacles = [np.array([2.0, 0.5]), np.array([0.0, 3.0])]
    hyperplane = ellipsoid.closest_hyperplane(obstacles)

For more control:
    from pydecomp.config import DecompConfig, ConfigManager
    from pydecomp.logging import LOG_INFO, profile_scope
    from pydecomp.exceptions import SingularShapeMatrixError
"""

from __future__ import annotations

__version__ = "0.1.0"

# =============================================================================
# Geometry
# =============================================================================

from pydecomp.geometry import (
    Ellipsoid,
    Ellipsoid2D,
    Ellipsoid3D,
    Hyperplane,
)

from pydecomp.registry import (
    register_ellipsoid_type,
    get_ellipsoid_class,
    list_ellipsoid_dims,
    make_ellipsoid,
    ELLIPSOID_TYPES,
)

# =============================================================================
# Configuration
# =============================================================================

from pydecomp.config import (
    create_default_config,
    load_config,
    DecompConfig,
    ConfigManager,
    get_config,
    init_config,
)

# =============================================================================
# Logging
# =============================================================================

from pydecomp.logging import (
    LOG_DEBUG,
    LOG_INFO,
    get_logger,
    setup_logging,
    profile_scope,
)

# =============================================================================
# Exceptions
# =============================================================================

from pydecomp.exceptions import (
    PyDecompError,
    ConfigurationError,
    ConfigNotFoundError,
    ConfigValidationError,
    GeometryError,
    DimensionMismatchError,
    UnsupportedDimensionError,
    SingularShapeMatrixError,
    DegenerateHyperplaneError,
    InvalidSampleCountError,
    DataError,
    EmptyObstacleSetError,
)

# =============================================================================
# Public API
# =============================================================================

__all__ = [
    # Version
    "__version__",
    # Geometry
    "Ellipsoid",
    "Ellipsoid2D",
    "Ellipsoid3D",
    "Hyperplane",
    # Registry
    "register_ellipsoid_type",
    "get_ellipsoid_class",
    "list_ellipsoid_dims",
    "make_ellipsoid",
    "ELLIPSOID_TYPES",
    # Config
    "create_default_config",
    "load_config",
    "DecompConfig",
    "ConfigManager",
    "get_config",
    "init_config",
    # Logging
    "LOG_DEBUG",
    "LOG_INFO",
    "get_logger",
    "setup_logging",
    "profile_scope",
    # Exceptions
    "PyDecompError",
    "ConfigurationError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "GeometryError",
    "DimensionMismatchError",
    "UnsupportedDimensionError",
    "SingularShapeMatrixError",
    "DegenerateHyperplaneError",
    "InvalidSampleCountError",
    "DataError",
    "EmptyObstacleSetError",
]
