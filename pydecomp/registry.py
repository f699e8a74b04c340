"""
Ellipsoid type registry.

Maps a space dimension to the ellipsoid class handling it, so callers
holding a raw shape matrix can build the right type with ``make_ellipsoid``.
"""

from typing import Dict, List, Optional, Type

import numpy as np

from pydecomp.const import REAL
from pydecomp.exceptions import DimensionMismatchError, UnsupportedDimensionError
from pydecomp.geometry import Ellipsoid, Ellipsoid2D, Ellipsoid3D
from pydecomp.logging import LOG_DEBUG


# Available ellipsoid types by dimension
ELLIPSOID_TYPES: Dict[int, Type[Ellipsoid]] = {}


def register_ellipsoid_type(dim: int, ellipsoid_class: Type[Ellipsoid]):
    """Register an ellipsoid class for a dimension.

    Args:
        dim: Space dimension handled by the class.
        ellipsoid_class: The class to register; its ``DIM`` must equal ``dim``.
    """
    if ellipsoid_class.DIM != dim:
        raise UnsupportedDimensionError(dim, [ellipsoid_class.DIM])
    ELLIPSOID_TYPES[dim] = ellipsoid_class
    LOG_DEBUG(f"Registered {ellipsoid_class.__name__} for dimension {dim}")


def get_ellipsoid_class(dim: int) -> Optional[Type[Ellipsoid]]:
    """Get the ellipsoid class for a dimension, or None if not registered."""
    return ELLIPSOID_TYPES.get(dim)


def list_ellipsoid_dims() -> List[int]:
    """List all registered dimensions in ascending order."""
    return sorted(ELLIPSOID_TYPES.keys())


def make_ellipsoid(C: np.ndarray, d: np.ndarray, **kwargs) -> Ellipsoid:
    """Build the ellipsoid class matching the shape of C.

    Args:
        C: Square shape matrix.
        d: Center.
        **kwargs: Forwarded to the ellipsoid constructor.

    Raises:
        DimensionMismatchError: C is not square.
        UnsupportedDimensionError: No class is registered for C's size.
    """
    C = np.asarray(C, dtype=REAL)
    if C.ndim != 2 or C.shape[0] != C.shape[1]:
        raise DimensionMismatchError("C", ("n", "n"), C.shape)

    ellipsoid_class = get_ellipsoid_class(C.shape[0])
    if ellipsoid_class is None:
        raise UnsupportedDimensionError(C.shape[0], list_ellipsoid_dims())
    return ellipsoid_class(C, d, **kwargs)


def _register_all_ellipsoid_types():
    """Register the built-in ellipsoid types."""
    register_ellipsoid_type(Ellipsoid2D.DIM, Ellipsoid2D)
    register_ellipsoid_type(Ellipsoid3D.DIM, Ellipsoid3D)


# Initialize ellipsoid types on module load
_register_all_ellipsoid_types()
