"""
Tests for the ellipsoid type registry.
"""

from __future__ import annotations

import numpy as np
import pytest

import pydecomp.registry as registry
from pydecomp import Ellipsoid, Ellipsoid2D, Ellipsoid3D
from pydecomp.exceptions import DimensionMismatchError, UnsupportedDimensionError
from pydecomp.registry import (
    get_ellipsoid_class,
    list_ellipsoid_dims,
    make_ellipsoid,
    register_ellipsoid_type,
)


class TestRegistry:
    """Tests for registration and lookup."""

    def test_builtin_dims(self):
        """2D and 3D are registered on import."""
        assert list_ellipsoid_dims() == [2, 3]

    def test_lookup(self):
        """Each dimension maps to its class."""
        assert get_ellipsoid_class(2) is Ellipsoid2D
        assert get_ellipsoid_class(3) is Ellipsoid3D

    def test_unknown_dim(self):
        """Unregistered dimensions return None."""
        assert get_ellipsoid_class(4) is None

    def test_register_custom(self, monkeypatch):
        """A class can be registered for its own dimension."""
        monkeypatch.setattr(registry, "ELLIPSOID_TYPES", dict(registry.ELLIPSOID_TYPES))

        class Ellipsoid4D(Ellipsoid):
            DIM = 4

        register_ellipsoid_type(4, Ellipsoid4D)
        assert get_ellipsoid_class(4) is Ellipsoid4D
        assert list_ellipsoid_dims() == [2, 3, 4]

    def test_register_mismatched_dim(self):
        """A class cannot be registered under another dimension."""
        with pytest.raises(UnsupportedDimensionError):
            register_ellipsoid_type(3, Ellipsoid2D)


class TestMakeEllipsoid:
    """Tests for the make_ellipsoid factory."""

    def test_planar(self):
        """A 2x2 matrix builds an Ellipsoid2D."""
        e = make_ellipsoid(np.diag([2.0, 1.0]), np.zeros(2))
        assert isinstance(e, Ellipsoid2D)
        assert e.inside([2.0, 0.0])

    def test_spatial(self):
        """A 3x3 matrix builds an Ellipsoid3D."""
        e = make_ellipsoid(np.eye(3), [1.0, 2.0, 3.0])
        assert isinstance(e, Ellipsoid3D)
        assert np.array_equal(e.d(), [1.0, 2.0, 3.0])

    def test_forwards_kwargs(self):
        """Keyword arguments reach the constructor."""
        e = make_ellipsoid(np.diag([1.0, 1e-14]), np.zeros(2), singular_tolerance=1e-16)
        assert isinstance(e, Ellipsoid2D)

    def test_unsupported_dim(self):
        """A 4x4 matrix has no registered class."""
        with pytest.raises(UnsupportedDimensionError) as exc_info:
            make_ellipsoid(np.eye(4), np.zeros(4))
        assert exc_info.value.details["supported"] == [2, 3]

    def test_non_square(self):
        """A non-square matrix is rejected."""
        with pytest.raises(DimensionMismatchError):
            make_ellipsoid(np.ones((2, 3)), np.zeros(2))
