"""
Pytest configuration and fixtures for pydecomp tests.

This module provides shared fixtures for testing:
- Configuration isolation
- Ellipsoid fixtures
- Obstacle point fixtures
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import List

import numpy as np
import pytest


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Give every test a fresh global configuration without PYDECOMP_ overrides."""
    import os

    import pydecomp.config as config_module

    for key in list(os.environ):
        if key.startswith("PYDECOMP_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(config_module, "_global_config", None)


@pytest.fixture
def temp_config_file(tmp_path) -> Path:
    """Create a temporary configuration file."""
    import yaml

    config = {
        "ellipsoid": {
            "singular_tolerance": 1e-9,
        },
        "sampling": {
            "num_points": 24,
        },
    }

    config_path = tmp_path / "test_config.yml"
    with open(config_path, "w") as f:
        yaml.dump(config, f)

    return config_path


# =============================================================================
# Ellipsoid Fixtures
# =============================================================================


@pytest.fixture
def unit_circle():
    """Unit circle at the origin."""
    from pydecomp import Ellipsoid2D

    return Ellipsoid2D(np.eye(2), np.zeros(2))


@pytest.fixture
def stretched_ellipse():
    """Ellipse with semi-axes 2 (x) and 1 (y) at the origin."""
    from pydecomp import Ellipsoid2D

    return Ellipsoid2D(np.diag([2.0, 1.0]), np.zeros(2))


@pytest.fixture
def rotated_ellipse():
    """Symmetric, rotated, anisotropic ellipse away from the origin."""
    from pydecomp import Ellipsoid2D

    yaw = math.pi / 6
    R = np.array([[math.cos(yaw), -math.sin(yaw)],
                  [math.sin(yaw), math.cos(yaw)]])
    C = R @ np.diag([3.0, 1.0]) @ R.T
    return Ellipsoid2D(C, np.array([1.0, -2.0]))


@pytest.fixture
def unit_sphere():
    """Unit sphere at the origin."""
    from pydecomp import Ellipsoid3D

    return Ellipsoid3D(np.eye(3), np.zeros(3))


# =============================================================================
# Obstacle Fixtures
# =============================================================================


@pytest.fixture
def scenario_obstacles() -> List[np.ndarray]:
    """Obstacles with unit-circle distances 2, 3 and sqrt(2)."""
    return [
        np.array([2.0, 0.0]),
        np.array([0.0, 3.0]),
        np.array([-1.0, -1.0]),
    ]


@pytest.fixture
def random_obstacles() -> List[np.ndarray]:
    """Deterministic obstacle cloud around the origin, clear of the seed."""
    rng = np.random.default_rng(0)
    points = rng.uniform(-5.0, 5.0, size=(200, 2))
    return [pt for pt in points if np.linalg.norm(pt) > 0.5]


# =============================================================================
# Marker Registrations
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
