"""Configuration for pytest."""

import pytest


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as end-to-end tests over a whole grid"
    )


@pytest.fixture(autouse=True)
def reset_global_logger():
    """Keep the global structured logger from leaking between tests."""
    from snapshot_homing.utils.logging import set_logger

    set_logger(None)
    yield
    set_logger(None)


@pytest.fixture
def three_circles():
    """The three obstacles of the default world."""
    from snapshot_homing.modules.obstacles import CircleObstacle

    return [
        CircleObstacle.at(3.5, 2.0, 0.5),
        CircleObstacle.at(3.5, -2.0, 0.5),
        CircleObstacle.at(0.0, -4.0, 0.5),
    ]


@pytest.fixture
def world():
    """The default three-circle world."""
    from snapshot_homing.scenarios.definitions import default_world

    return default_world()


@pytest.fixture
def origin():
    """Home position of the default world."""
    from snapshot_homing.core.geometry import GridPoint

    return GridPoint(0, 0)
