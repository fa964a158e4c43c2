import gc

import numpy
import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow")


@pytest.fixture
def planar_data():
    """400 points exactly embedded in 2 dimensions, with distinct variances
    on each axis, then rotated into 4 dimensions"""
    rng = numpy.random.default_rng(7)
    coords = rng.normal(size=(400, 2)) * [3.0, 1.0]
    rotation, _ = numpy.linalg.qr(rng.normal(size=(4, 4)))
    return numpy.hstack([coords, numpy.zeros((400, 2))]) @ rotation


@pytest.fixture
def scaled_data():
    """10000 x 4 normal data, columns scaled by 9, 4, 1, 1"""
    rng = numpy.random.default_rng(42)
    return rng.normal(size=(10000, 4)) * [9, 4, 1, 1]


@pytest.fixture(scope="session", autouse=True)
def _try_cleaning_up_on_autouse_fixture_teardown():
    yield
    for _ in range(10):
        gc.collect()
