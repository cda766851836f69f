import numpy as np
import pytest

from bacalign.utils.resources import RESOURCES


@pytest.fixture
def rng():
    return np.random.default_rng(20221004)


@pytest.fixture
def random_dna(rng):
    """Returns a factory of random ACGT strings."""
    def factory(length: int) -> str:
        return np.frombuffer(b'ACGT', dtype=np.uint8)[rng.integers(0, 4, size=length)].tobytes().decode('ascii')
    return factory


@pytest.fixture
def reset_resources():
    RESOURCES.reset()
    yield RESOURCES
    RESOURCES.reset()
