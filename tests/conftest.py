import pytest

from ppmlab import Bitmap
from ppmlab.colors import BLUE, RED


@pytest.fixture
def small_bitmap():
    """20x10 black bitmap."""
    return Bitmap(20, 10)


@pytest.fixture
def a():
    return RED


@pytest.fixture
def b():
    return BLUE
