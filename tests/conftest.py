"""
Shared fixtures for the Ken Burns tests.

Provides stub random sources, common bounds and small test images.
"""
import sys
import os

import numpy as np
import pytest
from PIL import Image

# Ensure the project root is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from utils.geometry import Rect


class StubRandom:
    """Random source with a fixed random() value that records randrange() calls."""

    def __init__(self, value=0.0, offset=0):
        self.value = value
        self.offset = offset
        self.randrange_calls = []

    def random(self):
        return self.value

    def randrange(self, n):
        assert n > 0, "randrange called with a non-positive range"
        self.randrange_calls.append(n)
        return min(self.offset, n - 1)


@pytest.fixture
def stub_random():
    return StubRandom


@pytest.fixture
def viewport():
    return Rect.from_size(800, 600)


@pytest.fixture
def image_bounds():
    return Rect.from_size(1600, 900)


@pytest.fixture
def gradient_image():
    """64x48 RGB image with a horizontal/vertical gradient."""
    xs = np.linspace(0, 255, 64, dtype=np.uint8)
    ys = np.linspace(0, 255, 48, dtype=np.uint8)
    arr = np.zeros((48, 64, 3), dtype=np.uint8)
    arr[:, :, 0] = xs[None, :]
    arr[:, :, 1] = ys[:, None]
    arr[:, :, 2] = 128
    return Image.fromarray(arr)
