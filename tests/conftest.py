import matplotlib

matplotlib.use("Agg")

import pytest

from hyperview.config import FrameConfig, RotationSpeeds
from hyperview.polytopes import get_polytope
from hyperview.renderer import RecordingSurface


class ManualDriver:
    """Frame source advanced by hand."""

    def __init__(self):
        self._callback = None
        self.starts = 0

    @property
    def running(self):
        return self._callback is not None

    def start(self, callback):
        self._callback = callback
        self.starts += 1

    def cancel(self):
        self._callback = None

    def tick(self, frames=1):
        for _ in range(frames):
            if self._callback is None:
                return
            self._callback()


@pytest.fixture
def driver():
    return ManualDriver()


@pytest.fixture
def surface():
    return RecordingSurface(800, 600)


@pytest.fixture
def tesseract():
    return get_polytope("tesseract")


@pytest.fixture
def pentachoron():
    return get_polytope("pentachoron")


@pytest.fixture
def sixteen_cell():
    return get_polytope("16-cell")


@pytest.fixture
def paused_config():
    return FrameConfig.create("tesseract", speeds=RotationSpeeds(), playing=False)
