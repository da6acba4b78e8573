"""Tests for the animation driver and visualizer lifecycle."""
import matplotlib.pyplot as plt
import pytest

from hyperview.animation import FuncAnimationDriver, Visualizer
from hyperview.config import FrameConfig, RotationAngles, RotationSpeeds
from hyperview.errors import ConfigurationError


@pytest.fixture
def visualizer(surface, driver):
    config = FrameConfig.create("tesseract", speeds=RotationSpeeds.uniform(0.01))
    return Visualizer(surface, driver, config)


class TestVisualizer:

    def test_frames_only_while_running(self, visualizer, driver):
        driver.tick(3)
        assert visualizer.scheduler.frame_count == 0
        visualizer.start()
        driver.tick(3)
        assert visualizer.scheduler.frame_count == 3
        assert visualizer.last_draw_list is not None

    def test_stop_cancels_immediately(self, visualizer, driver):
        visualizer.start()
        driver.tick(2)
        visualizer.stop()
        driver.tick(5)
        assert visualizer.scheduler.frame_count == 2
        assert not visualizer.running

    def test_restart_keeps_morph_and_angles(self, visualizer, driver):
        visualizer.start()
        driver.tick(10)
        visualizer.stop()
        angles = visualizer.scheduler.angles
        working = visualizer.scheduler.morph.vertices.copy()

        visualizer.select_shape("pentachoron")
        visualizer.start()
        assert visualizer.scheduler.angles == angles
        assert (visualizer.scheduler.morph.vertices == working).all()
        driver.tick()
        assert visualizer.scheduler.angles.xy == pytest.approx(0.11)
        assert len(visualizer.scheduler.morph) == 16

    def test_configuration_applies_next_frame(self, visualizer, driver, surface):
        visualizer.start()
        driver.tick()
        visualizer.select_shape("16-cell")
        driver.tick()
        assert len(visualizer.last_draw_list.lines) == 24

    def test_toggle_playback_freezes_angles(self, visualizer, driver):
        visualizer.start()
        visualizer.toggle_playback()
        driver.tick(4)
        assert visualizer.scheduler.angles == RotationAngles()
        assert visualizer.config.playing is False

    def test_invalid_configuration_rejected_before_loop(self, visualizer, driver):
        visualizer.start()
        with pytest.raises(ConfigurationError):
            visualizer.configure(scale=0)
        driver.tick()
        assert visualizer.config.scale == 1.0
        assert visualizer.scheduler.frame_count == 1


class TestFuncAnimationDriver:

    def test_start_and_cancel(self):
        fig = plt.figure()
        calls = []
        driver = FuncAnimationDriver(fig, interval_ms=10)
        try:
            driver.start(lambda: calls.append(1))
            assert driver.running
            driver._on_frame(0)
            assert calls == [1]
            driver.cancel()
            assert not driver.running
            # A tick queued before cancellation must not reach the callback.
            driver._on_frame(1)
            assert calls == [1]
        finally:
            plt.close(fig)

    def test_restart_replaces_callback(self):
        fig = plt.figure()
        calls = []
        driver = FuncAnimationDriver(fig)
        try:
            driver.start(lambda: calls.append("a"))
            driver.start(lambda: calls.append("b"))
            driver._on_frame(0)
            assert calls == ["b"]
        finally:
            driver.cancel()
            plt.close(fig)

    def test_start_requests_a_redraw(self, monkeypatch):
        fig = plt.figure()
        redraws = []
        monkeypatch.setattr(fig.canvas, "draw_idle", lambda *args, **kwargs: redraws.append(1))
        driver = FuncAnimationDriver(fig)
        try:
            driver.start(lambda: None)
            driver.cancel()
            driver.start(lambda: None)
            assert len(redraws) == 2
        finally:
            driver.cancel()
            plt.close(fig)
