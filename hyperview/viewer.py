"""
HyperView 4D Viewer
-------------------
Interactive matplotlib window around the animation core.

Hotkeys:
    1-6         : Select Polytope
    Space       : Play / Pause
    P           : Cycle Speed Presets
    S           : Surprise Me (random shape and speeds)
    R           : Reset Speeds, Scale and Playback
    + / -       : Increase/Decrease Scale
    Scroll      : Zoom In/Out
"""

import argparse
import logging
import sys

import matplotlib.pyplot as plt
import numpy as np

from hyperview.animation import FuncAnimationDriver, Visualizer
from hyperview.config import (
    DEFAULT_SPEEDS,
    PRESETS,
    FrameConfig,
    clamp_scale,
    get_preset,
    random_speeds,
)
from hyperview.errors import ConfigurationError
from hyperview.polytopes import POLYTOPE_GENERATORS, shape_ids
from hyperview.renderer import MatplotlibSurface

logger = logging.getLogger(__name__)

SCALE_STEP = 0.1

# Keys handled by KeyHandler; matplotlib's default keymaps must not claim them.
VIEWER_KEYS = frozenset(list(POLYTOPE_GENERATORS) + [" ", "p", "P", "s", "S", "r", "R", "+", "=", "-", "_"])


def release_viewer_keys():
    """Drop the viewer's hotkeys from every ``keymap.*`` rcParam (save, pan, home, ...)."""
    for name in [n for n in plt.rcParams if n.startswith("keymap.")]:
        keys = plt.rcParams[name]
        if any(key in VIEWER_KEYS for key in keys):
            plt.rcParams[name] = [key for key in keys if key not in VIEWER_KEYS]


def caption_text(shape):
    return f"4D Polytope: {shape.name}\n{shape.description}"


class KeyHandler:
    """Maps key and scroll events onto configuration changes."""

    def __init__(self, visualizer, rng=None, caption=None):
        self.visualizer = visualizer
        self.caption = caption
        self.rng = rng if rng is not None else np.random.default_rng()
        self._preset_names = list(PRESETS)
        self._preset_index = 0
        self.refresh_caption()

    def handle_key(self, key):
        if key is None:
            return
        try:
            self._dispatch(key)
        except ConfigurationError as exc:
            logger.warning("Ignoring key %r: %s", key, exc)

    def refresh_caption(self):
        if self.caption is not None:
            self.caption.set_text(caption_text(self.visualizer.config.shape))

    def _dispatch(self, key):
        vis = self.visualizer
        if key in POLYTOPE_GENERATORS:
            config = vis.select_shape(POLYTOPE_GENERATORS[key])
            logger.info("Selected polytope: %s", config.shape.name)
            self.refresh_caption()
        elif key == " ":
            config = vis.toggle_playback()
            logger.info("Playback %s", "resumed" if config.playing else "paused")
        elif key.lower() == "p":
            self._preset_index = (self._preset_index + 1) % len(self._preset_names)
            name = self._preset_names[self._preset_index]
            vis.configure(speeds=get_preset(name))
            logger.info("Preset: %s", PRESETS[name][0])
        elif key.lower() == "s":
            shape_id = self.rng.choice(shape_ids())
            config = vis.configure(shape=str(shape_id), speeds=random_speeds(self.rng), playing=True)
            logger.info("Surprise: %s", config.shape.name)
            self.refresh_caption()
        elif key.lower() == "r":
            self._preset_index = 0
            vis.configure(speeds=DEFAULT_SPEEDS, scale=1.0, playing=True)
            logger.info("View reset")
        elif key in ("+", "="):
            self.zoom(SCALE_STEP)
        elif key in ("-", "_"):
            self.zoom(-SCALE_STEP)

    def zoom(self, delta):
        scale = clamp_scale(round(self.visualizer.config.scale + delta, 6))
        self.visualizer.configure(scale=scale)
        logger.info("Scale: %.2f", scale)

    def on_key(self, event):
        self.handle_key(event.key)

    def on_scroll(self, event):
        step = getattr(event, "step", 0) or (1 if event.button == "up" else -1)
        self.zoom(SCALE_STEP if step > 0 else -SCALE_STEP)


def build_viewer(config, interval_ms=16):
    release_viewer_keys()
    fig = plt.figure("HyperView 4D")
    ax = fig.add_axes([0, 0, 1, 1])
    surface = MatplotlibSurface(ax)
    caption = fig.text(0.02, 0.98, "", color="white", fontsize=9, va="top", wrap=True)
    visualizer = Visualizer(surface, FuncAnimationDriver(fig, interval_ms), config)
    handler = KeyHandler(visualizer, caption=caption)
    fig.canvas.mpl_connect("key_press_event", handler.on_key)
    fig.canvas.mpl_connect("scroll_event", handler.on_scroll)
    fig.canvas.mpl_connect("close_event", lambda _event: visualizer.stop())
    return fig, visualizer, handler


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="hyperview", description="Rotating 4D polytope wireframes.")
    parser.add_argument("--shape", default="tesseract", help=f"one of: {', '.join(shape_ids())}")
    parser.add_argument("--preset", default="normal", choices=list(PRESETS))
    parser.add_argument("--scale", type=float, default=1.0)
    parser.add_argument("--paused", action="store_true")
    parser.add_argument("--interval", type=int, default=16, help="frame interval in ms")
    parser.add_argument(
        "--log-level", default="INFO", type=str.upper, choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def config_from_args(args):
    return FrameConfig.create(
        args.shape, speeds=get_preset(args.preset), playing=not args.paused, scale=args.scale,
    )


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    try:
        config = config_from_args(args)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 2

    fig, visualizer, _handler = build_viewer(config, args.interval)
    visualizer.start()
    plt.show()
    visualizer.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
