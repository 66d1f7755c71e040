#!/usr/bin/env python3
"""
Buddy Face - Main entry point

Run with:
  PYTHONPATH=src python3 -m buddy_face.main
Or after install:
  buddy-face
"""

import argparse
import logging
import sys

from . import __version__
from .config import CONFIG_FILE, Config


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Buddy Face - A little text-mode character that lives on your screen",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Controls:
  1-9, 0    Switch expression
  S         Fall asleep
  F         Toggle fullscreen
  ESC, Q    Quit

Examples:
  buddy-face                        # Window mode (default)
  buddy-face --headless --frames 90 # Simulate 90 frames, print the last one
  buddy-face --hue 30               # Amber buddy
  buddy-face --sleep-timeout 10     # Doze off after 10s without input
  buddy-face --save-config          # Save default config to edit
""",
    )

    parser.add_argument("--version", "-v", action="version", version=f"Buddy Face {__version__}")

    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Default: INFO",
    )

    parser.add_argument(
        "--headless",
        action="store_true",
        help="No window: simulate --frames frames and print the last one as text",
    )
    parser.add_argument(
        "--frames", type=int, default=60, help="Frames to simulate in --headless mode (default: 60)"
    )
    parser.add_argument(
        "--expression", type=str, default=None, help="Expression to show at startup"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (repeatable runs)")

    parser.add_argument("--hue", type=int, default=None, help="Color hue 0-359 (default: random)")
    parser.add_argument(
        "--sleep-timeout",
        type=float,
        default=None,
        help="Seconds without input before falling asleep (default from config)",
    )
    parser.add_argument(
        "--fps", type=int, default=None, help="Target FPS for animation (default from config)"
    )
    parser.add_argument(
        "--font-size", type=int, default=None, help="Glyph size in pixels (default from config)"
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Run fullscreen instead of in a resizable window",
    )
    parser.add_argument(
        "--width", type=int, default=None, help="Window width (default from config)"
    )
    parser.add_argument(
        "--height", type=int, default=None, help="Window height (default from config)"
    )

    parser.add_argument(
        "--config", "-c", type=str, help=f"Path to config file (default: {CONFIG_FILE})"
    )

    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Save default configuration to config file and exit",
    )

    return parser.parse_args(argv)


def apply_overrides(config: Config, args) -> Config:
    """Apply command line overrides on top of the loaded config."""
    if args.hue is not None:
        config.colors.hue = args.hue
    if args.sleep_timeout is not None:
        config.behavior.sleep_timeout = args.sleep_timeout
    if args.fps is not None:
        config.display.fps = args.fps
    if args.font_size is not None:
        config.display.font_size = args.font_size
    if args.fullscreen:
        config.display.fullscreen = True
    if args.width is not None:
        config.display.window_width = args.width
    if args.height is not None:
        config.display.window_height = args.height
    config.validate()
    return config


def run_headless(config: Config, frames: int, seed=None, expression=None) -> str:
    """Simulate frames at the reference rate and return the last one as text."""
    from .buddy import Buddy
    from .render import TextCanvas

    buddy = Buddy(config, seed=seed, start=0.0)
    if expression is not None and not buddy.trigger_expression(expression):
        logging.getLogger("buddy_face").warning("Unknown expression: %s", expression)

    canvas = TextCanvas()
    dt = 1.0 / config.display.fps
    for i in range(max(1, frames)):
        buddy.update((i + 1) * dt)
    buddy.draw(canvas)
    return str(canvas)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log = logging.getLogger("buddy_face")

    # Handle --save-config
    if args.save_config:
        config = Config()
        config.save()
        print(f"Default configuration saved to: {CONFIG_FILE}")
        print("Edit this file to customize colors, behavior, and display settings.")
        return 0

    # Load config
    if args.config:
        from pathlib import Path

        config = Config.load(Path(args.config))
    else:
        config = Config.load()

    apply_overrides(config, args)

    try:
        if args.headless:
            print(run_headless(config, args.frames, seed=args.seed, expression=args.expression))
            return 0

        from .buddy import Buddy
        from .face import BuddyWindow

        buddy = Buddy(config, seed=args.seed)
        if args.expression is not None and not buddy.trigger_expression(args.expression):
            log.warning("Unknown expression: %s", args.expression)
        BuddyWindow(config, buddy).run()
    except KeyboardInterrupt:
        print("\nExiting...")
    except Exception:
        log.exception("Fatal error")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
