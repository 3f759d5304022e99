#!/usr/bin/env python3
#
# PROJECT: wireframe-scene-mutator
# MODULE: client_demo.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import curses
import argparse
import logging
import sys
import os

# Ensure local package is importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from scene_mutator.config import EngineConfig
from scene_mutator.demo import DemoApp


def parse_args():
    """CLI argument parser for the terminal scene demo."""
    epilog = """\
keys:
  arrows      orbit the camera        + / -   dolly in / out
  [ / ]       narrow / widen fov      b       toggle Braille / ASCII
  n           apply next response     p       revert to parent state
  0-9         revert to that state    q       quit

examples:
  %(prog)s add_cube.txt spin_cube.txt     Apply two saved model responses
  %(prog)s --ascii add_cube.txt           ASCII output instead of Braille
  %(prog)s --state states.json add_cube.txt   Keep the version tree between runs
"""
    parser = argparse.ArgumentParser(
        description="Terminal demo for versioned scene mutation",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("responses", nargs='*',
                        help="Text files holding model responses, applied in order with 'n'")
    parser.add_argument("--ascii", action="store_true",
                        help="Use ASCII characters instead of Braille")
    parser.add_argument("--no-damping", action="store_true",
                        help="Disable orbit damping")
    parser.add_argument("--state", default=None,
                        help="JSON file to load scene states from and save them to on exit")
    parser.add_argument("--log-file", default=None,
                        help="Write logs to this file (default: scene_mutator.log)")
    return parser.parse_args()


def main(stdscr, args, config):
    app = DemoApp(stdscr, args, config)
    app.run()


if __name__ == "__main__":
    args = parse_args()
    config = EngineConfig.from_env()
    logging.basicConfig(
        filename=args.log_file or config.log_file or "scene_mutator.log",
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        curses.wrapper(lambda s: main(s, args, config))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logging.getLogger(__name__).exception("Demo crashed")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
