#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/demo.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import curses
import logging
import time
from collections import deque
from pathlib import Path

from .config import EngineConfig
from .controller import MutationController
from .errors import SceneMutatorError
from .stage import Stage
from .versions import VersionTree

logger = logging.getLogger(__name__)


class DemoApp:
    """
    Interactive terminal harness: feeds queued model responses to the
    mutation controller, lets the user orbit the camera and revert between
    states, and draws the scene every frame.
    """

    def __init__(self, stdscr, args, config: EngineConfig = None):
        self.stdscr = stdscr
        self.running = True

        # ── Curses setup ────────────────────────────────────────────────
        curses.curs_set(0)
        stdscr.nodelay(True)

        # ── Config from environment + CLI overrides ─────────────────────
        config = config or EngineConfig.from_env()
        if args.ascii:
            config.use_braille = False
        if args.no_damping:
            config.enable_damping = False
        self.config = config

        self.stage = Stage(config)
        self.state_path = args.state
        tree = None
        if self.state_path:
            tree = VersionTree.open(self.state_path, self.stage.capture_view_state())
        self.controller = MutationController(self.stage, tree=tree)

        # ── Queued model responses ──────────────────────────────────────
        self.pending = deque()
        for path in args.responses:
            self.pending.append((path, Path(path).read_text(encoding='utf-8')))
        self.message = f"{len(self.pending)} response(s) queued. Press n to apply."

        # ── Frame counter ───────────────────────────────────────────────
        self.frame_count = 0
        self.fps = 0
        self.last_fps_time = time.time()

    # ────────────────────────────────────────────────────────────────────
    # Actions
    # ────────────────────────────────────────────────────────────────────
    def submit_next(self):
        if not self.pending:
            self.message = "No more queued responses."
            return
        path, text = self.pending.popleft()
        try:
            result = self.controller.submit(text)
        except SceneMutatorError as e:
            logger.warning("Could not submit %s: %s", path, e)
            self.message = str(e)
            return
        prefix = f"#{result.node_id} " if result.applied_script else ""
        self.message = f"{prefix}{path}: {result.display_text.splitlines()[0] if result.display_text else ''}"

    def revert_to(self, node_id):
        try:
            self.message = self.controller.revert(node_id)
        except SceneMutatorError as e:
            self.message = f"Revert failed: {e}"

    # ────────────────────────────────────────────────────────────────────
    # Input
    # ────────────────────────────────────────────────────────────────────
    def handle_input(self):
        try:
            key = self.stdscr.getch()
        except curses.error:
            key = -1

        if key == -1:
            return

        controls = self.stage.controls
        camera = self.stage.camera

        if key == ord('q'):
            self.running = False
        elif key == curses.KEY_UP:
            controls.rotate_up(0.1)
        elif key == curses.KEY_DOWN:
            controls.rotate_up(-0.1)
        elif key == curses.KEY_RIGHT:
            controls.rotate_left(-0.1)
        elif key == curses.KEY_LEFT:
            controls.rotate_left(0.1)
        elif key in (ord('='), ord('+')):
            controls.dolly_in(1.1)
        elif key == ord('-'):
            controls.dolly_out(1.1)
        elif key == ord('['):
            camera.adjust_fov(-5)
        elif key == ord(']'):
            camera.adjust_fov(5)
        elif key == ord('b'):
            self.stage.renderer.use_braille = not self.stage.renderer.use_braille
        elif key == ord('n'):
            self.submit_next()
        elif key == ord('p'):
            node = self.controller.tree[self.controller.current_node_id]
            if node.parent_id is None:
                self.message = "Already at the base state."
            else:
                self.revert_to(node.parent_id)
        elif ord('0') <= key <= ord('9'):
            self.revert_to(key - ord('0'))

    # ────────────────────────────────────────────────────────────────────
    # Main loop
    # ────────────────────────────────────────────────────────────────────
    def run(self):
        while self.running:
            start_time = time.time()

            self.handle_input()

            th, tw = self.stdscr.getmaxyx()
            width, height = (tw - 1) * 2, (th - 2) * 4
            if width > 0 and height > 0 and (width, height) != self.stage.renderer.get_size():
                self.stage.resize(width, height)

            rows = self.stage.frame()

            self.stdscr.erase()
            for y, row in enumerate(rows[:max(0, th - 2)]):
                try:
                    self.stdscr.addstr(y + 1, 0, row[:max(0, tw - 1)])
                except curses.error:
                    pass

            # ── HUD overlay (first and last line) ───────────────────────
            self.frame_count += 1
            now = time.time()
            if now - self.last_fps_time >= 1.0:
                self.fps = self.frame_count
                self.frame_count = 0
                self.last_fps_time = now

            ms = (now - start_time) * 1000
            hdr = (f" NODE:{self.controller.current_node_id}/{len(self.controller.tree) - 1}"
                   f" | OBJ:{self.stage.scene.count_objects()}"
                   f" | FPS:{self.fps}"
                   f" | {ms:.1f}ms ")
            try:
                self.stdscr.addstr(0, 0, hdr.center(tw - 1, '='),
                                   curses.color_pair(0) | curses.A_BOLD)
                self.stdscr.addstr(th - 1, 0, self.message[:max(0, tw - 1)])
            except curses.error:
                pass

            self.stdscr.refresh()

        if self.state_path:
            self.controller.tree.save(self.state_path)
            logger.info("Saved %d scene states to %s", len(self.controller.tree), self.state_path)
        self.stage.dispose()
