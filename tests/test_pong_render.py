"""Tests for scene drawing in pong_render."""

from __future__ import annotations

import random
import unittest

from pong_logic import GameState
from pong_render import BALL, render_scene, overlay_text


class RecordingCanvas:
    def __init__(self) -> None:
        self.calls = []

    def __getattr__(self, name):
        def record(*args):
            self.calls.append((name,) + args)
        return record

    def named(self, name):
        return [c for c in self.calls if c[0] == name]


class RenderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.state = GameState(rng=random.Random(1))
        self.canvas = RecordingCanvas()

    def test_draw_order_and_geometry(self) -> None:
        self.state.scores = [3, 1]
        render_scene(self.state, self.canvas)

        kinds = [c[0] for c in self.canvas.calls]
        self.assertEqual(kinds, ["clear", "line", "rect", "rect", "circle", "text", "text"])

        line = self.canvas.named("line")[0]
        self.assertEqual(line[1:5], (400, 0, 400, 400))

        rects = self.canvas.named("rect")
        self.assertEqual(rects[0][1:5], (10, 160, 12, 80))
        self.assertEqual(rects[1][1:5], (778, 160, 12, 80))

        self.assertEqual(self.canvas.named("circle")[0][1:5], (400, 200, 10, BALL))

        texts = self.canvas.named("text")
        self.assertEqual(texts[0][1:4], (340, 50, "3"))
        self.assertEqual(texts[1][1:4], (440, 50, "1"))

    def test_render_does_not_touch_state(self) -> None:
        before = self.state.to_dict()
        render_scene(self.state, self.canvas)
        self.assertEqual(self.state.to_dict(), before)

    def test_paused_overlay(self) -> None:
        self.state.toggle_pause()
        render_scene(self.state, self.canvas)
        self.assertEqual(self.canvas.named("text")[-1][3], "PAUSED")

    def test_game_over_overlay_names_winner(self) -> None:
        self.assertIsNone(overlay_text(self.state))
        self.state.scores = [0, 4]
        b = self.state.ball
        b.x, b.y, b.vx, b.vy = 12, 100, -5, 0
        self.state.tick()

        self.assertEqual(overlay_text(self.state), "Opponent wins!")
        render_scene(self.state, self.canvas)
        texts = [c[3] for c in self.canvas.named("text")]
        self.assertIn("Opponent wins!", texts)
        self.assertIn("press R or Restart", texts)


if __name__ == "__main__":
    unittest.main()
