from pong_logic import PAUSED, GAME_OVER, PLAYER

BG = "#191919"
FG = "#f0f0f0"
NET = "#5a5a5a"
BALL = "#ff99cc"
ACCENT = "#ff66b2"

DASH = (8, 8)


def overlay_text(state):
    """Status line shown over the field, or None while the ball is in play."""
    if state.mode == PAUSED:
        return "PAUSED"
    if state.mode == GAME_OVER:
        return "Player wins!" if state.winner == PLAYER else "Opponent wins!"
    return None


def render_scene(state, canvas):
    """Draw one frame of ``state`` through the canvas primitives.

    The canvas needs clear(color), line(x0, y0, x1, y1, color, dash),
    rect(x, y, w, h, color), circle(x, y, r, color) and
    text(x, y, s, color, size, centered). Nothing here writes to ``state``.
    """
    w, h = state.width, state.height
    canvas.clear(BG)
    canvas.line(w / 2, 0, w / 2, h, NET, DASH)

    for p in (state.player, state.opponent):
        canvas.rect(p.x, p.y, p.width, p.height, FG)

    b = state.ball
    canvas.circle(b.x, b.y, b.radius, BALL)

    canvas.text(w / 2 - 60, 50, str(state.player_score), FG, 32, False)
    canvas.text(w / 2 + 40, 50, str(state.opponent_score), FG, 32, False)

    msg = overlay_text(state)
    if msg:
        canvas.text(w / 2, h / 2, msg, ACCENT, 28, True)
        if state.mode == GAME_OVER:
            canvas.text(w / 2, h / 2 + 36, "press R or Restart", FG, 14, True)
