import logging
import random

log = logging.getLogger("pong.logic")

FIELD_WIDTH = 800
FIELD_HEIGHT = 400
MAX_FIELD_WIDTH = 800
MIN_FIELD_WIDTH = 200

PADDLE_WIDTH = 12
PADDLE_HEIGHT = 80
PADDLE_MARGIN = 10
BALL_RADIUS = 10

WINNING_SCORE = 5
SPIN = 0.08
AI_DEAD_ZONE = 10
AI_MIN_SPEED = 2
AI_SPEED_FACTOR = 0.7

PLAYER = 0
OPPONENT = 1

RUNNING = "RUNNING"
PAUSED = "PAUSED"
GAME_OVER = "GAME_OVER"

# sound events returned by tick()
WALL = "wall"
PADDLE = "paddle"
SCORE = "score"


def limit(v, a, b):
    return max(a, min(b, v))


def fit_arena(available_width):
    """Arena size for a viewport: at most MAX_FIELD_WIDTH wide, always 2:1."""
    w = limit(int(available_width), MIN_FIELD_WIDTH, MAX_FIELD_WIDTH)
    return w, w // 2


class Paddle:
    def __init__(self, x, y, width=PADDLE_WIDTH, height=PADDLE_HEIGHT):
        self.x = x
        self.y = y
        self.width = width
        self.height = height

    @property
    def center_y(self):
        return self.y + self.height / 2

    def clamp(self, field_height):
        self.y = limit(self.y, 0, max(0, field_height - self.height))

    def spans(self, y):
        return self.y < y < self.y + self.height


class Ball:
    def __init__(self, x, y, vx=0.0, vy=0.0, radius=BALL_RADIUS):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.radius = radius


class GameState:
    """Everything one match owns: arena, paddles, ball, score, match state.

    The state only changes through tick() and the command methods, so a
    frame loop, an input adapter and a test can all drive the same object.
    """

    def __init__(self, width=FIELD_WIDTH, height=FIELD_HEIGHT, win_score=WINNING_SCORE, rng=None):
        self.rng = rng or random.Random()
        self.win_score = win_score

        self.width = width
        self.height = height
        self.player = Paddle(PADDLE_MARGIN, 0)
        self.opponent = Paddle(0, 0)
        self.ball = Ball(0, 0)

        self.scores = [0, 0]
        self.mode = RUNNING
        self.winner = None

        self.resize(width, height)

    @property
    def player_score(self):
        return self.scores[PLAYER]

    @property
    def opponent_score(self):
        return self.scores[OPPONENT]

    @property
    def running(self):
        return self.mode == RUNNING

    @property
    def game_over(self):
        return self.mode == GAME_OVER

    def resize(self, width, height):
        if width <= 0 or height <= 0:
            raise ValueError(f"arena must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.opponent.x = width - PADDLE_WIDTH - PADDLE_MARGIN
        for paddle in (self.player, self.opponent):
            paddle.y = (height - paddle.height) / 2
            paddle.clamp(height)
        self.reset_ball()

    def reset_ball(self):
        b = self.ball
        b.x = self.width / 2
        b.y = self.height / 2
        speed_x = 5 if self.width > 400 else 3
        speed_y = 3 if self.height > 200 else 2
        b.vx = speed_x * self.rng.choice((-1, 1))
        b.vy = speed_y * self.rng.choice((-1, 1))

    def set_player_paddle_center(self, y):
        self.player.y = y - self.player.height / 2
        self.player.clamp(self.height)

    def toggle_pause(self):
        if self.mode == RUNNING:
            self.mode = PAUSED
        elif self.mode == PAUSED:
            self.mode = RUNNING
        return self.mode

    def restart(self):
        self.scores = [0, 0]
        self.winner = None
        self.mode = RUNNING
        self.resize(self.width, self.height)
        log.info("restart")

    def tick(self):
        """Advance one frame. Returns the sound events it produced."""
        if self.mode != RUNNING:
            return []

        events = []
        b = self.ball
        b.x += b.vx
        b.y += b.vy

        if b.y - b.radius < 0 or b.y + b.radius > self.height:
            b.vy = -b.vy
            events.append(WALL)

        # leading edge against the paddle face only, no swept test
        p = self.player
        if b.x - b.radius < p.x + p.width and p.spans(b.y):
            b.vx = abs(b.vx)
            b.vy += (b.y - p.center_y) * SPIN
            events.append(PADDLE)

        o = self.opponent
        if b.x + b.radius > o.x and o.spans(b.y):
            b.vx = -abs(b.vx)
            b.vy += (b.y - o.center_y) * SPIN
            events.append(PADDLE)

        scorer = None
        if b.x - b.radius < 0:
            scorer = OPPONENT
        elif b.x + b.radius > self.width:
            scorer = PLAYER

        if scorer is not None:
            self.scores[scorer] += 1
            events.append(SCORE)
            log.info("point %s # %d:%d", side_name(scorer), *self.scores)
            self.check_win()
            self.reset_ball()
            if self.mode == GAME_OVER:
                return events

        self.track_ball()
        self.check_win()
        return events

    def track_ball(self):
        o = self.opponent
        speed = max(AI_MIN_SPEED, abs(self.ball.vy) * AI_SPEED_FACTOR)
        if o.center_y < self.ball.y - AI_DEAD_ZONE:
            o.y += speed
        elif o.center_y > self.ball.y + AI_DEAD_ZONE:
            o.y -= speed
        o.clamp(self.height)

    def check_win(self):
        if self.mode == GAME_OVER:
            return
        if self.scores[PLAYER] >= self.win_score:
            self.winner = PLAYER
        elif self.scores[OPPONENT] >= self.win_score:
            self.winner = OPPONENT
        else:
            return
        self.mode = GAME_OVER
        log.info("game over # winner %s", side_name(self.winner))

    def to_dict(self):
        return {
            'width': self.width,
            'height': self.height,
            'player_y': self.player.y,
            'opponent': {'x': self.opponent.x, 'y': self.opponent.y},
            'ball': {'x': self.ball.x, 'y': self.ball.y, 'vx': self.ball.vx, 'vy': self.ball.vy},
            'scores': list(self.scores),
            'mode': self.mode,
            'winner': self.winner,
        }


def side_name(side):
    return "player" if side == PLAYER else "opponent"
