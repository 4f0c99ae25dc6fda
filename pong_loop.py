import logging
import time

from pong_logic import GameState

log = logging.getLogger("pong.loop")

FPS = 60
TICK = 1 / FPS


class GameLoop:
    """Drives a GameState one frame at a time.

    ``running`` is the cancellation flag: frame() does nothing while it is
    down, and it drops by itself when the match is paused or over. The host
    (a QTimer, or run() below) keeps calling frame() and stops scheduling
    once it returns False.
    """

    def __init__(self, state=None, render=None, sound=None):
        self.state = state or GameState()
        self.render = render
        self.sound = sound
        self.running = False
        self.frames = 0

    def start(self):
        if self.running or not self.state.running:
            return False
        self.running = True
        log.info("start # %dx%d", self.state.width, self.state.height)
        return True

    def stop(self):
        self.running = False

    def frame(self):
        if not self.running:
            return False

        for name in self.state.tick():
            if self.sound is not None:
                self.sound.trigger(name)
        self.frames += 1

        if self.render is not None:
            self.render(self.state)

        if not self.state.running:
            self.running = False
        return self.running

    def run(self, frames=None, sleep=time.sleep, clock=time.monotonic):
        """Blocking fixed-rate loop, for hosts without their own frame clock."""
        self.start()
        n = 0
        while self.running:
            now = clock()
            self.frame()
            n += 1
            if frames is not None and n >= frames:
                break

            sleep_t = TICK - (clock() - now)
            if sleep_t > 0:
                sleep(sleep_t)
        return n

    # commands from the input / control side

    def set_player_paddle_center(self, y):
        self.state.set_player_paddle_center(y)

    def toggle_pause(self):
        mode = self.state.toggle_pause()
        if self.state.running:
            self.start()
        else:
            self.stop()
        log.info("%s", mode.lower())
        return mode

    def restart(self):
        self.state.restart()
        self.stop()
        self.start()

    def resize(self, width, height):
        if (width, height) == (self.state.width, self.state.height):
            return False
        self.state.resize(width, height)
        log.info("resize # %dx%d", width, height)
        return True
