import logging
import math
from array import array

log = logging.getLogger("pong.sound")

SAMPLE_RATE = 22050
VOLUME = 0.2

# name -> (frequency Hz, duration ms)
SOUNDS = {
    "wall": (300, 60),
    "paddle": (600, 80),
    "score": (150, 300),
}


def tone(frequency, duration_ms, volume=VOLUME, sample_rate=SAMPLE_RATE):
    """16-bit native-endian mono PCM of a sine wave."""
    n = int(sample_rate * duration_ms / 1000)
    amplitude = 32767 * volume
    samples = array("h", (int(amplitude * math.sin(2 * math.pi * frequency * i / sample_rate)) for i in range(n)))
    return samples.tobytes()


class SoundBoard:
    """Fire-and-forget triggers for the game's sound events.

    ``backend`` is called with raw PCM bytes. Anything it raises is dropped:
    the match must play the same with or without sound.
    """

    def __init__(self, backend=None, volume=VOLUME):
        self.backend = backend
        self.muted = backend is None
        self.clips = {name: tone(freq, ms, volume) for name, (freq, ms) in SOUNDS.items()}

    def trigger(self, name):
        if self.muted:
            return False
        clip = self.clips.get(name)
        if clip is None:
            return False
        try:
            self.backend(clip)
            return True
        except Exception as e:
            log.debug("%s dropped: %s", name, e)
            return False

    def set_muted(self, muted):
        self.muted = muted or self.backend is None
