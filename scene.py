from __future__ import annotations

import numpy as np

from field import ParticleField
from letters import classify
from params import Params
from trail import PathTracker


class ParticleScene:
    """
    One frame of the sketch, without any window attached:
      record pointer -> step particles -> expire idle path -> classify on expiry
    """

    def __init__(self, params: Params | None = None):
        self.params = params or Params()
        self.field = ParticleField(self.params)
        self.tracker = PathTracker(self.params)
        self.last_letter = None

    @property
    def size(self):
        return self.field.size

    def resize(self, width: int, height: int) -> bool:
        """Rebuild the grid if the canvas size changed. True if it did."""
        if (int(width), int(height)) == self.field.size:
            return False
        self.field.regenerate(width, height)
        return True

    def new_frame(self) -> np.ndarray:
        w, h = self.field.size
        frame = np.empty((max(1, h), max(1, w), 3), dtype=np.uint8)
        frame[:] = self.params.background_bgr
        return frame

    def update(self, pointer_active, pointer_pos, now: float, frame_bgr=None):
        """
        Call once per frame. now is in ms.
        Returns the detected letter on the frame the path expires, else None.
        """
        self.tracker.record_if_active(pointer_active, pointer_pos, now)
        path = self.tracker.current_path()

        self.field.step(path, now, frame_bgr)

        if not self.tracker.expire_if_idle(now):
            return None

        # path is the trail that just completed
        letter = classify(path, self.params)
        if letter:
            self.last_letter = letter
            print(f"✍️  Detected letter: {letter}")
        return letter

    def handle_key(self, key: int):
        if key is None:
            return

        if key in (ord("r"), ord("R")):
            w, h = self.field.size
            self.field.regenerate(w, h)
        elif key in (ord("c"), ord("C")):
            self.tracker.clear()
