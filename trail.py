from __future__ import annotations

from collections import deque

import numpy as np

from params import Params


def as_points(path) -> np.ndarray:
    """Coerce a path (sequence of (x, y) or an Mx2 array) to float64 Mx2."""
    pts = np.asarray(path, dtype=np.float64)
    if pts.size == 0:
        return np.zeros((0, 2), dtype=np.float64)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"path must be a sequence of (x, y) points, got shape {pts.shape}")
    return pts


class PathTracker:
    """
    Recent pointer trail.

    - points: oldest first, capped at params.max_path_len (front is evicted)
    - last_activity_time: ms timestamp of the last append
    - the whole trail is dropped once the pointer has been idle for idle_ms
    """

    def __init__(self, params: Params | None = None):
        self.params = params or Params()
        self.points = deque()
        self.last_activity_time = 0.0

    def __len__(self):
        return len(self.points)

    def record_if_active(self, pointer_active, pointer_pos, now: float) -> None:
        if pointer_active:
            self.points.append((float(pointer_pos[0]), float(pointer_pos[1])))
            self.last_activity_time = float(now)

        while len(self.points) > self.params.max_path_len:
            self.points.popleft()

    def expire_if_idle(self, now: float, idle_ms: float | None = None) -> bool:
        """Clear the trail after idle_ms of inactivity. True means a path just completed."""
        if idle_ms is None:
            idle_ms = self.params.idle_ms
        if self.points and (float(now) - self.last_activity_time > float(idle_ms)):
            self.points.clear()
            return True
        return False

    def current_path(self) -> tuple:
        return tuple(self.points)

    def clear(self) -> None:
        self.points.clear()
