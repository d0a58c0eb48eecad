from __future__ import annotations

import numpy as np

from params import Params
from particle import ParticleBatch


def grid_homes(width: int, height: int, grid_size: int) -> np.ndarray:
    """Home positions for every grid point in [0, width) x [0, height), x outer, y inner."""
    g = int(grid_size)
    if g < 1:
        raise ValueError(f"grid_size must be >= 1, got {grid_size!r}")
    xs = np.arange(0, max(0, int(width)), g, dtype=np.float64)
    ys = np.arange(0, max(0, int(height)), g, dtype=np.float64)
    gx, gy = np.meshgrid(xs, ys, indexing="ij")
    return np.stack([gx.ravel(), gy.ravel()], axis=1)


class ParticleField:
    """
    Canvas-filling particle grid.

    Keeps the API small:
      field = ParticleField(params)
      field.regenerate(w, h)                 # startup + every canvas resize
      field.step(path, now_ms, frame)        # once per frame
    """

    def __init__(self, params: Params | None = None):
        self.params = params or Params()
        self.batch = ParticleBatch(np.zeros((0, 2)), self.params)
        self.size = (0, 0)
        self.grid_size = int(self.params.grid_size)

    def __len__(self):
        return len(self.batch)

    @property
    def particles(self):
        return [self.batch.particle(i) for i in range(len(self.batch))]

    def homes(self) -> np.ndarray:
        return np.array(self.batch.home)

    def regenerate(self, width: int, height: int, grid_size: int | None = None) -> None:
        # None reuses the last grid size, so resize and rebuild keep an override
        if grid_size is None:
            grid_size = self.grid_size
        homes = grid_homes(width, height, grid_size)

        # Single swap: the next step() only ever sees the new grid.
        self.batch = ParticleBatch(homes, self.params)
        self.size = (int(width), int(height))
        self.grid_size = int(grid_size)

    def step(self, path, now: float, frame_bgr=None) -> None:
        b = self.batch
        # seek_home must see the seeking flags set by seek_path this frame
        b.seek_path(path, now)
        b.seek_home(now)
        b.integrate()
        b.render(frame_bgr)
