"""
Grid particles that chase a drawn path and then relax back home.

State (struct of arrays, one row per particle):
- home: Nx2, fixed at creation (read-only)
- pos, vel, acc: Nx2 in canvas pixels
- seeking: N bools, near the path this frame
- last_seek: N ms timestamps of the last frame spent seeking

Per frame, in this order:
- seek_path: constant pull toward the nearest path point inside interaction_radius
- seek_home: constant pull toward home once idle for idle_ms
- integrate: vel += acc, vel *= damping, pos += vel, acc = 0
- render: one filled circle per particle

Every op mutates the arrays in place, so a Particle (a one-row view into a
batch) and the batch itself run exactly the same code.
"""

from __future__ import annotations

import numpy as np
import cv2

from params import Params
from trail import as_points


def unit_towards(src: np.ndarray, dst: np.ndarray) -> np.ndarray:
    """Row-wise unit vectors src -> dst. Rows where src == dst get (0, 0)."""
    d = np.asarray(dst, dtype=np.float64) - np.asarray(src, dtype=np.float64)
    n = np.hypot(d[..., 0], d[..., 1])
    out = np.zeros_like(d)
    moving = n > 0.0
    out[moving] = d[moving] / n[moving][..., None]
    return out


def nearest_on_path(pos: np.ndarray, path: np.ndarray):
    """
    For each position, the nearest path point and its distance.
    Linear scan over the path; on ties the lowest index wins (argmin keeps the first).
    """
    # diff[i, j] = path[j] - pos[i]
    diff = path[None, :, :] - pos[:, None, :]
    dist = np.hypot(diff[:, :, 0], diff[:, :, 1])
    idx = np.argmin(dist, axis=1)
    rows = np.arange(len(pos))
    return path[idx], dist[rows, idx]


class ParticleBatch:
    def __init__(self, homes, params: Params | None = None):
        self.params = params or Params()

        homes = np.asarray(homes, dtype=np.float64).reshape(-1, 2)
        n = len(homes)

        self.home = homes.copy()
        self.home.flags.writeable = False
        self.pos = homes.copy()
        self.vel = np.zeros((n, 2), dtype=np.float64)
        self.acc = np.zeros((n, 2), dtype=np.float64)
        self.seeking = np.zeros(n, dtype=bool)
        self.last_seek = np.zeros(n, dtype=np.float64)

    def __len__(self):
        return len(self.pos)

    def particle(self, i: int) -> "Particle":
        """Single-particle handle sharing row i's memory."""
        n = len(self)
        if i < 0:
            i += n
        if not 0 <= i < n:
            raise IndexError(f"particle index {i} out of range for {n} particles")

        p = Particle.__new__(Particle)
        p.params = self.params
        sl = slice(i, i + 1)
        p.home = self.home[sl]
        p.pos = self.pos[sl]
        p.vel = self.vel[sl]
        p.acc = self.acc[sl]
        p.seeking = self.seeking[sl]
        p.last_seek = self.last_seek[sl]
        return p

    # ---------- per-frame ops ----------
    def seek_path(self, path, now: float) -> None:
        pts = as_points(path)
        if len(pts) == 0 or len(self) == 0:
            self.seeking[:] = False
            return

        p = self.params
        target, dist = nearest_on_path(self.pos, pts)
        near = dist < p.interaction_radius

        if np.any(near):
            self.acc[near] += unit_towards(self.pos[near], target[near]) * p.attraction_force
            self.last_seek[near] = float(now)
        self.seeking[:] = near

    def seek_home(self, now: float) -> None:
        p = self.params
        idle = (~self.seeking) & ((float(now) - self.last_seek) > p.idle_ms)
        if np.any(idle):
            self.acc[idle] += unit_towards(self.pos[idle], self.home[idle]) * p.return_force

    def integrate(self) -> None:
        # Order matters: damp the updated velocity before it moves the particle.
        self.vel += self.acc
        self.vel *= self.params.damping
        self.pos += self.vel
        self.acc[:] = 0.0

    def render(self, frame_bgr) -> None:
        """Draw particles onto a BGR uint8 frame (in place)."""
        if frame_bgr is None or len(self) == 0:
            return
        s = int(self.params.particle_size)
        color = tuple(int(c) for c in self.params.particle_bgr)

        if s <= 2:
            # cv2.circle can't go below 3px across, so tiny particles are s x s blocks
            h, w = frame_bgr.shape[:2]
            x0s = np.floor(self.pos[:, 0] - (s - 1) / 2.0).astype(np.int64)
            y0s = np.floor(self.pos[:, 1] - (s - 1) / 2.0).astype(np.int64)
            for x0, y0 in zip(x0s, y0s):
                xa, xb = max(0, x0), min(w, x0 + s)
                ya, yb = max(0, y0), min(h, y0 + s)
                if xa < xb and ya < yb:
                    frame_bgr[ya:yb, xa:xb] = color
            return

        # filled circle is 2r+1 px across
        r = (s - 1) // 2
        xs = np.floor(self.pos[:, 0]).astype(np.int64)
        ys = np.floor(self.pos[:, 1]).astype(np.int64)

        for x, y in zip(xs, ys):
            cv2.circle(frame_bgr, (int(x), int(y)), r, color, -1)


class Particle(ParticleBatch):
    """One grid particle. Either standalone or a view handed out by ParticleBatch.particle()."""

    def __init__(self, home, params: Params | None = None):
        super().__init__([home], params)

    @property
    def position(self) -> np.ndarray:
        return self.pos[0].copy()

    @property
    def velocity(self) -> np.ndarray:
        return self.vel[0].copy()

    @property
    def acceleration(self) -> np.ndarray:
        return self.acc[0].copy()

    @property
    def is_seeking_path(self) -> bool:
        return bool(self.seeking[0])

    @property
    def last_seek_time(self) -> float:
        return float(self.last_seek[0])
