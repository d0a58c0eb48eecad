"""
Toy letter detection for a finished path.

Only two shapes are known:
- "M": at least m_min_peaks local peaks
- "A": exactly one local peak sitting at the path's highest point

Screen y grows downward, so a peak is a strict local minimum in y.
No accuracy is promised; this is a heuristic, not a recognizer.
"""

from __future__ import annotations

import numpy as np

from params import Params
from trail import as_points


def _peak_mask(ys: np.ndarray) -> np.ndarray:
    # interior points strictly above both neighbours
    mid = ys[1:-1]
    return (mid < ys[:-2]) & (mid < ys[2:])


def count_peaks(path) -> int:
    pts = as_points(path)
    if len(pts) < 3:
        return 0
    return int(np.count_nonzero(_peak_mask(pts[:, 1])))


def is_m(path, params: Params | None = None) -> bool:
    p = params or Params()
    pts = as_points(path)
    if len(pts) < p.min_letter_points:
        return False
    return count_peaks(pts) >= p.m_min_peaks


def is_a(path, params: Params | None = None) -> bool:
    p = params or Params()
    pts = as_points(path)
    if len(pts) < p.min_letter_points:
        return False

    ys = pts[:, 1]
    min_y = ys.min()
    # Exact float equality with the global minimum, kept as-is (near-ties don't count).
    at_top = _peak_mask(ys) & (ys[1:-1] == min_y)
    return int(np.count_nonzero(at_top)) == 1


def classify(path, params: Params | None = None):
    """Best guess for a finished path: "M", "A" or None."""
    if is_m(path, params):
        return "M"
    if is_a(path, params):
        return "A"
    return None
