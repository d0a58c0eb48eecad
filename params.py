from __future__ import annotations

from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class Params:
    """
    All tunable knobs live here so you don't hunt through code.
    Frozen: build a tweaked copy with with_overrides() instead of mutating.
    """
    # Grid layout (px between neighbouring home positions)
    grid_size: int = 10

    # Particle visuals
    particle_size: int = 2                     # circle diameter in px
    particle_bgr: tuple = (255, 255, 255)
    background_bgr: tuple = (0, 0, 0)

    # Path interaction
    interaction_radius: float = 30.0           # px, strict "<"
    attraction_force: float = 0.8
    return_force: float = 0.5
    damping: float = 0.9                       # velocity multiplier per step

    # Path tracking
    idle_ms: float = 1000.0                    # clear + classify after this
    max_path_len: int = 50

    # Letter heuristics
    min_letter_points: int = 10
    m_min_peaks: int = 4

    # Window used when the host can't report a size yet
    window_w: int = 1280
    window_h: int = 720

    def __post_init__(self):
        for name in ("grid_size", "particle_size", "max_path_len", "min_letter_points", "m_min_peaks"):
            if int(getattr(self, name)) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)!r}")
        for name in ("interaction_radius", "attraction_force", "return_force", "idle_ms"):
            if float(getattr(self, name)) < 0.0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)!r}")
        if not 0.0 <= float(self.damping) <= 1.0:
            raise ValueError(f"damping must be within [0, 1], got {self.damping!r}")

    def with_overrides(self, **kw) -> "Params":
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kw) - known)
        if unknown:
            raise TypeError(f"unknown Params field(s): {', '.join(unknown)}")
        return replace(self, **kw)
