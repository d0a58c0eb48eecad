import numpy as np

from params import Params
from scene import ParticleScene

A_YS = [100, 80, 60, 40, 20, 0, 20, 40, 60, 80, 100]
M_YS = [100, 50, 0, 50, 100, 50, 0, 50, 100, 50, 0, 50, 100, 50, 0, 50, 100]


def _scene():
    scene = ParticleScene(Params(grid_size=50))
    scene.resize(200, 200)
    return scene


def _draw(scene, ys, t0=10_000.0, dt=16.0):
    t = t0
    for i, y in enumerate(ys):
        assert scene.update(True, (20 + i * 10, y), t) is None
        t += dt
    return t - dt


def test_letter_reported_once_at_idle_transition(capsys):
    scene = _scene()
    last = _draw(scene, A_YS)

    assert scene.update(False, (0, 0), last + 500.0) is None
    assert scene.update(False, (0, 0), last + 1000.0) is None
    assert scene.update(False, (0, 0), last + 1001.0) == "A"

    assert len(scene.tracker) == 0
    assert scene.last_letter == "A"
    assert "Detected letter: A" in capsys.readouterr().out

    assert scene.update(False, (0, 0), last + 2000.0) is None


def test_m_detected():
    scene = _scene()
    last = _draw(scene, M_YS)
    assert scene.update(False, (0, 0), last + 1001.0) == "M"


def test_unknown_shape_returns_none_and_stays_quiet(capsys):
    scene = _scene()
    last = _draw(scene, list(range(0, 120, 10)))

    assert scene.update(False, (0, 0), last + 1001.0) is None
    assert len(scene.tracker) == 0
    assert scene.last_letter is None
    assert capsys.readouterr().out == ""


def test_update_moves_particles_near_the_pointer():
    scene = _scene()
    scene.update(True, (60.0, 50.0), 10_000.0)

    p = scene.field.particles[scene.field.homes().tolist().index([50.0, 50.0])]
    assert p.is_seeking_path
    assert p.position[0] > 50.0


def test_resize_only_rebuilds_on_change():
    scene = _scene()
    assert len(scene.field) == 16

    assert scene.resize(200, 200) is False
    assert scene.resize(100, 200) is True
    assert len(scene.field) == 8
    assert scene.size == (100, 200)


def test_new_frame_uses_background():
    scene = ParticleScene(Params(grid_size=50, background_bgr=(10, 20, 30)))
    scene.resize(120, 80)

    frame = scene.new_frame()

    assert frame.shape == (80, 120, 3)
    assert frame.dtype == np.uint8
    assert tuple(frame[40, 60]) == (10, 20, 30)


def test_update_draws_into_frame():
    scene = _scene()
    frame = scene.new_frame()
    scene.update(False, (0, 0), 0.0, frame)
    assert tuple(frame[50, 50]) == (255, 255, 255)


def test_keys_clear_and_rebuild():
    scene = _scene()
    scene.update(True, (60.0, 50.0), 10_000.0)
    assert len(scene.tracker) == 1

    scene.handle_key(ord("c"))
    assert len(scene.tracker) == 0

    scene.handle_key(ord("r"))
    assert np.array_equal(scene.field.batch.pos, scene.field.batch.home)

    scene.handle_key(None)
    scene.handle_key(ord("z"))


def test_rebuild_key_keeps_grid_size_override():
    scene = ParticleScene()
    scene.field.regenerate(100, 100, grid_size=50)
    assert len(scene.field) == 4

    scene.handle_key(ord("r"))
    assert len(scene.field) == 4

    scene.resize(150, 100)
    assert len(scene.field) == 6
