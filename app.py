# app.py - particle grid sketch
import time

import cv2

from params import Params
from scene import ParticleScene

WINDOW_NAME = "Particle Grid"


class Pointer:
    """Single mouse pointer, fed by cv2.setMouseCallback and sampled once per frame."""

    def __init__(self):
        self.down = False
        self.pos = (0, 0)

    def on_mouse(self, event, x, y, flags, param):
        if event == cv2.EVENT_LBUTTONDOWN:
            self.down = True
        elif event == cv2.EVENT_LBUTTONUP:
            self.down = False
        elif event == cv2.EVENT_MOUSEMOVE and not (flags & cv2.EVENT_FLAG_LBUTTON):
            # release outside the window never reaches us on some backends
            self.down = False
        self.pos = (int(x), int(y))


def _window_size(fallback):
    try:
        _, _, w, h = cv2.getWindowImageRect(WINDOW_NAME)
    except cv2.error:
        return fallback
    if w <= 0 or h <= 0:
        return fallback
    return int(w), int(h)


def _window_closed():
    try:
        return cv2.getWindowProperty(WINDOW_NAME, cv2.WND_PROP_VISIBLE) < 1
    except cv2.error:
        return True


def main():
    params = Params()
    scene = ParticleScene(params)
    pointer = Pointer()

    cv2.namedWindow(WINDOW_NAME, cv2.WINDOW_NORMAL)
    cv2.resizeWindow(WINDOW_NAME, params.window_w, params.window_h)
    cv2.setMouseCallback(WINDOW_NAME, pointer.on_mouse)

    scene.resize(params.window_w, params.window_h)

    print("\n" + "=" * 60)
    print("✨ PARTICLE GRID SKETCH")
    print("=" * 60)
    print("\n📋 CONTROLS:")
    print("   Drag mouse - draw a path, particles follow it")
    print("   Release and wait 1s - path clears, letter check runs (M / A)")
    print("   R - Rebuild grid | C - Clear path")
    print("   ESC - Exit")
    print(f"\n✅ Grid ready: {len(scene.field)} particles")
    print("\n" + "=" * 60 + "\n")

    while True:
        w, h = _window_size(scene.size)
        if scene.resize(w, h):
            print(f"↔️  Resized to {w}x{h}: {len(scene.field)} particles")

        frame = scene.new_frame()
        now_ms = time.time() * 1000.0

        scene.update(pointer.down, pointer.pos, now_ms, frame)

        cv2.imshow(WINDOW_NAME, frame)

        key = cv2.waitKey(1) & 0xFF
        if key == 27:
            break
        if key != 255:
            scene.handle_key(key)
        if _window_closed():
            break

    cv2.destroyAllWindows()

    print("\n✅ Particle grid shutdown complete")


if __name__ == "__main__":
    main()
