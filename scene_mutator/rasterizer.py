#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/rasterizer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

from .canvas import Canvas


def clip_segment(p1, p2, w, h):
    """
    Liang-Barsky clip of a 2D segment against [0, w) x [0, h).
    Returns the clipped (p1, p2) pair, or None when fully outside.
    """
    x1, y1 = p1[0], p1[1]
    dx = p2[0] - x1
    dy = p2[1] - y1
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x1), (dx, (w - 1) - x1), (-dy, y1), (dy, (h - 1) - y1)):
        if p == 0:
            if q < 0:
                return None
            continue
        r = q / p
        if p < 0:
            if r > t1: return None
            if r > t0: t0 = r
        else:
            if r < t0: return None
            if r < t1: t1 = r
    return ((x1 + t0 * dx, y1 + t0 * dy), (x1 + t1 * dx, y1 + t1 * dy))


def draw_line_dda(canvas: Canvas, p1, p2) -> bool:
    """
    Draws a line using the DDA algorithm after clipping it to the canvas.
    Returns False when nothing was drawn.
    """
    clipped = clip_segment(p1, p2, canvas.w, canvas.h)
    if clipped is None:
        return False
    (fx1, fy1), (fx2, fy2) = clipped
    x1, y1 = int(fx1), int(fy1)
    x2, y2 = int(fx2), int(fy2)

    dx = x2 - x1
    dy = y2 - y1
    if dx == 0 and dy == 0:
        canvas.set_pixel(x1, y1)
        return True

    step = abs(dx) if abs(dx) > abs(dy) else abs(dy)
    x_inc = dx / step
    y_inc = dy / step

    cx, cy = float(x1), float(y1)
    for _ in range(int(step) + 1):
        canvas.set_pixel(int(cx), int(cy))
        cx += x_inc; cy += y_inc
    return True
