# simulator/raster.py
#
# Maps a History onto RGBA pixel buffers. Row r of a trace is step r; column
# is the signed tape position. Buffers are uint8 arrays shaped (height, width, 4).

import math
from dataclasses import dataclass, replace

import numpy as np
from numba import njit

from simulator.history import run
from simulator.tape import UNSET

PALETTE = np.array([
    [255, 0, 0],
    [255, 128, 0],
    [0, 0, 255],
    [0, 255, 0],
    [255, 0, 255],
    [0, 255, 255],
    [255, 255, 0],
], dtype=np.uint8)

FILLED = (255, 255, 255, 255)
BACKGROUND = (0, 0, 0, 0)
MAX_SCROLL_Y = 20


def wheel_scale(delta):
    """Zoom factor for a wheel delta: 1.1 per 10 units, scrolling up zooms in."""
    return math.pow(1.1, -delta / 10)


@dataclass(frozen=True)
class ViewTransform:
    """Zoom and pan of the interactive view.

    Cell (position, row) has its top-left corner at pixel
    (position * zoom + width * origin_x + pan_x, row * zoom + pan_y).
    """

    zoom: float = 10.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    origin_x: float = 0.5

    def __post_init__(self):
        if not self.zoom > 0:
            raise ValueError(f"zoom must be positive, got {self.zoom}.")

    def offsets(self, width):
        return width * self.origin_x + self.pan_x, self.pan_y

    def to_screen(self, position, row, width):
        x_offset, y_offset = self.offsets(width)
        return position * self.zoom + x_offset, row * self.zoom + y_offset

    def to_cell(self, x, y, width):
        """Cell (position, row) containing pixel coordinate (x, y)."""
        x_offset, y_offset = self.offsets(width)
        return math.floor((x - x_offset) / self.zoom), math.floor((y - y_offset) / self.zoom)

    def panned(self, dx, dy):
        return replace(self, pan_x=self.pan_x + dx, pan_y=min(self.pan_y + dy, MAX_SCROLL_Y))

    def zoomed_at(self, scale, anchor_x, anchor_y, width):
        """Scale by `scale` keeping the cell under (anchor_x, anchor_y) in place."""
        x_offset, y_offset = self.offsets(width)
        x_offset = (x_offset - anchor_x) * scale + anchor_x
        y_offset = (y_offset - anchor_y) * scale + anchor_y
        return replace(
            self,
            zoom=self.zoom * scale,
            pan_x=x_offset - width * self.origin_x,
            pan_y=min(y_offset, MAX_SCROLL_Y),
        )


@njit
def _position(index):
    if index % 2 == 0:
        return index // 2
    return -(index + 1) // 2


@njit
def _span(cell, zoom, offset, limit):
    # Pixel range [lo, hi) covered by a cell, at least one pixel wide.
    lo = math.floor(cell * zoom + offset)
    hi = max(lo + 1, math.floor((cell + 1) * zoom + offset))
    return max(lo, 0), min(hi, limit)


@njit
def _paint_view(cells, states, heads, row_lo, row_hi, zoom, x_offset, y_offset, palette, filled, canvas):
    height, width = canvas.shape[0], canvas.shape[1]

    # Tape pass: only 1-cells are painted, 0 stays background.
    for row in range(row_lo, row_hi):
        y0, y1 = _span(row, zoom, y_offset, height)
        if y0 >= y1:
            continue
        for i in range(cells.shape[1]):
            if cells[row, i] != 1:
                continue
            x0, x1 = _span(_position(i), zoom, x_offset, width)
            if x0 >= x1:
                continue
            for c in range(4):
                canvas[y0:y1, x0:x1, c] = filled[c]

    # Head pass runs last so every head stays visible, whatever the zoom.
    for row in range(row_lo, row_hi):
        state = states[row]
        if state < 0 or state >= palette.shape[0]:
            continue
        y0, y1 = _span(row, zoom, y_offset, height)
        x0, x1 = _span(heads[row], zoom, x_offset, width)
        if y0 >= y1 or x0 >= x1:
            continue
        for c in range(3):
            canvas[y0:y1, x0:x1, c] = palette[state, c]
        canvas[y0:y1, x0:x1, 3] = 255


def render_view(history, transform, width, height, filled=FILLED, background=BACKGROUND):
    """Render the part of a trace visible through `transform` into a width x height buffer.

    Each cell is filled at its screen rectangle, so buffers are sized by the
    output and a zoomed-out view draws several cells into the same pixel.
    """
    canvas = np.empty((max(height, 0), max(width, 0), 4), dtype=np.uint8)
    canvas[:] = background
    if width <= 0 or height <= 0:
        return canvas

    zoom = transform.zoom
    x_offset, y_offset = transform.offsets(width)
    row_lo = max(math.floor(-y_offset / zoom) - 1, 0)
    row_hi = min(math.floor((height - y_offset) / zoom) + 1, len(history))
    if row_lo >= row_hi:
        return canvas

    cells, states, heads = history.as_arrays()
    _paint_view(cells, states, heads, row_lo, row_hi, float(zoom), float(x_offset), float(y_offset),
                PALETTE, np.array(filled, dtype=np.uint8), canvas)
    return canvas


@njit
def _paint_trace(cells, states, heads, origin_col, show_head_move, out):
    height, width = out.shape[0], out.shape[1]
    for row in range(min(cells.shape[0], height)):
        for i in range(cells.shape[1]):
            symbol = cells[row, i]
            if symbol == UNSET:
                continue
            col = _position(i) + origin_col
            if col < 0 or col >= width:
                continue
            color = 255 if symbol == 1 else 0
            out[row, col, 0] = color
            out[row, col, 1] = color
            out[row, col, 2] = color
            out[row, col, 3] = 255

        if not show_head_move or row == 0 or states[row] < 0:
            continue
        head, last = heads[row], heads[row - 1]
        col = head + origin_col
        if col < 0 or col >= width:
            continue
        out[row, col, 0] = 255 if head > last else 0
        out[row, col, 1] = 255 if head < last else 0
        out[row, col, 2] = 0
        out[row, col, 3] = 255


def paint_trace(history, width=900, height=1000, origin_x=0.5, show_head_move=False):
    """Draw a trace one pixel per cell, column = position + floor(width * origin_x).

    Visited cells are white (1) or black (0); cells the head never reached
    stay transparent. With show_head_move the head cell is red after a move
    right and green after a move left.
    """
    out = np.zeros((max(height, 0), max(width, 0), 4), dtype=np.uint8)
    if width <= 0 or height <= 0:
        return out
    cells, states, heads = history.as_arrays()
    _paint_trace(cells, states, heads, math.floor(width * origin_x), show_head_move, out)
    return out


def trace_to_image(machine, initial_tape="0", width=900, height=1000, origin_x=0.5, show_head_move=False):
    history = run(machine, initial_tape, height)
    return paint_trace(history, width, height, origin_x, show_head_move)
