"""
Hexagonal pixel indexing for a rectangular grid of regular hexagons.

The hexagons have a fixed side-to-side width (the pitch) along x and are
stacked in rows along y, odd rows shifted by half a pitch. Index (0, 0) is
the bottom-left pixel and its centre is the origin of the local frame.

Pixel centres:
    x = col * pitch + (row % 2) * pitch / 2
    y = row * 1.5 * side,   side = pitch / sqrt(3)
"""

import math
from collections import namedtuple


PixelIndex = namedtuple('PixelIndex', ['col', 'row'])
GridExtent = namedtuple('GridExtent', ['width', 'height'])

# Batch layers use this for hits that could not be assigned a pixel
UNRESOLVED = None

SQRT3_OVER_3 = math.sqrt(3) / 3


class HexGridError(Exception):
    """Base class for hexagonal grid errors"""


class InvalidPitchError(HexGridError, ValueError):
    """Pitch is not a positive finite number"""


class InvalidPositionError(HexGridError, ValueError):
    """Hit position is non-finite or too large to index at the given pitch"""


class IndexInvariantError(HexGridError, RuntimeError):
    """Bucket arithmetic produced a case the boundary table does not cover"""


def _check_pitch(pitch):
    try:
        pitch = float(pitch)
    except (TypeError, ValueError) as exc:
        raise InvalidPitchError(f"Pitch must be a number, got {pitch!r}") from exc
    if not math.isfinite(pitch) or pitch <= 0:
        raise InvalidPitchError(f"Pitch must be positive and finite, got {pitch}")
    return pitch


def check_pixel_count(value, name="count"):
    """Validate a number of pixels: a non-negative whole number"""
    try:
        count = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a whole number, got {value!r}") from exc
    if count != value:
        raise ValueError(f"{name} must be a whole number, got {value!r}")
    if count < 0:
        raise ValueError(f"{name} must be non-negative, got {count}")
    return count


def hex_side(pitch):
    """Edge length of a hexagon with the given side-to-side pitch"""
    return _check_pitch(pitch) / math.sqrt(3)


# Boundary tests. Each receives the shifted position, the x bucket, the
# vertical period number and the minor radius / side of the hexagon, and
# returns the (d_col, d_row) correction to the first approximation.

def _lower_left_edge(posx, posy, x_bucket, period, minor_radius, side):
    offset = 3 * side * period + SQRT3_OVER_3 * (x_bucket + 1) * minor_radius
    if posy < -SQRT3_OVER_3 * posx + offset:
        return (-1, -1)
    return (0, 0)


def _lower_right_edge(posx, posy, x_bucket, period, minor_radius, side):
    offset = 3 * side * period - SQRT3_OVER_3 * x_bucket * minor_radius
    if posy < SQRT3_OVER_3 * posx + offset:
        return (0, -1)
    return (0, 0)


def _upper_left_edge(posx, posy, x_bucket, period, minor_radius, side):
    offset = side * (3 * period + 2) - SQRT3_OVER_3 * minor_radius * (x_bucket + 1)
    if posy > SQRT3_OVER_3 * posx + offset:
        return (-1, 1)
    return (0, 0)


def _upper_right_edge(posx, posy, x_bucket, period, minor_radius, side):
    offset = side * (3 * period + 2) + SQRT3_OVER_3 * minor_radius * x_bucket
    if posy > -SQRT3_OVER_3 * posx + offset:
        return (0, 1)
    return (0, 0)


def _inside(*args):
    return (0, 0)


def _next_row_left(*args):
    return (-1, 1)


def _next_row_right(*args):
    return (0, 1)


# (y_bucket % 6, x_bucket % 2) -> boundary test
BOUNDARY_CASES = {
    (0, 0): _lower_left_edge,
    (0, 1): _lower_right_edge,
    (1, 0): _inside,
    (1, 1): _inside,
    (2, 0): _inside,
    (2, 1): _inside,
    (3, 0): _upper_left_edge,
    (3, 1): _upper_right_edge,
    (4, 0): _next_row_left,
    (4, 1): _next_row_right,
    (5, 0): _next_row_left,
    (5, 1): _next_row_right,
}


def get_pixel_index(position, pitch):
    """
    Map a local hit position onto the (col, row) index of the hexagonal grid.

    Parameters:
    -----------
    position : tuple
        (x, y) or (x, y, z) local coordinates; z is ignored
    pitch : float
        Side-to-side width of one hexagon

    Returns:
    --------
    PixelIndex (col, row). Indices are not checked against any grid size and
    may be negative or larger than the grid; see is_within_pixel_grid.

    A point lying exactly on a diagonal edge belongs to the pixel found by
    the first approximation: corrections are applied only for points strictly
    below a lower edge or strictly above an upper edge.
    """
    pitch = _check_pitch(pitch)
    x, y = float(position[0]), float(position[1])
    if not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidPositionError(f"Hit position must be finite, got ({x}, {y})")

    side = pitch / math.sqrt(3)
    minor_radius = pitch / 2

    # Shift so that the bottom-left pixel starts at the origin
    posx = x + minor_radius
    posy = y + side

    x_position = posx / minor_radius
    period_position = posy / (3 * side)
    if not (math.isfinite(x_position) and math.isfinite(period_position)):
        raise InvalidPositionError(
            f"Hit position ({x}, {y}) is out of representable range for pitch {pitch}"
        )

    x_bucket = int(math.floor(x_position))
    period = math.floor(period_position)
    y_bucket = int(math.floor((period_position - period) * 6))
    if y_bucket == 6:
        # fraction rounded up to a whole period
        period += 1
        y_bucket = 0

    # One-based first approximation
    col = int(math.ceil(posx / pitch))
    row = int(2 * period + 1)

    try:
        boundary_test = BOUNDARY_CASES[(y_bucket % 6, x_bucket % 2)]
    except KeyError as exc:
        raise IndexInvariantError(
            f"No boundary case for y_bucket={y_bucket}, x_bucket={x_bucket} "
            f"at position ({x}, {y}) with pitch {pitch}"
        ) from exc

    d_col, d_row = boundary_test(posx, posy, x_bucket, period, minor_radius, side)

    return PixelIndex(col + d_col - 1, row + d_row - 1)


def get_grid_size(columns, rows, pitch):
    """
    Physical size of a grid of hexagonal pixels.

    Width is measured side to side across the outer pixels of a row, height
    corner to corner across the outer pixels of a column.
    """
    pitch = _check_pitch(pitch)
    columns = check_pixel_count(columns, "columns")
    rows = check_pixel_count(rows, "rows")

    side = pitch / math.sqrt(3)
    width = columns * pitch

    if rows == 0:
        height = 0.0
    elif rows % 2 == 1:
        height = ((rows - 1) // 2) * 3 * side + 2 * side
    else:
        height = (rows // 2) * 3 * side + side / 2

    return GridExtent(float(width), float(height))


def get_pixel_center(index, pitch):
    """Local (x, y) coordinates of the centre of pixel (col, row)"""
    pitch = _check_pitch(pitch)
    col, row = int(index[0]), int(index[1])
    side = pitch / math.sqrt(3)
    x = col * pitch + (row % 2) * pitch / 2
    y = row * 1.5 * side
    return (x, y)


def is_within_pixel_grid(index, columns, rows):
    """True if the index lies in [0, columns) x [0, rows)"""
    if index is UNRESOLVED:
        return False
    col, row = index
    return 0 <= col < columns and 0 <= row < rows
