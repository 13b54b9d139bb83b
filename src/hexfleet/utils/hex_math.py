"""
Hexagonal coordinate system mathematics for hexfleet.

This module implements the hex coordinate operations behind the battle map.
It supports:
- Conversion between offset grid coordinates and cube coordinates
- Distance calculations between hexes
- Finding adjacent hexes and facing directions
- Finding all hexes within a range (for gunnery ranges, terrain patches)
- Line drawing (for lines of fire)

Coordinate Systems:
-------------------
We use two coordinate systems:

1. Offset Coordinates (col, row) - for storage and representation
   - col: column on the rectangular battle grid
   - row: row on the rectangular battle grid
   - Odd columns are shifted by half a hex ("odd-q" layout)
   - Used in the HexCoord dataclass

2. Cube Coordinates (q, s, r) - for all geometry
   - three coordinates with constraint q + s + r = 0
   - Makes distance calculation simple: max(|dq|, |ds|, |dr|)
   - Conversion: q = col, r = row - (col - (col & 1)) / 2, s = -q - r

References:
-----------
Based on the excellent guide at: https://www.redblobgames.com/grids/hexagons/
"""

from dataclasses import dataclass

Cube = tuple[int, int, int]

# Nudge applied before rounding interpolated points so that no point lands
# exactly on an edge between two hexes.
_LINE_EPSILON: tuple[float, float, float] = (1e-6, 2e-6, -3e-6)


@dataclass(frozen=True)
class HexCoord:
    """
    A hexagonal coordinate using the odd-q offset coordinate system.

    Attributes:
        col: Column on the battle grid
        row: Row on the battle grid

    Example:
        >>> origin = HexCoord(col=0, row=0)
        >>> neighbor = HexCoord(col=1, row=0)
        >>> hex_distance(origin, neighbor)
        1
    """

    col: int
    row: int

    def __hash__(self) -> int:
        """Make HexCoord hashable for use in sets and dicts."""
        return hash((self.col, self.row))


def to_cube(coord: HexCoord) -> Cube:
    """
    Convert offset coordinates (col, row) to cube coordinates (q, s, r).

    Args:
        coord: A hex coordinate in the offset system

    Returns:
        A tuple (q, s, r) with q + s + r == 0

    Example:
        >>> to_cube(HexCoord(col=1, row=2))
        (1, -3, 2)
    """
    q = coord.col
    r = coord.row - (coord.col - (coord.col & 1)) // 2
    s = -q - r
    return q, s, r


def to_offset(q: int, s: int, r: int) -> HexCoord:  # noqa: ARG001
    """
    Convert cube coordinates (q, s, r) back to offset coordinates.

    Note: The s parameter is accepted for API consistency with cube
    coordinates, but is not used as it is redundant (s = -q - r).

    Example:
        >>> to_offset(1, -3, 2)
        HexCoord(col=1, row=2)
    """
    col = q
    row = r + (q - (q & 1)) // 2
    return HexCoord(col=col, row=row)


def round_cube(q: float, s: float, r: float) -> Cube:
    """
    Round fractional cube coordinates to the nearest hex.

    Each component is rounded independently; the component with the largest
    rounding error is then recomputed from the other two so that the result
    still satisfies q + s + r == 0. Ties favour correcting q, then s, else r.
    """
    rq = round(q)
    rs = round(s)
    rr = round(r)

    q_diff = abs(rq - q)
    s_diff = abs(rs - s)
    r_diff = abs(rr - r)

    if q_diff > s_diff and q_diff > r_diff:
        rq = -rs - rr
    elif s_diff > r_diff:
        rs = -rq - rr
    else:
        rr = -rq - rs

    return int(rq), int(rs), int(rr)


def hex_distance(a: HexCoord, b: HexCoord) -> int:
    """
    Calculate the distance between two hexes.

    The distance is the minimum number of hex steps to move from hex a to hex b:
        distance = max(|dq|, |ds|, |dr|)

    Example:
        >>> hex_distance(HexCoord(col=0, row=0), HexCoord(col=2, row=1))
        2
    """
    aq, as_, ar = to_cube(a)
    bq, bs, br = to_cube(b)
    return max(abs(aq - bq), abs(as_ - bs), abs(ar - br))


# Direction vectors for the 6 neighbors in axial (q, r) coordinates.
# The list index doubles as a ship's facing direction.
_NEIGHBOR_DIRECTIONS: list[tuple[int, int]] = [
    (1, 0),  # East
    (1, -1),  # Northeast
    (0, -1),  # Northwest
    (-1, 0),  # West
    (-1, 1),  # Southwest
    (0, 1),  # Southeast
]

DIRECTION_COUNT = len(_NEIGHBOR_DIRECTIONS)


def hex_neighbor(coord: HexCoord, direction: int) -> HexCoord:
    """Return the adjacent hex in the given facing direction (0-5)."""
    if not 0 <= direction < DIRECTION_COUNT:
        msg = f"direction must be in [0, {DIRECTION_COUNT}), got {direction}"
        raise ValueError(msg)
    q, _s, r = to_cube(coord)
    dq, dr = _NEIGHBOR_DIRECTIONS[direction]
    nq = q + dq
    nr = r + dr
    return to_offset(nq, -nq - nr, nr)


def hex_neighbors(coord: HexCoord) -> list[HexCoord]:
    """
    Find all 6 adjacent hexes to the given hex.

    The neighbors are returned in facing-direction order: East, Northeast,
    Northwest, West, Southwest, Southeast.

    Example:
        >>> neighbors = hex_neighbors(HexCoord(col=0, row=0))
        >>> len(neighbors)
        6
        >>> HexCoord(col=1, row=0) in neighbors
        True
    """
    return [hex_neighbor(coord, direction) for direction in range(DIRECTION_COUNT)]


def direction_between(a: HexCoord, b: HexCoord) -> int | None:
    """Return the facing direction from a to an adjacent hex b, or None."""
    for direction, neighbor in enumerate(hex_neighbors(a)):
        if neighbor == b:
            return direction
    return None


def direction_towards(a: HexCoord, b: HexCoord) -> int | None:
    """Return the facing of the first step on the straight line from a to b.

    Returns None when a and b are the same hex.
    """
    if a == b:
        return None
    line = line_between(a, b)
    return direction_between(a, line[1])


def hexes_in_range(center: HexCoord, n: int) -> list[HexCoord]:
    """
    Find all hexes within range n of the center hex (inclusive).

    This returns all hexes where distance(center, hex) <= n.
    The number of hexes follows the formula: 3n^2 + 3n + 1

    Raises:
        ValueError: If n is negative

    Example:
        >>> len(hexes_in_range(HexCoord(col=0, row=0), n=1))
        7
    """
    if n < 0:
        msg = f"Range n must be non-negative, got {n}"
        raise ValueError(msg)

    cq, cs, cr = to_cube(center)

    hexes = []
    for dq in range(-n, n + 1):
        for ds in range(max(-n, -dq - n), min(n, -dq + n) + 1):
            dr = -dq - ds
            hexes.append(to_offset(cq + dq, cs + ds, cr + dr))

    return hexes


def line_between(a: HexCoord, b: HexCoord) -> list[HexCoord]:
    """
    Draw a straight line of hexes from a to b (both inclusive).

    The cube coordinates are linearly interpolated in distance(a, b) equal
    steps and each point is rounded to the nearest hex. The result always
    has length distance(a, b) + 1 and consecutive entries are adjacent.

    Example:
        >>> line_between(HexCoord(col=0, row=0), HexCoord(col=0, row=2))
        [HexCoord(col=0, row=0), HexCoord(col=0, row=1), HexCoord(col=0, row=2)]
    """
    n = hex_distance(a, b)
    if n == 0:
        return [a]

    aq, as_, ar = to_cube(a)
    bq, bs, br = to_cube(b)
    eq, es, er = _LINE_EPSILON
    aq_f, as_f, ar_f = aq + eq, as_ + es, ar + er
    bq_f, bs_f, br_f = bq + eq, bs + es, br + er

    line = []
    for i in range(n + 1):
        t = i / n
        q, s, r = round_cube(
            aq_f + (bq_f - aq_f) * t,
            as_f + (bs_f - as_f) * t,
            ar_f + (br_f - ar_f) * t,
        )
        line.append(to_offset(q, s, r))
    return line


def cube_step_towards(a: HexCoord, b: HexCoord) -> HexCoord:
    """
    Take one greedy single-axis step from a towards b in cube space.

    The cube axis with the largest remaining absolute delta is moved by one
    unit towards b and the step is completed on the axis that keeps the
    delta balanced, so the result is always adjacent to a. Ties favour q,
    then s, then r. Returns a unchanged when a == b.
    """
    aq, as_, ar = to_cube(a)
    bq, bs, br = to_cube(b)
    deltas = (bq - aq, bs - as_, br - ar)
    if deltas == (0, 0, 0):
        return a

    magnitudes = [abs(d) for d in deltas]
    axis = magnitudes.index(max(magnitudes))
    sign = 1 if deltas[axis] > 0 else -1

    # The compensating axis is the other axis whose delta points the other
    # way the most; moving it by -sign keeps q + s + r == 0.
    others = [i for i in range(3) if i != axis]
    partner = min(others, key=lambda i: deltas[i] * sign)

    step = [0, 0, 0]
    step[axis] = sign
    step[partner] = -sign
    return to_offset(aq + step[0], as_ + step[1], ar + step[2])
