"""
Synthetic placement of nodes in the emulated machine.

Each node gets a hardware address in the cabinet hierarchy
(cabinet, row, cage, slot, cpu) and a coordinate in the 3-D interconnect.
A walk starts with reset() and hands out one position per call to advance(),
in the same order every time, so the output can be compared between runs.

The walk state lives in a HardwareCursor owned by the caller; there is no
module level state, so independent walks can be driven side by side.
"""

import logging
from collections import namedtuple

from alpsemu import config


_log = logging.getLogger('alpsemu.topology')


HardwareAddress = namedtuple('HardwareAddress',
                             ['cabinet', 'row', 'cage', 'slot', 'cpu'])

Coordinate = namedtuple('Coordinate', ['x', 'y', 'z'])


def compute_bounds(total_units, dims=config.DIMENSIONS):
    """Get the extent of each dimension needed to hold total_units elements,
    keeping the extents close to each other (a cube rather than a long
    narrow box). Extents are grown one dimension at a time, round robin,
    until their product covers total_units. This is a greedy covering, not
    the smallest possible volume.

    >>> compute_bounds(8)
    [2, 2, 2]
    >>> compute_bounds(9)
    [3, 2, 2]
    >>> compute_bounds(0)
    [1, 1, 1]
    >>> compute_bounds(5, dims=2)
    [3, 2]
    """
    if dims < 1:
        raise ValueError("dims must be at least 1, got %d" % dims)
    bounds = [1] * dims
    count = 1
    while True:
        for i in range(dims):
            if count >= total_units:
                return bounds
            count //= bounds[i]
            bounds[i] += 1
            count *= bounds[i]


def increment_coordinate(coord, bounds):
    """Odometer increment of coord in place. The first axis moves fastest;
    an axis that reaches its bound goes back to 0 and carries into the
    next. Carry out of the last axis wraps the whole coordinate to 0."""
    for i in range(len(coord)):
        coord[i] += 1
        if coord[i] < bounds[i]:
            return
        coord[i] = 0


class HardwareCursor(object):
    """Position of a walk over node_count nodes.

    The hierarchy counters roll over into each other (4 cpus per slot, 8
    slots per cage, 3 cages per cabinet, 17 cabinets per row). The spatial
    coordinate moves once per slot, inside bounds computed from
    node_count / 4. The two rollovers are not tied together: when the
    covering computed for the coordinate overshoots the real number of
    slots, the coordinate and the hierarchy drift apart. Existing output
    depends on this, leave it as is.

    The cursor does not detect the end of the walk. Callers must stop after
    node_count calls to advance()."""

    def __init__(self, node_count=0):
        self.reset(node_count)

    def reset(self, node_count):
        """Go back to the first position and compute the coordinate bounds
        for a walk over node_count nodes."""
        if node_count < 0:
            raise ValueError("node count must not be negative: %d"
                             % node_count)
        self.node_count = node_count
        self.node_index = 0

        self.cabinet = 0
        self.row = 0
        self.cage = 0
        self.slot = 0
        self.cpu = 0

        self.coord = [0] * config.DIMENSIONS
        self.bounds = compute_bounds(node_count // config.CPUS_PER_SLOT,
                                     config.DIMENSIONS)
        _log.debug("reset cursor: nodes %d, bounds %s",
                   node_count, self.bounds)
        return self

    @property
    def address(self):
        return HardwareAddress(self.cabinet, self.row, self.cage, self.slot,
                               self.cpu)

    @property
    def coordinate(self):
        return Coordinate(*self.coord)

    def exhausted(self):
        return self.node_index >= self.node_count

    def advance(self):
        """Return the (address, coordinate) of the current node and move
        the cursor to the next one."""
        address = self.address
        coordinate = self.coordinate

        self.cpu += 1
        if self.cpu >= config.CPUS_PER_SLOT:
            self.cpu = 0
            self.slot += 1
            increment_coordinate(self.coord, self.bounds)
        if self.slot >= config.SLOTS_PER_CAGE:
            self.slot = 0
            self.cage += 1
        if self.cage >= config.CAGES_PER_CABINET:
            self.cage = 0
            self.cabinet += 1
        if self.cabinet >= config.CABINETS_PER_ROW:
            self.cabinet = 0
            self.row += 1

        self.node_index += 1
        return address, coordinate

    def __repr__(self):
        return ('HardwareCursor(node_index=%d, node_count=%d, address=%r, '
                'coordinate=%r, bounds=%r)'
                % (self.node_index, self.node_count, self.address,
                   self.coordinate, self.bounds))


def reset(node_count):
    """Start a new walk over node_count nodes."""
    return HardwareCursor(node_count)


def advance(cursor):
    return cursor.advance()


def walk(node_count):
    """Generate the (address, coordinate) of each of node_count nodes, in
    walk order."""
    cursor = reset(node_count)
    for _ in range(node_count):
        yield cursor.advance()
