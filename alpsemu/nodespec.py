"""
Compressed sets of node ids, as passed in reservation requests.

A NodeRangeSet holds closed intervals [start, end] of node ids. Adding an
id next to an existing interval grows that interval, any other id starts a
new single-node interval at the front of the set. Only the first adjacent
interval found is grown; intervals are never joined with each other
afterwards, and ids already inside an interval are not detected, so a
repeated id gives a second interval.
"""

import logging


_log = logging.getLogger('alpsemu.nodespec')


class NodeSpec(object):
    """Closed interval of node ids."""

    def __init__(self, start, end=None):
        self.start = start
        self.end = start if end is None else end

    def __len__(self):
        return self.end - self.start + 1

    def __contains__(self, node_id):
        return self.start <= node_id <= self.end

    def __eq__(self, other):
        if not isinstance(other, NodeSpec):
            return NotImplemented
        return self.start == other.start and self.end == other.end

    # start and end change when the interval grows
    __hash__ = None

    def __str__(self):
        if self.start == self.end:
            return str(self.start)
        return '%d-%d' % (self.start, self.end)

    def __repr__(self):
        return 'NodeSpec(%d, %d)' % (self.start, self.end)

    def as_data(self):
        return dict(start=self.start, end=self.end)


class NodeRangeSet(object):
    """Unordered collection of node id intervals owned by one reservation
    request. Most recently created intervals come first."""

    def __init__(self, node_ids=None):
        self._specs = []
        if node_ids is not None:
            for node_id in node_ids:
                self.add_node(node_id)

    def add_node(self, node_id):
        """Add node_id to the set, growing the first interval it is
        adjacent to, or starting a new interval if there is none."""
        if node_id < 0:
            raise ValueError("node id must not be negative: %d" % node_id)
        _log.debug("ns_add_node: id:%d", node_id)
        for spec in self._specs:
            if spec.start == node_id + 1:
                spec.start = node_id
                return spec
            if spec.end == node_id - 1:
                spec.end = node_id
                return spec
        spec = NodeSpec(node_id)
        self._specs.insert(0, spec)
        return spec

    def release(self):
        """Drop every interval. Can be called on an empty set."""
        if self._specs:
            _log.debug("free_nodespec: %s", self.describe())
        del self._specs[:]

    def describe(self):
        """Comma separated intervals in set order, e.g. '20,10-11'. Empty
        string for an empty set. For diagnostics only."""
        text = ','.join(str(spec) for spec in self._specs)
        if text:
            _log.debug("ns_to_string: %s", text)
        return text

    def node_count(self):
        """Total ids covered by the intervals. Repeated ids are counted
        once per interval holding them."""
        return sum(len(spec) for spec in self._specs)

    def as_data(self):
        return [spec.as_data() for spec in self._specs]

    def __iter__(self):
        return iter(self._specs)

    def __len__(self):
        return len(self._specs)

    def __bool__(self):
        return bool(self._specs)

    def __str__(self):
        return self.describe()

    def __repr__(self):
        return 'NodeRangeSet(%r)' % self._specs


def ns_add_node(node_range_set, node_id):
    """Add node_id to node_range_set, creating the set if it is None.
    Returns the set."""
    if node_range_set is None:
        node_range_set = NodeRangeSet()
    node_range_set.add_node(node_id)
    return node_range_set


def ns_to_string(node_range_set):
    if node_range_set is None:
        return ''
    return node_range_set.describe()


def free_nodespec(node_range_set):
    if node_range_set is not None:
        node_range_set.release()
