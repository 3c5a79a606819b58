"""
Node table used to populate the emulated inventory. The order of the table
is the order of the topology walk: the n-th record gets the n-th position.
"""

import json
import logging

from alpsemu import config, exc


_log = logging.getLogger('alpsemu.nodes')

DEFAULT_CPUS = 32
DEFAULT_REAL_MEMORY = 64 * 1024  # MB


class NodeRecord(object):
    def __init__(self, name, cpus, real_memory):
        self.name = name
        self.cpus = cpus
        self.real_memory = real_memory

    @classmethod
    def from_data(cls, data):
        """Create NodeRecord from a dict, e.g. parsed from JSON. Raises
        NodeTableError if a key is missing."""
        try:
            return cls(name=data['name'], cpus=int(data['cpus']),
                       real_memory=int(data['real_memory']))
        except KeyError as e:
            raise exc.NodeTableError("node record missing key %s: %r"
                                     % (e, data))

    def as_data(self):
        return dict(name=self.name, cpus=self.cpus,
                    real_memory=self.real_memory)

    def __repr__(self):
        return 'NodeRecord(%r, %d, %d)' % (self.name, self.cpus,
                                           self.real_memory)


def make_node_table(count, prefix='nid', cpus=DEFAULT_CPUS,
                    real_memory=DEFAULT_REAL_MEMORY):
    """Create count identical nodes named <prefix>00000, <prefix>00001..."""
    if count < 0:
        raise ValueError("node count must not be negative: %d" % count)
    return [NodeRecord(config.node_name(prefix, i), cpus, real_memory)
            for i in range(count)]


def load_node_table(file_path):
    """Load node records from a JSON file containing a list of dicts with
    keys 'name', 'cpus' and 'real_memory'."""
    try:
        with open(file_path) as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise exc.NodeTableError("could not read node table %s: %s"
                                 % (file_path, e))
    if not isinstance(data, list):
        raise exc.NodeTableError("node table %s must contain a list"
                                 % file_path)
    table = [NodeRecord.from_data(d) for d in data]
    _log.debug("loaded %d nodes from %s", len(table), file_path)
    return table
