"""
Stand-ins for the BASIL XML-RPC requests a scheduler makes to ALPS:
inventory, reserve, confirm and release. Nothing is sent anywhere; the
emulator answers from the node table and keeps reservations in memory for
its own lifetime.
"""

import logging

from alpsemu import config, exc, topology


_log = logging.getLogger('alpsemu.basil')


NODE_STATE_UP = 'UP'
NODE_ROLE_BATCH = 'BATCH'
NODE_ARCH_XT = 'XT'


class BasilNode(object):
    def __init__(self, node_id, name, address, coordinate, cpus=None,
                 real_memory=None):
        self.node_id = node_id
        self.name = name[:config.BASIL_STRING_SHORT]
        self.state = NODE_STATE_UP
        self.role = NODE_ROLE_BATCH
        self.arch = NODE_ARCH_XT
        self.address = address
        self.coordinate = coordinate
        self.cpus = cpus
        self.real_memory = real_memory

    def as_data(self):
        return dict(node_id=self.node_id, name=self.name, state=self.state,
                    role=self.role, arch=self.arch,
                    cpus=self.cpus, real_memory=self.real_memory,
                    address=self.address._asdict(),
                    coordinate=self.coordinate._asdict())


class Reservation(object):
    def __init__(self, rsvn_id, user, batch_id, width, depth, nppn, mem_mb,
                 node_spec):
        self.id = rsvn_id
        self.user = user
        self.batch_id = batch_id
        self.width = width
        self.depth = depth
        self.nppn = nppn
        self.mem_mb = mem_mb
        self.node_spec = node_spec
        self.job_id = None
        self.pagg_id = None
        self.confirmed = False

    def as_data(self):
        return dict(id=self.id, user=self.user, batch_id=self.batch_id,
                    width=self.width, depth=self.depth, nppn=self.nppn,
                    mem_mb=self.mem_mb, confirmed=self.confirmed,
                    job_id=self.job_id, pagg_id=self.pagg_id,
                    node_spec=self.node_spec.as_data())


class Inventory(object):
    def __init__(self, nodes, reservations, is_gemini=True):
        self.is_gemini = is_gemini
        self.batch_avail = len(nodes)
        self.batch_total = len(nodes)
        self.nodes_total = len(nodes)
        self.nodes = nodes
        self.reservations = reservations

    def as_data(self):
        return dict(is_gemini=self.is_gemini,
                    batch_avail=self.batch_avail,
                    batch_total=self.batch_total,
                    nodes_total=self.nodes_total,
                    nodes=[n.as_data() for n in self.nodes],
                    reservations=[r.as_data() for r in self.reservations])


class BasilEmulator(object):
    """Answers BASIL requests. Reservation ids start at 1 and are never
    reused by the same emulator."""

    def __init__(self):
        self._reservations = {}
        self._next_rsvn_id = 1

    def get_basil_version(self):
        _log.debug("basil_version get_basil_version")
        return config.BASIL_VERSION

    def basil_request(self, parse_data):
        _log.debug("basil_request")
        return 0

    def get_full_inventory(self, node_table):
        """Build the inventory of node_table. Node i of the table gets the
        i-th position of a topology walk over the whole table."""
        _log.debug("get_full_inventory: %d nodes", len(node_table))
        nodes = []
        positions = topology.walk(len(node_table))
        for i, (node, (address, coordinate)) in enumerate(
                zip(node_table, positions)):
            nodes.append(BasilNode(i, node.name, address, coordinate,
                                   cpus=node.cpus,
                                   real_memory=node.real_memory))
        return Inventory(nodes, self.reservations())

    def free_inv(self, inv):
        _log.debug("free_inv")
        if inv is not None:
            del inv.nodes[:]
            del inv.reservations[:]

    def reservations(self):
        return [self._reservations[k] for k in sorted(self._reservations)]

    def basil_reserve(self, user, batch_id, width, depth, nppn, mem_mb,
                      node_spec):
        """Reserve the nodes in node_spec (a NodeRangeSet) and return the
        reservation id. The emulator takes over the set, it is released
        with the reservation."""
        _log.debug("basil_reserve user:%s batch_id:%s width:%d depth:%d "
                   "nppn:%d mem_mb:%d node_spec:%s",
                   user, batch_id, width, depth, nppn, mem_mb,
                   node_spec.describe())
        for spec in node_spec:
            _log.debug("basil_reserve node_spec:start:%d,end:%d",
                       spec.start, spec.end)
        rsvn_id = self._next_rsvn_id
        self._next_rsvn_id += 1
        self._reservations[rsvn_id] = Reservation(
            rsvn_id, user, batch_id, width, depth, nppn, mem_mb, node_spec)
        return rsvn_id

    def _get_reservation(self, rsvn_id):
        try:
            return self._reservations[rsvn_id]
        except KeyError:
            raise exc.ReservationNotFound(rsvn_id)

    def basil_confirm(self, rsvn_id, job_id, pagg_id):
        _log.debug("basil_confirm: rsvn_id:%d", rsvn_id)
        rsvn = self._get_reservation(rsvn_id)
        rsvn.job_id = job_id
        rsvn.pagg_id = pagg_id
        rsvn.confirmed = True
        return 0

    def basil_release(self, rsvn_id):
        _log.debug("basil_release: rsvn_id:%d", rsvn_id)
        rsvn = self._get_reservation(rsvn_id)
        rsvn.node_spec.release()
        del self._reservations[rsvn_id]
        return 0
