"""
Stand-in for the service database (SDB) that reports the node inventory of
a Cray system. No database is involved: the rows are made up from the node
table handed to connect_sdb() and the synthetic topology walk.

Usage mirrors the prepared statement interface of the real service:

    sdb = ServiceDatabase()
    handle = sdb.connect_sdb(node_table)
    stmt = sdb.prepare_stmt(handle, query)
    sdb.exec_stmt(stmt)
    while True:
        row = sdb.fetch_stmt(stmt)
        if row is None:
            break
        ...
    sdb.stmt_close(stmt)
    sdb.close_sdb(handle)
"""

import logging
import time
from collections import namedtuple

from alpsemu import config, topology


_log = logging.getLogger('alpsemu.sdb')


InventoryRow = namedtuple('InventoryRow',
                          ['type', 'cores', 'memory',
                           'cab', 'row', 'cage', 'slot', 'cpu',
                           'x', 'y', 'z'])


def _delay():
    if config.add_delays():
        time.sleep(config.DELAY_SECONDS)


class SDBConnection(object):
    def __init__(self, node_table):
        self.node_table = node_table
        self.closed = False


class Statement(object):
    """Prepared query. Each statement drives its own topology walk over
    the node table of its connection. The table is the one the
    connection had when the statement was prepared."""

    def __init__(self, connection, query):
        self.connection = connection
        self.query = query
        self.node_table = connection.node_table
        self.cursor = topology.reset(len(self.node_table))

    def fetch(self):
        if self.cursor.exhausted():
            return None
        node = self.node_table[self.cursor.node_index]
        address, coordinate = self.cursor.advance()
        return InventoryRow(type='compute',
                            cores=node.cpus,
                            memory=node.real_memory,
                            cab=address.cabinet,
                            row=address.row,
                            cage=address.cage,
                            slot=address.slot,
                            cpu=address.cpu,
                            x=coordinate.x,
                            y=coordinate.y,
                            z=coordinate.z)


class ServiceDatabase(object):
    """Holds the single open connection of the emulated service."""

    def __init__(self):
        self._handle = None

    def connect_sdb(self, node_table):
        """Open the connection, returning its handle. A second connect
        while a connection is open is logged as an error and returns the
        open handle, with its node table replaced."""
        _log.debug("cray_connect_sdb: %d nodes", len(node_table))
        _delay()
        if self._handle is not None:
            _log.error("cray_connect_sdb: Duplicate connection")
        else:
            self._handle = SDBConnection(node_table)
        self._handle.node_table = node_table
        return self._handle

    def _check_handle(self, handle, caller):
        if handle is None or handle is not self._handle:
            _log.error("%s: bad connection handle", caller)
            return False
        return True

    def prepare_stmt(self, handle, query):
        _log.debug("prepare_stmt: query:%s", query)
        if not self._check_handle(handle, 'prepare_stmt') and handle is None:
            raise ValueError("prepare_stmt: no connection handle")
        return Statement(handle, query)

    def exec_stmt(self, stmt):
        """Execute the statement. The emulator does not count rows up front
        and always returns 0."""
        _log.debug("exec_stmt")
        _delay()
        return 0

    def fetch_stmt(self, stmt):
        """Return the next InventoryRow, or None when every node has been
        returned."""
        _log.debug("fetch_stmt")
        _delay()
        return stmt.fetch()

    def free_stmt_result(self, stmt):
        _log.debug("free_stmt_result")
        return False

    def stmt_close(self, stmt):
        _log.debug("stmt_close")
        return False

    def close_sdb(self, handle):
        _log.debug("cray_close_sdb")
        if self._check_handle(handle, 'cray_close_sdb'):
            handle.closed = True
            self._handle = None

    def is_gemini_system(self, handle):
        """The emulator always reports a SeaStar (XT) interconnect here."""
        _log.debug("cray_is_gemini_system")
        _delay()
        self._check_handle(handle, 'cray_is_gemini_system')
        return False
