"""Emulator for the ALPS inventory and reservation service of Cray
systems, for testing schedulers without the real service:

1. topology: places each node of a flat node table in the cabinet
   hierarchy and in the 3-D interconnect.

2. nodespec: compact sets of node ids used in reservation requests.

3. sdb and basil: stand-ins for the service database queries and the
   BASIL requests, built on the two above.
"""

from alpsemu.topology import HardwareCursor, compute_bounds, walk
from alpsemu.nodespec import NodeRangeSet, NodeSpec
from alpsemu.sdb import ServiceDatabase
from alpsemu.basil import BasilEmulator
