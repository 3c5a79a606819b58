"""
Emulator constants, package paths and runtime switches read from the
environment.
"""
import os
import os.path

PACKAGE_PATH = os.path.realpath(os.path.dirname(__file__))
DATA_PATH = os.path.join(PACKAGE_PATH, "data")

SAMPLE_NODE_TABLE = os.path.join(DATA_PATH, "nodes.json")

# Shape of the emulated cabinet hierarchy. Row has no limit.
CPUS_PER_SLOT = 4
SLOTS_PER_CAGE = 8
CAGES_PER_CABINET = 3
CABINETS_PER_ROW = 17

# Dimensions of the emulated interconnect
DIMENSIONS = 3

BASIL_VERSION = '3.1'

# Node names in inventory records are cut to this length
BASIL_STRING_SHORT = 16

ADD_DELAYS_ENV = 'ALPSEMU_ADD_DELAYS'
DELAY_SECONDS = 0.005


def add_delays():
    """True if calls to the service stand-ins should sleep for
    DELAY_SECONDS, to get closer to the timing of a real system.

    >>> os.environ[ADD_DELAYS_ENV] = 'yes'
    >>> add_delays()
    True
    >>> os.environ[ADD_DELAYS_ENV] = '0'
    >>> add_delays()
    False
    >>> del os.environ[ADD_DELAYS_ENV]
    """
    value = os.environ.get(ADD_DELAYS_ENV, '')
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def node_name(prefix, index):
    """Name of the synthetic node at position index of the node table.

    >>> node_name('nid', 7)
    'nid00007'
    """
    return '%s%05d' % (prefix, index)
