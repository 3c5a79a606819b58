"""Main program for dumping the emulated inventory, and optionally a
reservation, as JSON."""

import argparse
import json
import logging
import sys

from alpsemu import config, nodes
from alpsemu.basil import BasilEmulator
from alpsemu.nodespec import NodeRangeSet


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='ALPS inventory emulator')
    table = parser.add_mutually_exclusive_group()
    table.add_argument('--nodes', type=int,
                       help='number of synthetic nodes to emulate')
    table.add_argument('--node-file', default=None,
                       help='JSON node table (default: bundled sample)')
    parser.add_argument('--cpus', type=int, default=nodes.DEFAULT_CPUS)
    parser.add_argument('--memory', type=int,
                        default=nodes.DEFAULT_REAL_MEMORY,
                        help='real memory per node in MB')
    parser.add_argument('--reserve', default=None,
                        help='comma separated node ids to reserve')
    parser.add_argument('--user', default='root')
    parser.add_argument('--batch-id', default='0')
    parser.add_argument('--log-file')
    parser.add_argument('--log-level',
                        choices=['DEBUG','INFO','WARNING','ERROR','CRITICAL'],
                        default=None)

    args = parser.parse_args(argv)
    args.reserve_ids = []
    if args.reserve:
        try:
            args.reserve_ids = parse_node_ids(args.reserve)
        except ValueError as e:
            parser.error("--reserve: %s" % e)

    return args


def setup_logging(log_file, log_level):
    logger = logging.getLogger('alpsemu')
    formatter = logging.Formatter('%(asctime)s:%(levelname)s:%(message)s')
    if log_file:
        handler = logging.FileHandler(log_file)
    elif log_level:
        handler = logging.StreamHandler(sys.stderr)
    else:
        logger.addHandler(logging.NullHandler())
        return logger
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(log_level or 'INFO')
    return logger


def parse_node_ids(s):
    """Parse '3,1,2' into [3, 1, 2], keeping order and repeats.

    >>> parse_node_ids('5, 6,4')
    [5, 6, 4]
    >>> parse_node_ids('')
    []
    >>> parse_node_ids('1,-2')
    Traceback (most recent call last):
        ...
    ValueError: node id must not be negative: -2
    """
    node_ids = []
    for x in s.split(','):
        if not x.strip():
            continue
        try:
            node_id = int(x)
        except ValueError:
            raise ValueError("invalid node id: %r" % x.strip())
        if node_id < 0:
            raise ValueError("node id must not be negative: %d" % node_id)
        node_ids.append(node_id)
    return node_ids


def main(argv=None, out=None):
    args = parse_args(argv)
    out = out or sys.stdout

    logger = setup_logging(args.log_file, args.log_level)

    if args.nodes is not None:
        node_table = nodes.make_node_table(args.nodes, cpus=args.cpus,
                                           real_memory=args.memory)
    else:
        node_table = nodes.load_node_table(args.node_file or
                                           config.SAMPLE_NODE_TABLE)
    logger.info('emulating %d nodes', len(node_table))

    basil = BasilEmulator()
    result = dict(version=basil.get_basil_version())

    if args.reserve_ids:
        node_spec = NodeRangeSet(args.reserve_ids)
        rsvn_id = basil.basil_reserve(args.user, args.batch_id,
                                      width=node_spec.node_count(),
                                      depth=1, nppn=args.cpus, mem_mb=0,
                                      node_spec=node_spec)
        result['reservation_id'] = rsvn_id

    inv = basil.get_full_inventory(node_table)
    result['inventory'] = inv.as_data()
    json.dump(result, out, indent=2)
    out.write('\n')
    basil.free_inv(inv)

    return 0


# allow this module to be run as a script from within a pip/setuptools
# installed distribution
if __name__ == '__main__':
    sys.exit(main())
