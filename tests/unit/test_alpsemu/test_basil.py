from alpsemu import config, exc
from alpsemu.basil import BasilEmulator
from alpsemu.nodes import NodeRecord, make_node_table
from alpsemu.nodespec import NodeRangeSet
from alpsemu.topology import walk


def test_version_and_request():
    basil = BasilEmulator()
    assert basil.get_basil_version() == config.BASIL_VERSION
    assert basil.basil_request(None) == 0


def test_full_inventory():
    table = make_node_table(32, cpus=16, real_memory=2048)
    basil = BasilEmulator()
    inv = basil.get_full_inventory(table)

    assert inv.is_gemini
    assert inv.nodes_total == 32
    assert inv.batch_total == 32
    assert inv.batch_avail == 32
    assert inv.reservations == []
    assert len(inv.nodes) == 32

    for i, (node, (address, coordinate)) in enumerate(zip(inv.nodes,
                                                          walk(32))):
        assert node.node_id == i
        assert node.name == table[i].name
        assert node.state == 'UP'
        assert node.role == 'BATCH'
        assert node.arch == 'XT'
        assert node.address == address
        assert node.coordinate == coordinate
        assert node.cpus == 16

    data = inv.as_data()
    assert data['nodes'][5]['address'] == dict(cabinet=0, row=0, cage=0,
                                               slot=1, cpu=1)
    assert data['nodes'][5]['coordinate'] == dict(x=1, y=0, z=0)

    basil.free_inv(inv)
    assert inv.nodes == []
    basil.free_inv(None)


def test_long_names_truncated():
    table = [NodeRecord('x' * 40, 4, 16)]
    inv = BasilEmulator().get_full_inventory(table)
    assert inv.nodes[0].name == 'x' * config.BASIL_STRING_SHORT


def test_reserve_confirm_release():
    basil = BasilEmulator()
    ns = NodeRangeSet([5, 6, 4])
    rsvn_id = basil.basil_reserve('alice', '1234', width=3, depth=1,
                                  nppn=32, mem_mb=0, node_spec=ns)
    assert rsvn_id == 1

    inv = basil.get_full_inventory(make_node_table(8))
    assert len(inv.reservations) == 1
    data = inv.reservations[0].as_data()
    assert data['node_spec'] == [dict(start=4, end=6)]
    assert data['user'] == 'alice'
    assert not data['confirmed']

    assert basil.basil_confirm(rsvn_id, job_id=77, pagg_id=9000) == 0
    assert basil.reservations()[0].confirmed
    assert basil.reservations()[0].job_id == 77

    assert basil.basil_release(rsvn_id) == 0
    assert len(ns) == 0
    assert basil.reservations() == []


def test_reservation_ids_not_reused():
    basil = BasilEmulator()
    r1 = basil.basil_reserve('u', 'b1', 1, 1, 1, 0, NodeRangeSet([1]))
    r2 = basil.basil_reserve('u', 'b2', 1, 1, 1, 0, NodeRangeSet([2]))
    basil.basil_release(r2)
    r3 = basil.basil_reserve('u', 'b3', 1, 1, 1, 0, NodeRangeSet([3]))
    assert (r1, r2, r3) == (1, 2, 3)
    assert [r.id for r in basil.reservations()] == [1, 3]


def test_unknown_reservation():
    basil = BasilEmulator()
    for fn, args in ((basil.basil_confirm, (42, 1, 1)),
                     (basil.basil_release, (42,))):
        try:
            fn(*args)
        except exc.ReservationNotFound as e:
            assert '42' in str(e)
            assert e.rsvn_id == 42
        else:
            assert False, 'expected ReservationNotFound'
