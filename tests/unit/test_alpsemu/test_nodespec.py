from alpsemu.nodespec import (NodeRangeSet, NodeSpec, ns_add_node,
                              ns_to_string, free_nodespec)


def _intervals(node_range_set):
    return sorted((s.start, s.end) for s in node_range_set)


def _assert_disjoint(node_range_set):
    specs = sorted((s.start, s.end) for s in node_range_set)
    for (s1, e1), (s2, e2) in zip(specs, specs[1:]):
        assert e1 + 1 < s2, 'intervals %s and %s touch' % ((s1, e1),
                                                           (s2, e2))


def test_merge_up_and_down():
    ns = NodeRangeSet()
    ns.add_node(5)
    ns.add_node(6)
    ns.add_node(4)
    assert list(ns) == [NodeSpec(4, 6)]


def test_non_adjacent_then_merge():
    ns = NodeRangeSet()
    ns.add_node(10)
    ns.add_node(20)
    assert len(ns) == 2
    assert _intervals(ns) == [(10, 10), (20, 20)]

    ns.add_node(11)
    assert len(ns) == 2
    assert _intervals(ns) == [(10, 11), (20, 20)]


def test_new_intervals_are_prepended():
    ns = NodeRangeSet([10, 20])
    assert ns.describe() == '20,10'
    ns.add_node(11)
    assert ns.describe() == '20,10-11'


def test_ascending_and_descending_runs():
    ns = NodeRangeSet(range(100))
    assert list(ns) == [NodeSpec(0, 99)]

    ns = NodeRangeSet(reversed(range(100)))
    assert list(ns) == [NodeSpec(0, 99)]

    ids = list(range(0, 10)) + list(range(20, 30)) + list(range(12, 15))
    ns = NodeRangeSet(ids)
    _assert_disjoint(ns)
    assert _intervals(ns) == [(0, 9), (12, 14), (20, 29)]
    assert ns.node_count() == 23


def test_duplicate_id_not_detected():
    ns = NodeRangeSet()
    ns.add_node(5)
    ns.add_node(5)
    assert len(ns) == 2
    assert list(ns) == [NodeSpec(5), NodeSpec(5)]
    assert ns.describe() == '5,5'


def test_no_transitive_merge():
    ns = NodeRangeSet([5, 7, 6])
    # 6 grows [7,7] downwards; [5,5] is left next to it
    assert list(ns) == [NodeSpec(6, 7), NodeSpec(5, 5)]


def test_node_id_zero():
    assert list(NodeRangeSet([0, 1])) == [NodeSpec(0, 1)]
    assert list(NodeRangeSet([1, 0])) == [NodeSpec(0, 1)]


def test_negative_node_id():
    try:
        NodeRangeSet().add_node(-1)
    except ValueError as e:
        assert 'negative' in str(e)
    else:
        assert False, 'expected ValueError for negative node id'


def test_release():
    ns = NodeRangeSet([1, 2, 3, 9])
    spec = next(iter(ns))
    ns.release()
    assert len(ns) == 0
    assert not ns
    assert ns.node_count() == 0
    assert spec not in list(ns)

    # releasing again is a no-op
    ns.release()
    assert len(ns) == 0


def test_describe_empty():
    assert NodeRangeSet().describe() == ''
    assert ns_to_string(None) == ''


def test_as_data():
    ns = NodeRangeSet([3, 4, 8])
    assert ns.as_data() == [dict(start=8, end=8), dict(start=3, end=4)]


def test_module_functions():
    ns = ns_add_node(None, 7)
    assert ns_add_node(ns, 8) is ns
    assert ns_to_string(ns) == '7-8'
    free_nodespec(ns)
    assert len(ns) == 0
    free_nodespec(None)


def test_node_spec():
    spec = NodeSpec(3, 6)
    assert len(spec) == 4
    assert 5 in spec
    assert 7 not in spec
    assert str(spec) == '3-6'
    assert str(NodeSpec(3)) == '3'


def test_node_spec_unhashable():
    # intervals are grown in place, so they can't be set members or keys
    ns = NodeRangeSet([4])
    spec = next(iter(ns))
    try:
        {spec}
    except TypeError:
        pass
    else:
        assert False, 'expected TypeError hashing a NodeSpec'
    ns.add_node(5)
    assert spec == NodeSpec(4, 5)
