"""Tests for the depth-bounded cycle search."""

import itertools

from circular_analyzer import MAX_DEPTH, CycleDetector, find_cycles, iter_cycles


def test_mutual_dependency(mutual_graph):
    assert find_cycles(mutual_graph, "A") == [("A", "B", "A")]
    assert find_cycles(mutual_graph, "B") == [("B", "A", "B")]


def test_self_reference():
    assert find_cycles({"A": {"A"}}, "A") == [("A", "A", "A")]


def test_self_reference_next_to_leaf():
    graph = {"A": {"A", "B"}, "B": set()}
    assert find_cycles(graph, "A") == [("A", "A", "A")]


def test_triangle_rotations(triangle_graph):
    assert find_cycles(triangle_graph, "A") == [("A", "B", "C", "A")]
    assert find_cycles(triangle_graph, "B") == [("B", "C", "A", "B")]
    assert find_cycles(triangle_graph, "C") == [("C", "A", "B", "C")]
    assert find_cycles(triangle_graph, "D") == []


def test_dag_has_no_cycles():
    graph = {"A": {"B", "C"}, "B": {"C"}, "C": {"D"}, "D": set()}
    for name in graph:
        assert find_cycles(graph, name) == []


def test_discovery_order_follows_sorted_dependencies():
    graph = {"A": {"C", "B"}, "B": {"C"}, "C": {"A"}}
    assert find_cycles(graph, "A") == [("A", "B", "C", "A"), ("A", "C", "A")]


def test_cycle_reached_through_two_routes():
    graph = {"A": {"B", "C"}, "B": {"D"}, "C": {"D"}, "D": {"A"}}
    assert find_cycles(graph, "A") == [("A", "B", "D", "A"), ("A", "C", "D", "A")]


def test_dangling_and_missing_nodes_are_leaves():
    graph = {"A": {"B", "X"}, "B": {"A"}}
    assert find_cycles(graph, "A") == [("A", "B", "A")]
    assert find_cycles(graph, "X") == []
    assert find_cycles(graph, "missing") == []


def test_depth_bound(triangle_graph):
    assert find_cycles(triangle_graph, "A", max_depth=1) == []
    assert find_cycles(triangle_graph, "A", max_depth=2) == [("A", "B", "C", "A")]
    assert find_cycles({"A": {"B"}, "B": {"A"}}, "A", max_depth=1) == [("A", "B", "A")]


def test_non_positive_depth_finds_nothing(mutual_graph):
    assert find_cycles(mutual_graph, "A", max_depth=0) == []
    assert find_cycles(mutual_graph, "A", max_depth=-3) == []


def test_chain_length_is_bounded_by_depth():
    nodes = "ABCD"
    complete = {n: {m for m in nodes if m != n} for n in nodes}
    for max_depth in (1, 2, 3, 4):
        for target in nodes:
            for chain in find_cycles(complete, target, max_depth):
                assert chain[0] == chain[-1] == target
                assert len(chain) <= 2 * max_depth + 2


def test_iter_cycles_is_lazy(triangle_graph):
    cycles = iter_cycles(triangle_graph, "A")
    assert next(cycles) == ("A", "B", "C", "A")
    assert list(itertools.islice(cycles, 1)) == []


def test_deep_chain_does_not_hit_recursion_limit():
    size = 1500
    graph = {str(i): {str((i + 1) % size)} for i in range(size)}
    chains = find_cycles(graph, "0", max_depth=size + 500)
    assert len(chains) == 1
    assert len(chains[0]) == size + 1


def test_default_depth():
    assert MAX_DEPTH == 20


def test_detector_detect_all_cycles(triangle_graph):
    detector = CycleDetector(triangle_graph)
    cycles = detector.detect_all_cycles()
    assert list(cycles) == ["A", "B", "C", "D"]
    assert cycles["B"] == [("B", "C", "A", "B")]
    assert cycles["D"] == []


def test_detector_strongly_connected_components():
    graph = {"A": {"B"}, "B": {"A"}, "C": {"C"}, "D": {"A"}, "E": set()}
    detector = CycleDetector(graph)
    assert detector.find_strongly_connected_components() == [["A", "B"], ["C"]]
    assert not detector.is_dag()


def test_detector_on_dag():
    detector = CycleDetector({"A": {"B"}, "B": set()})
    assert detector.find_strongly_connected_components() == []
    assert detector.is_dag()
