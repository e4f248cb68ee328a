import pytest


@pytest.fixture
def triangle_graph():
    """A -> B -> C -> A, plus an unrelated leaf D"""
    return {"A": {"B"}, "B": {"C"}, "C": {"A"}, "D": set()}


@pytest.fixture
def mutual_graph():
    return {"A": {"B"}, "B": {"A"}}
