"""Tests for the Dijkstra frontier strategies."""

from __future__ import annotations

import pytest

from navroute.services.routing.frontier import HeapFrontier, SortedListFrontier

FRONTIERS = [SortedListFrontier, HeapFrontier]


@pytest.mark.parametrize("factory", FRONTIERS)
class TestFrontier:
    def test_pops_in_cost_order(self, factory):
        frontier = factory()
        for cost, node in [(30.0, "C"), (10.0, "A"), (20.0, "B")]:
            frontier.push(cost, node)
        assert [frontier.pop() for _ in range(3)] == [(10.0, "A"), (20.0, "B"), (30.0, "C")]

    def test_equal_costs_pop_in_insertion_order(self, factory):
        frontier = factory()
        for node in ["ZULU", "ALFA", "MIKE"]:
            frontier.push(5.0, node)
        assert [frontier.pop()[1] for _ in range(3)] == ["ZULU", "ALFA", "MIKE"]

    def test_len(self, factory):
        frontier = factory()
        assert len(frontier) == 0
        frontier.push(1.0, "A")
        frontier.push(1.0, "A")
        assert len(frontier) == 2
        frontier.pop()
        assert len(frontier) == 1

    def test_pop_empty_raises(self, factory):
        with pytest.raises(IndexError):
            factory().pop()


def test_strategies_agree_on_interleaved_operations():
    ops = [(7.0, "G"), (3.0, "C"), (3.0, "D"), (9.5, "J"), (1.0, "A"), (3.0, "E")]
    sorted_list, heap = SortedListFrontier(), HeapFrontier()
    popped_sorted, popped_heap = [], []
    for i, (cost, node) in enumerate(ops):
        sorted_list.push(cost, node)
        heap.push(cost, node)
        if i % 2:
            popped_sorted.append(sorted_list.pop())
            popped_heap.append(heap.pop())
    while len(sorted_list):
        popped_sorted.append(sorted_list.pop())
        popped_heap.append(heap.pop())
    assert popped_sorted == popped_heap
