"""Graph view of a puzzle for connectivity checks and solving."""

from __future__ import annotations

from typing import Iterable

import networkx as nx

from .grid import Puzzle, available_cell_count, cell_id, ordered_waypoints


def layout_graph(grid_size: int, obstacles: Iterable[str] = ()) -> nx.Graph:
    blocked = set(obstacles)
    lattice = nx.grid_2d_graph(grid_size, grid_size)
    graph = nx.relabel_nodes(lattice, {(r, c): cell_id(r, c) for r, c in lattice.nodes})
    graph.remove_nodes_from(blocked)
    return graph


def build_graph(puzzle: Puzzle) -> nx.Graph:
    graph = layout_graph(puzzle.grid_size, puzzle.obstacles)
    for node in graph.nodes:
        graph.nodes[node]["waypoint"] = puzzle.waypoint_at(node)
    return graph


def layout_connected(grid_size: int, obstacles: Iterable[str] = ()) -> bool:
    graph = layout_graph(grid_size, obstacles)
    return graph.number_of_nodes() > 0 and nx.is_connected(graph)


def free_cells_connected(puzzle: Puzzle) -> bool:
    """Every non-obstacle cell reachable from every other; needed for any solution."""
    return layout_connected(puzzle.grid_size, puzzle.obstacles)


def find_solution(puzzle: Puzzle, node_limit: int = 200_000) -> list[str] | None:
    """Depth-first search for a full path that meets waypoints in order.

    Neighbours with the fewest onward moves are tried first. Gives up and
    returns None once `node_limit` search steps have been spent.
    """
    graph = build_graph(puzzle)
    if graph.number_of_nodes() == 0 or not nx.is_connected(graph):
        return None

    order = ordered_waypoints(puzzle)
    target = available_cell_count(puzzle)
    budget = [node_limit]

    starts = list(order[:1]) + sorted(n for n in graph.nodes if n not in order[:1])

    path: list[str] = []
    visited: set[str] = set()

    def onward(node: str) -> int:
        return sum(1 for n in graph.neighbors(node) if n not in visited)

    def step(node: str, consumed: int) -> bool:
        budget[0] -= 1
        if budget[0] < 0:
            return False

        number = graph.nodes[node]["waypoint"]
        if number is not None:
            if consumed >= len(order) or order[consumed] != node:
                return False
            consumed += 1

        path.append(node)
        visited.add(node)
        if len(path) == target:
            if consumed == len(order):
                return True
        else:
            candidates = [n for n in graph.neighbors(node) if n not in visited]
            candidates.sort(key=onward)
            for candidate in candidates:
                if step(candidate, consumed):
                    return True

        path.pop()
        visited.discard(node)
        return False

    for start in starts:
        if step(start, 0):
            return list(path)
        if budget[0] < 0:
            break
    return None
