import pytest

from path_puzzle.grid import (
    Difficulty,
    adjacent,
    available_cell_count,
    cell_at,
    cell_id,
    make_puzzle,
    neighbors,
    ordered_waypoints,
    parse_cell_id,
)


def sample_puzzle():
    return make_puzzle(
        grid_size=3,
        waypoints={"2-2": 3, "0-0": 1, "1-1": 2},
        obstacles={"0-2"},
        difficulty="medium",
    )


def test_cell_id_round_trips_through_parser() -> None:
    assert cell_id(4, 7) == "4-7"
    assert parse_cell_id("4-7") == (4, 7)
    assert parse_cell_id(" 2 3 ") == (2, 3)


@pytest.mark.parametrize("text", ["", "4", "a-b", "1-", "-1-2", "1-2-3"])
def test_parse_cell_id_rejects_malformed_text(text: str) -> None:
    with pytest.raises(ValueError):
        parse_cell_id(text)


def test_adjacent_is_orthogonal_only() -> None:
    assert adjacent("1-1", "0-1")
    assert adjacent("1-1", "1-2")
    assert not adjacent("1-1", "2-2")
    assert not adjacent("1-1", "1-3")
    assert not adjacent("0-0", "0-7")


def test_adjacent_is_symmetric_and_irreflexive() -> None:
    ids = [cell_id(r, c) for r in range(4) for c in range(4)]
    for a in ids:
        assert not adjacent(a, a)
        for b in ids:
            assert adjacent(a, b) == adjacent(b, a)


def test_cell_at_is_bounds_checked() -> None:
    puzzle = sample_puzzle()

    corner = cell_at(puzzle, 0, 0)
    blocked = cell_at(puzzle, 0, 2)

    assert corner is not None and corner.waypoint == 1
    assert blocked is not None and blocked.is_obstacle
    assert cell_at(puzzle, 3, 0) is None
    assert cell_at(puzzle, -1, 1) is None


def test_available_cell_count_excludes_obstacles() -> None:
    assert available_cell_count(sample_puzzle()) == 8


def test_neighbors_skip_obstacles_and_edges() -> None:
    puzzle = sample_puzzle()

    assert neighbors(puzzle, "0-1") == ["1-1", "0-0"]
    assert neighbors(puzzle, "2-2") == ["1-2", "2-1"]


def test_waypoints_are_ordered_by_sequence_number() -> None:
    assert ordered_waypoints(sample_puzzle()) == ["0-0", "1-1", "2-2"]


def test_puzzle_is_read_only() -> None:
    puzzle = sample_puzzle()

    assert puzzle.difficulty is Difficulty.MEDIUM
    assert len(puzzle.cells) == 9
    with pytest.raises(TypeError):
        puzzle.waypoints["0-1"] = 4  # type: ignore[index]
    assert puzzle.contains("2-0")
    assert not puzzle.contains("3-0")


def test_adjacent_requires_canonical_ids() -> None:
    assert not adjacent("01-0", "0-0")
    assert not adjacent("1-0 ", "0-0")
    assert not adjacent("²-0", "1-0")
    assert adjacent("1-0", "0-0")


def test_make_puzzle_rejects_broken_layouts() -> None:
    with pytest.raises(ValueError, match="both waypoint and obstacle"):
        make_puzzle(3, {"0-0": 1}, obstacles={"0-0"})
    with pytest.raises(ValueError, match="not on a 3x3 grid"):
        make_puzzle(3, {"0-0": 1}, obstacles={"3-0"})
    with pytest.raises(ValueError, match="without gaps"):
        make_puzzle(3, {"0-0": 1, "1-1": 3})


def test_puzzles_are_hashable() -> None:
    first = sample_puzzle()
    second = sample_puzzle()

    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1
