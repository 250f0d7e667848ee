from path_puzzle.cli import format_result, handle_command, parse_args, render_board
from path_puzzle.grid import make_puzzle
from path_puzzle.scorer import score
from path_puzzle.session import PathSession, SessionState

SOLUTION = ["0-0", "0-1", "0-2", "1-2", "1-1", "1-0", "2-0", "2-1", "2-2"]


def scenario_puzzle():
    return make_puzzle(
        grid_size=3, waypoints={"0-0": 1, "1-1": 2, "2-2": 3}, obstacles=set()
    )


def test_parse_args_defaults() -> None:
    args = parse_args([])

    assert args.size == 5
    assert args.difficulty == "easy"
    assert args.seed is None
    assert not args.verbose


def test_render_board_marks_waypoints_obstacles_and_line() -> None:
    puzzle = make_puzzle(grid_size=3, waypoints={"0-0": 1}, obstacles={"2-2"})

    board = render_board(puzzle, ("0-0", "0-1", "0-2"))

    assert board.splitlines() == [
        "     0  1  2",
        " 0   1  *  @",
        " 1   .  .  .",
        " 2   .  .  #",
    ]


def test_commands_drive_the_session(capsys) -> None:
    session = PathSession(scenario_puzzle())

    handle_command(session, "hint")
    for cell in SOLUTION[:3]:
        handle_command(session, cell.replace("-", " "))
    handle_command(session, "2-2")
    handle_command(session, "undo")
    handle_command(session, "nonsense")

    out = capsys.readouterr().out
    assert "Next number is at 0-0." in out
    assert "Cannot move to 2-2. Open moves: 1-2" in out
    assert "Input error" in out
    assert session.path == ("0-0", "0-1")
    assert session.state is SessionState.IN_PROGRESS


def test_full_solution_completes_through_commands() -> None:
    session = PathSession(scenario_puzzle())

    for cell in SOLUTION:
        handle_command(session, cell)

    assert session.state is SessionState.COMPLETED


def test_solve_command_prints_a_solution(capsys) -> None:
    session = PathSession(scenario_puzzle())

    handle_command(session, "solve")

    assert "Solution: 0-0" in capsys.readouterr().out


def test_format_result_lists_errors() -> None:
    result = score(SOLUTION[:4], scenario_puzzle(), elapsed_ms=3_000)

    text = format_result(result)

    assert text.startswith("Puzzle not solved.")
    assert "- incomplete path" in text
    assert "Stars: 0" in text
