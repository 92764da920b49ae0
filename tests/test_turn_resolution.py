from typing import Callable

from racetrack_simulator.core.direction import Direction
from racetrack_simulator.core.vector import Vector
from tests.test_utils import RaceScenario

ScenarioFactory = Callable[..., RaceScenario]


def _snapshot(s: RaceScenario) -> tuple[object, ...]:
    cars = tuple((c.position, c.velocity, c.crashed) for c in s.state.cars)
    return (cars, s.state.winner)


# a sits left of a right-pointing finish line, b out of the way below
FINISH_AHEAD = [
    "##########",
    "#a  >    #",
    "#b       #",
    "##########",
]

# a sits right of the same finish line
FINISH_BEHIND = [
    "##########",
    "#  >   a #",
    "#b       #",
    "##########",
]


def test_stationary_turn_keeps_car_in_place(scenario: ScenarioFactory):
    s = scenario(FINISH_AHEAD)
    outcome = s.turn_for("a", Direction.NONE.vector)

    assert outcome == "moved"
    assert s.car("a").position == Vector(1, 1)
    assert not s.car("a").crashed


def test_clear_path_commits_move(scenario: ScenarioFactory):
    s = scenario(FINISH_AHEAD)
    outcome = s.turn_for("b", Vector(3, 0))

    assert outcome == "moved"
    b = s.car("b")
    assert b.position == Vector(4, 2)
    assert b.velocity == Vector(3, 0)


def test_obstacle_crash_freezes_car_at_wall(scenario: ScenarioFactory):
    s = scenario(FINISH_AHEAD)
    outcome = s.turn_for("a", Direction.UP.vector)

    a = s.car("a")
    assert outcome == "crashed"
    assert a.crashed
    assert a.position == Vector(1, 0)


def test_crash_stops_at_first_wall_cell(scenario: ScenarioFactory):
    s = scenario(FINISH_AHEAD)
    _ = s.turn_for("b", Vector(12, 0))

    assert s.car("b").crashed
    assert s.car("b").position == Vector(9, 2)


def test_leaving_the_grid_is_a_crash(scenario: ScenarioFactory):
    s = scenario(
        [
            "a >",
            "b  ",
        ],
    )
    _ = s.turn_for("a", Direction.LEFT.vector)

    assert s.car("a").crashed
    assert s.car("a").position == Vector(-1, 0)


def test_crashed_car_takes_no_further_turns(scenario: ScenarioFactory):
    s = scenario(
        [
            "#####",
            "#a  #",
            "#b  #",
            "#c  #",
            "#####",
        ],
    )
    _ = s.turn_for("a", Direction.UP.vector)
    before = _snapshot(s)

    outcome = s.turn_for("a", Direction.DOWN.vector)

    assert outcome == "skipped"
    assert _snapshot(s) == before
    assert s.car("a").position == Vector(1, 0)


def test_collision_with_other_car_crashes_mover_only(scenario: ScenarioFactory):
    s = scenario(
        [
            "#######",
            "#a  b #",
            "#c    #",
            "#######",
        ],
    )
    outcome = s.turn_for("a", Vector(4, 0))

    assert outcome == "crashed"
    assert s.car("a").crashed
    assert s.car("a").position == Vector(4, 1)
    assert not s.car("b").crashed
    assert s.car("b").position == Vector(4, 1)
    assert s.car("b").velocity == Vector(0, 0)


def test_crashed_cars_are_not_obstacles(scenario: ScenarioFactory):
    s = scenario(
        [
            "#######",
            "#a b  #",
            "#c d  #",
            "#######",
        ],
    )
    _ = s.turn_for("a", Vector(3, 0))
    assert s.car("a").crashed
    assert s.car("a").position == Vector(3, 1)

    # b drives away and leaves only the wreck of a behind
    assert s.turn_for("b", Direction.RIGHT.vector) == "moved"

    outcome = s.turn_for("c", Vector(2, -1))
    assert outcome == "moved"
    assert s.car("c").position == Vector(3, 1)


def test_winning_crossing_sets_winner_and_position(scenario: ScenarioFactory):
    s = scenario(FINISH_AHEAD)
    outcome = s.turn_for("a", Vector(3, 0))

    assert outcome == "won"
    assert s.state.winner == s.car("a").idx
    assert s.car("a").position == Vector(4, 1)


def test_winning_crossing_commits_whole_move(scenario: ScenarioFactory):
    s = scenario(FINISH_AHEAD)
    outcome = s.turn_for("a", Vector(5, 0))

    assert outcome == "won"
    assert s.state.winner == s.car("a").idx
    assert s.car("a").position == Vector(6, 1)
    assert not s.car("a").crashed


def test_diagonal_crossing_wins_on_matching_component(scenario: ScenarioFactory):
    s = scenario(
        [
            "#######",
            "#a    #",
            "#   > #",
            "#b    #",
            "#######",
        ],
    )
    outcome = s.turn_for("a", Vector(3, 1))

    assert outcome == "won"
    assert s.car("a").position == Vector(4, 2)


def test_wrong_direction_finish_is_passable(scenario: ScenarioFactory):
    s = scenario(FINISH_BEHIND)
    outcome = s.turn_for("a", Vector(-5, 0))

    a = s.car("a")
    assert outcome == "moved"
    assert not a.crashed
    assert s.state.winner is None
    assert a.position == Vector(2, 1)


def test_parallel_finish_crossing_is_not_a_win(scenario: ScenarioFactory):
    s = scenario(
        [
            "#####",
            "#a  #",
            "#>  #",
            "#>  #",
            "#b  #",
            "#####",
        ],
    )
    outcome = s.turn_for("a", Vector(0, 2))

    assert outcome == "moved"
    assert s.state.winner is None
    assert s.car("a").position == Vector(1, 3)


def test_cars_on_finish_cells_do_not_block(scenario: ScenarioFactory):
    s = scenario(FINISH_BEHIND)
    b = s.car("b")
    b.position = Vector(3, 1)  # parked on the finish line

    outcome = s.turn_for("a", Vector(-5, 0))

    assert outcome == "moved"
    assert not s.car("a").crashed


def test_attrition_win_goes_to_last_car_standing(scenario: ScenarioFactory):
    s = scenario(
        [
            "######",
            "#a   #",
            "#b   #",
            "#c   #",
            "######",
        ],
    )
    _ = s.turn_for("a", Direction.UP.vector)
    assert s.state.winner is None

    _ = s.turn_for("b", Direction.LEFT.vector)

    c = s.car("c")
    assert s.state.winner == c.idx
    assert c.position == Vector(1, 3)
    assert c.velocity == Vector(0, 0)


def test_last_car_crashing_leaves_no_winner(scenario: ScenarioFactory):
    s = scenario(
        [
            "####",
            "#a #",
            "####",
        ],
    )
    _ = s.turn_for("a", Direction.UP.vector)

    assert s.car("a").crashed
    assert s.state.winner is None
    assert s.engine.race_over


def test_turns_after_a_win_are_no_ops(scenario: ScenarioFactory):
    s = scenario(FINISH_AHEAD)
    _ = s.turn_for("a", Vector(3, 0))
    before = _snapshot(s)

    assert s.turn_for("b", Vector(2, 0)) == "skipped"
    assert s.turn_for("a", Vector(-1, 0)) == "skipped"

    assert _snapshot(s) == before
    assert s.state.winner == s.car("a").idx


def test_attrition_winner_never_changes(scenario: ScenarioFactory):
    s = scenario(
        [
            "#####",
            "#a >#",
            "#b  #",
            "#####",
        ],
    )
    _ = s.turn_for("b", Direction.DOWN.vector)
    assert s.state.winner == s.car("a").idx

    # a would cross the finish now, but the race is decided
    assert s.turn_for("a", Vector(2, 0)) == "skipped"
    assert s.state.winner == s.car("a").idx
    assert s.car("a").position == Vector(1, 1)


def test_retired_car_takes_no_further_turns(scenario: ScenarioFactory):
    s = scenario(FINISH_AHEAD, moves={"a": []})
    record = s.engine.run_turn()
    assert record.outcome == "retired"
    before = _snapshot(s)

    outcome = s.turn_for("a", Direction.RIGHT.vector)

    assert outcome == "skipped"
    assert _snapshot(s) == before
    assert s.car("a").position == Vector(1, 1)
    assert s.car("a").retired
