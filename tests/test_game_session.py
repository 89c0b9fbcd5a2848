import random

import pytest

from escape_room.engine import CellChange, Direction, GameEvent, GameSession, MoveOutcome, SessionState
from escape_room.room.generator import RoomGenerator, build_layout
from escape_room.room.map import Point
from escape_room.room.tiles import Cell

UP, DOWN, LEFT, RIGHT = Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT


def walk(session, *directions):
    return [session.move(d) for d in directions]


class TestScenario:
    def test_collect_key_open_door_and_escape(self, scenario_layout):
        session = GameSession(scenario_layout)
        assert session.has_key is False
        assert session.door_open is False
        assert session.state is SessionState.PLAYING

        results = walk(session, RIGHT, RIGHT, RIGHT, RIGHT, RIGHT)
        assert all(r.outcome is MoveOutcome.MOVED for r in results)
        assert session.player == Point(7, 2)
        assert session.has_key is False

        pickup = session.move(DOWN)
        assert pickup.outcome is MoveOutcome.MOVED
        assert session.player == Point(7, 3)
        assert pickup.has_key is True and session.has_key is True
        assert pickup.door_open is True and session.door_open is True
        assert session.map[Point(5, 0)] is Cell.DOOR_OPEN
        assert pickup.changes == (
            CellChange(Point(5, 0), Cell.DOOR_OPEN),
            CellChange(Point(7, 2), Cell.FLOOR),
            CellChange(Point(7, 3), Cell.PLAYER),
        )

        walk(session, UP, UP, LEFT, LEFT)
        assert session.player == Point(5, 1)

        onto_door = session.move(UP)
        assert onto_door.outcome is MoveOutcome.MOVED
        assert session.player == Point(5, 0)
        assert session.map[Point(5, 0)] is Cell.PLAYER_ON_OPEN_DOOR

        exit_move = session.move(UP)
        assert exit_move.outcome is MoveOutcome.WON
        assert exit_move.changes == ()
        assert session.state is SessionState.WON

    def test_closed_door_blocks_before_key(self, scenario_layout):
        session = GameSession(scenario_layout)
        walk(session, UP, RIGHT, RIGHT, RIGHT)
        assert session.player == Point(5, 1)

        before = session.map.snapshot()
        result = session.move(UP)
        assert result.outcome is MoveOutcome.REJECTED
        assert result.changes == ()
        assert session.player == Point(5, 1)
        assert session.map.snapshot() == before
        assert session.map[Point(5, 0)] is Cell.DOOR_CLOSED

    def test_stepping_back_off_the_open_door_restores_it(self, scenario_layout):
        session = GameSession(scenario_layout)
        walk(session, RIGHT, RIGHT, RIGHT, RIGHT, RIGHT, DOWN, UP, UP, LEFT, LEFT, UP)
        assert session.player == Point(5, 0)

        result = session.move(DOWN)
        assert result.outcome is MoveOutcome.MOVED
        assert result.changes == (
            CellChange(Point(5, 0), Cell.DOOR_OPEN),
            CellChange(Point(5, 1), Cell.PLAYER),
        )
        assert session.map.count(Cell.DOOR_OPEN) == 1


class TestRejections:
    def test_wall_rejects_without_side_effects(self, scenario_layout):
        session = GameSession(scenario_layout)
        walk(session, LEFT)
        assert session.player == Point(1, 2)

        before = session.map.snapshot()
        result = session.move(LEFT)
        assert result.outcome is MoveOutcome.REJECTED
        assert session.player == Point(1, 2)
        assert session.has_key is False
        assert session.door_open is False
        assert session.map.snapshot() == before

    def test_off_grid_without_open_door_is_rejected(self):
        # Player on the closed door cell cannot happen through moves; force it
        layout = build_layout(10, 6, door=Point(0, 2), player=Point(1, 2), key=Point(5, 3))
        session = GameSession(layout)
        session.player = Point(0, 2)
        assert session.move(LEFT).outcome is MoveOutcome.REJECTED
        assert session.state is SessionState.PLAYING

    def test_moves_after_game_over_are_rejected(self, scenario_layout):
        session = GameSession(scenario_layout)
        session.quit()
        assert session.state is SessionState.QUIT
        result = session.move(RIGHT)
        assert result.outcome is MoveOutcome.REJECTED
        assert session.player == Point(2, 2)

    def test_quit_is_idempotent_and_keeps_win(self, scenario_layout):
        session = GameSession(scenario_layout)
        walk(session, RIGHT, RIGHT, RIGHT, RIGHT, RIGHT, DOWN, UP, UP, LEFT, LEFT, UP, UP)
        assert session.state is SessionState.WON
        session.quit()
        assert session.state is SessionState.WON


def test_corner_adjacent_door_wins_off_grid():
    layout = build_layout(10, 6, door=Point(1, 0), player=Point(1, 2), key=Point(1, 1))
    session = GameSession(layout)
    assert session.move(UP).outcome is MoveOutcome.MOVED  # picks up key at (1,1)
    assert session.door_open is True
    assert session.move(UP).outcome is MoveOutcome.MOVED  # onto door
    # Left of the door is the corner wall, not off-grid
    assert session.move(LEFT).outcome is MoveOutcome.REJECTED
    assert session.move(UP).outcome is MoveOutcome.WON


def test_round_trip_restores_cells(scenario_layout):
    session = GameSession(scenario_layout)
    start = session.player
    for d in (RIGHT, DOWN, UP, LEFT):
        before = session.map.snapshot()
        there = session.move(d)
        back = session.move(d.opposite)
        assert there.outcome is MoveOutcome.MOVED and back.outcome is MoveOutcome.MOVED
        assert session.player == start
        assert session.map.snapshot() == before


def test_full_redraw_covers_every_cell(scenario_layout):
    session = GameSession(scenario_layout)
    changes = session.full_redraw()
    assert len(changes) == 60
    assert CellChange(Point(5, 0), Cell.DOOR_CLOSED) in changes
    assert CellChange(Point(2, 2), Cell.PLAYER) in changes
    assert CellChange(Point(7, 3), Cell.KEY) in changes


def test_events_emitted(scenario_layout):
    session = GameSession(scenario_layout)
    events = []
    session.add_listener(lambda e, s: events.append(e))

    walk(session, RIGHT, RIGHT, RIGHT, RIGHT, RIGHT, DOWN)
    assert events.count(GameEvent.PLAYER_MOVED) == 6
    assert events.count(GameEvent.KEY_COLLECTED) == 1
    assert events.count(GameEvent.DOOR_OPENED) == 1
    # Door opens before the player steps onto the key cell
    assert events[-3:] == [GameEvent.KEY_COLLECTED, GameEvent.DOOR_OPENED, GameEvent.PLAYER_MOVED]

    session.quit()
    assert events[-1] is GameEvent.QUIT


def test_failing_listener_does_not_break_session(scenario_layout):
    session = GameSession(scenario_layout)

    def boom(event, s):
        raise RuntimeError("listener failure")

    session.add_listener(boom)
    assert session.move(RIGHT).outcome is MoveOutcome.MOVED
    assert session.player == Point(3, 2)


@pytest.mark.parametrize("seed", range(25))
def test_random_walk_invariants(seed):
    rng = random.Random(seed)
    session = GameSession(RoomGenerator(random.Random(seed)).generate(12, 7))
    door = session.door.position
    had_key = False
    door_was_open = False

    for _ in range(400):
        pre_pos = session.player
        pre_door_open = session.door_open
        result = session.move(rng.choice(list(Direction)))

        # hasKey and door state only ever go false -> true, together
        assert session.has_key or not had_key
        assert session.door_open or not door_was_open
        assert session.door_open == session.has_key
        had_key, door_was_open = session.has_key, session.door_open

        if result.outcome is MoveOutcome.WON:
            assert pre_pos == door and pre_door_open
            break
        if result.outcome is MoveOutcome.REJECTED:
            assert session.player == pre_pos
            assert result.changes == ()

        door_cells = session.map.count(Cell.DOOR_CLOSED) + session.map.count(Cell.DOOR_OPEN) + session.map.count(Cell.PLAYER_ON_OPEN_DOOR)
        assert door_cells == 1
        assert session.map.count(Cell.PLAYER) + session.map.count(Cell.PLAYER_ON_OPEN_DOOR) == 1
        assert session.map.count(Cell.KEY) == (0 if session.has_key else 1)
