import random
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from pygame.math import Vector2

from board.level import LevelController
from board.maze import generate_board
from board.state import Hole, LevelState, Session
from words.resolver import WordAssociationResolver


@pytest.fixture
def session():
    return Session(width=800, height=600, walls=[])


@pytest.fixture
def controller(session, fake_client_factory):
    ctrl = LevelController(
        session,
        WordAssociationResolver(fake_client_factory(context=["unused"])),
        rng=random.Random(3),
    )
    yield ctrl
    ctrl.shutdown()


def roll_into(controller, hole, max_ticks=200):
    marble = controller.session.marble
    marble.pos = Vector2(hole.pos.x - (hole.radius + 5), hole.pos.y)
    for _ in range(max_ticks):
        controller.tick((1, 0))
        if controller.state is LevelState.FALLING:
            return
    raise AssertionError("marble never fell")


def test_love_end_to_end(controller, session):
    hole = controller.submit_label("love")
    assert hole.label == "love"
    assert hole.growth == 0
    assert 30 <= hole.base_radius <= 50
    hole.pos = Vector2(400, 300)

    roll_into(controller, hole)
    assert session.is_falling
    assert session.last_fallen_hole is hole
    assert session.fade_timer == 0

    for i in range(1, 51):
        controller.tick((1, 0))
        assert session.fade_timer == 5 * i
        assert session.marble.fade_alpha == 255 - 5 * i
    assert session.depth == 0
    assert session.marble.fade_alpha == 5

    controller.tick((0, 0))

    assert session.depth == 1
    assert controller.state is LevelState.ROLLING
    assert [h.label for h in session.holes] == ["passion", "connection", "warmth"]
    assert all(h.growth == 0 for h in session.holes)
    assert session.walls == generate_board(1, 800, 600).walls
    assert session.marble.pos == Vector2(50, 50)
    assert session.marble.vel == Vector2(0, 0)
    assert session.marble.fade_alpha == 255
    assert session.fade_timer == 0
    assert session.last_fallen_hole is None


def test_previous_board_is_recorded(controller, session):
    hole = controller.submit_label("love")
    hole.pos = Vector2(400, 300)
    roll_into(controller, hole)
    for _ in range(51):
        controller.tick()

    assert len(session.boards) == 1
    snapshot = session.boards[0]
    assert snapshot.depth == 0
    assert snapshot.walls == ()
    assert snapshot.holes == (hole,)
    assert hole not in session.holes


def test_existing_labels_are_not_reseeded(controller, session):
    controller.submit_label("Passion")
    hole = Hole(pos=Vector2(400, 300), base_radius=40, label="love")
    session.holes.append(hole)
    assert controller.begin_fall(hole)
    controller.advance()
    assert [h.label for h in session.holes] == ["connection", "warmth"]


def test_advance_outside_falling_is_ignored(controller, session):
    assert controller.advance() is None
    assert session.depth == 0
    assert session.boards == []


def test_advance_without_fallen_hole_gives_empty_level(controller, session):
    session.state = LevelState.FALLING
    assert controller.advance() is None
    assert session.depth == 1
    assert session.holes == []
    assert controller.state is LevelState.ROLLING


def test_click_grows_one_hole(controller, session):
    a = Hole(pos=Vector2(200, 200), base_radius=40, label="a")
    b = Hole(pos=Vector2(600, 200), base_radius=40, label="b")
    session.holes.extend([a, b])
    assert controller.click(210, 200) is a
    assert a.growth == pytest.approx(0.8)
    assert b.growth == 0


def test_rolling_grows_nearby_holes(controller, session):
    near = Hole(pos=Vector2(300, 300), base_radius=40, label="near")
    far = Hole(pos=Vector2(700, 500), base_radius=40, label="far", growth=1.0)
    session.holes.extend([near, far])
    session.marble.pos = Vector2(200, 300)
    controller.tick((0, 0))
    assert near.growth > 0
    assert far.growth < 1.0


def test_blank_submission_is_rejected(controller, session):
    assert controller.submit_label("   ") is None
    assert session.holes == []


class BlockingClient:
    def __init__(self, words):
        self.words = words
        self.release = threading.Event()

    def related_by_context(self, word, limit=3):
        assert self.release.wait(5)
        return list(self.words)

    def related_by_meaning(self, word, limit=3):
        return []


def test_remote_lookup_runs_in_background():
    session = Session(width=800, height=600, walls=[])
    client = BlockingClient(["kettle", "pot"])
    executor = ThreadPoolExecutor(max_workers=1)
    controller = LevelController(session, WordAssociationResolver(client), executor=executor)
    try:
        hole = Hole(pos=Vector2(400, 300), base_radius=40, label="tea")
        session.holes.append(hole)
        controller.begin_fall(hole)

        future = controller.advance()
        assert future is not None
        assert controller.state is LevelState.TRANSITIONING
        assert session.depth == 1

        # Reentrant requests are no-ops while the lookup is pending
        assert controller.advance() is None
        assert not controller.begin_fall(hole)
        controller.tick((1, 0))
        assert session.depth == 1
        assert controller.state is LevelState.TRANSITIONING
        assert controller.transition_pending

        client.release.set()
        assert future.result(timeout=5) == ["kettle", "pot"]
        controller.tick((0, 0))

        assert controller.state is LevelState.ROLLING
        assert [h.label for h in session.holes] == ["kettle", "pot"]
        assert session.depth == 1
        assert not controller.transition_pending
    finally:
        client.release.set()
        executor.shutdown(wait=True)


class CrashingResolver(WordAssociationResolver):
    def lookup_remote_or_fallback(self, label):
        raise RuntimeError("boom")


def test_crashed_lookup_still_reaches_next_level(capsys):
    session = Session(width=800, height=600, walls=[])
    executor = ThreadPoolExecutor(max_workers=1)
    controller = LevelController(session, CrashingResolver(client=object()), executor=executor)
    try:
        hole = Hole(pos=Vector2(400, 300), base_radius=40, label="tea")
        session.holes.append(hole)
        controller.begin_fall(hole)
        future = controller.advance()
        with pytest.raises(RuntimeError):
            future.result(timeout=5)
        assert controller.poll()
        assert controller.state is LevelState.ROLLING
        assert session.holes == []
        assert "[Level]" in capsys.readouterr().out
    finally:
        executor.shutdown(wait=True)


def test_offline_lookup_seeds_synthetic_words(offline_client):
    session = Session(width=800, height=600, walls=[])
    executor = ThreadPoolExecutor(max_workers=1)
    controller = LevelController(session, WordAssociationResolver(offline_client), executor=executor)
    try:
        hole = Hole(pos=Vector2(400, 300), base_radius=40, label="zorb")
        session.holes.append(hole)
        controller.begin_fall(hole)
        controller.advance().result(timeout=5)
        controller.poll()
        assert [h.label for h in session.holes] == ["zorbness", "zorbing", "zorbful"]
    finally:
        executor.shutdown(wait=True)
