import logging

import pytest

from snake3d.config import Config, UP
from snake3d.controller import GameController, Phase
from snake3d.render import EntityKind, HeadlessRenderer, ScoreLog


class ScriptedRng:
    """Hands out food cells from a list, cycling."""

    def __init__(self, *cells):
        self.values = [v for cell in cells for v in cell]
        self.i = 0

    def randint(self, a, b):
        v = self.values[self.i % len(self.values)]
        self.i += 1
        return v


def make(cfg=None, rng=None, **kw):
    cfg = cfg or Config(debug=False)
    renderer = HeadlessRenderer()
    scores = ScoreLog()
    ctl = GameController(cfg, renderer, score_display=scores, rng=rng or ScriptedRng((5, 5)), **kw)
    return ctl, renderer, scores


def assert_scene_matches(ctl, renderer):
    state = ctl.state
    assert renderer.cells(EntityKind.HEAD) == [state.head]
    assert sorted(renderer.cells(EntityKind.BODY)) == sorted(state.snake[1:])
    assert renderer.food == state.food


def test_start_builds_scene_and_waits():
    ctl, renderer, scores = make()
    ctl.start(0)
    assert ctl.phase is Phase.STARTING
    assert_scene_matches(ctl, renderer)
    assert len(renderer.entities) == 4
    assert scores.history == [0]

    assert ctl.update(999) is None
    assert ctl.state.head == (0, 0)


def test_moves_once_per_interval_after_start_delay():
    ctl, renderer, _ = make()
    ctl.start(0)
    ctl.update(1000)
    assert ctl.phase is Phase.RUNNING
    assert ctl.state.head == (0, 0)

    assert ctl.update(1199) is None
    result = ctl.update(1200)
    assert result.moved
    assert ctl.state.head == (1, 0)
    assert_scene_matches(ctl, renderer)


def test_late_update_does_not_replay_missed_ticks():
    ctl, _, _ = make()
    ctl.start(0)
    ctl.update(1000)
    ctl.update(5000)
    assert ctl.state.head == (1, 0)


def test_only_one_head_entity_while_moving():
    ctl, renderer, _ = make()
    ctl.start(0)
    ctl.update(1000)
    ctl.handle_direction(UP)
    for t in range(1200, 2001, 200):
        ctl.update(t)
        assert_scene_matches(ctl, renderer)
    assert len(ctl.state.snake) == 3


def test_eating_updates_score_and_respawns_food():
    ctl, renderer, scores = make(rng=ScriptedRng((1, 0), (5, 5)))
    ctl.start(0)
    assert ctl.state.food == (1, 0)
    ctl.update(1000)
    result = ctl.update(1200)
    assert result.grew
    assert ctl.score == 10
    assert scores.current == 10
    assert len(ctl.state.snake) == 4
    assert ctl.state.food == (5, 5)
    assert_scene_matches(ctl, renderer)


def test_game_over_prompt_and_restart():
    prompts = []
    cfg = Config(grid_size=5, debug=False)
    ctl, renderer, scores = make(cfg, rng=ScriptedRng((-2, -2)), on_game_over=prompts.append)
    ctl.start(0)
    ctl.update(1000)
    ctl.update(1200)
    ctl.update(1400)
    result = ctl.update(1600)
    assert result.collision == "wall"
    assert ctl.phase is Phase.GAME_OVER_PENDING
    assert prompts == []

    ctl.update(1700)
    assert ctl.phase is Phase.AWAITING_RESTART
    assert prompts == [0]

    # nothing moves while the prompt is up
    head = ctl.state.head
    assert ctl.update(5000) is None
    assert ctl.state.head == head

    assert ctl.acknowledge_restart(6000)
    assert ctl.phase is Phase.RESTARTING
    assert ctl.state.snake == [(0, 0), (-1, 0), (-2, 0)]
    assert not ctl.state.game_over
    assert scores.history[-1] == 0
    assert len(renderer.entities) == 4
    assert_scene_matches(ctl, renderer)

    ctl.update(6499)
    assert ctl.phase is Phase.RESTARTING
    ctl.update(6500)
    assert ctl.phase is Phase.RUNNING
    ctl.update(6700)
    assert ctl.state.head == (1, 0)


def test_acknowledge_only_while_prompt_is_up():
    ctl, _, _ = make()
    ctl.start(0)
    assert not ctl.acknowledge_restart(10)
    assert ctl.phase is Phase.STARTING


def test_close_cancels_everything():
    ctl, renderer, _ = make()
    ctl.start(0)
    ctl.update(1000)
    ctl.close()
    assert ctl.phase is Phase.STOPPED
    assert renderer.entities == {}
    assert ctl.update(10_000) is None
    assert not ctl.handle_direction(UP)
    ctl.close()
    with pytest.raises(RuntimeError):
        ctl.start(20_000)


def test_missing_score_display_is_tolerated(caplog):
    with caplog.at_level(logging.WARNING):
        ctl = GameController(Config(debug=False), HeadlessRenderer(), rng=ScriptedRng((5, 5)))
    assert "Score display not found" in caplog.text
    ctl.start(0)
    ctl.update(1000)
    assert ctl.update(1200).moved


class ReentrantRenderer(HeadlessRenderer):
    def __init__(self):
        super().__init__()
        self.controller = None
        self.nested = []

    def create_entity(self, kind, cell):
        if self.controller is not None:
            self.nested.append(self.controller.update(100_000))
        return super().create_entity(kind, cell)


def test_tick_is_single_flight():
    renderer = ReentrantRenderer()
    ctl = GameController(Config(debug=False), renderer, rng=ScriptedRng((5, 5)))
    ctl.start(0)
    ctl.update(1000)
    renderer.controller = ctl
    ctl.update(1200)
    assert renderer.nested == [None]
    assert ctl.state.head == (1, 0)


def test_state_requires_start():
    ctl, _, _ = make()
    with pytest.raises(RuntimeError):
        ctl.state
    assert ctl.score == 0
    assert not ctl.handle_direction(UP)
