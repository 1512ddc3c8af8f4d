"""
Tests for SimulationController.

Tests cover:
- Run lifecycle (start, restart, stop, reset, dispose)
- Tick physics, out-of-bounds and collision termination
- Scoring and level progression
- Impulse and level-up cues
- Pause / resume
- Administrative state changes
"""

from unittest.mock import patch

import pytest

from hopkit.games.input import InputEvent
from models import RunState
from games.FlappyGate.difficulty import DIFFICULTY_LEVELS


def place_passed_obstacle(controller):
    """Spawn an obstacle that the next tick scores (trailing edge just behind the actor)."""
    obstacle = controller.field.spawn_one(controller.difficulty)
    obstacle.advance(409.0)  # x = -9; the next tick moves it past x + width < 50
    return obstacle


class TestStart:
    """Tests for start() and restart()."""

    def test_initial_state(self, controller):
        assert controller.run_state == RunState.STOPPED
        assert controller.score == 0
        assert controller.level == 1

    def test_start_resets_run(self, controller, scheduler, surface):
        controller.start()

        assert controller.run_state == RunState.RUNNING
        assert controller.running
        assert controller.difficulty == DIFFICULTY_LEVELS[1]
        assert len(scheduler.pending('tick')) == 1
        assert controller.field.spawning
        surface.hide_screens.assert_called_once()
        surface.update_hud.assert_called_with(0, 1, 'Iniciante')

    def test_start_stop_start(self, controller, scheduler):
        controller.start()
        controller.field.spawn_one(controller.difficulty)
        controller.force_state(score=7)

        controller.stop()
        controller.start()

        assert (controller.score, controller.level) == (0, 1)
        assert controller.field.count == 0
        assert len(scheduler.pending('tick')) == 1
        assert len(scheduler.pending('spawn')) == 1
        assert len(scheduler.pending('first_spawn')) == 1

    def test_start_while_running_never_duplicates_tick(self, controller, scheduler):
        controller.start()
        controller.start()

        assert len(scheduler.pending('tick')) == 1

    def test_restart_clears_field(self, controller, surface):
        controller.start()
        obstacle = controller.field.spawn_one(controller.difficulty)
        controller.force_game_over()

        controller.restart()

        assert controller.running
        assert controller.field.count == 0
        surface.destroy_obstacle_visual.assert_any_call(obstacle.obstacle_id)


class TestTick:
    """Tests for tick()."""

    def test_tick_ignored_when_not_running(self, controller):
        controller.tick()

        assert controller.actor.position == 250.0

    def test_tick_applies_gravity_and_updates_visual(self, controller, surface):
        controller.start()

        controller.tick()

        assert controller.actor.velocity == pytest.approx(0.35)
        assert controller.actor.position == pytest.approx(250.35)
        position, rotation = surface.set_actor_transform.call_args.args
        assert position == pytest.approx(250.35)
        assert rotation == pytest.approx(1.05)

    def test_scheduler_drives_ticks(self, controller, scheduler):
        controller.start()

        scheduler.advance(0.016 * 3)

        assert controller.actor.velocity == pytest.approx(0.35 * 3)

    def test_out_of_bounds_is_terminal(self, controller, scheduler, surface):
        controller.start()
        controller.actor.set_state(-1.0)

        controller.tick()

        assert controller.run_state == RunState.GAME_OVER
        assert scheduler.pending('tick') == []
        surface.show_game_over.assert_called_once_with(0, 1, 'Iniciante')
        assert surface.set_actor_transform.call_args.args[1] == 90.0

    def test_falling_ends_the_run(self, controller, scheduler):
        controller.start()

        scheduler.advance(2.0)

        assert controller.run_state == RunState.GAME_OVER
        assert controller.games_played == 1

    def test_collision_is_terminal(self, controller, surface):
        controller.start()
        obstacle = controller.field.spawn_one(controller.difficulty)
        obstacle.advance(345.0)  # x = 55, gate 150-400
        controller.actor.set_state(100.0)

        controller.tick()

        assert controller.run_state == RunState.GAME_OVER
        surface.show_game_over.assert_called_once()

    def test_gate_is_safe(self, controller):
        controller.start()
        obstacle = controller.field.spawn_one(controller.difficulty)
        obstacle.advance(345.0)

        controller.tick()

        assert controller.running

    def test_game_over_keeps_obstacles_and_stops_spawning(self, controller, scheduler):
        controller.start()
        controller.field.spawn_one(controller.difficulty)

        controller.force_game_over()

        assert controller.field.count == 1
        assert not controller.field.spawning
        assert len(scheduler) == 0


class TestScoring:
    """Tests for scoring and level progression."""

    def test_passing_obstacle_scores(self, controller):
        controller.start()
        place_passed_obstacle(controller)

        controller.tick()

        assert controller.score == 1
        assert controller.level == 1

    def test_fifth_point_levels_up(self, controller, scheduler, surface):
        controller.start()
        controller.force_state(score=4)
        place_passed_obstacle(controller)

        controller.tick()

        assert controller.score == 5
        assert controller.level == 2
        assert controller.difficulty == DIFFICULTY_LEVELS[2]
        assert scheduler.pending('spawn')[0].interval == DIFFICULTY_LEVELS[2].spawn_interval
        surface.flash_level_up.assert_called_with(True)
        surface.update_hud.assert_called_with(5, 2, 'Fácil')

    def test_level_flash_ends(self, controller, scheduler, surface):
        controller.start()
        controller.add_score(5)

        scheduler.advance(0.5)

        surface.flash_level_up.assert_called_with(False)
        assert scheduler.pending('level_flash') == []

    @pytest.mark.parametrize("score,level", [(0, 1), (4, 1), (5, 2), (49, 10), (500, 10)])
    def test_level_invariant(self, controller, score, level):
        controller.start()

        controller.add_score(score)

        assert controller.level == min(10, controller.score // 5 + 1) == level

    def test_level_capped_at_max(self, controller):
        controller.start()
        controller.force_state(level=10)

        controller.add_score(20)

        assert controller.level == 10
        assert controller.difficulty.label == 'INSANO!'

    def test_add_score_rejects_negative(self, controller):
        with pytest.raises(ValueError):
            controller.add_score(-1)


class TestImpulse:
    """Tests for handle_input()."""

    def test_impulse_when_running(self, controller, surface):
        controller.start()

        controller.handle_input()

        assert controller.actor.velocity == -8.0
        assert surface.set_actor_transform.call_args.args[1] == -20.0

    def test_impulse_cue_shown_until_reset(self, controller, scheduler, surface):
        controller.start()
        controller.handle_input()

        controller.tick()
        assert surface.set_actor_transform.call_args.args[1] == -20.0

        scheduler.advance(0.1)
        controller.tick()
        assert surface.set_actor_transform.call_args.args[1] != -20.0
        assert scheduler.pending('impulse_cue') == []

    def test_ignored_when_stopped(self, controller, surface):
        controller.handle_input()

        assert controller.actor.velocity == 0.0
        surface.set_actor_transform.assert_not_called()

    def test_ignored_after_game_over(self, controller):
        controller.start()
        controller.force_game_over()

        controller.handle_input()

        assert controller.actor.velocity == 0.0

    def test_game_over_cancels_pending_cue(self, controller, scheduler):
        controller.start()
        controller.handle_input()

        controller.force_game_over()

        assert scheduler.pending('impulse_cue') == []

    def test_activation_through_input_manager(self, controller, input_manager):
        controller.start()
        input_manager.on_activate(controller.handle_input)

        input_manager.dispatch([InputEvent(timestamp=0.0)])

        assert input_manager.handler_count == 1
        assert controller.actor.velocity == -8.0


class TestPause:
    """Tests for toggle_pause()."""

    def test_pause_and_resume(self, controller, scheduler, surface):
        controller.start()
        controller.add_score(6)

        assert controller.toggle_pause() == RunState.PAUSED
        assert scheduler.pending('tick') == []
        assert not controller.field.spawning
        surface.show_game_over.assert_not_called()

        assert controller.toggle_pause() == RunState.RUNNING
        assert (controller.score, controller.level) == (6, 2)
        assert len(scheduler.pending('tick')) == 1
        assert len(scheduler.pending('spawn')) == 1
        assert scheduler.pending('spawn')[0].interval == DIFFICULTY_LEVELS[2].spawn_interval

    def test_paused_simulation_is_frozen(self, controller, scheduler):
        controller.start()
        controller.toggle_pause()

        scheduler.advance(5.0)

        assert controller.actor.position == 250.0
        assert controller.field.count == 0

    def test_no_op_when_stopped(self, controller, scheduler):
        assert controller.toggle_pause() == RunState.STOPPED
        assert len(scheduler) == 0

    def test_no_op_after_game_over(self, controller, scheduler):
        controller.start()
        controller.force_game_over()

        assert controller.toggle_pause() == RunState.GAME_OVER
        assert scheduler.pending('tick') == []


class TestLifecycle:
    """Tests for stop(), reset() and dispose()."""

    def test_stop_is_idempotent_and_silent(self, controller, scheduler, surface):
        controller.start()

        controller.stop()
        controller.stop()

        assert controller.run_state == RunState.STOPPED
        assert len(scheduler) == 0
        surface.show_game_over.assert_not_called()

    def test_reset_returns_to_start_screen(self, controller, surface):
        controller.start()
        controller.field.spawn_one(controller.difficulty)
        controller.add_score(3)
        controller.force_game_over()

        controller.reset()

        assert controller.run_state == RunState.STOPPED
        assert controller.score == 0
        assert controller.field.count == 0
        surface.show_start_screen.assert_called_once()

    def test_dispose_releases_input(self, controller, input_manager, scheduler):
        controller.start()
        controller.field.spawn_one(controller.difficulty)

        controller.dispose()
        controller.dispose()

        assert input_manager.handler_count == 0
        assert controller.field.count == 0
        assert len(scheduler) == 0

    def test_registers_single_handler(self, controller, input_manager):
        assert input_manager.handler_count == 1


class TestSession:
    """Tests for session statistics and records."""

    def test_best_score_survives_restart(self, controller):
        controller.start()
        controller.add_score(3)
        controller.force_game_over()

        controller.restart()

        assert controller.score == 0
        assert controller.best_score == 3
        assert controller.games_played == 1

    def test_game_over_emits_session_record(self, controller):
        controller.start()
        controller.add_score(2)

        with patch('games.FlappyGate.game.controller.emit_record') as emit:
            controller.force_game_over()

        module, record = emit.call_args.args
        assert module == 'session'
        assert record['score'] == 2
        assert record['reason'] == 'forced'

    def test_force_game_over_ignored_when_stopped(self, controller):
        controller.force_game_over()

        assert controller.run_state == RunState.STOPPED
        assert controller.games_played == 0


class TestForceState:
    """Tests for force_state()."""

    def test_level_only_derives_score(self, controller):
        controller.force_state(level=3)

        assert (controller.score, controller.level) == (10, 3)
        assert controller.difficulty == DIFFICULTY_LEVELS[3]

    def test_score_only_derives_level(self, controller):
        controller.force_state(score=12)

        assert controller.level == 3

    def test_consistent_pair_accepted(self, controller):
        controller.force_state(score=12, level=3)

        assert (controller.score, controller.level) == (12, 3)

    def test_inconsistent_pair_rejected(self, controller):
        with pytest.raises(ValueError):
            controller.force_state(score=12, level=2)

        assert (controller.score, controller.level) == (0, 1)

    @pytest.mark.parametrize("kwargs", [
        {},
        {'score': -1},
        {'level': 0},
        {'level': 11},
    ])
    def test_invalid_values_rejected(self, controller, kwargs):
        with pytest.raises(ValueError):
            controller.force_state(**kwargs)

    def test_level_change_while_running_restarts_spawning(self, controller, scheduler):
        controller.start()

        controller.force_state(level=6)

        spawns = scheduler.pending('spawn')
        assert len(spawns) == 1
        assert spawns[0].interval == DIFFICULTY_LEVELS[6].spawn_interval

    def test_get_state_snapshot(self, controller):
        controller.start()
        controller.force_state(score=5)

        snapshot = controller.get_state()

        assert snapshot.running
        assert snapshot.score == 5
        assert snapshot.level == 2
        assert snapshot.difficulty == 'Fácil'
        assert snapshot.actor_position == 250.0
