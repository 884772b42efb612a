import random

import pytest

from conquest import commands
from conquest.helper.world_helpers import create_galaxy
from conquest.models import Outcome
from conquest.puppet import ai_turn
from conquest.world import accrue_income, advance_world, check_win_condition

from tests.helpers import A, N, P, assert_fleet_invariants, line_state, station


def test_income_from_one_system_over_one_and_a_half_seconds():
    state = line_state([P, A, N], production=[2.0, 5.0, 7.0], credits=0.0)
    gained = accrue_income(state, 1.5)
    assert gained == pytest.approx(3.0)
    assert state.credits == pytest.approx(3.0)


def test_tick_scales_by_speed_multiplier():
    state = line_state([P, A], production=[2.0, 1.0], credits=10.0)
    state.speed = 4
    advance_world(state, 0.25)
    assert state.time == pytest.approx(1.0)
    assert state.credits == pytest.approx(12.0)


def test_paused_tick_changes_nothing():
    state = line_state([P, A], production=[2.0, 1.0], credits=10.0)
    state.paused = True
    advance_world(state, 5.0)
    assert state.time == 0.0
    assert state.credits == 10.0


def test_three_quarters_control_is_victory():
    state = line_state([P] * 15 + [A] * 5)
    assert check_win_condition(state) == Outcome.VICTORY
    assert state.paused
    assert "15/20" in state.outcome_text


def test_below_threshold_game_goes_on():
    state = line_state([P] * 14 + [A] * 6)
    assert check_win_condition(state) is None
    assert not state.paused


def test_eliminating_the_ai_is_victory():
    state = line_state([P, N, N, N])
    assert check_win_condition(state) == Outcome.VICTORY


def test_losing_every_system_is_defeat():
    state = line_state([A, N, N, N])
    assert check_win_condition(state) == Outcome.DEFEAT


def test_ai_three_quarters_is_defeat():
    state = line_state([A] * 15 + [P] * 5)
    assert check_win_condition(state) == Outcome.DEFEAT


def test_finished_match_ignores_further_ticks():
    state = line_state([P] * 15 + [A] * 5, credits=0.0)
    advance_world(state, 1.0)
    assert state.outcome == Outcome.VICTORY
    frozen = (state.time, state.credits)
    state.paused = False  # even if a host flips the flag back
    advance_world(state, 1.0)
    assert (state.time, state.credits) == frozen


def test_ai_acts_every_three_seconds():
    state = line_state([A, N, P, N])
    fleet = station(state, 0, A, 2)
    advance_world(state, 2.0)
    assert fleet.route == []
    assert state.ai_timer == pytest.approx(2.0)

    advance_world(state, 1.0)
    assert state.ai_timer == 0.0
    assert fleet.route == [0, 1]
    assert fleet.at_system is None
    assert fleet.id not in state.systems[0].stationed


def test_ai_spawns_a_fleet_when_none_is_stationed():
    state = line_state([A, N, P])
    dispatched = ai_turn(state)
    assert dispatched is not None
    assert dispatched.owner == A
    assert dispatched.route == [0, 1]
    assert_fleet_invariants(state)


def test_ai_without_systems_does_nothing():
    state = line_state([P, N])
    assert ai_turn(state) is None
    assert state.fleets == {}


def test_ai_targets_nearest_reachable_system():
    state = line_state([A, A, N, P])
    dispatched = ai_turn(state)
    assert dispatched is not None
    assert dispatched.route[-1] == 2


@pytest.mark.parametrize("seed", [2, 5, 9])
def test_long_run_keeps_fleet_invariants(seed):
    state = create_galaxy(seed=seed)
    orders = random.Random(seed)
    for step in range(900):
        if step % 40 == 0:
            mine = [s.id for s in state.systems if s.owner == P]
            if mine:
                commands.build_fleet(state, orders.choice(mine), "small")
            idle = [fl.id for fl in state.fleets.values() if fl.owner == P and fl.at_system is not None]
            if idle:
                commands.issue_move(
                    state, orders.choice(idle), orders.randrange(len(state.systems))
                )
        advance_world(state, 0.1)
        assert_fleet_invariants(state)
        assert state.credits >= 0
