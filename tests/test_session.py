import copy
import math

import pytest

from archery.settings import GOLD, HIT_GREEN, MISS_RED
from archery.session import (
    GameState, advance_round, new_session, press_shoot, resize,
    resolve_shot, shoot, start_game, tick,
)

MISS_DISTANCE = 500.0


def fly_until_resolved(session, now, store, limit=500):
    for _ in range(limit):
        tick(session, now, store)
        if not session.arrow.flying:
            return
    pytest.fail("arrow never stopped flying")


def test_new_session_waits_on_start_screen(session):
    assert session.state == GameState.START
    assert session.score == 0
    assert session.round == 1
    assert session.misses == 0


def test_start_game_initial_layout(playing):
    assert playing.state == GameState.PLAYING
    assert (playing.bow.x, playing.bow.y) == (200, 350)
    assert (playing.arrow.x, playing.arrow.y) == (200, 350)
    assert not playing.arrow.flying
    assert playing.target.distance == 250
    assert (playing.target.x, playing.target.y) == (200, 75)
    assert playing.target.move_speed == 0
    assert playing.aim_speed == pytest.approx(0.01)
    assert playing.aim_angle == 0
    assert playing.aim_direction == 1


def test_shoot_input_on_start_screen_starts_game(session, store):
    press_shoot(session, 0.0, store)
    assert session.state == GameState.PLAYING
    assert not session.arrow.flying


def test_shoot_releases_arrow_once(playing):
    playing.aim_angle = 0.25
    press_shoot(playing, 0.0)

    assert playing.state == GameState.SHOOTING
    assert playing.arrow.flying
    assert playing.arrow.vx == pytest.approx(math.sin(0.25) * 20)
    assert playing.arrow.vy == pytest.approx(-math.cos(0.25) * 20)
    assert playing.pulses == [50]

    x, vx = playing.arrow.x, playing.arrow.vx
    press_shoot(playing, 0.1)
    assert playing.pulses == [50]
    assert (playing.arrow.x, playing.arrow.vx) == (x, vx)


def test_aim_swings_only_while_not_flying(playing):
    tick(playing, 0.0)
    assert playing.aim_angle == pytest.approx(0.01)

    press_shoot(playing, 0.0)
    tick(playing, 0.0)
    tick(playing, 0.0)
    assert playing.aim_angle == pytest.approx(0.01)


def test_nothing_moves_outside_active_states(session):
    before = copy.deepcopy(session)
    tick(session, 10.0)
    assert session == before


def test_bullseye_at_round_one(playing, store):
    press_shoot(playing, 0.0)
    resolve_shot(playing, 10.0, 2.0, store)

    assert playing.score == 200
    assert playing.round == 2
    assert playing.result.text == "BULLSEYE!\n+200"
    assert playing.result.color == GOLD
    assert playing.pulses == [50, 100]
    assert not playing.arrow.flying
    assert (playing.arrow.x, playing.arrow.y) == (playing.bow.x, playing.bow.y)


def test_ring_hit_shows_green(playing):
    press_shoot(playing, 0.0)
    resolve_shot(playing, 40.0, 0.0)
    assert playing.score == 50
    assert playing.result.text == "Ring 3\n+50"
    assert playing.result.color == HIT_GREEN


def test_round_advance_scales_difficulty(playing):
    for _ in range(4):
        advance_round(playing, 0.0)
    assert playing.round == 5
    assert playing.target.distance == 450
    assert playing.target.move_speed == pytest.approx(0.5)
    assert playing.aim_speed == pytest.approx(0.018)

    advance_round(playing, 0.0)
    assert playing.target.move_speed == pytest.approx(0.6)
    assert playing.target.distance == 500


def test_shooting_resumes_after_delay(playing):
    press_shoot(playing, 0.0)
    resolve_shot(playing, 80.0, 10.0)
    assert playing.state == GameState.SHOOTING
    assert not playing.can_shoot

    tick(playing, 11.0)
    assert playing.state == GameState.SHOOTING
    press_shoot(playing, 11.0)
    assert not playing.arrow.flying

    tick(playing, 11.5)
    assert playing.state == GameState.PLAYING
    assert playing.resume_at is None
    assert playing.can_shoot


def test_result_message_expires(playing):
    press_shoot(playing, 0.0)
    resolve_shot(playing, MISS_DISTANCE, 3.0)
    assert playing.result.text == "MISS!"
    assert playing.result.color == MISS_RED

    tick(playing, 4.4)
    assert playing.result is not None
    tick(playing, 4.5)
    assert playing.result is None


def test_game_over_exactly_on_fifth_miss(playing, store):
    now = 0.0
    for expected in range(1, 5):
        press_shoot(playing, now, store)
        resolve_shot(playing, MISS_DISTANCE, now, store)
        assert playing.misses == expected
        assert playing.state == GameState.SHOOTING
        now += 1.5
        tick(playing, now, store)
        assert playing.state == GameState.PLAYING

    press_shoot(playing, now, store)
    resolve_shot(playing, MISS_DISTANCE, now, store)
    assert playing.misses == 5
    assert playing.state == GameState.GAME_OVER
    assert playing.round == 5
    assert not playing.arrow.flying

    # 结束后射击输入无效
    press_shoot(playing, now + 5, store)
    tick(playing, now + 5, store)
    assert playing.state == GameState.GAME_OVER
    assert playing.misses == 5


def lose_game(session, store, points_first=0.0):
    now = 0.0
    if points_first:
        press_shoot(session, now, store)
        resolve_shot(session, points_first, now, store)
        now += 1.5
        tick(session, now, store)
    while session.state != GameState.GAME_OVER:
        press_shoot(session, now, store)
        resolve_shot(session, MISS_DISTANCE, now, store)
        now += 1.5
        tick(session, now, store)
    return now


def test_game_over_saves_higher_score(playing, store):
    lose_game(playing, store, points_first=20.0)
    assert playing.score == 100
    assert store.load() == 100
    assert playing.best_score == 100


def test_game_over_keeps_existing_best(playing, store):
    store.save(500)
    lose_game(playing, store, points_first=20.0)
    assert store.load() == 500
    assert playing.best_score == 500


def test_restart_matches_first_start(store):
    fresh = start_game(new_session(400, 400), store)

    played = start_game(new_session(400, 400), store)
    played.aim_angle = 0.7
    lose_game(played, store, points_first=10.0)
    played.pulses.clear()
    fresh.best_score = played.best_score
    start_game(played, store)

    assert played == fresh


def test_score_and_round_never_decrease(playing, store):
    now = 0.0
    last_score, last_round = playing.score, playing.round
    for distance in [10, 500, 60, 500, 90, 30, 500]:
        if playing.state == GameState.GAME_OVER:
            break
        press_shoot(playing, now, store)
        resolve_shot(playing, distance, now, store)
        assert playing.score >= last_score
        assert playing.round >= last_round
        assert playing.misses <= playing.max_misses
        last_score, last_round = playing.score, playing.round
        now += 1.5
        tick(playing, now, store)


def test_straight_shot_lands_in_outer_ring(playing, store):
    press_shoot(playing, 0.0, store)
    fly_until_resolved(playing, 0.0, store)

    assert playing.score == 10
    assert playing.round == 2
    assert playing.misses == 0
    assert playing.pulses == [50, 100]


def test_wide_shot_leaves_play_area(playing, store):
    playing.aim_angle = -math.pi / 3
    press_shoot(playing, 0.0, store)
    fly_until_resolved(playing, 0.0, store)

    assert playing.score == 0
    assert playing.misses == 1
    assert playing.round == 2
    assert playing.result.text == "MISS!"


def test_scoring_fires_once_per_arrow(playing, store):
    press_shoot(playing, 0.0, store)
    fly_until_resolved(playing, 0.0, store)
    score, round_no = playing.score, playing.round
    for _ in range(20):
        tick(playing, 0.5, store)
    assert (playing.score, playing.round) == (score, round_no)


def test_resize_keeps_positions(playing):
    before = (playing.bow.x, playing.bow.y, playing.target.x, playing.target.y)
    resize(playing, 300, 300)
    assert (playing.width, playing.height) == (300, 300)
    assert (playing.bow.x, playing.bow.y, playing.target.x, playing.target.y) == before


def test_drain_pulses(playing):
    shoot(playing)
    assert playing.drain_pulses() == [50]
    assert playing.pulses == []
