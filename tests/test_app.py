import pygame
import pytest

from glitch_snake.app import GlitchSnakeApp, parse_args
from glitch_snake.config import Difficulty
from glitch_snake.engine import GameState
from glitch_snake.grid import Direction
from glitch_snake.session import GameStatus


@pytest.fixture
def app():
    shell = GlitchSnakeApp(music=False, seed=1)
    pygame.event.clear()
    yield shell
    pygame.quit()


def press(app: GlitchSnakeApp, *keys: int) -> bool:
    """Feed key presses through the shell and apply the queued commands."""
    for key in keys:
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=key))
    running = app.handle_events()
    app.session.update(0)
    return running


def put_board(app: GlitchSnakeApp, snake, food=(0, 0), direction=Direction.RIGHT):
    session = app.session
    session.state = GameState(
        snake=tuple(snake),
        food=food,
        direction=direction,
        score=session.state.score,
        tick_ms=session.state.tick_ms,
        config=session.state.config,
    )
    session.pending_direction = direction


def test_enter_starts_a_game(app):
    assert app.session.status is GameStatus.IDLE
    assert press(app, pygame.K_RETURN)
    assert app.session.status is GameStatus.RUNNING


def test_space_toggles_pause(app):
    press(app, pygame.K_SPACE)
    assert app.session.status is GameStatus.RUNNING
    press(app, pygame.K_SPACE)
    assert app.session.status is GameStatus.PAUSED
    press(app, pygame.K_SPACE)
    assert app.session.status is GameStatus.RUNNING


def test_enter_resumes_when_paused(app):
    press(app, pygame.K_RETURN, pygame.K_SPACE)
    assert app.session.status is GameStatus.PAUSED
    press(app, pygame.K_KP_ENTER)
    assert app.session.status is GameStatus.RUNNING


def test_number_keys_pick_difficulty_before_a_game(app):
    press(app, pygame.K_3)
    assert app.session.difficulty is Difficulty.HARD
    press(app, pygame.K_1)
    assert app.session.difficulty is Difficulty.EASY
    press(app, pygame.K_RETURN)
    assert len(app.session.state.snake) == 3

    press(app, pygame.K_2)
    assert app.session.difficulty is Difficulty.EASY


@pytest.mark.parametrize(
    "key, direction",
    [
        (pygame.K_UP, Direction.UP),
        (pygame.K_w, Direction.UP),
        (pygame.K_DOWN, Direction.DOWN),
        (pygame.K_s, Direction.DOWN),
    ],
)
def test_direction_keys_set_pending_turn(app, key, direction):
    press(app, pygame.K_RETURN)
    press(app, key)
    assert app.session.pending_direction is direction


def test_left_is_a_reversal_at_start(app):
    press(app, pygame.K_RETURN, pygame.K_a)
    assert app.session.pending_direction is Direction.RIGHT
    press(app, pygame.K_UP)
    app.session.update(app.session.state.tick_ms)
    assert app.session.state.direction is Direction.UP
    press(app, pygame.K_LEFT)
    assert app.session.pending_direction is Direction.LEFT


def test_escape_and_quit_end_the_loop(app):
    assert not press(app, pygame.K_ESCAPE)
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert not app.handle_events()


def test_high_score_survives_restart(app):
    press(app, pygame.K_RETURN)
    put_board(app, [(5, 5), (4, 5), (3, 5)], food=(6, 5))
    app.session.update(130)
    assert app.session.state.score == 10
    assert app.high_score == 10

    put_board(app, [(19, 10), (18, 10)])
    app.session.update(130)
    assert app.session.status is GameStatus.GAME_OVER

    press(app, pygame.K_RETURN)
    assert app.session.status is GameStatus.RUNNING
    assert app.session.state.score == 0
    assert app.high_score == 10


def test_scanline_key_toggles_overlay(app):
    before = app.renderer.scanlines_enabled
    press(app, pygame.K_c)
    assert app.renderer.scanlines_enabled is not before


def test_parse_args_maps_options():
    args = parse_args(["--difficulty", "hard", "--seed", "3", "--mute"])
    assert Difficulty(args.difficulty.upper()) is Difficulty.HARD
    assert args.seed == 3
    assert args.mute
    assert not args.fullscreen


def test_parse_args_defaults():
    args = parse_args([])
    assert args.difficulty == "medium"
    assert args.seed is None
    assert not args.mute


def test_parse_args_rejects_unknown_difficulty():
    with pytest.raises(SystemExit):
        parse_args(["--difficulty", "insane"])
