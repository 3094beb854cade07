import pytest

from gtecore.game import Event, EventType, FrameClock, Game, GameMode, MouseButton
from gtecore.graphics import Graphics, Vec3


class RecordingGame(Game):
    def __init__(self, width=800, height=600):
        super().__init__(width, height)
        self.calls = []

    def on_key_down(self, key, mod, unicode):
        self.calls.append(("key_down", key, mod, unicode))

    def on_key_up(self, key, mod, unicode):
        self.calls.append(("key_up", key, mod, unicode))

    def on_mouse_move(self, x, y, relx, rely, left, right, middle):
        self.calls.append(("move", x, y, relx, rely, left, right, middle))

    def on_button_down(self, button, x, y):
        self.calls.append(("down", button, x, y))

    def on_button_up(self, button, x, y):
        self.calls.append(("up", button, x, y))

    def on_resize(self, width, height):
        self.calls.append(("resize", width, height))

    def on_expose(self):
        self.calls.append(("expose",))


def test_default_mode_is_menu():
    game = Game()
    assert game.mode is GameMode.MENU
    assert game.is_menu_mode
    assert game.game_time == 0


def test_mouse_motion_flips_y_and_reports_buttons():
    game = RecordingGame(800, 600)
    game.dispatch(Event(EventType.MOUSE_MOTION, x=10, y=100, relx=2, rely=-3,
                        buttons=frozenset({MouseButton.LEFT, MouseButton.MIDDLE})))
    assert game.calls == [("move", 10, 600 - 100, 2, -3, True, False, True)]


@pytest.mark.parametrize("button", list(MouseButton))
def test_button_down_for_every_button(button):
    game = RecordingGame(800, 600)
    game.dispatch(Event(EventType.MOUSE_BUTTON_DOWN, x=5, y=20, button=button))
    assert game.calls == [("down", button, 5, 600 - 20)]


def test_wheel_release_is_ignored():
    game = RecordingGame()
    game.dispatch(Event(EventType.MOUSE_BUTTON_UP, button=MouseButton.WHEEL_UP))
    assert game.calls == []
    game.dispatch(Event(EventType.MOUSE_BUTTON_UP, x=1, y=0, button=MouseButton.RIGHT))
    assert game.calls == [("up", MouseButton.RIGHT, 1, 600)]


def test_resize_and_expose():
    game = RecordingGame()
    game.dispatch(Event(EventType.RESIZE, width=1024, height=768))
    game.dispatch(Event(EventType.EXPOSE))
    assert game.calls == [("resize", 1024, 768), ("expose",)]


def test_minimize_pauses_and_restore_resumes():
    game = Game()
    game.mode = GameMode.RUNNING
    game.dispatch(Event(EventType.ACTIVE, app_active=True, gain=False))
    assert game.mode is GameMode.PAUSED
    game.dispatch(Event(EventType.ACTIVE, app_active=True, gain=True))
    assert game.mode is GameMode.RUNNING


def test_active_event_for_other_state_is_ignored():
    game = Game()
    game.mode = GameMode.RUNNING
    game.dispatch(Event(EventType.ACTIVE, app_active=False, gain=False))
    assert game.is_running


def test_pause_only_affects_running_game():
    game = Game()
    game.pause()
    assert game.mode is GameMode.MENU
    game.resume()
    assert game.mode is GameMode.MENU


def test_quit_event_sets_flag():
    game = Game()
    game.dispatch(Event(EventType.QUIT))
    assert game.quit_requested is True


def test_coordinate_helpers_need_graphics():
    game = Game()
    with pytest.raises(RuntimeError):
        game.world_to_screen(Vec3())


def test_coordinate_helpers_delegate_to_graphics():
    graphics = Graphics()
    graphics.set_viewport(800, 600)
    game = Game(800, 600, graphics=graphics)
    pos = Vec3(1.0, 2.0, -10.0)
    assert game.world_to_screen(pos) == graphics.world_to_screen(pos)


def test_frame_clock_rejects_bad_fps():
    with pytest.raises(ValueError):
        FrameClock(fps=0, start_time=0)


def test_frame_clock_advance_and_reset():
    clock = FrameClock(fps=10, start_time=0)
    assert clock.advance() == 100
    second = clock.advance()
    assert second > 100
    assert clock.game_time == second
    clock.reset()
    assert clock.game_time == 0
    assert clock.advance() == 100


def test_frame_clock_deadlines_increase_when_on_time():
    clock = FrameClock(fps=10, start_time=0)
    first = clock.next_deadline(0)
    second = clock.next_deadline(first)
    assert first == 0
    assert second > first
    assert clock.frame_cycles == 2


def test_frame_clock_resynchronises_when_behind():
    clock = FrameClock(fps=10, start_time=0)
    clock.next_deadline(0)
    late = clock.next_deadline(5000)
    assert late < 5000
    following = clock.next_deadline(5000)
    assert following > 5000
    assert following - 5000 <= clock.period