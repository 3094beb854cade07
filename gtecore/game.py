"""Game state, event dispatch to handler methods, and frame timing."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field

from .graphics import Graphics, Vec3


class GameMode(enum.Enum):
    MENU = "menu"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    EXIT = "exit"


class EventType(enum.Enum):
    ACTIVE = "active"
    KEY_DOWN = "key_down"
    KEY_UP = "key_up"
    MOUSE_MOTION = "mouse_motion"
    MOUSE_BUTTON_DOWN = "mouse_button_down"
    MOUSE_BUTTON_UP = "mouse_button_up"
    RESIZE = "resize"
    EXPOSE = "expose"
    QUIT = "quit"


class MouseButton(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"
    WHEEL_UP = "wheel_up"
    WHEEL_DOWN = "wheel_down"


@dataclass
class Event:
    """An input or window event.

    Mouse coordinates are in window pixels with the origin at the top left;
    the game receives them with the origin at the bottom left.
    """

    type: EventType
    key: int = 0
    mod: int = 0
    unicode: int = 0
    x: int = 0
    y: int = 0
    relx: int = 0
    rely: int = 0
    buttons: frozenset[MouseButton] = field(default_factory=frozenset)
    button: MouseButton | None = None
    width: int = 0
    height: int = 0
    app_active: bool = True
    gain: bool = True


_RELEASABLE = (MouseButton.LEFT, MouseButton.RIGHT, MouseButton.MIDDLE)


class Game:
    """Base class for games; override the ``on_*`` handlers.

    The base handlers keep track of the input state (keys and buttons held,
    last mouse position, last resize request, pending redraw); overriding
    handlers should call ``super()`` to keep that tracking.
    """

    def __init__(self, width: int = 0, height: int = 0, graphics: Graphics | None = None) -> None:
        self.width = int(width)
        self.height = int(height)
        self.game_time = 0
        self.mode = GameMode.MENU
        self.graphics = graphics
        self.keys_down: set[int] = set()
        self.buttons_down: set[MouseButton] = set()
        self.mouse_position: tuple[int, int] = (0, 0)
        self.requested_size: tuple[int, int] | None = None
        self.needs_redraw = False
        self.quit_requested = False

    # --- mode ---
    @property
    def is_menu_mode(self) -> bool:
        return self.mode is GameMode.MENU

    @property
    def is_running(self) -> bool:
        return self.mode is GameMode.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.mode is GameMode.PAUSED

    @property
    def is_game_over(self) -> bool:
        return self.mode is GameMode.GAME_OVER

    @property
    def is_exit(self) -> bool:
        return self.mode is GameMode.EXIT

    def set_size(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)

    def pause(self) -> None:
        """Pause a running game."""
        if self.mode is GameMode.RUNNING:
            self.mode = GameMode.PAUSED

    def resume(self) -> None:
        """Resume a paused game."""
        if self.mode is GameMode.PAUSED:
            self.mode = GameMode.RUNNING

    # --- coordinates ---
    def world_to_screen(self, pos: Vec3) -> Vec3:
        if self.graphics is None:
            raise RuntimeError("no graphics context set")
        return self.graphics.world_to_screen(pos)

    def screen_to_floor(self, x: int, y: int) -> Vec3:
        if self.graphics is None:
            raise RuntimeError("no graphics context set")
        return self.graphics.screen_to_floor(x, y)

    # --- dispatch ---
    def dispatch(self, event: Event) -> None:
        """Route an event to the matching handler method."""
        kind = event.type
        if kind is EventType.ACTIVE:
            if event.app_active:
                if event.gain:
                    self.on_restore()
                else:
                    self.on_minimize()
        elif kind is EventType.KEY_DOWN:
            self.on_key_down(event.key, event.mod, event.unicode)
        elif kind is EventType.KEY_UP:
            self.on_key_up(event.key, event.mod, event.unicode)
        elif kind is EventType.MOUSE_MOTION:
            self.on_mouse_move(
                event.x,
                self.height - event.y,
                event.relx,
                event.rely,
                MouseButton.LEFT in event.buttons,
                MouseButton.RIGHT in event.buttons,
                MouseButton.MIDDLE in event.buttons,
            )
        elif kind is EventType.MOUSE_BUTTON_DOWN:
            if event.button is not None:
                self.on_button_down(event.button, event.x, self.height - event.y)
        elif kind is EventType.MOUSE_BUTTON_UP:
            if event.button in _RELEASABLE:
                self.on_button_up(event.button, event.x, self.height - event.y)
        elif kind is EventType.RESIZE:
            self.on_resize(event.width, event.height)
        elif kind is EventType.EXPOSE:
            self.on_expose()
        elif kind is EventType.QUIT:
            self.quit_requested = True

    # --- handlers ---
    def on_key_down(self, key: int, mod: int, unicode: int) -> None:
        """A key was pressed; it is recorded as held."""
        self.keys_down.add(key)

    def on_key_up(self, key: int, mod: int, unicode: int) -> None:
        """A key was released; it is no longer held."""
        self.keys_down.discard(key)

    def on_mouse_move(self, x: int, y: int, relx: int, rely: int,
                      left: bool, right: bool, middle: bool) -> None:
        """The mouse moved; its position is recorded."""
        self.mouse_position = (x, y)

    def on_button_down(self, button: MouseButton, x: int, y: int) -> None:
        """A mouse button was pressed or the wheel turned."""
        self.mouse_position = (x, y)
        if button in _RELEASABLE:
            self.buttons_down.add(button)

    def on_button_up(self, button: MouseButton, x: int, y: int) -> None:
        """A mouse button was released."""
        self.mouse_position = (x, y)
        self.buttons_down.discard(button)

    def on_minimize(self) -> None:
        self.pause()

    def on_restore(self) -> None:
        self.resume()

    def on_resize(self, width: int, height: int) -> None:
        """The window was resized; the new size is recorded as requested."""
        self.requested_size = (int(width), int(height))

    def on_expose(self) -> None:
        """The window needs redrawing."""
        self.needs_redraw = True


class FrameClock:
    """Fixed-rate game time and frame deadlines, in milliseconds."""

    def __init__(self, fps: float = 30, start_time: int | None = None) -> None:
        if fps <= 0:
            raise ValueError(f"frames per second must be positive, got {fps}")
        self.fps = fps
        self.period = 1000.0 / fps
        self.start_time = int(time.monotonic() * 1000) if start_time is None else int(start_time)
        self.game_cycles = 0
        self.frame_cycles = 0
        self.game_time = 0

    def advance(self) -> int:
        """Advance the game time by one update period and return it."""
        self.game_cycles += 1
        self.game_time = int(self.game_cycles * self.period)
        return self.game_time

    def reset(self) -> None:
        """Set the game time back to zero."""
        self.game_cycles = 0
        self.game_time = 0

    def next_deadline(self, now: int) -> int:
        """Time up to which the current frame should wait before showing.

        When the clock has fallen behind, the frame count is resynchronised
        with ``now`` and the returned deadline has already passed.
        """
        deadline = int(self.frame_cycles * self.period + self.start_time)
        if deadline < now:
            self.frame_cycles = int((now - self.start_time) / self.period)
        self.frame_cycles += 1
        return deadline