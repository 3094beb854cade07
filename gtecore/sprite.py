"""2D sprites: position, motion, rotation, animation frames and removal."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .color import Color
from .graphics import deg2rad, rad2deg


@dataclass
class Sprite:
    """A sprite centred on (x, y) moving with ``speed`` along ``direction``.

    Angles are in degrees, zero pointing right; speeds are per second.
    """

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    box_scale: float = 1.0
    color: Color = field(default_factory=Color)
    texture_id: int = 0
    filled: bool = True
    looping: bool = False
    num_frames: int = 1
    start_frame: int = 0
    stop_frame: int = 0
    current_frame: float = 0.0
    period: float = 0.0
    status: int = 0
    health: int = 100
    speed: float = 0.0
    direction: float = 0.0
    rotation: float = 0.0
    omega: float = 0.0
    sprite_time: int = 0
    marked_for_removal: bool = False
    dying: int = 0

    # --- position ---
    def move(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy

    def set_position(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    # --- motion ---
    def set_direction_from(self, dx: float, dy: float) -> None:
        """Point the direction of motion along the vector (dx, dy)."""
        self.direction = rad2deg(math.atan2(dy, dx))

    def set_motion(self, h_speed: float, v_speed: float) -> None:
        """Set speed and direction from horizontal and vertical speeds."""
        self.speed = math.sqrt(h_speed * h_speed + v_speed * v_speed)
        self.set_direction_from(h_speed, v_speed)

    @property
    def x_velocity(self) -> float:
        return self.speed * math.cos(deg2rad(self.direction))

    @property
    def y_velocity(self) -> float:
        return self.speed * math.sin(deg2rad(self.direction))

    def set_x_velocity(self, vx: float) -> None:
        self.set_motion(vx, self.y_velocity)

    def set_y_velocity(self, vy: float) -> None:
        self.set_motion(self.x_velocity, vy)

    # --- rotation ---
    def rotate(self, rot: float) -> None:
        """Turn by ``rot`` degrees, wrapping once below 360."""
        self.rotation += rot
        if self.rotation >= 360:
            self.rotation -= 360

    def set_rotation_from(self, dx: float, dy: float) -> None:
        self.rotation = rad2deg(math.atan2(dy, dx))

    # --- animation ---
    @property
    def frame(self) -> int:
        return int(self.current_frame)

    def set_frame(self, frame: int) -> None:
        """Show a single frame and stop any animation."""
        self.current_frame = float(frame)
        self.period = 0.0
        self.start_frame = frame
        self.stop_frame = frame

    def next_frame(self) -> None:
        """Step one frame, going back to frame 1 after the last."""
        self.current_frame += 1
        if self.current_frame > self.num_frames:
            self.set_frame(1)

    def is_animation_finished(self) -> bool:
        return self.stop_frame == self.current_frame

    # --- removal ---
    def delete(self) -> None:
        self.dying = 0
        self.marked_for_removal = True

    def undelete(self) -> None:
        self.dying = 0
        self.marked_for_removal = False

    def die(self, delay: int = 0) -> None:
        """Mark for removal once ``delay`` has run out."""
        self.dying = delay
        self.marked_for_removal = True

    def is_deleted(self) -> bool:
        if self.dying > 0:
            return False
        return self.marked_for_removal

    # --- appearance ---
    def set_color(self, r: int, g: int, b: int, a: int = 100) -> None:
        """Set the colour from 0..255 channels and a 0..100 opacity."""
        self.color = Color(r / 255.0, g / 255.0, b / 255.0, a / 100.0)

    def set_alpha(self, alpha: int) -> None:
        """Set the opacity as a percentage."""
        self.color.set_alpha(alpha / 100.0)


class SpriteList(list):
    """A list of sprites that can drop those marked as deleted."""

    def remove_deleted(self) -> list[Sprite]:
        """Remove deleted sprites in place, keeping order; return the removed ones."""
        removed = [s for s in self if s.is_deleted()]
        self[:] = [s for s in self if not s.is_deleted()]
        return removed