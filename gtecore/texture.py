"""Texture placement and frame bookkeeping for animated sprite sheets."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Texture:
    """A texture's position and size on screen and its animation frames.

    Frames are numbered from 1.  A texture whose id was handed over from
    another texture is marked as cloned: it shares that texture's image
    and does not own it.
    """

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    texture_id: int = 0
    frame: int = 1
    frames: int = 1
    is_cloned: bool = False

    def set_size(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)

    def set_position(self, x: int, y: int) -> None:
        self.x = int(x)
        self.y = int(y)

    def set_frame(self, frame: int) -> None:
        self.frame = int(frame)

    def next_frame(self) -> None:
        """Step to the next frame, wrapping round to frame 1 after the last."""
        self.frame += 1
        if self.frame > self.frames:
            self.frame = 1

    def set_texture_id(self, texture_id: int) -> None:
        """Share an existing texture; the texture is then marked as cloned."""
        self.texture_id = int(texture_id)
        self.is_cloned = True