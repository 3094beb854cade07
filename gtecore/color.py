"""RGBA colours with float channels in the range 0..1."""

from __future__ import annotations

from dataclasses import dataclass, replace

_NAMED_RGB8: dict[str, tuple[int, int, int]] = {
    "red": (255, 0, 0),
    "dark_red": (128, 0, 0),
    "green": (0, 255, 0),
    "dark_green": (0, 128, 0),
    "blue": (0, 0, 255),
    "dark_blue": (0, 0, 128),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "white": (255, 255, 255),
    "light_gray": (180, 180, 180),
    "gray": (128, 128, 128),
    "black": (0, 0, 0),
}


@dataclass
class Color:
    """A colour with red, green, blue and alpha channels.

    The default colour is gray.  A negative alpha marks the special
    "no colour" value returned by :meth:`none`.
    """

    r: float = 128 / 255
    g: float = 128 / 255
    b: float = 128 / 255
    a: float = 1.0

    @classmethod
    def from_rgb8(cls, r: int, g: int, b: int) -> Color:
        """Build an opaque colour from 8-bit channel values."""
        for value in (r, g, b):
            if not 0 <= value <= 255:
                raise ValueError(f"channel value {value} is outside 0..255")
        return cls(r / 255, g / 255, b / 255, 1.0)

    @classmethod
    def named(cls, name: str) -> Color:
        """Return one of the predefined colours, e.g. ``"red"`` or ``"light_gray"``."""
        key = name.lower().replace(" ", "_").replace("-", "_")
        if key == "none":
            return cls.none()
        try:
            rgb = _NAMED_RGB8[key]
        except KeyError:
            raise ValueError(f"unknown colour name: {name!r}") from None
        return cls.from_rgb8(*rgb)

    @classmethod
    def none(cls) -> Color:
        """Return the "no colour" marker: black with an alpha of -1."""
        return cls(0.0, 0.0, 0.0, -1.0)

    def is_none(self) -> bool:
        """True for the "no colour" marker."""
        return self.a < 0

    def set_alpha(self, a: float) -> None:
        self.a = float(a)

    def copy(self) -> Color:
        return replace(self)