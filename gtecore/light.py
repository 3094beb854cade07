"""Directional light sources with ambient and diffuse terms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

Vec4 = tuple[float, float, float, float]


@dataclass
class Light:
    """Settings for one of up to three lights and the lighting state."""

    MAX_LIGHTS: ClassVar[int] = 3

    ambient: Vec4 = (0.7, 0.7, 0.7, 1.0)
    diffuse: Vec4 = (0.8, 0.8, 0.8, 1.0)
    direction: Vec4 = (1.5, 2.0, 1.0, 0.0)
    light: int = 0
    lighting_enabled: bool = False
    active: set[int] = field(default_factory=set)
    applied: dict[int, dict[str, Vec4]] = field(default_factory=dict)

    def set_ambient(self, r: float, g: float, b: float) -> None:
        self.ambient = (float(r), float(g), float(b), 1.0)

    def set_diffuse(self, r: float, g: float, b: float) -> None:
        self.diffuse = (float(r), float(g), float(b), 1.0)

    def set_direction(self, x: float, y: float, z: float) -> None:
        self.direction = (float(x), float(y), float(z), 0.0)

    def set_defaults(self) -> None:
        """Restore the standard light settings and apply them."""
        self.ambient = (0.65, 0.65, 0.65, 1.0)
        self.diffuse = (1.0, 1.0, 1.0, 1.0)
        self.direction = (2.0, 5.0, 1.0, 0.0)
        self._apply()

    def select(self, light: int = 0) -> None:
        """Choose which light (0, 1 or 2) later calls affect."""
        if not 0 <= light < self.MAX_LIGHTS:
            raise ValueError(f"three lights max, got light {light}")
        self.light = light

    def enable(self) -> None:
        """Switch lighting on and apply the selected light."""
        self.lighting_enabled = True
        self._apply()

    def disable(self) -> None:
        """Switch off the selected light."""
        self.active.discard(self.light)

    def parameters(self) -> dict[str, Vec4]:
        """The ambient, diffuse and position values of the current settings."""
        return {"ambient": self.ambient, "diffuse": self.diffuse, "position": self.direction}

    def _apply(self) -> None:
        self.active.add(self.light)
        self.applied[self.light] = self.parameters()