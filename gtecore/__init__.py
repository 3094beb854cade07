"""Colours, camera maths, lights, textures, floors, sprites, bitmap fonts, game events and timing, and MD3 models for a small game engine."""

__version__ = "0.1.0"
__all__ = ["color", "graphics", "light", "texture", "floor", "sprite", "font", "game", "md3"]