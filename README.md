# gtecore

The renderer-independent core of a small 2D/3D games engine, in pure Python
with no dependencies. It holds the state, geometry and file-format work a
renderer needs and hands back plain numbers: matrices, vertices, quads,
pixels. What is drawn, and how, is up to your renderer.

## Modules

- `gtecore.color`: `Color`, an RGBA colour with float channels.
  - `Color.from_rgb8(r, g, b)` builds an opaque colour from 0..255 values.
  - `Color.named("red")`, `Color.named("light_gray")` and so on give the predefined colours.
  - `Color.none()` is the "no colour" marker (alpha -1), tested with `is_none()`.
- `gtecore.graphics`: `Vec3`, `Camera` and `Graphics`, plus matrix helpers.
  - Matrices are flat tuples of 16 floats in column-major order.
  - `invert_matrix` raises `ValueError` for a singular matrix.
  - `perspective_matrix`, `ortho_matrix` and `look_at_matrix` build projection and view matrices.
  - `rad2deg` and `deg2rad` convert angles.
  - `Graphics` keeps the viewport size, view angle, eye and centre points and clear colour.
  - `projection_2d()` and `projection_3d()` build and store the projection.
  - `update_view_matrix()` records the model-view matrix.
  - `world_to_screen(pos)` projects a world point to screen pixels.
  - `screen_to_floor(x, y)` intersects the ray through a pixel with the floor plane y = 0.
  - `viewing_direction(x, y)` gives the direction of that ray in eye coordinates.
  - `format_matrix(m)` formats a matrix as text.
- `gtecore.light`: `Light`, the ambient, diffuse and direction settings of one of three lights.
  - `select(light)` chooses the light and raises `ValueError` outside 0..2.
  - `enable()`, `disable()` and `set_defaults()` track which lights are active and the parameters applied to each.
- `gtecore.texture`: `Texture`, a texture's screen position, size, id and frame counter.
  - `next_frame()` wraps back to frame 1.
  - `set_texture_id()` marks a texture as sharing another's image.
- `gtecore.floor`: `Floor`, a flat floor centred on a position.
  - `tile_quads()` gives its textured 100-unit squares as (texcoord, vertex) pairs.
  - `grid_lines()` gives its grid lines.
  - `is_power_of_two` tells whether a texture size allows mipmaps.
- `gtecore.sprite`: `Sprite` and `SpriteList`.
  - A sprite has position, speed and direction (or x/y velocity), rotation, animation frames, colour and a deletion state (`delete`, `die`, `undelete`, `is_deleted`).
  - `SpriteList.remove_deleted()` drops deleted sprites in place and returns them.
- `gtecore.font`: bitmap fonts from a 16×16 glyph sheet.
  - `parse_bmp` and `read_bmp` decode uncompressed 24- and 32-bit BMP files into a `Bitmap` of RGBA pixels, raising `BitmapError` otherwise. In 24-bit images black becomes transparent.
  - `glyph_quad` gives the texture and vertex corners of one character.
  - `Font.load(path)` reads the glyph sheet.
  - `Font.layout_text` and `Font.layout_number` return a list of `GlyphQuad`. Numbers beyond ±1,000,000 give an empty list; `format_number` raises `ValueError` for them.
- `gtecore.game`: `Game`, `GameMode`, `Event`, `EventType`, `MouseButton` and `FrameClock`.
  - `Game.dispatch(event)` routes an event to the overridable `on_*` handlers and flips mouse y so that the origin is bottom left.
  - The base handlers track held keys and buttons, the mouse position, resize requests, redraw requests and quit requests.
  - Minimising pauses a running game and restoring resumes it.
  - `FrameClock` advances game time at a fixed frame rate (`advance`, `reset`) and computes frame deadlines (`next_deadline`).
- `gtecore.md3`: MD3 model files.
  - `parse_md3` and `load_md3` return an `Md3Model` with its first frame decoded; `Md3Error` is raised for malformed data.
  - `Md3Model.frame_geometry` blends vertices and normals between two frames.
  - `Md3Model.bounds` blends the bounding box.
  - `Md3Model.animation_step` gives the frame pair and blend factor for a playback position.
  - `reencode_normal` and `decode_normal` handle the normal encodings.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

```python
from gtecore.sprite import Sprite

ship = Sprite()
ship.set_position(400, 300)
ship.set_motion(3.0, 4.0)       # speed 5, direction from the two components
ship.set_color(255, 0, 0, 100)  # opaque red
```

```python
from gtecore.graphics import Graphics

g = Graphics()
g.set_viewport(800, 600)
g.projection_3d()
g.update_view_matrix()
point = g.screen_to_floor(400, 300)   # where the centre of the screen meets the floor
```

```python
from gtecore.font import Font
from gtecore.game import FrameClock

quads = Font(size=16).layout_text(10, 20, "Hi")
assert quads[1].x == 18               # each character advances by half the size

clock = FrameClock(fps=30, start_time=0)
assert clock.advance() == 33          # milliseconds of game time after one update
```

## What it does not do

- It opens no window, reads no input devices and issues no draw calls. Events
  have to be built as `Event` objects and passed to `Game.dispatch` by your own
  loop, and `Light`, `Floor`, `Texture` and `Sprite` only hold the values a
  renderer would use.
- It plays no sound.
- It loads no image formats other than BMP, and no TrueType fonts. `Floor`
  and `Texture` only record the size and id of a texture that you load
  elsewhere.
- It has no command-line program.