# termvelocity

A 3D arcade game that runs inside a terminal. You pilot a ship through an
asteroid field drawn by a small software rasterizer as 24-bit ANSI colour
half-block characters. Shoot the crystals for points and avoid the asteroids:
one hit ends the run.

## Requirements

- Python 3.10 or later, no third-party packages
- A POSIX terminal with true-colour (24-bit) ANSI support, at least 256 columns
  by 72 rows (the frame is 256 x 144 pixels, two pixel rows per text line)
- The game's assets in the working directory: `models/` holding the `.obj`
  meshes (`cockpit`, `comp`, `cylinderW`, `arrow`, `sphere8`, `rock_1` to
  `rock_8`, `sharp-crystal-1` to `sharp-crystal-3`) and `images/` holding the
  `.ppm` title images (`terminal`, `velocity`)

## Installing

```
pip install .
```

## Playing

Run the game from the directory that contains `models/` and `images/`:

```
termvelocity
```

or, equivalently, `python -m termvelocity.app`. The only option is
`--seed N`, which fixes the random seed so a run can be repeated.

Controls:

| Key     | Action             |
|---------|--------------------|
| `w`/`s` | pitch up / down    |
| `a`/`d` | turn left / right  |
| space   | thrust forward     |
| `q`     | fire both barrels  |
| Ctrl-C  | quit               |

Each crystal a bullet hits is worth 10 points. When an asteroid reaches the
ship, the terminal is restored and the game prints

```
Game over! You died due to an asteroid collision.
Final score: <score>
```

If a model or image cannot be read or parsed, the command prints
`termvelocity: cannot load game assets: ...` to standard error and exits
with status 1.

## Using the engine

The engine modules can be used on their own:

- `termvelocity.geometry`: `Vector2`, `Vector3`, `Vector4`, `Matrix44`
  (multiply with `@`, `determinant()`, `inverse()`, `identity()`) and
  `Transform` (`to_world_matrix()`, `front()`).
- `termvelocity.mesh`: `Mesh.load_obj_file(name, render_mode, lighting_mode,
  directory="models")` and `Mesh.from_obj_text(text)`; meshes are centred and
  scaled into a unit cube. `RenderMode` and `LightingMode` choose per-vertex or
  per-triangle colours and regular, crystal or glowing shading.
- `termvelocity.image`: `Image.load_ppm_file(name, directory="images")` and
  `Image.from_ppm_bytes(data)` for P3 and P6 files; bad data raises `PpmError`.
- `termvelocity.screendata`: `ScreenData`, the colour, depth and overlay
  buffers, with `set_pixel`, `draw_line` and `draw_image`.
- `termvelocity.camera`: `Frustum`, `Camera.draw` (filled, shaded, depth
  tested) and `Camera.draw_wireframe`, plus the colour helpers `rgb`,
  `color_lerp`, `color_lerp3` and `deg_to_rad`.
- `termvelocity.tui`: `ConsoleScreen` (`render()` returns the frame as text,
  `draw()` writes it), `foreground_color`, `background_color` and the terminal
  session functions.
- `termvelocity.input`: `Input`, which turns typed characters into held keys
  (`is_down`, `is_first_down`).
- `termvelocity.engine`: `GameEngine`, `GameObject`, `Scene`, `Script` and
  `SphereCollider`.

Behaviour is attached to a `GameObject` by giving it `Script` subclasses.
`GameEngine.add_object` calls each script's `start` at once and puts the
object into the scene at the end of the frame; `GameEngine.frame(delta_time)`
runs one frame (input, `update` on every object, drawing, removal of objects
whose `delete_self` is set), and `GameEngine.run(end_callback)` repeats frames
at about 30 per second until `end` is set. `GameEngine(seed=..., input_state=...)`
takes a fixed seed for `gen` and an `Input` of your own.

## What it does not do

- The models and title images are not part of the package; the game cannot
  start without them.
- Sound is off: `termvelocity.tui.play_audio` does nothing unless
  `AUDIO_ENABLED` is set to true, and then it needs `aplay` and `.wav` files
  under `audio/`.
- There is no high-score storage and no pause or restart; a run ends with
  the first asteroid hit.
- Debug logging to `debug.log` is off unless `termvelocity.debug.DEBUG_MODE`
  is set to true.

## Running the tests

```
pip install .[test]
pytest
```