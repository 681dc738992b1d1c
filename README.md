# lostsignal

A small arcade game about colour. The mouse picks a hue, and your box takes on that hue. Anything of the *same* colour is safe to touch. Anything of a different colour costs you signal. The game ends when too much signal is lost.

## Playing

Install the package and start the game:

```
pip install .
lostsignal
```

To get a repeatable run, give a seed for the random source:

```
lostsignal --seed 42
```

Controls:

- **W / A / S / D** move the player up, left, down and right.
- **Mouse left/right** chooses the player's colour across the hue wheel. The
  hue is stepped into seven bands.
- **E** slowly drains your signal while held.

The game runs at 60 frames per second. It stops when the signal is lost or
when the window is closed.

## Goal

The goal square sits near the top of the field. Match its colour and touch
it to pick it up. While you carry it, the square turns white. Carry it off
the bottom of the field to score, and `+1` is printed to the console.

Each delivery restores some signal, but it also speeds up the lasers and
jumpropes by 5%. Every other delivery adds another lane of lasers, up to ten
lanes. From a score of 4, clusterbombs are lobbed towards a spot near you. From
a score of 8, two are thrown at a time. Each landing spot is marked with an
outlined square before the bomb bursts into fragments.

Hazards:

- **Lasers** stream in from the right in several lanes and leave fading
  ghost trails.
- **Jumpropes** are wide coloured bands that sweep down the screen and throw
  off particles at both ends.
- **Clusterbomb fragments** scatter in a ring from where a bomb lands.

Touching a hazard of your own colour drains a little signal. A jumprope of
your own colour also widens the signal radius. Touching a hazard of another
colour drains much more signal and removes the hazard. A laser or fragment
hit also flashes your box red.

## What the game does not show

The window draws the coloured shapes on a black background and nothing else.
There is no on-screen score, no display of the signal level, and no effect
for the signal radius. Each `Frame` carries `signal_lost`, `radius`, `score`
and `goal_proximity`, but the `Renderer` does not draw them. There is no
pause, restart or high-score storage.

## Using the pieces

The simulation runs apart from the display, so you can drive it in code:

```python
import random
from lostsignal.game import Action, Game, GameConfig

game = Game(GameConfig(), random.Random(1))
while not game.is_over():
    frame = game.step({Action.RIGHT}, hue_t=0.3)
```

`Game.step` returns a `Frame` that holds the vertices of every layer.
`lostsignal.app.Renderer` draws a `Frame` onto any pygame surface.
`GameConfig` holds the tunable values, such as view size, speeds, spawn
counts and the signal-loss threshold.

`lostsignal.maths` provides small vector, matrix and quaternion helpers:
`Float2`, `Float3`, `Float4`, `Float2x2`, `rotation_matrix`, `apply_rotation`,
`cross_product`, `calculate_quaternion`, `update_quat_angle` and `quat_mult`.

`lostsignal.entities` provides:

- `Particle` and `Clusterbomb`
- `build_rect` and `rect_intersect`
- the stepped-hue colour scheme: `hsv_to_rgb`, `stepped_hue` and `hue_color`

## Tests

```
pip install .[test]
pytest
```