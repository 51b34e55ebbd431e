# orbitsim

The simulation core of a 2D space game. It holds the game state and the logic
that advances it. It has no window, no rendering and no sound.

## Modules

- `orbitsim.vector`: the immutable `Vec2` type with `+`, `-`, `*`, `/` and
  negation, and 2D geometry helpers. These are `dot`, `cross`, `norm`, `norm2`,
  `angle`, `angle_between`, `rotate`, `perpendicular`,
  `perpendicular_towards`, `intersection`, `closest_point`, `clamp_vector`,
  `deg_to_rad` and `rad_to_deg`.
- `orbitsim.scene`: `Scene`, a small entity-component store. Entity ids are
  integers, and `create_entity` reuses the smallest freed id first. A component
  type must be passed to `register_component` before it is used.
  `view(TypeA, TypeB, ...)` returns `(id, a, b, ...)` tuples in id order.
  `find_unique` raises `LookupError` unless exactly one entity has the type.
- `orbitsim.events`: `Event` (an entity, a start/stop flag and data), where the
  data is one of `EngineEvent`, `RcsEvent` or `CollisionEvent`. Also the input
  enums `GameInput`, `MapInput` and `ControllerButton`, each with
  `to_json` / `from_json`. A name that is not recognised reads back as the
  first member.
- `orbitsim.fields`: `GridField`, values on a rectangular grid, and
  `PolarField`, values on a polar grid with a single center value. Both have
  `get`/`set` and JSON round trips.
- `orbitsim.components`: `Body`, `CircleBody`, `Controls`, `Player`,
  `LightSource`, `Temperature`, `CircleTemperature`, `PolygonTemperature`, and
  the enums `MapElementType`, `SoundEffectType` and `AnimationType`. Mass,
  center of mass, moment of inertia and diffusivity are set by the caller. They
  are not written to JSON.
- `orbitsim.collision`: `CollisionSystem` and the algorithms it is built on:
  `collision_gjk`, `distance_gjk` and `epa`, together with `MinkowskiPolygon`
  and `ContactInfo`.
  - `CollisionSystem.update()` resolves collisions between every pair of
    `Body` + `CircleBody` entities.
  - Convex shapes are handled through support functions, a `Vec2 -> Vec2`
    callable, passed to `collide_convexes` or `collide_circle_and_convex`.
  - Each resolved collision records a `CollisionEvent`, and `queue_events()`
    hands these over and clears them.
- `orbitsim.physics`: `PhysicsSystem`, a fixed-step RK4 integrator for mutual
  gravitation between all bodies. It has these parts:
  - `update(dt)` accumulates time scaled by `time_scale` and runs whole steps.
  - A negative `time_scale` or a negative `update_steps(n)` runs the
    simulation backwards.
  - `elapsed_time()` is `time_step * step_counter`.
- `orbitsim.gameplay`: `GameplaySystem.update(dt)` turns the engine and RCS
  controls of each `Player` into linear and angular acceleration of its body.
- `orbitsim.autopilot`: `AutoPilotSystem.queue_events()` starts and stops
  rotational RCS to damp the player's spin past
  `Player.angular_velocity_threshold`. It stands aside while the player steers
  by hand.
- `orbitsim.settings`: `Settings`, `SoundSettings` and `VideoMode`, with
  default keyboard and controller mappings. It has these parts:
  - `Settings.load(path)` returns the defaults when the file does not exist.
    Loaded mappings are merged into the defaults.
  - `Settings.save(path)` writes indented JSON.
  - Keyboard keys are stored by name, and unknown names become `"Unknown"`.
  - `color_to_json` / `color_from_json` convert `(r, g, b, a)` to and from
    `"#rrggbbaa"`.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from orbitsim.components import Body
from orbitsim.physics import PhysicsSystem
from orbitsim.scene import Scene
from orbitsim.vector import Vec2

scene = Scene()
scene.register_component(Body)

planet = scene.create_entity()
scene.assign_component(planet, Body(position=Vec2(0, 0), mass=1e12))
moon = scene.create_entity()
scene.assign_component(moon, Body(position=Vec2(500, 0), velocity=Vec2(0, 20), mass=1e6))

physics = PhysicsSystem(scene)
physics.update_steps(5)
print(physics.step_counter, scene.get_component(moon, Body).position)
```

## What it does not do

- It has no command, no window, no rendering, no sound and no game loop. The
  caller creates the systems and calls them in order.
- Temperature fields can be stored and serialized, but nothing in the package
  makes heat flow through them.
- There is no support for polygon bodies. `CollisionSystem.update()` handles
  circles only, and for other convex shapes the caller must supply support
  functions.
- Scenes are not saved or loaded. Only the individual components have JSON
  forms.