# mazebot

Controllers and algorithms for a simulated maze-solving robot. A simulator
host hands the package a function lookup; the package registers its robot
controllers, object detectors and pathfinders and runs them against the
host's sensors and motors.

## What is in it

- `mazebot.types`: grid and vector maths (`V2i`, `V2f`, `V3i`, `V3f`,
  `Guid`, `Color`), `RobotPosition` (position in millimetres, heading in
  degrees), and the maze `Map` made of bit-packed `MapCell`s. A cell has the
  flags `discovered`, `wall_north`, `wall_east`, `wall_south`, `wall_west`
  and `wall_highlight`, plus `is_wall_in_dir`, `set_wall_in_dir` and
  `wall_count`. `Map.get_cell` raises `IndexError` outside the map;
  `Map.set_cell` ignores such positions.
- `mazebot.host`: `Host`, a typed wrapper over the simulator's callbacks
  (logging, debug drawing, map display, plugin registration, sensors,
  motors, simulator-side algorithms). Every callback is looked up when the
  `Host` is built; one that is missing or not callable raises `HostError`.
  `NativeObjectType` and `NativeObjectFactory` describe registered objects.
- `mazebot.microsim`: handles to robot parts: `Robot`,
  `FindableComponent`, `SensorI32`, `SensorF32`, `SensorV3i`, `Motor`, and
  `ComponentReference`.
- `mazebot.algorithms`: the interfaces `RobotController`,
  `MotorController`, `PositionTracker`, `ObjectDetector` and `Pathfinder`,
  the `MoveState` enum, and `SimulatorMotorController` and
  `SimulatorPositionTracker`, which delegate to algorithms running inside
  the simulator. Both can be used as context managers; `close` frees the
  simulator-side algorithm once.
- Pathfinders: `Astar` (`mazebot.astar`, with `manhattan_distance`),
  `Dijkstra` (`mazebot.dijkstra`), and `Floodfill` and `FloodfillStack`
  (`mazebot.floodfill`). The two flood fills ignore the target and search
  for the nearest undiscovered cell, breadth-first and depth-first.
- Object detectors: `ObjectDetection` (`mazebot.objectdetection`), which
  sets walls ahead, left and right of the robot's snapped heading, and
  `Tawd` (`mazebot.tawd`), which projects each sensor's hit point onto the
  cell edges and sets or clears walls there.
- Robot controllers: `MMarc` (`mazebot.mmarc`), a state machine that
  explores a 6x6 maze, returns home, waits, speed-runs to cell (5, 5),
  and starts over; and `WallFollowerRobotController`
  (`mazebot.wallfollower`), which moves cell by cell and turns to a random
  free side when blocked ahead. It accepts a `random.Random` for
  repeatable runs.
- `mazebot.plugin`: `Plugin`, which registers every object type with the
  host and dispatches setup, loop, process and pathfind calls, and
  `hello()`, which prints and returns a greeting.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Finding a path

```python
from mazebot.types import Map, V2i, RobotPosition
from mazebot.dijkstra import Dijkstra

maze = Map.create(V2i(6, 6))
for cell in maze.cells:
    cell.discovered = True

path = Dijkstra().pathfind(maze, RobotPosition(V2i(0, 0), 0), V2i(5, 5))
```

Pathfinders start from the grid cell nearest the robot's position (in
millimetres, 180 mm per cell) and return the path as a list of grid cells,
from the start cell to the goal. When there is no path they return `None`.
While searching they set `wall_highlight` on the cells they visit; call
`Map.reset_highlights` to clear it.

## Running inside a simulator

Build a `Host` from a lookup function that takes a callback name such as
`"Debug::Log"` and returns a callable, then hand the host to `Plugin`. The
plugin registers its name and version and every object type, in a fixed
order, which `Plugin.factories` lists. The simulator then creates objects
by index with `Plugin.create_object` and drives them through the plugin's
dispatch methods; passing `None` for the object logs a message instead.
`Plugin.delete_object` closes an object that has a `close` method.
`Plugin.close` forgets the registered constructors, after which
`create_object` raises `RuntimeError`.

## What it does not do

The package contains no simulator. Motor control, position tracking,
sensor readings and debug drawing all come from the host's callbacks, so
the robot controllers and detectors only run against a host that provides
them. There is no command-line program.