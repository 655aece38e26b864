"""Entry points the simulator host calls: registration, object creation and dispatch."""

from __future__ import annotations

from typing import Any, Callable

from .algorithms import ObjectDetector, Pathfinder, RobotController
from .astar import Astar
from .dijkstra import Dijkstra
from .floodfill import Floodfill, FloodfillStack
from .host import Host, NativeObjectFactory, NativeObjectType
from .microsim import Robot
from .mmarc import MMarc
from .objectdetection import ObjectDetection
from .tawd import Tawd
from .types import Map, RobotPosition, V2i
from .wallfollower import WallFollowerRobotController

PLUGIN_NAME = "TestLib"
PLUGIN_VERSION = "0.0.1"
GREETING = "Hello, World!"

_REGISTERED: tuple[tuple[NativeObjectType, Callable[[], Any], str], ...] = (
    (NativeObjectType.ROBOT_CONTROLLER, MMarc, "MMarc"),
    (NativeObjectType.ROBOT_CONTROLLER, WallFollowerRobotController, "Simple Robot Controller"),
    (NativeObjectType.OBJECT_DETECTOR, ObjectDetection, "Objectdetection"),
    (NativeObjectType.OBJECT_DETECTOR, Tawd, "Tawd"),
    (NativeObjectType.PATHFINDER, Floodfill, "Flood Fill"),
    (NativeObjectType.PATHFINDER, FloodfillStack, "Flood Fill Stack"),
    (NativeObjectType.PATHFINDER, Astar, "Astar"),
    (NativeObjectType.PATHFINDER, Dijkstra, "Dijkstra"),
)


def hello() -> str:
    """Print the greeting and return it."""
    print(GREETING)
    return GREETING


class Plugin:
    """Registers the bundled algorithms with a host and forwards host calls to them."""

    def __init__(self, host: Host) -> None:
        self._host = host
        self._constructors: list[Callable[[], Any]] = []
        self._factories: list[NativeObjectFactory] = []
        self._closed = False

        host.register_data(PLUGIN_NAME, PLUGIN_VERSION)
        host.log("Gathering Simulator Functions")
        host.log("Registering Native Objects")
        for object_type, constructor, name in _REGISTERED:
            self._register(object_type, constructor, name)
        host.log("Successfully loaded test plugin")

    def _register(
        self, object_type: NativeObjectType, constructor: Callable[[], Any], name: str
    ) -> None:
        factory = NativeObjectFactory(
            object_type, len(self._constructors), getattr(constructor, "__qualname__", name), name
        )
        self._constructors.append(constructor)
        self._factories.append(factory)
        self._host.register_type(factory)

    @property
    def factories(self) -> tuple[NativeObjectFactory, ...]:
        """Every object type registered with the host, in registration order."""
        return tuple(self._factories)

    def create_object(self, idx: int) -> Any:
        """Build a new instance of the registered type with index ``idx``."""
        if self._closed:
            raise RuntimeError("plugin has been closed")
        if not 0 <= idx < len(self._constructors):
            raise IndexError(f"no native object registered at index {idx}")
        return self._constructors[idx]()

    def delete_object(self, obj: Any) -> None:
        """Release an object made by :meth:`create_object`."""
        close = getattr(obj, "close", None)
        if callable(close):
            close()

    def _robot(self, handle: int) -> Robot:
        return Robot(self._host, handle)

    def robot_controller_setup(
        self, controller: RobotController | None, robot_handle: int, data: Any
    ) -> None:
        if controller is None:
            self._host.log("Nullptr in RobotController_Setup")
            return
        controller.setup(self._robot(robot_handle), data)

    def robot_controller_loop(self, controller: RobotController | None, dtf: float) -> None:
        if controller is None:
            self._host.log("Nullptr in RobotController_Process")
            return
        controller.loop(dtf)

    def object_detector_setup(
        self, detector: ObjectDetector | None, robot_handle: int, data: Any
    ) -> None:
        if detector is None:
            self._host.log("Nullptr in setup")
            return
        detector.setup(self._robot(robot_handle), data)

    def object_detector_process(
        self, detector: ObjectDetector | None, map: Map, position: RobotPosition
    ) -> None:
        if detector is None:
            self._host.log("Nullptr in ObjectDetector_Process")
            return
        detector.process(map, position)

    def pathfinder_setup(self, pathfinder: Pathfinder | None, robot_handle: int, data: Any) -> None:
        if pathfinder is None:
            self._host.log("Nullptr in Pathfinder_setup")
            return
        pathfinder.setup(self._robot(robot_handle), data)

    def pathfinder_pathfind(
        self, pathfinder: Pathfinder | None, map: Map, position: RobotPosition, target: V2i
    ) -> list[V2i] | None:
        """Return the planned path, or None when there is none or no pathfinder was given."""
        if pathfinder is None:
            self._host.log("Nullptr in Pathfinder_Pathfind")
            return None
        return pathfinder.pathfind(map, position, target)

    def close(self) -> None:
        """Forget every registered constructor; later creation requests fail."""
        self._closed = True
        self._constructors.clear()