import itertools

import pytest

from mazebot.astar import Astar
from mazebot.dijkstra import Dijkstra
from mazebot.floodfill import Floodfill, FloodfillStack
from mazebot.host import Host, NativeObjectType
from mazebot.mmarc import MMarc
from mazebot.objectdetection import (
    FORWARD_SENSOR_GUID,
    LEFT_SENSOR_GUID,
    RIGHT_SENSOR_GUID,
    ObjectDetection,
)
from mazebot.plugin import Plugin, hello
from mazebot.tawd import Tawd
from mazebot.types import Map, RobotPosition, V2i
from mazebot.wallfollower import WallFollowerRobotController

SENSOR_READING = 50


class FakeHost:
    def __init__(self):
        self.calls = []
        self._handles = itertools.count(100)

    def get_function(self, name):
        def function(*args):
            self.calls.append((name, args))
            if name == "Microsim::CreateSimulatorAlgorithm":
                return next(self._handles)
            if name == "Microsim::Robot_FindComponent":
                return 7
            if name == "Microsim::SimMotorController_GetCurrentState":
                return 0
            if name == "Microsim::Sensor_i32_ReadValue":
                return SENSOR_READING
            return None

        return function

    def named(self, name):
        return [args for called, args in self.calls if called == name]


@pytest.fixture
def fake():
    return FakeHost()


@pytest.fixture
def plugin(fake):
    return Plugin(Host(fake.get_function))


def test_registers_plugin_data():
    fake = FakeHost()
    plugin = Plugin(Host(fake.get_function))
    assert fake.named("Plugin::RegisterData") == [("TestLib", "0.0.1")]
    assert len(plugin.factories) == 8


def test_registers_all_types_in_order(fake, plugin):
    factories = [args[0] for args in fake.named("Plugin::RegisterType")]
    assert [f.name for f in factories] == [
        "MMarc",
        "Simple Robot Controller",
        "Objectdetection",
        "Tawd",
        "Flood Fill",
        "Flood Fill Stack",
        "Astar",
        "Dijkstra",
    ]
    assert [f.idx for f in factories] == list(range(len(factories)))
    assert [f.type for f in factories[:2]] == [NativeObjectType.ROBOT_CONTROLLER] * 2
    assert [f.type for f in factories[2:4]] == [NativeObjectType.OBJECT_DETECTOR] * 2
    assert [f.type for f in factories[4:]] == [NativeObjectType.PATHFINDER] * 4
    assert tuple(factories) == plugin.factories


def test_logs_loading_messages():
    fake = FakeHost()
    plugin = Plugin(Host(fake.get_function))
    messages = [args[0] for args in fake.named("Debug::Log")]
    assert messages[:2] == ["Gathering Simulator Functions", "Registering Native Objects"]
    assert len(messages) == 3
    assert [f.name for f in plugin.factories][:2] == ["MMarc", "Simple Robot Controller"]


@pytest.mark.parametrize(
    "idx, name, expected",
    [
        (0, "MMarc", MMarc),
        (1, "Simple Robot Controller", WallFollowerRobotController),
        (2, "Objectdetection", ObjectDetection),
        (3, "Tawd", Tawd),
        (4, "Flood Fill", Floodfill),
        (5, "Flood Fill Stack", FloodfillStack),
        (6, "Astar", Astar),
        (7, "Dijkstra", Dijkstra),
    ],
)
def test_create_object_builds_registered_type(plugin, idx, name, expected):
    created = plugin.create_object(idx)
    assert plugin.factories[idx].name == name
    assert plugin.factories[idx].idx == idx
    assert type(created) is expected


def test_create_object_gives_fresh_instances(plugin):
    first = plugin.create_object(4)
    second = plugin.create_object(4)
    assert first is not second
    maze = Map.create(V2i(2, 1))
    maze.get_cell(V2i(0, 0)).discovered = True
    expected = [V2i(0, 0), V2i(1, 0)]
    assert plugin.pathfinder_pathfind(first, maze, RobotPosition(), V2i.zero()) == expected
    maze.reset_highlights()
    assert plugin.pathfinder_pathfind(second, maze, RobotPosition(), V2i.zero()) == expected


@pytest.mark.parametrize("idx", [-1, 8, 1024])
def test_create_object_rejects_unknown_index(plugin, idx):
    with pytest.raises(IndexError):
        plugin.create_object(idx)


def test_close_stops_creation(plugin):
    plugin.close()
    with pytest.raises(RuntimeError):
        plugin.create_object(0)


def test_missing_objects_are_logged(fake, plugin):
    results = [
        plugin.robot_controller_setup(None, 1, None),
        plugin.robot_controller_loop(None, 0.1),
        plugin.object_detector_setup(None, 1, None),
        plugin.object_detector_process(None, Map.create(V2i(1, 1)), RobotPosition()),
        plugin.pathfinder_setup(None, 1, None),
    ]
    assert results == [None] * 5
    messages = [args[0] for args in fake.named("Debug::Log")][3:]
    assert messages == [
        "Nullptr in RobotController_Setup",
        "Nullptr in RobotController_Process",
        "Nullptr in setup",
        "Nullptr in ObjectDetector_Process",
        "Nullptr in Pathfinder_setup",
    ]


def test_pathfind_without_pathfinder_returns_none(fake, plugin):
    result = plugin.pathfinder_pathfind(None, Map.create(V2i(1, 1)), RobotPosition(), V2i.zero())
    assert result is None
    assert fake.named("Debug::Log")[-1] == ("Nullptr in Pathfinder_Pathfind",)


def test_pathfind_dispatches_to_pathfinder(plugin):
    pathfinder = plugin.create_object(4)
    plugin.pathfinder_setup(pathfinder, 1, None)
    maze = Map.create(V2i(2, 1))
    maze.get_cell(V2i(0, 0)).discovered = True
    path = plugin.pathfinder_pathfind(pathfinder, maze, RobotPosition(), V2i.zero())
    assert path == [V2i(0, 0), V2i(1, 0)]


def test_object_detector_setup_finds_sensors(fake, plugin):
    detector = plugin.create_object(2)
    plugin.object_detector_setup(detector, 3, None)
    guids = fake.named("Microsim::Robot_FindComponent")
    assert guids == [(3, FORWARD_SENSOR_GUID), (3, LEFT_SENSOR_GUID), (3, RIGHT_SENSOR_GUID)]

    maze = Map.create(V2i(1, 1))
    plugin.object_detector_process(detector, maze, RobotPosition())
    cell = maze.get_cell(V2i(0, 0))
    assert cell.wall_count() == 3
    assert (cell.wall_north, cell.wall_east, cell.wall_south, cell.wall_west) == (
        True,
        True,
        False,
        True,
    )


def test_delete_object_releases_simulator_algorithms(fake, plugin):
    controller = plugin.create_object(0)
    plugin.robot_controller_setup(controller, 5, None)
    created = fake.named("Microsim::CreateSimulatorAlgorithm")
    assert len(created) == 2
    assert plugin.delete_object(controller) is None
    freed = sorted(args[0] for args in fake.named("Microsim::FreeSimulatorAlgorithm"))
    assert freed == [100, 101]


def test_delete_object_without_resources_does_nothing(fake, plugin):
    pathfinder = plugin.create_object(6)
    before = len(fake.calls)
    assert plugin.delete_object(pathfinder) is None
    assert len(fake.calls) == before
    path = plugin.pathfinder_pathfind(pathfinder, Map.create(V2i(1, 1)), RobotPosition(), V2i.zero())
    assert path == [V2i(0, 0)]


def test_hello_prints_greeting(capsys):
    hello()
    assert capsys.readouterr().out == "Hello, World!\n"