import pytest

from mazebot.host import Host
from mazebot.microsim import Robot
from mazebot.mmarc import MMarc, RobotState
from mazebot.objectdetection import FORWARD_SENSOR_GUID, LEFT_SENSOR_GUID, RIGHT_SENSOR_GUID
from mazebot.types import CELL_SIZE_F, V2i


class FakeHost:
    def __init__(self):
        self.calls = []
        self.handles = {FORWARD_SENSOR_GUID: 1, LEFT_SENSOR_GUID: 2, RIGHT_SENSOR_GUID: 3}

    def get_function(self, name):
        def call(*args):
            self.calls.append((name, args))
            if name == "Microsim::Robot_FindComponent":
                return self.handles[args[1]]
            if name == "Microsim::Sensor_i32_ReadValue":
                return 1000
            if name == "Microsim::CreateSimulatorAlgorithm":
                return 7
            return 0
        return call

    def args_of(self, name):
        return [args for called, args in self.calls if called == name]


def make():
    fake = FakeHost()
    controller = MMarc()
    controller.setup(Robot(Host(fake.get_function), 1), None)
    return fake, controller


def test_setup_configures_motor():
    fake, _ = make()
    assert fake.args_of("Microsim::SimMotorController_SetRpm") == [(7, 40)]
    assert len(fake.args_of("Microsim::SimMotorController_SetGyroNull")) == 1


def test_first_loop_resets_memory():
    _, controller = make()
    controller.loop(0.1)
    assert controller.state is RobotState.EXPLORE
    start = controller.map.get_cell(V2i.zero())
    assert start.discovered and start.wall_south and start.wall_west
    assert not start.wall_north


def test_explore_moves_to_nearest_unknown_cell():
    fake, controller = make()
    controller.loop(0.1)
    controller.loop(0.1)
    assert fake.args_of("Microsim::SimMotorController_MoveToGridPos") == [
        (7, V2i(0, 1), CELL_SIZE_F)
    ]
    assert controller.state is RobotState.EXPLORE


def test_close_frees_simulator_algorithms():
    fake, controller = make()
    controller.close()
    controller.close()
    assert fake.args_of("Microsim::FreeSimulatorAlgorithm") == [(7,), (7,)]


def test_loop_before_setup_raises():
    with pytest.raises(RuntimeError):
        MMarc().loop(0.1)