import pytest

from pimsim.simobject import SimulatorObject


class Counter(SimulatorObject):
    def __init__(self):
        super().__init__()
        self.updates = 0

    def update(self):
        self.updates += 1


def test_first_step_moves_from_cycle_zero():
    obj = Counter()
    SimulatorObject.step(obj)
    assert obj.current_clock_cycle == 1


def test_step_advances_clock():
    obj = Counter()
    for _ in range(3):
        SimulatorObject.step(obj)
    assert obj.current_clock_cycle == 3


def test_update_and_clock_stay_in_step():
    obj = Counter()
    for _ in range(5):
        obj.update()
        SimulatorObject.step(obj)
    assert obj.updates == obj.current_clock_cycle == 5


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        SimulatorObject()