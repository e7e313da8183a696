import numpy as np
import pytest


class DummyInfoModel:
    """Minimal information-model stand-in: a name and a per-agent informed flag."""

    def __init__(self, name, informed):
        self.name = name
        self.informed = np.asarray(informed, dtype=bool)


@pytest.fixture
def line_record():
    # one agent moving along the x axis
    time = np.array([0.0, 1.0, 2.0])
    positions = np.array([[[0.0, 1.0, 2.0],
                           [0.0, 0.0, 0.0]]])
    return {'time': time, 'positions': positions}


@pytest.fixture
def crowd_record():
    """Three agents over five steps with every optional series filled in."""
    time = np.linspace(0.0, 4.0, 5)
    n, s = 3, time.shape[0]
    positions = np.zeros((n, 2, s))
    velocities = np.zeros((n, 2, s))
    accelerations = np.zeros((n, 2, s))
    directions = np.zeros((n, 2, s))
    pressure = np.zeros((n, s))
    for k in range(n):
        positions[k, 0, :] = time + 2.0 * k
        positions[k, 1, :] = float(k)
        velocities[k, 0, :] = 1.0
        directions[k, 0, :] = 2.0
        directions[k, 1, :] = 2.0
        pressure[k, :] = 10.0 * k + time

    # agents 0-1 in contact throughout, 1-2 from step 2 on
    adjacency = []
    for step in range(s):
        a = np.zeros((n, n))
        a[0, 1] = a[1, 0] = 1
        if step >= 2:
            a[1, 2] = a[2, 1] = 1
        adjacency.append(a)

    information = [[DummyInfoModel('rumour', [step >= 1, False, step >= 3]),
                    DummyInfoModel('alarm', [True, True, True])] for step in range(s)]

    return {'time': time, 'positions': positions, 'velocities': velocities,
            'accelerations': accelerations, 'directions': directions, 'pressure': pressure,
            'adjacency': adjacency, 'information': information}


@pytest.fixture
def make_info_model():
    return DummyInfoModel
