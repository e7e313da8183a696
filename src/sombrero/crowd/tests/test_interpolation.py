import numpy as np
import pytest

from sombrero.crowd.errors import InvalidInput
from sombrero.crowd.interpolation import SampledSeries, validate_method, validate_query_time


def test_validate_query_time_accepts_reals():
    assert validate_query_time(2) == 2.0
    assert validate_query_time(np.float32(0.5)) == 0.5
    assert validate_query_time(np.array(1.25)) == 1.25
    assert isinstance(validate_query_time(np.int64(3)), float)


@pytest.mark.parametrize('t', [None, 'x', 2 + 0j, np.bool_(True), float('nan'), -np.inf, [1.0]])
def test_validate_query_time_rejects(t):
    with pytest.raises(InvalidInput):
        validate_query_time(t)


def test_validate_method():
    assert validate_method('clamped') == 'clamped'
    with pytest.raises(InvalidInput):
        validate_method('linear')


def test_series_shape_and_exact_samples():
    time = np.array([0.0, 0.5, 2.0, 3.0])
    values = np.arange(24.0).reshape(3, 2, 4) ** 1.5
    series = SampledSeries(time, values)
    assert series.shape == (3, 2)
    assert np.array_equal(series(2.0), values[..., 2])
    assert np.array_equal(series(3.0), values[..., 3])


def test_series_scalar_rows():
    time = np.array([0.0, 1.0, 2.0, 3.0])
    values = np.vstack([time ** 2, 5.0 - time])
    out = SampledSeries(time, values)(1.5)
    assert out.shape == (2,)
    assert out[1] == pytest.approx(3.5)


def test_clamped_series_has_zero_end_slopes():
    time = np.array([0.0, 1.0, 2.0])
    values = np.array([0.0, 1.0, 0.0])
    series = SampledSeries(time, values, method='clamped')
    eps = 1e-6
    assert (series(eps) - series(0.0)) / eps == pytest.approx(0.0, abs=1e-4)


def test_returned_samples_are_writable_copies():
    time = np.array([0.0, 1.0])
    values = np.array([[1.0, 2.0]])
    values.setflags(write=False)
    out = SampledSeries(time, values)(0.0)
    out[0] = 10.0
    assert values[0, 0] == 1.0
