import numpy as np
import pytest

from sombrero.crowd.errors import ConfigurationError, DataUnavailable, ShapeMismatch
from sombrero.crowd.fields import fill_colors, informed_state, scalar_field, select_info_model, vector_field
from sombrero.crowd.plot_style import PlotStyle
from sombrero.crowd.sim_data import SimData


def test_scalar_fields(crowd_record):
    sd = SimData.from_record(crowd_record)
    assert scalar_field(sd, 'none', 1.0).tolist() == [0.0, 0.0, 0.0]
    assert np.allclose(scalar_field(sd, 'pressure', 1.0), [1.0, 11.0, 21.0])
    assert np.allclose(scalar_field(sd, 'speed', 1.0), 1.0)
    assert scalar_field(sd, 'neighbors', 0.5).tolist() == [1.0, 1.0, 0.0]
    assert scalar_field(sd, 'neighbors', 2.5).tolist() == [1.0, 2.0, 1.0]


def test_informed_fields(crowd_record):
    sd = SimData.from_record(crowd_record)
    assert scalar_field(sd, 'informed', 3.0, 'rumour').tolist() == [1.0, 0.0, 1.0]
    assert scalar_field(sd, 'informed', 0.0, 0).tolist() == [0.0, 0.0, 0.0]
    # rumour at step 3: agents 0 and 2 informed, agent 1 touches both
    assert scalar_field(sd, 'informed_neighbors', 3.0, 'rumour').tolist() == [0.0, 2.0, 0.0]
    assert scalar_field(sd, 'informed_neighbors', 3.0, 'alarm').tolist() == [1.0, 2.0, 1.0]


def test_select_info_model(crowd_record):
    sd = SimData.from_record(crowd_record)
    assert select_info_model(sd, 1.0, 'alarm').name == 'alarm'
    assert select_info_model(sd, 1.0, 1).name == 'alarm'
    with pytest.raises(ConfigurationError):
        select_info_model(sd, 1.0)
    with pytest.raises(ConfigurationError):
        select_info_model(sd, 1.0, 'none')
    with pytest.raises(ConfigurationError):
        select_info_model(sd, 1.0, 'gossip')
    with pytest.raises(ConfigurationError):
        select_info_model(sd, 1.0, 5)


def test_single_info_model_needs_no_name(line_record, make_info_model):
    line_record['information'] = [make_info_model('only', [k == 2]) for k in range(3)]
    sd = SimData.from_record(line_record)
    assert informed_state(sd, 2.0).tolist() == [True]
    assert informed_state(sd, 1.0, 'none').tolist() == [False]


def test_info_model_without_state(line_record):
    line_record['information'] = [[object()]] * 3
    sd = SimData.from_record(line_record)
    with pytest.raises(DataUnavailable):
        informed_state(sd, 0.0)


def test_info_model_wrong_length(line_record, make_info_model):
    line_record['information'] = [[make_info_model('x', [True, False])]] * 3
    sd = SimData.from_record(line_record)
    with pytest.raises(ShapeMismatch):
        informed_state(sd, 0.0)


def test_vector_fields(crowd_record):
    sd = SimData.from_record(crowd_record)
    assert np.allclose(vector_field(sd, 'velocity', 0.7), [[1.0, 0.0]] * 3)
    assert np.allclose(vector_field(sd, 'acceleration', 0.7), 0.0)
    assert np.allclose(np.linalg.norm(vector_field(sd, 'direction', 0.7), axis=1), 1.0)
    assert vector_field(sd, 'none', 0.7).shape == (3, 2)


def test_missing_series_for_quantity(line_record):
    sd = SimData.from_record(line_record)
    for quantity in ('pressure', 'speed', 'neighbors', 'informed'):
        with pytest.raises(DataUnavailable):
            scalar_field(sd, quantity, 0.5)


def test_fill_colors(crowd_record):
    sd = SimData.from_record(crowd_record)
    style = PlotStyle(scalar_fill_quantity='neighbors')
    colors = fill_colors(sd, style, 2.0)
    assert colors.shape == (3, 3)
    assert np.allclose(colors[1], style.colors_for([2.0], 'neighbors')[0])

    style.select('informed')
    style.current_info_model = 'rumour'
    colors = fill_colors(sd, style, 4.0)
    assert np.allclose(colors, [(0.0, 0.5, 1.0), (0.0, 0.0, 1.0), (0.0, 0.5, 1.0)])


def test_fill_colors_after_assigning_quantity_name(crowd_record):
    sd = SimData.from_record(crowd_record)
    style = PlotStyle()
    style.scalar_fill_quantity = 'pressure'
    colors = fill_colors(sd, style, 1.0)
    assert np.allclose(colors, style.colors_for([1.0, 11.0, 21.0], 'pressure'))
