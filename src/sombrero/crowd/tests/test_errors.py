import pytest

from sombrero.crowd import errors


@pytest.mark.parametrize('cls', [errors.InvalidInput, errors.ShapeMismatch,
                                 errors.DataUnavailable, errors.DegenerateDirection])
def test_data_errors_are_value_errors(cls):
    err = cls('bad series', field='pressure')
    assert isinstance(err, ValueError)
    assert isinstance(err, errors.SombreroError)
    assert err.field == 'pressure'
    assert str(err) == 'bad series'


def test_configuration_error_is_key_error():
    err = errors.ConfigurationError('unknown scalar quantity: foo', field='quantity')
    assert isinstance(err, KeyError)
    assert str(err) == 'unknown scalar quantity: foo'
