"""Continuous-time reconstruction of per-agent series from discrete samples.

A ``SampledSeries`` fits one cubic spline per agent and component along
the last (time) axis of an array, once, and evaluates it at any query
time. Query times that coincide with a sample return the stored sample
exactly.
"""
import logging
from numbers import Real
from typing import Any

import numpy as np
from scipy.interpolate import CubicSpline

from sombrero.crowd.config import INTERPOLATION
from sombrero.crowd.errors import InvalidInput

logger = logging.getLogger(__name__)


def validate_query_time(t: Any) -> float:
    """Return ``t`` as a float, rejecting non-real, non-scalar or non-finite values."""
    if isinstance(t, (bool, np.bool_)):
        raise InvalidInput(f'query time must be a real number, got {t!r}', field='t')
    if isinstance(t, np.ndarray):
        if t.ndim != 0:
            raise InvalidInput(f'query time must be a scalar, got shape {t.shape}', field='t')
        t = t.item()
    if not isinstance(t, Real):
        raise InvalidInput(f'query time must be a real number, got {t!r}', field='t')
    t = float(t)
    if not np.isfinite(t):
        raise InvalidInput(f'query time must be finite, got {t!r}', field='t')
    return t


def validate_method(method: str) -> str:
    if method not in INTERPOLATION['methods']:
        raise InvalidInput(
            f"unknown interpolation method {method!r}; expected one of {INTERPOLATION['methods']}",
            field='method')
    return method


class SampledSeries:
    """Cubic-spline view of an array whose last axis is time.

    Parameters
    - time: (s,) strictly increasing sample times
    - values: array of shape (..., s)
    - method: spline boundary condition, see ``config.INTERPOLATION``

    With a single sample there is nothing to fit: the series is held
    constant at that sample for every query time. Outside the sampled
    interval the spline is extrapolated, not clamped.
    """

    def __init__(self, time: np.ndarray, values: np.ndarray, method: str = INTERPOLATION['method']):
        self.time = time
        self.values = values
        self.method = validate_method(method)
        if values.size == 0:
            self._spline = None
        elif time.shape[0] > 1:
            self._spline = CubicSpline(time, values, axis=-1, bc_type=method, extrapolate=True)
        else:
            logger.debug('single sample: holding values of shape %s constant', values.shape[:-1])
            self._spline = None

    @property
    def shape(self):
        """Shape of one evaluation (the value shape without the time axis)."""
        return self.values.shape[:-1]

    def __call__(self, t: float) -> np.ndarray:
        if self.values.size == 0:
            return np.zeros(self.shape, dtype=float)
        idx = int(np.searchsorted(self.time, t))
        if idx < self.time.shape[0] and self.time[idx] == t:
            return np.array(self.values[..., idx], dtype=float)
        if self._spline is None:
            return np.array(self.values[..., 0], dtype=float)
        return np.asarray(self._spline(t), dtype=float)
