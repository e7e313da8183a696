"""Simulation output and continuous-time queries over it.

``SimData`` holds everything a crowd simulation run records per time step:
positions and (optionally) velocities, accelerations, desired directions,
pressure, contact-network snapshots and information-model state. All of it
is validated once, at construction, and then frozen.

Kinematic and pressure queries take an arbitrary time ``t`` and
reconstruct the value between samples with one cubic spline per agent and
component (natural boundary conditions unless another method is given).
Contact networks and information-model state are discrete by nature and
are held from the latest sample at or before ``t``.

Array conventions:
- time: (s,)
- positions, velocities, accelerations, directions: (n, 2, s)
- pressure: (n, s)
- adjacency: s matrices of shape (n, n)
- information: s rows of info-model instances (opaque objects)
"""
import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from sombrero.crowd.config import INTERPOLATION
from sombrero.crowd.errors import DataUnavailable, DegenerateDirection, InvalidInput, ShapeMismatch
from sombrero.crowd.geometry import Rectangle, disk_extents
from sombrero.crowd.interpolation import SampledSeries, validate_method, validate_query_time

logger = logging.getLogger(__name__)

KINEMATIC_FIELDS = ('velocities', 'accelerations', 'directions')
RECORD_FIELDS = ('time', 'positions') + KINEMATIC_FIELDS + ('pressure', 'adjacency', 'information')


def _real_array(value: Any, field: str) -> np.ndarray:
    """Return a read-only float copy of ``value``; reject non-real or non-finite data."""
    try:
        arr = np.array(value)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f'{field} is not an array: {e}', field=field) from e
    if arr.dtype.kind not in 'biuf':
        raise InvalidInput(f'{field} must be real-valued numeric data, got dtype {arr.dtype}', field=field)
    arr = arr.astype(float)
    if not np.all(np.isfinite(arr)):
        raise InvalidInput(f'{field} contains NaN or infinite values', field=field)
    arr.setflags(write=False)
    return arr


def _check_shape(arr: np.ndarray, expected: Tuple[int, ...], field: str) -> None:
    if arr.shape != expected:
        raise ShapeMismatch(f'{field} must have shape {expected}, got {arr.shape}', field=field)


class SimData:
    """Validated, immutable container of one simulation run's output.

    Build it from keyword arguments or from a record with
    ``SimData.from_record``. Passing neither ``time`` nor ``positions``
    gives an empty store; every query on an empty store raises
    ``DataUnavailable``.

    Parameters
    - time: (s,) strictly increasing sample times
    - positions: (n, 2, s) agent positions
    - velocities, accelerations, directions: optional (n, 2, s) series
    - pressure: optional (n, s) series
    - adjacency: optional sequence of s (n, n) contact matrices
    - information: optional s-row table of info-model instances
    - method: spline boundary condition (``'natural'`` by default)
    """

    def __init__(self, time=None, positions=None, velocities=None, accelerations=None,
                 directions=None, pressure=None, adjacency=None, information=None,
                 method: str = INTERPOLATION['method']):
        self._method = validate_method(method)
        self._time: Optional[np.ndarray] = None
        self._positions: Optional[np.ndarray] = None
        self._velocities: Optional[np.ndarray] = None
        self._accelerations: Optional[np.ndarray] = None
        self._directions: Optional[np.ndarray] = None
        self._pressure: Optional[np.ndarray] = None
        self._adjacency: Optional[np.ndarray] = None
        self._information: Optional[Tuple[tuple, ...]] = None
        self._series: Dict[str, SampledSeries] = {}

        optional = {'velocities': velocities, 'accelerations': accelerations,
                    'directions': directions, 'pressure': pressure,
                    'adjacency': adjacency, 'information': information}

        if time is None and positions is None:
            supplied = [k for k, v in optional.items() if v is not None]
            if supplied:
                raise InvalidInput(f'{supplied[0]} supplied without time and positions', field=supplied[0])
            logger.debug('built empty SimData')
            return
        if time is None:
            raise InvalidInput('positions supplied without time', field='time')
        if positions is None:
            raise InvalidInput('time supplied without positions', field='positions')

        self._time = self._validate_time(time)
        s = self._time.shape[0]

        self._positions = _real_array(positions, 'positions')
        if self._positions.ndim != 3 or self._positions.shape[1:] != (2, s):
            raise ShapeMismatch(
                f'positions must have shape (n, 2, {s}), got {self._positions.shape}', field='positions')
        n = self._positions.shape[0]

        for name in KINEMATIC_FIELDS:
            if optional[name] is not None:
                arr = _real_array(optional[name], name)
                _check_shape(arr, (n, 2, s), name)
                setattr(self, '_' + name, arr)
        if pressure is not None:
            self._pressure = _real_array(pressure, 'pressure')
            _check_shape(self._pressure, (n, s), 'pressure')
        if adjacency is not None:
            self._adjacency = self._validate_adjacency(adjacency, n, s)
        if information is not None:
            self._information = self._validate_information(information, s)

        for name in ('positions',) + KINEMATIC_FIELDS + ('pressure',):
            values = getattr(self, '_' + name)
            if values is not None:
                self._series[name] = SampledSeries(self._time, values, self._method)

        logger.debug('built SimData: %d agents, %d steps, fields=%s, method=%s',
                     n, s, self.fields, self._method)

    @classmethod
    def from_record(cls, record: Any, method: str = INTERPOLATION['method']) -> 'SimData':
        """Build a ``SimData`` from a mapping or an object with matching attributes.

        Unknown keys are ignored; missing keys are treated as not supplied.
        """
        if isinstance(record, Mapping):
            fields = {k: record.get(k) for k in RECORD_FIELDS}
        else:
            fields = {k: getattr(record, k, None) for k in RECORD_FIELDS}
        return cls(method=method, **fields)

    # ------------------------------------------------------------------ validation

    @staticmethod
    def _validate_time(time: Any) -> np.ndarray:
        arr = _real_array(time, 'time')
        if arr.ndim > 1 and sum(d > 1 for d in arr.shape) > 1:
            raise InvalidInput(f'time must be a vector, got shape {arr.shape}', field='time')
        arr = arr.reshape(-1)
        if arr.shape[0] == 0:
            raise InvalidInput('time must contain at least one sample', field='time')
        if np.any(np.diff(arr) <= 0):
            raise InvalidInput('time must be strictly increasing', field='time')
        arr.setflags(write=False)
        return arr

    @staticmethod
    def _validate_adjacency(adjacency: Any, n: int, s: int) -> np.ndarray:
        if isinstance(adjacency, np.ndarray) and adjacency.ndim > 0:
            snapshots = list(adjacency)
        elif isinstance(adjacency, (str, bytes)) or not isinstance(adjacency, Sequence):
            raise InvalidInput('adjacency must be a sequence of matrices', field='adjacency')
        else:
            snapshots = list(adjacency)
        if len(snapshots) != s:
            raise ShapeMismatch(f'adjacency must have {s} snapshots, got {len(snapshots)}', field='adjacency')
        stacked = np.empty((s, n, n), dtype=float)
        for k, snap in enumerate(snapshots):
            arr = _real_array(snap, f'adjacency[{k}]')
            if arr.shape != (n, n):
                raise ShapeMismatch(
                    f'adjacency[{k}] must have shape {(n, n)}, got {arr.shape}', field='adjacency')
            stacked[k] = arr
        stacked.setflags(write=False)
        return stacked

    @staticmethod
    def _validate_information(information: Any, s: int) -> Tuple[tuple, ...]:
        if isinstance(information, np.ndarray):
            if information.ndim != 2:
                raise ShapeMismatch(f'information must be a 2-D table, got {information.ndim}-D', field='information')
            rows = [tuple(row) for row in information]
        elif isinstance(information, (str, bytes)) or not isinstance(information, Sequence):
            raise InvalidInput('information must be a table of info-model instances', field='information')
        else:
            rows = []
            for row in information:
                if isinstance(row, (list, tuple, np.ndarray)):
                    rows.append(tuple(row))
                else:
                    rows.append((row,))
        if len(rows) != s:
            raise ShapeMismatch(f'information must have {s} rows, got {len(rows)}', field='information')
        widths = {len(row) for row in rows}
        if len(widths) > 1:
            raise ShapeMismatch(f'information rows have differing lengths {sorted(widths)}', field='information')
        return tuple(rows)

    # ------------------------------------------------------------------ accessors

    @property
    def method(self) -> str:
        return self._method

    @property
    def is_empty(self) -> bool:
        return self._positions is None

    @property
    def n_agents(self) -> int:
        return 0 if self._positions is None else self._positions.shape[0]

    @property
    def n_steps(self) -> int:
        return 0 if self._time is None else self._time.shape[0]

    @property
    def fields(self) -> Tuple[str, ...]:
        """Names of the series present in this store."""
        return tuple(k for k in RECORD_FIELDS if getattr(self, '_' + k) is not None)

    def has(self, field: str) -> bool:
        if field not in RECORD_FIELDS:
            raise InvalidInput(f'unknown field {field!r}', field=field)
        return getattr(self, '_' + field) is not None

    @property
    def time(self) -> Optional[np.ndarray]:
        return self._time

    @property
    def positions(self) -> Optional[np.ndarray]:
        return self._positions

    @property
    def velocities(self) -> Optional[np.ndarray]:
        return self._velocities

    @property
    def accelerations(self) -> Optional[np.ndarray]:
        return self._accelerations

    @property
    def directions(self) -> Optional[np.ndarray]:
        return self._directions

    @property
    def pressure(self) -> Optional[np.ndarray]:
        return self._pressure

    @property
    def adjacency(self) -> Optional[np.ndarray]:
        return self._adjacency

    @property
    def information(self) -> Optional[Tuple[tuple, ...]]:
        return self._information

    @property
    def t_start(self) -> float:
        self._require('time')
        return float(self._time[0])

    @property
    def t_end(self) -> float:
        self._require('time')
        return float(self._time[-1])

    def _require(self, field: str) -> None:
        if self.is_empty:
            raise DataUnavailable(f'cannot query {field}: the store is empty', field=field)
        if getattr(self, '_' + field) is None:
            raise DataUnavailable(f'{field} was not supplied to this store', field=field)

    def _evaluate(self, field: str, t: Any) -> np.ndarray:
        t = validate_query_time(t)
        self._require(field)
        return self._series[field](t)

    # ------------------------------------------------------------------ continuous queries

    def positions_at(self, t: float) -> np.ndarray:
        """Return the (n, 2) agent positions at time ``t``."""
        return self._evaluate('positions', t)

    def velocities_at(self, t: float) -> np.ndarray:
        """Return the (n, 2) agent velocities at time ``t``."""
        return self._evaluate('velocities', t)

    def accelerations_at(self, t: float) -> np.ndarray:
        """Return the (n, 2) agent accelerations at time ``t``."""
        return self._evaluate('accelerations', t)

    def directions_at(self, t: float) -> np.ndarray:
        """Return the (n, 2) desired moving directions at time ``t`` as unit vectors.

        Raises ``DegenerateDirection`` if any agent's interpolated direction
        is the zero vector.
        """
        d = self._evaluate('directions', t)
        norms = np.sqrt(np.sum(d ** 2, axis=1))
        degenerate = np.flatnonzero(norms <= INTERPOLATION['direction_eps'])
        if degenerate.size:
            raise DegenerateDirection(
                f'direction of agent(s) {degenerate.tolist()} is zero at t={float(t)!r}', field='directions')
        return d / norms[:, None]

    def pressure_at(self, t: float) -> np.ndarray:
        """Return the (n,) pressure experienced by each agent at time ``t``."""
        return self._evaluate('pressure', t)

    def speed_at(self, t: float) -> np.ndarray:
        """Return the (n,) squared speed of each agent at time ``t``.

        The value is the sum of the squared velocity components, not the
        velocity magnitude; colorbars and gradient ranges are calibrated
        against this quantity.
        """
        v = self.velocities_at(t)
        return np.sum(v ** 2, axis=1)

    def distances_at(self, t: float) -> np.ndarray:
        """Return the (n, n) matrix of pairwise agent distances at time ``t``."""
        x = self.positions_at(t)
        n = x.shape[0]
        dist = np.zeros((n, n), dtype=float)
        i, j = np.triu_indices(n, k=1)
        upper = np.sqrt(np.sum((x[i] - x[j]) ** 2, axis=1))
        dist[i, j] = upper
        dist[j, i] = upper
        return dist

    def bounding_extents_at(self, radii: Any, t: float) -> Rectangle:
        """Return the smallest axis-aligned rectangle containing every agent at time ``t``.

        ``radii`` gives one radius per agent (a scalar applies to all of
        them) and must be non-negative. A store with zero agents yields
        ``Rectangle(0, 0, 0, 0)``.
        """
        x = self.positions_at(t)
        r = _real_array(radii, 'radii')
        if r.ndim == 0:
            r = np.full(x.shape[0], float(r))
        if np.any(r < 0):
            raise InvalidInput('radii must be non-negative', field='radii')
        return disk_extents(x, r)

    # ------------------------------------------------------------------ per-step queries

    def step_index_at(self, t: float) -> int:
        """Index of the latest sample at or before ``t``, clamped to the sampled steps."""
        t = validate_query_time(t)
        self._require('time')
        idx = int(np.searchsorted(self._time, t, side='right')) - 1
        return min(max(idx, 0), self.n_steps - 1)

    def adjacency_at(self, t: float) -> np.ndarray:
        """Return the (n, n) contact-network matrix in effect at time ``t``."""
        self._require('adjacency')
        return np.array(self._adjacency[self.step_index_at(t)])

    def information_at(self, t: float) -> tuple:
        """Return the info-model instances recorded for the step in effect at ``t``."""
        self._require('information')
        return self._information[self.step_index_at(t)]

    def snapshot(self, t: float) -> pd.DataFrame:
        """Return one row per agent with every interpolated quantity available at ``t``."""
        x = self.positions_at(t)
        columns = {'x': x[:, 0], 'y': x[:, 1]}
        if self._velocities is not None:
            v = self.velocities_at(t)
            columns.update(vx=v[:, 0], vy=v[:, 1], speed=np.sum(v ** 2, axis=1))
        if self._accelerations is not None:
            a = self.accelerations_at(t)
            columns.update(ax=a[:, 0], ay=a[:, 1])
        if self._directions is not None:
            d = self.directions_at(t)
            columns.update(dx=d[:, 0], dy=d[:, 1])
        if self._pressure is not None:
            columns['pressure'] = self.pressure_at(t)
        frame = pd.DataFrame(columns)
        frame.index.name = 'agent'
        return frame

    def __repr__(self):
        if self.is_empty:
            return 'SimData(empty)'
        return (f'SimData(n_agents={self.n_agents}, n_steps={self.n_steps}, '
                f'fields={list(self.fields)}, method={self._method!r})')
