"""Per-agent fields for the quantities a plot style can show.

These functions read a ``SimData`` at time ``t`` and return the values a
renderer colors the agents by (scalar quantities) or draws as arrows
(vector quantities).

Information-model instances are opaque to the store. The informed
quantities only require that the selected instance exposes an
``informed`` attribute with one truthy/falsy entry per agent and, when
there are several instances per step, a ``name`` to select it by.
"""
import logging
from typing import Any, Optional

import numpy as np

from sombrero.crowd.contact import informed_neighbor_counts, neighbor_counts
from sombrero.crowd.errors import ConfigurationError, DataUnavailable, ShapeMismatch
from sombrero.crowd.plot_style import PlotStyle
from sombrero.crowd.quantities import ScalarQuantity, VectorQuantity
from sombrero.crowd.sim_data import SimData

logger = logging.getLogger(__name__)


def select_info_model(store: SimData, t: float, info_model: Any = None) -> Any:
    """Return the info-model instance in effect at ``t``.

    ``info_model`` may be ``None`` or ``'none'`` (only valid when each step
    holds a single instance), an integer column index, or the ``name`` of
    the instance.
    """
    row = store.information_at(t)
    if info_model is None or (isinstance(info_model, str) and info_model == 'none'):
        if len(row) != 1:
            raise ConfigurationError(
                f'{len(row)} information models recorded; select one by name or index', field='info_model')
        return row[0]
    if isinstance(info_model, (int, np.integer)) and not isinstance(info_model, bool):
        if not 0 <= info_model < len(row):
            raise ConfigurationError(f'no information model at index {info_model}', field='info_model')
        return row[info_model]
    for instance in row:
        if getattr(instance, 'name', None) == info_model:
            return instance
    raise ConfigurationError(f'no information model named {info_model!r}', field='info_model')


def informed_state(store: SimData, t: float, info_model: Any = None) -> np.ndarray:
    """Return an (n,) boolean array marking the informed agents at ``t``."""
    instance = select_info_model(store, t, info_model)
    informed = getattr(instance, 'informed', None)
    if informed is None:
        raise DataUnavailable('information model does not expose an informed state', field='information')
    flags = np.asarray(informed).astype(bool).reshape(-1)
    if flags.shape[0] != store.n_agents:
        raise ShapeMismatch(
            f'informed state has {flags.shape[0]} entries for {store.n_agents} agents', field='information')
    return flags


def scalar_field(store: SimData, quantity: Any, t: float, info_model: Any = None) -> np.ndarray:
    """Return the (n,) values of a scalar quantity at time ``t``."""
    q = ScalarQuantity.coerce(quantity)
    if q is ScalarQuantity.NONE:
        return np.zeros(store.positions_at(t).shape[0])
    if q is ScalarQuantity.PRESSURE:
        return store.pressure_at(t)
    if q is ScalarQuantity.SPEED:
        return store.speed_at(t)
    if q is ScalarQuantity.NEIGHBORS:
        return neighbor_counts(store.adjacency_at(t))
    if q is ScalarQuantity.INFORMED:
        return informed_state(store, t, info_model).astype(float)
    # informed neighbors
    return informed_neighbor_counts(store.adjacency_at(t), informed_state(store, t, info_model))


def vector_field(store: SimData, quantity: Any, t: float) -> np.ndarray:
    """Return the (n, 2) vectors of a vector quantity at time ``t``."""
    q = VectorQuantity.coerce(quantity)
    if q is VectorQuantity.VELOCITY:
        return store.velocities_at(t)
    if q is VectorQuantity.ACCELERATION:
        return store.accelerations_at(t)
    if q is VectorQuantity.DIRECTION:
        return store.directions_at(t)
    return np.zeros((store.positions_at(t).shape[0], 2))


def fill_colors(store: SimData, style: PlotStyle, t: float, info_model: Optional[Any] = None) -> np.ndarray:
    """Return the (n, 3) HSV fill color of every agent at ``t`` under ``style``."""
    quantity = style.scalar_fill_quantity
    if info_model is None:
        info_model = style.current_info_model
    values = scalar_field(store, quantity, t, info_model)
    logger.debug('fill colors for %s at t=%s over %d agents', quantity.name.lower(), t, values.shape[0])
    return style.colors_for(values, quantity)
