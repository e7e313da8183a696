"""Plot style: how crowd simulation data looks when it is drawn.

``PlotStyle`` owns the color gradients associated with each scalar
quantity, the active fill and vector quantities, the zoom box and the
display flags. It turns values of the active quantity into HSV colors,
samples the gradient for a colorbar and lays out the colorbar ticks.

A style is meant to be configured by one owner and then read by any
number of renderers; it does no locking of its own.
"""
import copy
import logging
import math
from dataclasses import dataclass, field, replace
from numbers import Real
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from matplotlib.colors import ListedColormap, hsv_to_rgb

from sombrero.crowd.config import (BINARY_TICK_LABELS, COLORMAP_RESOLUTION, CONTINUOUS_TICK_COUNT,
                                   FILL_GRADIENTS, PLOT_DEFAULTS)
from sombrero.crowd.errors import ConfigurationError, InvalidInput
from sombrero.crowd.geometry import Rectangle
from sombrero.crowd.quantities import ScalarQuantity, TickPolicy, VectorQuantity

logger = logging.getLogger(__name__)


def _hsv(value: Any, name: str) -> Tuple[float, float, float]:
    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f'{name} must be an HSV triple, got {value!r}', field=name) from e
    if arr.shape != (3,) or not np.all(np.isfinite(arr)) or np.any((arr < 0) | (arr > 1)):
        raise InvalidInput(f'{name} must be an HSV triple with channels in [0, 1], got {value!r}', field=name)
    return tuple(float(c) for c in arr)


@dataclass(frozen=True)
class Gradient:
    """A color ramp from ``bottom`` to ``top`` over ``range``.

    ``steps`` is the number of distinct colors (an integer >= 2) or
    ``math.inf`` for a continuous ramp.
    """
    bottom: Tuple[float, float, float]
    top: Tuple[float, float, float]
    steps: float = math.inf
    range: Tuple[float, float] = (0.0, 1.0)

    def __post_init__(self):
        object.__setattr__(self, 'bottom', _hsv(self.bottom, 'bottom'))
        object.__setattr__(self, 'top', _hsv(self.top, 'top'))

        steps = self.steps
        if isinstance(steps, bool) or not isinstance(steps, Real):
            raise InvalidInput(f'steps must be an integer >= 2 or inf, got {steps!r}', field='steps')
        if steps != math.inf:
            if not float(steps).is_integer() or steps < 2:
                raise InvalidInput(f'steps must be an integer >= 2 or inf, got {steps!r}', field='steps')
            steps = int(steps)
        object.__setattr__(self, 'steps', steps)

        try:
            lo, hi = (float(v) for v in self.range)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f'range must be a (lo, hi) pair, got {self.range!r}', field='range') from e
        if not (math.isfinite(lo) and math.isfinite(hi)) or lo > hi:
            raise InvalidInput(f'range must satisfy finite lo <= hi, got {(lo, hi)}', field='range')
        object.__setattr__(self, 'range', (lo, hi))

    @property
    def is_continuous(self) -> bool:
        return self.steps == math.inf

    @classmethod
    def from_config(cls, entry: Dict[str, Any]) -> 'Gradient':
        return cls(bottom=entry['bottom'], top=entry['top'], steps=entry['steps'], range=entry['range'])

    def normalize(self, values: np.ndarray) -> np.ndarray:
        """Map values to positions in [0, 1] along the ramp, quantized if ``steps`` is finite."""
        lo, hi = self.range
        d = hi - lo
        if d == 0:
            d = 1.0
        x = (np.clip(values, lo, hi) - lo) / d
        if not self.is_continuous:
            k = self.steps
            x = np.floor(x * k)
            x[x >= k] = k - 1
            x = x / (k - 1)
        return x

    def colors(self, values: np.ndarray) -> np.ndarray:
        x = self.normalize(values)[:, None]
        return x * np.asarray(self.top) + (1 - x) * np.asarray(self.bottom)


def _default_gradients() -> Dict[ScalarQuantity, Gradient]:
    return {ScalarQuantity.coerce(name): Gradient.from_config(entry)
            for name, entry in copy.deepcopy(FILL_GRADIENTS).items()}


@dataclass
class PlotStyle:
    """Color gradients, active quantities and display settings for plotting.

    Pass a simulation model (any object with a ``simulation_box``) to seed
    the zoom box from the model's bounding box.
    """
    zoom_box: Rectangle = field(default_factory=lambda: Rectangle.from_value(PLOT_DEFAULTS['zoom_box']))
    show_agents: bool = PLOT_DEFAULTS['show_agents']
    show_walls: bool = PLOT_DEFAULTS['show_walls']
    show_contact_network: bool = PLOT_DEFAULTS['show_contact_network']
    show_time: bool = PLOT_DEFAULTS['show_time']
    bgcolor: Tuple[float, float, float] = PLOT_DEFAULTS['bgcolor']
    graph_color: Tuple[float, float, float] = PLOT_DEFAULTS['graph_color']
    radius_scale_factor: float = PLOT_DEFAULTS['radius_scale_factor']
    scalar_fill_quantity: ScalarQuantity = ScalarQuantity.coerce(PLOT_DEFAULTS['scalar_fill_quantity'])
    vector_quantity: VectorQuantity = VectorQuantity.coerce(PLOT_DEFAULTS['vector_quantity'])
    current_info_model: str = PLOT_DEFAULTS['current_info_model']
    fill_gradients: Dict[ScalarQuantity, Gradient] = field(default_factory=_default_gradients)

    def __post_init__(self):
        self.zoom_box = Rectangle.from_value(self.zoom_box)
        self.bgcolor = _hsv(self.bgcolor, 'bgcolor')
        self.graph_color = _hsv(self.graph_color, 'graph_color')
        self.fill_gradients = {ScalarQuantity.coerce(k): v if isinstance(v, Gradient) else Gradient.from_config(v)
                               for k, v in self.fill_gradients.items()}

    def __setattr__(self, name, value):
        # active quantities stay enum members however they are assigned
        if name == 'scalar_fill_quantity':
            value = ScalarQuantity.coerce(value)
        elif name == 'vector_quantity':
            value = VectorQuantity.coerce(value)
        super().__setattr__(name, value)

    @classmethod
    def for_model(cls, model: Any, **kwargs) -> 'PlotStyle':
        """Build a style whose zoom box encompasses ``model.simulation_box``."""
        box = getattr(model, 'simulation_box', None)
        if box is None:
            raise InvalidInput('model has no simulation_box', field='simulation_box')
        return cls(zoom_box=Rectangle.from_value(box), **kwargs)

    # ------------------------------------------------------------------ configuration

    def gradient(self, quantity: Any = None) -> Gradient:
        """Return the gradient for ``quantity`` (the active fill quantity by default)."""
        q = self.scalar_fill_quantity if quantity is None else ScalarQuantity.coerce(quantity)
        try:
            return self.fill_gradients[q]
        except KeyError:
            raise ConfigurationError(f'no gradient configured for {q.name.lower()}', field='quantity') from None

    def set_gradient(self, quantity: Any, **changes) -> Gradient:
        """Replace fields (``bottom``, ``top``, ``steps``, ``range``) of one gradient."""
        q = ScalarQuantity.coerce(quantity)
        current = self.fill_gradients.get(q)
        if current is None:
            missing = {'bottom', 'top'} - set(changes)
            if missing:
                raise ConfigurationError(
                    f'{q.name.lower()} has no gradient to update; supply {sorted(missing)}', field='quantity')
            grad = Gradient(**changes)
        else:
            grad = replace(current, **changes)
        self.fill_gradients[q] = grad
        logger.debug('gradient for %s set to %s', q.name.lower(), grad)
        return grad

    def select(self, quantity: Any) -> None:
        """Make ``quantity`` the active fill quantity."""
        q = ScalarQuantity.coerce(quantity)
        self.gradient(q)
        self.scalar_fill_quantity = q

    # ------------------------------------------------------------------ colors

    def colors_for(self, values: Any, quantity: Any = None) -> np.ndarray:
        """Return the (r, 3) HSV colors of ``values`` under ``quantity``.

        Values are clamped to the gradient range, normalized to [0, 1],
        quantized into ``steps`` bands when the gradient is not continuous,
        and blended linearly between the bottom and top colors.

        Note the argument order: ``values`` first, then the optional
        ``quantity``, which defaults to the active fill quantity.
        """
        grad = self.gradient(quantity)
        v = np.asarray(values)
        if v.dtype.kind not in 'biuf':
            raise InvalidInput(f'values must be real numbers, got dtype {v.dtype}', field='values')
        if v.ndim > 1 and sum(d > 1 for d in v.shape) > 1:
            raise InvalidInput(f'values must be a vector, got shape {v.shape}', field='values')
        v = v.astype(float).reshape(-1)
        if not np.all(np.isfinite(v)):
            raise InvalidInput('values must be finite', field='values')
        if grad.range[0] == grad.range[1]:
            logger.debug('degenerate range %s: all values map to the bottom color', grad.range)
        return grad.colors(v)

    def colormap(self, quantity: Any = None, resolution: int = COLORMAP_RESOLUTION) -> np.ndarray:
        """Sample the gradient at ``resolution`` evenly spaced values across its range."""
        if isinstance(resolution, bool) or not isinstance(resolution, (int, np.integer)) or resolution < 1:
            raise InvalidInput(f'resolution must be a positive integer, got {resolution!r}', field='resolution')
        lo, hi = self.gradient(quantity).range
        return self.colors_for(np.linspace(lo, hi, resolution), quantity)

    def fill_gradient_range(self, quantity: Any = None) -> Tuple[float, float]:
        return self.gradient(quantity).range

    def legend_ticks(self, quantity: Any = None) -> Tuple[np.ndarray, List[str]]:
        """Return colorbar tick positions and labels for ``quantity``.

        - binary quantities: one tick in the middle of each half, labelled
          uninformed / informed
        - categorical quantities: one tick at the center of each unit band,
          labelled with the integer category
        - continuous quantities: evenly spaced ticks labelled with their value
        """
        q = self.scalar_fill_quantity if quantity is None else ScalarQuantity.coerce(quantity)
        lo, hi = self.gradient(q).range
        policy = q.tick_policy
        if policy is TickPolicy.BINARY:
            w = hi - lo
            ticks = np.array([lo + 0.25 * w, lo + 0.75 * w])
            labels = list(BINARY_TICK_LABELS)
        elif policy is TickPolicy.CATEGORICAL:
            # only unit bands lying wholly inside the range get a tick
            ticks = lo + 0.5 + np.arange(int(np.floor(hi - lo + 1e-9)), dtype=float)
            labels = [f'{lo + i:g}' for i in range(len(ticks))]
        else:
            ticks = np.linspace(lo, hi, CONTINUOUS_TICK_COUNT)
            labels = [f'{t:g}' for t in ticks]
        return ticks, labels

    # ------------------------------------------------------------------ conversion

    @staticmethod
    def to_rgb(hsv: Any) -> np.ndarray:
        """Convert HSV colors (shape (..., 3)) to RGB for matplotlib."""
        return hsv_to_rgb(np.asarray(hsv, dtype=float))

    def listed_colormap(self, quantity: Any = None, resolution: Optional[int] = None) -> ListedColormap:
        """Return the gradient as a matplotlib ``ListedColormap``.

        Quantized gradients default to one entry per band.
        """
        q = self.scalar_fill_quantity if quantity is None else ScalarQuantity.coerce(quantity)
        grad = self.gradient(q)
        if resolution is None:
            resolution = COLORMAP_RESOLUTION if grad.is_continuous else grad.steps
        rgb = self.to_rgb(self.colormap(q, resolution))
        return ListedColormap(rgb, name=q.name.lower())

    def colorbar_spec(self, quantity: Any = None) -> Dict[str, Any]:
        """Everything a renderer needs to draw the colorbar of ``quantity``."""
        ticks, labels = self.legend_ticks(quantity)
        return {
            'colormap': self.colormap(quantity),
            'range': self.fill_gradient_range(quantity),
            'ticks': ticks,
            'tick_labels': labels,
        }


GradientMapper = PlotStyle

