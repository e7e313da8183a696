"""Named quantities that can be drawn on top of the agents.

The scalar quantities form a closed set. Each one carries the tick policy
its colorbar uses, so the legend layout follows from the quantity itself
and not from whatever tick count a gradient happens to have.
"""
from enum import Enum
from typing import Union

from sombrero.crowd.errors import ConfigurationError


class TickPolicy(Enum):
    """How colorbar ticks are laid out for a quantity."""
    CONTINUOUS = 'continuous'    # evenly spaced numeric ticks
    CATEGORICAL = 'categorical'  # one tick per unit band, integer labels
    BINARY = 'binary'            # two bands with descriptive labels


class ScalarQuantity(Enum):
    """Scalar quantities used to fill the agents when plotting."""
    NONE = 1
    INFORMED = 2
    NEIGHBORS = 3
    INFORMED_NEIGHBORS = 4
    PRESSURE = 5
    SPEED = 6

    @property
    def tick_policy(self) -> TickPolicy:
        return _TICK_POLICIES[self]

    @classmethod
    def coerce(cls, value: Union['ScalarQuantity', str, int]) -> 'ScalarQuantity':
        """Return the member named or numbered by ``value``.

        Accepts a member, its lower-case name (``'informed_neighbors'``) or
        its integer value. Anything else is a ``ConfigurationError``.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace('-', '_').replace(' ', '_')
            if key in cls.__members__:
                return cls.__members__[key]
        elif isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise ConfigurationError(f'unknown scalar quantity: {value!r}', field='quantity')


_TICK_POLICIES = {
    ScalarQuantity.NONE: TickPolicy.CONTINUOUS,
    ScalarQuantity.INFORMED: TickPolicy.BINARY,
    ScalarQuantity.NEIGHBORS: TickPolicy.CATEGORICAL,
    ScalarQuantity.INFORMED_NEIGHBORS: TickPolicy.CATEGORICAL,
    ScalarQuantity.PRESSURE: TickPolicy.CONTINUOUS,
    ScalarQuantity.SPEED: TickPolicy.CONTINUOUS,
}


class VectorQuantity(Enum):
    """Per-agent vector quantities that can be drawn as arrows."""
    NONE = 1
    VELOCITY = 2
    ACCELERATION = 3
    DIRECTION = 4

    @classmethod
    def coerce(cls, value: Union['VectorQuantity', str, int]) -> 'VectorQuantity':
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls.__members__[key]
        elif isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise ConfigurationError(f'unknown vector quantity: {value!r}', field='vector_quantity')
