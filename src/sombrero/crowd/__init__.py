"""Crowd simulation post-processing: continuous-time queries and plot colors."""
from sombrero.crowd.errors import (ConfigurationError, DataUnavailable, DegenerateDirection, InvalidInput,
                                   ShapeMismatch, SombreroError)
from sombrero.crowd.geometry import Rectangle
from sombrero.crowd.quantities import ScalarQuantity, TickPolicy, VectorQuantity
from sombrero.crowd.sim_data import SimData
from sombrero.crowd.plot_style import Gradient, GradientMapper, PlotStyle
from sombrero.crowd.fields import fill_colors, scalar_field, vector_field

TrajectoryStore = SimData

__all__ = [
    'ConfigurationError', 'DataUnavailable', 'DegenerateDirection', 'InvalidInput', 'ShapeMismatch',
    'SombreroError', 'Rectangle', 'ScalarQuantity', 'TickPolicy', 'VectorQuantity', 'SimData',
    'TrajectoryStore', 'Gradient', 'GradientMapper', 'PlotStyle', 'fill_colors', 'scalar_field',
    'vector_field',
]
