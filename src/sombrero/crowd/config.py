# -*- coding: utf-8 -*-

"""
crowd/config.py

Central defaults for the crowd post-processing core. Keeping the color
gradients, plot flags and interpolation settings in one place means the
plot style, the legend and any analysis script agree on what a quantity
looks like.

Contents:
---------
1. FILL_GRADIENTS:
   - One entry per scalar quantity (see ``quantities.ScalarQuantity``).
   - ``bottom`` / ``top`` are HSV colors with every channel in [0, 1].
   - ``steps`` is the number of distinct colors; ``math.inf`` means the
     gradient is continuous.
   - ``range`` gives the values mapped to the bottom and top colors.

2. PLOT_DEFAULTS:
   - Display flags, background and graph colors, the default zoom box
     (x, y, width, height) and the radius scale factor.

3. INTERPOLATION:
   - Boundary condition used for the per-agent cubic splines. ``natural``
     reproduces the historical numeric output; ``not-a-knot`` and
     ``clamped`` are accepted as alternatives.

Usage:
------
    from sombrero.crowd.config import FILL_GRADIENTS

    FILL_GRADIENTS['neighbors']['steps']   # -> 9

Instances copy these dictionaries; editing a ``PlotStyle`` never changes
the module-level defaults.
"""
import math

# ───────────────────────────────────────────────────────────────────────────────
# 1) FILL GRADIENTS (HSV color model)
# ───────────────────────────────────────────────────────────────────────────────
FILL_GRADIENTS = {
    'none': {
        'bottom': (0.0, 0.0, 1.0),
        'top': (0.0, 0.0, 1.0),
        'steps': math.inf,
        'range': (0.0, 1.0),
    },
    'informed': {
        'bottom': (0.0, 0.0, 1.0),
        'top': (0.0, 0.5, 1.0),
        'steps': 2,
        'range': (0.0, 1.0),
    },
    'neighbors': {
        'bottom': (0.0, 0.0, 1.0),
        'top': (1.0, 1.0, 1.0),
        'steps': 9,
        'range': (0.0, 9.0),
    },
    'informed_neighbors': {
        'bottom': (0.0, 0.0, 1.0),
        'top': (1.0, 1.0, 1.0),
        'steps': 9,
        'range': (0.0, 9.0),
    },
    'pressure': {
        'bottom': (0.0, 0.0, 1.0),
        'top': (0.0, 1.0, 1.0),
        'steps': math.inf,
        'range': (0.0, 40.0),
    },
    'speed': {
        'bottom': (0.0, 0.0, 1.0),
        'top': (0.0, 1.0, 1.0),
        'steps': math.inf,
        'range': (0.0, 1.0),
    },
}

# Labels used by the binary (informed / uninformed) colorbar
BINARY_TICK_LABELS = ('Uninformed', 'Informed')

# Number of ticks on a continuous colorbar
CONTINUOUS_TICK_COUNT = 6

# Number of samples in a legend colormap
COLORMAP_RESOLUTION = 256

# ───────────────────────────────────────────────────────────────────────────────
# 2) PLOT DEFAULTS
# ───────────────────────────────────────────────────────────────────────────────
PLOT_DEFAULTS = {
    'zoom_box': (0.0, 0.0, 50.0, 50.0),  # x, y, width, height (m)
    'show_agents': True,
    'show_walls': True,
    'show_contact_network': True,
    'show_time': True,
    'bgcolor': (0.0, 0.0, 1.0),          # HSV
    'graph_color': (0.0, 0.0, 0.0),      # HSV
    'radius_scale_factor': 1.0,
    'scalar_fill_quantity': 'none',
    'vector_quantity': 'none',
    'current_info_model': 'none',
}

# ───────────────────────────────────────────────────────────────────────────────
# 3) INTERPOLATION
# ───────────────────────────────────────────────────────────────────────────────
INTERPOLATION = {
    'method': 'natural',
    'methods': ('natural', 'not-a-knot', 'clamped'),
    # norms at or below this are treated as zero directions
    'direction_eps': 1e-12,
}
