"""
Package-wide numeric defaults.

These constants are the only configuration surface of tapegrad; everything
else is passed explicitly as keyword arguments.
"""

import numpy as np

DEFAULT_DTYPE = np.float32
"""Element dtype of every tensor buffer and every gradient buffer."""

MAX_NDIM = 4
"""Highest dimensionality offered by the tensor families (Tensor0D..Tensor4D)."""
