"""
Boundary surface for serving layers: the map context and its transport models.
"""

from .context import GENERATORS, MapContext
from .models import MapPayload

__all__ = ["GENERATORS", "MapContext", "MapPayload"]
