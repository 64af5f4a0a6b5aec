"""Motion engine: pure cursor movement over a document."""

from .engine import apply_motion
from .models import Motion, clamp_cursor, max_column

__all__ = ["Motion", "apply_motion", "clamp_cursor", "max_column"]
