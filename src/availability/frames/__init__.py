"""Frame model and frame-sequence algorithms."""

from .merge import clip_frames, fill_gaps, overlay
from .models import Frame

__all__ = ["Frame", "clip_frames", "fill_gaps", "overlay"]
