"""Render layer: glyphs, row building and host displays."""

from lightcycle.render.adapter import RenderAdapter
from lightcycle.render.display import BufferDisplay, RowDisplay, StreamDisplay, push_frame

__all__ = ["BufferDisplay", "RenderAdapter", "RowDisplay", "StreamDisplay", "push_frame"]
