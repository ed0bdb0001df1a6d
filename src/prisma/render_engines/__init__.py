"""Render contexts that consume the draw list."""

from prisma.render_engines.base_render_context import BaseRenderContext
from prisma.render_engines.dict_render_context import DictRenderContext
from prisma.render_engines.json_render_context import JSONRenderContext

__all__ = ['BaseRenderContext', 'DictRenderContext', 'JSONRenderContext']
