"""
JSON Render Context for Prisma.

This render context collects the draw list as a JSON-serializable
dictionary, suitable for web viewers that rasterize on a canvas.
"""

import json

from prisma.render_engines.dict_render_context import DictRenderContext
from prisma.prisma_shading import to_hex


class JSONRenderContext(DictRenderContext):
    """
    Render context producing JSON-friendly output.

    Same layout as DictRenderContext, with colors as '#rrggbb' strings and
    the background as a hex string (or null).
    """

    def _format_color(self, color):
        return to_hex(color)

    def get_output(self) -> dict:
        output = super().get_output()
        if output['background'] is not None:
            output['background'] = to_hex(output['background'])
        return output

    def to_json(self, **kwargs) -> str:
        """Serialize the collected frame."""
        return json.dumps(self.get_output(), **kwargs)
