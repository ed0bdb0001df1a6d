"""
Dictionary Render Context for Prisma.

This render context collects the draw list into a Python dictionary,
suitable for direct consumption by Python code or a host that rasterizes
polygons itself.
"""

from prisma.render_engines.base_render_context import BaseRenderContext


class DictRenderContext(BaseRenderContext):
    """
    Render context that collects polygons into a dictionary.

    Output format:
        {
            'width': int,
            'height': int,
            'background': (r, g, b) | None,
            'polygons': [
                {
                    'id': str,
                    'points': [[x, y], ...],
                    'fill': (r, g, b),
                    'outline': (r, g, b) | None,
                    'front_facing': bool,
                }
            ],
            'stats': {
                'polygon_count': int,
                'outline_count': int,
                'vertex_count': int,
            }
        }
    """

    def __init__(self):
        self._polygons = []
        self._current = None
        self._width = 0
        self._height = 0
        self._background = None
        self._outline_count = 0
        self._vertex_count = 0

    def begin_frame(self, width, height, background):
        self._polygons = []
        self._current = None
        self._width = width
        self._height = height
        self._background = background
        self._outline_count = 0
        self._vertex_count = 0

    def pre_render(self, command):
        """Called before drawing a command."""
        self._current = {
            'id': None,
            'points': [],
            'fill': None,
            'outline': None,
            'front_facing': command.front_facing,
        }

    def post_render(self, command):
        self._polygons.append(self._current)
        self._current = None

    def fill_poly(self, id, points, color):
        """Record the filled polygon."""
        point_list = [[p[0], p[1]] for p in points]
        self._current['id'] = id
        self._current['points'] = point_list
        self._current['fill'] = self._format_color(color)
        self._vertex_count += len(point_list)

    def outline_poly(self, id, points, color):
        """Record the outline color of the current polygon."""
        self._current['outline'] = self._format_color(color)
        self._outline_count += 1

    def _format_color(self, color):
        return tuple(color)

    def get_output(self) -> dict:
        """Get the collected draw list as a dictionary."""
        return {
            'width': self._width,
            'height': self._height,
            'background': self._background,
            'polygons': list(self._polygons),
            'stats': {
                'polygon_count': len(self._polygons),
                'outline_count': self._outline_count,
                'vertex_count': self._vertex_count,
            }
        }
