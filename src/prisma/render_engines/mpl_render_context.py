"""
Matplotlib Render Context for Prisma.

Draws the frame onto a matplotlib Axes with one Polygon patch per fill and
per outline, added in draw order so later patches occlude earlier ones.
The axes are set up in screen coordinates (origin top-left, y down) so the
picture matches what a widget-based rasterizer would show.
"""

from matplotlib.figure import Figure
from matplotlib.patches import Polygon

from prisma.render_engines.base_render_context import BaseRenderContext
from prisma.prisma_shading import to_hex


class MplRenderContext(BaseRenderContext):
    """
    Render context that paints onto a matplotlib Axes.

    Args:
        ax: Axes to draw on. A new Figure, not registered with pyplot,
            is created when omitted.
        dpi: Figure resolution used when a figure is created here.
        linewidth: Outline width in points.
    """

    def __init__(self, ax=None, dpi=100, linewidth=1.0):
        self._ax = ax
        self._dpi = dpi
        self._linewidth = linewidth
        self._zorder = 0
        self.patch_count = 0

    @property
    def ax(self):
        return self._ax

    def begin_frame(self, width, height, background):
        if self._ax is None:
            fig = Figure(figsize=(max(width, 1) / self._dpi, max(height, 1) / self._dpi),
                         dpi=self._dpi)
            self._ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
        ax = self._ax
        ax.clear()
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_aspect('equal')
        ax.set_axis_off()
        if background is not None:
            ax.set_facecolor(to_hex(background))
            ax.figure.set_facecolor(to_hex(background))
        self._zorder = 0
        self.patch_count = 0

    def fill_poly(self, id, points, color):
        self._add_patch(points, facecolor=to_hex(color), edgecolor='none', fill=True, gid=id)

    def outline_poly(self, id, points, color):
        self._add_patch(points, facecolor='none', edgecolor=to_hex(color), fill=False, gid=id)

    def _add_patch(self, points, gid=None, **style):
        self._zorder += 1
        patch = Polygon([(p[0], p[1]) for p in points], closed=True,
                        linewidth=self._linewidth, zorder=self._zorder, **style)
        patch.set_gid(gid)
        self._ax.add_patch(patch)
        self.patch_count += 1

    def get_output(self):
        """The Figure holding the drawn frame."""
        return self._ax.figure if self._ax is not None else None
