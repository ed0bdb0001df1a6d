from abc import abstractmethod

class BaseRenderContext(object):
    """
    Rasterizer strategy for the render pipeline.

    The pipeline produces draw commands in back-to-front order; a render
    context draws them in exactly that order, filling each polygon before
    outlining it. Subclasses implement fill_poly and outline_poly.
    """

    def render_commands(self, commands, width=0, height=0, background=None):
        self.begin_frame(width, height, background)
        for command in commands:
            self.pre_render(command)
            poly_id = f"face-{command.face_index}"
            self.fill_poly(poly_id, command.polygon, command.fill_color)
            if command.outline_color is not None:
                self.outline_poly(poly_id, command.polygon, command.outline_color)
            self.post_render(command)
        self.end_frame()

    def begin_frame(self, width, height, background):
        pass

    def end_frame(self):
        pass

    def pre_render(self, command):
        pass

    def post_render(self, command):
        pass

    def get_output(self):
        return None

    @abstractmethod
    def fill_poly(self, id, points, color):
        """Fills the polygon with the given id and screen points."""

    @abstractmethod
    def outline_poly(self, id, points, color):
        """Outlines the polygon with the given id and screen points."""
