"""
    Per-frame render pipeline: turns a mesh and a camera into an ordered draw list.

    Pipeline:
      1. Bring every vertex into camera space (rotate by the negated camera
         angles after subtracting the camera position).
      2. Project to screen space with the pinhole model of CameraState.
      3. Sort faces far-to-near by camera-space centroid z (painter's
         algorithm: later commands occlude earlier ones).
      4. Classify each face as front- or back-facing from the winding of its
         first three projected vertices.
      5. Shade front faces from the light direction; back faces get a flat
         tone derived from the background.

    The result is a list of DrawCommand records. Rasterization is left to a
    render context (see render_engines), which must draw the commands in
    order, filling each polygon before outlining it.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from prisma.elements.prisma_face import Color
from prisma.mathutils.prisma_plane import Plane
from prisma.prisma_camera import CameraState, to_camera_space, project_points
from prisma.prisma_shading import light_intensity, shade, backfacing_color
from prisma.profiling import profile, perf_marker

logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND = (255, 255, 255)

# Used for faces built without a color
DEFAULT_FACE_COLOR = (128, 128, 128)

# Range of a 32-bit screen coordinate
SCREEN_INT_MIN = -2 ** 31
SCREEN_INT_MAX = 2 ** 31 - 1


def screen_int(value) -> int:
    """
    Truncate a screen coordinate toward zero without raising.

    NaN maps to 0 and values beyond the 32-bit range, infinities included,
    clamp to its ends.
    """
    if math.isnan(value):
        return 0
    if value >= SCREEN_INT_MAX:
        return SCREEN_INT_MAX
    if value <= SCREEN_INT_MIN:
        return SCREEN_INT_MIN
    return int(value)


@dataclass(frozen=True)
class DrawCommand:
    """
    One polygon of the draw list.

    Attributes:
        points: Screen-space (x, y) points as floats.
        fill_color: Fill color.
        outline_color: Outline color, or None for back-facing faces, which
            are only filled.
        front_facing: Result of the back-face test on the projected polygon.
        depth: Camera-space z of the face centroid.
        face_index: Index of the source face in the mesh.
    """
    points: Tuple[Tuple[float, float], ...]
    fill_color: Color
    outline_color: Optional[Color]
    front_facing: bool
    depth: float
    face_index: int

    @property
    def polygon(self) -> Tuple[Tuple[int, int], ...]:
        """Integer screen points, truncated toward zero (see screen_int)."""
        return tuple((screen_int(x), screen_int(y)) for x, y in self.points)


def depth_order(depths) -> List[int]:
    """Indices sorted far-to-near (descending depth); ties keep input order."""
    depths = np.asarray(depths, dtype=float)
    return [int(i) for i in np.argsort(-depths, kind='stable')]


def is_front_facing(p0, p1, p2) -> bool:
    """
    Orientation of a projected triangle.

    Front-facing when the z component of (p1 - p0) x (p2 - p0) is positive.
    A degenerate (zero-area) triangle has no normal and counts as back-facing.
    """
    cross_z = (p1[0] - p0[0]) * (p2[1] - p0[1]) - (p1[1] - p0[1]) * (p2[0] - p0[0])
    return cross_z > 0.0


class PrismaRender(object):
    """
    Renders a mesh from a camera into a back-to-front draw list.
    """

    @staticmethod
    @profile("render")
    def render(mesh, camera: Optional[CameraState] = None, width: int = 400, height: int = 400,
               background: Color = DEFAULT_BACKGROUND) -> List[DrawCommand]:
        camera = camera or CameraState()

        indices = [i for i, face in enumerate(mesh.faces) if face.vertex_count >= 3]
        if len(indices) != len(mesh.faces):
            logger.debug("Skipping %d degenerate faces", len(mesh.faces) - len(indices))
        if not indices:
            return []

        faces = [mesh.faces[i] for i in indices]

        with perf_marker("camera_transform"):
            counts = [face.vertex_count for face in faces]
            offsets = np.concatenate(([0], np.cumsum(counts)))
            world = np.array([v.to_tuple() for face in faces for v in face.vertices], dtype=float)
            camera_points = to_camera_space(world, camera)
            screen_points = project_points(camera_points, camera, width, height)
            depths = [camera_points[offsets[k]:offsets[k + 1], 2].mean() for k in range(len(faces))]

        with perf_marker("depth_sort"):
            order = depth_order(depths)

        back_color = backfacing_color(background)
        commands = []
        with perf_marker("shade"):
            for k in order:
                start, end = offsets[k], offsets[k + 1]
                face = faces[k]
                screen = screen_points[start:end]
                cam = camera_points[start:end]

                front = is_front_facing(screen[0], screen[1], screen[2])
                if front:
                    normal = Plane.from_points(cam[0], cam[1], cam[2]).n
                    light = light_intensity(camera.light_direction, normal)
                    fill_color, outline_color = shade(face.color or DEFAULT_FACE_COLOR, light)
                else:
                    fill_color, outline_color = back_color, None

                commands.append(DrawCommand(
                    points=tuple((float(x), float(y)) for x, y in screen),
                    fill_color=fill_color,
                    outline_color=outline_color,
                    front_facing=front,
                    depth=float(depths[k]),
                    face_index=indices[k],
                ))

        return commands

    @staticmethod
    def draw(commands, render_context, width: int = 0, height: int = 0,
             background: Optional[Color] = None):
        """Feed a draw list to a render context in order."""
        render_context.render_commands(commands, width, height, background)
        return render_context
