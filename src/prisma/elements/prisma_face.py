"""
    A face is an N-vertex planar polygon with a single base color.

    Faces are the unit of geometry for meshes. They are immutable: every
    operation returns a new Face, keeping the color of the original.

    Winding:
    - Vertex order defines the winding; the mesh convention is that vertices
      appear counter-clockwise when the face is seen from outside the solid.
    - A face with zero vertices is a valid result of clipping a face that lies
      entirely behind a plane. Consumers filter such faces out.
"""

from typing import Iterable, Optional, Tuple

from prisma.mathutils.vec3 import Vector3, vec3_mean
from prisma.mathutils.prisma_plane import Plane

Color = Tuple[int, int, int]

# Vertices closer than this to a clipping plane count as lying on it
CLIP_EPSILON = 0.01

_ON = 0
_FRONT = 1
_BACK = 2


class Face:
    """
    An ordered polygon with an associated color.

    Attributes:
        vertices: Tuple of Vector3 in winding order
        color: (r, g, b) integer tuple, 0-255 per channel
    """
    __slots__ = ('_vertices', '_color')

    def __init__(self, vertices: Iterable = (), color: Optional[Color] = None):
        object.__setattr__(self, '_vertices', tuple(
            v if isinstance(v, Vector3) else Vector3(v) for v in vertices))
        object.__setattr__(self, '_color', tuple(color) if color is not None else None)

    def __setattr__(self, name, value):
        raise AttributeError("Face is immutable")

    @property
    def vertices(self) -> Tuple[Vector3, ...]:
        """The polygon vertices in winding order."""
        return self._vertices

    @property
    def color(self) -> Optional[Color]:
        return self._color

    @property
    def vertex_count(self) -> int:
        """Number of vertices in the polygon."""
        return len(self._vertices)

    @property
    def is_empty(self) -> bool:
        return not self._vertices

    def __len__(self):
        return len(self._vertices)

    def __eq__(self, other):
        if not isinstance(other, Face):
            return NotImplemented
        return self._vertices == other._vertices and self._color == other._color

    def __hash__(self):
        return hash((self._vertices, self._color))

    def __repr__(self):
        return f"Face({list(self._vertices)!r}, color={self._color!r})"

    def set_vertices(self, vertices) -> 'Face':
        """Copy of this face with new vertices and the same color."""
        return Face(vertices, self._color)

    def set_color(self, color: Color) -> 'Face':
        """Copy of this face with the same vertices and a new color."""
        return Face(self._vertices, color)

    # -------------------------------------------------------------------------
    # Geometric queries
    # -------------------------------------------------------------------------

    def centroid(self) -> Vector3:
        """Arithmetic mean of the vertices."""
        return vec3_mean(self._vertices)

    def plane(self) -> Plane:
        """Supporting plane from the first three vertices."""
        v = self._vertices
        return Plane.from_points(v[0], v[1], v[2])

    # -------------------------------------------------------------------------
    # Editing operations
    # -------------------------------------------------------------------------

    def transform(self, matrix) -> 'Face':
        """Apply a Matrix44 to every vertex."""
        return self.set_vertices([matrix.mul(v) for v in self._vertices])

    def shorten(self, length: float) -> 'Face':
        """
        Inset the face by a constant margin.

        Each vertex moves a fixed distance toward the centroid, giving the
        visual gap between neighbouring puzzle stickers.
        """
        centroid = self.centroid()
        vertices = []
        for v in self._vertices:
            d = v.sub(centroid).unit()
            vertices.append(v.sub(d.mul(length)))
        return self.set_vertices(vertices)

    def soften(self, length: float) -> 'Face':
        """
        Bevel the corners of the face.

        Every edge longer than 2 * length contributes two points, each at
        distance length from one endpoint. Shorter edges collapse to their
        midpoint. The result has at most twice as many vertices.
        """
        vertices = []
        n = len(self._vertices)
        for i in range(n):
            v1 = self._vertices[i]
            v2 = self._vertices[(i + 1) % n]

            if v2.sub(v1).norm() > 2.0 * length:
                vertices.append(v1.add(v2.sub(v1).unit().mul(length)))
                vertices.append(v2.add(v1.sub(v2).unit().mul(length)))
            else:
                vertices.append(v1.add(v2).mul(0.5))
        return self.set_vertices(vertices)

    def clip(self, plane: Plane) -> 'Face':
        """
        Keep the part of the face in front of the plane.

        Single-plane Sutherland-Hodgman clip for convex polygons. Vertices
        within CLIP_EPSILON of the plane are treated as lying on it, so
        near-coincident vertices do not produce slivers. A face with no
        vertex strictly in front of the plane comes back empty (this includes
        a face lying in the plane); otherwise a face with no vertex behind
        the plane is returned unchanged.
        """
        n = len(self._vertices)
        position = [_ON] * n
        all_front = True
        all_back = True
        for i, v in enumerate(self._vertices):
            d = plane.signed_distance(v)
            if d > CLIP_EPSILON:
                position[i] = _FRONT
                all_back = False
            elif d < -CLIP_EPSILON:
                position[i] = _BACK
                all_front = False
            # On-plane vertices leave both flags unchanged

        if all_back:
            return self.set_vertices(())

        if all_front:
            return self

        vertices = []
        for i in range(n):
            v1 = self._vertices[i]
            v2 = self._vertices[(i + 1) % n]
            p1 = position[i]
            p2 = position[(i + 1) % n]

            if p1 != _BACK:
                vertices.append(v1)

            if (p1 == _FRONT and p2 == _BACK) or (p1 == _BACK and p2 == _FRONT):
                edge = v2.sub(v1)
                t = -plane.signed_distance(v1) / edge.dot(plane.n)
                vertices.append(v1.add(edge.mul(t)))
        return self.set_vertices(vertices)
