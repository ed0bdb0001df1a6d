"""
    A mesh is an unordered collection of independent faces.

    Meshes carry no connectivity: faces are a polygon soup, so clipping and
    cutting may leave the surface open at the cut. Like faces, meshes are
    immutable and every editing operation returns a new Mesh.

    The factories (cube, tetrahedron, dodecahedron) build the solids used by
    the twisty-puzzle models. Each takes one color per face, in a fixed face
    order, and indexes the color sequence directly.
"""

import logging
import math
from typing import Iterable, Sequence, Tuple

from prisma.mathutils.prisma_math import Matrix44
from prisma.mathutils.prisma_plane import Plane
from prisma.mathutils.vec3 import Vector3
from prisma.elements.prisma_face import Face, Color

logger = logging.getLogger(__name__)


class Mesh:
    """
    An unordered collection of Faces.

    Attributes:
        faces: Tuple of Face
    """
    __slots__ = ('_faces',)

    def __init__(self, faces: Iterable[Face] = ()):
        object.__setattr__(self, '_faces', tuple(faces))

    def __setattr__(self, name, value):
        raise AttributeError("Mesh is immutable")

    @property
    def faces(self) -> Tuple[Face, ...]:
        return self._faces

    def __len__(self):
        return len(self._faces)

    def __iter__(self):
        return iter(self._faces)

    def __eq__(self, other):
        if not isinstance(other, Mesh):
            return NotImplemented
        return self._faces == other._faces

    def __hash__(self):
        return hash(self._faces)

    def __repr__(self):
        return f"Mesh({len(self._faces)} faces)"

    # -------------------------------------------------------------------------
    # Editing operations
    # -------------------------------------------------------------------------

    def transform(self, matrix: Matrix44) -> 'Mesh':
        """Apply a Matrix44 to every face."""
        return Mesh(face.transform(matrix) for face in self._faces)

    def rotate_halfspace(self, plane: Plane, angle: float) -> 'Mesh':
        """
        Turn one layer of the puzzle.

        Every face whose centroid is on or in front of the plane rotates by
        angle (radians) about the plane normal through the origin; faces
        strictly behind it stay where they are.
        """
        matrix = Matrix44.rotation(plane.n, angle)

        faces = []
        for face in self._faces:
            if plane.signed_distance(face.centroid()) >= 0.0:
                face = face.transform(matrix)
            faces.append(face)
        return Mesh(faces)

    def shorten_faces(self, length: float) -> 'Mesh':
        """Inset every face by length (see Face.shorten)."""
        return Mesh(face.shorten(length) for face in self._faces)

    def soften_faces(self, length: float) -> 'Mesh':
        """Bevel the corners of every face (see Face.soften)."""
        return Mesh(face.soften(length) for face in self._faces)

    def clip(self, plane: Plane) -> 'Mesh':
        """Keep the geometry in front of the plane, dropping emptied faces."""
        faces = []
        for face in self._faces:
            clipped = face.clip(plane)
            if clipped.vertex_count > 0:
                faces.append(clipped)
        return Mesh(faces)

    def cut(self, plane: Plane, width: float) -> 'Mesh':
        """
        Remove a slab of the given width centred on the plane.

        The mesh is clipped once against the plane moved width/2 forward and
        once against the plane moved width/2 back with its normal reversed;
        the two halves are then joined, leaving a gap between the layers.
        """
        front = self.clip(plane.offset(width / 2.0))
        back = self.clip(Plane(plane.p.sub(plane.n.mul(width / 2.0)), plane.n.neg()))
        logger.debug("cut: %d faces -> %d front + %d back",
                     len(self._faces), len(front), len(back))
        return front.union(back)

    def union(self, mesh: 'Mesh') -> 'Mesh':
        """Concatenate face lists; no welding or deduplication."""
        return Mesh(self._faces + mesh.faces)

    # -------------------------------------------------------------------------
    # Factory methods
    # -------------------------------------------------------------------------

    @staticmethod
    def cube(colors: Sequence[Color]) -> 'Mesh':
        """
        Unit cube centred at the origin.

        Face order: -x, +z, -y, +x, -z, +y. Requires 6 colors.
        """
        a = 0.5

        v = [
            Vector3(-a, -a, -a),
            Vector3(-a, -a, a),
            Vector3(-a, a, -a),
            Vector3(-a, a, a),
            Vector3(a, -a, -a),
            Vector3(a, -a, a),
            Vector3(a, a, -a),
            Vector3(a, a, a),
        ]

        return Mesh([
            Face([v[0], v[1], v[3], v[2]], colors[0]),
            Face([v[1], v[5], v[7], v[3]], colors[1]),
            Face([v[0], v[4], v[5], v[1]], colors[2]),
            Face([v[4], v[6], v[7], v[5]], colors[3]),
            Face([v[0], v[2], v[6], v[4]], colors[4]),
            Face([v[2], v[3], v[7], v[6]], colors[5]),
        ])

    @staticmethod
    def tetrahedron(colors: Sequence[Color]) -> 'Mesh':
        """
        Regular tetrahedron with edge length 1.5, apex on +y.

        Face order: base, then the three side faces. Requires 4 colors.
        """
        a = 1.5
        h = math.sqrt(3.0) / 2.0 * a
        h1 = 2.0 * math.sqrt(2.0) / 3.0 * h

        v = [
            Vector3(0.0, -h1 / 4.0, 2.0 * h / 3.0),
            Vector3(-a / 2.0, -h1 / 4.0, -h / 3.0),
            Vector3(a / 2.0, -h1 / 4.0, -h / 3.0),
            Vector3(0.0, 3.0 * h1 / 4.0, 0.0),
        ]

        return Mesh([
            Face([v[0], v[1], v[2]], colors[0]),
            Face([v[0], v[3], v[1]], colors[1]),
            Face([v[0], v[2], v[3]], colors[2]),
            Face([v[1], v[3], v[2]], colors[3]),
        ])

    @staticmethod
    def dodecahedron(colors: Sequence[Color]) -> 'Mesh':
        """
        Regular dodecahedron with circumradius 0.85.

        Requires 12 colors.
        """
        a = 0.85 / math.sqrt(3.0)
        b = 0.85 * math.sqrt((3.0 - math.sqrt(5.0)) / 6.0)
        c = 0.85 * math.sqrt((3.0 + math.sqrt(5.0)) / 6.0)

        pentagons = [
            [(a, a, a), (b, c, 0.0), (-b, c, 0.0), (-a, a, a), (0.0, b, c)],
            [(a, a, a), (0.0, b, c), (0.0, -b, c), (a, -a, a), (c, 0.0, b)],
            [(c, 0.0, b), (a, -a, a), (b, -c, 0.0), (a, -a, -a), (c, 0.0, -b)],
            [(-b, c, 0.0), (-a, a, -a), (-c, 0.0, -b), (-c, 0.0, b), (-a, a, a)],
            [(a, -a, -a), (0.0, -b, -c), (0.0, b, -c), (a, a, -a), (c, 0.0, -b)],
            [(-a, -a, -a), (-b, -c, 0.0), (-a, -a, a), (-c, 0.0, b), (-c, 0.0, -b)],
            [(a, a, a), (c, 0.0, b), (c, 0.0, -b), (a, a, -a), (b, c, 0.0)],
            [(b, c, 0.0), (a, a, -a), (0.0, b, -c), (-a, a, -a), (-b, c, 0.0)],
            [(0.0, b, c), (-a, a, a), (-c, 0.0, b), (-a, -a, a), (0.0, -b, c)],
            [(-a, -a, a), (-b, -c, 0.0), (b, -c, 0.0), (a, -a, a), (0.0, -b, c)],
            [(-a, -a, -a), (-c, 0.0, -b), (-a, a, -a), (0.0, b, -c), (0.0, -b, -c)],
            [(-a, -a, -a), (0.0, -b, -c), (a, -a, -a), (b, -c, 0.0), (-b, -c, 0.0)],
        ]

        return Mesh(Face(points, colors[i]) for i, points in enumerate(pentagons))
