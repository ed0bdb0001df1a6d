"""
Unit tests for Face.

Tests cover value semantics, centroid and transform, the shorten/soften
edits, and single-plane clipping including the on-plane tolerance.
"""

import math
import unittest

import numpy as np

from prisma.mathutils.vec3 import Vector3
from prisma.mathutils.prisma_math import Matrix44, compose
from prisma.mathutils.prisma_plane import Plane
from prisma.elements.prisma_face import Face, CLIP_EPSILON
from test_fixtures.assertions import assert_vertices_close, polygon_area

RED = (255, 0, 0)


def square(size=2.0, z=0.0, color=RED):
    """Counter-clockwise square centred on the z axis."""
    h = size / 2.0
    return Face([(-h, -h, z), (h, -h, z), (h, h, z), (-h, h, z)], color)


class FaceValueTests(unittest.TestCase):
    """Tests for construction and value semantics"""

    def testConstructionConvertsVertices(self):
        face = square()
        self.assertEqual(face.vertex_count, 4)
        self.assertTrue(all(isinstance(v, Vector3) for v in face.vertices))
        self.assertEqual(face.color, RED)

    def testEmptyFace(self):
        face = Face()
        self.assertTrue(face.is_empty)
        self.assertEqual(len(face), 0)

    def testImmutable(self):
        face = square()
        with self.assertRaises(AttributeError):
            face.color = (0, 0, 0)

    def testSettersReturnCopies(self):
        face = square()
        recolored = face.set_color((0, 255, 0))
        self.assertEqual(recolored.color, (0, 255, 0))
        self.assertEqual(recolored.vertices, face.vertices)
        self.assertEqual(face.color, RED)

        moved = face.set_vertices([(0, 0, 0), (1, 0, 0), (0, 1, 0)])
        self.assertEqual(moved.vertex_count, 3)
        self.assertEqual(moved.color, RED)
        self.assertEqual(face.vertex_count, 4)

    def testEqualityAndHash(self):
        self.assertEqual(square(), square())
        self.assertEqual(hash(square()), hash(square()))
        self.assertNotEqual(square(), square(color=(0, 0, 255)))


class FaceGeometryTests(unittest.TestCase):
    """Tests for centroid, plane and transform"""

    def testCentroid(self):
        face = Face([(0, 0, 0), (2, 0, 0), (2, 2, 0), (0, 2, 0)])
        self.assertEqual(face.centroid(), Vector3(1, 1, 0))

    def testPlaneFromFirstThreeVertices(self):
        plane = square().plane()
        self.assertTrue(plane.n.isclose((0, 0, 1)))

    def testTransformKeepsColor(self):
        face = square().transform(Matrix44.translation((0, 0, 5)))
        assert_vertices_close(self, face, [(-1, -1, 5), (1, -1, 5), (1, 1, 5), (-1, 1, 5)])
        self.assertEqual(face.color, RED)

    def testTransformRoundTrip(self):
        """Applying the negated rotations in reverse order restores the face"""
        face = Face([(0.3, -1.2, 2.0), (1.5, 0.1, -0.4), (-0.7, 0.9, 0.2)])
        forward = compose(Matrix44.rotation_x(0.4), Matrix44.rotation_y(-1.1), Matrix44.rotation_z(2.3))
        backward = compose(Matrix44.rotation_z(-2.3), Matrix44.rotation_y(1.1), Matrix44.rotation_x(-0.4))
        restored = face.transform(forward).transform(backward)
        assert_vertices_close(self, restored, [tuple(v) for v in face.vertices], atol=1e-9)


class FaceEditTests(unittest.TestCase):
    """Tests for shorten and soften"""

    def testShortenMovesVerticesTowardCentroid(self):
        face = square(2.0).shorten(math.sqrt(2.0) * 0.25)
        assert_vertices_close(self, face, [(-0.75, -0.75, 0), (0.75, -0.75, 0),
                                           (0.75, 0.75, 0), (-0.75, 0.75, 0)])

    def testSoftenLongEdgesDoublesVertexCount(self):
        face = square(2.0).soften(0.25)
        self.assertEqual(face.vertex_count, 8)
        # First edge (-1,-1) -> (1,-1) contributes two points 0.25 from each end
        self.assertTrue(face.vertices[0].isclose((-0.75, -1, 0)))
        self.assertTrue(face.vertices[1].isclose((0.75, -1, 0)))

    def testSoftenShortEdgesCollapseToMidpoints(self):
        face = square(2.0).soften(1.0)
        assert_vertices_close(self, face, [(0, -1, 0), (1, 0, 0), (0, 1, 0), (-1, 0, 0)])

    def testSoftenKeepsColor(self):
        self.assertEqual(square().soften(0.1).color, RED)


class FaceClipTests(unittest.TestCase):
    """Tests for single-plane clipping"""

    def testEntirelyInFrontIsUnchanged(self):
        face = square()
        clipped = face.clip(Plane(Vector3(0, 0, -1), Vector3(0, 0, 1)))
        self.assertEqual(clipped, face)
        self.assertEqual(clipped.vertices, face.vertices)

    def testEntirelyBehindIsEmpty(self):
        clipped = square().clip(Plane(Vector3(0, 0, 1), Vector3(0, 0, 1)))
        self.assertTrue(clipped.is_empty)
        self.assertEqual(clipped.color, RED)

    def testFaceInPlaneIsEmpty(self):
        """A face with no vertex strictly in front comes back empty"""
        clipped = square().clip(Plane(Vector3(0, 0, 0), Vector3(0, 0, 1)))
        self.assertTrue(clipped.is_empty)

    def testClipThroughCentre(self):
        """Two intersection points plus the retained vertices"""
        clipped = square().clip(Plane(Vector3(0, 0, 0), Vector3(1, 0, 0)))
        assert_vertices_close(self, clipped, [(0, -1, 0), (1, -1, 0), (1, 1, 0), (0, 1, 0)])

    def testClipResultIsPlanarAndConvex(self):
        face = square()
        plane = Plane(Vector3(0.2, 0, 0), Vector3(1, 1, 0).unit())
        clipped = face.clip(plane)
        self.assertGreaterEqual(clipped.vertex_count, 3)
        points = np.array([tuple(v) for v in clipped.vertices])
        self.assertTrue(np.allclose(points[:, 2], 0.0))
        # Convex counter-clockwise polygon: every turn is to the left
        n = len(points)
        for i in range(n):
            a, b, c = points[i], points[(i + 1) % n], points[(i + 2) % n]
            turn = (b[0] - a[0]) * (c[1] - b[1]) - (b[1] - a[1]) * (c[0] - b[0])
            self.assertGreater(turn, -1e-12)
        for v in clipped.vertices:
            self.assertGreaterEqual(plane.signed_distance(v), -CLIP_EPSILON)

    def testClipAtCornerCreatesTriangle(self):
        clipped = square().clip(Plane(Vector3(0.5, 0.5, 0), Vector3(1, 1, 0).unit()))
        assert_vertices_close(self, clipped, [(1, 0, 0), (1, 1, 0), (0, 1, 0)])

    def testNearPlaneVertexIsNotSplit(self):
        """A vertex within the tolerance counts as on the plane"""
        tri = Face([(0, 0, 0.005), (1, 0, 1), (-1, 0, -1)])
        clipped = tri.clip(Plane(Vector3(0, 0, 0), Vector3(0, 0, 1)))
        # Front vertex kept, on-plane vertex kept, one intersection added
        self.assertEqual(clipped.vertex_count, 3)
        self.assertTrue(clipped.vertices[0].isclose((0, 0, 0.005)))

    def testClipPreservesArea(self):
        face = square()
        plane = Plane(Vector3(0.3, 0, 0), Vector3(1, 0, 0))
        front = face.clip(plane)
        back = face.clip(plane.flipped())
        self.assertAlmostEqual(polygon_area(front) + polygon_area(back), polygon_area(face))


if __name__ == '__main__':
    unittest.main()
