"""Prisma - Flat-shaded polyhedron rendering library."""

__version__ = "0.1.0"

from prisma.mathutils.vec3 import Vector3
from prisma.mathutils.prisma_math import Matrix44
from prisma.mathutils.prisma_plane import Plane
from prisma.elements.prisma_face import Face
from prisma.elements.prisma_mesh import Mesh
from prisma.prisma_camera import CameraState, DragEvent, WheelEvent, InteractionState
from prisma.prisma_render import PrismaRender, DrawCommand
from prisma.prisma_engine import run, PrismaConfig, PrismaResult
from prisma.logging_config import setup_logging


__all__ = [
    # Main API
    'run',
    'PrismaConfig',
    'PrismaResult',
    # Geometry
    'Vector3',
    'Matrix44',
    'Plane',
    'Face',
    'Mesh',
    # Camera and interaction
    'CameraState',
    'DragEvent',
    'WheelEvent',
    'InteractionState',
    # Rendering
    'PrismaRender',
    'DrawCommand',
    'setup_logging',
    '__version__',
]
