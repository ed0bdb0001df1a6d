"""Test fixtures and utilities for prisma testing.

- assertions: Custom assertion functions (assert_vertices_close, polygon_area)
"""

from .assertions import assert_vertices_close, polygon_area, mesh_area, PRIMARY_COLORS

__all__ = [
    'assert_vertices_close',
    'polygon_area',
    'mesh_area',
    'PRIMARY_COLORS',
]
