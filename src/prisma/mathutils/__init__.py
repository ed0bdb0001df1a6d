"""Vector, matrix and plane primitives."""
