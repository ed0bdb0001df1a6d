"""
Matrix44 - immutable 4x4 affine transforms.

Matrices are stored row-major as tuple-of-tuples and act on column vectors:
a point v is transformed as M @ (x, y, z, 1) and the resulting w is dropped.
Only affine and pure-rotation matrices are ever built by the factories, so
the bottom row is always (0, 0, 0, 1).

Rotation sign convention:
    rotation_x/y/z(a) follow the camera convention of the rendering pipeline.
    rotation_x and rotation_z put +sin above the diagonal, rotation_y puts
    -sin there (its mirror). Composing rotation_x(-rx) @ rotation_y(-ry) @
    rotation_z(-rz) maps world to camera space and the reverse composition
    with positive angles maps back. rotation(axis, a) is Rodrigues' formula
    and rotates counter-clockwise about a unit axis.
"""

import math
import numpy as np

from .vec3 import Vector3

# Identity matrix as tuple-of-tuples (immutable)
_IDENTITY_4x4_TUPLE = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0)
)


def mat_mul(matrix1, matrix2):
    """Multiply two 4x4 tuple-of-tuples matrices."""
    result = [[0.0] * 4 for _ in range(4)]
    for i in range(4):
        row = matrix1[i]
        for j in range(4):
            result[i][j] = (row[0] * matrix2[0][j] + row[1] * matrix2[1][j] +
                            row[2] * matrix2[2][j] + row[3] * matrix2[3][j])
    return tuple(tuple(row) for row in result)


def transform_point(point, matrix):
    """Transform a 3D point (implicit w=1) by a 4x4 matrix. Returns Vector3."""
    x, y, z = point[0], point[1], point[2]
    m0, m1, m2 = matrix[0], matrix[1], matrix[2]
    return Vector3(
        m0[0] * x + m0[1] * y + m0[2] * z + m0[3],
        m1[0] * x + m1[1] * y + m1[2] * z + m1[3],
        m2[0] * x + m2[1] * y + m2[2] * z + m2[3]
    )


class Matrix44:
    """
    Immutable 4x4 matrix.

    Construct from any 4x4 nested sequence (tuples, lists, numpy array).
    Use the factory class methods for transforms.
    """
    __slots__ = ('_rows',)

    def __init__(self, rows=_IDENTITY_4x4_TUPLE):
        rows = tuple(tuple(float(v) for v in row) for row in rows)
        if len(rows) != 4 or any(len(row) != 4 for row in rows):
            raise ValueError("Matrix44 requires exactly 4 rows of 4 values")
        object.__setattr__(self, '_rows', rows)

    def __setattr__(self, name, value):
        raise AttributeError("Matrix44 is immutable")

    @property
    def rows(self):
        """The matrix as a tuple of four row tuples."""
        return self._rows

    def __getitem__(self, index):
        # Supports both m[i] (row) and m[i, j] (element)
        if isinstance(index, tuple):
            i, j = index
            return self._rows[i][j]
        return self._rows[index]

    def __eq__(self, other):
        if not isinstance(other, Matrix44):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self):
        return hash(self._rows)

    def __repr__(self):
        return f"Matrix44({self._rows!r})"

    def __array__(self, dtype=None, copy=None):
        return np.array(self._rows, dtype=dtype or float)

    def to_array(self) -> np.ndarray:
        """Return the matrix as a 4x4 numpy array."""
        return np.array(self._rows, dtype=float)

    # -------------------------------------------------------------------------
    # Multiplication
    # -------------------------------------------------------------------------

    def mul(self, other):
        """
        Multiply by another Matrix44 (matrix product) or by a point.

        Points (Vector3 or any 3-sequence) are treated as homogeneous with
        w=1; the resulting w is not renormalised.
        """
        if isinstance(other, Matrix44):
            return Matrix44(mat_mul(self._rows, other._rows))
        return transform_point(other, self._rows)

    def __matmul__(self, other):
        if isinstance(other, Matrix44):
            return Matrix44(mat_mul(self._rows, other._rows))
        try:
            return transform_point(other, self._rows)
        except (TypeError, IndexError):
            return NotImplemented

    def rotation_part(self):
        """The upper-left 3x3 block as a numpy array."""
        return np.array([row[:3] for row in self._rows[:3]], dtype=float)

    def translation_part(self) -> Vector3:
        """The translation column."""
        return Vector3(self._rows[0][3], self._rows[1][3], self._rows[2][3])

    def inverse(self) -> 'Matrix44':
        """General inverse via numpy. Raises numpy.linalg.LinAlgError if singular."""
        return Matrix44(np.linalg.inv(self.to_array()))

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def identity(cls) -> 'Matrix44':
        return cls(_IDENTITY_4x4_TUPLE)

    @classmethod
    def translation(cls, v) -> 'Matrix44':
        """Identity with translation column = v."""
        return cls((
            (1.0, 0.0, 0.0, v[0]),
            (0.0, 1.0, 0.0, v[1]),
            (0.0, 0.0, 1.0, v[2]),
            (0.0, 0.0, 0.0, 1.0)
        ))

    @classmethod
    def scale(cls, v) -> 'Matrix44':
        """Axis-aligned scale by (v.x, v.y, v.z)."""
        return cls((
            (v[0], 0.0, 0.0, 0.0),
            (0.0, v[1], 0.0, 0.0),
            (0.0, 0.0, v[2], 0.0),
            (0.0, 0.0, 0.0, 1.0)
        ))

    @classmethod
    def rotation_x(cls, angle: float) -> 'Matrix44':
        c, s = math.cos(angle), math.sin(angle)
        return cls((
            (1.0, 0.0, 0.0, 0.0),
            (0.0, c, s, 0.0),
            (0.0, -s, c, 0.0),
            (0.0, 0.0, 0.0, 1.0)
        ))

    @classmethod
    def rotation_y(cls, angle: float) -> 'Matrix44':
        c, s = math.cos(angle), math.sin(angle)
        return cls((
            (c, 0.0, -s, 0.0),
            (0.0, 1.0, 0.0, 0.0),
            (s, 0.0, c, 0.0),
            (0.0, 0.0, 0.0, 1.0)
        ))

    @classmethod
    def rotation_z(cls, angle: float) -> 'Matrix44':
        c, s = math.cos(angle), math.sin(angle)
        return cls((
            (c, s, 0.0, 0.0),
            (-s, c, 0.0, 0.0),
            (0.0, 0.0, 1.0, 0.0),
            (0.0, 0.0, 0.0, 1.0)
        ))

    @classmethod
    def rotation(cls, axis, angle: float) -> 'Matrix44':
        """
        Rotation about an arbitrary axis using Rodrigues' rotation formula.

        The axis must already be unit length; it is not normalised here.
        """
        c, s = math.cos(angle), math.sin(angle)
        x, y, z = axis[0], axis[1], axis[2]
        t = 1.0 - c
        return cls((
            (1.0 + t * (x * x - 1.0), -z * s + t * x * y, y * s + t * x * z, 0.0),
            (z * s + t * x * y, 1.0 + t * (y * y - 1.0), -x * s + t * y * z, 0.0),
            (-y * s + t * x * z, x * s + t * y * z, 1.0 + t * (z * z - 1.0), 0.0),
            (0.0, 0.0, 0.0, 1.0)
        ))


def identity():
    """Return the 4x4 identity Matrix44."""
    return Matrix44.identity()


def compose(*matrices):
    """
    Multiply matrices left to right: compose(A, B, C) == A @ B @ C.

    The rightmost matrix is applied to points first.
    """
    result = _IDENTITY_4x4_TUPLE
    for matrix in matrices:
        result = mat_mul(result, matrix.rows)
    return Matrix44(result)


def euler_to_camera(rotation):
    """World-to-camera rotation for Euler angles (rx, ry, rz)."""
    return compose(
        Matrix44.rotation_x(-rotation[0]),
        Matrix44.rotation_y(-rotation[1]),
        Matrix44.rotation_z(-rotation[2]),
    )


def euler_from_camera(rotation):
    """Camera-to-world rotation for Euler angles (rx, ry, rz); inverse of euler_to_camera."""
    return compose(
        Matrix44.rotation_z(rotation[2]),
        Matrix44.rotation_y(rotation[1]),
        Matrix44.rotation_x(rotation[0]),
    )
