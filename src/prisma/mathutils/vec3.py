"""
Pure Python 3D vector math.

This module provides Vector3, an immutable 3D vector. For 3-element vectors,
pure Python is considerably faster than numpy arrays due to avoiding array
creation overhead, so the hot geometry paths (faces, clipping, shading) stay
on plain floats and only the per-frame projection is batched with numpy.

Vector3 supports arithmetic operators (+, -, *, /, unary -) and indexing, and
exposes the same operations as named methods (neg, add, sub, mul, dot, cross,
norm, unit) for call sites that read better without operators.
"""
import math


class Vector3:
    """
    An immutable 3D vector.

    Stores components directly in slots for fast access. Every operation
    returns a new vector; assigning to a component raises AttributeError.
    Supports indexing and unpacking like a tuple for compatibility.
    """
    __slots__ = ('x', 'y', 'z')

    def __init__(self, x=0.0, y=0.0, z=0.0):
        # Fast path: three scalars
        try:
            object.__setattr__(self, 'x', float(x))
            object.__setattr__(self, 'y', float(y))
            object.__setattr__(self, 'z', float(z))
        except TypeError:
            # x is a sequence (tuple, list, array, Vector3)
            object.__setattr__(self, 'x', float(x[0]))
            object.__setattr__(self, 'y', float(x[1]))
            object.__setattr__(self, 'z', float(x[2]))

    def __setattr__(self, name, value):
        raise AttributeError(f"Vector3 is immutable, cannot set '{name}'")

    def __delattr__(self, name):
        raise AttributeError(f"Vector3 is immutable, cannot delete '{name}'")

    def __getitem__(self, i):
        if i == 0 or i == -3: return self.x
        if i == 1 or i == -2: return self.y
        if i == 2 or i == -1: return self.z
        raise IndexError(f"Vector3 index {i} out of range")

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __len__(self):
        return 3

    def __repr__(self):
        return f"Vector3({self.x}, {self.y}, {self.z})"

    def __eq__(self, other):
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __reduce__(self):
        return (Vector3, (self.x, self.y, self.z))

    # -------------------------------------------------------------------------
    # Named operations
    # -------------------------------------------------------------------------

    def neg(self):
        """Negated copy."""
        return Vector3(-self.x, -self.y, -self.z)

    def add(self, other):
        """Component-wise sum."""
        return Vector3(self.x + other[0], self.y + other[1], self.z + other[2])

    def sub(self, other):
        """Component-wise difference."""
        return Vector3(self.x - other[0], self.y - other[1], self.z - other[2])

    def mul(self, scalar):
        """Scale by a scalar."""
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def dot(self, other):
        """Dot product."""
        return self.x * other[0] + self.y * other[1] + self.z * other[2]

    def cross(self, other):
        """Cross product (right-handed)."""
        return Vector3(
            self.y * other[2] - self.z * other[1],
            self.z * other[0] - self.x * other[2],
            self.x * other[1] - self.y * other[0]
        )

    def norm(self):
        """Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def unit(self):
        """
        Return the vector scaled to unit length.

        A zero vector has no direction; following IEEE division the result
        has NaN components rather than raising. Callers are expected to pass
        non-degenerate input.
        """
        n = self.norm()
        inv = 1.0 / n if n != 0.0 else math.inf
        return self.mul(inv)

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __neg__(self):
        return Vector3(-self.x, -self.y, -self.z)

    def __add__(self, other):
        # Try direct attribute access first (fast path for Vector3)
        try:
            return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)
        except AttributeError:
            return Vector3(self.x + other[0], self.y + other[1], self.z + other[2])

    def __radd__(self, other):
        return Vector3(self.x + other[0], self.y + other[1], self.z + other[2])

    def __sub__(self, other):
        try:
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        except AttributeError:
            return Vector3(self.x - other[0], self.y - other[1], self.z - other[2])

    def __rsub__(self, other):
        return Vector3(other[0] - self.x, other[1] - self.y, other[2] - self.z)

    def __mul__(self, scalar):
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar):
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar):
        inv = 1.0 / scalar
        return Vector3(self.x * inv, self.y * inv, self.z * inv)

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def isclose(self, other, tol=1e-9):
        """True when every component is within tol of other's."""
        return (abs(self.x - other[0]) <= tol and
                abs(self.y - other[1]) <= tol and
                abs(self.z - other[2]) <= tol)

    def to_tuple(self):
        """Convert to tuple."""
        return (self.x, self.y, self.z)

    def to_list(self):
        """Convert to list."""
        return [self.x, self.y, self.z]


ZERO = Vector3(0.0, 0.0, 0.0)


# Standalone functions for tuple-based math (for places that don't use Vector3)

def vec3_lerp(a, b, t):
    """Linear interpolation between two points. Returns Vector3."""
    return Vector3(
        a[0] + t * (b[0] - a[0]),
        a[1] + t * (b[1] - a[1]),
        a[2] + t * (b[2] - a[2])
    )


def vec3_mean(points):
    """Arithmetic mean of a sequence of points. Returns Vector3."""
    sx = sy = sz = 0.0
    count = 0
    for p in points:
        sx += p[0]
        sy += p[1]
        sz += p[2]
        count += 1
    # An empty sequence gives NaN, matching Vector3.unit on a zero vector
    inv = 1.0 / count if count else math.inf
    return Vector3(sx * inv, sy * inv, sz * inv)
