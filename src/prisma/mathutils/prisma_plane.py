"""
Plane - a point and a unit normal.
"""

from dataclasses import dataclass

from .vec3 import Vector3


@dataclass(frozen=True)
class Plane:
    """A plane through point p with unit normal n."""
    p: Vector3
    n: Vector3

    def __post_init__(self):
        # Accept plain sequences for convenience
        if not isinstance(self.p, Vector3):
            object.__setattr__(self, 'p', Vector3(self.p))
        if not isinstance(self.n, Vector3):
            object.__setattr__(self, 'n', Vector3(self.n))

    @staticmethod
    def from_points(v1, v2, v3) -> 'Plane':
        """
        Plane through three non-collinear points.

        The point is the centroid of the three; the normal is the normalised
        (v2 - v1) x (v3 - v1), so counter-clockwise points face the viewer.
        Collinear points give a NaN normal.
        """
        v1, v2, v3 = Vector3(v1), Vector3(v2), Vector3(v3)
        p = v1.add(v2).add(v3).mul(1.0 / 3.0)
        n = v2.sub(v1).cross(v3.sub(v1)).unit()
        return Plane(p, n)

    def signed_distance(self, v) -> float:
        """Distance of v along the normal; positive in front of the plane."""
        return (v[0] - self.p.x) * self.n.x + (v[1] - self.p.y) * self.n.y + (v[2] - self.p.z) * self.n.z

    def offset(self, distance: float) -> 'Plane':
        """The parallel plane moved by distance along the normal."""
        return Plane(self.p.add(self.n.mul(distance)), self.n)

    def flipped(self) -> 'Plane':
        """The same plane facing the other way."""
        return Plane(self.p, self.n.neg())
