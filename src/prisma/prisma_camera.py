"""
Camera state and input handling for the render pipeline.

The camera is a plain value: CameraState holds the pose, the viewer (eye
offset and focal distance) and the light direction. Input never mutates it
in place. Pointer drags and wheel notches arrive as DragEvent / WheelEvent
records and pure update functions turn them into a new mesh or a new camera:

    mesh = apply_drag(mesh, camera, DragEvent(dx=12, dy=-3))
    camera = apply_wheel(camera, WheelEvent(rotation=1))

A drag spins the mesh about camera-relative axes while the camera itself
stays put. A wheel notch dollies the camera along its direction from the
origin, as long as it stays strictly between MIN_DISTANCE and MAX_DISTANCE.

InteractionState wraps the same functions for hosts that deliver raw pointer
positions rather than deltas.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional

import numpy as np

from prisma.mathutils.vec3 import Vector3
from prisma.mathutils.prisma_math import (
    Matrix44,
    compose,
    euler_to_camera,
    euler_from_camera,
)

logger = logging.getLogger(__name__)

# Pixels of pointer travel per radian of mesh rotation
DRAG_PIXELS_PER_RADIAN = 50.0

# Camera travel per wheel notch
WHEEL_STEP = 0.1

# Camera distance from the origin stays inside this open interval
MIN_DISTANCE = 1.0
MAX_DISTANCE = 50.0


@dataclass(frozen=True)
class CameraState:
    """
    Per-frame camera inputs for the render pipeline.

    Attributes:
        position: Camera position in world space.
        rotation: Euler angles (rx, ry, rz) in radians. World points are
            brought into camera space by rotating about Z, then Y, then X
            by the negated angles.
        viewer_position: Eye offset in screen units. Its z component is the
            focal distance of the projection and is normally negative.
        light_direction: Unit light direction in camera space.
    """
    position: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, -2.8))
    rotation: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 0.0))
    viewer_position: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, -325.0))
    light_direction: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.25, -1.0).unit())

    def __post_init__(self):
        # Accept plain sequences for convenience
        for name in ('position', 'rotation', 'viewer_position', 'light_direction'):
            value = getattr(self, name)
            if not isinstance(value, Vector3):
                object.__setattr__(self, name, Vector3(value))

    def set_position(self, position) -> 'CameraState':
        return replace(self, position=Vector3(position))

    def set_rotation(self, rotation) -> 'CameraState':
        return replace(self, rotation=Vector3(rotation))

    def set_viewer_position(self, viewer_position) -> 'CameraState':
        return replace(self, viewer_position=Vector3(viewer_position))

    def set_light_direction(self, light_direction) -> 'CameraState':
        return replace(self, light_direction=Vector3(light_direction))

    # -------------------------------------------------------------------------
    # Transforms
    # -------------------------------------------------------------------------

    def camera_matrix(self) -> Matrix44:
        """World-to-camera transform: rotate(-angles) applied to (v - position)."""
        return euler_to_camera(self.rotation).mul(Matrix44.translation(self.position.neg()))

    def to_camera_coordinates(self, v) -> Vector3:
        """Bring a world-space point into camera space."""
        return euler_to_camera(self.rotation).mul(Vector3(v).sub(self.position))

    def perspective_projection(self, v, width: float, height: float) -> Vector3:
        """
        Pinhole projection of a camera-space point to screen space.

        Returns (screen_x, screen_y, 0). A point at z == 0 has no projection;
        the result then holds infinite or NaN coordinates.
        """
        vx, vy, vz = self.viewer_position
        with np.errstate(divide='ignore', invalid='ignore'):
            scale = np.float64(vz) / np.float64(v[2])
        return Vector3(
            width / 2.0 + (-v[0] - vx) * scale,
            height / 2.0 + (v[1] - vy) * scale,
            0.0,
        )


def to_camera_space(points: np.ndarray, camera: CameraState) -> np.ndarray:
    """Batch world-to-camera transform of an (N, 3) array."""
    matrix = camera.camera_matrix()
    rotation = matrix.rotation_part()
    translation = np.array(matrix.translation_part().to_tuple())
    return points @ rotation.T + translation


def project_points(points: np.ndarray, camera: CameraState, width: float, height: float) -> np.ndarray:
    """Batch perspective projection of (N, 3) camera-space points. Returns (N, 2)."""
    vx, vy, vz = camera.viewer_position
    with np.errstate(divide='ignore', invalid='ignore'):
        scale = vz / points[:, 2]
        sx = width / 2.0 + (-points[:, 0] - vx) * scale
        sy = height / 2.0 + (points[:, 1] - vy) * scale
    return np.column_stack((sx, sy))


# =============================================================================
# Input events
# =============================================================================

@dataclass(frozen=True)
class DragEvent:
    """Pointer drag delta in pixels since the previous pointer position."""
    dx: float
    dy: float


@dataclass(frozen=True)
class WheelEvent:
    """Wheel movement in notches; positive moves the camera away."""
    rotation: int


def drag_matrix(camera: CameraState, event: DragEvent) -> Matrix44:
    """
    World-space rotation for a drag.

    The mesh is taken into the camera frame, rotated by dy/50 about X and
    dx/50 about Y, and taken back out.
    """
    angle_x = event.dy / DRAG_PIXELS_PER_RADIAN
    angle_y = event.dx / DRAG_PIXELS_PER_RADIAN
    return compose(
        euler_from_camera(camera.rotation),
        Matrix44.rotation_x(angle_x),
        Matrix44.rotation_y(angle_y),
        euler_to_camera(camera.rotation),
    )


def apply_drag(mesh, camera: CameraState, event: DragEvent):
    """Return the mesh rotated by a pointer drag."""
    return mesh.transform(drag_matrix(camera, event))


def apply_wheel(camera: CameraState, event: WheelEvent) -> CameraState:
    """Return the camera dollied by a wheel movement, or unchanged if out of range."""
    direction = camera.position.unit()
    new_position = camera.position.add(direction.mul(WHEEL_STEP * event.rotation))
    distance = new_position.norm()
    if MIN_DISTANCE < distance < MAX_DISTANCE:
        return camera.set_position(new_position)

    logger.debug("Zoom rejected: distance %.3f outside (%s, %s)",
                 distance, MIN_DISTANCE, MAX_DISTANCE)
    return camera


class InteractionState:
    """
    Mutable holder for a host widget: current mesh, camera and last pointer.

    Converts absolute pointer positions into DragEvents and applies the
    pure update functions above.
    """

    def __init__(self, mesh, camera: Optional[CameraState] = None):
        self.mesh = mesh
        self.camera = camera or CameraState()
        self.last_x = 0
        self.last_y = 0

    def press(self, x: int, y: int) -> None:
        """Record the pointer position at the start of a drag."""
        self.last_x = x
        self.last_y = y

    def drag(self, x: int, y: int) -> None:
        """Rotate the mesh by the pointer travel since the last press or drag."""
        event = DragEvent(dx=x - self.last_x, dy=y - self.last_y)
        self.mesh = apply_drag(self.mesh, self.camera, event)
        self.last_x = x
        self.last_y = y

    def wheel(self, rotation: int) -> None:
        self.camera = apply_wheel(self.camera, WheelEvent(rotation=rotation))
