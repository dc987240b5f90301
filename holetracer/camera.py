"""Pinhole camera with an orthonormal view basis."""

from __future__ import annotations

from dataclasses import dataclass

from holetracer.vector import Vec3

_PARALLEL_THRESHOLD = 0.999
_FALLBACK_UP = Vec3(1.0, 0.0, 0.0)


@dataclass(frozen=True)
class Camera:
    """Camera position, basis vectors, field of view (radians) and aspect."""

    position: Vec3
    forward: Vec3
    up: Vec3
    right: Vec3
    fov: float
    aspect: float

    def ray_direction(self, screen_x: float, screen_y: float) -> Vec3:
        """Unit direction through the given point of the image plane."""
        return (self.right * screen_x + self.up * screen_y + self.forward).normalised()


def make_camera(
    position: Vec3, target: Vec3, world_up: Vec3, fov: float, aspect: float
) -> Camera:
    """Build a camera at ``position`` looking at ``target``."""
    forward = (target - position).normalised()
    if abs(forward.dot(world_up)) > _PARALLEL_THRESHOLD:
        world_up = _FALLBACK_UP
    right = forward.cross(world_up).normalised()
    up = right.cross(forward).normalised()
    return Camera(
        position=position,
        forward=forward,
        up=up,
        right=right,
        fov=fov,
        aspect=aspect,
    )