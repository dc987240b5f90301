"""Ray marching through a simplified Schwarzschild field with an accretion disk."""

from __future__ import annotations

import math
from dataclasses import dataclass

from PIL import Image

from holetracer.camera import make_camera
from holetracer.params import BlackHoleParams
from holetracer.vector import Vec3

Colour = tuple[int, int, int]

BACKGROUND: Colour = (0, 2, 8)

_MAX_RECESSION = 0.99
_CAMERA_FOV_DEGREES = 50.0
_CAMERA_ANGLE_DEGREES = 30.0
_ESCAPE_FACTOR = 10.0
_OPACITY_LIMIT = 0.99


def _to_byte(value: float) -> int:
    """Truncate a 0..255 scaled channel value into a byte."""
    return int(min(max(value, 0.0), 255.0))


@dataclass
class RayState:
    """Position, direction and accumulated shading of a ray being marched."""

    position: Vec3
    direction: Vec3
    redshift: float = 1.0
    intensity: float = 1.0

    def step(self, params: BlackHoleParams) -> bool:
        """Advance the ray one step; False once it falls through the horizon."""
        rs = params.schwarzschild_radius
        r = max(self.position.length(), 1e-6)

        if r <= rs * 1.01:
            self.intensity = 0.0
            return False

        radial_dir = self.position * (-1.0 / r)

        impact_parameter = self.position.cross(self.direction).length()
        critical_impact = 2.6 * rs
        impact_proximity = abs(impact_parameter - critical_impact)

        deflection_factor = 1.5 * rs / (r * r)
        if impact_proximity < 0.5:
            # Limit deflection near the critical impact parameter to avoid chaos.
            deflection_factor = min(deflection_factor, 0.2 / (impact_proximity + 0.1))

        if r < 3.0 * rs:
            denominator = r - 1.5 * rs
            photon_sphere_factor = (
                1.0 + 2.0 * rs / denominator if denominator != 0.0 else math.inf
            )
            deflection_factor *= min(photon_sphere_factor, 5.0)

        self.direction = (self.direction + radial_dir * deflection_factor).normalised()

        self.redshift *= math.sqrt(max(0.1, 1.0 - rs / r))

        radial_component = abs(self.direction.dot(radial_dir))
        tangential_damping = 1.0 - 0.1 * (1.0 - radial_component)
        self.intensity *= max(0.97, tangential_damping) * (
            1.0 - params.dt / (r * r + 5.0)
        )

        adaptive_dt = params.dt * min(1.0, r / (5.0 * rs))
        self.position = self.position + self.direction * adaptive_dt
        return True


@dataclass(frozen=True)
class DiskHit:
    """Where a ray meets the accretion disk."""

    distance: float
    point: Vec3
    normal: Vec3


def calculate_doppler(disk_velocity: Vec3, view_direction: Vec3) -> float:
    """Relativistic Doppler factor; positive velocity along the view recedes."""
    v = disk_velocity.dot(view_direction)
    v = min(max(v, -_MAX_RECESSION), _MAX_RECESSION)
    return math.sqrt((1.0 - v) / (1.0 + v))


def calculate_orbital_velocity(position: Vec3, schwarzschild_radius: float) -> Vec3:
    """Keplerian orbital velocity in the xy-plane at ``position``."""
    r = position.length()
    speed = math.sqrt(schwarzschild_radius / (2.0 * r))
    radial = Vec3(position.x, position.y, 0.0).normalised()
    return Vec3(-radial.y, radial.x, 0.0) * speed


def accretion_disk_colour(
    position: Vec3, view_direction: Vec3, params: BlackHoleParams
) -> Colour:
    """RGB colour of the disk at ``position`` seen along ``view_direction``."""
    rs = params.schwarzschild_radius
    r_xy = math.sqrt(position.x * position.x + position.y * position.y)
    if r_xy < 1e-6:
        r_xy = 1e-6

    # T is proportional to r^(-3/4) for a standard thin disk.
    temp_factor = (params.disk.inner_radius / r_xy) ** 0.75
    temp_factor *= params.disk.temperature_factor

    orbital_velocity = calculate_orbital_velocity(position, rs)
    doppler = calculate_doppler(orbital_velocity, view_direction)

    shift_term = 1.0 - rs / r_xy
    if shift_term < 0.0:
        raise ValueError(
            f"position at cylindrical radius {r_xy} lies inside the "
            f"Schwarzschild radius {rs}"
        )
    grav_shift = math.sqrt(shift_term)
    total_shift = doppler * grav_shift

    apparent_temp = temp_factor * total_shift
    intensity = apparent_temp * 2.0
    intensity = intensity / (1.0 + intensity)

    if apparent_temp < 0.6:
        red = min(intensity * 2.0, 1.0 + intensity)
        green = min(intensity * 0.7, 1.0 + intensity * 0.65)
        blue = min(intensity * 0.4, 1.0 + intensity * 1.1)
    else:
        norm_factor = 1.0 / (1.0 + 1.2 * intensity)
        red = intensity * norm_factor
        green = intensity * norm_factor
        blue = intensity * 1.3 * norm_factor

    if total_shift > 1.0:
        blue_factor = min((total_shift - 1.0) * 5.0, 1.0)
        blue = min(blue + blue_factor * 0.5, 1.0)
        green = min(green + blue_factor * 0.3, 1.0)

    if total_shift < 1.0:
        red_factor = min((1.0 - total_shift) * 5.0, 1.0)
        red = min(red + red_factor * 0.4, 1.0)
        green = min(green - red_factor * 0.2, max(0.0, green))
        blue = min(blue - red_factor * 0.3, max(0.0, blue))

    return (_to_byte(red * 255.0), _to_byte(green * 255.0), _to_byte(blue * 255.0))


def _moving_toward_plane(position: Vec3, direction: Vec3) -> bool:
    return (position.z > 0 and direction.z < 0) or (position.z < 0 and direction.z > 0)


def _plane_normal(position: Vec3) -> Vec3:
    return Vec3(0.0, 0.0, 1.0 if position.z > 0 else -1.0)


def accretion_disk_intersection(
    position: Vec3, direction: Vec3, params: BlackHoleParams
) -> DiskHit | None:
    """First intersection of a ray with the disk, or None if it misses."""
    disk = params.disk
    direction = direction.normalised()
    pos_xy = Vec3(position.x, position.y, 0.0)
    dir_xy = Vec3(direction.x, direction.y, 0.0).normalised()

    if dir_xy.length() < 1e-10:
        # Vertical ray: only the midplane can be hit.
        r = pos_xy.length()
        if disk.inner_radius <= r <= disk.outer_radius and _moving_toward_plane(
            position, direction
        ):
            t = -position.z / direction.z
            return DiskHit(t, position + direction * t, _plane_normal(position))
        return None

    # Midplane of the disk.
    if abs(direction.z) > 1e-10:
        t_plane = -position.z / direction.z
        if t_plane > 0:
            plane_hit = position + direction * t_plane
            r = math.sqrt(plane_hit.x * plane_hit.x + plane_hit.y * plane_hit.y)
            if disk.inner_radius <= r <= disk.outer_radius and _moving_toward_plane(
                position, direction
            ):
                return DiskHit(t_plane, plane_hit, _plane_normal(position))

    # Inner and outer cylindrical walls.
    for is_inner, radius in ((True, disk.inner_radius), (False, disk.outer_radius)):
        a = dir_xy.x * dir_xy.x + dir_xy.y * dir_xy.y
        b = 2.0 * (pos_xy.x * dir_xy.x + pos_xy.y * dir_xy.y)
        c = pos_xy.x * pos_xy.x + pos_xy.y * pos_xy.y - radius * radius
        discriminant = b * b - 4 * a * c
        if discriminant < 0:
            continue
        root = math.sqrt(discriminant)
        t1 = (-b - root) / (2.0 * a)
        t2 = (-b + root) / (2.0 * a)
        t = t1 if t1 > 0 else (t2 if t2 > 0 else -1.0)
        if t <= 0:
            continue
        cylinder_hit = position + direction * t
        if abs(cylinder_hit.z) <= disk.thickness:
            radial = Vec3(cylinder_hit.x, cylinder_hit.y, 0.0).normalised()
            normal = -radial if is_inner else radial
            return DiskHit(t, cylinder_hit, normal)

    # Top and bottom faces.
    for z_face, normal_z in ((disk.thickness, 1.0), (-disk.thickness, -1.0)):
        if (z_face > position.z and direction.z > 0) or (
            z_face < position.z and direction.z < 0
        ):
            t = (z_face - position.z) / direction.z
            if t > 0:
                face_hit = position + direction * t
                r = math.sqrt(face_hit.x * face_hit.x + face_hit.y * face_hit.y)
                if disk.inner_radius <= r <= disk.outer_radius:
                    return DiskHit(t, face_hit, Vec3(0.0, 0.0, normal_z))

    return None


def _ring_factor(impact: float, centre: float, half_width: float) -> float:
    offset = abs(impact - centre)
    if offset >= half_width:
        return 0.0
    dist = offset / half_width
    return max(0.0, 1.0 - dist * dist)


def trace_black_hole_ray(
    origin: Vec3, direction: Vec3, params: BlackHoleParams
) -> Colour:
    """March one ray and return its RGB colour."""
    bg_r, bg_g, bg_b = BACKGROUND
    ray = RayState(position=origin, direction=direction)

    impact = origin.cross(direction).length()
    rs = params.schwarzschild_radius

    accumulated_opacity = 0.0
    accum_r = bg_r / 255.0
    accum_g = bg_g / 255.0
    accum_b = bg_b / 255.0
    hit_disk = False

    escape_distance = params.observer_distance * _ESCAPE_FACTOR
    for _ in range(params.max_steps):
        if accumulated_opacity >= _OPACITY_LIMIT:
            break
        if not ray.step(params):
            break
        if ray.position.length() > escape_distance:
            break

    einstein_ring_factor = _ring_factor(impact, 2.8 * rs, 0.3 * rs)
    photon_ring_factor = _ring_factor(impact, 2.6 * rs, 0.12 * rs)

    if not hit_disk:
        red = int(min(accum_r * 255.0, 255.0))
        green = int(min(accum_g * 255.0, 255.0))
        blue = int(min(accum_b * 255.0, 255.0))

        if einstein_ring_factor > 0.01:
            red = int(min(red + 60 * einstein_ring_factor, 255))
            green = int(min(green + 110 * einstein_ring_factor, 255))
            blue = int(min(blue + 170 * einstein_ring_factor, 255))

        if photon_ring_factor > 0.01:
            red = int(min(red + 180 * photon_ring_factor, 255))
            green = int(min(green + 170 * photon_ring_factor, 255))
            blue = int(min(blue + 120 * photon_ring_factor, 255))

        accum_r = red / 255.0
        accum_g = green / 255.0
        accum_b = blue / 255.0

    return (
        _to_byte(min(accum_r * 255.0, 255.0)),
        _to_byte(min(accum_g * 255.0, 255.0)),
        _to_byte(min(accum_b * 255.0, 255.0)),
    )


def raytrace_blackhole(params: BlackHoleParams, width: int, height: int) -> Image.Image:
    """Render the black hole into a new RGB image of the given size."""
    if width <= 0 or height <= 0:
        raise ValueError(f"image size must be positive, got {width}x{height}")

    aspect = width / height
    fov = math.radians(_CAMERA_FOV_DEGREES)
    theta = math.radians(_CAMERA_ANGLE_DEGREES)
    r = params.observer_distance

    camera = make_camera(
        Vec3(0.0, r * math.sin(theta), -r * math.cos(theta)),
        Vec3(0.0, 0.0, 0.0),
        Vec3(0.0, 1.0, 0.0),
        fov,
        aspect,
    )
    scale = math.tan(camera.fov / 2.0)

    def pixels():
        for y in range(height):
            screen_y = (1.0 - 2.0 * (y + 0.5) / height) * scale
            for x in range(width):
                screen_x = (2.0 * (x + 0.5) / width - 1.0) * camera.aspect * scale
                ray_dir = camera.ray_direction(screen_x, screen_y)
                yield trace_black_hole_ray(camera.position, ray_dir, params)

    image = Image.new("RGB", (width, height))
    image.putdata(list(pixels()))
    return image