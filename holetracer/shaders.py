"""Shader sources, render uniforms and framebuffer image helpers."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from PIL import Image

from holetracer.params import BlackHoleParams
from holetracer.vector import Vec3

PathLike = Union[str, Path]

_CAMERA_FOV_DEGREES = 50.0
_CAMERA_ANGLE_DEGREES = 70.0
_BYTES_PER_PIXEL = 4


def _f32(value: float) -> float:
    """Round a value to single precision, as a GPU uniform holds it."""
    return struct.unpack("f", struct.pack("f", value))[0]


def _f32_vec(v: Vec3) -> tuple[float, float, float]:
    return (_f32(v.x), _f32(v.y), _f32(v.z))


def load_shader_source(path: PathLike) -> str:
    """Read a shader file and return its text."""
    return Path(path).read_text()


@dataclass(frozen=True)
class ShaderUniforms:
    """Values handed to the black hole shader program."""

    mass: float
    schwarzschild_radius: float
    observer_distance: float
    dt: float
    max_steps: int
    resolution: tuple[float, float]
    cam_pos: tuple[float, float, float]
    cam_forward: tuple[float, float, float]
    cam_up: tuple[float, float, float]
    cam_right: tuple[float, float, float]
    fov: float
    aspect: float

    def as_dict(self) -> dict[str, object]:
        """Map of uniform names, as the shader declares them, to values."""
        return {
            "u_mass": self.mass,
            "u_schwarzschild_radius": self.schwarzschild_radius,
            "u_observer_distance": self.observer_distance,
            "u_dt": self.dt,
            "u_max_steps": self.max_steps,
            "u_resolution": self.resolution,
            "u_cam_pos": self.cam_pos,
            "u_cam_forward": self.cam_forward,
            "u_cam_up": self.cam_up,
            "u_cam_right": self.cam_right,
            "u_fov": self.fov,
            "u_aspect": self.aspect,
        }


def shader_uniforms(params: BlackHoleParams, width: int, height: int) -> ShaderUniforms:
    """Compute the shader uniforms for a render of the given size."""
    if width <= 0 or height <= 0:
        raise ValueError(f"image size must be positive, got {width}x{height}")

    aspect = width / height
    fov = math.radians(_CAMERA_FOV_DEGREES)
    theta = math.radians(_CAMERA_ANGLE_DEGREES)
    r = params.observer_distance

    position = Vec3(0.0, r * math.sin(theta), -r * math.cos(theta))
    target = Vec3(0.0, 0.0, 0.0)
    world_up = Vec3(0.0, 1.0, 0.0)

    forward = (target - position).normalised()
    right = forward.cross(world_up).normalised()
    up = right.cross(forward)

    return ShaderUniforms(
        mass=_f32(params.mass),
        schwarzschild_radius=_f32(params.schwarzschild_radius),
        observer_distance=_f32(params.observer_distance),
        dt=_f32(params.dt),
        max_steps=params.max_steps,
        resolution=(_f32(width), _f32(height)),
        cam_pos=_f32_vec(position),
        cam_forward=_f32_vec(forward),
        cam_up=_f32_vec(up),
        cam_right=_f32_vec(right),
        fov=_f32(fov),
        aspect=_f32(aspect),
    )


def flip_rows(pixels: bytes, width: int, height: int) -> bytes:
    """Reverse the row order of packed RGBA pixels (bottom-up to top-down)."""
    row_size = width * _BYTES_PER_PIXEL
    if width < 0 or height < 0 or len(pixels) != row_size * height:
        raise ValueError(
            f"expected {row_size * height} bytes for {width}x{height} RGBA, "
            f"got {len(pixels)}"
        )
    rows = [pixels[start : start + row_size] for start in range(0, len(pixels), row_size)]
    return b"".join(reversed(rows))


def save_framebuffer_png(
    pixels: bytes, width: int, height: int, filename: PathLike
) -> Path:
    """Save bottom-up RGBA framebuffer bytes as a top-down PNG file."""
    flipped = flip_rows(bytes(pixels), width, height)
    path = Path(filename)
    Image.frombytes("RGBA", (width, height), flipped).save(path, "PNG")
    return path


@dataclass(frozen=True)
class SSAAFramebuffer:
    """Size of an off-screen buffer used for supersampled rendering."""

    width: int
    height: int
    scale: int


def make_ssaa_framebuffer(base_width: int, base_height: int, scale: int) -> SSAAFramebuffer:
    """Describe a framebuffer ``scale`` times larger in each dimension."""
    if base_width <= 0 or base_height <= 0:
        raise ValueError(f"base size must be positive, got {base_width}x{base_height}")
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    return SSAAFramebuffer(
        width=base_width * scale, height=base_height * scale, scale=scale
    )