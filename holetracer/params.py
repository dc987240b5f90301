"""Black hole and accretion disk simulation parameters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AccretionDisk:
    """Geometry and appearance of the accretion disk."""

    inner_radius: float
    outer_radius: float
    thickness: float
    opacity: float
    temperature_factor: float


@dataclass(frozen=True)
class BlackHoleParams:
    """Physical and integration parameters for a render."""

    mass: float
    schwarzschild_radius: float
    disk: AccretionDisk
    c_squared: float
    dt: float
    max_steps: int
    observer_distance: float


def make_params(mass: float, observer_distance: float) -> BlackHoleParams:
    """Build parameters in geometric units (G = c = 1)."""
    rs = 2.0 * mass
    disk = AccretionDisk(
        inner_radius=3.0 * rs,
        outer_radius=15.0 * rs,
        thickness=0.2 * rs,
        opacity=0.2,
        temperature_factor=1.0,
    )
    return BlackHoleParams(
        mass=mass,
        schwarzschild_radius=rs,
        disk=disk,
        c_squared=1.0,
        dt=0.05 * rs,
        max_steps=2000,
        observer_distance=observer_distance,
    )