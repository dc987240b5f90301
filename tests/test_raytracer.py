import math

import pytest
from PIL import ImageOps

from holetracer.params import make_params
from holetracer.raytracer import (
    BACKGROUND,
    DiskHit,
    RayState,
    accretion_disk_colour,
    accretion_disk_intersection,
    calculate_doppler,
    calculate_orbital_velocity,
    raytrace_blackhole,
    trace_black_hole_ray,
)
from holetracer.vector import Vec3


@pytest.fixture
def params():
    return make_params(1.0, 30.0)


def test_doppler_factors_of_opposite_velocities_multiply_to_one():
    view = Vec3(1.0, 0.0, 0.0)
    v = Vec3(0.4, 0.0, 0.0)
    assert calculate_doppler(v, view) * calculate_doppler(-v, view) == pytest.approx(1.0)


def test_doppler_clamps_extreme_velocity():
    view = Vec3(1.0, 0.0, 0.0)
    assert calculate_doppler(Vec3(5.0, 0.0, 0.0), view) == pytest.approx(
        calculate_doppler(Vec3(0.99, 0.0, 0.0), view)
    )
    assert calculate_doppler(Vec3(-5.0, 0.0, 0.0), view) == pytest.approx(
        calculate_doppler(Vec3(-0.99, 0.0, 0.0), view)
    )


def test_receding_source_is_redshifted():
    view = Vec3(1.0, 0.0, 0.0)
    still = calculate_doppler(Vec3(), view)
    assert calculate_doppler(Vec3(0.3, 0.0, 0.0), view) < still
    assert calculate_doppler(Vec3(-0.3, 0.0, 0.0), view) > still


def test_orbital_velocity_is_tangential_in_plane():
    pos = Vec3(3.0, 4.0, 1.0)
    vel = calculate_orbital_velocity(pos, 2.0)
    assert vel.z == 0.0
    assert vel.x * pos.x + vel.y * pos.y == pytest.approx(0.0, abs=1e-12)


def test_orbital_speed_halves_at_four_times_radius():
    near = calculate_orbital_velocity(Vec3(10.0, 0.0, 0.0), 2.0).length()
    far = calculate_orbital_velocity(Vec3(40.0, 0.0, 0.0), 2.0).length()
    assert far == pytest.approx(near / 2.0)


def test_disk_colour_channels_are_bytes(params):
    for point in (Vec3(7.0, 0.0, 0.0), Vec3(0.0, 12.0, 0.1), Vec3(-20.0, 5.0, 0.0)):
        colour = accretion_disk_colour(point, Vec3(0.0, 0.0, 1.0), params)
        assert len(colour) == 3
        assert all(isinstance(c, int) and 0 <= c <= 255 for c in colour)


def test_disk_colour_inside_horizon_raises(params):
    with pytest.raises(ValueError):
        accretion_disk_colour(Vec3(0.5, 0.0, 0.0), Vec3(0.0, 0.0, 1.0), params)


def test_vertical_ray_hits_midplane(params):
    hit = accretion_disk_intersection(Vec3(10.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0), params)
    assert isinstance(hit, DiskHit)
    assert hit.distance == pytest.approx(5.0)
    assert hit.point.z == pytest.approx(0.0)
    assert hit.normal == Vec3(0.0, 0.0, 1.0)


def test_vertical_ray_moving_away_misses(params):
    assert accretion_disk_intersection(
        Vec3(10.0, 0.0, 5.0), Vec3(0.0, 0.0, 1.0), params
    ) is None


def test_vertical_ray_outside_disk_misses(params):
    assert accretion_disk_intersection(
        Vec3(100.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0), params
    ) is None


def test_slanted_ray_hits_midplane_from_below(params):
    hit = accretion_disk_intersection(Vec3(0.0, -20.0, -10.0), Vec3(0.0, 1.0, 1.0), params)
    assert hit is not None
    assert hit.point.z == pytest.approx(0.0, abs=1e-9)
    assert hit.normal == Vec3(0.0, 0.0, -1.0)
    assert params.disk.inner_radius <= abs(hit.point.y) <= params.disk.outer_radius


def test_in_plane_ray_hits_outer_wall(params):
    hit = accretion_disk_intersection(Vec3(10.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0), params)
    assert hit is not None
    assert hit.point.x == pytest.approx(params.disk.outer_radius)
    assert hit.normal == Vec3(1.0, 0.0, 0.0)


def test_in_plane_ray_hits_inner_wall_with_inward_normal(params):
    hit = accretion_disk_intersection(Vec3(1.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0), params)
    assert hit is not None
    assert hit.point.x == pytest.approx(params.disk.inner_radius)
    assert hit.normal == Vec3(-1.0, 0.0, 0.0)


def test_step_inside_horizon_stops_ray(params):
    ray = RayState(position=Vec3(1.0, 0.0, 0.0), direction=Vec3(1.0, 0.0, 0.0))
    assert ray.step(params) is False
    assert ray.intensity == 0.0


def test_step_far_away_advances_and_attenuates(params):
    start = Vec3(0.0, 0.0, -30.0)
    ray = RayState(position=start, direction=Vec3(1.0, 0.0, 0.0))
    assert ray.step(params) is True
    assert ray.direction.length() == pytest.approx(1.0)
    assert 0.0 < ray.intensity < 1.0
    assert 0.0 < ray.redshift < 1.0
    assert 0.0 < (ray.position - start).length() <= params.dt + 1e-12


def test_step_bends_ray_toward_hole(params):
    ray = RayState(position=Vec3(0.0, 0.0, -30.0), direction=Vec3(1.0, 0.0, 0.0))
    ray.step(params)
    assert ray.direction.z > 0.0


def test_far_ray_has_background_colour(params):
    colour = trace_black_hole_ray(Vec3(0.0, 0.0, -30.0), Vec3(1.0, 0.0, 0.0), params)
    assert colour == BACKGROUND


def test_photon_ring_brightens_colour(params):
    rs = params.schwarzschild_radius
    colour = trace_black_hole_ray(Vec3(2.6 * rs, 0.0, -30.0), Vec3(0.0, 0.0, 1.0), params)
    assert all(c >= b for c, b in zip(colour, BACKGROUND))
    assert colour[0] > BACKGROUND[0]


def test_einstein_ring_is_bluish(params):
    rs = params.schwarzschild_radius
    colour = trace_black_hole_ray(Vec3(2.8 * rs, 0.0, -30.0), Vec3(0.0, 0.0, 1.0), params)
    assert colour[2] > colour[1] > colour[0] > BACKGROUND[0]


def test_render_has_requested_size(params):
    image = raytrace_blackhole(params, 4, 3)
    assert image.size == (4, 3)
    assert image.mode == "RGB"


def test_render_is_mirror_symmetric(params):
    image = raytrace_blackhole(params, 6, 4)
    assert list(image.getdata()) == list(ImageOps.mirror(image).getdata())


@pytest.mark.parametrize("size", [(0, 3), (4, 0), (-1, 2)])
def test_render_rejects_empty_size(params, size):
    with pytest.raises(ValueError):
        raytrace_blackhole(params, *size)


def test_ring_colour_depends_on_radius_scale():
    small = make_params(1.0, 30.0)
    rs = small.schwarzschild_radius
    origin = Vec3(2.8 * rs, 0.0, -30.0)
    lit = trace_black_hole_ray(origin, Vec3(0.0, 0.0, 1.0), small)
    big = make_params(3.0, 30.0)
    assert not math.isclose(2.8 * big.schwarzschild_radius, 2.8 * rs)
    assert trace_black_hole_ray(origin, Vec3(0.0, 0.0, 1.0), big) != lit