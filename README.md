# holetracer

A small renderer for a non-rotating (Schwarzschild) black hole, written in
plain Python with Pillow for image output.

Rays leave a camera and are marched step by step: each step bends the ray
toward the hole, applies a gravitational redshift factor and fades its
intensity, and a ray that comes within 1.01 Schwarzschild radii is swallowed.
A ray stops when it is swallowed, when it has travelled ten times the
observer distance from the hole, or after `max_steps` steps. The final pixel
colour is a very dark blue background, brightened by a bluish Einstein ring
and a yellow photon ring for rays whose impact parameter lies near 2.8 and
2.6 Schwarzschild radii.

## Installing

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Rendering from the command line

```
holetracer
```

renders a 2560×1440 image of a black hole of mass 1 seen from a distance of
30 and writes it to `Images/blackhole.png`, creating the directory if needed.
It prints the time the render took. Options:

| Option | Default | Meaning |
| --- | --- | --- |
| `--width` | 2560 | image width in pixels (positive) |
| `--height` | 1440 | image height in pixels (positive) |
| `--mass` | 1.0 | black hole mass (positive) |
| `--distance` | 30.0 | camera distance from the hole (positive) |
| `--output` | `Images/blackhole.png` | PNG file to write |
| `--skybox` | none | directory holding `px.jpg`, `nx.jpg`, `py.jpg`, `ny.jpg`, `pz.jpg`, `nz.jpg`, checked before rendering |

The command exits with status 1 if a skybox face cannot be loaded or the PNG
cannot be saved, and 0 otherwise. Every pixel is traced in pure Python, with
up to 2000 steps per ray, so the default size takes a long time; a smaller
size such as `holetracer --width 320 --height 180` is a good first try.

## Using it as a library

Physical parameters are in geometric units (G = c = 1).

```python
from holetracer.params import make_params
from holetracer.raytracer import raytrace_blackhole, trace_black_hole_ray
from holetracer.camera import make_camera
from holetracer.vector import Vec3

params = make_params(1.0, 30.0)

# Render a whole frame as a PIL RGB image.
image = raytrace_blackhole(params, 320, 180)
image.save("blackhole.png")

# Or trace single rays through a camera of your own.
camera = make_camera(
    Vec3(0.0, 15.0, -26.0),   # position
    Vec3(0.0, 0.0, 0.0),      # target
    Vec3(0.0, 1.0, 0.0),      # world up
    0.87,                     # field of view in radians
    16 / 9,                   # aspect ratio
)
direction = camera.ray_direction(0.1, -0.05)
red, green, blue = trace_black_hole_ray(camera.position, direction, params)
```

### Modules

- `holetracer.vector`: `Vec3`, an immutable 3-vector with `+`, `-`, scalar
  `*`, unary `-`, iteration, `length`, `normalised` (the zero vector for
  vectors shorter than 1e-8), `dot`, `cross` and `reflect`. Note that `dot`
  is the renderer's projection product `x*x' + y*z' + z*z'`, not the usual
  dot product; the rendered images depend on this form.
- `holetracer.params`: `AccretionDisk`, `BlackHoleParams` and
  `make_params(mass, observer_distance)`. The Schwarzschild radius is
  `2 * mass`; the disk runs from 3 to 15 Schwarzschild radii with a thickness
  of 0.2, opacity 0.2 and temperature factor 1; the step size is 0.05
  Schwarzschild radii and `max_steps` is 2000.
- `holetracer.camera`: `Camera` and `make_camera`, which builds an orthonormal
  basis looking from a position toward a target (switching to the x axis as
  "up" when the view is nearly parallel to the given up vector), and
  `Camera.ray_direction` for a point on the image plane.
- `holetracer.raytracer`:
  - `RayState`, whose `step(params)` advances a ray once and returns `False`
    when it crosses the horizon;
  - `trace_black_hole_ray(origin, direction, params)`, returning an
    `(r, g, b)` tuple;
  - `raytrace_blackhole(params, width, height)`, returning a PIL image seen
    from 30° above the disk plane with a 50° field of view (raises
    `ValueError` for a non-positive size);
  - disk helpers: `calculate_doppler`, `calculate_orbital_velocity`,
    `accretion_disk_colour` (colour from temperature, Doppler shift and
    gravitational redshift; raises `ValueError` inside the Schwarzschild
    radius) and `accretion_disk_intersection`, which returns a `DiskHit`
    (distance, point, normal) or `None`.
- `holetracer.shaders`: helpers for a GPU version of the renderer:
  `load_shader_source` reads a shader file's text; `shader_uniforms` returns
  a `ShaderUniforms` for a camera 70° above the disk plane, with values
  rounded to single precision, and its `as_dict` maps the uniform names
  (`u_mass`, `u_cam_pos`, …) to those values; `flip_rows` reverses the rows of
  packed RGBA bytes; `save_framebuffer_png` writes bottom-up RGBA bytes as a
  top-down PNG and returns its path; `make_ssaa_framebuffer` returns an
  `SSAAFramebuffer` describing a buffer scaled up in each dimension.
- `holetracer.skybox`: `load_cubemap` reads six cubemap faces (+x, −x, +y,
  −y, +z, −z) as RGB images and raises `CubemapError` when there are not six
  or one cannot be loaded. `CUBEMAP_FACES` lists the default face paths.
- `holetracer.cli`: `main`, the entry point of the `holetracer` command.

## What it does not do

- It opens no window and uses no GPU. The `shaders` module computes uniform
  values and handles pixel buffers, but does not compile or run shaders, and
  no shader files are included.
- The accretion disk is not drawn in rendered images: the disk helpers can be
  called on their own, but `trace_black_hole_ray` does not use them.
- The skybox is not drawn either: `--skybox` only checks that the six faces
  load.
- Spinning (Kerr) black holes are not modelled.