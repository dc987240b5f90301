"""CPU ray marching of a Schwarzschild black hole, with disk and shader helpers."""

__version__ = "0.1.0"