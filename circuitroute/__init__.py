"""Lee-algorithm routing of paths through a 3D grid, with threaded workers."""

__version__ = "0.1.0"