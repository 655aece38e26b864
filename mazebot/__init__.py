"""Robot controllers, pathfinders and wall detectors for a simulated maze-solving robot."""

__version__ = "0.1.0"