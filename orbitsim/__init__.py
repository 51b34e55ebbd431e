"""Entity-component scene, physics, collision and control systems for a 2D space game."""

__version__ = "0.1.0"