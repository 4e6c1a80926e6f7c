"""View 3D models from .obj files in the terminal as braille or block-character wireframes."""

__version__ = "0.1.1"
__all__ = ["cli", "model", "screen", "three"]