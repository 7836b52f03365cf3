# src/shape_meshes/__init__.py
"""
Shape Meshes – procedural primitive meshes for OpenGL scenes
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("shape-meshes")     # resolve from installed wheel
except PackageNotFoundError:                  # editable/dev install fallback
    __version__ = "0.0.0+editable"
