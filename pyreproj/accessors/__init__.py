"""
PyReproj Accessor module.

This module defines the xarray accessor that provides the .reproj interface.
"""

from .accessor import ReprojAccessor

__all__ = ["ReprojAccessor"]
