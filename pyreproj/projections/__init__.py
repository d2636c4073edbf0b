"""
Map projections, UTM helpers and the projection registry.
"""

from .albers import AlbersEqualArea
from .base import MapProjection
from .cassini import CassiniSoldnerProjection
from .krovak import KrovakProjection
from .lambert import LambertConformalConic2SP
from .mercator import Mercator, PseudoMercator
from .oblique_mercator import (HotineObliqueMercatorProjection,
                               ObliqueMercatorProjection)
from .polyconic import PolyconicProjection
from .registry import (BUILTIN_PROJECTIONS, ProjectionRegistry,
                       default_registry, register)
from .stereographic import ObliqueStereographicProjection
from .transverse_mercator import TransverseMercator
from .utm import is_northern_hemisphere, utm_false_northing, utm_zone

__all__ = [
    "MapProjection",
    "Mercator",
    "PseudoMercator",
    "TransverseMercator",
    "AlbersEqualArea",
    "LambertConformalConic2SP",
    "KrovakProjection",
    "PolyconicProjection",
    "CassiniSoldnerProjection",
    "HotineObliqueMercatorProjection",
    "ObliqueMercatorProjection",
    "ObliqueStereographicProjection",
    "ProjectionRegistry",
    "BUILTIN_PROJECTIONS",
    "default_registry",
    "register",
    "utm_zone",
    "utm_false_northing",
    "is_northern_hemisphere",
]
