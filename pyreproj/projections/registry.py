"""
Registry mapping projection names to projection classes.

Names are matched after lower-casing and replacing spaces with underscores,
so ``"Transverse Mercator"`` and ``"transverse_mercator"`` are the same entry.
"""

import logging
import threading
from typing import Callable, Dict, List, Mapping, Optional

from ..crs.models import ParameterSource, normalize_name
from ..exceptions import (ConfigurationError, RegistrationConflictError,
                          UnsupportedConversionError)
from .albers import AlbersEqualArea
from .base import MapProjection
from .cassini import CassiniSoldnerProjection
from .krovak import KrovakProjection
from .lambert import LambertConformalConic2SP
from .mercator import Mercator, PseudoMercator
from .oblique_mercator import (HotineObliqueMercatorProjection,
                               ObliqueMercatorProjection)
from .polyconic import PolyconicProjection
from .stereographic import ObliqueStereographicProjection
from .transverse_mercator import TransverseMercator

logger = logging.getLogger(__name__)

ProjectionConstructor = Callable[..., MapProjection]

BUILTIN_PROJECTIONS = {
    "mercator": Mercator,
    "mercator_1sp": Mercator,
    "mercator_2sp": Mercator,
    "pseudo-mercator": PseudoMercator,
    "popular_visualisation pseudo-mercator": PseudoMercator,
    "google_mercator": PseudoMercator,
    "transverse_mercator": TransverseMercator,
    "albers": AlbersEqualArea,
    "albers_conic_equal_area": AlbersEqualArea,
    "krovak": KrovakProjection,
    "polyconic": PolyconicProjection,
    "lambert_conformal_conic": LambertConformalConic2SP,
    "lambert_conformal_conic_2sp": LambertConformalConic2SP,
    "lambert_conic_conformal_(2sp)": LambertConformalConic2SP,
    "cassini_soldner": CassiniSoldnerProjection,
    "hotine_oblique_mercator": HotineObliqueMercatorProjection,
    "oblique_mercator": ObliqueMercatorProjection,
    "oblique_stereographic": ObliqueStereographicProjection,
}


class ProjectionRegistry:
    """
    Thread-safe table of projection constructors.

    Parameters
    ----------
    projections : mapping, optional
        Initial ``name -> constructor`` entries
    """

    def __init__(self, projections: Optional[Mapping[str, ProjectionConstructor]] = None):
        self._lock = threading.Lock()
        self._constructors: Dict[str, ProjectionConstructor] = {}
        for name, constructor in (projections or {}).items():
            self.register(name, constructor)

    def register(self, name: str, constructor: ProjectionConstructor) -> None:
        """
        Register ``constructor`` under ``name``.

        Registering the same constructor twice is a no-op.

        Raises
        ------
        ConfigurationError
            If the name is empty or the constructor is not callable
        RegistrationConflictError
            If the name is already bound to a different constructor
        """
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError("Projection name must be a non-empty string")
        if not callable(constructor):
            raise ConfigurationError(
                f"Constructor registered for '{name}' is not callable: {constructor!r}"
            )
        key = normalize_name(name)
        with self._lock:
            existing = self._constructors.get(key)
            if existing is constructor:
                return
            if existing is not None:
                raise RegistrationConflictError(
                    f"A different projection is already registered as '{key}' "
                    f"({getattr(existing, '__name__', existing)!s})"
                )
            self._constructors[key] = constructor
        logger.debug("Registered projection %s -> %s", key,
                     getattr(constructor, "__name__", constructor))

    def create(self, name: str, parameters: ParameterSource = (), **kwargs) -> MapProjection:
        """
        Build the projection registered under ``name``.

        Extra keyword arguments (e.g. ``dimension``) go to the constructor.
        """
        key = normalize_name(name)
        with self._lock:
            constructor = self._constructors.get(key)
        if constructor is None:
            raise UnsupportedConversionError(f"Projection {name} is not supported.")
        return constructor(parameters, **kwargs)

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._constructors)

    def copy(self) -> "ProjectionRegistry":
        with self._lock:
            return ProjectionRegistry(dict(self._constructors))

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return normalize_name(name) in self._constructors

    def __len__(self) -> int:
        with self._lock:
            return len(self._constructors)


default_registry = ProjectionRegistry(BUILTIN_PROJECTIONS)


def register(name: str, constructor: ProjectionConstructor) -> None:
    """Register a projection in the default registry."""
    default_registry.register(name, constructor)
