"""Service capabilities recognised by the injection build pass."""

from abc import ABC, abstractmethod
from typing import Any, FrozenSet, Optional


class ServiceMarker:
    """Marker base for classes that should become container services."""


class Injectable(ServiceMarker, ABC):
    """Capability of a service able to receive container-driven property injection.
    
    The build pass rewrites the setup calls of every service whose class is
    ``Injectable`` so that the container calls, in order:
    ``inject_property`` for each planned property, ``inject_parameters`` once,
    ``injection_completed`` once, and then any author-written setup calls.
    """
    
    @abstractmethod
    def inject_property(self, name: str, value: Any) -> None:
        """Write ``value`` into the property ``name``, exactly once."""
        ...
    
    @abstractmethod
    def inject_parameters(self, container: Any) -> None:
        """Store the container parameter map on the instance."""
        ...
    
    @abstractmethod
    def injection_completed(self) -> None:
        """Mark injection as finished and fire the post-injection hook."""
        ...
    
    @abstractmethod
    def get_parameter(self, key: str, default: Optional[Any] = None) -> Any:
        """Look up a container parameter by dot-delimited path."""
        ...
    
    @property
    @abstractmethod
    def injected_properties(self) -> FrozenSet[str]:
        """Names of properties injected so far."""
        ...
