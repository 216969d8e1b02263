"""Container replaying compiled setup calls on fresh service instances."""

from __future__ import annotations
from typing import Dict, Any, List, Mapping, Optional, Tuple
import logging
import threading

from ..config import InjectionConfig
from ..core.definitions import ServiceDescriptor, SetupCall
from ..core.errors import DependencyError, ServiceError
from ..injection.metadata import qualified_name
from ..injection.parameters import get_path

logger = logging.getLogger(__name__)


class Container:
    """Creates each service once and runs its setup calls in order."""
    
    def __init__(
        self,
        definitions: Mapping[str, ServiceDescriptor],
        parameters: Optional[Dict[str, Any]] = None,
        config: Optional[InjectionConfig] = None
    ):
        self.config = config or InjectionConfig()
        self._definitions: Dict[str, ServiceDescriptor] = dict(definitions)
        self._setups: Dict[str, Tuple[SetupCall, ...]] = {
            name: tuple(definition.setup) for name, definition in self._definitions.items()
        }
        self._parameters: Dict[str, Any] = dict(parameters or {})
        self._services: Dict[str, Any] = {}
        self._creating: List[str] = []
        self._lock = threading.RLock()
    
    def get_parameters(self) -> Dict[str, Any]:
        return self._parameters
    
    def get_parameter(self, key: str, default: Optional[Any] = None) -> Any:
        return get_path(self._parameters, key, default)
    
    def has_service(self, name: str) -> bool:
        return name in self._definitions
    
    def get_setup(self, name: str) -> Tuple[SetupCall, ...]:
        """Compiled setup calls of a service."""
        if name not in self._setups:
            raise DependencyError(f"Service '{name}' not defined", dependency=name)
        return self._setups[name]
    
    def get_service(self, name: str) -> Any:
        """Get the instance of the named service, creating it on first use."""
        with self._lock:
            if name in self._services:
                return self._services[name]
            if name not in self._definitions:
                raise DependencyError(f"Service '{name}' not defined", dependency=name)
            return self._create_service(name)
    
    def find_by_type(self, type_id: str) -> str:
        """Name of the only service whose class or a base has ``type_id``."""
        matches = [
            name for name, definition in self._definitions.items()
            if self._provides(definition, type_id)
        ]
        if not matches:
            raise DependencyError(f"No service of type {type_id} found", dependency=type_id)
        if len(matches) > 1:
            raise DependencyError(
                f"Multiple services of type {type_id} found: {', '.join(matches)}",
                dependency=type_id
            )
        return matches[0]
    
    def get_by_type(self, type_id: str) -> Any:
        return self.get_service(self.find_by_type(type_id))
    
    @staticmethod
    def _provides(definition: ServiceDescriptor, type_id: str) -> bool:
        cls = definition.resolve_class()
        if cls is None:
            return False
        return any(qualified_name(klass) == type_id for klass in cls.__mro__)
    
    def _create_service(self, name: str) -> Any:
        """Create an instance and replay its setup calls."""
        if name in self._creating:
            chain = " -> ".join(self._creating + [name])
            raise DependencyError(f"Circular reference detected: {chain}", dependency=name)
        
        definition = self._definitions[name]
        self._creating.append(name)
        try:
            factory = definition.factory or definition.service_class
            instance = factory(*self._resolve_arguments(definition.arguments))
            
            for call in self._setups[name]:
                method = getattr(instance, call.operation, None)
                if not callable(method):
                    raise DependencyError(
                        f"Service '{name}' has no setup operation '{call.operation}'",
                        dependency=name
                    )
                method(*self._resolve_arguments(call.arguments))
        except ServiceError:
            raise
        except Exception as e:
            raise ServiceError(
                f"Failed to create service '{name}': {str(e)}",
                error_code="INSTANCE_CREATION_FAILED",
                details={"service": name, "error": str(e)}
            ) from e
        finally:
            self._creating.pop()
        
        self._services[name] = instance
        logger.debug(f"Created service '{name}' with {len(self._setups[name])} setup calls")
        return instance
    
    def _resolve_arguments(self, arguments: Tuple[Any, ...]) -> List[Any]:
        return [self._resolve_argument(argument) for argument in arguments]
    
    def _resolve_argument(self, argument: Any) -> Any:
        prefix = self.config.reference_prefix
        if not isinstance(argument, str) or not argument.startswith(prefix):
            return argument
        
        reference = argument[len(prefix):]
        if reference == self.config.container_reference:
            return self
        if reference in self._definitions:
            return self.get_service(reference)
        return self.get_by_type(reference)
