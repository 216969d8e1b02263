"""Build-time registry of service descriptors."""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..config import Config, get_config
from ..core.definitions import ServiceDescriptor
from ..core.errors import ConfigurationError, DependencyError
from ..injection.extension import InjectionExtension
from .container import Container

logger = logging.getLogger(__name__)


class ContainerBuilder:
    """Collects service descriptors and compiles them into a container."""
    
    def __init__(self, config: Optional[Config] = None, extensions: Optional[Iterable[Any]] = None):
        self.config = config or get_config()
        self.parameters: Dict[str, Any] = dict(self.config.parameters)
        self._definitions: Dict[str, ServiceDescriptor] = {}
        self._extensions: List[Any] = (
            list(extensions) if extensions is not None
            else [InjectionExtension(self.config.injection)]
        )
        self._compiled = False
    
    def add_definition(
        self,
        name: str,
        service_class: Optional[type] = None,
        factory: Optional[Callable[..., Any]] = None,
        arguments: Iterable[Any] = (),
        tags: Optional[Dict[str, Any]] = None
    ) -> ServiceDescriptor:
        """Register a service descriptor under ``name``."""
        if name in self._definitions:
            raise ConfigurationError(f"Service '{name}' already defined", config_key=name)
        if service_class is None and factory is None:
            raise ConfigurationError(f"Service '{name}' needs a class or a factory", config_key=name)
        
        definition = ServiceDescriptor(
            name=name,
            service_class=service_class,
            factory=factory,
            arguments=tuple(arguments),
            tags=dict(tags or {})
        )
        self._definitions[name] = definition
        return definition
    
    def has_definition(self, name: str) -> bool:
        return name in self._definitions
    
    def get_definition(self, name: str) -> ServiceDescriptor:
        if name not in self._definitions:
            raise DependencyError(f"Service '{name}' not defined", dependency=name)
        return self._definitions[name]
    
    def get_definitions(self) -> List[ServiceDescriptor]:
        return list(self._definitions.values())
    
    def add_extension(self, extension: Any) -> None:
        self._extensions.append(extension)
    
    def compile(self) -> Container:
        """Run the build passes once and freeze the descriptors into a container."""
        if self._compiled:
            raise ConfigurationError("Container builder was already compiled")
        
        for extension in self._extensions:
            extension.before_compile(self)
        self._compiled = True
        
        logger.info(f"Compiled container with {len(self._definitions)} services")
        return Container(self._definitions, self.parameters, self.config.injection)
