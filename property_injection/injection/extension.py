"""Build pass wiring property injection into service descriptors."""

import inspect
import logging
from typing import Iterable, List, Optional

from ..config import InjectionConfig
from ..core.definitions import ServiceDescriptor
from ..core.service import Injectable
from .composer import compose_inject_methods, compose_setup
from .planner import get_injection_plan

logger = logging.getLogger(__name__)


def get_inject_methods(cls: type, prefix: str = "inject", exclude: Iterable[str] = ()) -> List[str]:
    """Names of methods of ``cls`` starting with ``prefix``.
    
    Subclass methods come first, each class in declaration order.
    """
    excluded = set(exclude)
    names: List[str] = []
    for klass in cls.__mro__:
        for name, value in vars(klass).items():
            if not name.startswith(prefix) or name in excluded or name in names:
                continue
            if inspect.isfunction(value):
                names.append(name)
    return names


def is_injectable(cls: Optional[type]) -> bool:
    return isinstance(cls, type) and issubclass(cls, Injectable)


class InjectionExtension:
    """Rewrites setup calls of injectable and ``inject``-tagged services.
    
    Runs once per build, before the container is compiled.
    """
    
    def __init__(self, config: Optional[InjectionConfig] = None):
        self.config = config or InjectionConfig()
    
    def before_compile(self, builder) -> None:
        composed = 0
        for definition in builder.get_definitions():
            if self.inject_for_service_definition(definition):
                composed += 1
        
        tagged = 0
        for definition in builder.get_definitions():
            if definition.get_tag(self.config.inject_tag) and definition.resolve_class() is not None:
                self.update_definition(definition)
                tagged += 1
        
        logger.info(f"Injection pass composed {composed} injectable and {tagged} tagged services")
    
    def inject_for_service_definition(self, definition: ServiceDescriptor) -> bool:
        """Plan and compose property injection for an injectable service."""
        cls = definition.resolve_class()
        if not is_injectable(cls):
            return False
        compose_setup(definition, get_injection_plan(cls), self.config)
        return True
    
    def update_definition(self, definition: ServiceDescriptor) -> None:
        """Call every inject-prefixed method of a tagged service first.
        
        The operations of the ``Injectable`` capability are not inject
        methods and are left where the injection pass put them.
        """
        methods = get_inject_methods(
            definition.resolve_class(),
            self.config.inject_method_prefix,
            exclude=self.config.guard_operations
        )
        compose_inject_methods(definition, methods)
        logger.debug(f"Service '{definition.name}' calls inject methods {methods}")
