"""
Property Injection

Declarative property injection for a service container: services mark
fields to be filled by the container, a build pass plans and orders the
injection calls, and a per-instance guard makes injection one-shot.
"""

__version__ = "0.1.0"
__author__ = "Property Injection Team"

# Public API
from .config import Config, InjectionConfig, get_config, set_config
from .core import (
    ServiceMarker,
    Injectable,
    SetupCall,
    ServiceDescriptor,
    ServiceError,
    InjectionError,
    DuplicateInjectionError,
    InjectionAfterCompletionError,
)
from .injection import InjectableService, InjectionExtension, inject
from .di import Container, ContainerBuilder, create_container

__all__ = [
    "Config",
    "InjectionConfig",
    "get_config",
    "set_config",
    "ServiceMarker",
    "Injectable",
    "SetupCall",
    "ServiceDescriptor",
    "ServiceError",
    "InjectionError",
    "DuplicateInjectionError",
    "InjectionAfterCompletionError",
    "InjectableService",
    "InjectionExtension",
    "inject",
    "Container",
    "ContainerBuilder",
    "create_container",
    "__version__"
]
