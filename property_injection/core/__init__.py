"""Core infrastructure for property injection."""

from .service import ServiceMarker, Injectable
from .definitions import SetupCall, ServiceDescriptor
from .errors import (
    ServiceError,
    ConfigurationError,
    DependencyError,
    InjectionError,
    DuplicateInjectionError,
    InjectionAfterCompletionError,
    UnknownPropertyError,
)

__all__ = [
    'ServiceMarker',
    'Injectable',
    'SetupCall',
    'ServiceDescriptor',
    'ServiceError',
    'ConfigurationError',
    'DependencyError',
    'InjectionError',
    'DuplicateInjectionError',
    'InjectionAfterCompletionError',
    'UnknownPropertyError'
]
