"""Container building and construction for property injection."""

from .container import Container
from .builder import ContainerBuilder
from .bootstrap import create_container, register_auto_services, auto_service_name

__all__ = [
    'Container',
    'ContainerBuilder',
    'create_container',
    'register_auto_services',
    'auto_service_name'
]
