"""Bootstrap configuration for the injection container."""

import inspect
import logging
from typing import Callable, Iterable, List, Mapping, Optional

from .builder import ContainerBuilder
from .container import Container
from ..config import Config, InjectionConfig, get_config
from ..core.service import ServiceMarker
from ..injection.metadata import qualified_name

logger = logging.getLogger(__name__)


def auto_service_name(cls: type, config: Optional[InjectionConfig] = None) -> str:
    """Service name used when ``cls`` is registered automatically."""
    config = config or InjectionConfig()
    return config.auto_service_prefix + qualified_name(cls).replace(".", "_")


def register_auto_services(builder: ContainerBuilder, classes: Iterable[type]) -> List[str]:
    """Register concrete service-marked classes whose name ends in ``Service``.
    
    Classes already registered under their automatic name are skipped.
    """
    config = builder.config.injection
    registered = []
    for cls in classes:
        if not cls.__name__.endswith(config.auto_service_suffix):
            continue
        if not issubclass(cls, ServiceMarker) or cls is ServiceMarker or inspect.isabstract(cls):
            continue
        name = auto_service_name(cls, config)
        if builder.has_definition(name):
            continue
        builder.add_definition(name, service_class=cls)
        registered.append(name)
    
    logger.info(f"Auto-registered {len(registered)} services")
    return registered


def create_container(
    config: Optional[Config] = None,
    services: Optional[Mapping[str, type]] = None,
    auto_services: Iterable[type] = (),
    configure: Optional[Callable[[ContainerBuilder], None]] = None
) -> Container:
    """Create and compile a container.
    
    ``services`` maps service names to classes; ``auto_services`` goes
    through :func:`register_auto_services`; ``configure`` may register
    anything else before compiling.
    """
    if config is None:
        config = get_config()
    
    logging.getLogger("property_injection").setLevel(config.log_level)
    
    builder = ContainerBuilder(config)
    for name, service_class in (services or {}).items():
        builder.add_definition(name, service_class=service_class)
    register_auto_services(builder, auto_services)
    if configure is not None:
        configure(builder)
    
    return builder.compile()
