"""Compute which properties of a class get injected, and from where."""

import logging
import types
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Iterable, Iterator, Mapping, Optional, Tuple

from .metadata import PropertyMetadata, qualified_name, reflect_class

logger = logging.getLogger(__name__)


def _frozen(entries=None) -> Mapping[str, str]:
    return types.MappingProxyType(dict(entries or {}))


@dataclass(frozen=True, eq=False)
class InjectionPlan:
    """Ordered property targets: by explicit service name, then by type."""
    by_name: Mapping[str, str] = field(default_factory=_frozen)
    by_type: Mapping[str, str] = field(default_factory=_frozen)
    
    def __iter__(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(property, target)`` pairs in injection order."""
        yield from self.by_name.items()
        yield from self.by_type.items()
    
    def __len__(self) -> int:
        return len(self.by_name) + len(self.by_type)


def plan_injections(
    properties: Iterable[PropertyMetadata],
    resolve_type: Callable[[PropertyMetadata], Optional[str]]
) -> InjectionPlan:
    """Build the injection plan for properties given in declaration order.
    
    A marker with a non-empty service name targets that service and ignores
    the declared type. A bare marker targets the resolved declared type; when
    no type resolves, the property is left out.
    """
    by_name = {}
    by_type = {}
    for prop in properties:
        marker = prop.inject_marker
        if marker is None or marker is False:
            continue
        if isinstance(marker, str) and marker:
            by_name[prop.name] = marker
            continue
        type_id = resolve_type(prop)
        if type_id is None:
            logger.debug(f"Skipping '{prop.name}': no resolvable declared type")
            continue
        by_type[prop.name] = type_id
    return InjectionPlan(by_name=_frozen(by_name), by_type=_frozen(by_type))


@lru_cache(maxsize=None)
def get_injection_plan(cls: type) -> InjectionPlan:
    """Cached plan for ``cls``."""
    metadata = reflect_class(cls)
    plan = plan_injections(metadata.properties, metadata.resolve_type)
    logger.debug(
        f"Planned {len(plan.by_name)} by-name and {len(plan.by_type)} by-type "
        f"injections for {qualified_name(cls)}"
    )
    return plan
