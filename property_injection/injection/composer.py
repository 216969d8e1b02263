"""Rewrite a descriptor's setup calls so injection runs before author setup."""

import logging
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Hashable, List, Optional, Sequence, Tuple

from ..config import InjectionConfig
from ..core.definitions import ServiceDescriptor, SetupCall
from .planner import InjectionPlan

logger = logging.getLogger(__name__)


def build_injection_calls(plan: InjectionPlan, config: InjectionConfig) -> List[SetupCall]:
    """One ``inject_property`` call per planned property, by-name first."""
    return [
        SetupCall(config.inject_property_method, (prop, config.reference(target)))
        for prop, target in plan
    ]


def operation_key(call: SetupCall) -> Hashable:
    return call.operation


def property_key(config: InjectionConfig) -> Callable[[SetupCall], Hashable]:
    """Identify ``inject_property`` calls by operation and target property."""
    def key(call: SetupCall) -> Hashable:
        if call.operation == config.inject_property_method and call.arguments:
            return (call.operation, call.arguments[0])
        return call.operation
    return key


def take_overrides(
    generated: Sequence[SetupCall],
    existing: Sequence[SetupCall],
    key: Callable[[SetupCall], Hashable] = operation_key
) -> Tuple[List[SetupCall], List[SetupCall]]:
    """Replace generated calls with author calls of the same operation.
    
    Each generated call consumes the earliest unconsumed existing call with an
    equal key, by default its ``operation``, which is used verbatim in its
    place. Returns the resolved generated calls and the unconsumed existing
    calls, both in their original order.
    """
    pending: Dict[Hashable, Deque[int]] = defaultdict(deque)
    for index, call in enumerate(existing):
        pending[key(call)].append(index)
    
    consumed = set()
    resolved = []
    for call in generated:
        candidates = pending.get(key(call))
        if candidates:
            index = candidates.popleft()
            consumed.add(index)
            resolved.append(existing[index])
        else:
            resolved.append(call)
    
    remaining = [call for index, call in enumerate(existing) if index not in consumed]
    return resolved, remaining


def compose_setup(
    descriptor: ServiceDescriptor,
    plan: InjectionPlan,
    config: Optional[InjectionConfig] = None
) -> List[SetupCall]:
    """Rewrite ``descriptor.setup`` for property injection.
    
    The final sequence is: planned ``inject_property`` calls (author overrides
    win), one ``inject_parameters(@container)``, one ``injection_completed()``,
    then the remaining author calls. An author ``inject_property`` call
    replaces the planned one for the same property. Must run once per
    descriptor; a second run prepends another injection block.
    """
    config = config or InjectionConfig()
    injections, remaining = take_overrides(
        build_injection_calls(plan, config), descriptor.setup, property_key(config)
    )
    
    setup = list(injections)
    setup.append(SetupCall(config.inject_parameters_method, (config.reference(config.container_reference),)))
    setup.append(SetupCall(config.injection_completed_method))
    setup.extend(remaining)
    descriptor.set_setup(setup)
    
    logger.debug(f"Composed {len(setup)} setup calls for service '{descriptor.name}'")
    return setup


def compose_inject_methods(descriptor: ServiceDescriptor, methods: Sequence[str]) -> List[SetupCall]:
    """Put argument-less calls of ``methods`` in front of the setup calls.
    
    Author calls of the same operation replace the generated ones.
    """
    generated = [SetupCall(method) for method in methods]
    injections, remaining = take_overrides(generated, descriptor.setup)
    setup = injections + remaining
    descriptor.set_setup(setup)
    return setup
