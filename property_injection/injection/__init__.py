"""Declarative property injection: planning, composition and runtime guard."""

from .parameters import get_path
from .metadata import Inject, inject, PropertyMetadata, ClassMetadata, reflect_class, resolve_type, qualified_name
from .planner import InjectionPlan, plan_injections, get_injection_plan
from .composer import build_injection_calls, property_key, take_overrides, compose_setup, compose_inject_methods
from .guard import InjectionState, InjectionGuard, InjectableService
from .extension import InjectionExtension, get_inject_methods

__all__ = [
    'get_path',
    'Inject',
    'inject',
    'PropertyMetadata',
    'ClassMetadata',
    'reflect_class',
    'resolve_type',
    'qualified_name',
    'InjectionPlan',
    'plan_injections',
    'get_injection_plan',
    'build_injection_calls',
    'property_key',
    'take_overrides',
    'compose_setup',
    'compose_inject_methods',
    'InjectionState',
    'InjectionGuard',
    'InjectableService',
    'InjectionExtension',
    'get_inject_methods'
]
