"""Test class reflection and injection planning."""

import logging
from typing import Annotated, Optional

from property_injection.injection import (
    InjectableService,
    PropertyMetadata,
    get_injection_plan,
    inject,
    plan_injections,
    qualified_name,
    reflect_class,
)
from property_injection.injection.planner import InjectionPlan

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class Storage:
    pass


class Cache:
    pass


StorageAlias = Storage


class Report(InjectableService):
    title: str
    _logger: Annotated[logging.Logger, inject("log")]
    _store: Annotated[Storage, inject()]
    _cache: Annotated[Optional["Cache"], inject()]
    _mailer: Annotated["Mailer", inject("mail.sender")]
    _aliased: Annotated["StorageAlias", inject("")]
    _untyped: Annotated[None, inject()]
    _unmarked: Storage


class MonthlyReport(Report):
    _archive: Annotated[Storage, inject("archive")]


def _prop(name, declared_type=None, marker=None):
    return PropertyMetadata(name=name, declared_type=declared_type, inject_marker=marker)


def test_reflect_class_keeps_declaration_order():
    names = [prop.name for prop in reflect_class(Report).properties]
    assert names == ["title", "_logger", "_store", "_cache", "_mailer", "_aliased", "_untyped", "_unmarked"]


def test_reflect_class_lists_base_properties_first():
    names = [prop.name for prop in reflect_class(MonthlyReport).properties]
    assert names[-1] == "_archive"
    assert names[0] == "title"


def test_reflect_class_is_cached():
    assert reflect_class(Report) is reflect_class(Report)


def test_by_name_precedes_by_type_in_declaration_order():
    plan = get_injection_plan(Report)
    
    assert list(plan.by_name.items()) == [("_logger", "log"), ("_mailer", "mail.sender")]
    assert list(plan.by_type.items()) == [
        ("_store", qualified_name(Storage)),
        ("_cache", qualified_name(Cache)),
        ("_aliased", qualified_name(Storage)),
    ]
    assert [prop for prop, _ in plan] == ["_logger", "_mailer", "_store", "_cache", "_aliased"]
    assert len(plan) == 5


def test_property_appears_in_one_map_only():
    plan = get_injection_plan(Report)
    assert not set(plan.by_name) & set(plan.by_type)


def test_unresolvable_bare_marker_is_skipped():
    plan = get_injection_plan(Report)
    assert "_untyped" not in plan.by_name
    assert "_untyped" not in plan.by_type
    assert "_unmarked" not in plan.by_type


def test_inherited_plan():
    plan = get_injection_plan(MonthlyReport)
    assert list(plan.by_name) == ["_logger", "_mailer", "_archive"]


def test_unknown_type_name_is_qualified_by_declaring_module():
    metadata = reflect_class(Report)
    mailer = _prop("mailer", "Mailer", True)
    assert metadata.resolve_type(mailer) == f"{Report.__module__}.Mailer"
    assert metadata.resolve_type(_prop("dotted", "pkg.mod.Mailer", True)) == "pkg.mod.Mailer"


def test_plan_without_markers_is_empty():
    plan = plan_injections([_prop("a", Storage), _prop("b")], lambda prop: "x")
    
    assert isinstance(plan, InjectionPlan)
    assert dict(plan.by_name) == {}
    assert dict(plan.by_type) == {}


def test_named_marker_ignores_declared_type():
    calls = []
    
    def resolve(prop):
        calls.append(prop.name)
        return "resolved"
    
    plan = plan_injections([_prop("a", Storage, "svc"), _prop("b", Storage, True)], resolve)
    
    assert dict(plan.by_name) == {"a": "svc"}
    assert dict(plan.by_type) == {"b": "resolved"}
    assert calls == ["b"]


def test_plan_is_immutable():
    plan = get_injection_plan(Report)
    try:
        plan.by_name["_extra"] = "x"
    except TypeError:
        pass
    else:
        raise AssertionError("plan mapping should be read-only")
    assert get_injection_plan(Report) is plan
