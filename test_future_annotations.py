"""Test reflection of classes declared with postponed annotations."""

from __future__ import annotations

from typing import Annotated, Optional

from property_injection.injection import (
    InjectableService,
    get_injection_plan,
    inject,
    qualified_name,
    reflect_class,
)


class Log:
    pass


class Later(InjectableService):
    a: Annotated[Log, inject("log")]
    b: Annotated[Missing, inject()]  # noqa: F821
    c: Annotated[Log, inject()]
    d: Annotated[Optional[Log], inject("optional.log")]
    e: Annotated[Missing, inject("named")]  # noqa: F821
    plain: int


def test_markers_survive_unresolved_names():
    plan = get_injection_plan(Later)
    
    assert dict(plan.by_name) == {"a": "log", "d": "optional.log", "e": "named"}
    assert dict(plan.by_type) == {"c": qualified_name(Log)}


def test_unresolved_entry_loses_only_its_type():
    properties = {prop.name: prop for prop in reflect_class(Later).properties}
    
    assert properties["b"].inject_marker is True
    assert properties["b"].declared_type is None
    assert properties["c"].declared_type is Log
    assert properties["plain"].declared_type is int
    assert properties["plain"].inject_marker is None
