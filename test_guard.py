"""Test the runtime injection guard."""

import threading
from typing import Annotated

import pytest

from property_injection.core import (
    DuplicateInjectionError,
    InjectionAfterCompletionError,
    UnknownPropertyError,
)
from property_injection.injection import InjectableService, InjectionGuard, inject


class Repository:
    pass


class Clock(InjectableService):
    _repository: Annotated[Repository, inject()]
    _timezone: Annotated[str, inject("timezone")]
    
    def __init__(self):
        self.hook_calls = 0
        self.seen_completed = None
        self.seen_zone = None
    
    def on_injection_completed(self):
        self.hook_calls += 1
        self.seen_completed = self.is_injection_completed
        self.seen_zone = self.get_parameter("clock.zone", "UTC")


class Silent(InjectableService):
    _value: Annotated[int, inject("value")]


class FakeContainer:
    def __init__(self, parameters):
        self.parameters = parameters
    
    def get_parameters(self):
        return self.parameters


def test_inject_writes_private_property():
    clock = Clock()
    repository = Repository()
    
    clock.inject_property("_repository", repository)
    
    assert clock._repository is repository
    assert clock.injected_properties == {"_repository"}


def test_duplicate_injection_fails_and_keeps_state():
    clock = Clock()
    clock.inject_property("_timezone", "CET")
    
    with pytest.raises(DuplicateInjectionError) as excinfo:
        clock.inject_property("_timezone", "UTC")
    
    assert excinfo.value.property_name == "_timezone"
    assert excinfo.value.error_code == "DUPLICATE_INJECTION"
    assert clock._timezone == "CET"
    assert clock.injected_properties == {"_timezone"}


def test_injection_after_completion_fails():
    clock = Clock()
    clock.inject_property("_timezone", "CET")
    clock.injection_completed()
    
    with pytest.raises(InjectionAfterCompletionError):
        clock.inject_property("_repository", Repository())
    with pytest.raises(InjectionAfterCompletionError):
        clock.inject_property("_timezone", "UTC")
    
    assert clock.injected_properties == {"_timezone"}
    assert not hasattr(clock, "_repository")


def test_unknown_property_is_rejected():
    clock = Clock()
    
    with pytest.raises(UnknownPropertyError):
        clock.inject_property("missing", 1)
    
    assert clock.injected_properties == frozenset()


def test_hook_runs_once_after_completion():
    clock = Clock()
    clock.inject_parameters(FakeContainer({"clock": {"zone": "Europe/Prague"}}))
    
    clock.injection_completed()
    clock.injection_completed()
    
    assert clock.hook_calls == 1
    assert clock.seen_completed is True
    assert clock.seen_zone == "Europe/Prague"


def test_completion_without_hook():
    service = Silent()
    service.injection_completed()
    assert service.is_injection_completed


def test_parameters_accept_mapping_and_may_be_replaced():
    service = Silent()
    service.inject_parameters({"a": {"b": 1}})
    assert service.get_parameter("a.b") == 1
    
    service.injection_completed()
    service.inject_parameters({"a": {"b": 2}})
    assert service.get_parameter("a.b") == 2
    assert service.get_parameter("a.c", "default") == "default"


def test_instances_do_not_share_state():
    first = Silent()
    second = Silent()
    
    first.inject_property("_value", 1)
    first.injection_completed()
    second.inject_property("_value", 2)
    
    assert first._value == 1
    assert second._value == 2
    assert not second.is_injection_completed


def test_concurrent_duplicate_injection_succeeds_once():
    guard = InjectionGuard(Silent())
    results = []
    barrier = threading.Barrier(8)
    
    def worker(value):
        barrier.wait()
        try:
            guard.inject_property("_value", value)
            results.append("ok")
        except DuplicateInjectionError:
            results.append("duplicate")
    
    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    
    assert results.count("ok") == 1
    assert results.count("duplicate") == 7
