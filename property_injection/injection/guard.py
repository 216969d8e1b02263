"""Runtime guard enforcing one-shot property injection per instance."""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Mapping, Optional, Set

from ..config import InjectionConfig, get_config
from ..core.errors import (
    DuplicateInjectionError,
    InjectionAfterCompletionError,
    UnknownPropertyError,
)
from ..core.service import Injectable
from .metadata import reflect_class
from .parameters import get_path

logger = logging.getLogger(__name__)


@dataclass
class InjectionState:
    """Injection progress of one instance. Never reset."""
    injected_properties: Set[str] = field(default_factory=set)
    completed: bool = False
    parameters: Mapping[str, Any] = field(default_factory=dict)


class InjectionGuard:
    """Performs the property writes for one instance.
    
    States go ``injecting -> completed`` with no way back. Checks and the
    write happen under one lock so concurrent misuse cannot inject twice.
    """
    
    def __init__(self, owner: Any, completion_hook: Optional[str] = None):
        self._owner = owner
        self._setters = reflect_class(type(owner)).setters
        self._completion_hook = completion_hook
        self._lock = threading.Lock()
        self.state = InjectionState()
    
    @property
    def completed(self) -> bool:
        return self.state.completed
    
    @property
    def injected_properties(self) -> FrozenSet[str]:
        return frozenset(self.state.injected_properties)
    
    def inject_property(self, name: str, value: Any) -> None:
        """Write ``value`` into property ``name`` of the owner.
        
        Raises:
            InjectionAfterCompletionError: injection was already completed
            DuplicateInjectionError: ``name`` was injected before
            UnknownPropertyError: the owner's class declares no such property
        """
        with self._lock:
            if self.state.completed:
                raise InjectionAfterCompletionError(name)
            if name in self.state.injected_properties:
                raise DuplicateInjectionError(name)
            setter = self._setters.get(name)
            if setter is None:
                raise UnknownPropertyError(type(self._owner).__qualname__, name)
            setter(self._owner, value)
            self.state.injected_properties.add(name)
    
    def inject_parameters(self, container: Any) -> None:
        """Store the container parameters; a mapping is stored as given.
        
        A container also sets the completion hook from its own configuration.
        """
        config = None
        if isinstance(container, Mapping):
            parameters = container
        else:
            parameters = container.get_parameters()
            config = getattr(container, "config", None)
        with self._lock:
            self.state.parameters = parameters
            if isinstance(config, InjectionConfig):
                self._completion_hook = config.completion_hook
    
    def injection_completed(self) -> None:
        """Complete injection, then call the owner's hook if it has one."""
        with self._lock:
            if self.state.completed:
                logger.warning(f"Injection of {type(self._owner).__qualname__} already completed")
                return
            self.state.completed = True
        
        hook = getattr(self._owner, self._completion_hook, None) if self._completion_hook else None
        if callable(hook):
            hook()
    
    def get_parameter(self, key: str, default: Optional[Any] = None) -> Any:
        return get_path(self.state.parameters, key, default)


_guard_creation_lock = threading.Lock()


class InjectableService(Injectable):
    """Common base giving a service the ``Injectable`` capability.
    
    Declare injected properties with ``Annotated`` markers and optionally
    define ``on_injection_completed``, which runs once every property has
    been injected::
    
        class Widget(InjectableService):
            _logger: Annotated[Logger, inject("log")]
            _store: Annotated[Storage, inject()]
            
            def on_injection_completed(self):
                self._store.connect(self.get_parameter("storage.dsn"))
    """
    
    @property
    def _injection_guard(self) -> InjectionGuard:
        guard = self.__dict__.get("_InjectableService__guard")
        if guard is None:
            with _guard_creation_lock:
                guard = self.__dict__.get("_InjectableService__guard")
                if guard is None:
                    guard = InjectionGuard(self, get_config().injection.completion_hook)
                    object.__setattr__(self, "_InjectableService__guard", guard)
        return guard
    
    def inject_property(self, name: str, value: Any) -> None:
        self._injection_guard.inject_property(name, value)
    
    def inject_parameters(self, container: Any) -> None:
        self._injection_guard.inject_parameters(container)
    
    def injection_completed(self) -> None:
        self._injection_guard.injection_completed()
    
    def get_parameter(self, key: str, default: Optional[Any] = None) -> Any:
        """Value of a container parameter; dots navigate deeper levels."""
        return self._injection_guard.get_parameter(key, default)
    
    @property
    def injected_properties(self) -> FrozenSet[str]:
        return self._injection_guard.injected_properties
    
    @property
    def is_injection_completed(self) -> bool:
        return self._injection_guard.completed
