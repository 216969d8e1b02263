"""Build-time service records: descriptors and their setup calls."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class SetupCall:
    """One post-construction method invocation recorded against a descriptor.
    
    Arguments are plain values or ``'@'``-prefixed references that the
    container resolves at instantiation time. For merging purposes a call is
    identified by ``operation`` alone.
    """
    operation: str
    arguments: Tuple[Any, ...] = ()
    
    def __repr__(self) -> str:
        args = ", ".join(repr(arg) for arg in self.arguments)
        return f"{self.operation}({args})"


@dataclass
class ServiceDescriptor:
    """Describes how to construct and initialise one managed service."""
    name: str
    service_class: Optional[type] = None
    factory: Optional[Callable[..., Any]] = None
    arguments: Tuple[Any, ...] = ()
    setup: List[SetupCall] = field(default_factory=list)
    tags: Dict[str, Any] = field(default_factory=dict)
    
    def resolve_class(self) -> Optional[type]:
        """Class of the service, falling back to a class used as factory."""
        if self.service_class is not None:
            return self.service_class
        if isinstance(self.factory, type):
            return self.factory
        return None
    
    def add_setup(self, operation: str, *arguments: Any) -> "ServiceDescriptor":
        """Append a setup call."""
        self.setup.append(SetupCall(operation, tuple(arguments)))
        return self
    
    def set_setup(self, calls: List[SetupCall]) -> None:
        """Replace the setup calls."""
        self.setup = list(calls)
    
    def get_tag(self, tag: str) -> Any:
        """Value of a tag, or None when the descriptor is not tagged."""
        return self.tags.get(tag)
    
    def add_tag(self, tag: str, value: Any = True) -> "ServiceDescriptor":
        """Tag the descriptor."""
        self.tags[tag] = value
        return self
