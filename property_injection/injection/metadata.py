"""Per-class property metadata: injection markers, type resolution and setters."""

import builtins
import inspect
import logging
import sys
import types
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any, Callable, Dict, ForwardRef, Mapping, Optional, Tuple, Union

from ..core.errors import ConfigurationError

logger = logging.getLogger(__name__)

Setter = Callable[[Any, Any], None]


@dataclass(frozen=True)
class Inject:
    """Injection marker, used as ``Annotated`` metadata."""
    service: Optional[str] = None
    
    @property
    def marker(self) -> Union[bool, str]:
        return self.service if self.service else True


def inject(service: Optional[str] = None) -> Inject:
    """Mark a property for injection, by service name or by declared type.
    
    ``logger: Annotated[Logger, inject("log")]`` injects the service named
    ``log``; ``store: Annotated[Storage, inject()]`` injects by type.
    """
    return Inject(service)


@dataclass(frozen=True)
class PropertyMetadata:
    """One declared property of a class."""
    name: str
    declared_type: Optional[Any] = None
    inject_marker: Union[bool, str, None] = None
    declaring_class: Optional[type] = None


@dataclass(frozen=True)
class ClassMetadata:
    """Reflected shape of a service class."""
    cls: type
    properties: Tuple[PropertyMetadata, ...]
    setters: Mapping[str, Setter]
    
    def resolve_type(self, prop: PropertyMetadata) -> Optional[str]:
        """Fully-qualified identifier of a property's declared type."""
        return resolve_type(prop.declared_type, prop.declaring_class or self.cls)


def qualified_name(cls: type) -> str:
    """Fully-qualified identifier of a class."""
    return f"{cls.__module__}.{cls.__qualname__}"


def _lookup(path: str, namespaces) -> Any:
    head, *rest = path.split(".")
    for namespace in namespaces:
        if head in namespace:
            target = namespace[head]
            break
    else:
        return None
    for attr in rest:
        target = getattr(target, attr, None)
        if target is None:
            return None
    return target


def resolve_type(ref: Any, declaring: type) -> Optional[str]:
    """Resolve a type reference written in ``declaring``'s module.
    
    Names are looked up in the class body, then the module namespace (so
    imported aliases resolve to their real class), then builtins. A name
    that cannot be found is qualified relative to the declaring module,
    unless it is already dotted.
    """
    if ref is None or ref is type(None) or ref is typing.Any:
        return None
    if isinstance(ref, ForwardRef):
        ref = ref.__forward_arg__
    if isinstance(ref, str):
        ref = ref.strip()
        if not ref:
            return None
        module = sys.modules.get(declaring.__module__)
        namespaces = [vars(declaring), vars(module) if module else {}, vars(builtins)]
        target = _lookup(ref, namespaces)
        if isinstance(target, type):
            return qualified_name(target)
        if target is not None:
            return None
        return ref if "." in ref else f"{declaring.__module__}.{ref}"
    
    origin = typing.get_origin(ref)
    if origin is Union or origin is getattr(types, "UnionType", None):
        args = [arg for arg in typing.get_args(ref) if arg is not type(None)]
        return resolve_type(args[0], declaring) if len(args) == 1 else None
    if isinstance(ref, type):
        return qualified_name(ref)
    return None


def _split_annotation(annotation: Any) -> Tuple[Any, Union[bool, str, None]]:
    if typing.get_origin(annotation) is Annotated:
        declared, *extras = typing.get_args(annotation)
        markers = [extra for extra in extras if isinstance(extra, Inject)]
        return declared, (markers[-1].marker if markers else None)
    return annotation, None


def _own_annotations(klass: type) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(klass))
    except NameError as e:
        raise ConfigurationError(
            f"Cannot read annotations of {klass.__qualname__}: {e}",
            config_key=qualified_name(klass)
        ) from e


class _Namespace(dict):
    """Evaluation namespace turning unknown names into forward references."""
    
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.missing = []
    
    def __missing__(self, key):
        if hasattr(builtins, key):
            return getattr(builtins, key)
        self.missing.append(key)
        return ForwardRef(key)


def _evaluate(klass: type, name: str, annotation: str) -> Tuple[Any, bool]:
    module = sys.modules.get(klass.__module__)
    namespace = _Namespace(vars(module) if module else {})
    namespace.update(vars(klass))
    try:
        value = eval(annotation, {}, namespace)
    except Exception as e:
        raise ConfigurationError(
            f"Cannot evaluate annotation of {klass.__qualname__}.{name}: {e}",
            config_key=f"{qualified_name(klass)}.{name}"
        ) from e
    if namespace.missing:
        logger.warning(
            f"Unresolved names {namespace.missing} in annotation of "
            f"{klass.__qualname__}.{name}, ignoring its declared type"
        )
    return value, bool(namespace.missing)


def _read_property(klass: type, name: str, annotation: Any) -> PropertyMetadata:
    unresolved = False
    if isinstance(annotation, str):
        annotation, unresolved = _evaluate(klass, name, annotation)
    declared, marker = _split_annotation(annotation)
    return PropertyMetadata(
        name=name,
        declared_type=None if unresolved else declared,
        inject_marker=marker,
        declaring_class=klass
    )


def _make_setter(name: str) -> Setter:
    def setter(instance: Any, value: Any) -> None:
        object.__setattr__(instance, name, value)
    return setter


@lru_cache(maxsize=None)
def reflect_class(cls: type) -> ClassMetadata:
    """Read the declared properties of ``cls``, base classes first.
    
    Cached for the process lifetime; class shape is static.
    """
    properties: Dict[str, PropertyMetadata] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, annotation in _own_annotations(klass).items():
            properties[name] = _read_property(klass, name, annotation)
    
    metadata = ClassMetadata(
        cls=cls,
        properties=tuple(properties.values()),
        setters=types.MappingProxyType({name: _make_setter(name) for name in properties})
    )
    logger.debug(f"Reflected {len(metadata.properties)} properties of {qualified_name(cls)}")
    return metadata
