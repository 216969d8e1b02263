"""Dot-path lookup into nested container parameters."""

from typing import Any, Mapping, Optional


def get_path(parameters: Mapping[str, Any], key: str, default: Optional[Any] = None) -> Any:
    """Return the value at dot-delimited ``key``, or ``default``.
    
    ``get_path({"a": {"b": 5}}, "a.b")`` returns ``5``. A missing segment, or a
    non-mapping value met while segments remain, yields ``default``.
    """
    current: Any = parameters
    for segment in key.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return default
        current = current[segment]
    return current
