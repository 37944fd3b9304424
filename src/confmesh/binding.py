"""Option binding: copy configuration values onto typed defaults objects.

Binding never fails on a type mismatch. Each field present in both the
defaults object and the configuration section is coerced to the kind of the
default value using a fixed precedence table; values that cannot be coerced
fall back to a safe default (``0``, ``False``) or leave the field untouched.

Defaults objects may be dataclass instances, plain objects, or dicts, and may
nest any of those.
"""

import json
import math
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

OPTIONS_SUFFIX = "Options"

_TRUE_STRINGS = ("1", "true", "on")


class ValueKind(Enum):
    """Tag for the kind of a configuration or option value."""
    NULL = "null"
    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    OBJECT = "object"
    OTHER = "other"


def kind_of(value: Any) -> ValueKind:
    """Classify a value. ``bool`` is checked before numbers since it subclasses int."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    if isinstance(value, (type, Enum)) or callable(value):
        return ValueKind.OTHER
    if is_dataclass(value) or hasattr(value, "__dict__"):
        return ValueKind.OBJECT
    return ValueKind.OTHER


def normalize_key(name: str) -> str:
    """Derive a section key from an options type name.

    ``DatabaseOptions`` -> ``database``; ``Options`` stays ``options``.
    """
    if len(name) > len(OPTIONS_SUFFIX) and name.endswith(OPTIONS_SUFFIX):
        name = name[:-len(OPTIONS_SUFFIX)]
    if not name:
        return name
    return name[0].lower() + name[1:]


class SectionNames:
    """Explicit options type -> section key table.

    Types without an entry fall back to their class name.
    """

    def __init__(self, entries: Optional[Mapping[type, str]] = None):
        self._entries: dict[type, str] = dict(entries or {})

    def register(self, options_type: type, section: str) -> None:
        self._entries[options_type] = section

    def section_for(self, options_type: type) -> str:
        return self._entries.get(options_type, options_type.__name__)

    def __contains__(self, options_type: type) -> bool:
        return options_type in self._entries


# --- Coercion ---------------------------------------------------------------

def _to_string(value: Any, kind: ValueKind) -> str:
    if kind == ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind == ValueKind.NUMBER:
        if isinstance(value, float):
            if math.isnan(value):
                return "NaN"
            if math.isinf(value):
                return "Infinity" if value > 0 else "-Infinity"
            if value.is_integer():
                return str(int(value))
        return str(value)
    if kind == ValueKind.STRING:
        return value
    return json.dumps(_plain(value), separators=(",", ":"), default=str)


def _to_bool(value: Any, kind: ValueKind) -> bool:
    if kind == ValueKind.STRING:
        return value.lower() in _TRUE_STRINGS
    if kind == ValueKind.BOOLEAN:
        return value
    if kind == ValueKind.NUMBER:
        return value == 1
    return False


def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.copysign(math.inf, value)


def _to_number(value: Any, kind: ValueKind, target: Any) -> int | float:
    as_int = isinstance(target, int)
    fallback = 0 if as_int else 0.0

    if kind == ValueKind.BOOLEAN:
        number: float = 1.0 if value else 0.0
    elif kind == ValueKind.NUMBER:
        if isinstance(value, int):
            return value if as_int else _int_to_float(value)
        number = value
    elif kind == ValueKind.STRING:
        text = value.strip()
        if not text:
            return fallback
        if as_int:
            try:
                return int(text)
            except ValueError:
                pass
        try:
            number = float(text)
        except (ValueError, OverflowError):
            return fallback
    else:
        return fallback

    if math.isnan(number):
        return fallback
    if as_int and number.is_integer():
        return int(number)
    return number


def _plain(value: Any) -> Any:
    """Convert nested option objects to JSON-compatible structures."""
    if isinstance(value, Mapping):
        return {str(k): _plain(v) for k, v in value.items()}
    if kind_of(value) == ValueKind.OBJECT:
        return {k: _plain(getattr(value, k)) for k in _field_names(value)}
    return value


def _field_names(obj: Any) -> Iterable[str]:
    if isinstance(obj, Mapping):
        return list(obj.keys())
    if is_dataclass(obj):
        return [f.name for f in fields(obj)]
    return list(vars(obj).keys())


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj[key]
    return getattr(obj, key)


def _set(obj: Any, key: str, value: Any) -> None:
    if isinstance(obj, Mapping):
        obj[key] = value
    else:
        setattr(obj, key, value)


def _strictly_equal(a: Any, b: Any, a_kind: ValueKind, b_kind: ValueKind) -> bool:
    if a_kind != b_kind or a_kind in (ValueKind.OBJECT, ValueKind.OTHER):
        return a is b
    if a_kind == ValueKind.NUMBER:
        return a == b
    return type(a) is type(b) and a == b


def coerce_value(target: Any, value: Any) -> Any:
    """Return the value a field holding ``target`` should take for ``value``.

    Objects are updated in place and returned as-is.
    """
    target_kind = kind_of(target)
    value_kind = kind_of(value)

    if _strictly_equal(target, value, target_kind, value_kind):
        return target
    if value_kind == ValueKind.NULL:
        return None
    if target_kind == ValueKind.NULL:
        return value
    if target_kind == ValueKind.STRING:
        return _to_string(value, value_kind)
    if target_kind == ValueKind.BOOLEAN:
        return _to_bool(value, value_kind)
    if target_kind == ValueKind.NUMBER:
        return _to_number(value, value_kind, target)
    if target_kind == ValueKind.OBJECT and isinstance(value, Mapping):
        bind_section(target, value)
    return target


def bind_section(options: Any, section: Mapping[str, Any]) -> Any:
    """Coerce every field of ``options`` that also appears in ``section``.

    ``options`` is modified in place and returned.
    """
    for key in _field_names(options):
        if key not in section:
            continue
        current = _get(options, key)
        coerced = coerce_value(current, section[key])
        if coerced is not current:
            _set(options, key, coerced)
    return options
