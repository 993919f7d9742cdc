"""Shape introspection.

Classifies declared types and runtime values into a closed set of kinds, and
lists the fields of a struct class that the walker needs to visit.

Structs are dataclass instances and pydantic models. A field's tag lives in
``dataclasses.field(metadata={...})`` or
``pydantic.Field(json_schema_extra={...})`` under the validator's tag name.
"""

import collections.abc
import dataclasses
import types
import typing
from enum import Enum
from typing import Annotated, Any, ForwardRef, Iterator, Literal, Mapping, NamedTuple, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel

from tagvalid.cache import SnapshotCache
from tagvalid.errors import ConfigurationError
from tagvalid.tags import EXCLUDE

NoneType = type(None)

SELF_VALIDATE = "validate_self"

_TEXT_TYPES = (str, bytes, bytearray, memoryview)
_UNION_TYPES = (Union, types.UnionType)


class Kind(str, Enum):
    """Structural kind of a type or value."""

    STRUCT = "struct"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OPTIONAL = "optional"    # May be None; None is the absent reference
    DYNAMIC = "dynamic"      # Only the runtime value tells
    PRIMITIVE = "primitive"


class FieldDescriptor(NamedTuple):
    """A validated field of a struct class."""

    index: int
    name: str
    tags: str
    hint: Any


def is_struct_class(cls: type) -> bool:
    return dataclasses.is_dataclass(cls) or issubclass(cls, BaseModel)


def is_validatable_class(cls: type) -> bool:
    return callable(getattr(cls, SELF_VALIDATE, None))


def _classify_class(cls: type) -> Kind:
    if issubclass(cls, _TEXT_TYPES):
        return Kind.PRIMITIVE
    if is_struct_class(cls):
        return Kind.STRUCT
    if issubclass(cls, collections.abc.Mapping):
        return Kind.MAPPING
    if issubclass(cls, (collections.abc.Sequence, collections.abc.Set)):
        return Kind.SEQUENCE
    return Kind.PRIMITIVE


def _classify_type(tp: Any) -> Kind:
    if tp is Any or tp is object or isinstance(tp, (str, ForwardRef, TypeVar)):
        return Kind.DYNAMIC
    if tp is None or tp is NoneType:
        return Kind.PRIMITIVE

    supertype = getattr(tp, "__supertype__", None)  # typing.NewType
    if supertype is not None:
        return kind_of_type(supertype)

    origin = get_origin(tp)
    if origin is Annotated:
        return kind_of_type(get_args(tp)[0])
    if origin in _UNION_TYPES:
        if NoneType in get_args(tp):
            return Kind.OPTIONAL
        return Kind.DYNAMIC
    if origin is Literal:
        return Kind.PRIMITIVE

    cls = origin if origin is not None else tp
    if not isinstance(cls, type):
        return Kind.DYNAMIC
    return _classify_class(cls)


_value_kinds: SnapshotCache[type, Kind] = SnapshotCache()
_type_kinds: SnapshotCache[Any, Kind] = SnapshotCache()
_validatable: SnapshotCache[type, bool] = SnapshotCache()


def kind_of_value(value: Any) -> Kind:
    """Kind of a runtime value. ``None`` is an absent optional."""
    if value is None:
        return Kind.OPTIONAL
    return _value_kinds.get_or_compute(type(value), _classify_class)


def kind_of_type(tp: Any) -> Kind:
    """Kind of a declared type hint."""
    try:
        hash(tp)
    except TypeError:
        return _classify_type(tp)
    return _type_kinds.get_or_compute(tp, _classify_type)


def is_validatable(value: Any) -> bool:
    """True if the value exposes ``validate_self``. Class objects never do."""
    if value is None or isinstance(value, type):
        return False
    return _validatable.get_or_compute(type(value), is_validatable_class)


def resolve_hint(tp: Any) -> Any:
    """Strip ``Annotated``, ``NewType`` and ``Optional`` layers; dynamic hints become ``Any``."""
    while True:
        supertype = getattr(tp, "__supertype__", None)
        if supertype is not None:
            tp = supertype
            continue
        origin = get_origin(tp)
        if origin is Annotated:
            tp = get_args(tp)[0]
            continue
        if origin in _UNION_TYPES:
            args = [a for a in get_args(tp) if a is not NoneType]
            if len(args) != 1:
                return Any
            tp = args[0]
            continue
        if kind_of_type(tp) is Kind.DYNAMIC:
            return Any
        return tp


def is_recursible(tp: Any) -> bool:
    """True if a value declared as ``tp`` may hold something worth walking."""
    if kind_of_type(tp) is not Kind.PRIMITIVE:
        return True
    cls = resolve_hint(tp)
    cls = get_origin(cls) or cls
    return isinstance(cls, type) and is_validatable_class(cls)


def element_hint(tp: Any) -> Any:
    """Declared element type of a sequence hint."""
    args = get_args(tp)
    if not args:
        return Any
    if get_origin(tp) is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        # Heterogeneous tuple: walk by value unless every member is a leaf.
        if any(is_recursible(a) for a in args):
            return Any
    return args[0]


def value_hint(tp: Any) -> Any:
    """Declared value type of a mapping hint."""
    args = get_args(tp)
    return args[1] if len(args) == 2 else Any


# ── Field discovery ──

def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        # Unresolvable forward references stay as strings and walk as dynamic.
        return {}


def _declared_fields(cls: type) -> Iterator[tuple[str, Any, Mapping]]:
    """Yield ``(name, hint, metadata)`` in declaration order."""
    if dataclasses.is_dataclass(cls):
        hints = _type_hints(cls)
        for f in dataclasses.fields(cls):
            yield f.name, hints.get(f.name, f.type), f.metadata
    else:
        for name, info in cls.model_fields.items():
            extra = info.json_schema_extra
            yield name, info.annotation, extra if isinstance(extra, Mapping) else {}


def describe_fields(cls: type, tag_name: str) -> tuple[FieldDescriptor, ...]:
    """List the fields of a struct class the walker must visit.

    Private fields (leading underscore) and fields tagged ``-`` are left out,
    as are untagged fields whose declared type can never hold anything to
    walk.
    """
    descriptors = []
    for index, (name, hint, metadata) in enumerate(_declared_fields(cls)):
        if name.startswith("_"):
            continue
        tags = metadata.get(tag_name, "")
        if not isinstance(tags, str):
            raise ConfigurationError(
                f"validator: tag {tag_name!r} on {cls.__qualname__}.{name} must be a string, "
                f"got {type(tags).__name__}"
            )
        if tags == EXCLUDE:
            continue
        if not tags and not is_recursible(hint):
            continue
        descriptors.append(FieldDescriptor(index=index, name=name, tags=tags, hint=hint))
    return tuple(descriptors)
