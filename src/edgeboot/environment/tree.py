"""Generic tree view of a typed configuration model.

A :class:`ConfigTree` is the JSON-compatible dump of a pydantic model with a
:class:`~edgeboot.environment.coercion.LeafKind` tag recorded for each leaf.
Overrides patch the dump; :meth:`ConfigTree.merge_into` validates it and
writes back only the patched leaves onto the original object.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
import types
from typing import Annotated, Any, NamedTuple, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from edgeboot.errors import DeserializationError, SerializationError

from .coercion import LeafKind, kind_of
from .paths import enumerate_paths

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, Sequence)


class _Leaf(NamedTuple):
    keys: tuple[str, ...]
    kind: LeafKind | None


def _unwrap(annotation: Any) -> tuple[Any, list[Any]]:
    """Strip ``Annotated`` and ``Optional`` wrappers, collecting metadata."""
    extras: list[Any] = []
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation, *more = get_args(annotation)
            extras.extend(more)
        elif origin is Union or origin is types.UnionType:
            args = [a for a in get_args(annotation) if a is not type(None)]
            if len(args) != 1:
                return None, extras
            annotation = args[0]
        else:
            return annotation, extras


def _is_table(annotation: Any) -> bool:
    target = get_origin(annotation) or annotation
    return isinstance(target, type) and (
        issubclass(target, (BaseModel, Mapping)) or target is dict
    )


def declared_kind(annotation: Any, metadata: Sequence[Any] = ()) -> LeafKind | None:
    """Leaf kind declared by a field annotation, if it names one."""
    annotation, extras = _unwrap(annotation)
    for item in (*metadata, *extras):
        if isinstance(item, LeafKind):
            return item
    # bool before int: bool is an int subclass
    for simple, kind in (
        (bool, LeafKind.BOOL),
        (int, LeafKind.INT),
        (float, LeafKind.FLOAT64),
        (str, LeafKind.STRING),
    ):
        if annotation is simple:
            return kind
    origin = get_origin(annotation) or annotation
    if origin in _SEQUENCE_ORIGINS:
        if any(_is_table(_unwrap(arg)[0]) for arg in get_args(annotation)):
            return None
        return LeafKind.STRING_LIST
    return None


def nested_model(annotation: Any) -> type[BaseModel] | None:
    annotation, _ = _unwrap(annotation)
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    return None


@dataclass
class ConfigTree:
    """Serialized configuration plus the kind of every leaf path."""

    data: dict[str, Any]
    _leaves: dict[str, _Leaf] = field(default_factory=dict, repr=False)
    _dirty: dict[str, None] = field(default_factory=dict, repr=False)

    @classmethod
    def from_model(cls, config: BaseModel) -> ConfigTree:
        """Serialize a pydantic model into a tagged tree.

        Raises:
            SerializationError: ``config`` is not a pydantic model or holds
                values that cannot be dumped.
        """
        if not isinstance(config, BaseModel):
            raise SerializationError(
                f"configuration must be a pydantic model, got {type(config).__name__}",
                hint="Pass the service configuration model instance",
            )
        try:
            data = config.model_dump(mode="json", by_alias=True)
        except PydanticSerializationError as exc:
            raise SerializationError(
                f"could not serialize {type(config).__name__}: {exc}"
            ) from exc
        tree = cls(data)
        tree._tag(type(config), data, ())
        return tree

    def _tag(
        self,
        model: type[BaseModel] | None,
        node: Mapping[str, Any],
        prefix: tuple[str, ...],
    ) -> None:
        fields = {}
        if model is not None:
            for name, info in model.model_fields.items():
                fields[info.serialization_alias or info.alias or name] = info
        for key, value in node.items():
            keys = (*prefix, key)
            info = fields.get(key)
            annotation = info.annotation if info is not None else None
            if isinstance(value, Mapping):
                self._tag(nested_model(annotation), value, keys)
                continue
            metadata = info.metadata if info is not None else ()
            kind = declared_kind(annotation, metadata) or kind_of(value)
            self._leaves[".".join(keys)] = _Leaf(keys, kind)

    def paths(self) -> list[str]:
        """Dotted paths of every leaf, in tree order."""
        return enumerate_paths(self.data)

    def kind(self, path: str) -> LeafKind | None:
        return self._leaves[path].kind

    def get(self, path: str) -> Any:
        node: Any = self.data
        for key in self._leaves[path].keys:
            node = node[key]
        return node

    def set(self, path: str, value: Any) -> None:
        *parents, last = self._leaves[path].keys
        node = self.data
        for key in parents:
            node = node[key]
        node[last] = value
        self._dirty[path] = None

    def merge_into(self, config: BaseModel) -> None:
        """Validate the tree and write the overridden leaves onto ``config``.

        Only paths changed with :meth:`set` are written, each onto the
        original nested object, so untouched fields (secrets, excluded
        fields, values that do not survive a JSON round trip) keep their
        exact values. ``config`` is left untouched when validation fails.

        Raises:
            DeserializationError: The tree no longer fits the model.
        """
        if not self._dirty:
            return
        model = type(config)
        try:
            merged = model.model_validate(self.data)
        except ValidationError as exc:
            err = exc.errors()[0]
            loc = ".".join(str(part) for part in err.get("loc", ()))
            raise DeserializationError(
                f"could not write overridden configuration back into "
                f"{model.__name__}: {loc}: {err.get('msg')}"
            ) from exc

        updates = []
        for path in self._dirty:
            keys = self._leaves[path].keys
            typed: Any = merged
            for key in keys:
                typed = _child(typed, key)
            updates.append((keys, typed))

        for (*parents, last), typed in updates:
            node: Any = config
            for key in parents:
                _mark_set(node, key)
                node = _child(node, key)
            _assign(node, last, typed)


def _field_name(node: BaseModel, key: str) -> str | None:
    for name, info in type(node).model_fields.items():
        if (info.serialization_alias or info.alias or name) == key:
            return name
    return None


def _child(node: Any, key: str) -> Any:
    if isinstance(node, BaseModel):
        name = _field_name(node, key)
        if name is not None:
            return getattr(node, name)
        return (node.__pydantic_extra__ or {})[key]
    return node[key]


def _mark_set(node: Any, key: str) -> None:
    if isinstance(node, BaseModel):
        name = _field_name(node, key)
        if name is not None:
            node.__pydantic_fields_set__.add(name)


def _assign(node: Any, key: str, value: Any) -> None:
    # setattr is refused on frozen models
    if not isinstance(node, BaseModel):
        node[key] = value
        return
    name = _field_name(node, key)
    if name is None:
        node.__pydantic_extra__[key] = value
        return
    node.__dict__[name] = value
    node.__pydantic_fields_set__.add(name)
