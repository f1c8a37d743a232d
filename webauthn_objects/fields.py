"""Field projection and dual encoding driven by declarative field tables."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, MutableMapping, Optional, Sequence, Tuple

from .codec import HEX, CeremonyEncodingError, Codec, coerce_bytes, is_packed

__all__ = [
    "FieldKind",
    "FieldSpec",
    "clone_value",
    "encode_fields",
    "encode_value",
    "plain",
    "project_fields",
]


LOGGER = logging.getLogger("webauthn_objects.fields")


class FieldKind(enum.Enum):
    PLAIN = "plain"
    BINARY = "binary"
    BINARY_LIST = "binary-list"


@dataclass(frozen=True)
class FieldSpec:
    """Describe how one top-level field of a ceremony object is handled.

    ``member`` names the binary member inside a sub-object (``user.id``) or
    inside every element of a list (``excludeCredentials[].id``). Plain
    fields ignore both ``codec`` and ``member``.
    """

    name: str
    kind: FieldKind = FieldKind.PLAIN
    codec: Codec = HEX
    member: Optional[str] = None

    @property
    def path(self) -> str:
        if self.member is None:
            return self.name
        if self.kind is FieldKind.BINARY_LIST:
            return f"{self.name}[].{self.member}"
        return f"{self.name}.{self.member}"


def plain(*names: str) -> Tuple[FieldSpec, ...]:
    return tuple(FieldSpec(name) for name in names)


def clone_value(value: Any) -> Any:
    """Return a deep copy of a JSON-like ``value`` with bytes made immutable."""

    if isinstance(value, Mapping):
        return {key: clone_value(val) for key, val in value.items()}
    if isinstance(value, list):
        return [clone_value(item) for item in value]
    if isinstance(value, tuple):
        return tuple(clone_value(item) for item in value)
    if not is_packed(value):
        return coerce_bytes(value)
    return value


def project_fields(
    source: Mapping[str, Any],
    names: Iterable[str],
    *destinations: MutableMapping[str, Any],
) -> None:
    """Copy every listed field present in ``source`` onto each destination."""

    for name in names:
        if name not in source:
            continue
        for destination in destinations:
            destination[name] = clone_value(source[name])


def encode_value(value: Any, codec: Codec, *, path: str) -> Tuple[str, bytes]:
    """Return the ``(packed, unpacked)`` renderings of one binary value."""

    if is_packed(value):
        try:
            unpacked = codec.unpack(value)
        except CeremonyEncodingError as exc:
            raise CeremonyEncodingError(f"{path}: {exc}", field=path) from exc
        LOGGER.debug("Unpacked %s from %s text", path, codec.name)
    else:
        unpacked = coerce_bytes(value)
        LOGGER.debug("Packed %s as %s text", path, codec.name)
    return codec.pack(unpacked), unpacked


def _encode_member(
    source: Mapping[str, Any],
    member: str,
    codec: Codec,
    packed: MutableMapping[str, Any],
    unpacked: MutableMapping[str, Any],
    *,
    path: str,
) -> None:
    value = source.get(member)
    if value is None:
        return
    packed[member], unpacked[member] = encode_value(value, codec, path=path)


def _encode_list(
    spec: FieldSpec,
    elements: Any,
    packed: MutableMapping[str, Any],
    unpacked: MutableMapping[str, Any],
) -> None:
    if not isinstance(elements, (list, tuple)):
        raise CeremonyEncodingError(
            f"{spec.name} must be a list, got {type(elements).__name__}.",
            field=spec.name,
        )

    packed_items: List[Any] = []
    unpacked_items: List[Any] = []
    for index, element in enumerate(elements):
        packed_slot = clone_value(element)
        unpacked_slot = clone_value(element)
        if isinstance(element, Mapping) and spec.member is not None:
            _encode_member(
                element,
                spec.member,
                spec.codec,
                packed_slot,
                unpacked_slot,
                path=f"{spec.name}[{index}].{spec.member}",
            )
        packed_items.append(packed_slot)
        unpacked_items.append(unpacked_slot)

    packed[spec.name] = packed_items
    unpacked[spec.name] = unpacked_items


def _encode_binary(
    spec: FieldSpec,
    value: Any,
    packed: MutableMapping[str, Any],
    unpacked: MutableMapping[str, Any],
) -> None:
    if spec.member is None:
        packed[spec.name], unpacked[spec.name] = encode_value(
            value, spec.codec, path=spec.name
        )
        return

    if not isinstance(value, Mapping) or spec.member not in value:
        return

    packed_container = packed.get(spec.name)
    if not isinstance(packed_container, dict):
        packed_container = packed[spec.name] = clone_value(value)
    unpacked_container = unpacked.get(spec.name)
    if not isinstance(unpacked_container, dict):
        unpacked_container = unpacked[spec.name] = clone_value(value)

    _encode_member(
        value,
        spec.member,
        spec.codec,
        packed_container,
        unpacked_container,
        path=spec.path,
    )


def encode_fields(
    source: Mapping[str, Any],
    specs: Sequence[FieldSpec],
    packed: MutableMapping[str, Any],
    unpacked: MutableMapping[str, Any],
) -> None:
    """Populate ``packed`` and ``unpacked`` from ``source`` following ``specs``.

    Plain fields are projected first so binary fields nested inside them
    (``user.id``) are rewritten in place on the projected copies. Absent
    fields and ``None`` binary values are left untouched.
    """

    project_fields(
        source,
        [spec.name for spec in specs if spec.kind is FieldKind.PLAIN],
        packed,
        unpacked,
    )

    for spec in specs:
        if spec.kind is FieldKind.PLAIN or spec.name not in source:
            continue
        value = source[spec.name]
        if value is None:
            continue
        if spec.kind is FieldKind.BINARY_LIST:
            _encode_list(spec, value, packed, unpacked)
        else:
            _encode_binary(spec, value, packed, unpacked)

