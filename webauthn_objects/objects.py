"""WebAuthn ceremony objects holding packed and unpacked renderings.

Every wrapper takes a single mapping whose binary-bearing fields may be
given either as bytes or as lowercase hex text, mixed freely, and fills in
whichever rendering is missing:

* ``packed`` renders every binary field as hex text (``clientDataJSON`` as
  its literal character text), suitable for JSON transport;
* ``unpacked`` renders every binary field as ``bytes``, suitable for passing
  to an authenticator API.

Plain fields are deep-copied into both graphs unchanged. Fields that are not
in the input never appear in either graph.
"""
from __future__ import annotations

import json
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type

from fido2.webauthn import AttestationObject, AuthenticatorData, CollectedClientData

from .codec import CHAR_CODE, CeremonyEncodingError
from .fields import FieldKind, FieldSpec, encode_fields, plain
from .serialization import dumps, make_json_safe

__all__ = [
    "AuthenticatorAssertionResponse",
    "AuthenticatorAttestationResponse",
    "CEREMONY_TYPES",
    "CeremonyObject",
    "PublicKeyCredentialCreationOptions",
    "PublicKeyCredentialRequestOptions",
]


class CeremonyObject:
    """Base class for the ceremony wrappers.

    Subclasses only declare ``FIELDS``; construction is shared.
    """

    FIELDS: ClassVar[Tuple[FieldSpec, ...]] = ()

    __slots__ = ("_packed", "_unpacked")

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        packed: Dict[str, Any] = {}
        unpacked: Dict[str, Any] = {}
        if data is not None:
            if not isinstance(data, Mapping):
                raise CeremonyEncodingError(
                    f"{type(self).__name__} expects a mapping, got {type(data).__name__}."
                )
            encode_fields(data, self.FIELDS, packed, unpacked)
        self._packed = packed
        self._unpacked = unpacked

    @property
    def packed(self) -> Mapping[str, Any]:
        """Graph with binary fields as text."""
        return MappingProxyType(self._packed)

    @property
    def unpacked(self) -> Mapping[str, Any]:
        """Graph with binary fields as ``bytes``."""
        return MappingProxyType(self._unpacked)

    @classmethod
    def from_json(cls, text: str) -> "CeremonyObject":
        return cls(json.loads(text))

    def to_json(self, indent: Optional[int] = None) -> str:
        return dumps(self._packed, indent=indent)

    def to_websafe(self) -> Dict[str, Any]:
        """Return the unpacked graph with binary fields as base64url text."""
        return make_json_safe(self._unpacked)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._packed == other._packed  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._packed!r})"


class PublicKeyCredentialCreationOptions(CeremonyObject):
    __slots__ = ()

    FIELDS = plain(
        "rp",
        "user",
        "pubKeyCredParams",
        "authenticatorSelection",
        "attestation",
        "extensions",
        "challenge",
        "timeout",
    ) + (
        FieldSpec("user", FieldKind.BINARY, member="id"),
        FieldSpec("challenge", FieldKind.BINARY),
        FieldSpec("excludeCredentials", FieldKind.BINARY_LIST, member="id"),
    )


class AuthenticatorAttestationResponse(CeremonyObject):
    """Registration response; also exposes the parsed client data."""

    __slots__ = ("_client_data",)

    FIELDS = (
        FieldSpec("attestationObject", FieldKind.BINARY),
        FieldSpec("clientDataJSON", FieldKind.BINARY, codec=CHAR_CODE),
    )

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(data)
        self._client_data: Any = None
        if "clientDataJSON" in self._packed:
            try:
                self._client_data = json.loads(self._packed["clientDataJSON"])
            except json.JSONDecodeError as exc:
                raise CeremonyEncodingError(
                    f"clientDataJSON is not valid JSON: {exc}", field="clientDataJSON"
                ) from exc

    @property
    def client_data(self) -> Any:
        """JSON value parsed from ``clientDataJSON``, or ``None`` when absent."""
        return self._client_data

    @property
    def collected_client_data(self) -> Optional[CollectedClientData]:
        raw = self._unpacked.get("clientDataJSON")
        if raw is None:
            return None
        return CollectedClientData(raw)

    @property
    def attestation_object(self) -> Optional[AttestationObject]:
        raw = self._unpacked.get("attestationObject")
        if raw is None:
            return None
        return AttestationObject(raw)


class PublicKeyCredentialRequestOptions(CeremonyObject):
    __slots__ = ()

    FIELDS = plain("extensions", "challenge", "timeout", "rpId", "userVerification") + (
        FieldSpec("challenge", FieldKind.BINARY),
        FieldSpec("allowCredentials", FieldKind.BINARY_LIST, member="id"),
    )


class AuthenticatorAssertionResponse(CeremonyObject):
    __slots__ = ()

    FIELDS = (
        FieldSpec("authenticatorData", FieldKind.BINARY),
        FieldSpec("signature", FieldKind.BINARY),
        FieldSpec("userHandle", FieldKind.BINARY),
    )

    @property
    def authenticator_data(self) -> Optional[AuthenticatorData]:
        raw = self._unpacked.get("authenticatorData")
        if raw is None:
            return None
        return AuthenticatorData(raw)


CEREMONY_TYPES: Mapping[str, Type[CeremonyObject]] = MappingProxyType(
    {
        "creation-options": PublicKeyCredentialCreationOptions,
        "attestation-response": AuthenticatorAttestationResponse,
        "request-options": PublicKeyCredentialRequestOptions,
        "assertion-response": AuthenticatorAssertionResponse,
    }
)
