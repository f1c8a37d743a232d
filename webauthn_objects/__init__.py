"""Packed (hex) and unpacked (bytes) renderings of WebAuthn ceremony objects."""
from __future__ import annotations

from .codec import (
    CeremonyEncodingError,
    is_packed,
    pack_byte_array,
    pack_string,
    unpack_byte_array,
    unpack_string,
)
from .objects import (
    CEREMONY_TYPES,
    AuthenticatorAssertionResponse,
    AuthenticatorAttestationResponse,
    CeremonyObject,
    PublicKeyCredentialCreationOptions,
    PublicKeyCredentialRequestOptions,
)

__all__ = [
    "AuthenticatorAssertionResponse",
    "AuthenticatorAttestationResponse",
    "CEREMONY_TYPES",
    "CeremonyEncodingError",
    "CeremonyObject",
    "PublicKeyCredentialCreationOptions",
    "PublicKeyCredentialRequestOptions",
    "is_packed",
    "pack_byte_array",
    "pack_string",
    "unpack_byte_array",
    "unpack_string",
]
