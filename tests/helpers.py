from typing import Any, Mapping

from webauthn_objects.codec import pack_byte_array, unpack_byte_array

DECAFBAD = bytes([0xDE, 0xCA, 0xFB, 0xAD])
ABADIDEA = bytes([0xAB, 0xAD, 0x1D, 0xEA])

# rpIdHash for example.com, flags UP, signCount 29.
AUTH_DATA = bytes.fromhex(
    "A379A6F6EEAFB9A55E378C118034E2751E682FAB9F2D30AB13D2125586CE1947010000001D"
)


def assert_consistent(packed: Mapping[str, Any], unpacked: Mapping[str, Any], field: str) -> None:
    """Both renderings of ``field`` must encode the same bytes."""

    assert unpack_byte_array(packed[field]) == unpacked[field]
    assert pack_byte_array(unpacked[field]) == packed[field]
