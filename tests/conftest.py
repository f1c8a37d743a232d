import pytest

from .helpers import ABADIDEA


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    for name in (
        "WEBAUTHN_OBJECTS_DEBUG",
        "WEBAUTHN_OBJECTS_JSON_INDENT",
        "WEBAUTHN_OBJECTS_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def credential_descriptors():
    return [
        {"id": "decafbad", "name": "decaf-bad"},
        {"id": ABADIDEA, "name": "a-bad-idea"},
        {"name": "no-id"},
    ]
