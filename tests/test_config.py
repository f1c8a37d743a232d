import logging

import pytest

from webauthn_objects.config import Settings, load_settings


def test_defaults_without_environment():
    assert load_settings({}) == Settings(log_level=logging.WARNING, json_indent=2)


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("WEBAUTHN_OBJECTS_LOG_LEVEL", "info")

    assert load_settings().log_level == logging.INFO


@pytest.mark.parametrize("flag, expected", [("1", logging.DEBUG), ("off", logging.ERROR)])
def test_debug_flag_overrides_log_level(flag, expected):
    settings = load_settings(
        {"WEBAUTHN_OBJECTS_DEBUG": flag, "WEBAUTHN_OBJECTS_LOG_LEVEL": "error"}
    )

    assert settings.log_level == expected


def test_numeric_log_level_is_accepted():
    assert load_settings({"WEBAUTHN_OBJECTS_LOG_LEVEL": "15"}).log_level == 15


def test_unknown_log_level_is_rejected():
    with pytest.raises(ValueError, match="unknown log level"):
        load_settings({"WEBAUTHN_OBJECTS_LOG_LEVEL": "chatty"})


@pytest.mark.parametrize("raw, expected", [("4", 4), ("0", 0), ("", None), ("-1", None)])
def test_json_indent(raw, expected):
    assert load_settings({"WEBAUTHN_OBJECTS_JSON_INDENT": raw}).json_indent == expected


def test_json_indent_must_be_an_integer():
    with pytest.raises(ValueError, match="must be an integer"):
        load_settings({"WEBAUTHN_OBJECTS_JSON_INDENT": "wide"})
