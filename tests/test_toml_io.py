import math

import pytest

from zcf.config.exceptions import ConfigParseError
from zcf.config.toml_io import dumps, format_toml_key, format_toml_value, loads


def test_format_toml_value_scalars_and_containers():
    assert format_toml_value(True) == "true"
    assert format_toml_value(3) == "3"
    assert format_toml_value(1.5) == "1.5"
    assert format_toml_value('say "hi"\n') == '"say \\"hi\\"\\n"'
    assert format_toml_value(["a", "b"]) == '["a", "b"]'
    assert format_toml_value([]) == "[]"
    assert format_toml_value({}) == "{}"
    assert format_toml_value({"name": "x", "skip": None}) == '{ name = "x" }'


def test_format_toml_value_rejects_unknown_types():
    with pytest.raises(TypeError):
        format_toml_value(object())


def test_format_toml_key_quotes_non_bare_keys():
    assert format_toml_key("preferredLang") == "preferredLang"
    assert format_toml_key("my profile") == '"my profile"'
    assert format_toml_key("a.b") == '"a.b"'


def test_dumps_orders_scalars_before_sections_and_skips_none():
    text = dumps(
        {
            "version": "1.0.0",
            "missing": None,
            "general": {"preferredLang": "en", "aiOutputLang": None},
            "claudeCode": {"enabled": True, "profiles": {"work": {"apiKey": "k"}}},
        }
    )

    assert text.index('version = "1.0.0"') < text.index("[general]")
    assert "missing" not in text
    assert "aiOutputLang" not in text
    assert "[claudeCode.profiles.work]" in text
    assert "\n\n[claudeCode]\n" in text

    parsed = loads(text)
    assert parsed["claudeCode"]["profiles"]["work"]["apiKey"] == "k"
    assert parsed["general"] == {"preferredLang": "en"}


def test_dumps_float_specials_survive_parsing():
    parsed = loads(dumps({"values": {"big": math.inf, "unknown": math.nan}}))
    assert parsed["values"]["big"] == math.inf
    assert math.isnan(parsed["values"]["unknown"])


def test_loads_wraps_decode_errors():
    with pytest.raises(ConfigParseError):
        loads("[general\npreferredLang = 'en'\n")
