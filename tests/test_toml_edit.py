import pytest

from zcf.config.exceptions import ConfigEditError
from zcf.config.toml_edit import batch_edit_toml, edit_toml
from zcf.config.toml_io import loads

DOCUMENT = """\
# zcf configuration
# edited by hand

version = "1.0.0"

[general]
preferredLang = "en"  # interface language
customSetting = 'keep me'

[claudeCode]
enabled = true
outputStyles = [
  "engineer-professional",
  "nekomata-engineer", # cat
]
"""


def test_edit_replaces_only_the_value():
    updated = edit_toml(DOCUMENT, "general.preferredLang", "zh-CN")

    assert 'preferredLang = "zh-CN"  # interface language\n' in updated
    assert updated.replace('"zh-CN"', '"en"', 1) == DOCUMENT


def test_unrelated_lines_are_preserved():
    updated = edit_toml(DOCUMENT, "claudeCode.enabled", False)

    assert updated.startswith("# zcf configuration\n# edited by hand\n\n")
    assert "customSetting = 'keep me'\n" in updated
    assert "enabled = false\n" in updated
    assert loads(updated)["general"]["customSetting"] == "keep me"


def test_multiline_array_is_replaced_whole():
    updated = edit_toml(DOCUMENT, "claudeCode.outputStyles", ["default"])

    assert "nekomata-engineer" not in updated
    assert loads(updated)["claudeCode"] == {"enabled": True, "outputStyles": ["default"]}


def test_missing_key_is_added_to_its_table():
    updated = edit_toml(DOCUMENT, "general.templateLang", "en")

    parsed = loads(updated)
    assert parsed["general"] == {
        "preferredLang": "en",
        "customSetting": "keep me",
        "templateLang": "en",
    }
    assert "templateLang" not in parsed["claudeCode"]
    assert updated.startswith("# zcf configuration\n")


def test_missing_table_is_created():
    updated = edit_toml(DOCUMENT, "codex.enabled", False)

    assert "[codex]" in updated
    parsed = loads(updated)
    assert parsed["codex"] == {"enabled": False}
    assert parsed["claudeCode"]["outputStyles"] == [
        "engineer-professional",
        "nekomata-engineer",
    ]


def test_later_edits_to_the_same_path_win():
    updated = batch_edit_toml(
        DOCUMENT,
        [("general.preferredLang", "zh-CN"), ("general.preferredLang", "en")],
    )
    assert loads(updated)["general"]["preferredLang"] == "en"


def test_dict_value_for_new_key_is_written_inline():
    updated = edit_toml(DOCUMENT, "claudeCode.profiles", {"work": {"apiKey": "k"}})

    assert "[claudeCode.profiles" not in updated
    assert loads(updated)["claudeCode"]["profiles"] == {"work": {"apiKey": "k"}}


def test_dict_value_replaces_sub_table_blocks():
    text = (
        "[claudeCode]\n"
        "enabled = true\n"
        "\n"
        "[claudeCode.profiles.work]\n"
        'apiKey = "old"\n'
        "\n"
        "[codex]\n"
        "enabled = false\n"
    )
    updated = edit_toml(text, "claudeCode.profiles", {"home": {"apiKey": "new"}})

    parsed = loads(updated)
    assert parsed["claudeCode"]["profiles"] == {"home": {"apiKey": "new"}}
    assert parsed["claudeCode"]["enabled"] is True
    assert parsed["codex"] == {"enabled": False}
    assert "old" not in updated
    assert "[claudeCode.profiles" not in updated


def test_multiline_string_contents_are_left_alone():
    text = '[general]\nnote = """\n[not a header]\nkey = 1\n"""\npreferredLang = "en"\n'
    updated = edit_toml(text, "general.preferredLang", "zh-CN")
    parsed = loads(updated)
    assert parsed["general"]["preferredLang"] == "zh-CN"
    assert parsed["general"]["note"] == "[not a header]\nkey = 1\n"


def test_corrupt_section_marker_raises():
    with pytest.raises(ConfigEditError):
        edit_toml('[general\npreferredLang = "en"\n', "general.preferredLang", "zh-CN")


def test_array_of_tables_cannot_be_targeted():
    with pytest.raises(ConfigEditError, match="array of tables"):
        edit_toml("[[general]]\nx = 1\n", "general.x", 2)


def test_scalar_in_the_way_of_a_table_raises():
    with pytest.raises(ConfigEditError, match="not a table"):
        edit_toml('[general]\nlang = "en"\n', "general.lang.value", "x")


@pytest.mark.parametrize("path", ["version", "general.", ".x"])
def test_top_level_paths_are_rejected(path):
    with pytest.raises(ConfigEditError):
        edit_toml(DOCUMENT, path, "x")


def test_none_value_is_rejected():
    with pytest.raises(ConfigEditError):
        edit_toml(DOCUMENT, "general.preferredLang", None)


def test_unsupported_value_type_is_rejected():
    with pytest.raises(ConfigEditError):
        edit_toml(DOCUMENT, "general.preferredLang", object())
