from zcf.config.toml_io import loads
from zcf.config.top_level import (
    insert_at_top_level_start,
    update_top_level_toml_fields,
)

STAMP = "2025-01-02T03:04:05.678Z"


def test_inserts_version_before_last_updated_before_sections():
    text = "[general]\npreferredLang = \"en\"\n"
    updated = update_top_level_toml_fields(text, "1.0.0", STAMP)

    version_at = updated.index("version =")
    stamp_at = updated.index("lastUpdated =")
    section_at = updated.index("[general]")
    assert version_at < stamp_at < section_at
    assert loads(updated)["lastUpdated"] == STAMP


def test_insertion_keeps_leading_comment_block_first():
    text = "# header\n# more\n\n[general]\nx = 1\n"
    updated = update_top_level_toml_fields(text, "1.0.0", STAMP)

    assert updated.startswith("# header\n# more\n\n")
    assert updated.endswith("\n[general]\nx = 1\n")


def test_existing_values_are_replaced_in_place():
    text = (
        "version = '0.9.0'  # schema\n"
        'lastUpdated = "2020-01-01T00:00:00.000Z"\n'
        "\n"
        "[general]\n"
        'version = "section value"\n'
    )
    updated = update_top_level_toml_fields(text, "1.0.0", STAMP)

    assert updated.startswith(f'version = "1.0.0"  # schema\nlastUpdated = "{STAMP}"\n\n[general]')
    assert 'version = "section value"' in updated


def test_missing_last_updated_goes_right_after_version():
    text = 'other = 1\nversion = "1.0.0"\n'
    updated = update_top_level_toml_fields(text, "1.0.0", STAMP)
    assert updated == f'other = 1\nversion = "1.0.0"\nlastUpdated = "{STAMP}"\n'


def test_empty_document():
    updated = update_top_level_toml_fields("", "1.0.0", STAMP)
    assert loads(updated) == {"version": "1.0.0", "lastUpdated": STAMP}


def test_insert_at_top_level_start_without_trailing_newline():
    assert insert_at_top_level_start("# c", "a = 1") == "# c\na = 1"
    assert insert_at_top_level_start("", "a = 1") == "a = 1\n"
