"""
Formatting override tests.

Resolution order is override > defaults > base, merged field by field; a
partial margins record changes only the sides it names.
"""

import pytest

from legalpdf.formatting import (
    DocumentFormattingRules,
    FormattingConfiguration,
    Margins,
    PageNumberFormat,
    merge_rules,
    resolve_rules,
    rules_for,
)


BASE = DocumentFormattingRules(margins=Margins(72.0, 72.0, 72.0, 72.0), font_size=12.0)


def test_full_margin_override():
    config = FormattingConfiguration(overrides={
        "office-action-response": {"margins": {"top": 90, "bottom": 72, "left": 72, "right": 72}},
    })

    rules = config.apply_overrides("office-action-response", BASE)

    assert rules.margins == Margins(top=90, bottom=72, left=72, right=72)
    assert rules.font_size == 12.0


def test_partial_margin_override_keeps_other_sides():
    rules = merge_rules(BASE, {"margins": {"top": 90}})

    assert rules.margins.top == 90
    assert rules.margins.bottom == 72.0
    assert rules.margins.left == 72.0
    assert rules.margins.right == 72.0


def test_margins_dataclass_replaces_wholesale():
    rules = merge_rules(BASE, {"margins": Margins(top=50.0, bottom=50.0)})

    assert rules.margins == Margins(top=50.0, bottom=50.0, left=72.0, right=72.0)


def test_base_is_not_modified():
    merge_rules(BASE, {"fontSize": 14, "margins": {"top": 90}})

    assert BASE.font_size == 12.0
    assert BASE.margins.top == 72.0


def test_precedence_override_over_defaults_over_base():
    rules = resolve_rules(
        BASE,
        defaults={"fontSize": 11, "lineSpacing": "single"},
        overrides={"fontSize": 14},
    )

    assert rules.font_size == 14
    assert rules.line_spacing == "single"
    assert rules.font == BASE.font


def test_camel_and_snake_case_keys():
    camel = merge_rules(BASE, {"pageNumberPosition": "bottom-left", "titleCase": False})
    snake = merge_rules(BASE, {"page_number_position": "bottom-left", "title_case": False})

    assert camel == snake


def test_page_number_format_merges_per_field():
    rules = merge_rules(BASE, {"pageNumberFormat": {"format": "roman", "startingNumber": 3}})

    assert rules.page_number_format == PageNumberFormat(format="roman", starting_number=3)
    assert rules.page_number_format.prefix == "Page "


@pytest.mark.parametrize("partial", [
    {"fontColor": "red"},
    {"margins": {"middle": 10}},
    {"pageNumberFormat": {"color": "blue"}},
    {"margins": 90},
])
def test_invalid_partials_raise(partial):
    with pytest.raises(ValueError):
        merge_rules(BASE, partial)


def test_empty_partial_returns_base():
    assert merge_rules(BASE, None) is BASE
    assert merge_rules(BASE, {}) is BASE


class TestFormattingConfiguration:

    def test_no_override_returns_base(self):
        config = FormattingConfiguration()

        assert config.apply_overrides("nda-ip-specific", BASE) is BASE
        assert config.apply_overrides("not-a-type", BASE) is BASE

    def test_rules_for_applies_defaults_and_overrides(self):
        config = FormattingConfiguration(
            overrides={"nda-ip-specific": {"lineSpacing": "double"}},
            defaults={"fontSize": 11},
        )

        nda = config.rules_for("nda-ip-specific")
        trademark = config.rules_for("trademark-application")

        assert nda.line_spacing == "double"
        assert nda.font_size == 11
        assert trademark.line_spacing == "single"
        assert trademark.font_size == 11

    def test_apply_defaults(self):
        config = FormattingConfiguration(defaults={"pageNumbers": False})

        assert config.apply_defaults(BASE).page_numbers is False

    def test_update_and_clear(self):
        config = FormattingConfiguration(overrides={"nda-ip-specific": {"fontSize": 10}})

        config.update_config(overrides={"trademark-application": {"fontSize": 13}})
        assert config.has_overrides("nda-ip-specific")
        assert config.has_overrides("trademark-application")

        config.update_config(overrides={"nda-ip-specific": {"lineSpacing": "double"}})
        nda = config.rules_for("nda-ip-specific")
        assert nda.line_spacing == "double"
        assert nda.font_size == rules_for("nda-ip-specific").font_size

        config.clear_overrides("nda-ip-specific")
        assert not config.has_overrides("nda-ip-specific")
        assert config.rules_for("nda-ip-specific") == rules_for("nda-ip-specific")

    def test_update_defaults(self):
        config = FormattingConfiguration(defaults={"fontSize": 11})

        config.update_config(defaults={"fontSize": 10})

        assert config.rules_for("nda-ip-specific").font_size == 10
