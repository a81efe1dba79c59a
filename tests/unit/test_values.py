"""Unit tests for widget configuration values and resolvers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from framegate.models.values import (
    VALUES_DEFAULT,
    SettingsValuesResolver,
    StaticValuesResolver,
    ValuesResolver,
    WidgetValues,
)


class TestWidgetValues:
    def test_defaults(self) -> None:
        assert VALUES_DEFAULT.validation_pattern == r"^ABC-\d+-DEF$"
        assert VALUES_DEFAULT.validation_message == "Field must match the pattern ABC-<number>-DEF"

    def test_accepts_platform_keys(self) -> None:
        values = WidgetValues.model_validate({"validationPattern": "^x$", "validationMessage": "Only x"})
        assert values.validation_pattern == "^x$"
        assert values.validation_message == "Only x"

    def test_accepts_field_names(self) -> None:
        assert WidgetValues(validation_pattern="^y$").validation_pattern == "^y$"

    def test_display_items_use_platform_keys(self) -> None:
        assert WidgetValues().display_items() == {
            "validationPattern": r"^ABC-\d+-DEF$",
            "validationMessage": "Field must match the pattern ABC-<number>-DEF",
        }

    def test_invalid_pattern_rejected(self) -> None:
        with pytest.raises(ValidationError, match="not a valid regular expression"):
            WidgetValues(validationPattern="(*")

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            VALUES_DEFAULT.validation_pattern = "x"


class TestResolvers:
    def test_static_resolver(self) -> None:
        values = WidgetValues(validation_pattern="^z$")
        assert StaticValuesResolver(values).resolve() is values
        assert StaticValuesResolver().resolve() is VALUES_DEFAULT

    def test_settings_resolver(self, monkeypatch) -> None:
        monkeypatch.setenv("FRAMEGATE_WIDGET__VALIDATION_PATTERN", r"^\d+$")
        resolved = SettingsValuesResolver().resolve()
        assert resolved.validation_pattern == r"^\d+$"

    def test_protocol(self) -> None:
        assert isinstance(StaticValuesResolver(), ValuesResolver)
        assert isinstance(SettingsValuesResolver(), ValuesResolver)
