"""Widget configuration values and the resolver interface that supplies them."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from framegate.patterns import compile_pattern
from framegate.settings.config import DEFAULT_VALIDATION_MESSAGE, DEFAULT_VALIDATION_PATTERN

if TYPE_CHECKING:
    from framegate.settings.config import Settings


class WidgetValues(BaseModel):
    """Ready-made configuration object handed to the widget.

    Accepts both the camelCase keys used by the hosting platform
    (``validationPattern``) and snake_case field names.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    validation_pattern: str = Field(default=DEFAULT_VALIDATION_PATTERN, alias="validationPattern")
    validation_message: str = Field(default=DEFAULT_VALIDATION_MESSAGE, alias="validationMessage")

    @field_validator("validation_pattern")
    @classmethod
    def _pattern_compiles(cls, value: str) -> str:
        try:
            compile_pattern(value)
        except re.error as exc:
            raise ValueError(f"validationPattern is not a valid regular expression: {exc}") from exc
        return value

    def display_items(self) -> dict[str, str]:
        """Values keyed by their display name, for ``values.<key>`` elements."""
        return self.model_dump(by_alias=True)


VALUES_DEFAULT = WidgetValues()


@runtime_checkable
class ValuesResolver(Protocol):
    """Supplies the widget's configuration values."""

    def resolve(self) -> WidgetValues:
        """Return the resolved values."""
        ...


class StaticValuesResolver:
    """Resolver returning a fixed values object."""

    def __init__(self, values: WidgetValues | None = None) -> None:
        self._values = values or VALUES_DEFAULT

    def resolve(self) -> WidgetValues:
        return self._values


class SettingsValuesResolver:
    """Resolver reading the ``widget`` section of the framegate settings."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings

    def resolve(self) -> WidgetValues:
        from framegate.settings import get_settings

        settings = self._settings or get_settings()
        return WidgetValues(
            validation_pattern=settings.widget.validation_pattern,
            validation_message=settings.widget.validation_message,
        )
