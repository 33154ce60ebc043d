"""Validation helpers for list-valued relay settings."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic_settings import EnvSettingsSource

if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


def _require_items(items: list[str], *, allow_empty: bool) -> list[str]:
    if not allow_empty and not items:
        raise ValueError("String list value must not be empty")
    return items


def parse_string_list(value: str | list[str], *, allow_empty: bool = False) -> list[str]:
    """Parse a list of strings from an environment variable or config value.

    Lists pass through. Strings may be a JSON array ('["a","b"]') or
    comma-separated ('a,b'); blank CSV segments are skipped. A blank string
    is always rejected, and an empty result is rejected unless allow_empty.
    """
    if isinstance(value, list):
        return _require_items(value, allow_empty=allow_empty)

    stripped = value.strip()
    if not stripped:
        raise ValueError("String list value must not be empty")

    if not stripped.startswith("["):
        items = [item.strip() for item in stripped.split(",") if item.strip()]
        return _require_items(items, allow_empty=allow_empty)

    try:
        parsed = json.loads(stripped)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON array: {e}") from e
    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        raise ValueError("JSON value must be an array of strings")
    return _require_items(parsed, allow_empty=allow_empty)


_STRING_LIST_FIELDS = frozenset({"cors_origins"})


class StringListEnvSettingsSource(EnvSettingsSource):
    """Env source that hands raw strings for list fields to their validators.

    pydantic-settings JSON-decodes complex fields read from the environment
    before validators run, which would reject CSV values like 'a,b'.
    """

    def prepare_field_value(
        self,
        field_name: str,
        field: FieldInfo,
        value: Any,  # noqa: ANN401
        value_is_complex: bool,  # noqa: FBT001
    ) -> Any:  # noqa: ANN401
        if field_name in _STRING_LIST_FIELDS and isinstance(value, str):
            return value
        return super().prepare_field_value(field_name, field, value, value_is_complex)
