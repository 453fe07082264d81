"""Run configuration for the sitemap inspector."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .errors import InvalidInput

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_MAX_ACTIVE_PAGES = 100
DEFAULT_TIMEOUT = 10.0  # seconds
DEFAULT_CONNECT_TIMEOUT = 5.0  # seconds
DEFAULT_USER_AGENT = "sitemap-inspector/0.1.0"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class InspectorConfig:
    """Options recognised by a single inspection run.

    Attributes:
        max_active_pages: Maximum number of page fetches in flight at once
        timeout: Read/write/pool timeout for each request, in seconds
        connect_timeout: Connection timeout for each request, in seconds
        user_agent: Value sent in the User-Agent header
        follow_redirects: Whether redirects are followed before judging a page
    """

    max_active_pages: int = DEFAULT_MAX_ACTIVE_PAGES
    timeout: float = DEFAULT_TIMEOUT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    follow_redirects: bool = True

    def __post_init__(self) -> None:
        if self.max_active_pages < 1:
            raise InvalidInput(
                f"max_active_pages must be at least 1, got {self.max_active_pages}",
            )
        if self.timeout <= 0:
            raise InvalidInput(f"timeout must be positive, got {self.timeout}")
        if self.connect_timeout <= 0:
            raise InvalidInput(
                f"connect_timeout must be positive, got {self.connect_timeout}",
            )

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> InspectorConfig:
        """
        Build a config from loosely typed options.

        Keys may use dashes or underscores (``max-active-pages`` or
        ``max_active_pages``). String values are converted to the field type.

        Args:
            options: Option names mapped to raw values

        Returns:
            A validated InspectorConfig

        Raises:
            InvalidInput: On unknown keys or values that cannot be converted
        """
        fields = {f.name: f for f in dataclasses.fields(cls)}
        kwargs: dict[str, Any] = {}

        for raw_key, value in options.items():
            key = raw_key.replace("-", "_")
            if key not in fields:
                raise InvalidInput(f"Unknown option: {raw_key}")
            if value is None:
                continue
            kwargs[key] = _coerce(key, fields[key].default, value)

        return cls(**kwargs)


def _coerce(key: str, default: Any, value: Any) -> Any:
    """Convert a raw option value to the type of the field default."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        raise InvalidInput(f"Option {key} expects a boolean, got {value!r}")

    try:
        return type(default)(value)
    except (TypeError, ValueError) as e:
        raise InvalidInput(
            f"Option {key} expects {type(default).__name__}, got {value!r}",
        ) from e
