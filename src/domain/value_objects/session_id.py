import re
from dataclasses import dataclass
from typing import ClassVar

from ..exceptions.domain_exceptions import InvalidSessionKeyError


@dataclass(frozen=True)
class SessionKey:
    """Immutable value object naming one relay session slot."""

    value: str

    DEFAULT: ClassVar[str] = "default"
    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9_.\-]{1,128}$")

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.PATTERN.match(self.value):
            raise InvalidSessionKeyError(f"Invalid session key: {self.value!r}")

    @classmethod
    def default(cls) -> "SessionKey":
        return cls(value=cls.DEFAULT)

    @classmethod
    def from_optional(cls, value: str | None) -> "SessionKey":
        """Build a key, falling back to the shared default slot."""
        if value is None or value == "":
            return cls.default()
        return cls(value=value)

    def __str__(self) -> str:
        return self.value
