"""
Container filter used to select which containers' env vars are displayed.
"""
import re
from dataclasses import dataclass
from typing import Pattern

from kimspect.errors import InvalidPattern


@dataclass(frozen=True)
class EnvVarsFilter:
    """Regex match on container names, optionally inverted with a leading ``!``."""
    regex: Pattern[str]
    invert: bool = False

    @classmethod
    def parse(cls, text: str) -> "EnvVarsFilter":
        """
        Build a filter from a command line pattern.

        Args:
            text: Regular expression, prefixed with ``!`` to invert the match

        Returns:
            EnvVarsFilter instance

        Raises:
            InvalidPattern: If the pattern does not compile
        """
        invert = text.startswith("!")
        pattern = text[1:] if invert else text
        try:
            regex = re.compile(pattern)
        except re.error as e:
            raise InvalidPattern(f"{pattern!r}: {e}") from e
        return cls(regex=regex, invert=invert)

    def matches(self, text: str) -> bool:
        found = self.regex.search(text) is not None
        return not found if self.invert else found

    def __str__(self) -> str:
        return f"!{self.regex.pattern}" if self.invert else self.regex.pattern
