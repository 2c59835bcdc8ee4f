"""Tests for the env var container filter."""

from __future__ import annotations

import pytest

from kimspect.errors import InvalidPattern
from kimspect.filters import EnvVarsFilter


class TestEnvVarsFilter:
    """Tests for EnvVarsFilter."""

    def test_plain_pattern(self) -> None:
        f = EnvVarsFilter.parse("main")
        assert f.invert is False
        assert f.matches("main")
        assert f.matches("main-sidecar")
        assert not f.matches("sidecar")

    def test_bang_inverts(self) -> None:
        f = EnvVarsFilter.parse("!main")
        assert f.invert is True
        assert f.regex.pattern == "main"
        assert not f.matches("main")
        assert f.matches("sidecar")

    @pytest.mark.parametrize("pattern", ["main", "^app$", "side.*", "", "[0-9]+"])
    @pytest.mark.parametrize("text", ["main", "app", "sidecar", "init-2", ""])
    def test_inverted_is_negation(self, pattern: str, text: str) -> None:
        assert EnvVarsFilter.parse("!" + pattern).matches(text) == (
            not EnvVarsFilter.parse(pattern).matches(text)
        )

    def test_anchored_pattern(self) -> None:
        f = EnvVarsFilter.parse("^app$")
        assert f.matches("app")
        assert not f.matches("app-init")

    def test_case_sensitive(self) -> None:
        assert not EnvVarsFilter.parse("Main").matches("main")

    def test_invalid_pattern(self) -> None:
        with pytest.raises(InvalidPattern) as exc:
            EnvVarsFilter.parse("!(unclosed")
        assert "(unclosed" in str(exc.value)

    def test_str_round_trips_bang(self) -> None:
        assert str(EnvVarsFilter.parse("!side")) == "!side"
        assert str(EnvVarsFilter.parse("side")) == "side"
