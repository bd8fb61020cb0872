"""Unit tests for chatparse.messages — catalog lookup and SessionError."""
from __future__ import annotations

import pytest

from chatparse import MessageCatalog, SessionError


class TestMessageCatalog:
    def test_builtin_locales(self) -> None:
        assert MessageCatalog().locales() == ["en-US", "zh-CN"]

    def test_render_default_locale(self) -> None:
        assert MessageCatalog().render("command-not-found", ["echo"]) == "Command not found: echo"

    def test_render_requested_locale(self) -> None:
        catalog = MessageCatalog()
        assert catalog.render("syntax-error", ["?"], "zh-CN") == "语法错误：?"

    def test_unknown_locale_falls_back_to_default(self) -> None:
        assert MessageCatalog().render("syntax-error", ["x"], "fr-FR") == "Syntax error: x"

    def test_missing_key_in_locale_falls_back(self) -> None:
        catalog = MessageCatalog()
        catalog.define("de-DE", {"syntax-error": "Syntaxfehler: {0}"})
        assert catalog.render("command-not-found", ["x"], "de-DE") == "Command not found: x"
        assert catalog.render("syntax-error", ["x"], "de-DE") == "Syntaxfehler: x"

    def test_unknown_key_renders_as_key(self) -> None:
        assert MessageCatalog().render("mystery", ["a"]) == "mystery"

    def test_define_overrides_builtin(self) -> None:
        catalog = MessageCatalog()
        catalog.define("en-US", {"command-not-found": "No such command {0}"})
        assert catalog.render("command-not-found", ["x"]) == "No such command x"

    def test_overrides_are_per_instance(self) -> None:
        MessageCatalog().define("en-US", {"command-not-found": "changed"})
        assert MessageCatalog().template("command-not-found") == "Command not found: {0}"

    def test_default_locale_is_configurable(self) -> None:
        assert MessageCatalog("zh-CN").render("command-not-found", ["x"]) == "未找到命令：x"

    def test_template_none_when_undefined(self) -> None:
        assert MessageCatalog().template("mystery") is None

    def test_repr(self) -> None:
        assert "zh-CN" in repr(MessageCatalog())


class TestSessionError:
    def test_is_exception(self) -> None:
        with pytest.raises(Exception):
            raise SessionError("command-not-found", ["x"])

    def test_key_and_params(self) -> None:
        error = SessionError("command-not-found", ["admin.ban"])
        assert error.key == "command-not-found"
        assert error.params == ("admin.ban",)

    def test_str_renders_in_english(self) -> None:
        assert str(SessionError("command-not-found", ["x"])) == "Command not found: x"

    def test_render_through_catalog(self) -> None:
        error = SessionError("command-not-found", ["x"])
        assert error.render(MessageCatalog(), "zh-CN") == "未找到命令：x"

    def test_params_default_empty(self) -> None:
        assert SessionError("mystery").params == ()

    def test_repr(self) -> None:
        assert repr(SessionError("syntax-error", ["?"])) == "SessionError('syntax-error', ['?'])"
