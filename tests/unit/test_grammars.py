"""Unit tests for chatparse.grammar — the four built-in stacks over pyparsing."""
from __future__ import annotations

from unittest.mock import MagicMock

import pyparsing as pp
import pytest

from chatparse import Argv, CommandNotFound, Err, Ok, ParserLayer, ParserService, parse_argv
from chatparse.grammar import FULL_GRAMMAR, ParserState, raw, run


def stated(service: ParserService, name: str, state: ParserState | None = None) -> pp.ParserElement:
    return service.compose_stack(name)(state if state is not None else ParserState())


# ---------------------------------------------------------------------------
# ParserState
# ---------------------------------------------------------------------------


class TestParserState:
    def test_default_has_no_terminator(self) -> None:
        assert ParserState().terminator is None

    def test_replace_returns_new_state(self) -> None:
        state = ParserState()
        semicolon = pp.Literal(";")
        changed = state.replace(terminator=semicolon)
        assert changed.terminator is semicolon
        assert state.terminator is None

    def test_is_immutable(self) -> None:
        with pytest.raises(AttributeError):
            ParserState().terminator = pp.Literal(";")  # type: ignore[misc]


# ---------------------------------------------------------------------------
# run / raw
# ---------------------------------------------------------------------------


class TestRun:
    def test_success_is_ok(self) -> None:
        assert run(raw(pp.Literal("a")), "abc") == Ok("a")

    def test_failure_is_err(self) -> None:
        outcome = run(raw(pp.Literal("a")), "xyz")
        assert isinstance(outcome, Err)
        assert isinstance(outcome.err, pp.ParseBaseException)

    def test_parse_all_rejects_trailing_text(self) -> None:
        assert isinstance(run(raw(pp.Literal("a")), "ab", parse_all=True), Err)

    def test_raw_disables_whitespace_skipping(self) -> None:
        assert isinstance(run(raw(pp.Literal("a")), " a"), Err)


# ---------------------------------------------------------------------------
# commandName
# ---------------------------------------------------------------------------


class TestCommandName:
    @pytest.mark.parametrize("name", ["a", "echo", "snake_case", "x1", "42", "Echo_2"])
    def test_word_characters_are_consumed_entirely(self, service: ParserService, name: str) -> None:
        assert run(stated(service, "commandName"), name, parse_all=True) == Ok(name)

    def test_stops_at_dot(self, service: ParserService) -> None:
        assert run(stated(service, "commandName"), "admin.ban") == Ok("admin")

    def test_stops_at_whitespace(self, service: ParserService) -> None:
        assert run(stated(service, "commandName"), "echo hi") == Ok("echo")

    @pytest.mark.parametrize("text", ["", ".x", " echo", "-x", "'q'", "数据", "éclair"])
    def test_no_word_character_fails(self, service: ParserService, text: str) -> None:
        assert isinstance(run(stated(service, "commandName"), text), Err)

    def test_non_ascii_letters_end_the_name(self, service: ParserService) -> None:
        assert run(stated(service, "commandName"), "café") == Ok("caf")


# ---------------------------------------------------------------------------
# command
# ---------------------------------------------------------------------------


class TestCommand:
    def test_resolves_registered_command(self, service: ParserService) -> None:
        outcome = run(stated(service, "command"), "admin.ban bob")
        assert isinstance(outcome, Ok)
        assert isinstance(outcome.val, Ok)
        assert outcome.val.val.name == "admin.ban"

    def test_unknown_command_is_value_not_failure(self, service: ParserService) -> None:
        outcome = run(stated(service, "command"), "a.b.c", parse_all=True)
        assert outcome == Ok(Err(CommandNotFound("a.b.c")))

    def test_not_found_error_has_type_tag(self, service: ParserService) -> None:
        outcome = run(stated(service, "command"), "nope")
        assert outcome.val.err.type == "NotFound"
        assert outcome.val.err.key == "nope"

    def test_unknown_command_parse_is_idempotent(self, service: ParserService) -> None:
        first = run(stated(service, "command"), "x.y rest")
        second = run(stated(service, "command"), "x.y rest")
        assert first == second == Ok(Err(CommandNotFound("x.y")))

    @pytest.mark.parametrize("path", ["a", "a.b", "a.b.c", "one.two_2.three3"])
    def test_lookup_key_is_exact_dotted_path(self, path: str) -> None:
        resolver = MagicMock()
        resolver.resolve.return_value = None
        service = ParserService(resolver)
        run(stated(service, "command"), path + " args")
        resolver.resolve.assert_called_once_with(path)

    def test_trailing_dot_is_not_consumed(self, service: ParserService) -> None:
        assert run(stated(service, "command"), "echo.") == Ok(Ok(service.registry.resolve("echo")))
        assert isinstance(run(stated(service, "command"), "echo.", parse_all=True), Err)

    def test_empty_input_fails_structurally(self, service: ParserService) -> None:
        assert isinstance(run(stated(service, "command"), ""), Err)

    def test_command_name_layers_apply_to_segments(self, service: ParserService) -> None:
        lower = ParserLayer(
            name="lower",
            precedence=10,
            middleware=lambda inner: lambda state: inner(state).add_parse_action(
                lambda tokens: tokens[0].lower()
            ),
        )
        with service.layer("commandName", lower):
            outcome = run(stated(service, "command"), "ADMIN.Ban")
        assert outcome.val.val.name == "admin.ban"


# ---------------------------------------------------------------------------
# argv
# ---------------------------------------------------------------------------


class TestArgv:
    def test_no_leading_whitespace_yields_empty(self, service: ParserService) -> None:
        outcome = run(stated(service, "argv"), "hello")
        assert outcome == Ok(parse_argv(""))

    def test_no_leading_whitespace_consumes_nothing(self, service: ParserService) -> None:
        element = raw(stated(service, "argv") + pp.Literal("hello"))
        assert run(element, "hello", parse_all=True) == Ok(Argv())

    def test_empty_input(self, service: ParserService) -> None:
        assert run(stated(service, "argv"), "") == Ok(Argv())

    def test_whitespace_only(self, service: ParserService) -> None:
        assert run(stated(service, "argv"), "   ", parse_all=True).val.source == ""

    def test_quoted_single_character_token(self, service: ParserService) -> None:
        argv = run(stated(service, "argv"), "  hello 'x' world", parse_all=True).val
        assert argv.source == "hello 'x' world"
        assert argv.args == ("hello", "x", "world")

    def test_double_quoted_single_character_token(self, service: ParserService) -> None:
        argv = run(stated(service, "argv"), ' say "a" now', parse_all=True).val
        assert argv.source == 'say "a" now'
        assert argv.args == ("say", "a", "now")

    def test_multi_character_quotes_stop_the_scan(self, service: ParserService) -> None:
        element = raw(stated(service, "argv") + pp.Literal("'xy'"))
        argv = run(element, "  a 'xy'", parse_all=True).val
        assert argv.source == "a "
        assert argv.args == ("a",)

    def test_leading_whitespace_is_dropped(self, service: ParserService) -> None:
        assert run(stated(service, "argv"), "\t a b").val.source == "a b"

    def test_options_are_parsed(self, service: ParserService) -> None:
        argv = run(stated(service, "argv"), " bob --reason=spam -q").val
        assert argv.args == ("bob",)
        assert argv.options == {"reason": "spam", "q": True}

    def test_terminator_stops_bare_run(self, service: ParserService) -> None:
        state = ParserState(terminator=pp.Literal(";"))
        element = raw(stated(service, "argv", state) + pp.Literal(";rest"))
        argv = run(element, "  a b;rest", parse_all=True).val
        assert argv.source == "a b"

    def test_without_terminator_runs_to_end(self, service: ParserService) -> None:
        assert run(stated(service, "argv"), "  a b;rest", parse_all=True).val.source == "a b;rest"

    def test_constant_layer_round_trip(self, service: ParserService) -> None:
        text = "  a 'b' c"
        before = run(stated(service, "argv"), text)

        def constant(tokens):
            return parse_argv("fixed")

        layer = ParserLayer(
            name="constant",
            precedence=10,
            middleware=lambda inner: lambda state: raw(pp.Empty()).add_parse_action(constant),
        )
        handle = service.layer("argv", layer)
        during = run(stated(service, "argv"), text)
        handle.dispose()
        after = run(stated(service, "argv"), text)

        assert during.val.args == ("fixed",)
        assert after == before
        assert before.val.args == ("a", "b", "c")


# ---------------------------------------------------------------------------
# Grammar reference
# ---------------------------------------------------------------------------


def test_full_grammar_names_every_stack() -> None:
    for name in ("root", "command", "commandName", "argv"):
        assert name in FULL_GRAMMAR
