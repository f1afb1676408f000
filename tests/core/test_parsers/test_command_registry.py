"""Tests for CommandRegistry and ParseContext."""

import pytest

from slidemark.elements import default_registry
from slidemark.errors import RegistrationError
from slidemark.parser import CommandRegistry, ParseContext, ParseMode


def _noop(ctx, file_name, line_number, text):
    return None


class TestCommandRegistry:
    def test_register_and_lookup(self):
        registry = CommandRegistry()
        registry.register("quote", _noop)
        assert registry.lookup(".quote") is _noop
        assert ".quote" in registry
        assert "quote" not in registry

    def test_lookup_missing(self):
        assert CommandRegistry().lookup(".missing") is None

    def test_names_sorted(self):
        registry = CommandRegistry()
        registry.register("b", _noop)
        registry.register("a", _noop)
        assert registry.names() == ["a", "b"]
        assert list(registry) == ["a", "b"]
        assert len(registry) == 2

    def test_reregister_replaces(self):
        def other(ctx, file_name, line_number, text):
            return None

        registry = CommandRegistry()
        registry.register("x", _noop)
        registry.register("x", other)
        assert registry.lookup(".x") is other
        assert len(registry) == 1

    @pytest.mark.parametrize("name", ["", ".image", ";comment", "background"])
    def test_rejects_bad_names(self, name):
        with pytest.raises(RegistrationError):
            CommandRegistry().register(name, _noop)

    def test_registration_error_is_value_error(self):
        with pytest.raises(ValueError):
            CommandRegistry().register("", _noop)


class TestDefaultRegistry:
    def test_builtin_commands(self):
        assert default_registry().names() == ["code", "image", "play"]

    def test_each_call_returns_new_registry(self):
        first = default_registry()
        first.register("extra", _noop)
        assert "extra" not in default_registry().names()


class TestParseContext:
    def test_defaults(self):
        ctx = ParseContext()
        assert len(ctx.registry) == 0
        assert ctx.play_enabled is False
        assert ctx.config == {}

    def test_read_file_default(self, tmp_path):
        p = tmp_path / "x.txt"
        p.write_bytes(b"data")
        assert ParseContext().read_file(str(p)) == b"data"

    def test_contexts_do_not_share_registries(self):
        assert ParseContext().registry is not ParseContext().registry


class TestParseMode:
    def test_titles_only_flag(self):
        assert ParseMode.TITLES_ONLY & ParseMode.TITLES_ONLY
        assert not ParseMode.FULL & ParseMode.TITLES_ONLY
