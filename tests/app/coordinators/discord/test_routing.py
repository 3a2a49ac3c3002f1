"""Testes das tabelas de rota."""

from __future__ import annotations

import pytest

from app.coordinators.discord.handlers import build_default_routes
from app.coordinators.discord.handlers.copy import COPY_HEX_PREFIX, handle_copy_hex
from app.coordinators.discord.routing import AutocompleteRouter, CommandRouter, PrefixRouter


async def _handler(ctx):  # noqa: ANN001, ANN202
    return None


async def _other(ctx):  # noqa: ANN001, ANN202
    return None


class TestCommandRouter:
    def test_resolve_and_names(self) -> None:
        router = CommandRouter({"stats": _handler, "about": _other})

        assert router.resolve("about") is _other
        assert router.resolve("missing") is None
        assert router.names() == ("about", "stats")

    def test_rejects_duplicate(self) -> None:
        router = CommandRouter({"about": _handler})

        with pytest.raises(ValueError):
            router.register("about", _other)

    def test_rejects_empty_name(self) -> None:
        with pytest.raises(ValueError):
            CommandRouter({"": _handler})


class TestPrefixRouter:
    def test_overlapping_prefixes_rejected(self) -> None:
        """Um prefixo que é prefixo de outro torna a tabela ambígua."""
        with pytest.raises(ValueError, match="ambíguo"):
            PrefixRouter([("copy_", _handler), ("copy_hex_", _other)])

    def test_duplicate_prefix_rejected(self) -> None:
        with pytest.raises(ValueError):
            PrefixRouter([("copy_hex_", _handler), ("copy_hex_", _other)])

    def test_empty_prefix_rejected(self) -> None:
        with pytest.raises(ValueError):
            PrefixRouter([("", _handler)])

    def test_resolve(self) -> None:
        router = PrefixRouter([("copy_hex_", _handler), ("copy_rgb_", _other)])

        assert router.resolve("copy_rgb_1_2_3") == ("copy_rgb_", _other)
        assert router.resolve("copy_hsv_1_2_3") is None

    def test_prefixes_longest_first(self) -> None:
        router = PrefixRouter([("a_", _handler), ("bbb_", _other)])

        assert router.prefixes == ("bbb_", "a_")


class TestAutocompleteRouter:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            (("preset", "show", "name"), ["preset.show.name", "preset.name", "preset"]),
            (("dye", "name"), ["dye.name", "dye"]),
            (("dye",), ["dye"]),
            ((), []),
        ],
    )
    def test_candidate_keys(self, path: tuple[str, ...], expected: list[str]) -> None:
        assert AutocompleteRouter.candidate_keys(path) == expected

    def test_resolve_prefers_most_specific(self) -> None:
        router = AutocompleteRouter({"preset.show.name": _handler, "preset": _other})

        assert router.resolve(("preset", "show", "name")) == ("preset.show.name", _handler)
        assert router.resolve(("preset", "vote", "name")) == ("preset", _other)

    def test_register_duplicate(self) -> None:
        router = AutocompleteRouter({"dye": _handler})

        with pytest.raises(ValueError):
            router.register("dye", _other)


class TestDefaultRoutes:
    def test_default_tables_are_valid(self) -> None:
        """Rotas embarcadas passam na validação de prefixos."""
        routes = build_default_routes()

        assert routes.commands.names() == ("about", "manual", "stats")
        assert routes.components.resolve("copy_hex_FF0000") == (COPY_HEX_PREFIX, handle_copy_hex)
        assert routes.components.resolve("preset_approve_p1")[0] == "preset_approve_"
        assert routes.modals.resolve("preset_reject_modal_p1")[0] == "preset_reject_modal_"
        assert routes.autocomplete.resolve(("preset", "edit", "name")) is not None
