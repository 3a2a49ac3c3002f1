"""Tabelas de rota do dispatcher.

- CommandRouter: nome do comando -> handler
- PrefixRouter: prefixo de custom_id -> handler (componentes e modais)
- AutocompleteRouter: chave "comando.subcomando.opção" -> consulta

As tabelas são montadas e validadas no startup; depois disso só leem.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.coordinators.discord.context import InteractionContext
    from app.domain.reply import InteractionReply

InteractionHandler = Callable[["InteractionContext"], Awaitable["InteractionReply"]]
AutocompleteQuery = Callable[["InteractionContext", str], Awaitable[list[dict[str, Any]]]]


class CommandRouter:
    """Registro de handlers de slash command por nome."""

    def __init__(self, handlers: Mapping[str, InteractionHandler] | None = None) -> None:
        self._handlers: dict[str, InteractionHandler] = {}
        for name, handler in (handlers or {}).items():
            self.register(name, handler)

    def register(self, name: str, handler: InteractionHandler) -> None:
        if not name:
            raise ValueError("nome de comando vazio")
        if name in self._handlers:
            raise ValueError(f"comando já registrado: {name}")
        self._handlers[name] = handler

    def resolve(self, name: str) -> InteractionHandler | None:
        return self._handlers.get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._handlers))


class PrefixRouter:
    """Roteamento por prefixo de custom_id.

    Nenhum prefixo registrado pode ser prefixo de outro; a tabela é
    rejeitada no construtor se isso acontecer. A busca testa os
    prefixos mais longos primeiro e o primeiro match vence.

    Raises:
        ValueError: Prefixo vazio, duplicado ou sobreposto
    """

    def __init__(self, routes: Iterable[tuple[str, InteractionHandler]]) -> None:
        ordered = list(routes)
        prefixes = [prefix for prefix, _ in ordered]
        for prefix in prefixes:
            if not prefix:
                raise ValueError("prefixo de custom_id vazio")
        if len(set(prefixes)) != len(prefixes):
            raise ValueError("prefixo de custom_id duplicado")
        for prefix in prefixes:
            for other in prefixes:
                if prefix != other and other.startswith(prefix):
                    raise ValueError(
                        f"prefixo ambíguo: '{prefix}' é prefixo de '{other}'"
                    )
        self._routes = sorted(ordered, key=lambda route: len(route[0]), reverse=True)

    @property
    def prefixes(self) -> tuple[str, ...]:
        return tuple(prefix for prefix, _ in self._routes)

    def resolve(self, custom_id: str) -> tuple[str, InteractionHandler] | None:
        for prefix, handler in self._routes:
            if custom_id.startswith(prefix):
                return prefix, handler
        return None


class AutocompleteRouter:
    """Consultas de autocomplete por chave pontuada.

    Para o caminho ("preset", "show", "name") tenta "preset.show.name",
    depois "preset.name" e por fim "preset".
    """

    def __init__(self, routes: Mapping[str, AutocompleteQuery] | None = None) -> None:
        self._routes: dict[str, AutocompleteQuery] = dict(routes or {})

    def register(self, key: str, query: AutocompleteQuery) -> None:
        if key in self._routes:
            raise ValueError(f"autocomplete já registrado: {key}")
        self._routes[key] = query

    @staticmethod
    def candidate_keys(path: tuple[str, ...]) -> list[str]:
        if not path:
            return []
        candidates = [".".join(path)]
        if len(path) > 2:
            candidates.append(f"{path[0]}.{path[-1]}")
        candidates.append(path[0])
        return list(dict.fromkeys(candidates))

    def resolve(self, path: tuple[str, ...]) -> tuple[str, AutocompleteQuery] | None:
        for key in self.candidate_keys(path):
            query = self._routes.get(key)
            if query is not None:
                return key, query
        return None


__all__ = [
    "AutocompleteQuery",
    "AutocompleteRouter",
    "CommandRouter",
    "InteractionHandler",
    "PrefixRouter",
]
