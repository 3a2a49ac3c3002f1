"""Modelos de domínio para interações recebidas do Discord.

O envelope é uma união discriminada pelo campo `type`: cada variante
carrega apenas o payload que faz sentido para ela. Os modelos são
imutáveis e autocontidos, porque seguem por referência até a
continuation em background depois que o request original terminou.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

_ENVELOPE_CONFIG = ConfigDict(extra="ignore", frozen=True)


class InteractionType(IntEnum):
    """Tipos de interação recebidos no endpoint."""

    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class InteractionResponseType(IntEnum):
    """Tipos de callback aceitos pela plataforma."""

    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    DEFERRED_UPDATE_MESSAGE = 6
    UPDATE_MESSAGE = 7
    APPLICATION_COMMAND_AUTOCOMPLETE_RESULT = 8
    MODAL = 9


class ComponentType(IntEnum):
    """Tipos de componente usados pelos handlers."""

    ACTION_ROW = 1
    BUTTON = 2
    STRING_SELECT = 3
    TEXT_INPUT = 4


class DiscordUser(BaseModel):
    """Usuário que originou a interação."""

    model_config = _ENVELOPE_CONFIG

    id: str
    username: str = ""
    global_name: str | None = None

    @property
    def display_name(self) -> str:
        return self.global_name or self.username or self.id


class CommandOption(BaseModel):
    """Opção de comando (pode conter subcomandos aninhados)."""

    model_config = _ENVELOPE_CONFIG

    name: str
    type: int = 3
    value: str | int | float | bool | None = None
    focused: bool = False
    options: tuple[CommandOption, ...] = ()


class CommandData(BaseModel):
    """Payload de APPLICATION_COMMAND e APPLICATION_COMMAND_AUTOCOMPLETE."""

    model_config = _ENVELOPE_CONFIG

    id: str = ""
    name: str = ""
    type: int = 1
    options: tuple[CommandOption, ...] = ()
    resolved: dict[str, Any] | None = None

    def focused_option(self) -> tuple[tuple[str, ...], CommandOption] | None:
        """Localiza a opção em foco e o caminho de subcomandos até ela.

        Returns:
            (caminho de nomes terminando na opção focada, opção) ou None
        """
        return _find_focused(self.options, ())

    def option_value(self, name: str) -> str | int | float | bool | None:
        """Valor de uma opção pelo nome, em qualquer nível de aninhamento."""
        return _find_value(self.options, name)


class ComponentData(BaseModel):
    """Payload de MESSAGE_COMPONENT (botões e selects)."""

    model_config = _ENVELOPE_CONFIG

    custom_id: str = ""
    component_type: int = ComponentType.BUTTON
    values: tuple[str, ...] = ()


class ModalField(BaseModel):
    """Campo de texto submetido em um modal."""

    model_config = _ENVELOPE_CONFIG

    custom_id: str = ""
    type: int = ComponentType.TEXT_INPUT
    value: str = ""


class ModalRow(BaseModel):
    """Linha (action row) de um modal submetido."""

    model_config = _ENVELOPE_CONFIG

    type: int = ComponentType.ACTION_ROW
    components: tuple[ModalField, ...] = ()


class ModalSubmitData(BaseModel):
    """Payload de MODAL_SUBMIT."""

    model_config = _ENVELOPE_CONFIG

    custom_id: str = ""
    components: tuple[ModalRow, ...] = ()

    def field_value(self, custom_id: str) -> str | None:
        """Valor do campo de texto com o custom_id informado."""
        for row in self.components:
            for field in row.components:
                if field.custom_id == custom_id:
                    return field.value
        return None


class MessageRef(BaseModel):
    """Mensagem à qual o componente estava anexado."""

    model_config = _ENVELOPE_CONFIG

    id: str
    channel_id: str | None = None
    embeds: tuple[dict[str, Any], ...] = ()


class _EnvelopeBase(BaseModel):
    """Campos comuns a todas as variantes do envelope."""

    model_config = _ENVELOPE_CONFIG

    id: str = ""
    token: str = Field(default="", repr=False)
    application_id: str = ""
    guild_id: str | None = None
    channel_id: str | None = None
    locale: str | None = None
    user: DiscordUser | None = None

    @model_validator(mode="before")
    @classmethod
    def _lift_member_user(cls, data: Any) -> Any:
        # Em guilds o usuário chega em member.user; em DMs, em user
        if isinstance(data, dict) and not data.get("user"):
            member = data.get("member")
            if isinstance(member, dict) and isinstance(member.get("user"), dict):
                return {**data, "user": member["user"]}
        return data

    @property
    def user_id(self) -> str | None:
        return self.user.id if self.user else None

    @property
    def interaction_type(self) -> InteractionType:
        return InteractionType(self.type)  # type: ignore[attr-defined]


class PingInteraction(_EnvelopeBase):
    type: Literal[1] = 1


class CommandInteraction(_EnvelopeBase):
    type: Literal[2] = 2
    data: CommandData = CommandData()


class ComponentInteraction(_EnvelopeBase):
    type: Literal[3] = 3
    data: ComponentData = ComponentData()
    message: MessageRef | None = None


class AutocompleteInteraction(_EnvelopeBase):
    type: Literal[4] = 4
    data: CommandData = CommandData()


class ModalSubmitInteraction(_EnvelopeBase):
    type: Literal[5] = 5
    data: ModalSubmitData = ModalSubmitData()
    message: MessageRef | None = None


InteractionEnvelope = Annotated[
    Union[
        PingInteraction,
        CommandInteraction,
        ComponentInteraction,
        AutocompleteInteraction,
        ModalSubmitInteraction,
    ],
    Field(discriminator="type"),
]

_ENVELOPE_ADAPTER: TypeAdapter[InteractionEnvelope] = TypeAdapter(InteractionEnvelope)

KNOWN_INTERACTION_TYPES = frozenset(int(item) for item in InteractionType)


def build_envelope(payload: dict[str, Any]) -> InteractionEnvelope:
    """Valida o payload já parseado e devolve a variante tipada.

    Raises:
        pydantic.ValidationError: Se o payload não casar com a variante
    """
    return _ENVELOPE_ADAPTER.validate_python(payload)


def _find_focused(
    options: tuple[CommandOption, ...],
    path: tuple[str, ...],
) -> tuple[tuple[str, ...], CommandOption] | None:
    for option in options:
        if option.focused:
            return (*path, option.name), option
    for option in options:
        if option.options:
            found = _find_focused(option.options, (*path, option.name))
            if found is not None:
                return found
    return None


def _find_value(
    options: tuple[CommandOption, ...],
    name: str,
) -> str | int | float | bool | None:
    for option in options:
        if option.name == name and option.value is not None:
            return option.value
        if option.options:
            nested = _find_value(option.options, name)
            if nested is not None:
                return nested
    return None


__all__ = [
    "KNOWN_INTERACTION_TYPES",
    "AutocompleteInteraction",
    "CommandData",
    "CommandInteraction",
    "CommandOption",
    "ComponentData",
    "ComponentInteraction",
    "ComponentType",
    "DiscordUser",
    "InteractionEnvelope",
    "InteractionResponseType",
    "InteractionType",
    "MessageRef",
    "ModalField",
    "ModalRow",
    "ModalSubmitData",
    "ModalSubmitInteraction",
    "PingInteraction",
    "build_envelope",
]
