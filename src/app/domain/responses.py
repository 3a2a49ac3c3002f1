"""Formatos de callback e helpers de mensagem.

Funções puras que montam os corpos JSON devolvidos no ACK síncrono e
usados nos follow-ups. O flag efêmero é sempre combinado (OR) com os
flags já presentes na mensagem.
"""

from __future__ import annotations

import copy
import re
from typing import Any

from app.domain.interaction import ComponentType, InteractionResponseType

EPHEMERAL_FLAG = 1 << 6
MAX_AUTOCOMPLETE_CHOICES = 25

# Cores padrão dos embeds
COLOR_ERROR = 0xED4245
COLOR_SUCCESS = 0x57F287
COLOR_INFO = 0x5865F2

_ATTACHMENT_REF = re.compile(r"^attachment://.+$")


def with_ephemeral(data: dict[str, Any]) -> dict[str, Any]:
    """Cópia de `data` com o flag efêmero adicionado aos flags existentes."""
    flags = int(data.get("flags") or 0)
    return {**data, "flags": flags | EPHEMERAL_FLAG}


def pong_response() -> dict[str, Any]:
    return {"type": InteractionResponseType.PONG.value}


def message_response(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "type": InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE.value,
        "data": data,
    }


def ephemeral_response(
    content: str | None = None,
    *,
    data: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Mensagem visível só para o autor da interação.

    Args:
        content: Texto simples (ignorado se `data` for informado)
        data: Corpo completo da mensagem
    """
    body = dict(data) if data is not None else {"content": content or ""}
    return message_response(with_ephemeral(body))


def deferred_response(*, ephemeral: bool = False) -> dict[str, Any]:
    response: dict[str, Any] = {
        "type": InteractionResponseType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE.value
    }
    if ephemeral:
        response["data"] = {"flags": EPHEMERAL_FLAG}
    return response


def deferred_update_response() -> dict[str, Any]:
    return {"type": InteractionResponseType.DEFERRED_UPDATE_MESSAGE.value}


def update_message_response(data: dict[str, Any]) -> dict[str, Any]:
    return {"type": InteractionResponseType.UPDATE_MESSAGE.value, "data": data}


def autocomplete_response(choices: list[dict[str, Any]]) -> dict[str, Any]:
    """Resultado de autocomplete, truncado no limite da plataforma."""
    return {
        "type": InteractionResponseType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT.value,
        "data": {"choices": list(choices[:MAX_AUTOCOMPLETE_CHOICES])},
    }


def modal_response(
    custom_id: str,
    title: str,
    components: list[dict[str, Any]],
) -> dict[str, Any]:
    return {
        "type": InteractionResponseType.MODAL.value,
        "data": {"custom_id": custom_id, "title": title, "components": components},
    }


def text_input_row(
    custom_id: str,
    label: str,
    *,
    paragraph: bool = True,
    required: bool = True,
    max_length: int = 1000,
    placeholder: str | None = None,
) -> dict[str, Any]:
    """Action row com um único campo de texto para modais."""
    text_input: dict[str, Any] = {
        "type": ComponentType.TEXT_INPUT.value,
        "custom_id": custom_id,
        "label": label,
        "style": 2 if paragraph else 1,
        "required": required,
        "max_length": max_length,
    }
    if placeholder:
        text_input["placeholder"] = placeholder
    return {"type": ComponentType.ACTION_ROW.value, "components": [text_input]}


def button(
    custom_id: str,
    label: str,
    *,
    style: int = 2,
    emoji: str | None = None,
) -> dict[str, Any]:
    component: dict[str, Any] = {
        "type": ComponentType.BUTTON.value,
        "style": style,
        "label": label,
        "custom_id": custom_id,
    }
    if emoji:
        component["emoji"] = {"name": emoji}
    return component


def action_row(*components: dict[str, Any]) -> dict[str, Any]:
    return {"type": ComponentType.ACTION_ROW.value, "components": list(components)}


def _embed(title: str, description: str, color: int) -> dict[str, Any]:
    return {"title": title, "description": description, "color": color}


def error_embed(title: str, description: str) -> dict[str, Any]:
    return _embed(f"❌ {title}", description, COLOR_ERROR)


def success_embed(title: str, description: str) -> dict[str, Any]:
    return _embed(f"✅ {title}", description, COLOR_SUCCESS)


def info_embed(title: str, description: str) -> dict[str, Any]:
    return _embed(f"ℹ️ {title}", description, COLOR_INFO)


def rewrite_attachment_references(
    payload: dict[str, Any],
    filename: str,
) -> dict[str, Any]:
    """Aponta referências `attachment://...` dos embeds para `filename`.

    Cobre image, thumbnail e os ícones de author/footer. O payload
    original não é alterado.
    """
    result = copy.deepcopy(payload)
    target = f"attachment://{filename}"
    for embed in result.get("embeds") or []:
        if not isinstance(embed, dict):
            continue
        for key, url_field in (
            ("image", "url"),
            ("thumbnail", "url"),
            ("author", "icon_url"),
            ("footer", "icon_url"),
        ):
            section = embed.get(key)
            if isinstance(section, dict) and _ATTACHMENT_REF.match(
                str(section.get(url_field) or "")
            ):
                section[url_field] = target
    return result


def attachment_metadata(filename: str) -> list[dict[str, Any]]:
    """Metadado `attachments` para um único arquivo em `files[0]`."""
    return [{"id": 0, "filename": filename}]


__all__ = [
    "COLOR_ERROR",
    "COLOR_INFO",
    "COLOR_SUCCESS",
    "EPHEMERAL_FLAG",
    "MAX_AUTOCOMPLETE_CHOICES",
    "action_row",
    "attachment_metadata",
    "autocomplete_response",
    "button",
    "deferred_response",
    "deferred_update_response",
    "ephemeral_response",
    "error_embed",
    "info_embed",
    "message_response",
    "modal_response",
    "pong_response",
    "rewrite_attachment_references",
    "success_embed",
    "text_input_row",
    "update_message_response",
    "with_ephemeral",
]
