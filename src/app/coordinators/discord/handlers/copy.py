"""Botões de cópia de valores de cor (hex, RGB, HSV)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.reply import InteractionReply
from app.domain.responses import ephemeral_response

if TYPE_CHECKING:
    from app.coordinators.discord.context import InteractionContext

COPY_HEX_PREFIX = "copy_hex_"
COPY_RGB_PREFIX = "copy_rgb_"
COPY_HSV_PREFIX = "copy_hsv_"


def _custom_id(ctx: InteractionContext) -> str:
    return ctx.envelope.data.custom_id  # type: ignore[union-attr]


def _code_block(text: str) -> str:
    return f"```\n{text}\n```"


async def handle_copy_hex(ctx: InteractionContext) -> InteractionReply:
    value = _custom_id(ctx).removeprefix(COPY_HEX_PREFIX).upper()
    hex_code = value if value.startswith("#") else f"#{value}"
    return InteractionReply(ephemeral_response(_code_block(hex_code)))


async def handle_copy_rgb(ctx: InteractionContext) -> InteractionReply:
    parts = _custom_id(ctx).removeprefix(COPY_RGB_PREFIX).split("_")
    if len(parts) != 3:
        return InteractionReply(ephemeral_response("Invalid RGB format."))
    r, g, b = parts
    formats = f"rgb({r}, {g}, {b})\n{r}, {g}, {b}"
    return InteractionReply(ephemeral_response(f"**RGB Values:**\n{_code_block(formats)}"))


async def handle_copy_hsv(ctx: InteractionContext) -> InteractionReply:
    parts = _custom_id(ctx).removeprefix(COPY_HSV_PREFIX).split("_")
    if len(parts) != 3:
        return InteractionReply(ephemeral_response("Invalid HSV format."))
    h, s, v = parts
    return InteractionReply(
        ephemeral_response(f"**HSV Values:**\n{_code_block(f'H: {h}°, S: {s}%, V: {v}%')}")
    )
