"""Testes dos helpers de corpo de resposta."""

from __future__ import annotations

from app.domain.responses import (
    EPHEMERAL_FLAG,
    MAX_AUTOCOMPLETE_CHOICES,
    attachment_metadata,
    autocomplete_response,
    button,
    deferred_response,
    deferred_update_response,
    ephemeral_response,
    modal_response,
    pong_response,
    rewrite_attachment_references,
    text_input_row,
    with_ephemeral,
)


class TestEphemeral:
    def test_flag_is_combined_with_existing_flags(self) -> None:
        """Flag efêmero entra por OR, sem apagar os flags existentes."""
        result = with_ephemeral({"content": "x", "flags": 4})

        assert result["flags"] == 4 | EPHEMERAL_FLAG

    def test_flag_idempotent(self) -> None:
        once = with_ephemeral({"content": "x"})

        assert with_ephemeral(once)["flags"] == EPHEMERAL_FLAG

    def test_original_not_mutated(self) -> None:
        data = {"content": "x"}

        with_ephemeral(data)

        assert "flags" not in data

    def test_ephemeral_response_with_content(self) -> None:
        response = ephemeral_response("hello")

        assert response == {"type": 4, "data": {"content": "hello", "flags": EPHEMERAL_FLAG}}

    def test_ephemeral_response_with_data(self) -> None:
        response = ephemeral_response(data={"embeds": [{"title": "t"}]})

        assert response["data"]["embeds"] == [{"title": "t"}]
        assert response["data"]["flags"] == EPHEMERAL_FLAG


class TestCallbackShapes:
    def test_pong(self) -> None:
        assert pong_response() == {"type": 1}

    def test_deferred(self) -> None:
        assert deferred_response() == {"type": 5}
        assert deferred_response(ephemeral=True) == {"type": 5, "data": {"flags": EPHEMERAL_FLAG}}
        assert deferred_update_response() == {"type": 6}

    def test_autocomplete_truncated(self) -> None:
        """Nunca mais que 25 escolhas."""
        choices = [{"name": str(i), "value": str(i)} for i in range(40)]

        response = autocomplete_response(choices)

        assert response["type"] == 8
        assert len(response["data"]["choices"]) == MAX_AUTOCOMPLETE_CHOICES
        assert response["data"]["choices"][0] == {"name": "0", "value": "0"}

    def test_modal(self) -> None:
        row = text_input_row("reason", "Reason", placeholder="Why?")

        response = modal_response("modal_1", "Title", [row])

        assert response["type"] == 9
        text_input = response["data"]["components"][0]["components"][0]
        assert text_input["style"] == 2
        assert text_input["placeholder"] == "Why?"

    def test_button_emoji(self) -> None:
        assert "emoji" not in button("a", "A")
        assert button("a", "A", style=3, emoji="✅")["emoji"] == {"name": "✅"}


class TestAttachmentRewrite:
    def test_rewrites_all_attachment_sections(self) -> None:
        payload = {
            "embeds": [
                {
                    "image": {"url": "attachment://image.png"},
                    "thumbnail": {"url": "attachment://thumb.png"},
                    "author": {"icon_url": "attachment://a.png"},
                    "footer": {"icon_url": "https://cdn.example/icon.png"},
                }
            ]
        }

        result = rewrite_attachment_references(payload, "result.png")
        embed = result["embeds"][0]

        assert embed["image"]["url"] == "attachment://result.png"
        assert embed["thumbnail"]["url"] == "attachment://result.png"
        assert embed["author"]["icon_url"] == "attachment://result.png"
        assert embed["footer"]["icon_url"] == "https://cdn.example/icon.png"

    def test_original_payload_untouched(self) -> None:
        payload = {"embeds": [{"image": {"url": "attachment://image.png"}}]}

        rewrite_attachment_references(payload, "result.png")

        assert payload["embeds"][0]["image"]["url"] == "attachment://image.png"

    def test_without_embeds(self) -> None:
        assert rewrite_attachment_references({"content": "x"}, "f.png") == {"content": "x"}

    def test_attachment_metadata(self) -> None:
        assert attachment_metadata("result.png") == [{"id": 0, "filename": "result.png"}]
