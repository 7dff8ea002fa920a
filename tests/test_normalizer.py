from __future__ import annotations

import asyncio
import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from genai_proxy.common.errors import PayloadTooLargeError, ValidationError
from genai_proxy.common.prompts import DefaultPrompts
from genai_proxy.common.schema import AudioInput, DocumentInput, ImageInput, InlineDataPart, TextPart, TextPrompt
from genai_proxy.serve.normalizer import parse_text_prompt, read_upload, to_content_parts


def _upload(data: bytes, filename: str = "f.bin", content_type: str | None = "image/png") -> UploadFile:
    headers = Headers({"content-type": content_type}) if content_type else Headers({})
    return UploadFile(file=io.BytesIO(data), filename=filename, headers=headers)


def test_parse_text_prompt() -> None:
    assert parse_text_prompt({"prompt": "Hello"}) == TextPrompt(prompt="Hello")


@pytest.mark.parametrize("payload", [{}, {"prompt": ""}, None, ["prompt"]])
def test_parse_text_prompt_missing(payload: object) -> None:
    with pytest.raises(ValidationError, match="Prompt is required"):
        parse_text_prompt(payload)


def test_parse_text_prompt_non_string() -> None:
    with pytest.raises(ValidationError) as exc:
        parse_text_prompt({"prompt": 42})
    assert exc.value.status_code == 400


def test_read_upload_missing() -> None:
    with pytest.raises(ValidationError, match="Document is required"):
        asyncio.run(read_upload(None, "document", 10))


def test_read_upload_too_large() -> None:
    with pytest.raises(PayloadTooLargeError) as exc:
        asyncio.run(read_upload(_upload(b"x" * 11), "image", 10))
    assert exc.value.status_code == 413
    assert exc.value.message == "File too large"


def test_read_upload_mime_fallback() -> None:
    data, mime = asyncio.run(read_upload(_upload(b"abc", content_type=None), "audio", 10))
    assert data == b"abc"
    assert mime == "application/octet-stream"


def test_text_prompt_is_single_part() -> None:
    assert to_content_parts(TextPrompt(prompt="Hi"), DefaultPrompts()) == [TextPart(text="Hi")]


@pytest.mark.parametrize(
    "request_obj, expected",
    [
        (ImageInput(data=b"i", mime_type="image/png"), "Jelaskan gambar ini"),
        (DocumentInput(data=b"d", mime_type="application/pdf"), "Buat ringkasan dari dokumen berikut."),
        (AudioInput(data=b"a", mime_type="audio/wav"), "Buat transkrip dari rekaman tersebut."),
        (ImageInput(data=b"i", mime_type="image/png", prompt=""), "Jelaskan gambar ini"),
        (AudioInput(data=b"a", mime_type="audio/wav", prompt="Translate"), "Translate"),
    ],
)
def test_binary_requests_put_instruction_first(request_obj, expected: str) -> None:
    text, blob = to_content_parts(request_obj, DefaultPrompts())
    assert text == TextPart(text=expected)
    assert blob == InlineDataPart(data=request_obj.data, mime_type=request_obj.mime_type)


def test_custom_default_prompts() -> None:
    prompts = DefaultPrompts(image="Describe this image")
    text, _ = to_content_parts(ImageInput(data=b"i", mime_type="image/png"), prompts)
    assert text.text == "Describe this image"

