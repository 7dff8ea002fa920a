"""Turn parsed HTTP input into generation requests and content parts."""
from __future__ import annotations
from typing import Any

from fastapi import UploadFile

from genai_proxy.common.errors import PayloadTooLargeError, ValidationError
from genai_proxy.common.prompts import DefaultPrompts
from genai_proxy.common.schema import (
    AudioInput,
    ContentPart,
    DocumentInput,
    GenerationRequest,
    ImageInput,
    InlineDataPart,
    TextPart,
    TextPrompt,
)

FALLBACK_MIME = "application/octet-stream"

def parse_text_prompt(payload: Any) -> TextPrompt:
    """
    Extract the prompt from a decoded JSON or form body.

    Args:
        payload: Body mapping; anything else counts as a missing prompt.
    """
    prompt = payload.get("prompt") if hasattr(payload, "get") else None
    if not prompt:
        raise ValidationError("Prompt is required")
    if not isinstance(prompt, str):
        raise ValidationError("Prompt must be a string")
    return TextPrompt(prompt=prompt)

async def read_upload(upload: UploadFile | None, field: str, max_bytes: int) -> tuple[bytes, str]:
    """
    Read an uploaded file, enforcing presence and size.

    Args:
        upload: Multipart file or None when the field was not sent.
        field: Form field name, used for the error message.
        max_bytes: Largest accepted payload.

    Returns:
        Raw bytes and MIME type.
    """
    if upload is None or not upload.filename:
        raise ValidationError(f"{field.capitalize()} is required")
    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise PayloadTooLargeError()
    return data, upload.content_type or FALLBACK_MIME

def to_content_parts(request: GenerationRequest, prompts: DefaultPrompts) -> list[ContentPart]:
    """Instruction text first, binary second; text prompts yield a single part."""
    if isinstance(request, TextPrompt):
        return [TextPart(text=request.prompt)]
    if isinstance(request, ImageInput):
        default = prompts.image
    elif isinstance(request, DocumentInput):
        default = prompts.document
    elif isinstance(request, AudioInput):
        default = prompts.audio
    else:
        raise TypeError(f"Unsupported request type: {type(request).__name__}")
    return [TextPart(text=request.prompt or default), InlineDataPart(data=request.data, mime_type=request.mime_type)]
