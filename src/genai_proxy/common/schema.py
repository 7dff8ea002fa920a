"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from pydantic import BaseModel

@dataclass(frozen=True)
class TextPart:
    """Plain text segment sent to the model."""
    text: str

@dataclass(frozen=True)
class InlineDataPart:
    """Binary segment with its MIME type; base64-encoded on the wire."""
    data: bytes
    mime_type: str

ContentPart = Union[TextPart, InlineDataPart]

@dataclass(frozen=True)
class TextPrompt:
    prompt: str

@dataclass(frozen=True)
class ImageInput:
    data: bytes
    mime_type: str
    prompt: str | None = None

@dataclass(frozen=True)
class DocumentInput:
    data: bytes
    mime_type: str
    prompt: str | None = None

@dataclass(frozen=True)
class AudioInput:
    data: bytes
    mime_type: str
    prompt: str | None = None

GenerationRequest = Union[TextPrompt, ImageInput, DocumentInput, AudioInput]

class GenerateOut(BaseModel):
    result: str

class ErrorOut(BaseModel):
    message: str

class HealthOut(BaseModel):
    status: str
