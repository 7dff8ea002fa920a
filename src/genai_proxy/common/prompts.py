"""Default instructional texts for the binary routes."""
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

LOGGER = logging.getLogger("genai_proxy.prompts")

@dataclass(frozen=True)
class DefaultPrompts:
    image: str = "Jelaskan gambar ini"
    document: str = "Buat ringkasan dari dokumen berikut."
    audio: str = "Buat transkrip dari rekaman tersebut."

def load_prompts(path: str = "configs/prompts.yaml") -> DefaultPrompts:
    """
    Load default prompts from a YAML file.

    Missing file or keys fall back to the built-in texts.

    Args:
        path: Path to a mapping with optional `image`, `document`, `audio` keys.
    """
    p = Path(path)
    if not p.exists():
        LOGGER.info("Prompts file %s not found; using built-in defaults", path)
        return DefaultPrompts()
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        LOGGER.warning("Failed to read prompts file %s: %s", path, e)
        return DefaultPrompts()
    if not isinstance(data, dict):
        LOGGER.warning("Prompts file %s is not a mapping; ignoring", path)
        return DefaultPrompts()

    overrides = {
        key: str(data[key])
        for key in ("image", "document", "audio")
        if data.get(key)
    }
    return DefaultPrompts(**overrides)
