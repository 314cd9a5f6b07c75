"""Language detection for stored documents."""

from __future__ import annotations

from langdetect import DetectorFactory, LangDetectException, detect

# langdetect is probabilistic; a fixed seed keeps detection repeatable
DetectorFactory.seed = 0

DEFAULT_LANGUAGE = "en"


def detect_language(text: str) -> str:
    text = (text or "").strip()
    if len(text) < 20:
        return DEFAULT_LANGUAGE
    try:
        return detect(text)
    except LangDetectException:
        return DEFAULT_LANGUAGE
