"""Protocol for text generation backends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol


@dataclass(frozen=True)
class PromptMessage:
    role: Literal["system", "user", "assistant"]
    content: str


class TextGenerator(Protocol):
    async def generate(
        self,
        messages: list[PromptMessage],
        max_tokens: int = 4000,
        temperature: float = 0.3,
    ) -> str: ...
