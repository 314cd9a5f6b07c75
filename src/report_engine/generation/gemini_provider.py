"""Google Gemini text generation backend using the google-genai SDK."""

from __future__ import annotations

from google import genai
from google.genai import types

from report_engine.exceptions import GenerationError
from report_engine.observability.logger import get_logger
from report_engine.protocols.llm import PromptMessage

logger = get_logger("gemini")


class GeminiProvider:
    def __init__(self, api_key: str, model: str = "gemini-2.0-flash") -> None:
        self._client = genai.Client(api_key=api_key)
        self._model = model

    async def generate(
        self,
        messages: list[PromptMessage],
        max_tokens: int = 4000,
        temperature: float = 0.3,
    ) -> str:
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        contents = [
            types.Content(
                role="model" if m.role == "assistant" else "user",
                parts=[types.Part.from_text(text=m.content)],
            )
            for m in messages
            if m.role != "system"
        ]
        try:
            config = types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_tokens,
            )
            if system:
                config.system_instruction = system

            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=contents,
                config=config,
            )
        except Exception as e:
            raise GenerationError(f"Gemini generation failed: {e}") from e

        text = response.text or ""
        if not text.strip():
            raise GenerationError("Gemini returned an empty response")
        logger.debug("gemini_generated", model=self._model, chars=len(text))
        return text
