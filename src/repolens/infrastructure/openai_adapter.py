"""OpenAI-compatible chat adapter: implements the LlmGateway port."""

from __future__ import annotations

import logging

from openai import APITimeoutError, AsyncOpenAI, AuthenticationError, RateLimitError

from repolens.domain.exceptions import LlmError

logger = logging.getLogger(__name__)


class OpenAIAdapter:
    """Concrete ``LlmGateway`` backed by an OpenAI-compatible chat-completions API.

    The default base URL points at Groq, which speaks the same wire format.
    Retries are disabled: a failed review is replaced by fallback text upstream.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "llama-3.1-8b-instant",
        base_url: str | None = None,
        temperature: float = 0.5,
        max_tokens: int = 300,
        timeout: float = 30.0,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Send a system + user prompt and return the completion text."""
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )

            content = response.choices[0].message.content

            if not content:
                raise LlmError("LLM returned an empty response.")

            return content.strip()

        except AuthenticationError as exc:
            raise LlmError(
                "Invalid LLM API key. "
                "Set a valid key in the LLM_API_KEY environment variable."
            ) from exc

        except RateLimitError as exc:
            logger.error("LLM RateLimitError: %s", exc)
            raise LlmError(f"LLM rate limit / quota error: {exc}") from exc

        except APITimeoutError as exc:
            raise LlmError("LLM request timed out.") from exc

        except LlmError:
            raise

        except Exception as exc:
            raise LlmError(f"LLM call failed: {exc}") from exc

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
