"""
OpenRouter LLM Service

Sends a single user prompt to an OpenRouter-style chat-completion endpoint
and maps every outcome to an AICallResult. Nothing is raised to the caller
and nothing is retried.
"""

import json
import logging
from threading import Lock
from typing import Optional

import requests

from ..config import get_openrouter_timeout
from ..models.result import AICallResult


logger = logging.getLogger(__name__)


class OpenRouterService:
    """
    Client for the OpenRouter chat-completion API.

    One instance holds one requests.Session, which is safe to share
    between independent concurrent calls.

    Usage:
        service = OpenRouterService()
        result = service.call(url, api_key, "anthropic/claude-sonnet-4.5", "Hello")
        if result.success:
            print(result.message)
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            session: HTTP session to reuse (a new one is created if omitted)
            timeout: Request timeout in seconds (defaults to OPENROUTER_TIMEOUT_SECONDS)
        """
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else get_openrouter_timeout()

    def call(
        self,
        url: str,
        api_key: Optional[str],
        model: str,
        prompt: str,
    ) -> AICallResult:
        """
        Send `prompt` as a single user message and return the first choice.

        Args:
            url: Chat-completion endpoint URL
            api_key: OpenRouter API key
            model: Model to use (e.g. anthropic/claude-sonnet-4.5)
            prompt: User prompt

        Returns:
            AICallResult with the generated text, or a diagnostic on failure
        """
        if not api_key:
            logger.error("OpenRouter API key is not configured")
            return AICallResult.fail(
                "OpenRouter API key is not configured. "
                "Please set OPENROUTER_API_KEY in environment variables."
            )

        try:
            logger.info(f"Calling OpenRouter API with model {model}")

            try:
                response = self.session.post(
                    url,
                    headers={"Authorization": f"Bearer {api_key}"},
                    json={
                        "model": model,
                        "messages": [
                            {"role": "user", "content": prompt}
                        ],
                    },
                    timeout=self.timeout,
                )
            except requests.exceptions.RequestException as e:
                logger.error(f"HTTP error calling OpenRouter API: {e}")
                return AICallResult.fail(f"Network error: {e}")

            if not 200 <= response.status_code < 300:
                error_content = response.text
                logger.error(
                    f"OpenRouter API returned error: {response.status_code} - {error_content}"
                )
                return AICallResult.fail(
                    f"OpenRouter API error: {response.status_code}. {error_content}"
                )

            try:
                content = _extract_content(response.text)
            except (ValueError, KeyError, IndexError, TypeError) as e:
                logger.error(f"JSON parsing error from OpenRouter API: {e}")
                return AICallResult.fail(f"Failed to parse API response: {e}")

            logger.info(
                f"OpenRouter API call successful, received {len(content)} characters"
            )
            return AICallResult.ok(content)

        except Exception as e:
            logger.exception(f"Unexpected error calling OpenRouter API: {e}")
            return AICallResult.fail(f"Unexpected error: {e}")


def _extract_content(body: str) -> str:
    """Pull choices[0].message.content out of a completion response body."""
    data = json.loads(body)
    content = data["choices"][0]["message"]["content"]
    if content is None:
        return ""
    if not isinstance(content, str):
        raise TypeError(f"expected string content, got {type(content).__name__}")
    return content


# Global singleton instance
_openrouter_service: Optional[OpenRouterService] = None
_service_lock = Lock()


def get_llm_service() -> OpenRouterService:
    """Get or create the process-wide OpenRouter service."""
    global _openrouter_service
    if _openrouter_service is None:
        with _service_lock:
            if _openrouter_service is None:
                _openrouter_service = OpenRouterService()
    return _openrouter_service
