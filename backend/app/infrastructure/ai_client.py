"""AI Service Client — httpx wrapper for the prediction and RAG chat endpoints.

Invariants:
    - Timeouts (any phase): AIServiceError 504, never retried
    - Connection refused: retried up to max_retries with backoff, then AIServiceError 503
    - Upstream non-2xx: AIServiceError with the upstream status and body in details
    - Anything else: AIServiceError 500 with originalError in details
    - Returned payloads are raw JSON dicts; shape validation belongs to the caller

Design Decisions:
    - Wrapper over raw httpx: isolates transport and error mapping from services
    - ±25% jitter on backoff: prevents synchronized retries against a recovering upstream
    - max_retries defaults to 0: a failed prediction is reported, not silently repeated
    - Optional transport injection: tests drive the client through httpx.MockTransport
"""

import asyncio
import logging
import random
from datetime import datetime, timezone
from typing import Any

import httpx

from app.config import Settings, get_settings
from app.core.errors import AIServiceError

logger = logging.getLogger(__name__)


def _extract_upstream_message(response: httpx.Response, fallback: str) -> str:
    """Pick a human message out of an upstream error body."""
    try:
        data: Any = response.json()
    except ValueError:
        data = response.text
    if isinstance(data, dict):
        for key in ("message", "error"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
        return fallback
    if isinstance(data, str) and data.strip():
        return data.strip()
    return fallback


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


class AIServiceClient:
    """Talks to the external prediction and RAG services."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.predict_url = settings.ai_predict_url
        self.chat_url = settings.ai_chat_url
        self.api_key = settings.ai_api_key
        self.timeout = settings.ai_timeout_seconds
        self.health_timeout = settings.ai_health_timeout_seconds
        self.max_retries = settings.ai_max_retries
        self.base_delay_ms = settings.ai_base_delay_ms
        self.max_delay_ms = settings.ai_max_delay_ms
        self.client = httpx.AsyncClient(
            timeout=self.timeout, transport=transport,
        )
        logger.info("AI service client initialized")
        logger.debug(f"Predict URL: {self.predict_url}")
        logger.debug(f"Chat URL: {self.chat_url}")

    def _headers(self) -> dict[str, str]:
        return {"X-API-Key": self.api_key} if self.api_key else {}

    async def predict(
        self,
        image: bytes,
        filename: str,
        content_type: str,
        consent_id: str,
    ) -> dict:
        """Send an image to the prediction endpoint as multipart/form-data."""
        logger.info(
            "Sending image to AI service for analysis",
            extra={"consent_id": consent_id},
        )
        try:
            response = await self._post_with_retry(
                self.predict_url,
                files={"image": (filename, image, content_type)},
                data={
                    "consentId": consent_id,
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                },
            )
        except httpx.TimeoutException:
            raise AIServiceError(
                "AI analysis timed out. Please try again with different image.",
                504,
                {"reason": "Request timeout", "timeout": self.timeout},
                code="AI_TIMEOUT",
            )
        except httpx.ConnectError:
            raise AIServiceError(
                "AI service is currently unavailable. Please Try again later.",
                503,
                {"reason": "Cannot connect to AI service"},
                code="AI_UNAVAILABLE",
            )
        except httpx.HTTPStatusError as e:
            message = _extract_upstream_message(e.response, "Analysis failed")
            raise AIServiceError(
                f"AI service error: {message}",
                e.response.status_code,
                {"aiResponse": _response_body(e.response)},
                code="AI_UPSTREAM_ERROR",
            )
        except httpx.HTTPError as e:
            logger.error(f"AI analysis failed: {e}", exc_info=True)
            raise AIServiceError(
                "An unexpected error occurred during analysis.",
                500,
                {"originalError": str(e)},
            )

        payload = self._json_or_error(response, "AI service")
        prediction = payload.get("prediction") or {}
        logger.info(
            "Image analysis successful",
            extra={
                "consent_id": consent_id,
                "confidence": prediction.get("confidence")
                if isinstance(prediction, dict) else None,
            },
        )
        return payload

    async def chat(
        self, disease: str, question: str, consent_id: str | None = None,
    ) -> dict:
        """Send a question about a condition to the RAG endpoint."""
        logger.info(
            "Sending chat request to RAG service",
            extra={"disease": disease, "consent_id": consent_id},
        )
        body = {"disease": disease, "question": question}
        if consent_id:
            body["consentId"] = consent_id
        try:
            response = await self._post_with_retry(self.chat_url, json=body)
        except httpx.TimeoutException:
            raise AIServiceError(
                "Chat request timed out. Please try again.",
                504,
                {"reason": "Request timeout"},
                code="AI_TIMEOUT",
            )
        except httpx.ConnectError:
            raise AIServiceError(
                "Chat service is currently unavailable.",
                503,
                {"reason": "Cannot connect to RAG service"},
                code="AI_UNAVAILABLE",
            )
        except httpx.HTTPStatusError as e:
            message = _extract_upstream_message(e.response, "Chat failed")
            raise AIServiceError(
                f"Chat Service error: {message}",
                e.response.status_code,
                {"ragResponse": _response_body(e.response)},
                code="AI_UPSTREAM_ERROR",
            )
        except httpx.HTTPError as e:
            logger.error(f"RAG chat failed: {e}", exc_info=True)
            raise AIServiceError(
                "Unexpected Error in RAG chat", 500, {"originalError": str(e)},
            )

        payload = self._json_or_error(response, "RAG service")
        logger.info("RAG chat successful", extra={"disease": disease})
        return payload

    async def health_check(self) -> bool:
        """HEAD the prediction endpoint; any response below 500 counts as alive."""
        try:
            response = await self.client.head(
                self.predict_url,
                headers=self._headers(),
                timeout=self.health_timeout,
            )
            return response.status_code < 500
        except httpx.HTTPError as e:
            logger.warning(f"AI service health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.aclose()

    # ─── internals ──────────────────────────────────────────────

    async def _post_with_retry(self, url: str, **kwargs) -> httpx.Response:
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.post(
                    url, headers=self._headers(), **kwargs,
                )
                response.raise_for_status()
                return response
            except httpx.ConnectError as e:
                if attempt >= self.max_retries:
                    logger.error(
                        f"AI service unreachable after {attempt + 1} attempt(s): {e}",
                        extra={"attempt": attempt + 1},
                    )
                    raise
                delay = self._calculate_backoff(attempt)
                logger.warning(
                    f"AI service connection failed, retrying in {delay:.2f}s",
                    extra={"attempt": attempt + 1},
                )
                await asyncio.sleep(delay)
        raise RuntimeError("unreachable")

    def _calculate_backoff(self, attempt: int) -> float:
        """Exponential backoff with ±25% jitter, in seconds."""
        delay_ms = min(self.base_delay_ms * (2 ** attempt), self.max_delay_ms)
        jitter = delay_ms * 0.25 * (2 * random.random() - 1)
        return max(0.0, (delay_ms + jitter) / 1000)

    @staticmethod
    def _json_or_error(response: httpx.Response, service: str) -> dict:
        try:
            payload = response.json()
        except ValueError:
            raise AIServiceError(
                f"Invalid response from {service}", 500,
                {"body": response.text[:500]},
                code="AI_INVALID_RESPONSE",
            )
        if not isinstance(payload, dict):
            raise AIServiceError(
                f"Invalid response from {service}", 500, {"body": payload},
                code="AI_INVALID_RESPONSE",
            )
        return payload


# Singleton (initialized on startup, or lazily on first use)
ai_client: AIServiceClient | None = None


def init_ai_client(settings: Settings) -> AIServiceClient:
    global ai_client
    ai_client = AIServiceClient(settings)
    return ai_client


def get_ai_client() -> AIServiceClient:
    """FastAPI dependency for the shared AI client."""
    if ai_client is None:
        return init_ai_client(get_settings())
    return ai_client
