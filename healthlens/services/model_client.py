# /healthlens/services/model_client.py

import asyncio
import base64
import logging
from typing import Optional, Protocol

import tenacity
from google import genai
from google.genai import errors as genai_errors
from google.genai.types import GenerateContentConfig

from healthlens.config.settings import Settings
from healthlens.flows.errors import ModelInvocationError
from healthlens.models.endpoint import ModelRequest, ModelResponse
from healthlens.utils.metrics import ai_requests_counter

# This service wraps the hosted generative model (Google Gemini). It is built
# once at startup and handed to the FlowRunner, so tests can swap in a stub
# that implements the same `generate` coroutine.

logger = logging.getLogger(__name__)


class ModelEndpoint(Protocol):
    async def generate(self, request: ModelRequest) -> ModelResponse:
        ...


class GeminiModelClient:
    def __init__(
        self,
        api_key: str,
        model_name: str,
        image_model_name: str,
        timeout_seconds: float = 60.0,
        max_retries: int = 0,
        temperature: Optional[float] = None,
        client: Optional[genai.Client] = None,
    ):
        self.client = client or genai.Client(api_key=api_key)
        self.model_name = model_name
        self.image_model_name = image_model_name
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.temperature = temperature
        logger.info(f"Using Gemini model: {self.model_name} (images: {self.image_model_name})")

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiModelClient":
        return cls(
            api_key=settings.gemini_api_key,
            model_name=settings.gemini_model,
            image_model_name=settings.gemini_image_model,
            timeout_seconds=settings.model_timeout_seconds,
            max_retries=settings.model_max_retries,
            temperature=settings.model_temperature,
        )

    def _select_model(self, request: ModelRequest) -> str:
        if request.model:
            return request.model
        if "IMAGE" in request.response_modalities:
            return self.image_model_name
        return self.model_name

    def _build_config(self, request: ModelRequest) -> GenerateContentConfig:
        temperature = request.temperature if request.temperature is not None else self.temperature
        return GenerateContentConfig(
            temperature=temperature,
            response_mime_type=request.response_mime_type,
            response_modalities=list(request.response_modalities) or None,
        )

    async def generate(self, request: ModelRequest) -> ModelResponse:
        """
        Sends one prompt to Gemini, bounded by `timeout_seconds`.

        Idempotent requests get `max_retries` extra attempts (0 or 1) on
        invocation failures. Raises ModelInvocationError when every attempt fails.
        """
        model = self._select_model(request)
        config = self._build_config(request)
        attempts = 1 + (self.max_retries if request.idempotent else 0)

        retrying = tenacity.AsyncRetrying(
            retry=tenacity.retry_if_exception_type(ModelInvocationError),
            stop=tenacity.stop_after_attempt(attempts),
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                response = await self._call_once(model, config, request.prompt)
        return response

    async def _call_once(self, model: str, config: GenerateContentConfig, prompt: str) -> ModelResponse:
        try:
            raw = await asyncio.wait_for(
                asyncio.to_thread(
                    self.client.models.generate_content,
                    model=model,
                    contents=prompt,
                    config=config,
                ),
                timeout=self.timeout_seconds,
            )
            response = self._to_model_response(raw, model)
        except asyncio.TimeoutError as e:
            error = ModelInvocationError(f"Model call timed out after {self.timeout_seconds}s", cause=e)
        except genai_errors.APIError as e:
            error = ModelInvocationError(f"Model endpoint returned an error ({e.code}): {e.message}", cause=e)
        except ModelInvocationError as e:
            error = e
        except Exception as e:
            error = ModelInvocationError(f"Model call failed: {e}", cause=e)
        else:
            ai_requests_counter.labels(model=model, status="success").inc()
            return response

        ai_requests_counter.labels(model=model, status="error").inc()
        logger.error(f"Gemini call to {model} failed: {error.message}")
        raise error

    def _to_model_response(self, raw, model: str) -> ModelResponse:
        """Extracts text and the first inline media part from a generate_content response."""
        try:
            candidates = raw.candidates or []
        except AttributeError as e:
            raise ModelInvocationError("Malformed model response envelope", cause=e)

        if not candidates:
            feedback = getattr(raw, "prompt_feedback", None)
            block_reason = getattr(feedback, "block_reason", None)
            return ModelResponse(model=model, finish_reason=_enum_name(block_reason))

        candidate = candidates[0]
        parts = candidate.content.parts if candidate.content and candidate.content.parts else []

        texts = []
        media_url = None
        media_mime_type = None
        for part in parts:
            if getattr(part, "text", None):
                texts.append(part.text)
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data and media_url is None:
                media_mime_type = inline.mime_type or "application/octet-stream"
                encoded = base64.b64encode(inline.data).decode("ascii")
                media_url = f"data:{media_mime_type};base64,{encoded}"

        return ModelResponse(
            text="".join(texts) or None,
            media_url=media_url,
            media_mime_type=media_mime_type,
            finish_reason=_enum_name(getattr(candidate, "finish_reason", None)),
            model=model,
        )


def _enum_name(value) -> Optional[str]:
    if value is None:
        return None
    return getattr(value, "name", None) or str(value)
