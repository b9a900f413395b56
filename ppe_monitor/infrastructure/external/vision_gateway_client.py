"""Vision gateway client for PPE analysis of a single frame."""
import logging
from typing import Any, Dict, List, Optional

import httpx

from ...core.config import get_settings
from ...domain.models.detection import ResponseFormat
from ...exceptions import QuotaExceededError, RateLimitedError, VisionGatewayError
from ..http_client_factory import get_shared_http_client
from .prompts import DETAILED_PROMPT, SYSTEM_PROMPT, TEXT_PROMPT

logger = logging.getLogger(__name__)


class VisionGatewayClient:
    """
    Client for an OpenAI-compatible chat completions endpoint with vision support.

    This client handles:
    - Building the multimodal message (prompt + image data URI)
    - Mapping gateway failures to distinct error categories
      (rate limited, quota exhausted, gateway failure)
    - Returning the raw text content for the normalizer

    Raises (from analyze):
        RateLimitedError: HTTP 429
        QuotaExceededError: HTTP 402
        VisionGatewayError: Any other failure, including timeouts and empty answers
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        settings = get_settings()
        self.api_url = api_url or settings.vision_api_url
        self.api_key = api_key if api_key is not None else settings.vision_api_key
        self.model = model or settings.vision_model
        self.timeout = timeout or settings.vision_timeout_seconds
        self.default_prompt = settings.detection_prompt
        self._client = client

        if not self.api_key:
            logger.warning("VISION_API_KEY not found in environment variables")

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client if self._client is not None else get_shared_http_client()

    def _prompt_for(self, response_format: ResponseFormat, prompt: Optional[str]) -> str:
        if prompt:
            return str(prompt)
        if response_format is ResponseFormat.DETAILED:
            return DETAILED_PROMPT
        if response_format is ResponseFormat.TEXT:
            return TEXT_PROMPT
        return self.default_prompt

    def _build_payload(self, image_data_uri: str, prompt: str, response_format: ResponseFormat) -> Dict[str, Any]:
        messages: List[Dict[str, Any]] = []
        if response_format is not ResponseFormat.TEXT:
            messages.append({"role": "system", "content": SYSTEM_PROMPT})
        messages.append({
            "role": "user",
            "content": [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": image_data_uri}},
            ],
        })
        return {
            "model": self.model,
            "messages": messages,
            "temperature": 0.1,
            "max_tokens": 1000 if response_format is ResponseFormat.TEXT else 500,
        }

    async def analyze(
        self,
        image_data_uri: str,
        prompt: Optional[str] = None,
        response_format: ResponseFormat = ResponseFormat.SIMPLE,
    ) -> str:
        """
        Send one image to the gateway.

        Args:
            image_data_uri: Image as a base64 data URI
            prompt: Optional prompt overriding the default for the format
            response_format: Layout the answer is requested in

        Returns:
            Raw text content of the model answer
        """
        if not self.api_key:
            raise VisionGatewayError("VISION_API_KEY is not configured")

        payload = self._build_payload(image_data_uri, self._prompt_for(response_format, prompt), response_format)
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.debug(f"Calling vision gateway with model: {self.model}")
        try:
            response = await self.client.post(
                self.api_url,
                headers=headers,
                json=payload,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            logger.error("Timeout while calling vision gateway")
            raise VisionGatewayError("Vision gateway timeout") from e
        except httpx.HTTPError as e:
            logger.error(f"Transport error calling vision gateway: {e}")
            raise VisionGatewayError(f"Vision gateway unreachable: {e}") from e

        if response.status_code == 429:
            raise RateLimitedError()
        if response.status_code == 402:
            raise QuotaExceededError()
        if response.is_error:
            logger.error(f"HTTP error from vision gateway: {response.status_code} - {response.text}")
            raise VisionGatewayError(
                f"Vision gateway error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            result = response.json()
        except ValueError as e:
            raise VisionGatewayError("Vision gateway returned a non-JSON body") from e

        try:
            content = result["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError):
            content = ""
        if not isinstance(content, str) or not content:
            logger.warning("Empty response from vision gateway")
            raise VisionGatewayError("Empty response from vision gateway")
        return content
