from __future__ import annotations

import base64
import json
import logging
from typing import Any, AsyncIterator, Mapping

import vertexai
from google.api_core import exceptions as google_exceptions
from vertexai.generative_models import GenerationConfig, GenerativeModel

from .errors import MalformedResponseError, UpstreamUnavailableError

logger = logging.getLogger(__name__)


class VertexAIAdapter:
    """Adapter for Vertex AI Gemini models."""

    def __init__(
        self,
        *,
        project_id: str,
        location: str = "us-central1",
        model_name: str = "gemini-2.5-flash",
        image_model_name: str = "gemini-2.5-flash-image",
    ) -> None:
        """Initialize Vertex AI adapter.

        Args:
            project_id: GCP project ID
            location: Vertex AI location
            model_name: Text model name (e.g., "gemini-2.5-flash")
            image_model_name: Image-capable model used for logo suggestions
        """
        self.project_id = project_id
        self.location = location
        self.model_name = model_name
        self.image_model_name = image_model_name

        vertexai.init(project=project_id, location=location)

        self.model = GenerativeModel(model_name)
        self.image_model = GenerativeModel(image_model_name)

    def generate_content(
        self,
        prompt: str,
        *,
        temperature: float = 0.7,
        max_output_tokens: int = 8192,
        response_format: str | None = None,
        response_schema: Mapping[str, Any] | None = None,
    ) -> str:
        """Generate content using Vertex AI.

        Args:
            prompt: Input prompt
            temperature: Sampling temperature (0.0 - 1.0)
            max_output_tokens: Maximum output tokens
            response_format: Optional response format ("json" for JSON mode)
            response_schema: Optional OpenAPI schema for JSON mode

        Returns:
            Generated text
        """
        config: dict[str, Any] = {
            "temperature": temperature,
            "max_output_tokens": max_output_tokens,
        }
        if response_format == "json":
            config["response_mime_type"] = "application/json"
            if response_schema is not None:
                config["response_schema"] = dict(response_schema)

        try:
            response = self.model.generate_content(
                prompt,
                generation_config=GenerationConfig(**config),
            )
            generated_text = response.text
        except google_exceptions.GoogleAPICallError as exc:
            logger.error(
                "Vertex AI request failed",
                exc_info=True,
                extra={"model": self.model_name},
            )
            raise UpstreamUnavailableError(f"Vertex AI request failed: {exc}") from exc
        except ValueError as exc:
            # response.text raises when the candidate carries no text part
            raise MalformedResponseError(f"Vertex AI returned no text: {exc}") from exc

        logger.info(
            "Generated content with Vertex AI",
            extra={
                "model": self.model_name,
                "temperature": temperature,
                "input_length": len(prompt),
                "output_length": len(generated_text),
            },
        )

        return generated_text

    def generate_json(
        self,
        prompt: str,
        *,
        response_schema: Mapping[str, Any] | None = None,
        temperature: float = 0.7,
        max_output_tokens: int = 8192,
    ) -> Any:
        """Generate structured JSON response.

        Args:
            prompt: Input prompt
            response_schema: Optional OpenAPI schema the response must follow
            temperature: Sampling temperature
            max_output_tokens: Maximum output tokens

        Returns:
            Parsed JSON response
        """
        response = self.generate_content(
            prompt,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            response_format="json",
            response_schema=response_schema,
        )
        return parse_json_response(response)

    async def stream_content(
        self,
        prompt: str,
        *,
        temperature: float = 0.7,
        max_output_tokens: int = 8192,
    ) -> AsyncIterator[str]:
        """Stream generated text fragments as they arrive.

        Args:
            prompt: Input prompt
            temperature: Sampling temperature
            max_output_tokens: Maximum output tokens

        Yields:
            Non-empty text fragments
        """
        generation_config = GenerationConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )
        try:
            responses = await self.model.generate_content_async(
                prompt,
                generation_config=generation_config,
                stream=True,
            )
            async for response in responses:
                text = _chunk_text(response)
                if text:
                    yield text
        except google_exceptions.GoogleAPICallError as exc:
            raise UpstreamUnavailableError(str(exc)) from exc

        logger.info(
            "Streamed content with Vertex AI",
            extra={"model": self.model_name, "input_length": len(prompt)},
        )

    def generate_image(self, prompt: str) -> str:
        """Generate an image and return it base64 encoded.

        Args:
            prompt: Image description

        Returns:
            Base64 encoded image bytes
        """
        try:
            response = self.image_model.generate_content(
                prompt,
                generation_config=GenerationConfig(
                    response_modalities=[GenerationConfig.Modality.IMAGE],
                ),
            )
        except google_exceptions.GoogleAPICallError as exc:
            logger.error(
                "Vertex AI image request failed",
                exc_info=True,
                extra={"model": self.image_model_name},
            )
            raise UpstreamUnavailableError(f"Vertex AI request failed: {exc}") from exc

        # The image is not guaranteed to be the first part.
        for candidate in response.candidates[:1]:
            for part in candidate.content.parts:
                data = part.inline_data.data if part.inline_data else None
                if data:
                    logger.info(
                        "Generated image with Vertex AI",
                        extra={"model": self.image_model_name, "bytes": len(data)},
                    )
                    return base64.b64encode(data).decode("ascii")

        raise MalformedResponseError("Nenhuma imagem foi retornada pela API.")


def parse_json_response(response: str) -> Any:
    """Parse a JSON reply, tolerating markdown code fences."""
    try:
        response = response.strip()
        if response.startswith("```json"):
            response = response[7:]
        if response.startswith("```"):
            response = response[3:]
        if response.endswith("```"):
            response = response[:-3]

        return json.loads(response.strip())
    except json.JSONDecodeError as exc:
        logger.error(
            "Failed to parse JSON response",
            exc_info=True,
            extra={"response": response},
        )
        raise MalformedResponseError(f"Invalid JSON response: {exc}") from exc


def _chunk_text(response: Any) -> str:
    try:
        return response.text
    except ValueError:
        # Chunks that only carry finish metadata have no text part.
        return ""


__all__ = ["VertexAIAdapter", "parse_json_response"]
