import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from pydantic import BaseModel

from config import messages
from services.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


class Prediction(BaseModel):
    label: str = ""
    confidence: float = 0.0

    @classmethod
    def from_payload(cls, payload: dict) -> "Prediction":
        """Read `predicted_class` / `confidence` from the classifier's JSON body."""
        label = payload.get("predicted_class") or ""
        confidence = payload.get("confidence")
        try:
            confidence = float(confidence) if confidence is not None else 0.0
        except (TypeError, ValueError):
            logger.warning("Non-numeric confidence from ML API: %r", confidence)
            confidence = 0.0
        return cls(label=str(label).strip(), confidence=confidence)


class Classifier(ABC):
    """Maps an image to a predicted drug label. Raises UpstreamUnavailable on failure."""

    @abstractmethod
    async def predict(self, image_bytes: bytes, filename: str, content_type: Optional[str] = None) -> Prediction:
        ...


class HttpClassifier(Classifier):
    """Calls the ML API over HTTP with Basic auth, posting the image as multipart field `file`."""

    def __init__(self, url: str, username: str, password: str, timeout: float = 30.0, transport=None):
        self.url = url
        self.auth = httpx.BasicAuth(username, password)
        self.timeout = timeout
        self.transport = transport

    async def predict(self, image_bytes: bytes, filename: str, content_type: Optional[str] = None) -> Prediction:
        files = {"file": (filename, image_bytes, content_type or "application/octet-stream")}
        logger.info("Calling ML API at %s for image: %s", self.url, filename)

        try:
            async with httpx.AsyncClient(auth=self.auth, timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, files=files)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error("ML API timed out: %s", e)
            raise UpstreamUnavailable(messages.ML_API_TIMEOUT, error=str(e)) from e
        except httpx.HTTPStatusError as e:
            logger.error("ML API returned %s: %s", e.response.status_code, e.response.text)
            raise UpstreamUnavailable(status_message(e.response), error=str(e)) from e
        except httpx.HTTPError as e:
            logger.error("Error calling ML API: %s", e)
            raise UpstreamUnavailable(messages.ML_API_UNREACHABLE, error=str(e)) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamUnavailable(messages.ML_API_BAD_RESPONSE, error=str(e)) from e
        if not isinstance(payload, dict):
            raise UpstreamUnavailable(messages.ML_API_BAD_RESPONSE, error=f"Unexpected payload: {payload!r}")

        logger.info("ML API Response: %s", payload)
        return Prediction.from_payload(payload)


def status_message(response: httpx.Response) -> str:
    # Prefer the classifier's own error message when it sends one
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return messages.ML_API_MESSAGE.format(message=body["message"])
    return messages.ML_API_STATUS.format(status=response.status_code)
