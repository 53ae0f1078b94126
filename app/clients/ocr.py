"""
CLOVA-OCR-compatible client.

The upstream takes a multipart upload: the image as ``file`` and a JSON
``message`` part describing it, authenticated by ``X-OCR-SECRET``.
"""
from __future__ import annotations

import json
import logging
import time
import uuid
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class OCRError(Exception):
    """The OCR call could not be made or its response could not be read."""


class OCRUpstreamError(OCRError):
    """The OCR endpoint answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"OCR upstream returned {status_code}")
        self.status_code = status_code
        self.body = body


def image_format(content_type: Optional[str], filename: Optional[str] = None) -> str:
    """``image/png`` → ``png``; falls back to the file extension, then ``jpg``."""
    if content_type and "/" in content_type:
        subtype = content_type.split("/", 1)[1].strip().lower()
        if subtype:
            return subtype
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[1].strip().lower()
        if ext:
            return ext
    return "jpg"


def build_message(
    fmt: str, request_id: Optional[str] = None, timestamp_ms: Optional[int] = None
) -> dict:
    return {
        "version": "V2",
        "requestId": request_id or f"receipt-{uuid.uuid4()}",
        "timestamp": timestamp_ms if timestamp_ms is not None else int(time.time() * 1000),
        "images": [{"format": fmt, "name": "receipt"}],
    }


def extract_lines(result: dict) -> list[str]:
    """Recognized fragments of the first image, in OCR order."""
    images = result.get("images") or []
    if not images:
        return []
    fields = images[0].get("fields") or []
    return [f.get("inferText", "") for f in fields if f.get("inferText")]


def extract_text(result: dict) -> str:
    return "\n".join(extract_lines(result))


class OCRClient:
    def __init__(
        self,
        url: str,
        secret: str,
        timeout: float = 30.0,
        http: Optional[httpx.Client] = None,
    ):
        self.url = url
        self.secret = secret
        self._http = http or httpx.Client(timeout=timeout)

    def recognize(
        self, filename: str, content: bytes, content_type: Optional[str] = None
    ) -> dict:
        """Send one image and return the upstream JSON as-is."""
        if not self.url:
            raise OCRError("OCR_API_URL is not configured")

        message = build_message(image_format(content_type, filename))
        logger.info("OCR request %s (%d bytes)", message["requestId"], len(content))
        try:
            resp = self._http.post(
                self.url,
                headers={"X-OCR-SECRET": self.secret},
                data={"message": json.dumps(message)},
                files={"file": (filename or "receipt", content, content_type or "image/jpeg")},
            )
        except httpx.HTTPError as e:
            raise OCRError(f"OCR request failed: {e}") from e

        if not resp.is_success:
            logger.error("OCR upstream error %d: %s", resp.status_code, resp.text[:500])
            raise OCRUpstreamError(resp.status_code, resp.text)

        try:
            return resp.json()
        except ValueError as e:
            raise OCRError("OCR response is not JSON") from e

    def close(self) -> None:
        self._http.close()
