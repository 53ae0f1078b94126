"""
Clients for the services this API talks to: OCR, text generation, image storage.

Each is constructed once at startup (see ``app.main``) and injected through
``app.deps``.
"""
from app.clients.narrator import NarrativeError, Narrator
from app.clients.ocr import OCRClient, OCRError, OCRUpstreamError
from app.clients.storage import ReceiptImageStore

__all__ = [
    "NarrativeError",
    "Narrator",
    "OCRClient",
    "OCRError",
    "OCRUpstreamError",
    "ReceiptImageStore",
]
