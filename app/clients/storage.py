"""
Receipt image storage on local disk, served under a public URL prefix.
"""
from __future__ import annotations

import logging
import os
import re
import time
from typing import Optional

logger = logging.getLogger(__name__)

_EXT = re.compile(r"^[A-Za-z0-9]{1,8}$")


class ReceiptImageStore:
    def __init__(self, root_dir: str, public_base_url: str, url_prefix: str = "/files/receipts"):
        self.root_dir = root_dir
        self.public_base_url = public_base_url.rstrip("/")
        self.url_prefix = url_prefix

    @staticmethod
    def object_key(user_id: str, filename: Optional[str], timestamp_ms: Optional[int] = None) -> str:
        """``{user_id}/{timestamp}.{extension}``"""
        ext = "jpg"
        if filename and "." in filename:
            candidate = filename.rsplit(".", 1)[1]
            if _EXT.match(candidate):
                ext = candidate.lower()
        ts = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
        return f"{user_id}/{ts}.{ext}"

    def save(self, user_id: str, filename: Optional[str], content: bytes) -> str:
        """Write the image and return its public URL."""
        key = self.object_key(user_id, filename)
        path = os.path.join(self.root_dir, *key.split("/"))
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as fh:
            fh.write(content)
        logger.info("Stored receipt image %s (%d bytes)", key, len(content))
        return f"{self.public_base_url}{self.url_prefix}/{key}"
