"""
Request-scoped dependencies: caller identity, injected clients, today's date.
"""
from __future__ import annotations

import re
from datetime import date

from fastapi import Header, HTTPException, Request

from app.clients import Narrator, OCRClient, ReceiptImageStore

# Identity is asserted by the upstream gateway; ids double as storage path segments.
_USER_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def get_current_user_id(x_user_id: str = Header(default="")) -> str:
    user_id = x_user_id.strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="로그인이 필요합니다.")
    if not _USER_ID.match(user_id):
        raise HTTPException(status_code=400, detail="잘못된 사용자 ID입니다.")
    return user_id


def get_today() -> date:
    return date.today()


def get_ocr_client(request: Request) -> OCRClient:
    return request.app.state.ocr_client


def get_narrator(request: Request) -> Narrator:
    return request.app.state.narrator


def get_image_store(request: Request) -> ReceiptImageStore:
    return request.app.state.image_store
