"""
영수증 API

POST /api/ocr              — OCR 프록시 (업스트림 응답 그대로 전달)
POST /api/receipts/parse   — OCR 텍스트 → 거래 초안
POST /api/receipts/scan    — 이미지 → OCR → 거래 초안 + 이미지 저장
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse

from app.clients import OCRClient, OCRError, OCRUpstreamError, ReceiptImageStore
from app.clients.ocr import extract_text
from app.config import settings
from app.deps import get_current_user_id, get_image_store, get_ocr_client, get_today
from app.pipeline import parse_receipt
from app.pipeline.items import ITEM_STRATEGIES
from app.schemas import CandidateTransaction, ParseRequest, ScanResponse

logger = logging.getLogger(__name__)
router = APIRouter()


def _resolve_strategy(strategy: Optional[str]) -> str:
    name = strategy or settings.PARSER_ITEM_STRATEGY
    if name not in ITEM_STRATEGIES:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown strategy '{name}' (use one of: {', '.join(ITEM_STRATEGIES)})",
        )
    return name


def _read_image(file: Optional[UploadFile]) -> bytes:
    if file is None:
        raise HTTPException(status_code=400, detail="파일이 없습니다")
    content = file.file.read()
    if not content:
        raise HTTPException(status_code=400, detail="파일이 없습니다")
    return content


# ── POST /api/ocr ────────────────────────────────────────────────────────
@router.post("/ocr")
def ocr_proxy(
    file: Optional[UploadFile] = File(default=None),
    user_id: str = Depends(get_current_user_id),
    ocr: OCRClient = Depends(get_ocr_client),
):
    content = _read_image(file)
    try:
        return ocr.recognize(file.filename, content, file.content_type)
    except OCRUpstreamError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"error": "OCR API 호출 실패", "details": e.body},
        )
    except OCRError as e:
        logger.error("OCR API Error: %s", e)
        raise HTTPException(status_code=500, detail="서버 오류가 발생했습니다")


# ── POST /api/receipts/parse ─────────────────────────────────────────────
@router.post("/receipts/parse", response_model=CandidateTransaction)
def parse(
    req: ParseRequest,
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
):
    strategy = _resolve_strategy(req.strategy)
    logger.info("Parse: user=%s  len=%d", user_id, len(req.raw_text))
    return parse_receipt(req.raw_text, strategy=strategy, today=today)


# ── POST /api/receipts/scan ──────────────────────────────────────────────
@router.post("/receipts/scan", response_model=ScanResponse)
def scan(
    file: Optional[UploadFile] = File(default=None),
    strategy: Optional[str] = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    ocr: OCRClient = Depends(get_ocr_client),
    store: ReceiptImageStore = Depends(get_image_store),
):
    strategy = _resolve_strategy(strategy)
    content = _read_image(file)

    try:
        result = ocr.recognize(file.filename, content, file.content_type)
    except OCRUpstreamError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"error": "OCR API 호출 실패", "details": e.body},
        )
    except OCRError as e:
        logger.error("OCR Error: %s", e)
        raise HTTPException(status_code=500, detail="영수증 처리 중 오류가 발생했습니다.")

    raw_text = extract_text(result)
    candidate = parse_receipt(raw_text, strategy=strategy, today=today)

    try:
        receipt_url = store.save(user_id, file.filename, content)
    except OSError as e:
        logger.error("Receipt image upload failed: %s", e)
        raise HTTPException(status_code=500, detail="영수증 처리 중 오류가 발생했습니다.")

    logger.info("Scanned receipt for %s: %d items", user_id, len(candidate.items))
    return ScanResponse(raw_text=raw_text, candidate=candidate, receipt_url=receipt_url)
