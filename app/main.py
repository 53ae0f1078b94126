"""
가계부 Backend — FastAPI application entry-point.
"""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app import models  # noqa: F401  (registers tables on Base.metadata)
from app.clients import Narrator, OCRClient, ReceiptImageStore
from app.config import settings
from app.database import Base, engine

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(name)-30s  %(levelname)-5s  %(message)s",
)
logger = logging.getLogger(__name__)

RECEIPT_URL_PREFIX = "/files/receipts"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: ensure data dirs + tables exist
    os.makedirs(settings.DATA_DIR, exist_ok=True)
    os.makedirs(settings.RECEIPTS_DIR, exist_ok=True)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready (%s)", settings.DATABASE_URL)

    # External clients live for the whole process
    app.state.ocr_client = OCRClient(
        settings.OCR_API_URL, settings.OCR_SECRET_KEY, timeout=settings.OCR_TIMEOUT_SECONDS
    )
    app.state.narrator = Narrator.from_settings(settings)
    app.state.image_store = ReceiptImageStore(
        settings.RECEIPTS_DIR, settings.PUBLIC_BASE_URL, url_prefix=RECEIPT_URL_PREFIX
    )
    if not settings.OCR_API_URL:
        logger.warning("OCR_API_URL is not set; receipt scanning will fail")
    if not settings.LLM_API_KEY:
        logger.warning("LLM_API_KEY is not set; narrative analysis is disabled")

    yield

    app.state.ocr_client.close()
    app.state.narrator.close()
    logger.info("Shutting down")


app = FastAPI(
    title="가계부 API",
    description="Receipt OCR → candidate transaction → ledger → weekly/monthly analytics",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount(
    RECEIPT_URL_PREFIX,
    StaticFiles(directory=settings.RECEIPTS_DIR, check_dir=False),
    name="receipts",
)


@app.get("/")
async def root():
    return {"service": "가계부 API", "version": "0.1.0", "status": "running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


# ── Register API routers ─────────────────────────────────────────────────
from app.routers.receipts import router as receipts_router  # noqa: E402
from app.routers.transactions import router as transactions_router  # noqa: E402
from app.routers.categories import router as categories_router  # noqa: E402
from app.routers.budgets import router as budgets_router  # noqa: E402
from app.routers.analytics import router as analytics_router  # noqa: E402

app.include_router(receipts_router, prefix="/api", tags=["Receipts"])
app.include_router(transactions_router, prefix="/api", tags=["Transactions"])
app.include_router(categories_router, prefix="/api", tags=["Categories"])
app.include_router(budgets_router, prefix="/api", tags=["Budgets"])
app.include_router(analytics_router, prefix="/api", tags=["Analytics"])
