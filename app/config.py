"""
애플리케이션 설정
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # 데이터베이스
    DATABASE_URL: str = "sqlite:///./data/ledger.db"

    # 환경
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # 파일 저장
    DATA_DIR: str = "./data"
    RECEIPTS_DIR: str = "./data/receipts"
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    # OCR (CLOVA OCR 호환 엔드포인트)
    OCR_API_URL: str = ""
    OCR_SECRET_KEY: str = ""
    OCR_TIMEOUT_SECONDS: float = 30.0

    # LLM (선택)
    LLM_PROVIDER: str = "openai"
    LLM_API_KEY: str = ""
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_MAX_TOKENS: int = 2048

    # 영수증 파서: lookahead | lookback
    PARSER_ITEM_STRATEGY: str = "lookahead"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
