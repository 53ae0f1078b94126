"""
Unit tests for the outbound clients — OCR over httpx, narrative prompt, image storage.
"""
from types import SimpleNamespace

import httpx
import pytest
from openai import OpenAIError

from app.clients import NarrativeError, Narrator, OCRClient, OCRError, OCRUpstreamError, ReceiptImageStore
from app.clients.narrator import build_prompt
from app.clients.ocr import build_message, extract_lines, extract_text, image_format
from app.schemas import NarrativeRequest, NarrativeStat

OCR_RESULT = {
    "version": "V2",
    "images": [
        {
            "name": "receipt",
            "inferResult": "SUCCESS",
            "fields": [
                {"inferText": "이마트 성수점"},
                {"inferText": ""},
                {"inferText": "합계 5,200"},
            ],
        }
    ],
}


def _ocr(handler, url="https://ocr.example.com/general"):
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return OCRClient(url, "s3cret", http=http)


# =====================================================================
# OCR
# =====================================================================
class TestOCRHelpers:
    @pytest.mark.parametrize(
        "content_type, filename, expected",
        [
            ("image/png", "a.jpg", "png"),
            (None, "scan.JPEG", "jpeg"),
            ("", "noext", "jpg"),
            (None, None, "jpg"),
        ],
    )
    def test_image_format(self, content_type, filename, expected):
        assert image_format(content_type, filename) == expected

    def test_build_message(self):
        msg = build_message("png", request_id="receipt-1", timestamp_ms=42)
        assert msg == {
            "version": "V2",
            "requestId": "receipt-1",
            "timestamp": 42,
            "images": [{"format": "png", "name": "receipt"}],
        }

    def test_generated_request_id(self):
        assert build_message("jpg")["requestId"].startswith("receipt-")

    def test_extract_text_skips_empty_fragments(self):
        assert extract_lines(OCR_RESULT) == ["이마트 성수점", "합계 5,200"]
        assert extract_text(OCR_RESULT) == "이마트 성수점\n합계 5,200"

    def test_extract_text_without_images(self):
        assert extract_text({}) == ""
        assert extract_text({"images": [{}]}) == ""


class TestOCRClient:
    def test_posts_multipart_with_secret(self):
        seen = {}

        def handler(request):
            seen["secret"] = request.headers.get("X-OCR-SECRET")
            seen["body"] = request.read().decode("utf-8", errors="replace")
            return httpx.Response(200, json=OCR_RESULT)

        result = _ocr(handler).recognize("r.png", b"\x89PNG", "image/png")
        assert result == OCR_RESULT
        assert seen["secret"] == "s3cret"
        assert 'name="message"' in seen["body"]
        assert 'name="file"' in seen["body"]
        assert '"version": "V2"' in seen["body"]
        assert '"format": "png"' in seen["body"]

    def test_upstream_status_is_kept(self):
        def handler(request):
            return httpx.Response(401, text="invalid secret")

        with pytest.raises(OCRUpstreamError) as exc:
            _ocr(handler).recognize("r.jpg", b"x", "image/jpeg")
        assert exc.value.status_code == 401
        assert exc.value.body == "invalid secret"

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(OCRError):
            _ocr(handler).recognize("r.jpg", b"x")

    def test_non_json_response(self):
        def handler(request):
            return httpx.Response(200, text="<html>")

        with pytest.raises(OCRError):
            _ocr(handler).recognize("r.jpg", b"x")

    def test_unconfigured_url(self):
        def handler(request):
            raise AssertionError("must not be called")

        with pytest.raises(OCRError):
            _ocr(handler, url="").recognize("r.jpg", b"x")


# =====================================================================
# Narrative
# =====================================================================
def _request(view_mode="monthly"):
    return NarrativeRequest(
        period="2025년 3월",
        stats=[
            NarrativeStat(category_name="식비", total_amount=320000, item_count=14, percentage=64.0),
            NarrativeStat(category_name="교통", total_amount=180000, item_count=20, percentage=36.0),
        ],
        total_amount=500000,
        view_mode=view_mode,
    )


def _fake_openai(create):
    return SimpleNamespace(
        chat=SimpleNamespace(completions=SimpleNamespace(create=create)),
        close=lambda: None,
    )


class TestNarrator:
    def test_prompt_contents(self):
        prompt = build_prompt(_request())
        assert "월간 지출 데이터" in prompt
        assert "**총 지출**: 500,000원" in prompt
        assert "- 식비: 320,000원 (64.0%, 14건)" in prompt
        assert "다음 달에" in prompt

    def test_weekly_prompt(self):
        prompt = build_prompt(_request("weekly"))
        assert "주간 지출 데이터" in prompt
        assert "다음 주에" in prompt

    def test_analyze(self):
        calls = []

        def create(**kwargs):
            calls.append(kwargs)
            message = SimpleNamespace(content="## 요약")
            return SimpleNamespace(choices=[SimpleNamespace(message=message)])

        narrator = Narrator(_fake_openai(create), "gpt-4o-mini", max_tokens=512)
        assert narrator.analyze(_request()) == "## 요약"
        assert calls[0]["model"] == "gpt-4o-mini"
        assert calls[0]["max_tokens"] == 512
        assert calls[0]["messages"][0]["role"] == "user"

    def test_upstream_failure(self):
        def create(**kwargs):
            raise OpenAIError("rate limited")

        with pytest.raises(NarrativeError):
            Narrator(_fake_openai(create), "m").analyze(_request())

    def test_without_api_key(self):
        settings = SimpleNamespace(LLM_API_KEY="", LLM_MODEL="m", LLM_MAX_TOKENS=100)
        narrator = Narrator.from_settings(settings)
        assert narrator.client is None
        with pytest.raises(NarrativeError):
            narrator.analyze(_request())


# =====================================================================
# Image storage
# =====================================================================
class TestReceiptImageStore:
    @pytest.mark.parametrize(
        "filename, expected",
        [
            ("receipt.PNG", "user-1/1700000000000.png"),
            ("receipt", "user-1/1700000000000.jpg"),
            ("a.b/../../etc", "user-1/1700000000000.jpg"),
            (None, "user-1/1700000000000.jpg"),
        ],
    )
    def test_object_key(self, filename, expected):
        assert ReceiptImageStore.object_key("user-1", filename, timestamp_ms=1700000000000) == expected

    def test_save_writes_file_and_returns_url(self, tmp_path):
        store = ReceiptImageStore(str(tmp_path), "http://cdn.example.com/")
        url = store.save("user-1", "r.jpg", b"image-bytes")
        assert url.startswith("http://cdn.example.com/files/receipts/user-1/")
        key = url.split("/files/receipts/", 1)[1]
        assert (tmp_path / key).read_bytes() == b"image-bytes"
