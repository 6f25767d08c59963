"""
API 認証・レート制限

ゲートウェイ本体は認証もレート制限も行わないため、呼び出し側であるこの層が担う。
- API キー認証
- AI 呼び出しを伴うエンドポイントのレート制限
- セキュリティヘッダー・リクエストログ
"""

from __future__ import annotations

import time
import uuid
from collections import defaultdict
from collections.abc import Callable

from fastapi import HTTPException, Request, Security
from fastapi.security import APIKeyHeader
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from ..core.config import get_settings
from ..core.logging import get_logger

DEVELOPMENT_KEY = "development-mode"

# 追跡するクライアント数の上限（超えたら期限切れをパージ）
MAX_TRACKED_CLIENTS = 10000

# === API キー認証 ===

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def verify_api_key(
    api_key: str | None = Security(api_key_header),
) -> str:
    """
    API キーを検証

    API キーが設定されていない場合は認証をスキップ（開発用）。

    Returns:
        有効な API キー

    Raises:
        HTTPException: 認証失敗時（401: キーなし、403: 無効なキー）
    """
    settings = get_settings()

    if not settings.security.api_keys:
        return DEVELOPMENT_KEY

    if not api_key:
        raise HTTPException(
            status_code=401,
            detail={
                "success": False,
                "error": "unauthorized",
                "header": settings.security.api_key_header,
            },
        )

    if api_key not in settings.security.api_keys:
        raise HTTPException(
            status_code=403,
            detail={
                "success": False,
                "error": "forbidden",
            },
        )

    return api_key


# === レート制限 ===


class RateLimiter:
    """
    インメモリレート制限

    スライディングウィンドウ方式。プロセス内でのみ有効。
    """

    def __init__(self, max_requests: int = 100, window_seconds: int = 60):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._requests: dict[str, list[float]] = defaultdict(list)

    def client_id(self, request: Request, api_key: str | None = None) -> str:
        """クライアント識別子（API キー優先、次に転送元 IP、最後に接続元 IP）"""
        if api_key and api_key != DEVELOPMENT_KEY:
            return f"key:{api_key}"

        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return f"ip:{forwarded.split(',')[0].strip()}"

        if request.client:
            return f"ip:{request.client.host}"

        return "unknown"

    def _purge_expired(self, cutoff: float) -> None:
        self._requests = defaultdict(list, {
            key: kept
            for key, stamps in self._requests.items()
            if (kept := [t for t in stamps if t > cutoff])
        })

    def is_allowed(
        self, request: Request, api_key: str | None = None
    ) -> tuple[bool, dict]:
        """
        リクエストが許可されるか確認

        Returns:
            (allowed, info) - 許可されるかと、レート制限情報
        """
        now = time.time()
        cutoff = now - self.window_seconds
        client_id = self.client_id(request, api_key)

        if len(self._requests) > MAX_TRACKED_CLIENTS:
            self._purge_expired(cutoff)

        recent = [t for t in self._requests[client_id] if t > cutoff]
        self._requests[client_id] = recent

        info = {
            "limit": self.max_requests,
            "remaining": max(0, self.max_requests - len(recent)),
            "reset": int(now + self.window_seconds),
            "window": self.window_seconds,
        }

        if len(recent) >= self.max_requests:
            return False, info

        recent.append(now)
        info["remaining"] -= 1
        return True, info


_rate_limiter: RateLimiter | None = None


def get_rate_limiter() -> RateLimiter:
    """レートリミッターを取得"""
    global _rate_limiter
    if _rate_limiter is None:
        settings = get_settings()
        _rate_limiter = RateLimiter(
            max_requests=settings.security.rate_limit_requests,
            window_seconds=settings.security.rate_limit_window,
        )
    return _rate_limiter


def reset_rate_limiter() -> None:
    """レートリミッターをリセット（テスト用）"""
    global _rate_limiter
    _rate_limiter = None


def _rate_limit_headers(info: dict) -> dict[str, str]:
    return {
        "X-RateLimit-Limit": str(info["limit"]),
        "X-RateLimit-Remaining": str(info["remaining"]),
        "X-RateLimit-Reset": str(info["reset"]),
    }


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    レート制限ミドルウェア

    AI 呼び出しを伴う /v1/ 配下のエンドポイントのみ対象。
    制限を超えた場合は 429 Too Many Requests を返す。
    """

    LIMITED_PREFIX = "/v1/"
    EXEMPT_PATHS = {"/v1/health"}

    async def dispatch(self, request: Request, call_next: Callable):
        settings = get_settings()
        path = request.url.path

        if (
            not settings.security.rate_limit_enabled
            or not path.startswith(self.LIMITED_PREFIX)
            or path in self.EXEMPT_PATHS
        ):
            return await call_next(request)

        api_key = request.headers.get(settings.security.api_key_header)
        allowed, info = get_rate_limiter().is_allowed(request, api_key)

        if not allowed:
            return JSONResponse(
                status_code=429,
                content={
                    "success": False,
                    "error": "too_many_requests",
                    "retry_after": info["window"],
                },
                headers={**_rate_limit_headers(info), "Retry-After": str(info["window"])},
            )

        response = await call_next(request)
        response.headers.update(_rate_limit_headers(info))
        return response


# === レスポンスヘッダー ===

_BASE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

_API_CSP = "default-src 'self'"

# /docs と /redoc は jsdelivr の Swagger UI / ReDoc 資産を読み込む
_DOCS_CSP = "; ".join([
    "default-src 'self'",
    "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net",
    "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net",
    "img-src 'self' data: https://cdn.jsdelivr.net https://fastapi.tiangolo.com",
])


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """ブラウザ向けの防御ヘッダーを付与"""

    DOCS_PATHS = frozenset({"/docs", "/redoc", "/openapi.json"})

    async def dispatch(self, request: Request, call_next: Callable):
        response = await call_next(request)
        response.headers.update(_BASE_HEADERS)
        response.headers["Content-Security-Policy"] = (
            _DOCS_CSP if request.url.path in self.DOCS_PATHS else _API_CSP
        )
        return response


# === リクエストログ ===


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    処理時間とステータスを記録する

    従業員のメッセージ本文・IPアドレスは記録しない。
    X-Request-ID がなければ採番してレスポンスに返す。
    """

    QUIET_PATHS = frozenset({"/v1/health", "/docs", "/openapi.json", "/redoc"})

    async def dispatch(self, request: Request, call_next: Callable):
        path = request.url.path
        if path in self.QUIET_PATHS:
            return await call_next(request)

        logger = get_logger("api.request")
        request_id = request.headers.get("X-Request-ID") or f"req_{uuid.uuid4().hex[:12]}"
        started = time.perf_counter()

        def elapsed_ms() -> float:
            return round((time.perf_counter() - started) * 1000, 2)

        fields = {"request_id": request_id, "method": request.method, "path": path}

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error while serving request",
                extra={**fields, "event_type": "request_error", "duration_ms": elapsed_ms()},
            )
            raise

        logger.info(
            f"{request.method} {path} -> {response.status_code}",
            extra={
                **fields,
                "event_type": "request_complete",
                "status_code": response.status_code,
                "duration_ms": elapsed_ms(),
            },
        )
        response.headers["X-Request-ID"] = request_id
        return response
