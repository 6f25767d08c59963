"""
Kakehashi API - メインアプリケーション
コーチングゲートウェイ・翻訳・整形を HTTP で公開する
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .. import __version__
from ..core.config import KakehashiSettings, get_settings
from ..core.exceptions import ConfigurationError
from ..core.logging import KakehashiLogger, get_logger
from .auth import RateLimitMiddleware, RequestLoggingMiddleware, SecurityHeadersMiddleware
from .dependencies import get_ai_provider
from .routes import analyze_router, translate_router
from .schemas import APIInfoResponse, HealthResponse

KakehashiLogger.configure(get_settings().log_level, force=True)
logger = get_logger("api.main")

API_VERSION = __version__

FEATURES = [
    "緊急メッセージのバイパス",
    "規制トピックのブロックと相談窓口案内",
    "感情・リスク分析",
    "NVCに基づく言い換え提案",
    "従業員⇔経営者の翻訳",
    "日付を補正したメッセージ整形",
]


class APIVersionMiddleware(BaseHTTPMiddleware):
    """X-API-Version ヘッダーを付与"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-API-Version"] = API_VERSION
        return response


def _log_startup(settings: KakehashiSettings) -> None:
    logger.info(
        f"Kakehashi API v{API_VERSION} starting",
        extra={
            "event_type": "startup",
            "debug": settings.debug,
            "classifier_model": settings.ai.classifier_model,
            "rewriter_model": settings.ai.rewriter_model,
            "translation_model": settings.ai.translation_model,
            "min_message_length": settings.gateway.min_message_length,
            "rate_limit_enabled": settings.security.rate_limit_enabled,
            "api_key_count": len(settings.security.api_keys),
        },
    )
    if not settings.security.api_keys:
        logger.warning("KAKEHASHI_API_KEYS is empty - authentication disabled")
    if not settings.ai.is_configured:
        logger.warning("OPENAI_API_KEY is not set - AI analysis and translation will return 503")


@asynccontextmanager
async def lifespan(app: FastAPI):
    _log_startup(get_settings())
    yield
    logger.info("Kakehashi API shutting down", extra={"event_type": "shutdown"})


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    """設定不備は 503 として返す"""
    logger.error(f"Configuration error: {exc.message}", extra={"event_type": "configuration_error"})
    return JSONResponse(
        status_code=503,
        content={"success": False, "error": "Service not configured"},
    )


def create_app() -> FastAPI:
    """ミドルウェア・ルーター・例外ハンドラーを組み立てたアプリを返す"""
    application = FastAPI(
        title="Kakehashi API",
        description=(
            "職場コミュニケーション仲介AI\n\n"
            "従業員から経営者へのメッセージを、送信前に\n"
            "緊急度検出 → 規制トピックフィルタ → 感情・リスク分析 → 言い換え提案\n"
            "の順に処理する。"
        ),
        version=API_VERSION,
        lifespan=lifespan,
    )

    # 後から追加したものが外側になる
    for middleware in (
        SecurityHeadersMiddleware,
        RateLimitMiddleware,
        RequestLoggingMiddleware,
        APIVersionMiddleware,
    ):
        application.add_middleware(middleware)

    application.add_exception_handler(ConfigurationError, configuration_error_handler)

    application.include_router(analyze_router)
    application.include_router(translate_router)

    @application.get("/", response_model=APIInfoResponse)
    async def root() -> APIInfoResponse:
        return APIInfoResponse(
            service="Kakehashi - 職場コミュニケーション仲介API",
            version=API_VERSION,
            description="従業員から経営者へのメッセージを分類・フィルタ・言い換えするゲートウェイ",
            features=FEATURES,
        )

    @application.get("/v1/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """AI プロバイダーに疎通できなければ degraded"""
        components = {"ai_provider": await get_ai_provider().health_check()}
        return HealthResponse(
            status="healthy" if all(components.values()) else "degraded",
            timestamp=datetime.now(timezone.utc),
            version=API_VERSION,
            components=components,
        )

    return application


app = create_app()
