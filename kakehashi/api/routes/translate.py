"""
翻訳・整形エンドポイント
"""

from fastapi import APIRouter, Depends, HTTPException

from ...core.exceptions import ExternalServiceError, TranslationError
from ...core.logging import get_logger, log_error
from ...domain.services.formatter import MessageFormatter
from ...domain.services.translation import TranslationService
from ..auth import verify_api_key
from ..dependencies import get_formatter, get_translation_service
from ..schemas import (
    FormatMessageRequest,
    FormatMessageResponse,
    TranslateRequest,
    TranslateResponse,
)

logger = get_logger("api.translate")

router = APIRouter(
    prefix="/v1",
    tags=["translate"],
    dependencies=[Depends(verify_api_key)],
)


@router.post("/translate", response_model=TranslateResponse)
async def translate(
    request: TranslateRequest,
    service: TranslationService = Depends(get_translation_service),
) -> TranslateResponse:
    """従業員⇔経営者のメッセージを翻訳"""
    try:
        result = await service.translate(request.text, request.direction, request.context)
    except TranslationError as e:
        log_error(logger, e, {"endpoint": "/v1/translate"})
        raise HTTPException(
            status_code=502,
            detail={"success": False, "error": "Translation failed"},
        )
    except ExternalServiceError as e:
        log_error(logger, e, {"endpoint": "/v1/translate"})
        raise HTTPException(
            status_code=502,
            detail={"success": False, "error": "AI service unavailable"},
        )

    return TranslateResponse(data=result)


@router.post("/format-message", response_model=FormatMessageResponse)
async def format_message(
    request: FormatMessageRequest,
    formatter: MessageFormatter = Depends(get_formatter),
) -> FormatMessageResponse:
    """従業員のメッセージを経営者向けに整形（失敗時は原文を返す）"""
    formatted = await formatter.format_for_owner(request.message)
    return FormatMessageResponse(formatted_message=formatted)
