"""
コーチング分析エンドポイント
"""

from fastapi import APIRouter, Depends, HTTPException

from ...core.exceptions import ConfigurationError
from ...core.logging import get_logger, log_error
from ...domain.models import CoachingOptions
from ...domain.services.gateway import CoachingGateway
from ..auth import verify_api_key
from ..dependencies import get_gateway
from ..schemas import AnalyzeRequest, AnalyzeResponse

logger = get_logger("api.analyze")

router = APIRouter(
    prefix="/v1/analyze",
    tags=["analyze"],
    dependencies=[Depends(verify_api_key)],
)


def _merge_options(request: AnalyzeRequest, defaults: CoachingOptions) -> CoachingOptions:
    """リクエストで指定された項目だけ既定値を上書き"""
    if request.options is None:
        return defaults
    return CoachingOptions(
        min_message_length=(
            request.options.min_message_length
            if request.options.min_message_length is not None
            else defaults.min_message_length
        ),
        force_analysis=(
            request.options.force_analysis
            if request.options.force_analysis is not None
            else defaults.force_analysis
        ),
    )


@router.post("", response_model=AnalyzeResponse)
async def analyze(
    request: AnalyzeRequest,
    gateway: CoachingGateway = Depends(get_gateway),
) -> AnalyzeResponse:
    """
    メッセージを分析し、コーチング結果を返す

    requires_human_decision の扱いは呼び出し側が決める。
    APIキー未設定で完全分析に進んだ場合は 503（例外ハンドラー）。
    """
    options = _merge_options(request, gateway.default_options)
    try:
        result = await gateway.process_message(request.message, options)
    except ConfigurationError:
        raise
    except Exception as e:
        log_error(logger, e, {"endpoint": "/v1/analyze"})
        raise HTTPException(
            status_code=500,
            detail={"success": False, "error": "Internal server error"},
        )

    return AnalyzeResponse(data=result)
