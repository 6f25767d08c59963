"""
API Routes
エンドポイント定義
"""

from .analyze import router as analyze_router
from .translate import router as translate_router

__all__ = [
    "analyze_router",
    "translate_router",
]
