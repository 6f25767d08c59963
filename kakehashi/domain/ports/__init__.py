"""
Domain Ports
依存性逆転のためのインターフェース定義
"""

from .ai_port import IAIProvider

__all__ = [
    "IAIProvider",
]
