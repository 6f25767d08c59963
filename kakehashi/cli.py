#!/usr/bin/env python3
"""
Kakehashi CLI - コーチングゲートウェイの操作ツール
Typer + Rich による分析・翻訳・サーバー起動
"""

import asyncio
import json
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from kakehashi import __version__
from kakehashi.api.dependencies import get_formatter, get_gateway, get_translation_service
from kakehashi.core.config import get_settings
from kakehashi.core.exceptions import KakehashiException
from kakehashi.core.logging import KakehashiLogger
from kakehashi.domain.models import CoachingOptions, CoachingResult, RiskLevel, TranslationDirection

app = typer.Typer(
    name="kakehashi",
    help="Kakehashi - 職場コミュニケーション仲介AI CLI",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

_RISK_STYLES = {
    RiskLevel.LOW: "green",
    RiskLevel.MEDIUM: "yellow",
    RiskLevel.HIGH: "dark_orange",
    RiskLevel.CRITICAL: "bold red",
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="段階ごとのログを表示"),
):
    """
    ログは stderr に rich 形式で出す（既定は警告以上）
    """
    KakehashiLogger.configure("DEBUG" if verbose else "WARNING", console=True, force=True)


def _fail(error: KakehashiException) -> NoReturn:
    console.print(Panel(
        f"[red]❌ {error.message}[/red]\n"
        f"コード: {error.error_code}",
        title="エラー",
        border_style="red",
    ))
    raise typer.Exit(1)


def render_result(result: CoachingResult) -> None:
    """コーチング結果を表示"""
    style = _RISK_STYLES[result.risk.risk_level]
    console.print(Panel(
        f"{result.summary}\n\n"
        f"[bold]リスク:[/bold] [{style}]{result.risk.risk_level.value}[/{style}]"
        f" (攻撃性 {result.risk.aggression_score}/100,"
        f" 心理的安全性 {result.risk.psych_safety_impact:+})\n"
        f"[bold]感情:[/bold] {', '.join(e.value for e in result.emotion.emotions)}"
        f" (valence {result.emotion.valence}, arousal {result.emotion.arousal})\n"
        f"[bold]人間の判断:[/bold] {'必要' if result.requires_human_decision else '不要'}",
        title="分析結果",
        border_style=style,
    ))

    if result.risk.concerns:
        console.print("[bold]懸念点:[/bold]")
        for concern in result.risk.concerns:
            console.print(f"  • {concern}")

    if result.suggestions:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("スタイル", style="cyan")
        table.add_column("言い換え案", style="white")
        table.add_column("理由", style="dim")
        for suggestion in result.suggestions:
            table.add_row(suggestion.style.value, suggestion.transformed_text, suggestion.rationale)
        console.print(table)


@app.command()
def analyze(
    message: str = typer.Argument(..., help="分析するメッセージ"),
    force: bool = typer.Option(False, "--force", help="低リスクでも言い換えを生成"),
    min_length: Optional[int] = typer.Option(None, "--min-length", help="AI分析をスキップする最小文字数"),
    as_json: bool = typer.Option(False, "--json", help="JSONで出力"),
):
    """
    メッセージをコーチングゲートウェイで分析します
    """
    try:
        gateway = get_gateway()
        options = CoachingOptions(
            min_message_length=(
                min_length if min_length is not None else gateway.default_options.min_message_length
            ),
            force_analysis=force or gateway.default_options.force_analysis,
        )
        result = asyncio.run(gateway.process_message(message, options))
    except KakehashiException as e:
        _fail(e)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        render_result(result)


@app.command()
def translate(
    text: str = typer.Argument(..., help="翻訳する原文"),
    direction: TranslationDirection = typer.Option(
        TranslationDirection.EMPLOYEE_TO_OWNER, "--direction", "-d", help="翻訳方向"
    ),
    context: Optional[str] = typer.Option(None, "--context", "-c", help="背景情報"),
):
    """
    従業員⇔経営者のメッセージを翻訳します
    """
    try:
        result = asyncio.run(get_translation_service().translate(text, direction, context))
    except KakehashiException as e:
        _fail(e)

    body = f"{result.translated_text}\n\n[bold]要点:[/bold] {result.summary}"
    if result.clarification_needed and result.clarification_question:
        body += f"\n[yellow]確認事項:[/yellow] {result.clarification_question}"
    console.print(Panel(body, title=f"翻訳 ({direction.value})", border_style="blue"))


@app.command(name="format")
def format_message(
    message: str = typer.Argument(..., help="整形するメッセージ"),
):
    """
    従業員のメッセージを経営者向けに整形します（日付を補正）
    """
    try:
        formatted = asyncio.run(get_formatter().format_for_owner(message))
    except KakehashiException as e:
        _fail(e)

    console.print(Panel(formatted, title="整形結果", border_style="blue"))


@app.command()
def server(
    host: Optional[str] = typer.Option(None, help="サーバーのホストアドレス"),
    port: Optional[int] = typer.Option(None, help="サーバーのポート番号"),
    reload: bool = typer.Option(False, help="開発モードでの自動リロード"),
):
    """
    FastAPI サーバーを起動します
    """
    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(Panel(
        f"[bold blue]Kakehashi API Server[/bold blue]\n"
        f"🚀 起動中: http://{host}:{port}\n"
        f"📚 ドキュメント: http://{host}:{port}/docs",
        title="サーバー起動"
    ))

    import uvicorn

    uvicorn.run(
        "kakehashi.api.main:app",
        host=host,
        port=port,
        reload=reload,
        access_log=True,
    )


@app.command()
def version():
    """
    バージョン情報を表示
    """
    console.print(Panel(
        f"[bold blue]Kakehashi[/bold blue] v{__version__}\n"
        f"🔧 Built with [bold]Typer[/bold]\n"
        f"🚀 Powered by [bold]FastAPI[/bold]",
        title="バージョン情報"
    ))


if __name__ == "__main__":
    app()
