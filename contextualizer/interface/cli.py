# contextualizer/interface/cli.py
# Keywords, file names and history terms are user text: always escape() them

from typing import List
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.prompt import Prompt
from rich import box
from rich.markup import escape
from rich.text import Text

from contextualizer.domain.models import AnalysisResult, Document


console = Console()

EXPORT_CHOICES = ["csv", "text", "n"]


def display_welcome_banner() -> None:
    console.print(Panel.fit(
        "[bold cyan]📖 IELTS Contextualizer[/bold cyan]\n"
        "[dim]Master vocabulary in context — powered by Gemini[/dim]",
        box=box.DOUBLE,
        border_style="cyan",
    ))


def display_documents(documents: List[Document]) -> None:
    table = Table(title="Library", box=box.SIMPLE_HEAVY)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Document", style="bold white")
    table.add_column("Type")
    table.add_column("Characters", justify="right")

    for rank, document in enumerate(documents, start=1):
        table.add_row(str(rank), escape(document.name), document.doc_type, f"{len(document.content):,}")

    console.print(table)


def prompt_for_keyword() -> str:
    return Prompt.ask(
        "\n[bold yellow]🔎 Word to look up[/bold yellow] "
        "[dim](:history, :clear, :quit)[/dim]"
    )


def display_results(result: AnalysisResult) -> None:
    console.print(
        f"\n[bold]Results for:[/bold] [italic]\"{escape(result.keyword)}\"[/italic] "
        f"[dim]({escape(result.model)})[/dim]\n"
    )

    for rank, analysis in enumerate(result.analyses, start=1):
        panel_content = Text()
        panel_content.append("📄 Source: ", style="dim")
        panel_content.append(analysis.source_doc_name, style="bold white")
        panel_content.append("\n\n")
        panel_content.append(analysis.original_sentence)
        panel_content.append("\n\n🈶 Translation: ", style="dim")
        panel_content.append(analysis.translation, style="green")
        panel_content.append("\n💡 Meaning: ", style="dim")
        panel_content.append(analysis.meaning_in_context, style="yellow")

        console.print(Panel(
            panel_content,
            title=f"[bold]#{rank}[/bold]",
            border_style="cyan",
            box=box.ROUNDED,
            padding=(1, 2),
        ))


def display_history(history: List[str]) -> None:
    if not history:
        console.print("[dim]No recent searches.[/dim]")
        return
    console.print("[bold]Recent searches:[/bold] " + ", ".join(escape(term) for term in history))


def display_info(message: str) -> None:
    console.print(f"\n[cyan]ℹ[/cyan] {escape(message)}\n")


def display_error(message: str) -> None:
    console.print(f"\n[bold red]✗ Error:[/bold red] {escape(message)}\n")


def ask_export() -> str:
    """Returns 'csv', 'text' (the copy-all layout) or 'n'."""
    answer = Prompt.ask(
        "\n[dim]Export results?[/dim]",
        choices=EXPORT_CHOICES,
        default="n",
    )
    return answer.lower()
