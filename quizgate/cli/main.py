"""
quizgate CLI - review generated quizzes from the terminal.

Usage:
    quizgate list                          # All generations
    quizgate show 42                       # Questions, feedback and export readiness
    quizgate new 42 "Which keyword ...?"   # Create a custom question
    quizgate more 42 --count 5             # Generate 5 more questions
    quizgate score 42 311 correct          # Label an answer choice
    quizgate delete 42                     # Delete a generation
    quizgate export 42 me@example.com      # Export to an external form
"""

from __future__ import annotations

import asyncio
import sys
from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator, Awaitable, TypeVar

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from quizgate.config import get_settings
from quizgate.core.errors import (
    ExportNotReadyError,
    OperationValidationError,
    QuizGateError,
)
from quizgate.core.models import FeedbackType, GenerationSummary
from quizgate.core.scoring import UnscoredAnswer
from quizgate.integrations.generation_client import GenerationClient
from quizgate.workflow.engine import GenerationView, GenerationWorkflow

T = TypeVar("T")

FEEDBACK_STYLE = {
    FeedbackType.CORRECT: "green",
    FeedbackType.INCORRECT: "red",
    FeedbackType.UNSELECTED: "dim",
}

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="quizgate",
    help="Review, score and export generated quizzes",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


@asynccontextmanager
async def open_workflow(generation_id: int) -> AsyncIterator[GenerationWorkflow]:
    """Workflow bound to a fresh client built from settings."""
    settings = get_settings()
    async with GenerationClient.from_settings(settings) as client:
        yield GenerationWorkflow(client, generation_id, settings=settings)


def _run(coro: Awaitable[T]) -> T:
    """Run a command coroutine, mapping workflow errors to exit codes."""
    try:
        return asyncio.run(coro)
    except ExportNotReadyError as e:
        _print_unscored(e.unscored)
        raise typer.Exit(1)
    except OperationValidationError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(2)
    except QuizGateError as e:
        console.print(f"[bold red]✗ {e}[/]")
        raise typer.Exit(1)


# =============================================================================
# Rendering
# =============================================================================


def _print_generations(generations: list[GenerationSummary]) -> None:
    if not generations:
        console.print("[dim]No generations[/]")
        return

    table = Table(title="Generations")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("File")
    table.add_column("Questions", justify="right")
    for item in generations:
        count = "-" if item.question_count is None else str(item.question_count)
        table.add_row(str(item.id), escape(item.filename), count)
    console.print(table)


def _print_unscored(unscored: list[UnscoredAnswer]) -> None:
    lines = "\n".join(f"  {item.label}" for item in unscored)
    console.print(Panel(
        "Please assign either [green]correct[/] or [red]incorrect[/] "
        f"to the following answer choices:\n{lines}",
        title="All answer choices must be scored",
        border_style="red",
    ))


def _print_view(view: GenerationView) -> None:
    generation = view.generation
    console.print(f"[bold]{escape(generation.filename)}[/] [dim](generation {generation.id})[/]")

    for q_index, question in enumerate(generation.questions):
        table = Table(title=f"Question {q_index + 1}: {escape(question.question)}", title_justify="left")
        table.add_column("#", justify="right")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Answer")
        table.add_column("Feedback")
        for a_index, answer in enumerate(question.answers):
            style = FEEDBACK_STYLE[answer.user_feedback]
            table.add_row(
                str(a_index + 1),
                str(answer.id),
                escape(answer.answer),
                f"[{style}]{answer.user_feedback.value}[/]",
            )
        console.print(table)

    summary = view.summary
    console.print(
        f"Scored {summary.scored}/{summary.total} "
        f"([green]{summary.correct} correct[/], [red]{summary.incorrect} incorrect[/])"
    )
    if view.export_ready:
        console.print("[green]✓ Ready to export[/]")
    else:
        _print_unscored(view.unscored)


# =============================================================================
# Commands
# =============================================================================


@app.command("list")
def list_generations() -> None:
    """List all generations."""
    async def _list() -> list[GenerationSummary]:
        settings = get_settings()
        async with GenerationClient.from_settings(settings) as client:
            return await client.list_generations()

    _print_generations(_run(_list()))


@app.command()
def show(
    generation_id: Annotated[int, typer.Argument(help="Generation ID")],
) -> None:
    """Show questions, feedback and export readiness."""
    async def _show() -> GenerationView:
        async with open_workflow(generation_id) as workflow:
            await workflow.refresh()
            return workflow.view()

    _print_view(_run(_show()))


@app.command("new")
def new_question(
    generation_id: Annotated[int, typer.Argument(help="Generation ID")],
    question: Annotated[str, typer.Argument(help="Question text")],
) -> None:
    """Create a custom question."""
    async def _create() -> GenerationView:
        async with open_workflow(generation_id) as workflow:
            await workflow.create_question(question)
            return workflow.view()

    view = _run(_create())
    console.print(f"[green]✓ Created question {len(view.generation.questions)}[/]")


@app.command()
def more(
    generation_id: Annotated[int, typer.Argument(help="Generation ID")],
    count: Annotated[int, typer.Option("--count", "-n", help="Number of questions")] = 5,
) -> None:
    """Generate more questions."""
    async def _more() -> GenerationView:
        async with open_workflow(generation_id) as workflow:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
                transient=True,
            ) as progress:
                progress.add_task(f"Generating {count} questions...", total=None)
                await workflow.add_questions(count)
            return workflow.view()

    view = _run(_more())
    console.print(
        f"[green]✓ Generation now has {len(view.generation.questions)} questions[/]"
    )


@app.command()
def score(
    generation_id: Annotated[int, typer.Argument(help="Generation ID")],
    answer_id: Annotated[int, typer.Argument(help="Answer choice ID")],
    feedback: Annotated[FeedbackType, typer.Argument(help="correct, incorrect or unselected")],
) -> None:
    """Label an answer choice."""
    async def _score() -> GenerationView:
        async with open_workflow(generation_id) as workflow:
            await workflow.score_answer(answer_id, feedback)
            return workflow.view()

    view = _run(_score())
    summary = view.summary
    console.print(f"[green]✓ Scored {summary.scored}/{summary.total}[/]")


@app.command()
def delete(
    generation_id: Annotated[int, typer.Argument(help="Generation ID")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Delete a generation."""
    if not yes:
        typer.confirm(f"Delete generation {generation_id}?", abort=True)

    async def _delete() -> list[GenerationSummary]:
        async with open_workflow(generation_id) as workflow:
            return await workflow.delete_generation()

    remaining = _run(_delete())
    console.print(f"[green]✓ Deleted generation {generation_id}[/]")
    _print_generations(remaining)


@app.command("export")
def export_generation(
    generation_id: Annotated[int, typer.Argument(help="Generation ID")],
    email: Annotated[str, typer.Argument(help="Email that will own the form")],
) -> None:
    """Export a fully scored generation to an external form."""
    async def _export() -> None:
        async with open_workflow(generation_id) as workflow:
            await workflow.export_to_form(email)

    _run(_export())
    console.print(f"[green]✓ Exported generation {generation_id} for {email}[/]")


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """
    [bold]quizgate[/] - review generated quizzes before export.

    Every answer choice must be labelled correct or incorrect before a
    generation can be exported.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else get_settings().log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
