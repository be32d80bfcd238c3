# -*- coding: utf-8 -*-
import asyncio
import json
import logging
import os
import typing as t
from dataclasses import asdict
from pathlib import Path

import click
from rich.json import JSON
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from mcp_wrappers.study_plan.mcp_service import StudyPlanResult, _generate_study_plan
from orchestrator.session import SessionState, UploadSession
from orchestrator.utils import console, err_console, expand_transcript_paths
from study_planner.review import build_review
from study_planner.storage import STORAGE_KEY, StudyPlanData, decode_plan_param, dump_study_plan_data, \
    load_study_plan_data
from transcript_server.models import CourseImpact, CourseRecord, EstimatedScores, PotentialGain, StudyDay
from transcript_server.ocr_utils import extract_transcript_text

logger = logging.getLogger("orchestrator")


async def process_upload(
        session: UploadSession,
        transcript_path: str,
        generate_plan: bool = True,
        recognize: t.Callable[[str], str] = extract_transcript_text,
        request_plan: t.Callable[[list[CourseRecord]], StudyPlanResult] = _generate_study_plan,
) -> UploadSession:
    """Run one transcript through OCR, scoring and (optionally) plan generation.

    OCR and the plan request are blocking calls, so both run in worker threads.
    Failures end in a displayable session state, never an exception.

    Args:
        session: The controller's session; it is reset for this upload.
        transcript_path: Local path or URL of the transcript image/PDF.
        generate_plan: Whether to request a study plan once courses are known.
        recognize: OCR callable.
        request_plan: Plan generation callable.

    Returns:
        The same session, advanced as far as this upload got.
    """
    upload_id = session.file_selected(os.path.basename(transcript_path))

    try:
        text = await asyncio.to_thread(recognize, transcript_path)
    except Exception as e:
        logger.warning("OCR failed for %s: %s", transcript_path, e)
        session.ocr_failed(upload_id, str(e))
    else:
        session.ocr_resolved(upload_id, text)

    if not generate_plan or not session.can_generate_plan:
        return session

    if session.plan_requested(upload_id):
        result = await asyncio.to_thread(request_plan, session.courses)
        if result.failed:
            session.plan_failed(upload_id)
        else:
            session.plan_resolved(upload_id, result.plan)

    return session


def create_courses_table(courses: list[CourseRecord]) -> Table:
    table = Table(title="📚 Detected Courses and Grades", show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=3)
    table.add_column("Course", style="white")
    table.add_column("Grade", style="yellow")
    for idx, record in enumerate(courses, 1):
        table.add_row(str(idx), escape(record.course), record.grade)
    return table


def create_scores_panel(scores: EstimatedScores) -> Panel:
    text = Text()
    text.append("📊 Math: ", style="white")
    text.append(f"{scores.math}", style="bold green")
    text.append("\n")
    text.append("📖 English: ", style="white")
    text.append(f"{scores.english}", style="bold green")
    return Panel(text, title="Estimated SAT Scores", border_style="green", expand=False)


def create_gains_table(gains: list[PotentialGain]) -> Table:
    table = Table(title="🚀 Courses That Could Raise Your Score", show_header=True, header_style="bold cyan")
    table.add_column("Course", style="white")
    table.add_column("Subject", style="cyan")
    table.add_column("Points", style="bold green", justify="right")
    for gain in gains:
        table.add_row(gain.course_name, gain.subject, f"+{gain.points}")
    return table


def create_impacts_table(impacts: list[CourseImpact]) -> Table:
    table = Table(title="Course Impact Summary", show_header=True, header_style="bold magenta")
    table.add_column("Course", style="white")
    table.add_column("Impact", justify="right")
    table.add_column("Potential Increase", style="green", justify="right")
    table.add_column("Related Topics", style="dim")
    for impact in impacts:
        table.add_row(
            impact.course,
            str(impact.impact),
            f"{impact.potential_score_increase:g}",
            ", ".join(impact.related_topics[:2]),
        )
    return table


def create_days_tree(days: list[StudyDay]) -> Tree:
    tree = Tree("🗓️  Personalized Study Plan")
    for day in days:
        branch = tree.add(f"[bold]{escape(day.date)}[/bold]")
        for task in day.tasks:
            box = "☑" if task.completed else "☐"
            label = f"{box} {escape(task.description)}"
            if task.khan_academy_link:
                label += f" [link={task.khan_academy_link}][blue](practice)[/blue][/link]"
            branch.add(label)
    return tree


def render_session(session: UploadSession, verbose: bool = False) -> None:
    if verbose and session.extracted_text:
        console.print(Panel(Text(session.extracted_text), title="Extracted Text", border_style="dim"))

    if session.ocr_error is not None or not session.courses:
        console.print(session.extracted_text or "No text recognized.", style="yellow", markup=False)
        return

    console.print(create_courses_table(session.courses))
    if session.scores:
        console.print(create_scores_panel(session.scores))
    if session.potential_gains:
        console.print(create_gains_table(session.potential_gains))

    if session.plan:
        style = "red" if session.state == SessionState.PLAN_FAILED else "blue"
        console.print(Panel(Text(session.plan), title="Personalized Study Plan", border_style=style))


def render_review(data: StudyPlanData) -> None:
    review = build_review(data)
    if review.course_impacts:
        console.print(create_impacts_table(review.course_impacts))
    if review.days:
        console.print(create_days_tree(review.days))
    else:
        console.print("[red]No study plan found. Upload your transcript to generate one.[/red]")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=False)],
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """SAT study planner: transcript in, score estimates and a study plan out."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


@cli.command()
@click.argument("transcripts", nargs=-1, type=click.Path(exists=True))
@click.option("--no-plan", is_flag=True, help="Skip study plan generation.")
@click.option("--save", "save_path", type=click.Path(dir_okay=False, writable=True),
              help=f"Write the {STORAGE_KEY} blob of the last upload to this file.")
@click.pass_context
def analyze(ctx: click.Context, transcripts: tuple[str, ...], no_plan: bool, save_path: t.Optional[str]) -> None:
    """Recognize transcripts, estimate SAT scores and generate a study plan.

    TRANSCRIPTS: Transcript images/PDFs, or directories containing them.
    """
    verbose = ctx.obj["verbose"]
    if not transcripts:
        err_console.print("[red]Error:[/red] Provide one or more transcript files.")
        raise SystemExit(1)

    paths = expand_transcript_paths(transcripts)
    console.print(
        Panel.fit(
            f"[bold blue]🎓 SAT Study Planner[/bold blue]\n"
            f"Processing [bold]{len(paths)}[/bold] transcript(s)",
            border_style="blue"
        )
    )

    session = UploadSession()
    for path in paths:
        with console.status(f"[bold green]Processing {os.path.basename(path)}..."):
            asyncio.run(process_upload(session, path, generate_plan=not no_plan))
        console.rule(os.path.basename(path))
        render_session(session, verbose=verbose)

    if verbose and session.courses:
        console.print(JSON(json.dumps([asdict(c) for c in session.courses], indent=2)))

    if save_path and session.courses:
        Path(save_path).write_text(dump_study_plan_data(session.courses, session.plan), encoding="utf-8")
        console.print(f"[green]✓[/green] Saved {STORAGE_KEY} to {save_path}")


@cli.command()
@click.option("--data", "data_path", type=click.Path(exists=True, dir_okay=False),
              help=f"File holding a saved {STORAGE_KEY} blob.")
@click.option("--plan-query", help="URL-encoded plan text, as passed in the ?plan= parameter.")
def review(data_path: t.Optional[str], plan_query: t.Optional[str]) -> None:
    """Show the course impact summary and the day-by-day study plan."""
    if data_path:
        data = load_study_plan_data(Path(data_path).read_text(encoding="utf-8"))
    else:
        plan = decode_plan_param(plan_query)
        data = StudyPlanData(plan=plan) if plan is not None else None

    if data is None:
        console.print("[red]No study plan found. Upload your transcript to generate one.[/red]")
        raise SystemExit(1)

    if not data_path:
        console.print(Panel(Text(data.plan), title="📅 Your Study Plan", border_style="green"))

    render_review(data)


if __name__ == "__main__":
    cli()
