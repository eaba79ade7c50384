"""
Command-line interface.

Usage:
    aadhaar-ocr card1.jpg card2.png --export
    aadhaar-ocr --text transcript.txt --json
    aadhaar-ocr card.jpg --export --workflow workflows.json
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from .config import get_config
from .exceptions import AadhaarOCRError
from .logger import setup_logger
from .models import ExtractionResult, Outcome, Script
from .persistence import CSVExporter, JSONWorkflowStore
from .processors import AadhaarProcessor
from .recognition import StaticRecognizer
from .utils.timing import Timer
from .workflow import WorkflowTracker

console = Console()

_OUTCOME_STYLES = {
    Outcome.ACCEPTED: "green",
    Outcome.REJECTED: "yellow",
    Outcome.FAILED: "red",
}


def get_progress() -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aadhaar-ocr",
        description="Extract and validate Aadhaar card fields from images",
    )
    parser.add_argument("images", nargs="*", type=Path, help="Card images to process")
    parser.add_argument(
        "--text",
        action="append",
        type=Path,
        default=[],
        metavar="FILE",
        help="Already-recognized Latin text to process instead of an image (repeatable)",
    )
    parser.add_argument("--export", action="store_true", help="Append accepted results to the CSV")
    parser.add_argument("--csv", type=Path, help="CSV file for --export (default: EXPORT_DIR/EXPORT_FILENAME)")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--show-raw", action="store_true", help="Print the script-tagged transcript")
    parser.add_argument("--timings", action="store_true", help="Print per-stage timing tables")
    parser.add_argument(
        "--workflow",
        type=Path,
        metavar="STORE",
        help="With --export, register exported results in a workflow store (JSON file)",
    )
    return parser


def render_result(label: str, result: ExtractionResult, show_raw: bool = False) -> None:
    style = _OUTCOME_STYLES[result.outcome]
    table = Table(title=label, show_header=False, title_style=f"bold {style}")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Status", f"[{style}]{result.message}[/{style}]")
    if result.is_valid:
        table.add_row("Name", result.name or "-")
        table.add_row("Gender", result.gender or "-")
        table.add_row("DOB", result.birth_date or "-")
        table.add_row("UID", result.uid or "-")
        table.add_row("Address", result.address or "-")
    elif result.verdict.issues:
        table.add_row("Issues", "\n".join(result.verdict.issues))

    console.print(table)
    if show_raw and result.tagged_text:
        console.print(result.tagged_text, markup=False, highlight=False)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Returns:
        0 if every input was accepted, 1 if any was rejected or failed,
        2 if the engine could not start
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.images and not args.text:
        parser.error("give at least one image or --text FILE")

    config = get_config()
    logger = setup_logger("aadhaar_ocr", debug=config.debug)

    exporter = CSVExporter(args.csv) if args.export else None

    try:
        tracker = WorkflowTracker(JSONWorkflowStore(args.workflow)) if args.workflow else None
        if args.images:
            processor = AadhaarProcessor(config=config)
        else:
            # Text input never reaches a recognizer
            processor = AadhaarProcessor(
                primary=StaticRecognizer(Script.LATIN),
                secondary=StaticRecognizer(Script.DEVANAGARI),
                config=config,
            )
    except AadhaarOCRError as e:
        console.print(f"[red]{e.message}[/red]")
        return 2

    results: List[Tuple[str, ExtractionResult]] = []
    timer = Timer()

    with processor, get_progress() as progress:
        task = progress.add_task("Processing", total=len(args.images) + len(args.text))

        for image_path in args.images:
            with timer.measure("image"):
                results.append((str(image_path), processor.run(image_path)))
            progress.advance(task)

        for text_path in args.text:
            with timer.measure("text"):
                try:
                    text = text_path.read_text(encoding="utf-8")
                except OSError as e:
                    result = ExtractionResult.failed(f"Cannot read {text_path}: {e.strerror}")
                else:
                    result = processor.run_text(text)
            results.append((str(text_path), result))
            progress.advance(task)

    if exporter is not None:
        for label, result in results:
            if result.is_valid:
                export(exporter, tracker, label, result, logger)

    if args.json:
        payload = [{"source": label, **result.to_dict()} for label, result in results]
        console.print_json(json.dumps(payload, ensure_ascii=False))
    else:
        for label, result in results:
            render_result(label, result, show_raw=args.show_raw)

    logger.debug(timer.summary())
    if args.timings:
        console.print(timer.as_table("Inputs"))
        console.print(processor.timer.as_table("Pipeline stages"))
    return 0 if all(result.is_valid for _, result in results) else 1


def export(
    exporter: CSVExporter,
    tracker: Optional[WorkflowTracker],
    label: str,
    result: ExtractionResult,
    logger: logging.Logger,
) -> None:
    """Append one accepted result to the CSV, registering it as a workflow first."""
    workflow_id = None
    if tracker is not None:
        workflow_id = tracker.start().id
        outcome = tracker.record_extraction(workflow_id, result)
        if not outcome.ok:
            tracker.set_error(workflow_id, outcome.error)
            logger.warning(f"{label}: not exported, {outcome.error}")
            return

    try:
        csv_path = exporter.export(result)
    except AadhaarOCRError as e:
        logger.error(f"Export failed for {label}: {e}")
        if workflow_id:
            tracker.set_error(workflow_id, e.message)
        return

    logger.info(f"Exported {label} to {csv_path}")
    if workflow_id:
        record = tracker.attach_csv_path(workflow_id, str(csv_path)).value
        logger.info(
            f"{label}: workflow {workflow_id} at {record.progress_percent()}%, next: {record.step_description()}"
        )
