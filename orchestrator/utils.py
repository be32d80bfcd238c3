"""Utility functions for the orchestrator."""
from pathlib import Path

from rich.console import Console

from transcript_server.ocr_utils import is_supported_transcript

console = Console()
err_console = Console(stderr=True)


def expand_transcript_paths(paths: tuple[str, ...]) -> list[str]:
    """Expand paths to include all transcript images and PDFs in directories.

    Args:
        paths: Tuple of file paths and/or directory paths

    Returns:
        List of transcript file paths with directories expanded

    Raises:
        SystemExit: If a path is missing or a directory holds no transcripts
    """
    transcript_files: list[str] = []

    for path_str in paths:
        path = Path(path_str)

        if path.is_file():
            transcript_files.append(path_str)
        elif path.is_dir():
            in_dir = sorted(p for p in path.iterdir() if p.is_file() and is_supported_transcript(str(p)))

            if not in_dir:
                err_console.print(
                    f"[red]Error:[/red] Directory '{path_str}' contains no transcript images or PDFs."
                )
                raise SystemExit(1)

            transcript_files.extend(str(p) for p in in_dir)
        else:
            err_console.print(
                f"[red]Error:[/red] Path '{path_str}' does not exist."
            )
            raise SystemExit(1)

    return transcript_files
