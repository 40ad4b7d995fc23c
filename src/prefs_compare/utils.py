"""Utility functions for prefs-compare."""

import glob
import re
from pathlib import Path

# Extension of preference files picked up when a directory is given
PREFS_SUFFIX = ".js"


def validate_path(path_str: str) -> Path | None:
    """Validate and resolve a path string.

    Handles shell-escaped paths (e.g., spaces as '\\ ') that users may
    copy from terminal or get from tab-completion.

    Args:
        path_str: Path string from user input.

    Returns:
        Resolved Path if valid, None otherwise.
    """
    if not path_str.strip():
        return None

    # Remove shell escape characters (backslash before space, parens, etc.)
    unescaped = re.sub(r"\\(.)", r"\1", path_str.strip())

    path = Path(unescaped).expanduser().resolve()

    if not path.exists():
        return None

    return path


def find_input_files(path_str: str) -> list[Path]:
    """Find the files that make up one side of a comparison.

    If the string names a file, returns it.
    If it names a directory, returns the preference files directly inside it.
    Otherwise it is expanded as a glob pattern.

    Args:
        path_str: File, directory or glob pattern.

    Returns:
        List of resolved file paths, sorted alphabetically.
    """
    path = Path(path_str).expanduser()

    if path.is_file():
        return [path.resolve()]

    if path.is_dir():
        return sorted(
            candidate.resolve()
            for candidate in path.iterdir()
            if candidate.is_file() and candidate.suffix.lower() == PREFS_SUFFIX
        )

    matches = glob.glob(str(path))
    return sorted(Path(match).resolve() for match in matches if Path(match).is_file())


def load_side(files: list[Path]) -> str:
    """Read and concatenate the files of one side.

    Carriage returns are removed so the parser only sees ``\\n`` line breaks.

    Args:
        files: Files to read, in order.

    Returns:
        Combined text.

    Raises:
        RuntimeError: If a file cannot be read.
    """
    parts = []
    for path in files:
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise RuntimeError(f"Cannot read {path}: {exc}") from exc
        parts.append(text.replace("\r", ""))
    return "\n".join(parts)


def make_side_label(path_str: str, files: list[Path]) -> str:
    """Build a short display label for one side."""
    if len(files) == 1:
        return files[0].name
    return Path(path_str).name or path_str


def make_side_labels(
    path_a: str,
    files_a: list[Path],
    path_b: str,
    files_b: list[Path],
) -> tuple[str, str]:
    """Build display labels for both sides.

    Short labels are the file name (or the pattern when several files match).
    When both short labels are equal the full paths are used instead.

    Returns:
        Tuple of (label_a, label_b).
    """
    label_a = make_side_label(path_a, files_a)
    label_b = make_side_label(path_b, files_b)
    if label_a != label_b:
        return label_a, label_b

    return (
        ", ".join(str(path) for path in files_a),
        ", ".join(str(path) for path in files_b),
    )
