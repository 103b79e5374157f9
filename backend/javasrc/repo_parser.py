"""
Recursively scan a repository and run the hidden-field check on every Java file.
Optionally persists the diagnostics to a JSON file.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Optional

from hiddenfield.config import HiddenFieldConfig
from hiddenfield.errors import MalformedTreeError
from hiddenfield.hidden_field_checker import check_hidden_fields

log = logging.getLogger(__name__)

# Default ignore patterns
DEFAULT_IGNORE = {
    ".git", "node_modules", "__pycache__", ".venv", "venv", "dist", "build",
    "target", "out", ".gradle", ".idea", ".hidefield", "vendor"
}

SUPPORTED_EXTENSIONS = {".java"}


def should_ignore(path: Path, base: Path) -> bool:
    rel = path.relative_to(base) if base in path.parents or path == base else path
    for part in rel.parts[:-1]:
        if part in DEFAULT_IGNORE or part.startswith("."):
            return True
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        return True
    return False


def scan_repository(
    repo_path: str | Path,
    config: Optional[HiddenFieldConfig] = None,
    output_json_path: Optional[str | Path] = None,
) -> list[dict]:
    repo_path = Path(repo_path).resolve()
    if not repo_path.is_dir():
        return []

    diagnostics: list[dict] = []
    files_scanned = 0
    for file_path in sorted(repo_path.rglob("*")):
        if not file_path.is_file():
            continue
        if should_ignore(file_path, repo_path):
            continue
        try:
            source = file_path.read_bytes()
        except OSError as e:
            log.warning("Could not read %s: %s", file_path, e)
            continue
        files_scanned += 1
        rel_path = file_path.relative_to(repo_path).as_posix()
        try:
            found = check_hidden_fields(source, rel_path, config)
        except MalformedTreeError as e:
            log.warning("Skipping %s: %s", rel_path, e)
            continue
        diagnostics.extend(d.to_dict() for d in found)

    log.info("Scanned %d Java files, got %d diagnostics", files_scanned, len(diagnostics))
    if output_json_path is not None:
        out = Path(output_json_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        with open(out, "w", encoding="utf-8") as f:
            json.dump(diagnostics, f, indent=2)
    return diagnostics
