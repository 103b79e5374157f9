"""
Hidefield local analysis server.
Exposes HTTP API for editor integrations: check a buffer, scan a repository, describe the rule.
"""
from __future__ import annotations
import json
import logging
from functools import lru_cache
from pathlib import Path
logging.basicConfig(level=logging.INFO)
log = logging.getLogger(__name__)
from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from javasrc.buffer_parser import parse_unsaved_buffer
from javasrc.repo_parser import scan_repository
from hiddenfield.config import HiddenFieldConfig, config_from_env, load_config
from hiddenfield.errors import ConfigurationError, MalformedTreeError
from hiddenfield.hidden_field_checker import check_tree


app = FastAPI(title="Hidefield Analysis Server", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_rules_path: Path = Path(__file__).resolve().parent / "rules" / "rules.json"


@app.get("/")
def root() -> dict:
    """Hidefield API. Use /docs for Swagger or /health to check server."""
    return {"name": "Hidefield Analysis Server", "docs": "/docs", "health": "/health"}


class AnalyzeRequest(BaseModel):
    content: str
    file_path: str
    language: Optional[str] = None
    config: Optional[dict[str, Any]] = None


class ScanRequest(BaseModel):
    repo_path: str
    config: Optional[dict[str, Any]] = None


@lru_cache(maxsize=1)
def _env_config() -> HiddenFieldConfig:
    """Options from .env and HIDEFIELD_* variables, read once per process."""
    return config_from_env()


def _resolve_config(options: Optional[dict[str, Any]]) -> HiddenFieldConfig:
    try:
        if options is None:
            return _env_config()
        return load_config(options)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/analyze")
def analyze(request: AnalyzeRequest) -> dict:
    """Check an unsaved buffer. Non-Java buffers yield no diagnostics."""
    config = _resolve_config(request.config)
    tree = parse_unsaved_buffer(request.content, request.file_path, request.language)
    if tree is None:
        return {"diagnostics": [], "file": request.file_path}
    try:
        diagnostics = check_tree(tree, request.file_path, config)
    except MalformedTreeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    log.info("Analyze %s: %d diagnostics", request.file_path, len(diagnostics))
    return {
        "diagnostics": [d.to_dict() for d in diagnostics],
        "file": request.file_path,
    }


@app.post("/scan")
def scan(request: ScanRequest) -> dict:
    """Check every Java file under a repository and persist the result for later viewing."""
    repo_path = Path(request.repo_path).resolve()
    if not repo_path.is_dir():
        raise HTTPException(status_code=400, detail=f"Invalid repo_path: {str(repo_path)!r}")
    config = _resolve_config(request.config)
    diagnostics_file = repo_path / ".hidefield" / "diagnostics.json"
    diagnostics = scan_repository(repo_path, config, output_json_path=diagnostics_file)
    log.info("Scan %s: %d diagnostics saved to %s", repo_path, len(diagnostics), diagnostics_file)
    return {"diagnostics": diagnostics, "repo_path": str(repo_path)}


@app.get("/rules")
def get_rules() -> dict:
    """Return the rule definition and its options."""
    if _rules_path.exists():
        with open(_rules_path, "r", encoding="utf-8") as f:
            return json.load(f)
    return {"rules": []}


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
