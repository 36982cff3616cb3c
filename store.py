# store.py
#
# Single-file JSON store for the question list. The existing file is copied
# to a timestamped backup before every overwrite; only the newest backups
# are kept.

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

from schemas.store import InfoResponse, LoadResponse, SaveResponse
from validation import validate_questions

logger = logging.getLogger(__name__)

_BASE = Path(__file__).resolve().parent
QUESTIONS_FILENAME = "questions.json"
BACKUP_MARKER = ".backup."
BACKUP_STAMP = "%Y-%m-%d-%H%M%S"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024
DEFAULT_BACKUP_KEEP = 5


class StoreError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


# ---------- Settings (read per call so tests can monkeypatch the env) ----------


def data_dir() -> Path:
    return Path(os.getenv("QUESTIONS_DATA_DIR") or _BASE / "data")


def questions_file() -> Path:
    return data_dir() / QUESTIONS_FILENAME


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %s", key, raw, default)
        return default


def max_bytes() -> int:
    return _int_env("QUESTIONS_MAX_BYTES", DEFAULT_MAX_BYTES)


def backup_keep() -> int:
    return _int_env("QUESTIONS_BACKUP_KEEP", DEFAULT_BACKUP_KEEP)


def ensure_data_dir() -> Path:
    d = data_dir()
    try:
        d.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Failed to create data directory %s: %s", d, e)
        raise StoreError(500, "Failed to create data directory") from e
    return d


# ---------- Backups ----------


def list_backups(path: Optional[Path] = None) -> List[Path]:
    """Backups of ``path``, oldest first."""
    path = path or questions_file()
    backups = [p for p in path.parent.glob(path.name + BACKUP_MARKER + "*") if p.is_file()]
    return sorted(backups, key=lambda p: (p.stat().st_mtime, p.name))


def prune_backups(path: Optional[Path] = None, keep: Optional[int] = None) -> List[Path]:
    keep = backup_keep() if keep is None else keep
    backups = list_backups(path)
    doomed = backups[: max(0, len(backups) - keep)]
    for p in doomed:
        p.unlink()
        logger.info("Removed old backup %s", p.name)
    return doomed


def backup_existing(path: Optional[Path] = None) -> Optional[Path]:
    path = path or questions_file()
    if not path.exists():
        return None
    target = path.with_name(path.name + BACKUP_MARKER + datetime.now().strftime(BACKUP_STAMP))
    target.write_bytes(path.read_bytes())
    logger.info("Backed up %s to %s", path.name, target.name)
    prune_backups(path)
    return target


# ---------- Actions ----------


def load_questions() -> LoadResponse:
    ensure_data_dir()
    path = questions_file()
    if not path.exists():
        return LoadResponse(questions=[], count=0, message="No questions file found on server")

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read %s: %s", path, e)
        raise StoreError(500, "Failed to read questions file") from e

    try:
        questions = json.loads(content)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", path, e)
        raise StoreError(500, "Invalid JSON in questions file") from e
    if not isinstance(questions, list):
        raise StoreError(500, "Questions file does not contain an array")

    return LoadResponse(
        questions=questions,
        count=len(questions),
        last_modified=int(path.stat().st_mtime),
    )


def parse_payload(body: bytes) -> List[Any]:
    if len(body) > max_bytes():
        raise StoreError(413, "File too large")
    try:
        questions = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise StoreError(400, f"Invalid JSON: {e}") from e
    if not isinstance(questions, list):
        raise StoreError(400, "Data must be an array of questions")
    return questions


def save_questions(body: bytes) -> SaveResponse:
    questions = parse_payload(body)
    ensure_data_dir()
    path = questions_file()

    report = validate_questions(questions)
    if report.valid_count != report.total:
        logger.warning(
            "Saving %d questions, %d fail validation",
            report.total,
            report.total - report.valid_count,
        )

    encoded = json.dumps(questions, indent=4, ensure_ascii=False).encode("utf-8")
    try:
        backup_existing(path)
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_bytes(encoded)
        os.replace(tmp, path)
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        raise StoreError(500, "Failed to write questions file") from e

    logger.info("Saved %d questions (%d bytes) to %s", len(questions), len(encoded), path)
    return SaveResponse(count=len(questions), bytes=len(encoded))


def store_info() -> InfoResponse:
    d = ensure_data_dir()
    path = questions_file()
    info = InfoResponse(
        data_dir=str(d),
        questions_file=str(path),
        file_exists=path.exists(),
        writable=os.access(d, os.W_OK),
    )
    if info.file_exists:
        st = path.stat()
        info.file_size = st.st_size
        info.last_modified = int(st.st_mtime)
        info.last_modified_date = datetime.fromtimestamp(st.st_mtime).strftime("%Y-%m-%d %H:%M:%S")
    return info
