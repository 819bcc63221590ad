from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .config import get_settings


def output_root() -> Path:
    root = get_settings().output_dir
    root.mkdir(parents=True, exist_ok=True)
    return root


def default_output_path(stem: str) -> Path:
    token = ''.join(char if char.isalnum() or char in '-_' else '_' for char in str(stem or '').strip())
    return output_root() / f'{token or "resume"}.pdf'


def write_bytes_atomic(path: Path, payload: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + '.tmp')
    tmp.write_bytes(payload)
    tmp.replace(path)


def write_json_atomic(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + '.tmp')
    tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding='utf-8')
    tmp.replace(path)


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding='utf-8'))
