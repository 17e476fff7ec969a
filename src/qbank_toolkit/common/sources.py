"""
Module: common.sources

Purpose:
    Loads the sources configuration that names the course code and
    subject of a bank, and discovers local ``.tex`` files to compile.

    Two file formats are accepted: the raw config object and the admin
    export wrapper ``{"generatedAt": ..., "config": {...}}``.

Key Functions:
    - load_sources_config(): Read and validate a sources config file
    - discover_tex_files(): Sorted ``.tex`` files under a directory

Key Classes:
    - SourcesConfig: Parsed sources configuration

Dependencies:
    - json (std)
    - pathlib (std)
    - compiler.config.CompilerConfig

Used By:
    - qbank_toolkit.cli
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

from ..compiler.config import CompilerConfig
from ..core.errors import ConfigError

logger = logging.getLogger(__name__)

SOURCES_CONFIG_VERSION = "v1"
SOURCE_TYPES = ("github", "zip", "canvas", "gdrive")


@dataclass(frozen=True)
class SourcesConfig:
    """
    Parsed sources configuration.

    Attributes:
        course_code: Course code for uids
        subject: Subject slug
        uid_namespace: Namespace reserved for uids
        sources: Source definitions, kept as raw dicts (remote fetching is
            handled outside this package)
        version: Config format version
    """
    course_code: str
    subject: str
    uid_namespace: str
    sources: Tuple[Dict[str, Any], ...] = ()
    version: str = SOURCES_CONFIG_VERSION

    def to_compiler_config(self, language: str = "vi") -> CompilerConfig:
        return CompilerConfig(course_code=self.course_code, subject=self.subject, language=language)


def load_sources_config(path: Path) -> SourcesConfig:
    """
    Load a sources configuration file.

    Args:
        path: JSON file in raw or exported format

    Returns:
        SourcesConfig

    Raises:
        ConfigError: If the file is missing, not JSON, or invalid
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(f"Sources config not found: {path}", file=str(path)) from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in sources config file: {path}", file=str(path), line=exc.lineno) from exc

    # Export format: { config, generatedAt }
    if isinstance(payload, dict) and isinstance(payload.get("config"), dict) and isinstance(payload.get("generatedAt"), str):
        payload = payload["config"]

    return _parse_sources_config(payload, str(path))


def _parse_sources_config(data: Any, file: str) -> SourcesConfig:
    if not isinstance(data, dict):
        raise ConfigError("Sources config must be a JSON object", file=file)

    required = ["version", "courseCode", "subject", "uidNamespace", "sources"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ConfigError(f"Missing required fields: {missing}", file=file, context={"missing": missing})

    if data["version"] != SOURCES_CONFIG_VERSION:
        raise ConfigError(
            f"Unsupported sources config version: {data['version']!r} (expected {SOURCES_CONFIG_VERSION})",
            file=file,
        )
    for field_name in ("courseCode", "subject", "uidNamespace"):
        value = data[field_name]
        if not isinstance(value, str) or not value:
            raise ConfigError(f"{field_name} must be a non-empty string", file=file)

    sources = data["sources"]
    if not isinstance(sources, list):
        raise ConfigError("sources must be a list", file=file)

    seen_ids = set()
    for i, source in enumerate(sources):
        if not isinstance(source, dict):
            raise ConfigError(f"sources[{i}] must be an object", file=file)
        source_id = source.get("id")
        if not isinstance(source_id, str) or not source_id:
            raise ConfigError(f"sources[{i}].id must be a non-empty string", file=file)
        if source_id in seen_ids:
            raise ConfigError(f"sources[{i}].id must be unique: {source_id!r}", file=file)
        seen_ids.add(source_id)
        if source.get("type") not in SOURCE_TYPES:
            raise ConfigError(f"sources[{i}].type must be one of {SOURCE_TYPES}", file=file)

    try:
        config = SourcesConfig(
            course_code=data["courseCode"],
            subject=data["subject"],
            uid_namespace=data["uidNamespace"],
            sources=tuple(sources),
            version=data["version"],
        )
        config.to_compiler_config()
    except ValueError as exc:
        raise ConfigError(str(exc), file=file) from exc

    logger.debug(f"Loaded sources config {file}: {config.course_code}/{config.subject}, {len(sources)} source(s)")
    return config


def discover_tex_files(root: Path, pattern: str = "**/*.tex") -> List[Path]:
    """
    Find LaTeX files under ``root``.

    Returns:
        Sorted list of matching files (sorted so uniqueness diagnostics
        are reproducible)
    """
    return sorted(p for p in root.glob(pattern) if p.is_file())
