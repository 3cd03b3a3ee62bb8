#!/usr/bin/env python3
"""
config.py
---------
Loaders for the deployment configuration.

conferences.yml - list of configured items:

    - name: ConfX
      year: 2026
      description: International Conference on X
      link: https://confx.org/2026
      place: Lisbon, Portugal
      deadline: ["%y-03-15 23:59", "%y-05-01 23:59"]
      timezone: Europe/Lisbon
      tags: [nlp, ml]

types.yml - the tags offered as filters, in display order:

    - tag: nlp
      name: Natural Language Processing

Unquoted YAML timestamps ("2026-03-15 23:59:00") are read back as text so
that every deadline reaches the parser in the same form.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List

# --- Third party imports ---
import yaml

# --- Local imports ---
from countdown.core.exceptions import ConfigError


@dataclass(frozen=True)
class TagType:
    """A filterable tag and its human-readable label."""

    tag: str
    name: str


def _read_yaml_list(path: Path) -> List[Any]:
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigError(f"{path} must contain a list, got {type(data).__name__}")
    return data


def _as_text(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    return value


def _normalize_record(record: Any) -> Any:
    if not isinstance(record, dict):
        return record
    normalized: Dict[str, Any] = dict(record)
    deadline = normalized.get("deadline")
    if isinstance(deadline, list):
        normalized["deadline"] = [_as_text(value) for value in deadline]
    elif deadline is not None:
        normalized["deadline"] = _as_text(deadline)
    return normalized


def load_conferences(path: Path) -> List[Any]:
    """
    Read the configured items.

    Records are returned as-is apart from deadline text coercion; structural
    validation happens per record in the normalizer.

    Raises:
        ConfigError: If the file is missing, not YAML, or not a list
    """
    return [_normalize_record(record) for record in _read_yaml_list(path)]


def load_tag_types(path: Path) -> List[TagType]:
    """
    Read the filterable tags.

    Items without a 'tag' key are ignored; 'name' defaults to the tag.

    Raises:
        ConfigError: If the file is missing, not YAML, or not a list
    """
    types: List[TagType] = []
    for item in _read_yaml_list(path):
        if not isinstance(item, dict) or not item.get("tag"):
            continue
        tag = str(item["tag"]).strip()
        types.append(TagType(tag=tag, name=str(item.get("name") or tag)))
    return types
