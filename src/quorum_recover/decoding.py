"""Decode share documents into :class:`~quorum_recover.models.Share` records.

A document maps numeric share indices to ``{"base": ..., "value": ...}``
entries and carries the threshold under ``keys``::

    {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"},
        "3": {"base": "10", "value": "12"},
        "6": {"base": "4", "value": "213"}
    }

JSON is the native format; YAML documents with the same structure are
accepted as well.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List

import yaml

from .errors import ShareDecodingError
from .models import Share

_logger = logging.getLogger(__name__)

MIN_BASE = 2
MAX_BASE = 36
DIGIT_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


@dataclass(frozen=True)
class ShareSet:
    n: int
    k: int
    shares: List[Share] = field(default_factory=list)


def decode_value(value: str, base: int | str) -> int:
    """Parse ``value`` written in ``base`` (2..36) into an integer."""
    try:
        radix = int(str(base).strip())
    except ValueError as exc:
        raise ShareDecodingError(f"invalid base {base!r}") from exc
    if not MIN_BASE <= radix <= MAX_BASE:
        raise ShareDecodingError(f"base {radix} outside {MIN_BASE}..{MAX_BASE}")
    digits = str(value).strip()
    # Optional sign, then radix digits only: no prefixes, underscores or spaces.
    body = digits[1:] if digits[:1] in ("+", "-") else digits
    allowed = DIGIT_ALPHABET[:radix]
    if not body or any(ch not in allowed for ch in body.lower()):
        raise ShareDecodingError(f"invalid digits {value!r} for base {radix}")
    return int(digits, radix)


def _read_int(keys: Mapping[str, Any], name: str) -> int | None:
    raw = keys.get(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ShareDecodingError(f"keys.{name} must be an integer, got {raw!r}") from exc


def parse_document(document: Mapping[str, Any]) -> ShareSet:
    """Extract the threshold and decoded shares from a parsed document."""
    if not isinstance(document, Mapping):
        raise ShareDecodingError("share document must be a mapping")
    keys = document.get("keys")
    if not isinstance(keys, Mapping):
        raise ShareDecodingError("Missing keys object")
    k = _read_int(keys, "k")
    if k is None:
        raise ShareDecodingError("keys.k is required")
    declared_n = _read_int(keys, "n")

    shares: list[Share] = []
    for key, entry in document.items():
        label = str(key).strip()
        if not (label.isascii() and label.isdigit()):
            continue
        if not isinstance(entry, Mapping) or "base" not in entry or "value" not in entry:
            raise ShareDecodingError(f"share {label} needs both 'base' and 'value'")
        try:
            y = decode_value(entry["value"], entry["base"])
        except ShareDecodingError as exc:
            raise ShareDecodingError(f"share {label}: {exc}") from exc
        shares.append(Share(index=int(label), y=y))

    if declared_n is not None and declared_n != len(shares):
        _logger.warning("keys.n=%d but %d shares were decoded; using %d", declared_n, len(shares), len(shares))
    return ShareSet(n=len(shares), k=k, shares=shares)


def load_document(text: str, *, fmt: str = "json") -> ShareSet:
    """Parse ``text`` as a JSON (default) or YAML share document."""
    if not text.strip():
        raise ShareDecodingError("No input provided")
    try:
        if fmt == "yaml":
            document = yaml.safe_load(text)
        elif fmt == "json":
            document = json.loads(text)
        else:
            raise ShareDecodingError(f"unsupported document format {fmt!r}")
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ShareDecodingError(f"cannot parse {fmt} document: {exc}") from exc
    return parse_document(document)


def load_path(path: str | Path) -> ShareSet:
    source = Path(path)
    fmt = "yaml" if source.suffix.lower() in (".yaml", ".yml") else "json"
    try:
        text = source.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ShareDecodingError(f"{source} is not valid UTF-8") from exc
    return load_document(text, fmt=fmt)


__all__ = ["ShareSet", "decode_value", "parse_document", "load_document", "load_path"]
