"""Utility helpers shared by the engine and the command line interface."""

from __future__ import annotations

import logging
import re
from pathlib import PurePath
from typing import List

from .exceptions import PageIndexError

_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def parse_page_spec(page_spec: str) -> List[int]:
    """Parse ``"1,3,5-7"`` into sorted unique 1-based page numbers."""

    if not page_spec or not page_spec.strip():
        raise ValueError("Page specification cannot be empty")

    pages: set[int] = set()
    for token in page_spec.split(","):
        token = token.strip()
        if "-" in token:
            match = re.match(r"^(\d+)-(\d+)$", token)
            if not match:
                raise ValueError(
                    f"Invalid page range format: '{token}'. Expected 'start-end'."
                )

            start = int(match.group(1))
            end = int(match.group(2))
            if start > end:
                raise ValueError(
                    f"Invalid range '{token}': start page ({start}) must be <= end page ({end})."
                )
            if start < 1:
                raise PageIndexError(
                    f"Invalid range '{token}': page numbers must be >= 1."
                )

            pages.update(range(start, end + 1))
        else:
            if not token.isdigit():
                raise ValueError(
                    f"Invalid page number: '{token}'. Expected a positive integer."
                )

            page_num = int(token)
            if page_num < 1:
                raise PageIndexError(
                    f"Invalid page number: {page_num}. Page numbers must be >= 1."
                )

            pages.add(page_num)

    return sorted(pages)


def strip_extension(filename: str) -> str:
    """Return the basename of ``filename`` without its last extension."""

    return _EXTENSION_RE.sub("", PurePath(filename).name)


def image_entry_name(base_name: str, page_number: int) -> str:
    return f"{base_name}_Page_{page_number}.jpg"


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500 KB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"


__all__ = [
    "get_logger",
    "parse_page_spec",
    "strip_extension",
    "image_entry_name",
    "format_file_size",
]
