"""Bundled fallback snippets shown before the remote store answers"""

import logging
from pathlib import Path

from pydantic import TypeAdapter

from snippet_catalog.config import DEFAULT_SEED_PATH
from snippet_catalog.entities import Snippet

logger = logging.getLogger(__name__)

_snippet_list = TypeAdapter(list[Snippet])


def load_seed_snippets(path: Path | None = None) -> list[Snippet]:
    """Read seed snippets from a JSON array file"""
    seed_path = path or DEFAULT_SEED_PATH
    snippets = _snippet_list.validate_json(seed_path.read_bytes())
    logger.debug("Loaded %d seed snippets from %s", len(snippets), seed_path)
    return snippets
