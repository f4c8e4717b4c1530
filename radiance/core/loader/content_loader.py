"""Load world definition files from a directory tree.

Walks the given root and groups files by their parent folder name
(``maps/``, ``characters/``, ``objects/``, ``dialogs/``); ``game.yaml`` may sit
anywhere in the tree. Both YAML (``.yaml``/``.yml``) and ``.json`` are read.
The result is the raw dict expected by ``build_world_from_dict``.
"""
from __future__ import annotations
import json
import logging
import os
from typing import Any, Dict, List

import yaml

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

SECTION_DIRS = ("maps", "characters", "objects", "dialogs")
GAME_FILES = {"game.yaml", "game.yml", "game.json"}
_EXTENSIONS = (".yaml", ".yml", ".json")


def _load_file(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.endswith(".json"):
                return json.load(f)
            return yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"{path}: cannot read definition file ({e})") from e


def load_definitions(root: str) -> Dict[str, Any]:
    """Scan ``root`` and return ``{"game": ..., "maps": [...], ...}``."""
    if not os.path.isdir(root):
        raise ConfigurationError(f"Configuration path '{root}' is not a directory")
    data: Dict[str, Any] = {section: [] for section in SECTION_DIRS}
    game_sources: List[str] = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for fname in sorted(filenames):
            if not fname.endswith(_EXTENSIONS):
                continue
            full_path = os.path.join(dirpath, fname)
            if fname in GAME_FILES:
                data["game"] = _load_file(full_path)
                game_sources.append(full_path)
                continue
            parent = os.path.basename(dirpath)
            if parent not in SECTION_DIRS:
                logger.info("Found unknown file '%s', ignoring", full_path)
                continue
            doc = _load_file(full_path)
            if doc is None:
                logger.debug("Empty definition file '%s'", full_path)
                continue
            # dialog files hold a list; the other kinds one document per file
            # but a list of documents is accepted too
            if isinstance(doc, list):
                data[parent].extend(doc)
            else:
                data[parent].append(doc)
            logger.debug("Loaded %s definition from '%s'", parent, full_path)

    if len(game_sources) > 1:
        raise ConfigurationError(f"Multiple game definition files found: {', '.join(game_sources)}")
    if not game_sources:
        raise ConfigurationError(f"No game.yaml found under '{root}'")
    return data


__all__ = ["load_definitions", "SECTION_DIRS"]
