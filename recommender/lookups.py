"""
Lookup Tables

Read-only keyword data used by the local intent detectors:
known brands, category keyword patterns, category aliases
and feature trigger words.

The default tables ship as ``data/lookup_tables.json`` and are loaded once.
A different JSON file with the same shape can be supplied through
``LOOKUP_TABLES_PATH`` or passed directly to ``load_lookup_tables``.
"""

import json
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

DEFAULT_TABLES_PATH = Path(__file__).parent / "data" / "lookup_tables.json"


@dataclass(frozen=True)
class LookupTables:
    """Immutable keyword tables. Tuple order is match priority."""

    brands: tuple[str, ...]
    category_patterns: tuple[tuple[str, re.Pattern], ...]
    category_aliases: Mapping[str, str]
    feature_triggers: tuple[tuple[str, tuple[str, ...]], ...]


def build_lookup_tables(data: dict) -> LookupTables:
    """Build LookupTables from a plain dict (the JSON file shape)."""
    brands = tuple(str(b).lower() for b in data.get("brands", []))

    category_patterns = tuple(
        (str(row["category"]), re.compile(str(row["pattern"]), re.IGNORECASE))
        for row in data.get("category_patterns", [])
    )

    aliases = {
        str(key).strip().lower(): str(value)
        for key, value in data.get("category_aliases", {}).items()
    }

    feature_triggers = tuple(
        (str(row["feature"]), tuple(str(t).lower() for t in row.get("triggers", [])))
        for row in data.get("feature_triggers", [])
    )

    return LookupTables(
        brands=brands,
        category_patterns=category_patterns,
        category_aliases=MappingProxyType(aliases),
        feature_triggers=feature_triggers,
    )


@lru_cache
def load_lookup_tables(path: Optional[Union[str, Path]] = None) -> LookupTables:
    """Load tables from a JSON file, defaulting to the bundled one."""
    source = Path(path) if path else DEFAULT_TABLES_PATH
    with open(source, encoding="utf-8") as fh:
        return build_lookup_tables(json.load(fh))
