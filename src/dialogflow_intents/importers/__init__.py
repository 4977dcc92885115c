"""Importers turning an agent archive into conversations and utterance sets.

- :class:`FlatImporter` — one utterance set (and optional convo) per root intent
- :class:`TreeImporter` — one convo per follow-up path, rebuilt from ``parentId`` links
"""
from __future__ import annotations

from dialogflow_intents.importers.base import ImportResult, IntentImporter, slugify
from dialogflow_intents.importers.flat import FlatImporter
from dialogflow_intents.importers.tree import TreeImporter, extract_output_variants

__all__ = [
    "FlatImporter",
    "ImportResult",
    "IntentImporter",
    "TreeImporter",
    "extract_output_variants",
    "slugify",
]
