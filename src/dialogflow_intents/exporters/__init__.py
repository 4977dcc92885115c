"""Export path: merge utterance sets back into an agent archive."""
from __future__ import annotations

from dialogflow_intents.exporters.merger import MergeReport, UtteranceMerger

__all__ = ["MergeReport", "UtteranceMerger"]
