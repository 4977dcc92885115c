"""Shared building blocks for the intent importers.

Classes
-------
ImportResult
    Conversations and utterance sets produced by one import run.
IntentImporter
    Protocol satisfied by :class:`FlatImporter` and :class:`TreeImporter`.

Functions
---------
slugify
    Normalise a display name into an utterance-set reference.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Protocol

from dialogflow_intents.archive.agent_zip import AgentArchive
from dialogflow_intents.archive.utterances import extract_examples
from dialogflow_intents.errors import AgentUnpackError
from dialogflow_intents.model.convo import Conversation, UtteranceSet
from dialogflow_intents.model.intent import IntentRecord
from dialogflow_intents.status import StatusReporter

_SLUG_INVALID = re.compile(r"[^\w\s-]")
_SLUG_WHITESPACE = re.compile(r"\s+")


def slugify(text: str) -> str:
    """Lower-case *text*, drop punctuation and join words with ``-``.

    Underscores survive, so ``slugify("Order Pizza_output_0")`` is
    ``"order-pizza_output_0"``.
    """
    cleaned = _SLUG_INVALID.sub("", text).strip()
    return _SLUG_WHITESPACE.sub("-", cleaned).lower()


@dataclass
class ImportResult:
    """Output of an importer run."""

    conversations: list[Conversation] = field(default_factory=list)
    utterance_sets: list[UtteranceSet] = field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"ImportResult(conversations={len(self.conversations)}, "
            f"utterance_sets={len(self.utterance_sets)})"
        )


class IntentImporter(Protocol):
    """Protocol for importers turning an agent archive into test records."""

    def import_intents(
        self, archive: AgentArchive, status: StatusReporter | None = None
    ) -> ImportResult:
        ...  # pragma: no cover


# ---------------------------------------------------------------------------
# Entry helpers
# ---------------------------------------------------------------------------


def read_entry_json(archive: AgentArchive, name: str) -> object:
    """Parse a JSON archive entry, reporting corrupt content as an unpack failure."""
    try:
        return archive.read_json(name)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise AgentUnpackError(f"{name}: {exc}") from exc


def read_definition(archive: AgentArchive, name: str) -> dict[str, object]:
    definition = read_entry_json(archive, name)
    if not isinstance(definition, dict):
        raise AgentUnpackError(f"{name}: intent definition must be a JSON object")
    return definition


def read_intent(archive: AgentArchive, name: str) -> IntentRecord:
    return IntentRecord.from_definition(read_definition(archive, name))


def read_examples(archive: AgentArchive, name: str) -> list[str]:
    entries = read_entry_json(archive, name)
    if not isinstance(entries, list):
        raise AgentUnpackError(f"{name}: user examples must be a JSON list")
    return extract_examples(entries)
