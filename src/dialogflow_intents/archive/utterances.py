"""Conversion between Dialogflow user-says entries and plain-text examples.

A user-says entry stores one example as an ordered list of ``data``
fragments; entity annotations split the phrase into several fragments.
"""
from __future__ import annotations

from collections.abc import Iterable
from uuid import uuid4


def extract_utterance_text(entry: dict[str, object]) -> str:
    """Concatenate the ``text`` of every fragment in *entry*, in order.

    >>> extract_utterance_text({"data": [{"text": "book "}, {"text": "a "}, {"text": "flight"}]})
    'book a flight'
    """
    fragments = entry.get("data") or []
    return "".join(str(fragment.get("text") or "") for fragment in fragments)  # type: ignore[union-attr]


def extract_examples(entries: Iterable[dict[str, object]]) -> list[str]:
    """Plain-text examples of a parsed ``*_usersays_<lang>.json`` document."""
    return [extract_utterance_text(entry) for entry in entries]


def to_dialogflow_utterances(examples: Iterable[str], language: str) -> list[dict[str, object]]:
    """Encode plain-text *examples* as Dialogflow user-says entries."""
    return [
        {
            "id": str(uuid4()),
            "data": [{"text": example, "userDefined": False}],
            "isTemplate": False,
            "count": 0,
            "lang": language,
            "updated": 0,
        }
        for example in examples
    ]
