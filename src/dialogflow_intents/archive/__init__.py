"""Agent archive access and user-says encoding."""
from __future__ import annotations

from dialogflow_intents.archive.agent_zip import AgentArchive, usersays_entry_name
from dialogflow_intents.archive.utterances import (
    extract_examples,
    extract_utterance_text,
    to_dialogflow_utterances,
)

__all__ = [
    "AgentArchive",
    "extract_examples",
    "extract_utterance_text",
    "to_dialogflow_utterances",
    "usersays_entry_name",
]
