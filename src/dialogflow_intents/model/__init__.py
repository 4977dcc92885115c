"""Domain records shared by importers, exporters and the CLI."""
from __future__ import annotations

from dialogflow_intents.model.convo import (
    INCOMPREHENSION,
    Asserter,
    Conversation,
    ConvoStep,
    LogicHook,
    UtteranceSet,
)
from dialogflow_intents.model.intent import IntentRecord

__all__ = [
    "INCOMPREHENSION",
    "Asserter",
    "Conversation",
    "ConvoStep",
    "IntentRecord",
    "LogicHook",
    "UtteranceSet",
]
