"""Remote NLU provider access."""
from __future__ import annotations

from dialogflow_intents.provider.base import AgentProvider
from dialogflow_intents.provider.dialogflow import DialogflowAgentProvider

__all__ = ["AgentProvider", "DialogflowAgentProvider"]
