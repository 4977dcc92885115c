"""Host test-framework driver and convo compiler."""
from __future__ import annotations

from dialogflow_intents.runtime.compiler import ConvoCompiler
from dialogflow_intents.runtime.driver import (
    BotDriver,
    CapabilityContainer,
    CapabilityDriver,
    RuntimeContainer,
)

__all__ = [
    "BotDriver",
    "CapabilityContainer",
    "CapabilityDriver",
    "ConvoCompiler",
    "RuntimeContainer",
]
