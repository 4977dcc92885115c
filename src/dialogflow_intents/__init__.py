"""dialogflow-intents — convert Dialogflow agents to test conversations and back.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import dialogflow_intents
>>> dialogflow_intents.__version__
'0.1.0'
"""
from __future__ import annotations

# Records
from dialogflow_intents.model.convo import (
    INCOMPREHENSION,
    Asserter,
    Conversation,
    ConvoStep,
    LogicHook,
    UtteranceSet,
)
from dialogflow_intents.model.intent import IntentRecord

# Archive access
from dialogflow_intents.archive.agent_zip import AgentArchive
from dialogflow_intents.archive.utterances import (
    extract_examples,
    extract_utterance_text,
    to_dialogflow_utterances,
)

# Importers / exporters
from dialogflow_intents.importers import (
    FlatImporter,
    ImportResult,
    IntentImporter,
    TreeImporter,
    slugify,
)
from dialogflow_intents.exporters import MergeReport, UtteranceMerger

# Configuration, runtime and provider
from dialogflow_intents.config import DialogflowCaps, load_caps
from dialogflow_intents.runtime import CapabilityDriver, ConvoCompiler
from dialogflow_intents.provider import AgentProvider
from dialogflow_intents.status import StatusReporter

# Flows
from dialogflow_intents.orchestrator import ExportResult, export_handler, import_handler

# Errors
from dialogflow_intents.errors import (
    AgentConnectionError,
    AgentUnpackError,
    CapabilityError,
    DialogflowIntentsError,
)

__version__: str = "0.1.0"

__all__ = [
    "__version__",
    # Records
    "INCOMPREHENSION",
    "Asserter",
    "Conversation",
    "ConvoStep",
    "IntentRecord",
    "LogicHook",
    "UtteranceSet",
    # Archive
    "AgentArchive",
    "extract_examples",
    "extract_utterance_text",
    "to_dialogflow_utterances",
    # Importers / exporters
    "FlatImporter",
    "ImportResult",
    "IntentImporter",
    "MergeReport",
    "TreeImporter",
    "UtteranceMerger",
    "slugify",
    # Configuration, runtime and provider
    "AgentProvider",
    "CapabilityDriver",
    "ConvoCompiler",
    "DialogflowCaps",
    "StatusReporter",
    "load_caps",
    # Flows
    "ExportResult",
    "export_handler",
    "import_handler",
    # Errors
    "AgentConnectionError",
    "AgentUnpackError",
    "CapabilityError",
    "DialogflowIntentsError",
]
