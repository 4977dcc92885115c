"""Exception hierarchy for dialogflow-intents.

Fatal conditions abort the running import or export and surface as one of
the classes below.  Non-fatal conditions never raise; they are reported via
:class:`~dialogflow_intents.status.StatusReporter`.

Classes
-------
- DialogflowIntentsError  — base class for all package errors
- AgentConnectionError    — the remote agent could not be reached
- AgentUnpackError        — the agent archive could not be read
- CapabilityError         — invalid or incomplete capability configuration
"""
from __future__ import annotations


class DialogflowIntentsError(Exception):
    """Base class for every error raised by this package."""


class AgentConnectionError(DialogflowIntentsError):
    """Raised when the Dialogflow agent cannot be exported or restored remotely."""

    def __init__(self, cause: BaseException | str) -> None:
        self.cause_message = str(cause)
        super().__init__(f"Dialogflow agent connection failed: {self.cause_message}")


class AgentUnpackError(DialogflowIntentsError):
    """Raised when an agent archive is corrupt or lacks ``agent.json``."""

    def __init__(self, cause: BaseException | str) -> None:
        self.cause_message = str(cause)
        super().__init__(f"Dialogflow agent unpack failed: {self.cause_message}")


class CapabilityError(DialogflowIntentsError, ValueError):
    """Raised when the capability map is invalid or misses a required key."""
