"""Conversation and utterance-set records produced by the importers.

A :class:`Conversation` is a named, linear list of :class:`ConvoStep` turns.
User turns reference an :class:`UtteranceSet` by name; bot turns assert the
expected intent and optionally reference the utterance set holding the
expected reply.

Constants
---------
INCOMPREHENSION
    Message text marking a bot turn for which no reply text exists.

Classes
-------
Asserter
    A named assertion evaluated on a bot turn (e.g. ``INTENT``).
LogicHook
    A named directive executed on a user turn (e.g. ``UPDATE_CUSTOM``).
ConvoStep
    A single user or bot turn.
Conversation
    Pydantic model for a complete test conversation.
UtteranceSet
    Pydantic model for a named list of example phrases.
"""
from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field

INCOMPREHENSION: str = "!INCOMPREHENSION"

SENDER_USER: str = "me"
SENDER_BOT: str = "bot"


# ---------------------------------------------------------------------------
# Frozen dataclasses — step building blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Asserter:
    """An assertion attached to a bot turn."""

    name: str
    args: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "args": list(self.args)}


@dataclass(frozen=True)
class LogicHook:
    """A directive attached to a user turn."""

    name: str
    args: tuple[object, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "args": list(self.args)}

    @classmethod
    def set_context(cls, context: str, lifespan: int = 1) -> LogicHook:
        """Directive activating a Dialogflow input context before the user turn."""
        return cls(name="UPDATE_CUSTOM", args=("SET_DIALOGFLOW_CONTEXT", context, lifespan))


@dataclass(frozen=True)
class ConvoStep:
    """A single conversation turn.

    Parameters
    ----------
    sender:
        ``"me"`` for a user turn, ``"bot"`` for a bot turn.
    message_text:
        For user turns, the name of the utterance set to send.  For bot turns,
        the name of the utterance set holding the expected reply, the
        :data:`INCOMPREHENSION` marker, or ``None``.
    asserters:
        Assertions evaluated on a bot turn.
    logic_hooks:
        Directives executed with a user turn.
    intent:
        Display name of the intent a user turn belongs to.  Used to name
        multi-step conversations.
    """

    sender: str
    message_text: str | None = None
    asserters: tuple[Asserter, ...] = ()
    logic_hooks: tuple[LogicHook, ...] = ()
    intent: str | None = None

    def __post_init__(self) -> None:
        if self.sender not in {SENDER_USER, SENDER_BOT}:
            raise ValueError(
                f"ConvoStep.sender must be {SENDER_USER!r} or {SENDER_BOT!r}, got {self.sender!r}"
            )

    @classmethod
    def user_turn(
        cls,
        utterances_ref: str,
        *,
        intent: str | None = None,
        contexts: list[str] | tuple[str, ...] = (),
    ) -> ConvoStep:
        return cls(
            sender=SENDER_USER,
            message_text=utterances_ref,
            logic_hooks=tuple(LogicHook.set_context(context) for context in contexts),
            intent=intent,
        )

    @classmethod
    def bot_turn(cls, intent_name: str, *, reply_ref: str | None = None) -> ConvoStep:
        return cls(
            sender=SENDER_BOT,
            message_text=reply_ref,
            asserters=(Asserter(name="INTENT", args=(intent_name,)),),
        )

    @classmethod
    def fallback(cls) -> ConvoStep:
        """Bot turn expecting the no-match fallback."""
        return cls(sender=SENDER_BOT, message_text=INCOMPREHENSION)

    @property
    def is_user(self) -> bool:
        return self.sender == SENDER_USER

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"sender": self.sender}
        if self.message_text is not None:
            data["messageText"] = self.message_text
        if self.asserters:
            data["asserters"] = [asserter.to_dict() for asserter in self.asserters]
        if self.logic_hooks:
            data["logicHooks"] = [hook.to_dict() for hook in self.logic_hooks]
        return data


# ---------------------------------------------------------------------------
# Pydantic models — importer output
# ---------------------------------------------------------------------------


class Conversation(BaseModel):
    """A linear test conversation."""

    name: str
    steps: list[ConvoStep] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def user_steps(self) -> list[ConvoStep]:
        return [step for step in self.steps if step.is_user]

    def to_dict(self) -> dict[str, object]:
        """Convo document: ``{"header": {"name": ...}, "conversation": [...]}``."""
        return {
            "header": {"name": self.name},
            "conversation": [step.to_dict() for step in self.steps],
        }


class UtteranceSet(BaseModel):
    """A named list of example phrases."""

    name: str
    utterances: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "utterances": list(self.utterances)}
