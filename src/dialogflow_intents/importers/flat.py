"""Single-step import: one utterance set (and optionally one convo) per root intent.

Classes
-------
- FlatImporter  — imports root intents without rebuilding follow-up chains
"""
from __future__ import annotations

import logging

from dialogflow_intents.archive.agent_zip import AgentArchive, usersays_entry_name
from dialogflow_intents.importers.base import (
    ImportResult,
    read_examples,
    read_intent,
    slugify,
)
from dialogflow_intents.model.convo import Conversation, ConvoStep, UtteranceSet
from dialogflow_intents.status import StatusReporter

logger = logging.getLogger(__name__)


class FlatImporter:
    """Import every root intent of an agent archive.

    Follow-up intents (those with a ``parentId``) are ignored.

    Parameters
    ----------
    build_convos:
        When False (default), only utterance sets are emitted, named after the
        raw intent name, and intents requiring input contexts are skipped.
        When True, each intent yields a slugged utterance set and a two-step
        conversation asserting the intent; required contexts are set by
        logic hooks on the user turn.
    """

    def __init__(self, build_convos: bool = False) -> None:
        self.build_convos = build_convos

    def import_intents(
        self, archive: AgentArchive, status: StatusReporter | None = None
    ) -> ImportResult:
        status = status or StatusReporter()
        result = ImportResult()

        for entry_name in archive.intent_entry_names():
            intent = read_intent(archive, entry_name)
            if not intent.is_root:
                continue

            examples_entry = usersays_entry_name(entry_name, archive.language)
            logger.debug(
                "Found root intent %r, checking for utterances in %s",
                intent.display_name,
                examples_entry,
            )
            if examples_entry not in archive:
                status(f'Utterances files not found for "{intent.display_name}", ignoring intent')
                continue
            intent.input_examples = read_examples(archive, examples_entry)

            if self.build_convos:
                utterances_ref = slugify(intent.display_name)
                result.utterance_sets.append(
                    UtteranceSet(name=utterances_ref, utterances=intent.input_examples)
                )
                result.conversations.append(
                    Conversation(
                        name=intent.display_name,
                        steps=[
                            ConvoStep.user_turn(
                                utterances_ref, contexts=intent.required_contexts
                            ),
                            ConvoStep.bot_turn(intent.display_name),
                        ],
                    )
                )
            elif intent.required_contexts:
                status(
                    f'Found intent requiring context ("{intent.display_name}": '
                    f'{",".join(intent.required_contexts)}), ignoring intent',
                    intent.required_contexts,
                )
            else:
                result.utterance_sets.append(
                    UtteranceSet(name=intent.display_name, utterances=intent.input_examples)
                )

        return result

    def __repr__(self) -> str:
        return f"FlatImporter(build_convos={self.build_convos})"
