"""Multi-step import: rebuild follow-up intent chains into linear conversations.

Dialogflow stores follow-up intents as a flat list of definitions linked to
their parent by ``parentId``.  :class:`TreeImporter` indexes every intent by
id, attaches each follow-up to its parent, keeps only the true roots at the
top level and then walks every root depth-first.  Each root-to-leaf path
becomes one conversation; every visited intent contributes one user turn and
one bot turn per response definition.

Classes
-------
- TreeImporter  — reconstructs the intent forest and enumerates its paths
"""
from __future__ import annotations

import logging

from dialogflow_intents.archive.agent_zip import AgentArchive, usersays_entry_name
from dialogflow_intents.importers.base import (
    ImportResult,
    read_definition,
    read_examples,
    slugify,
)
from dialogflow_intents.model.convo import Conversation, ConvoStep, UtteranceSet
from dialogflow_intents.model.intent import IntentRecord
from dialogflow_intents.status import StatusReporter

logger = logging.getLogger(__name__)

TEXT_MESSAGE_TYPE: str = "0"
DEFAULT_NAME_SEPARATOR: str = " - "


def extract_output_variants(responses: object, language: str) -> list[list[str]]:
    """Reply phrases of an intent, one list per response definition.

    Only text messages (``type`` 0) in *language* with a non-empty ``speech``
    count.  A list-valued ``speech`` is flattened; a scalar one is wrapped.
    """
    variants: list[list[str]] = []
    for response in responses or []:  # type: ignore[union-attr]
        phrases: list[str] = []
        for message in response.get("messages") or []:
            if str(message.get("type")) != TEXT_MESSAGE_TYPE:
                continue
            if message.get("lang") != language or not message.get("speech"):
                continue
            speech = message["speech"]
            if isinstance(speech, list):
                phrases.extend(str(phrase) for phrase in speech)
            else:
                phrases.append(str(speech))
        variants.append(phrases)
    return variants


class TreeImporter:
    """Import follow-up intent chains as multi-step conversations.

    Parameters
    ----------
    name_separator:
        Joins the intent names along a path into the conversation name.

    Example
    -------
    Given intents ``A`` (root), ``B`` (follow-up of A) and ``C`` (follow-up
    of B), a single conversation named ``"A - B - C"`` is produced.
    """

    def __init__(self, name_separator: str = DEFAULT_NAME_SEPARATOR) -> None:
        self.name_separator = name_separator

    def import_intents(
        self, archive: AgentArchive, status: StatusReporter | None = None
    ) -> ImportResult:
        status = status or StatusReporter()
        index = self.load_index(archive, status)
        roots = self.link(index, status)

        result = ImportResult()
        for root in roots:
            self._walk(root, result)
        return result

    # ------------------------------------------------------------------
    # Index construction
    # ------------------------------------------------------------------

    def load_index(
        self, archive: AgentArchive, status: StatusReporter
    ) -> dict[str, IntentRecord]:
        """Read every intent with a paired example file, keyed by identity.

        Insertion order follows the archive entry order.
        """
        index: dict[str, IntentRecord] = {}
        for entry_name in archive.intent_entry_names():
            definition = read_definition(archive, entry_name)
            record = IntentRecord.from_definition(definition)

            examples_entry = usersays_entry_name(entry_name, archive.language)
            logger.debug(
                "Found intent %r, checking for utterances in %s",
                record.display_name,
                examples_entry,
            )
            if examples_entry not in archive:
                status(f"Utterances files not found for {record.display_name}, ignoring intent")
                continue
            if record.identity in index:
                status(
                    f"Duplicate intent id {record.identity} for {record.display_name}, "
                    f"replacing {index[record.identity].display_name}",
                    record.identity,
                )

            record.input_examples = read_examples(archive, examples_entry)
            record.output_variants = extract_output_variants(
                definition.get("responses"), archive.language
            )
            index[record.identity] = record
        return index

    def link(
        self, index: dict[str, IntentRecord], status: StatusReporter
    ) -> list[IntentRecord]:
        """Attach follow-ups to their parents and return the root records.

        Records whose parent is missing are dropped.  Records on a parent
        cycle can never be reached from a root; they are reported and dropped.
        """
        linked: list[IntentRecord] = []
        for record in index.values():
            record.children = []
        for record in index.values():
            if record.is_root:
                continue
            parent = index.get(record.parent_identity)  # type: ignore[arg-type]
            if parent is None:
                logger.warning(
                    "Parent intent with id %s not found for %s, ignoring intent",
                    record.parent_identity,
                    record.display_name,
                )
                status(
                    f"Parent intent with id {record.parent_identity} not found for "
                    f"{record.display_name}, ignoring intent",
                    record.identity,
                )
                continue
            parent.children.append(record)
            linked.append(record)

        roots = [record for record in index.values() if record.is_root]
        self._report_cycles(roots, linked, index, status)
        return roots

    def _report_cycles(
        self,
        roots: list[IntentRecord],
        linked: list[IntentRecord],
        index: dict[str, IntentRecord],
        status: StatusReporter,
    ) -> None:
        reachable: set[str] = set()
        pending = list(roots)
        while pending:
            record = pending.pop()
            reachable.add(record.identity)
            pending.extend(record.children)

        for record in linked:
            if record.identity in reachable or not _on_parent_cycle(record, index):
                continue
            logger.warning(
                "Intent %s is part of a follow-up cycle, ignoring intent", record.display_name
            )
            status(
                f"Intent {record.display_name} is part of a follow-up cycle, ignoring intent",
                record.identity,
            )

    # ------------------------------------------------------------------
    # Path enumeration
    # ------------------------------------------------------------------

    def _walk(self, root: IntentRecord, result: ImportResult) -> None:
        """Depth-first, children in insertion order, without recursion."""
        pending: list[tuple[IntentRecord, tuple[ConvoStep, ...]]] = [(root, ())]
        while pending:
            record, path = pending.pop()
            path = path + self._steps(record, result)
            if record.children:
                pending.extend((child, path) for child in reversed(record.children))
                continue

            conversation = Conversation(
                name=self.name_separator.join(
                    step.intent or "" for step in path if step.is_user
                ),
                steps=list(path),
            )
            logger.debug("Built conversation %r with %d steps", conversation.name, len(path))
            result.conversations.append(conversation)

    def _steps(self, record: IntentRecord, result: ImportResult) -> tuple[ConvoStep, ...]:
        """User and bot turns of *record*; emits the utterance sets they reference."""
        utterances_ref = slugify(f"{record.display_name}_input")
        result.utterance_sets.append(
            UtteranceSet(name=utterances_ref, utterances=record.input_examples)
        )
        steps = [ConvoStep.user_turn(utterances_ref, intent=record.display_name)]

        if record.output_variants:
            for variant_index, phrases in enumerate(record.output_variants):
                reply_ref = None
                if phrases:
                    reply_ref = slugify(f"{record.display_name}_output_{variant_index}")
                    result.utterance_sets.append(UtteranceSet(name=reply_ref, utterances=phrases))
                steps.append(ConvoStep.bot_turn(record.display_name, reply_ref=reply_ref))
        else:
            steps.append(ConvoStep.fallback())
        return tuple(steps)

    def __repr__(self) -> str:
        return f"TreeImporter(name_separator={self.name_separator!r})"


def _on_parent_cycle(record: IntentRecord, index: dict[str, IntentRecord]) -> bool:
    """True when following parent links from *record* revisits an intent."""
    seen: set[str] = set()
    current: IntentRecord | None = record
    while current is not None and current.parent_identity is not None:
        if current.identity in seen:
            return True
        seen.add(current.identity)
        current = index.get(current.parent_identity)
    return False
