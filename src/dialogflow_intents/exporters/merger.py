"""Merge new user examples into an agent archive.

Classes
-------
MergeReport
    Outcome of a merge: which utterance sets changed, which were skipped.
UtteranceMerger
    Appends examples missing from the archive to the matching user-says entries.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from dialogflow_intents.archive.agent_zip import INTENTS_PREFIX, AgentArchive
from dialogflow_intents.archive.utterances import extract_examples, to_dialogflow_utterances
from dialogflow_intents.errors import AgentUnpackError
from dialogflow_intents.importers.base import read_entry_json
from dialogflow_intents.model.convo import UtteranceSet
from dialogflow_intents.status import StatusReporter


@dataclass
class MergeReport:
    """Per-run summary of :meth:`UtteranceMerger.merge`.

    Attributes
    ----------
    added:
        Utterance-set name to number of examples appended to the archive.
    unchanged:
        Utterance sets whose examples were all present already.
    skipped:
        Utterance sets without a matching user-says entry.
    """

    added: dict[str, int] = field(default_factory=dict)
    unchanged: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def writes(self) -> int:
        """Number of archive entries rewritten."""
        return len(self.added)


class UtteranceMerger:
    """Append new examples of each utterance set to the archive.

    The target entry of an utterance set named ``N`` is
    ``intents/N_usersays_<language>.json``.  Existing examples are kept in
    place; new ones are appended in input order.  Equality is plain string
    comparison on the flattened example text.
    """

    def entry_name(self, utterance_set_name: str, language: str) -> str:
        return f"{INTENTS_PREFIX}{utterance_set_name}_usersays_{language}.json"

    def merge(
        self,
        archive: AgentArchive,
        utterance_sets: Iterable[UtteranceSet],
        status: StatusReporter | None = None,
    ) -> MergeReport:
        status = status or StatusReporter()
        report = MergeReport()
        language = archive.language

        for utterance_set in utterance_sets:
            entry_name = self.entry_name(utterance_set.name, language)
            if entry_name not in archive:
                status(f'User examples files not found for "{utterance_set.name}", ignoring intent')
                report.skipped.append(utterance_set.name)
                continue

            existing = read_entry_json(archive, entry_name)
            if not isinstance(existing, list):
                raise AgentUnpackError(f"{entry_name}: user examples must be a JSON list")
            known = set(extract_examples(existing))
            new_examples: list[str] = []
            for example in utterance_set.utterances:
                if example not in known:
                    known.add(example)
                    new_examples.append(example)

            if not new_examples:
                status(f'No new user examples files found for "{utterance_set.name}".')
                report.unchanged.append(utterance_set.name)
                continue

            status(
                f'{len(new_examples)} new user examples found for "{utterance_set.name}", '
                "adding to agent",
                new_examples,
            )
            archive.write_json(entry_name, existing + to_dialogflow_utterances(new_examples, language))
            report.added[utterance_set.name] = len(new_examples)

        return report
