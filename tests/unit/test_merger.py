"""Unit tests for dialogflow_intents.exporters.merger."""
from __future__ import annotations

import pytest
from conftest import AgentZipBuilder

from dialogflow_intents.archive.utterances import extract_examples
from dialogflow_intents.errors import AgentUnpackError
from dialogflow_intents.exporters.merger import UtteranceMerger
from dialogflow_intents.model.convo import UtteranceSet
from dialogflow_intents.status import StatusReporter


class TestMerge:
    def test_new_examples_are_appended(self, builder: AgentZipBuilder) -> None:
        builder.add_intent("Greeting", examples=["hi", "hello"])
        archive = builder.archive()

        report = UtteranceMerger().merge(
            archive, [UtteranceSet(name="Greeting", utterances=["hello", "hey", "yo"])]
        )

        assert report.added == {"Greeting": 2}
        assert report.writes == 1
        entries = archive.read_json("intents/Greeting_usersays_en.json")
        assert extract_examples(entries) == ["hi", "hello", "hey", "yo"]
        assert entries[0]["id"] == "ex-0"
        assert entries[2]["lang"] == "en"

    def test_duplicate_new_examples_are_added_once(self, builder: AgentZipBuilder) -> None:
        builder.add_intent("Greeting", examples=["hi"])
        archive = builder.archive()

        UtteranceMerger().merge(archive, [UtteranceSet(name="Greeting", utterances=["hey", "hey"])])

        assert extract_examples(archive.read_json("intents/Greeting_usersays_en.json")) == [
            "hi",
            "hey",
        ]

    def test_rerun_is_idempotent(
        self,
        builder: AgentZipBuilder,
        status: StatusReporter,
        status_messages: list[tuple[str, object]],
    ) -> None:
        builder.add_intent("Greeting", examples=["hi"])
        builder.add_intent("Bye", examples=["bye"])
        archive = builder.archive()
        sets = [
            UtteranceSet(name="Greeting", utterances=["hi", "hey"]),
            UtteranceSet(name="Bye", utterances=["ciao"]),
        ]
        UtteranceMerger().merge(archive, sets)
        before = {name: archive.read_text(name) for name in archive.entry_names()}

        report = UtteranceMerger().merge(archive, sets, status)

        assert report.writes == 0
        assert report.unchanged == ["Greeting", "Bye"]
        assert {name: archive.read_text(name) for name in archive.entry_names()} == before
        assert [message for message, _ in status_messages] == [
            'No new user examples files found for "Greeting".',
            'No new user examples files found for "Bye".',
        ]

    def test_unmatched_set_is_skipped(
        self,
        builder: AgentZipBuilder,
        status: StatusReporter,
        status_messages: list[tuple[str, object]],
    ) -> None:
        archive = builder.archive()

        report = UtteranceMerger().merge(archive, [UtteranceSet(name="ghost", utterances=["boo"])], status)

        assert report.skipped == ["ghost"]
        assert status_messages[0][0] == 'User examples files not found for "ghost", ignoring intent'

    def test_corrupt_entry_is_an_unpack_failure(self, builder: AgentZipBuilder) -> None:
        builder.entries["intents/Bad_usersays_en.json"] = "{not json"
        archive = builder.archive()

        with pytest.raises(AgentUnpackError):
            UtteranceMerger().merge(archive, [UtteranceSet(name="Bad", utterances=["x"])])

    def test_entry_name_uses_archive_language(self) -> None:
        assert UtteranceMerger().entry_name("Greeting", "fr") == "intents/Greeting_usersays_fr.json"
