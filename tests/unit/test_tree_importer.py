"""Unit tests for dialogflow_intents.importers.tree.

Tests cover:
- Output-variant extraction from response definitions
- Follow-up linking, orphan and cycle handling
- Path enumeration: naming, step layout, sibling independence
- Utterance-set emission per input and non-empty output step
"""
from __future__ import annotations

from conftest import AgentZipBuilder, text_response

from dialogflow_intents.importers.tree import TreeImporter, extract_output_variants
from dialogflow_intents.model.convo import INCOMPREHENSION
from dialogflow_intents.status import StatusReporter


def _import(builder: AgentZipBuilder, status: StatusReporter | None = None):
    return TreeImporter().import_intents(builder.archive(), status)


# ---------------------------------------------------------------------------
# extract_output_variants
# ---------------------------------------------------------------------------


class TestExtractOutputVariants:
    def test_no_responses(self) -> None:
        assert extract_output_variants(None, "en") == []
        assert extract_output_variants([], "en") == []

    def test_list_speech_is_flattened(self) -> None:
        responses = [text_response("Hi", "Hello")]
        assert extract_output_variants(responses, "en") == [["Hi", "Hello"]]

    def test_scalar_speech_is_wrapped(self) -> None:
        responses = [{"messages": [{"type": 0, "lang": "en", "speech": "Hi"}]}]
        assert extract_output_variants(responses, "en") == [["Hi"]]

    def test_other_language_and_type_are_ignored(self) -> None:
        responses = [
            {
                "messages": [
                    {"type": "0", "lang": "de", "speech": "Hallo"},
                    {"type": "4", "lang": "en", "payload": {}},
                    {"type": "0", "lang": "en", "speech": ""},
                    {"type": "0", "lang": "en", "speech": ["Hi"]},
                ]
            }
        ]
        assert extract_output_variants(responses, "en") == [["Hi"]]

    def test_one_entry_per_response_even_when_empty(self) -> None:
        responses = [text_response("A"), {"messages": []}, {}]
        assert extract_output_variants(responses, "en") == [["A"], [], []]

    def test_multiple_messages_concatenate(self) -> None:
        responses = [
            {
                "messages": [
                    {"type": "0", "lang": "en", "speech": ["one", "two"]},
                    {"type": "0", "lang": "en", "speech": "three"},
                ]
            }
        ]
        assert extract_output_variants(responses, "en") == [["one", "two", "three"]]


# ---------------------------------------------------------------------------
# Path enumeration
# ---------------------------------------------------------------------------


class TestChains:
    def test_three_level_chain_yields_one_conversation(self, builder: AgentZipBuilder) -> None:
        a = builder.add_intent("A", responses=[text_response("a out")], examples=["a in"])
        b = builder.add_intent(
            "B", parent=a, responses=[text_response("b out")], examples=["b in"]
        )
        builder.add_intent("C", parent=b, responses=[text_response("c out")], examples=["c in"])

        result = _import(builder)

        assert len(result.conversations) == 1
        convo = result.conversations[0]
        assert convo.name == "A - B - C"
        assert len(convo.steps) == 6
        assert [step.sender for step in convo.steps] == ["me", "bot"] * 3

    def test_step_count_with_multiple_responses(self, builder: AgentZipBuilder) -> None:
        a = builder.add_intent(
            "A", responses=[text_response("x"), text_response("y")], examples=["a"]
        )
        b = builder.add_intent("B", parent=a, responses=[text_response("z")], examples=["b"])
        builder.add_intent(
            "C",
            parent=b,
            responses=[text_response("p"), text_response("q"), text_response("r")],
            examples=["c"],
        )

        convo = _import(builder).conversations[0]
        assert len(convo.steps) == 3 + (2 + 1 + 3)

    def test_user_steps_reference_input_sets(self, builder: AgentZipBuilder) -> None:
        a = builder.add_intent("Order Pizza", responses=[text_response("Which size?")], examples=["pizza"])
        builder.add_intent("Order Pizza - size", parent=a, examples=["large"])

        result = _import(builder)

        user_refs = [step.message_text for step in result.conversations[0].user_steps]
        assert user_refs == ["order-pizza_input", "order-pizza---size_input"]
        names = [utterance_set.name for utterance_set in result.utterance_sets]
        assert names == ["order-pizza_input", "order-pizza_output_0", "order-pizza---size_input"]

    def test_bot_steps_assert_display_name(self, builder: AgentZipBuilder) -> None:
        builder.add_intent("Greeting", responses=[text_response("Hi")], examples=["hello"])

        bot_step = _import(builder).conversations[0].steps[1]
        assert bot_step.asserters[0].name == "INTENT"
        assert bot_step.asserters[0].args == ("Greeting",)
        assert bot_step.message_text == "greeting_output_0"

    def test_only_non_empty_variants_get_reply_reference(self, builder: AgentZipBuilder) -> None:
        builder.add_intent(
            "Mixed",
            responses=[text_response("one"), {"messages": []}, text_response("three")],
            examples=["go"],
        )

        result = _import(builder)
        bot_steps = [step for step in result.conversations[0].steps if not step.is_user]

        assert len(bot_steps) == 3
        assert [step.message_text for step in bot_steps] == [
            "mixed_output_0",
            None,
            "mixed_output_2",
        ]
        assert all(step.asserters for step in bot_steps)
        assert [u.name for u in result.utterance_sets] == [
            "mixed_input",
            "mixed_output_0",
            "mixed_output_2",
        ]

    def test_no_responses_yields_fallback_step(self, builder: AgentZipBuilder) -> None:
        builder.add_intent("Silent", examples=["hush"])

        steps = _import(builder).conversations[0].steps
        assert len(steps) == 2
        assert steps[1].message_text == INCOMPREHENSION
        assert steps[1].asserters == ()

    def test_intent_without_examples_still_participates(self, builder: AgentZipBuilder) -> None:
        a = builder.add_intent("A", examples=[])
        builder.add_intent("B", parent=a, examples=["b"])

        result = _import(builder)

        assert [c.name for c in result.conversations] == ["A - B"]
        assert result.utterance_sets[0].name == "a_input"
        assert result.utterance_sets[0].utterances == []

    def test_chain_deeper_than_recursion_limit(self, builder: AgentZipBuilder) -> None:
        parent = None
        for level in range(1200):
            parent = builder.add_intent(f"I{level}", parent=parent, examples=["x"])

        result = _import(builder)

        assert len(result.conversations) == 1
        conversation = result.conversations[0]
        assert len(conversation.steps) == 2400
        assert conversation.name.startswith("I0 - I1 - I2")
        assert conversation.name.endswith("I1198 - I1199")


class TestBranches:
    def test_siblings_produce_independent_paths(self, builder: AgentZipBuilder) -> None:
        a = builder.add_intent("A", responses=[text_response("a")], examples=["a"])
        builder.add_intent("B", parent=a, responses=[text_response("b")], examples=["b"])
        builder.add_intent("C", parent=a, examples=["c"])

        result = _import(builder)

        assert [c.name for c in result.conversations] == ["A - B", "A - C"]
        first, second = result.conversations
        assert len(first.steps) == 4
        assert len(second.steps) == 4
        assert first.steps[:2] == second.steps[:2]
        assert first.steps[3].message_text == "b_output_0"
        assert second.steps[3].message_text == INCOMPREHENSION

    def test_each_childless_root_yields_exactly_one_conversation(
        self, builder: AgentZipBuilder
    ) -> None:
        for name in ("One", "Two", "Three"):
            builder.add_intent(name, examples=[name.lower()])

        result = _import(builder)
        assert [c.name for c in result.conversations] == ["One", "Two", "Three"]

    def test_children_are_not_emitted_as_roots(self, builder: AgentZipBuilder) -> None:
        a = builder.add_intent("A", examples=["a"])
        builder.add_intent("B", parent=a, examples=["b"])

        result = _import(builder)
        assert [c.name for c in result.conversations] == ["A - B"]
        assert [u.name for u in result.utterance_sets].count("b_input") == 1

    def test_child_listed_before_parent(self, builder: AgentZipBuilder) -> None:
        builder.add_intent("B", parent="id-A", examples=["b"])
        builder.add_intent("A", examples=["a"])

        assert [c.name for c in _import(builder).conversations] == ["A - B"]


# ---------------------------------------------------------------------------
# Non-fatal conditions
# ---------------------------------------------------------------------------


class TestNonFatal:
    def test_orphan_is_dropped_and_reported(
        self,
        builder: AgentZipBuilder,
        status: StatusReporter,
        status_messages: list[tuple[str, object]],
    ) -> None:
        builder.add_intent("Root", examples=["r"])
        builder.add_intent("Orphan", parent="id-missing", examples=["o"])

        result = _import(builder, status)

        assert [c.name for c in result.conversations] == ["Root"]
        assert all("Orphan" not in c.name for c in result.conversations)
        assert any("id-missing" in message for message, _ in status_messages)

    def test_missing_usersays_skips_intent(
        self,
        builder: AgentZipBuilder,
        status: StatusReporter,
        status_messages: list[tuple[str, object]],
    ) -> None:
        builder.add_intent("NoExamples")
        builder.add_intent("WithExamples", examples=["hi"])

        result = _import(builder, status)

        assert [c.name for c in result.conversations] == ["WithExamples"]
        assert status_messages[0][0] == "Utterances files not found for NoExamples, ignoring intent"

    def test_follow_up_of_skipped_intent_is_orphaned(self, builder: AgentZipBuilder) -> None:
        parent = builder.add_intent("Parent")
        builder.add_intent("Child", parent=parent, examples=["c"])

        assert _import(builder).conversations == []

    def test_parent_cycle_terminates_and_is_reported(
        self,
        builder: AgentZipBuilder,
        status: StatusReporter,
        status_messages: list[tuple[str, object]],
    ) -> None:
        builder.add_intent("Root", examples=["r"])
        builder.add_intent("X", identity="x", parent="y", examples=["x"])
        builder.add_intent("Y", identity="y", parent="x", examples=["y"])

        result = _import(builder, status)

        assert [c.name for c in result.conversations] == ["Root"]
        cyclic = [data for message, data in status_messages if "cycle" in message]
        assert cyclic == ["x", "y"]

    def test_status_defaults_to_logging_only(self, builder: AgentZipBuilder) -> None:
        builder.add_intent("Orphan", parent="nowhere", examples=["o"])
        assert _import(builder).conversations == []
