#!/usr/bin/env python3
"""Example: Multi-step conversations from an exported Dialogflow agent

Builds a small agent archive in memory (a welcome intent with two follow-ups),
imports it as multi-step conversations and merges a new user example back.

Usage:
    python examples/01_import_agent_zip.py

Requirements:
    pip install dialogflow-intents
"""
from __future__ import annotations

import io
import json
import tempfile
import zipfile
from pathlib import Path

import dialogflow_intents
from dialogflow_intents import UtteranceSet, export_handler, import_handler


def _intent(name: str, identity: str, parent: str | None, reply: str) -> dict[str, object]:
    definition: dict[str, object] = {
        "id": identity,
        "name": name,
        "responses": [{"messages": [{"type": "0", "lang": "en", "speech": [reply]}]}],
    }
    if parent:
        definition["parentId"] = parent
    return definition


def _examples(*texts: str) -> list[dict[str, object]]:
    return [{"data": [{"text": text, "userDefined": False}]} for text in texts]


def build_agent_zip(path: Path) -> Path:
    entries = {
        "agent.json": {"language": "en"},
        "intents/Order Pizza.json": _intent("Order Pizza", "1", None, "Which size?"),
        "intents/Order Pizza_usersays_en.json": _examples("I want a pizza", "pizza please"),
        "intents/Order Pizza - large.json": _intent("Order Pizza - large", "2", "1", "Large it is."),
        "intents/Order Pizza - large_usersays_en.json": _examples("large"),
        "intents/Order Pizza - small.json": _intent("Order Pizza - small", "3", "1", "Small it is."),
        "intents/Order Pizza - small_usersays_en.json": _examples("small"),
    }
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in entries.items():
            zf.writestr(name, json.dumps(content))
    path.write_bytes(buf.getvalue())
    return path


def main() -> None:
    print(f"dialogflow-intents version: {dialogflow_intents.__version__}")

    with tempfile.TemporaryDirectory() as tmp:
        agentzip = build_agent_zip(Path(tmp) / "agent.zip")

        result = import_handler(buildmultistepconvos=True, agentzip=agentzip)
        for conversation in result.conversations:
            print(f"  {conversation.name}: {len(conversation.steps)} steps")
        print(f"  Utterance sets: {[u.name for u in result.utterance_sets]}")

        export = export_handler(
            [UtteranceSet(name="Order Pizza", utterances=["pizza please", "one pizza"])],
            agentzip=agentzip,
            output=Path(tmp) / "merged.zip",
            status_callback=lambda message, data: print(f"  status: {message}"),
        )
        print(f"Merged {export.report.added} into {export.destination}")


if __name__ == "__main__":
    main()
