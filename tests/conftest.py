"""Shared fixtures: in-memory Dialogflow agent archives."""
from __future__ import annotations

import io
import json
import zipfile
from pathlib import Path

import pytest

from dialogflow_intents.archive.agent_zip import AgentArchive


def text_response(*phrases: str, lang: str = "en") -> dict[str, object]:
    """A response definition with one text message holding *phrases*."""
    return {"messages": [{"type": "0", "lang": lang, "speech": list(phrases)}]}


def usersays(examples: list[str], lang: str = "en") -> list[dict[str, object]]:
    return [
        {
            "id": f"ex-{index}",
            "data": [{"text": example, "userDefined": False}],
            "isTemplate": False,
            "count": 0,
            "lang": lang,
            "updated": 0,
        }
        for index, example in enumerate(examples)
    ]


class AgentZipBuilder:
    """Build agent zips entry by entry, in insertion order."""

    def __init__(self, language: str = "en") -> None:
        self.language = language
        self.entries: dict[str, str] = {"agent.json": json.dumps({"language": language})}

    def add_intent(
        self,
        name: str,
        *,
        identity: str | None = None,
        parent: str | None = None,
        contexts: list[str] | None = None,
        responses: list[dict[str, object]] | None = None,
        examples: list[str] | None = None,
    ) -> str:
        identity = identity or f"id-{name}"
        definition: dict[str, object] = {
            "id": identity,
            "name": name,
            "contexts": contexts or [],
            "responses": responses or [],
        }
        if parent is not None:
            definition["parentId"] = parent
        self.entries[f"intents/{name}.json"] = json.dumps(definition)
        if examples is not None:
            self.entries[f"intents/{name}_usersays_{self.language}.json"] = json.dumps(
                usersays(examples, self.language)
            )
        return identity

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w") as zf:
            for name, content in self.entries.items():
                zf.writestr(name, content)
        return buf.getvalue()

    def archive(self) -> AgentArchive:
        return AgentArchive.load(self.to_bytes())

    def write(self, path: Path) -> Path:
        path.write_bytes(self.to_bytes())
        return path


@pytest.fixture()
def builder() -> AgentZipBuilder:
    return AgentZipBuilder()


@pytest.fixture()
def status_messages() -> list[tuple[str, object]]:
    return []


@pytest.fixture()
def status(status_messages: list[tuple[str, object]]):
    from dialogflow_intents.status import StatusReporter

    return StatusReporter(lambda message, data: status_messages.append((message, data)))
