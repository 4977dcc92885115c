"""Serialisation of conversations and utterance sets to test files.

Supports JSON and YAML, mirroring the two document formats the test
framework reads.

Classes
-------
- ConvoCompiler  — decompile records to text, compile utterance files back
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

import yaml

from dialogflow_intents.model.convo import Conversation, UtteranceSet

CompilerFormat = Literal["json", "yaml"]

CONVO_SUFFIX: str = ".convo"
UTTERANCES_SUFFIX: str = ".utterances"


class ConvoCompiler:
    """Convert records to and from convo/utterance documents.

    Parameters
    ----------
    fmt:
        ``"json"`` (default) or ``"yaml"``.
    """

    def __init__(self, fmt: CompilerFormat = "json") -> None:
        if fmt not in ("json", "yaml"):
            raise ValueError(f"Unsupported compiler format {fmt!r}; expected 'json' or 'yaml'")
        self.fmt: CompilerFormat = fmt

    @property
    def extension(self) -> str:
        return f".{self.fmt}"

    # ------------------------------------------------------------------
    # Decompile
    # ------------------------------------------------------------------

    def _dump(self, data: object) -> str:
        if self.fmt == "yaml":
            return yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
        return json.dumps(data, indent=2, ensure_ascii=False)

    def decompile_convo(self, conversation: Conversation) -> str:
        return self._dump(conversation.to_dict())

    def decompile_utterances(self, utterance_set: UtteranceSet) -> str:
        return self._dump({"utterances": {utterance_set.name: list(utterance_set.utterances)}})

    # ------------------------------------------------------------------
    # Compile
    # ------------------------------------------------------------------

    def compile_utterances(self, raw: str) -> list[UtteranceSet]:
        """Parse an utterances document (``{"utterances": {name: [...]}}``).

        Raises
        ------
        ValueError
            If the document does not hold an ``utterances`` mapping.
        """
        data = yaml.safe_load(raw) if self.fmt == "yaml" else json.loads(raw)
        if not isinstance(data, dict) or not isinstance(data.get("utterances"), dict):
            raise ValueError("Utterances document must contain an 'utterances' mapping")
        return [
            UtteranceSet(name=str(name), utterances=[str(u) for u in utterances or []])
            for name, utterances in data["utterances"].items()
        ]

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def write_convo(self, conversation: Conversation, directory: Path, file_stem: str) -> Path:
        path = directory / f"{file_stem}{CONVO_SUFFIX}{self.extension}"
        path.write_text(self.decompile_convo(conversation), encoding="utf-8")
        return path

    def write_utterances(self, utterance_set: UtteranceSet, directory: Path, file_stem: str) -> Path:
        path = directory / f"{file_stem}{UTTERANCES_SUFFIX}{self.extension}"
        path.write_text(self.decompile_utterances(utterance_set), encoding="utf-8")
        return path

    def read_utterance_files(self, directory: Path) -> list[UtteranceSet]:
        """Compile every ``*.utterances.<ext>`` file in *directory*, sorted by name."""
        result: list[UtteranceSet] = []
        for path in sorted(directory.glob(f"*{UTTERANCES_SUFFIX}{self.extension}")):
            result.extend(self.compile_utterances(path.read_text(encoding="utf-8")))
        return result

    def __repr__(self) -> str:
        return f"ConvoCompiler(fmt={self.fmt!r})"
