"""Reader/writer for exported Dialogflow agent archives.

An exported agent is a zip file holding ``agent.json`` (agent metadata with
the default ``language``) plus one ``intents/<name>.json`` definition and one
``intents/<name>_usersays_<lang>.json`` example file per intent.

Classes
-------
- AgentArchive  — in-memory, mutable view of an agent zip
"""
from __future__ import annotations

import io
import json
import logging
import zipfile
import zlib
from pathlib import Path

from dialogflow_intents.errors import AgentUnpackError

logger = logging.getLogger(__name__)

AGENT_INFO_ENTRY: str = "agent.json"
INTENTS_PREFIX: str = "intents/"


def usersays_entry_name(intent_entry_name: str, language: str) -> str:
    """Name of the example file paired with an intent definition entry.

    >>> usersays_entry_name("intents/Default Welcome Intent.json", "en")
    'intents/Default Welcome Intent_usersays_en.json'
    """
    base = intent_entry_name[: -len(".json")] if intent_entry_name.endswith(".json") else intent_entry_name
    return f"{base}_usersays_{language}.json"


class AgentArchive:
    """Named entries of an agent zip, kept in memory.

    Entries are enumerated in the order the zip stores them.  Writes replace
    the entry content in memory; call :meth:`to_bytes` or :meth:`save` to
    produce the modified archive.

    Parameters
    ----------
    entries:
        Mapping of entry name to raw bytes, in archive order.

    Raises
    ------
    AgentUnpackError
        If ``agent.json`` is missing, is not valid JSON, or has no ``language``.
    """

    def __init__(self, entries: dict[str, bytes]) -> None:
        self._entries: dict[str, bytes] = dict(entries)
        for name in self._entries:
            logger.debug("Dialogflow agent got entry: %s", name)
        if AGENT_INFO_ENTRY not in self._entries:
            raise AgentUnpackError(f"archive has no {AGENT_INFO_ENTRY!r} entry")
        try:
            info = json.loads(self._entries[AGENT_INFO_ENTRY].decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise AgentUnpackError(exc) from exc
        if not isinstance(info, dict) or not info.get("language"):
            raise AgentUnpackError(f"{AGENT_INFO_ENTRY!r} does not declare a language")
        self._agent_info: dict[str, object] = info
        logger.debug("Dialogflow agent info: %r", info)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, source: bytes | str | Path) -> AgentArchive:
        """Unpack an agent archive from raw zip content or a local file path.

        Raises
        ------
        AgentUnpackError
            On any read, unzip or metadata error.
        """
        try:
            raw = bytes(source) if isinstance(source, (bytes, bytearray)) else Path(source).read_bytes()
            with zipfile.ZipFile(io.BytesIO(raw)) as zf:
                entries = {
                    info.filename: zf.read(info.filename)
                    for info in zf.infolist()
                    if not info.is_dir()
                }
        except (
            OSError,
            zipfile.BadZipFile,
            zlib.error,
            EOFError,
            NotImplementedError,
            RuntimeError,
        ) as exc:
            raise AgentUnpackError(exc) from exc
        return cls(entries)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def agent_info(self) -> dict[str, object]:
        return self._agent_info

    @property
    def language(self) -> str:
        return str(self._agent_info["language"])

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def entry_names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def intent_entry_names(self) -> list[str]:
        """Intent definition entries (``intent*`` without ``usersays``), in archive order."""
        return [
            name
            for name in self._entries
            if name.startswith("intent") and "usersays" not in name
        ]

    def read_text(self, name: str) -> str:
        try:
            return self._entries[name].decode("utf-8")
        except KeyError:
            raise KeyError(f"Entry {name!r} not found in agent archive") from None

    def read_json(self, name: str) -> object:
        return json.loads(self.read_text(name))

    def write_bytes(self, name: str, content: bytes) -> None:
        self._entries[name] = content

    def write_json(self, name: str, data: object) -> None:
        """Replace *name* with the indented JSON encoding of *data*."""
        self.write_bytes(name, json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8"))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_bytes(self) -> bytes:
        """Re-pack all entries into zip content."""
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
            for name, content in self._entries.items():
                zf.writestr(name, content)
        return buf.getvalue()

    def save(self, path: str | Path) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.to_bytes())
        return target

    def __repr__(self) -> str:
        return f"AgentArchive(entries={len(self._entries)}, language={self.language!r})"
