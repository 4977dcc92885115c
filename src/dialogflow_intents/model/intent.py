"""In-memory representation of one imported Dialogflow intent.

Classes
-------
- IntentRecord  — identity, parent link, examples, response phrases, children
"""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class IntentRecord:
    """One intent read from an agent archive.

    Parameters
    ----------
    identity:
        The intent ``id``; unique within one archive.
    display_name:
        The intent ``name``.  Used for conversation naming and as the
        ``INTENT`` assertion value.
    parent_identity:
        The ``parentId`` of a follow-up intent, ``None`` for root intents.
    required_contexts:
        Names of the input contexts that must be active for this intent.
    input_examples:
        Plain-text user examples, in archive order.
    output_variants:
        One phrase list per response definition.  A list may be empty.
    children:
        Follow-up intents; populated only while rebuilding the intent tree.
    """

    identity: str
    display_name: str
    parent_identity: str | None = None
    required_contexts: list[str] = field(default_factory=list)
    input_examples: list[str] = field(default_factory=list)
    output_variants: list[list[str]] = field(default_factory=list)
    children: list[IntentRecord] = field(default_factory=list)

    @classmethod
    def from_definition(cls, definition: dict[str, object]) -> IntentRecord:
        """Build a record from a parsed ``intents/<name>.json`` document.

        Examples and response phrases are left empty; the importers fill
        them in once the paired utterance entry has been located.
        """
        parent_identity = definition.get("parentId") or None
        return cls(
            identity=str(definition.get("id") or definition.get("name", "")),
            display_name=str(definition.get("name", "")),
            parent_identity=str(parent_identity) if parent_identity else None,
            required_contexts=[str(c) for c in definition.get("contexts") or []],
        )

    @property
    def is_root(self) -> bool:
        """True when the intent is not a follow-up of another intent."""
        return self.parent_identity is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __repr__(self) -> str:
        return (
            f"IntentRecord(identity={self.identity!r}, "
            f"display_name={self.display_name!r}, "
            f"parent={self.parent_identity!r}, children={len(self.children)})"
        )
