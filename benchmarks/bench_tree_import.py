"""Benchmark: TreeImporter throughput on a wide, deep follow-up forest.

Builds an in-memory agent archive of ``_ROOTS`` root intents, each with a
binary follow-up tree of depth ``_DEPTH``, and measures the full import
(index, link, path enumeration).
"""
from __future__ import annotations

import io
import json
import sys
import time
import zipfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dialogflow_intents.archive.agent_zip import AgentArchive
from dialogflow_intents.importers.tree import TreeImporter

_ROOTS: int = 20
_DEPTH: int = 5
_ITERATIONS: int = 20


def _build_archive() -> AgentArchive:
    entries: dict[str, object] = {"agent.json": {"language": "en"}}

    def add(name: str, parent: str | None, depth: int) -> None:
        definition: dict[str, object] = {
            "id": name,
            "name": name,
            "responses": [{"messages": [{"type": "0", "lang": "en", "speech": [f"{name} out"]}]}],
        }
        if parent:
            definition["parentId"] = parent
        entries[f"intents/{name}.json"] = definition
        entries[f"intents/{name}_usersays_en.json"] = [{"data": [{"text": f"{name} in"}]}]
        if depth < _DEPTH:
            add(f"{name}.0", name, depth + 1)
            add(f"{name}.1", name, depth + 1)

    for root in range(_ROOTS):
        add(f"r{root}", None, 1)

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in entries.items():
            zf.writestr(name, json.dumps(content))
    return AgentArchive.load(buf.getvalue())


def bench_tree_import() -> dict[str, object]:
    """Benchmark TreeImporter.import_intents() end to end.

    Returns
    -------
    dict with keys: operation, iterations, intents, conversations,
    total_seconds, avg_latency_ms.
    """
    archive = _build_archive()
    importer = TreeImporter()

    conversations = 0
    t0 = time.perf_counter()
    for _ in range(_ITERATIONS):
        conversations = len(importer.import_intents(archive).conversations)
    total = time.perf_counter() - t0

    result: dict[str, object] = {
        "operation": "tree_import",
        "iterations": _ITERATIONS,
        "intents": len(archive.intent_entry_names()),
        "conversations": conversations,
        "total_seconds": round(total, 4),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
    }
    print(
        f"[bench_tree_import] {result['operation']}: "
        f"{result['intents']} intents -> {result['conversations']} convos, "
        f"avg={result['avg_latency_ms']:.4f}ms"
    )
    return result


if __name__ == "__main__":
    print(json.dumps(bench_tree_import(), indent=2))
