"""Import and export flows between Dialogflow agents and test conversations.

Import
    Obtain the agent archive (local zip or live export), run the flat or the
    multi-step importer and return the produced records.
Export
    Obtain the agent archive, merge new user examples into it and either
    write the modified archive to a file or restore it into the live agent.

Both flows build a runtime container through the :class:`BotDriver` and
always clean it up, also when the flow fails.

Classes
-------
- ExportResult  — merge report plus where the archive went

Functions
---------
- import_handler  — run an import
- export_handler  — run an export
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from dialogflow_intents.archive.agent_zip import AgentArchive
from dialogflow_intents.config import DialogflowCaps
from dialogflow_intents.errors import AgentConnectionError, CapabilityError
from dialogflow_intents.exporters.merger import MergeReport, UtteranceMerger
from dialogflow_intents.importers.base import ImportResult, IntentImporter
from dialogflow_intents.importers.flat import FlatImporter
from dialogflow_intents.importers.tree import TreeImporter
from dialogflow_intents.model.convo import UtteranceSet
from dialogflow_intents.provider.base import AgentProvider
from dialogflow_intents.runtime.driver import BotDriver, CapabilityDriver, RuntimeContainer
from dialogflow_intents.status import StatusCallback, StatusReporter

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[RuntimeContainer], AgentProvider]


def dialogflow_provider(container: RuntimeContainer) -> AgentProvider:
    """Default provider factory: a Dialogflow client for the container's caps."""
    from dialogflow_intents.provider.dialogflow import DialogflowAgentProvider  # noqa: PLC0415

    return DialogflowAgentProvider(container.caps)


@dataclass
class ExportResult:
    """Outcome of :func:`export_handler`.

    Attributes
    ----------
    report:
        Which utterance sets were merged, unchanged or skipped.
    destination:
        The output file path, or the project path the agent was restored into.
    """

    report: MergeReport
    destination: str


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _make_driver(
    driver: BotDriver | None, caps: Mapping[str, object] | DialogflowCaps | None
) -> BotDriver:
    return driver if driver is not None else CapabilityDriver(caps)


@contextmanager
def _runtime(driver: BotDriver) -> Iterator[RuntimeContainer]:
    """Build a container and clean it up on exit; cleanup errors are only logged."""
    container = driver.build()
    try:
        yield container
    finally:
        try:
            container.clean()
        except Exception as exc:  # noqa: BLE001
            logger.debug("Error container cleanup: %s", exc)


def _connect(container: RuntimeContainer, provider_factory: ProviderFactory) -> AgentProvider:
    try:
        return provider_factory(container)
    except (CapabilityError, ImportError) as exc:
        raise AgentConnectionError(exc) from exc


def _require_provider(provider: AgentProvider | None) -> AgentProvider:
    if provider is None:
        raise AgentConnectionError("no provider configured")
    return provider


def _obtain_archive(
    agentzip: str | Path | None, provider: AgentProvider | None
) -> AgentArchive:
    if agentzip is not None:
        return AgentArchive.load(agentzip)
    return AgentArchive.load(_require_provider(provider).export_agent())


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------


def import_handler(
    caps: Mapping[str, object] | DialogflowCaps | None = None,
    *,
    buildconvos: bool = False,
    buildmultistepconvos: bool = False,
    agentzip: str | Path | None = None,
    status_callback: StatusCallback | None = None,
    driver: BotDriver | None = None,
    provider_factory: ProviderFactory = dialogflow_provider,
) -> ImportResult:
    """Import conversations and utterance sets from a Dialogflow agent.

    Parameters
    ----------
    caps:
        Capability map (or parsed :class:`DialogflowCaps`).
    buildconvos:
        Flat mode only: also build one intent-asserting conversation per intent.
    buildmultistepconvos:
        Rebuild follow-up intent chains into multi-step conversations.
    agentzip:
        Path to an exported agent zip.  When omitted the agent is exported
        from the live project.
    status_callback:
        Receives ``(message, data)`` for every non-fatal condition.
    driver:
        Test-framework driver; defaults to :class:`CapabilityDriver`.
    provider_factory:
        Builds the remote provider when no *agentzip* is given.

    Raises
    ------
    AgentConnectionError
        If the live agent cannot be exported.
    AgentUnpackError
        If the archive cannot be read.
    """
    logger.debug(
        "import options: buildconvos=%s buildmultistepconvos=%s agentzip=%s",
        buildconvos,
        buildmultistepconvos,
        agentzip,
    )
    status = StatusReporter(status_callback)
    importer: IntentImporter = (
        TreeImporter() if buildmultistepconvos else FlatImporter(build_convos=buildconvos)
    )

    driver = _make_driver(driver, caps)
    with _runtime(driver) as container:
        provider = _connect(container, provider_factory) if agentzip is None else None
        archive = _obtain_archive(agentzip, provider)
        return importer.import_intents(archive, status)


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


def export_handler(
    utterance_sets: Iterable[UtteranceSet],
    caps: Mapping[str, object] | DialogflowCaps | None = None,
    *,
    agentzip: str | Path | None = None,
    output: str | Path | None = None,
    status_callback: StatusCallback | None = None,
    driver: BotDriver | None = None,
    provider_factory: ProviderFactory = dialogflow_provider,
) -> ExportResult:
    """Merge *utterance_sets* into a Dialogflow agent.

    Parameters
    ----------
    utterance_sets:
        Utterance sets whose new examples should be added to the agent.
    caps:
        Capability map (or parsed :class:`DialogflowCaps`).
    agentzip:
        Path to an exported agent zip.  When omitted the agent is exported
        from the live project.
    output:
        Where to write the modified archive.  When omitted the modified
        archive is restored into the live agent.
    status_callback:
        Receives ``(message, data)`` for every non-fatal condition.
    driver:
        Test-framework driver; defaults to :class:`CapabilityDriver`.
    provider_factory:
        Builds the remote provider for live export/restore.

    Raises
    ------
    AgentConnectionError
        If the live agent cannot be exported or restored.
    AgentUnpackError
        If the archive cannot be read.
    """
    status = StatusReporter(status_callback)
    driver = _make_driver(driver, caps)

    with _runtime(driver) as container:
        provider: AgentProvider | None = None
        if agentzip is None or output is None:
            provider = _connect(container, provider_factory)
        archive = _obtain_archive(agentzip, provider)
        report = UtteranceMerger().merge(archive, utterance_sets, status)

        if output is not None:
            destination = str(archive.save(output))
            status(f"Wrote Dialogflow Agent to {destination}")
            return ExportResult(report=report, destination=destination)

        destination = _require_provider(provider).restore_agent(archive.to_bytes())
        status(f"Uploaded Dialogflow Agent to {destination}")
        return ExportResult(report=report, destination=destination)
