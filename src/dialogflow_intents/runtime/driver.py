"""Test-framework driver lifecycle consumed by the import/export flows.

The flows only need three things from the host framework: build a runtime
container from capabilities, build a compiler, and clean the container up
afterwards.

Classes
-------
RuntimeContainer
    Protocol of a built runtime container.
BotDriver
    Protocol of the driver building containers and compilers.
CapabilityContainer
    In-process container carrying parsed capabilities.
CapabilityDriver
    Default driver building :class:`CapabilityContainer` instances.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

from dialogflow_intents.config import DialogflowCaps
from dialogflow_intents.runtime.compiler import CompilerFormat, ConvoCompiler

logger = logging.getLogger(__name__)


class RuntimeContainer(Protocol):
    """A built runtime container."""

    caps: DialogflowCaps

    def clean(self) -> None:
        """Release every resource held by the container."""
        ...  # pragma: no cover


class BotDriver(Protocol):
    """Driver building runtime containers and compilers."""

    def build(self) -> RuntimeContainer:
        ...  # pragma: no cover

    def build_compiler(self) -> ConvoCompiler:
        ...  # pragma: no cover


class CapabilityContainer:
    """Runtime container that only carries capabilities.

    Parameters
    ----------
    caps:
        Parsed capabilities.
    """

    def __init__(self, caps: DialogflowCaps) -> None:
        self.caps = caps
        self.cleaned = False

    def clean(self) -> None:
        if not self.cleaned:
            logger.debug("Cleaning runtime container")
        self.cleaned = True

    def __repr__(self) -> str:
        return f"CapabilityContainer(project_id={self.caps.project_id!r}, cleaned={self.cleaned})"


class CapabilityDriver:
    """Default :class:`BotDriver` building containers from a capability map.

    Parameters
    ----------
    caps:
        Raw capability map or an already validated :class:`DialogflowCaps`.
    compiler_format:
        Document format of the compiler returned by :meth:`build_compiler`.

    Raises
    ------
    CapabilityError
        If the capability map is invalid.
    """

    def __init__(
        self,
        caps: Mapping[str, object] | DialogflowCaps | None = None,
        compiler_format: CompilerFormat = "json",
    ) -> None:
        self.caps = DialogflowCaps.from_caps(caps)
        self.compiler_format: CompilerFormat = compiler_format

    def build(self) -> CapabilityContainer:
        return CapabilityContainer(self.caps)

    def build_compiler(self) -> ConvoCompiler:
        return ConvoCompiler(self.compiler_format)
