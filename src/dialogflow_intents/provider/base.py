"""Abstract interface of the remote NLU provider.

Classes
-------
- AgentProvider  — export and restore a complete agent archive
"""
from __future__ import annotations

from typing import Protocol


class AgentProvider(Protocol):
    """Remote agent operations used by the import and export flows.

    Both operations are long-running on the provider side; implementations
    block until the operation has completed.
    """

    @property
    def project_path(self) -> str:
        """Resource path of the agent's parent project."""
        ...  # pragma: no cover

    def export_agent(self) -> bytes:
        """Export the live agent and return the archive content.

        Raises
        ------
        AgentConnectionError
            If the provider cannot be reached or rejects the request.
        """
        ...  # pragma: no cover

    def restore_agent(self, content: bytes) -> str:
        """Replace the live agent with *content* and return the project path.

        Raises
        ------
        AgentConnectionError
            If the provider cannot be reached or rejects the request.
        """
        ...  # pragma: no cover
