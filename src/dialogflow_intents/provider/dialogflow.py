"""Dialogflow ES agent provider.

Import-guarded: ``google-cloud-dialogflow`` is an optional dependency.
Attempting to instantiate :class:`DialogflowAgentProvider` without it
installed raises ``ImportError``.

Classes
-------
- DialogflowAgentProvider  — export/restore via ``dialogflow_v2.AgentsClient``
"""
from __future__ import annotations

import base64
import binascii
import concurrent.futures
import logging

from dialogflow_intents.config import DialogflowCaps
from dialogflow_intents.errors import AgentConnectionError, AgentUnpackError

logger = logging.getLogger(__name__)

_DIALOGFLOW_IMPORT_ERROR = (
    "The 'google-cloud-dialogflow' package is required for DialogflowAgentProvider. "
    "Install it with: pip install 'dialogflow-intents[dialogflow]'"
)


class DialogflowAgentProvider:
    """Export and restore a Dialogflow ES agent.

    Parameters
    ----------
    caps:
        Capabilities carrying the project id, optional service-account
        credentials, API endpoint and operation timeout.

    Raises
    ------
    ImportError
        If ``google-cloud-dialogflow`` is not installed.
    CapabilityError
        If ``DIALOGFLOW_PROJECT_ID`` is missing.
    """

    def __init__(self, caps: DialogflowCaps) -> None:
        try:
            from google.api_core import exceptions as api_exceptions  # noqa: PLC0415
            from google.auth import exceptions as auth_exceptions  # noqa: PLC0415
            from google.cloud import dialogflow_v2  # noqa: PLC0415
            from google.oauth2 import service_account  # noqa: PLC0415
        except ImportError as exc:
            raise ImportError(_DIALOGFLOW_IMPORT_ERROR) from exc

        self._project_id = caps.require_project_id()
        self._timeout = caps.operation_timeout

        client_kwargs: dict[str, object] = {}
        info = caps.credentials_info()
        if info is not None:
            client_kwargs["credentials"] = service_account.Credentials.from_service_account_info(info)
        if caps.api_endpoint:
            client_kwargs["client_options"] = {"api_endpoint": caps.api_endpoint}

        self._failures: tuple[type[BaseException], ...] = (
            api_exceptions.GoogleAPIError,
            auth_exceptions.GoogleAuthError,
            concurrent.futures.TimeoutError,
        )
        try:
            self._client = dialogflow_v2.AgentsClient(**client_kwargs)
        except self._failures as exc:
            raise AgentConnectionError(exc) from exc

    @property
    def project_path(self) -> str:
        return f"projects/{self._project_id}"

    def export_agent(self) -> bytes:
        """Run ``ExportAgent`` and wait for the archive content."""
        logger.debug("Exporting Dialogflow agent from %s", self.project_path)
        try:
            operation = self._client.export_agent(request={"parent": self.project_path})
            response = operation.result(timeout=self._timeout)
        except self._failures as exc:
            raise AgentConnectionError(exc) from exc
        return _decode_agent_content(response.agent_content)

    def restore_agent(self, content: bytes) -> str:
        """Fetch the agent descriptor, run ``RestoreAgent`` and wait for completion."""
        try:
            agent = self._client.get_agent(request={"parent": self.project_path})
            logger.debug("Restoring Dialogflow agent %s (%d bytes)", agent.parent, len(content))
            operation = self._client.restore_agent(
                request={"parent": agent.parent, "agent_content": content}
            )
            operation.result(timeout=self._timeout)
        except self._failures as exc:
            raise AgentConnectionError(exc) from exc
        return self.project_path

    def __repr__(self) -> str:
        return f"DialogflowAgentProvider(project_path={self.project_path!r})"


def _decode_agent_content(content: bytes | str) -> bytes:
    """Agent content is raw zip bytes; base64 text is decoded."""
    if isinstance(content, str):
        try:
            return base64.b64decode(content, validate=True)
        except binascii.Error as exc:
            raise AgentUnpackError(f"agent content is not valid base64: {exc}") from exc
    return bytes(content)
