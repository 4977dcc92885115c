"""Capability configuration for the Dialogflow connector.

Capabilities are the flat, upper-case keyed settings map shared with the
test framework (``botium.json`` style).  Only the Dialogflow keys are
interpreted here; unknown keys are preserved untouched.

Classes
-------
- DialogflowCaps  — validated view of a capability map

Functions
---------
- load_caps       — read a capability map from a JSON or YAML file
"""
from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from dialogflow_intents.errors import CapabilityError

_DEFAULT_OPERATION_TIMEOUT: float = 600.0


class DialogflowCaps(BaseModel):
    """Dialogflow-related capabilities.

    Attributes
    ----------
    project_id:
        Google Cloud project hosting the agent (``DIALOGFLOW_PROJECT_ID``).
    client_email:
        Service account e-mail (``DIALOGFLOW_CLIENT_EMAIL``).
    private_key:
        Service account private key (``DIALOGFLOW_PRIVATE_KEY``).
    api_endpoint:
        Optional regional API endpoint (``DIALOGFLOW_API_ENDPOINT``).
    operation_timeout:
        Seconds to wait for long-running export/restore operations.
    """

    project_id: str | None = Field(default=None, alias="DIALOGFLOW_PROJECT_ID")
    client_email: str | None = Field(default=None, alias="DIALOGFLOW_CLIENT_EMAIL")
    private_key: str | None = Field(default=None, alias="DIALOGFLOW_PRIVATE_KEY")
    api_endpoint: str | None = Field(default=None, alias="DIALOGFLOW_API_ENDPOINT")
    operation_timeout: float = Field(
        default=_DEFAULT_OPERATION_TIMEOUT, gt=0, alias="DIALOGFLOW_OPERATION_TIMEOUT"
    )

    model_config = {"populate_by_name": True, "extra": "allow"}

    @classmethod
    def from_caps(cls, caps: Mapping[str, object] | DialogflowCaps | None) -> DialogflowCaps:
        """Build a :class:`DialogflowCaps` from a raw capability map.

        Raises
        ------
        CapabilityError
            If a recognised key carries an invalid value.
        """
        if isinstance(caps, DialogflowCaps):
            return caps
        try:
            return cls.model_validate(dict(caps or {}))
        except ValidationError as exc:
            raise CapabilityError(f"Invalid capabilities: {exc}") from exc

    def require_project_id(self) -> str:
        """Return the project id or raise :class:`CapabilityError` when unset."""
        if not self.project_id:
            raise CapabilityError(
                "Capability DIALOGFLOW_PROJECT_ID is required to reach the Dialogflow agent."
            )
        return self.project_id

    def credentials_info(self) -> dict[str, str] | None:
        """Service-account info for explicit credentials, or ``None`` for ADC."""
        if not (self.client_email and self.private_key):
            return None
        return {
            "type": "service_account",
            "project_id": self.project_id or "",
            "client_email": self.client_email,
            "private_key": self.private_key.replace("\\n", "\n"),
            "token_uri": "https://oauth2.googleapis.com/token",
        }


def load_caps(path: str | Path) -> dict[str, object]:
    """Read a capability map from a JSON or YAML file.

    A ``botium.json`` document (``{"botium": {"Capabilities": {...}}}``) is
    unwrapped to its ``Capabilities`` mapping.

    Raises
    ------
    CapabilityError
        If the file cannot be read or does not contain a mapping.
    """
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise CapabilityError(f"Cannot read capabilities from {path}: {exc}") from exc

    if isinstance(data, dict) and isinstance(data.get("botium"), dict):
        data = data["botium"].get("Capabilities", {})
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise CapabilityError(
            f"Capabilities file {path} must contain a mapping, got {type(data).__name__!r}"
        )
    return dict(data)
