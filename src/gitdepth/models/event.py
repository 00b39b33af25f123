"""
CI event context consumed by the event context node.

The context is built once at process start (usually from the GitHub Actions
environment) and threaded through the workflow state.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, Field


class EventContext(BaseModel):
    """The triggering CI event and the user-supplied overrides."""

    event_name: str = Field(..., description="Event kind, e.g. 'pull_request' or 'push'")
    payload: Dict[str, Any] = Field(default_factory=dict, description="Decoded event payload")
    input_base: str = Field(default="", description="Explicit base ref name, empty when unset")
    input_head: str = Field(default="", description="Explicit head ref name, empty when unset")

    @property
    def pull_request_base_sha(self) -> Optional[str]:
        pull_request = self.payload.get("pull_request")
        if not isinstance(pull_request, dict):
            return None
        base = pull_request.get("base")
        if not isinstance(base, dict):
            return None
        return _as_str(base.get("sha"))

    @property
    def before(self) -> Optional[str]:
        """Commit the pushed ref pointed at before the push."""
        return _as_str(self.payload.get("before"))

    @property
    def default_branch(self) -> Optional[str]:
        repository = self.payload.get("repository")
        if not isinstance(repository, dict):
            return None
        return _as_str(repository.get("default_branch"))

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        event_name: Optional[str] = None,
        event_path: Optional[str] = None,
        input_base: Optional[str] = None,
        input_head: Optional[str] = None,
    ) -> "EventContext":
        """Create an EventContext from GitHub Actions environment variables.

        Explicit arguments take precedence over the environment.

        Args:
            environ: Environment mapping, defaults to os.environ.
            event_name: Overrides GITHUB_EVENT_NAME.
            event_path: Overrides GITHUB_EVENT_PATH.
            input_base: Overrides INPUT_BASE.
            input_head: Overrides INPUT_HEAD.

        Returns:
            The populated EventContext.
        """
        env = os.environ if environ is None else environ

        name = event_name or env.get("GITHUB_EVENT_NAME", "")
        path = event_path or env.get("GITHUB_EVENT_PATH", "")

        payload: Dict[str, Any] = {}
        if path:
            logger.debug(f"Reading event payload from {path}")
            payload = json.loads(Path(path).read_text(encoding="utf-8"))

        return cls(
            event_name=name,
            payload=payload,
            input_base=(input_base if input_base is not None else env.get("INPUT_BASE", "")).strip(),
            input_head=(input_head if input_head is not None else env.get("INPUT_HEAD", "")).strip(),
        )


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None
