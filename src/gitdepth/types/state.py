"""State management types for the gitdepth workflow."""

from typing import Optional, TypedDict

from gitdepth.models.event import EventContext


class AgentState(TypedDict, total=False):
    """
    Shared state passed between nodes.
    Each node adds or modifies specific fields.
    """

    # Global configuration
    repo_path: str
    remote: str
    fetch_depth: int
    deepen_by: int
    event: EventContext

    # Event Context Node Output
    base: str
    head: str

    # Merge Base Node Output
    merge_base: Optional[str]

    # Depth Node Output
    depth: int
