"""Base types used across the gitdepth system."""

from dataclasses import dataclass
from typing import Dict, Union


@dataclass(frozen=True)
class ResolvedRef:
    """A ref name resolved against local repository state."""

    sha: str
    name: str


@dataclass(frozen=True)
class BaseAndHead:
    """The pair of commits under comparison.

    Both fields are empty strings when no comparison applies (manual trigger).
    """

    base: str
    head: str

    def is_empty(self) -> bool:
        return self.base == "" and self.head == ""


@dataclass(frozen=True)
class MergeBaseResult:
    """Final result handed to the reporting boundary."""

    base: str
    head: str
    merge_base: str
    depth: int

    @classmethod
    def empty(cls) -> "MergeBaseResult":
        return cls(base="", head="", merge_base="", depth=0)

    def as_outputs(self) -> Dict[str, Union[str, int]]:
        """Step outputs keyed the way the action exposes them."""
        return {
            "base": self.base,
            "head": self.head,
            "merge-base": self.merge_base,
            "depth": self.depth,
        }
