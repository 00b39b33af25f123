"""
Merge base node: makes the merge base of base and head available locally and
computes the fetch depth that would have sufficed to reach it.
"""

from git.exc import GitCommandError
from loguru import logger

from gitdepth import actions
from gitdepth.errors import MergeBaseUnavailableError, NecessaryDepthError
from gitdepth.git.backend import DEFAULT_REMOTE, GitBackend
from gitdepth.types.base import BaseAndHead
from gitdepth.types.state import AgentState

DEFAULT_DEEPEN_BY = 100


def current_depth(backend: GitBackend) -> int:
    """Number of commits known locally across all refs, 0 if unparsable."""
    output = backend.count_all_commits().strip()
    try:
        return int(output)
    except ValueError:
        logger.debug(f"Unexpected commit count output: {output!r}")
        return 0


def ensure_merge_base(backend: GitBackend, base: str, head: str, deepen_by: int = DEFAULT_DEEPEN_BY) -> str:
    """Deepen local history until the merge base of ``base`` and ``head`` is known.

    History is deepened by ``deepen_by`` commits at a time for as long as the
    local commit count keeps growing. Once it stops growing, a single
    unbounded fetch is the last attempt.

    Raises:
        MergeBaseUnavailableError: No merge base even after the final fetch.
    """
    merge_base = backend.merge_base(base, head)
    if merge_base is not None:
        return merge_base

    previous_depth = 0
    while True:
        backend.deepen(deepen_by, base, head)
        depth = current_depth(backend)
        logger.debug(f"Local history now has {depth} commits (previously {previous_depth})")

        if depth <= previous_depth:
            break

        previous_depth = depth
        merge_base = backend.merge_base(base, head)
        if merge_base is not None:
            return merge_base

    logger.info("Deepening made no progress, fetching without depth limit")
    backend.fetch_all()
    merge_base = backend.merge_base(base, head)
    if merge_base is not None:
        return merge_base
    raise MergeBaseUnavailableError("Failed to get merge base")


def necessary_depth(backend: GitBackend, ancestor: str, target: str) -> int:
    """Depth a shallow fetch of ``target`` needs to include ``ancestor``.

    Counts non-merge commits in ``ancestor...target`` and adds one for the
    ancestor itself, so the result is at least 1.
    """
    try:
        output = backend.count_commits_between(ancestor, target).strip()
    except GitCommandError as e:
        raise NecessaryDepthError("Failed to get necessary depth") from e

    if not output.isdigit():
        raise NecessaryDepthError("Failed to get necessary depth")
    return int(output) + 1


def get_depth(backend: GitBackend, merge_base: str, base_and_head: BaseAndHead) -> int:
    """Depth that covers whichever side lies further from the merge base."""
    head_depth = necessary_depth(backend, merge_base, base_and_head.head)
    base_depth = necessary_depth(backend, merge_base, base_and_head.base)
    return max(head_depth, base_depth)


def merge_base_node(state: AgentState) -> AgentState:
    """Ensure the merge base of base and head is available."""
    logger.info("Executing Merge Base Node")

    backend = GitBackend(state["repo_path"], remote=state.get("remote", DEFAULT_REMOTE))
    with actions.group("Ensure merge base available"):
        merge_base = ensure_merge_base(
            backend, state["base"], state["head"], deepen_by=state.get("deepen_by", DEFAULT_DEEPEN_BY)
        )

    logger.info(f"Merge base: {merge_base}")

    new_state: AgentState = {**state, "merge_base": merge_base}
    return new_state


def depth_node(state: AgentState) -> AgentState:
    """Compute the necessary fetch depth from the merge base."""
    logger.info("Executing Depth Node")

    backend = GitBackend(state["repo_path"], remote=state.get("remote", DEFAULT_REMOTE))
    with actions.group("Get necessary depth"):
        depth = get_depth(backend, state["merge_base"], BaseAndHead(base=state["base"], head=state["head"]))

    logger.info(f"Necessary depth: {depth}")

    new_state: AgentState = {**state, "depth": depth}
    return new_state
