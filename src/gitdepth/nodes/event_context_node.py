"""
Event context node: picks the base and head commits for the triggering event.

pull_request:
    base: payload pull_request.base.sha
    head: git rev-parse HEAD
push (branch):
    base: input base or default branch
    head: input head or git branch --show-current
push (tag):
    base: input base or default branch
    head: git describe --tags --exact-match
workflow_dispatch:
    base and head are empty
"""

from typing import Optional

from loguru import logger

from gitdepth import actions
from gitdepth.errors import EventContextError, RefNotFoundError
from gitdepth.git.backend import DEFAULT_REMOTE, GitBackend
from gitdepth.models.event import EventContext
from gitdepth.nodes.ref_resolver import resolve_ref
from gitdepth.types.base import BaseAndHead
from gitdepth.types.state import AgentState

DEFAULT_FETCH_DEPTH = 100


def _get_base_and_head_from_pull_request(event: EventContext, backend: GitBackend) -> BaseAndHead:
    base = event.pull_request_base_sha
    if base is None:
        raise EventContextError("Failed to get base sha from pull request")

    with actions.group("Get head"):
        head = backend.current_commit()
    return BaseAndHead(base=base, head=head)


def _get_head_name_from_push(event: EventContext, backend: GitBackend) -> Optional[str]:
    """Current branch or tag, unless overridden by the head input."""
    if event.input_head:
        return event.input_head

    branch = backend.current_branch()
    if branch:
        return branch

    return backend.exact_tag()


def _get_base_name_from_push(event: EventContext, head: str) -> str:
    base = event.input_base or event.default_branch
    if not base:
        raise EventContextError("Failed to get base from push")

    if base != head:
        return base

    # Pushing to the base branch itself, e.g. a merge into the default branch
    before = event.before
    if before is None:
        raise EventContextError("Failed to get before from push")
    return before


def _get_base_and_head_from_push(event: EventContext, backend: GitBackend, fetch_depth: int) -> BaseAndHead:
    with actions.group("Get current branch or tag"):
        head_name = _get_head_name_from_push(event, backend)
    if not head_name:
        raise EventContextError("Failed to get head from push")

    base_name = _get_base_name_from_push(event, head_name)
    logger.info(f"Comparing {base_name} with {head_name}")

    backend.fetch(fetch_depth, base_name, head_name)

    base_ref = resolve_ref(backend, base_name)
    head_ref = resolve_ref(backend, head_name)
    if base_ref is None or head_ref is None:
        raise RefNotFoundError("Failed to get ref")

    return BaseAndHead(base=base_ref.sha, head=head_ref.sha)


def get_base_and_head(
    event: EventContext, backend: GitBackend, fetch_depth: int = DEFAULT_FETCH_DEPTH
) -> BaseAndHead:
    """Determine the base and head commits for ``event``.

    Args:
        event: The triggering CI event.
        backend: Git primitives for the checked out repository.
        fetch_depth: Depth of the initial fetch of push refs.

    Returns:
        The resolved pair, or an empty pair for manual triggers.

    Raises:
        EventContextError: The event lacks required information or is unsupported.
        RefNotFoundError: A push ref could not be resolved after fetching.
    """
    if event.event_name == "pull_request":
        return _get_base_and_head_from_pull_request(event, backend)
    if event.event_name == "push":
        return _get_base_and_head_from_push(event, backend, fetch_depth)
    if event.event_name == "workflow_dispatch":
        actions.warning("In the case of workflow_dispatch, base and head will be empty strings.")
        return BaseAndHead(base="", head="")
    raise EventContextError(f"Unsupported event: {event.event_name}")


def event_context_node(state: AgentState) -> AgentState:
    """Resolve base and head for the event stored in the state."""
    if "event" not in state:
        raise ValueError("event is required in AgentState")

    logger.info(f"Executing Event Context Node for {state['event'].event_name}")

    backend = GitBackend(state["repo_path"], remote=state.get("remote", DEFAULT_REMOTE))
    base_and_head = get_base_and_head(
        state["event"], backend, fetch_depth=state.get("fetch_depth", DEFAULT_FETCH_DEPTH)
    )

    logger.info(f"Base: {base_and_head.base or '<empty>'}, head: {base_and_head.head or '<empty>'}")

    new_state: AgentState = {
        **state,
        "base": base_and_head.base,
        "head": base_and_head.head,
    }
    return new_state
