"""gitdepth workflow integration using LangGraph for orchestration."""

import argparse
import asyncio
import os
import sys
from typing import Any, Dict

from dotenv import load_dotenv
from git.exc import GitCommandError
from langgraph.graph import END, StateGraph
from loguru import logger

from gitdepth import actions
from gitdepth.errors import GitDepthError
from gitdepth.git.backend import DEFAULT_REMOTE
from gitdepth.models.event import EventContext
from gitdepth.nodes.event_context_node import DEFAULT_FETCH_DEPTH, event_context_node
from gitdepth.nodes.merge_base_node import DEFAULT_DEEPEN_BY, depth_node, merge_base_node
from gitdepth.types.base import MergeBaseResult
from gitdepth.types.state import AgentState


def route_after_event_context(state: AgentState) -> str:
    """Skip the merge base phases when there is nothing to compare."""
    if state.get("base", "") == "" and state.get("head", "") == "":
        return END
    return "merge_base_node"


def create_workflow(config: Dict[str, Any]) -> StateGraph:
    """Create the gitdepth workflow graph."""
    workflow = StateGraph(AgentState)

    # Add nodes
    workflow.add_node("event_context_node", event_context_node)
    workflow.add_node("merge_base_node", merge_base_node)
    workflow.add_node("depth_node", depth_node)

    workflow.set_entry_point("event_context_node")

    # Define edges
    workflow.add_conditional_edges(
        "event_context_node",
        route_after_event_context,
        {"merge_base_node": "merge_base_node", END: END},
    )
    workflow.add_edge("merge_base_node", "depth_node")
    workflow.add_edge("depth_node", END)

    return workflow.compile()


def _initial_state(config: Dict[str, Any]) -> AgentState:
    return {
        "repo_path": config["repo_path"],
        "remote": config.get("remote", DEFAULT_REMOTE),
        "fetch_depth": config.get("fetch_depth", DEFAULT_FETCH_DEPTH),
        "deepen_by": config.get("deepen_by", DEFAULT_DEEPEN_BY),
        "event": config["event"],
    }


async def run_workflow_async(config: Dict[str, Any]) -> AgentState:
    """Run the gitdepth workflow asynchronously and return the final state."""
    app = create_workflow(config)
    return await app.ainvoke(_initial_state(config))


def run_workflow(config: Dict[str, Any]) -> AgentState:
    """Synchronous wrapper for the async workflow."""
    return asyncio.run(run_workflow_async(config))


def result_from_state(state: AgentState) -> MergeBaseResult:
    """Collect the four reported values from a final workflow state."""
    if state.get("base", "") == "" and state.get("head", "") == "":
        return MergeBaseResult.empty()
    return MergeBaseResult(
        base=state["base"],
        head=state["head"],
        merge_base=state["merge_base"],
        depth=state["depth"],
    )


def report(result: MergeBaseResult) -> None:
    for name, value in result.as_outputs().items():
        actions.set_output(name, value)


def main():
    parser = argparse.ArgumentParser(description="Find base, head and merge base for a CI run and the depth to fetch")
    parser.add_argument("--repo-path", type=str, help="Path to the Git repository", default=".")
    parser.add_argument("--remote", type=str, help="Remote to fetch history from", default=None)
    parser.add_argument("--base", type=str, help="Base ref name for push events", default=None)
    parser.add_argument("--head", type=str, help="Head ref name for push events", default=None)
    parser.add_argument("--event-name", type=str, help="CI event name (default: $GITHUB_EVENT_NAME)", default=None)
    parser.add_argument("--event-path", type=str, help="Event payload JSON (default: $GITHUB_EVENT_PATH)", default=None)
    parser.add_argument("--fetch-depth", type=int, help="Depth of the initial push fetch", default=DEFAULT_FETCH_DEPTH)
    parser.add_argument("--deepen-by", type=int, help="Commits to deepen by per attempt", default=DEFAULT_DEEPEN_BY)
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()

    load_dotenv()

    if not args.verbose:
        logger.remove()
        logger.add(sys.stderr, level="INFO")

    event = EventContext.from_env(
        event_name=args.event_name,
        event_path=args.event_path,
        input_base=args.base,
        input_head=args.head,
    )
    if not event.event_name:
        logger.error("GITHUB_EVENT_NAME environment variable is not set")
        sys.exit(1)

    config = {
        "repo_path": os.path.abspath(args.repo_path),
        "remote": args.remote or os.getenv("INPUT_REMOTE") or DEFAULT_REMOTE,
        "fetch_depth": args.fetch_depth,
        "deepen_by": args.deepen_by,
        "event": event,
    }

    logger.info(f"Analyzing repository: {config['repo_path']}")
    try:
        final_state = run_workflow(config)
    except (GitDepthError, GitCommandError) as e:
        actions.set_failed(str(e))
        sys.exit(1)

    result = result_from_state(final_state)
    report(result)
    logger.info("Workflow completed!")


if __name__ == "__main__":
    main()
