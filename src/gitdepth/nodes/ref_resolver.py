"""Resolve branch, tag or commit names to commit ids."""

import re
from typing import Dict, Optional

from loguru import logger

from gitdepth.git.backend import GitBackend
from gitdepth.types.base import ResolvedRef

COMMIT_ID_PATTERN = re.compile(r"^[0-9a-f]{40}$")

PEELED_SUFFIX = "^{}"


def is_commit_id(name: str) -> bool:
    """Check whether ``name`` already has the shape of a full commit id."""
    return bool(COMMIT_ID_PATTERN.match(name))


def _is_candidate(ref_path: str, remote: str) -> bool:
    return ref_path.startswith(f"refs/remotes/{remote}/") or ref_path.startswith("refs/tags/")


def resolve_ref(backend: GitBackend, name: str) -> Optional[ResolvedRef]:
    """Resolve ``name`` against already-fetched local refs.

    Commit ids are returned unchanged. Otherwise the first remote-tracking
    branch or tag whose short name matches wins; annotated tags report the
    commit they point at.

    Returns:
        The resolved ref, or None when no candidate exists.
    """
    if is_commit_id(name):
        return ResolvedRef(sha=name, name=name)

    refs = backend.show_ref(name)
    peeled: Dict[str, str] = {
        ref_path[: -len(PEELED_SUFFIX)]: sha for sha, ref_path in refs if ref_path.endswith(PEELED_SUFFIX)
    }

    for sha, ref_path in refs:
        if ref_path.endswith(PEELED_SUFFIX) or not _is_candidate(ref_path, backend.remote):
            continue
        resolved = ResolvedRef(sha=peeled.get(ref_path, sha), name=ref_path)
        logger.debug(f"Resolved {name} to {resolved.name} ({resolved.sha})")
        return resolved

    logger.debug(f"No remote-tracking branch or tag matches {name}")
    return None
