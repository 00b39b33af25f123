"""
Git primitives used by the gitdepth nodes.

Every method maps to a single git invocation through GitPython's command
wrapper. Failures that carry meaning (no matching ref, detached HEAD, no exact
tag, no merge base) are returned as empty values; everything else raises
``git.exc.GitCommandError``.
"""

from typing import List, Optional, Tuple

from git import Repo
from git.exc import GitCommandError
from loguru import logger

DEFAULT_REMOTE = "origin"


class GitBackend:
    """Read and fetch operations against a local repository and one remote."""

    def __init__(self, repo_path: str, remote: str = DEFAULT_REMOTE):
        """Initialize the backend with a repository path and remote name."""
        self.repo = Repo(repo_path)
        self.remote = remote

    def show_ref(self, name: str) -> List[Tuple[str, str]]:
        """List (sha, full ref path) for every local ref matching ``name``.

        Annotated tags are dereferenced, so they appear twice: once for the tag
        object and once with a ``^{}`` suffix for the commit it points at.
        """
        try:
            output = self.repo.git.show_ref("--dereference", name)
        except GitCommandError:
            # show-ref exits 1 when nothing matches
            return []

        refs = []
        for line in output.splitlines():
            if not line.strip():
                continue
            sha, ref_path = line.split(" ", 1)
            refs.append((sha, ref_path.strip()))
        return refs

    def current_commit(self) -> str:
        return self.repo.git.rev_parse("HEAD").strip()

    def current_branch(self) -> str:
        """Name of the checked out branch, empty for a detached HEAD."""
        return self.repo.git.branch("--show-current").strip()

    def exact_tag(self) -> Optional[str]:
        """Tag pointing exactly at HEAD, if any."""
        try:
            return self.repo.git.describe("--tags", "--exact-match").strip()
        except GitCommandError:
            return None

    def fetch(self, depth: int, *refs: str) -> None:
        logger.debug(f"git fetch {self.remote} --depth={depth} {' '.join(refs)}")
        self.repo.git.fetch(self.remote, f"--depth={depth}", *refs)

    def deepen(self, depth: int, *refs: str) -> None:
        logger.debug(f"git fetch --deepen={depth} {self.remote} {' '.join(refs)}")
        self.repo.git.fetch(f"--deepen={depth}", self.remote, *refs)

    def fetch_all(self) -> None:
        logger.debug("git fetch")
        self.repo.git.fetch()

    def count_all_commits(self) -> str:
        """Raw output of ``git rev-list --count --all``."""
        return self.repo.git.rev_list("--count", "--all")

    def merge_base(self, base: str, head: str) -> Optional[str]:
        """Common ancestor of ``base`` and ``head``, None if not computable locally."""
        try:
            return self.repo.git.merge_base(base, head).strip()
        except GitCommandError:
            return None

    def count_commits_between(self, ancestor: str, target: str) -> str:
        """Raw count of non-merge commits in ``ancestor...target``."""
        return self.repo.git.rev_list("--count", "--no-merges", f"{ancestor}...{target}")
