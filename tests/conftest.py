"""Shared fixtures: scripted backends and real temporary repositories."""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest
from git import Repo


class FakeBackend:
    """Backend double that records every call and replays scripted answers."""

    def __init__(
        self,
        refs: Optional[Dict[str, List[Tuple[str, str]]]] = None,
        current_commit: str = "",
        current_branch: str = "",
        exact_tag: Optional[str] = None,
        merge_bases: Optional[List[Optional[str]]] = None,
        commit_counts: Optional[List[str]] = None,
        range_counts: Optional[Dict[str, str]] = None,
        remote: str = "origin",
    ):
        self.remote = remote
        self.refs = refs or {}
        self._current_commit = current_commit
        self._current_branch = current_branch
        self._exact_tag = exact_tag
        self.merge_bases = list(merge_bases or [None])
        self.commit_counts = list(commit_counts or ["0"])
        self.range_counts = range_counts or {}
        self.calls: List[Tuple] = []

    def _next(self, answers: List):
        return answers.pop(0) if len(answers) > 1 else answers[0]

    def show_ref(self, name):
        self.calls.append(("show_ref", name))
        return self.refs.get(name, [])

    def current_commit(self):
        self.calls.append(("current_commit",))
        return self._current_commit

    def current_branch(self):
        self.calls.append(("current_branch",))
        return self._current_branch

    def exact_tag(self):
        self.calls.append(("exact_tag",))
        return self._exact_tag

    def fetch(self, depth, *refs):
        self.calls.append(("fetch", depth) + refs)

    def deepen(self, depth, *refs):
        self.calls.append(("deepen", depth) + refs)

    def fetch_all(self):
        self.calls.append(("fetch_all",))

    def count_all_commits(self):
        self.calls.append(("count_all_commits",))
        return self._next(self.commit_counts)

    def merge_base(self, base, head):
        self.calls.append(("merge_base", base, head))
        return self._next(self.merge_bases)

    def count_commits_between(self, ancestor, target):
        self.calls.append(("count_commits_between", ancestor, target))
        return self.range_counts[target]

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]


def create_commit(repo: Repo, file_name: str, content: str, message: str):
    """Helper function to create a commit in the test repository."""
    file_path = Path(repo.working_dir) / file_name
    file_path.write_text(content)
    repo.index.add([file_name])
    return repo.index.commit(message)


@dataclass
class RepoScenario:
    """A real repository plus the commit ids created for it, keyed by label."""

    repo: Repo
    commits: Dict[str, str]

    @property
    def path(self) -> str:
        return self.repo.working_dir


def configure_identity(repo: Repo) -> None:
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")


@pytest.fixture
def origin_repo(tmp_path):
    """Repository where feature-1 forked from main, and main moved on.

    main:      c1 - c2 - c3        (v1.0.0 at c2, annotated v2.0.0 at c3)
    feature-1:         \\- f1 - f2
    """
    repo_path = tmp_path / "origin"
    repo_path.mkdir()
    repo = Repo.init(repo_path)
    configure_identity(repo)

    c1 = create_commit(repo, "main.txt", "Initial content", "Initial commit")
    repo.git.branch("-M", "main")
    c2 = create_commit(repo, "main.txt", "Shared base", "Add shared base")
    repo.create_tag("v1.0.0", ref=c2)

    repo.git.checkout("-b", "feature-1")
    f1 = create_commit(repo, "feature.txt", "Feature part 1", "Add feature part 1")
    f2 = create_commit(repo, "feature.txt", "Feature part 2", "Add feature part 2")

    repo.git.checkout("main")
    c3 = create_commit(repo, "main.txt", "Main moved on", "Update main")
    repo.create_tag("v2.0.0", ref=c3, message="Release 2.0.0")

    commits = {"c1": c1.hexsha, "c2": c2.hexsha, "c3": c3.hexsha, "f1": f1.hexsha, "f2": f2.hexsha}
    return RepoScenario(repo=repo, commits=commits)


@pytest.fixture
def cloned_repo(origin_repo, tmp_path):
    """Clone of origin_repo with main checked out."""
    clone = Repo.clone_from(origin_repo.path, tmp_path / "clone")
    configure_identity(clone)
    return RepoScenario(repo=clone, commits=origin_repo.commits)
