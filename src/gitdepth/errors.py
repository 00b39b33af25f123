"""Exceptions raised while resolving base, head and merge base."""


class GitDepthError(Exception):
    """Base class for all fatal gitdepth errors."""


class EventContextError(GitDepthError):
    """The CI event does not carry enough information to pick base and head."""


class RefNotFoundError(GitDepthError):
    """A ref name matched no remote-tracking branch or tag after fetching."""


class MergeBaseUnavailableError(GitDepthError):
    """The remote could not supply enough history to compute a merge base."""


class NecessaryDepthError(GitDepthError):
    """Counting commits in a range produced unexpected output."""
