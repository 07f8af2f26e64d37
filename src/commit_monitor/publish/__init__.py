"""Report delivery to pull requests."""

from commit_monitor.publish.github import GitHubCommentSink
from commit_monitor.publish.publisher import Publisher

__all__ = ["GitHubCommentSink", "Publisher"]
