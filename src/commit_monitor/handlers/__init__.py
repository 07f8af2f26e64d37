"""Commit-event handlers."""

from commit_monitor.handlers.rubocop_checker import ReviewResult, RubocopChecker

__all__ = ["ReviewResult", "RubocopChecker"]
