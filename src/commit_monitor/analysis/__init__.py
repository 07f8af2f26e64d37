"""RuboCop analysis — classify files, run the tool, scope its findings."""

from commit_monitor.analysis.classifier import filter_lintable, is_lintable
from commit_monitor.analysis.filtering import filter_findings, is_relevant
from commit_monitor.analysis.rule_catalog import RuleCatalog, load_rule_catalog
from commit_monitor.analysis.runner import AnalysisRunner, parse_rubocop_output
from commit_monitor.analysis.schemas import FileFindings, Finding, FindingSet

__all__ = [
    "AnalysisRunner",
    "FileFindings",
    "Finding",
    "FindingSet",
    "RuleCatalog",
    "filter_findings",
    "filter_lintable",
    "is_lintable",
    "is_relevant",
    "load_rule_catalog",
    "parse_rubocop_output",
]
