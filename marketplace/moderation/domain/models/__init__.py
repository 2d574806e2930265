from .bug_report import BugReport
from .report import Report

__all__ = ["BugReport", "Report"]
