r"""
Result display, collection and export.

Prints results as each suite completes and exports collected
results to JSON, CSV, and Markdown formats.

    from access_bench.reporting import ResultCollector, MarkdownExporter

    collector = ResultCollector()
    collector.add_suite_results(run_result.results)
    MarkdownExporter().export(collector, "report.md")
"""

from access_bench.reporting.collector import EnvironmentInfo, ResultCollector, SessionInfo
from access_bench.reporting.console import ConsoleReporter, format_trial
from access_bench.reporting.formats import EXPORTERS, CsvExporter, JsonExporter, MarkdownExporter

__all__ = [
    "ConsoleReporter",
    "CsvExporter",
    "EXPORTERS",
    "EnvironmentInfo",
    "JsonExporter",
    "MarkdownExporter",
    "ResultCollector",
    "SessionInfo",
    "format_trial",
]
