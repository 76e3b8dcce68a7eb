r"""
Export formats for benchmark results.

    from access_bench.reporting.formats import JsonExporter, MarkdownExporter

    exporter = JsonExporter()
    exporter.export(collector, "results.json")
"""

import csv
import io
import json
from abc import ABC, abstractmethod
from pathlib import Path

from access_bench.reporting.collector import ResultCollector

__all__ = ["BaseExporter", "JsonExporter", "CsvExporter", "MarkdownExporter", "EXPORTERS"]


class BaseExporter(ABC):
    """Base class for result exporters."""

    extension: str = ".txt"

    def export(self, collector: ResultCollector, path: str | Path) -> None:
        """Export results to file."""
        Path(path).write_text(self.to_string(collector), encoding="utf-8")

    @abstractmethod
    def to_string(self, collector: ResultCollector) -> str:
        """Export results to string."""
        ...


class JsonExporter(BaseExporter):
    """Export results to JSON format."""

    extension = ".json"

    def __init__(self, *, indent: int = 2) -> None:
        self._indent = indent

    def to_string(self, collector: ResultCollector) -> str:
        return json.dumps(collector.to_dict(), indent=self._indent, ensure_ascii=False)


class CsvExporter(BaseExporter):
    """Export results to CSV format, one row per trial."""

    extension = ".csv"

    HEADER = [
        "session_id",
        "suite",
        "trial",
        "kind",
        "status",
        "ops_per_second",
        "rme_percent",
        "samples",
        "error",
    ]

    def to_string(self, collector: ResultCollector) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(self.HEADER)

        session_id = collector.session.session_id
        for suite in collector.results:
            for trial in suite.trials:
                writer.writerow([
                    session_id,
                    suite.suite_name,
                    trial.trial_name,
                    str(trial.kind),
                    trial.status.name,
                    f"{trial.ops_per_second:.2f}" if trial.ok else "",
                    f"{trial.rme:.2f}" if trial.ok else "",
                    trial.sample_count,
                    trial.error or "",
                ])

        return buffer.getvalue()


class MarkdownExporter(BaseExporter):
    """Export results to Markdown format."""

    extension = ".md"

    def to_string(self, collector: ResultCollector) -> str:
        lines: list[str] = []
        session = collector.session
        env = collector.environment

        lines.append("# Data Access Benchmark Report")
        lines.append("")
        lines.append(f"**Session:** {session.session_id}")
        lines.append(f"**Benchmark:** {session.benchmark}")
        lines.append(f"**Profile:** {session.profile}")
        lines.append(f"**Date:** {session.started_at[:10] if session.started_at else 'N/A'}")
        lines.append("")

        lines.append("## Environment")
        lines.append("")
        lines.append(f"- Platform: {env.platform}")
        lines.append(f"- Python: {env.python_version}")
        lines.append(f"- CPU: {env.cpu}")
        lines.append(f"- SQLite: {env.sqlite_version}")
        lines.append("")

        comparisons = collector.compute_comparisons()
        for suite in collector.results:
            lines.append(f"## {suite.suite_name}")
            lines.append("")
            if suite.error:
                lines.append(f"Suite failed: {suite.error}")
                lines.append("")
            if not suite.trials:
                continue

            relative = comparisons.get(suite.suite_name, {})
            lines.append("| Trial | ops/sec | ±% | Samples | Relative |")
            lines.append("|-------|---------|----|---------|----------|")
            for trial in suite.trials:
                if not trial.ok:
                    lines.append(f"| {trial.trial_name} | FAILED | | 0 | |")
                    continue
                ratio = relative.get(trial.trial_name, 0.0)
                ratio_text = "**1.00x**" if ratio == 1.0 else f"{ratio:.2f}x"
                lines.append(
                    f"| {trial.trial_name} | {round(trial.ops_per_second):,} | {trial.rme:.2f} "
                    f"| {trial.sample_count} | {ratio_text} |"
                )
            lines.append("")

        lines.append("*Relative throughput within each suite (1.00x = fastest)*")
        lines.append("")
        return "\n".join(lines)


EXPORTERS: dict[str, type[BaseExporter]] = {
    "json": JsonExporter,
    "csv": CsvExporter,
    "markdown": MarkdownExporter,
}
