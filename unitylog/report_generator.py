"""
HTML report generator for parsed Unity logs.

Renders a single self-contained page with summary cards and an entry
table; the full call stack of each entry is collapsible.
"""
import re
from pathlib import Path
from typing import List, Dict, Optional
from jinja2 import Template

from .query import compute_statistics
from .segmenter import LogEntry


REPORT_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ title }}</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #f5f5f5;
            padding: 20px;
        }
        .container { max-width: 1400px; margin: 0 auto; }

        .header {
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            color: white;
            padding: 30px;
            border-radius: 12px;
            margin-bottom: 20px;
        }
        .header h1 { font-size: 28px; margin-bottom: 10px; }

        .stats-grid {
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(150px, 1fr));
            gap: 15px;
            margin-bottom: 20px;
        }
        .stat-card {
            background: white;
            padding: 20px;
            border-radius: 8px;
            text-align: center;
            box-shadow: 0 2px 8px rgba(0,0,0,0.1);
        }
        .stat-number { font-size: 32px; font-weight: bold; color: #667eea; }
        .stat-label { color: #666; font-size: 12px; text-transform: uppercase; }

        table {
            width: 100%;
            background: white;
            border-collapse: collapse;
            border-radius: 8px;
            box-shadow: 0 2px 8px rgba(0,0,0,0.1);
        }
        th, td { padding: 10px 14px; text-align: left; vertical-align: top; font-size: 14px; }
        th { background: #f1f3f5; font-size: 12px; text-transform: uppercase; color: #555; }
        tr + tr td { border-top: 1px solid #eee; }
        td.short { font-family: monospace; color: #555; }
        pre { font-size: 12px; white-space: pre-wrap; margin-top: 8px; color: #333; }

        .status-badge {
            display: inline-block;
            padding: 2px 8px;
            border-radius: 12px;
            font-size: 11px;
            font-weight: 500;
        }
        .type-error { background: #f8d7da; color: #721c24; }
        .type-warning { background: #fff3cd; color: #856404; }
        .type-log { background: #d4edda; color: #155724; }
        .type-unknown { background: #e9ecef; color: #495057; }
        .notice { background: white; padding: 15px 20px; border-radius: 8px; margin-bottom: 20px; color: #666; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>{{ title }}</h1>
            {% if source %}<div>{{ source }}</div>{% endif %}
        </div>

        <div class="stats-grid">
            <div class="stat-card">
                <div class="stat-number">{{ total_entries }}</div>
                <div class="stat-label">Entries</div>
            </div>
            <div class="stat-card">
                <div class="stat-number">{{ errors }}</div>
                <div class="stat-label">Errors</div>
            </div>
            <div class="stat-card">
                <div class="stat-number">{{ warnings }}</div>
                <div class="stat-label">Warnings</div>
            </div>
            <div class="stat-card">
                <div class="stat-number">{{ logs }}</div>
                <div class="stat-label">Logs</div>
            </div>
            <div class="stat-card">
                <div class="stat-number">{{ unknown }}</div>
                <div class="stat-label">Unknown</div>
            </div>
        </div>

        {% if fallback %}
        <div class="notice">No engine log calls were found; entries were split on blank lines only.</div>
        {% endif %}

        {% if rows %}
        <table>
            <tr><th>Type</th><th>Message</th><th>Summary</th></tr>
            {% for row in rows %}
            <tr>
                <td><span class="status-badge type-{{ row.type | lower }}">{{ row.type }}</span></td>
                <td>
                    {{ row.message }}
                    <details><summary>Call stack</summary><pre>{{ row.callstack }}</pre></details>
                </td>
                <td class="short">{{ row.short }}</td>
            </tr>
            {% endfor %}
        </table>
        {% else %}
        <div class="notice">No log entries found.</div>
        {% endif %}
    </div>
</body>
</html>
"""


class ReportGenerator:
    """Renders parsed log entries as an HTML page."""

    def __init__(self, title: str = "Unity Log Report"):
        self.title = title
        self.template = Template(REPORT_TEMPLATE, autoescape=True)

    def render(self, entries: List[LogEntry], summary_lines: int = 3,
               source: Optional[str] = None) -> str:
        """
        Render the report for a list of entries.

        Args:
            entries: Parsed (and possibly collapsed) entries
            summary_lines: Number of call stack lines in each summary
            source: Optional description of where the log came from

        Returns:
            HTML document as a string
        """
        rows: List[Dict] = []
        for entry in entries:
            record = entry.to_record(summary_lines)
            if record is None:
                continue
            record["callstack"] = entry.callstack
            rows.append(record)

        return self.template.render(
            title=self.title,
            source=source,
            rows=rows,
            **compute_statistics(entries)
        )

    def generate_report(self, name: str, entries: List[LogEntry], output_dir: Path,
                        summary_lines: int = 3) -> Path:
        """
        Write the report to ``<output_dir>/<name>.html``.

        Returns:
            Path to the written file
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        report_path = output_dir / f"{_safe_name(name)}.html"
        report_path.write_text(self.render(entries, summary_lines, source=name), encoding='utf-8')
        return report_path


def _safe_name(name: str) -> str:
    stem = Path(name).stem or "report"
    return re.sub(r'[^A-Za-z0-9_.-]+', '_', stem)
