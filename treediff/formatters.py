"""Export formatters for diff results."""

from __future__ import annotations

import csv
import html
import io
import json
import xml.etree.ElementTree as ET
from typing import Optional

import yaml

from .exceptions import FormatError
from .models import DiffResult, ExportFormat
from .values import Value


def _json_cell(value: Optional[Value]) -> str:
    if value is None:
        return ""
    return json.dumps(value.to_python(), ensure_ascii=False)


def format_file_size(size: int) -> str:
    """Human-readable size, e.g. '1.5 KB'."""
    if size < 1024:
        return f"{size} B"
    for unit in ("KB", "MB", "GB"):
        size /= 1024
        if size < 1024 or unit == "GB":
            return f"{size:.1f} {unit}"


def to_json(result: DiffResult) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def to_csv(result: DiffResult) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(["Path", "Type", "Left Value", "Right Value", "Description", "Severity"])
    for diff in result.differences:
        writer.writerow([
            diff.path,
            diff.type.value,
            _json_cell(diff.left_value),
            _json_cell(diff.right_value),
            diff.description,
            diff.severity.value,
        ])
    return buffer.getvalue()


def to_text(result: DiffResult) -> str:
    summary = result.summary
    metadata = result.metadata
    lines = [
        f"JSON Diff Report - {result.timestamp.strftime('%Y-%m-%d %H:%M:%S %Z')}",
        "",
        "=== SUMMARY ===",
        f"Total Differences: {summary.total_differences}",
        f"Added: {summary.added}",
        f"Removed: {summary.removed}",
        f"Modified: {summary.modified}",
        f"Similarity: {summary.similarity:.1f}%",
        "",
        "=== METADATA ===",
        f"Left JSON Size: {format_file_size(metadata.left_size)}",
        f"Right JSON Size: {format_file_size(metadata.right_size)}",
        f"Left Depth: {metadata.left_depth}",
        f"Right Depth: {metadata.right_depth}",
        f"Processing Time: {metadata.processing_time:.2f}ms",
        "",
        "=== DIFFERENCES ===",
    ]

    blocks = []
    for diff in result.differences:
        block = [f"Path: {diff.path}", f"Type: {diff.type.value.upper()}"]
        if diff.left_value is not None:
            block.append(f"Left: {_json_cell(diff.left_value)}")
        if diff.right_value is not None:
            block.append(f"Right: {_json_cell(diff.right_value)}")
        block.append(f"Description: {diff.description}")
        block.append(f"Severity: {diff.severity.value}")
        blocks.append("\n".join(block))

    return "\n".join(lines) + "\n" + "\n---\n".join(blocks)


def to_xml(result: DiffResult) -> str:
    root = ET.Element("jsonDiff", {
        "id": result.id,
        "timestamp": result.timestamp.isoformat(),
    })

    summary = ET.SubElement(root, "summary")
    for key, value in result.summary.to_dict().items():
        ET.SubElement(summary, key).text = str(value)

    metadata = ET.SubElement(root, "metadata")
    for key, value in result.metadata.to_dict().items():
        ET.SubElement(metadata, key).text = str(value)

    differences = ET.SubElement(root, "differences")
    for diff in result.differences:
        node = ET.SubElement(differences, "difference")
        ET.SubElement(node, "path").text = diff.path
        ET.SubElement(node, "type").text = diff.type.value
        ET.SubElement(node, "leftValue").text = _json_cell(diff.left_value)
        ET.SubElement(node, "rightValue").text = _json_cell(diff.right_value)
        ET.SubElement(node, "description").text = diff.description
        ET.SubElement(node, "severity").text = diff.severity.value

    ET.indent(root)
    body = ET.tostring(root, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body


def to_yaml(result: DiffResult) -> str:
    data = {
        "id": result.id,
        "timestamp": result.timestamp.isoformat(),
        "summary": result.summary.to_dict(),
        "metadata": result.metadata.to_dict(),
        "differences": [d.to_dict() for d in result.differences],
    }
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


_HTML_STYLE = """
    body { font-family: Arial, sans-serif; margin: 20px; }
    .summary { background: #f5f5f5; padding: 15px; border-radius: 5px; margin-bottom: 20px; }
    .diff { border: 1px solid #ddd; margin: 10px 0; padding: 10px; border-radius: 5px; }
    .added { background: #e8f5e8; border-color: #4caf50; }
    .removed { background: #ffeaea; border-color: #f44336; }
    .modified { background: #fff3e0; border-color: #ff9800; }
    .path { font-weight: bold; color: #333; }
    .value { font-family: monospace; background: #f9f9f9; padding: 2px 4px; border-radius: 3px; }
"""


def to_html(result: DiffResult) -> str:
    summary = result.summary
    esc = html.escape

    items = []
    for diff in result.differences:
        parts = [
            f'  <div class="diff {diff.type.value}">',
            f'    <div class="path">{esc(diff.path)}</div>',
            f"    <div>Type: {diff.type.value.upper()}</div>",
        ]
        if diff.left_value is not None:
            parts.append(
                f'    <div>Left: <span class="value">{esc(_json_cell(diff.left_value))}</span></div>'
            )
        if diff.right_value is not None:
            parts.append(
                f'    <div>Right: <span class="value">{esc(_json_cell(diff.right_value))}</span></div>'
            )
        parts.append(f"    <div>{esc(diff.description)}</div>")
        parts.append("  </div>")
        items.append("\n".join(parts))

    return "\n".join([
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        "  <title>JSON Diff Report</title>",
        f"  <style>{_HTML_STYLE}  </style>",
        "</head>",
        "<body>",
        "  <h1>JSON Diff Report</h1>",
        f"  <p>Generated on: {esc(result.timestamp.isoformat())}</p>",
        '  <div class="summary">',
        "    <h2>Summary</h2>",
        f"    <p>Total Differences: {summary.total_differences}</p>",
        f"    <p>Added: {summary.added} | Removed: {summary.removed} | Modified: {summary.modified}</p>",
        f"    <p>Similarity: {summary.similarity:.1f}%</p>",
        "  </div>",
        "  <h2>Differences</h2>",
        *items,
        "</body>",
        "</html>",
    ])


_FORMATTERS = {
    ExportFormat.JSON: to_json,
    ExportFormat.CSV: to_csv,
    ExportFormat.TXT: to_text,
    ExportFormat.XML: to_xml,
    ExportFormat.YAML: to_yaml,
    ExportFormat.HTML: to_html,
}


def format_result(result: DiffResult, fmt: ExportFormat | str = ExportFormat.JSON) -> str:
    """
    Render a diff result in an export format.

    Args:
        result: The result to render
        fmt: ExportFormat or its name ('json', 'csv', 'txt', 'xml', 'yaml', 'html')

    Returns:
        The rendered document

    Raises:
        FormatError: If the format is unknown
    """
    if not isinstance(fmt, ExportFormat):
        try:
            fmt = ExportFormat(str(fmt).lower())
        except ValueError:
            raise FormatError(str(fmt))
    return _FORMATTERS[fmt](result)
