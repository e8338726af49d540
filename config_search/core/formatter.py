"""Plain-text rendering of search results."""

from typing import List, Optional

from .models import FormatOptions, MatchedFile, ResultSet


SUMMARY_TITLE = "Configuration Files Summary"
FLAT_TITLE = "ALL CONFIGURATION FILES"


def format_results(results: ResultSet, options: Optional[FormatOptions] = None) -> str:
    """
    Render a Result Set as a human-readable report.

    Grouped output is used when requested and the search built a
    per-category grouping; otherwise every file is listed in one section
    with its category. Empty results render as an empty section.

    Args:
        results: Result Set from a search
        options: Presentation options, defaults used if None

    Returns:
        Formatted report
    """
    options = options or FormatOptions()
    lines: List[str] = []

    if options.show_summary:
        lines.append("")
        lines.append(SUMMARY_TITLE)
        lines.append("=" * 35)
        lines.append(f"Total files found: {results.summary.total}")
        lines.append("")

    if options.group_by_category and results.is_grouped:
        for category, matches in results.categorized.items():
            if not matches:
                continue
            lines.append(f"{category.upper()} ({len(matches)})")
            lines.append("-" * 20)
            for matched in matches:
                lines.append(_format_line(matched, options.show_paths))
            lines.append("")
    else:
        lines.append(FLAT_TITLE)
        lines.append("-" * 25)
        for matched in results.files:
            lines.append(f"{_format_line(matched, options.show_paths)} [{matched.category}]")

    return "\n".join(lines) + "\n"


def _format_line(matched: MatchedFile, show_paths: bool) -> str:
    line = f"  ✓ {matched.name}"
    if show_paths:
        line += f" ({matched.relative_path})"
    return line


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format."""
    if size_bytes < 1024:
        return f"{size_bytes}B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f}KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f}MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f}GB"
