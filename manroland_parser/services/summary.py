from __future__ import annotations

from pathlib import Path

from ..models.parse_result import ParseResult

"""SUMMARY line rendering for a parsed export."""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for very small numbers
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}"


def render_summary_line(source: str | None, result: ParseResult) -> str:
    """Render the SUMMARY line for one parse, without the label.

    The ``SUMMARY`` label is added by the log formatter when the line is
    logged at ``SUMMARY_LEVEL``.

    Format:
    file={name} job={jobNo} machine={machine} values={n} primary={p}
    secondary={s} corrected={c} skipped={k} elapsed_sec={t}

    Args:
        source: path of the parsed file, or None/"-" for stdin
        result: successful ParseResult

    Examples:
        >>> from manroland_parser.models.parse_result import ParseResult, ParseStats
        >>> result = ParseResult(
        ...     meta={"jobNo": "15-1923", "machine": "R508"},
        ...     values=[{}, {}, {}],
        ...     stats=ParseStats(primary_rows=2, secondary_records=1, elapsed_seconds=2.0),
        ... )
        >>> render_summary_line("R508_15-1923.csv", result)
        'file=R508_15-1923.csv job=15-1923 machine=R508 values=3 primary=2 secondary=1 corrected=0 skipped=0 elapsed_sec=2'
    """
    name = Path(source).name if source and source != "-" else "<stdin>"
    stats = result.stats
    machine = result.meta.get("machine") or "-"
    return (
        f"file={name} "
        f"job={result.meta.get('jobNo')} "
        f"machine={machine} "
        f"values={len(result.values)} "
        f"primary={stats.primary_rows} "
        f"secondary={stats.secondary_records} "
        f"corrected={stats.corrected_rows} "
        f"skipped={stats.skipped_rows} "
        f"elapsed_sec={_format_seconds(stats.elapsed_seconds)}"
    )
