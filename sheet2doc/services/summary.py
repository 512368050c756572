from __future__ import annotations

from ..models.run_result import RunResult

"""SUMMARY line rendering.

Format:
SUMMARY status={status} stage={stage|-} error={kind|-} blocks={n} elapsed_sec={s} url={url|-}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for very small values
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line for a finished run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from sheet2doc.models.run_result import RunStatus
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> r = RunResult(status=RunStatus.SUCCESS, start_time=t, end_time=t,
        ...               elapsed_seconds=2.0, block_count=4, url="file:///tmp/a.docx")
        >>> render_summary_line(r)
        'SUMMARY status=success stage=- error=- blocks=4 elapsed_sec=2 url=file:///tmp/a.docx'
    """
    failure = result.failure
    stage = failure.stage if failure is not None and failure.stage else "-"
    error = failure.kind.value if failure is not None else "-"
    return (
        f"SUMMARY status={result.status.value} "
        f"stage={stage} "
        f"error={error} "
        f"blocks={result.block_count} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)} "
        f"url={result.url or '-'}"
    )
