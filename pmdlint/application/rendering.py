"""Report rendering.

Renders a Report into PMD's plain-text and HTML layouts and writes them next
to the engine's native report. Output is deterministic: the same Report always
renders to the same bytes.

Functions
---------
render_text : PMD text layout, one line per entry
render_html : PMD classic HTML layout
prepare_report_directory : Prune and recreate the report directory

Classes
-------
ReportRenderer : Renders and writes the requested formats
"""
from __future__ import annotations

from html import escape
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple, Union

from pmdlint.core.logging_config import get_logger
from pmdlint.core.models import Report
from pmdlint.infra.fs import prune, write_text

logger = get_logger(__name__)

Renderer = Callable[[Report, bool], str]


def render_text(report: Report, show_suppressed: bool = False) -> str:
    lines: List[str] = []
    for v in report.violations:
        lines.append(f"{v.file_path}:{v.line}:\t{v.rule_name}:\t{v.message}")
    for error in report.processing_errors:
        lines.append(f"{error.file_path}:\t{error.message}")
    if show_suppressed:
        for s in report.suppressed_violations:
            lines.append(
                f"{s.violation.rule_name} rule violation suppressed by "
                f"{s.suppressor} in {s.violation.file_path}"
            )
    for error in report.configuration_errors:
        lines.append(f"{error.rule_name}:\t{error.message}")
    return "".join(f"{line}\n" for line in lines)


_TABLE_OPEN = '<table align="center" cellspacing="0" cellpadding="3">'


def _row(cells: Sequence[Tuple[str, str]], shaded: bool) -> str:
    colour = ' bgcolor="lightgrey"' if shaded else ""
    body = "".join(f"<td{attrs}>{escape(text)}</td>" for attrs, text in cells)
    return f"<tr{colour}>{body}</tr>\n"


def _section(title: str, headers: Sequence[str], rows: Sequence[Sequence[Tuple[str, str]]]) -> str:
    head = "".join(f"<th>{escape(h)}</th>" for h in headers)
    out = [f"<hr/><center><h3>{escape(title)}</h3></center>{_TABLE_OPEN}<tr>{head}</tr>\n"]
    out.extend(_row(cells, index % 2 == 0) for index, cells in enumerate(rows))
    out.append("</table>\n")
    return "".join(out)


def render_html(report: Report, show_suppressed: bool = False) -> str:
    out = [
        "<html><head><title>PMD</title></head><body>\n",
        "<center><h3>PMD report</h3></center>",
        f"<center><h3>Problems found</h3></center>{_TABLE_OPEN}<tr>\n",
        "<th>#</th><th>File</th><th>Line</th><th>Problem</th></tr>\n",
    ]
    for number, v in enumerate(report.violations, start=1):
        out.append(_row(
            [
                (' align="center"', str(number)),
                (' width="*%"', v.file_path),
                (' align="center" width="5%"', str(v.line)),
                (' width="*"', v.message),
            ],
            number % 2 == 1,
        ))
    out.append("</table>\n")

    if show_suppressed and report.suppressed_violations:
        out.append(_section(
            "Suppressed warnings",
            ["File", "Line", "Rule", "NOPMD or Annotation", "Reason"],
            [
                [
                    ("", s.violation.file_path),
                    (' align="center"', str(s.violation.line)),
                    ("", s.violation.rule_name),
                    ("", s.suppressor),
                    ("", s.user_message),
                ]
                for s in report.suppressed_violations
            ],
        ))

    if report.processing_errors:
        out.append(_section(
            "Processing errors",
            ["File", "Problem"],
            [[("", e.file_path), ("", e.message)] for e in report.processing_errors],
        ))

    if report.configuration_errors:
        out.append(_section(
            "Configuration errors",
            ["Rule", "Problem"],
            [[("", e.rule_name), ("", e.message)] for e in report.configuration_errors],
        ))

    out.append("</body></html>\n")
    return "".join(out)


#: format name -> (file extension, renderer)
RENDERERS: Dict[str, Tuple[str, Renderer]] = {
    "html": ("html", render_html),
    "text": ("txt", render_text),
}

DEFAULT_FORMATS: Tuple[str, ...] = ("html", "text")


def prepare_report_directory(directory: Union[str, Path]) -> Path:
    """
    Delete ``directory`` and everything under it, then recreate it (with any
    missing parents). Files placed there by anyone else are lost.
    """
    target = Path(directory)
    prune(target)
    target.mkdir(parents=True)
    return target


class ReportRenderer:
    """Renders a Report into the requested formats."""

    def __init__(self, show_suppressed: bool = False, formats: Sequence[str] = DEFAULT_FORMATS) -> None:
        unknown = [name for name in formats if name not in RENDERERS]
        if unknown:
            raise ValueError(f"Unknown report formats: {', '.join(unknown)}")
        self.show_suppressed = show_suppressed
        self.formats = tuple(formats)

    def render(self, report: Report) -> Dict[str, str]:
        return {name: RENDERERS[name][1](report, self.show_suppressed) for name in self.formats}

    def write(
        self, rendered: Dict[str, str], directory: Union[str, Path], base_name: str
    ) -> List[Path]:
        """Write the output of ``render`` as ``{base_name}.{extension}`` files."""
        written = []
        for name, content in rendered.items():
            extension = RENDERERS[name][0]
            path = write_text(Path(directory) / f"{base_name}.{extension}", content)
            logger.debug("Wrote %s report to %s", name, path)
            written.append(path)
        return written
