from __future__ import annotations

from typing import Sequence

from walloffame.contributors.schema import Contributor

GITHUB_BASE_URL = "https://github.com/"

_HTML_ESCAPES = (
    ("&", "&amp;"),  # must run first
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
)


def escape_html(s: object) -> str:
    out = str(s)
    for char, entity in _HTML_ESCAPES:
        out = out.replace(char, entity)
    return out


def _row(idx: int, c: Contributor) -> str:
    link = escape_html(f"{GITHUB_BASE_URL}{c.github}")
    return f"""
    <tr>
      <td>{idx}</td>
      <td>{escape_html(c.fullName)}</td>
      <td><code>{escape_html(c.rollNumber)}</code></td>
      <td><a href="{link}">@{escape_html(c.github)}</a></td>
    </tr>"""


def generate_wall_of_fame_table(contributors: Sequence[Contributor]) -> str:
    """
    HTML table for the README: header row plus one row per contributor,
    numbered from 1 in the given order.
    """
    rows = "".join(_row(i, c) for i, c in enumerate(contributors, start=1))

    return f"""
<table>
  <thead>
    <tr>
      <th>#</th>
      <th>Full Name</th>
      <th>Roll No.</th>
      <th>GitHub</th>
    </tr>
  </thead>
  <tbody>{rows}
  </tbody>
</table>""".strip()
