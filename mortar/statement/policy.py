"""Filter clause policy for WHERE and HAVING.

A filter clause ANDs its top-level fragments together.  One rule applies on
top of plain composition: when exactly one fragment renders non-empty and
that fragment stands for "no filter supplied", the whole clause is omitted.
Only two kinds qualify: a childless ``And`` / ``Or``, and an ``Eq`` /
``NotEq`` with no columns or whose single column is compared to an empty
collection.

This is what makes an ``Or`` built up from a list of optional conditions,
left empty, produce ``DELETE FROM logs`` rather than
``DELETE FROM logs WHERE (1=0)``.  Raw SQL is never dropped, whatever its
text: ``where("(1=0)")`` or any other explicit false expression is kept, and
is the way to write a statement that matches nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from mortar.expr.base import Fragment, render

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterPolicy:
    """Renders one filter clause.

    Attributes:
        keyword: The clause keyword (``"WHERE"`` or ``"HAVING"``).
        separator: How top-level fragments are joined.
    """

    keyword: str
    separator: str = " AND "

    def render(self, parts: Sequence[Fragment]) -> tuple[str, list[Any]]:
        """Return ``("<keyword> <sql>", args)``, or ``("", [])`` to omit the clause."""
        rendered: list[tuple[Fragment, str, list[Any]]] = []
        for fragment in parts:
            sql, args = render(fragment)
            if sql:
                rendered.append((fragment, sql, args))
        if not rendered:
            return "", []
        if len(rendered) == 1 and rendered[0][0].is_empty_filter:
            logger.debug(
                "Omitting %s clause: sole filter renders %s", self.keyword, rendered[0][1]
            )
            return "", []
        args = [arg for _, _, fragment_args in rendered for arg in fragment_args]
        return f"{self.keyword} {self.separator.join(sql for _, sql, _ in rendered)}", args


WHERE = FilterPolicy("WHERE")
HAVING = FilterPolicy("HAVING")
