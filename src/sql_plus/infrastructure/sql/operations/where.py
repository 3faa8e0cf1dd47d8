"""
WHERE clause compilation.

A where-node is one of:

- a mapping of column -> value, compiled to equality / IS NULL / IN tests;
- a list of nested nodes, for explicit grouping;
- a plain string, used verbatim;
- an empty/falsy value, meaning "always true".

Keys of a mapping are column names, except:

- an integer key marks a positional entry: a nested node becomes a
  parenthesized group joined with the *opposite* connective, a string
  becomes a parenthesized raw fragment;
- a key containing ``?`` is a custom comparison; its first ``?`` is
  replaced with the quoted value, e.g. ``{"age > ?": 18}``.

Example:
    >>> from sql_plus.infrastructure.sql import Escaper
    >>> WhereCompiler(Escaper()).compile_list({"a": 1, "b": None, "c": [1, 2], "d": []})
    '`a`=1 AND `b` IS NULL AND `c` IN (1, 2) AND 0'
    >>> WhereCompiler(Escaper()).compile_list([{"a": 1, "b": 2}, {"c": 3}])
    '(`a`=1 OR `b`=2) AND (`c`=3)'
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Tuple, Union

from ..core.escaper import Escaper
from ..core.exceptions import UnsupportedWhereKindError
from ..core.raw import RawSql

WhereNode = Union[None, str, RawSql, Mapping[Any, Any], List[Any], Tuple[Any, ...]]

JOINERS = ("AND", "OR")
VALUE_LIST_TYPES = (list, tuple, set, frozenset)


def opposite(joiner: str) -> str:
    return "OR" if joiner == "AND" else "AND"


class WhereCompiler:
    """Compiles where-nodes into boolean SQL expressions."""

    def __init__(self, escaper: Escaper):
        self.escaper = escaper

    def compile_list(self, node: WhereNode, joiner: str = "AND") -> str:
        """
        Compile ``node`` into a single boolean expression.

        Args:
            node: Where-node (see module docstring)
            joiner: "AND" or "OR", used between the node's entries

        Returns:
            SQL expression; ``"1"`` for an empty node

        Raises:
            UnsupportedWhereKindError: ``node`` is not a supported type
        """
        joiner = joiner.strip().upper()
        if joiner not in JOINERS:
            raise ValueError(f"joiner must be AND or OR, not {joiner!r}")
        if not node:
            return "1"
        if isinstance(node, RawSql):
            return node.sql
        if isinstance(node, str):
            return node
        if isinstance(node, (Mapping, list, tuple)):
            return f" {joiner} ".join(self.compile_pairs(node, opposite(joiner)))
        raise UnsupportedWhereKindError(node, "mapping, list or str")

    def compile_pairs(self, node: Union[Mapping[Any, Any], List[Any], Tuple[Any, ...]],
                      nested_joiner: str = "OR") -> List[str]:
        """
        Compile each entry of ``node`` into one SQL fragment.

        Args:
            node: Mapping or list of entries
            nested_joiner: Connective used inside nested groups

        Returns:
            Fragments, ready to be joined by the caller
        """
        fragments = []
        for key, value in self._entries(node):
            if isinstance(key, int) and not isinstance(key, bool):
                fragments.append(self._positional(value, nested_joiner))
            elif isinstance(key, str) and "?" in key:
                fragments.append(key.replace("?", self.escaper.quote(value), 1))
            elif value is None:
                fragments.append(f"{self.escaper.escape_id(key)} IS NULL")
            elif isinstance(value, VALUE_LIST_TYPES):
                if not value:
                    # IN () is invalid SQL; an empty set matches nothing
                    fragments.append("0")
                else:
                    fragments.append(
                        f"{self.escaper.escape_id(key)} IN {self.escaper.quote(value)}"
                    )
            else:
                fragments.append(
                    f"{self.escaper.escape_id(key)}={self.escaper.quote(value)}"
                )
        return fragments

    def _positional(self, value: Any, nested_joiner: str) -> str:
        if isinstance(value, (Mapping, list, tuple)):
            return f"({self.compile_list(value, nested_joiner)})"
        if isinstance(value, (str, RawSql)):
            return f"({value})"
        raise UnsupportedWhereKindError(value, "nested node or SQL fragment")

    @staticmethod
    def _entries(node: Any) -> Iterable[Tuple[Any, Any]]:
        if isinstance(node, Mapping):
            return node.items()
        return enumerate(node)
