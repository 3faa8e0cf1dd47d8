"""
Client-side SQL templating.

A template is ordinary SQL with four placeholder forms:

    ?        next positional parameter, quoted as a value
    ??       next positional parameter, quoted as an identifier
    :name    named parameter, quoted as a value
    ::name   named parameter, quoted as an identifier

Quoted spans (``'...'``, ``"..."`` and ```...```) are copied through
untouched, so a ``?`` inside a string literal is never substituted. Inside a
span a doubled delimiter or a backslash escape does not end the span.
A delimiter with no closing partner is copied through as literal text.
Note that a lone apostrophe (``-- don't``) followed later by a real string
literal pairs with that literal's opening quote instead, so placeholders
between the two are not substituted.

The template is scanned once; substituted text is never rescanned, so
escaped values may themselves contain ``?`` or ``:`` safely.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Iterator, Mapping, Optional, Sequence, Union

from .exceptions import (
    MissingNamedParamError,
    MixedParamsError,
    NotEnoughParamsError,
    TemplateError,
)

Params = Union[Sequence[Any], Mapping[str, Any]]

# Alternation order matters: quoted spans win over placeholders, and the
# longer marker (?? / ::) wins over the shorter one.
TOKEN_PATTERN = re.compile(
    r"""
      (?P<span>
          `(?:[^`\\]|\\.|``)*`
        | '(?:[^'\\]|\\.|'')*'
        | "(?:[^"\\]|\\.|"")*"
      )
    | (?P<positional>\?\??)
    | (?P<named>::?)(?P<name>[^\W\d]\w*)
    """,
    re.VERBOSE | re.DOTALL,
)


def format_template(
    template: str,
    params: Optional[Params],
    quote: Callable[[Any], str],
    escape_id: Callable[[Any], str],
) -> str:
    """
    Substitute placeholders in ``template``.

    Args:
        template: SQL text with placeholders
        params: Ordered sequence for ``?``/``??``, mapping for ``:name``/``::name``,
            or None to return the template unchanged
        quote: Renders a value as a SQL literal
        escape_id: Renders an identifier

    Returns:
        SQL text with every placeholder outside quoted spans replaced

    Raises:
        NotEnoughParamsError: More positional placeholders than parameters
        MissingNamedParamError: A named placeholder has no matching key
        MixedParamsError: Placeholder style does not match the params type
    """
    if params is None:
        return template

    named: Optional[Mapping[str, Any]] = None
    positional: Optional[Iterator[Any]] = None
    if isinstance(params, Mapping):
        named = params
    elif isinstance(params, Sequence) and not isinstance(params, (str, bytes)):
        positional = iter(params)
    else:
        raise TemplateError(
            f"params must be a sequence or a mapping, not {type(params).__name__}"
        )

    consumed = 0

    def substitute(match: "re.Match[str]") -> str:
        nonlocal consumed

        if match.group("span") is not None:
            return match.group(0)

        marker = match.group("positional")
        if marker is not None:
            if positional is None:
                raise MixedParamsError(
                    f"Positional placeholder {marker!r} at offset {match.start()} "
                    "requires sequence params"
                )
            try:
                value = next(positional)
            except StopIteration:
                raise NotEnoughParamsError(consumed) from None
            consumed += 1
            return escape_id(value) if marker == "??" else quote(value)

        name = match.group("name")
        if named is None:
            raise MixedParamsError(
                f"Named placeholder {name!r} requires mapping params"
            )
        if name not in named:
            raise MissingNamedParamError(name)
        value = named[name]
        return escape_id(value) if match.group("named") == "::" else quote(value)

    return TOKEN_PATTERN.sub(substitute, template)
