"""
Message templates and structured log state.

A log call's state is either *structured*, an ordered run of
``(name, value)`` pairs that become entry properties, or *opaque*, any other
object that is simply rendered with ``str()``. Message templates such as
``"User {UserId} logged in from {IPAddress}"`` produce structured state
(:class:`FormattedLogValues`) whose holes are bound to arguments by position.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, overload

from logspy.models.properties import EMPTY_PROPERTIES, PropertyMap


ORIGINAL_FORMAT_KEY = "{OriginalFormat}"
NULL_VALUE = "(null)"


@dataclass(frozen=True, slots=True)
class TemplateHole:
    """A named placeholder inside a message template."""

    name: str
    text: str
    alignment: int | None = None
    format_spec: str | None = None


TemplatePart = str | TemplateHole


@lru_cache(maxsize=1024)
def parse_template(template: str) -> tuple[TemplatePart, ...]:
    """Split a template into literal text and holes.

    ``{{`` and ``}}`` are escapes for literal braces. An unterminated ``{``
    is kept as literal text.
    """
    parts: list[TemplatePart] = []
    literal: list[str] = []
    i = 0
    length = len(template)

    while i < length:
        char = template[i]
        if char == "{":
            if i + 1 < length and template[i + 1] == "{":
                literal.append("{")
                i += 2
                continue
            end = template.find("}", i + 1)
            if end == -1:
                literal.append(template[i:])
                break
            hole = _parse_hole(template[i : end + 1])
            if isinstance(hole, str):
                literal.append(hole)
            else:
                if literal:
                    parts.append("".join(literal))
                    literal = []
                parts.append(hole)
            i = end + 1
            continue
        if char == "}" and i + 1 < length and template[i + 1] == "}":
            literal.append("}")
            i += 2
            continue
        literal.append(char)
        i += 1

    if literal:
        parts.append("".join(literal))
    return tuple(parts)


def _parse_hole(text: str) -> TemplatePart:
    inner = text[1:-1]
    format_spec: str | None = None
    alignment: int | None = None

    if ":" in inner:
        inner, format_spec = inner.split(":", 1)
    if "," in inner:
        inner, raw_alignment = inner.split(",", 1)
        try:
            alignment = int(raw_alignment.strip())
        except ValueError:
            alignment = None

    name = inner.strip()
    if name[:1] in ("@", "$"):
        name = name[1:]
    if not name:
        return text
    return TemplateHole(
        name=name, text=text, alignment=alignment, format_spec=format_spec
    )


def template_names(template: str) -> tuple[str, ...]:
    """Hole names in order of appearance."""
    return tuple(
        part.name for part in parse_template(template) if isinstance(part, TemplateHole)
    )


def render_value(value: Any, format_spec: str | None = None) -> str:
    """Render a single property value for message text."""
    if value is None:
        return NULL_VALUE
    if format_spec:
        try:
            return format(value, format_spec)
        except (TypeError, ValueError):
            return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, bytes | bytearray | Mapping):
        return str(value)
    if isinstance(value, Iterable):
        return ", ".join(render_value(item) for item in value)
    return str(value)


def render_template(template: str, args: Sequence[Any]) -> str:
    """Render ``template`` with ``args`` bound to its holes by position.

    Holes without a matching argument are left as written; surplus arguments
    are ignored.
    """
    rendered: list[str] = []
    index = 0
    for part in parse_template(template):
        if isinstance(part, str):
            rendered.append(part)
            continue
        if index >= len(args):
            rendered.append(part.text)
            index += 1
            continue
        text = render_value(args[index], part.format_spec)
        index += 1
        if part.alignment is not None:
            width = abs(part.alignment)
            text = text.rjust(width) if part.alignment > 0 else text.ljust(width)
        rendered.append(text)
    return "".join(rendered)


class StructuredFields(Sequence[tuple[str, Any]]):
    """Structured log state: an ordered sequence of ``(name, value)`` pairs."""

    def __init__(self, pairs: Iterable[tuple[str, Any]] = ()) -> None:
        self._pairs: tuple[tuple[str, Any], ...] = tuple(
            (str(name), value) for name, value in pairs
        )

    @overload
    def __getitem__(self, index: int) -> tuple[str, Any]: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[tuple[str, Any]]: ...

    def __getitem__(self, index: int | slice) -> Any:
        return self._pairs[index]

    def __len__(self) -> int:
        return len(self._pairs)

    def __str__(self) -> str:
        return ", ".join(f"{name}: {render_value(value)}" for name, value in self._pairs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._pairs)!r})"


class FormattedLogValues(StructuredFields):
    """Template-backed structured state.

    Pairs are the template's holes bound to ``args`` by position, followed by
    the template itself under ``{OriginalFormat}``. The message is rendered on
    first use and cached.
    """

    def __init__(self, template: str, *args: Any) -> None:
        self.template = template
        self.args = args
        names = template_names(template)
        pairs = list(zip(names, args, strict=False))
        pairs.append((ORIGINAL_FORMAT_KEY, template))
        super().__init__(pairs)
        self._message: str | None = None

    def __str__(self) -> str:
        if self._message is None:
            self._message = render_template(self.template, self.args)
        return self._message


def format_state(state: Any, exception: BaseException | None = None) -> str:
    """Default message formatter: the string form of the state."""
    if state is None:
        return ""
    return str(state)


def extract_properties(state: Any) -> PropertyMap:
    """Lift structured state into entry properties.

    Opaque or malformed state yields an empty map; this never raises.
    """
    if state is None or isinstance(state, str | bytes | bytearray):
        return EMPTY_PROPERTIES
    if isinstance(state, StructuredFields):
        return PropertyMap(state) if len(state) else EMPTY_PROPERTIES

    pairs: list[tuple[str, Any]] = []
    try:
        if isinstance(state, Mapping):
            items: Iterable[Any] = state.items()
        elif isinstance(state, Sequence):
            items = state
        else:
            return EMPTY_PROPERTIES
        for item in items:
            if not isinstance(item, tuple | list) or len(item) != 2:
                return EMPTY_PROPERTIES
            key, value = item
            if not isinstance(key, str):
                return EMPTY_PROPERTIES
            pairs.append((key, value))
    except (TypeError, ValueError):
        return EMPTY_PROPERTIES

    return PropertyMap(pairs) if pairs else EMPTY_PROPERTIES
