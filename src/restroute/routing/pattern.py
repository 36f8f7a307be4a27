"""Path templates compiled into anchored matchers.

A template is literal text plus ``{name}`` placeholders::

    "items/{id}"            -> placeholders ("id",)
    "users/{user}/posts/{post}" -> placeholders ("user", "post")

Each placeholder becomes an unnamed capturing group over
``[A-Za-z0-9_-]+``. Captures come back positionally and are paired with
the placeholder names in the order they appear in the template.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from restroute.errors import PatternError

# Characters a placeholder name and a placeholder value may contain
PARAM_CHARS = r"[A-Za-z0-9_-]+"

_NAME_RE = re.compile(PARAM_CHARS)


@dataclass(frozen=True, slots=True)
class Segment:
    """A piece of a parsed template: literal text or a named placeholder."""

    value: str
    is_param: bool = False

    @property
    def param_name(self) -> str | None:
        return self.value if self.is_param else None


def parse_template(template: str) -> tuple[Segment, ...]:
    """Split *template* into literal and placeholder segments.

    Raises ``PatternError`` on an unbalanced brace, an empty or malformed
    placeholder name, or a name used twice.
    """
    segments: list[Segment] = []
    seen: set[str] = set()
    literal: list[str] = []
    i = 0
    while i < len(template):
        char = template[i]
        if char == "}":
            msg = f"Unbalanced '}}' at position {i} in route {template!r}"
            raise PatternError(msg)
        if char != "{":
            literal.append(char)
            i += 1
            continue

        end = template.find("}", i + 1)
        if end == -1:
            msg = f"Unclosed '{{' at position {i} in route {template!r}"
            raise PatternError(msg)
        name = template[i + 1 : end]
        if not is_segment_value(name):
            msg = (
                f"Invalid placeholder {{{name}}} in route {template!r}. "
                "Names may only contain letters, digits, '_' and '-'."
            )
            raise PatternError(msg)
        if name in seen:
            msg = f"Duplicate placeholder {{{name}}} in route {template!r}"
            raise PatternError(msg)
        seen.add(name)

        if literal:
            segments.append(Segment("".join(literal)))
            literal = []
        segments.append(Segment(name, is_param=True))
        i = end + 1

    if literal:
        segments.append(Segment("".join(literal)))
    return tuple(segments)


@dataclass(frozen=True, slots=True)
class PathPattern:
    """A compiled, immutable path template.

    Usage::

        pattern = PathPattern.compile("api/items/{id}")
        pattern.match("api/items/42")   # {"id": "42"}
        pattern.match("api/items")      # None
    """

    template: str
    segments: tuple[Segment, ...]
    regex: re.Pattern[str]

    @classmethod
    def compile(cls, template: str) -> PathPattern:
        segments = parse_template(template)
        parts = [
            f"({PARAM_CHARS})" if seg.is_param else re.escape(seg.value) for seg in segments
        ]
        return cls(template=template, segments=segments, regex=re.compile("".join(parts)))

    @property
    def placeholders(self) -> tuple[str, ...]:
        """Placeholder names, left to right."""
        return tuple(seg.value for seg in self.segments if seg.is_param)

    @property
    def is_static(self) -> bool:
        return not any(seg.is_param for seg in self.segments)

    def join(self, prefix: str) -> PathPattern:
        """Return the pattern for ``prefix/template``.

        *prefix* is literal text: braces in it are matched as-is, never
        parsed as placeholders.
        """
        prefix = prefix.strip("/")
        if not prefix:
            return self
        head = f"{prefix}/" if self.segments else prefix
        return PathPattern(
            template=join_path(prefix, self.template),
            segments=(Segment(head), *self.segments),
            regex=re.compile(re.escape(head) + self.regex.pattern),
        )

    def match(self, candidate: str) -> dict[str, str] | None:
        """Extract placeholder values if *candidate* matches the whole template."""
        found = self.regex.fullmatch(candidate)
        if found is None:
            return None
        return dict(zip(self.placeholders, found.groups(), strict=True))


def is_segment_value(value: str) -> bool:
    """Whether *value* is made only of characters a placeholder can capture."""
    return _NAME_RE.fullmatch(value) is not None


def join_path(*parts: str) -> str:
    """Join path pieces with ``/``, trimming slashes and dropping empties."""
    return "/".join(p.strip("/") for p in parts if p.strip("/"))
