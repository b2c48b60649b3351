"""Path patterns — compile ``/posts/:id`` into a matcher and a path builder.

Supported tokens::

    /about            literal
    /posts/:id        one segment
    /posts/:id(\\d+)   one segment constrained by a regex
    /archive/:year?   optional segment (the leading "/" goes with it)
    /docs/:path+      one or more segments
    /files/:path*     zero or more segments

Patterns are compiled once and cached; a compiled pattern is immutable
and safe to share across requests.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any
from urllib.parse import quote, unquote

from waypost.errors import PatternError

_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_DEFAULT_SEGMENT = r"[^/]+"


@dataclass(frozen=True, slots=True)
class PatternKey:
    """A named parameter inside a pattern.

    ``modifier`` is one of ``""``, ``"?"``, ``"+"``, ``"*"``.
    ``prefix`` is the ``"/"`` that precedes the parameter, if any.
    """

    name: str
    pattern: str = _DEFAULT_SEGMENT
    modifier: str = ""
    prefix: str = ""

    @property
    def optional(self) -> bool:
        return self.modifier in ("?", "*")

    @property
    def repeat(self) -> bool:
        return self.modifier in ("+", "*")


type Token = str | PatternKey


def _read_group(pattern: str, start: int) -> tuple[str, int]:
    """Read a balanced ``(...)`` group starting at *start* (the ``(``)."""
    depth = 0
    i = start
    while i < len(pattern):
        char = pattern[i]
        if char == "\\":
            i += 2
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return pattern[start + 1 : i], i + 1
        i += 1
    raise PatternError(pattern, f"Unbalanced parenthesis at position {start}")


def tokenize(pattern: str) -> list[Token]:
    """Split a pattern into literal strings and ``PatternKey`` tokens.

    Examples::

        "/about"          -> ["/about"]
        "/posts/:id"      -> ["/posts", PatternKey("id", prefix="/")]
        "/a/:b?/c"        -> ["/a", PatternKey("b", modifier="?", prefix="/"), "/c"]
    """
    if not pattern.startswith("/"):
        raise PatternError(pattern, "Patterns must start with '/'")

    tokens: list[Token] = []
    literal = ""
    seen: set[str] = set()
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char != ":":
            literal += char
            i += 1
            continue

        name_match = _NAME.match(pattern, i + 1)
        if name_match is None:
            raise PatternError(pattern, f"Missing parameter name at position {i}")
        name = name_match.group()
        if name in seen:
            raise PatternError(pattern, f"Duplicate parameter {name!r}")
        seen.add(name)
        i = name_match.end()

        segment = _DEFAULT_SEGMENT
        if i < len(pattern) and pattern[i] == "(":
            segment, i = _read_group(pattern, i)
            if not segment:
                raise PatternError(pattern, f"Empty regex for parameter {name!r}")

        modifier = ""
        if i < len(pattern) and pattern[i] in "?+*":
            modifier = pattern[i]
            i += 1

        prefix = ""
        if literal.endswith("/"):
            prefix = "/"
            literal = literal[:-1]
        if literal:
            tokens.append(literal)
        literal = ""
        tokens.append(PatternKey(name=name, pattern=segment, modifier=modifier, prefix=prefix))

    if literal:
        tokens.append(literal)
    return tokens


def _key_regex(key: PatternKey) -> str:
    prefix = re.escape(key.prefix)
    if key.repeat:
        body = f"(?P<{key.name}>(?:{key.pattern})(?:/(?:{key.pattern}))*)"
    else:
        body = f"(?P<{key.name}>{key.pattern})"
    if key.optional:
        return f"(?:{prefix}{body})?"
    return f"{prefix}{body}"


class CompiledPattern:
    """A compiled path pattern.

    ``match`` turns a pathname into a param dict (or ``None``),
    ``to_path`` turns a param dict back into a pathname.
    """

    __slots__ = ("_regex", "keys", "pattern", "tokens")

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self.tokens: tuple[Token, ...] = tuple(tokenize(pattern))
        self.keys: tuple[PatternKey, ...] = tuple(
            token for token in self.tokens if isinstance(token, PatternKey)
        )

        parts = [
            re.escape(token) if isinstance(token, str) else _key_regex(token)
            for token in self.tokens
        ]
        body = "".join(parts)
        # One trailing slash is tolerated on every pattern
        if body.endswith("/"):
            body = body[:-1]
        try:
            self._regex = re.compile(f"^{body}/?$")
        except re.error as exc:
            raise PatternError(pattern, f"Invalid regex: {exc}") from exc

    def __repr__(self) -> str:
        return f"CompiledPattern({self.pattern!r})"

    @property
    def key_names(self) -> tuple[str, ...]:
        return tuple(key.name for key in self.keys)

    def match(self, pathname: str) -> dict[str, str] | None:
        """Match *pathname*; return decoded params or ``None``.

        Parameters that did not participate (optional keys) are omitted.
        """
        found = self._regex.match(pathname)
        if found is None:
            return None
        params: dict[str, str] = {}
        for key in self.keys:
            value = found.group(key.name)
            if value is None:
                continue
            if key.repeat:
                params[key.name] = "/".join(unquote(part) for part in value.split("/"))
            else:
                params[key.name] = unquote(value)
        return params

    def to_path(self, params: dict[str, Any] | None = None) -> str:
        """Build a pathname from *params*.

        Raises ``PatternError`` when a required key is missing or a value
        does not satisfy its segment constraint.
        """
        params = params or {}
        out: list[str] = []
        for token in self.tokens:
            if isinstance(token, str):
                out.append(token)
                continue

            value = params.get(token.name)
            if value is None or value == "" or value == [] or value == ():
                if token.optional:
                    continue
                raise PatternError(self.pattern, f"Missing parameter {token.name!r}")

            if token.repeat:
                items = value if isinstance(value, (list, tuple)) else str(value).split("/")
                segments = [quote(str(item), safe="") for item in items]
            else:
                segments = [quote(str(value), safe="")]

            for segment in segments:
                if not re.fullmatch(token.pattern, segment):
                    raise PatternError(
                        self.pattern,
                        f"Value {segment!r} for {token.name!r} does not match {token.pattern!r}",
                    )
            out.append(token.prefix + "/".join(segments))

        path = "".join(out)
        return path or "/"


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile *pattern*, reusing earlier compilations of the same string."""
    return CompiledPattern(pattern)
