"""
tagging.template - Custom-format placeholder resolution.

A format such as ``{PREFIX}-{BREED:2}-{NUMBER:4}`` is split once into
literal and placeholder segments; each placeholder is then resolved on
its own, so a substituted value is never scanned for further tokens.

Lookup order for one placeholder:
    1. date / number / prefix tokens
    2. context tokens (breed, gender, status, source)
    3. custom attributes (configured defaults overlaid by caller values)
    4. anything left → "X"
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from tagging.abbreviations import (
    breed_abbreviation,
    production_stage_abbreviation,
    source_code,
)
from tagging.models import (
    AttributeValue,
    CustomAttribute,
    DEFAULT_PREFIX,
    GenerationContext,
)

TOKEN_RE = re.compile(r"\{([^{}]+)\}")
UNRESOLVED_RE = re.compile(r"\{[^}]+\}")
UNRESOLVED = "X"
MAX_FORMAT_LENGTH = 50

SUPPORTED_PLACEHOLDERS = [
    "{PREFIX}", "{NUMBER}", "{NUMBER:n}",
    "{YEAR}", "{YEAR:2}", "{MONTH}", "{MONTH:1}", "{DAY}",
    "{BREED}", "{BREED:n}", "{BREED_GROUP}", "{BREED_GROUP:n}",
    "{GENDER}", "{GENDER:n}",
    "{STATUS}", "{STATUS:n}", "{PRODUCTION_STAGE}", "{PRODUCTION_STAGE:n}",
    "{SOURCE}", "{SOURCE:n}",
]


# ── Segments ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Segment:
    """Literal text (name is None) or one ``{NAME[:arg]}`` placeholder."""
    text: str
    name: Optional[str] = None
    arg: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        return self.name is not None

    @property
    def width(self) -> Optional[int]:
        if self.arg is not None and self.arg.isdigit():
            return int(self.arg)
        return None


def tokenize(fmt: str) -> list[Segment]:
    """Split a format string into literal / placeholder segments."""
    segments: list[Segment] = []
    pos = 0
    for m in TOKEN_RE.finditer(fmt):
        if m.start() > pos:
            segments.append(Segment(fmt[pos:m.start()]))
        name, sep, arg = m.group(1).partition(":")
        segments.append(Segment(
            m.group(0),
            name=name.strip().upper(),
            arg=arg.strip() if sep else None,
        ))
        pos = m.end()
    if pos < len(fmt):
        segments.append(Segment(fmt[pos:]))
    return segments


def fit(value: str, width: int) -> str:
    """Truncate to width, uppercase, right-pad with 'X'."""
    return value[:width].upper().ljust(width, "X")


def _scrub(value: str) -> str:
    return value.replace("{", "").replace("}", "")


# ── Resolution ────────────────────────────────────────────────────────

@dataclass
class _Env:
    prefix: str
    number: int
    today: date
    context: Optional[GenerationContext]
    attributes: dict[str, str] = field(default_factory=dict)


def _resolve_builtin(seg: Segment, env: _Env) -> Optional[str]:
    name, arg, width = seg.name, seg.arg, seg.width
    if name == "PREFIX" and arg is None:
        return env.prefix
    if name == "NUMBER":
        if arg is None:
            return str(env.number)
        if width is not None:
            return str(env.number).zfill(width)
    if name == "YEAR":
        if arg is None:
            return f"{env.today.year:04d}"
        if arg == "2":
            return f"{env.today.year:04d}"[-2:]
    if name == "MONTH":
        if arg is None:
            return f"{env.today.month:02d}"
        if arg == "1":
            return str(env.today.month)
    if name == "DAY" and arg is None:
        return f"{env.today.day:02d}"
    return None


def _context_value(name: str, ctx: GenerationContext) -> Optional[str]:
    data = ctx.animal_data or {}
    if name in ("BREED", "BREED_GROUP"):
        breed = data.get("breed")
        return breed_abbreviation(str(breed)) if breed else None
    if name == "GENDER":
        gender = str(data.get("gender") or "").strip()
        return gender[0].upper() if gender else None
    if name in ("STATUS", "PRODUCTION_STAGE"):
        status = data.get("production_status")
        return production_stage_abbreviation(str(status)) if status else None
    if name == "SOURCE":
        return source_code(ctx.animal_source)
    return None


def _resolve_context(seg: Segment, env: _Env) -> Optional[str]:
    if env.context is None:
        return None
    value = _context_value(seg.name, env.context)
    if value is None:
        return None
    if seg.arg is None:
        return value
    if seg.width is not None:
        # gender is a single letter; width only pads it
        if seg.name == "GENDER":
            return value.ljust(seg.width, "X")
        return fit(value, seg.width)
    return None


def _resolve_attribute(seg: Segment, env: _Env) -> Optional[str]:
    value = env.attributes.get(seg.name)
    if value is None:
        return None
    if seg.arg is None:
        return value[:3].upper()
    if seg.width is not None:
        return fit(value, seg.width)
    return None


_RESOLVERS = (_resolve_builtin, _resolve_context, _resolve_attribute)


def attribute_values(
    configured: Iterable[CustomAttribute],
    supplied: Iterable[AttributeValue] = (),
) -> dict[str, str]:
    """
    Map placeholder name → value.  A caller-supplied value wins
    (case-insensitive name match); otherwise the first allowed value of
    the configured attribute; otherwise 'X'.  Supplied names the farm
    never configured are ignored.
    """
    by_name = {a.name.strip().lower(): a.value for a in supplied if a.value}
    values: dict[str, str] = {}
    for attr in configured:
        chosen = by_name.get(attr.name.strip().lower())
        if not chosen:
            chosen = attr.values[0] if attr.values else UNRESOLVED
        values[attr.placeholder] = chosen
    return values


def resolve(
    fmt: str,
    number: int,
    *,
    prefix: str = DEFAULT_PREFIX,
    context: Optional[GenerationContext] = None,
    custom_attributes: Iterable[CustomAttribute] = (),
    today: Optional[date] = None,
) -> str:
    """Resolve a custom format into a literal tag string."""
    env = _Env(
        prefix=prefix or DEFAULT_PREFIX,
        number=number,
        today=today or date.today(),
        context=context,
        attributes=attribute_values(
            custom_attributes,
            context.custom_attributes if context else (),
        ),
    )
    out: list[str] = []
    for seg in tokenize(fmt):
        if not seg.is_placeholder:
            out.append(seg.text)
            continue
        value = None
        for resolver in _RESOLVERS:
            value = resolver(seg, env)
            if value is not None:
                break
        out.append(_scrub(value) if value is not None else UNRESOLVED)
    # Literal brace debris such as "{{A}B}" can still form a token
    return UNRESOLVED_RE.sub(UNRESOLVED, "".join(out))


# ── Format checking ───────────────────────────────────────────────────

@dataclass
class FormatCheck:
    is_valid: bool
    errors: list[str]
    supported_placeholders: list[str]

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "supported_placeholders": self.supported_placeholders,
        }


_WIDTH_TOKENS = frozenset({
    "NUMBER", "BREED", "BREED_GROUP", "GENDER",
    "STATUS", "PRODUCTION_STAGE", "SOURCE",
})
_FIXED_ARGS = {"YEAR": {None, "2"}, "MONTH": {None, "1"}, "DAY": {None}, "PREFIX": {None}}


def _is_supported(seg: Segment, attribute_names: set[str]) -> bool:
    if seg.name in _FIXED_ARGS:
        return seg.arg in _FIXED_ARGS[seg.name]
    if seg.name in _WIDTH_TOKENS or seg.name in attribute_names:
        return seg.arg is None or seg.width is not None
    return False


def validate_custom_format(fmt: str, attribute_names: Iterable[str] = ()) -> FormatCheck:
    """
    Check a custom format before it is saved.  attribute_names are the
    farm's custom attribute names, which count as supported placeholders.
    """
    names = {"_".join(n.upper().split()) for n in attribute_names}
    errors: list[str] = []

    for raw in UNRESOLVED_RE.findall(fmt):
        segs = tokenize(raw)
        if len(segs) != 1 or not _is_supported(segs[0], names):
            errors.append(f"Unsupported placeholder: {raw}")

    if "{NUMBER" not in fmt.upper():
        errors.append("Format must include a {NUMBER} or {NUMBER:digits} placeholder")
    if fmt.count("{") != fmt.count("}"):
        errors.append("Format contains unbalanced braces")
    if len(fmt) > MAX_FORMAT_LENGTH:
        errors.append(f"Format pattern is too long (max {MAX_FORMAT_LENGTH} characters)")

    supported = SUPPORTED_PLACEHOLDERS + [f"{{{n}}}" for n in sorted(names)]
    return FormatCheck(not errors, errors, supported)
