"""Template interpolation for {{.key}} and {{.key | filter args}} placeholders.

Resolves placeholders against a flat parameter map. Placeholders whose key
is not in the map are left verbatim, filter suffix included, so a later
pass with more parameters can still resolve them. The one exception is a
pipeline containing "default": its key resolves to "" and the pipeline runs,
so {{.missing | default "x"}} renders "x".

Filter arguments are double-quoted strings, integers, or .key references to
other parameters. The piped value is always passed last:

    {{.git.hash | trunc 8}}
    {{.version | default .fallback "0.0.1"}}
"""

import base64
import binascii
import json
import posixpath
import re
from typing import Callable, Dict, Mapping, NamedTuple, Optional, Tuple
from urllib.parse import quote_plus

from tollgate.constants import Filter
from tollgate.primitives.errors import ErrorCode, TemplateError

_QUOTED = r'"(?:[^"\\]|\\.)*"'
_PLACEHOLDER_RE = re.compile(
    r"\{\{\s*\.([A-Za-z0-9_.\-]+)\s*((?:\|(?:" + _QUOTED + r'|[^|}"])*)*)\}\}'
)
_PIPELINE_RE = re.compile(r"(?:\|(?:" + _QUOTED + r'|[^|"])*)*')
_SEGMENT_RE = re.compile(r"\|((?:" + _QUOTED + r'|[^|"])*)')
_TOKEN_RE = re.compile(_QUOTED + r"|\S+")
_INT_RE = re.compile(r"-?\d+")
_REF_RE = re.compile(r"\.([A-Za-z0-9_.\-]+)")
_WORD_START_RE = re.compile(r"(?<!\w)(\w)")

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})


class Ref(NamedTuple):
    """Filter argument naming another parameter, written .key."""

    key: str


class FilterCall(NamedTuple):
    """One pipeline step: a filter and its literal or Ref arguments."""

    filter: Filter
    args: tuple = ()


def _title(value: str) -> str:
    """Uppercase the first letter of each word, leave the rest alone."""
    return _WORD_START_RE.sub(lambda m: m.group(1).upper(), value)


def _untitle(value: str) -> str:
    return value[:1].lower() + value[1:]


def _escape(value: str) -> str:
    return value.replace("_", "-").replace("/", "-").replace(".", "-")


def _b64dec(value: str) -> str:
    try:
        return base64.b64decode(value, validate=True).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError) as e:
        # Decoding errors are rendered in place of the value.
        return str(e)


def _dirname(value: str) -> str:
    parent = posixpath.dirname(value)
    return posixpath.normpath(parent) if parent else "."


def _basename(value: str) -> str:
    if not value:
        return "."
    stripped = value.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def _default(*candidates) -> str:
    # The piped value comes last and wins when non-empty, then the
    # arguments from right to left.
    for candidate in reversed(candidates):
        if candidate != "":
            return str(candidate)
    return ""


def _trunc(count: int, value: str) -> str:
    if count < 0:
        raise ValueError(f"negative length {count}")
    return value[:count]


def _substr(start: int, end: int, value: str) -> str:
    """Slice value[start:end]; a negative start means 0, a negative end means len."""
    if start < 0:
        start = 0
    if end < 0:
        end = len(value)
    if start > end or end > len(value):
        raise ValueError(f"range [{start}:{end}] out of bounds for length {len(value)}")
    return value[start:end]


def _abbrev(width: int, value: str) -> str:
    if width < 4 or len(value) <= width:
        return value
    return value[: width - 3] + "..."


def _repeat(count: int, value: str) -> str:
    if count < 0:
        raise ValueError(f"negative count {count}")
    return value * count


def _indent(spaces: int, value: str) -> str:
    pad = " " * spaces
    return pad + value.replace("\n", "\n" + pad)


def _ternary(if_true: str, if_false: str, value: str) -> str:
    return if_true if value in _TRUE_VALUES else if_false


_FILTERS: Dict[Filter, Callable[[str], str]] = {
    Filter.UPPER: str.upper,
    Filter.LOWER: str.lower,
    Filter.TITLE: _title,
    Filter.UNTITLE: _untitle,
    Filter.TRIM: str.strip,
    Filter.NOSPACE: lambda v: "".join(v.split()),
    Filter.SWAPCASE: str.swapcase,
    Filter.ESCAPE: _escape,
    Filter.QUOTE: lambda v: json.dumps(v, ensure_ascii=False),
    Filter.SQUOTE: lambda v: f"'{v}'",
    Filter.STRING_QUOTE: lambda v: json.dumps(v, ensure_ascii=False)[1:-1],
    Filter.B64ENC: lambda v: base64.b64encode(v.encode("utf-8")).decode("ascii"),
    Filter.B64DEC: _b64dec,
    Filter.URLENCODE: lambda v: quote_plus(v),
    Filter.DIRNAME: _dirname,
    Filter.BASENAME: _basename,
}

# Argument types per filter; None takes any number of arguments.
_ARG_FILTERS: Dict[Filter, Tuple[Callable[..., str], Optional[Tuple[type, ...]]]] = {
    Filter.DEFAULT: (_default, None),
    Filter.TRUNC: (_trunc, (int,)),
    Filter.SUBSTR: (_substr, (int, int)),
    Filter.ABBREV: (_abbrev, (int,)),
    Filter.REPLACE: (lambda old, new, v: v.replace(old, new), (str, str)),
    Filter.TRIM_PREFIX: (lambda prefix, v: v.removeprefix(prefix), (str,)),
    Filter.TRIM_SUFFIX: (lambda suffix, v: v.removesuffix(suffix), (str,)),
    Filter.TRIM_ALL: (lambda cutset, v: v.strip(cutset), (str,)),
    Filter.REPEAT: (_repeat, (int,)),
    Filter.INDENT: (_indent, (int,)),
    Filter.NINDENT: (lambda spaces, v: "\n" + _indent(spaces, v), (int,)),
    Filter.TERNARY: (_ternary, (str, str)),
}


def _parse_arg(token: str, placeholder: str):
    if token.startswith('"'):
        try:
            return json.loads(token)
        except ValueError:
            raise TemplateError(
                f"Bad string argument {token} in {placeholder}",
                code=ErrorCode.TEMPLATE_BAD_SYNTAX,
                placeholder=placeholder,
            ) from None
    if _INT_RE.fullmatch(token):
        return int(token)
    ref = _REF_RE.fullmatch(token)
    if ref:
        return Ref(ref.group(1))
    raise TemplateError(
        f"Bad filter argument {token!r} in {placeholder}",
        code=ErrorCode.TEMPLATE_BAD_SYNTAX,
        placeholder=placeholder,
    )


def parse_filters(pipeline: str, placeholder: str = "") -> list:
    """Parse a '| f1 | f2 "arg" 3 .key' pipeline suffix into FilterCalls.

    Raises:
        TemplateError: On an empty segment, an unknown filter name, a
            malformed argument or a wrong number of arguments.
    """
    calls = []
    if not pipeline:
        return calls
    placeholder = placeholder or pipeline
    if not _PIPELINE_RE.fullmatch(pipeline):
        raise TemplateError(
            f"Malformed filter pipeline in {placeholder}",
            code=ErrorCode.TEMPLATE_BAD_SYNTAX,
            placeholder=placeholder,
        )

    for segment in _SEGMENT_RE.findall(pipeline):
        tokens = _TOKEN_RE.findall(segment)
        if not tokens:
            raise TemplateError(
                f"Malformed filter {segment!r} in {placeholder}",
                code=ErrorCode.TEMPLATE_BAD_SYNTAX,
                placeholder=placeholder,
            )
        try:
            f = Filter(tokens[0])
        except ValueError:
            raise TemplateError(
                f"Unknown filter {tokens[0]!r} in {placeholder}",
                code=ErrorCode.TEMPLATE_UNKNOWN_FILTER,
                placeholder=placeholder,
            ) from None

        args = tuple(_parse_arg(t, placeholder) for t in tokens[1:])
        if f in _FILTERS:
            expected = 0
        else:
            types = _ARG_FILTERS[f][1]
            expected = len(args) if types is None else len(types)
        if len(args) != expected:
            raise TemplateError(
                f"Filter {f.value!r} takes {expected} argument(s), got {len(args)} in {placeholder}",
                code=ErrorCode.TEMPLATE_BAD_ARGUMENT,
                placeholder=placeholder,
            )
        calls.append(FilterCall(f, args))
    return calls


def apply_filters(
    value: str,
    calls: list,
    variables: Optional[Mapping[str, str]] = None,
    placeholder: str = "",
) -> str:
    """Pipe a value through filter calls, left to right.

    Ref arguments resolve against variables; a missing key resolves to "".

    Raises:
        TemplateError: If an argument has the wrong type or is out of range.
    """
    variables = variables or {}
    for call in calls:
        if call.filter in _FILTERS:
            value = _FILTERS[call.filter](value)
            continue

        func, types = _ARG_FILTERS[call.filter]
        args = []
        for arg in call.args:
            if isinstance(arg, Ref):
                arg = variables.get(arg.key)
                arg = "" if arg is None else str(arg)
            args.append(arg)
        try:
            if types is not None:
                args = [t(a) for t, a in zip(types, args)]
            value = func(*args, value)
        except ValueError as e:
            raise TemplateError(
                f"Bad arguments for {call.filter.value!r} in {placeholder}: {e}",
                code=ErrorCode.TEMPLATE_BAD_ARGUMENT,
                placeholder=placeholder,
            ) from e
    return value


def interpolate(template: str, variables: Mapping[str, str]) -> str:
    """Replace {{.key}} placeholders with values from variables.

    Keys are matched exactly, so "myKey" never captures "myKeyAnother".
    A key mapped to an empty string resolves to the empty string. Unknown
    keys keep their placeholder untouched and never raise, unless the
    pipeline has a "default" filter.

    Args:
        template: Input string, possibly containing placeholders.
        variables: Flat map of dotted keys to string values.

    Returns:
        The interpolated string.

    Raises:
        TemplateError: A resolved placeholder names an unknown filter,
            has a malformed filter pipeline or bad filter arguments.
    """
    if not template or "{{" not in template:
        return template

    def _replace(match):
        key, pipeline, placeholder = match.group(1), match.group(2), match.group(0)
        if key in variables:
            value = variables[key]
            value = "" if value is None else str(value)
            calls = parse_filters(pipeline, placeholder)
        else:
            if "default" not in pipeline:
                return placeholder
            calls = parse_filters(pipeline, placeholder)
            if not any(c.filter is Filter.DEFAULT for c in calls):
                return placeholder
            value = ""
        return apply_filters(value, calls, variables, placeholder)

    return _PLACEHOLDER_RE.sub(_replace, template)


def interpolate_map(variables: Mapping[str, str]) -> Dict[str, str]:
    """Interpolate every value of a parameter map against the map itself.

    Lets parameters reference other parameters. Fails on the first
    TemplateError.
    """
    return {key: interpolate(value, variables) for key, value in variables.items()}
