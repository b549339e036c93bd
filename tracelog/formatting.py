"""Message rendering and line composition.

Every log call ends up as a single line of the form

    <call info> -- <level> -- <message>

which is written unchanged to both the console and the telemetry backend.
"""

import re
import string
import traceback
from collections.abc import Sequence
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

from tracelog.exceptions import MessageFormatError
from tracelog.levels import TraceLevel

SEPARATOR = " -- "


@runtime_checkable
class Diagnosable(Protocol):
    """Anything that can describe itself as a full diagnostic report."""

    def diagnostic(self) -> str: ...


# [[fill]align][sign][z][#][0][width][grouping][.precision]n
_LOCALE_NUMBER_SPEC = re.compile(
    r"(?P<head>(?:.?[<>=^])?[+\- ]?z?#?0?\d*)(?P<grouping>[,_]?)(?P<precision>\.\d+)?n", re.S
)


class InvariantFormatter(string.Formatter):
    """`str.format` semantics with the locale-dependent `n` type replaced by comma grouping."""

    def format_field(self, value: Any, format_spec: str) -> Any:
        if isinstance(value, (int, float, Decimal)):
            match = _LOCALE_NUMBER_SPEC.fullmatch(format_spec)
            if match:
                presentation = "d" if isinstance(value, int) else "g"
                format_spec = (
                    match["head"]
                    + (match["grouping"] or ",")
                    + (match["precision"] or "")
                    + presentation
                )
        return format(value, format_spec)


_FORMATTER = InvariantFormatter()


def render_message(message_format: str, arguments: Sequence[Any] | None = None) -> str:
    """Apply `arguments` to `message_format`.

    Without arguments the format is returned verbatim, so literal braces in
    plain messages never reach the formatter. Numbers render the same on
    every host: the locale-aware `n` type is rewritten to comma grouping.
    strftime directives inside a date field (`{0:%B}`, `{0:%c}`) are passed
    to the date object untouched and still follow `LC_TIME`.
    """
    if not arguments:
        return message_format
    try:
        return _FORMATTER.format(message_format, *arguments)
    except (IndexError, KeyError, ValueError, AttributeError, TypeError) as exc:
        raise MessageFormatError(
            f"Cannot format {message_format!r} with {len(arguments)} argument(s): {exc}",
            message_format,
        ) from exc


def is_fault(value: Any) -> bool:
    return isinstance(value, BaseException) or isinstance(value, Diagnosable)


def describe_fault(fault: Any) -> str:
    """Full diagnostic text for a fault, including chained causes."""
    if isinstance(fault, Diagnosable):
        text = fault.diagnostic()
    elif isinstance(fault, BaseException):
        text = "".join(traceback.format_exception(fault))
    else:
        text = str(fault)
    return text.rstrip("\n")


def exception_message(fault: Any) -> str:
    return f"Exception: {describe_fault(fault)}"


def custom_exception_message(
    fault: Any, message_format: str, arguments: Sequence[Any] | None = None
) -> str:
    return (
        f"CustomMessage {render_message(message_format, arguments)}"
        f" \n Exception {describe_fault(fault)}"
    )


def compose_line(call_info: Any, level: TraceLevel, message: str) -> str:
    return SEPARATOR.join((str(call_info), str(level), message))
