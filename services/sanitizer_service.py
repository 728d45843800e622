"""Sanitization of submitted quick edit values, one rule set per field type"""

import math
import re
from typing import Any

from email_validator import EmailNotValidError, validate_email

from schemas.quick_edit_field import QuickEditField, QuickEditFieldType
from services.option_resolver import resolve_options

ALLOWED_PROTOCOLS = frozenset({
    "http", "https", "ftp", "ftps", "mailto", "news", "irc", "irc6", "ircs", "gopher",
    "nntp", "feed", "telnet", "mms", "rtsp", "sms", "svn", "tel", "fax", "xmpp", "webcal", "urn",
})

# Same character set PHP's trim() strips
_TRIM_CHARS = " \t\n\r\0\x0b"

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_INTEGER_LITERAL = re.compile(r"^[+-]?\d+$")

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_STRAY_LESS_THAN = re.compile(r"<[^>]*?((?=<)|>|$)")
_SCRIPT_OR_STYLE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"[\r\n\t ]+")
_OCTET = re.compile(r"%[a-f0-9]{2}", re.IGNORECASE)

_URL_DISALLOWED = re.compile(r"[^a-z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\x80-\U0010FFFF]", re.IGNORECASE)
_URL_LINE_BREAK = re.compile(r"%0[ad]", re.IGNORECASE)
_PHP_FILE = re.compile(r"^[a-z0-9-]+?\.php", re.IGNORECASE)
_URL_SCHEME = re.compile(r"^([^:/?#]+):")

_EMAIL_LOCAL_DISALLOWED = re.compile(r"[^a-zA-Z0-9!#$%&'*+/=?^_`{|}~.-]")
_EMAIL_LABEL_DISALLOWED = re.compile(r"[^a-z0-9-]+", re.IGNORECASE)


def is_truthy(value: Any) -> bool:
    """Truthiness as the list screen submits it: "" and "0" are false"""
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


def parse_int(value: Any) -> int:
    """Integer from the leading numeric part of value, 0 when there is none"""
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return 0
        literal = match.group(1)
        if _INTEGER_LITERAL.match(literal):
            return int(literal)
        return parse_int(float(literal))
    return 1 if value else 0


def parse_float(value: Any) -> float:
    """Float from the leading numeric part of value, 0.0 when there is none"""
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        number = float(match.group(1)) if match else 0.0
    else:
        number = 1.0 if value else 0.0
    return number if math.isfinite(number) else 0.0


def step_allows_decimals(step: Any) -> bool:
    if step is None or isinstance(step, bool):
        return False
    try:
        step_value = float(step)
    except (TypeError, ValueError):
        return False
    return math.isfinite(step_value) and not step_value.is_integer()


def sanitize_number(value: Any, field: QuickEditField) -> int | float:
    if step_allows_decimals(field.step):
        number = parse_float(value)
    else:
        number = parse_int(value)

    if field.min is not None and number < field.min:
        number = field.min
    if field.max is not None and number > field.max:
        number = field.max

    return number


def sanitize_select(value: Any, field: QuickEditField) -> Any:
    """The value itself when it names one of the resolved options, otherwise None"""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None

    options = resolve_options(field)
    if str(value) not in {str(option) for option in options}:
        return None

    return value


def strip_all_tags(text: str, remove_breaks: bool = False) -> str:
    text = _SCRIPT_OR_STYLE.sub("", text)
    text = _TAG.sub("", text)
    if remove_breaks:
        text = _WHITESPACE.sub(" ", text)
    return text.strip(_TRIM_CHARS)


def _encode_stray_less_than(text: str) -> str:
    def replace(match: re.Match) -> str:
        segment = match.group(0)
        if ">" in segment:
            return segment
        return segment.replace("<", "&lt;")

    return _STRAY_LESS_THAN.sub(replace, text)


def sanitize_text(value: str, keep_newlines: bool = False) -> str:
    """Plain text: no tags, no control characters, no percent-encoded octets"""
    filtered = _CONTROL_CHARS.sub("", value)

    if "<" in filtered:
        filtered = _encode_stray_less_than(filtered)
        filtered = strip_all_tags(filtered)
        filtered = filtered.replace("<\n", "&lt;\n")

    if not keep_newlines:
        filtered = _WHITESPACE.sub(" ", filtered)
    filtered = filtered.strip(_TRIM_CHARS)

    found = False
    while _OCTET.search(filtered):
        filtered = _OCTET.sub("", filtered)
        found = True

    if found:
        filtered = re.sub(r" +", " ", filtered).strip(_TRIM_CHARS)

    return filtered


def sanitize_url(value: str) -> str:
    """A URL safe to store: allowed characters and an allowed protocol, else empty"""
    url = value.lstrip(_TRIM_CHARS).replace(" ", "%20")
    url = _URL_DISALLOWED.sub("", url)
    if not url:
        return ""

    if not url.lower().startswith("mailto:"):
        while _URL_LINE_BREAK.search(url):
            url = _URL_LINE_BREAK.sub("", url)

    url = url.replace(";//", "://")

    if ":" not in url and url[0] not in "/#?" and not _PHP_FILE.match(url):
        url = "http://" + url

    if url.startswith("/"):
        return url

    scheme = _URL_SCHEME.match(url)
    if scheme and scheme.group(1).lower() not in ALLOWED_PROTOCOLS:
        return ""

    return url


def sanitize_email(value: str) -> str:
    """A normalized email address, or empty string when none can be salvaged"""
    email = value.strip(_TRIM_CHARS)
    if len(email) < 6:
        return ""

    local, at, domain = email.partition("@")
    if not at or not local:
        return ""

    local = _EMAIL_LOCAL_DISALLOWED.sub("", local)
    if not local:
        return ""

    domain = re.sub(r"\.{2,}", "", domain).strip(_TRIM_CHARS + ".")
    labels = []
    for label in domain.split("."):
        label = _EMAIL_LABEL_DISALLOWED.sub("", label.strip(_TRIM_CHARS + "-"))
        if label:
            labels.append(label)
    if len(labels) < 2:
        return ""

    try:
        return validate_email(f"{local}@{'.'.join(labels)}", check_deliverability=False).normalized
    except EmailNotValidError:
        return ""


def sanitize_value(value: Any, field: QuickEditField) -> Any:
    """
    Normalize a raw submitted value for the given field.

    A field's sanitize_callback replaces every built-in rule. None means the
    value was rejected and must not be persisted.
    """
    if field.sanitize_callback is not None:
        return field.sanitize_callback(value)

    field_type = field.type

    if field_type == QuickEditFieldType.CHECKBOX:
        return 1 if is_truthy(value) else 0

    if field_type == QuickEditFieldType.NUMBER:
        return sanitize_number(value, field)

    if field_type == QuickEditFieldType.SELECT:
        return sanitize_select(value, field)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        return None

    if field_type == QuickEditFieldType.URL:
        return sanitize_url(value)
    if field_type == QuickEditFieldType.EMAIL:
        return sanitize_email(value)
    if field_type == QuickEditFieldType.TEXTAREA:
        return sanitize_text(value, keep_newlines=True)

    return sanitize_text(value)
