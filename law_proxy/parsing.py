"""Turn a raw law API body into a JSON-compatible value.

The upstream answers with either JSON or XML, and nothing but the body itself
says which. A detector picks a :class:`ResponseFormat` and the matching parser
produces the normalized value. Detectors are plain callables, so another
heuristic (a Content-Type check, say) can be swapped in without touching the
pipeline.

XML is converted with these rules:

* element names become keys, repeated siblings collect into a list
* attributes become ``@_<name>`` keys
* text of an element with attributes or children is stored under ``#text``,
  a bare leaf maps straight to its value and an empty one to ``""``
* values are trimmed and numeric-looking values become ``int``/``float``

The ``<?xml ...?>`` declaration is dropped on purpose rather than kept as a
``?xml`` key, and hexadecimal values stay strings.
"""

import json
import math
import re
from collections.abc import Callable
from enum import Enum
from typing import Any

from lxml import etree

from law_proxy.exceptions import ResponseParseError

ATTRIBUTE_PREFIX = "@_"
TEXT_KEY = "#text"

_NUMBER_RE = re.compile(r"^[-+]?(?:\d+(?:\.\d+)?|\.\d+)(?:[eE][-+]?\d+)?$")
_XML_DECLARATION_RE = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)


def _lstrip(body: str) -> str:
    # A leading byte-order mark counts as whitespace.
    return body.lstrip().lstrip("\ufeff").lstrip()


class ResponseFormat(str, Enum):
    XML = "xml"
    JSON = "json"


FormatDetector = Callable[[str], ResponseFormat]
Parser = Callable[[str], Any]


def detect_by_leading_char(body: str) -> ResponseFormat:
    """XML when the first non-whitespace character is ``<``, otherwise JSON."""
    if _lstrip(body).startswith("<"):
        return ResponseFormat.XML
    return ResponseFormat.JSON


def coerce_scalar(value: str) -> str | int | float:
    """Trim ``value`` and convert it to a number when it looks like one."""
    text = value.strip()
    if not _NUMBER_RE.match(text):
        return text
    if any(c in text for c in ".eE"):
        number = float(text)
        return text if number in (float("inf"), float("-inf")) else number
    return int(text)


def _tag_name(element: etree._Element) -> str:
    qname = etree.QName(element)
    if element.prefix:
        return f"{element.prefix}:{qname.localname}"
    return qname.localname


def _attr_name(element: etree._Element, key: str) -> str:
    qname = etree.QName(key)
    if qname.namespace:
        prefix = next(
            (p for p, uri in element.nsmap.items() if uri == qname.namespace and p), None
        )
        if prefix:
            return f"{ATTRIBUTE_PREFIX}{prefix}:{qname.localname}"
    return f"{ATTRIBUTE_PREFIX}{qname.localname}"


def _add_child(node: dict[str, Any], key: str, value: Any) -> None:
    if key not in node:
        node[key] = value
    elif isinstance(node[key], list):
        node[key].append(value)
    else:
        node[key] = [node[key], value]


def element_to_value(element: etree._Element) -> Any:
    """Convert one element (and its subtree) to a dict or a scalar."""
    node: dict[str, Any] = {}
    for key, raw in element.attrib.items():
        node[_attr_name(element, key)] = coerce_scalar(raw)

    texts = [element.text or ""]
    for child in element:
        # Comments and processing instructions only contribute their tail text.
        if isinstance(child.tag, str):
            _add_child(node, _tag_name(child), element_to_value(child))
        texts.append(child.tail or "")

    text = "".join(t.strip() for t in texts)
    if not node:
        return coerce_scalar(text) if text else ""
    if text:
        node[TEXT_KEY] = coerce_scalar(text)
    return node


def parse_xml(body: str) -> dict[str, Any]:
    """Parse an XML document into ``{root_tag: value}``."""
    # The body is already decoded text, so the declared encoding no longer applies.
    text = _XML_DECLARATION_RE.sub("", _lstrip(body), count=1).strip()
    parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)
    root = etree.fromstring(text.encode("utf-8"), parser=parser)
    return {_tag_name(root): element_to_value(root)}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def _finite_float(text: str) -> float | None:
    # Out-of-range literals such as 1e400 become null, as JSON.stringify renders them.
    number = float(text)
    return number if math.isfinite(number) else None


def parse_json(body: str) -> Any:
    """Strict JSON parse: ``NaN`` and ``Infinity`` are rejected."""
    return json.loads(body, parse_constant=_reject_constant, parse_float=_finite_float)


PARSERS: dict[ResponseFormat, Parser] = {
    ResponseFormat.XML: parse_xml,
    ResponseFormat.JSON: parse_json,
}


def parse_as(fmt: ResponseFormat, body: str) -> Any:
    """
    Parse ``body`` with the parser bound to ``fmt``.

    Raises:
        ResponseParseError: If the parser rejects the body
    """
    try:
        return PARSERS[fmt](body)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise ResponseParseError(fmt.value, e) from e


def parse_body(body: str, detector: FormatDetector = detect_by_leading_char) -> Any:
    """Detect the format of ``body`` and parse it."""
    return parse_as(detector(body), body)
