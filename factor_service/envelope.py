"""
SOAP-style envelope codec for the findFactors operation.

Outgoing documents are built as lxml trees so that text is escaped when the
tree is serialized. Incoming documents are not parsed as XML: fields are
pulled out of the raw text by tag name, which tolerates arbitrary surrounding
markup, missing namespaces and documents that are not well-formed.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple

from lxml import etree

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
NSMAP = {"soap": SOAP_ENV_NS}

OPERATION = "findFactors"
SERVER_FAULT_CODE = "soap:Server"

# Missing-field policy: an absent (or empty) field decodes to these values
# instead of failing.
MISSING_NUMBERS: tuple[int, ...] = ()
MISSING_DIVISOR = 1

_INTEGER = re.compile(r"[+-]?[0-9]+")


class EnvelopeDecodeError(ValueError):
    """Raised when a field is present but its content cannot be decoded."""


@dataclass(frozen=True, slots=True)
class FactorRequest:
    """Decoded findFactors call."""

    numbers: tuple[int, ...] = MISSING_NUMBERS
    divisor: int = MISSING_DIVISOR


class Fault(NamedTuple):
    code: str
    message: str


def extract_field(text: str, tag: str) -> str | None:
    """
    Return the raw text between the first ``<tag>`` and the next ``</tag>``.

    ``None`` means the opening tag, or a closing tag after it, is missing.
    Tags are matched literally: attributes, prefixes and nesting of the same
    tag are not understood.
    """
    opening = f"<{tag}>"
    start = text.find(opening)
    if start == -1:
        return None
    start += len(opening)
    end = text.find(f"</{tag}>", start)
    if end == -1:
        return None
    return text[start:end]


def _parse_int(token: str, field_name: str) -> int:
    cleaned = token.strip()
    if not _INTEGER.fullmatch(cleaned):
        raise EnvelopeDecodeError(f"Invalid integer in <{field_name}>: {cleaned!r}")
    return int(cleaned)


def _envelope() -> tuple[etree._Element, etree._Element]:
    envelope = etree.Element(f"{{{SOAP_ENV_NS}}}Envelope", nsmap=NSMAP)
    body = etree.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Body")
    return envelope, body


def _element_text(raw: str) -> str:
    """Resolve entity and character references in extracted element content."""
    try:
        return etree.fromstring(f"<v>{raw}</v>").text or ""
    except etree.XMLSyntaxError as exc:
        raise EnvelopeDecodeError(f"Malformed element content: {raw!r}") from exc


def _serialize(envelope: etree._Element) -> str:
    return etree.tostring(envelope, xml_declaration=True, encoding="UTF-8").decode("utf-8")


def _leaf(parent: etree._Element, tag: str, text: str) -> None:
    etree.SubElement(parent, tag).text = text


def format_result(numbers: Iterable[int]) -> str:
    """Render integers the way the <result> element carries them."""
    return ", ".join(str(number) for number in numbers)


def encode_request(numbers: Iterable[int], divisor: int) -> str:
    """Build the request envelope sent by clients."""
    envelope, body = _envelope()
    call = etree.SubElement(body, OPERATION)
    _leaf(call, "numbers", ",".join(str(number) for number in numbers))
    _leaf(call, "divisor", str(divisor))
    return _serialize(envelope)


def decode_request(text: str) -> FactorRequest:
    """Extract the numbers and divisor fields from a request body."""
    numbers_raw = extract_field(text, "numbers")
    if not numbers_raw:
        numbers = MISSING_NUMBERS
    else:
        numbers = tuple(_parse_int(token, "numbers") for token in numbers_raw.split(","))

    divisor_raw = extract_field(text, "divisor")
    if not divisor_raw:
        divisor = MISSING_DIVISOR
    else:
        divisor = _parse_int(divisor_raw, "divisor")

    return FactorRequest(numbers=numbers, divisor=divisor)


def encode_response(result: str) -> str:
    """Wrap a rendered result list in the response envelope."""
    envelope, body = _envelope()
    response = etree.SubElement(body, f"{OPERATION}Response")
    _leaf(response, "result", result)
    return _serialize(envelope)


def encode_fault(message: str, code: str = SERVER_FAULT_CODE) -> str:
    """Build a fault envelope; the message is escaped on serialization."""
    envelope, body = _envelope()
    fault = etree.SubElement(body, f"{{{SOAP_ENV_NS}}}Fault")
    _leaf(fault, "faultcode", code)
    _leaf(fault, "faultstring", message)
    return _serialize(envelope)


def decode_fault(text: str) -> Fault | None:
    """Return the fault carried by a response body, if any."""
    message = extract_field(text, "faultstring")
    if message is None:
        return None
    code = extract_field(text, "faultcode") or SERVER_FAULT_CODE
    return Fault(code=_element_text(code).strip(), message=_element_text(message))


def decode_response(text: str) -> str:
    """Return the <result> text of a success envelope."""
    result = extract_field(text, "result")
    if result is None:
        if "<result/>" in text:
            return ""
        raise EnvelopeDecodeError("Response envelope does not contain a <result> element.")
    return _element_text(result)


def parse_result(result: str) -> list[int]:
    """Split a rendered result list back into integers."""
    if not result.strip():
        return []
    return [_parse_int(token, "result") for token in result.split(",")]
