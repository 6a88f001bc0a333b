import pytest
from lxml import etree

from factor_service.envelope import (
    MISSING_DIVISOR,
    EnvelopeDecodeError,
    FactorRequest,
    decode_fault,
    decode_request,
    decode_response,
    encode_fault,
    encode_request,
    encode_response,
    extract_field,
    format_result,
    parse_result,
)

PHP_CLIENT_REQUEST = """<?xml version="1.0" encoding="UTF-8"?>
<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">
    <soap:Body>
        <findFactors>
            <numbers>1,5,23,25,35,78,30,96</numbers>
            <divisor>5</divisor>
        </findFactors>
    </soap:Body>
</soap:Envelope>"""


def test_extract_field_returns_inner_text() -> None:
    assert extract_field("<a><numbers> 1, 2 </numbers></a>", "numbers") == " 1, 2 "


def test_extract_field_missing_tags() -> None:
    assert extract_field("<a></a>", "numbers") is None
    assert extract_field("<numbers>1,2", "numbers") is None
    assert extract_field("</numbers><numbers>1", "numbers") is None


def test_extract_field_uses_first_occurrence() -> None:
    assert extract_field("<divisor>2</divisor><divisor>3</divisor>", "divisor") == "2"


def test_decode_reference_request() -> None:
    request = decode_request(PHP_CLIENT_REQUEST)
    assert request == FactorRequest(numbers=(1, 5, 23, 25, 35, 78, 30, 96), divisor=5)


def test_decode_trims_whitespace_around_tokens() -> None:
    request = decode_request("<numbers> 3 ,20,  15 </numbers><divisor> 3 </divisor>")
    assert request.numbers == (3, 20, 15)
    assert request.divisor == 3


def test_missing_divisor_defaults_to_one() -> None:
    request = decode_request("<numbers>4,6,9</numbers>")
    assert request.divisor == MISSING_DIVISOR == 1
    assert request.numbers == (4, 6, 9)


def test_missing_numbers_yields_empty_sequence() -> None:
    request = decode_request("<divisor>2</divisor>")
    assert request.numbers == ()
    assert request.divisor == 2


def test_empty_fields_use_defaults() -> None:
    assert decode_request("<numbers></numbers><divisor></divisor>") == FactorRequest()


@pytest.mark.parametrize(
    "body",
    ["<numbers>4,6</numbers><divisor>   </divisor>", "<numbers>  </numbers><divisor>2</divisor>"],
)
def test_whitespace_only_fields_raise(body: str) -> None:
    with pytest.raises(EnvelopeDecodeError):
        decode_request(body)


def test_field_order_does_not_matter() -> None:
    request = decode_request("<x><divisor>7</divisor><y/><numbers>14,15</numbers></x>")
    assert request == FactorRequest(numbers=(14, 15), divisor=7)


@pytest.mark.parametrize(
    "body",
    [
        "<numbers>1,two,3</numbers>",
        "<numbers>1,,3</numbers>",
        "<numbers>1.5</numbers>",
        "<numbers>1_000</numbers>",
        "<numbers>1</numbers><divisor>five</divisor>",
    ],
)
def test_unparsable_tokens_raise(body: str) -> None:
    with pytest.raises(EnvelopeDecodeError):
        decode_request(body)


def test_decode_error_names_the_token() -> None:
    with pytest.raises(EnvelopeDecodeError) as exc:
        decode_request("<numbers>1,abc</numbers>")
    assert "abc" in str(exc.value)
    assert "numbers" in str(exc.value)


@pytest.mark.parametrize(
    ("numbers", "divisor"),
    [([1, 5, 23, 25, 35, 78, 30, 96], 5), ([-3], -1), ([0, 10, 200000000000], 7)],
)
def test_request_round_trip(numbers: list[int], divisor: int) -> None:
    request = decode_request(encode_request(numbers, divisor))
    assert request == FactorRequest(numbers=tuple(numbers), divisor=divisor)


def test_encode_request_is_well_formed_and_deterministic() -> None:
    encoded = encode_request([3, 20, 15], 3)
    assert encoded == encode_request([3, 20, 15], 3)
    root = etree.fromstring(encoded.encode("utf-8"))
    assert root.tag == "{http://schemas.xmlsoap.org/soap/envelope/}Envelope"
    assert root.findtext(".//numbers") == "3,20,15"
    assert root.findtext(".//divisor") == "3"


def test_encode_response_contains_result() -> None:
    encoded = encode_response(format_result([5, 25, 35, 30]))
    assert "<result>5, 25, 35, 30</result>" in encoded
    assert "<findFactorsResponse>" in encoded
    assert decode_response(encoded) == "5, 25, 35, 30"


def test_empty_response_round_trips() -> None:
    assert decode_response(encode_response("")) == ""
    assert decode_response("<findFactorsResponse><result/></findFactorsResponse>") == ""


def test_fault_message_is_escaped() -> None:
    message = "bad <numbers> & worse"
    encoded = encode_fault(message)
    root = etree.fromstring(encoded.encode("utf-8"))
    assert root.findtext(".//faultstring") == message
    assert root.findtext(".//faultcode") == "soap:Server"

    fault = decode_fault(encoded)
    assert fault is not None
    assert fault.code == "soap:Server"
    assert fault.message == message


def test_fault_message_round_trips_control_and_quote_characters() -> None:
    message = "line1\r\nline2 \"q\" 'a'"
    fault = decode_fault(encode_fault(message))
    assert fault is not None
    assert fault.message == message


def test_decode_resolves_entity_and_character_references() -> None:
    body = (
        "<soap:Fault><faultcode>soap:Client</faultcode>"
        "<faultstring>&quot;x&quot; &apos;y&apos; &#65;&#x42;</faultstring></soap:Fault>"
    )
    assert decode_fault(body) == ("soap:Client", "\"x\" 'y' AB")
    assert decode_response("<result>1,&#32;2</result>") == "1, 2"


def test_malformed_element_content_raises() -> None:
    with pytest.raises(EnvelopeDecodeError):
        decode_fault("<faultstring>a & b</faultstring>")
    with pytest.raises(EnvelopeDecodeError):
        decode_response("<result>&bogus;</result>")


def test_decode_fault_on_success_envelope() -> None:
    assert decode_fault(encode_response("1, 2")) is None


def test_decode_response_without_result() -> None:
    with pytest.raises(EnvelopeDecodeError):
        decode_response("<soap:Envelope/>")


def test_parse_result() -> None:
    assert parse_result("5, 25, 35, 30") == [5, 25, 35, 30]
    assert parse_result("") == []
