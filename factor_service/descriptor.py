"""WSDL-style descriptor served on GET requests."""

from lxml import etree

WSDL_NS = "http://schemas.xmlsoap.org/wsdl/"
WSDL_SOAP_NS = "http://schemas.xmlsoap.org/wsdl/soap/"
XSD_NS = "http://www.w3.org/2001/XMLSchema"
TARGET_NS = "http://example.com/factorservice"

_NSMAP = {None: WSDL_NS, "soap": WSDL_SOAP_NS, "tns": TARGET_NS, "xsd": XSD_NS}


def _wsdl(parent: etree._Element, tag: str, **attrib: str) -> etree._Element:
    return etree.SubElement(parent, f"{{{WSDL_NS}}}{tag}", attrib)


def _soap(parent: etree._Element, tag: str, **attrib: str) -> etree._Element:
    return etree.SubElement(parent, f"{{{WSDL_SOAP_NS}}}{tag}", attrib)


def build_descriptor(location: str) -> bytes:
    """
    Render the descriptor for the findFactors operation.

    The document only describes field names and types; it is not meant to be
    consumed by code generators.
    """
    root = etree.Element(
        f"{{{WSDL_NS}}}definitions",
        {"name": "FactorService", "targetNamespace": TARGET_NS},
        nsmap=_NSMAP,
    )

    request = _wsdl(root, "message", name="findFactorsRequest")
    _wsdl(request, "part", name="numbers", type="xsd:string")
    _wsdl(request, "part", name="divisor", type="xsd:int")
    response = _wsdl(root, "message", name="findFactorsResponse")
    _wsdl(response, "part", name="result", type="xsd:string")

    port_type = _wsdl(root, "portType", name="FactorServicePortType")
    operation = _wsdl(port_type, "operation", name="findFactors")
    _wsdl(operation, "input", message="tns:findFactorsRequest")
    _wsdl(operation, "output", message="tns:findFactorsResponse")

    binding = _wsdl(root, "binding", name="FactorServiceBinding", type="tns:FactorServicePortType")
    _soap(binding, "binding", style="rpc", transport="http://schemas.xmlsoap.org/soap/http")
    bound = _wsdl(binding, "operation", name="findFactors")
    _soap(bound, "operation", soapAction="findFactors")
    _soap(_wsdl(bound, "input"), "body", use="literal")
    _soap(_wsdl(bound, "output"), "body", use="literal")

    service = _wsdl(root, "service", name="FactorService")
    port = _wsdl(service, "port", name="FactorServicePort", binding="tns:FactorServiceBinding")
    _soap(port, "address", location=location)

    return etree.tostring(root, xml_declaration=True, encoding="UTF-8", pretty_print=True)
