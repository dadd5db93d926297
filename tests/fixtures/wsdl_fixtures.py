"""Test fixtures for WSDL pipeline tests."""

from pathlib import Path

import httpx

from wsdl_reference.clients.source_client import SourceFetcher

WSDL_FIXTURES_DIR = Path(__file__).parent / "wsdl"

# Smallest document the pipeline accepts with every section populated
MINIMAL_WSDL = """<?xml version="1.0"?>
<definitions name="Mini" targetNamespace="urn:mini"
    xmlns="http://schemas.xmlsoap.org/wsdl/"
    xmlns:soap="http://schemas.xmlsoap.org/wsdl/soap/"
    xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <types>
    <xs:schema targetNamespace="urn:mini">
      <xs:element name="PingRequest">
        <xs:complexType><xs:sequence><xs:element name="id" type="xs:string"/></xs:sequence></xs:complexType>
      </xs:element>
    </xs:schema>
  </types>
  <message name="PingInput"><part name="p" element="PingRequest"/></message>
  <portType name="MiniPortType">
    <operation name="Ping"><input message="PingInput"/></operation>
  </portType>
  <binding name="MiniBinding" type="MiniPortType">
    <soap:binding transport="http://schemas.xmlsoap.org/soap/http"/>
    <operation name="Ping"><soap:operation soapAction="urn:Ping"/></operation>
  </binding>
  <service name="Mini">
    <port name="MiniPort" binding="MiniBinding"><soap:address location="http://example.com/mini"/></port>
  </service>
</definitions>
"""


def fixture_path(*parts: str) -> Path:
    """Absolute path of a file under tests/fixtures/wsdl."""
    return WSDL_FIXTURES_DIR.joinpath(*parts)


def read_fixture(*parts: str) -> str:
    """Text of a file under tests/fixtures/wsdl."""
    return fixture_path(*parts).read_text(encoding="utf-8")


def create_mock_fetcher(documents: dict[str, str], requests: list | None = None) -> SourceFetcher:
    """
    Create a SourceFetcher whose HTTP layer serves documents from memory.

    Args:
        documents: Mapping of absolute URL to response body. Unknown URLs get a 404.
        requests: Optional list that receives every requested URL, in order.

    Returns:
        SourceFetcher backed by httpx.MockTransport
    """

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if requests is not None:
            requests.append(url)
        if url in documents:
            return httpx.Response(200, text=documents[url])
        return httpx.Response(404, text="not found")

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SourceFetcher(client=client)
