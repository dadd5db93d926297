#!/usr/bin/env python3
"""Tests for the namespace-agnostic WSDL/XSD tree parser."""

import pytest

from wsdl_reference.core.errors import WsdlParseError
from wsdl_reference.services.domain.wsdl.parser import (
    as_list,
    attr,
    first,
    local_name,
    parse_schema,
    parse_wsdl,
    strip_ns,
    text,
)
from tests.fixtures.wsdl_fixtures import read_fixture

pytestmark = pytest.mark.unit


class TestParseWsdl:
    """Test suite for parse_wsdl()"""

    def test_prefixed_document(self):
        """Test that wsdl:/xs:/soap: prefixes are dropped from element names"""
        raw = parse_wsdl(read_fixture("calculator.wsdl"))

        defs = raw["definitions"]
        assert defs["@name"] == "CalculatorService"
        assert defs["@targetNamespace"] == "http://example.com/calculator"
        assert "types" in defs
        assert [m["@name"] for m in defs["message"]][:2] == ["AddInput", "AddOutput"]

    def test_default_namespace_document_has_same_shape(self):
        """Test that an unprefixed document produces the same keys as a prefixed one"""
        raw = parse_wsdl(read_fixture("hello.wsdl"))

        defs = raw["definitions"]
        assert defs["@name"] == "HelloService"
        assert isinstance(defs["message"], list)
        assert defs["portType"][0]["operation"][0]["@name"] == "sayHello"

    def test_single_occurrence_array_tags_are_lists(self):
        """Test that repeating constructs are lists even when they occur once"""
        raw = parse_wsdl(read_fixture("hello.wsdl"))

        defs = raw["definitions"]
        assert isinstance(defs["portType"], list)
        assert isinstance(defs["service"], list)
        op = defs["portType"][0]["operation"][0]
        assert isinstance(op["input"], list)
        assert isinstance(op["output"], list)

    def test_non_array_tag_stays_scalar(self):
        """Test that <types> and <soap:address> are not wrapped in lists"""
        raw = parse_wsdl(read_fixture("calculator.wsdl"))

        defs = raw["definitions"]
        assert isinstance(defs["types"], dict)
        port = defs["service"][0]["port"][0]
        assert isinstance(port["address"], dict)
        assert port["address"]["@location"] == "http://example.com/calculator"

    def test_bare_element_collapses_to_text(self):
        """Test that a documentation element with only text becomes a string"""
        raw = parse_wsdl(read_fixture("calculator.wsdl"))

        assert raw["definitions"]["documentation"] == ["Simple arithmetic service."]

    def test_text_alongside_attributes(self):
        """Test that text of an element with attributes lands under #text"""
        raw = parse_wsdl('<definitions><documentation lang="en">Hi there</documentation></definitions>')

        doc = raw["definitions"]["documentation"][0]
        assert doc == {"@lang": "en", "#text": "Hi there"}

    def test_comments_are_ignored(self):
        """Test that XML comments do not appear in the tree"""
        raw = parse_wsdl("<definitions><!-- note --><message name='M'/></definitions>")

        assert raw["definitions"] == {"message": [{"@name": "M"}]}

    def test_empty_definitions_is_accepted(self):
        """Test that an empty <definitions/> root parses to an empty node"""
        raw = parse_wsdl(read_fixture("empty.wsdl"))

        assert raw["definitions"]["@name"] == "EmptyService"
        assert "message" not in raw["definitions"]

    def test_malformed_xml_raises(self):
        """Test that XML which is not well-formed raises WsdlParseError"""
        with pytest.raises(WsdlParseError) as exc_info:
            parse_wsdl("<definitions><message></definitions>", "broken.wsdl")

        assert exc_info.value.location == "broken.wsdl"
        assert "broken.wsdl" in str(exc_info.value)

    def test_empty_input_raises(self):
        """Test that empty and whitespace-only input raise WsdlParseError"""
        with pytest.raises(WsdlParseError, match="missing <definitions> root"):
            parse_wsdl("")
        with pytest.raises(WsdlParseError, match="missing <definitions> root"):
            parse_wsdl("   \n  ")

    def test_wrong_root_raises(self):
        """Test that a non-WSDL root element is rejected"""
        with pytest.raises(WsdlParseError, match="found <schema>"):
            parse_wsdl(read_fixture("shared-types.xsd"))

    def test_entity_expansion_is_refused(self):
        """Test that DTD entity declarations are refused"""
        xml = """<?xml version="1.0"?>
<!DOCTYPE definitions [<!ENTITY lol "lol">]>
<definitions name="&lol;"/>"""
        with pytest.raises(WsdlParseError):
            parse_wsdl(xml)

    def test_unicode_names_are_preserved(self):
        """Test that non-ASCII names and escaped characters survive parsing"""
        raw = parse_wsdl(read_fixture("unicode.wsdl"))

        defs = raw["definitions"]
        assert defs["@name"] == "Ünïcödé&Service"
        assert defs["message"][0]["@name"] == "ПриветInput"
        assert "<loud>" in defs["documentation"][0]

    def test_documentation_keeps_inline_markup_text(self):
        """Test that text inside markup children of documentation is not dropped"""
        raw = parse_wsdl("<definitions><documentation>Use <b>bold</b> text</documentation></definitions>")

        doc = raw["definitions"]["documentation"][0]
        assert text(doc) == "Use bold text"

    def test_annotation_documentation_keeps_inline_markup_text(self):
        schema = parse_schema("""<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:simpleType name="Code">
    <xs:annotation><xs:documentation>See <a href="http://x.example">the list</a>.</xs:documentation></xs:annotation>
  </xs:simpleType>
</xs:schema>""")

        annotation = schema["simpleType"][0]["annotation"][0]
        assert text(annotation["documentation"]) == "See the list."


class TestParseSchema:
    """Test suite for parse_schema()"""

    def test_standalone_schema(self):
        """Test that an XSD document returns its schema node"""
        schema = parse_schema(read_fixture("shared-types.xsd"))

        assert schema["complexType"][0]["@name"] == "PersonType"
        assert schema["simpleType"][0]["@name"] == "Gender"

    def test_wsdl_document_returns_embedded_schema(self):
        """Test that a WSDL document yields the schema inside its <types>"""
        schema = parse_schema(read_fixture("calculator.wsdl"))

        assert schema["@targetNamespace"] == "http://example.com/calculator"
        assert len(schema["element"]) == 4

    def test_unrelated_root_returns_empty_schema(self):
        """Test that a document without a schema yields an empty dict"""
        assert parse_schema("<foo><bar/></foo>") == {}

    def test_malformed_schema_raises(self):
        """Test that a malformed schema raises WsdlParseError with its location"""
        with pytest.raises(WsdlParseError) as exc_info:
            parse_schema(read_fixture("graphs", "malformed.xsd"), "/tmp/malformed.xsd")

        assert exc_info.value.location == "/tmp/malformed.xsd"


class TestTreeHelpers:
    """Test suite for the raw tree accessors"""

    def test_local_name(self):
        assert local_name("{http://schemas.xmlsoap.org/wsdl/}message") == "message"
        assert local_name("message") == "message"

    def test_as_list(self):
        assert as_list(None) == []
        assert as_list([1, 2]) == [1, 2]
        assert as_list({"a": 1}) == [{"a": 1}]

    def test_first(self):
        assert first(None) is None
        assert first([]) is None
        assert first(["a", "b"]) == "a"
        assert first("a") == "a"

    def test_text(self):
        assert text(None) == ""
        assert text("  hello ") == "hello"
        assert text(["one", "two"]) == "one"
        assert text({"@lang": "en", "#text": "hi"}) == "hi"
        assert text({"@lang": "en"}) == ""

    def test_attr(self):
        node = {"@name": "Add", "@minOccurs": "0"}
        assert attr(node, "name") == "Add"
        assert attr(node, "maxOccurs", "1") == "1"
        assert attr("not-a-node", "name") == ""
        assert attr(None, "name", "x") == "x"

    def test_strip_ns(self):
        assert strip_ns("tns:AddRequest") == "AddRequest"
        assert strip_ns("AddRequest") == "AddRequest"
        assert strip_ns("") == ""
        assert strip_ns(None) == ""
