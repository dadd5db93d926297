#!/usr/bin/env python3
"""Tests for the reference index and one-level message resolution."""

import pytest

from wsdl_reference.services.domain.wsdl.model import (
    Field,
    Message,
    Operation,
    Part,
    Service,
    TypeDef,
    TypeKind,
    build_model,
)
from wsdl_reference.services.domain.wsdl.parser import parse_wsdl
from wsdl_reference.services.domain.wsdl.resolver import (
    PartDescriptor,
    build_index,
    resolve_message_fields,
    resolve_operation,
)
from tests.fixtures.wsdl_fixtures import read_fixture

pytestmark = pytest.mark.unit


@pytest.fixture
def calculator_service() -> Service:
    return build_model(parse_wsdl(read_fixture("calculator.wsdl")))


class TestBuildIndex:
    """Test suite for build_index()"""

    def test_indexes_every_type_and_message(self, calculator_service):
        index = build_index(calculator_service)

        assert set(index.type_by_name) == {t.name for t in calculator_service.types}
        assert set(index.message_by_name) == {m.name for m in calculator_service.messages}

    def test_entries_are_the_model_objects(self, calculator_service):
        """Test that the index references model entities rather than copies"""
        index = build_index(calculator_service)

        assert index.type_by_name["AddRequest"] is calculator_service.types[0]
        assert index.message_by_name["AddInput"] is calculator_service.messages[0]

    def test_empty_service(self):
        index = build_index(Service())

        assert index.type_by_name == {}
        assert index.message_by_name == {}

    def test_duplicate_type_name_last_wins(self):
        """Test that a later type with the same name replaces an earlier one"""
        first_def = TypeDef(name="Dup", kind=TypeKind.ELEMENT)
        second_def = TypeDef(name="Dup", kind=TypeKind.COMPLEX_TYPE)
        index = build_index(Service(types=[first_def, second_def]))

        assert index.type_by_name["Dup"] is second_def


class TestResolveMessageFields:
    """Test suite for resolve_message_fields()"""

    def test_element_part_resolves_to_fields(self, calculator_service):
        """Test that AddInput resolves through its element to the AddRequest fields"""
        index = build_index(calculator_service)

        assert resolve_message_fields("AddInput", index) == [
            PartDescriptor(
                part_name="p",
                type_name="AddRequest",
                fields=[Field(name="a", type="double"), Field(name="b", type="double")],
            )
        ]

    def test_type_part_resolves_to_fields(self, calculator_service):
        index = build_index(calculator_service)

        (descriptor,) = resolve_message_fields("CalculationFaultMessage", index)
        assert descriptor.type_name == "CalculationFault"
        assert [f.name for f in descriptor.fields] == ["code", "message"]

    def test_unknown_message(self, calculator_service):
        """Test that an unknown message name resolves to nothing"""
        index = build_index(calculator_service)

        assert resolve_message_fields("NoSuchMessage", index) == []
        assert resolve_message_fields("", index) == []

    def test_dangling_type_reference(self):
        """Test that a part pointing at an undeclared type has empty fields"""
        service = Service(messages=[Message(name="M", parts=[Part(name="x", type="Undeclared")])])

        assert resolve_message_fields("M", build_index(service)) == [
            PartDescriptor(part_name="x", type_name="Undeclared", fields=[])
        ]

    def test_element_preferred_over_type(self):
        """Test that a part carrying both references resolves through its element"""
        service = Service(
            types=[
                TypeDef(name="ByElement", kind=TypeKind.ELEMENT, fields=[Field(name="e", type="string")]),
                TypeDef(name="ByType", kind=TypeKind.COMPLEX_TYPE, fields=[Field(name="t", type="string")]),
            ],
            messages=[Message(name="M", parts=[Part(name="x", element="ByElement", type="ByType")])],
        )

        (descriptor,) = resolve_message_fields("M", build_index(service))
        assert descriptor.type_name == "ByElement"
        assert [f.name for f in descriptor.fields] == ["e"]

    def test_simple_type_part_carries_enumerations(self):
        service = Service(
            types=[TypeDef(name="Color", kind=TypeKind.SIMPLE_TYPE, enumerations=["RED", "GREEN"])],
            messages=[Message(name="M", parts=[Part(name="c", type="Color")])],
        )

        (descriptor,) = resolve_message_fields("M", build_index(service))
        assert descriptor.fields == []
        assert descriptor.enumerations == ["RED", "GREEN"]

    def test_self_referencing_type_resolves_one_level(self):
        """Test that a recursive type resolves once and leaves the field type as a name"""
        node = TypeDef(
            name="Node",
            kind=TypeKind.COMPLEX_TYPE,
            fields=[Field(name="value", type="string"), Field(name="next", type="Node", min_occurs="0")],
        )
        service = Service(types=[node], messages=[Message(name="M", parts=[Part(name="n", type="Node")])])

        (descriptor,) = resolve_message_fields("M", build_index(service))
        assert [f.type for f in descriptor.fields] == ["string", "Node"]

    def test_message_without_parts(self):
        service = Service(messages=[Message(name="Empty")])

        assert resolve_message_fields("Empty", build_index(service)) == []

    def test_returned_fields_do_not_alias_model(self, calculator_service):
        """Test that mutating a descriptor list leaves the model untouched"""
        index = build_index(calculator_service)

        (descriptor,) = resolve_message_fields("AddInput", index)
        descriptor.fields.clear()

        assert len(index.type_by_name["AddRequest"].fields) == 2


class TestResolveOperation:
    """Test suite for resolve_operation()"""

    def test_input_and_output(self, calculator_service):
        index = build_index(calculator_service)

        inputs, outputs = resolve_operation(calculator_service.operations[1], index)
        assert [f.name for f in inputs[0].fields] == ["minuend", "subtrahend"]
        assert [f.name for f in outputs[0].fields] == ["result", "note"]

    def test_operation_without_output(self, calculator_service):
        index = build_index(calculator_service)

        inputs, outputs = resolve_operation(Operation(name="OneWay", input="AddInput"), index)
        assert len(inputs) == 1
        assert outputs == []
