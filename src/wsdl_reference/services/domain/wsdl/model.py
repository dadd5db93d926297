#!/usr/bin/env python3
"""Normalized WSDL service model.

Converts the merged raw tree produced by the loader into plain dataclasses
that the resolver, renderer and API can consume without knowing anything
about the raw XML shape. Namespace prefixes in attribute values
(e.g. "tns:AddRequest") are stripped so consumers always see local names.

build_model() is pure: no I/O, no recursion across documents, and it never
raises on sparse input. Missing substructure yields empty lists/strings.
"""

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from .parser import as_list, attr, first, strip_ns, text

logger = logging.getLogger(__name__)

DEFAULT_OCCURS = "1"
DEFAULT_STYLE = "document"
COMPOSITORS = ("sequence", "all", "choice")


class TypeKind(str, Enum):
    """Where a type definition came from in the schema."""
    ELEMENT = "element"          # Top-level element wrapping an inline complexType
    COMPLEX_TYPE = "complexType"
    SIMPLE_TYPE = "simpleType"


class PartReferenceKind(str, Enum):
    """How a message part points at its type."""
    ELEMENT = "element"
    TYPE = "type"


@dataclass(frozen=True)
class Field:
    """Child element declaration inside a complex type."""
    name: str
    type: str                               # Bare type name, unresolved
    min_occurs: str = DEFAULT_OCCURS
    max_occurs: str = DEFAULT_OCCURS        # Numeric string or "unbounded"
    documentation: str = ""

    @property
    def required(self) -> bool:
        return self.min_occurs != "0"


@dataclass(frozen=True)
class TypeDef:
    """Named schema type. Only one of fields/enumerations is populated per kind."""
    name: str
    kind: TypeKind
    documentation: str = ""
    fields: list[Field] = field(default_factory=list)
    enumerations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Part:
    """Message part; exactly one of element/type is non-empty."""
    name: str
    element: str = ""
    type: str = ""

    @property
    def reference(self) -> str:
        return self.element or self.type

    @property
    def reference_kind(self) -> PartReferenceKind:
        return PartReferenceKind.ELEMENT if self.element else PartReferenceKind.TYPE


@dataclass(frozen=True)
class Message:
    name: str
    parts: list[Part] = field(default_factory=list)


@dataclass(frozen=True)
class Fault:
    name: str
    message: str


@dataclass(frozen=True)
class Operation:
    """Abstract operation from a portType."""
    name: str
    documentation: str = ""
    input: str = ""
    output: str = ""
    faults: list[Fault] = field(default_factory=list)


@dataclass(frozen=True)
class BindingOperation:
    name: str
    soap_action: str = ""


@dataclass(frozen=True)
class Binding:
    """Concrete protocol binding of a portType."""
    name: str
    type: str = ""                          # portType name
    style: str = DEFAULT_STYLE              # "document" or "rpc"
    transport: str = ""
    protocol: str = "SOAP 1.1"
    operations: list[BindingOperation] = field(default_factory=list)


@dataclass(frozen=True)
class Endpoint:
    service: str
    port: str
    binding: str
    url: str


@dataclass(frozen=True)
class Service:
    """Root of the normalized model for one WSDL document graph."""
    name: str = ""
    target_namespace: str = ""
    documentation: str = ""
    types: list[TypeDef] = field(default_factory=list)
    messages: list[Message] = field(default_factory=list)
    operations: list[Operation] = field(default_factory=list)
    bindings: list[Binding] = field(default_factory=list)
    endpoints: list[Endpoint] = field(default_factory=list)


def build_model(raw: dict[str, Any]) -> Service:
    """Normalize a merged raw tree into a Service.

    Args:
        raw: Output of parse_wsdl() or load_wsdl()

    Returns:
        Service with all sections extracted
    """
    defs = raw.get("definitions")
    if not isinstance(defs, dict):
        defs = {}
    types_node = first(defs.get("types"))
    schema = first(types_node.get("schema")) if isinstance(types_node, dict) else None
    if not isinstance(schema, dict):
        schema = {}

    service = Service(
        name=attr(defs, "name"),
        target_namespace=attr(defs, "targetNamespace"),
        documentation=get_documentation(defs),
        types=extract_types(schema),
        messages=extract_messages(as_list(defs.get("message"))),
        operations=extract_operations(as_list(defs.get("portType"))),
        bindings=extract_bindings(as_list(defs.get("binding"))),
        endpoints=extract_endpoints(as_list(defs.get("service"))),
    )
    logger.debug(
        f"Built model for '{service.name}': {len(service.types)} types, "
        f"{len(service.messages)} messages, {len(service.operations)} operations"
    )
    return service


def _plain_dict(items: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: value.value if isinstance(value, Enum) else value for key, value in items}


def service_to_dict(service: Service) -> dict[str, Any]:
    """JSON-ready dict of a service; enum kinds become their string values."""
    return asdict(service, dict_factory=_plain_dict)


def get_documentation(node: Any) -> str:
    """Documentation text of a node.

    Checks a direct <documentation> child (WSDL style) first, then the XSD
    <annotation><documentation> pattern. Returns "" when neither is present.
    """
    if not isinstance(node, dict):
        return ""
    direct = text(first(node.get("documentation")))
    if direct:
        return direct
    annotation = first(node.get("annotation"))
    if not isinstance(annotation, dict):
        return ""
    return text(first(annotation.get("documentation")))


def extract_types(schema: dict[str, Any]) -> list[TypeDef]:
    """Element-wrapped types, then named complexTypes, then named simpleTypes."""
    types = []

    for el in as_list(schema.get("element")):
        if not isinstance(el, dict):
            continue
        complex_type = first(el.get("complexType"))
        if complex_type is None:
            continue
        types.append(TypeDef(
            name=attr(el, "name"),
            kind=TypeKind.ELEMENT,
            documentation=get_documentation(el),
            fields=extract_fields(complex_type),
        ))

    for complex_type in as_list(schema.get("complexType")):
        types.append(TypeDef(
            name=attr(complex_type, "name"),
            kind=TypeKind.COMPLEX_TYPE,
            documentation=get_documentation(complex_type),
            fields=extract_fields(complex_type),
        ))

    for simple_type in as_list(schema.get("simpleType")):
        types.append(TypeDef(
            name=attr(simple_type, "name"),
            kind=TypeKind.SIMPLE_TYPE,
            documentation=get_documentation(simple_type),
            enumerations=extract_enumerations(simple_type),
        ))

    return types


def _find_compositor(node: Any) -> Any:
    if not isinstance(node, dict):
        return None
    for name in COMPOSITORS:
        compositor = first(node.get(name))
        if compositor is not None:
            return compositor
    return None


def extract_fields(complex_type: Any) -> list[Field]:
    """Fields from the first sequence/all/choice compositor of a complexType.

    Falls back to the compositor of a complexContent extension/restriction
    when the type has no direct one.
    """
    compositor = _find_compositor(complex_type)
    if compositor is None and isinstance(complex_type, dict):
        content = first(complex_type.get("complexContent"))
        if isinstance(content, dict):
            derivation = first(content.get("extension")) or first(content.get("restriction"))
            compositor = _find_compositor(derivation)
    if not isinstance(compositor, dict):
        return []

    fields = []
    for el in as_list(compositor.get("element")):
        ref = strip_ns(attr(el, "ref"))
        fields.append(Field(
            name=attr(el, "name") or ref,
            type=strip_ns(attr(el, "type")) or ref,
            min_occurs=attr(el, "minOccurs", DEFAULT_OCCURS),
            max_occurs=attr(el, "maxOccurs", DEFAULT_OCCURS),
            documentation=get_documentation(el),
        ))
    return fields


def extract_enumerations(simple_type: Any) -> list[str]:
    """Ordered enumeration facet values of a simpleType restriction."""
    if not isinstance(simple_type, dict):
        return []
    restriction = first(simple_type.get("restriction"))
    if not isinstance(restriction, dict):
        return []
    return [attr(e, "value") for e in as_list(restriction.get("enumeration"))]


def extract_messages(messages: list) -> list[Message]:
    return [
        Message(
            name=attr(msg, "name"),
            parts=[
                Part(
                    name=attr(p, "name"),
                    element=strip_ns(attr(p, "element")),
                    type="" if attr(p, "element") else strip_ns(attr(p, "type")),
                )
                for p in as_list(msg.get("part") if isinstance(msg, dict) else None)
            ],
        )
        for msg in messages
    ]


def extract_operations(port_types: list) -> list[Operation]:
    """Flatten the operations of every portType into one list."""
    operations = []
    for port_type in port_types:
        if not isinstance(port_type, dict):
            continue
        for op in as_list(port_type.get("operation")):
            if not isinstance(op, dict):
                op = {}
            operations.append(Operation(
                name=attr(op, "name"),
                documentation=get_documentation(op),
                input=strip_ns(attr(first(op.get("input")), "message")),
                output=strip_ns(attr(first(op.get("output")), "message")),
                faults=[
                    Fault(name=attr(f, "name"), message=strip_ns(attr(f, "message")))
                    for f in as_list(op.get("fault"))
                ],
            ))
    return operations


def detect_protocol(transport: str) -> str:
    """Protocol label for a binding transport URI."""
    if "soap12" in transport:
        return "SOAP 1.2"
    return "SOAP 1.1"


def extract_bindings(bindings: list) -> list[Binding]:
    """Binding metadata.

    After namespace stripping, <soap:binding> has the same name as the outer
    <wsdl:binding>, so the protocol descriptor is the nested binding[0] of each
    binding node. Likewise <soap:operation> is the nested operation[0] of each
    bound <wsdl:operation>.
    """
    result = []
    for b in bindings:
        if not isinstance(b, dict):
            b = {}
        protocol_binding = first(b.get("binding"))
        transport = attr(protocol_binding, "transport")
        operations = []
        for op in as_list(b.get("operation")):
            protocol_op = first(op.get("operation")) if isinstance(op, dict) else None
            operations.append(BindingOperation(
                name=attr(op, "name"),
                soap_action=attr(protocol_op, "soapAction"),
            ))
        result.append(Binding(
            name=attr(b, "name"),
            type=strip_ns(attr(b, "type")),
            style=attr(protocol_binding, "style", DEFAULT_STYLE),
            transport=transport,
            protocol=detect_protocol(transport),
            operations=operations,
        ))
    return result


def extract_endpoints(services: list) -> list[Endpoint]:
    """One endpoint per service/port pair."""
    endpoints = []
    for svc in services:
        if not isinstance(svc, dict):
            continue
        for port in as_list(svc.get("port")):
            if not isinstance(port, dict):
                port = {}
            endpoints.append(Endpoint(
                service=attr(svc, "name"),
                port=attr(port, "name"),
                binding=strip_ns(attr(port, "binding")),
                url=attr(first(port.get("address")), "location"),
            ))
    return endpoints
