"""
WSDL Processing Domain

Handles WSDL 1.1 document operations:
- Parsing (namespace-agnostic raw tree)
- Import resolution (xsd:import / xsd:include / wsdl:import merging)
- Normalization into the Service model
- Reference resolution (message parts to type fields)
- HTML reference page rendering
"""

from .loader import load_wsdl
from .model import (
    Binding,
    BindingOperation,
    Endpoint,
    Fault,
    Field,
    Message,
    Operation,
    Part,
    PartReferenceKind,
    Service,
    TypeDef,
    TypeKind,
    build_model,
    service_to_dict,
)
from .parser import parse_schema, parse_wsdl
from .render import render_html
from .resolver import PartDescriptor, ReferenceIndex, build_index, resolve_message_fields, resolve_operation

__all__ = [
    # Parsing and loading
    "parse_wsdl",
    "parse_schema",
    "load_wsdl",
    # Model
    "build_model",
    "service_to_dict",
    "Service",
    "TypeDef",
    "TypeKind",
    "Field",
    "Message",
    "Part",
    "PartReferenceKind",
    "Operation",
    "Fault",
    "Binding",
    "BindingOperation",
    "Endpoint",
    # Resolution
    "build_index",
    "resolve_message_fields",
    "resolve_operation",
    "ReferenceIndex",
    "PartDescriptor",
    # Rendering
    "render_html",
]
