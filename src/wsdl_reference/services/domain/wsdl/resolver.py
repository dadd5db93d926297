#!/usr/bin/env python3
"""
Name-keyed lookups over a normalized Service.

WSDL documents are full of indirect references by local name:
    operation.input -> message name -> Message
    message part    -> element/type name -> TypeDef -> fields

These are resolved on demand rather than in build_model() so the model stays
a plain data structure. References that point at names the document graph
never declared (schemas the tool was not asked to fetch) resolve to empty
results, never errors.
"""

import logging
from dataclasses import dataclass, field

from .model import Field, Message, Operation, Service, TypeDef

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceIndex:
    """Lookup tables into a Service. Holds references only; rebuild instead of mutating."""
    type_by_name: dict[str, TypeDef] = field(default_factory=dict)
    message_by_name: dict[str, Message] = field(default_factory=dict)


@dataclass(frozen=True)
class PartDescriptor:
    """One message part with the fields of the type it references."""
    part_name: str
    type_name: str
    fields: list[Field] = field(default_factory=list)
    enumerations: list[str] = field(default_factory=list)


def build_index(service: Service) -> ReferenceIndex:
    """Build fresh type and message lookup tables for a service."""
    return ReferenceIndex(
        type_by_name={t.name: t for t in service.types},
        message_by_name={m.name: m for m in service.messages},
    )


def resolve_message_fields(message_name: str, index: ReferenceIndex) -> list[PartDescriptor]:
    """Resolve each part of a message to the fields of its referenced type.

    The part's element reference is preferred over its type reference. Only
    one level is resolved: field types are left as names, so self-referencing
    and cyclic types cannot cause unbounded work.

    Args:
        message_name: Local name of the message
        index: Output of build_index()

    Returns:
        One PartDescriptor per part; [] when the message is unknown
    """
    message = index.message_by_name.get(message_name)
    if message is None:
        if message_name:
            logger.debug(f"Unresolved message reference '{message_name}'")
        return []

    descriptors = []
    for part in message.parts:
        type_name = part.element or part.type
        type_def = index.type_by_name.get(type_name)
        if type_def is None:
            logger.debug(f"Part '{part.name}' of '{message_name}' references unknown type '{type_name}'")
        descriptors.append(PartDescriptor(
            part_name=part.name,
            type_name=type_name,
            fields=list(type_def.fields) if type_def else [],
            enumerations=list(type_def.enumerations) if type_def else [],
        ))
    return descriptors


def resolve_operation(
    operation: Operation, index: ReferenceIndex
) -> tuple[list[PartDescriptor], list[PartDescriptor]]:
    """Resolved input and output message parts of an operation."""
    return (
        resolve_message_fields(operation.input, index),
        resolve_message_fields(operation.output, index),
    )
