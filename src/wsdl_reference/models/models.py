#!/usr/bin/env python3

from typing import Literal

from pydantic import BaseModel

# Pydantic Models


class FieldModel(BaseModel):
    name: str
    type: str
    min_occurs: str = "1"
    max_occurs: str = "1"  # numeric string or 'unbounded'
    documentation: str = ""


class TypeDefModel(BaseModel):
    name: str
    kind: str  # 'element', 'complexType', 'simpleType'
    documentation: str = ""
    fields: list[FieldModel] = []
    enumerations: list[str] = []


class PartModel(BaseModel):
    name: str
    element: str = ""
    type: str = ""


class MessageModel(BaseModel):
    name: str
    parts: list[PartModel] = []


class FaultModel(BaseModel):
    name: str
    message: str


class OperationModel(BaseModel):
    name: str
    documentation: str = ""
    input: str = ""
    output: str = ""
    faults: list[FaultModel] = []


class BindingOperationModel(BaseModel):
    name: str
    soap_action: str = ""


class BindingModel(BaseModel):
    name: str
    type: str = ""
    style: str = "document"  # 'document' or 'rpc'
    transport: str = ""
    protocol: str = "SOAP 1.1"
    operations: list[BindingOperationModel] = []


class EndpointModel(BaseModel):
    service: str
    port: str
    binding: str
    url: str


class ServiceResponse(BaseModel):
    """Normalized WSDL model returned by the API."""

    name: str
    target_namespace: str = ""
    documentation: str = ""
    types: list[TypeDefModel] = []
    messages: list[MessageModel] = []
    operations: list[OperationModel] = []
    bindings: list[BindingModel] = []
    endpoints: list[EndpointModel] = []


class WsdlUrlRequest(BaseModel):
    url: str
    format: Literal["model", "html"] = "model"
    title: str | None = None
