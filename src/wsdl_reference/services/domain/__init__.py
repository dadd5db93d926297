"""
Domain Layer

Business logic with no transport concerns. Each subpackage owns one
document vocabulary.

- wsdl: WSDL 1.1 / XSD loading, normalization, resolution and rendering
"""
