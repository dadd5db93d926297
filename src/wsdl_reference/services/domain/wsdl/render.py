#!/usr/bin/env python3
"""HTML5 reference page for a normalized WSDL service.

Output uses only semantic elements so the edible-css stylesheet can style
everything without classes:
- <details>/<summary> for type definitions and bindings
- <table> for fields, operation messages, SOAPActions and endpoints
- <article> per operation, <blockquote> for documentation
- <mark> around required field names (minOccurs != 0)
"""

import html
from datetime import UTC, datetime
from typing import Any, Optional

from ....core.config import loader_config
from .model import Binding, Endpoint, Field, Message, Operation, Service, TypeDef, TypeKind
from .resolver import PartDescriptor, ReferenceIndex, build_index, resolve_operation


def _h(s: Any) -> str:
    return html.escape("" if s is None else str(s))


def _doc(text: str) -> str:
    if not text:
        return ""
    return f"<blockquote><p>{_h(text)}</p></blockquote>"


def _empty(what: str) -> str:
    return f"<p><em>No {what} defined.</em></p>"


def _css(inline_css: Optional[str]) -> str:
    if inline_css:
        # "</" inside a raw-text element would close it early
        css = inline_css.replace("</", "<\\/")
        return f"<style>{css}</style>"
    return f'<link rel="stylesheet" href="{_h(loader_config.CSS_URL)}">'


def _header(service: Service) -> str:
    return f"""<header>
<h1>{_h(service.name)}</h1>
{_doc(service.documentation)}
<p>Target namespace: <code>{_h(service.target_namespace)}</code></p>
<nav>
<ul>
<li><a href="#types">Types</a></li>
<li><a href="#messages">Messages</a></li>
<li><a href="#operations">Operations</a></li>
<li><a href="#bindings">Bindings</a></li>
<li><a href="#endpoints">Endpoints</a></li>
</ul>
</nav>
</header>"""


def _field_table(fields: list[Field]) -> str:
    if not fields:
        return "<p><em>No fields.</em></p>"
    rows = []
    for f in fields:
        name = f"<mark>{_h(f.name)}</mark>" if f.required else _h(f.name)
        rows.append(
            f"<tr><td>{name}</td><td><code>{_h(f.type)}</code></td>"
            f"<td>{_h(f.min_occurs)}</td><td>{_h(f.max_occurs)}</td><td>{_h(f.documentation)}</td></tr>"
        )
    body = "\n".join(rows)
    return f"""<table>
<thead><tr><th>Field</th><th>Type</th><th>Min</th><th>Max</th><th>Documentation</th></tr></thead>
<tbody>{body}</tbody>
</table>"""


def _enumerations(values: list[str]) -> str:
    if not values:
        return "<p><em>No values.</em></p>"
    items = "".join(f"<li><code>{_h(v)}</code></li>" for v in values)
    return f"<ul>{items}</ul>"


def _type(type_def: TypeDef) -> str:
    if type_def.kind == TypeKind.SIMPLE_TYPE:
        kind_label, body = "enum", _enumerations(type_def.enumerations)
    else:
        kind_label, body = "type", _field_table(type_def.fields)
    return f"""<details>
<summary><strong>{_h(type_def.name)}</strong> <small>{kind_label}</small></summary>
{_doc(type_def.documentation)}
{body}
</details>"""


def _types(types: list[TypeDef]) -> str:
    content = "\n".join(_type(t) for t in types) if types else _empty("types")
    return f"""<section id="types">
<h2>Types</h2>
{content}
</section>"""


def _messages(messages: list[Message]) -> str:
    if messages:
        entries = []
        for msg in messages:
            parts = "\n".join(
                f"<dd><strong>{_h(p.name)}</strong>: <code>{_h(p.reference)}</code> "
                f"<small>({p.reference_kind.value})</small></dd>"
                for p in msg.parts
            )
            entries.append(f"<dt><strong>{_h(msg.name)}</strong></dt>\n{parts}")
        content = "\n".join(entries)
    else:
        content = _empty("messages")
    return f"""<section id="messages">
<h2>Messages</h2>
<dl>
{content}
</dl>
</section>"""


def _resolved_parts(direction: str, descriptors: list[PartDescriptor]) -> str:
    blocks = []
    for d in descriptors:
        if d.enumerations:
            body = _enumerations(d.enumerations)
        else:
            body = _field_table(d.fields)
        blocks.append(
            f"<h4>{direction}: {_h(d.part_name)} <small><code>{_h(d.type_name)}</code></small></h4>\n{body}"
        )
    return "\n".join(blocks)


def _operation(op: Operation, index: ReferenceIndex) -> str:
    inputs, outputs = resolve_operation(op, index)
    faults = ""
    if op.faults:
        items = "".join(
            f"<li><strong>{_h(f.name)}</strong>: <code>{_h(f.message)}</code></li>" for f in op.faults
        )
        faults = f"<h4>Faults</h4><ul>{items}</ul>"
    return f"""<article id="op-{_h(op.name)}">
<h3>{_h(op.name)}</h3>
{_doc(op.documentation)}
<table>
<thead><tr><th>Direction</th><th>Message</th></tr></thead>
<tbody>
<tr><td>Input</td><td><code>{_h(op.input)}</code></td></tr>
<tr><td>Output</td><td><code>{_h(op.output)}</code></td></tr>
</tbody>
</table>
{_resolved_parts("Input", inputs)}
{_resolved_parts("Output", outputs)}
{faults}
</article>"""


def _operations(operations: list[Operation], index: ReferenceIndex) -> str:
    content = "\n".join(_operation(op, index) for op in operations) if operations else _empty("operations")
    return f"""<section id="operations">
<h2>Operations</h2>
{content}
</section>"""


def _binding(b: Binding) -> str:
    rows = "\n".join(
        f"<tr><td>{_h(op.name)}</td><td><code>{_h(op.soap_action)}</code></td></tr>" for op in b.operations
    )
    return f"""<details>
<summary><strong>{_h(b.name)}</strong> <small>{_h(b.protocol)} · {_h(b.style)}</small></summary>
<p>Type: <code>{_h(b.type)}</code> · Transport: <code>{_h(b.transport)}</code></p>
<table>
<thead><tr><th>Operation</th><th>SOAPAction</th></tr></thead>
<tbody>{rows}</tbody>
</table>
</details>"""


def _bindings(bindings: list[Binding]) -> str:
    content = "\n".join(_binding(b) for b in bindings) if bindings else _empty("bindings")
    return f"""<section id="bindings">
<h2>Bindings</h2>
{content}
</section>"""


def _endpoints(endpoints: list[Endpoint]) -> str:
    if endpoints:
        rows = "\n".join(
            f"<tr><td>{_h(ep.service)}</td><td>{_h(ep.port)}</td>"
            f"<td><code>{_h(ep.binding)}</code></td><td><code>{_h(ep.url)}</code></td></tr>"
            for ep in endpoints
        )
        content = f"""<table>
<thead><tr><th>Service</th><th>Port</th><th>Binding</th><th>URL</th></tr></thead>
<tbody>
{rows}
</tbody>
</table>"""
    else:
        content = _empty("endpoints")
    return f"""<section id="endpoints">
<h2>Endpoints</h2>
{content}
</section>"""


def render_html(
    service: Service,
    index: Optional[ReferenceIndex] = None,
    *,
    title: Optional[str] = None,
    inline_css: Optional[str] = None,
) -> str:
    """Render a complete, self-contained HTML5 page for a service.

    Args:
        service: Output of build_model()
        index: Index built from the same service; built here when omitted
        title: Overrides the page <title> ("{name} – WSDL Reference" by default)
        inline_css: Stylesheet text embedded in <style> instead of the CDN <link>

    Returns:
        Full HTML5 document
    """
    if index is None:
        index = build_index(service)
    page_title = title if title is not None else f"{service.name} – WSDL Reference"
    today = datetime.now(UTC).date().isoformat()
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{_h(page_title)}</title>
{_css(inline_css)}
</head>
<body>
{_header(service)}
<main>
{_types(service.types)}
{_messages(service.messages)}
{_operations(service.operations, index)}
{_bindings(service.bindings)}
{_endpoints(service.endpoints)}
</main>
<footer>
<p>Generated by <strong>wsdl-reference</strong> on {today}</p>
</footer>
</body>
</html>"""
