"""HTML renderer — serializes a document tree."""

from __future__ import annotations

from slidemark.tree import (
    BlockNode,
    CodeNode,
    DocumentTree,
    EmphasisNode,
    HeadingGroupNode,
    InlineNode,
    LinkNode,
    ListItemNode,
    ListNode,
    ParagraphNode,
    PassthroughNode,
    PreformattedNode,
    SectionNode,
    TextNode,
)


def render(tree: DocumentTree) -> str:
    """Render the slides alone, one <section> per slide."""
    return "".join(_render_section(section) + "\n" for section in tree)


def render_document(tree: DocumentTree, title: str | None = None, lang: str | None = None) -> str:
    """Render the slides inside a minimal HTML document."""
    parts: list[str] = ["<!DOCTYPE html>\n"]
    if lang:
        parts.append(f'<html lang="{_escape_attr(lang)}">\n')
    else:
        parts.append("<html>\n")
    parts.append("<head>\n")
    parts.append('<meta charset="utf-8">\n')
    if title:
        parts.append(f"<title>{_escape_html(title)}</title>\n")
    parts.append("</head>\n")
    parts.append("<body>\n")
    parts.append(render(tree))
    parts.append("</body>\n")
    parts.append("</html>\n")

    return "".join(parts)


# ---------------------------------------------------------------------------
# HTML escaping
# ---------------------------------------------------------------------------


def _escape_html(text: str) -> str:
    """Escape text for HTML body content. Also encodes non-ASCII as entities."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ord(ch) > 0x7F:
            result.append(f"&#x{ord(ch):X};")
        else:
            result.append(ch)
    return "".join(result)


def _escape_attr(text: str) -> str:
    """Escape text for HTML attribute values."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ch == '"':
            result.append("&quot;")
        elif ord(ch) > 0x7F:
            result.append(f"&#x{ord(ch):X};")
        else:
            result.append(ch)
    return "".join(result)


# ---------------------------------------------------------------------------
# Node rendering
# ---------------------------------------------------------------------------


def _render_section(section: SectionNode) -> str:
    parts: list[str] = ['<section class="slide">\n']
    parts.append(_render_heading(section.heading))
    parts.append("\n")
    for child in section.children:
        parts.append(_render_block(child))
        parts.append("\n")
    parts.append("</section>")
    return "".join(parts)


def _render_heading(heading: HeadingGroupNode) -> str:
    html = f"<hgroup><h1>{_render_inline(heading.title)}</h1>"
    if heading.subtitle is not None:
        html += f"<h2>{_render_inline(heading.subtitle)}</h2>"
    return html + "</hgroup>"


def _render_block(node: BlockNode) -> str:
    match node:
        case ParagraphNode():
            return f"<p>{_render_inline(node.children)}</p>"
        case ListNode():
            return _render_list(node)
        case PreformattedNode():
            return _render_pre(node)
        case PassthroughNode():
            return node.text
        case _:
            return ""


def _render_list(node: ListNode) -> str:
    parts: list[str] = ["<ul>\n"]
    for item in node.items:
        parts.append(_render_li(item))
        parts.append("\n")
    parts.append("</ul>")
    return "".join(parts)


def _render_li(item: ListItemNode) -> str:
    if item.action:
        return f'<li class="action">{_render_inline(item.children)}</li>'
    return f"<li>{_render_inline(item.children)}</li>"


def _render_pre(node: PreformattedNode) -> str:
    content = _escape_html(node.text)
    if node.kind == "code":
        return f"<pre>{content}</pre>"
    return f'<pre class="{_escape_attr(node.kind)}">{content}</pre>'


def _render_inline(children: tuple[InlineNode, ...]) -> str:
    return "".join(_render_child(child) for child in children)


def _render_child(child: InlineNode) -> str:
    match child:
        case TextNode():
            return _escape_html(child.text)
        case CodeNode():
            return f"<code>{_escape_html(child.text)}</code>"
        case EmphasisNode():
            return f"<strong>{_escape_html(child.text)}</strong>"
        case LinkNode():
            return f'<a href="{_escape_attr(child.href)}">{_escape_html(child.label)}</a>'
        case _:
            return ""
