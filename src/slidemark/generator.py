"""Generator mapping a parsed presentation onto the document tree.

Every function here is a ``match`` over a closed set of node classes. The
fallback case passes the subject to ``_unreachable``, whose parameter is typed
``Never``: a type checker reports any node class the match forgot, and at run
time a stray node raises ``GenerateError``.
"""

from __future__ import annotations

from typing import Never, NoReturn

from slidemark.ast import (
    BlockKind,
    Bold,
    BulletItem,
    BulletList,
    Chunk,
    CodeBlock,
    InlineCode,
    ItemKind,
    Link,
    LinkKind,
    Node,
    Paragraph,
    Presentation,
    RawBlock,
    Slide,
    SlideChunk,
    TextLine,
)
from slidemark.errors import GenerateError
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
    TreeNode,
)

GITHUB_URL = "https://github.com/"


def generate(node: Node) -> TreeNode | tuple[TreeNode, ...]:
    """Generate the document-tree counterpart of any AST node."""
    match node:
        case str() | InlineCode() | Bold() | Link():
            return generate_inline(node)
        case tuple():
            return generate_line(node)
        case Paragraph() | BulletList() | CodeBlock() | RawBlock():
            return generate_block(node)
        case BulletItem():
            return generate_item(node)
        case Slide():
            return generate_slide(node)
        case Presentation():
            return generate_presentation(node)
        case _:
            _unreachable(node)


def generate_presentation(presentation: Presentation) -> DocumentTree:
    return tuple(generate_slide(slide) for slide in presentation.slides)


def generate_slide(slide: Slide) -> SectionNode:
    if not isinstance(slide, Slide):
        _unreachable(slide)
    subtitle = generate_line(slide.subtitle) if slide.subtitle is not None else None
    heading = HeadingGroupNode(generate_line(slide.title), subtitle)
    return SectionNode(heading, tuple(generate_block(chunk) for chunk in slide.chunks))


def generate_block(chunk: SlideChunk) -> BlockNode:
    match chunk:
        case Paragraph(line=line):
            return ParagraphNode(generate_line(line))
        case BulletList(items=items):
            return ListNode(tuple(generate_item(item) for item in items))
        case CodeBlock(kind=kind, text=text):
            return PreformattedNode(text, _block_kind(kind))
        case RawBlock(text=text):
            return PassthroughNode(text)
        case _:
            _unreachable(chunk)


def generate_item(item: BulletItem) -> ListItemNode:
    if not isinstance(item, BulletItem):
        _unreachable(item)
    match item.kind:
        case ItemKind.INCREMENTAL:
            return ListItemNode(generate_line(item.line), action=True)
        case ItemKind.STATIC:
            return ListItemNode(generate_line(item.line), action=False)
        case _:
            _unreachable(item.kind)


def generate_line(line: TextLine) -> tuple[InlineNode, ...]:
    if not isinstance(line, tuple):
        _unreachable(line)
    return tuple(generate_inline(chunk) for chunk in line)


def generate_inline(chunk: Chunk) -> InlineNode:
    match chunk:
        case str():
            return TextNode(chunk)
        case InlineCode(text=text):
            return CodeNode(text)
        case Bold(text=text):
            return EmphasisNode(text)
        case Link():
            return LinkNode(_link_href(chunk), chunk.label)
        case _:
            _unreachable(chunk)


def _link_href(link: Link) -> str:
    match link.kind:
        case LinkKind.PLAIN:
            return link.target
        case LinkKind.GITHUB:
            return GITHUB_URL + link.target
        case _:
            _unreachable(link.kind)


def _block_kind(kind: BlockKind) -> str:
    match kind:
        case BlockKind.CODE | BlockKind.ANNOTATE:
            return kind.value
        case _:
            _unreachable(kind)


def _unreachable(node: Never) -> NoReturn:
    raise GenerateError(f"no generator for {type(node).__name__} node", node)
