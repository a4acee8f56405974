"""Document tree: the renderer-agnostic output of the generator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TextNode:
    text: str


@dataclass(frozen=True, slots=True)
class CodeNode:
    """Inline code. ``text`` is literal and always escaped on output."""

    text: str


@dataclass(frozen=True, slots=True)
class EmphasisNode:
    text: str


@dataclass(frozen=True, slots=True)
class LinkNode:
    href: str
    label: str


InlineNode = TextNode | CodeNode | EmphasisNode | LinkNode


@dataclass(frozen=True, slots=True)
class ParagraphNode:
    children: tuple[InlineNode, ...]


@dataclass(frozen=True, slots=True)
class ListItemNode:
    """List entry; ``action`` marks an incremental (revealed step by step) item."""

    children: tuple[InlineNode, ...]
    action: bool


@dataclass(frozen=True, slots=True)
class ListNode:
    items: tuple[ListItemNode, ...]


@dataclass(frozen=True, slots=True)
class PreformattedNode:
    """Preformatted block. ``kind`` is the source block tag, left to the renderer."""

    text: str
    kind: str


@dataclass(frozen=True, slots=True)
class PassthroughNode:
    """Raw content included verbatim by the renderer."""

    text: str


BlockNode = ParagraphNode | ListNode | PreformattedNode | PassthroughNode


@dataclass(frozen=True, slots=True)
class HeadingGroupNode:
    title: tuple[InlineNode, ...]
    subtitle: tuple[InlineNode, ...] | None


@dataclass(frozen=True, slots=True)
class SectionNode:
    """One slide."""

    heading: HeadingGroupNode
    children: tuple[BlockNode, ...]


DocumentTree = tuple[SectionNode, ...]

TreeNode = InlineNode | BlockNode | ListItemNode | HeadingGroupNode | SectionNode
