"""
Index-addressed document tree built from BeautifulSoup parse output.

Nodes live in a flat arena and refer to each other by index: a node owns its
ordered child indices and keeps a non-owning parent index. Indices are handed
out in pre-order, so ascending index order is document order.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import structlog
from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

logger = structlog.get_logger(__name__)

ROOT_TAG = "[document]"
DEFAULT_NOISE_TAGS: Tuple[str, ...] = ("script", "style", "a", "iframe", "noscript")

VOID_ELEMENTS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "param", "source", "track", "wbr"}
)
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})


class ParseError(ValueError):
    """Raised when the HTML parser cannot produce a tree from the input."""

    pass


@dataclass(slots=True)
class Node:
    """A single element or text node of a DocumentTree."""

    index: int
    tag: str  # empty for text nodes
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List[int] = field(default_factory=list)
    parent: Optional[int] = None
    text: str = ""
    removed: bool = False

    @property
    def is_text(self) -> bool:
        return self.tag == ""

    @property
    def is_element(self) -> bool:
        return self.tag != "" and self.tag != ROOT_TAG

    def get(self, name: str, default: str = "") -> str:
        return self.attrs.get(name, default)


class DocumentTree:
    """Arena of nodes with exactly one root at index 0."""

    def __init__(self) -> None:
        self.nodes: List[Node] = [Node(index=0, tag=ROOT_TAG)]

    # --- Construction ---

    def add_node(self, parent: int, tag: str, attrs: Optional[Dict[str, str]] = None, text: str = "") -> int:
        """Append a node under ``parent`` and return its index."""
        index = len(self.nodes)
        self.nodes.append(Node(index=index, tag=tag, attrs=dict(attrs or {}), parent=parent, text=text))
        self.nodes[parent].children.append(index)
        return index

    def remove(self, index: int) -> None:
        """Detach a node and its subtree from the tree."""
        if index == self.root:
            raise ValueError("The document root cannot be removed")
        node = self.nodes[index]
        if node.removed:
            return
        subtree = [index, *self.iter_descendants(index)]
        if node.parent is not None:
            self.nodes[node.parent].children.remove(index)
        for i in subtree:
            self.nodes[i].removed = True
        node.parent = None

    # --- Navigation ---

    @property
    def root(self) -> int:
        return 0

    @property
    def body(self) -> int:
        """The body element, or the root when the document has none."""
        for index in self.iter_descendants(self.root):
            if self.nodes[index].tag == "body":
                return index
        return self.root

    def node(self, index: int) -> Node:
        return self.nodes[index]

    def tag(self, index: int) -> str:
        return self.nodes[index].tag

    def children(self, index: int) -> List[int]:
        return list(self.nodes[index].children)

    def parent(self, index: int) -> Optional[int]:
        return self.nodes[index].parent

    def parent_element(self, index: int) -> Optional[int]:
        """Parent of ``index`` unless that parent is the document root."""
        parent = self.nodes[index].parent
        if parent is None or parent == self.root:
            return None
        return parent

    def iter_descendants(self, index: int) -> Iterator[int]:
        """Yield every descendant of ``index`` in document order."""
        stack = list(reversed(self.nodes[index].children))
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self.nodes[current].children))

    def iter_elements(self, index: Optional[int] = None) -> Iterator[int]:
        """Yield descendant elements of ``index`` (default: root) in document order."""
        start = self.root if index is None else index
        for i in self.iter_descendants(start):
            if self.nodes[i].is_element:
                yield i

    def find_all(self, index: int, tags: Iterable[str]) -> List[int]:
        wanted = set(tags)
        return [i for i in self.iter_elements(index) if self.nodes[i].tag in wanted]

    def __len__(self) -> int:
        return sum(1 for node in self.nodes if not node.removed)

    # --- Content ---

    def text(self, index: int) -> str:
        """Concatenate text payloads under ``index`` in document order."""
        node = self.nodes[index]
        if node.is_text:
            return node.text
        return "".join(self.nodes[i].text for i in self.iter_descendants(index) if self.nodes[i].is_text)

    def inner_html(self, index: int) -> str:
        """Serialize the children of ``index`` back to markup."""
        parts: List[str] = []
        stack: List[Tuple[bool, int]] = [(True, i) for i in reversed(self.nodes[index].children)]
        while stack:
            entering, current = stack.pop()
            node = self.nodes[current]
            if node.is_text:
                parent_tag = self.nodes[node.parent].tag if node.parent is not None else ""
                parts.append(node.text if parent_tag in RAW_TEXT_ELEMENTS else html.escape(node.text, quote=False))
            elif entering:
                parts.append(_open_tag(node))
                if node.tag not in VOID_ELEMENTS:
                    stack.append((False, current))
                    stack.extend((True, child) for child in reversed(node.children))
            else:
                parts.append(f"</{node.tag}>")
        return "".join(parts)

    def path(self, index: int) -> str:
        """Human-readable ``html > body > div.content`` path to a node."""
        labels: List[str] = []
        current: Optional[int] = index
        while current is not None and current != self.root:
            labels.append(describe(self.nodes[current]))
            current = self.nodes[current].parent
        return " > ".join(reversed(labels)) or ROOT_TAG


def describe(node: Node) -> str:
    """Short CSS-like label for a node."""
    if node.is_text:
        return "#text"
    label = node.tag
    if node.get("id"):
        label += f"#{node.get('id')}"
    classes = node.get("class").split()
    if classes:
        label += "." + ".".join(classes)
    return label


def _open_tag(node: Node) -> str:
    attrs = "".join(f' {name}="{html.escape(value, quote=True)}"' for name, value in node.attrs.items())
    return f"<{node.tag}{attrs}>"


def _attr_value(value: object) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return "" if value is None else str(value)


def build_tree(soup: BeautifulSoup) -> DocumentTree:
    """Copy a BeautifulSoup parse tree into a DocumentTree arena."""
    tree = DocumentTree()
    stack: List[Tuple[object, int]] = [(child, tree.root) for child in reversed(soup.contents)]
    while stack:
        element, parent = stack.pop()
        if isinstance(element, Tag):
            attrs = {name.lower(): _attr_value(value) for name, value in element.attrs.items()}
            index = tree.add_node(parent, element.name.lower(), attrs)
            stack.extend((child, index) for child in reversed(element.contents))
        elif isinstance(element, NavigableString) and not isinstance(element, PreformattedString):
            # Comments, doctypes, CDATA and processing instructions carry no visible text.
            tree.add_node(parent, "", text=str(element))
    return tree


def remove_noise(tree: DocumentTree, tags: Sequence[str] = DEFAULT_NOISE_TAGS) -> int:
    """Delete every element whose tag is in ``tags`` along with its subtree."""
    noisy = set(tags)
    targets = [i for i in tree.iter_elements() if tree.tag(i) in noisy]
    removed = 0
    for index in targets:
        if not tree.node(index).removed:
            tree.remove(index)
            removed += 1
    return removed


def load(
    html_content: bytes | str,
    *,
    parser: str = "html.parser",
    noise_tags: Sequence[str] = DEFAULT_NOISE_TAGS,
) -> DocumentTree:
    """Parse raw HTML into a DocumentTree and strip noise elements.

    Args:
        html_content: Raw page bytes (encoding is sniffed) or decoded markup
        parser: BeautifulSoup tree builder name
        noise_tags: Tags removed, with their subtrees, before any scoring

    Returns:
        The noise-free DocumentTree

    Raises:
        ParseError: If the parser fails on the input
    """
    try:
        soup = BeautifulSoup(html_content, parser, multi_valued_attributes=None)
    except Exception as e:
        raise ParseError(f"Unable to parse HTML with {parser}: {e}") from e

    tree = build_tree(soup)
    removed = remove_noise(tree, noise_tags)
    logger.debug("Document loaded", nodes=len(tree), noise_removed=removed)
    return tree
