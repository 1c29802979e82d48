"""
Candidate enumeration over a DocumentTree.

Only simple selectors are supported: ``tag``, ``.class``, ``#id``,
``tag.class``, ``tag#id`` and ``tag[attr="value"]``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from ..config.config import SELECTOR_RE
from .dom import DocumentTree, Node


@dataclass(frozen=True, slots=True)
class SimpleSelector:
    """A compound of at most one tag and one class, id or attribute test."""

    tag: Optional[str] = None
    class_name: Optional[str] = None
    element_id: Optional[str] = None
    attribute: Optional[tuple[str, str]] = None

    @classmethod
    def parse(cls, selector: str) -> SimpleSelector:
        match = SELECTOR_RE.match(selector.strip())
        if not selector.strip() or match is None:
            raise ValueError(f"Unsupported selector: {selector!r}")
        attribute = None
        if match.group("attr"):
            attribute = (match.group("attr").lower(), match.group("value"))
        tag = match.group("tag")
        return cls(
            tag=tag.lower() if tag else None,
            class_name=match.group("cls"),
            element_id=match.group("id"),
            attribute=attribute,
        )

    def matches(self, node: Node) -> bool:
        if not node.is_element:
            return False
        if self.tag is not None and node.tag != self.tag:
            return False
        if self.class_name is not None and self.class_name not in node.get("class").split():
            return False
        if self.element_id is not None and node.get("id") != self.element_id:
            return False
        if self.attribute is not None:
            name, value = self.attribute
            if name not in node.attrs or node.attrs[name] != value:
                return False
        return True


def compile_selectors(selectors: Iterable[str | SimpleSelector]) -> List[SimpleSelector]:
    return [s if isinstance(s, SimpleSelector) else SimpleSelector.parse(s) for s in selectors]


def select_candidates(tree: DocumentTree, selectors: Sequence[str | SimpleSelector]) -> List[int]:
    """Elements matching any selector, in document order, each at most once."""
    compiled = compile_selectors(selectors)
    return [index for index in tree.iter_elements() if any(s.matches(tree.node(index)) for s in compiled)]


def select_all(tree: DocumentTree, skip_tags: Sequence[str] = ("style", "script", "svg")) -> List[int]:
    """Every element under the root, leaving out ``skip_tags`` subtrees."""
    skip = set(skip_tags)
    selected: List[int] = []
    stack = list(reversed(tree.children(tree.root)))
    while stack:
        index = stack.pop()
        node = tree.node(index)
        if not node.is_element or node.tag in skip:
            continue
        selected.append(index)
        stack.extend(reversed(node.children))
    return selected
