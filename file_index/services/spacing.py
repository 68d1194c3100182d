"""
CJK text spacing for markdown documents.

Markdown is parsed into a mistune AST and the spacing rewrite is applied node
by node: text and inline code values, link and image titles. Image alt text
is held in the image's text children, so the text rule covers it.
"""

from typing import Any, Dict, List, Optional

import mistune
import pangu
from mistune.core import BlockState

_parse = mistune.create_markdown(renderer="ast")
_html = mistune.HTMLRenderer()

VALUE_NODES = ("text", "codespan")
TITLE_NODES = ("link", "image")


def space_text(value: Optional[str]) -> Optional[str]:
    """Insert spacing between CJK and Latin/numeric runs; empty values pass through"""
    if not value:
        return value
    return pangu.space_text(value)


def space_node(node: Dict[str, Any]) -> Dict[str, Any]:
    """
    Rewrite the textual fields of a single AST node in place.

    Args:
        node: mistune AST token

    Returns:
        The same token
    """
    node_type = node.get("type")

    if node_type in VALUE_NODES and "raw" in node:
        node["raw"] = space_text(node["raw"])

    attrs = node.get("attrs")
    if node_type in TITLE_NODES and attrs and attrs.get("title"):
        attrs["title"] = space_text(attrs["title"])

    return node


def space_tree(tokens: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Apply space_node to every token of a mistune AST, depth-first"""
    for token in tokens:
        space_node(token)
        children = token.get("children")
        if children:
            space_tree(children)
    return tokens


def parse_markdown(text: str) -> List[Dict[str, Any]]:
    """Parse markdown into a mistune AST with spacing applied"""
    return space_tree(_parse(text))


def render_markdown(text: str) -> str:
    """Render markdown to HTML after applying spacing to the parsed tree"""
    return _html(parse_markdown(text), BlockState())
