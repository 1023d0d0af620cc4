"""Whitespace trimming driven by ``{%-`` and ``-%}`` markers."""

from __future__ import annotations

import dataclasses
from typing import Any, Optional

from stencilkit.ast import (
    BlockNode,
    Break,
    Comment,
    Continue,
    Extends,
    FilterSectionNode,
    ForloopNode,
    If,
    IfNode,
    ImportMacro,
    Include,
    MacroDefinitionNode,
    Raw,
    SetNode,
    Text,
    VariableBlock,
    WS,
)

_SINGLE_TAGS = (VariableBlock, ImportMacro, Extends, Include, SetNode, Break, Comment, Continue)

_BODY_ATTRIBUTES = {
    ForloopNode: "forloop",
    MacroDefinitionNode: "definition",
    FilterSectionNode: "section",
    BlockNode: "block",
}


def _trim_right_previous(nodes: list[Any]) -> None:
    """Right-trim the last node if it is text, dropping it if it becomes empty."""
    if not nodes or not isinstance(nodes[-1], Text):
        return
    last = nodes.pop()
    trimmed = last.text.rstrip()
    if trimmed:
        nodes.append(Text(trimmed))


def remove_whitespace(nodes: list[Any], body_ws: Optional[WS] = None) -> list[Any]:
    """Return ``nodes`` with whitespace removed as the tags' markers ask.

    Text left empty is dropped. ``body_ws`` applies to a nested body: its
    ``left`` trims the start of the first text, its ``right`` the end of the last.
    """
    res: list[Any] = []
    previous_was_text = False
    trim_left_next = body_ws.left if body_ws is not None else False

    for node in nodes:
        if isinstance(node, Text):
            previous_was_text = True
            if not trim_left_next:
                res.append(node)
                continue
            trim_left_next = False
            trimmed = node.text.lstrip()
            if trimmed:
                res.append(Text(trimmed))
            continue

        if isinstance(node, _SINGLE_TAGS):
            if previous_was_text and node.ws.left:
                _trim_right_previous(res)
            trim_left_next = node.ws.right

        elif isinstance(node, Raw):
            start_ws, end_ws = node.start_ws, node.end_ws
            if previous_was_text and start_ws.left:
                _trim_right_previous(res)
            previous_was_text = False
            trim_left_next = end_ws.right
            if start_ws.right or end_ws.left:
                if start_ws.right and end_ws.left:
                    text = node.text.strip()
                elif start_ws.right:
                    text = node.text.lstrip()
                else:
                    text = node.text.rstrip()
                res.append(dataclasses.replace(node, text=text))
                continue

        elif type(node) in _BODY_ATTRIBUTES:
            start_ws, end_ws = node.start_ws, node.end_ws
            if previous_was_text and start_ws.left:
                _trim_right_previous(res)
            previous_was_text = False
            trim_left_next = end_ws.right
            attribute = _BODY_ATTRIBUTES[type(node)]
            inner = getattr(node, attribute)
            cleaned = dataclasses.replace(
                inner,
                body=remove_whitespace(inner.body, WS(left=start_ws.right, right=end_ws.left)),
            )
            res.append(dataclasses.replace(node, **{attribute: cleaned}))
            continue

        elif isinstance(node, IfNode):
            end_ws = node.end_ws
            trim_left_next = end_ws.right
            new_conditions: list[tuple[WS, Any, list[Any]]] = []

            for cond_ws, expr, body in node.cond.conditions:
                if cond_ws.left:
                    if not new_conditions and previous_was_text:
                        _trim_right_previous(res)
                    elif new_conditions:
                        _trim_right_previous(new_conditions[-1][2])
                new_body = remove_whitespace(body, WS(left=cond_ws.right, right=False))
                new_conditions.append((cond_ws, expr, new_body))

            previous_was_text = False

            if node.cond.otherwise is not None:
                else_ws, else_body = node.cond.otherwise
                if else_ws.left and new_conditions:
                    _trim_right_previous(new_conditions[-1][2])
                new_else = remove_whitespace(else_body, WS(left=else_ws.right, right=False))
                if end_ws.left:
                    _trim_right_previous(new_else)
                res.append(IfNode(If(new_conditions, (else_ws, new_else)), end_ws))
                continue

            if end_ws.left and new_conditions:
                _trim_right_previous(new_conditions[-1][2])
            res.append(IfNode(If(new_conditions, None), end_ws))
            continue

        previous_was_text = False
        res.append(node)

    if body_ws is not None and body_ws.right:
        _trim_right_previous(res)

    return res