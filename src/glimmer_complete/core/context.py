from enum import Enum

from glimmer_complete.core.ast_path import AstPath
from glimmer_complete.core.template_ast import (
    BlockStatement,
    MustacheStatement,
    PathExpression,
    StringLiteral,
    SubExpression,
)

LINK_HELPER = "link-to"


class CompletionContext(str, Enum):
    MUSTACHE_INVOCATION_TARGET = "mustache"
    BLOCK_INVOCATION_TARGET = "block"
    SUB_EXPRESSION_TARGET = "sub-expression"
    LINK_TARGET = "link"
    NONE = "none"


def _is_callee_of(path: AstPath, parent_type: type) -> bool:
    node = path.node
    if not isinstance(node, PathExpression):
        return False
    parent = path.parent
    if not isinstance(parent, parent_type):
        return False
    return parent.path is node


def is_mustache_path(path: AstPath) -> bool:
    return _is_callee_of(path, MustacheStatement)


def is_block_path(path: AstPath) -> bool:
    return _is_callee_of(path, BlockStatement)


def is_sub_expression_path(path: AstPath) -> bool:
    return _is_callee_of(path, SubExpression)


def _calls_link_helper(node: MustacheStatement | BlockStatement) -> bool:
    return isinstance(node.path, PathExpression) and node.path.original == LINK_HELPER


def is_link_to_target(path: AstPath) -> bool:
    node = path.node
    if not isinstance(node, StringLiteral):
        return False
    parent = path.parent
    if isinstance(parent, MustacheStatement):
        return len(parent.params) > 1 and parent.params[1] is node and _calls_link_helper(parent)
    if isinstance(parent, BlockStatement):
        return len(parent.params) > 0 and parent.params[0] is node and _calls_link_helper(parent)
    return False


def classify(path: AstPath) -> CompletionContext:
    if is_mustache_path(path):
        return CompletionContext.MUSTACHE_INVOCATION_TARGET
    if is_block_path(path):
        return CompletionContext.BLOCK_INVOCATION_TARGET
    if is_sub_expression_path(path):
        return CompletionContext.SUB_EXPRESSION_TARGET
    if is_link_to_target(path):
        return CompletionContext.LINK_TARGET
    return CompletionContext.NONE
