"""
Best-effort Dart pretty-printer.

Generated code is one long line. This tokenizes it, checks that brackets
balance and re-indents it the way `dart format` lays out widget trees: a
bracket group is split one element per line when it ends in a trailing comma,
holds statements or doesn't fit in the line, and stays inline otherwise.
"""

from dataclasses import dataclass, field
from typing import List, Union

WIDTH = 80
INDENT = 2

OPENERS = {'(': ')', '[': ']', '{': '}'}
CLOSERS = {')', ']', '}'}


class DartFormatError(ValueError):
    """The source could not be formatted (unbalanced brackets, unterminated string)."""


@dataclass
class Token:
    text: str
    space_before: bool = False

    @property
    def is_comment(self) -> bool:
        return self.text.startswith('//')


@dataclass
class Group:
    open: str
    items: List[Union[Token, 'Group']] = field(default_factory=list)
    space_before: bool = False

    @property
    def close(self) -> str:
        return OPENERS[self.open]


Item = Union[Token, Group]


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

def tokenize(source: str) -> List[Token]:
    tokens: List[Token] = []
    i, n = 0, len(source)
    space = False
    while i < n:
        c = source[i]
        if c.isspace():
            space = True
            i += 1
            continue
        start = i
        if c in ('"', "'"):
            i = _scan_string(source, i)
        elif source.startswith('//', i):
            end = source.find('\n', i)
            i = n if end == -1 else end
        elif source.startswith('/*', i):
            end = source.find('*/', i + 2)
            if end == -1:
                raise DartFormatError("Unterminated block comment")
            i = end + 2
        elif c in OPENERS or c in CLOSERS or c in ',;':
            i += 1
        else:
            while i < n and not source[i].isspace() and source[i] not in '()[]{},;"\'' \
                    and not source.startswith('//', i) and not source.startswith('/*', i):
                i += 1
        tokens.append(Token(source[start:i], space))
        space = False
    return tokens


def _scan_string(source: str, i: int) -> int:
    """Index just past the string literal starting at `i`."""
    quote = source[i]
    if source.startswith(quote * 3, i):
        end = source.find(quote * 3, i + 3)
        if end == -1:
            raise DartFormatError("Unterminated string")
        return end + 3
    i += 1
    while i < len(source):
        c = source[i]
        if c == '\\':
            i += 2
            continue
        if c == quote:
            return i + 1
        if c == '\n':
            break
        i += 1
    raise DartFormatError("Unterminated string")


def parse_groups(tokens: List[Token]) -> List[Item]:
    """Nest tokens into bracket groups. Raises DartFormatError when brackets don't balance."""
    stack: List[Group] = [Group('{')]
    for token in tokens:
        if token.text in OPENERS:
            stack.append(Group(token.text, space_before=token.space_before))
        elif token.text in CLOSERS:
            if len(stack) == 1 or stack[-1].close != token.text:
                raise DartFormatError(f"Unexpected '{token.text}'")
            group = stack.pop()
            stack[-1].items.append(group)
        else:
            stack[-1].items.append(token)
    if len(stack) != 1:
        raise DartFormatError(f"Unclosed '{stack[-1].open}'")
    return stack[0].items


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

def _is_token(item: Item, text: str) -> bool:
    return isinstance(item, Token) and item.text == text


def _has_statements(group: Group) -> bool:
    return group.open == '{' and any(_is_token(item, ';') for item in group.items)


def _has_comment(items: List[Item]) -> bool:
    return any(isinstance(item, Token) and item.is_comment for item in items)


def _must_split(group: Group) -> bool:
    """A group splits when it ends in a trailing comma, holds statements, or holds a group that splits."""
    if not group.items:
        return False
    if (_is_token(group.items[-1], ',') or _has_statements(group)
            or _has_comment(group.items) or _ends_in_block(group)):
        return True
    return any(isinstance(item, Group) and _must_split(item) for item in group.items)


def _ends_in_block(group: Group) -> bool:
    # a `{}` that holds a single nested declaration block, like a class body with one method
    return group.open == '{' and isinstance(group.items[-1], Group) and group.items[-1].open == '{' \
        and len(group.items) > 1 and not any(_is_token(item, ',') for item in group.items)


def _needs_space(prev: Item, item: Item) -> bool:
    if isinstance(prev, Token) and prev.text in (',', ';'):
        return not (isinstance(item, Token) and item.text in CLOSERS)
    if isinstance(item, Token) and item.text in (',', ';'):
        return False
    return item.space_before


def _flat(items: List[Item]) -> str:
    result = ''
    prev = None
    for item in items:
        if prev is not None and _needs_space(prev, item):
            result += ' '
        result += _flat_group(item) if isinstance(item, Group) else item.text
        prev = item
    return result


def _flat_group(group: Group) -> str:
    return group.open + _flat(group.items) + group.close


def _split_elements(items: List[Item]) -> List[List[Item]]:
    """Split on top level commas. The comma stays at the end of its element."""
    elements, current = [], []
    for item in items:
        current.append(item)
        if _is_token(item, ','):
            elements.append(current)
            current = []
    if current:
        elements.append(current)
    return elements


def _split_statements(items: List[Item]) -> List[List[Item]]:
    """Split a block body on `;` and on declaration blocks."""
    statements, current = [], []
    for i, item in enumerate(items):
        current.append(item)
        nxt = items[i + 1] if i + 1 < len(items) else None
        if _is_token(item, ';') or (isinstance(item, Token) and item.is_comment):
            statements.append(current)
            current = []
        elif isinstance(item, Group) and item.open == '{' and _is_block_end(nxt):
            statements.append(current)
            current = []
    if current:
        statements.append(current)
    return statements


def _is_block_end(nxt) -> bool:
    if nxt is None:
        return True
    if isinstance(nxt, Group):
        return False
    return nxt.text not in (',', ';', '.', ')', ']', '..') and not nxt.text.startswith('.')


class _Writer:

    def render(self, items: List[Item], indent: int, column: int) -> str:
        """Render a run of items that starts at `column` on a line indented by `indent`."""
        result = ''
        prev = None
        for i, item in enumerate(items):
            if prev is not None and _needs_space(prev, item):
                result += ' '
            if isinstance(prev, Token) and _is_annotation(prev, item):
                result = result.rstrip(' ') + '\n' + ' ' * indent
            col = _column(result, column)
            if isinstance(item, Group):
                result += self.render_group(item, indent, col)
            else:
                result += item.text
                if item.is_comment and i < len(items) - 1:
                    result += '\n' + ' ' * indent
            prev = item
        return result

    def render_group(self, group: Group, indent: int, column: int) -> str:
        flat = _flat_group(group)
        if not _must_split(group) and column + len(flat) <= WIDTH:
            return flat

        if group.open == '(' and len(group.items) == 1 and isinstance(group.items[0], Group):
            # hug a lone bracket argument: `({...})`, `([...])`
            return f"({self.render_group(group.items[0], indent, column + 1)})"

        inner = indent + INDENT
        pad = ' ' * inner
        if group.open == '{' and not any(_is_token(item, ',') for item in group.items):
            lines = [self.render(stmt, inner, inner) for stmt in _split_statements(group.items)]
        else:
            lines = [self.render(element, inner, inner) for element in _split_elements(group.items)]
        body = ''.join(f"{pad}{line}\n" for line in lines)
        return f"{group.open}\n{body}{' ' * indent}{group.close}"


def _is_annotation(prev: Token, item: Item) -> bool:
    return prev.text.startswith('@') and not isinstance(item, Group)


def _column(rendered: str, start: int) -> int:
    newline = rendered.rfind('\n')
    if newline == -1:
        return start + len(rendered)
    return len(rendered) - newline - 1


def format_dart(source: str, nest_in_function: bool = False) -> str:
    """
    Pretty-print Dart source.

    With `nest_in_function`, `source` is a statement (a copied expression
    followed by `;`) and is formatted as the body of a function.
    """
    if nest_in_function:
        source = f"void x() {{ {source} }}"
    items = parse_groups(tokenize(source))
    writer = _Writer()

    statements = _split_statements(items)
    blocks = []
    for stmt in statements:
        text = writer.render(stmt, 0, 0)
        declaration = isinstance(stmt[-1], Group)
        if blocks and (declaration or blocks[-1][1]):
            blocks.append(('', False))
        blocks.append((text, declaration))
    result = '\n'.join(text for text, _ in blocks) + '\n'

    if nest_in_function:
        lines = result.rstrip('\n').split('\n')[1:-1]
        result = '\n'.join(line[INDENT:] for line in lines) + '\n'
    return result
