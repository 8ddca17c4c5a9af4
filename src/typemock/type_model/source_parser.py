"""Declaration source loading service."""

from __future__ import annotations

import logging
from bisect import bisect_left
from pathlib import Path

from lark import Lark, Token
from lark.exceptions import UnexpectedInput

from .declaration_models import (
    InterfaceDeclaration,
    NamedDeclaration,
    PrimitiveType,
    PropertySignature,
    RawType,
    SourceModel,
    TypeAliasDeclaration,
    TypeNode,
)
from .declaration_transformer import (
    DeclarationTransformer,
    decode_string_literal,
    normalize_source_text,
)

_LOGGER = logging.getLogger(__name__)

_SOURCE_TOKENS = Lark.open("source_tokens.lark", rel_to=__file__, parser="lalr", lexer="basic")
_DECLARED_TYPES = Lark.open(
    "declared_types.lark",
    rel_to=__file__,
    parser="earley",
    lexer="basic",
    start=["member", "type"],
    propagate_positions=True,
    maybe_placeholders=True,
)

_OPENERS = frozenset("([{")
_CLOSERS = frozenset(")]}")
_TYPE_OPENERS = _OPENERS | {"<"}
_TYPE_CLOSERS = _CLOSERS | {">"}
_NAME_KINDS = frozenset({"NAME", "STRING", "NUMBER"})
# A line break ends a member or type alias unless one side still expects more type text.
_CONTINUES_AFTER = frozenset(
    {
        "|", "&", ":", "?", "=>", ".", ",", "=", "(", "[", "{", "<",
        "extends", "keyof", "typeof", "readonly", "unique", "infer",
        "is", "asserts", "new", "abstract", "import",
    }
)
_CONTINUES_BEFORE = frozenset(
    {"|", "&", ".", "?", ":", "=>", ",", ";", "=", ")", "]", "}", ">", "extends", "is"}
)
_STATEMENT_KEYWORDS = frozenset(
    {
        "abstract",
        "async",
        "class",
        "const",
        "declare",
        "enum",
        "export",
        "function",
        "import",
        "interface",
        "let",
        "module",
        "namespace",
        "type",
        "var",
    }
)


class SourceLoadError(Exception):
    """Raised when a declaration source cannot be read or parsed."""


def load_source_model(source_path: Path | str) -> SourceModel:
    """Read one declaration source file and parse it into a type model."""
    path = Path(source_path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SourceLoadError(f"Source file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceLoadError(f"Failed to read source file {path}: {exc}") from exc
    _LOGGER.debug("Loaded %d characters from %s", len(text), path)
    return parse_source_text(text, path)


def parse_source_text(text: str, source_path: Path | str = "<memory>") -> SourceModel:
    """Parse declaration source text into a type model."""
    path = Path(source_path)
    declarations = _SourceScanner(text, path).declarations()
    _LOGGER.debug("Parsed %d top-level declarations from %s", len(declarations), path)
    return SourceModel(path=path, declarations=declarations)


def jsdoc_comment_text(raw_comment: str) -> str:
    """Return the description text of one `/** ... */` block.

    Leading `*` gutters are dropped and the description stops at the first
    block tag line (`@param`, `@example`, ...).
    """
    body = raw_comment[3:-2]
    lines: list[str] = []
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("*"):
            stripped = stripped[1:].strip()
        if stripped.startswith("@"):
            break
        lines.append(stripped)
    return "\n".join(lines).strip()


def join_docs(docs: tuple[str, ...]) -> str:
    return "\n".join(docs).strip()


class _SourceScanner:
    """Walks the token stream of one file and parses its top-level declarations.

    Statements other than interfaces and type aliases are skipped by bracket
    depth. Each interface member and alias target is handed to the declared-type
    grammar on its own, so a member the grammar cannot read is kept as raw text
    instead of failing the whole file.
    """

    def __init__(self, text: str, path: Path) -> None:
        self._text = text
        self._path = path
        self._tokens: list[Token] = []
        self._line_breaks: list[bool] = []
        self._doc_comments: list[Token] = []
        self._lex()
        self._doc_starts = [comment.start_pos for comment in self._doc_comments]
        self._index_by_offset = {token.start_pos: index for index, token in enumerate(self._tokens)}
        self._position = 0

    def declarations(self) -> tuple[NamedDeclaration, ...]:
        found: list[NamedDeclaration] = []
        while self._position < len(self._tokens):
            declaration = self._try_declaration()
            if declaration is None:
                self._skip_statement()
            else:
                found.append(declaration)
        return tuple(found)

    def _lex(self) -> None:
        try:
            lexed = list(_SOURCE_TOKENS.lex(self._text))
        except UnexpectedInput as exc:
            raise self._error_at(exc.line, exc.column, "Unexpected character.") from exc
        previous_end: int | None = None
        for token in lexed:
            if token.type == "UNCLOSED_COMMENT":
                raise self._error(token, "Unterminated comment.")
            if token.type == "DOC_COMMENT":
                self._doc_comments.append(token)
                continue
            if token.type == "COMMENT":
                continue
            gap = self._text[previous_end : token.start_pos] if previous_end is not None else "\n"
            self._tokens.append(token)
            self._line_breaks.append("\n" in gap)
            previous_end = token.end_pos

    # -- statements ---------------------------------------------------------

    def _try_declaration(self) -> NamedDeclaration | None:
        start = self._position
        index = start
        exported = False
        if self._is_word(index, "export"):
            exported = True
            index += 1
            if self._is_word(index, "default"):
                index += 1
        if self._is_word(index, "declare"):
            index += 1
        if not self._is_kind(index + 1, "NAME"):
            return None
        if self._is_word(index, "interface"):
            return self._interface(start, index + 1, exported)
        if self._is_word(index, "type") and self._value(index + 2) in ("=", "<"):
            return self._type_alias(start, index + 1, exported)
        return None

    def _interface(self, start: int, name_index: int, exported: bool) -> InterfaceDeclaration:
        body_open = self._find_interface_body(name_index + 1)
        body_close = self._matching_close(body_open)
        members = tuple(
            member
            for member in (
                self._member(run_start, run_end)
                for run_start, run_end in self._member_runs(body_open + 1, body_close)
            )
            if member is not None
        )
        self._position = body_close + 1
        return InterfaceDeclaration(
            name=self._tokens[name_index].value,
            members=members,
            docs=self._leading_docs(start),
            exported=exported,
        )

    def _type_alias(self, start: int, name_index: int, exported: bool) -> TypeAliasDeclaration:
        index = name_index + 1
        if self._value(index) == "<":
            index = self._matching_angle(index) + 1
        if self._value(index) != "=":
            raise self._error(self._token_at(index), "Expected '=' after the type alias name.")
        type_start = index + 1
        type_end = self._type_end(type_start)
        if type_end == type_start:
            raise self._error(self._token_at(type_end), "Expected a type.")
        aliased = self._parse_type(type_start, type_end)
        self._position = type_end + 1 if self._value(type_end) == ";" else type_end
        return TypeAliasDeclaration(
            name=self._tokens[name_index].value,
            type=aliased,
            docs=self._leading_docs(start),
            exported=exported,
        )

    def _skip_statement(self) -> None:
        depth = 0
        first = True
        while self._position < len(self._tokens):
            token = self._tokens[self._position]
            if (
                not first
                and depth == 0
                and self._line_breaks[self._position]
                and token.type == "NAME"
                and token.value in _STATEMENT_KEYWORDS
            ):
                return
            first = False
            self._position += 1
            if token.type != "PUNCT":
                continue
            if token.value in _OPENERS:
                depth += 1
            elif token.value in _CLOSERS:
                depth -= 1
                if depth < 0:
                    raise self._error(token, f"Unexpected '{token.value}'.")
                if depth == 0 and token.value == "}":
                    return
            elif token.value == ";" and depth == 0:
                return
        if depth:
            raise self._error_at_end("Unexpected end of file; unbalanced brackets.")

    # -- members ------------------------------------------------------------

    def _member_runs(self, first: int, stop: int):
        """Yield `(start, end)` token ranges of the members between two braces."""
        depth = 0
        run_start = first
        for index in range(first, stop):
            token = self._tokens[index]
            if depth == 0 and index > run_start and self._ends_line(index):
                yield run_start, index
                run_start = index
            if token.type != "PUNCT":
                continue
            if token.value in _TYPE_OPENERS:
                depth += 1
            elif token.value in _TYPE_CLOSERS:
                depth = max(depth - 1, 0)
            elif depth == 0 and token.value in (";", ","):
                if index > run_start:
                    yield run_start, index
                run_start = index + 1
        if stop > run_start:
            yield run_start, stop

    def _member(self, start: int, end: int) -> PropertySignature | None:
        self._reject_stray_quotes(start, end)
        source, offset = self._slice(start, end)
        try:
            tree = _DECLARED_TYPES.parse(source, start="member")
        except UnexpectedInput:
            _LOGGER.debug(
                "Member at %s:%d is outside the declared-type grammar",
                self._path,
                self._tokens[start].line,
            )
            return self._recover_member(start, end)
        return DeclarationTransformer(source, offset, self._docs_at).transform(tree)

    def _recover_member(self, start: int, end: int) -> PropertySignature | None:
        index = start
        readonly = False
        if self._is_word(index, "readonly") and index + 1 < end and self._is_name(index + 1):
            readonly = True
            index += 1
        if not self._is_name(index):
            # index, call and construct signatures never become properties
            return None
        name_token = self._tokens[index]
        index += 1
        optional = index < end and self._value(index) == "?"
        if optional:
            index += 1

        member_type: TypeNode
        if index == end:
            member_type = PrimitiveType("any")
        elif self._value(index) == ":":
            if index + 1 == end:
                found = self._value(end)
                raise self._error(self._token_at(end), f"Expected a type but found {found!r}.")
            member_type = self._parse_type(index + 1, end)
        elif self._value(index) in ("(", "<"):
            member_type = RawType(text=normalize_source_text(self._slice(index, end)[0]))
        else:
            unexpected = self._value(index)
            raise self._error(self._tokens[index], f"Unexpected {unexpected!r} in type members.")

        name = name_token.value
        if name_token.type == "STRING":
            name = decode_string_literal(name)
        return PropertySignature(
            name=name,
            type=member_type,
            optional=optional,
            readonly=readonly,
            docs=self._leading_docs(start),
        )

    # -- types --------------------------------------------------------------

    def _parse_type(self, start: int, end: int) -> TypeNode:
        self._reject_stray_quotes(start, end)
        source, offset = self._slice(start, end)
        try:
            tree = _DECLARED_TYPES.parse(source, start="type")
        except UnexpectedInput:
            _LOGGER.debug(
                "Type at %s:%d kept as written", self._path, self._tokens[start].line
            )
            return RawType(text=normalize_source_text(source))
        return DeclarationTransformer(source, offset, self._docs_at).transform(tree)

    def _type_end(self, start: int) -> int:
        depth = 0
        for index in range(start, len(self._tokens)):
            token = self._tokens[index]
            if depth == 0 and index > start and self._ends_line(index):
                return index
            if token.type != "PUNCT":
                continue
            if token.value in _TYPE_OPENERS:
                depth += 1
            elif token.value in _TYPE_CLOSERS:
                if depth == 0:
                    return index
                depth -= 1
            elif token.value == ";" and depth == 0:
                return index
        return len(self._tokens)

    # -- brackets -----------------------------------------------------------

    def _find_interface_body(self, index: int) -> int:
        depth = 0
        for position in range(index, len(self._tokens)):
            token = self._tokens[position]
            if token.type != "PUNCT":
                continue
            if token.value == "{" and depth == 0:
                return position
            if token.value in _TYPE_OPENERS:
                depth += 1
            elif token.value in _TYPE_CLOSERS:
                depth -= 1
        raise self._error_at_end("Unexpected end of file; expected an interface body.")

    def _matching_close(self, open_index: int) -> int:
        depth = 0
        for index in range(open_index, len(self._tokens)):
            token = self._tokens[index]
            if token.type != "PUNCT":
                continue
            if token.value in _OPENERS:
                depth += 1
            elif token.value in _CLOSERS:
                depth -= 1
                if depth == 0:
                    return index
        raise self._error_at_end("Unexpected end of file; unbalanced brackets.")

    def _matching_angle(self, open_index: int) -> int:
        depth = 0
        for index in range(open_index, len(self._tokens)):
            value = self._value(index)
            if value == "<":
                depth += 1
            elif value == ">":
                depth -= 1
                if depth == 0:
                    return index
        raise self._error_at_end("Unexpected end of file; unbalanced '<'.")

    # -- documentation ------------------------------------------------------

    def _leading_docs(self, index: int) -> str:
        """Join the doc comments between token `index` and the token before it."""
        start = self._tokens[index - 1].end_pos if index else 0
        end = self._tokens[index].start_pos
        blocks: list[str] = []
        for comment in self._doc_comments[bisect_left(self._doc_starts, start) :]:
            if comment.start_pos >= end:
                break
            blocks.append(jsdoc_comment_text(comment.value))
        return join_docs(tuple(blocks))

    def _docs_at(self, offset: int) -> str:
        index = self._index_by_offset.get(offset)
        return "" if index is None else self._leading_docs(index)

    # -- token helpers ------------------------------------------------------

    def _ends_line(self, index: int) -> bool:
        return (
            self._line_breaks[index]
            and self._tokens[index - 1].value not in _CONTINUES_AFTER
            and self._tokens[index].value not in _CONTINUES_BEFORE
        )

    def _slice(self, start: int, end: int) -> tuple[str, int]:
        offset = self._tokens[start].start_pos
        return self._text[offset : self._tokens[end - 1].end_pos], offset

    def _reject_stray_quotes(self, start: int, end: int) -> None:
        for token in self._tokens[start:end]:
            if token.type == "STRAY_QUOTE":
                raise self._error(token, "Unterminated string literal.")

    def _value(self, index: int) -> str:
        return self._tokens[index].value if index < len(self._tokens) else ""

    def _is_word(self, index: int, word: str) -> bool:
        return self._is_kind(index, "NAME") and self._tokens[index].value == word

    def _is_kind(self, index: int, kind: str) -> bool:
        return index < len(self._tokens) and self._tokens[index].type == kind

    def _is_name(self, index: int) -> bool:
        return index < len(self._tokens) and self._tokens[index].type in _NAME_KINDS

    def _token_at(self, index: int) -> Token | None:
        return self._tokens[index] if index < len(self._tokens) else None

    def _error(self, token: Token | None, message: str) -> SourceLoadError:
        if token is None:
            return self._error_at_end(message)
        return self._error_at(token.line, token.column, message)

    def _error_at_end(self, message: str) -> SourceLoadError:
        line = self._text.count("\n") + 1
        column = len(self._text) - (self._text.rfind("\n") + 1) + 1
        return self._error_at(line, column, message)

    def _error_at(self, line: int, column: int, message: str) -> SourceLoadError:
        return SourceLoadError(f"{self._path}:{line}:{column}: {message}")
