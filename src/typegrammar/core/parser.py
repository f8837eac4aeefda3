"""
Recursive descent parser for schema declaration source.

Turns TypeScript-flavoured declarations into a ``SchemaSpec``:

    export enum Color { RED = "red", BLUE = "blue" }

    interface Car {
      make: string;
      colors: string[];
      paint: Color | string;
      owners: Array<Owner>;
    }

Constructs outside the supported model (optional members, inline object
types, literal types, index and method signatures, ``extends`` clauses,
intersections) are reported as ParseError. Other top-level declarations
(``type`` aliases, classes, functions, variables, namespaces, imports) are
skipped and recorded as ``OtherDeclSpec`` so the compiler can name them.
"""

from __future__ import annotations

from pathlib import Path

from . import ir
from .errors import ParseError, make_parse_error
from .lexer import KEYWORDS, Token, TokenType, tokenize

# Declaration keywords that are recognised but never compiled
OTHER_DECLARATIONS = {
    TokenType.TYPE: "type alias",
    TokenType.CLASS: "class",
    TokenType.ABSTRACT: "class",
    TokenType.FUNCTION: "function",
    TokenType.CONST: "variable",
    TokenType.LET: "variable",
    TokenType.VAR: "variable",
    TokenType.NAMESPACE: "namespace",
    TokenType.MODULE: "namespace",
    TokenType.IMPORT: "import",
}

# Declarations whose extent ends with their brace-delimited body
BLOCK_DECLARATIONS = {"class", "function", "namespace"}

DECLARATION_STARTS = {
    TokenType.INTERFACE,
    TokenType.ENUM,
    TokenType.EXPORT,
    TokenType.DECLARE,
    *OTHER_DECLARATIONS,
}

OPENERS = {TokenType.LBRACE, TokenType.LPAREN, TokenType.LBRACKET}
CLOSERS = {TokenType.RBRACE, TokenType.RPAREN, TokenType.RBRACKET}

# Tokens after which a `{` starts an object type rather than a body
TYPE_POSITIONS = {TokenType.COLON, TokenType.PIPE, TokenType.AMPERSAND}


class Parser:
    """
    Parser for schema declaration source.

    Provides token navigation plus one ``parse_*`` method per construct.
    """

    def __init__(self, tokens: list[Token], file: Path, text: str = ""):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer
            file: Source file path (for error reporting)
            text: Source text (quoted in error messages)
        """
        self.tokens = tokens
        self.file = file
        self.text = text
        self.pos = 0

    # -------------------------------------------------------------------------
    # Token navigation
    # -------------------------------------------------------------------------

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    def peek_token(self, offset: int = 1) -> Token:
        """Peek ahead at token."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def error(self, message: str, token: Token | None = None) -> ParseError:
        token = token or self.current_token()
        return make_parse_error(message, self.file, token.line, token.column, self.text)

    def expect(self, token_type: TokenType) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            ParseError: If token doesn't match
        """
        token = self.current_token()
        if token.type != token_type:
            found = token.value or token.type.value
            raise self.error(f"Expected '{token_type.value}', got '{found}'", token)
        return self.advance()

    def expect_name(self) -> Token:
        """
        Expect an identifier, accepting keywords as names.

        Member names such as ``type`` or ``default`` are ordinary property
        names in declaration bodies.
        """
        token = self.current_token()
        if token.type == TokenType.IDENTIFIER or token.type.value in KEYWORDS:
            return self.advance()
        raise self.error(f"Expected a name, got '{token.value or token.type.value}'", token)

    def location(self, token: Token) -> ir.SourceLocation:
        return ir.SourceLocation(file=str(self.file), line=token.line, column=token.column)

    def skip_semicolons(self) -> None:
        while self.match(TokenType.SEMICOLON):
            self.advance()

    # -------------------------------------------------------------------------
    # Top level
    # -------------------------------------------------------------------------

    def parse(self) -> ir.SchemaSpec:
        """
        Parse the entire source.

        Returns:
            SchemaSpec with declarations in source order
        """
        declarations: list[ir.RecordSpec | ir.EnumSpec | ir.OtherDeclSpec] = []

        self.skip_semicolons()
        while not self.match(TokenType.EOF):
            declarations.append(self.parse_declaration())
            self.skip_semicolons()

        return ir.SchemaSpec(declarations=declarations)

    def parse_declaration(self) -> ir.RecordSpec | ir.EnumSpec | ir.OtherDeclSpec:
        """Parse one top-level declaration, including leading modifiers."""
        start = self.current_token()
        while self.match(TokenType.EXPORT, TokenType.DECLARE, TokenType.DEFAULT):
            self.advance()

        if self.match(TokenType.INTERFACE):
            return self.parse_interface(start)

        if self.match(TokenType.ENUM):
            return self.parse_enum(start)

        if self.match(TokenType.CONST) and self.peek_token().type == TokenType.ENUM:
            self.advance()
            return self.parse_enum(start)

        if self.current_token().type in OTHER_DECLARATIONS:
            return self.skip_declaration(start)

        token = self.current_token()
        raise self.error(
            f"Unexpected '{token.value or token.type.value}' - expected a declaration "
            "(interface, enum, type, ...)",
            token,
        )

    # -------------------------------------------------------------------------
    # Interfaces
    # -------------------------------------------------------------------------

    def parse_interface(self, start: Token) -> ir.RecordSpec:
        """
        Parse an interface declaration.

        Grammar:
            INTERFACE NAME type_params? LBRACE member* RBRACE
            member := READONLY? NAME COLON type (SEMICOLON | COMMA)?
        """
        self.expect(TokenType.INTERFACE)
        name = self.expect_name().value
        type_parameters = self.parse_type_parameters()

        if self.match(TokenType.EXTENDS):
            raise self.error(f"{name}: 'extends' clauses are not supported")

        self.expect(TokenType.LBRACE)
        properties: list[ir.PropertySpec] = []
        while not self.match(TokenType.RBRACE):
            if self.match(TokenType.EOF):
                raise self.error(f"Unterminated interface {name}: expected '}}'")
            properties.append(self.parse_property(name))
            while self.match(TokenType.SEMICOLON, TokenType.COMMA):
                self.advance()
        self.expect(TokenType.RBRACE)

        return ir.RecordSpec(
            name=name,
            properties=properties,
            type_parameters=type_parameters,
            location=self.location(start),
        )

    def parse_type_parameters(self) -> list[str]:
        """Parse ``<T, U extends X = Y>`` and return the parameter names."""
        if not self.match(TokenType.LANGLE):
            return []
        self.advance()

        names = [self.expect_name().value]
        depth = 0
        while True:
            token = self.current_token()
            if token.type == TokenType.EOF:
                raise self.error("Unterminated type parameter list")
            if token.type == TokenType.LANGLE:
                depth += 1
            elif token.type == TokenType.RANGLE:
                if depth == 0:
                    self.advance()
                    return names
                depth -= 1
            elif token.type == TokenType.COMMA and depth == 0:
                self.advance()
                names.append(self.expect_name().value)
                continue
            self.advance()

    def parse_property(self, record: str) -> ir.PropertySpec:
        """Parse a single property signature."""
        if self.match(TokenType.READONLY) and self.peek_token().type not in (
            TokenType.COLON,
            TokenType.QUESTION,
        ):
            self.advance()

        if self.match(TokenType.LBRACKET):
            raise self.error(f"{record}: index signatures are not supported")

        name_token = self.current_token()
        if name_token.type == TokenType.STRING:
            self.advance()
        else:
            self.expect_name()
        name = name_token.value

        if self.match(TokenType.QUESTION):
            raise self.error(f"{record}.{name}: optional properties are not supported")
        if self.match(TokenType.LPAREN, TokenType.LANGLE):
            raise self.error(f"{record}.{name}: method signatures are not supported")
        if not self.match(TokenType.COLON):
            raise self.error(f"{record}.{name}: missing type annotation")
        self.advance()

        return ir.PropertySpec(
            name=name,
            type=self.parse_type(f"{record}.{name}"),
            location=self.location(name_token),
        )

    # -------------------------------------------------------------------------
    # Types
    # -------------------------------------------------------------------------

    def parse_type(self, owner: str) -> ir.TypeExpr:
        """
        Parse a property type.

        Grammar:
            type := PIPE? atom (PIPE atom)*
        """
        if self.match(TokenType.PIPE):
            self.advance()
        spellings = [self.parse_type_atom(owner)]
        while self.match(TokenType.PIPE):
            self.advance()
            spellings.append(self.parse_type_atom(owner))
        if self.match(TokenType.AMPERSAND):
            raise self.error(f"{owner}: intersection types are not supported")
        return ir.TypeExpr(spellings=spellings)

    def parse_type_atom(self, owner: str) -> str:
        """
        Parse one type reference and return its normalized spelling.

        Grammar:
            atom := NAME (DOT NAME)* (LANGLE atom_list RANGLE)? (LBRACKET RBRACKET)*
        """
        token = self.current_token()
        if token.type == TokenType.LBRACE:
            raise self.error(f"{owner}: inline object types are not supported", token)
        if token.type in (TokenType.STRING, TokenType.NUMBER, TokenType.MINUS):
            raise self.error(f"{owner}: literal types are not supported", token)
        if token.type == TokenType.LPAREN:
            raise self.error(f"{owner}: parenthesized and function types are not supported", token)

        spelling = self.expect_name().value
        while self.match(TokenType.DOT):
            self.advance()
            spelling += "." + self.expect_name().value

        if self.match(TokenType.LANGLE):
            self.advance()
            arguments = [self.parse_type(owner).text]
            while self.match(TokenType.COMMA):
                self.advance()
                arguments.append(self.parse_type(owner).text)
            self.expect(TokenType.RANGLE)
            spelling += f"<{', '.join(arguments)}>"

        while self.match(TokenType.LBRACKET):
            self.advance()
            self.expect(TokenType.RBRACKET)
            spelling += "[]"

        return spelling

    # -------------------------------------------------------------------------
    # Enums
    # -------------------------------------------------------------------------

    def parse_enum(self, start: Token) -> ir.EnumSpec:
        """
        Parse an enum declaration.

        Grammar:
            ENUM NAME LBRACE (member (COMMA member)* COMMA?)? RBRACE
            member := (NAME | STRING) (EQUALS initializer)?
        """
        self.expect(TokenType.ENUM)
        name = self.expect_name().value
        self.expect(TokenType.LBRACE)

        members: list[ir.EnumMemberSpec] = []
        while not self.match(TokenType.RBRACE):
            if self.match(TokenType.EOF):
                raise self.error(f"Unterminated enum {name}: expected '}}'")

            member_token = self.current_token()
            if member_token.type == TokenType.STRING:
                self.advance()
            else:
                self.expect_name()

            value: str | None = None
            initializer: str | None = None
            if self.match(TokenType.EQUALS):
                self.advance()
                if self.match(TokenType.STRING) and self.peek_token().type in (
                    TokenType.COMMA,
                    TokenType.RBRACE,
                ):
                    value = self.advance().value
                else:
                    initializer = self.read_initializer()

            members.append(
                ir.EnumMemberSpec(name=member_token.value, value=value, initializer=initializer)
            )
            if not self.match(TokenType.RBRACE):
                self.expect(TokenType.COMMA)

        self.expect(TokenType.RBRACE)
        return ir.EnumSpec(name=name, members=members, location=self.location(start))

    def read_initializer(self) -> str:
        """Consume a non-string enum initializer and return its source text."""
        parts: list[str] = []
        depth = 0
        while True:
            token = self.current_token()
            if token.type == TokenType.EOF:
                raise self.error("Unterminated enum member initializer", token)
            if depth == 0 and token.type in (TokenType.COMMA, TokenType.RBRACE):
                break
            if token.type in OPENERS:
                depth += 1
            elif token.type in CLOSERS:
                depth -= 1
            parts.append(token.value)
            self.advance()
        return " ".join(parts)

    # -------------------------------------------------------------------------
    # Unsupported declarations
    # -------------------------------------------------------------------------

    def skip_declaration(self, start: Token) -> ir.OtherDeclSpec:
        """
        Skip a declaration the compiler does not support.

        The declaration ends at a top-level semicolon, at the closing brace of
        a block-bodied declaration, or where the next declaration begins.
        """
        keyword = self.advance()
        kind = OTHER_DECLARATIONS[keyword.type]
        if keyword.type == TokenType.ABSTRACT and self.match(TokenType.CLASS):
            self.advance()

        name = None
        if self.match(TokenType.IDENTIFIER):
            name = self.current_token().value

        depth = 0
        previous: TokenType | None = None
        in_type_literal = False
        while not self.match(TokenType.EOF):
            token = self.current_token()
            if depth == 0 and token.type == TokenType.SEMICOLON:
                self.advance()
                break
            if depth == 0 and token.type in DECLARATION_STARTS and token.line > keyword.line:
                break
            if depth == 0 and token.type == TokenType.LBRACE:
                # `function f(): { y: string } { ... }` - an object type, not the body
                in_type_literal = previous in TYPE_POSITIONS
            if token.type in OPENERS:
                depth += 1
            elif token.type in CLOSERS:
                depth -= 1
            previous = token.type
            self.advance()
            if depth == 0 and token.type == TokenType.RBRACE and kind in BLOCK_DECLARATIONS:
                if in_type_literal:
                    in_type_literal = False
                    continue
                break

        return ir.OtherDeclSpec(declaration_kind=kind, name=name, location=self.location(start))


def parse_schema(text: str, file: Path | None = None) -> ir.SchemaSpec:
    """
    Parse schema source into declarations.

    Args:
        text: Schema source text
        file: Source file path (for error reporting)

    Returns:
        SchemaSpec with declarations in source order

    Raises:
        ParseError: If the source cannot be parsed
    """
    file = file or Path("<schema>")
    parser = Parser(tokenize(text, file), file, text)
    return parser.parse()
