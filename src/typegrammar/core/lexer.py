"""
Lexer/Tokenizer for schema declaration source.

Converts TypeScript-flavoured declaration text (interfaces and enums) into a
stream of tokens with source location tracking. Whitespace and comments
(``//`` and ``/* */``) are dropped.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import ParseError, make_parse_error


class TokenType(Enum):
    """Token types in schema source."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Declaration keywords
    INTERFACE = "interface"
    ENUM = "enum"
    EXPORT = "export"
    DECLARE = "declare"
    DEFAULT = "default"
    EXTENDS = "extends"
    READONLY = "readonly"

    # Declarations that are recognised but not compiled
    TYPE = "type"
    CLASS = "class"
    ABSTRACT = "abstract"
    FUNCTION = "function"
    CONST = "const"
    LET = "let"
    VAR = "var"
    NAMESPACE = "namespace"
    MODULE = "module"
    IMPORT = "import"

    # Punctuation
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    LPAREN = "("
    RPAREN = ")"
    LANGLE = "<"
    RANGLE = ">"
    COLON = ":"
    SEMICOLON = ";"
    COMMA = ","
    PIPE = "|"
    AMPERSAND = "&"
    EQUALS = "="
    QUESTION = "?"
    DOT = "."
    MINUS = "-"

    # Any other single character (only meaningful inside skipped declarations)
    SYMBOL = "SYMBOL"

    # Special
    EOF = "EOF"


KEYWORDS = {
    "interface",
    "enum",
    "export",
    "declare",
    "default",
    "extends",
    "readonly",
    "type",
    "class",
    "abstract",
    "function",
    "const",
    "let",
    "var",
    "namespace",
    "module",
    "import",
}

PUNCTUATION = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "<": TokenType.LANGLE,
    ">": TokenType.RANGLE,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "|": TokenType.PIPE,
    "&": TokenType.AMPERSAND,
    "=": TokenType.EQUALS,
    "?": TokenType.QUESTION,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
}

SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

HEX_DIGITS = set("0123456789abcdefABCDEF")


@dataclass
class Token:
    """
    A single token in schema source.

    Attributes:
        type: Type of token
        value: String value of the token (unescaped for strings)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for schema declaration source.

    Converts source text into a stream of tokens.
    """

    def __init__(self, text: str, file: Path):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source file path (for error reporting)
        """
        self.text = text
        self.file = file
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def error(self, message: str, line: int, column: int) -> ParseError:
        return make_parse_error(message, self.file, line, column, self.text)

    def skip_whitespace_and_comments(self) -> None:
        """Skip whitespace, line comments and block comments."""
        while True:
            ch = self.current_char()
            if ch is not None and ch.isspace():
                self.advance()
            elif ch == "/" and self.peek_char() == "/":
                while self.current_char() not in (None, "\n"):
                    self.advance()
            elif ch == "/" and self.peek_char() == "*":
                start_line, start_col = self.line, self.column
                self.advance()
                self.advance()
                while not (self.current_char() == "*" and self.peek_char() == "/"):
                    if self.current_char() is None:
                        raise self.error("Unterminated block comment", start_line, start_col)
                    self.advance()
                self.advance()
                self.advance()
            else:
                return

    def read_string(self) -> str:
        """Read a quoted string (single, double or backtick quotes)."""
        start_line = self.line
        start_col = self.column
        quote = self.current_char()
        self.advance()  # skip opening quote

        chars = []
        while True:
            current = self.current_char()
            if current is None or current == quote:
                break
            if current == "\n" and quote != "`":
                break

            if current == "\\":
                escape_line, escape_col = self.line, self.column
                self.advance()
                escape_char = self.current_char()
                if escape_char in SIMPLE_ESCAPES:
                    chars.append(SIMPLE_ESCAPES[escape_char])
                elif escape_char in ("x", "u"):
                    chars.append(self.read_code_point(escape_line, escape_col))
                    continue
                elif escape_char == "\n":
                    pass  # line continuation
                elif escape_char is not None:
                    chars.append(escape_char)
                self.advance()
            else:
                chars.append(current)
                self.advance()

        if self.current_char() != quote:
            raise self.error("Unterminated string literal", start_line, start_col)

        self.advance()  # skip closing quote
        value = "".join(chars)
        if any("\ud800" <= ch <= "\udfff" for ch in value):
            # surrogate pairs such as \uD83D\uDE00 join into one character
            try:
                value = value.encode("utf-16", "surrogatepass").decode("utf-16")
            except UnicodeDecodeError:
                raise self.error(
                    "Unpaired surrogate in string literal", start_line, start_col
                ) from None
        return value

    def read_code_point(self, line: int, column: int) -> str:
        """
        Decode a ``\\xHH``, ``\\uHHHH`` or ``\\u{H...}`` escape.

        The cursor sits on the ``x`` or ``u``; it is left after the escape.
        """
        width = 2 if self.current_char() == "x" else 4
        self.advance()
        braced = width == 4 and self.current_char() == "{"
        if braced:
            self.advance()

        digits = []
        while braced or len(digits) < width:
            ch = self.current_char()
            if braced and ch == "}":
                self.advance()
                break
            if ch is None or ch not in HEX_DIGITS:
                raise self.error("Invalid escape sequence", line, column)
            digits.append(ch)
            self.advance()

        code_point = int("".join(digits), 16) if digits else -1
        if not 0 <= code_point <= 0x10FFFF:
            raise self.error("Invalid escape sequence", line, column)
        return chr(code_point)

    def read_number(self) -> str:
        """Read an integer or decimal number."""
        chars = []
        current = self.current_char()
        while current and (current.isalnum() or current in "._"):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        chars = []
        current = self.current_char()
        while current and (current.isalnum() or current in "_$"):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with EOF

        Raises:
            ParseError: If a string or comment is unterminated
        """
        while True:
            self.skip_whitespace_and_comments()
            ch = self.current_char()
            if ch is None:
                break

            token_line = self.line
            token_col = self.column

            if ch in ('"', "'", "`"):
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING, value, token_line, token_col))

            elif ch.isdigit():
                value = self.read_number()
                self.tokens.append(Token(TokenType.NUMBER, value, token_line, token_col))

            elif ch.isalpha() or ch in "_$":
                value = self.read_identifier()
                token_type = TokenType(value) if value in KEYWORDS else TokenType.IDENTIFIER
                self.tokens.append(Token(token_type, value, token_line, token_col))

            elif ch in PUNCTUATION:
                self.advance()
                self.tokens.append(Token(PUNCTUATION[ch], ch, token_line, token_col))

            else:
                self.advance()
                self.tokens.append(Token(TokenType.SYMBOL, ch, token_line, token_col))

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column))
        return self.tokens


def tokenize(text: str, file: Path) -> list[Token]:
    """
    Convenience function to tokenize schema source.

    Args:
        text: Source text
        file: Source file path

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file)
    return lexer.tokenize()
