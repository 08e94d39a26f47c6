"""Lexical analysis for the Monkey language. Converts source text into a lazy sequence of Tokens.

The lexer never fails: characters it does not recognize become ILLEGAL tokens and are left for the parser to
report. String literals keep backslash escapes exactly as written (a backslash and the character after it are
copied into the literal), so `"a\\tb"` lexes to the five characters `a\\tb`.
"""

from string import ascii_letters, digits

from monkey.syntax.token import Token, TokenType, lookup_ident


class Lexer:
    """Produces Tokens one at a time from a fixed source string. Restart by constructing a new Lexer."""
    NUL = "\0"  # sentinel past the end of input
    WHITESPACE = " \t\n\r"
    LETTERS = ascii_letters + "_"

    SINGLE = {
        "=": TokenType.ASSIGN,
        "+": TokenType.PLUS,
        "-": TokenType.MINUS,
        "!": TokenType.BANG,
        "*": TokenType.ASTERISK,
        "/": TokenType.SLASH,
        "<": TokenType.LT,
        ">": TokenType.GT,
        ",": TokenType.COMMA,
        ";": TokenType.SEMICOLON,
        ":": TokenType.COLON,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
        "[": TokenType.LBRACKET,
        "]": TokenType.RBRACKET,
    }
    DOUBLE = {
        "==": TokenType.EQ,
        "!=": TokenType.NOT_EQ,
    }

    def __init__(self, source):
        self.source = source
        self.position = 0       # index of self.char
        self.read_position = 0  # index of the next character to read
        self.char = Lexer.NUL

        self.read_char()

    def read_char(self):
        """Advances one character."""
        if self.read_position >= len(self.source):
            self.char = Lexer.NUL
        else:
            self.char = self.source[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def peek_char(self):
        """Character after self.char, without advancing."""
        if self.read_position >= len(self.source):
            return Lexer.NUL
        return self.source[self.read_position]

    def skip_whitespace(self):
        while self.char != Lexer.NUL and self.char in Lexer.WHITESPACE:
            self.read_char()

    def next_token(self):
        """Returns the next Token. Once the source is exhausted, every call returns an EOF token."""
        self.skip_whitespace()

        if self.char == Lexer.NUL:
            return Token(TokenType.EOF, "")

        pair = self.char + self.peek_char()
        if pair in Lexer.DOUBLE:
            self.read_char()
            self.read_char()
            return Token(Lexer.DOUBLE[pair], pair)

        if self.char in Lexer.SINGLE:
            token = Token(Lexer.SINGLE[self.char], self.char)
            self.read_char()
            return token

        if self.char == '"':
            return Token(TokenType.STRING, self.read_string())

        if self.char in Lexer.LETTERS:
            ident = self.read_while(Lexer.LETTERS)
            return Token(lookup_ident(ident), ident)

        if self.char in digits:
            return Token(TokenType.INT, self.read_while(digits))

        token = Token(TokenType.ILLEGAL, self.char)
        self.read_char()
        return token

    def read_while(self, chars):
        """Reads the maximal run of characters in chars starting at self.char."""
        start = self.position
        while self.char != Lexer.NUL and self.char in chars:
            self.read_char()
        return self.source[start:self.position]

    def read_string(self):
        """Reads a string literal starting at its opening quote. Stops at the closing quote or end of input."""
        self.read_char()  # opening "
        start = self.position

        while self.char not in ('"', Lexer.NUL):
            if self.char == "\\" and self.peek_char() != Lexer.NUL:
                self.read_char()  # keep the escaped character as-is
            self.read_char()

        literal = self.source[start:self.position]
        self.read_char()  # closing "
        return literal

    def __iter__(self):
        """Yields every remaining Token, ending with (and including) EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return
