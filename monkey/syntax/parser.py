"""Pratt parser for the Monkey language.

Grammar, loosely:

```
<program>    ::= <statement>*
<statement>  ::= "let" <ident> "=" <expr> [";"]
               | "return" [<expr>] [";"]
               | <expr> [";"]
<block>      ::= "{" <statement>* "}"
<expr>       ::= <prefix-op> <expr> | <expr> <infix-op> <expr> | "(" <expr> ")"
               | "if" "(" <expr> ")" <block> ["else" <block>]
               | "fn" "(" [<ident> ("," <ident>)*] ")" <block>
               | <expr> "(" [<expr-list>] ")" | <expr> "[" <expr> "]"
               | "[" [<expr-list>] "]" | "{" [<expr> ":" <expr> ("," <expr> ":" <expr>)*] "}"
               | <ident> | <int> | <string> | "true" | "false"
```

Instead of one function per grammar rule, every token type that can start an expression has a prefix parse
function and every token type that can continue one has an infix parse function. parse_expression keeps folding
infix operators onto the left-hand side while the next operator binds tighter than the current precedence, which
gives left associativity and the precedence table below without further rules.

Syntax errors do not stop parsing: they are collected in Parser.errors, the broken statement is skipped up to the
next ";" and parsing resumes with the statement after it.
"""

from enum import IntEnum

from monkey.syntax import ast
from monkey.syntax.token import TokenType


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # ==
    LESSGREATER = 3  # > or <
    SUM = 4          # +
    PRODUCT = 5      # *
    PREFIX = 6       # -x or !x
    CALL = 7         # f(x)
    INDEX = 8        # a[x]


PRECEDENCES = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
    TokenType.LBRACKET: Precedence.INDEX,
}

INT64_MAX = str(2 ** 63 - 1)  # as digits, so literals are range-checked before int()


class Parser:
    """Builds a Program from the tokens of a Lexer, one token of lookahead at a time."""

    def __init__(self, lexer):
        self.lexer = lexer
        self.errors = []

        self.cur_token = None
        self.peek_token = None

        self.prefix_parse_fns = {
            TokenType.IDENT: self.parse_identifier,
            TokenType.INT: self.parse_integer_literal,
            TokenType.STRING: self.parse_string_literal,
            TokenType.TRUE: self.parse_boolean,
            TokenType.FALSE: self.parse_boolean,
            TokenType.BANG: self.parse_prefix_expression,
            TokenType.MINUS: self.parse_prefix_expression,
            TokenType.LPAREN: self.parse_grouped_expression,
            TokenType.IF: self.parse_if_expression,
            TokenType.FUNCTION: self.parse_function_literal,
            TokenType.LBRACKET: self.parse_array_literal,
            TokenType.LBRACE: self.parse_hash_literal,
        }
        self.infix_parse_fns = {token_type: self.parse_infix_expression for token_type in (
            TokenType.PLUS, TokenType.MINUS, TokenType.ASTERISK, TokenType.SLASH,
            TokenType.EQ, TokenType.NOT_EQ, TokenType.LT, TokenType.GT,
        )}
        self.infix_parse_fns[TokenType.LPAREN] = self.parse_call_expression
        self.infix_parse_fns[TokenType.LBRACKET] = self.parse_index_expression

        # fill cur_token and peek_token
        self.next_token()
        self.next_token()

    # token helpers

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, token_type):
        return self.cur_token.type is token_type

    def peek_token_is(self, token_type):
        return self.peek_token.type is token_type

    def expect_peek(self, token_type):
        """Advances if the peek token has type token_type. Otherwise records an error and returns False."""
        if self.peek_token_is(token_type):
            self.next_token()
            return True
        self.peek_error(token_type)
        return False

    def peek_precedence(self):
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self):
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # errors

    def peek_error(self, token_type):
        self.errors.append(f"expected next token to be {token_type}, got {self.peek_token.type} instead")

    def no_prefix_parse_fn_error(self, token_type):
        self.errors.append(f"No prefix parse function for {token_type} found.")

    def synchronize(self):
        """Skips the rest of a broken statement, stopping on its ";" (or EOF)."""
        while not self.cur_token_is(TokenType.SEMICOLON) and not self.cur_token_is(TokenType.EOF):
            self.next_token()

    # statements

    def parse_program(self):
        statements = []
        while not self.cur_token_is(TokenType.EOF):
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self.next_token()
        return ast.Program(tuple(statements))

    def parse_statement(self):
        """Parses the statement starting at cur_token and leaves cur_token on its last token. Returns None (after
        skipping to the end of the statement) if the statement could not be parsed.
        """
        if self.cur_token_is(TokenType.LET):
            statement = self.parse_let_statement()
        elif self.cur_token_is(TokenType.RETURN):
            statement = self.parse_return_statement()
        else:
            statement = self.parse_expression_statement()

        if statement is None:
            self.synchronize()
        return statement

    def parse_let_statement(self):
        token = self.cur_token

        if not self.expect_peek(TokenType.IDENT):
            return None
        name = ast.Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TokenType.ASSIGN):
            return None
        self.next_token()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ast.LetStatement(token, name, value)

    def parse_return_statement(self):
        token = self.cur_token

        if self.peek_token_is(TokenType.SEMICOLON):  # bare "return;"
            self.next_token()
            return ast.ReturnStatement(token)
        if self.peek_token_is(TokenType.RBRACE) or self.peek_token_is(TokenType.EOF):
            return ast.ReturnStatement(token)
        self.next_token()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ast.ReturnStatement(token, value)

    def parse_expression_statement(self):
        token = self.cur_token

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ast.ExpressionStatement(token, expression)

    def parse_block_statement(self):
        token = self.cur_token
        statements = []

        self.next_token()
        while not self.cur_token_is(TokenType.RBRACE) and not self.cur_token_is(TokenType.EOF):
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self.next_token()

        return ast.BlockStatement(token, tuple(statements))

    # expressions

    def parse_expression(self, precedence):
        """Parses an expression whose operators all bind tighter than precedence. Returns None on a syntax error."""
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None
        left = prefix()

        while left is not None and not self.peek_token_is(TokenType.SEMICOLON) \
                and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self):
        return ast.Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self):
        digits = self.cur_token.literal.lstrip("0") or "0"
        if (len(digits), digits) > (len(INT64_MAX), INT64_MAX):
            self.errors.append(f"could not parse {self.cur_token.literal} as integer")
            return None
        return ast.IntegerLiteral(self.cur_token, int(digits))

    def parse_string_literal(self):
        return ast.StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self):
        return ast.BooleanLiteral(self.cur_token, self.cur_token_is(TokenType.TRUE))

    def parse_prefix_expression(self):
        token = self.cur_token
        self.next_token()

        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return ast.PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left):
        token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()

        right = self.parse_expression(precedence)
        if right is None:
            return None
        return ast.InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self):
        self.next_token()

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None or not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_if_expression(self):
        token = self.cur_token

        if not self.expect_peek(TokenType.LPAREN):
            return None
        self.next_token()

        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None or not self.expect_peek(TokenType.RPAREN):
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            if not self.expect_peek(TokenType.LBRACE):
                return None
            alternative = self.parse_block_statement()

        return ast.IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self):
        token = self.cur_token

        if not self.expect_peek(TokenType.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None or not self.expect_peek(TokenType.LBRACE):
            return None

        return ast.FunctionLiteral(token, parameters, self.parse_block_statement())

    def parse_function_parameters(self):
        """Parses a parenthesized, comma-separated identifier list (cur_token is the opening parenthesis)."""
        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return ()

        parameters = []
        if not self.expect_peek(TokenType.IDENT):
            return None
        parameters.append(ast.Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            parameters.append(ast.Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return tuple(parameters)

    def parse_call_expression(self, function):
        token = self.cur_token

        arguments = self.parse_expression_list(TokenType.RPAREN)
        if arguments is None:
            return None
        return ast.CallExpression(token, function, arguments)

    def parse_array_literal(self):
        token = self.cur_token

        elements = self.parse_expression_list(TokenType.RBRACKET)
        if elements is None:
            return None
        return ast.ArrayLiteral(token, elements)

    def parse_expression_list(self, end):
        """Parses a comma-separated expression list closed by a token of type end (cur_token is the opener)."""
        if self.peek_token_is(end):
            self.next_token()
            return ()

        self.next_token()
        expressions = [self.parse_expression(Precedence.LOWEST)]

        while expressions[-1] is not None and self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            expressions.append(self.parse_expression(Precedence.LOWEST))

        if expressions[-1] is None or not self.expect_peek(end):
            return None
        return tuple(expressions)

    def parse_index_expression(self, left):
        token = self.cur_token
        self.next_token()

        index = self.parse_expression(Precedence.LOWEST)
        if index is None or not self.expect_peek(TokenType.RBRACKET):
            return None
        return ast.IndexExpression(token, left, index)

    def parse_hash_literal(self):
        token = self.cur_token
        pairs = []

        while not self.peek_token_is(TokenType.RBRACE):
            self.next_token()
            key = self.parse_expression(Precedence.LOWEST)
            if key is None or not self.expect_peek(TokenType.COLON):
                return None

            self.next_token()
            value = self.parse_expression(Precedence.LOWEST)
            if value is None:
                return None
            pairs.append((key, value))

            if not self.peek_token_is(TokenType.RBRACE) and not self.expect_peek(TokenType.COMMA):
                return None

        if not self.expect_peek(TokenType.RBRACE):
            return None
        return ast.HashLiteral(token, tuple(pairs))
