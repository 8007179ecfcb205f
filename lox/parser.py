"""Recursive-descent parser for Lox.

Each grammar rule is one method; precedence is encoded by call order, from
the lowest-precedence rule (assignment) down to primary expressions::

    program    -> declaration* EOF
    declaration-> "var" varDecl | statement
    varDecl    -> IDENTIFIER ("=" expression)? ";"
    statement  -> "print" expression ";" | exprStmt
    exprStmt   -> expression ";"
    expression -> assignment
    assignment -> IDENTIFIER "=" assignment | equality
    equality   -> comparison (("!=" | "==") comparison)*
    comparison -> term ((">" | ">=" | "<" | "<=") term)*
    term       -> factor (("-" | "+") factor)*
    factor     -> unary (("/" | "*") unary)*
    unary      -> ("!" | "-") unary | primary
    primary    -> NUMBER | STRING | "true" | "false" | "nil"
                | "(" expression ")" | IDENTIFIER

When a declaration fails to parse the error is recorded and the parser
synchronizes on the next statement boundary, so a single pass reports one
error per broken statement.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .ast import (
    Assign, Binary, Expr, Expression, Grouping, Literal, Print, Stmt, Unary,
    Var, Variable,
)
from .errors import LoxError, ParseError
from .scanner import Scanner, tokenize
from .tokens import Token, TokenType
from .types import NIL, number_from_literal

STATEMENT_STARTS = {
    TokenType.CLASS, TokenType.FUN, TokenType.VAR, TokenType.FOR,
    TokenType.IF, TokenType.WHILE, TokenType.PRINT, TokenType.RETURN,
}

NESTED_TOO_DEEPLY = "Expression nested too deeply."


class Parser:
    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].type != TokenType.EOF:
            line = tokens[-1].line if tokens else 1
            tokens = list(tokens) + [Token(TokenType.EOF, '', None, line)]
        self.tokens = tokens
        self.current = 0
        self.errors: List[ParseError] = []

    @property
    def had_error(self) -> bool:
        return bool(self.errors)

    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    def parse_expression(self) -> Expr:
        """Parse a single expression, raising the first error found."""
        try:
            expr = self.expression()
        except RecursionError:
            raise ParseError(self.peek(), NESTED_TOO_DEEPLY) from None
        if not self.is_at_end():
            self.errors.append(ParseError(self.peek(), "Expect end of expression."))
        if self.errors:
            raise self.errors[0]
        return expr

    # Statements

    def declaration(self) -> Optional[Stmt]:
        try:
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError as error:
            self.errors.append(error)
            self.synchronize()
            return None
        except RecursionError:
            self.errors.append(ParseError(self.peek(), NESTED_TOO_DEEPLY))
            self.synchronize()
            return None

    def var_declaration(self) -> Stmt:
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer: Optional[Expr] = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def statement(self) -> Stmt:
        if self.match(TokenType.PRINT):
            return self.print_statement()
        return self.expression_statement()

    def print_statement(self) -> Stmt:
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def expression_statement(self) -> Stmt:
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    # Expressions

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.equality()
        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            # reported without unwinding: the parser is not confused here
            self.errors.append(ParseError(equals, "Invalid assignment target."))
            return value
        return expr

    def binary(self, operand, *operators: TokenType) -> Expr:
        """Left-associative fold of `operand (operator operand)*`."""
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expr = Binary(expr, operator, right)
        return expr

    def equality(self) -> Expr:
        return self.binary(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self) -> Expr:
        return self.binary(self.term, TokenType.GREATER, TokenType.GREATER_EQUAL,
                           TokenType.LESS, TokenType.LESS_EQUAL)

    def term(self) -> Expr:
        return self.binary(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self) -> Expr:
        return self.binary(self.unary, TokenType.SLASH, TokenType.STAR)

    def unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)
        return self.primary()

    def primary(self) -> Expr:
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(NIL)
        if self.match(TokenType.NUMBER):
            return Literal(number_from_literal(self.previous().literal))
        if self.match(TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        raise ParseError(self.peek(), "Expect expression.")

    # Token helpers

    def synchronize(self):
        self.advance()
        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return
            if self.peek().type in STATEMENT_STARTS:
                return
            self.advance()

    def match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        raise ParseError(self.peek(), message)

    def check(self, token_type: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type == token_type

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]


def parse_program(source: str) -> Tuple[List[Stmt], List[LoxError]]:
    """Scan and parse source, returning the statements and every error.

    Scan errors come first, followed by parse errors. The program should
    only be executed when the error list is empty.
    """
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    parser = Parser(tokens)
    statements = parser.parse()
    errors: List[LoxError] = [*scanner.errors, *parser.errors]
    return statements, errors


def parse_expression(source: str) -> Expr:
    """Parse a single expression from source, raising on any error."""
    return Parser(tokenize(source)).parse_expression()
