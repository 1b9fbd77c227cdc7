"""
Recursive descent with precedence climbing.

Each grammar rule is a method. Rules that chain binary operators
collect the chain, then fold it from the right, so `a - b - c`
comes out as `a - (b - c)`.
Every node's span runs from where its rule started through the last
token it consumed.
"""
from typing import Sequence
from .location import Span
from .scanner import Token, TokenType, scan_text
from .errors import ParseError
from . import syntax
from .syntax import UnaryOp, BinaryOp

T = TokenType

ADDITIVE = {
	T.PLUS: BinaryOp.ADD,
	T.MINUS: BinaryOp.SUBTRACT,
}

MULTIPLICATIVE = {
	T.STAR: BinaryOp.MULTIPLY,
	T.DOT: BinaryOp.MULTIPLY,
	T.CROSS: BinaryOp.MULTIPLY,
	T.SLASH: BinaryOp.DIVIDE,
	T.DIVIDE: BinaryOp.DIVIDE,
	T.PERCENT: BinaryOp.MODULO,
	T.MOD: BinaryOp.MODULO,
}

SIGN = {
	T.PLUS: UnaryOp.IDENTITY,
	T.MINUS: UnaryOp.NEGATE,
}

ROOT = {
	T.SQRT: UnaryOp.SQRT,
	T.CBRT: UnaryOp.CBRT,
	T.FOURTH_ROOT: UnaryOp.FOURTH_ROOT,
}

POSTFIX = {
	T.EXCLAMATION: UnaryOp.FACTORIAL,
	T.DEGREE: UnaryOp.DEGREES,
}

# Bracket openers, each with the closers it accepts and what each closer means.
# A floor-opener closed by a ceiling-opener reads as absolute value.
BRACKETS = {
	T.PIPE: {T.PIPE: UnaryOp.ABSOLUTE},
	T.LFLOOR: {T.RFLOOR: UnaryOp.FLOOR, T.RCEIL: UnaryOp.ROUND, T.LCEIL: UnaryOp.ABSOLUTE},
	T.LCEIL: {T.RCEIL: UnaryOp.CEILING},
}

GROUPS = {
	T.LPAREN: T.RPAREN,
	T.LBRACE: T.RBRACE,
}

# After a number, any of these means the number stands alone rather than multiplying what follows.
NOT_IMPLICIT = frozenset([
	T.NUMBER, T.SUPERSCRIPT, T.NEWLINE, T.EOF,
	T.EQUAL, T.COMMA, T.CARET, T.EXCLAMATION, T.DEGREE,
	T.RPAREN, T.RBRACE, T.RFLOOR, T.RCEIL,
	*ADDITIVE, *MULTIPLICATIVE,
])

# These open a bracket after a number, unless they would close the innermost open bracket.
CLOSES_INNERMOST = {
	T.PIPE: T.PIPE,
	T.LCEIL: T.LFLOOR,
}

def _describe(token: Token) -> str:
	if token.kind in (T.NEWLINE, T.EOF, T.SUPERSCRIPT): return token.kind.value
	return "'%s'" % token.text

class Parser:
	""" One parser consumes one token list, exactly once. """
	def __init__(self, tokens: Sequence[Token]):
		assert tokens and tokens[-1].kind is T.EOF, "Token list must end with EOF"
		self._tokens = tokens
		self._index = 0
		self._last_stop = tokens[0].span.start
		self._open = []  # Bracket and group openers not yet closed, innermost last.

	@property
	def token(self) -> Token: return self._tokens[self._index]

	def peek(self) -> Token:
		return self._tokens[min(self._index + 1, len(self._tokens) - 1)]

	def advance(self):
		if self.token.kind is not T.EOF:
			self._last_stop = self.token.span.stop
			self._index += 1

	def span(self, start: int) -> Span:
		""" From where a rule started through the last token it consumed. """
		return Span(start, max(start, self._last_stop))

	def error(self, message: str, reason: str, start: int):
		""" Failures cover the failing construct through the token that broke it. """
		raise ParseError(message, reason, Span(start, max(start, self.token.span.stop)))

	def expect(self, kind: TokenType, start: int):
		if self.token.kind is not kind:
			self.error("unexpected %s" % _describe(self.token), "expected '%s'" % kind.value, start)
		self.advance()

	def skip_newlines(self) -> int:
		count = 0
		while self.token.kind is T.NEWLINE:
			self.advance()
			count += 1
		return count

	def parse(self) -> syntax.Block:
		start = self.token.span.start
		try: return self.statements()
		except RecursionError:
			span = Span(start, max(start, self.token.span.stop))
			raise ParseError("expression nests too deeply", "maximum recursion depth exceeded", span) from None

	def statements(self) -> syntax.Block:
		start = self.token.span.start
		self.skip_newlines()
		statements = [self.statement()]
		while self.skip_newlines():
			statement = self.statement()
			if isinstance(statement, syntax.End): break
			statements.append(statement)
		if self.token.kind is not T.EOF:
			self.error("unexpected %s" % _describe(self.token), "expected newline", self.token.span.start)
		return syntax.Block(statements, self.span(start))

	def statement(self) -> syntax.Node:
		return self.expr()

	def expr(self) -> syntax.Node:
		if self.token.kind is T.IDENTIFIER and self.peek().kind is T.EQUAL:
			start = self.token.span.start
			name = self.token.text
			self.advance()
			self.advance()
			value = self.expr()
			return syntax.Assignment(name, value, self.span(start))
		return self.arith_expr()

	def arith_expr(self) -> syntax.Node:
		starts, operands, ops = [], [], []
		while True:
			starts.append(self.token.span.start)
			operands.append(self.term())
			op = ADDITIVE.get(self.token.kind)
			if op is None: return self.fold_right(starts, operands, ops)
			self.advance()
			ops.append(op)

	def term(self) -> syntax.Node:
		starts, operands, ops = [], [], []
		while True:
			starts.append(self.token.span.start)
			if self.implicit_product():
				operands.append(self.atom())
				ops.append(BinaryOp.MULTIPLY)
				continue
			operands.append(self.factor())
			op = MULTIPLICATIVE.get(self.token.kind)
			if op is None: return self.fold_right(starts, operands, ops)
			self.advance()
			ops.append(op)

	def fold_right(self, starts, operands, ops) -> syntax.Node:
		""" Chain operands so that `a - b - c` means `a - (b - c)`. Each link runs to the end of the chain. """
		result = operands[-1]
		for start, left, op in reversed(list(zip(starts, operands, ops))):
			result = syntax.Binary(left, op, result, self.span(start))
		return result

	def implicit_product(self) -> bool:
		""" Does the number at hand multiply whatever follows it? """
		if self.token.kind is not T.NUMBER: return False
		follow = self.peek().kind
		if follow in CLOSES_INNERMOST:
			return self._open[-1:] != [CLOSES_INNERMOST[follow]]
		return follow not in NOT_IMPLICIT

	def factor(self) -> syntax.Node:
		start = self.token.span.start
		op = SIGN.get(self.token.kind)
		if op is None: return self.power()
		self.advance()
		operand = self.factor()
		return syntax.Unary(op, operand, self.span(start))

	def power(self) -> syntax.Node:
		start = self.token.span.start
		base = self.prefix()
		if self.token.kind is not T.CARET: return base
		self.advance()
		exponent = self.factor()
		return syntax.Binary(base, BinaryOp.POWER, exponent, self.span(start))

	def prefix(self) -> syntax.Node:
		start = self.token.span.start
		op = ROOT.get(self.token.kind)
		if op is None: return self.postfix()
		self.advance()
		operand = self.prefix()
		return syntax.Unary(op, operand, self.span(start))

	def postfix(self) -> syntax.Node:
		start = self.token.span.start
		result = self.call()
		if self.token.kind in POSTFIX:
			op = POSTFIX[self.token.kind]
			self.advance()
			return syntax.Unary(op, result, self.span(start))
		if self.token.kind is T.SUPERSCRIPT:
			exponent = self.superscript(self.token)
			self.advance()
			return syntax.Binary(result, BinaryOp.POWER, exponent, self.span(start))
		return result

	@staticmethod
	def superscript(token: Token) -> syntax.Node:
		inner = Parser(token.nested)
		exponent = inner.factor()
		if inner.token.kind is not T.EOF:
			inner.error("unexpected %s in exponent" % _describe(inner.token), "expected end of exponent", token.span.start)
		return exponent

	def call(self) -> syntax.Node:
		start = self.token.span.start
		callee = self.atom()
		if not (isinstance(callee, syntax.Identifier) and self.token.kind is T.LPAREN): return callee
		args = self.arguments()
		if self.token.kind is not T.EQUAL:
			return syntax.Call(callee.name, args, self.span(start))
		params = []
		for arg in args:
			if not isinstance(arg, syntax.Identifier):
				raise ParseError("invalid function definition", "expected parameter name", arg.span)
			params.append(arg.name)
		self.advance()
		body = self.expr()
		return syntax.FunctionDefinition(callee.name, params, body, self.span(start))

	def arguments(self) -> list[syntax.Node]:
		start = self.token.span.start
		self.expect(T.LPAREN, start)
		self._open.append(T.LPAREN)
		args = []
		if self.token.kind is not T.RPAREN:
			args.append(self.arith_expr())
			while self.token.kind is T.COMMA:
				self.advance()
				args.append(self.arith_expr())
		self._open.pop()
		self.expect(T.RPAREN, start)
		return args

	def atom(self) -> syntax.Node:
		token = self.token
		start = token.span.start
		if token.kind is T.NUMBER:
			self.advance()
			return syntax.Number(token.text, token.span)
		if token.kind is T.IDENTIFIER:
			self.advance()
			return syntax.Identifier(token.text, token.span)
		if token.kind in GROUPS:
			self.advance()
			self._open.append(token.kind)
			inner = self.arith_expr()
			self._open.pop()
			self.expect(GROUPS[token.kind], start)
			return inner
		if token.kind in BRACKETS:
			closers = BRACKETS[token.kind]
			self.advance()
			self._open.append(token.kind)
			inner = self.arith_expr()
			self._open.pop()
			op = closers.get(self.token.kind)
			if op is None:
				expected = " or ".join("'%s'" % k.value for k in closers)
				self.error("unmatched '%s'" % token.text, "expected %s" % expected, start)
			self.advance()
			return syntax.Unary(op, inner, self.span(start))
		if token.kind is T.EOF:
			return syntax.End(token.span)
		self.error("unexpected %s" % _describe(token), "expected number, name or bracket", start)

def parse_text(text: str) -> syntax.Block:
	""" Scan and parse a whole text. Raises LexError or ParseError on failure. """
	return Parser(scan_text(text)).parse()
