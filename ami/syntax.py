"""
The set of parse-nodes.
The parser calls these constructors as it recognizes each phrase.
Every node knows the span of text it came from, and nodes never change once built,
so the evaluator may freely embed one tree inside another.

Equality is structural: same class, same fields, same spans.
The str() of any tree is text that scans and parses back into an equivalent tree.
"""
import enum
from typing import Sequence
from .location import Span

class UnaryOp(enum.Enum):
	IDENTITY = "+"
	NEGATE = "-"
	ABSOLUTE = "|"
	FLOOR = "⌊"
	CEILING = "⌈"
	ROUND = "⌊⌉"
	SQRT = "√"
	CBRT = "∛"
	FOURTH_ROOT = "∜"
	DEGREES = "°"
	FACTORIAL = "!"

	def render(self, operand: str) -> str:
		return _UNARY_FORMAT[self] % operand

_UNARY_FORMAT = {
	UnaryOp.IDENTITY: "+(%s)",
	UnaryOp.NEGATE: "-(%s)",
	UnaryOp.ABSOLUTE: "|%s|",
	UnaryOp.FLOOR: "⌊%s⌋",
	UnaryOp.CEILING: "⌈%s⌉",
	UnaryOp.ROUND: "⌊%s⌉",
	UnaryOp.SQRT: "√(%s)",
	UnaryOp.CBRT: "∛(%s)",
	UnaryOp.FOURTH_ROOT: "∜(%s)",
	UnaryOp.DEGREES: "(%s)°",
	UnaryOp.FACTORIAL: "(%s)!",
}

class BinaryOp(enum.Enum):
	ADD = "+"
	SUBTRACT = "-"
	MULTIPLY = "*"
	DIVIDE = "/"
	MODULO = "%"
	POWER = "^"

	@property
	def symbol(self) -> str: return self.value


class Node:
	""" Base of the expression tree. Subclasses list their fields in _fields. """
	_fields: tuple[str, ...] = ()
	span: Span

	def _key(self):
		return (type(self), self.span) + tuple(getattr(self, f) for f in self._fields)

	def __eq__(self, other):
		return isinstance(other, Node) and self._key() == other._key()

	def __hash__(self): return hash(self._key())

	def __repr__(self):
		inside = ', '.join(repr(getattr(self, f)) for f in self._fields)
		return "<%s %s @%s>" % (type(self).__name__, inside, self.span)

class Number(Node):
	_fields = ("text",)
	def __init__(self, text: str, span: Span):
		self.text, self.span = text, span
	def __str__(self): return self.text

class Identifier(Node):
	_fields = ("name",)
	def __init__(self, name: str, span: Span):
		self.name, self.span = name, span
	def __str__(self): return self.name

class Assignment(Node):
	_fields = ("name", "expr")
	def __init__(self, name: str, expr: Node, span: Span):
		self.name, self.expr, self.span = name, expr, span
	def __str__(self): return "%s = %s" % (self.name, self.expr)

class Unary(Node):
	_fields = ("op", "expr")
	def __init__(self, op: UnaryOp, expr: Node, span: Span):
		self.op, self.expr, self.span = op, expr, span
	def __str__(self): return self.op.render(_operand(self.expr))

class Binary(Node):
	_fields = ("lhs", "op", "rhs")
	def __init__(self, lhs: Node, op: BinaryOp, rhs: Node, span: Span):
		self.lhs, self.op, self.rhs, self.span = lhs, op, rhs, span
	def __str__(self): return "(%s %s %s)" % (_operand(self.lhs), self.op.symbol, _operand(self.rhs))

class FunctionDefinition(Node):
	_fields = ("name", "params", "body")
	def __init__(self, name: str, params: Sequence[str], body: Node, span: Span):
		self.name, self.params, self.body, self.span = name, tuple(params), body, span
	def __str__(self): return "%s(%s) = %s" % (self.name, ', '.join(self.params), self.body)

class Call(Node):
	_fields = ("name", "args")
	def __init__(self, name: str, args: Sequence[Node], span: Span):
		self.name, self.args, self.span = name, tuple(args), span
	def __str__(self): return "%s(%s)" % (self.name, ', '.join(map(str, self.args)))

class Block(Node):
	_fields = ("statements",)
	def __init__(self, statements: Sequence[Node], span: Span):
		self.statements, self.span = tuple(statements), span
	def __str__(self): return '\n'.join(map(str, self.statements))

class End(Node):
	""" What the parser finds where it expected an expression but the input ran out. """
	def __init__(self, span: Span):
		self.span = span
	def __str__(self): return ""

def _operand(node: Node) -> str:
	""" An operand cut off by the end of input shows as zero, which is also what it evaluates to. """
	return "0" if isinstance(node, End) else str(node)
