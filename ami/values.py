"""
This module defines the value-types that the evaluator operates in terms of.
Numbers play themselves (as Python floats), but functions need more help.

A user-defined function is data: a name, the parameter names, and a body expression.
Operators applied to a function build a new function around the old body,
so these objects never change once made.
"""
import math
from typing import Callable, Sequence, Union
from . import syntax

class Function:
	""" The run-time manifestation of a user-defined function. """
	def __init__(self, name: str, params: Sequence[str], body: syntax.Node):
		self.name, self.params, self.body = name, tuple(params), body
	
	def compose(self, body: syntax.Node) -> "Function":
		""" Same name, same parameters, different body. """
		return Function(self.name, self.params, body)
	
	def __eq__(self, other):
		return isinstance(other, Function) and (self.name, self.params, self.body) == (other.name, other.params, other.body)
	
	def __hash__(self): return hash((self.name, self.params, self.body))
	
	def __str__(self): return "%s(%s) = %s" % (self.name, ', '.join(self.params), self.body)
	def __repr__(self): return "<Function %s>" % self

class NativeFunction:
	""" All parameters to native builtins are strict. Also a kind of value, like a user function. """
	def __init__(self, name: str, fn: Callable[[list], "VALUE"]):
		self.name = name
		self._fn = fn
	
	def apply(self, args: list) -> "VALUE":
		return self._fn(args)
	
	def __str__(self): return "<builtin %s>" % self.name
	__repr__ = __str__

VALUE = Union[float, Function, NativeFunction]

def kind_of(value: VALUE) -> str:
	if isinstance(value, float): return "number"
	if isinstance(value, Function): return "function"
	if isinstance(value, NativeFunction): return "builtin"
	raise TypeError(type(value))

def render(value: VALUE) -> str:
	""" Integral numbers print without a fractional part. """
	if not isinstance(value, float): return str(value)
	if math.isnan(value): return "NaN"
	if math.isinf(value): return "inf" if value > 0 else "-inf"
	if value.is_integer():
		return "-0" if math.copysign(1.0, value) < 0 and value == 0 else "%d" % value
	return repr(value)
