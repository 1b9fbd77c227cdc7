"""
Build the primitive namespace.
Also, the numeric meaning of every operator in the syntax.

Arithmetic follows IEEE-754 all the way down: nothing here raises
on division by zero, overflow, or a root of a negative number.
Python's math module prefers to raise in those cases, so a few
operations need wrapping.
"""
import math
from .syntax import UnaryOp, BinaryOp
from .values import NativeFunction, VALUE
from .environment import Environment
from .errors import BadArguments

INF = math.inf
NAN = math.nan

def _integral(fn):
	""" floor and friends return ints and choke on infinities; give back floats instead. """
	def op(x: float) -> float:
		return float(fn(x)) if math.isfinite(x) else x
	op.__name__ = fn.__name__
	return op

floor = _integral(math.floor)
ceil = _integral(math.ceil)
trunc = _integral(math.trunc)

def round_half_away(x: float) -> float:
	if not math.isfinite(x): return x
	return math.copysign(math.floor(abs(x) + 0.5), x)

def fract(x: float) -> float:
	return x - trunc(x) if math.isfinite(x) else NAN

def sqrt(x: float) -> float:
	return math.sqrt(x) if x >= 0 else NAN

def cbrt(x: float) -> float:
	return math.cbrt(x)

def fourth_root(x: float) -> float:
	return sqrt(sqrt(x))

def ln(x: float) -> float:
	if x > 0: return math.log(x)
	if x == 0: return -INF
	return NAN

def _circular(fn):
	def op(x: float) -> float:
		return fn(x) if math.isfinite(x) else NAN
	op.__name__ = fn.__name__
	return op

sin = _circular(math.sin)
cos = _circular(math.cos)
tan = _circular(math.tan)

def factorial(x: float) -> float:
	"""
	The product of 1..x as floats, where x is truncated toward zero.
	Anything below one gives the empty product.
	"""
	if math.isnan(x): return NAN
	product = 1.0
	n = 2.0
	while n <= x and product != INF:
		product *= n
		n += 1.0
	return product

def divide(a: float, b: float) -> float:
	if b: return a / b
	if a == 0 or math.isnan(a): return NAN
	return math.copysign(INF, a) * math.copysign(1.0, b)

def modulo(a: float, b: float) -> float:
	""" Like C's fmod: the result takes the sign of the dividend. """
	if b == 0 or math.isinf(a) or math.isnan(b): return NAN
	return math.fmod(a, b)

def power(a: float, b: float) -> float:
	try: return math.pow(a, b)
	except OverflowError:
		negative = a < 0 and b.is_integer() and b % 2 == 1
		return -INF if negative else INF
	except ValueError:
		if a == 0 and b < 0:
			odd = b.is_integer() and b % 2 == 1
			return math.copysign(INF, a) if odd else INF
		return NAN

def minimum(a: float, b: float) -> float:
	if math.isnan(a): return b
	if math.isnan(b): return a
	return min(a, b)

def maximum(a: float, b: float) -> float:
	if math.isnan(a): return b
	if math.isnan(b): return a
	return max(a, b)

def gcd(a: float, b: float) -> float:
	a, b = abs(a), abs(b)
	if not (math.isfinite(a) and math.isfinite(b)): return NAN
	while b:
		a, b = b, math.fmod(a, b)
	return a

def lcm(a: float, b: float) -> float:
	divisor = gcd(a, b)
	if divisor == 0: return 0.0
	return abs(a * b) / divisor

def clamp(x: float, low: float, high: float) -> float:
	if not low <= high: raise BadArguments("expected min <= max")
	if math.isnan(x): return x
	return min(max(x, low), high)

UNARY = {
	UnaryOp.IDENTITY: lambda x: x,
	UnaryOp.NEGATE: lambda x: -x,
	UnaryOp.ABSOLUTE: abs,
	UnaryOp.FLOOR: floor,
	UnaryOp.CEILING: ceil,
	UnaryOp.ROUND: round_half_away,
	UnaryOp.SQRT: sqrt,
	UnaryOp.CBRT: cbrt,
	UnaryOp.FOURTH_ROOT: fourth_root,
	UnaryOp.DEGREES: math.radians,
	UnaryOp.FACTORIAL: factorial,
}

BINARY = {
	BinaryOp.ADD: lambda a, b: a + b,
	BinaryOp.SUBTRACT: lambda a, b: a - b,
	BinaryOp.MULTIPLY: lambda a, b: a * b,
	BinaryOp.DIVIDE: divide,
	BinaryOp.MODULO: modulo,
	BinaryOp.POWER: power,
}

###############################################################################

root_bindings: dict[str, VALUE] = {}

def _native(name: str, fn, arity: int):
	plural = '' if arity == 1 else 's'
	complaint = "expected %d number%s" % (arity, plural)
	def checked(args: list) -> float:
		if len(args) != arity or not all(isinstance(a, float) for a in args):
			raise BadArguments(complaint)
		return float(fn(*args))
	root_bindings[name] = NativeFunction(name, checked)

for _name, _fn in [
	("abs", abs), ("floor", floor), ("ceil", ceil), ("round", round_half_away),
	("trunc", trunc), ("fract", fract), ("sqrt", sqrt), ("cbrt", cbrt),
	("ln", ln), ("sin", sin), ("cos", cos), ("tan", tan),
]:
	_native(_name, _fn, 1)

for _name, _fn in [("gcd", gcd), ("lcm", lcm), ("min", minimum), ("max", maximum)]:
	_native(_name, _fn, 2)

_native("clamp", clamp, 3)

GOLDEN_RATIO = (1.0 + math.sqrt(5.0)) / 2.0

root_bindings.update({
	"π": math.pi,
	"τ": math.tau,
	"e": math.e,
	"φ": GOLDEN_RATIO,
	"ϕ": GOLDEN_RATIO,
	"∞": INF,
})

def root_environment() -> Environment:
	""" A fresh environment holding nothing but the builtins. """
	return Environment(root_bindings)
