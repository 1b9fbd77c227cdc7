"""
Tree-walking evaluation.

One function per kind of node, gathered into a dispatch table by
their type-annotations. Numbers evaluate eagerly. The interesting
part is what operators do to functions: they never call them.
Instead they build a new function whose body is the old body with
the operator wrapped around it.
"""
from . import syntax, primitive
from .syntax import UnaryOp, BinaryOp
from .environment import Environment
from .errors import EvalError, BadArguments
from .values import Function, NativeFunction, VALUE, kind_of

def evaluate(expr: syntax.Node, env: Environment) -> VALUE:
	assert isinstance(env, Environment), env
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise NotImplementedError(type(expr), expr)
	return fn(expr, env)

def _mismatch(expr: syntax.Node, what: str, *values: VALUE) -> EvalError:
	kinds = " and ".join(kind_of(v) for v in values)
	return EvalError("cannot apply %s to %s" % (what, kinds), "type mismatch", expr.span)

###############################################################################

def _eval_number(expr: syntax.Number, env: Environment):
	try: return float(expr.text)
	except ValueError as ex:
		raise EvalError("cannot parse '%s' as a number" % expr.text, str(ex), expr.span) from None

def _eval_identifier(expr: syntax.Identifier, env: Environment):
	return env.fetch(expr.name)

def _eval_assignment(expr: syntax.Assignment, env: Environment):
	return env.assign(expr.name, evaluate(expr.expr, env))

def _eval_unary(expr: syntax.Unary, env: Environment):
	value = evaluate(expr.expr, env)
	if isinstance(value, float):
		return primitive.UNARY[expr.op](value)
	if isinstance(value, Function):
		if expr.op is UnaryOp.NEGATE:
			minus_one = syntax.Number("-1.0", expr.span)
			return value.compose(syntax.Binary(minus_one, BinaryOp.MULTIPLY, value.body, expr.span))
		return value.compose(syntax.Unary(expr.op, value.body, expr.span))
	raise _mismatch(expr, "'%s'" % expr.op.value, value)

def _eval_binary(expr: syntax.Binary, env: Environment):
	lhs = evaluate(expr.lhs, env)
	rhs = evaluate(expr.rhs, env)
	if isinstance(lhs, float) and isinstance(rhs, float):
		return primitive.BINARY[expr.op](lhs, rhs)
	# Exactly one side a function: keep the other side as unevaluated syntax, in its original position.
	if isinstance(lhs, Function) and isinstance(rhs, float):
		return lhs.compose(syntax.Binary(lhs.body, expr.op, expr.rhs, expr.span))
	if isinstance(lhs, float) and isinstance(rhs, Function):
		return rhs.compose(syntax.Binary(expr.lhs, expr.op, rhs.body, expr.span))
	raise _mismatch(expr, "'%s'" % expr.op.symbol, lhs, rhs)

def _eval_function_definition(expr: syntax.FunctionDefinition, env: Environment):
	return env.assign(expr.name, Function(expr.name, expr.params, expr.body))

def _eval_call(expr: syntax.Call, env: Environment):
	args = [evaluate(a, env) for a in expr.args]
	callee = env.fetch(expr.name)
	if isinstance(callee, Function):
		inner = primitive.root_environment()
		inner.update(zip(callee.params, args))
		return evaluate(callee.body, inner)
	if isinstance(callee, NativeFunction):
		try: return callee.apply(args)
		except BadArguments as ex:
			raise EvalError("bad arguments to `%s`" % expr.name, ex.reason, expr.span) from None
	raise EvalError("`%s` is not a function" % expr.name, "found a %s" % kind_of(callee), expr.span)

def _eval_block(expr: syntax.Block, env: Environment):
	result = 0.0
	for statement in expr.statements:
		result = evaluate(statement, env)
	return result

def _eval_end(expr: syntax.End, env: Environment):
	return 0.0

EVALUATE = {}

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["expr"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v

attach_evaluation_methods(globals())

###############################################################################

class Evaluator:
	"""
	Owns one environment for as long as it lives.
	An interactive host keeps one of these around so assignments persist from line to line.
	"""
	def __init__(self, environment: Environment = None):
		self.environment = environment or primitive.root_environment()

	def run(self, tree: syntax.Node) -> VALUE:
		try: return evaluate(tree, self.environment)
		except RecursionError:
			raise EvalError("evaluation went too deep", "maximum recursion depth exceeded", tree.span) from None
