import unittest

from boozetools.parsing.interface import ParseError as BoozeParseError
from ami.front_end import parse_text, Parser
from ami.scanner import scan_text
from ami.location import Span
from ami.errors import ParseError
from ami import syntax
from ami.syntax import BinaryOp, UnaryOp

def shape(text):
	""" The fully-parenthesized display shows exactly how the parser grouped things. """
	return str(parse_text(text))

class ShapeTests(unittest.TestCase):
	""" Grouping, associativity, and the various special notations. """
	
	def expect(self, cases):
		for text, expected in cases:
			with self.subTest(text):
				self.assertEqual(expected, shape(text))
	
	def test_additive_chains_recurse_on_the_right(self):
		self.expect([
			("10 - 3 - 2", "(10 - (3 - 2))"),
			("1 + 2 - 3", "(1 + (2 - 3))"),
		])
	
	def test_precedence(self):
		self.expect([
			("1 + 2 * 3", "(1 + (2 * 3))"),
			("1 * 2 + 3", "((1 * 2) + 3)"),
			("10 / 2 / 5", "(10 / (2 / 5))"),
			("7 mod 2 % 3", "(7 % (2 % 3))"),
			("2 × 3 ÷ 4 · 5", "(2 * (3 / (4 * 5)))"),
		])
	
	def test_power_is_right_associative_and_takes_signed_exponents(self):
		self.expect([
			("2^3^2", "(2 ^ (3 ^ 2))"),
			("2^-1", "(2 ^ -(1))"),
			("-2^2", "-((2 ^ 2))"),
		])
	
	def test_implicit_multiplication(self):
		self.expect([
			("2x", "(2 * x)"),
			("2(3+4)", "(2 * (3 + 4))"),
			("2x^2", "(2 * (x ^ 2))"),
			("3√x", "(3 * √(x))"),
			("2 ⌊x⌋", "(2 * ⌊x⌋)"),
			("2xy", "(2 * xy)"),
		])
	
	def test_numbers_that_stand_alone(self):
		self.expect([
			("2 + x", "(2 + x)"),
			("2³", "(2 ^ 3)"),
			("2!", "(2)!"),
			("|2|", "|2|"),
		])
	
	def test_superscript_exponents(self):
		self.expect([
			("x²", "(x ^ 2)"),
			("x⁻¹", "(x ^ -(1))"),
			("2x²", "(2 * (x ^ 2))"),
		])
	
	def test_prefix_and_postfix(self):
		self.expect([
			("√4!", "√((4)!)"),
			("√∛x", "√(∛(x))"),
			("∜16", "∜(16)"),
			("30°", "(30)°"),
			("+x", "+(x)"),
			("--x", "-(-(x))"),
		])
	
	def test_brackets(self):
		self.expect([
			("|-5|", "|-(5)|"),
			("⌊2.7⌋", "⌊2.7⌋"),
			("⌈2.3⌉", "⌈2.3⌉"),
			("⌊2.5⌉", "⌊2.5⌉"),
			("⌊-3⌈", "|-(3)|"),
			("{1 + 2} * 3", "((1 + 2) * 3)"),
			("(1 + 2) * 3", "((1 + 2) * 3)"),
		])
	
	def test_floor_opener_closed_by_ceiling_opener_is_absolute_value(self):
		tree = parse_text("⌊x⌈").statements[0]
		self.assertIsInstance(tree, syntax.Unary)
		self.assertIs(UnaryOp.ABSOLUTE, tree.op)
	
	def test_functions(self):
		self.expect([
			("f(x, y) = x + y", "f(x, y) = (x + y)"),
			("f(1, 2)", "f(1, 2)"),
			("f()", "f()"),
			("f(x) = g(x) = x", "f(x) = g(x) = x"),
		])
	
	def test_definition_node(self):
		tree = parse_text("area(w, h) = w * h").statements
		self.assertEqual(1, len(tree))
		dfn = tree[0]
		self.assertIsInstance(dfn, syntax.FunctionDefinition)
		self.assertEqual("area", dfn.name)
		self.assertEqual(("w", "h"), dfn.params)
		self.assertIsInstance(dfn.body, syntax.Binary)
	
	def test_assignment(self):
		self.expect([
			("x = 3", "x = 3"),
			("x = y = 3", "x = y = 3"),
			("x = 2x", "x = (2 * x)"),
		])
	
	def test_statements(self):
		block = parse_text("\na\n\nb\n")
		self.assertIsInstance(block, syntax.Block)
		self.assertEqual(["a", "b"], [s.name for s in block.statements])
	
	def test_empty_text_is_one_end_marker(self):
		block = parse_text("")
		self.assertEqual(1, len(block.statements))
		self.assertIsInstance(block.statements[0], syntax.End)
		self.assertEqual("", str(block))
	
	def test_dangling_operator_meets_the_end(self):
		tree = parse_text("1 +").statements[0]
		self.assertIsInstance(tree, syntax.Binary)
		self.assertIsInstance(tree.rhs, syntax.End)
	
	def test_long_chains_fold_without_deep_recursion(self):
		for glyph in "+*":
			with self.subTest(glyph):
				text = glyph.join(["1"] * 2000)
				tree = parse_text(text).statements[0]
				links = 0
				while isinstance(tree, syntax.Binary):
					self.assertEqual(len(text), tree.span.stop)
					tree = tree.rhs
					links += 1
				self.assertEqual(1999, links)
				self.assertEqual(Span(len(text) - 1, len(text)), tree.span)
	
	def test_implicit_multiplication_by_pipes_and_ceilings(self):
		self.expect([
			("2|x|", "(2 * |x|)"),
			("2⌈x⌉", "(2 * ⌈x⌉)"),
			("⌊2⌈", "|2|"),
			("|(2|x|)|", "|(2 * |x|)|"),
			("⌈1 + 2|x|⌉", "⌈(1 + (2 * |x|))⌉"),
		])

class SpanTests(unittest.TestCase):
	
	def test_spans_cover_the_whole_phrase(self):
		tree = parse_text("1 + 23").statements[0]
		self.assertEqual(Span(0, 6), tree.span)
		self.assertEqual(Span(0, 1), tree.lhs.span)
		self.assertEqual(Span(4, 6), tree.rhs.span)
	
	def test_call_span(self):
		tree = parse_text("x = f(1, 2)").statements[0]
		self.assertEqual(Span(0, 11), tree.span)
		self.assertEqual(Span(4, 11), tree.expr.span)
	
	def test_structural_equality(self):
		self.assertEqual(parse_text("1 + 2"), parse_text("1 + 2"))
		self.assertNotEqual(parse_text("1+2"), parse_text("1 + 2"))
		self.assertNotEqual(parse_text("1 + 2"), parse_text("1 - 2"))
		self.assertEqual(syntax.End(Span(3, 3)), syntax.End(Span(3, 3)))
	
	def test_parser_over_a_token_list(self):
		block = Parser(scan_text("6 × 7")).parse()
		tree = block.statements[0]
		self.assertIs(BinaryOp.MULTIPLY, tree.op)

class ErrorTests(unittest.TestCase):
	
	def fail_with(self, text) -> ParseError:
		with self.assertRaises(ParseError) as cm:
			parse_text(text)
		return cm.exception
	
	def test_unclosed_parenthesis(self):
		ex = self.fail_with("(1 + 2")
		self.assertEqual("unexpected end of input", ex.message)
		self.assertEqual("expected ')'", ex.reason)
		self.assertEqual(Span(0, 6), ex.span)
	
	def test_unmatched_bracket(self):
		ex = self.fail_with("⌊1 + 2")
		self.assertIn("unmatched", ex.message)
		self.assertIn("'⌋'", ex.reason)
	
	def test_parameters_must_be_names(self):
		ex = self.fail_with("f(1) = 2")
		self.assertEqual("expected parameter name", ex.reason)
		self.assertEqual(Span(2, 3), ex.span)
	
	def test_two_numbers_in_a_row(self):
		ex = self.fail_with("1 2")
		self.assertEqual("expected newline", ex.reason)
		self.assertEqual(Span(2, 3), ex.span)
	
	def test_nothing_to_work_with(self):
		for text in ["*", ")", "1 + )", "x = ,"]:
			with self.subTest(text):
				ex = self.fail_with(text)
				self.assertEqual("expected number, name or bracket", ex.reason)
	
	def test_bad_exponent(self):
		ex = self.fail_with("x³⁺")
		self.assertIn("exponent", ex.message)
	
	def test_deep_nesting_is_a_parse_error(self):
		ex = self.fail_with("(" * 2000 + "1" + ")" * 2000)
		self.assertEqual("expression nests too deeply", ex.message)
		self.assertEqual("maximum recursion depth exceeded", ex.reason)
	
	def test_it_is_also_a_boozetools_parse_error(self):
		self.assertIsInstance(self.fail_with("("), BoozeParseError)

if __name__ == '__main__':
	unittest.main()
