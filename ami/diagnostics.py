"""
Everything that talks to a human about what went on: verbose traces of
the pipeline, and errors illustrated against the text they came from.
"""
import sys, random
from pathlib import Path
from typing import Optional, Sequence
from boozetools.support.failureprone import SourceText, illustration
from boozetools.support.foundation import Visitor

from .errors import AmiError
from .location import Span
from .scanner import Token
from . import syntax

def _outburst():
	particle = ["Oh, ", "Well, ", "Hmm. ", "", ""]
	mild = ['Drat', 'Rats', 'Fiddlesticks', 'Bother', 'Good Grief', 'Nuts', 'Oops', 'Whoops']
	return "%s%s!" % (random.choice(particle), random.choice(mild))

class Annotation:
	""" One span of one source text, with a caption to print beneath the underline. """
	def __init__(self, source: SourceText, text: str, span: Span, caption: str = ""):
		self.source = source
		self.start = min(span.start, max(len(text) - 1, 0))
		self.stop = min(self.start + max(span.width(), 0), len(text))
		self.caption = caption

	def illustrate(self):
		row, col = self.source.find_row_col(self.start)
		single_line = self.source.line_of_text(row)
		room = max(1, len(single_line.rstrip("\n")) - col)
		width = max(1, min(self.stop - self.start, room))
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro: str, anns: list[Annotation], path: Optional[Path] = None, footer=()):
		self._intro, self._anns, self._path, self._footer = intro, anns, path, footer
	def as_text(self):
		lines = [self._intro, ""]
		if self._path is not None: lines.append(str(self._path))
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

class Report:
	"""
	Collects issues and prints traces.
	The command-line host makes one of these per run and feeds it whatever goes wrong.
	"""
	_issues: list[Pic]

	def __init__(self, *, verbose: int = 0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)
	def reset(self): self._issues.clear()

	@property
	def issues(self) -> list[Pic]: return self._issues

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def trace_tokens(self, tokens: Sequence[Token]):
		self.info("tokens:", ' '.join(map(str, tokens)))

	def trace_tree(self, tree: syntax.Node):
		if self._verbose:
			self.info("AST:")
			self.info('\n'.join(TreeDumper().visit(tree, 1)))

	def error(self, ex: AmiError, text: str, path: Optional[Path] = None):
		""" Record an issue: the message up top, the reason as caption under the guilty span. """
		source = SourceText(text, filename=str(path)) if path else SourceText(text)
		self._issues.append(Pic(ex.message, [Annotation(source, text, ex.span, ex.reason)], path))

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		if self._issues:
			print("*"*60, file=sys.stderr)
			print(_outburst(), file=sys.stderr)
		for i in self._issues:
			print("  -"*20, file=sys.stderr)
			print(i.as_text(), file=sys.stderr)
		sys.stderr.flush()

class TreeDumper(Visitor):
	""" Indented outline of a tree, one node per line, for verbose mode. """

	@staticmethod
	def _line(depth: int, text: str, node: syntax.Node):
		return "%s%s  @%s" % ("  " * depth, text, node.span)

	def visit_Number(self, node: syntax.Number, depth: int):
		return [self._line(depth, "Number " + node.text, node)]

	def visit_Identifier(self, node: syntax.Identifier, depth: int):
		return [self._line(depth, "Identifier " + node.name, node)]

	def visit_Assignment(self, node: syntax.Assignment, depth: int):
		return [self._line(depth, "Assignment " + node.name, node), *self.visit(node.expr, depth + 1)]

	def visit_Unary(self, node: syntax.Unary, depth: int):
		return [self._line(depth, "Unary " + node.op.name.lower(), node), *self.visit(node.expr, depth + 1)]

	def visit_Binary(self, node: syntax.Binary, depth: int):
		head = self._line(depth, "Binary " + node.op.symbol, node)
		return [head, *self.visit(node.lhs, depth + 1), *self.visit(node.rhs, depth + 1)]

	def visit_FunctionDefinition(self, node: syntax.FunctionDefinition, depth: int):
		head = self._line(depth, "FunctionDefinition %s(%s)" % (node.name, ', '.join(node.params)), node)
		return [head, *self.visit(node.body, depth + 1)]

	def visit_Call(self, node: syntax.Call, depth: int):
		lines = [self._line(depth, "Call " + node.name, node)]
		for arg in node.args: lines.extend(self.visit(arg, depth + 1))
		return lines

	def visit_Block(self, node: syntax.Block, depth: int):
		lines = [self._line(depth, "Block", node)]
		for statement in node.statements: lines.extend(self.visit(statement, depth + 1))
		return lines

	def visit_End(self, node: syntax.End, depth: int):
		return [self._line(depth, "End", node)]
