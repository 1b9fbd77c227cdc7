"""
One shape of failure for every stage of the pipeline.
The scanner, the parser, and the evaluator all raise some flavor of AmiError,
and whatever prints errors only ever needs the message, the reason, and the span.
"""
from boozetools.parsing.interface import ParseError as _BoozeParseError
from .location import Span

class AmiError(Exception):
	message: str
	reason: str
	span: Span
	
	def __init__(self, message: str, reason: str, span: Span):
		assert isinstance(span, Span), type(span)
		super().__init__(message, reason, span)
		self.message, self.reason, self.span = message, reason, span
	
	def __str__(self):
		return "%s: %s (at %s)" % (self.message, self.reason, self.span)

class LexError(AmiError):
	""" The scanner found a character it cannot use. """

class ParseError(AmiError, _BoozeParseError):
	""" The tokens do not make a sentence. """

class EvalError(AmiError):
	""" Evaluation went off the rails. """

class BadArguments(Exception):
	"""
	Native builtins raise this with a reason.
	The evaluator turns it into an EvalError at the site of the call.
	"""
	def __init__(self, reason: str):
		super().__init__(reason)
		self.reason = reason
