"""
Points and spans within one piece of source text.
The concept is simple: a span is a half-open pair of offsets into the text,
counted the way Python counts them (code points, not bytes).
"""
from typing import NamedTuple

class Span(NamedTuple):
	""" Aimed at whatever prints error messages """
	start: int
	stop: int
	
	def width(self) -> int: return self.stop - self.start
	def __str__(self): return "%d..%d" % (self.start, self.stop)
