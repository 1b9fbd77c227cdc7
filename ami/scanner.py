"""
Turn text into tokens.

The notation is line-oriented: a newline separates statements, so it
is a token in its own right. Most of the vocabulary is single glyphs,
ASCII or otherwise. A run of superscript characters is an exponent;
it becomes one token carrying its own nested token list, which the
parser later treats as a little sub-expression.
"""
import enum
from typing import NamedTuple, Optional
from .location import Span
from .errors import LexError

class TokenType(enum.Enum):
	NUMBER = "number"
	IDENTIFIER = "name"
	PLUS = "+"
	MINUS = "-"
	STAR = "*"
	CROSS = "×"
	DOT = "·"
	SLASH = "/"
	DIVIDE = "÷"
	PERCENT = "%"
	MOD = "mod"
	CARET = "^"
	EQUAL = "="
	EXCLAMATION = "!"
	DEGREE = "°"
	SQRT = "√"
	CBRT = "∛"
	FOURTH_ROOT = "∜"
	COMMA = ","
	LPAREN = "("
	RPAREN = ")"
	PIPE = "|"
	LFLOOR = "⌊"
	RFLOOR = "⌋"
	LCEIL = "⌈"
	RCEIL = "⌉"
	LBRACE = "{"
	RBRACE = "}"
	SUPERSCRIPT = "superscript"
	NEWLINE = "newline"
	EOF = "end of input"

class Token(NamedTuple):
	kind: TokenType
	text: str
	span: Span
	nested: Optional[tuple["Token", ...]] = None  # Only for superscript blocks.

	def __str__(self):
		if self.kind is TokenType.NEWLINE: return "'\\n'"
		if self.kind is TokenType.EOF: return "<eof>"
		if self.kind is TokenType.SUPERSCRIPT:
			return "⁽%s⁾" % ' '.join(map(str, self.nested[:-1]))
		return self.text

GLYPHS = {
	"+": TokenType.PLUS,
	"-": TokenType.MINUS,
	"−": TokenType.MINUS,
	"*": TokenType.STAR,
	"×": TokenType.CROSS,
	"·": TokenType.DOT,
	"∙": TokenType.DOT,
	"/": TokenType.SLASH,
	"÷": TokenType.DIVIDE,
	"%": TokenType.PERCENT,
	"^": TokenType.CARET,
	"=": TokenType.EQUAL,
	"!": TokenType.EXCLAMATION,
	"°": TokenType.DEGREE,
	"√": TokenType.SQRT,
	"∛": TokenType.CBRT,
	"∜": TokenType.FOURTH_ROOT,
	",": TokenType.COMMA,
	"(": TokenType.LPAREN,
	")": TokenType.RPAREN,
	"|": TokenType.PIPE,
	"⌊": TokenType.LFLOOR,
	"⌋": TokenType.RFLOOR,
	"⌈": TokenType.LCEIL,
	"⌉": TokenType.RCEIL,
	"{": TokenType.LBRACE,
	"}": TokenType.RBRACE,
}

KEYWORDS = {"mod": TokenType.MOD}

SUPERSCRIPTS = dict(zip("⁰¹²³⁴⁵⁶⁷⁸⁹⁺⁻⁼⁽⁾ⁿⁱˣʸᶻ", "0123456789+-=()nixyz"))

DIGITS = frozenset("0123456789")
NUMERIC = DIGITS | {"."}
BLANKS = frozenset(" \t\r")
ASCII_PUNCTUATION = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^`{|}~")

def _is_name_char(ch: str) -> bool:
	if ch in GLYPHS or ch in SUPERSCRIPTS or ch in ASCII_PUNCTUATION: return False
	if ch in BLANKS or ch == "\n": return False
	return ch.isprintable()

class Scanner:
	"""
	One pass over the text, one character at a time.
	The offset lets a nested scan (of a superscript block) report
	spans in terms of the original text.
	"""
	def __init__(self, text: str, offset: int = 0):
		self._text = text
		self._offset = offset
		self._index = 0

	def _current(self) -> str:
		return self._text[self._index] if self._index < len(self._text) else ""

	def _span(self, start: int) -> Span:
		return Span(self._offset + start, self._offset + self._index)

	def scan(self) -> list[Token]:
		tokens = []
		while True:
			token = self.next_token()
			tokens.append(token)
			if token.kind is TokenType.EOF: return tokens

	def next_token(self) -> Token:
		text = self._text
		while True:
			while self._current() in BLANKS: self._index += 1
			if text.startswith("//", self._index):
				while self._current() not in ("\n", ""): self._index += 1
			else: break
		start = self._index
		ch = self._current()
		if not ch:
			return Token(TokenType.EOF, "", self._span(start))
		if ch == "\n":
			self._index += 1
			return Token(TokenType.NEWLINE, ch, self._span(start))
		if ch in NUMERIC:
			return self._number()
		if ch in GLYPHS:
			self._index += 1
			return Token(GLYPHS[ch], ch, self._span(start))
		if ch in SUPERSCRIPTS:
			return self._superscript()
		if _is_name_char(ch):
			return self._word()
		self._index += 1
		raise LexError("'%s' is not a valid character" % ch, "unexpected character", self._span(start))

	def _number(self) -> Token:
		start = self._index
		while self._current() in NUMERIC: self._index += 1
		return Token(TokenType.NUMBER, self._text[start:self._index], self._span(start))

	def _word(self) -> Token:
		start = self._index
		while self._current() and (_is_name_char(self._current()) or self._current() in DIGITS):
			self._index += 1
		word = self._text[start:self._index]
		return Token(KEYWORDS.get(word, TokenType.IDENTIFIER), word, self._span(start))

	def _superscript(self) -> Token:
		start = self._index
		while self._current() in SUPERSCRIPTS: self._index += 1
		raw = self._text[start:self._index]
		plain = ''.join(SUPERSCRIPTS[c] for c in raw)
		nested = Scanner(plain, self._offset + start).scan()
		return Token(TokenType.SUPERSCRIPT, raw, self._span(start), tuple(nested))

def scan_text(text: str) -> list[Token]:
	""" Tokenize a whole text. The result always ends with exactly one EOF token. """
	return Scanner(text).scan()
