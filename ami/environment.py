"""
Simplest possible environment concept.

One flat mapping from name to value. There is no static link:
a function call gets a brand-new environment of its own,
so nothing the caller binds is visible to the callee.
"""
from typing import Iterable
from .values import VALUE

UNBOUND = 0.0  # What any name means before something binds it.

class Environment:
	_bindings: dict[str, VALUE]
	
	def __init__(self, bindings: dict[str, VALUE] = None):
		self._bindings = dict(bindings or {})
	
	def holds(self, name: str) -> bool: return name in self._bindings
	def fetch(self, name: str) -> VALUE: return self._bindings.get(name, UNBOUND)
	def assign(self, name: str, value: VALUE) -> VALUE:
		self._bindings[name] = value
		return value
	def update(self, pairs: Iterable[tuple[str, VALUE]]): self._bindings.update(pairs)
	
	def __repr__(self): return "<Environment of %d names>" % len(self._bindings)
