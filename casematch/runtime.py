"""
The structural matcher, and the dispatch entry point callers use.

Clauses are tried strictly in order and the first whose pattern matches
wins. Within a clause there is no backtracking: it matches whole or not at all.
"""
from typing import Any, Sequence, Union
from boozetools.support.foundation import Visitor
from .values import TaggedValue, TupleSubject
from .registry import TypeRegistry, REGISTRY
from .diagnostics import ArityMismatchError, NoMatchError
from .compiler import (
	CaseBlock, _compile_clauses,
	Wildcard, Catchall, Bind, Literal, Constructor, Tuple,
)

BINDINGS = dict[str, Any]
CLAUSES = Union[CaseBlock, Sequence[tuple[Any, Any]]]

class Matcher(Visitor):
	"""
	Each visit answers whether the pattern matches the subject,
	adding to the bindings as it goes. A clause that fails may leave
	partial bindings behind, so each clause gets a fresh dictionary.
	"""

	def matches(self, pattern, subject, bindings:BINDINGS) -> bool:
		return self.visit(pattern, subject, bindings)

	def visit_Wildcard(self, pattern:Wildcard, subject, bindings:BINDINGS):
		return True

	def visit_Catchall(self, pattern:Catchall, subject, bindings:BINDINGS):
		return True

	def visit_Bind(self, pattern:Bind, subject, bindings:BINDINGS):
		bindings[pattern.name] = subject
		return True

	def visit_Literal(self, pattern:Literal, subject, bindings:BINDINGS):
		if isinstance(subject, (TaggedValue, TupleSubject)): return False
		return bool(subject == pattern.value)

	def visit_Constructor(self, pattern:Constructor, subject, bindings:BINDINGS):
		if not isinstance(subject, TaggedValue) or subject.variant.name != pattern.variant:
			return False
		if len(subject.fields) != len(pattern.subpatterns):
			raise ArityMismatchError(pattern.variant, len(subject.fields), len(pattern.subpatterns))
		return self._each(pattern.subpatterns, subject.fields, bindings)

	def visit_Tuple(self, pattern:Tuple, subject, bindings:BINDINGS):
		if not isinstance(subject, TupleSubject) or len(subject) != len(pattern.subpatterns):
			return False
		return self._each(pattern.subpatterns, subject.values, bindings)

	def _each(self, patterns:Sequence, values:Sequence, bindings:BINDINGS) -> bool:
		for p, v in zip(patterns, values):
			if not self.visit(p, v, bindings): return False
		return True

MATCHER = Matcher()

def tag_of(subject) -> Any:
	""" What a diagnostic says about a subject: its type and variant, or the plain value. """
	if isinstance(subject, TaggedValue):
		return "%s/%s" % (subject.type_name, subject.tag)
	if isinstance(subject, TupleSubject):
		return tuple(tag_of(v) for v in subject)
	return subject

def _as_block(clauses:CLAUSES, registry:TypeRegistry) -> CaseBlock:
	# Warnings blame the caller of match_one or dispatch.
	if isinstance(clauses, CaseBlock): return clauses
	return _compile_clauses(clauses, registry, 4)

def match_one(subject, clauses:CLAUSES, registry:TypeRegistry=REGISTRY) -> tuple[BINDINGS, int]:
	""" Find the first clause that matches. Answer its bindings and its index. """
	block = _as_block(clauses, registry)
	for index, tree in enumerate(block.trees):
		bindings = {}
		if MATCHER.matches(tree, subject, bindings):
			return bindings, index
	raise NoMatchError(subject, tag_of(subject))

def dispatch(subject, clauses:CLAUSES, registry:TypeRegistry=REGISTRY):
	"""
	Match, then hand the bindings to the winning clause's handler as
	keyword arguments and return whatever it returns. A handler that is
	not callable is simply the result.
	"""
	block = _as_block(clauses, registry)
	bindings, index = match_one(subject, block)
	handler = block.handlers[index]
	if callable(handler): return handler(**bindings)
	return handler

cases = dispatch
