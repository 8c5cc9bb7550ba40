"""
Turn pattern expressions into pattern trees, and clause lists into case-blocks.

A bare name becomes a zero-field constructor pattern when it names a
registered nullary variant, and a binder otherwise. An application must
name a registered variant, but its arity is only checked against actual
values, at match time. Clauses after a catch-all are reported and dropped.

Compiled pattern trees are cached, keyed by the registry, its generation,
and the pattern expressions themselves (which compare by value).
"""
from functools import lru_cache
from typing import Any, Callable, NamedTuple, Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .ontology import Tagged
from .registry import TypeRegistry, REGISTRY

CACHE_SIZE = 256

class PatternTree:
	""" Root of compiled patterns. """

class Wildcard(PatternTree):
	def __repr__(self): return "_"

class Catchall(PatternTree):
	def __repr__(self): return "otherwise"

WILDCARD = Wildcard()
CATCHALL = Catchall()

class Bind(NamedTuple):
	name: str

class Literal(NamedTuple):
	value: Any

class Constructor(NamedTuple):
	type_name: str
	variant: str
	subpatterns: tuple

class Tuple(NamedTuple):
	subpatterns: tuple

###############################################################################

class PatternCompiler(Visitor):
	def __init__(self, registry:TypeRegistry):
		self._registry = registry

	def compile(self, expr):
		if isinstance(expr, (syntax.PatternExpr, Tagged)) or type(expr) is tuple:
			return self.visit(expr)
		return Literal(expr)

	def visit_Name(self, expr:syntax.Name):
		if self._registry.is_nullary(expr.text):
			variant = self._registry.lookup_variant(expr.text)
			return Constructor(variant.type_name, variant.name, ())
		return Bind(expr.text)

	def visit_Apply(self, expr:syntax.Apply):
		variant = self._registry.lookup_variant(expr.head)
		return Constructor(variant.type_name, variant.name, tuple(self.compile(a) for a in expr.args))

	def visit_Joint(self, expr:syntax.Joint):
		return Tuple(tuple(self.compile(p) for p in expr.parts))

	def visit_tuple(self, expr:tuple):
		return Tuple(tuple(self.compile(p) for p in expr))

	def visit_Wildcard(self, expr:syntax.Wildcard): return WILDCARD
	def visit_Otherwise(self, expr:syntax.Otherwise): return CATCHALL

	def visit_TaggedValue(self, value):
		# A value in pattern position matches whatever is structurally equal to it.
		subpatterns = tuple(
			self.visit(f) if isinstance(f, Tagged) else Literal(f)
			for f in value.fields
		)
		return Constructor(value.type_name, value.tag, subpatterns)

def compile_pattern(expr, registry:TypeRegistry=REGISTRY) -> PatternTree:
	return PatternCompiler(registry).compile(expr)

def _compile_patterns(registry:TypeRegistry, patterns:tuple) -> tuple:
	""" Compile up to and including the first catch-all. """
	compiler = PatternCompiler(registry)
	trees = []
	for expr in patterns:
		trees.append(compiler.compile(expr))
		if trees[-1] is CATCHALL: break
	return tuple(trees)

@lru_cache(CACHE_SIZE)
def _cached_patterns(registry:TypeRegistry, generation:int, patterns:tuple) -> tuple:
	return _compile_patterns(registry, patterns)

def compile_patterns(patterns:Sequence, registry:TypeRegistry=REGISTRY) -> tuple:
	patterns = tuple(patterns)
	try: hash(patterns)
	except TypeError: return _compile_patterns(registry, patterns)
	return _cached_patterns(registry, registry.generation, patterns)

class CaseBlock:
	"""
	A compiled clause list: pattern trees paired with their handlers.
	Calling the block with a subject dispatches on it.
	"""
	def __init__(self, trees:Sequence, handlers:Sequence[Any]):
		assert len(trees) <= len(handlers)
		self.trees = tuple(trees)
		self.handlers = tuple(handlers[:len(self.trees)])

	def __len__(self): return len(self.trees)

	def __iter__(self): return iter(zip(self.trees, self.handlers))

	def __call__(self, subject):
		from .runtime import dispatch
		return dispatch(subject, self)

	def __repr__(self):
		return "<CaseBlock: %s>" % " | ".join(map(repr, self.trees))

def _compile_clauses(clauses:Sequence[tuple[Any, Any]], registry:TypeRegistry, stacklevel:int) -> CaseBlock:
	"""
	The stacklevel says which frame an unreachable-clause warning blames:
	1 is this function, 2 its caller, and so on.
	"""
	clauses = list(clauses)
	for clause in clauses:
		if len(clause) != 2:
			raise ValueError("A clause is a (pattern, handler) pair; got %r" % (clause,))
	patterns = [p for p, h in clauses]
	trees = compile_patterns(patterns, registry)
	if len(trees) < len(patterns):
		catchall = len(trees) - 1
		registry.report.unreachable_clauses(repr(patterns), catchall, range(catchall + 1, len(patterns)), stacklevel)
	return CaseBlock(trees, [h for p, h in clauses])

def compile_clauses(clauses:Sequence[tuple[Any, Any]], registry:TypeRegistry=REGISTRY) -> CaseBlock:
	""" Clauses are (pattern, handler) pairs, tried in the order given. """
	return _compile_clauses(clauses, registry, 3)

def case_block(*clauses:tuple[Any, Callable], registry:TypeRegistry=REGISTRY) -> CaseBlock:
	""" Compile a clause list once, for a function that matches over and over. """
	return _compile_clauses(clauses, registry, 3)
