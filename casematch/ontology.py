"""
These most-fundamental classes are separate from the rest
to avoid various circular-import scenarios: field constraints
need to recognize tagged values, and tagged values need to
know their variant definitions.
"""
from typing import Any, Callable, NamedTuple, Optional, Sequence
from . import primitive

class Tagged:
	""" Abstract root of run-time values built by a variant constructor. """
	__slots__ = ()
	type_name: str
	variant: "VariantDefinition"

###############################################################################

class FieldConstraint:
	def admits(self, value) -> bool: raise NotImplementedError(type(self))
	def describe(self) -> str: raise NotImplementedError(type(self))
	def __repr__(self): return "<%s>" % self.describe()

class AnyConstraint(FieldConstraint):
	def admits(self, value) -> bool: return True
	def describe(self) -> str: return "anything"

ANY = AnyConstraint()

class PrimitiveConstraint(FieldConstraint):
	def __init__(self, name:str, predicate:Callable[[Any], bool]):
		self.name, self._predicate = name, predicate
	def admits(self, value) -> bool: return self._predicate(value)
	def describe(self) -> str: return "a " + self.name

class TypeNameConstraint(FieldConstraint):
	"""
	Admits tagged values of the named algebraic type. The name is compared
	at check time, so a type may mention itself or a type defined later.
	"""
	def __init__(self, type_name:str):
		self.type_name = type_name
	def admits(self, value) -> bool:
		return isinstance(value, Tagged) and value.type_name == self.type_name
	def describe(self) -> str: return "a <%s>" % self.type_name

class ClassConstraint(FieldConstraint):
	def __init__(self, classes):
		self.classes = classes
	def admits(self, value) -> bool: return isinstance(value, self.classes)
	def describe(self) -> str:
		if isinstance(self.classes, tuple):
			return "one of " + ", ".join(c.__name__ for c in self.classes)
		return "an instance of " + self.classes.__name__

class PredicateConstraint(FieldConstraint):
	def __init__(self, predicate:Callable[[Any], bool]):
		self.predicate = predicate
	def admits(self, value) -> bool: return bool(self.predicate(value))
	def describe(self) -> str:
		return "accepted by " + getattr(self.predicate, "__name__", repr(self.predicate))

def as_constraint(spec) -> FieldConstraint:
	""" Normalize whatever the caller wrote after a field name. """
	if spec is None: return ANY
	if isinstance(spec, FieldConstraint): return spec
	if isinstance(spec, str):
		predicate = primitive.primitive_predicate(spec)
		if predicate is None: return TypeNameConstraint(spec)
		else: return PrimitiveConstraint(spec, predicate)
	if isinstance(spec, type): return ClassConstraint(spec)
	if isinstance(spec, tuple) and spec and all(isinstance(c, type) for c in spec):
		return ClassConstraint(spec)
	if callable(spec): return PredicateConstraint(spec)
	raise TypeError("Cannot make a field constraint from %r" % (spec,))

class Field(NamedTuple):
	name: str
	constraint: FieldConstraint = ANY

def as_field(spec) -> Field:
	""" A field is written either as a bare name or as a (name, constraint) pair. """
	if isinstance(spec, Field): return spec
	if isinstance(spec, str): return Field(spec, ANY)
	name, constraint = spec
	assert isinstance(name, str), name
	return Field(name, as_constraint(constraint))

###############################################################################

# Attribute names a tagged value already answers to, so no field may use them.
RESERVED_FIELD_NAMES = frozenset(("variant", "fields", "type_name", "tag"))

class VariantDefinition:
	""" One alternative of an algebraic type. Immutable once registered. """
	__slots__ = ("type_name", "name", "fields", "_index")

	def __init__(self, type_name:str, name:str, fields:Sequence[Field]):
		assert isinstance(name, str) and name, name
		for f in fields:
			if f.name in RESERVED_FIELD_NAMES:
				raise ValueError("%s: a field may not be called %r; tagged values use that name themselves." % (name, f.name))
		self.type_name = type_name
		self.name = name
		self.fields = tuple(fields)
		self._index = {f.name:i for i, f in enumerate(self.fields)}

	@property
	def arity(self) -> int: return len(self.fields)
	def is_nullary(self) -> bool: return not self.fields
	def field_names(self) -> tuple[str, ...]: return tuple(f.name for f in self.fields)
	def index_of(self, field_name:str) -> Optional[int]: return self._index.get(field_name)

	def __repr__(self): return "<%s/%s:%d>" % (self.type_name, self.name, self.arity)

class TypeDefinition:
	"""
	The registry's entry for one algebraic type.
	Each variant is also reachable as an attribute: nullary variants
	give their (shared) value and the rest give their constructor.
	"""
	def __init__(self, name:str, variants:Sequence[VariantDefinition]):
		self.name = name
		self.variants = tuple(variants)
		self.members = {}

	def variant_names(self) -> tuple[str, ...]:
		return tuple(v.name for v in self.variants)

	def __getattr__(self, item):
		members = self.__dict__.get("members")
		if members is not None and item in members: return members[item]
		raise AttributeError(item)

	def __repr__(self): return "<type %s = %s>" % (self.name, " | ".join(self.variant_names()))
