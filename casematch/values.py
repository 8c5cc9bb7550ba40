"""
This module defines the run-time values the matcher operates in terms of.
Basic primitive values play themselves; algebraic values are TaggedValue
objects, and a joint subject for multi-value matching is a TupleSubject.
"""
from typing import Any, Sequence
from .ontology import Tagged, VariantDefinition
from .diagnostics import ArityMismatchError, FieldTypeError

class TaggedValue(Tagged):
	"""
	An instance of one variant: the variant's definition plus the field values.
	Immutable after construction. Equality is structural.
	"""
	__slots__ = ("variant", "fields")
	variant: VariantDefinition
	fields: tuple

	def __init__(self, variant:VariantDefinition, fields:tuple):
		object.__setattr__(self, "variant", variant)
		object.__setattr__(self, "fields", fields)

	@property
	def type_name(self) -> str: return self.variant.type_name
	@property
	def tag(self) -> str: return self.variant.name

	def __setattr__(self, key, value):
		raise AttributeError("Tagged values are immutable. Use casematch.replace(...) to make a changed copy.")
	def __delattr__(self, item):
		raise AttributeError("Tagged values are immutable.")

	def __getattr__(self, item):
		if item in TaggedValue.__slots__: raise AttributeError(item)
		index = self.variant.index_of(item)
		if index is None:
			raise AttributeError("%s has no field called %r" % (self.variant.name, item))
		return self.fields[index]

	def __getitem__(self, index:int): return self.fields[index]
	def __len__(self): return len(self.fields)
	def __bool__(self): return True

	def __eq__(self, other):
		if not isinstance(other, TaggedValue): return NotImplemented
		return (
			self.variant.name == other.variant.name
			and self.variant.type_name == other.variant.type_name
			and self.fields == other.fields
		)

	def __ne__(self, other):
		result = self.__eq__(other)
		return result if result is NotImplemented else not result

	def __hash__(self): return hash((self.variant.type_name, self.variant.name, self.fields))

	def __reduce__(self): return TaggedValue, (self.variant, self.fields)

	def __repr__(self):
		if not self.fields: return self.variant.name
		return "%s(%s)" % (self.variant.name, ", ".join(map(repr, self.fields)))

def _build(variant:VariantDefinition, args:Sequence[Any]) -> TaggedValue:
	""" Check the arguments against the variant, left to right, and only then build. """
	if len(args) != variant.arity:
		raise ArityMismatchError(variant.name, variant.arity, len(args))
	for index, (field, arg) in enumerate(zip(variant.fields, args)):
		if not field.constraint.admits(arg):
			raise FieldTypeError(variant.name, index, field.name, field.constraint.describe(), arg)
	return TaggedValue(variant, tuple(args))

class Constructor:
	""" The callable generated for each variant. Nullary variants keep a shared instance. """
	def __init__(self, variant:VariantDefinition):
		self.variant = variant
		self.singleton = TaggedValue(variant, ()) if variant.is_nullary() else None

	@property
	def name(self) -> str: return self.variant.name

	def __call__(self, *args) -> TaggedValue:
		if self.singleton is not None and not args: return self.singleton
		return _build(self.variant, args)

	def __repr__(self): return "<constructor %s/%s>" % (self.variant.type_name, self.variant.name)

def replace(value:TaggedValue, **changes) -> TaggedValue:
	""" Make a new value of the same variant with some fields changed by name. """
	variant = value.variant
	fields = list(value.fields)
	for name, new in changes.items():
		index = variant.index_of(name)
		if index is None:
			raise TypeError("%s has no field called %r" % (variant.name, name))
		fields[index] = new
	return _build(variant, fields)

###############################################################################

class TupleSubject:
	""" A positional view over several independent values, for matching them jointly. """
	__slots__ = ("values",)

	def __init__(self, values:tuple):
		self.values = values

	def __len__(self): return len(self.values)
	def __getitem__(self, index:int): return self.values[index]
	def __iter__(self): return iter(self.values)

	def __eq__(self, other):
		if not isinstance(other, TupleSubject): return NotImplemented
		return self.values == other.values
	def __hash__(self): return hash(self.values)

	def __repr__(self): return "..(%s)" % ", ".join(map(repr, self.values))

def zip_subjects(*values) -> TupleSubject:
	return TupleSubject(values)
