"""
The table of algebraic types, and the global name-space of variants.

Variant names are global because matching dispatches on the variant
tag alone. Defining a type again replaces the earlier definition.
Writes are serialized with a lock; readers see whole-table swaps.
"""
import threading
from typing import Iterable, NamedTuple, Optional, Union
from .ontology import VariantDefinition, TypeDefinition, as_field
from .space import Layer, AlreadyExists
from .values import Constructor, TaggedValue
from .diagnostics import Report, DuplicateVariantError, UnknownVariantError

VARIANT_SPEC = Union[str, tuple[str, Iterable]]

def _as_variant(type_name:str, spec:VARIANT_SPEC) -> VariantDefinition:
	if isinstance(spec, str): return VariantDefinition(type_name, spec, ())
	name, field_specs = spec
	if isinstance(field_specs, str):
		raise TypeError("Variant %s: fields go in a list, as in (%r, [%r]), not a bare string." % (name, name, field_specs))
	return VariantDefinition(type_name, name, [as_field(f) for f in field_specs or ()])

class _Tables(NamedTuple):
	""" One consistent state of a registry. Replaced whole, never changed in place. """
	types: dict[str, TypeDefinition]
	constructors: dict[str, Constructor]
	generation: int

class TypeRegistry:
	_tables: _Tables

	def __init__(self, report:Optional[Report]=None):
		self.report = report or Report(verbose=0)
		self._tables = _Tables({}, {}, 0)
		self._write_lock = threading.Lock()

	@property
	def generation(self) -> int: return self._tables.generation

	def define(self, type_name:str, variant_specs:Iterable[VARIANT_SPEC]) -> TypeDefinition:
		"""
		Register (or re-register) an algebraic type. Nothing changes unless
		every variant spec is acceptable, so there is no partial registration.
		"""
		assert isinstance(type_name, str) and type_name, type_name
		layer, duplicates = Layer(), []
		for spec in variant_specs:
			variant = _as_variant(type_name, spec)
			try: layer.mount(variant.name, variant)
			except AlreadyExists: duplicates.append(variant.name)
		if duplicates:
			raise DuplicateVariantError(type_name, duplicates)

		typedef = TypeDefinition(type_name, layer.each_symbol())
		fresh = {v.name: Constructor(v) for v in typedef.variants}
		for name, ctor in fresh.items():
			typedef.members[name] = ctor.singleton if ctor.singleton is not None else ctor

		with self._write_lock:
			tables = self._tables
			types = dict(tables.types)
			constructors = {
				name: ctor for name, ctor in tables.constructors.items()
				if ctor.variant.type_name != type_name
			}
			if type_name in types: self.report.redefined_type(type_name)
			for name in fresh:
				if name in constructors:
					self.report.variant_taken_over(name, constructors[name].variant.type_name, type_name)
					_forget_variant(types, constructors[name].variant)
			types[type_name] = typedef
			constructors.update(fresh)
			self._tables = _Tables(types, constructors, tables.generation + 1)
		self.report.defined_type(type_name, typedef.variant_names())
		return typedef

	def lookup_type(self, type_name:str) -> TypeDefinition:
		return self._tables.types[type_name]

	def lookup_variant(self, variant_name:str) -> VariantDefinition:
		return self.constructor(variant_name).variant

	def constructor(self, variant_name:str) -> Constructor:
		try: return self._tables.constructors[variant_name]
		except KeyError: raise UnknownVariantError(variant_name) from None

	def is_nullary(self, name:str) -> bool:
		ctor = self._tables.constructors.get(name)
		return ctor is not None and ctor.variant.is_nullary()

	def construct(self, variant_name:str, *args) -> TaggedValue:
		return self.constructor(variant_name)(*args)

	def __contains__(self, variant_name:str) -> bool:
		return variant_name in self._tables.constructors

	def type_names(self) -> list[str]: return list(self._tables.types)

def _forget_variant(types:dict[str, TypeDefinition], variant:VariantDefinition):
	""" A variant taken over by another type no longer belongs to its old type's entry. """
	old = types.get(variant.type_name)
	if old is None: return
	remaining = [v for v in old.variants if v.name != variant.name]
	replacement = TypeDefinition(old.name, remaining)
	replacement.members = {k: m for k, m in old.members.items() if k != variant.name}
	types[old.name] = replacement

###############################################################################

REGISTRY = TypeRegistry()

def define(type_name:str, variant_specs:Iterable[VARIANT_SPEC]) -> TypeDefinition:
	return REGISTRY.define(type_name, variant_specs)

def lookup_variant(variant_name:str) -> VariantDefinition:
	return REGISTRY.lookup_variant(variant_name)

def is_nullary(name:str) -> bool:
	return REGISTRY.is_nullary(name)

def construct(variant_name:str, *args) -> TaggedValue:
	return REGISTRY.construct(variant_name, *args)

def set_verbosity(level:int):
	REGISTRY.report.set_verbosity(level)

class _Constructors:
	"""
	Every variant of the process-wide registry, by name:
	constructors for variants with fields, and values for nullary ones.
	"""
	def __getattr__(self, item):
		try: ctor = REGISTRY.constructor(item)
		except UnknownVariantError: raise AttributeError(item) from None
		return ctor.singleton if ctor.singleton is not None else ctor

	def __dir__(self): return list(REGISTRY._tables.constructors)

constructors = _Constructors()
