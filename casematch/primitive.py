"""
The primitive constraint namespace.
These are the words a field declaration may use to demand
a plain host value rather than some algebraic type.
"""

from numbers import Real

built_in_type_names = []
_predicates = {}

def _built_in_type(*names:str):
	def decorate(fn):
		for name in names:
			built_in_type_names.append(name)
			_predicates[name] = fn
		return fn
	return decorate

@_built_in_type("number", "numeric")
def is_number(value) -> bool:
	return isinstance(value, Real) and not isinstance(value, bool)

@_built_in_type("string")
def is_string(value) -> bool:
	return isinstance(value, str)

@_built_in_type("flag")
def is_flag(value) -> bool:
	return isinstance(value, bool)

def primitive_predicate(name:str):
	""" The predicate for a primitive type-name, or None if the name is not primitive. """
	return _predicates.get(name)
