"""
Algebraic data types and pattern matching for Python.

	linked_list = define("linked_list", ["NIL", ("CONS", ["car", ("cdr", "linked_list")])])
	NIL, CONS = linked_list.NIL, linked_list.CONS

	def length(lst):
		return dispatch(lst, [
			(P.NIL, 0),
			(P.CONS(_, P.cdr), lambda cdr: 1 + length(cdr)),
		])

	length(CONS(1, CONS(2, CONS(3, NIL))))  # 3
"""

from .diagnostics import (
	CaseMatchError, DuplicateVariantError, UnknownVariantError, ArityMismatchError,
	FieldTypeError, NoMatchError, UnreachableClauseWarning, Report,
)
from .ontology import Field, FieldConstraint, ANY, VariantDefinition, TypeDefinition
from .values import TaggedValue, TupleSubject, zip_subjects, replace
from .registry import (
	TypeRegistry, REGISTRY, define, lookup_variant, is_nullary, construct,
	set_verbosity, constructors,
)
from .syntax import P, Name, _, otherwise, joint
from .compiler import CaseBlock, compile_pattern, compile_clauses, case_block
from .runtime import match_one, dispatch, cases, tag_of
