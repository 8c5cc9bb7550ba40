import pickle
import unittest

from casematch import (
	TypeRegistry, ArityMismatchError, FieldTypeError, replace, zip_subjects,
)

class ConstructionTests(unittest.TestCase):

	def setUp(self) -> None:
		self.registry = TypeRegistry()
		self.one_or_two = self.registry.define("one_or_two", [
			("ONE", [("x", "number")]),
			("TWO", [("x", "number"), ("y", "number")]),
		])
		self.linked_list = self.registry.define("linked_list", [
			"NIL",
			("CONS", ["car", ("cdr", "linked_list")]),
		])

	def test_arity_is_checked(self):
		with self.assertRaises(ArityMismatchError) as cm:
			self.one_or_two.TWO(1)
		self.assertEqual((2, 1), (cm.exception.need, cm.exception.got))
		with self.assertRaises(ArityMismatchError):
			self.registry.construct("NIL", 1)

	def test_field_type_error_names_the_field(self):
		with self.assertRaises(FieldTypeError) as cm:
			self.one_or_two.ONE("foo")
		self.assertEqual(0, cm.exception.field_index)
		self.assertEqual("x", cm.exception.field_name)
		self.assertIn("number", cm.exception.expected)

	def test_first_violation_wins(self):
		with self.assertRaises(FieldTypeError) as cm:
			self.one_or_two.TWO("a", "b")
		self.assertEqual(0, cm.exception.field_index)
		with self.assertRaises(FieldTypeError) as cm:
			self.one_or_two.TWO(1, "b")
		self.assertEqual(1, cm.exception.field_index)

	def test_type_name_constraint(self):
		NIL, CONS = self.linked_list.NIL, self.linked_list.CONS
		self.assertEqual(CONS(1, NIL).cdr, NIL)
		with self.assertRaises(FieldTypeError) as cm:
			CONS(1, 2)
		self.assertEqual(1, cm.exception.field_index)
		with self.assertRaises(FieldTypeError):
			CONS(1, self.one_or_two.ONE(1))

	def test_primitive_constraints(self):
		flags = self.registry.define("flags", [("FLAG", [("f", "flag")]), ("TEXT", [("s", "string")])])
		flags.FLAG(True)
		flags.TEXT("words")
		with self.assertRaises(FieldTypeError): flags.FLAG(1)
		with self.assertRaises(FieldTypeError): flags.TEXT(1)
		with self.assertRaises(FieldTypeError): self.one_or_two.ONE(True)
		self.one_or_two.ONE(2.5)

	def test_numeric_is_another_word_for_number(self):
		measured = self.registry.define("measured", [("ONE_M", [("x", "numeric")])])
		self.assertEqual(5, measured.ONE_M(5).x)
		with self.assertRaises(FieldTypeError) as cm:
			measured.ONE_M("foo")
		self.assertEqual(0, cm.exception.field_index)
		self.assertIn("numeric", cm.exception.expected)

	def test_class_and_predicate_constraints(self):
		def positive(n): return n > 0
		odd = self.registry.define("odd", [("INT", [("n", int)]), ("POS", [("n", positive)]), ("EITHER", [("v", (int, str))])])
		odd.INT(3)
		odd.POS(3)
		odd.EITHER("x")
		with self.assertRaises(FieldTypeError): odd.INT(3.0)
		with self.assertRaises(FieldTypeError) as cm: odd.POS(-3)
		self.assertIn("positive", cm.exception.expected)
		with self.assertRaises(FieldTypeError): odd.EITHER(2.0)

	def test_values_are_immutable(self):
		one = self.one_or_two.ONE(1)
		with self.assertRaises(AttributeError):
			one.x = 2
		with self.assertRaises(AttributeError):
			del one.x
		self.assertEqual(1, one.x)

	def test_structural_equality(self):
		CONS, NIL = self.linked_list.CONS, self.linked_list.NIL
		a = CONS(1, CONS(2, NIL))
		b = CONS(1, CONS(2, self.registry.construct("NIL")))
		self.assertEqual(a, b)
		self.assertEqual(hash(a), hash(b))
		self.assertNotEqual(a, CONS(2, CONS(1, NIL)))
		self.assertNotEqual(self.one_or_two.ONE(1), 1)

	def test_field_access(self):
		two = self.one_or_two.TWO(3, 4)
		self.assertEqual((3, 4), two.fields)
		self.assertEqual(4, two[1])
		self.assertEqual(4, two.y)
		self.assertEqual(2, len(two))
		self.assertTrue(self.linked_list.NIL)
		self.assertEqual("one_or_two", two.type_name)
		self.assertEqual("TWO", two.tag)
		with self.assertRaises(AttributeError):
			two.z

	def test_repr(self):
		CONS, NIL = self.linked_list.CONS, self.linked_list.NIL
		self.assertEqual("CONS(1, CONS('a', NIL))", repr(CONS(1, CONS("a", NIL))))

	def test_replace_makes_a_checked_copy(self):
		two = self.one_or_two.TWO(3, 4)
		other = replace(two, y=5)
		self.assertEqual(self.one_or_two.TWO(3, 5), other)
		self.assertEqual(4, two.y)
		with self.assertRaises(FieldTypeError):
			replace(two, x="no")
		with self.assertRaises(TypeError):
			replace(two, z=1)

	def test_pickle_round_trip(self):
		CONS, NIL = self.linked_list.CONS, self.linked_list.NIL
		lst = CONS(1, CONS(2, NIL))
		self.assertEqual(lst, pickle.loads(pickle.dumps(lst)))

class TupleSubjectTests(unittest.TestCase):

	def test_zip_subjects_is_a_view(self):
		a, b = [1], "two"
		pair = zip_subjects(a, b)
		self.assertEqual(2, len(pair))
		self.assertIs(a, pair[0])
		self.assertEqual([a, b], list(pair))
		self.assertEqual("..([1], 'two')", repr(pair))

if __name__ == '__main__':
	unittest.main()
