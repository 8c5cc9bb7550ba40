import io
import unittest
from unittest import mock

from casematch import (
	TypeRegistry, Report, DuplicateVariantError, UnknownVariantError,
	define, constructors, lookup_variant, is_nullary, construct, TaggedValue,
)

class DefineTests(unittest.TestCase):

	def setUp(self) -> None:
		self.registry = TypeRegistry()

	def test_define_gives_constructors_and_values(self):
		numbers = self.registry.define("zero_one_two", ["ZERO", ("ONE", ["x"]), ("TWO", ["x", "y"])])
		self.assertEqual(("ZERO", "ONE", "TWO"), numbers.variant_names())
		self.assertIsInstance(numbers.ZERO, TaggedValue)
		self.assertEqual("ONE(1)", repr(numbers.ONE(1)))
		self.assertEqual(2, self.registry.lookup_variant("TWO").arity)
		self.assertIs(numbers, self.registry.lookup_type("zero_one_two"))

	def test_duplicate_variant_changes_nothing(self):
		self.registry.define("colour", ["R", "B"])
		with self.assertRaises(DuplicateVariantError) as cm:
			self.registry.define("colour", ["R", ("G", ["shade"]), "R"])
		self.assertEqual(("R",), cm.exception.names)
		self.assertNotIn("G", self.registry)
		self.assertEqual(("R", "B"), self.registry.lookup_type("colour").variant_names())

	def test_unknown_variant(self):
		with self.assertRaises(UnknownVariantError):
			self.registry.lookup_variant("NOPE")
		with self.assertRaises(KeyError):
			self.registry.construct("NOPE")

	def test_is_nullary(self):
		self.registry.define("linked_list", ["NIL", ("CONS", ["car", ("cdr", "linked_list")])])
		self.assertTrue(self.registry.is_nullary("NIL"))
		self.assertFalse(self.registry.is_nullary("CONS"))
		self.assertFalse(self.registry.is_nullary("car"))

	def test_last_registration_wins(self):
		self.registry.define("thing", ["A", ("B", ["x"])])
		before = self.registry.generation
		self.registry.define("thing", [("A", ["y"])])
		self.assertGreater(self.registry.generation, before)
		self.assertNotIn("B", self.registry)
		self.assertEqual(1, self.registry.lookup_variant("A").arity)
		self.assertFalse(self.registry.is_nullary("A"))

	def test_variant_moves_to_newer_type(self):
		self.registry.define("search_tree", ["E", ("T", ["left", "value", "right"])])
		self.registry.define("leafy", ["E", ("L", ["item"])])
		self.assertEqual("leafy", self.registry.lookup_variant("E").type_name)
		self.assertEqual(("T",), self.registry.lookup_type("search_tree").variant_names())
		self.assertEqual("search_tree", self.registry.lookup_variant("T").type_name)

	def test_verbose_registry_narrates(self):
		registry = TypeRegistry(Report(verbose=1))
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			registry.define("colour", ["R", "B"])
			registry.define("colour", ["R", "B"])
		text = err.getvalue()
		self.assertIn("Defined <colour> as R | B", text)
		self.assertIn("replaces an earlier definition", text)

	def test_quiet_registry_says_nothing(self):
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			self.registry.define("colour", ["R", "B"])
		self.assertEqual("", err.getvalue())

	def test_bad_constraint_is_rejected_before_registration(self):
		with self.assertRaises(TypeError):
			self.registry.define("odd", [("ODD", [("x", 42)])])
		self.assertNotIn("ODD", self.registry)

	def test_fields_given_as_a_bare_string_are_rejected(self):
		with self.assertRaises(TypeError):
			self.registry.define("ll", ["NIL", ("CONS", "car")])
		self.assertNotIn("CONS", self.registry)
		self.assertNotIn("ll", self.registry.type_names())

	def test_field_names_that_would_be_shadowed(self):
		for name in ("tag", "fields", "variant", "type_name"):
			with self.subTest(name=name):
				with self.assertRaises(ValueError):
					self.registry.define("labelled", [("LABEL", [name])])
				self.assertNotIn("LABEL", self.registry)

	def test_redefinition_swaps_one_consistent_table(self):
		self.registry.define("thing", ["A", ("B", ["x"])])
		old = self.registry._tables
		self.registry.define("thing", [("C", ["y"])])
		new = self.registry._tables
		self.assertEqual({"A", "B"}, set(old.constructors))
		self.assertEqual(("A", "B"), old.types["thing"].variant_names())
		self.assertEqual({"C"}, set(new.constructors))
		self.assertEqual(old.generation + 1, new.generation)
		for name, ctor in new.constructors.items():
			self.assertIn(name, new.types[ctor.variant.type_name].variant_names())

class ProcessWideRegistryTests(unittest.TestCase):
	""" The module-level surface works against one shared registry. """

	def test_constructors_namespace(self):
		define("gadget_of_registry_test", ["GIZMO_RT", ("WIDGET_RT", [("size", "number")])])
		widget = constructors.WIDGET_RT(3)
		self.assertEqual(widget, construct("WIDGET_RT", 3))
		self.assertEqual(constructors.GIZMO_RT, construct("GIZMO_RT"))
		self.assertTrue(is_nullary("GIZMO_RT"))
		self.assertEqual("gadget_of_registry_test", lookup_variant("WIDGET_RT").type_name)
		with self.assertRaises(AttributeError):
			constructors.NO_SUCH_THING_RT

if __name__ == '__main__':
	unittest.main()
