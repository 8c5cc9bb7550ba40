"""
Pattern expressions, as the caller writes them.

These are plain data. A bare name is P.x, a constructor application is
P.CONS(P.car, P.cdr), the wildcard is _, the catch-all is otherwise, and
joint(p1, p2) (or just a tuple) matches a zip_subjects(...) subject
position by position. Python literals stand for themselves. The compiler
turns all of this into a pattern tree; nothing here knows about the
registry yet, so a bare name may later turn out to be a nullary variant.
"""

class PatternExpr:
	""" Root of the pattern-expression syntax. Immutable, and compares by value. """
	__slots__ = ()
	def _key(self) -> tuple: raise NotImplementedError(type(self))
	def __eq__(self, other):
		return type(self) is type(other) and self._key() == other._key()
	def __hash__(self): return hash((type(self).__name__, self._key()))

class Name(PatternExpr):
	""" A bare identifier: a binder, unless it names a nullary variant. """
	__slots__ = ("text",)
	def __init__(self, text:str):
		assert isinstance(text, str) and text, text
		self.text = text
	def _key(self): return (self.text,)
	def __call__(self, *args) -> "Apply": return Apply(self.text, args)
	def __repr__(self): return self.text

class Apply(PatternExpr):
	""" A variant name applied to sub-patterns. """
	__slots__ = ("head", "args")
	def __init__(self, head:str, args:tuple):
		self.head = head
		self.args = tuple(args)
	def _key(self): return (self.head, self.args)
	def __repr__(self): return "%s(%s)" % (self.head, ", ".join(map(repr, self.args)))

class Joint(PatternExpr):
	""" Patterns for the several parts of a joint subject. """
	__slots__ = ("parts",)
	def __init__(self, parts:tuple):
		self.parts = tuple(parts)
	def _key(self): return self.parts
	def __repr__(self): return "..(%s)" % ", ".join(map(repr, self.parts))

class Wildcard(PatternExpr):
	__slots__ = ()
	def _key(self): return ()
	def __repr__(self): return "_"

class Otherwise(PatternExpr):
	__slots__ = ()
	def _key(self): return ()
	def __repr__(self): return "otherwise"

_ = Wildcard()
otherwise = Otherwise()

def joint(*parts) -> Joint:
	return Joint(parts)

class _PatternNames:
	""" Attribute access makes names: P.x is Name("x"). P._ and P.otherwise give the special tokens. """
	def __getattr__(self, item:str):
		if item.startswith("__"): raise AttributeError(item)
		if item == "_": return _
		if item == "otherwise": return otherwise
		return Name(item)
	def __call__(self, text:str) -> Name:
		return Name(text)

P = _PatternNames()
