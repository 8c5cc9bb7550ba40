"""
Everything that can go wrong, and the means to say so.

Errors are exceptions the caller is expected to see. The Report is
the quieter channel: verbose tracing and a collection of non-fatal
issues which can be printed all at once.
"""
import sys, random, warnings
from typing import Any, Optional, Sequence

class CaseMatchError(Exception):
	""" Root of the things this package raises on purpose. """

class DuplicateVariantError(CaseMatchError, ValueError):
	def __init__(self, type_name:str, names:Sequence[str]):
		super().__init__("Type <%s> defines these variants more than once: %s" % (type_name, ", ".join(names)))
		self.type_name = type_name
		self.names = tuple(names)

class UnknownVariantError(CaseMatchError, KeyError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def __str__(self): return "No variant called %r has been defined." % self.name

class ArityMismatchError(CaseMatchError, TypeError):
	def __init__(self, variant:str, need:int, got:int):
		plural = '' if need == 1 else 's'
		super().__init__("%s takes %d field%s, but got %d instead." % (variant, need, plural, got))
		self.variant, self.need, self.got = variant, need, got

class FieldTypeError(CaseMatchError, TypeError):
	def __init__(self, variant:str, field_index:int, field_name:str, expected:str, value:Any):
		pattern = "%s: field %d (%s) needs to be %s; got %r instead."
		super().__init__(pattern % (variant, field_index, field_name, expected, value))
		self.variant = variant
		self.field_index = field_index
		self.field_name = field_name
		self.expected = expected
		self.value = value

class NoMatchError(CaseMatchError, LookupError):
	def __init__(self, subject:Any, tag:Any):
		super().__init__("No clause matches %s." % (tag,))
		self.subject = subject
		self.tag = tag

class UnreachableClauseWarning(UserWarning):
	def __init__(self, index:int, catchall_index:int):
		pattern = "Clause %d can never be reached: clause %d already matches everything."
		super().__init__(pattern % (index, catchall_index))
		self.index = index
		self.catchall_index = catchall_index

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott", 'Heavens', 'Nuts', 'Rats',
	]

	resignations = [
		'Something is not right.',
		'These clauses need a second look.',
		'I have no idea what the right answer is.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Pic:
	""" One issue, ready to print. """
	def __init__(self, intro:str, details:Sequence[str]=(), footer:Sequence[str]=()):
		self._intro, self._details, self._footer = intro, list(details), footer
	def also(self, detail:str): self._details.append(detail)
	def as_text(self):
		lines = [self._intro, ""]
		lines.extend("    "+d for d in self._details)
		lines.extend(self._footer)
		return '\n'.join(lines)

class Report:
	"""
	Collects non-fatal issues and, when verbose, narrates what goes on.
	Registries and clause compilation accept one of these.
	"""
	_issues : list[Pic]
	_unreachable_seen : set[str]

	def __init__(self, *, verbose:int=0, max_issues:Optional[int]=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues
		self._unreachable_seen = set()

	@property
	def issues(self) -> list[Pic]: return list(self._issues)

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def set_verbosity(self, level:int):
		self._verbose = level or 0

	def issue(self, it:Pic):
		self._issues.append(it)
		if self._max_issues and len(self._issues) >= self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()
		self._unreachable_seen.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the registry calls:
	def defined_type(self, type_name:str, variant_names:Sequence[str]):
		self.info("Defined <%s> as %s" % (type_name, " | ".join(variant_names)))

	def redefined_type(self, type_name:str):
		self.info("Type <%s> replaces an earlier definition." % type_name)

	def variant_taken_over(self, variant:str, old_type:str, new_type:str):
		self.info("Variant %s moves from <%s> to <%s>." % (variant, old_type, new_type))

	# Methods the clause compiler calls:
	def unreachable_clauses(self, key:str, catchall_index:int, indices:Sequence[int], stacklevel:int=1):
		"""
		Warns about each clause after the catch-all, on every call. The issue
		is recorded once per distinct key and does not count toward max_issues.
		A stacklevel of 1 blames the caller of this method.
		"""
		if key not in self._unreachable_seen:
			self._unreachable_seen.add(key)
			intro = "This case-block has clauses after its catch-all."
			details = ["clause %d matches everything" % catchall_index]
			details.extend("clause %d cannot happen" % i for i in indices)
			self._issues.append(Pic(intro, details, ["That's probably an oversight."]))
		for i in indices:
			warnings.warn(UnreachableClauseWarning(i, catchall_index), stacklevel=stacklevel+1)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
