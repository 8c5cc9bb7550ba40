"""
A name-space that does not like duplicate keys.
"""

from typing import Iterable, Generic, TypeVar

T = TypeVar('T')

class AlreadyExists(KeyError): pass

class Layer(Generic[T]):
	""" Lightly enhanced dictionary: It does not like duplicate keys. """
	_symbol: dict[str, T]

	def __init__(self):
		self._symbol = {}

	def mount(self, key:str, symbol:T) -> T:
		if key in self._symbol:
			raise AlreadyExists(key)
		else:
			self._symbol[key] = symbol
			return symbol

	def each_symbol(self) -> Iterable[T]:
		return self._symbol.values()
