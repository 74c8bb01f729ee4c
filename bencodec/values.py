"""
The four kinds of bencoded value. Decoding always produces a tree of these,
and encoding accepts them (or plain python values, see to_value).

Values are immutable once built; constructors validate their input so a
value that exists can always be encoded.
"""
from collections.abc import Mapping
from types import MappingProxyType

# signed 64-bit range
INT_MIN = -2 ** 63

INT_MAX = 2 ** 63 - 1

# nesting of lists and dicts; deeper trees would outgrow the interpreter stack
# when encoded or compared
MAX_DEPTH = 200


class Value:
    """
    base of Int, Str, List and Dict
    """
    __slots__ = ()

    # lists and dicts between this value and its deepest leaf
    depth = 0

    def __setattr__(self, name, value):
        raise AttributeError('{0} is immutable'.format(type(self).__name__))

    def __delattr__(self, name):
        raise AttributeError('{0} is immutable'.format(type(self).__name__))

    def _key(self):
        raise NotImplementedError()

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return type(self) == type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((type(self).__name__, self._key()))

    def encode(self) -> bytes:
        """
        canonical bencoding of this value
        """
        from .bencoder import Encoder
        return Encoder(self).encode()

    def to_python(self):
        raise NotImplementedError()


class Int(Value):
    __slots__ = ('value',)

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError('Int requires an int, got {0}'.format(
                type(value).__name__))
        if not INT_MIN <= value <= INT_MAX:
            raise ValueError('Integer {0} is outside the range {1}..{2}'.format(
                value, INT_MIN, INT_MAX))
        object.__setattr__(self, 'value', int(value))

    def _key(self):
        return self.value

    def to_python(self) -> int:
        return self.value

    def __int__(self):
        return self.value

    def __repr__(self):
        return 'Int({0})'.format(self.value)


class Str(Value):
    """
    byte string; arbitrary octets, not necessarily valid text.
    str input is stored as its utf-8 encoding.
    """
    __slots__ = ('value',)

    def __init__(self, value=b''):
        if isinstance(value, str):
            value = value.encode('utf-8')
        elif isinstance(value, (bytes, bytearray, memoryview)):
            value = bytes(value)
        else:
            raise TypeError('Str requires bytes or str, got {0}'.format(
                type(value).__name__))
        object.__setattr__(self, 'value', value)

    def _key(self):
        return self.value

    def __len__(self):
        return len(self.value)

    def text(self, encoding: str = 'utf-8') -> str:
        return self.value.decode(encoding)

    def to_python(self) -> bytes:
        return self.value

    def __repr__(self):
        return 'Str({0!r})'.format(self.value)


class List(Value):
    __slots__ = ('items', 'depth')

    def __init__(self, items=()):
        items = tuple(items)
        for item in items:
            if not isinstance(item, Value):
                raise TypeError('List items must be Values, got {0}'.format(
                    type(item).__name__))
        object.__setattr__(self, 'depth', _nested_depth(items))

    def _key(self):
        return self.items

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def to_python(self) -> list:
        return [item.to_python() for item in self.items]

    def __repr__(self):
        return 'List({0!r})'.format(list(self.items))


def _check_depth(depth: int):
    if depth > MAX_DEPTH:
        raise ValueError('Lists and dicts may nest at most {0} deep'.format(
            MAX_DEPTH))


def _nested_depth(values) -> int:
    depth = 1 + max((value.depth for value in values), default=0)
    _check_depth(depth)
    return depth


def _as_key(key) -> Str:
    if isinstance(key, Str):
        return key
    if isinstance(key, (bytes, bytearray, memoryview, str)):
        return Str(key)
    raise TypeError('Dict keys must be strings, got {0}'.format(
        type(key).__name__))


class Dict(Value):
    """
    mapping of Str keys to values.

    Entries may be given as a mapping or as (key, value) pairs; when a key
    repeats the later pair wins. Key order is not part of equality, the
    encoder always writes keys in byte-wise sorted order.
    """
    __slots__ = ('entries', 'depth')

    def __init__(self, entries=()):
        if isinstance(entries, Mapping):
            entries = entries.items()
        store = {}
        for key, value in entries:
            if not isinstance(value, Value):
                raise TypeError('Dict values must be Values, got {0}'.format(
                    type(value).__name__))
            store[_as_key(key)] = value
        object.__setattr__(self, 'depth', _nested_depth(store.values()))

    def _key(self):
        return frozenset(self.entries.items())

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __contains__(self, key):
        try:
            return _as_key(key) in self.entries
        except TypeError:
            return False

    def __getitem__(self, key) -> Value:
        return self.entries[_as_key(key)]

    def get(self, key, default=None):
        if key in self:
            return self[key]
        return default

    def keys(self):
        return self.entries.keys()

    def values(self):
        return self.entries.values()

    def items(self):
        return self.entries.items()

    def sorted_items(self):
        """
        (key, value) pairs in canonical order, sorted on the raw key bytes
        """
        return sorted(self.entries.items(), key=lambda item: item[0].value)

    def to_python(self) -> dict:
        return {key.value: value.to_python()
                for key, value in self.entries.items()}

    def __repr__(self):
        return 'Dict({0!r})'.format(dict(self.entries))


def to_value(obj) -> Value:
    """
    Converts plain python data into a Value tree.

    int -> Int, bytes/str -> Str, list/tuple -> List, mapping -> Dict.
    Values pass through untouched.
    """
    return _to_value(obj, 0)


def _to_value(obj, depth: int) -> Value:
    if isinstance(obj, Value):
        return obj
    if isinstance(obj, bool):
        raise TypeError('Cannot bencode a bool')
    if isinstance(obj, int):
        return Int(obj)
    if isinstance(obj, (bytes, bytearray, memoryview, str)):
        return Str(obj)
    if isinstance(obj, (list, tuple)):
        _check_depth(depth + 1)
        return List(_to_value(item, depth + 1) for item in obj)
    if isinstance(obj, Mapping):
        _check_depth(depth + 1)
        return Dict((key, _to_value(value, depth + 1))
                    for key, value in obj.items())
    raise TypeError('Cannot bencode type: {0}'.format(type(obj).__name__))
