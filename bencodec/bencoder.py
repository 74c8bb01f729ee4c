import logging

from . import errors
from .values import (INT_MAX, INT_MIN, MAX_DEPTH, Dict, Int, List, Str, Value,
                     to_value)

"""
The b'...' notation allows the bytes to be specified with ASCII
characters instead of hex numbers.
"""
START_INT = b'i'

START_LIST = b'l'

START_DICT = b'd'

STRING_SEP = b':'

TOKEN_END = b'e'

NEGATIVE_SIGN = b'-'

DIGITS = b'0123456789'

# skipped after the i, -, l, d and e tokens and after string values
WHITESPACE = b' \t\n\r\x0b\x0c'

# bytes of input accepted by decode, None for no limit
DEFAULT_MAX_SIZE = None

# digits in INT_MAX, longer runs cannot fit
_MAX_INT_DIGITS = len(str(INT_MAX))


class Encoder:
    """
    for Int -> 4 -> b'i4e'
    for Str -> hello -> b'5:hello'
    for List -> b'l(encode each item)e'
    for Dict -> b'd(for each key in sorted order (encode key,encode value))e'

    plain python data is accepted as well and converted with to_value first
    """
    def __init__(self, data):
        self._data = to_value(data)

    def encode(self) -> bytes:
        result = bytearray()
        self.encode_next(self._data, result)
        logging.debug('Encoded {0} into {1} bytes'.format(
            type(self._data).__name__, len(result)))
        return bytes(result)

    def encode_next(self, data: Value, result: bytearray):
        if type(data) == Int:
            self._encode_int(data, result)
        elif type(data) == Str:
            self._encode_string(data, result)
        elif type(data) == List:
            self._encode_list(data, result)
        elif type(data) == Dict:
            self._encode_dict(data, result)
        else:
            raise TypeError('Cannot encode type: {0}'.format(
                type(data).__name__))

    def _encode_int(self, value: Int, result: bytearray):
        result += START_INT + str(value.value).encode('ascii') + TOKEN_END

    def _encode_string(self, value: Str, result: bytearray):
        result += str(len(value.value)).encode('ascii') + STRING_SEP
        result += value.value

    def _encode_list(self, data: List, result: bytearray):
        result += START_LIST
        for item in data:
            self.encode_next(item, result)
        result += TOKEN_END

    def _encode_dict(self, data: Dict, result: bytearray):
        # "Keys must be strings and appear in sorted order"
        # http://www.bittorrent.org/beps/bep_0003.html
        result += START_DICT
        for key, value in data.sorted_items():
            self._encode_string(key, result)
            self.encode_next(value, result)
        result += TOKEN_END


class Decoder:
    """
    Recursive descent parser for bencoded data.

    Each _decode_* method reads one construct starting at the cursor
    (self._index) and leaves the cursor just past it. The whole input must
    hold exactly one value; anything else raises a ParseError carrying the
    offset of the problem.
    """
    def __init__(self, data, max_size: int = DEFAULT_MAX_SIZE,
                 max_depth: int = MAX_DEPTH):
        if isinstance(data, str):
            data = data.encode('utf-8')
        elif isinstance(data, (bytearray, memoryview)):
            data = bytes(data)
        elif not isinstance(data, bytes):
            raise TypeError('Argument "data" must be of type bytes or str')
        if not 0 <= max_depth <= MAX_DEPTH:
            raise ValueError('max_depth must be between 0 and {0}'.format(
                MAX_DEPTH))
        self._data = data
        self._index = 0
        self._depth = 0
        self._max_size = max_size
        self._max_depth = max_depth

    def decode(self) -> Value:
        logging.debug('Decoding {0} bytes'.format(len(self._data)))
        self._index = 0
        self._depth = 0
        try:
            if self._max_size is not None and len(self._data) > self._max_size:
                raise errors.InputTooLarge(
                    self._max_size,
                    'at most {0} bytes of input'.format(self._max_size),
                    'input of {0} bytes is too large'.format(len(self._data)))
            value = self._decode_value()
            if self._index < len(self._data):
                raise errors.UnexpectedToken(
                    self._index, 'end of input', 'trailing data')
        except errors.ParseError as e:
            logging.debug('Decoding failed: {0}'.format(e))
            raise
        return value

    def _peek(self):
        if self._index >= len(self._data):
            return None
        return self._data[self._index:self._index + 1]

    def _unexpected(self, expected: str) -> errors.ParseError:
        c = self._peek()
        if c is None:
            return errors.UnexpectedEof(self._index, expected)
        return errors.UnexpectedToken(
            self._index, expected, 'invalid token {0!r}'.format(c))

    def _skip_whitespace(self):
        while self._index < len(self._data) and \
                self._data[self._index] in WHITESPACE:
            self._index += 1

    def _consume(self, token: bytes, expected: str):
        if self._peek() != token:
            raise self._unexpected(expected)
        self._index += 1
        self._skip_whitespace()

    def _read_digits(self) -> bytes:
        start = self._index
        while self._index < len(self._data) and \
                self._data[self._index] in DIGITS:
            self._index += 1
        return self._data[start:self._index]

    def _enter(self, offset: int):
        self._depth += 1
        if self._depth > self._max_depth:
            raise errors.NestingTooDeep(
                offset, 'at most {0} nested containers'.format(self._max_depth))

    def _decode_value(self) -> Value:
        c = self._peek()
        if c == START_INT:
            return self._decode_int()
        elif c == START_LIST:
            return self._decode_list()
        elif c == START_DICT:
            return self._decode_dict()
        elif c is not None and c in DIGITS:
            return self._decode_string()
        raise self._unexpected('a value')

    def _decode_int(self) -> Int:
        self._consume(START_INT, "'i'")
        negative = self._peek() == NEGATIVE_SIGN
        if negative:
            self._consume(NEGATIVE_SIGN, "'-'")
        start = self._index
        digits = self._read_digits()
        if not digits:
            raise self._unexpected('a digit')
        if digits[:1] == b'0' and len(digits) > 1:
            raise errors.UnexpectedToken(
                start, "'e' after 0", 'integer has leading zeros')
        if digits == b'0' and negative:
            raise errors.UnexpectedToken(
                start, 'a non-zero digit', 'negative zero is not allowed')
        value = int(digits) if len(digits) <= _MAX_INT_DIGITS else None
        if negative and value is not None:
            value = -value
        if value is None or not INT_MIN <= value <= INT_MAX:
            raise errors.IntegerOverflow(
                start,
                'an integer between {0} and {1}'.format(INT_MIN, INT_MAX),
                'integer out of range')
        self._consume(TOKEN_END, "'e'")
        return Int(value)

    def _decode_string(self) -> Str:
        start = self._index
        digits = self._read_digits()
        if not digits:
            raise self._unexpected('a string length')
        if digits[:1] == b'0' and len(digits) > 1:
            raise errors.InvalidLength(
                start, "':' after 0", 'string length has leading zeros')
        c = self._peek()
        if c is None:
            raise errors.UnexpectedEof(self._index, "':'")
        if c != STRING_SEP:
            raise errors.InvalidLength(
                self._index, "':' after string length",
                'invalid token {0!r} in string length'.format(c))
        self._index += 1

        remaining = len(self._data) - self._index
        # a run with more digits than the remaining count always overruns
        if len(digits) > len(str(remaining)) or int(digits) > remaining:
            raise errors.UnexpectedEof(
                len(self._data),
                '{0} bytes of string data'.format(digits.decode('ascii')),
                'string length overruns input')
        length = int(digits)
        value = self._data[self._index:self._index + length]
        self._index += length
        self._skip_whitespace()
        return Str(value)

    def _decode_list(self) -> List:
        self._enter(self._index)
        self._consume(START_LIST, "'l'")
        items = []
        while self._peek() != TOKEN_END:
            if self._peek() is None:
                raise errors.UnexpectedEof(self._index, "a list item or 'e'")
            items.append(self._decode_value())
        self._consume(TOKEN_END, "'e'")
        self._depth -= 1
        return List(items)

    def _decode_dict(self) -> Dict:
        self._enter(self._index)
        self._consume(START_DICT, "'d'")
        pairs = []
        while self._peek() != TOKEN_END:
            c = self._peek()
            if c is None:
                raise errors.UnexpectedEof(self._index, "a dict key or 'e'")
            if c in (START_INT, START_LIST, START_DICT):
                raise errors.InvalidDictKey(
                    self._index, 'a string key',
                    'dict key must be a string, got {0!r}'.format(c))
            key = self._decode_string()
            if self._peek() == TOKEN_END:
                raise errors.MalformedDict(
                    self._index, 'a value for key {0!r}'.format(key.value),
                    'dict key without a value')
            pairs.append((key, self._decode_value()))
        self._consume(TOKEN_END, "'e'")
        self._depth -= 1
        return Dict(pairs)


def decode(data, max_size: int = DEFAULT_MAX_SIZE,
           max_depth: int = MAX_DEPTH) -> Value:
    """
    Decodes exactly one bencoded value from data (bytes or str).
    """
    return Decoder(data, max_size=max_size, max_depth=max_depth).decode()


def encode(data) -> bytes:
    """
    Canonical bencoding of a Value or of plain python data.
    """
    return Encoder(data).encode()
