"""
Bencode encoding and decoding.

    >>> decode(b'd2:hili1ei2ei3eee')
    Dict({Str(b'hi'): List([Int(1), Int(2), Int(3)])})
    >>> encode({'hi': 1})
    b'd2:hii1ee'
"""
from .bencoder import Decoder, Encoder, decode, encode
from .errors import (IntegerOverflow, InputTooLarge, InvalidDictKey,
                     InvalidLength, MalformedDict, NestingTooDeep, ParseError,
                     UnexpectedEof, UnexpectedToken)
from .values import Dict, Int, List, Str, Value, to_value

__all__ = [
    'decode', 'encode', 'Decoder', 'Encoder',
    'Value', 'Int', 'Str', 'List', 'Dict', 'to_value',
    'ParseError', 'UnexpectedEof', 'UnexpectedToken', 'InvalidLength',
    'MalformedDict', 'InvalidDictKey', 'IntegerOverflow', 'InputTooLarge',
    'NestingTooDeep',
]
