"""
Exceptions raised while decoding bencoded data.

Every error knows the byte offset where decoding stopped and what the
decoder expected to find there.
"""


class ParseError(ValueError):
    """
    base class of all decode failures

    offset -> position in the input buffer where the problem was found
    expected -> short description of the construct the decoder wanted
    """
    def __init__(self, offset: int, expected: str, message: str = None):
        self.offset = offset
        self.expected = expected
        self.message = message
        if message is None:
            text = 'expected {0} at offset {1}'.format(expected, offset)
        else:
            text = '{0} at offset {1}, expected {2}'.format(
                message, offset, expected)
        super().__init__(text)


class UnexpectedEof(ParseError):
    pass


class UnexpectedToken(ParseError):
    pass


class InvalidLength(ParseError):
    pass


class MalformedDict(ParseError):
    pass


class InvalidDictKey(ParseError):
    pass


class IntegerOverflow(ParseError):
    pass


class InputTooLarge(ParseError):
    pass


class NestingTooDeep(ParseError):
    pass
