"""Buffered scalar/key payloads handed out by the lookahead parser."""
import enum
from dataclasses import dataclass
from typing import Any


class JsonType(enum.IntEnum):
    """JSON value type tags, numbered like the classic DOM type tags."""
    NO_VALUE = -1
    NULL = 0
    FALSE = 1
    TRUE = 2
    OBJECT = 3
    ARRAY = 4
    STRING = 5
    NUMBER = 6


INT32_MIN, INT32_MAX = -2**31, 2**31 - 1
INT64_MIN, INT64_MAX = -2**63, 2**63 - 1
UINT64_MAX = 2**64 - 1


@dataclass(frozen=True)
class Value:
    """One token's payload: a null, boolean, number, string or object key.

    A fresh instance is built for every token, so a ``Value`` obtained from
    ``peek_value()`` keeps its contents after the parser moves on.
    """
    type: JsonType
    data: Any = None

    @classmethod
    def null(cls) -> "Value":
        return cls(JsonType.NULL)

    @classmethod
    def boolean(cls, b: bool) -> "Value":
        return cls(JsonType.TRUE if b else JsonType.FALSE, bool(b))

    @classmethod
    def number(cls, n) -> "Value":
        return cls(JsonType.NUMBER, n)

    @classmethod
    def string(cls, s: str) -> "Value":
        return cls(JsonType.STRING, s)

    def is_null(self) -> bool:
        return self.type == JsonType.NULL

    def is_bool(self) -> bool:
        return self.type in (JsonType.FALSE, JsonType.TRUE)

    def is_string(self) -> bool:
        return self.type == JsonType.STRING

    def is_number(self) -> bool:
        return self.type == JsonType.NUMBER

    def is_integral(self) -> bool:
        return self.is_number() and isinstance(self.data, int)

    def is_int(self) -> bool:
        """True for integers that fit a signed 32-bit slot."""
        return self.is_integral() and INT32_MIN <= self.data <= INT32_MAX

    def is_int64(self) -> bool:
        return self.is_integral() and INT64_MIN <= self.data <= INT64_MAX

    def is_uint64(self) -> bool:
        return self.is_integral() and 0 <= self.data <= UINT64_MAX

    def is_double(self) -> bool:
        return self.is_number() and isinstance(self.data, float)
