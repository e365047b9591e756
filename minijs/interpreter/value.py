from __future__ import annotations

from typing import Any, Dict, Optional, TypeVar, Generic
from enum import IntEnum, auto
from decimal import Decimal

import math

T = TypeVar('T')

class ValueType(IntEnum):
    Undefined = auto()
    Null = auto()
    Boolean = auto()
    String = auto()
    Symbol = auto()
    Number = auto()
    Object = auto()

    def __str__(self) -> str:
        return TYPE_NAMES[self]

TYPE_NAMES = {
    ValueType.Undefined: 'undefined',
    ValueType.Null: 'null',
    ValueType.Boolean: 'bool',
    ValueType.String: 'string',
    ValueType.Symbol: 'symbol',
    ValueType.Number: 'number',
    ValueType.Object: 'object',
}

def format_number(number: float) -> str:
    """Shortest decimal that round-trips, never in exponent form and without a trailing `.0`."""
    if math.isnan(number):
        return 'NaN'
    elif math.isinf(number):
        return 'Infinity' if number > 0 else '-Infinity'

    text = repr(number)
    if 'e' in text:
        text = format(Decimal(text), 'f')

    if text.endswith('.0'):
        text = text[:-2]

    return text

class Value(Generic[T]):
    def __init__(self, value: T, type: ValueType) -> None:
        self.value = value
        self.type = type

    def __repr__(self) -> str:
        return f'<Value value={self.value!r} type={self.type!r}>'

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Value):
            return False

        return self.value == other.value and self.type == other.type

    def __hash__(self) -> int:
        # Object payloads are mutable dicts, so they only contribute their type.
        if self.type is ValueType.Object:
            return hash(self.type)

        return hash((self.type, self.value))

    @classmethod
    def undefined(cls) -> Value[None]:
        return SPECIAL_VALUES['undefined']

    @classmethod
    def null(cls) -> Value[None]:
        return SPECIAL_VALUES['null']

    @classmethod
    def true(cls) -> Value[bool]:
        return SPECIAL_VALUES['true']

    @classmethod
    def false(cls) -> Value[bool]:
        return SPECIAL_VALUES['false']

    @classmethod
    def boolean(cls, value: bool) -> Value[bool]:
        return cls.true() if value else cls.false()

    @classmethod
    def number(cls, value: float) -> Value[float]:
        return cls(float(value), ValueType.Number)

    @classmethod
    def string(cls, value: str) -> Value[str]:
        return cls(value, ValueType.String)

    @classmethod
    def symbol(cls, description: Optional[str] = None) -> Value[Optional[str]]:
        return cls(description, ValueType.Symbol)

    @classmethod
    def object(cls, properties: Optional[Dict[str, Value]] = None) -> Value[Dict[str, Value]]:
        return cls(properties if properties is not None else {}, ValueType.Object)

    @classmethod
    def error(cls, message: str) -> Value[Dict[str, Value]]:
        return cls.object({'message': cls.string(message)})

    @property
    def is_error(self) -> bool:
        if self.type is not ValueType.Object:
            return False

        message = self.value.get('message')
        return message is not None and message.type is ValueType.String

    @property
    def message(self) -> Optional[str]:
        if not self.is_error:
            return None

        return self.value['message'].value

    def inspect(self) -> str:
        if self.type in (ValueType.Undefined, ValueType.Null):
            return str(self.type)
        elif self.type is ValueType.Boolean:
            return 'true' if self.value else 'false'
        elif self.type is ValueType.String:
            return self.value
        elif self.type is ValueType.Number:
            return format_number(self.value)
        elif self.type is ValueType.Symbol:
            if not self.value:
                return 'Symbol()'

            return f'Symbol({self.value})'

        if not self.value:
            return '{}'

        properties = ', '.join(f'{key}: {value.inspect()}' for key, value in self.value.items())
        return f'{{ {properties} }}'

SPECIAL_VALUES: Dict[str, Value[Any]] = {
    'undefined': Value(None, ValueType.Undefined),
    'null': Value(None, ValueType.Null),
    'true': Value(True, ValueType.Boolean),
    'false': Value(False, ValueType.Boolean),
}
