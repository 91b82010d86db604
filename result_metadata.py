from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class MetadataType(Enum):
    BOOLEAN = "BOOLEAN"
    BYTE = "BYTE"
    SHORT = "SHORT"
    CHAR = "CHAR"
    INT = "INT"
    FLOAT = "FLOAT"
    LONG = "LONG"
    DOUBLE = "DOUBLE"
    STRING = "STRING"
    STRING_LIST = "STRING_LIST"
    INTEGER_LIST = "INTEGER_LIST"


class MissingMetadataError(KeyError):
    """Raised when a key is read without a default and is not present"""

    def __str__(self) -> str:
        # KeyError would otherwise quote the whole message
        return str(self.args[0])


class MetadataTypeError(TypeError):
    """Raised when a key holds a value of a different kind than requested"""


_INTEGRAL_RANGES = {
    MetadataType.BYTE: (-(1 << 7), (1 << 7) - 1),
    MetadataType.SHORT: (-(1 << 15), (1 << 15) - 1),
    # Colors are stored as unsigned 0xAARRGGBB values
    MetadataType.INT: (-(1 << 31), (1 << 32) - 1),
    MetadataType.LONG: (-(1 << 63), (1 << 64) - 1),
}

_MISSING = object()


@dataclass(frozen=True)
class _TypedValue:
    type: MetadataType
    value: Any


class ResultMetadata:
    """
    Open map of check-specific result data. Every value is tagged with one of a
    small closed set of kinds, and every getter insists on the kind it asks for.
    """

    def __init__(self):
        self._values: Dict[str, _TypedValue] = {}

    # Writers

    def put_boolean(self, key: str, value: bool) -> None:
        if not isinstance(value, bool):
            raise MetadataTypeError(f"BOOLEAN value expected for key '{key}', got {value!r}")
        self._put(key, MetadataType.BOOLEAN, value)

    def put_byte(self, key: str, value: int) -> None:
        self._put_integral(key, MetadataType.BYTE, value)

    def put_short(self, key: str, value: int) -> None:
        self._put_integral(key, MetadataType.SHORT, value)

    def put_char(self, key: str, value: str) -> None:
        if not isinstance(value, str) or len(value) != 1:
            raise MetadataTypeError(f"CHAR value expected for key '{key}', got {value!r}")
        self._put(key, MetadataType.CHAR, value)

    def put_int(self, key: str, value: int) -> None:
        self._put_integral(key, MetadataType.INT, value)

    def put_long(self, key: str, value: int) -> None:
        self._put_integral(key, MetadataType.LONG, value)

    def put_float(self, key: str, value: float) -> None:
        self._put_real(key, MetadataType.FLOAT, value)

    def put_double(self, key: str, value: float) -> None:
        self._put_real(key, MetadataType.DOUBLE, value)

    def put_string(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise MetadataTypeError(f"STRING value expected for key '{key}', got {value!r}")
        self._put(key, MetadataType.STRING, value)

    def put_string_list(self, key: str, value: List[str]) -> None:
        if not all(isinstance(v, str) for v in value):
            raise MetadataTypeError(f"STRING_LIST value expected for key '{key}'")
        self._put(key, MetadataType.STRING_LIST, list(value))

    def put_integer_list(self, key: str, value: List[int]) -> None:
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in value):
            raise MetadataTypeError(f"INTEGER_LIST value expected for key '{key}'")
        self._put(key, MetadataType.INTEGER_LIST, list(value))

    # Readers

    def get_boolean(self, key: str, default: Any = _MISSING) -> bool:
        return self._get(key, MetadataType.BOOLEAN, default)

    def get_byte(self, key: str, default: Any = _MISSING) -> int:
        return self._get(key, MetadataType.BYTE, default)

    def get_short(self, key: str, default: Any = _MISSING) -> int:
        return self._get(key, MetadataType.SHORT, default)

    def get_char(self, key: str, default: Any = _MISSING) -> str:
        return self._get(key, MetadataType.CHAR, default)

    def get_int(self, key: str, default: Any = _MISSING) -> int:
        return self._get(key, MetadataType.INT, default)

    def get_long(self, key: str, default: Any = _MISSING) -> int:
        return self._get(key, MetadataType.LONG, default)

    def get_float(self, key: str, default: Any = _MISSING) -> float:
        return self._get(key, MetadataType.FLOAT, default)

    def get_double(self, key: str, default: Any = _MISSING) -> float:
        return self._get(key, MetadataType.DOUBLE, default)

    def get_string(self, key: str, default: Any = _MISSING) -> str:
        return self._get(key, MetadataType.STRING, default)

    def get_string_list(self, key: str, default: Any = _MISSING) -> List[str]:
        return self._get(key, MetadataType.STRING_LIST, default)

    def get_integer_list(self, key: str, default: Any = _MISSING) -> List[int]:
        return self._get(key, MetadataType.INTEGER_LIST, default)

    def get_type(self, key: str) -> Optional[MetadataType]:
        typed_value = self._values.get(key)
        return typed_value.type if typed_value is not None else None

    def contains_key(self, key: str) -> bool:
        return key in self._values

    def is_empty(self) -> bool:
        return not self._values

    def keys(self) -> List[str]:
        return list(self._values)

    def copy(self) -> "ResultMetadata":
        """Shallow copy; list values get their own list object"""
        clone = ResultMetadata()
        for key, typed_value in self._values.items():
            value = typed_value.value
            if isinstance(value, list):
                value = list(value)
            clone._values[key] = _TypedValue(typed_value.type, value)
        return clone

    def to_dict(self) -> Dict[str, Any]:
        return {
            key: {'type': tv.type.value, 'value': tv.value}
            for key, tv in self._values.items()
        }

    def __contains__(self, key: str) -> bool:
        return self.contains_key(key)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResultMetadata):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        body = ", ".join(f"{k}={tv.type.value}:{tv.value!r}" for k, tv in self._values.items())
        return f"ResultMetadata({body})"

    def _put(self, key: str, value_type: MetadataType, value: Any) -> None:
        self._values[key] = _TypedValue(value_type, value)

    def _put_integral(self, key: str, value_type: MetadataType, value: int) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise MetadataTypeError(f"{value_type.value} value expected for key '{key}', got {value!r}")
        low, high = _INTEGRAL_RANGES[value_type]
        if not low <= value <= high:
            raise ValueError(f"{value_type.value} value {value} out of range for key '{key}'")
        self._put(key, value_type, value)

    def _put_real(self, key: str, value_type: MetadataType, value: float) -> None:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise MetadataTypeError(f"{value_type.value} value expected for key '{key}', got {value!r}")
        self._put(key, value_type, float(value))

    def _get(self, key: str, value_type: MetadataType, default: Any) -> Any:
        typed_value = self._values.get(key)
        if typed_value is None:
            if default is _MISSING:
                raise MissingMetadataError(f"No ResultMetadata element found for key '{key}'.")
            return default
        if typed_value.type != value_type:
            raise MetadataTypeError(
                f"Invalid type '{value_type.value}' requested from ResultMetadata for key "
                f"'{key}'.  Found type '{typed_value.type.value}' instead."
            )
        if value_type in (MetadataType.STRING_LIST, MetadataType.INTEGER_LIST):
            return list(typed_value.value)
        return typed_value.value
