"""Width-bounded unsigned integers with checked arithmetic.

SafeUint wraps a Python int together with a bit width and makes every
operation behave like a checked machine integer of that width:
- Addition and multiplication past 2^bits - 1 raise Overflow
- Subtraction below zero raises Underflow
- Division by zero raises DivisionByZero

Usage pattern:
    from lbpmath.safe_int import SafeUint

    def ratio(a: int, b: int, c: int) -> int:
        # Wrap at entry (raises Overflow if a value does not fit u128)
        sa, sb, sc = SafeUint(a), SafeUint(b), SafeUint(c)

        # Natural arithmetic - every step is checked against 128 bits
        result = (sa * sb) // sc

        # Unwrap at exit
        return result.value
"""

from __future__ import annotations

from .errors import DivisionByZero, Overflow, Underflow

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1


class SafeUint:
    """Unsigned integer of a fixed bit width with checked arithmetic.

    The result of a binary operation has the width of the left operand.
    The right operand may be a plain int or a SafeUint of any width; only
    its value is used.

    Attributes:
        value: The underlying integer value (read-only)
        bits: The bit width the value is checked against (read-only)
    """

    __slots__ = ("_value", "_bits")
    _value: int
    _bits: int

    def __init__(self, value: int | SafeUint, bits: int = 128) -> None:
        """Create a SafeUint, validating that the value fits the width.

        Raises:
            TypeError: If value is not an int or SafeUint
            ValueError: If bits is not positive
            Overflow: If value is negative or exceeds 2^bits - 1
        """
        if isinstance(value, SafeUint):
            value = value._value
        elif not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"SafeUint requires int, got {type(value).__name__}")
        if bits <= 0:
            raise ValueError(f"SafeUint width must be positive, got {bits}")
        if value < 0:
            raise Underflow(f"Negative value cannot be u{bits}: {value}")
        if value >> bits:
            raise Overflow(f"Value exceeds u{bits} max: {value}")
        self._value = value
        self._bits = bits

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    @property
    def bits(self) -> int:
        """The bit width of this integer."""
        return self._bits

    def __repr__(self) -> str:
        return f"SafeUint({self._value}, bits={self._bits})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def _new(self, value: int) -> SafeUint:
        return SafeUint(value, self._bits)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeUint | int) -> SafeUint:
        """Add two values.

        Raises:
            Overflow: If the sum exceeds the width
        """
        other_val = _extract_value(other)
        result = self._value + other_val
        if result >> self._bits:
            raise Overflow(f"Overflow: {self._value} + {other_val} exceeds u{self._bits}")
        return self._new(result)

    def __sub__(self, other: SafeUint | int) -> SafeUint:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return self._new(result)

    def __mul__(self, other: SafeUint | int) -> SafeUint:
        """Multiply two values.

        Raises:
            Overflow: If the product exceeds the width
        """
        other_val = _extract_value(other)
        result = self._value * other_val
        if result >> self._bits:
            raise Overflow(f"Overflow: {self._value} * {other_val} exceeds u{self._bits}")
        return self._new(result)

    def __floordiv__(self, other: SafeUint | int) -> SafeUint:
        """Integer division (truncates; operands are non-negative).

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return self._new(self._value // other_val)

    def __truediv__(self, other: object) -> SafeUint:
        raise TypeError("SafeUint does not support true division, use //")

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeUint):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: SafeUint | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeUint | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeUint | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeUint | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def cast(self, bits: int) -> SafeUint:
        """Re-check the value against another width.

        Raises:
            Overflow: If the value does not fit the new width
        """
        return SafeUint(self._value, bits)

    def ceiling_div(self, other: SafeUint | int) -> SafeUint:
        """Ceiling division (rounds up).

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        return self._new(-(-self._value // other_val))


def _extract_value(x: SafeUint | int) -> int:
    """Extract integer value from SafeUint or int."""
    if isinstance(x, SafeUint):
        return x._value
    return x
