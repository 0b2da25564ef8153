"""Compact binary records for currencies and money values.

Layout (big-endian):

    tag          1 byte    b"B" BigMoney, b"F" FixedMoney, b"M" Money, b"C" CurrencyUnit
    code         3 bytes   ASCII currency code
    numeric code 2 bytes   signed; -1 if the currency has none
    scale        2 bytes   signed; for b"C" the raw decimal places (-1 for pseudo-currencies)
    length       4 bytes   unsigned; number of bytes that follow
    unscaled     length    signed two's complement integer; empty for b"C"

Decoding checks the record against the registry as it is now: the numeric code must still be
the registered one, and a Money record must still have the currency's decimal places. Stale
records raise `InvalidatedRecordError` instead of silently producing a different amount.
"""

from __future__ import annotations

import struct

from suite_money.domain.monetary.big_money import BigMoney
from suite_money.domain.monetary.currency import CurrencyUnit
from suite_money.domain.monetary.currency_registry import CurrencyRegistry, resolve_currency
from suite_money.domain.monetary.fixed_money import FixedMoney
from suite_money.domain.monetary.money import Money
from suite_money.errors import InvalidArgumentError, InvalidatedRecordError, NullValueError, UnknownCurrencyError

BIG_MONEY_TAG = b"B"
FIXED_MONEY_TAG = b"F"
MONEY_TAG = b"M"
CURRENCY_UNIT_TAG = b"C"

_HEADER = struct.Struct(">c3shhI")
_MONEY_TAGS = (BIG_MONEY_TAG, FIXED_MONEY_TAG, MONEY_TAG)


def _int_to_bytes(value: int) -> bytes:
    # One extra bit for the sign, so 127 takes 1 byte and 128 takes 2
    return value.to_bytes((value.bit_length() + 8) // 8, "big", signed=True)


def encode(value: BigMoney | FixedMoney | Money | CurrencyUnit) -> bytes:
    """Encode a currency or money value as a binary record.

    Raises:
        NullValueError: If $value is None.
        TypeError: If $value is not a currency or money value.
        InvalidArgumentError: If the scale does not fit into the record.
    """
    # Raise: nothing to encode
    if value is None:
        raise NullValueError("Cannot call `encode` because $value is None")

    if isinstance(value, CurrencyUnit):
        return _HEADER.pack(CURRENCY_UNIT_TAG, value.code.encode("ascii"), value.numeric_code, value.default_fraction_digits, 0)

    if isinstance(value, Money):
        tag = MONEY_TAG
    elif isinstance(value, FixedMoney):
        tag = FIXED_MONEY_TAG
    elif isinstance(value, BigMoney):
        tag = BIG_MONEY_TAG
    else:
        raise TypeError(f"Cannot call `encode` because $value is not a currency or money value (got type '{type(value).__name__}')")

    money = value.to_big_money()
    unscaled = _int_to_bytes(money.unscaled_value)
    try:
        header = _HEADER.pack(tag, money.currency.code.encode("ascii"), money.currency.numeric_code, money.scale, len(unscaled))
    except struct.error as e:
        raise InvalidArgumentError(f"Cannot call `encode` because {money!r} does not fit into a record (scale {money.scale})") from e
    return header + unscaled


def decode(data: bytes, registry: CurrencyRegistry | None = None) -> BigMoney | FixedMoney | Money | CurrencyUnit:
    """Decode a binary record produced by `encode`.

    Args:
        data: Complete record.
        registry: Registry to validate against. If None, the default registry is used.

    Raises:
        NullValueError: If $data is None.
        InvalidatedRecordError: If $data is truncated, has an unknown tag, names an unknown
            currency, or no longer matches the registered currency metadata.
    """
    # Raise: nothing to decode
    if data is None:
        raise NullValueError("Cannot call `decode` because $data is None")

    data = bytes(data)

    # Raise: every record starts with a full header
    if len(data) < _HEADER.size:
        raise InvalidatedRecordError(f"Record is truncated: {len(data)} byte(s), header needs {_HEADER.size}")

    tag, code_bytes, numeric_code, scale, length = _HEADER.unpack_from(data)
    body = data[_HEADER.size :]

    # Raise: only known record types
    if tag != CURRENCY_UNIT_TAG and tag not in _MONEY_TAGS:
        raise InvalidatedRecordError(f"Record has unknown type tag {tag!r}")

    # Raise: the body must be exactly as long as announced
    if len(body) != length:
        raise InvalidatedRecordError(f"Record body has {len(body)} byte(s), but header announces {length}")

    try:
        currency = resolve_currency(code_bytes.decode("ascii"), registry)
    except (UnicodeDecodeError, UnknownCurrencyError) as e:
        raise InvalidatedRecordError(f"Record names unknown currency {code_bytes!r}") from e

    # Raise: the numeric code changed since the record was written
    if currency.numeric_code != numeric_code:
        raise InvalidatedRecordError(f"Record has numeric code {numeric_code} for {currency}, but registry has {currency.numeric_code}")

    if tag == CURRENCY_UNIT_TAG:
        # Raise: the decimal places changed since the record was written
        if scale != currency.default_fraction_digits or length != 0:
            raise InvalidatedRecordError(f"Record has decimal places {scale} for {currency}, but registry has {currency.default_fraction_digits}")
        return currency

    # Raise: money records never carry a negative scale
    if scale < 0:
        raise InvalidatedRecordError(f"Record has negative scale {scale}")

    money = BigMoney(currency, int.from_bytes(body, "big", signed=True), scale)
    if tag == BIG_MONEY_TAG:
        return money
    if tag == FIXED_MONEY_TAG:
        return FixedMoney(money)

    # Raise: Money must still be at the currency scale
    if scale != currency.decimal_places:
        raise InvalidatedRecordError(f"Record has scale {scale} for Money in {currency}, but currency has {currency.decimal_places} decimal places")
    return Money(money)
