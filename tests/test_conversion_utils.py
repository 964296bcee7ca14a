from decimal import Decimal, localcontext

import pytest

from utils.conversion_utils import (
    ConversionContext,
    InvalidFormat,
    PrecisionOverflow,
    convert_amount_from_smallest_unit,
    convert_amount_to_smallest_unit,
    parse_smallest_unit,
    sum_smallest_units,
)


@pytest.mark.parametrize(
    "amount, expected",
    [
        ("100.0", "100000000000000000000"),
        ("0.000001", "1000000000000"),
        ("250", "250" + "0" * 18),
        (250, "250" + "0" * 18),
        ("0", "0"),
        ("0.0", "0"),
        ("000.5", "500000000000000000"),
        ("5.", "5000000000000000000"),
        (".5", "500000000000000000"),
        ("0.000000000000000001", "1"),
        ("123456789012345678901234567890.123456789012345678", "123456789012345678901234567890123456789012345678"),
    ],
)
def test_to_smallest_unit(amount, expected):
    assert convert_amount_to_smallest_unit(amount, 18) == expected


def test_float_and_decimal_inputs_use_their_decimal_text():
    assert convert_amount_to_smallest_unit(100.0, 18) == "100000000000000000000"
    assert convert_amount_to_smallest_unit(0.1, 18) == "100000000000000000"
    # repr(1e-07) is '1e-07'
    assert convert_amount_to_smallest_unit(1e-07, 18) == "100000000000"
    assert convert_amount_to_smallest_unit(Decimal("1.5"), 6) == "1500000"


def test_excess_precision_is_rejected():
    with pytest.raises(PrecisionOverflow):
        convert_amount_to_smallest_unit("1.1234567890123456789", 18)
    with pytest.raises(PrecisionOverflow):
        convert_amount_to_smallest_unit("0.1234567", 6)


def test_trailing_fraction_zeros_do_not_count_as_precision():
    assert convert_amount_to_smallest_unit("1.5000000", 6) == "1500000"


@pytest.mark.parametrize(
    "amount",
    ["abc", "-5.0", "", ".", "1.2.3", "1e18", " 1", "1 ", "+1", "1,000", "1.0\n", -1, True, None, float("nan"), float("inf"), [1]],
)
def test_malformed_amounts_are_rejected(amount):
    with pytest.raises(InvalidFormat):
        convert_amount_to_smallest_unit(amount, 18)


def test_error_keeps_raw_value():
    with pytest.raises(InvalidFormat) as exc_info:
        convert_amount_to_smallest_unit("abc", 18)
    assert exc_info.value.value == "abc"
    assert "'abc'" in str(exc_info.value)


@pytest.mark.parametrize(
    "amount_smallest, decimals, expected",
    [
        ("100000000000000000000", 18, "100.0"),
        ("100000001000000000000", 18, "100.000001"),
        ("1", 18, "0.000000000000000001"),
        ("0", 18, "0.0"),
        (0, 18, "0.0"),
        (1500000, 6, "1.5"),
        ("0042", 0, "42"),
    ],
)
def test_from_smallest_unit(amount_smallest, decimals, expected):
    assert convert_amount_from_smallest_unit(amount_smallest, decimals) == expected


@pytest.mark.parametrize("amount_smallest", ["1.5", "-1", -1, "", "abc", 1.0, True])
def test_from_smallest_unit_rejects_non_integers(amount_smallest):
    with pytest.raises(InvalidFormat):
        convert_amount_from_smallest_unit(amount_smallest, 18)


@pytest.mark.parametrize(
    "amount",
    ["0", "1", "100.0", "0.000001", "123.456", "98765432109876543210.000000000000000001"],
)
def test_round_trip(amount):
    smallest = convert_amount_to_smallest_unit(amount, 18)
    readable = convert_amount_from_smallest_unit(smallest, 18)
    assert Decimal(readable) == Decimal(amount)
    assert convert_amount_to_smallest_unit(readable, 18) == smallest


def test_sum_is_exact():
    amounts = ["0.1"] * 1000 + ["12345678901234567890.123456789012345678"]
    total = sum_smallest_units(convert_amount_to_smallest_unit(a, 18) for a in amounts)
    with localcontext() as ctx:
        ctx.prec = 100
        exact = sum((Decimal(a) for a in amounts), Decimal(0))
    assert total == convert_amount_to_smallest_unit(exact, 18)
    assert total == "12345678901234567990123456789012345678"


def test_sum_of_nothing_is_zero():
    assert sum_smallest_units([]) == "0"


def test_sum_accepts_ints_and_strings():
    assert sum_smallest_units([1, "2", "0003"]) == "6"


def test_sum_rejects_invalid_amounts():
    with pytest.raises(InvalidFormat):
        sum_smallest_units(["1", "1.5"])


def test_conversion_context():
    context = ConversionContext(decimals=6)
    assert context.to_smallest_unit("2.5") == "2500000"
    assert context.from_smallest_unit("2500000") == "2.5"
    assert ConversionContext().decimals == 18


@pytest.mark.parametrize("decimals", [-1, 1.5, "18", True])
def test_conversion_context_rejects_bad_decimals(decimals):
    with pytest.raises(ValueError):
        ConversionContext(decimals=decimals)


def test_conversion_context_is_immutable():
    context = ConversionContext()
    with pytest.raises(AttributeError):
        context.decimals = 6


def test_amount_above_uint256_is_rejected():
    max_uint256 = 2 ** 256 - 1
    assert convert_amount_to_smallest_unit(str(max_uint256), 0) == str(max_uint256)

    with pytest.raises(InvalidFormat) as exc_info:
        convert_amount_to_smallest_unit(str(max_uint256 + 1), 0)
    assert "uint256" in exc_info.value.message


@pytest.mark.parametrize(
    "amount",
    ["9" * 4400, "1" + "0" * 60, 10 ** 80, 1e300],
    ids=["4400-digits", "79-digit-result", "int", "float"],
)
def test_oversized_amounts_raise_invalid_format(amount):
    with pytest.raises(InvalidFormat):
        convert_amount_to_smallest_unit(amount, 18)


def test_leading_zeros_do_not_count_towards_uint256_limit():
    assert convert_amount_to_smallest_unit("0" * 5000 + "1", 18) == "1" + "0" * 18


@pytest.mark.parametrize(
    "amount_smallest",
    [2 ** 256, str(2 ** 256), "9" * 4400, 10 ** 5000],
    ids=["int", "str", "4400-digit-str", "5001-digit-int"],
)
def test_parse_smallest_unit_rejects_values_above_uint256(amount_smallest):
    with pytest.raises(InvalidFormat):
        parse_smallest_unit(amount_smallest)


def test_parse_smallest_unit_accepts_uint256_max():
    assert parse_smallest_unit(str(2 ** 256 - 1)) == 2 ** 256 - 1
