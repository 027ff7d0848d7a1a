import math

import pytest

from pyiniconf import InvalidValue, ValueConverter, converter_for, register_converter
from pyiniconf.ini.values import (
    BOOL, DOUBLE, FLOAT, INT8, INT, STRING, UINT16, UINT8, ArrayConverter
)


class TestBool:
    @pytest.mark.parametrize("text", ["true", "1", "on", "yes", "TRUE", "Yes"])
    def test_truthy(self, text: str) -> None:
        assert BOOL.from_value(text) is True

    @pytest.mark.parametrize("text", ["false", "0", "off", "no", "Off"])
    def test_falsy(self, text: str) -> None:
        assert BOOL.from_value(text) is False

    @pytest.mark.parametrize("text", ["maybe", "", "2", "y", "truee"])
    def test_other_text_fails(self, text: str) -> None:
        with pytest.raises(InvalidValue) as e:
            BOOL.from_value(text)

        assert e.value.target == "bool"

    def test_to_value(self) -> None:
        assert BOOL.to_value(True) == "true"
        assert BOOL.to_value(False) == "false"


class TestIntegers:
    def test_parse(self) -> None:
        assert INT.from_value("-42") == -42
        assert INT.from_value("+7") == 7
        assert UINT16.from_value("65535") == 65535

    @pytest.mark.parametrize("text", ["128", "-129"])
    def test_int8_overflow(self, text: str) -> None:
        with pytest.raises(InvalidValue):
            INT8.from_value(text)

    @pytest.mark.parametrize("text", ["-1", "256"])
    def test_uint8_out_of_range(self, text: str) -> None:
        with pytest.raises(InvalidValue):
            UINT8.from_value(text)

    @pytest.mark.parametrize("text", ["1.5", " 1", "1_000", "0x10", "", "ten"])
    def test_not_an_integer(self, text: str) -> None:
        with pytest.raises(InvalidValue):
            INT.from_value(text)

    def test_int64_bounds(self) -> None:
        assert INT.from_value("9223372036854775807") == 2 ** 63 - 1
        with pytest.raises(InvalidValue):
            INT.from_value("9223372036854775808")

    def test_to_value_checks_range(self) -> None:
        assert INT8.to_value(-128) == "-128"
        with pytest.raises(InvalidValue):
            INT8.to_value(300)


class TestFloats:
    @pytest.mark.parametrize("text,expected", [
        ("1.5", 1.5), ("-2", -2.0), (".5", 0.5), ("1e3", 1000.0),
        ("0x1p3", 8.0), ("inf", math.inf),
    ])
    def test_parse(self, text: str, expected: float) -> None:
        assert DOUBLE.from_value(text) == expected

    def test_nan(self) -> None:
        assert math.isnan(DOUBLE.from_value("nan"))

    @pytest.mark.parametrize("text", ["1e400", "abc", "1.5f", " 1.0", "1_0.0"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(InvalidValue):
            DOUBLE.from_value(text)

    def test_float32_overflow(self) -> None:
        with pytest.raises(InvalidValue) as e:
            FLOAT.from_value("1e39")

        assert e.value.target == "float32"

    def test_float32_is_narrowed(self) -> None:
        assert FLOAT.from_value("0.1") != 0.1
        assert FLOAT.to_value(FLOAT.from_value("0.1")) == "0.1"

    def test_to_value(self) -> None:
        assert DOUBLE.to_value(2.5) == "2.5"
        assert FLOAT.to_value(3) == "3.0"


class TestArrays:
    def test_integer_array(self) -> None:
        conv = converter_for(list[int])

        assert conv.from_value("1, 2, 3") == [1, 2, 3]
        assert conv.to_value([1, 2, 3]) == "1, 2, 3"

    def test_items_are_trimmed(self) -> None:
        assert converter_for(list[str]).from_value(" a ,b,  c") == ["a", "b", "c"]

    def test_one_bad_item_fails_all(self) -> None:
        with pytest.raises(InvalidValue) as e:
            converter_for(list[int]).from_value("1, two, 3")

        assert e.value.target == "array of int64"
        assert isinstance(e.value.__cause__, InvalidValue)

    def test_nested_names(self) -> None:
        conv = converter_for(list["uint8"])

        assert conv.from_value("0, 255") == [0, 255]
        with pytest.raises(InvalidValue):
            conv.from_value("0, 256")

    def test_bool_array(self) -> None:
        assert ArrayConverter(BOOL).from_value("yes, off") == [True, False]


class TestRegistry:
    def test_lookup_by_type_and_name(self) -> None:
        assert converter_for(str) is STRING
        assert converter_for(bool) is BOOL
        assert converter_for(int) is INT
        assert converter_for(float) is DOUBLE
        assert converter_for("float32") is FLOAT
        assert converter_for("uint16") is UINT16
        assert converter_for(INT8) is INT8

    def test_unknown(self) -> None:
        with pytest.raises(TypeError):
            converter_for(dict)
        with pytest.raises(TypeError):
            converter_for("int128")

    def test_register_third_party_type(self) -> None:
        class Level:
            def __init__(self, n: int) -> None:
                self.n = n

        class LevelConverter(ValueConverter[Level]):
            name = "level"

            def from_value(self, value: str) -> Level:
                if not value.startswith("L"):
                    raise InvalidValue(value, self.name)
                return Level(int(value[1:]))

            def to_value(self, obj: Level) -> str:
                return f"L{obj.n}"

        register_converter(Level, LevelConverter(), name="level")

        assert converter_for(Level).from_value("L3").n == 3
        assert converter_for("level").to_value(Level(5)) == "L5"
