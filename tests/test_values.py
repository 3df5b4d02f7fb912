import pytest
import sys
import logging
from datetime import timedelta
from pathlib import Path

# Настройка логирования
log = logging.getLogger(__name__)
log.setLevel(logging.DEBUG)
# Добавляем путь к src в PYTHONPATH
src_path = str(Path(__file__).parent.parent / 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from flagconfig import (
    AttrCell, Cell, ConfigurationError, Duration, Kind, ParseError, TypedValue,
    HOUR, MICROSECOND, MILLISECOND, MINUTE, SECOND,
    format_duration, parse_duration,
)
from flagconfig.values import UINT64_MAX, parse, render


@pytest.mark.parametrize('text', ['1', 't', 'T', 'true', 'TRUE', 'True'])
def test_bool_true_literals(text):
    assert parse(Kind.BOOL, text) is True


@pytest.mark.parametrize('text', ['0', 'f', 'F', 'false', 'FALSE', 'False'])
def test_bool_false_literals(text):
    assert parse(Kind.BOOL, text) is False


@pytest.mark.parametrize('text', ['yes', 'no', 'tRUE', '', ' true', '2'])
def test_bool_rejects_other_text(text):
    """Любой текст вне списка литералов - ошибка"""
    with pytest.raises(ParseError):
        parse(Kind.BOOL, text)


def test_int_numeral_notations():
    """Десятичная, восьмеричная (с ведущим 0) и шестнадцатеричная запись"""
    assert parse(Kind.INT, '1234') == 1234
    assert parse(Kind.INT, '-42') == -42
    assert parse(Kind.INT, '+7') == 7
    assert parse(Kind.INT, '0664') == 0o664
    assert parse(Kind.INT, '0x1234') == 0x1234
    assert parse(Kind.INT, '0XfF') == 255
    assert parse(Kind.INT, '-0x10') == -16
    assert parse(Kind.INT, '0') == 0


def test_int_range_and_syntax():
    assert parse(Kind.INT64, '9223372036854775807') == 2 ** 63 - 1
    assert parse(Kind.INT64, '-9223372036854775808') == -2 ** 63
    for text in ['9223372036854775808', '-9223372036854775809', '08', '1.5', '', 'abc', '0x', ' 1']:
        with pytest.raises(ParseError):
            parse(Kind.INT, text)


def test_int_out_of_range_reason():
    with pytest.raises(ParseError) as exc:
        parse(Kind.INT, '99999999999999999999')
    assert exc.value.reason == 'value out of range'
    assert exc.value.kind == 'int'


def test_uint_rejects_signs_and_overflow():
    """Беззнаковые типы не принимают знак вообще"""
    assert parse(Kind.UINT, '18446744073709551615') == UINT64_MAX
    assert parse(Kind.UINT64, '0x10') == 16
    for text in ['-1', '+1', '18446744073709551616']:
        with pytest.raises(ParseError):
            parse(Kind.UINT64, text)


def test_float_parsing():
    assert parse(Kind.FLOAT64, '3.14') == 3.14
    assert parse(Kind.FLOAT64, '-2.5e-3') == -0.0025
    assert parse(Kind.FLOAT64, '1E6') == 1e6
    assert parse(Kind.FLOAT64, '+Inf') == float('inf')
    for text in ['abc', '', ' 1.0', '1_000.0', '1e400', '1.2.3']:
        with pytest.raises(ParseError):
            parse(Kind.FLOAT64, text)


def test_float_rendering():
    assert render(Kind.FLOAT64, 3.14) == '3.14'
    assert render(Kind.FLOAT64, 5.0) == '5'
    assert render(Kind.FLOAT64, 1e21) == '1e+21'
    assert render(Kind.FLOAT64, float('-inf')) == '-Inf'
    assert render(Kind.FLOAT64, float('nan')) == 'NaN'


def test_string_is_verbatim():
    assert parse(Kind.STRING, '  "a # b = c"  ') == '  "a # b = c"  '


def test_duration_parsing():
    """Длительности: сумма пар число+единица"""
    assert parse_duration('5s') == 5 * SECOND
    assert parse_duration('1h30m') == 90 * MINUTE
    assert parse_duration('1.5h') == 90 * MINUTE
    assert parse_duration('-1.5h') == -90 * MINUTE
    assert parse_duration('300ms') == 300 * MILLISECOND
    assert parse_duration('.5s') == 500 * MILLISECOND
    assert parse_duration('1us') == MICROSECOND
    assert parse_duration('1µs') == MICROSECOND
    assert parse_duration('2h45m10.5s') == 2 * HOUR + 45 * MINUTE + 10 * SECOND + 500 * MILLISECOND
    assert parse_duration('0') == 0
    assert parse_duration('+0') == 0
    assert parse_duration('2562047h47m16.854775807s') == 2 ** 63 - 1
    assert parse_duration('-2562047h47m16.854775808s') == -2 ** 63


@pytest.mark.parametrize('text', ['', '5', '5x', '.s', 's', '1h-5m', '2562047h47m16.854775808s', '-'])
def test_duration_parse_errors(text):
    with pytest.raises(ParseError):
        parse_duration(text)


def test_duration_formatting():
    assert format_duration(0) == '0s'
    assert format_duration(5 * SECOND) == '5s'
    assert format_duration(90 * MINUTE) == '1h30m'
    assert format_duration(HOUR) == '1h'
    assert format_duration(HOUR + 5 * SECOND) == '1h5s'
    assert format_duration(1500 * MILLISECOND) == '1.5s'
    assert format_duration(-90 * SECOND) == '-1m30s'
    assert format_duration(1500) == '1.5µs'
    assert format_duration(2 * MILLISECOND + 1) == '2.000001ms'
    assert format_duration(12) == '12ns'


@pytest.mark.parametrize('kind, text', [
    (Kind.BOOL, 'T'),
    (Kind.INT, '0x7fffffffffffffff'),
    (Kind.INT64, '-0755'),
    (Kind.UINT, '18446744073709551615'),
    (Kind.FLOAT64, '0.1'),
    (Kind.FLOAT64, '6.02214076e23'),
    (Kind.DURATION, '2h0m0.000000001s'),
    (Kind.DURATION, '-1.5µs'),
])
def test_render_parses_back_to_same_value(kind, text):
    """Вывод значения снова разбирается в то же самое значение"""
    value = parse(kind, text)
    rendered = render(kind, value)
    assert parse(kind, rendered) == value
    assert render(kind, parse(kind, rendered)) == rendered


def test_duration_type():
    d = Duration('1h30m')
    assert d == 90 * MINUTE
    assert str(d) == '1h30m'
    assert repr(d) == "Duration('1h30m')"
    assert d.total_seconds() == 5400.0
    assert d.to_timedelta() == timedelta(minutes=90)
    assert Duration(timedelta(seconds=1, microseconds=5)) == SECOND + 5 * MICROSECOND
    assert Duration(-1500).to_timedelta() == timedelta(microseconds=-1)
    with pytest.raises(TypeError):
        Duration(1.5)
    with pytest.raises(OverflowError):
        Duration(2 ** 63)


def test_typed_value_sets_default_into_cell():
    cell = Cell()
    value = TypedValue(Kind.INT, cell, 1234)
    assert cell.value == 1234
    assert str(value) == '1234'
    assert not value.is_bool
    value.set('0x10')
    assert cell.value == 16
    assert value.get() == 16


def test_typed_value_keeps_cell_on_error():
    """Ошибка разбора не меняет хранимое значение"""
    cell = Cell()
    value = TypedValue(Kind.UINT, cell, 5)
    with pytest.raises(ParseError):
        value.set('-1')
    assert cell.value == 5


def test_typed_value_bad_defaults():
    for kind, default in [(Kind.INT, 'x'), (Kind.INT, 1.5), (Kind.UINT, -1),
                          (Kind.BOOL, 'yes'), (Kind.STRING, 5),
                          (Kind.DURATION, 'forever'), (Kind.FLOAT64, '1.0')]:
        with pytest.raises(ConfigurationError):
            TypedValue(kind, Cell(), default)


def test_duration_default_forms():
    assert TypedValue(Kind.DURATION, Cell(), timedelta(minutes=1)).get() == MINUTE
    assert TypedValue(Kind.DURATION, Cell(), '250ms').get() == 250 * MILLISECOND
    value = TypedValue(Kind.DURATION, Cell(), 5 * SECOND)
    assert isinstance(value.get(), Duration)
    assert value.native() == '5s'


def test_attr_cell_writes_through():
    """AttrCell хранит значение в атрибуте другого объекта"""
    class Settings:
        port = 0

    settings = Settings()
    value = TypedValue(Kind.INT, AttrCell(settings, 'port'), 8080)
    assert settings.port == 8080
    value.set('9090')
    assert settings.port == 9090


def test_huge_numerals_are_out_of_range():
    """Очень длинные числа - ошибка диапазона, а не сбой int()"""
    for kind in (Kind.INT, Kind.INT64, Kind.UINT, Kind.UINT64):
        with pytest.raises(ParseError) as exc:
            parse(kind, '1' * 5000)
        assert exc.value.reason == 'value out of range'
    with pytest.raises(ParseError, match='out of range'):
        parse(Kind.INT, '0x' + 'f' * 5000)
    # ведущие нули не считаются
    assert parse(Kind.INT, '0x' + '0' * 100 + '1') == 1
    assert parse(Kind.UINT64, '0b' + '1' * 64) == UINT64_MAX


def test_huge_duration_parts():
    with pytest.raises(ParseError, match='out of range'):
        parse_duration('1' * 5000 + 's')
    with pytest.raises(ParseError, match='out of range'):
        parse_duration('10000000000000000000ns')
    assert parse_duration('0' * 100 + '5s') == 5 * SECOND
    # лишние знаки дробной части отбрасываются
    assert parse_duration('1.' + '5' * 5000 + 's') == SECOND + 555555555


def test_float_rejects_non_ascii_digits():
    """Только ASCII-запись числа"""
    for text in ['١٢٣', '１２３', '3.١٤']:
        with pytest.raises(ParseError):
            parse(Kind.FLOAT64, text)
