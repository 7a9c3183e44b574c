import pytest
import serial

from pixmodem.parsers import (
    FlowControl,
    parse_baud_rate,
    parse_flow_control,
    parse_stop_bits,
    parse_width,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("5", serial.FIVEBITS),
        ("6", serial.SIXBITS),
        ("7", serial.SEVENBITS),
        ("8", serial.EIGHTBITS),
    ],
)
def test_parse_width(text, expected):
    assert parse_width(text) == expected


@pytest.mark.parametrize("text", ["4", "9", "", "eight"])
def test_parse_width_rejects(text):
    with pytest.raises(ValueError, match="value must be >= 5 and <= 8"):
        parse_width(text)


def test_parse_stop_bits():
    assert parse_stop_bits("1") == serial.STOPBITS_ONE
    assert parse_stop_bits("2") == serial.STOPBITS_TWO


def test_parse_stop_bits_rejects():
    with pytest.raises(ValueError, match="'1' or '2'"):
        parse_stop_bits("3")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("none", FlowControl.NONE),
        ("software", FlowControl.SOFTWARE),
        ("hardware", FlowControl.HARDWARE),
    ],
)
def test_parse_flow_control(text, expected):
    assert parse_flow_control(text) is expected


def test_parse_flow_control_rejects():
    with pytest.raises(ValueError, match="rts/cts"):
        parse_flow_control("Hardware")


def test_flow_control_flags():
    software = parse_flow_control("software")
    hardware = parse_flow_control("hardware")
    none = parse_flow_control("none")
    assert software.xonxoff is True and software.rtscts is False
    assert hardware.rtscts is True and hardware.xonxoff is False
    assert none.xonxoff is False and none.rtscts is False


def test_parse_baud_rate():
    assert parse_baud_rate("115200") == 115200
    assert parse_baud_rate("+9600") == 9600


@pytest.mark.parametrize("text", ["abc", "-1", "12 ", "+", "1_000"])
def test_parse_baud_rate_invalid_digit(text):
    with pytest.raises(ValueError, match="invalid digit"):
        parse_baud_rate(text)


def test_parse_baud_rate_empty():
    with pytest.raises(ValueError, match="empty string"):
        parse_baud_rate("")


def test_parse_baud_rate_too_large():
    with pytest.raises(ValueError, match="too large"):
        parse_baud_rate("1" * 30)