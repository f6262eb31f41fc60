from pytest import raises

from splitaln_utilities.utilities import escape, parse_region, unknown_bases


def test_escape():
    assert escape("read_1.a:b") == "read_1.a:b"
    assert escape("a b;c=d,e") == "a%20b%3Bc%3Dd%2Ce"
    assert escape("50%") == "50%25"
    assert escape(12) == "12"


def test_parse_region():
    assert parse_region("chr1") == ("chr1", None, None)
    assert parse_region("chr1:100") == ("chr1", 100, None)
    assert parse_region("chr1:100-200") == ("chr1", 100, 200)
    assert parse_region("chr1:1,000-2,000") == ("chr1", 1000, 2000)


def test_parse_region_invalid():
    with raises(ValueError):
        parse_region("chr1:200-100")
    with raises(ValueError):
        parse_region("chr1:0-100")


def test_unknown_bases():
    assert unknown_bases(3) == "NNN"
    assert unknown_bases(-1) == ""
