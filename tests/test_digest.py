import pytest

from turboxsl.digest import md5_digest, md5_hex, signature_from_string, signature_to_string

RFC_CASES = [
    ("", "d41d8cd98f00b204e9800998ecf8427e"),
    ("a", "0cc175b9c0f1b6a831c399e269772661"),
    ("abc", "900150983cd24fb0d6963f7d28e17f72"),
    ("message digest", "f96b697d7cb7938d525a2f31aaf161d0"),
    ("abcdefghijklmnopqrstuvwxyz", "c3fcd3d76192e4007dfb496cca67e13b"),
    (
        "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
        "d174ab98d277d9f5a5611c2c9f419d9f",
    ),
    (
        "1234567890" * 8,
        "57edf4a22be3c955ac49da2e2107b67a",
    ),
]


@pytest.mark.parametrize("message, expected", RFC_CASES)
def test_rfc_suite(message, expected):
    assert signature_to_string(md5_digest(message)) == expected


def test_bytes_and_text_agree():
    assert md5_digest(b"abc") == md5_digest("abc")
    assert len(md5_digest(b"abc")) == 16


@pytest.mark.parametrize("message, expected", RFC_CASES)
def test_round_trip(message, expected):
    signature = signature_from_string(expected)
    assert signature == md5_digest(message)
    assert signature_to_string(signature) == expected


def test_from_string_rejects_bad_digit():
    with pytest.raises(ValueError):
        signature_from_string("z" * 32)


def test_from_string_rejects_short_text():
    with pytest.raises(ValueError):
        signature_from_string("abc")


def test_to_string_rejects_short_signature():
    with pytest.raises(ValueError):
        signature_to_string(b"\x00" * 4)


def test_md5_hex_concatenates_and_skips_none():
    assert md5_hex("message", None, " ", "digest") == "f96b697d7cb7938d525a2f31aaf161d0"
    assert md5_hex() == "d41d8cd98f00b204e9800998ecf8427e"
    assert md5_hex("ab", "c") == md5_hex("abc")