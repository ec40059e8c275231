import pytest

from validators import is_email_valid


def test_accepts_short_address():
    assert is_email_valid("a@b.co")


@pytest.mark.parametrize("candidate", ["not-an-email", "a@@b.com", "", "ab", "@b.co", "a@-b.co"])
def test_rejects_malformed(candidate):
    assert not is_email_valid(candidate)


def test_rejects_too_long():
    candidate = "a" * 250 + "@b.co"
    assert len(candidate) > 254
    assert not is_email_valid(candidate)


def test_accepts_length_limit():
    candidate = "a" * 249 + "@b.co"
    assert len(candidate) == 254
    assert is_email_valid(candidate)


def test_local_part_symbols_and_dots():
    assert is_email_valid("first.last+tag@mail.example.org")


def test_uppercase_only_address_is_rejected():
    assert not is_email_valid("A@B.CO")


def test_non_string():
    assert not is_email_valid(None)
