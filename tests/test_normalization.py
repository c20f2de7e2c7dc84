import pytest

from data_cleaner.normalization import (
    clean_phone_number,
    is_valid_e164,
    is_valid_email,
    normalize_email,
    parse_name,
    parse_phone_number,
    parse_username,
)


@pytest.mark.parametrize(
    "raw,country,expected",
    [
        ("(555) 000-1111", "1", "+15550001111"),
        ("1-555-000-1111", "1", "+15550001111"),
        ("+44 20 7946 0958", "1", "+442079460958"),
        ("07946095800", "44", "+447946095800"),
        ("447946095800", "1", "+447946095800"),
        ("2079460958", "44", "+442079460958"),
        ("000-1111", "1", "+10001111"),
    ],
)
def test_clean_phone_number_rules(raw, country, expected):
    assert clean_phone_number(raw, country) == expected


def test_clean_phone_number_leaves_unrecognized_input():
    assert clean_phone_number("12345") == "12345"
    assert clean_phone_number("1234567890123456") == "1234567890123456"
    assert clean_phone_number("21234567890") == "21234567890"
    assert clean_phone_number("call me") == "call me"
    assert clean_phone_number("") == ""
    assert clean_phone_number(None) == ""


def test_is_valid_e164():
    assert is_valid_e164("+15550001111")
    assert not is_valid_e164("15550001111")
    assert not is_valid_e164("+05550001111")
    assert not is_valid_e164(None)


def test_parse_phone_number_us():
    parsed = parse_phone_number("(555) 000-1234")
    assert parsed.e164 == "+15550001234"
    assert parsed.country_code == "1"
    assert parsed.area_code == "555"
    assert parsed.local_number == "0001234"
    assert parsed.national == "(555) 000-1234"
    assert parsed.international == "+1 555 000 1234"
    assert parsed.is_valid


def test_parse_phone_number_with_country_and_extension():
    parsed = parse_phone_number("+44 20 7946 0958 ext. 123")
    assert parsed.country_code == "44"
    assert parsed.area_code == "207"
    assert parsed.local_number == "9460958"
    assert parsed.extension == "123"
    assert parsed.e164 == "+442079460958"
    assert parsed.national == "(207) 946-0958 ext. 123"
    assert parsed.international == "+44 207 946 0958 ext. 123"


def test_parse_phone_number_short_local():
    parsed = parse_phone_number("555-1234")
    assert parsed.area_code == ""
    assert parsed.local_number == "5551234"
    assert parsed.national == "555-1234"
    assert parsed.international == "+1 5551234"


def test_parse_phone_number_country_prefixes():
    assert parse_phone_number("+919876543210").country_code == "91"
    assert parse_phone_number("+8613812345678").country_code == "86"
    parsed = parse_phone_number("+7 912 345 6789")
    assert parsed.country_code == "7"
    assert parsed.national == "(912) 345-6789"


def test_parse_phone_number_extension_marker_x():
    parsed = parse_phone_number("555-000-1234 x89")
    assert parsed.extension == "89"
    assert parsed.national == "(555) 000-1234 ext. 89"


def test_parse_phone_number_ignores_x_inside_words():
    parsed = parse_phone_number("Fax 555-000-1234")
    assert parsed.extension == ""
    assert parsed.e164 == "+15550001234"
    assert parsed.national == "(555) 000-1234"

    parsed = parse_phone_number("Box 555-000-1234 ext.7")
    assert parsed.extension == "7"
    assert parsed.e164 == "+15550001234"


def test_parse_phone_number_rejects_out_of_range_lengths():
    parsed = parse_phone_number("123")
    assert parsed.original == "123"
    assert parsed.e164 == ""
    assert not parsed.is_valid
    assert parse_phone_number("x89").extension == ""
    assert parse_phone_number(None).to_dict() == parse_phone_number("").to_dict()


def test_normalize_email():
    assert normalize_email("  John.Doe@GMIAL.COM  ") == "john.doe@gmail.com"
    assert normalize_email("jane@yahooo.com") == "jane@yahoo.com"
    assert normalize_email("someone@example.org") == "someone@example.org"
    assert normalize_email("Not-An-Email") == "not-an-email"
    assert normalize_email("@gmial.com") == "@gmial.com"
    assert normalize_email("user@") == "user@"
    assert normalize_email(None) == ""


def test_is_valid_email():
    assert is_valid_email("john.doe@gmail.com")
    assert is_valid_email(" Mixed.Case@Example.com ")
    assert not is_valid_email("a@b")
    assert not is_valid_email("plainaddress")
    assert not is_valid_email("")
    assert not is_valid_email(None)


def test_parse_name_with_prefix_and_suffix():
    parsed = parse_name("Dr. John Smith Jr.")
    assert parsed.full == "Dr. John Smith Jr."
    assert parsed.prefix == "Dr."
    assert parsed.first_name == "John"
    assert parsed.middle_name == ""
    assert parsed.last_name == "Smith"
    assert parsed.suffix == "Jr."
    assert parsed.initials == "J.S."


def test_parse_name_last_first_order():
    parsed = parse_name("Smith, John Michael")
    assert parsed.full == "Smith, John Michael"
    assert (parsed.first_name, parsed.middle_name, parsed.last_name) == (
        "John",
        "Michael",
        "Smith",
    )
    assert parsed.initials == "J.M.S."


def test_parse_name_comma_before_suffix():
    parsed = parse_name("John Smith, Jr.")
    assert parsed.first_name == "John"
    assert parsed.last_name == "Smith"
    assert parsed.suffix == "Jr."


def test_parse_name_multiple_suffixes_and_single_token():
    parsed = parse_name("Martin Luther King Jr. PhD")
    assert parsed.middle_name == "Luther"
    assert parsed.last_name == "King"
    assert parsed.suffix == "Jr. PhD"

    single = parse_name("  Madonna ")
    assert single.full == "Madonna"
    assert single.first_name == "Madonna"
    assert single.initials == "M."

    assert parse_name("Dr.").first_name == "Dr."
    assert parse_name(None).to_dict() == parse_name("   ").to_dict()


def test_parse_username():
    parsed = parse_username("john_doe")
    assert (parsed.first_name, parsed.last_name, parsed.full) == ("John", "Doe", "John Doe")
    assert parsed.initials == "J.D."

    assert parse_username("@JohnDoe42").full == "John Doe"

    triple = parse_username("mary.jane.watson")
    assert (triple.first_name, triple.middle_name, triple.last_name) == ("Mary", "Jane", "Watson")

    single = parse_username("johndoe")
    assert single.first_name == "Johndoe"
    assert single.last_name == ""

    assert parse_username("12345").full == ""
    assert parse_username(None).full == ""
