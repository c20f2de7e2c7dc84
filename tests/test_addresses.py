import pytest

from data_cleaner.addresses import normalize_state, parse_address


def test_parse_address_full_us():
    parsed = parse_address("123 Main St, Springfield, IL 62704")
    assert parsed.street_number == "123"
    assert parsed.street_name == "Main St"
    assert parsed.street_address == "123 Main St"
    assert parsed.city == "Springfield"
    assert parsed.state == "IL"
    assert parsed.postal_code == "62704"
    assert parsed.country == "USA"


def test_parse_address_unit_state_name_and_country():
    parsed = parse_address("456 Oak Ave Apt 5B, Boston, Massachusetts 02101, USA")
    assert parsed.street_number == "456"
    assert parsed.street_name == "Oak Ave"
    assert parsed.unit == "5B"
    assert parsed.street_address == "456 Oak Ave #5B"
    assert parsed.city == "Boston"
    assert parsed.state == "MA"
    assert parsed.postal_code == "02101"
    assert parsed.country == "USA"


def test_parse_address_state_inside_city_part():
    parsed = parse_address("789 Pine Rd, Portland OR 97201")
    assert parsed.city == "Portland"
    assert parsed.state == "OR"
    assert parsed.postal_code == "97201"


def test_parse_address_canadian_postal_code():
    parsed = parse_address("100 King St W, Toronto, ON m5h 2n2, Canada")
    assert parsed.street_address == "100 King St W"
    assert parsed.city == "Toronto"
    assert parsed.state == "ON"
    assert parsed.postal_code == "M5H 2N2"
    assert parsed.country == "Canada"


def test_parse_address_keeps_california():
    parsed = parse_address("9000 Sunset Blvd, Los Angeles, CA 90210")
    assert parsed.state == "CA"
    assert parsed.city == "Los Angeles"
    assert parsed.country == "USA"


@pytest.mark.parametrize(
    "street,unit",
    [
        ("12 Unity Rd", ""),
        ("1 Market St Suite 200", "200"),
        ("77 Elm St #12", "12"),
        ("5 Oak Ln Ste. 4", "4"),
    ],
)
def test_parse_address_units(street, unit):
    assert parse_address(street).unit == unit


def test_parse_address_zip_plus_four():
    parsed = parse_address("1 Infinite Loop, Cupertino, CA 95014-2083")
    assert parsed.postal_code == "95014-2083"
    assert parsed.street_address == "1 Infinite Loop"


def test_parse_address_without_street_number():
    parsed = parse_address("PO Box 12, Anchorage, AK")
    assert parsed.street_number == ""
    assert parsed.street_address == "PO Box 12"
    assert parsed.state == "AK"
    assert parsed.country == ""


def test_parse_address_empty_input():
    assert parse_address("").to_dict() == parse_address(None).to_dict()
    assert parse_address(None).original == ""


def test_normalize_state():
    assert normalize_state("new york") == "NY"
    assert normalize_state(" tx ") == "TX"
    assert normalize_state("Quebec") == "QC"
    assert normalize_state("Atlantis") == "Atlantis"
    assert normalize_state("") == ""
