"""
Tests for the domain model and its derived fields.
"""

import pytest

from mailbox_crawler.errors import EnrichmentError, ParseError
from mailbox_crawler.models import (
    AdditionalInfo,
    Address,
    DetailPage,
    LocationListing,
    Mailbox,
    Rdi,
    Record,
    YesOrNo,
    normalize_price,
)


def new_listing(**overrides) -> LocationListing:
    fields = dict(
        name="Test",
        line1="123 Main St",
        line2="City, ST 12345",
        price="Starting from US$ 9.99 / month",
        link="https://www.anytimemailbox.com/s/test",
    )
    fields.update(overrides)
    return LocationListing(**fields)


# =============================================================================
# Address
# =============================================================================

class TestAddress:
    """Tests for Address and its full zip."""

    def test_full_zip_without_extension(self):
        address = Address(line1="1 A St", city="City", state="ST", zip="12345")
        assert address.full_zip() == "12345"

    def test_full_zip_with_extension(self):
        address = Address(line1="1 A St", city="City", state="ST", zip="12345", zip4="6789")
        assert address.full_zip() == "12345-6789"

    def test_empty_zip_rejected(self):
        with pytest.raises(ValueError):
            Address(line1="1 A St", city="City", state="ST", zip="")

    @pytest.mark.parametrize("zip4", ["678", "67890", "67a9", ""])
    def test_bad_zip4_rejected(self, zip4):
        with pytest.raises(ValueError):
            Address(line1="1 A St", city="City", state="ST", zip="12345", zip4=zip4)

    def test_mailbox_is_usable_as_key(self):
        first = new_listing().to_mailbox()
        second = new_listing().to_mailbox()
        mapping = {first: 1}
        mapping[second] = 2
        assert len(mapping) == 1


# =============================================================================
# Listing conversion
# =============================================================================

class TestLocationListing:
    """Tests for converting a state page listing into a Mailbox."""

    def test_price_normalization(self):
        assert normalize_price("Starting from US$ 9.99 / month") == "US$9.99/month"

    def test_price_prefix_removed_once(self):
        assert normalize_price("Starting from Starting from $1") == "Startingfrom$1"

    def test_price_whitespace_stripped(self):
        assert normalize_price("\n  Starting from\tUS$ 19.99 /\nmonth  ") == "US$19.99/month"

    def test_location_to_mailbox(self):
        mailbox = new_listing().to_mailbox()
        assert mailbox.name == "Test"
        assert mailbox.address.line1 == "123 Main St"
        assert mailbox.address.city == "City"
        assert mailbox.address.state == "ST"
        assert mailbox.address.zip == "12345"
        assert mailbox.address.zip4 is None
        assert mailbox.price == "US$9.99/month"
        assert mailbox.link == "https://www.anytimemailbox.com/s/test"

    def test_location_to_mailbox_with_zip4(self):
        mailbox = new_listing(line2="City, ST 12345-6789").to_mailbox()
        assert mailbox.address.zip == "12345"
        assert mailbox.address.zip4 == "6789"

    def test_city_with_whitespace(self):
        mailbox = new_listing(line2="City With WhiteSpace, ST 12345").to_mailbox()
        assert mailbox.address.city == "City With WhiteSpace"

    @pytest.mark.parametrize("line2", [
        "City ST 12345",       # no comma
        "City, ST",            # no zip
        "City, ",              # no state
        "City, ST 12345-67",   # short zip4
    ])
    def test_unparsable_region_fails(self, line2):
        with pytest.raises(ParseError):
            new_listing(line2=line2).to_mailbox()


# =============================================================================
# Detail page branching
# =============================================================================

class TestDetailPageStreet:
    """Tests for the line-count driven street reconstruction."""

    NAME = "Location"
    TAIL = ["City, ST 12345", "United States"]

    def page(self, *street_lines):
        return DetailPage(lines=[self.NAME, *street_lines, *self.TAIL])

    def test_four_lines(self):
        assert self.page("1 Main St").street() == "1 Main St"

    def test_five_lines(self):
        assert self.page("1 Main St", "Suite 2").street() == "1 Main St Suite 2"

    def test_six_lines(self):
        assert self.page("1 Main St", "Suite 2", "Floor 3").street() == "1 Main St Suite 2 Floor 3"

    def test_three_lines_fail(self):
        with pytest.raises(ParseError):
            DetailPage(lines=["Location", "1 Main St", "City, ST 12345"]).street()

    def test_seven_lines_fail(self):
        with pytest.raises(ParseError):
            self.page("1", "2", "3", "4").street()


# =============================================================================
# Enrichment values
# =============================================================================

class TestEnrichmentValues:
    """Tests for CMRA / RDI parsing and output records."""

    @pytest.mark.parametrize("value,expected", [
        ("Y", YesOrNo.Y), ("y", YesOrNo.Y), ("N", YesOrNo.N), ("n", YesOrNo.N),
    ])
    def test_cmra_parse(self, value, expected):
        assert YesOrNo.parse(value) is expected

    @pytest.mark.parametrize("value", ["", "yes", "X"])
    def test_cmra_parse_rejects_unknown(self, value):
        with pytest.raises(EnrichmentError):
            YesOrNo.parse(value)

    @pytest.mark.parametrize("value,expected", [
        ("Residential", Rdi.RESIDENTIAL),
        ("commercial", Rdi.COMMERCIAL),
        ("", Rdi.UNKNOWN),
    ])
    def test_rdi_parse(self, value, expected):
        assert Rdi.parse(value) is expected

    def test_rdi_parse_rejects_unknown(self):
        with pytest.raises(EnrichmentError):
            Rdi.parse("Industrial")

    def test_additional_info_flags(self):
        info = AdditionalInfo(cmra=YesOrNo.Y, rdi=Rdi.RESIDENTIAL)
        assert info.is_cmra()
        assert info.is_residential()
        assert not AdditionalInfo(cmra=YesOrNo.N, rdi=Rdi.COMMERCIAL).is_cmra()

    def test_record_from_mailbox(self):
        mailbox = new_listing(line2="City, ST 12345-6789").to_mailbox()
        record = Record.from_mailbox_and_info(mailbox, AdditionalInfo(cmra=YesOrNo.N, rdi=Rdi.COMMERCIAL))
        assert record.zip == "12345-6789"
        assert record.street == "123 Main St"
        assert record.to_row()["rdi"] == "Commercial"
        assert record.to_row()["CMRA"] == "N"

    def test_record_sort_order(self):
        mailbox = new_listing().to_mailbox()
        keys = [
            Record.from_mailbox_and_info(mailbox, AdditionalInfo(cmra=cmra, rdi=rdi)).sort_key()
            for cmra, rdi in [
                (YesOrNo.Y, Rdi.RESIDENTIAL),
                (YesOrNo.N, Rdi.UNKNOWN),
                (YesOrNo.N, Rdi.RESIDENTIAL),
                (YesOrNo.N, Rdi.COMMERCIAL),
            ]
        ]
        assert sorted(keys) == [(0, 0), (0, 1), (0, 2), (1, 0)]


def test_mailbox_line1_can_be_replaced():
    mailbox = Mailbox(
        name="Test",
        address=Address(line1="1 Main", city="City", state="ST", zip="12345"),
        link="https://example.com",
        price="US$1",
    )
    mailbox.address.line1 = "1 Main St Suite 5"
    assert mailbox.address.line1 == "1 Main St Suite 5"
