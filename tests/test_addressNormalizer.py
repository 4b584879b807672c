"""
Unit tests for reconciling addresses against the (synthetic) gazetteer in tests/data.
"""

import sys
import functools

import pytest

from applicationRecords import FreeTextAddress, MultiplexedAddress
from addressNormalizer import (
    UNMATCHED_THRESHOLD,
    AddressCandidate,
    CandidateSplit,
    addressComparer,
    canonicalAddress,
    enumerateSplits,
    buildCandidateSplits,
    formatAddress,
    parseFreeTextAddress,
    parseMultiplexedAddress,
)


class TestFreeTextAddress:
    def test_comma_in_house_number(self, gazetteer):
        assert parseFreeTextAddress("4,665 Princes HWY MENINGIE 5264", gazetteer) == "4665 PRINCES HIGHWAY, MENINGIE SA 5264"
        assert parseFreeTextAddress("11,287 Princes HWY SALT CREEK 5264", gazetteer) == "11287 PRINCES HIGHWAY, SALT CREEK SA 5264"

    def test_suffix_expansion(self, gazetteer):
        assert parseFreeTextAddress("7 Railway Tce Paskeville", gazetteer) == "7 RAILWAY TERRACE, PASKEVILLE SA 5552"
        assert parseFreeTextAddress("12 Alfred Tce Streaky Bay SA 5680", gazetteer) == "12 ALFRED TERRACE, STREAKY BAY SA 5680"

    def test_misspelt_suburb(self, gazetteer):
        assert parseFreeTextAddress("12 Alfred Tce Streaky Bey", gazetteer) == "12 ALFRED TERRACE, STREAKY BAY SA 5680"

    def test_state_defaults_to_SA(self, gazetteer):
        assert parseFreeTextAddress("1 High St Kimba", gazetteer) == "1 HIGH STREET, KIMBA SA"

    @pytest.mark.parametrize("state", ["vic", "VIC", "Vic"])
    def test_explicit_state(self, gazetteer, state):
        assert parseFreeTextAddress(f"1 High St Kimba {state} 5641", gazetteer) == "1 HIGH STREET, KIMBA VIC 5641"

    def test_explicit_postcode_wins(self, gazetteer):
        assert parseFreeTextAddress("12 Alfred Tce Streaky Bay 5681", gazetteer) == "12 ALFRED TERRACE, STREAKY BAY SA 5681"

    def test_unresolvable_suburb(self, gazetteer):
        assert parseFreeTextAddress("12 Nowhere Rd Atlantis 5999", gazetteer) == ""

    def test_hundred(self, gazetteer):
        assert parseFreeTextAddress("Section 12 Hd of Sceale", gazetteer) == "SECTION 12, SCEALE BAY SA 5680"
        assert parseFreeTextAddress("Section 12 Hundred Sceal", gazetteer) == "SECTION 12, SCEALE BAY SA 5680"

    def test_hundred_with_several_suburbs(self, gazetteer):
        assert parseFreeTextAddress("Section 5 Hundred of Wrenfordsley", gazetteer) == ""

    @pytest.mark.parametrize("address", ["", "   ", "0", "-", " , 0 -", "–", "No Residential Address", "NO RESIDENTIAL ADDRESS supplied"])
    def test_no_address(self, gazetteer, address):
        assert parseFreeTextAddress(address, gazetteer) == ""

    def test_trailing_dashes(self, gazetteer):
        assert parseFreeTextAddress("12 Alfred Tce Streaky Bay SA 5680 - -", gazetteer) == "12 ALFRED TERRACE, STREAKY BAY SA 5680"

    def test_idempotent(self, gazetteer):
        address = "4,665 Princes HWY MENINGIE 5264"
        assert parseFreeTextAddress(address, gazetteer) == parseFreeTextAddress(address, gazetteer)


class TestEnumerateSplits:
    def test_every_space(self):
        assert enumerateSplits("SWIFT WINGS ROAD") == [("SWIFT", "WINGS ROAD"), ("SWIFT WINGS", "ROAD")]

    def test_no_space(self):
        assert enumerateSplits("TERRA") == [("TERRA", "")]

    def test_empty(self):
        assert enumerateSplits("") == [("", "")]

    def test_candidate_splits_are_padded(self):
        splits = buildCandidateSplits("ROSSLYNüSWIFT", 2)
        assert [(split.group1, split.group2) for split in splits] == [(["ROSSLYN", "SWIFT"], ["", ""])]


class TestMultiplexedAddress:
    def test_unambiguous(self, gazetteer):
        assert parseMultiplexedAddress("12", "Alfred Terrace", "Streaky Bay", gazetteer) == "12 ALFRED TERRACE, STREAKY BAY SA 5680"

    def test_suburb_only(self, gazetteer):
        assert parseMultiplexedAddress("", "", "Paskeville", gazetteer) == "PASKEVILLE SA 5552"

    def test_truncated_street_prefers_house_number(self, gazetteer):
        assert parseMultiplexedAddress("ü35", "RAILWAYüSCHOOL TCE SOUTHüTERRA", "PASKEVILLEüPASKEVILLE", gazetteer) == "35 SCHOOL TERRACE, PASKEVILLE SA 5552"

    def test_two_house_numbers(self, gazetteer):
        assert parseMultiplexedAddress("79ü4", "ROSSLYNüSWIFT WINGS ROADüROAD", "WALLAROOüWALLAROO", gazetteer) == "79 ROSSLYN ROAD, WALLAROO SA 5556"

    def test_hundred_name(self, gazetteer):
        assert parseMultiplexedAddress("ü12", "BARUNGAüLake View HDüRoad", "üBARUNGA GAP", gazetteer) == "12 LAKE VIEW ROAD, BARUNGA GAP SA 5520"

    def test_suburb_from_street(self, gazetteer):
        assert parseMultiplexedAddress("ü7", "ALFREDüMONTGOMERY TCEüTCE", "", gazetteer) == "7 MONTGOMERY TERRACE, STREAKY BAY SA 5680"

    def test_street_in_several_suburbs(self, gazetteer):
        assert parseMultiplexedAddress("ü3", "BAYüPRINCES RDüHWY", "", gazetteer) == "3 PRINCES HIGHWAY"

    def test_lower_case_hd_is_not_a_hundred(self, gazetteer):
        assert parseMultiplexedAddress("12ü", "BAY hd", "x", gazetteer) == "12 BAY HD, X"

    def test_nothing_to_construct(self, gazetteer):
        assert parseMultiplexedAddress("ü", "üü", "", gazetteer) is None

    def test_idempotent(self, gazetteer):
        fields = ("ü35", "RAILWAYüSCHOOL TCE SOUTHüTERRA", "PASKEVILLEüPASKEVILLE")
        assert parseMultiplexedAddress(*fields, gazetteer) == parseMultiplexedAddress(*fields, gazetteer)


class TestAddressComparer:
    def sort(self, candidates):
        return sorted(candidates, key=functools.cmp_to_key(addressComparer))

    def test_house_number_first_within_two_errors(self):
        split = CandidateSplit([], [])
        withoutHouse = AddressCandidate("", "RAILWAY TERRACE SOUTH", "PASKEVILLE", 0, split)
        withHouse = AddressCandidate("35", "SCHOOL TERRACE", "PASKEVILLE", 2, split)
        assert self.sort([withoutHouse, withHouse]) == [withHouse, withoutHouse]

    def test_fewer_errors_first(self):
        split = CandidateSplit([], [])
        withoutHouse = AddressCandidate("", "RAILWAY TERRACE SOUTH", "PASKEVILLE", 1, split)
        withHouse = AddressCandidate("35", "SCHOOL TCE TERRA", "PASKEVILLE", UNMATCHED_THRESHOLD, split)
        assert self.sort([withHouse, withoutHouse]) == [withoutHouse, withHouse]
        assert UNMATCHED_THRESHOLD == sys.maxsize

    def test_house_number_breaks_ties(self):
        split = CandidateSplit([], [])
        withoutHouse = AddressCandidate("", "A", "", UNMATCHED_THRESHOLD, split)
        withHouse = AddressCandidate("5", "B", "", UNMATCHED_THRESHOLD, split)
        assert addressComparer(withoutHouse, withHouse) == 1
        assert addressComparer(withHouse, withoutHouse) == -1

    def test_invalid_hundred_name_last(self):
        validSplit = CandidateSplit([], [])
        invalidSplit = CandidateSplit([], [])
        invalidSplit.hasInvalidHundredName = True
        invalid = AddressCandidate("5", "LAKE ROAD", "", 1, invalidSplit)
        valid = AddressCandidate("5", "LAKE VIEW ROAD", "", 1, validSplit)
        assert self.sort([invalid, valid]) == [valid, invalid]

    def test_equal(self):
        split = CandidateSplit([], [])
        assert addressComparer(AddressCandidate("5", "A", "", 1, split), AddressCandidate("6", "B", "", 1, split)) == 0


class TestFormatAddress:
    def test_canonical_suburb(self, gazetteer):
        assert formatAddress("35", "SCHOOL TERRACE", "paskeville", gazetteer) == "35 SCHOOL TERRACE, PASKEVILLE SA 5552"

    def test_hundred_and_state_removed(self, gazetteer):
        assert formatAddress("", "", "HD SCEALE BAY", gazetteer) == "SCEALE BAY SA 5680"
        assert formatAddress("1", "BAY ROAD", "STREAKY BAY SA", gazetteer) == "1 BAY ROAD, STREAKY BAY SA 5680"

    def test_unknown_suburb(self, gazetteer):
        assert formatAddress("5", "Main  Street", "Somewhere", gazetteer) == "5 MAIN STREET, SOMEWHERE"

    def test_no_suburb(self, gazetteer):
        assert formatAddress("5", "MAIN STREET", "", gazetteer) == "5 MAIN STREET"


class TestCanonicalAddress:
    def test_free_text(self, gazetteer):
        assert canonicalAddress(FreeTextAddress("12 Alfred Tce Streaky Bay"), gazetteer) == "12 ALFRED TERRACE, STREAKY BAY SA 5680"

    def test_multiplexed(self, gazetteer):
        assert canonicalAddress(MultiplexedAddress("12", "Alfred Terrace", "Streaky Bay"), gazetteer) == "12 ALFRED TERRACE, STREAKY BAY SA 5680"

    def test_free_text_is_never_split(self, gazetteer):
        assert canonicalAddress(FreeTextAddress("ü35 SCHOOLüRAILWAY TCE PASKEVILLE"), gazetteer) != "35 SCHOOL TERRACE, PASKEVILLE SA 5552"

    def test_unknown_type(self, gazetteer):
        with pytest.raises(TypeError):
            canonicalAddress("12 Alfred Tce", gazetteer)
