"""
Unit tests for reading (and saving) the gazetteer.
"""

import pytest
from sqlalchemy import create_engine

import defineSQLAlchemyDB as dbConfig
from fuzzyMatch import closestMatch
from addressNormalizer import parseFreeTextAddress
from gazetteer import Gazetteer, cleanName, splitSuburbs, loadGazetteer, loadGazetteerFromDatabase, saveGazetteerToDatabase


class TestLoadGazetteer:
    def test_streets_accumulate_suburbs(self, gazetteer):
        assert gazetteer.streetNames["PRINCES HIGHWAY"] == ("MENINGIE", "SALT CREEK")
        assert gazetteer.streetNames["ALFRED TERRACE"] == ("STREAKY BAY",)

    def test_suffixes(self, gazetteer):
        assert gazetteer.streetSuffixes["TCE"] == "TERRACE"
        assert "TERRACE" in gazetteer.suffixWords
        assert gazetteer.expandSuffix("hwy") == "HIGHWAY"
        assert gazetteer.expandSuffix("South") == "South"

    def test_suburbs(self, gazetteer):
        assert gazetteer.suburbNames["STREAKY BAY"] == "STREAKY BAY SA 5680"
        assert gazetteer.suburbNames["KIMBA"] == "KIMBA"
        assert "" not in gazetteer.suburbNames

    def test_hundreds(self, gazetteer):
        assert gazetteer.hundredNames["SCEALE"] == ("SCEALE BAY",)
        assert gazetteer.hundredNames["WRENFORDSLEY"] == ("STREAKY BAY", "PORT KENNY")
        assert gazetteer.hundredNames["RUDALL"] == ()

    def test_file_order_is_kept(self, gazetteer):
        assert list(gazetteer.suburbNames)[:3] == ["MENINGIE", "SALT CREEK", "STREAKY BAY"]

    def test_read_only(self, gazetteer):
        with pytest.raises(TypeError):
            gazetteer.suburbNames["NEW SUBURB"] = "NEW SUBURB SA 5000"

    def test_every_suburb_matches_itself(self, gazetteer):
        for suburbKey in gazetteer.suburbNames:
            assert closestMatch(suburbKey, gazetteer.suburbNames, 0) == suburbKey

    def test_canonical_suburb(self, gazetteer):
        assert gazetteer.canonicalSuburb(" paskeville ") == "PASKEVILLE SA 5552"
        assert gazetteer.canonicalSuburb("Atlantis") == "ATLANTIS"

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            loadGazetteer(str(tmp_path))


class TestDatabaseGazetteer:
    def test_round_trip(self, gazetteer, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'gazetteer.sqlite'}")
        dbConfig.Base.metadata.create_all(engine)
        saveGazetteerToDatabase(gazetteer, engine)
        fetched = loadGazetteerFromDatabase(engine)
        assert list(fetched.streetNames.items()) == list(gazetteer.streetNames.items())
        assert list(fetched.streetSuffixes.items()) == list(gazetteer.streetSuffixes.items())
        assert list(fetched.suburbNames.items()) == list(gazetteer.suburbNames.items())
        assert list(fetched.hundredNames.items()) == list(gazetteer.hundredNames.items())

    def test_ties_broken_the_same_way(self, tmp_path):
        # KIMBC is one edit from both suburbs, so the first suburb must win whichever way the gazetteer was read
        original = Gazetteer({"ALFRED TERRACE": ["KIMBB"]}, {"TCE": "TERRACE"},
                             {"KIMBB": "KIMBB SA 5641", "KIMBA": "KIMBA SA 5641"}, {"WRENFORDSLEY": [], "RUDALL": []})
        engine = create_engine(f"sqlite:///{tmp_path / 'gazetteer.sqlite'}")
        dbConfig.Base.metadata.create_all(engine)
        saveGazetteerToDatabase(original, engine)
        fetched = loadGazetteerFromDatabase(engine)
        assert list(fetched.suburbNames) == ["KIMBB", "KIMBA"]
        assert list(fetched.hundredNames) == ["WRENFORDSLEY", "RUDALL"]
        assert parseFreeTextAddress("12 Alfred Tce Kimbc", original) == "12 ALFRED TERRACE, KIMBB SA 5641"
        assert parseFreeTextAddress("12 Alfred Tce Kimbc", fetched) == "12 ALFRED TERRACE, KIMBB SA 5641"


def test_cleanName():
    assert cleanName("  salt   creek ") == "SALT CREEK"
    assert cleanName(None) == ""


def test_splitSuburbs():
    assert splitSuburbs("Streaky Bay; port kenny;;STREAKY BAY") == ["STREAKY BAY", "PORT KENNY"]
    assert splitSuburbs(None) == []
