import datetime as dt
import json

import pytest

from core.domain.errors import MalformedDateError
from core.services.response_mapper import map_response

from conftest import apod_item


class TestSingle:
    def test_object_without_copyright(self):
        records = map_response(json.dumps({"date": "2023-05-01"}), single=True)
        assert len(records) == 1
        assert records[0].date == dt.date(2023, 5, 1)
        assert records[0].is_public_domain is True

    def test_object_with_copyright(self):
        records = map_response(json.dumps(apod_item(copyright="\nJane Doe\n")), single=True)
        assert records[0].is_public_domain is False
        assert records[0].copyright == "\nJane Doe\n"

    def test_null_body_is_empty(self):
        assert map_response("null", single=True) == []

    @pytest.mark.parametrize(
        "body",
        [
            "",
            "{not json",
            "[1, 2",
            "<html>502</html>",
            "[" * 100_000,
            '{"date": "2023-05-01", "n": ' + "1" * 5000 + "}",
        ],
        ids=["blank", "broken-object", "broken-array", "html", "deep-nesting", "huge-integer"],
    )
    def test_undecodable_body_is_empty(self, body):
        assert map_response(body, single=True) == []

    def test_array_body_for_single_request_is_empty(self):
        assert map_response(json.dumps([apod_item()]), single=True) == []

    def test_malformed_date_propagates(self):
        with pytest.raises(MalformedDateError):
            map_response(json.dumps(apod_item(day="May 1st")), single=True)

    def test_missing_date_propagates(self):
        with pytest.raises(MalformedDateError):
            map_response(json.dumps({"title": "No date"}), single=True)


class TestArray:
    def test_maps_each_element(self):
        body = json.dumps([apod_item("2023-05-01"), apod_item("2023-05-02", copyright="X")])
        records = map_response(body, single=False)
        assert [r.date for r in records] == [dt.date(2023, 5, 1), dt.date(2023, 5, 2)]
        assert [r.is_public_domain for r in records] == [True, False]

    def test_empty_array(self):
        assert map_response("[]", single=False) == []

    @pytest.mark.parametrize("body", ["null", "oops", json.dumps({"date": "2023-05-01"})])
    def test_null_undecodable_or_object_is_empty(self, body):
        assert map_response(body, single=False) == []

    def test_one_malformed_date_fails_the_call(self):
        body = json.dumps([apod_item("2023-05-01"), apod_item("not-a-date")])
        with pytest.raises(MalformedDateError):
            map_response(body, single=False)

    def test_unknown_fields_are_ignored(self):
        body = json.dumps([apod_item(thumbnail_url="https://img.youtube.com/t.jpg")])
        (record,) = map_response(body, single=False)
        assert "thumbnail_url" not in record.model_dump()
