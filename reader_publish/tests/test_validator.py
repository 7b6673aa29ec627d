import pytest

from reader_publish.services.validator import validate


def test_complete_record_is_valid(record):
    result = validate(record)
    assert result.valid is True
    assert result.error is None


def test_missing_title_is_named(record):
    del record["title"]
    result = validate(record)
    assert result.valid is False
    assert "title" in result.error


def test_all_missing_fields_listed_in_order():
    result = validate({})
    assert result.error == "Missing required fields: recordId, contentType, title, summaryHtml, date"


@pytest.mark.parametrize("empty", ["", None])
def test_falsy_values_count_as_missing(record, empty):
    record["summaryHtml"] = empty
    record["date"] = empty
    result = validate(record)
    assert result.error == "Missing required fields: summaryHtml, date"


def test_unknown_content_type(record):
    record["contentType"] = "video"
    result = validate(record)
    assert result.valid is False
    assert result.error == "Invalid contentType. Must be one of: article, podcast, guideline, digest"


def test_missing_fields_reported_before_content_type(record):
    record["contentType"] = "video"
    del record["date"]
    assert validate(record).error == "Missing required fields: date"


@pytest.mark.parametrize("content_type", ["article", "podcast", "guideline", "digest"])
def test_every_content_type_accepted(record, content_type):
    record["contentType"] = content_type
    assert validate(record).valid


@pytest.mark.parametrize("record_id", ["a/b", "..", ".", "a\\b", "/abs", "rec?1", "rec#1", "rec%2F1"])
def test_path_like_record_ids_rejected(record, record_id):
    record["recordId"] = record_id
    result = validate(record)
    assert result.valid is False
    assert result.error.startswith("Invalid recordId")


def test_optional_fields_not_checked(record):
    record["sourceUrl"] = "not a url"
    record["authors"] = {"anything": ["goes"]}
    assert validate(record).valid
