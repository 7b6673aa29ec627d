import json

from reader_publish.models.summary import PublishRequest
from reader_publish.services.blob_builder import build_blob, object_key, serialize_blob


def _blob(body):
    return build_blob(PublishRequest.from_body(body))


def test_full_record_serializes_compactly(record):
    data = serialize_blob(_blob(record))
    expected = (
        '{"t":"Как спать лучше","s":"<p>Short summary</p>","y":"article","d":"2025-03-14",'
        '"r":"recA1b2C3","f":"<p>Full translation</p>",'
        '"src":{"n":"Nature","u":"https://nature.example/a"},'
        '"orig":{"t":"How to sleep better","u":"https://orig.example/a"},'
        '"a":[{"name":"A. Author","affiliation":"Somewhere"},"B. Author"]}'
    )
    assert data == expected.encode("utf-8")


def test_minimal_record_has_only_required_keys(record):
    minimal = {k: record[k] for k in ("recordId", "contentType", "title", "summaryHtml", "date")}
    assert list(_blob(minimal)) == ["t", "s", "y", "d", "r"]


def test_same_input_same_bytes(record):
    assert serialize_blob(_blob(record)) == serialize_blob(_blob(dict(record)))


def test_translation_wins_over_full_html(record):
    record["translationHtml"] = "A"
    record["fullHtml"] = "B"
    assert _blob(record)["f"] == "A"


def test_full_html_used_when_translation_empty(record):
    record["translationHtml"] = ""
    record["fullHtml"] = "B"
    assert _blob(record)["f"] == "B"


def test_source_url_without_name_dropped(record):
    del record["sourceName"]
    assert "src" not in _blob(record)


def test_source_name_without_url(record):
    del record["sourceUrl"]
    assert _blob(record)["src"] == {"n": "Nature"}


def test_original_url_without_title_dropped(record):
    record["originalTitle"] = ""
    assert "orig" not in _blob(record)


def test_authors_passed_through(record):
    blob = _blob(record)
    assert blob["a"] == record["authors"]
    assert blob["a"] is record["authors"]


def test_empty_author_list_kept(record):
    record["authors"] = []
    assert _blob(record)["a"] == []


def test_output_is_valid_utf8_json(record):
    assert json.loads(serialize_blob(_blob(record)).decode("utf-8"))["t"] == "Как спать лучше"


def test_object_key():
    assert object_key("recA1b2C3") == "recA1b2C3/summary.json"
