"""Tests for model output parsing."""

import orjson

from foliogen.services.ai.json_extraction import extract_json, parse_payload, strip_code_fences
from foliogen.services.ai.payloads import FeedbackAnalysisPayload, LinkedInPayload, ProfilePayload

FALLBACK = {"fallback": True}


def test_malformed_text_returns_fallback():
    assert extract_json("not json", FALLBACK) is FALLBACK


def test_empty_text_returns_fallback():
    assert extract_json("", FALLBACK) is FALLBACK
    assert extract_json(None, FALLBACK) is FALLBACK


def test_fenced_text_is_parsed():
    assert extract_json('```json\n{"a":1}\n```', FALLBACK) == {"a": 1}


def test_bare_fence_and_whitespace_are_stripped():
    assert strip_code_fences('  ```\n{"a": [1, 2]}\n```  ') == '{"a": [1, 2]}'
    assert extract_json("```JSON\n[1, 2]```", FALLBACK) == [1, 2]


def test_fence_only_text_returns_fallback():
    assert extract_json("```json\n```", FALLBACK) is FALLBACK


def test_parse_payload_validates_shape():
    payload = parse_payload(
        '{"category": "Praise", "sentiment": "Positive", "extra": 1}',
        FeedbackAnalysisPayload,
        FeedbackAnalysisPayload(),
    )
    assert payload.category == "Praise"
    assert payload.sentiment == "Positive"


def test_parse_payload_reads_camel_case_keys():
    payload = parse_payload(
        '{"bio": "Hi", "skills": ["Go"], "projects": [{"title": "T", "description": "D"}]}',
        ProfilePayload,
        ProfilePayload(),
    )
    assert payload.projects[0].title == "T"
    assert payload.projects[0].technologies is None


def test_parse_payload_rejects_non_object():
    fallback = FeedbackAnalysisPayload()
    assert parse_payload('["Praise"]', FeedbackAnalysisPayload, fallback) is fallback


def test_parse_payload_wrong_field_type_keeps_rest_of_payload():
    result = parse_payload('{"bio": "Hi", "projects": "not a list", "skills": "Go"}', ProfilePayload, ProfilePayload())
    assert result.bio == "Hi"
    assert result.projects is None
    assert result.skills is None


def test_parse_payload_drops_only_malformed_entries():
    text = orjson.dumps({
        "projects": [
            {"title": "Mesh", "description": "Service mesh.", "technologies": ["Go", 3]},
            "not an object",
            {"title": "Odd", "description": "Bad techs.", "technologies": "Go, Rust"},
        ],
    }).decode()

    result = parse_payload(text, ProfilePayload, ProfilePayload())

    assert [p.title for p in result.projects] == ["Mesh", "Odd"]
    assert result.projects[0].technologies == ["Go"]
    assert result.projects[1].technologies is None


def test_parse_payload_coerces_unreadable_years():
    text = orjson.dumps({
        "name": "Ada Lovelace",
        "education": [
            {"institution": "MIT", "startYear": "2015", "endYear": "Present"},
            {"institution": "ETH", "startYear": 2010.0, "endYear": True},
            42,
        ],
    }).decode()

    result = parse_payload(text, LinkedInPayload, LinkedInPayload())

    assert result.name == "Ada Lovelace"
    assert [(e.institution, e.start_year, e.end_year) for e in result.education] == [
        ("MIT", 2015, None),
        ("ETH", 2010, None),
    ]
