"""Tests for metadata extraction."""

import json

from scoopit.models import Metadata
from scoopit.services.detector import HtmlPayload, JsonPayload
from scoopit.services.metadata import MetadataExtractor, extract_metadata


class TestHtmlMetadata:
    """Tests for metadata extraction from HTML."""

    def test_full_document(self, sample_html: str):
        """Test that every field is read from a complete page."""
        metadata = extract_metadata(sample_html)
        assert metadata.title == "Test Page"
        assert metadata.description == "A page used in tests"
        assert metadata.author == "Jane Doe"
        assert metadata.keywords == ["alpha", "beta", "gamma"]
        assert metadata.canonical_url == "https://example.com/test"
        assert metadata.site_name == "Example Site"
        assert metadata.date == ""

    def test_og_title_wins_over_title(self):
        """Test that og:title takes priority over <title>."""
        html = '<head><meta property="og:title" content="OG Title"><title>Plain</title></head>'
        assert extract_metadata(html).title == "OG Title"

    def test_short_h1_fallback(self):
        """Test that a short <h1> is used when no title exists."""
        html = '<head><meta name="description" content="d"></head><body><h1> Heading </h1></body>'
        assert extract_metadata(html).title == "Heading"

    def test_long_h1_is_ignored(self):
        """Test that an <h1> of 100 characters or more is not adopted as title."""
        long_heading = "x" * 100
        html = f'<head><meta name="description" content="d"></head><body><h1>{long_heading}</h1></body>'
        assert extract_metadata(html).title == ""

    def test_description_fallback_chain(self):
        """Test og:description and twitter:description fallbacks."""
        og = '<head><title>T</title><meta property="og:description" content="OG desc"></head>'
        twitter = '<head><title>T</title><meta name="twitter:description" content="Tw desc"></head>'
        assert extract_metadata(og).description == "OG desc"
        assert extract_metadata(twitter).description == "Tw desc"

    def test_author_fallback_chain(self):
        """Test article:author, .author and rel=author fallbacks."""
        meta = '<head><title>T</title><meta property="article:author" content="Meta Author"></head>'
        cls = '<head><title>T</title></head><body><span class="author"> Class Author </span></body>'
        rel = '<head><title>T</title></head><body><a rel="author" href="/me">Rel Author</a></body>'
        assert extract_metadata(meta).author == "Meta Author"
        assert extract_metadata(cls).author == "Class Author"
        assert extract_metadata(rel).author == "Rel Author"

    def test_date_fallback_chain(self):
        """Test published_time, time[datetime] and .date fallbacks."""
        meta = '<head><title>T</title><meta property="article:published_time" content="2024-01-02"></head>'
        time_tag = '<head><title>T</title></head><body><time datetime="2024-03-04">March</time></body>'
        cls = '<head><title>T</title></head><body><span class="published">May 5</span></body>'
        assert extract_metadata(meta).date == "2024-01-02"
        assert extract_metadata(time_tag).date == "2024-03-04"
        assert extract_metadata(cls).date == "May 5"

    def test_minimal_head_returns_minimal_shape(self):
        """Test that a document without title or meta returns only title and description."""
        metadata = extract_metadata("<html><head></head><body><p>Hi</p></body></html>")
        assert metadata.is_minimal
        assert metadata.to_dict() == {"title": "", "description": ""}

    def test_full_shape_uses_camel_case_keys(self, sample_html: str):
        """Test that full metadata serialises with camelCase keys."""
        data = extract_metadata(sample_html).to_dict()
        assert set(data) == {"title", "description", "author", "date", "keywords", "canonicalUrl", "siteName"}

    def test_empty_input(self):
        """Test that empty and None input return the minimal shape."""
        assert extract_metadata("").to_dict() == {"title": "", "description": ""}
        assert extract_metadata(None).to_dict() == {"title": "", "description": ""}


class TestJsonMetadata:
    """Tests for metadata extraction from JSON."""

    def test_post_fields(self, sample_json: str):
        """Test title, description and object author from a post."""
        metadata = extract_metadata(sample_json, is_json=True)
        assert metadata.title == "First post"
        assert metadata.description == "Post body"
        assert metadata.author == "Ann"
        assert metadata.keywords == []
        assert metadata.canonical_url == ""
        assert metadata.site_name == ""

    def test_name_fallback(self):
        """Test that name is used when title is missing."""
        assert extract_metadata('{"name": "Widget"}', is_json=True).title == "Widget"

    def test_type_and_id_fallback(self):
        """Test the "{type} {id}" title fallback with and without type."""
        assert extract_metadata('{"type": "User", "id": 5}', is_json=True).title == "User 5"
        assert extract_metadata('{"id": 5}', is_json=True).title == "Item 5"

    def test_literal_fallback(self):
        """Test that JSON without identifying fields gets a generic title."""
        assert extract_metadata('{"value": 1}', is_json=True).title == "JSON Data"
        assert extract_metadata("[1, 2]", is_json=True).title == "JSON Data"

    def test_description_fallbacks(self):
        """Test description and summary fallbacks."""
        assert extract_metadata('{"description": "D"}', is_json=True).description == "D"
        assert extract_metadata('{"summary": "S"}', is_json=True).description == "S"

    def test_author_fallbacks(self):
        """Test string author, user object and username fallbacks."""
        assert extract_metadata('{"author": "Bo"}', is_json=True).author == "Bo"
        assert extract_metadata('{"user": {"username": "cat"}}', is_json=True).author == "cat"
        assert extract_metadata('{"username": "dog"}', is_json=True).author == "dog"

    def test_object_valued_fields_fall_through(self):
        """Test that object or array values never become Python reprs."""
        metadata = extract_metadata('{"title": {"en": "Hi"}, "body": ["x"], "date": {"y": 1}}', is_json=True)
        assert metadata.title == "JSON Data"
        assert metadata.description == ""
        assert metadata.date == ""
        assert extract_metadata('{"title": {"en": "Hi"}, "name": "Widget"}', is_json=True).title == "Widget"

    def test_author_without_name_falls_back(self):
        """Test that an author object without a usable name falls back to user."""
        assert extract_metadata('{"author": {"id": 3}, "user": {"name": "Cy"}}', is_json=True).author == "Cy"
        assert extract_metadata('{"author": {"name": {"first": "A"}}}', is_json=True).author == ""

    def test_date_fallbacks(self):
        """Test date, created_at and createdAt fallbacks."""
        assert extract_metadata('{"created_at": "2024-01-01"}', is_json=True).date == "2024-01-01"
        assert extract_metadata('{"createdAt": "2024-02-02"}', is_json=True).date == "2024-02-02"

    def test_invalid_json_returns_minimal(self):
        """Test that unparseable JSON yields the minimal shape."""
        assert extract_metadata("{broken", is_json=True).to_dict() == {"title": "", "description": ""}


class TestMetadataExtractor:
    """Tests for the MetadataExtractor service."""

    def test_dispatches_on_payload_type(self):
        """Test that JSON and HTML payloads take different paths."""
        extractor = MetadataExtractor()
        json_meta = extractor.extract(JsonPayload(raw="{}", data={"title": "J"}))
        html_meta = extractor.extract(HtmlPayload(html="<title>H</title>"))
        assert json_meta.title == "J"
        assert html_meta.title == "H"

    def test_none_payload(self):
        """Test that a missing payload yields the minimal shape."""
        assert MetadataExtractor().extract(None) == Metadata.minimal()

    def test_failure_is_swallowed(self, monkeypatch):
        """Test that an internal failure returns the minimal shape instead of raising."""
        extractor = MetadataExtractor()

        def boom(_data):
            raise RuntimeError("boom")

        monkeypatch.setattr(extractor, "_from_json", boom)
        metadata = extractor.extract(JsonPayload(raw="{}", data={}))
        assert metadata.to_dict() == {"title": "", "description": ""}

    def test_to_dict_is_json_serialisable(self, sample_html: str):
        """Test that metadata dicts serialise directly."""
        json.dumps(MetadataExtractor().extract(HtmlPayload(html=sample_html)).to_dict())
