"""Tests for search hit extraction."""

import pytest

from linkedin_finder.discovery.extractor import (
    clean_description,
    decode_html_entities,
    extract,
    extract_company_name,
    extract_vanity_name,
    is_company_url,
)


class TestExtractVanityName:
    """Test extract_vanity_name."""

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://www.linkedin.com/company/microsoft/", "microsoft"),
            ("https://linkedin.com/company/apple-inc/", "apple-inc"),
            ("https://www.linkedin.com/company/google/?originalSubdomain=www", "google"),
            ("https://www.linkedin.com/company/stripe?trk=public", "stripe"),
            ("https://WWW.LINKEDIN.COM/COMPANY/IBM/", "IBM"),
            ("https://invalid-url.com/company/test/", ""),
            ("https://www.linkedin.com/in/someone/", ""),
        ],
    )
    def test_extracts_slug(self, url, expected):
        assert extract_vanity_name(url) == expected


class TestIsCompanyUrl:
    """Test is_company_url."""

    def test_accepts_company_pages(self):
        assert is_company_url("https://www.linkedin.com/company/microsoft/") is True

    def test_rejects_other_urls(self):
        assert is_company_url("https://www.linkedin.com/in/satya/") is False
        assert is_company_url("https://www.microsoft.com/") is False
        assert is_company_url("") is False


class TestExtractCompanyName:
    """Test extract_company_name."""

    def test_strips_linkedin_suffix(self):
        assert extract_company_name("Microsoft | LinkedIn", "Tech company") == "Microsoft"

    def test_keeps_title_without_suffix(self):
        assert (
            extract_company_name("Apple Inc. - Official LinkedIn", "Consumer electronics")
            == "Apple Inc. - Official LinkedIn"
        )

    def test_plain_title(self):
        assert extract_company_name("Google", "Search engine company") == "Google"

    def test_decodes_entities_in_title(self):
        assert extract_company_name("AT&amp;T | LinkedIn", "") == "AT&T"

    def test_falls_back_to_description_words(self):
        assert (
            extract_company_name("", "Technology consulting services for enterprises")
            == "Technology consulting services"
        )

    def test_falls_back_when_title_is_only_suffix(self):
        assert extract_company_name("| LinkedIn", "Acme rockets and anvils") == "Acme rockets and"

    def test_unknown_company_when_nothing_usable(self):
        assert extract_company_name("", "") == "Unknown Company"


class TestCleanDescription:
    """Test clean_description."""

    def test_decodes_double_escaped_entities(self):
        cleaned = clean_description("&amp;nbsp;Leading&nbsp;tech&nbsp;company")

        assert cleaned == "Leading tech company"
        assert "&" not in cleaned

    def test_decodes_entity_table(self):
        assert decode_html_entities("&lt;b&gt; &quot;x&quot; &#x27;y&#39;") == "<b> \"x\" 'y'"

    def test_leaves_unknown_entities(self):
        assert decode_html_entities("&copy; 2024") == "&copy; 2024"

    def test_strips_tags_and_collapses_whitespace(self):
        cleaned = clean_description("  <strong>Leading</strong>   global\n\tinvestment <em>bank</em>. ")

        assert cleaned == "Leading global investment bank."

    def test_strips_tags_that_were_entity_encoded(self):
        assert clean_description("&lt;b&gt;Bold&lt;/b&gt; move") == "Bold move"

    def test_truncates_to_200_characters(self):
        cleaned = clean_description("word " * 100)

        assert len(cleaned) == 200

    def test_truncates_after_cleaning(self):
        text = "<p>" + "a" * 250 + "</p>"

        assert clean_description(text) == "a" * 200


class TestExtract:
    """Test extract."""

    def test_extracts_all_fields(self):
        hit = extract(
            "Microsoft | LinkedIn",
            "Technology&nbsp;company",
            "https://www.linkedin.com/company/microsoft/",
        )

        assert hit.company_name == "Microsoft"
        assert hit.vanity_name == "microsoft"
        assert hit.description == "Technology company"
