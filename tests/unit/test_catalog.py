"""Unit tests for the document catalog."""

import pytest

from lexi.catalog import DOC_TEMPLATES, get_template, get_template_by_name, search_templates
from lexi.exceptions import UnknownTemplateError
from lexi.models import DocumentCategory


class TestCatalog:
    def test_every_category_has_exactly_one_template(self):
        names = [t.name for t in DOC_TEMPLATES]
        assert sorted(names, key=lambda c: c.value) == sorted(DocumentCategory, key=lambda c: c.value)

    def test_ids_are_unique(self):
        ids = [t.id for t in DOC_TEMPLATES]
        assert len(ids) == len(set(ids))

    def test_every_template_declares_fields(self):
        for template in DOC_TEMPLATES:
            assert template.required_fields, template.name

    def test_nda_fields(self):
        nda = get_template_by_name(DocumentCategory.NDA)
        assert nda.required_fields == ("Disclosing Party", "Receiving Party")

    def test_templates_are_immutable(self):
        template = get_template("1")
        with pytest.raises(AttributeError):
            template.description = "changed"

    def test_unknown_template(self):
        with pytest.raises(UnknownTemplateError) as exc_info:
            get_template("999")
        assert exc_info.value.status_code == 404
        assert exc_info.value.details["template_id"] == "999"


class TestSearch:
    def test_empty_term_returns_everything(self):
        assert search_templates("") == list(DOC_TEMPLATES)
        assert search_templates("   ") == list(DOC_TEMPLATES)

    def test_matches_name_case_insensitively(self):
        names = [t.name for t in search_templates("nda")]
        assert names == [DocumentCategory.NDA]

    def test_matches_description(self):
        names = {t.name for t in search_templates("freelancer")}
        assert names == {DocumentCategory.SERVICE_AGREEMENT}

    def test_lease_matches_three_templates(self):
        names = {t.name for t in search_templates("Lease")}
        assert names == {
            DocumentCategory.RESIDENTIAL_LEASE,
            DocumentCategory.COMMERCIAL_LEASE,
            DocumentCategory.SUBLEASE,
        }

    def test_no_match(self):
        assert search_templates("maritime salvage") == []

    def test_schema_lists_fields(self):
        schema = get_template("5").to_schema()
        assert schema.name == "Non-Disclosure Agreement (NDA)"
        assert schema.required_fields == ["Disclosing Party", "Receiving Party"]
