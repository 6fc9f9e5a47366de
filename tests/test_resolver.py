"""Tests for target resolution."""

import pytest

from internscan.domain.models import Company
from internscan.resolver import TargetResolver, synthesize_careers_url
from internscan.resolver.service import compact_name, website_origin


class TestSynthesizeCareersUrl:
    """Tests for careers URL guessing."""

    def test_website_reduced_to_origin(self):
        company = Company(id="1", name="Acme", website="https://www.acme.io/about/team")

        assert synthesize_careers_url(company) == "https://www.acme.io/careers"

    def test_bare_host_website(self):
        company = Company(id="1", name="Acme", website="acme.io")

        assert synthesize_careers_url(company) == "https://acme.io/careers"

    def test_wikipedia_website_ignored(self):
        company = Company(
            id="1", name="Jane Street", website="https://en.wikipedia.org/wiki/Jane_Street_Capital"
        )

        assert synthesize_careers_url(company) == "https://janestreet.com/careers"

    def test_override_table(self):
        assert synthesize_careers_url(Company(id="1", name="Stripe")) == "https://stripe.com/jobs"
        assert synthesize_careers_url(Company(id="2", name="Amazon")) == "https://www.amazon.jobs"

    def test_name_fallback(self):
        company = Company(id="1", name="Initech Systems")

        assert synthesize_careers_url(company) == "https://initechsystems.com/careers"

    def test_compact_name(self):
        assert compact_name("  Jane  Street ") == "janestreet"

    def test_website_origin_without_host(self):
        assert website_origin("https://") is None


class TestTargetResolver:
    """Tests for TargetResolver against an in-memory directory."""

    def test_explicit_career_pages_used_verbatim(self, seed_company):
        seed_company(
            "c1",
            "Acme",
            website="https://acme.io",
            career_pages=["https://boards.greenhouse.io/acme", "https://acme.io/careers/eng"],
        )

        targets = TargetResolver().resolve(["c1"])

        assert [t.url for t in targets] == [
            "https://boards.greenhouse.io/acme",
            "https://acme.io/careers/eng",
        ]
        assert all(t.company_name == "Acme" for t in targets)

    def test_synthesized_url_without_career_pages(self, seed_company):
        seed_company("c1", "Acme", website="https://acme.io/about")

        targets = TargetResolver().resolve(["c1"])

        assert len(targets) == 1
        assert targets[0].url == "https://acme.io/careers"

    def test_no_ids_resolves_every_company(self, seed_company):
        seed_company("b", "Beta Corp")
        seed_company("a", "Alpha", website="https://alpha.example")

        targets = TargetResolver().resolve()

        assert [t.company_id for t in targets] == ["a", "b"]

    def test_empty_id_list_resolves_every_company(self, seed_company):
        seed_company("a", "Alpha")

        assert len(TargetResolver().resolve([])) == 1

    def test_unknown_ids_ignored_and_order_kept(self, seed_company):
        seed_company("a", "Alpha")
        seed_company("b", "Beta")

        targets = TargetResolver().resolve(["b", "missing", "a", "b"])

        assert [t.company_id for t in targets] == ["b", "a"]

    def test_empty_directory(self, test_database):
        assert TargetResolver().resolve() == []

    @pytest.mark.parametrize("ids", [["missing"], ["x", "y"]])
    def test_only_unknown_ids(self, seed_company, ids):
        seed_company("a", "Alpha")

        assert TargetResolver().resolve(ids) == []
