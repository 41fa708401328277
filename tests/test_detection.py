"""Tests for a full duplicate-detection run."""

from boardmatch.catalog.base import BaseCatalogReader, BaseLinkWriter, CatalogProduct
from boardmatch.catalog.sql import SqlCatalog
from boardmatch.detection import DetectionSummary, format_summary, run_duplicate_detection
from boardmatch.matcher import MatcherConfig

from duplicate_cases import DUPLICATE_CASES, HSS, SG


class FakeReader(BaseCatalogReader):
    def __init__(self, products):
        self.products = products

    def fetch_products(self):
        return list(self.products)


class FakeWriter(BaseLinkWriter):
    def __init__(self, fail_ids=()):
        self.links: list[tuple[str, str, float | None]] = []
        self.fail_ids = set(fail_ids)

    def link(self, product_id, matched_product_id, confidence=None):
        if product_id in self.fail_ids:
            return False
        self.links.append((product_id, matched_product_id, confidence))
        return True

    def unlink(self, product_id, matched_product_id):
        return True


SEASIDE = [
    CatalogProduct("hss-1", "Firewire Seaside 5'8 x 20 1/4 x 2 1/2 - Helium", HSS),
    CatalogProduct("sg-1", "Firewire Seaside 5'8\" Surfboard", SG),
]
# "hp" suffix: full match scoring just under 0.9
PUDDLE_JUMPER = [
    CatalogProduct("hss-2", "Lost Puddle Jumper 5'6\"", HSS),
    CatalogProduct("sg-2", "Lost Puddle Jumper HP 5'6\"", SG),
]


class TestRunDuplicateDetection:
    def test_links_confident_matches(self):
        writer = FakeWriter()
        summary = run_duplicate_detection(FakeReader(SEASIDE), writer)

        assert summary.total_products == 2
        assert summary.matches_found == 1
        assert summary.links_created == 1
        assert summary.links_failed == 0
        assert writer.links[0][:2] == ("hss-1", "sg-1")
        assert writer.links[0][2] == summary.matches[0].similarity

    def test_by_source(self):
        summary = run_duplicate_detection(FakeReader(SEASIDE + PUDDLE_JUMPER), FakeWriter())
        assert summary.by_source == {HSS: 2, SG: 2}

    def test_below_auto_link_not_linked(self):
        writer = FakeWriter()
        config = MatcherConfig(min_confidence_to_auto_link=0.95)
        summary = run_duplicate_detection(
            FakeReader(PUDDLE_JUMPER), writer, config=config, threshold=0.5,
        )
        assert summary.matches_found == 1
        assert summary.matches_below_auto_link_threshold == 1
        assert summary.links_created == 0
        assert writer.links == []

    def test_default_threshold_is_auto_link_confidence(self):
        config = MatcherConfig(min_confidence_to_auto_link=0.95)
        summary = run_duplicate_detection(FakeReader(PUDDLE_JUMPER), FakeWriter(), config=config)
        assert summary.matches_found == 0

    def test_dry_run(self):
        writer = FakeWriter()
        summary = run_duplicate_detection(FakeReader(SEASIDE), writer, dry_run=True)
        assert summary.matches_found == 1
        assert summary.links_created == 0
        assert writer.links == []

    def test_failed_links_counted(self):
        summary = run_duplicate_detection(FakeReader(SEASIDE), FakeWriter(fail_ids={"hss-1"}))
        assert summary.links_created == 0
        assert summary.links_failed == 1
        assert summary.link_success_rate == 0.0

    def test_no_products(self):
        summary = run_duplicate_detection(FakeReader([]), FakeWriter())
        assert summary.total_products == 0
        assert summary.matches == []
        assert summary.link_success_rate is None

    def test_known_cases_end_to_end(self, db, add_board):
        for i, case in enumerate(DUPLICATE_CASES, start=1):
            add_board(f"hss-{i}", case.hss_name, HSS, shaper=case.hss_shaper)
            add_board(f"sg-{i}", case.sg_name, SG, shaper=case.sg_shaper)

        catalog = SqlCatalog(db)
        summary = run_duplicate_detection(catalog, catalog)

        found = {(m.product_id, m.matched_product_id) for m in summary.matches}
        for i, case in enumerate(DUPLICATE_CASES, start=1):
            pair = (f"hss-{i}", f"sg-{i}")
            assert (pair in found) is case.should_match, case.name
            assert (pair[1] in catalog.related_ids(pair[0])) is case.should_match, case.name
        assert summary.links_created == len(found)
        assert summary.links_failed == 0


class TestFormatSummary:
    def test_lines(self):
        summary = DetectionSummary(total_products=4, matches_found=2, links_created=1, links_failed=1)
        text = format_summary(summary)
        assert "Total products analyzed:     4" in text
        assert "Link success rate:           50.0%" in text

    def test_no_rate_without_attempts(self):
        assert "success rate" not in format_summary(DetectionSummary())
