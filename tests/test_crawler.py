import unittest

from shopcrawl.crawler import extract_listing_links, resolve_link, resolve_links
from shopcrawl.errors import TransportError, TransportErrorKind
from shopcrawl.types import SelectorSet

from tests.helpers import BASE_URL, listing_page


class ExtractListingLinksTest(unittest.TestCase):
    def test_links_in_document_order(self):
        hrefs = ["shirt.php?id=103", "shirt.php?id=101", "shirt.php?id=102"]
        self.assertEqual(extract_listing_links(listing_page(hrefs)), hrefs)

    def test_empty_listing_is_valid(self):
        self.assertEqual(extract_listing_links(listing_page([])), [])
        self.assertEqual(extract_listing_links("<html><body><p>Sold out</p></body></html>"), [])

    def test_duplicates_are_kept(self):
        hrefs = ["shirt.php?id=101", "shirt.php?id=101"]
        self.assertEqual(extract_listing_links(listing_page(hrefs)), hrefs)

    def test_href_taken_verbatim(self):
        hrefs = ["../shirt.php?id=104", "http://other.test/x", "#"]
        self.assertEqual(extract_listing_links(listing_page(hrefs)), hrefs)

    def test_entries_without_link_are_skipped(self):
        html = '<ul class="products"><li>coming soon</li><li><a href="a.php">A</a></li></ul>'
        self.assertEqual(extract_listing_links(html), ["a.php"])

    def test_lists_outside_container_are_ignored(self):
        html = """
        <ul class="nav"><li><a href="contact.php">Contact</a></li></ul>
        <ul class="products"><li><a href="shirt.php?id=101">Red</a></li></ul>
        """
        self.assertEqual(extract_listing_links(html), ["shirt.php?id=101"])

    def test_custom_selectors(self):
        html = '<div class="grid"><article><a class="go" href="/p/1">1</a></article></div>'
        selectors = SelectorSet(listing_container="div.grid", listing_entry="article", listing_link="a.go")
        self.assertEqual(extract_listing_links(html, selectors), ["/p/1"])


class ResolveLinksTest(unittest.TestCase):
    def test_resolves_against_base_and_dedupes(self):
        urls = resolve_links(BASE_URL, ["shirt.php?id=101", "/shirt.php?id=101", "shirt.php?id=102"])
        self.assertEqual(
            urls,
            ["http://shirts4mike.com/shirt.php?id=101", "http://shirts4mike.com/shirt.php?id=102"],
        )

    def test_absolute_links_unchanged(self):
        self.assertEqual(resolve_links(BASE_URL, ["https://cdn.test/p"]), ["https://cdn.test/p"])

    def test_unparseable_href_passed_through(self):
        urls = resolve_links(BASE_URL, ["shirt.php?id=101", "http://[::1"])
        self.assertEqual(urls, ["http://shirts4mike.com/shirt.php?id=101", "http://[::1"])


class ResolveLinkTest(unittest.TestCase):
    def test_relative_href(self):
        self.assertEqual(resolve_link(BASE_URL, "shirt.php?id=101"), "http://shirts4mike.com/shirt.php?id=101")

    def test_unparseable_href_is_unreachable(self):
        with self.assertRaises(TransportError) as ctx:
            resolve_link(BASE_URL, "http://[::1")
        self.assertIs(ctx.exception.kind, TransportErrorKind.UNREACHABLE)
        self.assertEqual(ctx.exception.url, "http://[::1")


if __name__ == "__main__":
    unittest.main()
