import unittest
from dataclasses import dataclass
from datetime import datetime, timedelta
from types import SimpleNamespace

from houseplanfiles.domain import currency, gallery, listing, packages


class CurrencyTests(unittest.TestCase):
    def test_unknown_code_falls_back_to_default(self):
        self.assertEqual(currency.normalize_code('xyz'), 'USD')
        self.assertEqual(currency.normalize_code(' inr '), 'INR')
        self.assertEqual(currency.normalize_code(None, default='INR'), 'INR')

    def test_conversion_uses_inr_rates(self):
        self.assertAlmostEqual(currency.convert(5000, 'USD'), 5000 * 0.011976)
        self.assertEqual(currency.convert('not a number', 'USD'), 0.0)

    def test_format_price(self):
        self.assertEqual(currency.format_price(5000, 'USD'), '$59.88')
        self.assertEqual(currency.format_price(5000, 'INR'), '₹5,000.00')
        self.assertEqual(currency.format_price(5000, 'JPY'), '¥9,401')

    def test_toggle(self):
        self.assertEqual(currency.toggle('INR'), 'USD')
        self.assertEqual(currency.toggle('EUR'), 'INR')
        self.assertEqual(currency.toggle('USD'), 'INR')


class PackageRulesTests(unittest.TestCase):
    def test_six_features_show_four_and_report_two_hidden(self):
        features = packages.truncate_features(['a', 'b', 'c', 'd', 'e', 'f'])
        self.assertEqual(features.visible, ['a', 'b', 'c', 'd'])
        self.assertEqual(features.hidden_count, 2)
        self.assertEqual(features.toggle_label, 'View 2 More Benefits')

    def test_short_feature_list_has_no_toggle(self):
        features = packages.truncate_features(['a', ' ', 'b'])
        self.assertEqual(features.visible, ['a', 'b'])
        self.assertEqual(features.toggle_label, '')

    def test_price_lines_split_at_currency_markers(self):
        self.assertEqual(
            packages.price_lines('₹ 15/sq.ft Rs 20/sq.ft INR 30/sq.ft'),
            ['₹ 15/sq.ft', 'Rs 20/sq.ft', 'INR 30/sq.ft'],
        )

    def test_numeric_price_is_a_single_line(self):
        self.assertEqual(packages.price_lines('4999'), ['4999'])
        self.assertEqual(packages.numeric_price('14,999'), 14999.0)
        self.assertIsNone(packages.numeric_price('On request'))

    def test_mobile_window(self):
        items = list(range(7))
        self.assertEqual(packages.mobile_window(items, expanded=False), [0, 1, 2, 3])
        self.assertEqual(packages.mobile_window(items, expanded=True), items)


@dataclass
class _Item:
    title: str
    category: str
    created_at: datetime


class GalleryRulesTests(unittest.TestCase):
    def setUp(self):
        now = datetime(2026, 1, 10, 12, 0, 0)
        self.items = [
            _Item('Modern Villa', 'Elevation', now),
            _Item('modern villa ', 'Elevation', now - timedelta(days=5)),
            _Item('Cozy Kitchen', 'Interior', now - timedelta(days=1)),
            _Item('Duplex', 'Elevation', now - timedelta(days=3)),
        ]

    def test_categories_are_bracketed_by_all_and_video(self):
        self.assertEqual(gallery.categories(self.items), ['All', 'Elevation', 'Interior', 'Video'])

    def test_groups_merge_titles_and_order_newest_first(self):
        groups = gallery.group_by_title(self.items)
        self.assertEqual([g.key for g in groups], ['modern villa', 'cozy kitchen', 'duplex'])
        self.assertEqual(len(groups[0].items), 2)
        self.assertIs(groups[0].cover, self.items[0])

    def test_filter_by_category(self):
        filtered = gallery.filter_by_category(self.items, 'Interior')
        self.assertEqual([i.title for i in filtered], ['Cozy Kitchen'])
        self.assertEqual(len(gallery.filter_by_category(self.items, 'All')), 4)

    def test_paginate_groups(self):
        groups = gallery.group_by_title(self.items)
        page = gallery.paginate_groups(groups, page=2, per_page=2)
        self.assertEqual(page.pages, 2)
        self.assertEqual(page.total, 3)
        self.assertEqual([g.key for g in page.groups], ['duplex'])
        with self.assertRaises(gallery.PageOutOfRange):
            gallery.paginate_groups(groups, page=3, per_page=2)


class ListingRulesTests(unittest.TestCase):
    def test_sale_requires_a_lower_positive_price(self):
        self.assertTrue(listing.resolve_pricing(1000, 800).is_sale)
        self.assertEqual(listing.resolve_pricing(1000, 800).display, 800)
        self.assertFalse(listing.resolve_pricing(1000, 1200).is_sale)
        self.assertFalse(listing.resolve_pricing(1000, 0).is_sale)

    def test_pricing_falls_back_to_import_columns(self):
        pricing = listing.resolve_pricing(None, None, {'Regular price': '2,500', 'Sale price': '2000'})
        self.assertEqual(pricing.regular, 2500)
        self.assertEqual(pricing.display, 2000)

    def test_first_image(self):
        self.assertEqual(listing.first_image('a.jpg, b.jpg'), 'a.jpg')
        self.assertEqual(listing.first_image(['', 'b.jpg']), 'b.jpg')
        self.assertEqual(listing.first_image('', fallback='x.jpg'), 'x.jpg')

    def test_youtube_id(self):
        self.assertEqual(listing.youtube_id('https://youtu.be/dQw4w9WgXcQ'), 'dQw4w9WgXcQ')
        self.assertEqual(listing.youtube_id('https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=1'), 'dQw4w9WgXcQ')
        self.assertIsNone(listing.youtube_id('https://example.com/video'))

    def test_home_rail_excludes_elevations_and_3d(self):
        self.assertTrue(listing.is_home_floor_plan(['Floor Plans']))
        self.assertFalse(listing.is_home_floor_plan(['3D Elevation']))
        self.assertFalse(listing.is_home_floor_plan([], {'Categories': 'Elevation, Modern'}))

    def test_plot_attributes_defaults(self):
        product = SimpleNamespace(plot_area=None, rooms=None, plot_size=None, direction=None)
        attrs = listing.plot_attributes(product, {'Attribute 2 value(s)': '1,200 sq ft'})
        self.assertEqual(attrs, {'plotArea': 1200, 'rooms': 'N/A', 'plotSize': 'N/A', 'direction': 'Any'})

    def test_share_slug_round_trip(self):
        self.assertEqual(listing.share_slug('Modern Villa 30x40', 17), 'modern-villa-30x40-17')
        self.assertEqual(listing.id_from_slug('modern-villa-30x40-17'), 17)
        self.assertIsNone(listing.id_from_slug('modern-villa'))


if __name__ == '__main__':
    unittest.main()
