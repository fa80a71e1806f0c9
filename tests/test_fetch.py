import json
import unittest

import httpx

from unari.fetch import FetchError, decode_restaurants, fetch_menus
from unari.models import Absent, NumberValue, StructuredValue, TextValue, Unrepresentable, loose_value

API_URL = "https://example.test/restaurants"

PHYSICUM = {
    "id": 7,
    "title": "Physicum",
    "slug": "physicum",
    "location": [{"id": 2, "name": "Kumpula"}],
    "address": "Gustaf Hällströmin katu 2",
    "menuData": {
        "id": 7,
        "name": "Physicum",
        "visitingHours": {"lounas": {"items": [{"label": "Ma-Pe", "hours": "10.30-14.00"}]}, "bistro": None},
        "menus": [
            {
                "date": "Su 18.10.",
                "message": "",
                "data": [
                    {"name": "Lounas", "price": {"name": "Lounas", "value": {"student": "2,95"}}},
                    {"name": "Vegaanilounas", "price": {"name": "Vegaani", "value": 2.95}},
                    {"name": "", "price": {"name": "Lisuke"}},
                    "not an item",
                ],
            }
        ],
        "areacode": "100",
    },
}


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestLooseValue(unittest.TestCase):
    def test_variants(self):
        self.assertEqual(loose_value(None), Absent())
        self.assertEqual(loose_value("  "), Absent())
        self.assertEqual(loose_value("2,95"), TextValue("2,95"))
        self.assertEqual(loose_value(3), NumberValue(3.0))
        self.assertEqual(loose_value(True), Unrepresentable("bool"))
        self.assertIsInstance(loose_value({"a": 1}), StructuredValue)

    def test_describe(self):
        self.assertEqual(loose_value(2.5).describe(), "2.50")
        self.assertEqual(loose_value(3).describe(), "3")
        self.assertEqual(loose_value({"student": "2,95", "other": None}).describe(), "student: 2,95")
        self.assertEqual(loose_value(True).describe(), "?")

    def test_structured_get(self):
        value = loose_value({"student": "2,95"})
        self.assertEqual(value.get("student"), TextValue("2,95"))
        self.assertEqual(value.get("staff"), Absent())


class TestDecode(unittest.TestCase):
    def test_decodes_restaurant_menu_and_items(self):
        [restaurant] = decode_restaurants([PHYSICUM])
        self.assertEqual(restaurant.title, "Physicum")
        self.assertEqual(restaurant.locations[0].name, "Kumpula")
        self.assertEqual(restaurant.menu_data.areacode, 100)
        [menu] = restaurant.menus
        self.assertEqual(menu.day_month, (18, 10))
        self.assertEqual([(item.name, item.category) for item in menu.items], [("Lounas", "meal"), ("Vegaanilounas", "vegan meal")])
        self.assertEqual(menu.items[1].price.value, NumberValue(2.95))
        self.assertIsInstance(restaurant.menu_data.visiting_hours.lunch, StructuredValue)
        self.assertEqual(restaurant.menu_data.visiting_hours.bistro, Absent())

    def test_skips_malformed_restaurants(self):
        with self.assertLogs("unari.fetch", level="WARNING"):
            restaurants = decode_restaurants([PHYSICUM, "junk", {"title": ""}, {"title": "Exactum", "menuData": []}])
        self.assertEqual([r.title for r in restaurants], ["Physicum", "Exactum"])
        self.assertEqual(restaurants[1].menus, ())

    def test_top_level_must_be_a_list(self):
        with self.assertRaises(FetchError):
            decode_restaurants({"restaurants": []})


class TestFetchMenus(unittest.IsolatedAsyncioTestCase):
    async def test_success(self):
        def handler(request):
            self.assertEqual(str(request.url), API_URL)
            return httpx.Response(200, json=[PHYSICUM])

        async with _client(handler) as client:
            restaurants = await fetch_menus(API_URL, client=client)
        self.assertEqual([r.title for r in restaurants], ["Physicum"])

    async def test_http_error_status(self):
        async with _client(lambda request: httpx.Response(503)) as client:
            with self.assertRaises(FetchError):
                await fetch_menus(API_URL, client=client)

    async def test_invalid_json(self):
        async with _client(lambda request: httpx.Response(200, content=b"<html>")) as client:
            with self.assertRaises(FetchError):
                await fetch_menus(API_URL, client=client)

    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            with self.assertRaises(FetchError) as ctx:
                await fetch_menus(API_URL, client=client)
        self.assertIn("request failed", str(ctx.exception))

    async def test_malformed_url(self):
        with self.assertRaises(FetchError) as ctx:
            await fetch_menus("http://[::1")
        self.assertIn("request failed", str(ctx.exception))

    async def test_non_list_payload(self):
        async with _client(lambda request: httpx.Response(200, content=json.dumps({"a": 1}).encode())) as client:
            with self.assertRaises(FetchError):
                await fetch_menus(API_URL, client=client)


if __name__ == "__main__":
    unittest.main()
