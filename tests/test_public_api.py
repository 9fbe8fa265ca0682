"""HTTP tests for the unauthenticated content routes under /api/public."""

from tests.support import ApiTestCase


class TestPublicContent(ApiTestCase):
    def test_game_info(self) -> None:
        response = self.client.get("/api/public/game-info")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["title"], "My Last Wish")
        self.assertEqual(len(body["features"]), 6)
        self.assertEqual(len(body["screenshots"]), 3)
        self.assertTrue(all(url.startswith("https://") for url in body["screenshots"]))
        self.assertTrue(body["trailer"].startswith("https://www.youtube.com/embed/"))

    def test_company_info(self) -> None:
        response = self.client.get("/api/public/company-info")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["name"], "MuseFuze Studios")
        self.assertEqual(len(body["values"]), 4)
        self.assertEqual(
            body["team"],
            {
                "size": "12+ passionate developers, artists, and storytellers",
                "founded": "2023",
                "location": "Global remote team",
            },
        )

    def test_no_session_needed_and_none_set(self) -> None:
        response = self.client.get("/api/public/game-info")
        self.assertNotIn("set-cookie", response.headers)
