"""HTTP tests for the staff message board under /api/staff/messages."""

from portal.models import MessagePost
from tests.support import ApiTestCase


class TestMessageBoard(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.author_client, self.author = self.client_as("author", role="staff")

    def _post(self, client=None, **body: object):
        payload = {"title": "Playtest", "content": "Friday at five"}
        payload.update(body)
        return (client or self.author_client).post("/api/staff/messages", json=payload)

    def test_post_and_list_threads(self) -> None:
        response = self._post()
        self.assertEqual(response.status_code, 201, response.text)
        post = response.json()
        self.assertEqual(post["author_id"], self.author.id)
        self.assertEqual(post["author_name"], "author")
        self.assertFalse(post["is_edited"])

        tester, _ = self.client_as("tester", role="dev_tester")
        self._post(tester, parent_id=post["id"], title="Re: Playtest", content="Count me in")

        threads = tester.get("/api/staff/messages").json()["posts"]
        self.assertEqual(len(threads), 1)
        self.assertEqual(threads[0]["reply_count"], 1)

        replies = tester.get(f"/api/staff/messages/{post['id']}/replies").json()["posts"]
        self.assertEqual([r["author_name"] for r in replies], ["tester"])

    def test_reply_to_reply_attaches_to_thread_root(self) -> None:
        root_id = self._post().json()["id"]
        reply_id = self._post(parent_id=root_id).json()["id"]
        nested = self._post(parent_id=reply_id).json()
        self.assertEqual(nested["parent_id"], root_id)

    def test_reply_to_missing_post(self) -> None:
        response = self._post(parent_id=999)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"detail": "Message not found"})

    def test_players_locked_out(self) -> None:
        player, _ = self.client_as("player")
        self.assertEqual(player.get("/api/staff/messages").status_code, 403)
        self.assertEqual(self._post(player).status_code, 403)

    def test_author_edits(self) -> None:
        post_id = self._post().json()["id"]
        response = self.author_client.put(
            f"/api/staff/messages/{post_id}",
            json={"title": "Playtest moved", "content": "Saturday at five"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["is_edited"])
        self.assertEqual(self.reload(MessagePost, post_id).title, "Playtest moved")

    def test_only_author_may_edit_or_delete(self) -> None:
        post_id = self._post().json()["id"]
        boss, _ = self.client_as("boss", role="ceo")
        response = boss.put(
            f"/api/staff/messages/{post_id}", json={"title": "Hijack", "content": "Nope"}
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(boss.delete(f"/api/staff/messages/{post_id}").status_code, 403)
        self.assertEqual(self.reload(MessagePost, post_id).title, "Playtest")

    def test_delete_removes_replies(self) -> None:
        root_id = self._post().json()["id"]
        self._post(parent_id=root_id)
        self._post(parent_id=root_id)
        response = self.author_client.delete(f"/api/staff/messages/{root_id}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.db.query(MessagePost).count(), 0)

    def test_blank_content_rejected(self) -> None:
        response = self._post(content="   ")
        self.assertEqual(response.status_code, 400)
        self.assertIn("content", response.json()["errors"])

    def test_missing_post(self) -> None:
        self.assertEqual(self.author_client.get("/api/staff/messages/999/replies").status_code, 404)
        self.assertEqual(self.author_client.delete("/api/staff/messages/999").status_code, 404)
