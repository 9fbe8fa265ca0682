"""HTTP tests for /api/builds: staff read, developers publish, owner or admin retires."""

from portal.models import BuildDownload, GameBuild, SystemLog
from tests.support import ApiTestCase

BUILD = {
    "version": "0.4.1",
    "title": "Closed alpha",
    "description": "Second playable",
    "download_url": "https://cdn.example/builds/0.4.1.zip",
    "file_size": 734003200,
    "test_instructions": "Play the tutorial",
    "known_issues": "Audio pops",
}


class TestBuilds(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.dev_client, self.dev = self.client_as("dev", role="developer")

    def _publish(self, client=None, **overrides: object):
        body = dict(BUILD, **overrides)
        return (client or self.dev_client).post("/api/builds", json=body)

    def test_developer_publishes_and_staff_lists(self) -> None:
        response = self._publish()
        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(response.json()["uploaded_by"], self.dev.id)
        self.assertEqual(response.json()["uploaded_by_name"], "dev")

        tester, _ = self.client_as("tester", role="dev_tester")
        builds = tester.get("/api/builds").json()["builds"]
        self.assertEqual(len(builds), 1)
        self.assertEqual(builds[0]["uploaded_by_name"], "dev")
        self.assertEqual(builds[0]["file_size"], 734003200)

    def test_role_gates(self) -> None:
        tester, _ = self.client_as("tester", role="dev_tester")
        staffer, _ = self.client_as("staffer", role="staff")
        player, _ = self.client_as("player")
        self.assertEqual(self._publish(tester).status_code, 403)
        self.assertEqual(self._publish(staffer).status_code, 403)
        self.assertEqual(player.get("/api/builds").status_code, 403)
        self.assertEqual(self.client.get("/api/builds").status_code, 401)

    def test_download_url_must_be_http(self) -> None:
        response = self._publish(download_url="ftp://cdn.example/x.zip")
        self.assertEqual(response.status_code, 400)
        self.assertIn("download_url", response.json()["errors"])

    def test_missing_version_rejected(self) -> None:
        response = self._publish(version="  ")
        self.assertEqual(response.status_code, 400)
        self.assertIn("version", response.json()["errors"])

    def test_owner_retires_build(self) -> None:
        build_id = self._publish().json()["id"]
        response = self.dev_client.delete(f"/api/builds/{build_id}")
        self.assertEqual(response.status_code, 200)
        self.assertFalse(self.reload(GameBuild, build_id).is_active)
        self.assertEqual(self.dev_client.get("/api/builds").json()["builds"], [])
        actions = [row.action for row in self.db.query(SystemLog).filter_by(user_id=self.dev.id)]
        self.assertIn("build.deleted", actions)

    def test_other_developer_cannot_retire(self) -> None:
        build_id = self._publish().json()["id"]
        rival, _ = self.client_as("rival", role="developer")
        self.assertEqual(rival.delete(f"/api/builds/{build_id}").status_code, 403)
        self.assertTrue(self.reload(GameBuild, build_id).is_active)

    def test_admin_retires_any_build(self) -> None:
        build_id = self._publish().json()["id"]
        admin, _ = self.client_as("root", role="admin")
        self.assertEqual(admin.delete(f"/api/builds/{build_id}").status_code, 200)
        self.assertEqual(admin.delete(f"/api/builds/{build_id}").status_code, 404)

    def test_unknown_build(self) -> None:
        self.assertEqual(self.dev_client.delete("/api/builds/999").status_code, 404)


class TestBuildDownloads(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.dev_client, self.dev = self.client_as("dev", role="developer")
        self.build_id = self.dev_client.post("/api/builds", json=BUILD).json()["id"]

    def test_staff_download_is_recorded(self) -> None:
        tester, tester_user = self.client_as("tester", role="dev_tester")
        response = tester.get(
            f"/api/builds/{self.build_id}/download", headers={"User-Agent": "launcher/1.0"}
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["download_url"], BUILD["download_url"])
        row = self.db.query(BuildDownload).one()
        self.assertEqual((row.build_id, row.user_id), (self.build_id, tester_user.id))
        self.assertEqual(row.user_agent, "launcher/1.0")

    def test_retired_or_unknown_build_not_downloadable(self) -> None:
        self.dev_client.delete(f"/api/builds/{self.build_id}")
        self.assertEqual(self.dev_client.get(f"/api/builds/{self.build_id}/download").status_code, 404)
        self.assertEqual(self.dev_client.get("/api/builds/999/download").status_code, 404)
        self.assertEqual(self.db.query(BuildDownload).count(), 0)

    def test_players_cannot_download(self) -> None:
        player, _ = self.client_as("player")
        self.assertEqual(player.get(f"/api/builds/{self.build_id}/download").status_code, 403)

    def test_admin_sees_history_newest_first(self) -> None:
        self.dev_client.get(f"/api/builds/{self.build_id}/download")
        tester, _ = self.client_as("tester", role="dev_tester")
        tester.get(f"/api/builds/{self.build_id}/download")

        admin, _ = self.client_as("root", role="admin")
        response = admin.get("/api/builds/downloads")
        self.assertEqual(response.status_code, 200)
        downloads = response.json()["downloads"]
        self.assertEqual([d["username"] for d in downloads], ["tester", "dev"])
        self.assertEqual(downloads[0]["role"], "dev_tester")
        self.assertEqual(downloads[0]["version"], "0.4.1")
        self.assertEqual(downloads[0]["title"], "Closed alpha")

    def test_history_is_admin_only(self) -> None:
        self.assertEqual(self.dev_client.get("/api/builds/downloads").status_code, 403)
