# tests/test_pages.py
"""
Tests for the server-rendered pages.
"""


class TestMeetingPages:

    def test_root_redirects_to_meetings(self, client):
        response = client.get("/", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/meetings"

    def test_meetings_page_empty(self, client):
        response = client.get("/meetings")
        assert response.status_code == 200
        assert "No meetings yet" in response.text

    def test_meetings_page_lists_meetings(self, client_with_data):
        response = client_with_data.get("/meetings")
        assert response.status_code == 200
        assert "Test Standup" in response.text
        assert "2 action items" in response.text

    def test_meetings_page_search_no_match(self, client_with_data):
        response = client_with_data.get("/meetings?q=planning")
        assert "Test Standup" not in response.text
        assert "No meetings match" in response.text

    def test_meetings_page_search_by_participant(self, client_with_data, meeting_factory):
        client_with_data.post("/api/v1/meetings", json=meeting_factory(title="Budget", participants="Frank"))

        response = client_with_data.get("/meetings?q=alice")

        assert "Test Standup" in response.text
        assert "Budget" not in response.text

    def test_create_meeting_form(self, client):
        response = client.post(
            "/meetings",
            data={"title": "Design Review", "date": "2024-02-10", "participants": "Carol"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        location = response.headers["location"]
        assert location.startswith("/meetings/")

        detail = client.get(location)
        assert detail.status_code == 200
        assert "Design Review" in detail.text

    def test_create_meeting_form_missing_title(self, client):
        response = client.post("/meetings", data={"title": "", "date": "2024-02-10"})

        assert response.status_code == 400
        assert "Title and date are required" in response.text
        assert client.get("/api/v1/meetings").json() == []

    def test_meeting_detail(self, client_with_data, seeded_meeting):
        response = client_with_data.get(f"/meetings/{seeded_meeting['id']}")

        assert response.status_code == 200
        assert "Alice will update the roadmap" in response.text
        assert "Book the retro room" in response.text

    def test_meeting_detail_shows_generated_outputs(self, client_with_data, seeded_meeting, mock_llm):
        meeting_id = seeded_meeting["id"]
        client_with_data.post(f"/api/v1/meetings/{meeting_id}/ai/summary")
        client_with_data.post(f"/api/v1/meetings/{meeting_id}/ai/decisions")

        response = client_with_data.get(f"/meetings/{meeting_id}")

        assert "The team agreed to ship on Friday." in response.text
        assert "<li>Ship on Friday</li>" in response.text

    def test_meeting_detail_not_found(self, client):
        response = client.get("/meetings/missing")
        assert response.status_code == 404
        assert "Meeting not found" in response.text


class TestActionItemBoard:

    def test_board_counts(self, client_with_data):
        response = client_with_data.get("/action-items")

        assert response.status_code == 200
        assert "2 open" in response.text
        assert "0 done" in response.text
        assert "2 total" in response.text

    def test_board_empty(self, client):
        response = client.get("/action-items")
        assert "No action items found" in response.text

    def test_board_filter(self, client_with_data):
        response = client_with_data.get("/action-items?filter=done")
        assert "Update the roadmap" not in response.text
        assert "No action items found" in response.text

    def test_board_unknown_filter_shows_all(self, client_with_data):
        response = client_with_data.get("/action-items?filter=someday")
        assert response.status_code == 200
        assert "Update the roadmap" in response.text
        assert "Book the retro room" in response.text

    def test_toggle(self, client_with_data):
        item = client_with_data.get("/api/v1/action-items").json()[0]

        response = client_with_data.post(
            f"/action-items/{item['id']}/toggle",
            data={"next": "/action-items?filter=done"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/action-items?filter=done"
        done = client_with_data.get("/api/v1/action-items?status=done").json()
        assert [i["id"] for i in done] == [item["id"]]

        client_with_data.post(f"/action-items/{item['id']}/toggle", follow_redirects=False)
        assert client_with_data.get("/api/v1/action-items?status=done").json() == []

    def test_toggle_rejects_external_redirect(self, client_with_data):
        item = client_with_data.get("/api/v1/action-items").json()[0]

        response = client_with_data.post(
            f"/action-items/{item['id']}/toggle",
            data={"next": "https://example.com/"},
            follow_redirects=False,
        )

        assert response.headers["location"] == "/action-items"

    def test_toggle_missing_item(self, client):
        response = client.post("/action-items/missing/toggle", follow_redirects=False)
        assert response.status_code == 303
