import uuid


def _announce(client, title="Night falls", content="Someone will not wake up."):
    return client.post("/api/announcements", json={"title": title, "content": content})


def test_game_master_creates_and_lists(player, game_master):
    gm, narrator = game_master()
    alice, _ = player("Alice")

    first = _announce(gm, title="First")
    second = _announce(gm, title="Second")
    assert first.status_code == 201
    assert first.json()["gameMasterUsername"] == narrator["username"]

    listed = alice.get("/api/announcements").json()
    assert [a["title"] for a in listed] == ["Second", "First"]
    assert second.json()["id"] == listed[0]["id"]


def test_players_cannot_announce(player):
    alice, _ = player("Alice")
    resp = _announce(alice)
    assert resp.status_code == 403
    assert resp.json()["message"] == "Game Master access required"


def test_announcement_limits(game_master):
    gm, _ = game_master()
    assert _announce(gm, title="t" * 101).status_code == 400
    assert _announce(gm, content="c" * 1001).status_code == 400
    assert _announce(gm, title="t" * 100, content="c" * 1000).status_code == 201


def test_delete(player, game_master):
    gm, _ = game_master()
    alice, _ = player("Alice")
    announcement_id = _announce(gm).json()["id"]

    assert alice.delete(f"/api/announcements/{announcement_id}").status_code == 403
    assert gm.delete(f"/api/announcements/{announcement_id}").status_code == 200
    assert gm.get("/api/announcements").json() == []
    assert gm.delete(f"/api/announcements/{announcement_id}").status_code == 404


def test_delete_unknown(game_master):
    gm, _ = game_master()
    resp = gm.delete(f"/api/announcements/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Announcement not found"


def test_announcement_media_bounds(game_master):
    gm, _ = game_master()
    url = "https://cdn.example.com/" + "a" * (500 - len("https://cdn.example.com/"))
    ok = gm.post(
        "/api/announcements",
        json={"title": "t", "content": "c", "mediaUrl": url, "mediaType": "image/png"},
    )
    assert ok.status_code == 201
    assert ok.json()["mediaUrl"] == url

    resp = gm.post(
        "/api/announcements",
        json={"title": "t", "content": "c", "mediaUrl": url + "a"},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Media URL must be at most 500 characters"

    resp = gm.post(
        "/api/announcements",
        json={"title": "t", "content": "c", "mediaUrl": url, "mediaType": "x" * 101},
    )
    assert resp.status_code == 400


def test_title_is_sanitized_before_length_check(game_master):
    gm, _ = game_master()
    resp = _announce(gm, title="\x00")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Title is required"

    resp = _announce(gm, title="\x07Dawn\x00")
    assert resp.status_code == 201
    assert resp.json()["title"] == "Dawn"
