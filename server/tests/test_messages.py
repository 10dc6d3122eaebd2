import uuid


def _send(client, content, **extra):
    return client.post("/api/messages", json={"content": content, **extra})


def test_public_feed_in_order(player):
    alice, _ = player("Alice")
    bob, _ = player("Bob")

    assert _send(alice, "first").status_code == 201
    assert _send(bob, "second").status_code == 201

    feed = alice.get("/api/messages/public").json()
    assert [m["content"] for m in feed] == ["first", "second"]
    assert feed[0]["senderUsername"] == "Alice"
    assert feed[0]["isPrivate"] is False


def test_public_message_ignores_receiver(player):
    alice, _ = player("Alice")
    _, bob = player("Bob")

    resp = _send(alice, "hello all", receiverId=bob["id"])
    assert resp.status_code == 201
    assert "receiverId" not in resp.json()
    assert alice.get("/api/messages/private/received").json() == []


def test_private_message_requires_receiver(player):
    alice, _ = player("Alice")
    resp = _send(alice, "psst", isPrivate=True)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Private messages require a receiver"


def test_private_message_to_unknown_receiver(player):
    alice, _ = player("Alice")
    resp = _send(alice, "psst", isPrivate=True, receiverId=str(uuid.uuid4()))
    assert resp.status_code == 404


def test_content_length(player):
    alice, _ = player("Alice")
    assert _send(alice, "").status_code == 400
    resp = _send(alice, "x" * 501)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Message must be at most 500 characters"
    assert _send(alice, "x" * 500).status_code == 201


def test_private_thread_only_contains_the_two_parties(player):
    alice, alice_user = player("Alice")
    bob, bob_user = player("Bob")
    carol, carol_user = player("Carol")

    _send(alice, "to bob", isPrivate=True, receiverId=bob_user["id"])
    _send(bob, "to alice", isPrivate=True, receiverId=alice_user["id"])
    _send(carol, "to bob from carol", isPrivate=True, receiverId=bob_user["id"])
    _send(alice, "public chatter")

    thread = alice.get(f"/api/messages/private/{bob_user['id']}").json()
    assert [m["content"] for m in thread] == ["to bob", "to alice"]

    # Carol asking for her thread with Bob never sees Alice's messages
    carol_thread = carol.get(f"/api/messages/private/{bob_user['id']}").json()
    assert [m["content"] for m in carol_thread] == ["to bob from carol"]
    for message in thread + carol_thread:
        assert message["isPrivate"] is True

    for message in carol_thread:
        assert carol_user["id"] in (message["senderId"], message["receiverId"])


def test_private_thread_unknown_target(player):
    alice, _ = player("Alice")
    assert alice.get(f"/api/messages/private/{uuid.uuid4()}").status_code == 404


def test_received_count_and_inbox(player):
    alice, alice_user = player("Alice")
    bob, _ = player("Bob")
    carol, _ = player("Carol")

    assert alice.get("/api/messages/private/count").json() == {"count": 0, "hasMessages": False}

    _send(bob, "one", isPrivate=True, receiverId=alice_user["id"])
    _send(bob, "two", isPrivate=True, receiverId=alice_user["id"])
    _send(carol, "three", isPrivate=True, receiverId=alice_user["id"])

    assert alice.get("/api/messages/private/count").json() == {"count": 3, "hasMessages": True}

    received = alice.get("/api/messages/private/received").json()
    assert [m["content"] for m in received] == ["three", "two", "one"]

    inbox = alice.get("/api/messages/inbox").json()
    assert [(c["senderUsername"], c["lastMessage"], c["unreadCount"]) for c in inbox] == [
        ("Carol", "three", 1),
        ("Bob", "two", 2),
    ]


def test_admin_view_requires_game_master(player, game_master):
    alice, _ = player("Alice")
    _, bob = player("Bob")
    gm, _ = game_master()

    _send(alice, "secret", isPrivate=True, receiverId=bob["id"])

    assert alice.get("/api/messages/private/admin/all").status_code == 403
    resp = gm.get("/api/messages/private/admin/all")
    assert resp.status_code == 200
    [message] = resp.json()
    assert message["senderUsername"] == "Alice"
    assert message["receiverUsername"] == "Bob"


def test_media_is_attached(player):
    alice, _ = player("Alice")
    resp = _send(alice, "look", mediaUrl="/objects/uploads/abc", mediaType="image/png")
    assert resp.status_code == 201
    assert resp.json()["mediaUrl"] == "/objects/uploads/abc"
    assert resp.json()["mediaType"] == "image/png"


def test_control_characters_are_stripped(player):
    alice, _ = player("Alice")
    resp = _send(alice, "he\x00llo\x07")
    assert resp.json()["content"] == "hello"


def test_media_field_bounds(player):
    alice, _ = player("Alice")
    url = "/objects/uploads/" + "a" * (500 - len("/objects/uploads/"))

    assert _send(alice, "fits", mediaUrl=url, mediaType="t" * 100).status_code == 201

    too_long_url = _send(alice, "long url", mediaUrl=url + "a", mediaType="image/png")
    assert too_long_url.status_code == 400
    assert too_long_url.json()["message"] == "Media URL must be at most 500 characters"

    too_long_type = _send(alice, "long type", mediaUrl=url, mediaType="t" * 101)
    assert too_long_type.status_code == 400
    assert too_long_type.json()["message"] == "Media type must be at most 100 characters"


def test_control_characters_only_is_empty(player):
    alice, _ = player("Alice")
    resp = _send(alice, "\x00\x07")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Message is required"
