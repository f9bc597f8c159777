from kicker.models import Player


def test_create_player(client, fetch):
    resp = client.post("/api/players", json={"first_name": " Fynn ", "last_name": "Lange", "country": "de"})
    assert resp.status_code == 201
    player = resp.get_json()["player"]
    assert player["name"] == "Fynn Lange"
    assert player["country"] == "DE"
    assert player["rating"] == 1500
    assert player["total_games"] == 0
    assert player["img"] is None
    assert fetch(Player, player["id"]).first_name == "Fynn"


def test_create_player_requires_name(client):
    resp = client.post("/api/players", json={"last_name": "Lange"})
    assert resp.status_code == 400
    assert resp.get_json() == {"ok": False, "error": "missing_name"}


def test_list_players_by_ranking_and_name(client, make_player):
    a = make_player("Zoe", "Adler", rating=1490)
    b = make_player("Max", "Zander", rating=1620)
    c = make_player("Ida", "Berger", rating=1620)

    ranked = client.get("/api/players").get_json()["players"]
    assert [p["id"] for p in ranked] == [b, c, a]

    by_name = client.get("/api/players?order=name").get_json()["players"]
    assert [p["id"] for p in by_name] == [a, c, b]


def test_get_player(client, make_player):
    pid = make_player("Ole", "Krause", seasons_won=2)
    data = client.get(f"/api/players/{pid}").get_json()
    assert data["player"]["seasons_won"] == 2
    assert client.get("/api/players/4242").status_code == 404


def test_patch_player_profile(client, make_player, fetch):
    pid = make_player("Ole", "Krause", country="DE")
    resp = client.patch(f"/api/players/{pid}", json={"last_name": "Kraus", "img": "", "rating": 9999})
    assert resp.status_code == 200
    player = fetch(Player, pid)
    assert player.last_name == "Kraus"
    assert player.img is None
    # ratings are only written by the ledger
    assert player.rating == 1500
    assert player.country == "DE"


def test_patch_rejects_blank_name(client, make_player, fetch):
    pid = make_player("Ole", "Krause")
    resp = client.patch(f"/api/players/{pid}", json={"first_name": "  "})
    assert resp.status_code == 400
    assert fetch(Player, pid).first_name == "Ole"


def test_delete_player(client, make_player, fetch):
    pid = make_player("Ole", "Krause")
    assert client.delete(f"/api/players/{pid}").status_code == 200
    assert fetch(Player, pid) is None
    assert client.delete(f"/api/players/{pid}").status_code == 404
