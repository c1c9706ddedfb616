def received(client, name):
    return [packet["args"][0] for packet in client.get_received() if packet["name"] == name]


def new_room(sio_factory):
    host = sio_factory()
    host.emit("createRoom", {"playerName": "Alice"})
    code = received(host, "roomCreated")[0]["roomCode"]
    return host, code


def test_create_room_replies_to_host(sio_factory):
    host = sio_factory()
    host.emit("createRoom", "Alice")
    packets = host.get_received()
    names = [p["name"] for p in packets]
    assert names == ["roomCreated", "playerJoined"]
    created = packets[0]["args"][0]
    assert created["isHost"] is True
    assert len(created["roomCode"]) == 6
    assert packets[1]["args"][0]["players"][0]["name"] == "Alice"


def test_join_normalizes_code_and_broadcasts(sio_factory):
    host, code = new_room(sio_factory)
    host.get_received()
    guest = sio_factory()

    guest.emit("joinRoom", {"roomCode": f"  {code.lower()} ", "playerName": "Bob"})

    assert received(guest, "roomJoined") == [{"roomCode": code, "isHost": False}]
    joined = received(host, "playerJoined")
    assert [p["name"] for p in joined[0]["players"]] == ["Alice", "Bob"]


def test_join_unknown_room_reports_error(sio_factory):
    guest = sio_factory()
    guest.emit("joinRoom", {"roomCode": "ZZZZZZ", "playerName": "Bob"})
    assert received(guest, "error") == ["Room not found"]


def test_full_game_round_trip(sio_factory):
    host, code = new_room(sio_factory)
    guest = sio_factory()
    guest.emit("joinRoom", {"roomCode": code, "playerName": "Bob"})
    host.get_received()
    guest.get_received()

    guest.emit("selectGame", {"roomCode": code, "gameType": "connect4"})
    assert received(host, "gameSelected") == []

    host.emit("selectGame", {"roomCode": code, "gameType": "connect4"})
    assert received(guest, "gameSelected") == [{"gameType": "connect4"}]
    host.get_received()

    host.emit("makeMove", {"roomCode": code, "gameType": "connect4", "move": {"column": 2}})
    update = received(guest, "gameUpdate")[0]
    assert update["valid"] is True
    assert update["row"] == 5
    assert update["gameState"]["board"][5][2] == "R"
    assert update["gameState"]["timerStarted"] is False
    host.get_received()

    guest.emit("requestGameState", {"roomCode": code})
    assert received(guest, "gameUpdate")[0]["gameState"] == update["gameState"]
    assert received(host, "gameUpdate") == []


def test_leaving_notifies_remaining_player(sio_factory):
    host, code = new_room(sio_factory)
    guest = sio_factory()
    guest.emit("joinRoom", {"roomCode": code, "playerName": "Bob"})
    host.get_received()

    guest.disconnect()
    left = received(host, "playerLeft")
    assert [p["name"] for p in left[0]["players"]] == ["Alice"]
