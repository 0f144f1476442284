from services.gateway import config

SESSION = {"sessionToken": "sess-123", "AppToken": "app-456"}


def test_init_session_returns_token(client):
    response = client.post("/initSession", json={"Authorization": "user_token good", "AppToken": "app-456"})
    assert response.status_code == 200
    assert response.json() == {"message": "Sessão iniciada com sucesso", "sessionToken": "sess-123"}


def test_init_session_requires_both_fields(client, fake_glpi):
    response = client.post("/initSession", json={"Authorization": "user_token good"})
    assert response.status_code == 400
    assert response.json() == {"message": "Authorization e App-Token são necessários"}
    assert fake_glpi.requests == []


def test_init_session_upstream_failure(client):
    response = client.post("/initSession", json={"Authorization": "user_token bad", "AppToken": "app-456"})
    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "Erro ao iniciar sessão"
    assert body["error"] == ["ERROR_GLPI_LOGIN_USER_TOKEN", "parameter user_token seems invalid"]


def test_users_require_tokens(client, fake_glpi):
    response = client.post("/users", json={"sessionToken": "sess-123"})
    assert response.status_code == 400
    assert response.json() == {"message": "Session-Token e App-Token são necessários"}
    assert fake_glpi.requests == []


def test_users_listed_and_sorted(client, fake_glpi):
    fake_glpi.collections["User"] = [
        {"1": "zoe", "9": "Zoe", "34": "Lima", "5": "z@x.com"},
        {"1": "ana", "9": "ana", "34": "Silva", "5": "a@x.com", "13": "TI"},
        {"1": "bot", "9": "Bot", "34": None, "5": "b@x.com"},
    ]

    response = client.post("/users", json=SESSION)

    assert response.status_code == 200
    body = response.json()
    assert [u["id"] for u in body] == ["ana", "zoe"]
    assert body[0]["setor"] == "TI"
    assert body[1]["setor"] == ""


def test_users_not_found(client):
    response = client.post("/users", json=SESSION)
    assert response.status_code == 404
    assert response.json() == {"message": "Nenhum usuário encontrado"}


def test_users_none_valid(client, fake_glpi):
    fake_glpi.collections["User"] = [{"9": "", "34": "B", "5": "b@x.com"}]
    response = client.post("/users", json=SESSION)
    assert response.status_code == 404
    assert response.json() == {"message": "Nenhum usuário válido encontrado"}


def test_users_upstream_failure(client, fake_glpi):
    fake_glpi.collections["User"] = [{"9": "Ana", "34": "S", "5": "a@x.com"}] * 30
    fake_glpi.fail_search_at = 20

    response = client.post("/users", json=SESSION)

    assert response.status_code == 500
    assert response.json()["message"] == "Erro ao buscar dados dos usuários"
    assert response.json()["error"][0] == "ERROR_RANGE_EXCEED_TOTAL"


def test_tickets_listed_newest_first(client, fake_glpi):
    fake_glpi.users = {"5": {"firstname": "Ana", "realname": "Silva"}}
    fake_glpi.collections["Ticket"] = [
        {"id": 1, "1": "Old", "4": 5, "8": "N1", "12": 5, "19": "2023-01-01 08:00:00"},
        {"id": 2, "1": "New", "4": 6, "8": "N2", "12": 4, "19": "2024-01-01 08:00:00"},
    ]

    response = client.post("/tickets", json=SESSION)

    assert response.status_code == 200
    assert response.json() == [
        {"id": 2, "titulo": "New", "status": "Pendente", "grupo_responsavel": "N2",
         "autor": "Desconhecido", "data_criacao": "2024-01-01 08:00:00"},
        {"id": 1, "titulo": "Old", "status": "Solucionado", "grupo_responsavel": "N1",
         "autor": "Ana Silva", "data_criacao": "2023-01-01 08:00:00"},
    ]


def test_tickets_with_concurrent_author_lookups(client, fake_glpi, monkeypatch):
    monkeypatch.setattr(config, "GLPI_AUTHOR_CONCURRENCY", 4)
    fake_glpi.users = {str(i): {"firstname": f"U{i}", "realname": "X"} for i in range(8)}
    fake_glpi.collections["Ticket"] = [
        {"id": i, "4": i, "12": 1, "19": f"2024-01-0{i + 1} 00:00:00"} for i in range(8)
    ]

    response = client.post("/tickets", json=SESSION)

    assert response.status_code == 200
    assert [t["autor"] for t in response.json()] == [f"U{i} X" for i in reversed(range(8))]


def test_tickets_not_found(client):
    response = client.post("/tickets", json=SESSION)
    assert response.status_code == 404
    assert response.json() == {"message": "Nenhum ticket encontrado"}


def test_tickets_require_tokens(client):
    response = client.post("/tickets", json={})
    assert response.status_code == 400
