def test_health(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


def test_login_returns_token_usable_for_me(client, user):
    response = client.post('/api/auth/login', json={'email': 'ASHA@example.com ', 'password': 'password123'})
    assert response.status_code == 200
    payload = response.get_json()
    assert payload['user']['email'] == 'asha@example.com'
    assert 'password_hash' not in payload['user']

    me = client.get('/api/auth/me', headers={'Authorization': f"Bearer {payload['token']}"})
    assert me.status_code == 200
    assert me.get_json()['user']['name'] == 'Asha'


def test_login_rejects_bad_password(client, user):
    response = client.post('/api/auth/login', json={'email': 'asha@example.com', 'password': 'nope-nope'})
    assert response.status_code == 401
    assert response.get_json()['message'] == 'invalid credentials'


def test_login_unknown_user(client):
    response = client.post('/api/auth/login', json={'email': 'ghost@example.com', 'password': 'password123'})
    assert response.status_code == 401


def test_login_requires_fields(client):
    response = client.post('/api/auth/login', json={'email': 'asha@example.com'})
    assert response.status_code == 400


def test_missing_token_is_unauthorized(client):
    response = client.get('/api/stats')
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Missing or invalid auth token'


def test_garbage_token_is_rejected(client):
    response = client.get('/api/mantras', headers={'Authorization': 'Bearer not.a.jwt'})
    assert response.status_code == 422


def test_create_user_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['create-user', 'new@example.com', 'Newbie', '--password', 'secret123'])
    assert result.exit_code == 0, result.output
    assert 'created' in result.output

    duplicate = runner.invoke(args=['create-user', 'new@example.com', 'Again', '--password', 'secret123'])
    assert duplicate.exit_code != 0
