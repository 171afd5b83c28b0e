import pytest


@pytest.fixture
def mantra_id(client, auth_headers):
    response = client.post(
        '/api/mantras',
        json={'title': 'Gayatri', 'text': 'Om bhur bhuva swaha', 'goal': 20},
        headers=auth_headers,
    )
    return response.get_json()['mantra']['id']


def test_log_session_with_explicit_date(client, auth_headers, mantra_id, user):
    response = client.post(
        '/api/sessions',
        json={'mantraId': mantra_id, 'count': 27, 'date': '2024-05-01T06:30:00Z'},
        headers=auth_headers,
    )
    assert response.status_code == 201
    session = response.get_json()['session']
    assert session['count'] == 27
    assert session['mantraId'] == mantra_id
    assert session['userId'] == user.id
    assert session['date'].startswith('2024-05-01T06:30:00')


def test_log_session_converts_offset_to_utc(client, auth_headers, mantra_id):
    response = client.post(
        '/api/sessions',
        json={'mantra_id': mantra_id, 'count': 1, 'date': '2024-05-01T01:00:00+05:30'},
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.get_json()['session']['date'].startswith('2024-04-30T19:30:00')


def test_log_session_defaults_date_to_now(client, auth_headers, mantra_id):
    response = client.post('/api/sessions', json={'mantraId': mantra_id, 'count': 3}, headers=auth_headers)
    assert response.status_code == 201
    assert response.get_json()['session']['date'] is not None


@pytest.mark.parametrize('body', [
    {'count': 5},
    {'mantraId': 1, 'count': 0},
    {'mantraId': 1, 'count': -3},
    {'mantraId': 1, 'count': 2.5},
    {'mantraId': 1, 'count': True},
    {'mantraId': 1, 'count': 5, 'date': 'last tuesday'},
])
def test_log_session_validation(client, auth_headers, mantra_id, body):
    response = client.post('/api/sessions', json=body, headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Invalid session data'


def test_cannot_log_against_someone_elses_mantra(client, other_auth_headers, mantra_id):
    response = client.post('/api/sessions', json={'mantraId': mantra_id, 'count': 5}, headers=other_auth_headers)
    assert response.status_code == 404


def test_unknown_mantra(client, auth_headers):
    response = client.post('/api/sessions', json={'mantraId': 9999, 'count': 5}, headers=auth_headers)
    assert response.status_code == 404


def test_list_sessions_newest_first_and_filtered(client, auth_headers, other_auth_headers, mantra_id):
    other = client.post(
        '/api/mantras', json={'title': 'Other', 'text': 'So hum', 'goal': 10}, headers=auth_headers
    ).get_json()['mantra']['id']

    client.post('/api/sessions', json={'mantraId': mantra_id, 'count': 1, 'date': '2024-05-01T08:00:00'}, headers=auth_headers)
    client.post('/api/sessions', json={'mantraId': mantra_id, 'count': 2, 'date': '2024-05-03T08:00:00'}, headers=auth_headers)
    client.post('/api/sessions', json={'mantraId': other, 'count': 3, 'date': '2024-05-02T08:00:00'}, headers=auth_headers)

    listing = client.get('/api/sessions', headers=auth_headers).get_json()['sessions']
    assert [s['count'] for s in listing] == [2, 3, 1]

    filtered = client.get(f'/api/sessions?mantra_id={mantra_id}', headers=auth_headers).get_json()['sessions']
    assert [s['count'] for s in filtered] == [2, 1]

    assert client.get('/api/sessions?mantra_id=abc', headers=auth_headers).status_code == 400
    assert client.get('/api/sessions', headers=other_auth_headers).get_json()['sessions'] == []
