import pytest


def _events(sio_client, name):
    return [pkt['args'][0] for pkt in sio_client.get_received('/ws') if pkt['name'] == name]


@pytest.fixture()
def guest_client(client, loaded_puzzle):
    # First HTTP request assigns the guest id cookie the socket connection reuses
    assert client.get('/api/puzzle/session').status_code == 200
    return client


def test_socket_connect(sio_client):
    if not sio_client.is_connected('/ws'):
        sio_client.connect(namespace='/ws')
    assert sio_client.is_connected('/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'connected' for pkt in received)


def test_join_without_puzzle_reports_error(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_puzzle', {}, namespace='/ws')
    errors = _events(sio_client, 'error')
    assert errors and 'No puzzle' in errors[0]['message']


def test_intents_over_socket(guest_client, sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_puzzle', {}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'joined' for pkt in received)

    for ch in 'pain':
        sio_client.emit('append_letter', {'letter': ch}, namespace='/ws')
    states = _events(sio_client, 'session_state')
    assert states[-1]['pending_guess'] == 'pain'

    sio_client.emit('delete_letter', namespace='/ws')
    assert _events(sio_client, 'session_state')[-1]['pending_guess'] == 'pai'
    sio_client.emit('clear_guess', namespace='/ws')
    assert _events(sio_client, 'session_state')[-1]['pending_guess'] == ''

    for ch in 'pain':
        sio_client.emit('append_letter', {'letter': ch}, namespace='/ws')
    sio_client.get_received('/ws')
    sio_client.emit('commit_guess', namespace='/ws')
    received = sio_client.get_received('/ws')
    result = [pkt['args'][0] for pkt in received if pkt['name'] == 'guess_result'][0]
    assert result['result']['accepted'] is True
    assert result['result']['points'] == 1
    assert result['notice']['kind'] == 'points'
    state = [pkt['args'][0] for pkt in received if pkt['name'] == 'session_state'][-1]
    assert state['guessed_words'] == ['pain']
    assert state['pending_guess'] == ''

    # Same player over HTTP sees the socket's progress
    http_state = guest_client.get('/api/puzzle/session').get_json()
    assert http_state['guessed_words'] == ['pain']


def test_socket_rejection_and_bad_letter(guest_client, sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('append_letter', {'letter': '7'}, namespace='/ws')
    assert _events(sio_client, 'error')

    for ch in 'gin':
        sio_client.emit('append_letter', {'letter': ch}, namespace='/ws')
    sio_client.get_received('/ws')
    sio_client.emit('commit_guess', namespace='/ws')
    result = _events(sio_client, 'guess_result')[0]
    assert result['result']['reason'] == 'TOO_SHORT'
    assert result['notice']['message'] == 'At least 4 letters!'


def test_http_mutation_notifies_player_room(guest_client, sio_client):
    sio_client.emit('join_puzzle', {}, namespace='/ws')
    sio_client.get_received('/ws')
    guest_client.post('/api/puzzle/session/letters', json={'letter': 'g'})
    updates = _events(sio_client, 'state_update')
    assert updates and updates[0]['owner'].startswith('guest:')


def test_ping(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    assert _events(sio_client, 'pong') == [{'n': 1}]


def test_socket_rejects_non_ascii_letter(guest_client, sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('append_letter', {'letter': 'İ'}, namespace='/ws')
    errors = _events(sio_client, 'error')
    assert errors and errors[0]['message'] == 'letter must be a single letter a-z'
    assert guest_client.get('/api/puzzle/session').get_json()['pending_guess'] == ''
