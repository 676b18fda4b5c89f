from flask_socketio import join_room, emit
from flask import current_app
from freebee.services.puzzles.notices import notice_for
from freebee.services.puzzles.sessions import (
    commit as svc_commit,
    current_owner,
    get_session,
    normalize_letter,
    session_payload,
)


def _room(owner: str) -> str:
    return f"player:{owner}"


def _controller_or_error(create=True):
    owner = current_owner()
    controller = get_session(owner, create=create)
    if controller is None:
        emit('error', {'message': 'No puzzle has been loaded yet'})
    return owner, controller


def _emit_state(owner, controller) -> None:
    emit('session_state', session_payload(owner, controller))


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_puzzle(data=None):
    owner, controller = _controller_or_error(create=False)
    if controller is None:
        return
    room = _room(owner)
    join_room(room)
    emit('joined', {'room': room})
    _emit_state(owner, controller)


def handle_append_letter(data):
    letter = normalize_letter((data or {}).get('letter'))
    if letter is None:
        emit('error', {'message': 'letter must be a single letter a-z'})
        return
    owner, controller = _controller_or_error()
    if controller is None:
        return
    controller.append_letter(letter)
    _emit_state(owner, controller)


def handle_delete_letter(data=None):
    owner, controller = _controller_or_error()
    if controller is None:
        return
    controller.delete_last_letter()
    _emit_state(owner, controller)


def handle_clear_guess(data=None):
    owner, controller = _controller_or_error()
    if controller is None:
        return
    controller.clear_guess()
    _emit_state(owner, controller)


def handle_commit_guess(data=None):
    owner, controller = _controller_or_error()
    if controller is None:
        return
    result = svc_commit(owner, controller)
    emit('guess_result', {
        'result': result.to_dict(),
        'notice': notice_for(result, current_app.config),
    })
    _emit_state(owner, controller)


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'."""
    from freebee import socketio

    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('join_puzzle', handle_join_puzzle, namespace='/ws')
    socketio.on_event('append_letter', handle_append_letter, namespace='/ws')
    socketio.on_event('delete_letter', handle_delete_letter, namespace='/ws')
    socketio.on_event('clear_guess', handle_clear_guess, namespace='/ws')
    socketio.on_event('commit_guess', handle_commit_guess, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')
