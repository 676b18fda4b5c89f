from flask import Blueprint, jsonify, request, current_app
from freebee import socketio
from freebee.models import DailyPuzzle
from freebee.services.puzzles.notices import notice_for
from freebee.services.puzzles.sessions import (
    commit as svc_commit,
    current_owner,
    get_session,
    normalize_letter,
    session_payload,
)
from freebee.services.puzzles.source import PuzzleFormatError, parse_puzzle, save_puzzle


puzzles = Blueprint('puzzles', __name__)

NO_PUZZLE = {'error': 'No puzzle has been loaded yet'}


def _emit_state_update(owner: str) -> None:
    socketio.emit('state_update', {'owner': owner}, to=f"player:{owner}", namespace='/ws')


@puzzles.route('', methods=['GET'])
def get_puzzle():
    row = DailyPuzzle.query.order_by(DailyPuzzle.id.desc()).first()
    if not row:
        return jsonify(NO_PUZZLE), 404
    return jsonify(row.to_dict())


@puzzles.route('', methods=['POST'])
def load_puzzle():
    data = request.get_json(silent=True)
    try:
        puzzle = parse_puzzle(data)
    except PuzzleFormatError as exc:
        return jsonify({'error': str(exc)}), 400
    row = save_puzzle(puzzle)
    current_app.logger.info(f"[load-puzzle] letters={puzzle.letters} words={len(puzzle.wordlist)} total={puzzle.total}")
    return jsonify(row.to_dict()), 201


@puzzles.route('/session', methods=['GET'])
def get_session_state():
    owner = current_owner()
    controller = get_session(owner, create=False)
    if controller is None:
        return jsonify(NO_PUZZLE), 404
    return jsonify(session_payload(owner, controller))


@puzzles.route('/session/letters', methods=['POST'])
def append_letter():
    data = request.get_json(silent=True) or {}
    letter = normalize_letter(data.get('letter'))
    if letter is None:
        return jsonify({'error': 'letter must be a single letter a-z'}), 400
    owner = current_owner()
    controller = get_session(owner)
    if controller is None:
        return jsonify(NO_PUZZLE), 404
    controller.append_letter(letter)
    _emit_state_update(owner)
    return jsonify(session_payload(owner, controller))


@puzzles.route('/session/letters', methods=['DELETE'])
def delete_letter():
    owner = current_owner()
    controller = get_session(owner)
    if controller is None:
        return jsonify(NO_PUZZLE), 404
    controller.delete_last_letter()
    _emit_state_update(owner)
    return jsonify(session_payload(owner, controller))


@puzzles.route('/session/clear', methods=['POST'])
def clear_guess():
    owner = current_owner()
    controller = get_session(owner)
    if controller is None:
        return jsonify(NO_PUZZLE), 404
    controller.clear_guess()
    _emit_state_update(owner)
    return jsonify(session_payload(owner, controller))


@puzzles.route('/session/commit', methods=['POST'])
def commit_guess():
    owner = current_owner()
    controller = get_session(owner)
    if controller is None:
        return jsonify(NO_PUZZLE), 404
    result = svc_commit(owner, controller)
    _emit_state_update(owner)
    return jsonify({
        'result': result.to_dict(),
        'notice': notice_for(result, current_app.config),
        'state': session_payload(owner, controller),
    })
