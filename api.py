"""
Flask REST API for StepCalc
Exposes keypad sessions as JSON endpoints
"""
import functools
import logging
import uuid

from flask import Flask, jsonify, request
from flask_cors import CORS

import config
from keypad import Keypad
from operations import symbols_by_kind

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)  # Enable CORS for all routes

# One keypad per session id, kept in memory only, oldest first
sessions = {}


class SessionNotFound(Exception):
    pass


def get_session(session_id):
    keypad = sessions.get(session_id)
    if keypad is None:
        raise SessionNotFound(session_id)
    return keypad


def required_field(name):
    """Read a non-empty string field from the JSON body"""
    payload = request.get_json(silent=True) or {}
    value = payload.get(name)
    if not isinstance(value, str) or not value:
        raise ValueError(f"Missing field '{name}'")
    return value


def session_response(session_id, status=200):
    return jsonify({
        'success': True,
        'data': dict(get_session(session_id).snapshot(), id=session_id)
    }), status


def session_action(handler):
    """Run a keypad action and translate failures into JSON errors"""
    @functools.wraps(handler)
    def wrapper(session_id):
        try:
            handler(get_session(session_id))
            return session_response(session_id)
        except SessionNotFound:
            return jsonify({'success': False, 'error': f"Unknown session '{session_id}'"}), 404
        except ValueError as e:
            return jsonify({'success': False, 'error': str(e)}), 400
        except Exception as e:
            logger.error(f"Error in {handler.__name__} for session {session_id}: {e}")
            return jsonify({'success': False, 'error': str(e)}), 500
    return wrapper


@app.route('/api')
def api_info():
    """API information"""
    return jsonify({
        'success': True,
        'data': {
            'name': config.APP_NAME,
            'version': config.VERSION,
            'endpoints': [
                'GET /api/operations',
                'POST /api/sessions',
                'GET /api/sessions/<id>',
                'DELETE /api/sessions/<id>',
                'POST /api/sessions/<id>/digit',
                'POST /api/sessions/<id>/operation',
                'POST /api/sessions/<id>/memory/store',
                'POST /api/sessions/<id>/memory/recall',
                'POST /api/sessions/<id>/erase',
                'POST /api/sessions/<id>/clean',
            ]
        }
    })


@app.route('/api/operations')
def get_operations():
    """List the operation keys grouped by kind"""
    return jsonify({'success': True, 'data': symbols_by_kind()})


@app.route('/api/sessions', methods=['POST'])
def create_session():
    """Start a new keypad session"""
    try:
        while len(sessions) >= config.MAX_SESSIONS:
            oldest = next(iter(sessions))
            del sessions[oldest]
            logger.info(f"Evicted session {oldest}")

        session_id = uuid.uuid4().hex
        sessions[session_id] = Keypad()
        logger.info(f"Created session {session_id}")
        return session_response(session_id, 201)
    except Exception as e:
        logger.error(f"Error creating session: {e}")
        return jsonify({'success': False, 'error': str(e)}), 500


@app.route('/api/sessions/<session_id>', methods=['GET'])
@session_action
def get_session_state(keypad):
    """Current display and description"""
    pass


@app.route('/api/sessions/<session_id>', methods=['DELETE'])
def delete_session(session_id):
    """Drop a keypad session"""
    if sessions.pop(session_id, None) is None:
        return jsonify({'success': False, 'error': f"Unknown session '{session_id}'"}), 404
    logger.info(f"Deleted session {session_id}")
    return jsonify({'success': True, 'data': {'id': session_id}})


@app.route('/api/sessions/<session_id>/digit', methods=['POST'])
@session_action
def press_digit(keypad):
    keypad.touch_digit(required_field('digit'))


@app.route('/api/sessions/<session_id>/operation', methods=['POST'])
@session_action
def press_operation(keypad):
    keypad.perform_operation(required_field('symbol'))


@app.route('/api/sessions/<session_id>/memory/store', methods=['POST'])
@session_action
def store_memory(keypad):
    keypad.store_memory()


@app.route('/api/sessions/<session_id>/memory/recall', methods=['POST'])
@session_action
def recall_memory(keypad):
    keypad.recall_memory()


@app.route('/api/sessions/<session_id>/erase', methods=['POST'])
@session_action
def erase(keypad):
    keypad.erase()


@app.route('/api/sessions/<session_id>/clean', methods=['POST'])
@session_action
def clean(keypad):
    keypad.clean()
