"""
Flask REST API for PocketCalc Web Portal
Exposes the calculator engine, its history and the theme preference as JSON endpoints
"""
import logging
import threading
from flask import Flask, jsonify, request
from flask_cors import CORS
import config
from calculator import CalculatorEngine
from database import Database
from input_handler import dispatch_key
from operations import Operation
from storage_manager import StorageManager

logger = logging.getLogger(__name__)


def create_app(db_path=None):
    """Build the web portal app with its own engine and store"""
    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes

    # Initialize components
    db = Database(db_path or config.DB_PATH)
    storage = StorageManager(db, history_key=config.WEB_HISTORY_KEY)
    engine = CalculatorEngine(history=storage.load_history())
    saved = {'records': engine.history_snapshot()}

    app.config['ENGINE'] = engine
    app.config['STORAGE'] = storage
    # Flask serves requests on threads; the engine handles one operation at a time
    lock = threading.Lock()
    app.config['ENGINE_LOCK'] = lock

    def persist_history():
        records = engine.history_snapshot()
        if records != saved['records']:
            storage.save_history(records)
            saved['records'] = records

    def state_payload():
        return {
            'display': engine.display_text,
            'expression': engine.expression_text,
            'pending_input': engine.pending_input,
            'first_operand': engine.first_operand,
            'operation': engine.operation.value if engine.operation else None,
            'is_error': engine.is_error,
            'can_undo': engine.can_undo,
            'can_redo': engine.can_redo,
        }

    def run(action):
        """Apply an engine action and return the resulting state"""
        try:
            with lock:
                action()
                persist_history()
                data = state_payload()
            return jsonify({'success': True, 'data': data})
        except Exception as e:
            logger.exception("Engine action failed")
            return jsonify({'success': False, 'error': str(e)}), 500

    def body_field(name):
        data = request.get_json(silent=True) or {}
        value = data.get(name)
        return value if isinstance(value, str) else None

    @app.route('/api')
    def api_info():
        """API information"""
        return jsonify({
            'success': True,
            'data': {
                'name': config.APP_NAME,
                'version': config.VERSION,
                'endpoints': sorted(str(rule) for rule in app.url_map.iter_rules()
                                    if str(rule).startswith('/api')),
            }
        })

    @app.route('/api/state')
    def get_state():
        """Get the current display and engine state"""
        with lock:
            data = state_payload()
        return jsonify({'success': True, 'data': data})

    @app.route('/api/digit', methods=['POST'])
    def post_digit():
        """Append a digit or decimal point"""
        digit = body_field('digit')
        if digit is None:
            return jsonify({'success': False, 'error': "Missing 'digit'"}), 400
        return run(lambda: engine.append_digit(digit))

    @app.route('/api/operation', methods=['POST'])
    def post_operation():
        """Select add, subtract, multiply or divide"""
        operation = Operation.coerce(body_field('operation'))
        if operation is None:
            valid = ', '.join(op.value for op in Operation)
            return jsonify({'success': False, 'error': f"'operation' must be one of: {valid}"}), 400
        return run(lambda: engine.set_operation(operation))

    @app.route('/api/key', methods=['POST'])
    def post_key():
        """Apply a keyboard key"""
        key = body_field('key')
        if key is None:
            return jsonify({'success': False, 'error': "Missing 'key'"}), 400
        handled = {}

        def press():
            handled['ok'] = dispatch_key(engine, key)

        response = run(press)
        if not handled.get('ok', True):
            return jsonify({'success': False, 'error': f"Unsupported key: {key!r}"}), 400
        return response

    @app.route('/api/evaluate', methods=['POST'])
    def post_evaluate():
        return run(engine.evaluate)

    @app.route('/api/percentage', methods=['POST'])
    def post_percentage():
        return run(engine.apply_percentage)

    @app.route('/api/sqrt', methods=['POST'])
    def post_sqrt():
        return run(engine.apply_square_root)

    @app.route('/api/backspace', methods=['POST'])
    def post_backspace():
        return run(engine.backspace)

    @app.route('/api/clear', methods=['POST'])
    def post_clear():
        return run(engine.clear)

    @app.route('/api/undo', methods=['POST'])
    def post_undo():
        return run(engine.undo)

    @app.route('/api/redo', methods=['POST'])
    def post_redo():
        return run(engine.redo)

    @app.route('/api/history')
    def get_history():
        """Get calculation history, most recent first"""
        try:
            with lock:
                entries = engine.history.format_calculation_history()
                records = engine.history_snapshot()
            return jsonify({
                'success': True,
                'data': {'entries': entries, 'records': records},
                'count': len(entries)
            })
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/history/<int:index>/recall', methods=['POST'])
    def recall_history(index):
        """Load a history result into the display"""
        recalled = {}

        def recall():
            recalled['ok'] = engine.recall_from_history(index)

        response = run(recall)
        if not recalled.get('ok', True):
            return jsonify({'success': False, 'error': f"No history entry at index {index}"}), 404
        return response

    @app.route('/api/history', methods=['DELETE'])
    def delete_history():
        """Clear calculation history"""
        try:
            with lock:
                engine.clear_history()
                storage.clear_history()
                saved['records'] = []
            return jsonify({'success': True, 'data': [], 'count': 0})
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/theme')
    def get_theme():
        return jsonify({'success': True, 'data': {'theme': storage.get_theme()}})

    @app.route('/api/theme', methods=['POST'])
    def post_theme():
        """Set the theme to 'light' or 'dark'"""
        try:
            theme = storage.set_theme(body_field('theme'))
        except ValueError as e:
            return jsonify({'success': False, 'error': str(e)}), 400
        return jsonify({'success': True, 'data': {'theme': theme}})

    @app.route('/api/theme/toggle', methods=['POST'])
    def toggle_theme():
        try:
            theme = storage.toggle_theme()
            return jsonify({'success': True, 'data': {'theme': theme}})
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    return app


if __name__ == '__main__':
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    print("\n" + "="*60)
    print("PocketCalc Web Portal API Server")
    print("="*60)
    print(f"Server starting on http://{config.WEB_HOST}:{config.WEB_PORT}")
    print(f"Access from this device: http://localhost:{config.WEB_PORT}")
    if config.WEB_HOST == '0.0.0.0':
        print(f"Access from network: http://<your-ip>:{config.WEB_PORT}")
    print("="*60 + "\n")

    create_app().run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)
