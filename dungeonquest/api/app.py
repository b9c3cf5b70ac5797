"""Flask API application."""

import logging
import uuid
from datetime import datetime
from typing import Optional

from flask import Flask, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from dungeonquest.config import DEFAULT_PLAYER_NAME, DEFAULT_SAVE_DIR
from ..api.game_config import GameConfigManager
from ..engine.game_engine import GameEngine
from ..engine.world_builder import build_world
from ..models.actions import ActionType, Command, CommandResult
from ..models.settings import GameSettings
from ..persistence.save_manager import SaveManager
from ..persistence.snapshot import snapshot_world
from ..security.input_sanitizer import InputSanitizer

logging.basicConfig(level=logging.DEBUG, format='[%(name)-19s - %(levelname)5s] %(message)s')

app = Flask("flask.dungeonquest")


@app.before_request
def log_request_info():
    app.logger.info('Access to: %s from %s (%s)',
        request.url,
        request.headers.get('X-Forwarded-For', request.remote_addr),
        request.headers.get('User-Agent'))


# Error handlers for API routes
@app.errorhandler(HTTPException)
def handle_http_exception(e: HTTPException):
    """Return JSON instead of HTML for HTTP errors in API routes."""
    if request.path.startswith("/api/"):
        response = e.get_response()
        response.data = jsonify(
            {
                "error": e.name,
                "code": e.code,
                "description": e.description,
            }
        ).data
        response.content_type = "application/json"
        return response
    return e


@app.errorhandler(500)
def handle_internal_error(e: Exception):
    """Handle 500 errors."""
    if request.path.startswith("/api/"):
        app.logger.error(f"Internal server error: {e}", exc_info=True)
        return jsonify({"error": "Internal Server Error", "message": "An unexpected error occurred"}), 500
    return "Internal Server Error", 500


# Global game storage: game_id -> (GameEngine, created_at)
_games: dict[str, tuple[GameEngine, datetime]] = {}
_game_config_manager = GameConfigManager()
_input_sanitizer = InputSanitizer()

# Save manager shared by every game
_save_manager = SaveManager(save_directory=DEFAULT_SAVE_DIR)


def _get_game_engine(game_id: Optional[str] = None) -> Optional[GameEngine]:
    """Get game engine by game_id, or return None if not found."""
    if game_id is None:
        return None
    if game_id in _games:
        return _games[game_id][0]
    return None


def _parse_command(data: dict) -> tuple[Optional[Command], str]:
    """
    Build a Command from a request body.

    Accepts either ``{"action": "take", "args": ["potion"]}`` or free text
    as ``{"text": "take potion"}``.

    Returns:
        Tuple of (command, error_message)
    """
    text = data.get("text")
    if text:
        if not isinstance(text, str):
            return None, "text must be a string"
        is_safe, error_msg = _input_sanitizer.is_safe(text)
        if not is_safe:
            return None, f"Input validation failed: {error_msg}"
        command = _input_sanitizer.parse_command(text)
        if command is None:
            return None, "Unknown command. Type 'help' for available commands."
        return command, ""

    action = data.get("action", "")
    if not isinstance(action, str) or not action:
        return None, "Action is required"
    action = _input_sanitizer.sanitize(action).lower()
    if not _input_sanitizer.validate_action_type(action):
        return None, f"Unknown action: {action}"

    args = data.get("args", [])
    if not isinstance(args, list) or not all(isinstance(arg, str) for arg in args):
        return None, "args must be a list of strings"
    return Command(action=ActionType(action), args=_input_sanitizer.sanitize_args(args)), ""


def _serialize_result(result: CommandResult) -> dict:
    return result.model_dump()


@app.route("/api/games", methods=["GET"])
def list_games():
    """List all games."""
    games = []
    for game_id, (engine, created_at) in _games.items():
        world = engine.world
        games.append({
            "game_id": game_id,
            "created_at": created_at.isoformat(),
            "player": world.player.name,
            "current_room": world.current_room.name,
            "game_over": engine.game_over,
            "victory": engine.victory,
        })
    return jsonify({"games": games})


@app.route("/api/games", methods=["POST"])
def create_game():
    """Create a new game in the bundled world."""
    if not request.is_json:
        return jsonify({"error": "Content-Type must be application/json"}), 400

    data = request.get_json() or {}
    player_name = _input_sanitizer.sanitize(data.get("player_name") or DEFAULT_PLAYER_NAME) or DEFAULT_PLAYER_NAME

    try:
        world = build_world(player_name=player_name)
    except (OSError, ValueError) as e:
        app.logger.error(f"Error building world: {e}", exc_info=True)
        return jsonify({"error": "Failed to create game", "message": str(e)}), 500

    engine = GameEngine(world, save_manager=_save_manager, settings=_game_config_manager.config)
    game_id = str(uuid.uuid4())
    _games[game_id] = (engine, datetime.now())
    app.logger.info(f"Created game {game_id} for {player_name}")

    room = world.current_room
    return jsonify({
        "game_id": game_id,
        "text": f"Welcome, {world.player.name}! Your adventure begins...\n\n{room.full_description()}",
    }), 201


@app.route("/api/games/<game_id>", methods=["DELETE"])
def delete_game(game_id: str):
    """Remove a game from memory. Save files are kept."""
    if game_id not in _games:
        return jsonify({"error": "Game not found"}), 404

    del _games[game_id]
    app.logger.info(f"Removed game {game_id} from memory")
    return jsonify({"success": True, "message": f"Game {game_id} has been deleted"})


@app.route("/api/games/<game_id>/action", methods=["POST"])
def submit_action(game_id: str):
    """Submit player action."""
    if not request.is_json:
        return jsonify({"error": "Content-Type must be application/json"}), 400

    data = request.get_json()
    if not data:
        return jsonify({"error": "No data provided"}), 400

    engine = _get_game_engine(game_id)
    if not engine:
        return jsonify({"error": "Game not found"}), 404

    command, error_msg = _parse_command(data)
    if command is None:
        return jsonify({"error": error_msg}), 400

    result = engine.execute(command)
    return jsonify({"result": _serialize_result(result)})


@app.route("/api/games/<game_id>/state", methods=["GET"])
def get_state(game_id: str):
    """Get current game state as a save document."""
    engine = _get_game_engine(game_id)
    if not engine:
        return jsonify({"error": "Game not found"}), 404
    return jsonify({
        "state": snapshot_world(engine.world).model_dump(mode="json"),
        "game_over": engine.game_over,
        "victory": engine.victory,
    })


@app.route("/api/saves", methods=["GET"])
def list_saves():
    """List save files, most recent first."""
    saves = _save_manager.list_saves()
    return jsonify({"saves": [info.model_dump(mode="json") for info in saves]})


@app.route("/api/config/game", methods=["GET"])
def get_game_config():
    """Get the settings used for new games."""
    config = _game_config_manager.config
    return jsonify({"config": config.model_dump()})


@app.route("/api/config/game", methods=["POST"])
def update_game_config():
    """Update the settings used for new games."""
    if not request.is_json:
        return jsonify({"error": "Content-Type must be application/json"}), 400

    data = request.get_json()
    if not data:
        return jsonify({"error": "No data provided"}), 400

    try:
        new_config = GameSettings(**data)
    except ValidationError as e:
        app.logger.error(f"Error updating game config: {e}", exc_info=True)
        return jsonify({"error": "Invalid configuration", "message": str(e)}), 400

    _game_config_manager.update_config(new_config)
    return jsonify({"success": True, "config": _game_config_manager.config.model_dump()})


if __name__ == "__main__":
    app.run(debug=True, port=5000)
