# engine_py/src/shithead_engine/errors.py

class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")

# Specific error codes
INVALID_PLAYER = "INVALID_PLAYER"
CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
GAME_NOT_FOUND = "GAME_NOT_FOUND"
NOT_YOUR_TURN = "NOT_YOUR_TURN"
GAME_NOT_STARTED = "GAME_NOT_STARTED"
GAME_ALREADY_STARTED = "GAME_ALREADY_STARTED"
GAME_FULL = "GAME_FULL"
GAME_ID_TAKEN = "GAME_ID_TAKEN"
NOT_ENOUGH_PLAYERS = "NOT_ENOUGH_PLAYERS"
PLAYER_NOT_IN_GAME = "PLAYER_NOT_IN_GAME"
INVALID_MOVE = "INVALID_MOVE"
INVALID_EVENT = "INVALID_EVENT"
INTERNAL_ERROR = "INTERNAL_ERROR"

# Helper function to raise common errors
def raise_error(code: str, message: str):
    raise GameError(code, message)
