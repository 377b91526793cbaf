class EngineError(Exception):
    pass


class InvalidMoveError(EngineError):
    """A move was refused: occupied or out-of-range cell, finished game, or wrong turn."""


class InvalidStateError(EngineError):
    """The engine was asked for a move on a board that has none to give."""


class BoardFormatError(EngineError, ValueError):
    pass
