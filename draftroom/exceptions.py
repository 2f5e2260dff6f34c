# draftroom/exceptions.py


class DraftError(Exception):
    """
    Base for every draft-engine failure. `code` is stable and is what the
    API layer and management commands report back to callers.
    """
    code = "draft_error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message())

    def default_message(self):
        return self.code.replace("_", " ").capitalize() + "."


class InvalidConfiguration(DraftError):
    code = "invalid_configuration"


class AlreadyStarted(DraftError):
    code = "already_started"


class InvalidTransition(DraftError):
    code = "invalid_transition"


class DraftNotActive(DraftError):
    code = "draft_not_active"


class OutOfTurn(DraftError):
    code = "out_of_turn"


class PlayerAlreadyDrafted(DraftError):
    code = "player_already_drafted"


class LeagueFull(DraftError):
    code = "league_full"


class NotFound(DraftError):
    code = "not_found"
