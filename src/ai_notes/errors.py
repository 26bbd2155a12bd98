"""AI show-note error classes."""


class AiNotesError(Exception):
    """Show number invalid, show missing, or show has no transcript."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code
