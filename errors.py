# errors.py


class DialogueError(Exception):
    pass


class ExternalServiceError(DialogueError):
    """Falha numa chamada ao Ticket Service ou ao AI Service."""

    def __init__(self, service: str, message: str = ""):
        self.service = service
        super().__init__(f"{service}: {message}" if message else service)


class ExternalServiceTimeout(ExternalServiceError):
    pass


class ContextCorruptedError(DialogueError):
    pass


class SessionCorruptedError(ContextCorruptedError):
    """O blob guardado no store não é um SessionState válido."""


class ContextMismatchError(ContextCorruptedError):
    """O contexto da sessão não corresponde ao intent atual."""
