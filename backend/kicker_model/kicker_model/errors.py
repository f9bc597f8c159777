class InvalidTransition(ValueError):
    """Raised when a match session is asked to do something its state forbids.

    The session is left untouched. ``code`` is a short machine-readable reason
    that the HTTP layer passes straight through to clients.
    """

    def __init__(self, code: str, detail: str | None = None) -> None:
        super().__init__(code)
        self.code = code
        self.detail = detail
