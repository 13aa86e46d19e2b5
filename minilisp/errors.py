class MiniLispError(Exception):
    """ Base class for all minilisp errors"""
    pass


class ParseError(MiniLispError):
    """ Raised when the token stream does not form a valid expression"""

    def __init__(self, message: str, token: str | None = None):
        if token is not None:
            message = f"{message}: {token}"
        super().__init__(message)
        self.token = token


class EvalError(MiniLispError):
    """ Raised when an expression has no valid reduction"""
    pass
