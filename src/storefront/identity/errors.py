class AuthenticationError(Exception):
    """Credentials or an access token were rejected."""

    def __init__(self, message="Invalid email or password"):
        super().__init__(message)
        self.message = message
