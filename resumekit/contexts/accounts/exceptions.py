"""Account exceptions."""


class AuthenticationError(Exception):
    """
    Raised when sign-in fails.

    The message never says whether the email or the password was wrong.

    Attributes:
        email: Email that attempted to sign in
    """

    def __init__(self, email: str):
        self.email = email
        super().__init__("Invalid email or password")


class DuplicateIdentityError(ValueError):
    """Raised when signing up with an email that is already registered."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"An account already exists for {email}")
