"""Domain exceptions: all public errors of fakecheck.

Hexagonal architecture: all exceptions visible to users defined in domain.
Application/Infrastructure use these, not define their own public exceptions.
"""


class FakeCheckError(Exception):
    """Base for all fakecheck error exceptions.

    Allows: except FakeCheckError to catch all library errors.
    """


class ConfigurationError(FakeCheckError, ValueError):
    """Malformed rule or call specification.

    Raised at registration time; the rule is not registered.
    Inherits ValueError for semantic correctness (invalid configuration value).

    Attributes:
        subject: What was being configured (member name, "action", ...).
        reason: Why the configuration is invalid.
    """

    def __init__(self, subject: str, reason: str) -> None:
        """Initialize with configured subject and reason."""
        if not subject:
            raise ValueError("subject must not be empty")
        if not reason:
            raise ValueError("reason must not be empty")

        self.subject = subject
        self.reason = reason
        super().__init__(f"Invalid configuration for '{subject}': {reason}")


class ExpectationError(FakeCheckError, AssertionError):
    """Verification of recorded calls failed.

    Inherits AssertionError so test runners report it as a failed assertion.
    The message is exactly the diagnostic text.

    Attributes:
        diagnostic: Full diagnostic, starts and ends with blank lines.
    """

    def __init__(self, diagnostic: str) -> None:
        """Initialize with diagnostic text."""
        if not diagnostic:
            raise ValueError("diagnostic must not be empty")

        self.diagnostic = diagnostic
        super().__init__(diagnostic)


class NotFakeError(FakeCheckError, TypeError):
    """Object is not a fake created by fakecheck.

    Attributes:
        got: Actual type received.
    """

    def __init__(self, got: type) -> None:
        """Initialize with actual type."""
        self.got = got
        super().__init__(f"expected a fake or a fake's method, got {got.__name__}")


class UnfakeableTypeError(FakeCheckError, TypeError):
    """Type cannot be faked (final, builtin, or refuses subclassing).

    Attributes:
        faked_type: Type that was requested.
        reason: Why it cannot be faked.
    """

    def __init__(self, faked_type: object, reason: str) -> None:
        """Initialize with requested type and reason."""
        self.faked_type = faked_type
        self.reason = reason
        super().__init__(f"cannot fake {faked_type!r}: {reason}")
