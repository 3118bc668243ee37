class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class CredentialNotFound(DomainError):
    """No credential matches the lookup or update criteria."""

    pass


class CredentialAlreadyExists(DomainError):
    """The login already has a credential with the same password."""

    pass


class PasswordTooLong(DomainError):
    """The password, salt and login together exceed what the hash can bind."""

    pass
