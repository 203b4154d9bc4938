"""Custom exception classes for magicdrop."""


class MagicDropError(Exception):
    """Base exception for deployment and setup errors."""

    pass


class UnsupportedChainError(MagicDropError, ValueError):
    """Raised when a chain id has no registered descriptor."""

    pass


class InvalidSignerError(MagicDropError, ValueError):
    """Raised when the signer address is missing or malformed."""

    pass


class RpcError(MagicDropError, RuntimeError):
    """Raised when an RPC call fails or its result cannot be decoded."""

    pass


class InsufficientBalanceError(MagicDropError, ValueError):
    """Raised when the signer cannot cover a native transfer."""

    pass


class EventNotFoundError(MagicDropError, ValueError):
    """Raised when no receipt log matches the expected event topic."""

    pass


class MalformedEventError(MagicDropError, ValueError):
    """Raised when a matching log decodes without the expected field."""

    pass


class DeploymentFailedError(MagicDropError, RuntimeError):
    """Raised when a deployment receipt carries no transaction hash."""

    pass


class SetupLockedAbort(MagicDropError):
    """Raised when a contract has already been set up.

    Terminal: the command handler exits the process when it sees this.
    """

    pass


class ConfigValidationError(MagicDropError, ValueError):
    """Raised when a collection config has one or more violations."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__(
            'Configuration validation failed with the following errors:\n'
            + '\n'.join(f'- {error}' for error in self.errors)
        )


class StageProcessingError(MagicDropError, ValueError):
    """Raised when a stages source cannot be turned into stage records."""

    pass


class SignerServiceError(MagicDropError, RuntimeError):
    """Raised when the signing service rejects or fails a transaction."""

    pass


class CollectionNotFoundError(MagicDropError, FileNotFoundError):
    """Raised when a collection config file does not exist or is empty."""

    pass


class OperationCancelled(MagicDropError):
    """Raised when the operator declines a confirmation prompt."""

    pass


class TransactionFailedError(MagicDropError, RuntimeError):
    """Raised when a submitted transaction fails to send or reverts."""

    pass
