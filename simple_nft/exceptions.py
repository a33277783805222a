class NftError(Exception):
    """
    The base exception for simple_nft. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    """
    fmt = 'An unspecified error occurred'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs


class StdError(NftError):
    """
    Failures surfaced by the host collaborators (address validation,
    storage, message parsing). Passed through the contract untouched.
    """
    fmt = '{msg}'


class GenericErr(StdError):
    fmt = 'Generic error: {msg}'


class NotFound(StdError):
    """
    :ivar kind: The type of the record that could not be loaded
    """
    fmt = '{kind} not found'


class InvalidToken(NotFound):
    """
    A token id that was never issued

    :ivar token_id: The requested token id
    """
    fmt = 'Token {token_id} not found'


class ParseErr(StdError):
    """
    A request could not be decoded into its message type

    :ivar target_type: The message type being decoded
    :ivar msg: What went wrong
    """
    fmt = 'Error parsing into type {target_type}: {msg}'


class ContractError(NftError):
    """
    Base exception for the rule violations of the nft contract
    """


class Unauthorized(ContractError):
    fmt = 'Unauthorized'


class Expired(ContractError):
    fmt = 'Cannot set approval that is already expired'


class OperatorApproved(ContractError):
    """
    :ivar operator: The operator already holding an identical grant
    """
    fmt = 'Operator {operator} is already approved with the same expiration'


class ApprovalNotFound(ContractError):
    """
    :ivar operator: The operator without a grant
    """
    fmt = 'Approval not found for: {operator}'


class InvalidAmount(ContractError):
    """
    Reserved for payment matching

    :ivar val: The expected coin
    :ivar funds: The coin that was sent
    """
    fmt = 'Invalid amount. Expected {val} received {funds}'


class CustomError(ContractError):
    """
    :ivar val: The validation failure
    """
    fmt = 'Following error occured: {val}'
