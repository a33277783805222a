"""
Defines the instantiate, execute and query messages, the query responses, and the receive_nft callback.

On the wire every message is an externally tagged snake_case object:

    {'transfer_nft': {'recipient': 'bob', 'token_id': 1}}

Parsing is strict. Unknown variants, unknown fields, missing required fields and values of the wrong type are all
rejected with ParseErr before any handler sees the message.
"""
import base64
import binascii
from collections import namedtuple

from simple_nft import config
from simple_nft.exceptions import ParseErr
from simple_nft.nft.expiration import Expiration
from simple_nft.nft.state import Coin


def parse_str(value, target):
    if not isinstance(value, str):
        raise ParseErr(target_type=target, msg='expected a string')
    return value


def parse_bool(value, target):
    if not isinstance(value, bool):
        raise ParseErr(target_type=target, msg='expected a boolean')
    return value


def _parse_uint(value, target, bits):
    if isinstance(value, str) and value.isascii() and value.isdecimal():
        value = int(value)

    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < 2 ** bits:
        raise ParseErr(target_type=target, msg='expected a u{}'.format(bits))

    return value


def parse_u64(value, target):
    return _parse_uint(value, target, 64)


def parse_u32(value, target):
    return _parse_uint(value, target, 32)


def parse_expiration(value, target):
    return Expiration.from_dict(value)


def parse_coins(value, target):
    if not isinstance(value, list):
        raise ParseErr(target_type=target, msg='expected a list of coins')
    return [Coin.from_dict(c) for c in value]


def parse_binary(value, target):
    if not isinstance(value, str):
        raise ParseErr(target_type=target, msg='expected base64 encoded binary')
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise ParseErr(target_type=target, msg='invalid base64: {}'.format(value))
    return value


def to_wire(value):
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    if isinstance(value, list):
        return [to_wire(v) for v in value]
    if isinstance(value, dict):
        return {k: to_wire(v) for k, v in value.items()}
    if isinstance(value, (str, int, bool)) or value is None:
        return value
    return str(value)


class _Message:
    """
    Mixin giving a namedtuple message its wire format. Subclasses define _variant and _parsers.
    """
    _variant = None
    _parsers = {}

    @classmethod
    def from_body(cls, body):
        target = cls.__name__

        if body is None:
            body = {}

        if not isinstance(body, dict):
            raise ParseErr(target_type=target, msg='expected an object')

        unknown = [k for k in body if k not in cls._fields]
        if unknown:
            raise ParseErr(target_type=target, msg='unknown field `{}`'.format(unknown[0]))

        kwargs = {}
        for name in cls._fields:
            value = body.get(name)
            if value is None:
                if name in cls._field_defaults:
                    continue
                raise ParseErr(target_type=target, msg='missing field `{}`'.format(name))
            kwargs[name] = cls._parsers[name](value, target)

        return cls(**kwargs)

    def to_dict(self):
        body = {k: to_wire(v) for k, v in self._asdict().items() if v is not None}
        return {self._variant: body}


class InstantiateMsg(_Message, namedtuple('InstantiateMsg', ['name', 'symbol'])):
    _variant = 'instantiate'
    _parsers = {'name': parse_str, 'symbol': parse_str}

    def to_dict(self):
        return dict(self._asdict())


# Execute

class TransferNftMsg(_Message, namedtuple('TransferNftMsg', ['recipient', 'token_id'])):
    _variant = 'transfer_nft'
    _parsers = {'recipient': parse_str, 'token_id': parse_u64}


class SendNftMsg(_Message, namedtuple('SendNftMsg', ['contract', 'token_id', 'msg'])):
    _variant = 'send_nft'
    _parsers = {'contract': parse_str, 'token_id': parse_u64, 'msg': parse_binary}


_ApproveBase = namedtuple('ApproveMsg', ['operator', 'token_id', 'expires'], defaults=(None,))


class ApproveMsg(_Message, _ApproveBase):
    _variant = 'approve'
    _parsers = {'operator': parse_str, 'token_id': parse_u64, 'expires': parse_expiration}


class RevokeMsg(_Message, namedtuple('RevokeMsg', ['operator', 'token_id'])):
    _variant = 'revoke'
    _parsers = {'operator': parse_str, 'token_id': parse_u64}


_ApproveAllBase = namedtuple('ApproveAllMsg', ['operator', 'expires'], defaults=(None,))


class ApproveAllMsg(_Message, _ApproveAllBase):
    _variant = 'approve_all'
    _parsers = {'operator': parse_str, 'expires': parse_expiration}


class RevokeAllMsg(_Message, namedtuple('RevokeAllMsg', ['operator'])):
    _variant = 'revoke_all'
    _parsers = {'operator': parse_str}


_MintBase = namedtuple('MintMsg', ['owner', 'price', 'token_uri'], defaults=(None,))


class MintMsg(_Message, _MintBase):
    _variant = 'mint'
    _parsers = {'owner': parse_str, 'price': parse_coins, 'token_uri': parse_str}


# Query

class AskingPriceQuery(_Message, namedtuple('AskingPriceQuery', ['token_id'])):
    _variant = 'asking_price'
    _parsers = {'token_id': parse_u64}


_OwnerOfBase = namedtuple('OwnerOfQuery', ['token_id', 'include_expired'], defaults=(False,))


class OwnerOfQuery(_Message, _OwnerOfBase):
    _variant = 'owner_of'
    _parsers = {'token_id': parse_u64, 'include_expired': parse_bool}


_ApprovalBase = namedtuple('ApprovalQuery', ['token_id', 'operator', 'include_expired'], defaults=(False,))


class ApprovalQuery(_Message, _ApprovalBase):
    _variant = 'approval'
    _parsers = {'token_id': parse_u64, 'operator': parse_str, 'include_expired': parse_bool}


_ApprovalsBase = namedtuple('ApprovalsQuery', ['token_id', 'include_expired'], defaults=(False,))


class ApprovalsQuery(_Message, _ApprovalsBase):
    _variant = 'approvals'
    _parsers = {'token_id': parse_u64, 'include_expired': parse_bool}


_AllOperatorsBase = namedtuple('AllOperatorsQuery', ['owner',
                                                     'include_expired',
                                                     'start_after',
                                                     'limit'], defaults=(False, None, None))


class AllOperatorsQuery(_Message, _AllOperatorsBase):
    _variant = 'all_operators'
    _parsers = {'owner': parse_str, 'include_expired': parse_bool, 'start_after': parse_str, 'limit': parse_u32}


class NumTokensQuery(_Message, namedtuple('NumTokensQuery', [])):
    _variant = 'num_tokens'


class ContractInfoQuery(_Message, namedtuple('ContractInfoQuery', [])):
    _variant = 'contract_info'


class NftInfoQuery(_Message, namedtuple('NftInfoQuery', ['token_id'])):
    _variant = 'nft_info'
    _parsers = {'token_id': parse_u64}


_AllNftInfoBase = namedtuple('AllNftInfoQuery', ['token_id', 'include_expired'], defaults=(False,))


class AllNftInfoQuery(_Message, _AllNftInfoBase):
    _variant = 'all_nft_info'
    _parsers = {'token_id': parse_u64, 'include_expired': parse_bool}


_TokensBase = namedtuple('TokensQuery', ['owner', 'start_after', 'limit'], defaults=(None, None))


class TokensQuery(_Message, _TokensBase):
    _variant = 'tokens'
    _parsers = {'owner': parse_str, 'start_after': parse_u64, 'limit': parse_u32}


_AllTokensBase = namedtuple('AllTokensQuery', ['start_after', 'limit'], defaults=(None, None))


class AllTokensQuery(_Message, _AllTokensBase):
    _variant = 'all_tokens'
    _parsers = {'start_after': parse_u64, 'limit': parse_u32}


class MinterQuery(_Message, namedtuple('MinterQuery', [])):
    _variant = 'minter'


EXECUTE_MSGS = {m._variant: m for m in (
    TransferNftMsg,
    SendNftMsg,
    ApproveMsg,
    RevokeMsg,
    ApproveAllMsg,
    RevokeAllMsg,
    MintMsg,
)}

QUERY_MSGS = {m._variant: m for m in (
    AskingPriceQuery,
    OwnerOfQuery,
    ApprovalQuery,
    ApprovalsQuery,
    AllOperatorsQuery,
    NumTokensQuery,
    ContractInfoQuery,
    NftInfoQuery,
    AllNftInfoQuery,
    TokensQuery,
    AllTokensQuery,
    MinterQuery,
)}


def _parse_tagged(data, registry, target):
    if isinstance(data, tuple(registry.values())):
        return data

    if not isinstance(data, dict) or len(data) != 1:
        raise ParseErr(target_type=target, msg='expected an object with exactly one variant')

    variant, body = next(iter(data.items()))

    cls = registry.get(variant)
    if cls is None:
        raise ParseErr(target_type=target, msg='unknown variant `{}`, expected one of {}'.format(
            variant, ', '.join(registry)))

    return cls.from_body(body)


def parse_instantiate_msg(data):
    if isinstance(data, InstantiateMsg):
        return data
    return InstantiateMsg.from_body(data)


def parse_execute_msg(data):
    return _parse_tagged(data, EXECUTE_MSGS, 'ExecuteMsg')


def parse_query_msg(data):
    return _parse_tagged(data, QUERY_MSGS, 'QueryMsg')


def clamp_limit(limit):
    if limit is None:
        return config.DEFAULT_LIMIT
    return min(limit, config.MAX_LIMIT)


# Responses

class _Response:
    def to_dict(self):
        return {k: to_wire(v) for k, v in self._asdict().items()}


class AskingPriceResponse(_Response, namedtuple('AskingPriceResponse', ['price'])):
    pass


class OwnerOfResponse(_Response, namedtuple('OwnerOfResponse', ['owner', 'approvals'])):
    pass


class ApprovalResponse(_Response, namedtuple('ApprovalResponse', ['approval'])):
    pass


class ApprovalsResponse(_Response, namedtuple('ApprovalsResponse', ['approvals'])):
    pass


class OperatorsResponse(_Response, namedtuple('OperatorsResponse', ['operators'])):
    pass


class NumTokensResponse(_Response, namedtuple('NumTokensResponse', ['count'])):
    pass


class ContractInfoResponse(_Response, namedtuple('ContractInfoResponse', ['name', 'symbol'])):
    pass


class NftInfoResponse(_Response, namedtuple('NftInfoResponse', ['token_uri'])):
    pass


class AllNftInfoResponse(_Response, namedtuple('AllNftInfoResponse', ['access', 'info'])):
    pass


class TokensResponse(_Response, namedtuple('TokensResponse', ['tokens'])):
    pass


class MinterResponse(_Response, namedtuple('MinterResponse', ['minter'])):
    pass


# Callback sent to the receiving contract of send_nft

class ReceiveNftMsg(namedtuple('ReceiveNftMsg', ['sender', 'token_id', 'msg'])):
    def to_dict(self):
        return {'receive_nft': dict(self._asdict())}
