"""
Records persisted by the contract and the storage layout that holds them.

Three namespaces under config.STATE_PREFIX:
    config      singleton State
    tokens      token id -> TokenInfo
    operators   (owner, operator) -> Expiration

plus the contract_info singleton written once at instantiation.
"""
from typing import NamedTuple

from simple_nft import config
from simple_nft.api import Addr
from simple_nft.db.orm import Variable, Hash
from simple_nft.exceptions import NotFound, InvalidToken, ParseErr
from simple_nft.nft.expiration import Expiration


class Coin(NamedTuple):
    amount: int
    denom: str

    def to_dict(self):
        return {'amount': str(self.amount), 'denom': self.denom}

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ParseErr(target_type='Coin', msg='expected an object')

        amount = data.get('amount')
        denom = data.get('denom')

        if isinstance(amount, str) and amount.isascii() and amount.isdecimal():
            amount = int(amount)

        if isinstance(amount, bool) or not isinstance(amount, int) or not 0 <= amount <= config.MAX_UINT128:
            raise ParseErr(target_type='Coin', msg='amount must be a uint128')

        if not isinstance(denom, str):
            raise ParseErr(target_type='Coin', msg='denom must be a string')

        return cls(amount=amount, denom=denom)


class Approval(NamedTuple):
    operator: Addr
    expires: Expiration

    def is_expired(self, block):
        return self.expires.is_expired(block)

    def to_dict(self):
        return {'operator': str(self.operator), 'expires': self.expires.to_dict()}

    @classmethod
    def from_dict(cls, data):
        return cls(operator=Addr.unchecked(data['operator']),
                   expires=Expiration.from_dict(data['expires']))


class State:
    def __init__(self, name, symbol, minter: Addr, num_tokens=0):
        self.name = name
        self.symbol = symbol
        self.minter = minter
        self.num_tokens = num_tokens

    def to_dict(self):
        return {
            'name': self.name,
            'symbol': self.symbol,
            'minter': str(self.minter),
            'num_tokens': self.num_tokens
        }

    @classmethod
    def from_dict(cls, data):
        return cls(name=data['name'],
                   symbol=data['symbol'],
                   minter=Addr.unchecked(data['minter']),
                   num_tokens=data['num_tokens'])


class TokenInfo:
    def __init__(self, token_id, owner: Addr, base_price, approvals=None, token_uri=None):
        self.token_id = token_id
        self.owner = owner
        self.approvals = approvals if approvals is not None else []
        self.base_price = base_price
        self.token_uri = token_uri

    def find_approval(self, operator: Addr):
        for approval in self.approvals:
            if approval.operator == operator:
                return approval
        return None

    def to_dict(self):
        return {
            'token_id': self.token_id,
            'owner': str(self.owner),
            'approvals': [a.to_dict() for a in self.approvals],
            'base_price': [c.to_dict() for c in self.base_price],
            'token_uri': self.token_uri
        }

    @classmethod
    def from_dict(cls, data):
        return cls(token_id=data['token_id'],
                   owner=Addr.unchecked(data['owner']),
                   approvals=[Approval.from_dict(a) for a in data['approvals']],
                   base_price=[Coin.from_dict(c) for c in data['base_price']],
                   token_uri=data.get('token_uri'))


def token_key(token_id: int):
    return '{:0{width}d}'.format(token_id, width=config.TOKEN_ID_WIDTH)


class Storage:
    def __init__(self, driver):
        self.config = Variable(config.STATE_PREFIX, config.CONFIG_KEY, driver=driver)
        self.contract_info = Variable(config.STATE_PREFIX, config.CONTRACT_INFO_KEY, driver=driver)
        self.tokens = Hash(config.STATE_PREFIX, config.TOKENS_KEY, driver=driver)
        self.operators = Hash(config.STATE_PREFIX, config.OPERATORS_KEY, driver=driver)

    # config

    def load_config(self) -> State:
        data = self.config.get()
        if data is None:
            raise NotFound(kind='State')
        return State.from_dict(data)

    def save_config(self, state: State):
        self.config.set(state.to_dict())

    def set_contract_version(self, name, version):
        self.contract_info.set({'contract': name, 'version': version})

    def get_contract_version(self):
        data = self.contract_info.get()
        if data is None:
            raise NotFound(kind='ContractVersion')
        return data

    # tokens

    def may_load_token(self, token_id: int):
        data = self.tokens[token_key(token_id)]
        if data is None:
            return None
        return TokenInfo.from_dict(data)

    def load_token(self, token_id: int) -> TokenInfo:
        token = self.may_load_token(token_id)
        if token is None:
            raise InvalidToken(token_id=token_id)
        return token

    def save_token(self, token: TokenInfo):
        self.tokens[token_key(token.token_id)] = token.to_dict()

    def range_tokens(self, start_after=None, limit=0):
        start = token_key(start_after) if start_after is not None else None
        return [TokenInfo.from_dict(v) for _, v in self.tokens.scan(start_after=start, limit=limit)]

    # operators

    def load_operator(self, owner: Addr, operator: Addr):
        data = self.operators[str(owner), str(operator)]
        if data is None:
            return None
        return Expiration.from_dict(data)

    def save_operator(self, owner: Addr, operator: Addr, expires: Expiration):
        self.operators[str(owner), str(operator)] = expires.to_dict()

    def remove_operator(self, owner: Addr, operator: Addr):
        del self.operators[str(owner), str(operator)]

    def range_operators(self, owner: Addr, start_after: Addr = None):
        start = str(start_after) if start_after is not None else None
        return [Approval(operator=Addr.unchecked(k), expires=Expiration.from_dict(v))
                for k, v in self.operators.scan(str(owner), start_after=start)]
