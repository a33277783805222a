from simple_nft.api import Addr, MockApi
from simple_nft.db.driver import ContractDriver
from simple_nft.execution.runtime import Deps, MessageInfo, make_env
from simple_nft.nft.state import Coin
from simple_nft.stdlib.time import Timestamp

DENOM = 'ubit'

MOCK_HEIGHT = 12345
MOCK_TIME = Timestamp(1571797419879305533)


def mock_env(height=MOCK_HEIGHT, time=MOCK_TIME):
    return make_env(height=height, time=time, contract_address='cosmos2contract', chain_id='cosmos-testnet-14002')


def mock_info(sender, funds=()):
    return MessageInfo(sender=Addr.unchecked(sender), funds=tuple(funds))


def mock_dependencies():
    return Deps(storage=ContractDriver(), api=MockApi())


def coins(amount, denom=DENOM):
    return [Coin(amount=amount, denom=denom)]


def addr(s):
    return Addr.unchecked(s)
