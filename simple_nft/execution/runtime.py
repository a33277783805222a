from typing import NamedTuple

from simple_nft.api import Addr, Api
from simple_nft.db.driver import ContractDriver
from simple_nft.stdlib.time import Timestamp


# Everything the host knows about the invocation. The contract never reads a clock or a chain on its own, every
# height and time comparison is made against the BlockInfo passed in here.

class BlockInfo(NamedTuple):
    height: int
    time: Timestamp
    chain_id: str = ''


class ContractInfo(NamedTuple):
    address: Addr


class Env(NamedTuple):
    block: BlockInfo
    contract: ContractInfo


class MessageInfo(NamedTuple):
    sender: Addr
    funds: tuple = ()


class Deps(NamedTuple):
    storage: ContractDriver
    api: Api


def make_env(height, time, contract_address='contract', chain_id=''):
    if not isinstance(time, Timestamp):
        time = Timestamp.parse(time)
    return Env(block=BlockInfo(height=height, time=time, chain_id=chain_id),
               contract=ContractInfo(address=Addr.unchecked(contract_address)))
