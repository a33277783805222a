from datetime import datetime, timezone
from functools import partial

from simple_nft.db.driver import ContractDriver
from simple_nft.execution.executor import Executor
from simple_nft.execution.runtime import make_env
from simple_nft.nft.msg import EXECUTE_MSGS, QUERY_MSGS, InstantiateMsg, to_wire
from simple_nft.stdlib.time import Timestamp


class NftClient:
    """
    A small in-process host. Every execute variant and every query variant is reachable as a method taking the
    message fields as keyword arguments:

        client.mint(owner='creator', price=[{'amount': '1000', 'denom': 'ubit'}], signer='minter')
        client.owner_of(token_id=1)

    Failures are raised as the typed error the contract returned.
    """
    def __init__(self, signer='sys', driver=None, api=None, height=1, contract_address='simple_nft'):
        self.executor = Executor(driver=driver if driver is not None else ContractDriver(), api=api)
        self.raw_driver = self.executor.driver
        self.signer = signer
        self.height = height
        self.contract_address = contract_address

    def now(self):
        return Timestamp._from_datetime(datetime.now(timezone.utc))

    def env(self, height=None, now=None):
        return make_env(height=height if height is not None else self.height,
                        time=now if now is not None else self.now(),
                        contract_address=self.contract_address)

    def flush(self):
        self.raw_driver.flush()

    def instantiate(self, name, symbol, signer=None, env=None):
        output = self.executor.instantiate(sender=signer or self.signer,
                                           msg=InstantiateMsg(name=name, symbol=symbol),
                                           env=env or self.env())
        return self._unwrap(output)

    def execute(self, msg, signer=None, env=None, funds=()):
        output = self.executor.execute(sender=signer or self.signer,
                                       msg=msg,
                                       env=env or self.env(),
                                       funds=funds)
        return self._unwrap(output)

    def query(self, msg, env=None):
        return self._unwrap(self.executor.query(msg=msg, env=env or self.env()))

    def _unwrap(self, output):
        if output['status_code'] == 1:
            raise output['result']
        return output['result']

    def _execute_variant(self, variant, signer=None, env=None, funds=(), **kwargs):
        msg = EXECUTE_MSGS[variant].from_body({k: to_wire(v) for k, v in kwargs.items()})
        return self.execute(msg, signer=signer, env=env, funds=funds)

    def _query_variant(self, variant, env=None, **kwargs):
        msg = QUERY_MSGS[variant].from_body({k: to_wire(v) for k, v in kwargs.items()})
        return self.query(msg, env=env)

    def __getattr__(self, item):
        if item in EXECUTE_MSGS:
            return partial(self._execute_variant, item)

        if item in QUERY_MSGS:
            return partial(self._query_variant, item)

        raise AttributeError(item)
