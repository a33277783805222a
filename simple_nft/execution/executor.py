import traceback
from copy import deepcopy

from simple_nft.api import Addr, MockApi
from simple_nft.db.driver import ContractDriver
from simple_nft.exceptions import NftError
from simple_nft.execution.runtime import Deps, MessageInfo
from simple_nft.logger import get_logger
from simple_nft.nft import execute as contract
from simple_nft.nft import query as queries

log = get_logger('Executor')


class Executor:
    """
    Runs one request at a time against a ContractDriver. A request either succeeds and its writes are committed
    (when auto_commit is set), or fails and none of its writes survive.

    Every call returns {'status_code': 0 or 1, 'result': response or exception, 'writes': pending writes}.
    """
    def __init__(self, driver=None, api=None):
        self.driver = driver if driver is not None else ContractDriver()
        self.api = api if api is not None else MockApi()

    @property
    def deps(self):
        return Deps(storage=self.driver, api=self.api)

    def instantiate(self, sender, msg, env, funds=(), auto_commit=True) -> dict:
        info = MessageInfo(sender=self._sender(sender), funds=tuple(funds))
        return self._run(contract.instantiate, env, info, msg, auto_commit)

    def execute(self, sender, msg, env, funds=(), auto_commit=True) -> dict:
        info = MessageInfo(sender=self._sender(sender), funds=tuple(funds))
        return self._run(contract.execute, env, info, msg, auto_commit)

    def query(self, msg, env) -> dict:
        try:
            result = queries.query(self.deps, env, msg)
            status_code = 0
        except NftError as e:
            log.debug('Query failed: {}'.format(e))
            result = e
            status_code = 1

        return {
            'status_code': status_code,
            'result': result,
            'writes': {}
        }

    def _sender(self, sender):
        # The host authenticated the sender already
        if isinstance(sender, Addr):
            return sender
        return Addr.unchecked(sender)

    def _run(self, func, env, info, msg, auto_commit):
        snapshot = dict(self.driver.pending_writes)

        try:
            result = func(self.deps, env, info, msg)
            status_code = 0
        except NftError as e:
            log.warning('{} rejected for {}: {}'.format(func.__name__, info.sender, e))
            result = e
            status_code = 1
        except Exception as e:
            log.error(str(e))
            log.error(traceback.format_exc())
            result = e
            status_code = 1

        if status_code == 0:
            writes = deepcopy(self.driver.pending_writes)
            if auto_commit:
                self.driver.commit()
        else:
            writes = {}
            self.driver.pending_writes.clear()
            self.driver.pending_writes.update(snapshot)

        return {
            'status_code': status_code,
            'result': result,
            'writes': writes
        }
