from bisect import bisect_right

from simple_nft.db.encoder import encode_kv, decode, make_key
from simple_nft.logger import get_logger

log = get_logger('Driver')

# The backing dict stores encoded bytes on both sides
# Everything above it speaks str keys and python values


class InMemDriver:
    """
    Point reads and writes plus ordered prefix scans. This is the whole storage surface the ledger depends on, any
    engine able to answer these calls can stand in for it.
    """
    def __init__(self):
        self.db = {}

    def get(self, key: str):
        return decode(self.db.get(key.encode()))

    def set(self, key: str, value):
        if value is None:
            self.delete(key)
            return

        k, v = encode_kv(key, value)
        self.db[k] = v

    def delete(self, key: str):
        self.db.pop(key.encode(), None)

    def iter(self, prefix: str = '', start_after: str = None, length=0):
        """
        Keys beginning with prefix in ascending order. start_after is an exclusive cursor on the full key.
        """
        ordered = sorted(self.db)

        lo = bisect_right(ordered, start_after.encode()) if start_after is not None else 0
        p = prefix.encode()

        matched = []
        for k in ordered[lo:]:
            if k.startswith(p):
                matched.append(k.decode())
            elif matched or k > p:
                # Sorted order means the prefix range is contiguous
                break

            if length and len(matched) == length:
                break

        return matched

    def keys(self):
        return [k.decode() for k in sorted(self.db)]

    def flush(self):
        self.db = {}

    def __getitem__(self, key: str):
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        self.delete(key)


class CacheDriver:
    """
    Holds every write of one invocation in memory on top of a base driver. Reads see the pending writes. Nothing
    reaches the base driver until commit, and rollback drops the invocation entirely.
    """
    def __init__(self, driver=None):
        self.driver = driver if driver is not None else InMemDriver()
        self.pending_writes = {}

    def get(self, key: str):
        if key in self.pending_writes:
            return self.pending_writes[key]
        return self.driver.get(key)

    def set(self, key, value):
        self.pending_writes[key] = value

    def delete(self, key):
        # A pending None is a tombstone until commit
        self.set(key, None)

    def commit(self):
        for key, value in self.pending_writes.items():
            self.driver.set(key, value)

        self.clear_pending_state()

    def rollback(self):
        self.clear_pending_state()

    def clear_pending_state(self):
        self.pending_writes.clear()


class ContractDriver(CacheDriver):
    def iter(self, prefix='', start_after=None, length=0):
        # Committed keys first, then the invocation's own writes and tombstones on top
        keys = set(self.driver.iter(prefix=prefix, start_after=start_after))

        for key, value in self.pending_writes.items():
            if not key.startswith(prefix) or (start_after is not None and key <= start_after):
                continue

            if value is None:
                keys.discard(key)
            else:
                keys.add(key)

        keys = sorted(keys)
        return keys[:length] if length else keys

    def items(self, prefix='', start_after=None, length=0):
        return {k: self.get(k) for k in self.iter(prefix=prefix, start_after=start_after, length=length)}

    def make_key(self, contract, variable, args=[]):
        return make_key(contract, variable, args)

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()

    def rollback(self):
        if self.pending_writes:
            log.debug('Dropping {} pending writes'.format(len(self.pending_writes)))
        super().rollback()
