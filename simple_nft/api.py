from simple_nft import config
from simple_nft.exceptions import GenericErr


class Addr:
    """
    A validated account address. Only an Api hands these out; state loaded
    back from storage was validated when it was written and is rebuilt with
    Addr.unchecked.
    """
    __slots__ = ('_addr',)

    def __init__(self, addr: str):
        self._addr = addr

    @classmethod
    def unchecked(cls, addr: str):
        return cls(addr)

    def as_str(self):
        return self._addr

    def __eq__(self, other):
        if not isinstance(other, Addr):
            return NotImplemented
        return self._addr == other._addr

    def __ne__(self, other):
        if not isinstance(other, Addr):
            return NotImplemented
        return self._addr != other._addr

    def __lt__(self, other):
        if not isinstance(other, Addr):
            raise TypeError(f'{type(other)} is not an Addr!')
        return self._addr < other._addr

    def __hash__(self):
        return hash(self._addr)

    def __str__(self):
        return self._addr

    def __repr__(self):
        return 'Addr({!r})'.format(self._addr)


class Api:
    def addr_validate(self, human: str) -> Addr:
        raise NotImplementedError


class MockApi(Api):
    """
    Accepts lowercase alphanumeric addresses (underscore and dash allowed)
    of a bounded length. Keys built from addresses never contain the storage
    delimiters because of this.
    """
    ALLOWED = set('abcdefghijklmnopqrstuvwxyz0123456789_-')

    def addr_validate(self, human: str) -> Addr:
        if not isinstance(human, str):
            raise GenericErr(msg='Invalid input: address must be a string')

        if len(human) < config.ADDR_MIN_LEN:
            raise GenericErr(msg='Invalid input: human address too short')

        if len(human) > config.ADDR_MAX_LEN:
            raise GenericErr(msg='Invalid input: human address too long')

        if human.lower() != human:
            raise GenericErr(msg='Invalid input: address not normalized')

        if not set(human) <= self.ALLOWED:
            raise GenericErr(msg='Invalid input: illegal character in address')

        return Addr(human)
