from simple_nft import config
from simple_nft.exceptions import ParseErr
from simple_nft.stdlib.time import Timestamp

NEVER = 'never'
AT_HEIGHT = 'at_height'
AT_TIME = 'at_time'

KINDS = (NEVER, AT_HEIGHT, AT_TIME)


class Expiration:
    """
    When a grant stops being honored. One of never, at a block height or at a block time. The boundary is inclusive:
    an expiration at exactly the current height (or time) is already expired.
    """
    __slots__ = ('kind', 'value')

    def __init__(self, kind=NEVER, value=None):
        assert kind in KINDS, 'Unknown expiration kind {}'.format(kind)
        self.kind = kind
        self.value = value

    @classmethod
    def never(cls):
        return cls(NEVER)

    @classmethod
    def at_height(cls, height: int):
        return cls(AT_HEIGHT, height)

    @classmethod
    def at_time(cls, time: Timestamp):
        return cls(AT_TIME, time)

    def is_expired(self, block) -> bool:
        if self.kind == AT_HEIGHT:
            return block.height >= self.value
        if self.kind == AT_TIME:
            return block.time >= self.value
        return False

    def to_dict(self):
        if self.kind == AT_HEIGHT:
            return {AT_HEIGHT: self.value}
        if self.kind == AT_TIME:
            return {AT_TIME: str(self.value)}
        return {NEVER: {}}

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict) or len(data) != 1:
            raise ParseErr(target_type='Expiration', msg='expected an object with exactly one variant')

        kind, value = next(iter(data.items()))

        if kind == NEVER:
            return cls.never()

        if kind == AT_HEIGHT:
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= config.MAX_UINT64:
                raise ParseErr(target_type='Expiration', msg='at_height must be a u64')
            return cls.at_height(value)

        if kind == AT_TIME:
            try:
                return cls.at_time(Timestamp.parse(value))
            except (TypeError, ValueError) as e:
                raise ParseErr(target_type='Expiration', msg='invalid at_time: {}'.format(e))

        raise ParseErr(target_type='Expiration', msg='unknown variant `{}`'.format(kind))

    def __eq__(self, other):
        if not isinstance(other, Expiration):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((self.kind, self.value))

    def __str__(self):
        if self.kind == AT_HEIGHT:
            return 'expiration height: {}'.format(self.value)
        if self.kind == AT_TIME:
            return 'expiration time: {}'.format(self.value)
        return 'expiration: never'

    def __repr__(self):
        return 'Expiration({!r}, {!r})'.format(self.kind, self.value)
