from simple_nft import config
from simple_nft.db.driver import ContractDriver
from simple_nft.exceptions import GenericErr


class Datum:
    def __init__(self, contract, name, driver: ContractDriver):
        self._driver = driver
        self._key = driver.make_key(contract, name)


class Variable(Datum):
    """
    A single record stored under contract.name
    """
    def set(self, value):
        self._driver.set(self._key, value)

    def get(self):
        return self._driver.get(self._key)


class Hash(Datum):
    """
    A keyed collection stored under contract.name:k1:k2... Keys may be tuples of up to MAX_HASH_DIMENSIONS parts.
    Leading parts act as a namespace for scan.
    """
    def __init__(self, contract, name, driver: ContractDriver, default_value=None):
        super().__init__(contract, name, driver=driver)
        self._default_value = default_value

    def _full_key(self, key):
        return config.DELIMITER.join((self._key, key))

    def _validate_part(self, part):
        if isinstance(part, slice):
            raise GenericErr(msg='Slices prohibited in hashes.')

        part = str(part)

        if config.DELIMITER in part:
            raise GenericErr(msg='Illegal delimiter in key.')
        if config.INDEX_SEPARATOR in part:
            raise GenericErr(msg='Illegal separator in key.')

        return part

    def _validate_key(self, key):
        parts = key if isinstance(key, tuple) else (key,)

        if len(parts) > config.MAX_HASH_DIMENSIONS:
            raise GenericErr(msg='Too many dimensions ({}) for hash. Max is {}'.format(
                len(parts), config.MAX_HASH_DIMENSIONS))

        key = config.DELIMITER.join(self._validate_part(p) for p in parts)

        if len(key) > config.MAX_KEY_SIZE:
            raise GenericErr(msg='Key is too long ({}). Max is {}.'.format(len(key), config.MAX_KEY_SIZE))

        return key

    def _namespace(self, parts):
        # Trailing delimiter keeps 'stu' from matching 'stuart'
        if not parts:
            return self._key + config.DELIMITER
        return self._full_key(self._validate_key(parts)) + config.DELIMITER

    def scan(self, *parts, start_after=None, limit=0):
        """
        Ordered (key, value) pairs under the leading key parts. Returned keys are the remaining key part, and
        start_after is an exclusive cursor on that remaining part.
        """
        prefix = self._namespace(parts)

        cursor = None
        if start_after is not None:
            cursor = prefix + self._validate_part(start_after)

        found = self._driver.items(prefix=prefix, start_after=cursor, length=limit)
        return [(k[len(prefix):], v) for k, v in found.items()]

    def __setitem__(self, key, value):
        self._driver.set(self._full_key(self._validate_key(key)), value)

    def __getitem__(self, key):
        value = self._driver.get(self._full_key(self._validate_key(key)))

        # defaultdict behavior
        if value is None:
            return self._default_value
        return value

    def __delitem__(self, key):
        self._driver.delete(self._full_key(self._validate_key(key)))
