import json
from simple_nft.config import INDEX_SEPARATOR, DELIMITER

MAX_SAFE_INT = 2 ** 63 - 1
MIN_SAFE_INT = -(2 ** 63)

# Integers outside of the signed 64 bit range (uint128 coin amounts) are wrapped so that any backing store that
# keeps numbers as 8 byte integers reads them back intact.


def encode_int(value: int):
    if MIN_SAFE_INT < value < MAX_SAFE_INT:
        return value

    return {
        '__big_int__': str(value)
    }


def encode_ints(data):
    if isinstance(data, bool):
        return data
    if isinstance(data, int):
        return encode_int(data)
    if isinstance(data, dict):
        return {k: encode_ints(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [encode_ints(i) for i in data]
    return data


def encode(data):
    return json.dumps(encode_ints(data), separators=(',', ':'))


def as_object(d):
    if '__big_int__' in d:
        return int(d['__big_int__'])
    return dict(d)


# Wrapped values are restored by the object hook
def decode(data):
    if data is None:
        return None

    if isinstance(data, bytes):
        data = data.decode()

    try:
        return json.loads(data, object_hook=as_object)
    except json.decoder.JSONDecodeError:
        return None


def make_key(contract, variable, args=[]):
    contract_variable = INDEX_SEPARATOR.join((contract, variable))
    if args:
        return DELIMITER.join((contract_variable, *[str(a) for a in args]))
    return contract_variable


def encode_kv(key, value):
    k = key.encode()
    v = encode(value).encode()
    return k, v

