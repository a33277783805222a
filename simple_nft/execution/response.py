import base64
import json
from collections import namedtuple


Attribute = namedtuple('Attribute', ['key', 'value'])


class WasmExecute(namedtuple('WasmExecute', ['contract_addr', 'msg', 'funds'])):
    """
    A call the host performs on another contract once this invocation commits. msg is the base64 encoded JSON body.
    """
    @classmethod
    def from_msg(cls, contract_addr, msg, funds=()):
        body = json.dumps(msg.to_dict(), separators=(',', ':')).encode()
        return cls(contract_addr=str(contract_addr),
                   msg=base64.b64encode(body).decode(),
                   funds=list(funds))

    def to_dict(self):
        return {'wasm': {'execute': {
            'contract_addr': self.contract_addr,
            'msg': self.msg,
            'funds': [c.to_dict() for c in self.funds]
        }}}


class Response:
    def __init__(self):
        self.attributes = []
        self.messages = []
        self.data = None

    def add_attribute(self, key, value):
        self.attributes.append(Attribute(key=key, value=str(value)))
        return self

    def add_message(self, msg):
        self.messages.append(msg)
        return self

    def attribute(self, key):
        for a in self.attributes:
            if a.key == key:
                return a.value
        return None

    def to_dict(self):
        return {
            'attributes': [{'key': a.key, 'value': a.value} for a in self.attributes],
            'messages': [m.to_dict() for m in self.messages],
            'data': self.data
        }

    def __repr__(self):
        return 'Response(attributes={}, messages={})'.format(self.attributes, self.messages)
