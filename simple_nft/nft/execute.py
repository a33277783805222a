from simple_nft import config
from simple_nft.exceptions import CustomError, Expired, OperatorApproved, ApprovalNotFound
from simple_nft.execution.response import Response, WasmExecute
from simple_nft.logger import get_logger
from simple_nft.nft import auth
from simple_nft.nft.expiration import Expiration
from simple_nft.nft.msg import (
    parse_instantiate_msg, parse_execute_msg, EXECUTE_MSGS, ReceiveNftMsg,
    TransferNftMsg, SendNftMsg, ApproveMsg, RevokeMsg, ApproveAllMsg, RevokeAllMsg, MintMsg
)
from simple_nft.nft.state import Storage, State, TokenInfo, Approval

log = get_logger('simple_nft.execute')


def instantiate(deps, env, info, msg) -> Response:
    msg = parse_instantiate_msg(msg)

    if not msg.name:
        raise CustomError(val='length of `name` should be greater than 1')

    if not msg.symbol:
        raise CustomError(val='length of `symbol` should be greater than 1')

    # The sender becomes the minter
    minter = deps.api.addr_validate(str(info.sender))

    storage = Storage(deps.storage)
    storage.set_contract_version(config.CONTRACT_NAME, config.CONTRACT_VERSION)
    storage.save_config(State(name=msg.name, symbol=msg.symbol, minter=minter, num_tokens=0))

    log.debug('Instantiated {} ({}) with minter {}'.format(msg.name, msg.symbol, minter))
    return Response()


def execute(deps, env, info, msg) -> Response:
    msg = parse_execute_msg(msg)
    handler = HANDLERS[type(msg)]
    return handler(deps, env, info, msg)


def handle_mint(deps, env, info, msg: MintMsg) -> Response:
    storage = Storage(deps.storage)
    state = storage.load_config()

    auth.check_can_mint(state, info.sender)

    if len(msg.price) == 0:
        raise CustomError(val='price cannot be empty')

    if any(coin.amount == 0 for coin in msg.price):
        raise CustomError(val='price cannot be zero')

    owner = deps.api.addr_validate(msg.owner)

    token_id = state.num_tokens + 1
    if token_id > config.MAX_UINT64:
        raise CustomError(val='token id space exhausted')

    storage.save_token(TokenInfo(token_id=token_id,
                                 owner=owner,
                                 approvals=[],
                                 base_price=list(msg.price),
                                 token_uri=msg.token_uri))

    state.num_tokens = token_id
    storage.save_config(state)

    log.debug('Minted token {} to {}'.format(token_id, owner))

    return Response() \
        .add_attribute('action', 'mint') \
        .add_attribute('from', info.sender) \
        .add_attribute('owner', owner) \
        .add_attribute('token_id', token_id)


def _transfer_nft(deps, env, info, recipient, token_id) -> TokenInfo:
    storage = Storage(deps.storage)
    token = storage.load_token(token_id)

    auth.check_can_send(env.block, storage, token, info.sender)

    # Per token approvals belong to the previous owner
    token.owner = deps.api.addr_validate(recipient)
    token.approvals = []
    storage.save_token(token)

    log.debug('Moved token {} to {}'.format(token_id, token.owner))
    return token


def handle_transfer_nft(deps, env, info, msg: TransferNftMsg) -> Response:
    _transfer_nft(deps, env, info, msg.recipient, msg.token_id)

    return Response() \
        .add_attribute('action', 'transfer_nft') \
        .add_attribute('from', info.sender) \
        .add_attribute('to', msg.recipient) \
        .add_attribute('token_id', msg.token_id)


def handle_send_nft(deps, env, info, msg: SendNftMsg) -> Response:
    token = _transfer_nft(deps, env, info, msg.contract, msg.token_id)

    callback = ReceiveNftMsg(sender=str(info.sender), token_id=msg.token_id, msg=msg.msg)

    return Response() \
        .add_message(WasmExecute.from_msg(token.owner, callback)) \
        .add_attribute('action', 'send_nft') \
        .add_attribute('from', info.sender) \
        .add_attribute('to', msg.contract) \
        .add_attribute('token_id', msg.token_id)


def handle_approve(deps, env, info, msg: ApproveMsg) -> Response:
    storage = Storage(deps.storage)
    token = storage.load_token(msg.token_id)

    auth.check_can_approve(token, info.sender)

    expires = msg.expires if msg.expires is not None else Expiration.never()
    if expires.is_expired(env.block):
        raise Expired()

    operator = deps.api.addr_validate(msg.operator)

    # At most one entry per operator, a repeat grant replaces the old one
    token.approvals = [a for a in token.approvals if a.operator != operator]
    token.approvals.append(Approval(operator=operator, expires=expires))
    storage.save_token(token)

    return Response() \
        .add_attribute('action', 'approve') \
        .add_attribute('from', info.sender) \
        .add_attribute('approved', msg.operator) \
        .add_attribute('token_id', msg.token_id)


def handle_revoke(deps, env, info, msg: RevokeMsg) -> Response:
    storage = Storage(deps.storage)
    token = storage.load_token(msg.token_id)

    auth.check_can_approve(token, info.sender)

    operator = deps.api.addr_validate(msg.operator)

    if token.find_approval(operator) is None:
        raise ApprovalNotFound(operator=msg.operator)

    token.approvals = [a for a in token.approvals if a.operator != operator]
    storage.save_token(token)

    return Response() \
        .add_attribute('action', 'revoke') \
        .add_attribute('from', info.sender) \
        .add_attribute('revoked', msg.operator) \
        .add_attribute('token_id', msg.token_id)


def handle_approve_all(deps, env, info, msg: ApproveAllMsg) -> Response:
    storage = Storage(deps.storage)
    operator = deps.api.addr_validate(msg.operator)

    expires = msg.expires if msg.expires is not None else Expiration.never()

    # Granting the exact same thing twice is refused rather than ignored
    if storage.load_operator(info.sender, operator) == expires:
        raise OperatorApproved(operator=msg.operator)

    if expires.is_expired(env.block):
        raise Expired()

    storage.save_operator(info.sender, operator, expires)

    return Response() \
        .add_attribute('action', 'approve_all') \
        .add_attribute('from', info.sender) \
        .add_attribute('approved', msg.operator)


def handle_revoke_all(deps, env, info, msg: RevokeAllMsg) -> Response:
    storage = Storage(deps.storage)
    operator = deps.api.addr_validate(msg.operator)

    if storage.load_operator(info.sender, operator) is None:
        raise ApprovalNotFound(operator=msg.operator)

    storage.remove_operator(info.sender, operator)

    return Response() \
        .add_attribute('action', 'revoke_all') \
        .add_attribute('from', info.sender) \
        .add_attribute('revoked', msg.operator)


HANDLERS = {
    TransferNftMsg: handle_transfer_nft,
    SendNftMsg: handle_send_nft,
    ApproveMsg: handle_approve,
    RevokeMsg: handle_revoke,
    ApproveAllMsg: handle_approve_all,
    RevokeAllMsg: handle_revoke_all,
    MintMsg: handle_mint,
}

assert set(HANDLERS) == set(EXECUTE_MSGS.values()), 'Every execute variant needs a handler'
