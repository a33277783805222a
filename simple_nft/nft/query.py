from simple_nft import config
from simple_nft.exceptions import NotFound
from simple_nft.nft import auth
from simple_nft.nft.msg import (
    parse_query_msg, clamp_limit, QUERY_MSGS,
    AskingPriceQuery, OwnerOfQuery, ApprovalQuery, ApprovalsQuery, AllOperatorsQuery, NumTokensQuery,
    ContractInfoQuery, NftInfoQuery, AllNftInfoQuery, TokensQuery, AllTokensQuery, MinterQuery,
    AskingPriceResponse, OwnerOfResponse, ApprovalResponse, ApprovalsResponse, OperatorsResponse,
    NumTokensResponse, ContractInfoResponse, NftInfoResponse, AllNftInfoResponse, TokensResponse, MinterResponse
)
from simple_nft.nft.state import Storage


def query(deps, env, msg):
    msg = parse_query_msg(msg)
    handler = HANDLERS[type(msg)]
    return handler(deps, env, msg)


def query_asking_price(deps, env, msg: AskingPriceQuery):
    token = Storage(deps.storage).load_token(msg.token_id)
    return AskingPriceResponse(price=list(token.base_price))


def _owner_of(deps, env, token_id, include_expired):
    token = Storage(deps.storage).load_token(token_id)
    return OwnerOfResponse(owner=str(token.owner),
                           approvals=auth.live_approvals(env.block, token.approvals, include_expired))


def query_owner_of(deps, env, msg: OwnerOfQuery):
    return _owner_of(deps, env, msg.token_id, msg.include_expired)


def query_approval(deps, env, msg: ApprovalQuery):
    token = Storage(deps.storage).load_token(msg.token_id)
    operator = deps.api.addr_validate(msg.operator)

    for approval in auth.live_approvals(env.block, token.approvals, msg.include_expired):
        if approval.operator == operator:
            return ApprovalResponse(approval=approval)

    raise NotFound(kind='Approval')


def query_approvals(deps, env, msg: ApprovalsQuery):
    token = Storage(deps.storage).load_token(msg.token_id)
    return ApprovalsResponse(approvals=auth.live_approvals(env.block, token.approvals, msg.include_expired))


def query_all_operators(deps, env, msg: AllOperatorsQuery):
    limit = clamp_limit(msg.limit)

    owner = deps.api.addr_validate(msg.owner)
    start_after = deps.api.addr_validate(msg.start_after) if msg.start_after is not None else None

    grants = Storage(deps.storage).range_operators(owner, start_after=start_after)
    grants = auth.live_approvals(env.block, grants, msg.include_expired)

    return OperatorsResponse(operators=grants[:limit])


def query_num_tokens(deps, env, msg: NumTokensQuery):
    state = Storage(deps.storage).load_config()
    return NumTokensResponse(count=state.num_tokens)


def query_contract_info(deps, env, msg: ContractInfoQuery):
    state = Storage(deps.storage).load_config()
    return ContractInfoResponse(name=state.name, symbol=state.symbol)


def _nft_info(deps, token_id):
    token = Storage(deps.storage).load_token(token_id)
    token_uri = token.token_uri if token.token_uri is not None else config.NONE_URI
    return NftInfoResponse(token_uri=token_uri)


def query_nft_info(deps, env, msg: NftInfoQuery):
    return _nft_info(deps, msg.token_id)


def query_all_nft_info(deps, env, msg: AllNftInfoQuery):
    return AllNftInfoResponse(access=_owner_of(deps, env, msg.token_id, msg.include_expired),
                              info=_nft_info(deps, msg.token_id))


def query_tokens(deps, env, msg: TokensQuery):
    limit = clamp_limit(msg.limit)
    owner = deps.api.addr_validate(msg.owner)
    if limit == 0:
        return TokensResponse(tokens=[])

    # No owner index, walk the tokens in id order and keep the owner's
    tokens = []
    for token in Storage(deps.storage).range_tokens(start_after=msg.start_after):
        if token.owner == owner:
            tokens.append(token.token_id)
            if len(tokens) >= limit:
                break

    return TokensResponse(tokens=tokens)


def query_all_tokens(deps, env, msg: AllTokensQuery):
    limit = clamp_limit(msg.limit)
    if limit == 0:
        return TokensResponse(tokens=[])
    tokens = Storage(deps.storage).range_tokens(start_after=msg.start_after, limit=limit)
    return TokensResponse(tokens=[t.token_id for t in tokens])


def query_minter(deps, env, msg: MinterQuery):
    state = Storage(deps.storage).load_config()
    return MinterResponse(minter=str(state.minter))


HANDLERS = {
    AskingPriceQuery: query_asking_price,
    OwnerOfQuery: query_owner_of,
    ApprovalQuery: query_approval,
    ApprovalsQuery: query_approvals,
    AllOperatorsQuery: query_all_operators,
    NumTokensQuery: query_num_tokens,
    ContractInfoQuery: query_contract_info,
    NftInfoQuery: query_nft_info,
    AllNftInfoQuery: query_all_nft_info,
    TokensQuery: query_tokens,
    AllTokensQuery: query_all_tokens,
    MinterQuery: query_minter,
}

assert set(HANDLERS) == set(QUERY_MSGS.values()), 'Every query variant needs a handler'
