"""
Authorization rules. Pure decisions over a token and the operator grants, nothing here writes to storage.
"""
from simple_nft.exceptions import Unauthorized


def has_token_approval(block, token, sender):
    approval = token.find_approval(sender)
    return approval is not None and not approval.is_expired(block)


def has_operator_approval(block, storage, owner, sender):
    expires = storage.load_operator(owner, sender)
    return expires is not None and not expires.is_expired(block)


def can_send(block, storage, token, sender) -> bool:
    """
    The owner, a holder of a live approval on this token, or a live operator of the owner may move the token.
    """
    if token.owner == sender:
        return True

    if has_token_approval(block, token, sender):
        return True

    return has_operator_approval(block, storage, token.owner, sender)


def check_can_send(block, storage, token, sender):
    if not can_send(block, storage, token, sender):
        raise Unauthorized()


def check_can_approve(token, sender):
    # Per token grants are managed by the owner only
    if token.owner != sender:
        raise Unauthorized()


def check_can_mint(state, sender):
    if state.minter != sender:
        raise Unauthorized()


def live_approvals(block, approvals, include_expired=False):
    if include_expired:
        return list(approvals)
    return [a for a in approvals if not a.is_expired(block)]
