from unittest import TestCase
from simple_nft.db.driver import ContractDriver
from simple_nft.exceptions import Unauthorized
from simple_nft.nft import auth
from simple_nft.nft.expiration import Expiration
from simple_nft.nft.state import Storage, State, TokenInfo, Approval
from tests.utils import addr, coins, mock_env

BLOCK = mock_env().block


class TestCanSend(TestCase):
    def setUp(self):
        self.d = ContractDriver()
        self.d.flush()
        self.s = Storage(self.d)
        self.token = TokenInfo(token_id=1, owner=addr('creator'), base_price=coins(1000))

    def tearDown(self):
        self.d.flush()

    def test_owner(self):
        self.assertTrue(auth.can_send(BLOCK, self.s, self.token, addr('creator')))

    def test_stranger(self):
        self.assertFalse(auth.can_send(BLOCK, self.s, self.token, addr('random')))

        with self.assertRaises(Unauthorized):
            auth.check_can_send(BLOCK, self.s, self.token, addr('random'))

    def test_live_token_approval(self):
        self.token.approvals = [Approval(operator=addr('op'), expires=Expiration.at_height(BLOCK.height + 1))]
        self.assertTrue(auth.can_send(BLOCK, self.s, self.token, addr('op')))

    def test_expired_token_approval(self):
        self.token.approvals = [Approval(operator=addr('op'), expires=Expiration.at_height(BLOCK.height))]
        self.assertFalse(auth.can_send(BLOCK, self.s, self.token, addr('op')))

    def test_live_operator(self):
        self.s.save_operator(addr('creator'), addr('op'), Expiration.never())
        self.assertTrue(auth.can_send(BLOCK, self.s, self.token, addr('op')))

    def test_expired_operator(self):
        self.s.save_operator(addr('creator'), addr('op'), Expiration.at_time(BLOCK.time))
        self.assertFalse(auth.can_send(BLOCK, self.s, self.token, addr('op')))

    def test_operator_of_someone_else(self):
        self.s.save_operator(addr('other'), addr('op'), Expiration.never())
        self.assertFalse(auth.can_send(BLOCK, self.s, self.token, addr('op')))


class TestCanApprove(TestCase):
    def test_owner_only(self):
        token = TokenInfo(token_id=1, owner=addr('creator'), base_price=coins(1000))

        auth.check_can_approve(token, addr('creator'))

        with self.assertRaises(Unauthorized):
            auth.check_can_approve(token, addr('op'))


class TestCanMint(TestCase):
    def test_minter_only(self):
        state = State(name='TestNFT', symbol='NFT', minter=addr('minter'))

        auth.check_can_mint(state, addr('minter'))

        with self.assertRaises(Unauthorized):
            auth.check_can_mint(state, addr('creator'))


class TestLiveApprovals(TestCase):
    def test_filters_expired(self):
        live = Approval(operator=addr('a'), expires=Expiration.never())
        dead = Approval(operator=addr('b'), expires=Expiration.at_height(1))

        self.assertListEqual(auth.live_approvals(BLOCK, [live, dead]), [live])
        self.assertListEqual(auth.live_approvals(BLOCK, [live, dead], include_expired=True), [live, dead])
