from unittest import TestCase
from simple_nft.db.driver import ContractDriver
from simple_nft.exceptions import NotFound, InvalidToken, ParseErr
from simple_nft.nft.expiration import Expiration
from simple_nft.nft.state import Storage, State, TokenInfo, Approval, Coin, token_key
from tests.utils import addr, coins


class TestCoin(TestCase):
    def test_amount_is_a_string_on_the_wire(self):
        self.assertDictEqual(Coin(amount=5, denom='ubit').to_dict(), {'amount': '5', 'denom': 'ubit'})

    def test_from_dict_int_amount(self):
        self.assertEqual(Coin.from_dict({'amount': 5, 'denom': 'ubit'}), Coin(amount=5, denom='ubit'))

    def test_from_dict_bad_amount(self):
        with self.assertRaises(ParseErr):
            Coin.from_dict({'amount': '-5', 'denom': 'ubit'})

    def test_from_dict_missing_denom(self):
        with self.assertRaises(ParseErr):
            Coin.from_dict({'amount': '5'})


class TestTokenKey(TestCase):
    def test_lexical_order_is_numeric_order(self):
        self.assertLess(token_key(9), token_key(10))
        self.assertEqual(token_key(1), '00000000000000000001')


class TestStorage(TestCase):
    def setUp(self):
        self.d = ContractDriver()
        self.d.flush()
        self.s = Storage(self.d)

    def tearDown(self):
        self.d.flush()

    def test_config_missing(self):
        with self.assertRaises(NotFound):
            self.s.load_config()

    def test_config_round_trip(self):
        self.s.save_config(State(name='TestNFT', symbol='NFT', minter=addr('minter'), num_tokens=3))

        state = self.s.load_config()

        self.assertEqual(state.name, 'TestNFT')
        self.assertEqual(state.symbol, 'NFT')
        self.assertEqual(state.minter, addr('minter'))
        self.assertEqual(state.num_tokens, 3)

    def test_contract_version(self):
        self.s.set_contract_version('crates.io:simple-nft', '0.1.0')

        self.assertDictEqual(self.s.get_contract_version(), {'contract': 'crates.io:simple-nft', 'version': '0.1.0'})

    def test_missing_token(self):
        self.assertIsNone(self.s.may_load_token(1))

        with self.assertRaises(InvalidToken):
            self.s.load_token(1)

    def test_token_round_trip(self):
        approvals = [Approval(operator=addr('op'), expires=Expiration.at_height(50))]
        self.s.save_token(TokenInfo(token_id=1, owner=addr('creator'), base_price=coins(2 ** 100),
                                    approvals=approvals, token_uri='ipfs://x'))

        token = self.s.load_token(1)

        self.assertEqual(token.owner, addr('creator'))
        self.assertListEqual(token.base_price, coins(2 ** 100))
        self.assertListEqual(token.approvals, approvals)
        self.assertEqual(token.token_uri, 'ipfs://x')
        self.assertEqual(token.find_approval(addr('op')), approvals[0])
        self.assertIsNone(token.find_approval(addr('nobody')))

    def test_range_tokens_numeric_order(self):
        for i in [10, 2, 1, 11]:
            self.s.save_token(TokenInfo(token_id=i, owner=addr('creator'), base_price=coins(1)))

        self.assertListEqual([t.token_id for t in self.s.range_tokens()], [1, 2, 10, 11])
        self.assertListEqual([t.token_id for t in self.s.range_tokens(start_after=2, limit=1)], [10])

    def test_operators(self):
        self.s.save_operator(addr('creator'), addr('bob'), Expiration.never())
        self.s.save_operator(addr('creator'), addr('alice'), Expiration.at_height(5))
        self.s.save_operator(addr('other'), addr('carl'), Expiration.never())

        self.assertEqual(self.s.load_operator(addr('creator'), addr('alice')), Expiration.at_height(5))
        self.assertIsNone(self.s.load_operator(addr('creator'), addr('carl')))

        self.assertListEqual(self.s.range_operators(addr('creator')), [
            Approval(operator=addr('alice'), expires=Expiration.at_height(5)),
            Approval(operator=addr('bob'), expires=Expiration.never()),
        ])

        self.assertListEqual([a.operator for a in self.s.range_operators(addr('creator'), start_after=addr('alice'))],
                             [addr('bob')])

    def test_remove_operator(self):
        self.s.save_operator(addr('creator'), addr('bob'), Expiration.never())
        self.s.remove_operator(addr('creator'), addr('bob'))

        self.assertIsNone(self.s.load_operator(addr('creator'), addr('bob')))
        self.assertListEqual(self.s.range_operators(addr('creator')), [])
