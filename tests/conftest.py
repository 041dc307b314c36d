import os

# Тесты не пишут лог-файлы
os.environ["LOG_FILE"] = ""

import pytest
from eth_account import Account
from hexbytes import HexBytes
from web3 import Web3
from web3.datastructures import AttributeDict

from config.settings import Config


TEST_PRIVATE_KEY = "0x" + "1" * 64
OTHER_PRIVATE_KEY = "0x" + "2" * 64


class FakeContractCall:
    def __init__(self, eth, address, name, args):
        self.eth = eth
        self.address = address
        self.name = name
        self.args = args

    def call(self):
        return self.eth.handle_call(self.address, self.name, self.args)

    def build_transaction(self, params):
        transaction = dict(params)
        transaction.update({
            "to": self.address,
            "data": "0x" + self.name.encode().hex(),
            "value": 0,
        })
        self.eth.built.append({
            "to": self.address,
            "function": self.name,
            "args": self.args,
            "params": dict(params),
        })
        return transaction


class FakeFunctions:
    def __init__(self, eth, address):
        self._eth = eth
        self._address = address

    def __getattr__(self, name):
        return lambda *args: FakeContractCall(self._eth, self._address, name, args)


class FakeContract:
    def __init__(self, eth, address):
        self.address = address
        self.functions = FakeFunctions(eth, address)


class FakeEth:
    def __init__(self, chain_id: int = 16601):
        self.chain_id = chain_id
        self.gas_price = Web3.to_wei(7, "gwei")
        self.native_balance = Web3.to_wei(1, "ether")
        self.receipt_status = 1
        self.call_results = {}
        self.calls = []
        self.built = []
        self.sent = []
        self.nonce_blocks = []

    def set_call(self, address, name, result):
        """Значение, список значений по очереди или исключение"""
        self.call_results[(address.lower(), name)] = result

    def handle_call(self, address, name, args):
        self.calls.append((address, name, args))
        result = self.call_results.get((address.lower(), name), 0)
        if isinstance(result, list):
            result = result.pop(0) if len(result) > 1 else result[0]
        if isinstance(result, Exception):
            raise result
        return result

    def contract(self, address=None, abi=None):
        return FakeContract(self, address)

    def get_balance(self, *_args, **_kwargs):
        return self.native_balance

    def get_transaction_count(self, _address, block_identifier="latest"):
        self.nonce_blocks.append(block_identifier)
        return len(self.sent)

    def send_raw_transaction(self, raw_transaction):
        self.sent.append(raw_transaction)
        return HexBytes(Web3.keccak(raw_transaction))

    def wait_for_transaction_receipt(self, tx_hash, timeout=120):
        return AttributeDict({"status": self.receipt_status, "transactionHash": tx_hash})


class FakeWeb3:
    def __init__(self, chain_id: int = 16601):
        self.eth = FakeEth(chain_id)

    def is_connected(self):
        return True


@pytest.fixture
def fake_web3():
    return FakeWeb3()


@pytest.fixture
def config(tmp_path):
    return Config(env={"PRIVATE_KEYS_FILE": str(tmp_path / "privatekey.txt"), "LOG_FILE": ""})


@pytest.fixture
def test_address():
    return Account.from_key(TEST_PRIVATE_KEY).address


@pytest.fixture
def private_key():
    return TEST_PRIVATE_KEY


@pytest.fixture
def other_private_key():
    return OTHER_PRIVATE_KEY
