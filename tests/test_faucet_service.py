import pytest
from web3 import Web3
from web3.exceptions import ContractLogicError

from config.constants import FAUCET_CONTRACTS, CLAIM_COOLDOWN_SECONDS
from core.transaction_engine import TransactionEngine
from core.wallet_manager import WalletManager
from services.faucet_service import FaucetService

NOW = 1_700_000_000
BITCOIN = FAUCET_CONTRACTS['Bitcoin']


def make_service(fake_web3, config, now=NOW):
    wallet_manager = WalletManager(config, fake_web3)
    engine = TransactionEngine(fake_web3)
    return FaucetService(fake_web3, wallet_manager, engine, clock=lambda: now)


@pytest.mark.asyncio
async def test_never_claimed_is_eligible_regardless_of_time(fake_web3, config, test_address):
    service = make_service(fake_web3, config, now=0)
    fake_web3.eth.set_call(BITCOIN, "lastClaimed", 0)

    result = await service.can_claim_now(service.get_faucet_contract(BITCOIN), test_address)

    assert result.can_claim is True
    assert result.next_claim_time is None


@pytest.mark.asyncio
async def test_exactly_24h_after_claim_is_eligible(fake_web3, config, test_address):
    service = make_service(fake_web3, config)
    fake_web3.eth.set_call(BITCOIN, "lastClaimed", NOW - CLAIM_COOLDOWN_SECONDS)

    result = await service.can_claim_now(service.get_faucet_contract(BITCOIN), test_address)

    assert result.can_claim is True


@pytest.mark.asyncio
async def test_23h59m_after_claim_is_not_eligible(fake_web3, config, test_address):
    service = make_service(fake_web3, config)
    last_claimed = NOW - (23 * 3600 + 59 * 60)
    fake_web3.eth.set_call(BITCOIN, "lastClaimed", last_claimed)

    result = await service.can_claim_now(service.get_faucet_contract(BITCOIN), test_address)

    assert result.can_claim is False
    assert result.last_claimed == last_claimed
    assert result.next_claim_time == last_claimed + 24 * 3600


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [
    ContractLogicError("execution reverted"),
    ValueError("execution reverted: no claim record"),
])
async def test_reverted_read_counts_as_first_claim(fake_web3, config, test_address, error):
    service = make_service(fake_web3, config)
    fake_web3.eth.set_call(BITCOIN, "lastClaimed", error)

    result = await service.can_claim_now(service.get_faucet_contract(BITCOIN), test_address)

    assert result.can_claim is True


@pytest.mark.asyncio
async def test_other_read_failures_fail_closed(fake_web3, config, test_address):
    service = make_service(fake_web3, config)
    fake_web3.eth.set_call(BITCOIN, "lastClaimed", ConnectionError("rpc timeout"))

    result = await service.can_claim_now(service.get_faucet_contract(BITCOIN), test_address)

    assert result.can_claim is False


@pytest.mark.asyncio
async def test_mint_sends_transaction_with_fixed_gas_and_pending_nonce(fake_web3, config, private_key, test_address):
    service = make_service(fake_web3, config)
    fake_web3.eth.set_call(BITCOIN, "lastClaimed", 0)

    tx_hash = await service.mint_from_contract(private_key, BITCOIN, "Bitcoin")

    assert tx_hash is not None and tx_hash.startswith("0x")
    assert len(fake_web3.eth.sent) == 1

    built = fake_web3.eth.built[0]
    assert built["function"] == "mint"
    assert built["args"] == ()
    assert built["to"] == Web3.to_checksum_address(BITCOIN)
    assert built["params"]["from"] == test_address
    assert built["params"]["gas"] == 500000
    assert built["params"]["gasPrice"] == int(Web3.to_wei(7, "gwei") * 1.2)
    assert built["params"]["nonce"] == 0
    assert fake_web3.eth.nonce_blocks == ["pending"]
    assert service.wallet_manager.active_wallets == {}


@pytest.mark.asyncio
async def test_mint_skips_transaction_when_not_eligible(fake_web3, config, private_key):
    service = make_service(fake_web3, config)
    fake_web3.eth.set_call(BITCOIN, "lastClaimed", NOW - 60)

    assert await service.mint_from_contract(private_key, BITCOIN, "Bitcoin") is None
    assert fake_web3.eth.sent == []
    assert service.wallet_manager.active_wallets == {}


@pytest.mark.asyncio
async def test_mint_with_invalid_key_is_logged_not_raised(fake_web3, config):
    service = make_service(fake_web3, config)

    assert await service.mint_from_contract("0x123", BITCOIN, "Bitcoin") is None
    assert fake_web3.eth.calls == []
    assert fake_web3.eth.sent == []
    assert service.wallet_manager.active_wallets == {}


@pytest.mark.asyncio
async def test_mint_reverted_receipt_clears_signer(fake_web3, config, private_key, monkeypatch):
    service = make_service(fake_web3, config)
    errors = []
    monkeypatch.setattr(service.logger, "error", errors.append)
    fake_web3.eth.set_call(BITCOIN, "lastClaimed", 0)
    fake_web3.eth.receipt_status = 0

    assert await service.mint_from_contract(private_key, BITCOIN, "Bitcoin") is None
    assert len(fake_web3.eth.sent) == 1
    assert service.wallet_manager.active_wallets == {}

    tx_hash = Web3.to_hex(Web3.keccak(fake_web3.eth.sent[0]))
    assert len(errors) == 1
    assert "Bitcoin" in errors[0]
    assert f"Tx Hash: {tx_hash}" in errors[0]
