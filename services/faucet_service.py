import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from web3 import Web3
from web3.exceptions import ContractLogicError

from config.constants import CLAIM_COOLDOWN_SECONDS, NATIVE_TOKEN
from core.transaction_engine import TransactionFailedError
from utils.logger import setup_logger, SUCCESS


@dataclass
class ClaimEligibility:
    can_claim: bool
    last_claimed: int = 0
    next_claim_time: Optional[int] = None


def format_timestamp(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp).strftime('%Y-%m-%d %H:%M:%S')


class FaucetService:
    def __init__(self, web3_instance, wallet_manager, transaction_engine,
                 clock: Callable[[], float] = time.time):
        self.web3 = web3_instance
        self.wallet_manager = wallet_manager
        self.transaction_engine = transaction_engine
        self.clock = clock
        self.logger = setup_logger(__name__)

        self.faucet_abi = self._get_faucet_abi()

    def _get_faucet_abi(self):
        """ABI контракта-крана: lastClaimed + mint"""
        return [
            {
                "inputs": [{"internalType": "address", "name": "", "type": "address"}],
                "name": "lastClaimed",
                "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
                "stateMutability": "view",
                "type": "function"
            },
            {
                "inputs": [],
                "name": "mint",
                "outputs": [],
                "stateMutability": "nonpayable",
                "type": "function"
            }
        ]

    def get_faucet_contract(self, contract_address: str):
        return self.web3.eth.contract(
            address=Web3.to_checksum_address(contract_address),
            abi=self.faucet_abi
        )

    async def can_claim_now(self, contract, address: str) -> ClaimEligibility:
        """Проверка, прошло ли 24 часа с последнего клейма"""
        try:
            last_claimed = int(contract.functions.lastClaimed(address).call())
        except ContractLogicError as e:
            # Откат вызова = у адреса еще нет истории клеймов
            self.logger.warning(f"⚠️ lastClaimed reverted for {address}: {e}")
            self.logger.info("🔹 This is the first claim.")
            return ClaimEligibility(can_claim=True)
        except Exception as e:
            if 'execution reverted' in str(e).lower():
                self.logger.info("🔹 This is the first claim.")
                return ClaimEligibility(can_claim=True)
            self.logger.error(f"❌ Error checking eligibility to claim: {e}")
            return ClaimEligibility(can_claim=False)

        if last_claimed == 0:
            self.logger.info("🔹 Never claimed before | Can claim now?: True")
            return ClaimEligibility(can_claim=True, last_claimed=0)

        can_claim = self.clock() - last_claimed >= CLAIM_COOLDOWN_SECONDS
        self.logger.info(f"🕒 Last claimed: {format_timestamp(last_claimed)} | Can claim now?: {can_claim}")

        if can_claim:
            return ClaimEligibility(can_claim=True, last_claimed=last_claimed)

        next_claim_time = last_claimed + CLAIM_COOLDOWN_SECONDS
        self.logger.warning(f"⚠️ Next claim time: {format_timestamp(next_claim_time)}")
        return ClaimEligibility(can_claim=False, last_claimed=last_claimed, next_claim_time=next_claim_time)

    async def mint_from_contract(self, private_key: str, contract_address: str, contract_tag: str) -> Optional[str]:
        """Минт токена с крана. Ошибки логируются и не пробрасываются"""
        address = None

        try:
            with self.wallet_manager.open_wallet(private_key) as wallet:
                address = wallet.address
                self.logger.info(f"🔹 Using wallet: {address}")

                balance = wallet.get_balance()
                self.logger.info(f"💰 Wallet balance {address}: {Web3.from_wei(balance, 'ether')} {NATIVE_TOKEN}")

                contract = self.get_faucet_contract(contract_address)
                eligibility = await self.can_claim_now(contract, address)

                if not eligibility.can_claim:
                    self.logger.warning(f"⚠️ Cannot claim {contract_tag} now. Please wait until the next claim time.")
                    return None

                self.logger.info(f"🔹 Starting to mint {contract_tag} token...")
                tx_hash = await self.transaction_engine.send_contract_transaction(
                    wallet,
                    contract.functions.mint(),
                    'mint'
                )
                self.logger.log(SUCCESS, f"✅ {contract_tag} Mint successful for wallet {address}. Tx Hash: {tx_hash}")
                return tx_hash

        except TransactionFailedError as e:
            self.logger.error(f"❌ Minting {contract_tag} token failed for wallet {address}: {e}. Tx Hash: {e.tx_hash}")
            return None
        except Exception as e:
            self.logger.error(f"❌ Minting {contract_tag} token failed for wallet {address or 'unknown address'}: {e}")
            return None
