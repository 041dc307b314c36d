import asyncio
import sys
import os

sys.path.append(os.path.dirname(__file__))

from config.settings import Config
from config.constants import FAUCET_CONTRACTS, MINT_DELAY_SECONDS, LOOP_INTERVAL_SECONDS
from core.network_manager import NetworkManager
from core.wallet_manager import WalletManager
from core.transaction_engine import TransactionEngine
from services.faucet_service import FaucetService
from services.swap_service import SwapService
from utils.logger import configure_logging, setup_logger, SUCCESS


class ZeroGFarmer:
    def __init__(self, config: Config = None, web3_instance=None, fraction_source=None, sleep=asyncio.sleep):
        self.config = config or Config()
        self.sleep = sleep
        configure_logging(self.config.log_level, self.config.log_file)
        self.logger = setup_logger("ZeroGFarmer")

        self.web3 = web3_instance or NetworkManager(self.config).create_web3()
        self.wallet_manager = WalletManager(self.config, self.web3)
        self.transaction_engine = TransactionEngine(self.web3, tx_timeout=self.config.tx_timeout)
        self.faucet_service = FaucetService(self.web3, self.wallet_manager, self.transaction_engine)
        self.swap_service = SwapService(
            self.web3, self.config, self.wallet_manager, self.transaction_engine,
            fraction_source=fraction_source
        )

    async def run_pass(self):
        """Один проход: минт со всех кранов и свопы для каждого кошелька по очереди"""
        private_keys = self.wallet_manager.load_private_keys()

        if not private_keys:
            self.logger.error(f"❌ No private keys found in {self.config.private_keys_file}")
            return

        self.logger.info(f"👛 Found {len(private_keys)} wallets")
        self.logger.info("🔹 ====== 0G Faucet Farmer - mint & swap on 0G testnet ======")

        for private_key in private_keys:
            for contract_tag, contract_address in self.config.faucet_contracts.items():
                await self.faucet_service.mint_from_contract(private_key, contract_address, contract_tag)
                await self.sleep(MINT_DELAY_SECONDS)

            await self.swap_service.check_and_swap_tokens(private_key)

        self.logger.log(SUCCESS, "✅ Completed!")

    async def run_forever(self):
        """Бесконечный цикл: ошибка прохода логируется, следующий проход через 60 секунд"""
        while True:
            try:
                await self.run_pass()
            except Exception as e:
                self.logger.error(f"❌ Error in main loop: {e}")

            self.logger.info(f"⏳ Waiting {LOOP_INTERVAL_SECONDS} seconds before the next pass...")
            await self.sleep(LOOP_INTERVAL_SECONDS)


def cli() -> int:
    """Точка входа: запуск цикла до Ctrl+C"""
    logger = setup_logger("ZeroGFarmer")
    print("🌐 0G Faucet Farmer - Automated Testnet Mint & Swap")
    print(f"🪙 Faucets: {', '.join(FAUCET_CONTRACTS)}")

    try:
        asyncio.run(ZeroGFarmer().run_forever())
    except KeyboardInterrupt:
        logger.info("🛑 Stopped by user")
    return 0


if __name__ == "__main__":
    sys.exit(cli())
