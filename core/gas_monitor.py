from web3 import Web3

from config.constants import GAS_LIMITS, GAS_PRICE_MULTIPLIER
from utils.logger import setup_logger


class GasMonitor:
    def __init__(self, web3_instance):
        self.web3 = web3_instance
        self.logger = setup_logger("GasMonitor")

    def get_gas_price(self) -> int:
        """Текущая цена газа сети с надбавкой +20%, округление вниз"""
        # Без кэша: каждая транзакция берет свежую цену
        network_price = self.web3.eth.gas_price
        gas_price = int(network_price * GAS_PRICE_MULTIPLIER)

        self.logger.debug(f"⛽ Gas price: {Web3.from_wei(gas_price, 'gwei'):.2f} Gwei")
        return gas_price

    def get_gas_limit(self, transaction_type: str) -> int:
        """Фиксированный лимит газа для типа транзакции"""
        if transaction_type not in GAS_LIMITS:
            raise ValueError(f"Unknown transaction type: {transaction_type}")
        return GAS_LIMITS[transaction_type]
