import asyncio
from web3 import Web3

from config.constants import TX_RECEIPT_TIMEOUT
from core.gas_monitor import GasMonitor
from utils.logger import setup_logger


class TransactionFailedError(Exception):
    """Транзакция не отправлена или откатилась (status != 1)"""

    def __init__(self, message: str, tx_hash: str = None):
        super().__init__(message)
        self.tx_hash = tx_hash


class TransactionEngine:
    """Сборка, подпись и отправка транзакций вызова контрактов"""

    def __init__(self, web3_instance, gas_monitor: GasMonitor = None, tx_timeout: int = TX_RECEIPT_TIMEOUT):
        self.web3 = web3_instance
        self.gas_monitor = gas_monitor or GasMonitor(web3_instance)
        self.tx_timeout = tx_timeout
        self.logger = setup_logger("TransactionEngine")
        self._chain_id = None

    @property
    def chain_id(self) -> int:
        """ChainID запрашивается у ноды один раз"""
        if self._chain_id is None:
            self._chain_id = self.web3.eth.chain_id
        return self._chain_id

    def build_transaction(self, wallet, contract_function, transaction_type: str) -> dict:
        """Параметры: фиксированный лимит газа, цена сети x1.2, pending nonce"""
        nonce = self.web3.eth.get_transaction_count(wallet.address, 'pending')
        gas_price = self.gas_monitor.get_gas_price()

        return contract_function.build_transaction({
            'from': wallet.address,
            'gas': self.gas_monitor.get_gas_limit(transaction_type),
            'gasPrice': gas_price,
            'nonce': nonce,
            'chainId': self.chain_id
        })

    async def send_contract_transaction(self, wallet, contract_function, transaction_type: str) -> str:
        """Отправка транзакции и ожидание receipt. Возвращает хэш транзакции"""
        transaction = self.build_transaction(wallet, contract_function, transaction_type)

        signed_txn = wallet.sign_transaction(transaction)
        tx_hash = Web3.to_hex(self.web3.eth.send_raw_transaction(signed_txn.raw_transaction))

        self.logger.info(f"📝 {transaction_type} transaction sent: {tx_hash}")

        receipt = await asyncio.to_thread(
            self.web3.eth.wait_for_transaction_receipt,
            tx_hash,
            timeout=self.tx_timeout
        )
        if receipt['status'] != 1:
            raise TransactionFailedError(f"{transaction_type} transaction reverted", tx_hash)

        return tx_hash
