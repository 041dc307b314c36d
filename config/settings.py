import os
from typing import Optional
from dotenv import load_dotenv
from config import constants

load_dotenv()


class Config:
    """Настройки запуска: константы по умолчанию + переопределения из .env"""

    def __init__(self, env: Optional[dict] = None):
        source = os.environ if env is None else env

        self.rpc_url = source.get('RPC_URL') or constants.RPC_URL
        self.private_keys_file = source.get('PRIVATE_KEYS_FILE') or constants.PRIVATE_KEYS_FILE
        self.log_level = (source.get('LOG_LEVEL') or 'INFO').upper()
        self.log_file = source.get('LOG_FILE', constants.LOG_FILE)
        self.proxy = source.get('RPC_PROXY') or None
        self.tx_timeout = self._safe_int(source.get('TX_TIMEOUT'), constants.TX_RECEIPT_TIMEOUT)

        # Адреса контрактов не настраиваются
        self.faucet_contracts = dict(constants.FAUCET_CONTRACTS)
        self.tokens = dict(constants.TOKENS)
        self.router_address = constants.SWAP_ROUTER_ADDRESS

    @staticmethod
    def _safe_int(value, default: int) -> int:
        """Безопасное приведение к int"""
        if value is None or value == '':
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def get_token_address(self, token_symbol: str) -> str:
        return self.tokens[token_symbol]
