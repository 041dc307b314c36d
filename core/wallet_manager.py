from contextlib import contextmanager
from typing import Dict, Iterator, List

from eth_account import Account

from utils.logger import setup_logger, SUCCESS
from utils.security import has_key_format, validate_private_key, mask_private_key


class Wallet:
    def __init__(self, private_key: str, web3=None):
        # Проверяем формат до любых операций с ключом
        if not has_key_format(private_key):
            raise ValueError("Invalid private key format")

        self.account = Account.from_key(private_key)
        self.address = self.account.address
        self.web3 = web3

    def sign_transaction(self, transaction: dict):
        """Подпись транзакции ключом кошелька"""
        return self.account.sign_transaction(transaction)

    def get_balance(self) -> int:
        """Нативный баланс кошелька"""
        return self.web3.eth.get_balance(self.address)


class WalletManager:
    def __init__(self, config, web3=None):
        self.config = config
        self.web3 = web3
        self.logger = setup_logger("WalletManager")
        # Подписанты, живые в данный момент (только внутри open_wallet)
        self.active_wallets: Dict[str, Wallet] = {}

    def load_private_keys(self, file_path: str = None) -> List[str]:
        """Чтение приватных ключей из файла, по одному на строку"""
        file_path = file_path or self.config.private_keys_file

        try:
            with open(file_path, 'r', encoding='utf-8-sig', errors='replace') as f:
                data = f.read()
        except (OSError, UnicodeError) as e:
            self.logger.error(f"❌ Error reading {file_path}: {e}")
            return []

        # Нормализуем переводы строк и отбрасываем невалидные строки
        lines = data.replace('\r\n', '\n').split('\n')
        keys = [line.strip() for line in lines if validate_private_key(line.strip())]

        if not keys:
            self.logger.error(f"❌ No valid private keys found in {file_path}")
            return []

        self.logger.log(SUCCESS, f"✅ Read {len(keys)} private keys from {file_path}")
        for index, key in enumerate(keys, 1):
            self.logger.info(f"🔑 Private Key {index}: {mask_private_key(key)}")

        return keys

    @contextmanager
    def open_wallet(self, private_key: str) -> Iterator[Wallet]:
        """Кошелек существует только внутри блока with и удаляется даже при ошибке"""
        wallet = Wallet(private_key, self.web3)
        self.active_wallets[wallet.address] = wallet
        try:
            yield wallet
        finally:
            self.active_wallets.pop(wallet.address, None)
