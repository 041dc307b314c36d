import requests
from web3 import Web3, HTTPProvider

from utils.logger import setup_logger


class NetworkManager:
    """Подключение к единственной RPC ноде 0G testnet"""

    def __init__(self, config):
        self.config = config
        self.logger = setup_logger("NetworkManager")

    def _create_session(self) -> requests.Session:
        """HTTP сессия для провайдера, с прокси если он задан"""
        session = requests.Session()
        if self.config.proxy:
            session.proxies = {
                'http': self.config.proxy,
                'https': self.config.proxy
            }
            self.logger.info("🔌 Using proxy for RPC connection")
        return session

    def create_web3(self) -> Web3:
        """Создание экземпляра Web3 для RPC из конфигурации"""
        provider = HTTPProvider(self.config.rpc_url, session=self._create_session())
        web3 = Web3(provider)

        try:
            if web3.is_connected():
                self.logger.info(f"🌐 Connected to {self.config.rpc_url} (ChainID: {web3.eth.chain_id})")
            else:
                self.logger.warning(f"⚠️ RPC {self.config.rpc_url} is not reachable yet")
        except Exception as e:
            # Недоступная нода не фатальна: каждый проход повторит запросы
            self.logger.warning(f"⚠️ Connection check failed for {self.config.rpc_url}: {e}")

        return web3
