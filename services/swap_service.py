import time
from typing import Callable, Optional

from web3 import Web3

from config.constants import BASE_TOKEN, POOL_FEE, SWAP_DEADLINE_SECONDS, SWAP_TARGETS
from core.transaction_engine import TransactionFailedError
from utils.logger import setup_logger, SUCCESS
from utils.randomizer import Randomizer


class SwapService:
    def __init__(self, web3_instance, config, wallet_manager, transaction_engine,
                 fraction_source: Optional[Callable[[], float]] = None,
                 clock: Callable[[], float] = time.time):
        self.web3 = web3_instance
        self.config = config
        self.wallet_manager = wallet_manager
        self.transaction_engine = transaction_engine
        self.fraction_source = fraction_source or Randomizer.get_swap_fraction
        self.clock = clock
        self.logger = setup_logger(__name__)

        # ✅ ABI
        self.erc20_abi = self._get_erc20_abi()
        self.router_abi = self._get_router_abi()

        self.router_address = Web3.to_checksum_address(config.router_address)
        self.router_contract = self.web3.eth.contract(
            address=self.router_address,
            abi=self.router_abi
        )

    def _get_erc20_abi(self):
        """ABI для ERC20 токенов"""
        return [
            {
                "inputs": [
                    {"internalType": "address", "name": "spender", "type": "address"},
                    {"internalType": "uint256", "name": "amount", "type": "uint256"}
                ],
                "name": "approve",
                "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
                "stateMutability": "nonpayable",
                "type": "function"
            },
            {
                "inputs": [{"internalType": "address", "name": "", "type": "address"}],
                "name": "balanceOf",
                "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
                "stateMutability": "view",
                "type": "function"
            }
        ]

    def _get_router_abi(self):
        """ABI для роутера: exactInputSingle с одним пулом"""
        return [
            {
                "inputs": [
                    {
                        "components": [
                            {"internalType": "address", "name": "tokenIn", "type": "address"},
                            {"internalType": "address", "name": "tokenOut", "type": "address"},
                            {"internalType": "uint24", "name": "fee", "type": "uint24"},
                            {"internalType": "address", "name": "recipient", "type": "address"},
                            {"internalType": "uint256", "name": "deadline", "type": "uint256"},
                            {"internalType": "uint256", "name": "amountIn", "type": "uint256"},
                            {"internalType": "uint256", "name": "amountOutMinimum", "type": "uint256"},
                            {"internalType": "uint160", "name": "sqrtPriceLimitX96", "type": "uint160"}
                        ],
                        "internalType": "struct ISwapRouter.ExactInputSingleParams",
                        "name": "params",
                        "type": "tuple"
                    }
                ],
                "name": "exactInputSingle",
                "outputs": [{"internalType": "uint256", "name": "amountOut", "type": "uint256"}],
                "stateMutability": "payable",
                "type": "function"
            }
        ]

    def _get_token_contract(self, token_address: str):
        return self.web3.eth.contract(
            address=Web3.to_checksum_address(token_address),
            abi=self.erc20_abi
        )

    def _get_token_symbol(self, token_address: str) -> str:
        """Символ токена по адресу (для логов)"""
        for symbol, address in self.config.tokens.items():
            if address.lower() == token_address.lower():
                return symbol
        return token_address

    async def get_token_balance(self, wallet, token_address: str) -> int:
        """Баланс токена. Ошибка чтения пробрасывается и прерывает планировщик"""
        token_contract = self._get_token_contract(token_address)
        return int(token_contract.functions.balanceOf(wallet.address).call())

    async def approve_token(self, wallet, token_address: str, amount: int) -> str:
        """Approve токенов для router"""
        token_contract = self._get_token_contract(token_address)

        tx_hash = await self.transaction_engine.send_contract_transaction(
            wallet,
            token_contract.functions.approve(self.router_address, amount),
            'approve'
        )
        self.logger.log(
            SUCCESS,
            f"✅ Approved {Web3.from_wei(amount, 'ether')} of token {token_address} for swapping. Tx Hash: {tx_hash}"
        )
        return tx_hash

    async def swap_tokens(self, wallet, token_in: str, token_out: str, amount_in: int) -> str:
        """Своп через exactInputSingle: fee 0.3%, без защиты от проскальзывания"""
        deadline = int(self.clock()) + SWAP_DEADLINE_SECONDS

        params = (
            Web3.to_checksum_address(token_in),
            Web3.to_checksum_address(token_out),
            POOL_FEE,
            wallet.address,
            deadline,
            amount_in,
            0,  # amountOutMinimum
            0   # sqrtPriceLimitX96
        )

        tx_hash = await self.transaction_engine.send_contract_transaction(
            wallet,
            self.router_contract.functions.exactInputSingle(params),
            'swap'
        )
        self.logger.log(
            SUCCESS,
            f"✅ Swapped {Web3.from_wei(amount_in, 'ether')} from {token_in} to {token_out}. Tx Hash: {tx_hash}"
        )
        return tx_hash

    async def _approve_and_swap(self, wallet, from_symbol: str, to_symbol: str, amount: int):
        token_in = self.config.get_token_address(from_symbol)
        token_out = self.config.get_token_address(to_symbol)

        self.logger.info(f"🔹 Swapping {Web3.from_wei(amount, 'ether')} {from_symbol} to {to_symbol}...")
        await self.approve_token(wallet, token_in, amount)
        await self.swap_tokens(wallet, token_in, token_out, amount)

    async def check_and_swap_tokens(self, private_key: str) -> int:
        """Чтение балансов и свопы: USDT -> BTC/ETH, затем BTC/ETH -> USDT.

        Возвращает количество выполненных свопов. Любая ошибка прерывает
        оставшиеся свопы этого кошелька, но не пробрасывается.
        """
        address = None
        swaps_done = 0

        try:
            with self.wallet_manager.open_wallet(private_key) as wallet:
                address = wallet.address
                self.logger.info(f"🔹 Checking balances and preparing swaps for wallet {address}")

                balances = {}
                for symbol in (BASE_TOKEN,) + SWAP_TARGETS:
                    balances[symbol] = await self.get_token_balance(wallet, self.config.get_token_address(symbol))
                    self.logger.info(f"💰 {symbol} Balance: {Web3.from_wei(balances[symbol], 'ether')}")

                # ✅ ПРОХОД 1: базовый токен -> каждый из целевых, доли считаются заранее
                base_balance = balances[BASE_TOKEN]
                if base_balance > 0:
                    planned = [
                        (target, Randomizer.get_random_amount(base_balance, self.fraction_source))
                        for target in SWAP_TARGETS
                    ]
                    for target, amount in planned:
                        if amount > 0:
                            await self._approve_and_swap(wallet, BASE_TOKEN, target, amount)
                            swaps_done += 1
                else:
                    self.logger.info(f"ℹ️ {BASE_TOKEN} balance is zero, skipping {BASE_TOKEN} swaps")

                # ✅ ПРОХОД 2: свежие балансы целевых токенов -> обратно в базовый
                new_balances = {}
                for symbol in SWAP_TARGETS:
                    new_balances[symbol] = await self.get_token_balance(wallet, self.config.get_token_address(symbol))

                for symbol in SWAP_TARGETS:
                    amount = Randomizer.get_random_amount(new_balances[symbol], self.fraction_source)
                    if amount > 0:
                        await self._approve_and_swap(wallet, symbol, BASE_TOKEN, amount)
                        swaps_done += 1

        except TransactionFailedError as e:
            self.logger.error(f"❌ Error in check_and_swap_tokens for {address}: {e}. Tx Hash: {e.tx_hash}")
        except Exception as e:
            self.logger.error(f"❌ Error in check_and_swap_tokens for {address or 'unknown address'}: {e}")

        return swaps_done
