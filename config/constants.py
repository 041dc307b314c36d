# ✅ СЕТЬ 0G TESTNET
RPC_URL = 'https://evmrpc-testnet.0g.ai'
NATIVE_TOKEN = '0G'
PRIVATE_KEYS_FILE = 'privatekey.txt'
LOG_FILE = 'logs/zerog_farmer.log'

# Порядок важен: минт идет строго по этой таблице
FAUCET_CONTRACTS = {
    'Ethereum': '0xce830D0905e0f7A9b300401729761579c5FB6bd6',
    'Bitcoin': '0x1E0D871472973c562650E991ED8006549F8CBEfc',
    'Tether': '0x9A87C2412d500343c073E5Ae5394E3bE3874F76b',
}

SWAP_ROUTER_ADDRESS = '0xd86b764618c6e3c078845be3c3fce50ce9535da7'

# Токены для свопов - те же адреса, что и у кранов
TOKENS = {
    'ETH': FAUCET_CONTRACTS['Ethereum'],
    'BTC': FAUCET_CONTRACTS['Bitcoin'],
    'USDT': FAUCET_CONTRACTS['Tether'],
}
BASE_TOKEN = 'USDT'
SWAP_TARGETS = ('BTC', 'ETH')

POOL_FEE = 3000  # 0.3%
SWAP_DEADLINE_SECONDS = 20 * 60

# ✅ ЛИМИТЫ ГАЗА
GAS_LIMITS = {
    'mint': 500000,
    'approve': 100000,
    'swap': 300000,
}
GAS_PRICE_MULTIPLIER = 1.2

CLAIM_COOLDOWN_SECONDS = 24 * 60 * 60

SWAP_FRACTION_MIN = 0.05
SWAP_FRACTION_MAX = 0.10

MINT_DELAY_SECONDS = 2
LOOP_INTERVAL_SECONDS = 60
TX_RECEIPT_TIMEOUT = 120

PRIVATE_KEY_LENGTH = 66
