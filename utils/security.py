import re

from config.constants import PRIVATE_KEY_LENGTH

_HEX_KEY_PATTERN = re.compile(r'^0x[0-9a-fA-F]{64}$')


def has_key_format(private_key: str) -> bool:
    """Быстрая проверка формата строки ключа: префикс 0x и длина 66"""
    return (
        isinstance(private_key, str)
        and private_key.startswith('0x')
        and len(private_key) == PRIVATE_KEY_LENGTH
    )


def validate_private_key(private_key: str) -> bool:
    """
    Валидация приватного ключа: 0x + ровно 64 hex символа
    """
    return has_key_format(private_key) and bool(_HEX_KEY_PATTERN.match(private_key))


def mask_private_key(private_key: str) -> str:
    """Маскирование ключа для логов - полный ключ никогда не пишется"""
    if not private_key or len(private_key) < 12:
        return '***'
    return f"{private_key[:6]}...{private_key[-4:]}"
