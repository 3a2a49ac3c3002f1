"""Configuração do pytest para o gateway de interações."""

import sys
from pathlib import Path

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

# Adiciona src/ e a raiz ao PYTHONPATH para imports absolutos (app.*, tests.fakes.*)
root_path = Path(__file__).parent.parent
src_path = root_path / "src"
for path in (src_path, root_path):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture
def private_key() -> Ed25519PrivateKey:
    """Par de chaves Ed25519 gerado por teste."""
    return Ed25519PrivateKey.generate()


@pytest.fixture
def public_key_hex(private_key: Ed25519PrivateKey) -> str:
    return private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw).hex()


@pytest.fixture(autouse=True)
def _clear_cached_settings():
    """Settings e singletons são lru_cache; cada teste começa limpo."""
    from app.bootstrap.dependencies import reset_dependencies
    from config.settings import (
        get_base_settings,
        get_discord_settings,
        get_preset_api_settings,
        get_store_settings,
    )

    getters = (
        get_base_settings,
        get_discord_settings,
        get_preset_api_settings,
        get_store_settings,
    )
    for getter in getters:
        getter.cache_clear()
    reset_dependencies()
    yield
    for getter in getters:
        getter.cache_clear()
    reset_dependencies()
