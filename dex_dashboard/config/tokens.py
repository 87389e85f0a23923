# dex_dashboard/config/tokens.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

ARBITRUM = 42161
AVALANCHE = 43114

NETWORK_LABELS: Dict[int, str] = {
    ARBITRUM: "Arbitrum",
    AVALANCHE: "Avalanche",
}


@dataclass(frozen=True)
class TokenConfig:
    symbol: str
    name: str
    address: str
    decimals: int
    image_url: str = ""
    is_stable: bool = False
    is_wrapped: bool = False
    is_temp_hidden: bool = False


# Whitelist order matters: pair construction keeps the first eligible tokens.
TOKENS: Dict[int, List[TokenConfig]] = {
    ARBITRUM: [
        TokenConfig(
            symbol="ETH",
            name="Ethereum",
            address="0x0000000000000000000000000000000000000000",
            decimals=18,
            image_url="https://assets.coingecko.com/coins/images/279/small/ethereum.png",
        ),
        TokenConfig(
            symbol="WETH",
            name="Wrapped Ethereum",
            address="0x82aF49447D8a07e3bd95BD0d56f35241523fBab1",
            decimals=18,
            image_url="https://assets.coingecko.com/coins/images/2518/thumb/weth.png",
            is_wrapped=True,
        ),
        TokenConfig(
            symbol="BTC",
            name="Bitcoin (WBTC)",
            address="0x2f2a2543B76A4166549F7aaB2e75Bef0aefC5B0f",
            decimals=8,
            image_url="https://assets.coingecko.com/coins/images/26115/thumb/btcb.png",
        ),
        TokenConfig(
            symbol="BNB",
            name="BNB",
            address="0xa9004A5421372E1D83fB1f85b0fc986c912f91f3",
            decimals=18,
            image_url="https://assets.coingecko.com/coins/images/825/small/bnb-icon2_2x.png",
        ),
        TokenConfig(
            symbol="SOL",
            name="Solana",
            address="0x2bcC6D6CdBbDC0a4071e48bb3B969b06B3330c07",
            decimals=9,
            image_url="https://assets.coingecko.com/coins/images/4128/small/solana.png",
        ),
        TokenConfig(
            symbol="ADA",
            name="Cardano",
            address="0x1b3b2E9E9C2bB13B9b0b0aA5D0c5bE5e1b6b0F3c",
            decimals=18,
            image_url="https://assets.coingecko.com/coins/images/975/small/cardano.png",
            is_temp_hidden=True,
        ),
        TokenConfig(
            symbol="USDC",
            name="USD Coin",
            address="0xaf88d065e77c8cC2239327C5EDb3A432268e5831",
            decimals=6,
            image_url="https://assets.coingecko.com/coins/images/6319/thumb/USD_Coin_icon.png",
            is_stable=True,
        ),
        TokenConfig(
            symbol="USDT",
            name="Tether",
            address="0xFd086bC7CD5C481DCC9C85ebE478A1C0b69FCbb9",
            decimals=6,
            image_url="https://assets.coingecko.com/coins/images/325/thumb/Tether-logo.png",
            is_stable=True,
        ),
    ],
    AVALANCHE: [
        TokenConfig(
            symbol="AVAX",
            name="Avalanche",
            address="0x0000000000000000000000000000000000000000",
            decimals=18,
            image_url="https://assets.coingecko.com/coins/images/12559/small/coin-round-red.png",
        ),
        TokenConfig(
            symbol="WAVAX",
            name="Wrapped AVAX",
            address="0xB31f66AA3C1e785363F0875A1B74E27b85FD66c7",
            decimals=18,
            is_wrapped=True,
        ),
        TokenConfig(
            symbol="ETH",
            name="Ethereum (WETH.e)",
            address="0x49D5c2BdFfac6CE2BFdB6640F4F80f226bc10bAB",
            decimals=18,
        ),
        TokenConfig(
            symbol="BTC",
            name="Bitcoin (BTC.b)",
            address="0x152b9d0FdC40C096757F570A51E494bd4b943E50",
            decimals=8,
        ),
        TokenConfig(
            symbol="USDC",
            name="USD Coin",
            address="0xB97EF9Ef8734C71904D8002F8b6Bc66Dd9c48a6E",
            decimals=6,
            is_stable=True,
        ),
    ],
}


def get_whitelisted_tokens(chain_id: int) -> List[TokenConfig]:
    """Return the tradable tokens for a chain, or an empty list when unknown."""
    return list(TOKENS.get(chain_id, []))


def get_network_label(chain_id: int) -> str:
    return NETWORK_LABELS.get(chain_id, f"Chain {chain_id}")
