"""Settings configuration for the Selene Markets CLI."""

from decimal import Decimal

from cosmpy.aerial.wallet import LocalWallet
from dotenv import load_dotenv
from pydantic import Field, ValidationInfo, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.selene_cli.config.constants import (
    ARCHWAY_ADDRESS_PREFIX,
    CONSTANTINE_CHAIN_ID,
    CONSTANTINE_FEE_DENOM,
    CONSTANTINE_MIN_GAS_PRICE,
    CONSTANTINE_REST_URL,
    DEFAULT_BOOK_DEPTH,
    DEFAULT_MARKET_ID,
    EXPLORER_TX_URL_TESTNET,
    FAUCET_MINT_AMOUNT,
    HEUR_ADDRESS_TESTNET,
    HUSD_ADDRESS_TESTNET,
    MARKETPLACE_ADDRESS_TESTNET,
    MAX_BOOK_DEPTH,
    is_bech32_address,
)
from src.selene_cli.utils.units import is_fixed_point

# Load environment variables from .env file
load_dotenv()

_CHAIN_URL_SCHEMES = ("grpc+http://", "grpc+https://", "rest+http://", "rest+https://")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,  # Allow both alias and field name
    )

    # Wallet Configuration
    wallet_mnemonic: str = Field(
        ...,
        alias="mnemonic",
        description="Secret recovery phrase of the trading account (12 or 24 words)",
        repr=False,
    )
    wallet_address: str | None = Field(
        None, description="Wallet address (derived from the mnemonic)"
    )
    faucet_mnemonic: str | None = Field(
        None,
        description="Recovery phrase of the CW20 minter account; enables the faucet",
        repr=False,
    )

    # Chain Configuration
    chain_url: str = Field(default=CONSTANTINE_REST_URL, description="cosmpy endpoint URL")
    chain_id: str = Field(default=CONSTANTINE_CHAIN_ID, description="Chain ID")
    address_prefix: str = Field(default=ARCHWAY_ADDRESS_PREFIX, description="Bech32 prefix")
    fee_denom: str = Field(default=CONSTANTINE_FEE_DENOM, description="Fee coin denomination")
    fee_minimum_gas_price: int = Field(
        default=CONSTANTINE_MIN_GAS_PRICE, ge=0, description="Minimum gas price in fee_denom"
    )

    # Market Configuration
    marketplace_address: str = Field(
        default=MARKETPLACE_ADDRESS_TESTNET, description="Selene order-book contract"
    )
    base_token_address: str = Field(
        default=HEUR_ADDRESS_TESTNET, description="CW20 base token (sold by sell orders)"
    )
    quote_token_address: str = Field(
        default=HUSD_ADDRESS_TESTNET, description="CW20 quote token (spent by buy orders)"
    )
    market_id: int = Field(default=DEFAULT_MARKET_ID, ge=0, description="Order-book market id")
    book_depth: int = Field(
        default=DEFAULT_BOOK_DEPTH,
        gt=0,
        le=MAX_BOOK_DEPTH,
        description="Price levels per side shown for the market book",
    )

    # Operational Settings
    faucet_mint_amount: str = Field(
        default=FAUCET_MINT_AMOUNT, description="Human amount minted per token by the faucet"
    )
    explorer_tx_url: str = Field(
        default=EXPLORER_TX_URL_TESTNET, description="Explorer URL template with {tx_hash}"
    )
    log_level: str = Field(default="WARNING", description="Logging level")

    @field_validator("wallet_mnemonic", "faucet_mnemonic")
    @classmethod
    def validate_mnemonic(cls, v: str | None, info: ValidationInfo) -> str | None:
        """Validate mnemonic shape (word count and charset)."""
        if v is None:
            return v
        # Blank optional phrase (e.g. FAUCET_MNEMONIC=) means unset
        if info.field_name == "faucet_mnemonic" and not v.strip():
            return None
        words = v.split()
        if len(words) not in (12, 24):
            raise ValueError("Mnemonic must contain 12 or 24 words")
        if not all(word.isalpha() and word.islower() for word in words):
            raise ValueError("Mnemonic words must be lower-case letters only")
        return " ".join(words)

    @field_validator("chain_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        if not v.startswith(_CHAIN_URL_SCHEMES):
            raise ValueError(f"Chain URL must start with one of {list(_CHAIN_URL_SCHEMES)}")
        return v

    @field_validator("faucet_mint_amount")
    @classmethod
    def validate_mint_amount(cls, v: str) -> str:
        """Validate faucet amount against the fixed-point grammar."""
        if not is_fixed_point(v) or Decimal(v) <= 0:
            raise ValueError("faucet_mint_amount must be a positive amount with at most 2 decimals")
        return v

    @field_validator("explorer_tx_url")
    @classmethod
    def validate_explorer_url(cls, v: str) -> str:
        """Validate explorer template."""
        if "{tx_hash}" not in v:
            raise ValueError("explorer_tx_url must contain a {tx_hash} placeholder")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper

    @model_validator(mode="after")
    def validate_constraints(self) -> "Settings":
        """Validate cross-field constraints and derive wallet address."""
        for name in ("marketplace_address", "base_token_address", "quote_token_address"):
            address = getattr(self, name)
            if not is_bech32_address(address, self.address_prefix):
                raise ValueError(
                    f"{name} '{address}' is not a '{self.address_prefix}' bech32 address"
                )

        # Two-token market: a token cannot be traded against itself
        if self.base_token_address == self.quote_token_address:
            raise ValueError("base_token_address and quote_token_address must differ")

        # Derive wallet address from mnemonic
        if not self.wallet_address:
            try:
                wallet = LocalWallet.from_mnemonic(self.wallet_mnemonic, prefix=self.address_prefix)
                self.wallet_address = str(wallet.address())
            except Exception as e:
                raise ValueError(
                    f"Failed to derive wallet address from mnemonic: {type(e).__name__}"
                ) from e
        elif not is_bech32_address(self.wallet_address, self.address_prefix):
            raise ValueError(f"Invalid wallet address format: {self.wallet_address}")

        return self

    @property
    def token_addresses(self) -> list[str]:
        """Base then quote token address."""
        return [self.base_token_address, self.quote_token_address]
