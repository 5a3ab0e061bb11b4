from pydantic import BaseModel, ConfigDict, Field, StrictInt


class TokenRecord(BaseModel):
    # Token lists occasionally carry numeric chain ids.
    model_config = ConfigDict(coerce_numbers_to_str=True)

    symbol: str = Field(description="Token ticker")
    address: str = Field(description="Contract address on the token's own chain")
    decimals: StrictInt = Field(description="ERC-20 style decimals")
    chainId: str = Field(description="Chain the address belongs to")
