from pydantic import BaseModel, Field


class TransactionDetails(BaseModel):
    """Swap/bridge parameters pulled out of a natural-language query."""

    fromChain: str = Field(description="Source blockchain name")
    toChain: str = Field(description="Destination blockchain name")
    amount: str = Field(description="Amount to transfer/swap")
    fromToken: str = Field(description="Source token symbol")
    toToken: str = Field(description="Destination token symbol")
