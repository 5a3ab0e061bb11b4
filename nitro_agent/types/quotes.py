from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt


class QuoteRequest(BaseModel):
    fromChainId: str = Field(..., description="Source chain ID")
    toChainId: str = Field(..., description="Destination chain ID")
    fromTokenAddress: str = Field(..., description="Input token address on the source chain")
    toTokenAddress: str = Field(..., description="Output token address on the destination chain")
    amount: str = Field(..., description="Amount to swap or bridge, passed through as given")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()


class QuoteResult(BaseModel):
    """Priced, non-binding estimate for one (chains, tokens, amount) request."""

    estimatedGas: Union[StrictInt, StrictFloat]
    route: List[Any]
    expectedOutput: str
    priceImpact: str
