from typing import Protocol
from ..schemas import InsightRequest

class InsightGenerator(Protocol):
    name: str

    async def generate(self, request: InsightRequest) -> str:
        """
        Returns free-form market commentary for the formatted dataset summary
        (and optional user focus) carried by `request`.
        Raises InsightGenerationError on any failure.
        """
        ...
