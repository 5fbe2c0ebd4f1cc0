"""
Receipt verification collaborator.

The checkout wizard depends only on the ReceiptVerifier protocol; the
shipped implementation is a simulation that accepts every receipt after
a fixed delay. No image content is inspected.
"""

import asyncio
from typing import Protocol

from storefront.schemas.checkout import ReceiptAnalysisResult

SIMULATED_SUMMARY = "Receipt received. Payment will be confirmed by our team."


class ReceiptVerifier(Protocol):
    async def verify(self, encoded_image: str) -> ReceiptAnalysisResult:
        """
        Judge a base64-encoded receipt image.

        May raise; the caller maps any exception to a retryable error.
        """
        ...


class SimulatedReceiptVerifier:
    """Always valid, after `delay_seconds`."""

    def __init__(self, delay_seconds: float = 2.0):
        self.delay_seconds = delay_seconds

    async def verify(self, encoded_image: str) -> ReceiptAnalysisResult:
        await asyncio.sleep(self.delay_seconds)
        return ReceiptAnalysisResult(
            is_valid=True,
            summary=SIMULATED_SUMMARY,
            detected_amount="Unknown",
        )
