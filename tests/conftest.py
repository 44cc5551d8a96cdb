"""Shared fixtures: an in-memory draft store and a scripted ledger."""

from typing import Any, List, Optional, Sequence

import pytest

from burstagent_app.burst_factory import BurstTokenLauncher
from burstagent_app.datamodel import BurstDEX, BurstTokenDraft, CurveDetails, DexAllocation
from burstagent_app.draft_store import DraftStore
from burstagent_app.ledger import LedgerClient
from burstagent_ext.cache_store import InMemoryCacheStore

CREATOR = "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"
ACCOUNT = "0x1111111111111111111111111111111111111111"
TOKEN = "0x2222222222222222222222222222222222222222"
TX_HASH = "0x" + "ab" * 32


def make_draft(**overrides: Any) -> BurstTokenDraft:
    """A draft with every required field set to a launchable value."""
    values = {
        "name": "Grumpy Cat",
        "symbol": "GRUMP",
        "total_supply": 100_000_000,
        "description": "A meme token celebrating the grumpiest cats",
        "burst_amount": 300,
        "dex_allocations": [
            DexAllocation(dex=BurstDEX.APEX, allocation=6000),
            DexAllocation(dex=BurstDEX.JOE, allocation=4000),
        ],
        "reward_dex": BurstDEX.APEX,
        "creator_address": CREATOR,
        "received_token_request": True,
    }
    values.update(overrides)
    return BurstTokenDraft(**values)


def make_curve(index: int, avax: float, style: int = 2) -> CurveDetails:
    return CurveDetails(index=index, curve_style=style, avax_at_launch=int(avax * 10**18))


class FakeLedger(LedgerClient):
    def __init__(
        self,
        curves: Optional[List[CurveDetails]] = None,
        simulate_result: Any = TOKEN,
        send_error: Optional[Exception] = None,
        receipt: Any = None,
        receipt_error: Optional[Exception] = None,
        token: Optional[str] = TOKEN,
    ) -> None:
        self.curves = curves if curves is not None else [make_curve(37, 250), make_curve(41, 300)]
        self.simulate_result = simulate_result
        self.send_error = send_error
        self.receipt = receipt if receipt is not None else {"status": 1, "blockNumber": 100}
        self.receipt_error = receipt_error
        self.token = token
        self.simulated: List[Sequence[Any]] = []
        self.sent: List[Sequence[Any]] = []
        self.waited: List[tuple] = []

    @property
    def account_address(self) -> str:
        return ACCOUNT

    async def get_all_curves(self) -> List[CurveDetails]:
        return self.curves

    async def simulate_burst(self, args: Sequence[Any]) -> Optional[str]:
        self.simulated.append(args)
        if isinstance(self.simulate_result, Exception):
            raise self.simulate_result
        return self.simulate_result

    async def send_burst(self, args: Sequence[Any]) -> str:
        self.sent.append(args)
        if self.send_error is not None:
            raise self.send_error
        return TX_HASH

    async def wait_for_receipt(self, tx_hash: str, confirmations: int, timeout: float) -> Any:
        self.waited.append((tx_hash, confirmations, timeout))
        if self.receipt_error is not None:
            raise self.receipt_error
        return self.receipt

    def parse_token_created(self, receipt: Any) -> Optional[str]:
        return self.token


@pytest.fixture
def cache():
    return InMemoryCacheStore[str]()


@pytest.fixture
def store(cache):
    return DraftStore(cache)


@pytest.fixture
def ledger():
    return FakeLedger()


@pytest.fixture
def launcher(ledger):
    return BurstTokenLauncher(ledger)
