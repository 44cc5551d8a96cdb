import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from burstagent_ext.utils import TimeoutSession
from eth_account import Account
from web3 import Web3
from web3.logs import DISCARD

from ._burst_factory_abi import BURST_FACTORY_ABI
from ._constants import LOGGER_NAME
from .datamodel import CurveDetails

logger = logging.getLogger(LOGGER_NAME)


class LedgerClient(ABC):
    """Chain access needed to launch a burst token.

    ``args`` is always the positional argument list of ``burstTokenWithCreator``.
    """

    @property
    @abstractmethod
    def account_address(self) -> str: ...

    @abstractmethod
    async def get_all_curves(self) -> List[CurveDetails]: ...

    @abstractmethod
    async def simulate_burst(self, args: Sequence[Any]) -> Optional[str]:
        """Dry run, returns the token address the factory would deploy."""
        ...

    @abstractmethod
    async def send_burst(self, args: Sequence[Any]) -> str:
        """Sign and broadcast, returns the transaction hash."""
        ...

    @abstractmethod
    async def wait_for_receipt(self, tx_hash: str, confirmations: int, timeout: float) -> Any: ...

    @abstractmethod
    def parse_token_created(self, receipt: Any) -> Optional[str]:
        """Token address from the first TokenCreated event of ``receipt``, or None."""
        ...


class Web3LedgerClient(LedgerClient):
    """web3.py implementation. The provider is synchronous, so calls run in a worker thread."""

    def __init__(
        self,
        rpc_url: str,
        private_key: str,
        factory_address: str,
        chain_id: int,
        *,
        rpc_timeout: float = 30,
        poll_interval: float = 2,
    ) -> None:
        self._w3 = Web3(Web3.HTTPProvider(rpc_url, session=TimeoutSession(rpc_timeout)))
        self._account = Account.from_key(private_key)
        self._chain_id = chain_id
        self._poll_interval = poll_interval
        self._contract = self._w3.eth.contract(address=Web3.to_checksum_address(factory_address), abi=BURST_FACTORY_ABI)

    @property
    def account_address(self) -> str:
        return self._account.address

    async def get_all_curves(self) -> List[CurveDetails]:
        raw_curves = await asyncio.to_thread(self._contract.functions.getAllCurves().call)
        curves: List[CurveDetails] = []
        for raw in raw_curves:
            if not raw:
                continue
            index, distribution, curve_data = raw
            curve_style, bin_step_scale_factor, percent_of_lp, avax_at_launch, base_price = curve_data
            curves.append(
                CurveDetails(
                    index=index,
                    curve_style=curve_style,
                    avax_at_launch=avax_at_launch,
                    base_price=base_price,
                    percent_of_lp=percent_of_lp,
                    distribution=list(distribution),
                    bin_step_scale_factor=list(bin_step_scale_factor),
                )
            )
        return curves

    async def simulate_burst(self, args: Sequence[Any]) -> Optional[str]:
        call = self._contract.functions.burstTokenWithCreator(*args)
        return await asyncio.to_thread(call.call, {"from": self.account_address})

    async def send_burst(self, args: Sequence[Any]) -> str:
        return await asyncio.to_thread(self._send_burst, args)

    def _send_burst(self, args: Sequence[Any]) -> str:
        nonce = self._w3.eth.get_transaction_count(self.account_address)
        transaction = self._contract.functions.burstTokenWithCreator(*args).build_transaction(
            {
                "from": self.account_address,
                "nonce": nonce,
                "chainId": self._chain_id,
            }
        )
        signed = self._account.sign_transaction(transaction)
        tx_hash = self._w3.eth.send_raw_transaction(signed.raw_transaction)
        return Web3.to_hex(tx_hash)

    async def wait_for_receipt(self, tx_hash: str, confirmations: int, timeout: float) -> Any:
        return await asyncio.to_thread(self._wait_for_receipt, tx_hash, confirmations, timeout)

    def _wait_for_receipt(self, tx_hash: str, confirmations: int, timeout: float) -> Any:
        deadline = time.monotonic() + timeout
        receipt = self._w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=timeout, poll_latency=self._poll_interval
        )
        while self._w3.eth.block_number - receipt["blockNumber"] + 1 < confirmations:
            if time.monotonic() >= deadline:
                raise TimeoutError(f"{tx_hash} not confirmed {confirmations} times within {timeout}s")
            time.sleep(self._poll_interval)
        return receipt

    def parse_token_created(self, receipt: Any) -> Optional[str]:
        events = self._contract.events.TokenCreated().process_receipt(receipt, errors=DISCARD)
        if not events:
            return None
        return events[0]["args"]["token"]
