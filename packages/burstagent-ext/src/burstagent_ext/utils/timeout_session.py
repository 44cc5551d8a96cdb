from typing import Any, Optional, Tuple, Union

from requests import Response, Session
from typing_extensions import TypeAlias

_TimeoutType: TypeAlias = Union[float, Tuple[float, float], Tuple[float, None], None]


class TimeoutSession(Session):
    """A requests session that applies a default timeout to every request.

    web3's ``HTTPProvider`` accepts a session, so an RPC endpoint that stops
    answering surfaces as a ``requests.Timeout`` instead of hanging the caller.
    """

    def __init__(self, timeout: _TimeoutType = None) -> None:
        super().__init__()
        self.timeout = timeout

    def request(  # type: ignore[override]
        self,
        method: Union[str, bytes],
        url: Union[str, bytes],
        *args: Any,
        timeout: Optional[_TimeoutType] = None,
        **kwargs: Any,
    ) -> Response:
        if timeout is None:
            timeout = self.timeout
        return super().request(method, url, *args, timeout=timeout, **kwargs)
