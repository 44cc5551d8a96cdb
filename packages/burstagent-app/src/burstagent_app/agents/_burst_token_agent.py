import logging
from typing import Sequence, Tuple

from autogen_agentchat.agents import BaseChatAgent
from autogen_agentchat.base import Response
from autogen_agentchat.messages import BaseChatMessage, TextMessage
from autogen_core import CancellationToken

from .._constants import LOGGER_NAME
from ..aggregator import BurstTokenAggregator, TurnResult
from ..replies import render_reply

logger = logging.getLogger(LOGGER_NAME)


class BurstTokenAgent(BaseChatAgent):
    """An agent that walks a user through launching an Apex Burst token.
    The source of the last text message identifies the user whose draft is updated.
    """

    def __init__(
        self,
        name: str,
        *,
        aggregator: BurstTokenAggregator,
        explorer_url: str = "https://snowtrace.io",
        description: str = "An agent that collects token parameters and launches Apex Burst tokens on Avalanche.",
    ) -> None:
        super().__init__(name=name, description=description)
        self._aggregator = aggregator
        self._explorer_url = explorer_url

    @property
    def aggregator(self) -> BurstTokenAggregator:
        return self._aggregator

    @property
    def produced_message_types(self) -> Sequence[type[BaseChatMessage]]:
        return (TextMessage,)

    async def respond(self, user_id: str, text: str) -> Tuple[str, TurnResult]:
        result = await self._aggregator.handle_turn(user_id, text)
        return render_reply(result, self._explorer_url), result

    async def on_messages(self, messages: Sequence[BaseChatMessage], cancellation_token: CancellationToken) -> Response:
        message = next((m for m in reversed(messages) if isinstance(m, TextMessage)), None)
        if message is None:
            logger.warning("BurstTokenAgent received no text message")
            return Response(
                chat_message=TextMessage(content="Tell me about the token you want to create.", source=self.name)
            )
        reply, _ = await self.respond(message.source, message.content)
        return Response(chat_message=TextMessage(content=reply, source=self.name))

    async def on_reset(self, cancellation_token: CancellationToken) -> None:
        """Drafts live in the draft store and survive a reset."""
        pass
