#!/usr/bin/env python
# coding=utf-8
import json
import logging
import logging.config
import os
from typing import Optional

import yaml
from autogen_ext.models.openai import OpenAIChatCompletionClient
from burstagent_ext.cache_store import CacheStore, InMemoryCacheStore, RedisCacheStore
from quart import Quart, Response, jsonify, request

from ._constants import LOGGER_NAME
from .agents import BurstTokenAgent, ModelConfirmationClassifier, ModelFieldExtractor, ModelImagePromptWriter
from .aggregator import BurstTokenAggregator
from .burst_factory import BurstTokenLauncher
from .config import BurstAgentSettings, load_settings
from .draft_store import DraftStore
from .ledger import Web3LedgerClient
from .metrics import api_requests_total, start_server
from .pinata_service import PinataService
from .token_image import TokenImageGenerator

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(logging_config: str = "logging_config.yaml") -> None:
    """dictConfig from a yaml file, basicConfig when the file does not exist"""
    if os.path.exists(logging_config):
        with open(logging_config, "r") as f:
            config = yaml.safe_load(f.read())
            logging.config.dictConfig(config)
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger(LOGGER_NAME).info(f"{logging_config} not found, logging to console")


class BurstAgentSystem:
    """Wires the draft store, model, ledger and pinning clients into one agent."""

    def __init__(self, settings: BurstAgentSettings) -> None:
        if not settings.AVALANCHE_PRIVATE_KEY:
            raise ValueError("AVALANCHE_PRIVATE_KEY is not set")
        if not settings.BURST_FACTORY_ADDRESS:
            raise ValueError("BURST_FACTORY_ADDRESS is not set")
        self.settings = settings

        cache: CacheStore[str]
        if settings.REDIS_URL:
            cache = RedisCacheStore.from_url(settings.REDIS_URL, expire=settings.DRAFT_TTL_SECONDS)
        else:
            logger.warning("REDIS_URL is not set, drafts are kept in memory")
            cache = InMemoryCacheStore[str]()
        self.store = DraftStore(cache, ttl=settings.DRAFT_TTL_SECONDS)

        self.model_client = OpenAIChatCompletionClient(
            model=settings.OPENAI_MODEL,
            api_key=settings.OPENAI_API_KEY,
            temperature=0,
        )
        network = settings.network
        logger.info(f"network {settings.AVALANCHE_NETWORK} chain {network.chain_id} rpc {settings.rpc_url}")
        self.ledger = Web3LedgerClient(
            settings.rpc_url,
            settings.AVALANCHE_PRIVATE_KEY,
            settings.BURST_FACTORY_ADDRESS,
            network.chain_id,
            rpc_timeout=settings.RPC_TIMEOUT,
        )
        pinata: Optional[PinataService] = None
        if settings.PINATA_JWT:
            pinata = PinataService(settings.PINATA_JWT, host=settings.PINATA_API_URL)
        image_generator: Optional[TokenImageGenerator] = None
        if settings.GOOGLE_GEMINI_API_KEY:
            image_generator = TokenImageGenerator(settings.GOOGLE_GEMINI_API_KEY, model=settings.IMAGE_MODEL)

        self.launcher = BurstTokenLauncher(
            self.ledger,
            pinata=pinata,
            image_generator=image_generator,
            prompt_writer=ModelImagePromptWriter(self.model_client) if image_generator else None,
            confirmations=settings.CONFIRMATIONS,
            receipt_timeout=settings.RECEIPT_TIMEOUT,
        )
        self.aggregator = BurstTokenAggregator(
            settings.AGENT_ID,
            self.store,
            ModelFieldExtractor(self.model_client),
            ModelConfirmationClassifier(self.model_client),
            self.launcher,
        )
        self.agent = BurstTokenAgent(
            "BurstTokenAgent", aggregator=self.aggregator, explorer_url=settings.explorer_url
        )


def create_app(agent: BurstTokenAgent, name: str = "burst-agent") -> Quart:
    app = Quart(name)

    @app.route("/burst/message", methods=["POST"])
    async def post_message() -> Response:
        data = await request.get_json(silent=True) or {}
        logger.info("/burst/message post data=%s", data)
        user = data.get("user")
        text = data.get("text")
        if not user:
            api_requests_total.labels(endpoint="/burst/message", status="400").inc()
            return jsonify({"error_code": 400, "text": "No user provided"})
        if not text:
            api_requests_total.labels(endpoint="/burst/message", status="400").inc()
            return jsonify({"error_code": 400, "text": "No text provided"})

        reply, result = await agent.respond(str(user), str(text))
        api_requests_total.labels(endpoint="/burst/message", status="200").inc()
        return jsonify(
            {
                "error_code": 200,
                "text": reply,
                "state": result.state.value,
                "missing_required": result.missing_required,
                "missing_optional": result.missing_optional,
                "launch": result.launch.model_dump() if result.launch else None,
                "error": str(result.error) if result.error else None,
            }
        )

    @app.route("/burst/draft/<user>", methods=["GET"])
    async def get_draft(user: str) -> Response:
        draft = agent.aggregator.get_draft(user)
        api_requests_total.labels(endpoint="/burst/draft", status="200").inc()
        return jsonify({"error_code": 200, "draft": json.loads(draft.to_json())})

    @app.route("/burst/draft/<user>", methods=["DELETE"])
    async def delete_draft(user: str) -> Response:
        result = agent.aggregator.cancel(user)
        api_requests_total.labels(endpoint="/burst/draft", status="200").inc()
        return jsonify({"error_code": 200, "state": result.state.value})

    return app


async def main(host: str = "0.0.0.0", port: Optional[int] = None) -> None:
    settings = await load_settings()
    setup_logging(settings.LOGGING_CONFIG)
    logger.info("BurstAgent start")
    if settings.METRICS_PORT:
        start_server(settings.METRICS_PORT)
    system = BurstAgentSystem(settings)
    app = create_app(system.agent, settings.AGENT_ID)
    await app.run_task(host=host, port=port or settings.HTTP_PORT)
