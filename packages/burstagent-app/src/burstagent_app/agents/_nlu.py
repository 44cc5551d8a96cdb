import logging
from typing import Any, Dict, Optional

from autogen_core import CancellationToken
from autogen_core.models import (
    ChatCompletionClient,
    SystemMessage,
    UserMessage,
)

from .._constants import LOGGER_NAME
from ..datamodel import CONTROL_FIELDS, coerce_field, optional_fields, required_fields
from ..datamodel.types import BurstTokenDraft
from ..errors import ExternalServiceError
from ..metrics import model_api_failure_count, model_api_success_count
from ..templates.token_templates import BurstTokenConfirmation, BurstTokenExtraction, BurstTokenImagePrompt
from ._markdown_utils import extract_json_object

logger = logging.getLogger(LOGGER_NAME)

_USER_FIELDS = required_fields() + optional_fields()
# accept both the camelCase aliases and the python names
_FIELD_NAMES: Dict[str, str] = {
    **{field: field for field in _USER_FIELDS},
    **{BurstTokenDraft.model_fields[field].alias or field: field for field in _USER_FIELDS},
}


def coerce_extracted(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Typed values for the recognised, non-empty fields of a raw extraction result."""
    extracted: Dict[str, Any] = {}
    for key, value in raw.items():
        field = _FIELD_NAMES.get(key)
        if field is None or field in CONTROL_FIELDS:
            logger.debug(f"ignore extracted key {key}")
            continue
        if value is None or value == "" or value == []:
            continue
        try:
            extracted[field] = coerce_field(field, value)
        except ValueError as e:
            logger.warning(f"skip extracted {field}={value!r}: {e}")
    return extracted


class ModelFieldExtractor:
    """Asks a chat model for the token parameters stated in one message."""

    def __init__(self, model_client: ChatCompletionClient, system_message: str = BurstTokenExtraction["prompt"]):
        self._model_client = model_client
        self._system_message = SystemMessage(content=system_message)

    async def extract(self, text: str, cancellation_token: Optional[CancellationToken] = None) -> Dict[str, Any]:
        try:
            result = await self._model_client.create(
                [self._system_message, UserMessage(content=text, source="user")],
                cancellation_token=cancellation_token,
            )
            model_api_success_count.inc()
        except Exception as e:
            model_api_failure_count.inc()
            logger.error(f"Error extracting token fields: {e}")
            raise ExternalServiceError("model", e) from e
        logger.info(f"extraction result: {result.content}")
        if not isinstance(result.content, str):
            return {}
        raw = extract_json_object(result.content)
        if raw is None:
            return {}
        return coerce_extracted(raw)


class ModelConfirmationClassifier:
    """true confirms, false refuses, None means the answer is something else."""

    def __init__(self, model_client: ChatCompletionClient, system_message: str = BurstTokenConfirmation["prompt"]):
        self._model_client = model_client
        self._system_message = SystemMessage(content=system_message)

    async def classify(self, text: str, cancellation_token: Optional[CancellationToken] = None) -> Optional[bool]:
        try:
            result = await self._model_client.create(
                [self._system_message, UserMessage(content=text, source="user")],
                cancellation_token=cancellation_token,
            )
            model_api_success_count.inc()
        except Exception as e:
            model_api_failure_count.inc()
            logger.error(f"Error classifying confirmation: {e}")
            raise ExternalServiceError("model", e) from e
        if not isinstance(result.content, str):
            return None
        answer = extract_json_object(result.content)
        if answer is None:
            return None
        confirmed = answer.get("isConfirmed")
        return confirmed if isinstance(confirmed, bool) else None


class ModelImagePromptWriter:
    """Turns a token concept into an image generation prompt for its logo or banner."""

    def __init__(self, model_client: ChatCompletionClient, template: str = BurstTokenImagePrompt["prompt"]):
        self._model_client = model_client
        self._template = template

    async def write(self, concept: str, style: str) -> Optional[str]:
        try:
            result = await self._model_client.create(
                [UserMessage(content=self._template.format(concept=concept, style=style), source="user")]
            )
            model_api_success_count.inc()
        except Exception as e:
            model_api_failure_count.inc()
            logger.error(f"Error writing image prompt: {e}")
            return None
        if not isinstance(result.content, str) or not result.content.strip():
            return None
        prompt = result.content.strip()
        logger.info(f"{style} image prompt: {prompt}")
        return prompt
