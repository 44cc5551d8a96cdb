import json
import logging
import re
from typing import (
    Any,
    Dict,
    List,
    Optional,
    cast,
)

from .._constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


def extract_markdown_json_blocks(markdown_text: str) -> List[Any]:
    pattern = re.compile(r"```(?:\s*([\w\+\-]+))?\n([\s\S]*?)```")
    matches = pattern.findall(markdown_text)
    blocks: List[Any] = []
    for match in matches:
        language = match[0].strip() if match[0] else ""
        if language != "json":
            continue
        try:
            blocks.append(json.loads(match[1]))
        except json.JSONDecodeError:
            logger.warning(f"skip block {match[1]}")
            continue
    return blocks


def extract_json_from_string(raw_str: str) -> Optional[Any]:
    match = re.search(r"\{[\s\S]*\}", raw_str)
    if match:
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError:
            pass
    logger.error("No valid JSON found in the string")
    return None


def extract_json_object(markdown_text: str) -> Optional[Dict[str, Any]]:
    """First JSON object of a model reply, from a ```json block or, failing that, from bare text."""
    for block in extract_markdown_json_blocks(markdown_text):
        if isinstance(block, Dict):
            return cast(Dict[str, Any], block)
    obj = extract_json_from_string(markdown_text)
    if isinstance(obj, Dict):
        return cast(Dict[str, Any], obj)
    return None
