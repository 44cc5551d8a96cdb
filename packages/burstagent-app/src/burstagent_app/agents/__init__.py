from ._burst_token_agent import BurstTokenAgent
from ._nlu import ModelConfirmationClassifier, ModelFieldExtractor, ModelImagePromptWriter

__all__ = [
    "BurstTokenAgent",
    "ModelConfirmationClassifier",
    "ModelFieldExtractor",
    "ModelImagePromptWriter",
]
