"""Dialog-act classifier.

Runs a DistilBERT Switchboard dialog-act model exported to ONNX against a
local model directory laid out as:

    <model_dir>/tokenizer.json
    <model_dir>/label_map.txt
    <model_dir>/onnx/model.onnx

The model and tokenizer load lazily on the first classification. Nothing is
downloaded.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

try:
    import onnxruntime
    from tokenizers import Tokenizer
    ONNX_AVAILABLE = True
except ImportError:
    ONNX_AVAILABLE = False
    onnxruntime = None
    Tokenizer = None

from .labels import QUESTION_TAGS, REPLY_TAGS, index_to_label, load_label_map

MAX_SEQUENCE_LENGTH = 512


@dataclass(frozen=True)
class DialogAct:
    """Classification of one utterance."""

    tag: str
    confidence: float
    is_question: bool
    should_reply: bool


def softmax(logits: np.ndarray) -> np.ndarray:
    """Numerically stable softmax over a 1-D array."""
    shifted = np.exp(logits - np.max(logits))
    return shifted / shifted.sum()


def act_from_logits(logits: np.ndarray, code_to_label: dict[str, str]) -> DialogAct:
    """Turn raw class logits into a DialogAct."""
    probabilities = softmax(np.asarray(logits, dtype=np.float64))
    best = int(np.argmax(probabilities))
    tag = index_to_label(best, code_to_label)
    return DialogAct(
        tag=tag,
        confidence=float(probabilities[best]),
        is_question=tag in QUESTION_TAGS,
        should_reply=tag in REPLY_TAGS,
    )


class DialogActClassifier:
    """Classifies utterances with a local ONNX model.

    Example:
        classifier = DialogActClassifier("models/distilbert-base-uncased")
        act = classifier.classify("what time is it?")
        act.should_reply  # True
    """

    def __init__(self, model_dir: str | Path) -> None:
        if not ONNX_AVAILABLE:
            raise ImportError(
                "Dialog-act classifier requires onnxruntime and tokenizers. "
                "Install with: pip install 'bubblechat[classifier]'"
            )

        self._model_dir = Path(model_dir)
        self._code_to_label = load_label_map(self._model_dir / "label_map.txt")
        self._tokenizer: Any | None = None
        self._session: Any | None = None

    @property
    def model_dir(self) -> Path:
        return self._model_dir

    def _ensure_loaded(self) -> None:
        if self._tokenizer is None:
            tokenizer = Tokenizer.from_file(str(self._model_dir / "tokenizer.json"))
            tokenizer.enable_truncation(max_length=MAX_SEQUENCE_LENGTH)
            self._tokenizer = tokenizer
        if self._session is None:
            self._session = onnxruntime.InferenceSession(
                str(self._model_dir / "onnx" / "model.onnx")
            )

    def classify(self, text: str) -> DialogAct:
        """Classify one utterance (blocking; run off the event loop)."""
        self._ensure_loaded()

        encoding = self._tokenizer.encode(text)
        input_ids = np.array([encoding.ids], dtype=np.int64)
        attention_mask = np.array([encoding.attention_mask], dtype=np.int64)

        logits = self._session.run(
            ["logits"],
            {"input_ids": input_ids, "attention_mask": attention_mask},
        )[0]
        return act_from_logits(logits[0], self._code_to_label)
