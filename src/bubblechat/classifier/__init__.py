"""Dialog-act classification for reply gating."""

from .dialog_act import DialogAct, DialogActClassifier, act_from_logits, softmax
from .labels import QUESTION_TAGS, REPLY_TAGS, load_label_map

__all__ = [
    "DialogAct",
    "DialogActClassifier",
    "QUESTION_TAGS",
    "REPLY_TAGS",
    "act_from_logits",
    "load_label_map",
    "softmax",
]
