"""Dialog-act label tables.

Hides how model output indices map to Switchboard dialog-act codes and
human-readable tag names, and which tags call for a reply.
"""

from pathlib import Path

# Class index -> Switchboard short code, in the model's output order
INDEX_TO_CODE: dict[int, str] = {
    0: 'fo_o_fw_"_by_bc',
    1: "ft",
    2: "fc",
    3: "qw",
    4: "^g",
    5: "bh",
    6: "qy",
    7: "qrr",
    8: "fp",
    9: "qo",
    10: "bk",
    11: "h",
    12: "sv",
    13: "ba",
    14: "nn",
    15: "^h",
    16: "^2",
    17: "aap_am",
    18: "qw^d",
    19: "qy^d",
    20: "ng",
    21: "fa",
    22: "b",
    23: "ny",
    24: "t3",
    25: "sd",
    26: "br",
    27: "oo_co_cc",
    28: "arp_nd",
    29: "t1",
    30: "^q",
    31: "aa",
    32: "na",
    33: "b^m",
    34: "bd",
    35: "ad",
    36: "bf",
    37: "qh",
}

# Tags that mean the speaker is asking something
QUESTION_TAGS = frozenset({
    "Yes-No-Question",
    "Wh-Question",
    "Open-Question",
    "Declarative Yes-No-Question",
    "Declarative Wh-Question",
    "Backchannel in Question Form",
    "Tag-Question",
    "Rhetorical-Question",
    "Or-Clause",
    "Signal-non-understanding",
})

# Tags that warrant an answer from the counterparty
REPLY_TAGS = QUESTION_TAGS | {
    "Action-directive",
    "Conventional-opening",
    "Conventional-closing",
    "Thanking",
    "Apology",
    "Offers, Options Commits",
}

UNKNOWN_TAG = "Unknown"


def load_label_map(path: str | Path) -> dict[str, str]:
    """Read a label map of `Name|code` lines into {code: name}.

    Lines without both parts are skipped.
    """
    mapping: dict[str, str] = {}
    for line in Path(path).read_text(encoding="utf-8").strip().splitlines():
        name, _, code = line.partition("|")
        if name.strip() and code.strip():
            mapping[code.strip()] = name.strip()
    return mapping


def index_to_label(index: int, code_to_label: dict[str, str]) -> str:
    """Human-readable tag for a class index (the code itself if unnamed)."""
    code = INDEX_TO_CODE.get(index)
    if code is None:
        return UNKNOWN_TAG
    return code_to_label.get(code, code)
