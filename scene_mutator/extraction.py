#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/extraction.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import re
from typing import Optional

CODE_FENCE_RE = re.compile(r"```(?:python3?|py)?\s*([\s\S]*?)```", re.IGNORECASE)
_BINDING_WORD_RE = re.compile(r"\b(scene|kit|camera|renderer)\b")
_STATEMENT_PUNCT_RE = re.compile(r"[;{}.=]")


def extract_script(text) -> Optional[str]:
    """
    Pull an executable script out of a model response.

    Fenced blocks win: all non-empty ones are joined with a blank line.
    Without fences the whole text is taken when it mentions a binding name
    and has statement punctuation; otherwise None.
    """
    if not isinstance(text, str) or not text.strip():
        return None

    blocks = [m.group(1).strip() for m in CODE_FENCE_RE.finditer(text)]
    blocks = [b for b in blocks if b]
    if blocks:
        return "\n\n".join(blocks)

    if _BINDING_WORD_RE.search(text) and _STATEMENT_PUNCT_RE.search(text):
        return text.strip()
    return None


def strip_script_blocks(text) -> str:
    if not isinstance(text, str):
        return ""
    return CODE_FENCE_RE.sub("", text).strip()
