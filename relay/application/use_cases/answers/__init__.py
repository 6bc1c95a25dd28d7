"""Answer creation and editing over the relay."""

from .send_answer import persist_answer, send_answer
from .update_answer import persist_answer_edit, update_answer

__all__ = [
    "persist_answer",
    "persist_answer_edit",
    "send_answer",
    "update_answer",
]
