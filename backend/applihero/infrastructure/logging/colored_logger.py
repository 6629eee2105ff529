"""Stage-coloured console logging for the RAG pipeline.

Each ingestion or retrieval step is printed with its stage label and colour,
so a document can be followed through chunk → embed → store in the terminal:

    ✂️ [CHUNK]    yellow
    🧮 [EMBED]    magenta
    💾 [STORE]    green
    🔎 [RETRIEVE] blue
    ⚙️ [PIPELINE] white
    ✅ [COMPLETE] green

Failures are printed in red with the exception type and message.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, NamedTuple

_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_RED = "\033[91m"
_GREEN = "\033[92m"
_YELLOW = "\033[93m"
_BLUE = "\033[94m"
_MAGENTA = "\033[95m"
_WHITE = "\033[97m"
_GRAY = "\033[90m"


class Stage(NamedTuple):
    label: str
    color: str
    icon: str


class PipelineStage:
    """The stages the ingestion and retrieval services report."""

    CHUNK = Stage("CHUNK", _YELLOW, "✂️")
    EMBED = Stage("EMBED", _MAGENTA, "🧮")
    STORE = Stage("STORE", _GREEN, "💾")
    RETRIEVE = Stage("RETRIEVE", _BLUE, "🔎")
    PIPELINE = Stage("PIPELINE", _WHITE, "⚙️")
    COMPLETE = Stage("COMPLETE", _GREEN, "✅")


def _fields(kwargs: dict[str, Any], color: str = _GRAY) -> str:
    if not kwargs:
        return ""
    return f" {color}({' | '.join(f'{k}={v}' for k, v in kwargs.items())}){_RESET}"


class PipelineLogger:
    """Logs pipeline steps under a component name (e.g. "DocumentIngestionService").

        plog = PipelineLogger("DocumentIngestionService")
        with plog.timed_step(PipelineStage.EMBED, "Embedding 4 chunk(s)"):
            vectors = await provider.generate_embeddings(texts)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: Stage, message: str, **kwargs: Any) -> None:
        self._logger.info(
            "%s%s%s [%s]%s %s%s%s%s",
            stage.color, _BOLD, stage.icon, stage.label, _RESET,
            stage.color, message, _RESET, _fields(kwargs),
        )

    def step_complete(self, stage: Stage, message: str, **kwargs: Any) -> None:
        self._logger.info(
            "%s%s [%s]%s %s✓ %s%s%s",
            stage.color, stage.icon, stage.label, _RESET,
            _GREEN, message, _RESET, _fields(kwargs),
        )

    def step_error(self, stage: Stage, message: str, error: BaseException | None = None) -> None:
        cause = f" {_DIM}→ {type(error).__name__}: {error}{_RESET}" if error else ""
        self._logger.error(
            "%s%s❌ [%s]%s %s%s%s%s",
            _RED, _BOLD, stage.label, _RESET, _RED, message, _RESET, cause,
        )

    def detail(self, message: str, **kwargs: Any) -> None:
        self._logger.debug("   %s├─ %s%s%s", _GRAY, message, _RESET, _fields(kwargs, _DIM))

    @contextmanager
    def timed_step(self, stage: Stage, message: str, **kwargs: Any):
        """Log start, then completion or failure with the elapsed seconds."""
        self.step_start(stage, message, **kwargs)
        started = time.monotonic()
        try:
            yield
        except Exception as e:
            self.step_error(stage, f"{message} failed after {time.monotonic() - started:.2f}s", e)
            raise
        self.step_complete(stage, f"{message} ({time.monotonic() - started:.2f}s)")
