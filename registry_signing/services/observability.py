"""検証 1 回分の診断メッセージを収集するスコープ。"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Literal, Optional

logger = logging.getLogger(__name__)

Severity = Literal["info", "warning"]


@dataclass(frozen=True)
class Diagnostic:
    """診断メッセージ。"""

    severity: Severity
    message: str
    emitted_at: datetime


class ObservabilityScope:
    """診断を保持しつつロガーへも転送する。検証呼び出しごとに生成する。"""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._logger = log or logger
        self._diagnostics: List[Diagnostic] = []

    def emit_info(self, message: str) -> None:
        self._emit("info", message, logging.INFO)

    def emit_warning(self, message: str) -> None:
        self._emit("warning", message, logging.WARNING)

    def _emit(self, severity: Severity, message: str, level: int) -> None:
        self._diagnostics.append(
            Diagnostic(severity=severity, message=message, emitted_at=datetime.now(timezone.utc))
        )
        self._logger.log(level, message)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    @property
    def warnings(self) -> List[str]:
        return [d.message for d in self._diagnostics if d.severity == "warning"]

    @property
    def infos(self) -> List[str]:
        return [d.message for d in self._diagnostics if d.severity == "info"]
