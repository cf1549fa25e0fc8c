"""署名検証の結果を集計する軽量メトリクス。"""

from collections import defaultdict
from typing import Dict, FrozenSet, List, Optional, Tuple

LabelKey = FrozenSet[Tuple[str, str]]

VALIDATION_TOTAL = "signature_validation_total"
VALIDATION_SECONDS = "signature_validation_seconds"
DELEGATE_PROMPTS_TOTAL = "signature_delegate_prompts_total"


def _label_key(labels: Optional[Dict[str, str]]) -> LabelKey:
    return frozenset(labels.items()) if labels else frozenset()


class ValidationMetrics:
    """検証結果のカウンタと所要時間の観測値を保持する。"""

    def __init__(self) -> None:
        self._counters: Dict[Tuple[str, LabelKey], int] = defaultdict(int)
        self._observations: Dict[Tuple[str, LabelKey], List[float]] = defaultdict(list)

    def record_outcome(self, outcome: str, *, registry: str, seconds: float) -> None:
        """検証 1 回の結果（accepted / rejected / failed）を記録する。"""
        labels = {"outcome": outcome, "registry": registry}
        self._counters[(VALIDATION_TOTAL, _label_key(labels))] += 1
        self._observations[(VALIDATION_SECONDS, _label_key({"outcome": outcome}))].append(seconds)

    def record_prompt(self, category: str, *, accepted: bool) -> None:
        """デリゲートへの問い合わせ（unsigned / untrusted）を記録する。"""
        labels = {"category": category, "answer": "continue" if accepted else "stop"}
        self._counters[(DELEGATE_PROMPTS_TOTAL, _label_key(labels))] += 1

    def get_counter(self, name: str, labels: Optional[Dict[str, str]] = None) -> int:
        """指定ラベルのカウンタ値を返す（存在しなければ 0）。"""
        return self._counters.get((name, _label_key(labels)), 0)

    def get_observations(self, name: str, labels: Optional[Dict[str, str]] = None) -> List[float]:
        """指定ラベルの観測値一覧を返す。"""
        return list(self._observations.get((name, _label_key(labels)), []))
