"""
Policy Data Models

라벨 정책 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple, Union


NEGATION_PREFIX = "!"


@dataclass(frozen=True)
class GlobPattern:
    """부정 플래그를 포함한 글롭 패턴"""
    raw: str
    pattern: str = field(init=False)
    negated: bool = field(init=False)

    def __post_init__(self):
        """원본 문자열에서 부정 여부 분리"""
        if not isinstance(self.raw, str):
            raise TypeError(f"Glob pattern must be a string, got {type(self.raw).__name__}")
        negated = self.raw.startswith(NEGATION_PREFIX)
        object.__setattr__(self, "negated", negated)
        object.__setattr__(self, "pattern", self.raw[1:] if negated else self.raw)

    def __str__(self) -> str:
        return self.raw


class Policy(Mapping[str, Tuple[GlobPattern, ...]]):
    """
    라벨 이름 → 글롭 패턴 목록의 순서 있는 매핑

    모든 값은 비어 있지 않은 패턴 목록이며, 각 패턴 문자열도 비어 있지 않다.
    """

    def __init__(self, entries: Union[Mapping[str, Sequence[str]], Sequence[Tuple[str, Sequence[str]]], None] = None):
        self._entries: Dict[str, Tuple[GlobPattern, ...]] = {}
        items = entries.items() if isinstance(entries, Mapping) else (entries or [])
        for label, patterns in items:
            self._add(label, patterns)

    def _add(self, label: str, patterns: Sequence[Union[str, GlobPattern]]) -> None:
        """데이터 검증 후 항목 추가"""
        if label in self._entries:
            raise ValueError(f"Duplicate label: {label}")
        if not patterns:
            raise ValueError(f"Label {label} must have at least one pattern")
        globs = tuple(p if isinstance(p, GlobPattern) else GlobPattern(p) for p in patterns)
        if any(not g.raw for g in globs):
            raise ValueError(f"Label {label} has an empty pattern")
        self._entries[label] = globs

    def __getitem__(self, label: str) -> Tuple[GlobPattern, ...]:
        return self._entries[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        body = ", ".join(f"{label!r}: {[g.raw for g in globs]!r}" for label, globs in self._entries.items())
        return f"Policy({{{body}}})"

    @property
    def labels(self) -> List[str]:
        """정책에 정의된 라벨 이름 (문서 순서)"""
        return list(self._entries)

    def to_dict(self) -> Dict[str, List[str]]:
        """원본 패턴 문자열로 직렬화"""
        return {label: [g.raw for g in globs] for label, globs in self._entries.items()}


@dataclass(frozen=True)
class ReconciliationResult:
    """한 번의 실행에서 계산된 추가/제거 라벨"""
    to_add: Tuple[str, ...] = ()
    to_remove: Tuple[str, ...] = ()

    def __post_init__(self):
        """데이터 검증"""
        overlap = set(self.to_add) & set(self.to_remove)
        if overlap:
            raise ValueError(f"Labels cannot be both added and removed: {sorted(overlap)}")

    @property
    def is_empty(self) -> bool:
        """변경할 라벨이 없는지 여부"""
        return not self.to_add and not self.to_remove

    def removals_to_apply(self, sync_labels: bool) -> Tuple[str, ...]:
        """sync-labels 설정이 켜진 경우에만 제거 대상 반환"""
        return self.to_remove if sync_labels else ()
