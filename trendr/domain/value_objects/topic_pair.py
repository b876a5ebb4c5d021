from __future__ import annotations

from itertools import combinations
from typing import Iterable


def canonical_pair(a: str, b: str) -> tuple[str, str]:
    """사전순으로 작은 id가 먼저 오도록 정렬. (A,B)와 (B,A)는 같은 행이다."""
    return (a, b) if a < b else (b, a)


def unordered_pairs(topic_ids: Iterable[str]) -> list[tuple[str, str]]:
    """중복을 제거한 id 집합에서 모든 비순서 쌍을 정규 순서로 반환."""
    unique = sorted(set(topic_ids))
    return [canonical_pair(a, b) for a, b in combinations(unique, 2)]
