"""Token-overlap search over a single node property.

A node is a candidate when at least one search term is a substring of one of
the space-separated words of the property; nodes whose property is absent or
empty are never candidates. Candidates are scored:

* ``EXACT_MATCH_SCORE`` when the terms joined without separator equal the
  words joined without separator;
* otherwise, for every (term, word) pair, ``WORD_MATCH_SCORE`` when they are
  equal and ``PARTIAL_MATCH_SCORE`` when the word contains the term.

Matching is case-sensitive. The Cypher statement and the Python functions
below implement the same formula; the latter are used for in-process ranking.
"""

from typing import Any, Iterable, Mapping, Optional, Sequence

from ..models.statement import Statement
from .cypher_builder import quote_identifier
from .pagination import normalize_skip_limit

EXACT_MATCH_SCORE = 100
WORD_MATCH_SCORE = 4
PARTIAL_MATCH_SCORE = 2

WORD_SEPARATOR = " "


def build_search_statement(
    label: str,
    prop: str,
    terms: Sequence[str],
    skip: Optional[int] = None,
    limit: Optional[int] = None,
) -> Statement:
    """Build the scoring query. Rows carry ``matched`` (properties) and ``score``."""
    query = (
        f"MATCH (n:{quote_identifier(label)}) "
        f"WITH n, split(n.{quote_identifier(prop)}, '{WORD_SEPARATOR}') AS words "
        f"WHERE n.{quote_identifier(prop)} <> '' "
        "AND ANY(term IN $terms WHERE ANY(word IN words WHERE word CONTAINS term)) "
        "WITH n, words, "
        "CASE WHEN reduce(t = '', st IN $terms | t + st) = reduce(j = '', w IN words | j + w) "
        f"THEN {EXACT_MATCH_SCORE} "
        "ELSE reduce(s = 0, st IN $terms | s + reduce(s2 = 0, w IN words | "
        f"CASE WHEN w = st THEN s2 + {WORD_MATCH_SCORE} "
        f"WHEN w CONTAINS st THEN s2 + {PARTIAL_MATCH_SCORE} "
        "ELSE s2 END)) END AS score "
        "ORDER BY score DESC SKIP $skip LIMIT $limit "
        "RETURN properties(n) AS matched, score"
    )
    return Statement(
        query=query,
        parameters={
            "terms": list(terms),
            **normalize_skip_limit({"skip": skip, "limit": limit}),
        },
    )


def split_words(value: Any) -> list[str]:
    """Split a property value into words; absent or empty values have none."""
    if not isinstance(value, str) or not value:
        return []
    return value.split(WORD_SEPARATOR)


def is_candidate(words: Sequence[str], terms: Sequence[str]) -> bool:
    return any(term in word for term in terms for word in words)


def score_words(words: Sequence[str], terms: Sequence[str]) -> int:
    if "".join(terms) == "".join(words):
        return EXACT_MATCH_SCORE
    score = 0
    for term in terms:
        for word in words:
            if word == term:
                score += WORD_MATCH_SCORE
            elif term in word:
                score += PARTIAL_MATCH_SCORE
    return score


def rank(
    bags: Iterable[Mapping[str, Any]],
    prop: str,
    terms: Sequence[str],
    skip: Optional[int] = None,
    limit: Optional[int] = None,
) -> list[tuple[Mapping[str, Any], int]]:
    """Filter, score and page property bags the way the search query does.

    Ties keep their input order.
    """
    scored = []
    for bag in bags:
        words = split_words(bag.get(prop))
        if is_candidate(words, terms):
            scored.append((bag, score_words(words, terms)))
    scored.sort(key=lambda pair: pair[1], reverse=True)
    page = normalize_skip_limit({"skip": skip, "limit": limit})
    return scored[page["skip"] : page["skip"] + page["limit"]]
