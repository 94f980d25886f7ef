"""
Argosy "did you mean" suggestions.

When a token is not recognized, candidates are ranked by their optimal string
alignment distance (Damerau–Levenshtein restricted to non-overlapping
transpositions) to the token.

Candidates
- every spelling of every visible option reachable from the active command
  ("--long", "-s"), inherited ancestor options included;
- every visible child command name and alias.

Dashes are part of both the token and the candidates, so "--pshu" ranks
"--push" and "pshu" ranks "push" the same way.

Filtering and ranking
- kept when distance <= max(1, (len(token) + 1) // 2), or when one spelling
  is a prefix of the other;
- sorted by (distance, spelling), at most `limit` (5) results.
"""
from .config import NameComparison


def distance(source, target, /):
    """
    Return the optimal string alignment distance between two strings.

    Insertions, deletions, substitutions and adjacent transpositions each
    cost one; a substring is never edited twice.
    """
    if source == target:
        return 0
    if not source or not target:
        return len(source) or len(target)

    previous = None
    current = list(range(len(target) + 1))
    for i in range(1, len(source) + 1):
        before, previous, current = previous, current, [i] + [0] * len(target)
        for j in range(1, len(target) + 1):
            cost = source[i - 1] != target[j - 1]
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            )
            if i > 1 and j > 1 and source[i - 1] == target[j - 2] and source[i - 2] == target[j - 1]:
                current[j] = min(current[j], before[j - 2] + 1)
    return current[-1]


def candidates(command, /, comparison=NameComparison.ORDINAL):
    """
    Collect the spellings a user could have meant at `command`, in a stable order.
    """
    spellings = []
    for option in command.available_options(comparison):
        if not option.hidden:
            spellings.extend(option.names)
    for child in command.children.values():
        if not child.hidden:
            spellings.extend((child.name, *child.aliases))
    return list(dict.fromkeys(spellings))


def rank(token, spellings, /, comparison=NameComparison.ORDINAL, limit=5):
    """
    Rank `spellings` against `token` and return the closest ones as a tuple.
    """
    folded = comparison.fold(token)
    threshold = max(1, (len(token) + 1) // 2)
    scored = []
    for spelling in spellings:
        candidate = comparison.fold(spelling)
        score = distance(folded, candidate)
        prefixed = bool(folded.strip("-")) and (candidate.startswith(folded) or folded.startswith(candidate))
        if score <= threshold or prefixed:
            scored.append((score, spelling))
    return tuple(spelling for _, spelling in sorted(scored)[:limit])


def suggest(token, command, /, comparison=NameComparison.ORDINAL, limit=5):
    """
    Return up to `limit` suggestions for an unrecognized `token` at `command`.
    """
    return rank(token, candidates(command, comparison), comparison, limit)


__all__ = (
    "distance",
    "candidates",
    "rank",
    "suggest",
)
